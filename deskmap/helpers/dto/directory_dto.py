"""
DTOs for directory (Microsoft Entra / Graph) sync.

DirectoryUser is transient: fetched each sync and cached as a snapshot.
DirectoryConfig is the persisted record; DirectorySettings is the subset a
sync needs and only exists when credentials are complete.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_GRAPH_SCOPE = "https://graph.microsoft.com/.default"
DEFAULT_MAPPING_PREFIX = "Desk-"
DEFAULT_SYNC_INTERVAL_MINUTES = 15


@dataclass(frozen=True)
class DirectoryUser:
    """A directory user as returned by Graph /users."""

    id: str
    given_name: str | None = None
    surname: str | None = None
    display_name: str | None = None
    office_location: str | None = None
    user_principal_name: str | None = None

    @classmethod
    def from_graph(cls, data: dict[str, Any]) -> DirectoryUser:
        """Build from a Graph user object (camelCase keys)."""
        return cls(
            id=str(data.get("id", "")),
            given_name=data.get("givenName"),
            surname=data.get("surname"),
            display_name=data.get("displayName"),
            office_location=data.get("officeLocation"),
            user_principal_name=data.get("userPrincipalName"),
        )


@dataclass(frozen=True)
class MappingRule:
    """Rule for deriving a desk number from an office location string.

    regex, when set, takes precedence over prefix.
    """

    prefix: str | None = DEFAULT_MAPPING_PREFIX
    regex: str | None = None


@dataclass(frozen=True)
class DirectorySettings:
    """Complete credentials plus mapping rule for one sync or test."""

    tenant_id: str
    client_id: str
    client_secret: str
    scopes: str = DEFAULT_GRAPH_SCOPE
    mapping_prefix: str | None = DEFAULT_MAPPING_PREFIX
    mapping_regex: str | None = None

    @property
    def mapping_rule(self) -> MappingRule:
        return MappingRule(prefix=self.mapping_prefix, regex=self.mapping_regex)


@dataclass(frozen=True)
class DirectoryConfig:
    """Persisted directory configuration and last sync/test status."""

    tenant_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    scopes: str | None = None
    sync_interval_minutes: int = DEFAULT_SYNC_INTERVAL_MINUTES
    mapping_prefix: str | None = DEFAULT_MAPPING_PREFIX
    mapping_regex: str | None = None
    admin_group_id: str | None = None
    auth_mode: str = "public"
    last_test_at: str | None = None
    last_sync_at: str | None = None
    last_sync_status: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.tenant_id and self.client_id and self.client_secret)

    def to_settings(self) -> DirectorySettings | None:
        """Return sync settings, or None when credentials are incomplete."""
        if not self.is_complete:
            return None
        return DirectorySettings(
            tenant_id=self.tenant_id or "",
            client_id=self.client_id or "",
            client_secret=self.client_secret or "",
            scopes=self.scopes or DEFAULT_GRAPH_SCOPE,
            mapping_prefix=self.mapping_prefix,
            mapping_regex=self.mapping_regex,
        )


@dataclass(frozen=True)
class DirectoryConfigUpdate:
    """Admin edit of the directory config.

    client_secret is only replaced when non-empty; status fields are kept.
    """

    tenant_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = None
    scopes: str | None = None
    sync_interval_minutes: int = DEFAULT_SYNC_INTERVAL_MINUTES
    mapping_prefix: str | None = None
    mapping_regex: str | None = None
    admin_group_id: str | None = None
    auth_mode: str = "public"
