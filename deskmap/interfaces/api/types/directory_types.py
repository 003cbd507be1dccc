"""Directory API types - Pydantic models for the Entra endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from deskmap.helpers.dto.directory_dto import DEFAULT_SYNC_INTERVAL_MINUTES, DirectoryConfigUpdate

if TYPE_CHECKING:
    from deskmap.helpers.dto.directory_dto import DirectoryConfig
    from deskmap.helpers.dto.sync_dto import SyncResult


class DirectoryConfigModel(BaseModel):
    """Stored directory config as shown to admins. Never carries the client secret."""

    model_config = ConfigDict(populate_by_name=True)

    tenant_id: str | None = Field(None, alias="tenantId")
    client_id: str | None = Field(None, alias="clientId")
    scopes: str | None = None
    sync_interval_minutes: int = Field(DEFAULT_SYNC_INTERVAL_MINUTES, alias="syncIntervalMinutes")
    mapping_prefix: str | None = Field(None, alias="mappingPrefix")
    mapping_regex: str | None = Field(None, alias="mappingRegex")
    admin_group_id: str | None = Field(None, alias="adminGroupId")
    auth_mode: str = Field("public", alias="authMode")
    has_client_secret: bool = Field(False, alias="hasClientSecret")
    last_test_at: str | None = Field(None, alias="lastTestAt")
    last_sync_at: str | None = Field(None, alias="lastSyncAt")
    last_sync_status: str | None = Field(None, alias="lastSyncStatus")

    @classmethod
    def from_dto(cls, dto: DirectoryConfig, has_client_secret: bool = False) -> DirectoryConfigModel:
        return cls(
            tenant_id=dto.tenant_id,
            client_id=dto.client_id,
            scopes=dto.scopes,
            sync_interval_minutes=dto.sync_interval_minutes,
            mapping_prefix=dto.mapping_prefix,
            mapping_regex=dto.mapping_regex,
            admin_group_id=dto.admin_group_id,
            auth_mode=dto.auth_mode,
            has_client_secret=has_client_secret,
            last_test_at=dto.last_test_at,
            last_sync_at=dto.last_sync_at,
            last_sync_status=dto.last_sync_status,
        )


class DirectoryConfigResponse(BaseModel):
    """Response for GET/PUT /api/entra/config."""

    config: DirectoryConfigModel | None = None


class DirectoryConfigRequest(BaseModel):
    """Request for PUT /api/entra/config. An empty clientSecret keeps the stored one."""

    model_config = ConfigDict(populate_by_name=True)

    tenant_id: str | None = Field(None, alias="tenantId")
    client_id: str | None = Field(None, alias="clientId")
    client_secret: str | None = Field(None, alias="clientSecret")
    scopes: str | None = None
    sync_interval_minutes: int = Field(DEFAULT_SYNC_INTERVAL_MINUTES, alias="syncIntervalMinutes")
    mapping_prefix: str | None = Field(None, alias="mappingPrefix")
    mapping_regex: str | None = Field(None, alias="mappingRegex")
    admin_group_id: str | None = Field(None, alias="adminGroupId")
    auth_mode: str = Field("public", alias="authMode")

    def to_dto(self) -> DirectoryConfigUpdate:
        return DirectoryConfigUpdate(
            tenant_id=self.tenant_id,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.scopes,
            sync_interval_minutes=self.sync_interval_minutes,
            mapping_prefix=self.mapping_prefix,
            mapping_regex=self.mapping_regex,
            admin_group_id=self.admin_group_id,
            auth_mode=self.auth_mode,
        )


class SyncResponse(BaseModel):
    """Response for a successful POST /api/entra/sync."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    users: int
    desks_updated: int = Field(..., alias="desksUpdated")

    @classmethod
    def from_dto(cls, dto: SyncResult) -> SyncResponse:
        return cls(users=dto.users, desks_updated=dto.desks_updated)


class OkResponse(BaseModel):
    ok: bool = True
