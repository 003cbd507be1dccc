"""DTOs for reconciliation and sync results."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Assignment:
    """Occupant written onto one desk by a sync pass."""

    desk_id: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class ReconcileResult:
    """Total occupancy for a map: desks absent from assignments are vacant."""

    assignments: list[Assignment] = field(default_factory=list)
    unmatched_users: int = 0


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one successful directory sync."""

    users: int
    desks_updated: int
    unmatched_users: int = 0
