"""
Reconcile directory users against desks.

Produces a total occupancy for one map: every desk either receives exactly one
user or is vacant. Users are processed in directory order and the first user
resolving to a desk claims it.
"""

from __future__ import annotations

import logging

from deskmap.components.directory.location_matcher_comp import match_desk_number
from deskmap.helpers.dto.desk_dto import Desk
from deskmap.helpers.dto.directory_dto import DirectoryUser, MappingRule
from deskmap.helpers.dto.sync_dto import Assignment, ReconcileResult

logger = logging.getLogger(__name__)


def occupant_names(user: DirectoryUser) -> tuple[str, str]:
    """First name falls back to displayName when givenName is missing."""
    return user.given_name or user.display_name or "", user.surname or ""


def reconcile(users: list[DirectoryUser], desks: list[Desk], rule: MappingRule) -> ReconcileResult:
    """
    Assign at most one directory user per desk.

    Args:
        users: Directory users in the order the directory returned them
        desks: All desks of the map (numbers are unique)
        rule: Active mapping rule

    Returns:
        ReconcileResult whose assignments are authoritative: callers clear all
        occupants of the map and then apply the assignments.
    """
    desk_by_number = {desk.number: desk for desk in desks}
    claimed: set[str] = set()
    assignments: list[Assignment] = []
    unmatched = 0
    contested = 0

    for user in users:
        desk_number = match_desk_number(user.office_location, rule)
        if desk_number is None or desk_number <= 0:
            unmatched += 1
            continue

        desk = desk_by_number.get(desk_number)
        if desk is None:
            continue
        if desk.id in claimed:
            contested += 1
            continue

        claimed.add(desk.id)
        first_name, last_name = occupant_names(user)
        assignments.append(Assignment(desk_id=desk.id, first_name=first_name, last_name=last_name))

    logger.debug(
        f"[Reconciler] {len(users)} users -> {len(assignments)} desks assigned, "
        f"{unmatched} unmapped, {contested} lost to an earlier user"
    )
    return ReconcileResult(assignments=assignments, unmatched_users=unmatched)
