"""Ensure layout seed workflow - create the floor map and demo desks on first use."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from deskmap.helpers.dto.desk_dto import Desk, MapConfig

if TYPE_CHECKING:
    from deskmap.persistence.db import Database

logger = logging.getLogger(__name__)

DEMO_DESK_COUNT = 10
_DEMO_LAST_NAMES = ["Miller", "Nguyen", "Lopez", "Baker", "Patel", "Hughes", "Diaz", "Rossi", "Khan", "Brooks"]


def demo_desks() -> list[Desk]:
    """Ten demo desks in two rows of five, numbered 1..10."""
    desks = []
    for index in range(DEMO_DESK_COUNT):
        number = index + 1
        desks.append(
            Desk(
                id=f"demo-{number}",
                number=number,
                x=80 + (index % 5) * 180,
                y=80 + (index // 5) * 180,
                width=10,
                height=10,
                occupant_first_name="Alex" if number % 2 == 0 else "Jordan",
                occupant_last_name=_DEMO_LAST_NAMES[index],
            )
        )
    return desks


def ensure_layout_seed_workflow(db: Database) -> MapConfig:
    """
    Return the floor map, creating it (and demo desks) when missing.

    Business rules:
    - Exactly one map per deployment; the oldest one is used
    - A map without desks is seeded with demo desks
    - Runs as one transaction so concurrent first requests seed once

    Args:
        db: Database instance

    Returns:
        The floor map
    """
    with db.transaction():
        map_config = db.map_config.get_first()
        if map_config is None:
            map_config = db.map_config.create()
            logger.info(f"[ensure_layout_seed_wf] Created floor map {map_config.id}")

        if db.desks.count_desks(map_config.id) == 0:
            db.desks.replace_desks(map_config.id, demo_desks())
            logger.info(f"[ensure_layout_seed_wf] Seeded {DEMO_DESK_COUNT} demo desks")

    return map_config
