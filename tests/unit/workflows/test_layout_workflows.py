"""
Unit tests for the layout workflows.

Tests verify:
- first access creates the map and demo desks exactly once
- save replaces the desk set atomically and notifies viewers
- invalid batches are rejected before anything is written
"""

import pytest

from deskmap.helpers.dto.desk_dto import MapStyleUpdate
from deskmap.helpers.exceptions import DuplicateDeskNumberError, LayoutValidationError
from deskmap.workflows.layout.ensure_layout_seed_wf import DEMO_DESK_COUNT, ensure_layout_seed_workflow
from deskmap.workflows.layout.save_layout_wf import LAYOUT_EVENT, save_layout_workflow, validate_desks


class TestEnsureLayoutSeedWorkflow:
    """Tests for ensure_layout_seed_workflow."""

    @pytest.mark.unit
    def test_creates_map_and_demo_desks(self, in_memory_db) -> None:
        map_config = ensure_layout_seed_workflow(in_memory_db)

        desks = in_memory_db.desks.list_desks(map_config.id)
        assert len(desks) == DEMO_DESK_COUNT
        assert [d.number for d in desks] == list(range(1, 11))
        assert desks[0].id == "demo-1"
        assert (desks[5].x, desks[5].y) == (80, 260)
        assert desks[1].occupant_first_name == "Alex"

    @pytest.mark.unit
    def test_is_idempotent(self, in_memory_db) -> None:
        first = ensure_layout_seed_workflow(in_memory_db)
        second = ensure_layout_seed_workflow(in_memory_db)

        assert first.id == second.id
        assert in_memory_db.desks.count_desks(first.id) == DEMO_DESK_COUNT

    @pytest.mark.unit
    def test_existing_desks_are_left_alone(self, in_memory_db, desk_factory) -> None:
        map_config = in_memory_db.map_config.create()
        in_memory_db.desks.replace_desks(map_config.id, [desk_factory(42)])

        ensure_layout_seed_workflow(in_memory_db)

        assert [d.number for d in in_memory_db.desks.list_desks(map_config.id)] == [42]


class TestValidateDesks:
    """Tests for validate_desks."""

    @pytest.mark.unit
    def test_duplicate_number(self, desk_factory) -> None:
        with pytest.raises(DuplicateDeskNumberError, match="Duplicate desk number") as exc_info:
            validate_desks([desk_factory(1, "a"), desk_factory(2, "b"), desk_factory(1, "c")])
        assert exc_info.value.number == 1

    @pytest.mark.unit
    def test_duplicate_id(self, desk_factory) -> None:
        with pytest.raises(LayoutValidationError, match="Duplicate desk id"):
            validate_desks([desk_factory(1, "same"), desk_factory(2, "same")])

    @pytest.mark.unit
    @pytest.mark.parametrize("number", [0, -3])
    def test_non_positive_number(self, desk_factory, number) -> None:
        with pytest.raises(LayoutValidationError):
            validate_desks([desk_factory(number)])

    @pytest.mark.unit
    def test_zero_size(self, desk_factory) -> None:
        with pytest.raises(LayoutValidationError):
            validate_desks([desk_factory(1, width=0)])

    @pytest.mark.unit
    def test_empty_batch_is_valid(self) -> None:
        validate_desks([])


class TestSaveLayoutWorkflow:
    """Tests for save_layout_workflow."""

    @pytest.mark.unit
    def test_replaces_desks_and_publishes(self, in_memory_db, broadcaster, desk_factory) -> None:
        events = []
        broadcaster.subscribe(events.append)

        snapshot = save_layout_workflow(in_memory_db, broadcaster, [desk_factory(7), desk_factory(3)])

        assert [d.number for d in snapshot.desks] == [3, 7]
        assert len(events) == 1
        assert events[0].kind == LAYOUT_EVENT
        assert events[0].payload["updatedAt"].endswith("Z")

    @pytest.mark.unit
    def test_applies_map_style(self, in_memory_db, broadcaster, desk_factory) -> None:
        snapshot = save_layout_workflow(
            in_memory_db,
            broadcaster,
            [desk_factory(1)],
            map_style=MapStyleUpdate(desk_shape="circle", width=1600),
        )

        assert snapshot.map.desk_shape == "circle"
        assert snapshot.map.width == 1600
        assert snapshot.map.height == 700

    @pytest.mark.unit
    def test_duplicate_numbers_leave_store_unchanged(self, in_memory_db, broadcaster, desk_factory) -> None:
        map_config = ensure_layout_seed_workflow(in_memory_db)
        before = in_memory_db.desks.list_desks(map_config.id)
        events = []
        broadcaster.subscribe(events.append)

        with pytest.raises(DuplicateDeskNumberError):
            save_layout_workflow(in_memory_db, broadcaster, [desk_factory(5, "a"), desk_factory(5, "b")])

        assert in_memory_db.desks.list_desks(map_config.id) == before
        assert events == []

    @pytest.mark.unit
    def test_desk_ids_are_stable_across_saves(self, in_memory_db, broadcaster, desk_factory) -> None:
        save_layout_workflow(in_memory_db, broadcaster, [desk_factory(1, "keep-me")])

        snapshot = save_layout_workflow(in_memory_db, broadcaster, [desk_factory(2, "keep-me", x=500.0)])

        assert [(d.id, d.number, d.x) for d in snapshot.desks] == [("keep-me", 2, 500.0)]
