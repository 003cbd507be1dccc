"""
Unit tests for the directory workflows.

The Graph fetch is replaced by plain functions; the database is real.
"""

import threading

import pytest

from deskmap.helpers.dto.sync_dto import SyncResult
from deskmap.helpers.exceptions import DirectoryConfigError, DirectoryRequestError, MapNotInitializedError
from deskmap.workflows.directory.sync_directory_wf import (
    SYNC_FAILED_STATUS,
    load_directory_settings,
    sync_directory_workflow,
)
from deskmap.workflows.directory.verify_directory_connection_wf import (
    TEST_FAILED_STATUS,
    verify_directory_connection_workflow,
)
from deskmap.workflows.layout.save_layout_wf import LAYOUT_EVENT, save_layout_workflow


def _fetch_returning(users):
    def fetch(settings, limit=None):
        return list(users)

    return fetch


def _failing_fetch(settings, limit=None):
    raise DirectoryRequestError("Graph error: 503 unavailable")


def _occupants(db):
    map_config = db.map_config.get_first()
    return {d.number: (d.occupant_first_name, d.occupant_last_name) for d in db.desks.list_desks(map_config.id)}


class TestLoadDirectorySettings:
    """Tests for load_directory_settings."""

    @pytest.mark.unit
    def test_missing_config(self, in_memory_db) -> None:
        with pytest.raises(DirectoryConfigError, match="Entra config is incomplete"):
            load_directory_settings(in_memory_db)

    @pytest.mark.unit
    def test_missing_secret(self, in_memory_db, directory_config) -> None:
        from dataclasses import replace

        in_memory_db.directory_config.save(replace(directory_config, client_secret=None))

        with pytest.raises(DirectoryConfigError):
            load_directory_settings(in_memory_db)

    @pytest.mark.unit
    def test_complete_config(self, configured_db) -> None:
        settings = load_directory_settings(configured_db)

        assert settings.tenant_id == "tenant-123"
        assert settings.mapping_rule.prefix == "Desk-"


class TestSyncDirectoryWorkflow:
    """Tests for sync_directory_workflow."""

    @pytest.mark.unit
    def test_assigns_users_and_vacates_the_rest(self, seeded_db, broadcaster, user_factory) -> None:
        users = [
            user_factory("u1", "Desk-1", given_name="Ada", surname="Lovelace"),
            user_factory("u2", "desk-3", given_name="Alan", surname="Turing"),
            user_factory("u3", "Desk-3", given_name="Late", surname="Comer"),
            user_factory("u4", "Reception"),
        ]
        events = []
        broadcaster.subscribe(events.append)

        result = sync_directory_workflow(seeded_db, broadcaster, fetch_users=_fetch_returning(users))

        assert result == SyncResult(users=4, desks_updated=2, unmatched_users=1)
        occupants = _occupants(seeded_db)
        assert occupants[1] == ("Ada", "Lovelace")
        assert occupants[3] == ("Alan", "Turing")
        assert occupants[2] == (None, None)
        assert seeded_db.directory_users.count() == 4
        assert [e.kind for e in events] == [LAYOUT_EVENT]

        config = seeded_db.directory_config.get()
        assert config.last_sync_status == "Synced 4 users"
        assert config.last_sync_at is not None

    @pytest.mark.unit
    def test_incomplete_config_fails_before_fetch(self, in_memory_db, broadcaster) -> None:
        calls = []

        def fetch(settings, limit=None):
            calls.append(settings)
            return []

        with pytest.raises(DirectoryConfigError):
            sync_directory_workflow(in_memory_db, broadcaster, fetch_users=fetch)

        assert calls == []

    @pytest.mark.unit
    def test_fetch_failure_keeps_occupants_and_records_status(self, seeded_db, broadcaster) -> None:
        before = _occupants(seeded_db)
        events = []
        broadcaster.subscribe(events.append)

        with pytest.raises(DirectoryRequestError):
            sync_directory_workflow(seeded_db, broadcaster, fetch_users=_failing_fetch)

        assert _occupants(seeded_db) == before
        assert seeded_db.directory_config.get().last_sync_status == SYNC_FAILED_STATUS
        assert events == []

    @pytest.mark.unit
    def test_missing_map(self, configured_db, broadcaster, user_factory) -> None:
        with pytest.raises(MapNotInitializedError, match="Map not initialized"):
            sync_directory_workflow(configured_db, broadcaster, fetch_users=_fetch_returning([]))

        assert configured_db.directory_config.get().last_sync_status == SYNC_FAILED_STATUS

    @pytest.mark.unit
    def test_empty_directory_vacates_every_desk(self, seeded_db, broadcaster) -> None:
        result = sync_directory_workflow(seeded_db, broadcaster, fetch_users=_fetch_returning([]))

        assert result.desks_updated == 0
        assert all(names == (None, None) for names in _occupants(seeded_db).values())

    @pytest.mark.unit
    def test_regex_rule_is_authoritative(self, seeded_db, broadcaster, user_factory, directory_config) -> None:
        from dataclasses import replace

        seeded_db.directory_config.save(replace(directory_config, mapping_regex=r"Desk-(\d+)"))
        users = [user_factory("u1", "Office-7"), user_factory("u2", "7")]

        result = sync_directory_workflow(seeded_db, broadcaster, fetch_users=_fetch_returning(users))

        assert result.desks_updated == 0
        assert result.unmatched_users == 2

    @pytest.mark.unit
    def test_layout_save_waits_for_sync_commit(
        self, seeded_db, broadcaster, user_factory, desk_factory, monkeypatch
    ) -> None:
        original_list_desks = seeded_db.desks.list_desks
        new_desks = [desk_factory(1, desk_id="new-1"), desk_factory(2, desk_id="new-2")]
        saver = threading.Thread(target=save_layout_workflow, args=(seeded_db, broadcaster, new_desks))
        blocked_during_sync = []

        def list_desks_then_save(map_id):
            desks = original_list_desks(map_id)
            if threading.current_thread() is saver:
                return desks
            saver.start()
            saver.join(timeout=0.2)
            blocked_during_sync.append(saver.is_alive())
            return desks

        monkeypatch.setattr(seeded_db.desks, "list_desks", list_desks_then_save)
        users = [user_factory("u1", "Desk-2", given_name="Ada", surname="Lovelace")]

        result = sync_directory_workflow(seeded_db, broadcaster, fetch_users=_fetch_returning(users))
        monkeypatch.setattr(seeded_db.desks, "list_desks", original_list_desks)
        saver.join(timeout=5)

        assert blocked_during_sync == [True]
        assert result.desks_updated == 1
        assert not saver.is_alive()
        map_config = seeded_db.map_config.get_first()
        assert [d.id for d in seeded_db.desks.list_desks(map_config.id)] == ["new-1", "new-2"]

    @pytest.mark.unit
    def test_sync_after_layout_save_assigns_new_desks(self, seeded_db, broadcaster, user_factory, desk_factory) -> None:
        new_desks = [desk_factory(1, desk_id="new-1"), desk_factory(2, desk_id="new-2")]
        save_layout_workflow(seeded_db, broadcaster, new_desks)
        users = [user_factory("u1", "Desk-2", given_name="Ada", surname="Lovelace")]

        result = sync_directory_workflow(seeded_db, broadcaster, fetch_users=_fetch_returning(users))

        assert result.desks_updated == 1
        assert seeded_db.desks.get_desk("new-2").occupant_first_name == "Ada"


class TestVerifyDirectoryConnectionWorkflow:
    """Tests for verify_directory_connection_workflow."""

    @pytest.mark.unit
    def test_fetches_one_user_and_records_test(self, configured_db) -> None:
        limits = []

        def fetch(settings, limit=None):
            limits.append(limit)
            return []

        verify_directory_connection_workflow(configured_db, fetch_users=fetch)

        assert limits == [1]
        assert configured_db.directory_config.get().last_test_at is not None

    @pytest.mark.unit
    def test_failure_records_status_and_raises(self, configured_db) -> None:
        with pytest.raises(DirectoryRequestError):
            verify_directory_connection_workflow(configured_db, fetch_users=_failing_fetch)

        config = configured_db.directory_config.get()
        assert config.last_test_at is not None
        assert config.last_sync_status == TEST_FAILED_STATUS

    @pytest.mark.unit
    def test_incomplete_config(self, in_memory_db) -> None:
        with pytest.raises(DirectoryConfigError):
            verify_directory_connection_workflow(in_memory_db)
