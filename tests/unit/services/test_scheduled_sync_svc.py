"""
Unit tests for ScheduledSyncService.

DirectoryService is replaced by a MagicMock; no thread timing is asserted
beyond start/stop.
"""

from unittest.mock import MagicMock

import pytest

from deskmap.helpers.dto.sync_dto import SyncResult
from deskmap.helpers.exceptions import DirectoryRequestError, SyncInProgressError
from deskmap.services.infrastructure.scheduled_sync_svc import ScheduledSyncService


@pytest.fixture
def directory_service():
    service = MagicMock()
    service.sync_interval_minutes.return_value = 15
    service.sync.return_value = SyncResult(users=3, desks_updated=2)
    return service


class TestScheduledSyncService:
    """Tests for ScheduledSyncService."""

    @pytest.mark.unit
    def test_run_once_syncs_when_enabled(self, directory_service) -> None:
        assert ScheduledSyncService(directory_service).run_once() is True
        directory_service.sync.assert_called_once()

    @pytest.mark.unit
    def test_run_once_skips_when_disabled(self, directory_service) -> None:
        directory_service.sync_interval_minutes.return_value = 0

        assert ScheduledSyncService(directory_service).run_once() is False
        directory_service.sync.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error",
        [SyncInProgressError("busy"), DirectoryRequestError("Graph error: 500"), RuntimeError("unexpected")],
    )
    def test_run_once_never_raises(self, directory_service, error) -> None:
        directory_service.sync.side_effect = error

        assert ScheduledSyncService(directory_service).run_once() is False

    @pytest.mark.unit
    def test_wait_uses_configured_interval(self, directory_service) -> None:
        scheduler = ScheduledSyncService(directory_service, idle_poll_seconds=42)

        assert scheduler.next_wait_seconds() == 900

        directory_service.sync_interval_minutes.return_value = 0
        assert scheduler.next_wait_seconds() == 42

    @pytest.mark.unit
    def test_start_and_stop(self, directory_service) -> None:
        scheduler = ScheduledSyncService(directory_service)

        scheduler.start()
        assert scheduler.is_running()

        scheduler.stop()
        assert not scheduler.is_running()
        directory_service.sync.assert_not_called()
