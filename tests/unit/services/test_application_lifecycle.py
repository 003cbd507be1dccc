"""
Unit tests for Application start/stop.

Tests verify:
- start() opens the database and registers every service
- stop() waits for a running directory sync before closing the database
"""

import logging
import threading

import pytest

from deskmap.app import Application
from deskmap.helpers.dto.directory_dto import DirectoryConfigUpdate
from deskmap.services.infrastructure.config_svc import ConfigService


def _make_application(temp_db, **overrides) -> Application:
    values = {"db_path": temp_db, "admin_password": "admin-pass-123", "scheduled_sync_enabled": False}
    values.update(overrides)
    return Application(ConfigService(overrides=values))


@pytest.fixture
def blocking_fetch(monkeypatch):
    """Graph fetch that blocks until release is set."""
    started = threading.Event()
    release = threading.Event()

    def fetch(settings, limit=None, timeout=30):
        started.set()
        release.wait(10)
        return []

    monkeypatch.setattr("deskmap.services.domain.directory_svc.fetch_all_users", fetch)
    return started, release


def _start_sync(application: Application) -> tuple[threading.Thread, list]:
    directory_service = application.get_service("directory")
    directory_service.update_config(DirectoryConfigUpdate(tenant_id="t", client_id="c", client_secret="s"))
    outcome: list = []

    def run() -> None:
        try:
            outcome.append(directory_service.sync())
        except Exception as e:
            outcome.append(e)

    worker = threading.Thread(target=run)
    worker.start()
    return worker, outcome


class TestApplicationLifecycle:
    """Tests for Application.start / Application.stop."""

    @pytest.mark.unit
    def test_start_registers_services(self, temp_db) -> None:
        application = _make_application(temp_db)
        application.start()
        try:
            assert set(application.services) == {"keys", "config", "layout", "directory", "events"}
            assert application.is_running()
        finally:
            application.stop()

        assert not application.is_running()
        with pytest.raises(RuntimeError):
            _ = application.db

    @pytest.mark.unit
    def test_stop_waits_for_running_sync(self, temp_db, blocking_fetch) -> None:
        started, release = blocking_fetch
        application = _make_application(temp_db)
        application.start()
        worker, outcome = _start_sync(application)
        assert started.wait(5)

        stopper = threading.Thread(target=application.stop)
        stopper.start()
        stopper.join(timeout=0.2)
        still_stopping = stopper.is_alive()

        release.set()
        stopper.join(5)
        worker.join(5)

        assert still_stopping
        assert not stopper.is_alive()
        assert len(outcome) == 1
        assert outcome[0].users == 0

    @pytest.mark.unit
    def test_stop_gives_up_after_grace_period(self, temp_db, blocking_fetch, caplog) -> None:
        started, release = blocking_fetch
        application = _make_application(temp_db, graph_timeout_seconds=0.05)
        application.start()
        worker, _ = _start_sync(application)
        assert started.wait(5)

        try:
            with caplog.at_level(logging.WARNING):
                application.stop()
        finally:
            release.set()
            worker.join(5)

        assert "Directory sync still running" in caplog.text
        assert not application.is_running()
