"""
Application composition root and dependency injection container.

This module defines the Application class, which owns configuration, the
database, the change broadcaster and every service of the Deskmap server.

Architecture:
- Application owns: config, db, broadcaster, services, scheduled sync
- All configuration values are instance attributes (no module-level config globals)
- Services are registered via register_service() during start()
- Access services via: application.get_service("name") or application.services["name"]
- Do NOT construct services directly outside of this class (CLI commands excepted)

The singleton instance is available as `application` at module level.
"""

from __future__ import annotations

import logging
from typing import Any

from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster
from deskmap.persistence.db import Database
from deskmap.services.domain.directory_svc import DirectoryService
from deskmap.services.domain.layout_svc import LayoutService
from deskmap.services.infrastructure.config_svc import INTERNAL_SESSION_TIMEOUT_SECONDS, ConfigService
from deskmap.services.infrastructure.events_svc import EventsService
from deskmap.services.infrastructure.keys_svc import KeyManagementService
from deskmap.services.infrastructure.scheduled_sync_svc import ScheduledSyncService


# ----------------------------------------------------------------------
#  Application Class - Composition Root & DI Container
# ----------------------------------------------------------------------
class Application:
    """
    Application composition root and dependency injection container.

    Configuration Access:
    - Raw config is PRIVATE (_config) and used only internally in Application
    - To access config outside app.py, use: application.get_service("config").get_config()
    - Prefer the specific instance attributes (db_path, api_port, ...) over raw config

    The database is opened by start(), so constructing an Application has no
    side effects beyond reading configuration.
    """

    def __init__(self, config_service: ConfigService | None = None):
        """
        Initialize application from configuration.

        Args:
            config_service: Config source (defaults to ConfigService())
        """
        self._config_service = config_service or ConfigService()
        self._config = self._config_service.get_config()

        # User-configurable settings
        self.db_path: str = str(self._config["db_path"])
        self.api_host: str = str(self._config.get("host", "0.0.0.0"))
        self.api_port: int = int(self._config.get("port", 8400))
        self.log_level: str = str(self._config.get("log_level", "INFO")).upper()
        self.admin_password_config: str | None = self._config.get("admin_password")
        self.sse_keepalive_seconds: float = float(self._config.get("sse_keepalive_seconds", 15))
        self.scheduled_sync_enabled: bool = bool(self._config.get("scheduled_sync_enabled", True))
        self.graph_timeout_seconds: float = float(self._config.get("graph_timeout_seconds", 30))

        # Internal constants (not user-configurable)
        self.session_timeout: int = INTERNAL_SESSION_TIMEOUT_SECONDS

        # Core dependencies (owned by Application, created in start())
        self._db: Database | None = None
        self.broadcaster = ChangeBroadcaster()

        # Services container (DI registry)
        self.services: dict[str, Any] = {}

        # Infrastructure
        self.scheduled_sync: ScheduledSyncService | None = None

        # Auth
        self.admin_password: str | None = None

        # State tracking
        self._running = False

    @property
    def db(self) -> Database:
        if self._db is None:
            raise RuntimeError("Database not open - call Application.start() first")
        return self._db

    def register_service(self, name: str, service: Any) -> None:
        """
        Register a service in the DI container.

        Args:
            name: Service name for lookup
            service: Service instance
        """
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """
        Get a service from the DI container.

        Raises:
            KeyError: If service not found
        """
        if name not in self.services:
            raise KeyError(f"Service '{name}' not found. Available services: {list(self.services.keys())}")
        return self.services[name]

    def start(self) -> None:
        """
        Start the application.

        This method:
        1. Opens the database
        2. Initializes authentication (admin password, sessions)
        3. Registers all services in self.services (DI container)
        4. Seeds the floor map if this is a fresh database
        5. Starts the scheduled directory sync
        """
        if self._running:
            logging.warning("[Application] Already running, ignoring start() call")
            return

        logging.info("[Application] Starting...")
        self._db = Database(self.db_path)

        # Initialize keys and authentication (DI: inject db)
        logging.info("[Application] Initializing authentication...")
        key_service = KeyManagementService(self._db, session_timeout=self.session_timeout)
        self.admin_password = key_service.get_or_create_admin_password(self.admin_password_config)
        key_service.load_sessions_from_db()
        self.register_service("keys", key_service)
        self.register_service("config", self._config_service)

        layout_service = LayoutService(self._db, self.broadcaster)
        self.register_service("layout", layout_service)

        directory_service = DirectoryService(self._db, self.broadcaster, graph_timeout=self.graph_timeout_seconds)
        self.register_service("directory", directory_service)

        self.register_service("events", EventsService(self.broadcaster, keepalive_interval=self.sse_keepalive_seconds))

        snapshot = layout_service.get_layout()
        logging.info(f"[Application] Floor map '{snapshot.map.name}' ready with {len(snapshot.desks)} desks")

        if self.scheduled_sync_enabled:
            logging.info("[Application] Starting scheduled directory sync...")
            self.scheduled_sync = ScheduledSyncService(directory_service)
            self.scheduled_sync.start()
        else:
            logging.info("[Application] Scheduled directory sync disabled")

        self._running = True
        logging.info("[Application] Started successfully")

    def stop(self) -> None:
        """Stop the application - scheduler first, then any running sync, then the database."""
        if not self._running:
            return

        logging.info("[Application] Shutting down...")

        if self.scheduled_sync:
            logging.info("[Application] Stopping scheduled directory sync...")
            self.scheduled_sync.stop()
            self.scheduled_sync = None

        directory_service = self.services.get("directory")
        if directory_service is not None:
            grace = 2 * self.graph_timeout_seconds
            if not directory_service.wait_until_idle(timeout=grace):
                logging.warning(f"[Application] Directory sync still running after {grace:.0f}s, closing anyway")

        if self._db is not None:
            self._db.close()
            self._db = None

        self.services.clear()
        self._running = False
        logging.info("[Application] Shutdown complete")

    def is_running(self) -> bool:
        """Check if application is running."""
        return self._running


# ----------------------------------------------------------------------
#  Global application instance
# ----------------------------------------------------------------------
application = Application()
