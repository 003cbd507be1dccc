"""Infrastructure services - runtime plumbing."""

from .config_svc import ENV_PREFIX, INTERNAL_SESSION_TIMEOUT_SECONDS, ConfigService
from .events_svc import EventsService
from .keys_svc import ADMIN_PASSWORD_KEY, KeyManagementService
from .scheduled_sync_svc import ScheduledSyncService

__all__ = [
    "ADMIN_PASSWORD_KEY",
    "ENV_PREFIX",
    "INTERNAL_SESSION_TIMEOUT_SECONDS",
    "ConfigService",
    "EventsService",
    "KeyManagementService",
    "ScheduledSyncService",
]
