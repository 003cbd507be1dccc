"""
Services package.
"""

from .domain import DirectoryService, LayoutService
from .infrastructure import (
    INTERNAL_SESSION_TIMEOUT_SECONDS,
    ConfigService,
    EventsService,
    KeyManagementService,
    ScheduledSyncService,
)

__all__ = [
    "INTERNAL_SESSION_TIMEOUT_SECONDS",
    "ConfigService",
    "DirectoryService",
    "EventsService",
    "KeyManagementService",
    "LayoutService",
    "ScheduledSyncService",
]
