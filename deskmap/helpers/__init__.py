"""
Helpers package.
"""

from .exceptions import (
    DeskmapError,
    DirectoryConfigError,
    DirectoryRequestError,
    DuplicateDeskNumberError,
    LayoutValidationError,
    MapNotInitializedError,
    SyncInProgressError,
)
from .logging_helper import sanitize_exception_message
from .time_helper import now_iso, now_ms, now_s

__all__ = [
    "DeskmapError",
    "DirectoryConfigError",
    "DirectoryRequestError",
    "DuplicateDeskNumberError",
    "LayoutValidationError",
    "MapNotInitializedError",
    "SyncInProgressError",
    "now_iso",
    "now_ms",
    "now_s",
    "sanitize_exception_message",
]
