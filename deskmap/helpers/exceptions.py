"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class DeskmapError(Exception):
    """Base class for all Deskmap errors surfaced to the interface layer."""


class DirectoryConfigError(DeskmapError):
    """Raised when directory credentials are missing or incomplete."""


class DirectoryRequestError(DeskmapError):
    """Raised when the token endpoint or Graph API returns a failure."""


class MapNotInitializedError(DeskmapError):
    """Raised when an operation needs the floor map before it exists."""


class LayoutValidationError(DeskmapError):
    """Raised when a desk batch is rejected before persistence."""


class DuplicateDeskNumberError(LayoutValidationError):
    """Raised when two desks in one save batch share a number."""

    def __init__(self, number: int) -> None:
        super().__init__("Duplicate desk number")
        self.number = number


class SyncInProgressError(DeskmapError):
    """Raised when a directory sync is requested while another is running."""
