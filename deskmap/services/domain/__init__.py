"""Domain services - layout and directory integration."""

from .directory_svc import DirectoryService
from .layout_svc import LayoutService

__all__ = ["DirectoryService", "LayoutService"]
