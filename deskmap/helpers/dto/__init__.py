"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

DTOs live in helpers/dto/<domain>_dto.py and form cross-layer contracts
(interfaces → services → workflows → components → persistence).

Rules for DTO modules:
- Import only stdlib and typing (no deskmap.* imports)
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no DB access, no business logic
"""

from .desk_dto import Desk, LayoutSnapshot, MapConfig, MapStyleUpdate
from .directory_dto import DirectoryConfig, DirectoryConfigUpdate, DirectorySettings, DirectoryUser, MappingRule
from .sync_dto import Assignment, ReconcileResult, SyncResult

__all__ = [
    "Assignment",
    "Desk",
    "DirectoryConfig",
    "DirectoryConfigUpdate",
    "DirectorySettings",
    "DirectoryUser",
    "LayoutSnapshot",
    "MapConfig",
    "MapStyleUpdate",
    "MappingRule",
    "ReconcileResult",
    "SyncResult",
]
