"""
Table operation classes - one per table.
"""

from .desks_sql import DeskOperations
from .directory_config_sql import DirectoryConfigOperations
from .directory_users_sql import DirectoryUserOperations
from .map_config_sql import MapConfigOperations
from .meta_sql import MetaOperations
from .sessions_sql import SessionOperations
from .shared_sql import SqlConnection

__all__ = [
    "DeskOperations",
    "DirectoryConfigOperations",
    "DirectoryUserOperations",
    "MapConfigOperations",
    "MetaOperations",
    "SessionOperations",
    "SqlConnection",
]
