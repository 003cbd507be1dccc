"""
Persistence package.
"""

from .db import SCHEMA, SCHEMA_VERSION, Database

__all__ = ["SCHEMA", "SCHEMA_VERSION", "Database"]
