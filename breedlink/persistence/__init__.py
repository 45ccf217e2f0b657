"""
Persistence package.
"""

from .arango_client import SafeDatabase, create_arango_client, is_unique_violation
from .db import Database

__all__ = [
    "Database",
    "SafeDatabase",
    "create_arango_client",
    "is_unique_violation",
]
