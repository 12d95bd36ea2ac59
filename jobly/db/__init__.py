"""
Database module - engine/session handle and table definitions.
"""
from jobly.db.schema import drop_schema, init_schema
from jobly.db.session import Database, get_db

__all__ = [
    "Database",
    "get_db",
    "init_schema",
    "drop_schema",
]
