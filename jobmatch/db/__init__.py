"""
Database module - pooled relational store access and schema.
"""
from jobmatch.db.postgres import Database, get_database
from jobmatch.db.schema import create_schema

__all__ = [
    "Database",
    "get_database",
    "create_schema",
]
