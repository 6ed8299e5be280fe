"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from dreamplan.store.queries import (
    add_dream,
    add_dreams,
    delete_dream,
    get_all_dreams,
    get_dream,
    get_family_profile,
    save_family_profile,
    update_dream,
)
from dreamplan.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "add_dream",
    "add_dreams",
    "delete_dream",
    "get_all_dreams",
    "get_dream",
    "get_family_profile",
    "save_family_profile",
    "update_dream",
]
