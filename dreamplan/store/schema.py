"""Database schema initialization and migrations."""

import os
import sqlite3
from pathlib import Path


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "dreamplan" / "dreamplan.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        # Single row: the one family profile per database
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS family_profile (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                start_fy INTEGER NOT NULL,
                updated_at TEXT,
                updated_by TEXT
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS family_members (
                id TEXT PRIMARY KEY,
                position INTEGER NOT NULL,
                name TEXT NOT NULL,
                birth_year INTEGER NOT NULL,
                birth_month INTEGER NOT NULL,
                role TEXT NOT NULL,
                gender TEXT
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS dreams (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                fy INTEGER NOT NULL,
                month INTEGER NOT NULL,
                category TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT,
                created_at TEXT NOT NULL DEFAULT (datetime('now')),
                updated_at TEXT,
                user_id TEXT
            )
        """
        )

        # Migrations for older databases
        cursor.execute("PRAGMA table_info(dreams)")
        columns = [row[1] for row in cursor.fetchall()]

        # Migration: databases created before edits lack 'updated_at'
        if "updated_at" not in columns:
            cursor.execute("ALTER TABLE dreams ADD COLUMN updated_at TEXT")

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_dreams_fy ON dreams(fy)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_members_position ON family_members(position)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
