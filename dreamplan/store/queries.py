"""Database query functions."""

import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from dreamplan.domain.models import (
    DreamEvent,
    FamilyMember,
    FamilyProfile,
    FiscalYear,
    MemberId,
    UserId,
)
from dreamplan.store.schema import get_db_path

_DREAM_COLUMNS = "id, fy, month, category, title, description, created_at, updated_at, user_id"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_dream(row: sqlite3.Row) -> DreamEvent:
    return DreamEvent(
        id=row["id"],
        fy=FiscalYear(row["fy"]),
        month=row["month"],
        category=row["category"],
        title=row["title"],
        description=row["description"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        user_id=UserId(row["user_id"]) if row["user_id"] is not None else None,
    )


def get_family_profile(db_path: Path | None = None) -> FamilyProfile | None:
    """Get the family profile.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        FamilyProfile with members in saved order, or None if no profile has been set up.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT start_fy FROM family_profile WHERE id = 1")
        profile_row = cursor.fetchone()
        if not profile_row:
            return None

        cursor.execute(
            "SELECT id, name, birth_year, birth_month, role, gender FROM family_members ORDER BY position"
        )
        members = tuple(
            FamilyMember(
                id=MemberId(row["id"]),
                name=row["name"],
                birth_year=row["birth_year"],
                birth_month=row["birth_month"],
                role=row["role"],
                gender=row["gender"],
            )
            for row in cursor.fetchall()
        )
        return FamilyProfile(start_fy=FiscalYear(profile_row["start_fy"]), members=members)


def save_family_profile(
    profile: FamilyProfile,
    updated_at: str,
    updated_by: UserId | None = None,
    db_path: Path | None = None,
) -> None:
    """Replace the family profile and all of its members.

    Args:
        profile: Profile to store.
        updated_at: ISO timestamp of the change.
        updated_by: User making the change.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO family_profile (id, start_fy, updated_at, updated_by) VALUES (1, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    start_fy = excluded.start_fy,
                    updated_at = excluded.updated_at,
                    updated_by = excluded.updated_by
                """,
                (profile.start_fy, updated_at, updated_by),
            )
            cursor.execute("DELETE FROM family_members")
            cursor.executemany(
                """
                INSERT INTO family_members (id, position, name, birth_year, birth_month, role, gender)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (m.id, position, m.name, m.birth_year, m.birth_month, m.role, m.gender)
                    for position, m in enumerate(profile.members)
                ],
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def add_dream(
    fy: int,
    month: int,
    category: str,
    title: str,
    description: str | None = None,
    created_at: str | None = None,
    user_id: UserId | None = None,
    db_path: Path | None = None,
) -> int:
    """Insert a new event.

    Args:
        fy: Fiscal year of the event.
        month: Calendar month within the fiscal year.
        category: Event category.
        title: Event title.
        description: Optional free text.
        created_at: ISO timestamp. If None, the database sets the current time.
        user_id: Author of the event.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        ID of the new event.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO dreams (fy, month, category, title, description, created_at, updated_at, user_id)
                VALUES (?, ?, ?, ?, ?, COALESCE(?, datetime('now')), ?, ?)
                """,
                (fy, month, category, title, description, created_at, created_at, user_id),
            )
            conn.commit()
            return int(cursor.lastrowid or 0)
        except sqlite3.Error:
            conn.rollback()
            raise


def add_dreams(records: Iterable[dict[str, Any]], db_path: Path | None = None) -> int:
    """Insert a batch of new events (e.g., generated life events).

    Duplicates are not checked; every record becomes a new row.

    Args:
        records: Row dictionaries with fy, month, category, title, description,
            created_at, updated_at and user_id keys.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Number of events inserted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    rows = [
        (
            r["fy"],
            r["month"],
            r["category"],
            r["title"],
            r.get("description"),
            r["created_at"],
            r.get("updated_at"),
            r.get("user_id"),
        )
        for r in records
    ]

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.executemany(
                """
                INSERT INTO dreams (fy, month, category, title, description, created_at, updated_at, user_id)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
            return len(rows)
        except sqlite3.Error:
            conn.rollback()
            raise


def get_all_dreams(db_path: Path | None = None, fy: int | None = None) -> list[DreamEvent]:
    """Get stored events.

    Args:
        db_path: Path to the database file. If None, uses default location.
        fy: Optional fiscal year to filter by.

    Returns:
        List of events ordered by fiscal year, then id.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        query = f"SELECT {_DREAM_COLUMNS} FROM dreams"
        params: list[Any] = []

        if fy is not None:
            query += " WHERE fy = ?"
            params.append(fy)

        query += " ORDER BY fy, id"
        cursor.execute(query, params)
        return [_row_to_dream(row) for row in cursor.fetchall()]


def get_dream(dream_id: int, db_path: Path | None = None) -> DreamEvent | None:
    """Get a single event by ID.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {_DREAM_COLUMNS} FROM dreams WHERE id = ?", (dream_id,))
        row = cursor.fetchone()
        return _row_to_dream(row) if row else None


def update_dream(dream: DreamEvent, db_path: Path | None = None) -> bool:
    """Replace every editable field of an event (last write wins).

    Args:
        dream: Event carrying the ID to replace and its new contents.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if the event existed and was updated.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE dreams
                SET fy = ?, month = ?, category = ?, title = ?, description = ?, updated_at = ?, user_id = ?
                WHERE id = ?
                """,
                (
                    dream.fy,
                    dream.month,
                    dream.category,
                    dream.title,
                    dream.description,
                    dream.updated_at,
                    dream.user_id,
                    dream.id,
                ),
            )
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_dream(dream_id: int, db_path: Path | None = None) -> bool:
    """Delete an event.

    Returns:
        True if an event was deleted.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM dreams WHERE id = ?", (dream_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
