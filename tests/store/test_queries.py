"""Tests for dreamplan.store against a temporary SQLite database."""

import sqlite3
from dataclasses import replace
from pathlib import Path

import pytest

from dreamplan.domain.models import FamilyMember, FamilyProfile, FiscalYear, MemberId, UserId
from dreamplan.store import (
    add_dream,
    add_dreams,
    database_exists,
    delete_dream,
    get_all_dreams,
    get_dream,
    get_family_profile,
    init_database,
    save_family_profile,
    update_dream,
)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "dreamplan.db"
    init_database(path)
    return path


def make_profile(start_fy: int = 2024) -> FamilyProfile:
    return FamilyProfile(
        start_fy=FiscalYear(start_fy),
        members=(
            FamilyMember(id=MemberId("b"), name="Ken", birth_year=1978, birth_month=9, role="parent", gender="male"),
            FamilyMember(id=MemberId("a"), name="Hana", birth_year=2015, birth_month=4, role="child"),
        ),
    )


class TestSchema:
    """Tests for init_database and database_exists."""

    def test_creates_database(self, tmp_path: Path) -> None:
        """Should create the file and parent directories."""
        path = tmp_path / "nested" / "dreamplan.db"
        assert not database_exists(path)
        init_database(path)
        assert database_exists(path)

    def test_is_idempotent(self, db_path: Path) -> None:
        """Running twice is a no-op migration."""
        init_database(db_path)
        assert get_family_profile(db_path) is None

    def test_new_dreams_table_declares_updated_at(self, db_path: Path) -> None:
        """Fresh databases get updated_at from CREATE TABLE, not a later ALTER."""
        conn = sqlite3.connect(db_path)
        (sql,) = conn.execute("SELECT sql FROM sqlite_master WHERE type = 'table' AND name = 'dreams'").fetchone()
        conn.close()
        assert "updated_at TEXT" in sql
        assert sql.rstrip().endswith(")")
        assert sql.index("updated_at") < sql.index("user_id")

    def test_migrates_missing_updated_at(self, tmp_path: Path) -> None:
        """Older dreams tables gain the updated_at column."""
        path = tmp_path / "old.db"
        conn = sqlite3.connect(path)
        conn.execute(
            "CREATE TABLE dreams (id INTEGER PRIMARY KEY AUTOINCREMENT, fy INTEGER NOT NULL, month INTEGER NOT NULL,"
            " category TEXT NOT NULL, title TEXT NOT NULL, description TEXT, created_at TEXT NOT NULL, user_id TEXT)"
        )
        conn.commit()
        conn.close()

        init_database(path)

        conn = sqlite3.connect(path)
        columns = [row[1] for row in conn.execute("PRAGMA table_info(dreams)")]
        conn.close()
        assert "updated_at" in columns


class TestFamilyProfile:
    """Tests for get_family_profile and save_family_profile."""

    def test_missing_profile_is_none(self, db_path: Path) -> None:
        """No profile until setup has run."""
        assert get_family_profile(db_path) is None

    def test_round_trip_keeps_member_order(self, db_path: Path) -> None:
        """Members come back in saved order, not ID order."""
        save_family_profile(make_profile(), "2026-10-18T09:00:00", UserId("u1"), db_path)
        profile = get_family_profile(db_path)

        assert profile == make_profile()

    def test_save_replaces_profile(self, db_path: Path) -> None:
        """Saving again replaces start year and members."""
        save_family_profile(make_profile(), "2026-10-18T09:00:00", UserId("u1"), db_path)
        smaller = FamilyProfile(start_fy=FiscalYear(2030), members=make_profile().members[1:])
        save_family_profile(smaller, "2026-10-19T09:00:00", UserId("u2"), db_path)

        profile = get_family_profile(db_path)
        assert profile is not None
        assert profile.start_fy == 2030
        assert [m.name for m in profile.members] == ["Hana"]

    def test_single_profile_row(self, db_path: Path) -> None:
        """Only one profile row ever exists."""
        save_family_profile(make_profile(), "t1", None, db_path)
        save_family_profile(make_profile(2025), "t2", None, db_path)

        conn = sqlite3.connect(db_path)
        count = conn.execute("SELECT COUNT(*) FROM family_profile").fetchone()[0]
        conn.close()
        assert count == 1


class TestDreams:
    """Tests for dream CRUD queries."""

    def test_add_and_get(self, db_path: Path) -> None:
        """Added dreams get an ID and keep their fields."""
        dream_id = add_dream(2025, 8, "travel", "Hokkaido trip", "Summer", "2026-10-18T09:00:00", UserId("u1"), db_path)
        dream = get_dream(dream_id, db_path)

        assert dream is not None
        assert (dream.fy, dream.month, dream.category, dream.title, dream.description) == (
            2025,
            8,
            "travel",
            "Hokkaido trip",
            "Summer",
        )
        assert dream.created_at == "2026-10-18T09:00:00"
        assert dream.user_id == "u1"

    def test_created_at_defaults_to_now(self, db_path: Path) -> None:
        """Database fills created_at when omitted."""
        dream_id = add_dream(2025, 8, "travel", "Trip", db_path=db_path)
        dream = get_dream(dream_id, db_path)
        assert dream is not None
        assert dream.created_at

    def test_get_missing(self, db_path: Path) -> None:
        """Unknown IDs return None."""
        assert get_dream(999, db_path) is None

    def test_get_all_filters_by_fy(self, db_path: Path) -> None:
        """Should filter by fiscal year when asked."""
        add_dream(2025, 8, "travel", "A", db_path=db_path)
        add_dream(2026, 8, "travel", "B", db_path=db_path)

        assert [d.title for d in get_all_dreams(db_path)] == ["A", "B"]
        assert [d.title for d in get_all_dreams(db_path, fy=2026)] == ["B"]

    def test_batch_insert_keeps_duplicates(self, db_path: Path) -> None:
        """Batch inserts never deduplicate."""
        row = {
            "fy": 2030,
            "month": 4,
            "category": "education",
            "title": "Hana: junior high school entrance",
            "description": None,
            "created_at": "t",
            "updated_at": "t",
            "user_id": "u1",
        }
        assert add_dreams([row], db_path) == 1
        assert add_dreams([row], db_path) == 1
        assert len(get_all_dreams(db_path)) == 2

    def test_update_replaces_record(self, db_path: Path) -> None:
        """Edits replace every field by ID."""
        dream_id = add_dream(2025, 8, "travel", "Trip", db_path=db_path)
        dream = get_dream(dream_id, db_path)
        assert dream is not None

        edited = replace(dream, fy=FiscalYear(2026), month=1, category="life", title="Ski trip", updated_at="t2")
        assert update_dream(edited, db_path)

        stored = get_dream(dream_id, db_path)
        assert stored is not None
        assert (stored.fy, stored.month, stored.category, stored.title, stored.updated_at) == (
            2026,
            1,
            "life",
            "Ski trip",
            "t2",
        )

    def test_update_missing(self, db_path: Path) -> None:
        """Updating an unknown ID reports False."""
        dream_id = add_dream(2025, 8, "travel", "Trip", db_path=db_path)
        dream = get_dream(dream_id, db_path)
        assert dream is not None
        assert not update_dream(replace(dream, id=999), db_path)

    def test_delete(self, db_path: Path) -> None:
        """Delete removes the row and reports whether it existed."""
        dream_id = add_dream(2025, 8, "travel", "Trip", db_path=db_path)
        assert delete_dream(dream_id, db_path)
        assert not delete_dream(dream_id, db_path)
        assert get_all_dreams(db_path) == []
