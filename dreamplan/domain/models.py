"""Domain type definitions for dreamplan.

These NewTypes provide semantic clarity and help with type checking:
- FiscalYear: Fiscal year labelled by the calendar year it starts in (April)
- MemberId: Stable identifier of a family member within a profile
- UserId: Identifier of the user who authored a record
"""

from dataclasses import dataclass
from typing import NewType

# Fiscal year Y spans April of Y through March of Y+1
FiscalYear = NewType("FiscalYear", int)

MemberId = NewType("MemberId", str)

UserId = NewType("UserId", str)

ROLES = ("parent", "child", "student")

# Roles for which school grades and school milestones are computed
SCHOOL_ROLES = ("child", "student")

GENDERS = ("male", "female")

CATEGORIES = ("education", "travel", "financial", "life", "career")

CATEGORY_LABELS = {
    "education": "Education",
    "travel": "Travel",
    "financial": "Money & Investing",
    "life": "Life & Dreams",
    "career": "Career",
}

# Calendar months in fiscal order (April first)
FY_MONTHS = (4, 5, 6, 7, 8, 9, 10, 11, 12, 1, 2, 3)

TIMELINE_YEARS = 20


@dataclass(frozen=True)
class FamilyMember:
    """Immutable family member."""

    id: MemberId
    name: str
    birth_year: int
    birth_month: int
    role: str
    gender: str | None = None


@dataclass(frozen=True)
class FamilyProfile:
    """Immutable family profile (one per database)."""

    start_fy: FiscalYear
    members: tuple[FamilyMember, ...] = ()


@dataclass(frozen=True)
class DreamEvent:
    """Immutable planned event stored for a fiscal year."""

    id: int
    fy: FiscalYear
    month: int
    category: str
    title: str
    description: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    user_id: UserId | None = None


@dataclass(frozen=True)
class CandidateEvent:
    """Immutable generated event, not yet persisted."""

    fy: FiscalYear
    month: int
    category: str
    title: str


@dataclass(frozen=True)
class MemberYear:
    """Immutable member facts for a single fiscal year."""

    id: MemberId
    name: str
    birth_year: int
    birth_month: int
    role: str
    gender: str | None
    age: int
    grade: str | None


@dataclass(frozen=True)
class FiscalYearSnapshot:
    """Immutable projection of one fiscal year."""

    fy: FiscalYear
    members: list[MemberYear]
    year_dreams: list[DreamEvent]
