"""Pure functions for projecting a family profile across fiscal years.

This module contains the functional core for the timeline:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Ages are counted per fiscal year (fiscal year minus birth year); school grades
follow the April-start school year.
"""

from collections import Counter
from collections.abc import Iterable

from dreamplan.dates import fiscal_month_index, fiscal_year_window
from dreamplan.domain.models import (
    SCHOOL_ROLES,
    DreamEvent,
    FamilyMember,
    FamilyProfile,
    FiscalYear,
    FiscalYearSnapshot,
    MemberYear,
)


def is_early_bird(birth_month: int) -> bool:
    """Check whether a birth month falls in January to March.

    Early-bird children start school together with the previous calendar
    year's April-December births.
    """
    return birth_month <= 3


def elementary_entrance_fy(birth_year: int, birth_month: int) -> FiscalYear:
    """Calculate the fiscal year a child enters elementary school.

    Args:
        birth_year: Calendar year of birth.
        birth_month: Calendar month of birth (1-12).

    Returns:
        Fiscal year of elementary school entrance.
    """
    if is_early_bird(birth_month):
        return FiscalYear(birth_year + 6)
    return FiscalYear(birth_year + 7)


def age_in_fy(birth_year: int, fy: int) -> int:
    """Age reached during a fiscal year (no birth month adjustment)."""
    return fy - birth_year


def school_grade(birth_year: int, birth_month: int, fy: int) -> str:
    """Calculate the school grade label for a fiscal year.

    Args:
        birth_year: Calendar year of birth.
        birth_month: Calendar month of birth (1-12).
        fy: Fiscal year to evaluate.

    Returns:
        One of "pre-school", "elementary N", "junior-high N", "senior-high N",
        "university N" or "working adult".
    """
    years = fy - elementary_entrance_fy(birth_year, birth_month) + 1

    if years < 1:
        return "pre-school"
    if years <= 6:
        return f"elementary {years}"
    if years <= 9:
        return f"junior-high {years - 6}"
    if years <= 12:
        return f"senior-high {years - 9}"
    if years <= 16:
        return f"university {years - 12}"
    return "working adult"


def is_school_age(member: FamilyMember) -> bool:
    """Check whether grades are tracked for a member's role."""
    return member.role in SCHOOL_ROLES


def project_member(member: FamilyMember, fy: int) -> MemberYear:
    """Derive a member's age and grade for one fiscal year."""
    grade = school_grade(member.birth_year, member.birth_month, fy) if is_school_age(member) else None
    return MemberYear(
        id=member.id,
        name=member.name,
        birth_year=member.birth_year,
        birth_month=member.birth_month,
        role=member.role,
        gender=member.gender,
        age=age_in_fy(member.birth_year, fy),
        grade=grade,
    )


def dreams_for_year(events: Iterable[DreamEvent], fy: int) -> list[DreamEvent]:
    """Select one fiscal year's events in fiscal month order.

    Events whose month is outside 1-12 sort before April.
    """
    matching = [event for event in events if event.fy == fy]
    return sorted(matching, key=lambda event: fiscal_month_index(event.month))


def project(profile: FamilyProfile, events: Iterable[DreamEvent]) -> list[FiscalYearSnapshot]:
    """Project a family profile and its events over the timeline window.

    Args:
        profile: Family profile with start fiscal year and members.
        events: All stored events; those outside the window are left out.

    Returns:
        One snapshot per fiscal year from start_fy, in order.
    """
    events = list(events)
    return [
        FiscalYearSnapshot(
            fy=FiscalYear(fy),
            members=[project_member(member, fy) for member in profile.members],
            year_dreams=dreams_for_year(events, fy),
        )
        for fy in fiscal_year_window(profile.start_fy)
    ]


def member_status(member_year: MemberYear) -> str:
    """Cell text for a member in a fiscal year: grade for students, age otherwise."""
    if member_year.grade is not None:
        return member_year.grade
    return f"{member_year.age}"


def events_by_category(snapshot: FiscalYearSnapshot) -> dict[str, int]:
    """Count a snapshot's events per category."""
    return dict(Counter(event.category for event in snapshot.year_dreams))
