"""Pure functions for generating canonical life events from birth dates.

Rules are declared as tables of (offset, month, category, label) rows so each
life stage can be read and tested on its own. Offsets are fiscal years from an
anchor: the elementary entrance year for school milestones and coming of age.

The generator does not look at stored events, so running it twice yields
duplicates. Callers must keep only candidates inside the timeline window
(see within_window) before persisting.
"""

from collections.abc import Iterable
from typing import Any, NamedTuple

from dreamplan.dates import in_window
from dreamplan.domain.models import (
    CandidateEvent,
    FamilyMember,
    FamilyProfile,
    FiscalYear,
    UserId,
)
from dreamplan.domain.timeline import elementary_entrance_fy, is_early_bird, is_school_age


class LifeEventRule(NamedTuple):
    """One generated event, positioned relative to an anchor fiscal year."""

    offset: int
    month: int
    category: str
    label: str


SCHOOL_MILESTONES = (
    LifeEventRule(0, 4, "education", "{name}: elementary school entrance"),
    LifeEventRule(6, 3, "education", "{name}: elementary school graduation"),
    LifeEventRule(6, 4, "education", "{name}: junior high school entrance"),
    LifeEventRule(9, 3, "education", "{name}: junior high school graduation"),
    LifeEventRule(9, 4, "education", "{name}: senior high school entrance"),
    LifeEventRule(12, 3, "education", "{name}: senior high school graduation"),
    LifeEventRule(12, 4, "education", "{name}: university entrance"),
    LifeEventRule(16, 3, "education", "{name}: university graduation"),
)

COMING_OF_AGE = LifeEventRule(13, 1, "life", "{name}: coming-of-age ceremony")

KANREKI_LABEL = "{name}: kanreki (60th year)"


def apply_rules(member: FamilyMember, anchor_fy: int, rules: Iterable[LifeEventRule]) -> list[CandidateEvent]:
    """Turn rule rows into events for a member.

    Args:
        member: Family member the events belong to.
        anchor_fy: Fiscal year the rule offsets count from.
        rules: Rule rows to apply, in order.

    Returns:
        One candidate event per rule.
    """
    return [
        CandidateEvent(
            fy=FiscalYear(anchor_fy + rule.offset),
            month=rule.month,
            category=rule.category,
            title=rule.label.format(name=member.name),
        )
        for rule in rules
    ]


def school_events(member: FamilyMember) -> list[CandidateEvent]:
    """School entrance/graduation events followed by coming of age."""
    anchor = elementary_entrance_fy(member.birth_year, member.birth_month)
    return apply_rules(member, anchor, (*SCHOOL_MILESTONES, COMING_OF_AGE))


def kanreki_fy(birth_year: int, birth_month: int) -> FiscalYear:
    """Fiscal year of the 60th-year milestone."""
    if is_early_bird(birth_month):
        return FiscalYear(birth_year + 59)
    return FiscalYear(birth_year + 60)


def kanreki_event(member: FamilyMember, start_fy: int) -> CandidateEvent | None:
    """60th-year milestone, or None if it falls before start_fy."""
    fy = kanreki_fy(member.birth_year, member.birth_month)
    if fy < start_fy:
        return None
    return CandidateEvent(
        fy=fy,
        month=member.birth_month,
        category="life",
        title=KANREKI_LABEL.format(name=member.name),
    )


def generate(profile: FamilyProfile) -> list[CandidateEvent]:
    """Generate canonical life events for every member of a profile.

    Args:
        profile: Family profile.

    Returns:
        Candidate events in member order: school milestones and coming of age
        for children and students, then each member's kanreki.
    """
    candidates: list[CandidateEvent] = []

    for member in profile.members:
        if is_school_age(member):
            candidates.extend(school_events(member))

        kanreki = kanreki_event(member, profile.start_fy)
        if kanreki is not None:
            candidates.append(kanreki)

    return candidates


def within_window(candidates: Iterable[CandidateEvent], start_fy: int) -> list[CandidateEvent]:
    """Keep candidates whose fiscal year lies in [start_fy, start_fy + 20)."""
    return [candidate for candidate in candidates if in_window(candidate.fy, start_fy)]


def to_dream_records(
    candidates: Iterable[CandidateEvent],
    user_id: UserId | None,
    now: str,
) -> list[dict[str, Any]]:
    """Shape candidates into new event rows ready for insertion.

    Args:
        candidates: Generated events.
        user_id: Author of the new rows.
        now: ISO timestamp for created_at and updated_at.

    Returns:
        Row dictionaries without an id (storage assigns it).
    """
    return [
        {
            "fy": candidate.fy,
            "month": candidate.month,
            "category": candidate.category,
            "title": candidate.title,
            "description": None,
            "created_at": now,
            "updated_at": now,
            "user_id": user_id,
        }
        for candidate in candidates
    ]
