"""Pure functions for editing and validating a family profile.

Editing helpers return new member tuples rather than mutating. Validators
return an error message, or None when the input is acceptable.
"""

from dreamplan.domain.models import CATEGORIES, GENDERS, ROLES, FamilyMember, MemberId

MISSING_NAME_ERROR = "Please enter names for all family members."


def default_members() -> tuple[FamilyMember, ...]:
    """Placeholder parents offered when a family is set up for the first time."""
    return (
        FamilyMember(id=MemberId("init-1"), name="", birth_year=1980, birth_month=1, role="parent", gender="female"),
        FamilyMember(id=MemberId("init-2"), name="", birth_year=1978, birth_month=1, role="parent", gender="male"),
    )


def new_member_id(now_ms: int, suffix: str) -> MemberId:
    """Build a member identifier (e.g., "mem_1700000000000_k3j9x0a1b")."""
    return MemberId(f"mem_{now_ms}_{suffix}")


def add_member(members: tuple[FamilyMember, ...], member: FamilyMember) -> tuple[FamilyMember, ...]:
    """Append a member, keeping existing order."""
    return (*members, member)


def remove_member(members: tuple[FamilyMember, ...], member_id: str) -> tuple[FamilyMember, ...]:
    """Drop the member with a given id (no-op if absent)."""
    return tuple(m for m in members if m.id != member_id)


def validate_member(member: FamilyMember) -> str | None:
    """Validate a single member.

    Args:
        member: Member to check.

    Returns:
        Error message, or None if valid.
    """
    if not member.name.strip():
        return MISSING_NAME_ERROR
    if member.role not in ROLES:
        return f"Unknown role '{member.role}' (expected one of: {', '.join(ROLES)})"
    if not 1 <= member.birth_month <= 12:
        return f"Birth month must be between 1 and 12 (got {member.birth_month})"
    if member.gender is not None and member.gender not in GENDERS:
        return f"Unknown gender '{member.gender}' (expected one of: {', '.join(GENDERS)})"
    return None


def validate_members(members: tuple[FamilyMember, ...]) -> str | None:
    """Validate all members before a profile is saved.

    A blank name anywhere is reported first, matching the setup form.
    """
    if any(not m.name.strip() for m in members):
        return MISSING_NAME_ERROR

    for member in members:
        error = validate_member(member)
        if error:
            return error

    return None


def validate_dream_title(title: str) -> str | None:
    """Titles must not be blank."""
    if not title.strip():
        return "Title is required"
    return None


def validate_category(category: str) -> str | None:
    """Category must be one of the fixed set."""
    if category not in CATEGORIES:
        return f"Unknown category '{category}' (expected one of: {', '.join(CATEGORIES)})"
    return None
