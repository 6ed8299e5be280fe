"""Domain models and types for dreamplan.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Timeline and life-event rules separated from storage and the CLI
"""

from dreamplan.domain.models import (
    CandidateEvent,
    DreamEvent,
    FamilyMember,
    FamilyProfile,
    FiscalYear,
    FiscalYearSnapshot,
    MemberId,
    MemberYear,
    UserId,
)

__all__ = [
    "CandidateEvent",
    "DreamEvent",
    "FamilyMember",
    "FamilyProfile",
    "FiscalYear",
    "FiscalYearSnapshot",
    "MemberId",
    "MemberYear",
    "UserId",
]
