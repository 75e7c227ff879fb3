"""Domain models for the role checker."""

from .models import (
    ContactInfo,
    EducationEntry,
    Location,
    ProfileRecord,
    RoleEntry,
    RosterRow,
    Verdict,
)

__all__ = [
    "ContactInfo",
    "EducationEntry",
    "Location",
    "ProfileRecord",
    "RoleEntry",
    "RosterRow",
    "Verdict",
]
