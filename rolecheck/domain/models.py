"""Core domain models for scraped profiles, roster rows, and verdicts.

This module defines the data structures used throughout the application:
- ProfileRecord: structured profile produced by a scraper
- RoleEntry / EducationEntry: experience and education items on a profile
- Location / ContactInfo: parsed top-card details
- RosterRow: one row of the input CSV, paired with its expected company
- Verdict: the three-valued outcome assigned to each roster row
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Verdict(str, Enum):
    """Outcome of checking a single roster row."""

    NO_CHANGE = "no_change"
    NEEDS_REVIEW = "needs_review"
    ERROR = "error"


def _blank_to_none(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    stripped = v.strip()
    return stripped if stripped else None


class Location(BaseModel):
    """Parsed profile location. Every part is optional."""

    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None

    @field_validator("city", "state", "country")
    @classmethod
    def strip_parts(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace and collapse empty parts to None."""
        return _blank_to_none(v)


class ContactInfo(BaseModel):
    """Contact details taken from the profile's contact-info overlay."""

    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    url: Optional[str] = None


class RoleEntry(BaseModel):
    """A single position in a profile's experience section.

    An absent end_date means the role is ongoing ("Present" on the page).
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Role title as displayed")
    company: str = Field(..., description="Company display name")
    start_date: Optional[str] = Field(None, description="'MMM YYYY' or 'YYYY'")
    end_date: Optional[str] = Field(None, description="None while the role is current")
    description: Optional[str] = Field(None, description="Free-text role description")
    location: Optional[str] = Field(None, description="Role location, when shown")

    @field_validator("title", "company")
    @classmethod
    def strip_required(cls, v: str) -> str:
        """Strip whitespace from required text fields."""
        return v.strip()

    @field_validator("start_date", "end_date", "description", "location")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from optional fields; blanks become None."""
        return _blank_to_none(v)

    @property
    def is_current(self) -> bool:
        """Whether the role has no end date."""
        return self.end_date is None


class EducationEntry(BaseModel):
    """A single item in a profile's education section."""

    model_config = ConfigDict(frozen=True)

    school_name: str = Field(..., min_length=1, description="School name (always shown)")
    degree: Optional[str] = None
    start_year: Optional[str] = None
    end_year: Optional[str] = None
    description: Optional[str] = None

    @field_validator("school_name")
    @classmethod
    def strip_school(cls, v: str) -> str:
        """Strip whitespace from the school name."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("school_name cannot be empty or whitespace-only")
        return stripped

    @field_validator("degree", "start_year", "end_year", "description")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from optional fields; blanks become None."""
        return _blank_to_none(v)


class ProfileRecord(BaseModel):
    """Structured profile returned by a scraper.

    Immutable once created. The comparison step only reads ``experience``;
    the remaining fields are carried for logging and reporting.
    """

    model_config = ConfigDict(frozen=True)

    first_name: str = ""
    last_name: str = ""
    location: Location = Field(default_factory=Location)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    experience: List[RoleEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        """First and last name joined with a space."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def current_roles(self) -> List[RoleEntry]:
        """Roles without an end date, in page order."""
        return [role for role in self.experience if role.is_current]


class RosterRow(BaseModel):
    """One data row of the input CSV.

    Blank cells are kept as empty strings so every CSV row yields exactly one
    RosterRow and row alignment is preserved.
    """

    model_config = ConfigDict(frozen=True)

    row_number: int = Field(..., ge=1, description="1-based data row index")
    profile_url: str = Field("", description="Normalized profile URL (may be empty)")
    expected_company: str = Field("", description="Recorded company (may be empty)")
    position: Optional[str] = Field(None, description="Recorded position, when the column exists")

    @field_validator("profile_url", "expected_company", mode="before")
    @classmethod
    def strip_cells(cls, v: Optional[str]) -> str:
        """Strip whitespace; None becomes an empty string."""
        return (v or "").strip()

    @field_validator("position")
    @classmethod
    def strip_position(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from the position; blanks become None."""
        return _blank_to_none(v)

    @property
    def has_url(self) -> bool:
        return bool(self.profile_url)

    @property
    def has_expected_company(self) -> bool:
        return bool(self.expected_company)
