"""Data models for the matching engine."""

from dataclasses import dataclass, field
from typing import List, Optional

from rolecheck.domain.models import RoleEntry, Verdict


@dataclass
class MatchResult:
    """Result of comparing a profile with its expected company.

    Attributes:
        verdict: NO_CHANGE or NEEDS_REVIEW (the matcher never returns ERROR)
        expected_key: Normalized expected company
        current_roles: Roles without an end date, in page order
        matched_role: The role whose company matched, if any
        reason: Short machine-friendly explanation for logs and reports
    """

    verdict: Verdict
    expected_key: str = ""
    current_roles: List[RoleEntry] = field(default_factory=list)
    matched_role: Optional[RoleEntry] = None
    reason: str = ""

    @property
    def is_match(self) -> bool:
        """Whether the expected company was found."""
        return self.verdict == Verdict.NO_CHANGE

    @property
    def current_companies(self) -> List[str]:
        """Display names of current employers."""
        return [role.company for role in self.current_roles]
