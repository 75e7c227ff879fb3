"""Data models for pipeline execution tracking and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from rolecheck.domain.models import RosterRow, Verdict
from rolecheck.matching.models import MatchResult


@dataclass
class RowOutcome:
    """
    Result of checking one roster row.

    Every row produces exactly one RowOutcome, whether the check succeeded,
    was skipped for missing input, or failed.

    Attributes:
        row: The roster row that was checked
        verdict: NO_CHANGE, NEEDS_REVIEW, or ERROR
        match_result: Matcher output when a profile was compared
        error_type: Exception class name when the row failed or was skipped
        error_message: Exception message when the row failed or was skipped
        duration_seconds: Time spent on this row
    """

    row: RosterRow
    verdict: Verdict
    match_result: Optional[MatchResult] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        return self.verdict == Verdict.ERROR

    @property
    def reason(self) -> str:
        """Short explanation for reports."""
        if self.match_result is not None:
            return self.match_result.reason
        return self.error_message or ""


@dataclass
class RunResult:
    """
    Aggregate results from a complete run.

    Attributes:
        run_id: Identifier attached to every log record of the run
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        outcomes: One RowOutcome per roster row, in roster order
        total_duration_seconds: Total time for the entire run
    """

    run_id: str
    run_started_at: datetime
    run_finished_at: datetime
    outcomes: List[RowOutcome] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    def __post_init__(self):
        """Compute duration if not set."""
        if self.total_duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.total_duration_seconds = delta.total_seconds()

    @property
    def verdicts(self) -> List[Verdict]:
        """Verdicts in roster order."""
        return [outcome.verdict for outcome in self.outcomes]

    @property
    def counts(self) -> Dict[Verdict, int]:
        """Number of rows per verdict (every verdict present, possibly 0)."""
        counts = {verdict: 0 for verdict in Verdict}
        for outcome in self.outcomes:
            counts[outcome.verdict] += 1
        return counts

    @property
    def total_rows(self) -> int:
        return len(self.outcomes)

    @property
    def had_errors(self) -> bool:
        return any(outcome.failed for outcome in self.outcomes)
