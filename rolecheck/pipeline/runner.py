"""Pipeline orchestration for checking roster rows against scraped profiles."""

import time
from typing import Callable, Iterable, List, Optional
from uuid import uuid4

from rolecheck.domain.models import RosterRow, Verdict
from rolecheck.logging import get_logger
from rolecheck.logging.context import log_context
from rolecheck.matching.engine import RoleMatcher
from rolecheck.normalization.exceptions import ParseError
from rolecheck.roster.exceptions import InputError
from rolecheck.roster.reader import check_row
from rolecheck.scraping.base import ProfileScraper
from rolecheck.scraping.exceptions import ScrapeError
from rolecheck.utils.timestamps import utc_now

from .models import RowOutcome, RunResult

logger = get_logger(__name__, component="pipeline")

ProgressCallback = Callable[[int, int], None]


class RoleCheckPipeline:
    """
    Checks every roster row, one at a time, in roster order.

    For each row: validate input → scrape profile → match → record verdict.
    Rows are processed strictly sequentially because all scraping goes through
    one shared browser page. A failing row becomes an ERROR outcome and never
    stops the run.
    """

    def __init__(self, scraper: ProfileScraper, matcher: Optional[RoleMatcher] = None):
        """
        Initialize the pipeline.

        Args:
            scraper: Profile scraper bound to an authenticated session
            matcher: Role matcher (defaults to any-current policy)
        """
        self.scraper = scraper
        self.matcher = matcher or RoleMatcher()

    def run(
        self,
        rows: Iterable[RosterRow],
        progress: Optional[ProgressCallback] = None,
    ) -> RunResult:
        """
        Check all rows and collect one outcome per row.

        Args:
            rows: Roster rows in file order
            progress: Called as progress(done, total) after each row

        Returns:
            RunResult with outcomes in the same order as rows
        """
        rows = list(rows)
        run_id = uuid4().hex
        run_started_at = utc_now()
        outcomes: List[RowOutcome] = []

        with log_context(run_id=run_id):
            logger.info(
                f"Checking {len(rows)} roster rows",
                extra={"event": "pipeline.run.started", "row_count": len(rows)},
            )

            for row in rows:
                outcomes.append(self.check_row(row))
                if progress is not None:
                    progress(len(outcomes), len(rows))

            result = RunResult(
                run_id=run_id,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                outcomes=outcomes,
            )

            counts = result.counts
            logger.info(
                "Pipeline run completed",
                extra={
                    "event": "pipeline.run.completed",
                    "duration_ms": int(result.total_duration_seconds * 1000),
                    "total_rows": result.total_rows,
                    "no_change": counts[Verdict.NO_CHANGE],
                    "needs_review": counts[Verdict.NEEDS_REVIEW],
                    "errors": counts[Verdict.ERROR],
                },
            )

        return result

    def check_row(self, row: RosterRow) -> RowOutcome:
        """
        Check a single row. Never raises for row-level problems.

        Args:
            row: Roster row to check

        Returns:
            RowOutcome with the row's verdict
        """
        row_start = time.monotonic()

        with log_context(row_number=row.row_number, profile_url=row.profile_url or None):
            try:
                check_row(row)
                profile = self.scraper.fetch_profile(row.profile_url)
                match_result = self.matcher.evaluate(profile, row.expected_company)
                outcome = RowOutcome(
                    row=row,
                    verdict=match_result.verdict,
                    match_result=match_result,
                )
            except InputError as e:
                logger.warning(
                    f"Row {row.row_number} needs review: {e}",
                    extra={"event": "pipeline.row.incomplete", "missing": ",".join(e.fields)},
                )
                outcome = self._failed(row, Verdict.NEEDS_REVIEW, e)
            except (ScrapeError, ParseError) as e:
                logger.error(
                    f"Error extracting from {row.profile_url}: {e}",
                    extra={"event": "pipeline.row.failed", "error_type": type(e).__name__},
                )
                outcome = self._failed(row, Verdict.ERROR, e)
            except Exception as e:
                logger.error(
                    f"Unexpected error checking row {row.row_number}: {e}",
                    extra={"event": "pipeline.row.failed", "error_type": type(e).__name__},
                    exc_info=True,
                )
                outcome = self._failed(row, Verdict.ERROR, e)

            outcome.duration_seconds = time.monotonic() - row_start

            logger.info(
                f"Row {row.row_number}: {outcome.verdict.value}",
                extra={
                    "event": "pipeline.row.completed",
                    "verdict": outcome.verdict.value,
                    "reason": outcome.reason,
                    "duration_ms": int(outcome.duration_seconds * 1000),
                },
            )

        return outcome

    @staticmethod
    def _failed(row: RosterRow, verdict: Verdict, error: Exception) -> RowOutcome:
        return RowOutcome(
            row=row,
            verdict=verdict,
            error_type=type(error).__name__,
            error_message=str(error),
        )
