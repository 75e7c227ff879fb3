"""Unit tests for the pipeline runner.

Tests the RoleCheckPipeline orchestration including:
- One outcome per roster row, in roster order
- Incomplete rows flagged for review without scraping
- Error isolation (a failing row doesn't stop the others)
- Progress reporting
- Verdict counts and run timing
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from rolecheck.config.models import MatchingConfig
from rolecheck.domain.models import ProfileRecord, RoleEntry, RosterRow, Verdict
from rolecheck.matching import RoleMatcher
from rolecheck.normalization.exceptions import ParseError
from rolecheck.pipeline import RoleCheckPipeline, RowOutcome, RunResult
from rolecheck.roster.exceptions import InputError
from rolecheck.scraping.base import ProfileScraper
from rolecheck.scraping.exceptions import ScrapeError
from tests.helpers import FixtureScraper

ACME_URL = "https://www.linkedin.com/in/acme-person/"
GLOBEX_URL = "https://www.linkedin.com/in/globex-person/"
BROKEN_URL = "https://www.linkedin.com/in/broken/"


@pytest.fixture
def scraper():
    return FixtureScraper(
        {
            ACME_URL: {
                "first_name": "Jane",
                "last_name": "Doe",
                "experience": [{"title": "Engineer", "company": "Acme, Inc.", "end_date": None}],
            },
            GLOBEX_URL: {
                "first_name": "John",
                "last_name": "Roe",
                "experience": [
                    {"title": "Director", "company": "Globex", "end_date": None},
                    {"title": "Manager", "company": "Acme", "end_date": "2022"},
                ],
            },
            BROKEN_URL: {"error": "Experience section not found"},
        }
    )


def row(number, url="", company=""):
    return RosterRow(row_number=number, profile_url=url, expected_company=company)


class TestRoleCheckPipeline:
    def test_outcomes_match_rows(self, scraper):
        rows = [
            row(1, ACME_URL, "Acme"),
            row(2, GLOBEX_URL, "Acme"),
            row(3, BROKEN_URL, "Acme"),
        ]

        result = RoleCheckPipeline(scraper).run(rows)

        assert isinstance(result, RunResult)
        assert len(result.outcomes) == len(rows)
        assert [outcome.row for outcome in result.outcomes] == rows
        assert result.verdicts == [Verdict.NO_CHANGE, Verdict.NEEDS_REVIEW, Verdict.ERROR]

    def test_incomplete_rows_are_not_scraped(self, scraper):
        rows = [row(1, "", "Acme"), row(2, ACME_URL, ""), row(3, ACME_URL, "Acme")]

        result = RoleCheckPipeline(scraper).run(rows)

        assert result.verdicts == [Verdict.NEEDS_REVIEW, Verdict.NEEDS_REVIEW, Verdict.NO_CHANGE]
        assert scraper.requested == [ACME_URL]
        assert result.outcomes[0].error_type == "InputError"
        assert result.outcomes[1].match_result is None

    def test_scrape_error_recorded(self, scraper):
        result = RoleCheckPipeline(scraper).run([row(1, BROKEN_URL, "Acme")])

        outcome = result.outcomes[0]
        assert outcome.verdict == Verdict.ERROR
        assert outcome.failed
        assert outcome.error_type == "ScrapeError"
        assert outcome.reason == "Experience section not found"
        assert result.had_errors

    def test_parse_error_is_an_error_verdict(self):
        failing = MagicMock(spec=ProfileScraper)
        failing.fetch_profile.side_effect = ParseError("Cannot parse name from ''", field="name")

        result = RoleCheckPipeline(failing).run([row(1, ACME_URL, "Acme")])

        assert result.verdicts == [Verdict.ERROR]
        assert result.outcomes[0].error_type == "ParseError"

    def test_unexpected_exception_does_not_stop_run(self, scraper):
        flaky = MagicMock(spec=ProfileScraper)
        flaky.fetch_profile.side_effect = [
            RuntimeError("browser crashed"),
            scraper.fetch_profile(ACME_URL),
        ]

        result = RoleCheckPipeline(flaky).run([row(1, ACME_URL, "Acme"), row(2, ACME_URL, "Acme")])

        assert result.verdicts == [Verdict.ERROR, Verdict.NO_CHANGE]
        assert result.outcomes[0].error_type == "RuntimeError"
        assert result.outcomes[0].error_message == "browser crashed"

    def test_duplicate_rows_checked_independently(self, scraper):
        rows = [row(1, ACME_URL, "Acme"), row(2, ACME_URL, "Globex")]

        result = RoleCheckPipeline(scraper).run(rows)

        assert result.verdicts == [Verdict.NO_CHANGE, Verdict.NEEDS_REVIEW]
        assert scraper.requested == [ACME_URL, ACME_URL]

    def test_progress_called_after_each_row(self, scraper):
        progress = MagicMock()
        rows = [row(1, ACME_URL, "Acme"), row(2, "", "Acme"), row(3, BROKEN_URL, "Acme")]

        RoleCheckPipeline(scraper).run(rows, progress=progress)

        assert [c.args for c in progress.call_args_list] == [(1, 3), (2, 3), (3, 3)]

    def test_empty_roster(self, scraper):
        result = RoleCheckPipeline(scraper).run([])

        assert result.outcomes == []
        assert result.total_rows == 0
        assert not result.had_errors

    def test_uses_given_matcher(self, scraper):
        most_recent = RoleMatcher(MatchingConfig(policy="most-recent"))
        rows = [row(1, GLOBEX_URL, "Globex")]

        result = RoleCheckPipeline(scraper, most_recent).run(rows)

        assert result.verdicts == [Verdict.NO_CHANGE]

    def test_counts(self, scraper):
        rows = [
            row(1, ACME_URL, "Acme"),
            row(2, GLOBEX_URL, "Acme"),
            row(3, "", ""),
            row(4, BROKEN_URL, "Acme"),
        ]

        counts = RoleCheckPipeline(scraper).run(rows).counts

        assert counts == {Verdict.NO_CHANGE: 1, Verdict.NEEDS_REVIEW: 2, Verdict.ERROR: 1}

    def test_row_logs_carry_context(self, scraper, caplog):
        caplog.set_level("INFO", logger="rolecheck.pipeline.runner")

        RoleCheckPipeline(scraper).run([row(1, BROKEN_URL, "Acme")])

        events = [getattr(record, "event", None) for record in caplog.records]
        assert "pipeline.run.started" in events
        assert "pipeline.row.failed" in events
        assert "pipeline.run.completed" in events
        failed = next(r for r in caplog.records if getattr(r, "event", None) == "pipeline.row.failed")
        assert BROKEN_URL in failed.getMessage()
        assert failed.component == "pipeline"


class TestModels:
    def test_run_result_computes_duration(self):
        started = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
        result = RunResult(run_id="r1", run_started_at=started, run_finished_at=started + timedelta(seconds=90))

        assert result.total_duration_seconds == 90.0

    def test_counts_include_every_verdict(self):
        now = datetime.now(timezone.utc)
        result = RunResult(run_id="r1", run_started_at=now, run_finished_at=now)

        assert result.counts == {Verdict.NO_CHANGE: 0, Verdict.NEEDS_REVIEW: 0, Verdict.ERROR: 0}

    def test_row_outcome_reason_falls_back_to_error(self):
        outcome = RowOutcome(row=row(1), verdict=Verdict.NEEDS_REVIEW, error_message="missing")
        assert outcome.reason == "missing"
        assert not outcome.failed

    def test_input_error_message(self):
        error = InputError(3, ["expected_company"])
        outcome = RoleCheckPipeline._failed(row(3), Verdict.NEEDS_REVIEW, error)

        assert outcome.error_type == "InputError"
        assert "expected_company" in outcome.error_message


def test_fixture_scraper_unknown_url():
    with pytest.raises(ScrapeError):
        FixtureScraper({}).fetch_profile("https://www.linkedin.com/in/nobody/")


def test_profile_record_roundtrip_through_fixture(scraper):
    profile = scraper.fetch_profile(GLOBEX_URL)

    assert isinstance(profile, ProfileRecord)
    assert profile.experience[1] == RoleEntry(title="Manager", company="Acme", end_date="2022")
