"""Unit tests for the main entry point.

Tests the main() function including:
- Configuration loading with priority (CLI > env > config)
- CLI overrides for report, matching and browser options
- Report output to stdout or a file
- Exit code handling
- Error handling
"""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from rolecheck.config.environment import EnvironmentConfig
from rolecheck.config.exceptions import ConfigurationError
from rolecheck.config.models import AppConfig, LoggingConfig
from rolecheck.domain.models import RosterRow, Verdict
from rolecheck.main import (
    apply_cli_overrides,
    build_parser,
    load_runtime_config,
    main,
    report_progress,
    run_check,
)
from rolecheck.pipeline.models import RowOutcome, RunResult
from rolecheck.reporting import ReportRenderError, ReportWriteError
from rolecheck.scraping.exceptions import LoginError
from tests.helpers import FixtureScraper

ACME_URL = "https://www.linkedin.com/in/jane-doe/"


@pytest.fixture
def roster_csv(tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text(
        "LinkedIn URL,Company\n"
        f"{ACME_URL},Acme\n"
        ",Acme\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def isolated(tmp_path, monkeypatch, clean_env):
    """Run from an empty directory with no role checker env vars."""
    monkeypatch.chdir(tmp_path)
    with patch("rolecheck.main.configure_logging"):
        yield


def make_result(*verdicts):
    now = datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc)
    outcomes = [RowOutcome(row=RosterRow(row_number=i), verdict=v) for i, v in enumerate(verdicts, start=1)]
    return RunResult(run_id="abc123", run_started_at=now, run_finished_at=now, outcomes=outcomes)


class TestLoadRuntimeConfig:
    """Test suite for load_runtime_config helper."""

    @pytest.mark.parametrize(
        "cli_level,env_level,config_level,expected",
        [
            ("ERROR", "DEBUG", "WARNING", "ERROR"),
            (None, "DEBUG", "WARNING", "DEBUG"),
            (None, None, "WARNING", "WARNING"),
        ],
    )
    def test_log_level_priority(self, cli_level, env_level, config_level, expected):
        app_config = AppConfig(logging=LoggingConfig(level=config_level))
        env_config = EnvironmentConfig(log_level=env_level)

        with patch("rolecheck.main.load_config", return_value=(app_config, env_config)) as mock_load:
            _, loaded_env = load_runtime_config(None, cli_level)

        mock_load.assert_called_once_with(None)
        assert loaded_env.log_level == expected

    def test_configuration_error_propagates(self):
        with patch("rolecheck.main.load_config", side_effect=ConfigurationError("bad")):
            with pytest.raises(ConfigurationError):
                load_runtime_config(None, None)


class TestCliOverrides:
    def test_no_flags_keeps_config(self):
        app_config = AppConfig()
        args = build_parser().parse_args(["roster.csv"])

        assert apply_cli_overrides(app_config, args) is app_config

    def test_flags_override_config(self):
        args = build_parser().parse_args(
            ["roster.csv", "--format", "lines", "--labels", "new-role", "--policy", "most-recent", "--headless"]
        )

        updated = apply_cli_overrides(AppConfig(), args)

        assert updated.report.format == "lines"
        assert updated.report.labels == "new-role"
        assert updated.matching.policy == "most-recent"
        assert updated.browser.headless is True
        assert updated.roster == AppConfig().roster

    def test_invalid_choice_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["roster.csv", "--format", "xml"])


class TestMain:
    def test_success_prints_json_report(self, isolated, roster_csv, capsys):
        result = make_result(Verdict.NO_CHANGE, Verdict.NEEDS_REVIEW)

        with patch("rolecheck.main.run_check", return_value=result) as mock_run:
            exit_code = main([str(roster_csv)])

        assert exit_code == 0
        rows = mock_run.call_args.args[0]
        assert [row.profile_url for row in rows] == [ACME_URL, ""]
        captured = capsys.readouterr()
        assert json.loads(captured.out) == ["no change", "REVIEW"]
        assert "Complete! 2 profiles reviewed" in captured.err
        assert "runtime:" in captured.err

    def test_row_errors_do_not_change_exit_code(self, isolated, roster_csv, capsys):
        with patch("rolecheck.main.run_check", return_value=make_result(Verdict.ERROR, Verdict.ERROR)):
            assert main([str(roster_csv)]) == 0

        assert json.loads(capsys.readouterr().out) == ["ERROR, REVIEW", "ERROR, REVIEW"]

    def test_output_file_and_lines_format(self, isolated, roster_csv, tmp_path, capsys):
        output = tmp_path / "verdicts.txt"

        with patch("rolecheck.main.run_check", return_value=make_result(Verdict.NO_CHANGE, Verdict.NEEDS_REVIEW)):
            exit_code = main([str(roster_csv), "--output", str(output), "--format", "lines", "--labels", "new-role"])

        assert exit_code == 0
        assert output.read_text(encoding="utf-8") == "\nnew role\n"
        assert capsys.readouterr().out == ""

    def test_cli_policy_reaches_run_check(self, isolated, roster_csv):
        with patch("rolecheck.main.run_check", return_value=make_result()) as mock_run:
            main([str(roster_csv), "--policy", "most-recent"])

        app_config = mock_run.call_args.args[1]
        assert app_config.matching.policy == "most-recent"

    def test_missing_roster(self, isolated, tmp_path, capsys):
        with patch("rolecheck.main.run_check") as mock_run:
            exit_code = main([str(tmp_path / "missing.csv")])

        assert exit_code == 1
        mock_run.assert_not_called()
        assert "Roster file not found" in capsys.readouterr().err

    def test_configuration_error(self, isolated, roster_csv, tmp_path, capsys):
        exit_code = main([str(roster_csv), "--config", str(tmp_path / "nope.yaml")])

        assert exit_code == 1
        assert "Configuration Error" in capsys.readouterr().err

    def test_login_error(self, isolated, roster_csv, capsys):
        with patch("rolecheck.main.run_check", side_effect=LoginError("No login credentials available")):
            exit_code = main([str(roster_csv)])

        assert exit_code == 1
        assert "No login credentials available" in capsys.readouterr().err

    def test_unwritable_output_fails_before_scraping(self, isolated, roster_csv, tmp_path, capsys):
        scraper = FixtureScraper({ACME_URL: {"experience": [{"title": "Engineer", "company": "Acme"}]}})
        session_factory = MagicMock()

        with patch("rolecheck.main.BrowserSession", session_factory), patch(
            "rolecheck.main.LinkedInProfileScraper", return_value=scraper
        ):
            exit_code = main([str(roster_csv), "--output", str(tmp_path / "no-dir" / "out.json")])

        assert exit_code == 1
        assert scraper.requested == []
        session_factory.assert_not_called()
        captured = capsys.readouterr()
        assert "Cannot write report" in captured.err
        assert captured.out == ""

    def test_late_write_failure_still_prints_report(self, isolated, roster_csv, tmp_path, capsys):
        output = tmp_path / "verdicts.json"

        with patch("rolecheck.main.run_check", return_value=make_result(Verdict.NO_CHANGE, Verdict.ERROR)), patch(
            "rolecheck.main.write_report", side_effect=ReportWriteError(f"Cannot write report to {output}")
        ):
            exit_code = main([str(roster_csv), "--output", str(output)])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert json.loads(captured.out) == ["no change", "ERROR, REVIEW"]
        assert "Cannot write report" in captured.err

    def test_render_failure_prints_plain_labels(self, isolated, roster_csv, capsys):
        with patch("rolecheck.main.run_check", return_value=make_result(Verdict.NO_CHANGE, Verdict.NEEDS_REVIEW)), patch(
            "rolecheck.main.ReportRenderer.render", side_effect=ReportRenderError("Report rendering failed")
        ):
            exit_code = main([str(roster_csv)])

        assert exit_code == 1
        assert capsys.readouterr().out == "no change\nREVIEW\n"

    def test_existing_output_is_replaced(self, isolated, roster_csv, tmp_path):
        output = tmp_path / "verdicts.txt"
        output.write_text("stale\n", encoding="utf-8")

        with patch("rolecheck.main.run_check", return_value=make_result(Verdict.NEEDS_REVIEW)):
            assert main([str(roster_csv), "--output", str(output), "--format", "lines"]) == 0

        assert output.read_text(encoding="utf-8") == "REVIEW\n"

    def test_validate_config_flag(self, isolated, tmp_path, capsys):
        good = tmp_path / "good.yaml"
        good.write_text("report:\n  format: lines\n", encoding="utf-8")
        bad = tmp_path / "bad.yaml"
        bad.write_text("report:\n  format: xml\n", encoding="utf-8")

        with patch("rolecheck.main.run_check") as mock_run:
            assert main(["--validate-config", str(good)]) == 0
            assert main(["--validate-config", str(bad)]) == 1

        mock_run.assert_not_called()
        assert "is valid" in capsys.readouterr().out

    def test_csv_path_required_without_validate_config(self, isolated):
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2

    def test_keyboard_interrupt(self, isolated, roster_csv, capsys):
        with patch("rolecheck.main.run_check", side_effect=KeyboardInterrupt):
            exit_code = main([str(roster_csv)])

        assert exit_code == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_unexpected_exception(self, isolated, roster_csv, capsys):
        with patch("rolecheck.main.run_check", side_effect=RuntimeError("boom")):
            exit_code = main([str(roster_csv)])

        assert exit_code == 1
        assert "Fatal error: boom" in capsys.readouterr().err


class TestRunCheck:
    def test_checks_rows_through_session(self):
        session = MagicMock()
        session_factory = MagicMock()
        session_factory.return_value.__enter__.return_value = session
        scraper = FixtureScraper({ACME_URL: {"experience": [{"title": "Engineer", "company": "Acme, Inc."}]}})
        env_config = EnvironmentConfig(li_email="recruiter@example.com", li_password="hunter2")
        prompt = MagicMock()
        rows = [RosterRow(row_number=1, profile_url=ACME_URL, expected_company="Acme")]

        with patch("rolecheck.main.LinkedInProfileScraper", return_value=scraper):
            result = run_check(rows, AppConfig(), env_config, session_factory=session_factory, prompt=prompt)

        assert result.verdicts == [Verdict.NO_CHANGE]
        credentials = session.authenticate.call_args.args[0]
        assert credentials.email == "recruiter@example.com"
        assert session.authenticate.call_args.kwargs["prompt"] is prompt
        session_factory.return_value.__exit__.assert_called_once()

    def test_without_credentials_passes_none(self):
        session = MagicMock()
        session_factory = MagicMock()
        session_factory.return_value.__enter__.return_value = session
        rows = [RosterRow(row_number=1, expected_company="Acme")]

        with patch("rolecheck.main.LinkedInProfileScraper", return_value=FixtureScraper({})):
            result = run_check(rows, AppConfig(), EnvironmentConfig(), session_factory=session_factory)

        assert session.authenticate.call_args.args[0] is None
        assert result.verdicts == [Verdict.NEEDS_REVIEW]

    def test_empty_roster_skips_browser(self):
        session_factory = MagicMock()

        result = run_check([], AppConfig(), EnvironmentConfig(), session_factory=session_factory)

        session_factory.assert_not_called()
        assert result.outcomes == []


def test_report_progress(capsys):
    report_progress(1, 2)
    report_progress(2, 2)

    assert capsys.readouterr().err == "\r1 profiles reviewed\r2 profiles reviewed\n"
