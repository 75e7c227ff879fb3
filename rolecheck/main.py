"""Main entry point for the roster role checker."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from rolecheck.config.environment import EnvironmentConfig
from rolecheck.config.exceptions import ConfigurationError
from rolecheck.config.loader import load_config, validate_config_file
from rolecheck.config.models import AppConfig, LabelStyle, MatchPolicy, ReportFormat
from rolecheck.domain.models import RosterRow
from rolecheck.exceptions import RoleCheckError
from rolecheck.logging import get_logger
from rolecheck.logging.config import configure_logging
from rolecheck.matching.engine import RoleMatcher
from rolecheck.pipeline import RoleCheckPipeline, RunResult
from rolecheck.reporting import (
    ReportRenderError,
    ReportRenderer,
    ReportWriteError,
    labels_for,
    prepare_output,
    write_report,
)
from rolecheck.roster import read_roster
from rolecheck.scraping import BrowserSession, Credentials, LinkedInProfileScraper
from rolecheck.scraping.session import stderr_prompt
from rolecheck.utils.timestamps import format_duration, utc_now

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rolecheck",
        description="Roster role checker - flags people whose current employer no longer matches the roster",
    )
    parser.add_argument(
        "csv_path",
        type=Path,
        nargs="?",
        default=None,
        help="Roster CSV with 'LinkedIn URL' and 'Company' columns",
    )
    parser.add_argument(
        "--validate-config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Validate a configuration file and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: rolecheck.yaml if present)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout",
    )
    parser.add_argument(
        "--format",
        default=None,
        choices=[f.value for f in ReportFormat],
        help="Report format (overrides config)",
    )
    parser.add_argument(
        "--labels",
        default=None,
        choices=[s.value for s in LabelStyle],
        help="Verdict label style (overrides config)",
    )
    parser.add_argument(
        "--policy",
        default=None,
        choices=[p.value for p in MatchPolicy],
        help="Which roles may match the expected company (overrides config)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        default=None,
        help="Run the browser without a window (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file, or None to search defaults
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Apply log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    elif app_config.logging and app_config.logging.level:
        env_config.log_level = app_config.logging.level
    else:
        env_config.log_level = "INFO"

    return app_config, env_config


def apply_cli_overrides(app_config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return a copy of app_config with CLI flags applied on top."""
    report_updates = {}
    if args.format:
        report_updates["format"] = args.format
    if args.labels:
        report_updates["labels"] = args.labels

    updates = {}
    if report_updates:
        updates["report"] = app_config.report.model_copy(update=report_updates)
    if args.policy:
        updates["matching"] = app_config.matching.model_copy(update={"policy": args.policy})
    if args.headless is not None:
        updates["browser"] = app_config.browser.model_copy(update={"headless": args.headless})

    if not updates:
        return app_config
    return app_config.model_copy(update=updates)


def emit_to_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def report_progress(done: int, total: int) -> None:
    """Overwrite a single progress line on stderr."""
    sys.stderr.write(f"\r{done} profiles reviewed")
    if done == total:
        sys.stderr.write("\n")
    sys.stderr.flush()


def run_check(
    rows: List[RosterRow],
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    session_factory: Optional[Callable[..., BrowserSession]] = None,
    prompt: Callable[[str], object] = stderr_prompt,
) -> RunResult:
    """
    Log in once and check every roster row through the shared browser page.

    An empty roster is checked without starting the browser.

    Raises:
        LoginError: If the browser cannot be launched or login fails
    """
    matcher = RoleMatcher(app_config.matching)
    session_factory = session_factory or BrowserSession

    if not rows:
        now = utc_now()
        logger.warning("Roster has no data rows", extra={"event": "roster.empty"})
        return RunResult(run_id="", run_started_at=now, run_finished_at=now)

    credentials = None
    if env_config.has_credentials:
        credentials = Credentials(email=env_config.li_email, password=env_config.li_password)

    with session_factory(app_config.browser) as session:
        session.authenticate(credentials, prompt=prompt)
        scraper = LinkedInProfileScraper(session, app_config.browser)
        pipeline = RoleCheckPipeline(scraper, matcher)
        return pipeline.run(rows, progress=report_progress)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the role checker.

    Returns:
        Exit code (0 when the run completed, 1 on fatal errors, 130 on Ctrl+C).
        Rows that failed to scrape are reported as verdicts and do not change the exit code.
    """
    start_time = time.monotonic()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.validate_config:
        return 0 if validate_config_file(args.validate_config) else 1
    if args.csv_path is None:
        parser.error("the following arguments are required: csv_path")

    try:
        # Step 1: Load configuration early (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        app_config = apply_cli_overrides(app_config, args)

        # Step 2: Configure logging
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        logger.info(
            "Role check starting",
            extra={
                "event": "service.starting",
                "csv_path": str(args.csv_path),
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "policy": app_config.matching.policy,
                "labels": app_config.report.labels,
                "report_format": app_config.report.format,
                "headless": app_config.browser.headless,
            },
        )

        # Step 3: Read roster and check the report destination (fatal if unusable)
        rows = read_roster(args.csv_path, app_config.roster)
        renderer = ReportRenderer.from_config(app_config.report)
        renderer.check_templates()
        if args.output:
            prepare_output(args.output)

        # Step 4: Check every row
        result = run_check(rows, app_config, env_config)

        # Step 5: Emit report; if it cannot be rendered or saved, print the verdicts anyway
        try:
            report = renderer.render(result)
        except ReportRenderError:
            emit_to_stdout("".join(f"{label}\n" for label in labels_for(result.verdicts, renderer.labels)))
            raise

        if args.output:
            try:
                write_report(report, args.output)
            except ReportWriteError:
                emit_to_stdout(report)
                raise
        else:
            emit_to_stdout(report)

        print(renderer.render_summary(result), file=sys.stderr)

        runtime_seconds = time.monotonic() - start_time
        print(f"runtime: {format_duration(runtime_seconds)}", file=sys.stderr)
        logger.info(
            "Role check finished",
            extra={
                "event": "service.stopping",
                "runtime_seconds": round(runtime_seconds, 2),
                "total_rows": result.total_rows,
                "had_errors": result.had_errors,
            },
        )
        return 0

    except ConfigurationError as e:
        # Configuration errors are already formatted nicely
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except RoleCheckError as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(
            f"Run aborted: {e.message}",
            extra={"event": "service.aborted", "error_type": type(e).__name__},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        # Unexpected fatal error
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error during run",
            extra={
                "event": "service.run.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
