"""Report rendering using Jinja2.

The report body is the ordered list of verdict labels, one per roster row.
A separate one-line summary (counts and runtime) is rendered for the
operator's terminal.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from rolecheck.config.models import LabelStyle, ReportConfig, ReportFormat
from rolecheck.domain.models import Verdict
from rolecheck.logging import get_logger
from rolecheck.pipeline.models import RunResult
from rolecheck.utils.timestamps import format_duration, format_timestamp

from .exceptions import ReportRenderError, ReportWriteError
from .labels import labels_for

logger = get_logger(__name__, component="reporting")

REPORT_TEMPLATES: Dict[ReportFormat, str] = {
    ReportFormat.JSON: "report.json.j2",
    ReportFormat.LINES: "report.lines.j2",
}
SUMMARY_TEMPLATE = "summary.txt.j2"


def _pretty_json(value) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


class ReportRenderer:
    """Renders run results as a report and a summary line.

    Templates are loaded from the rolecheck.reporting templates package
    and cached by the Jinja2 environment.
    """

    def __init__(
        self,
        report_format: Union[ReportFormat, str] = ReportFormat.JSON,
        labels: Union[LabelStyle, str] = LabelStyle.REVIEW,
        template_dir: str = "templates",
    ):
        """Initialize renderer.

        Args:
            report_format: json or lines
            labels: Label style for verdicts
            template_dir: Directory name within the rolecheck.reporting package
        """
        self.report_format = ReportFormat(report_format)
        self.labels = LabelStyle(labels)

        self.env = Environment(
            loader=PackageLoader("rolecheck.reporting", template_dir),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["pretty_json"] = _pretty_json

    @classmethod
    def from_config(cls, config: ReportConfig) -> "ReportRenderer":
        return cls(report_format=config.format, labels=config.labels)

    def check_templates(self) -> None:
        """Load the report and summary templates so syntax errors surface before a run.

        Raises:
            ReportRenderError: If a template is missing or invalid
        """
        for template_name in (REPORT_TEMPLATES[self.report_format], SUMMARY_TEMPLATE):
            try:
                self.env.get_template(template_name)
            except TemplateError as e:
                raise ReportRenderError(f"Cannot load report template {template_name}: {e}") from e

    def build_context(self, result: RunResult) -> Dict:
        """Build template context from a run result."""
        counts = result.counts
        return {
            "labels": labels_for(result.verdicts, self.labels),
            "total": result.total_rows,
            "no_change": counts[Verdict.NO_CHANGE],
            "needs_review": counts[Verdict.NEEDS_REVIEW],
            "errors": counts[Verdict.ERROR],
            "runtime": format_duration(result.total_duration_seconds),
            "started_at": format_timestamp(result.run_started_at),
            "run_id": result.run_id,
        }

    def render(self, result: RunResult) -> str:
        """Render the report body.

        Raises:
            ReportRenderError: If template rendering fails
        """
        return self._render(REPORT_TEMPLATES[self.report_format], self.build_context(result))

    def render_summary(self, result: RunResult) -> str:
        """Render the one-line run summary (no trailing newline)."""
        return self._render(SUMMARY_TEMPLATE, self.build_context(result)).strip()

    def _render(self, template_name: str, context: Dict) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Report rendering failed: {e}"
            logger.error(error_msg, extra={"event": "report.render.failed"}, exc_info=True)
            raise ReportRenderError(error_msg) from e


def _write_error(output_path: Path, error: OSError) -> ReportWriteError:
    return ReportWriteError(
        f"Cannot write report to {output_path}",
        errors=[str(error)],
        suggestions=[
            "Check that the directory exists and is writable",
            "Omit --output to print the report to stdout",
        ],
    )


def prepare_output(path: Union[str, Path]) -> Path:
    """Check that the report destination can be opened, creating it if needed.

    Opens in append mode so an existing file keeps its content until the
    report is written.

    Raises:
        ReportWriteError: If the file cannot be opened for writing
    """
    output_path = Path(path)
    try:
        with open(output_path, "a", encoding="utf-8"):
            pass
    except OSError as e:
        raise _write_error(output_path, e) from e
    return output_path


def write_report(text: str, path: Union[str, Path]) -> Path:
    """Write a rendered report to a file.

    Args:
        text: Rendered report
        path: Destination file (parent directories must exist)

    Returns:
        The resolved output path

    Raises:
        ReportWriteError: If the file cannot be opened or written
    """
    output_path = Path(path)
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise _write_error(output_path, e) from e

    logger.info(
        f"Report written to {output_path}",
        extra={"event": "report.written", "path": str(output_path)},
    )
    return output_path
