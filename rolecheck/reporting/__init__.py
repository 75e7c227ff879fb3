"""Report rendering and output."""

from .exceptions import ReportRenderError, ReportWriteError
from .labels import LABEL_SETS, label_for, labels_for
from .renderer import ReportRenderer, prepare_output, write_report

__all__ = [
    "LABEL_SETS",
    "ReportRenderError",
    "ReportRenderer",
    "ReportWriteError",
    "label_for",
    "labels_for",
    "prepare_output",
    "write_report",
]
