"""Exceptions for report rendering and output."""

from rolecheck.exceptions import RoleCheckError


class ReportRenderError(RoleCheckError):
    """Raised when a report template fails to render."""


class ReportWriteError(RoleCheckError):
    """Raised when the report cannot be written to its destination."""
