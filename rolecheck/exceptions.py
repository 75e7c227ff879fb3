"""Base exception for batch-fatal errors.

Errors derived from RoleCheckError stop a run before or after the row loop
(bad configuration, unreadable CSV, failed login, unwritable report). They
carry optional detail lines and suggestions for the operator.
Row-level problems never use these classes; they become verdicts.
"""

from typing import List, Optional


class RoleCheckError(Exception):
    """
    Exception for conditions that abort the whole run.

    This exception can store multiple detail lines and format them
    in a human-readable way with helpful suggestions.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize RoleCheckError.

        Args:
            message: Primary error message
            errors: List of specific errors
            suggestions: List of helpful suggestions to fix the errors
        """
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with all errors and suggestions."""
        parts = [self.message]

        if self.errors:
            parts.append("\nErrors:")
            for i, error in enumerate(self.errors, 1):
                parts.append(f"  {i}. {error}")

        if self.suggestions:
            parts.append("\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"  - {suggestion}")

        return "\n".join(parts)
