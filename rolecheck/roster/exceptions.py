"""Exceptions for roster (CSV input) handling."""

from typing import List, Optional

from rolecheck.exceptions import RoleCheckError


class RosterError(RoleCheckError):
    """The roster file cannot be used at all (unreadable, missing columns).

    This is batch-fatal: no rows are checked.
    """


class InputError(ValueError):
    """A single roster row is missing a required cell.

    Row-level: the row is reported as needing review and the run continues.

    Attributes:
        row_number: 1-based data row index
        fields: Names of the blank required cells
    """

    def __init__(self, row_number: int, fields: Optional[List[str]] = None) -> None:
        self.row_number = row_number
        self.fields = fields or []
        super().__init__(
            f"Row {row_number} is missing required values: {', '.join(self.fields) or 'unknown'}"
        )
