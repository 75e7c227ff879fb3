"""Roster (input CSV) loading."""

from .exceptions import InputError, RosterError
from .reader import check_row, read_roster

__all__ = [
    "InputError",
    "RosterError",
    "check_row",
    "read_roster",
]
