"""Roster role checker."""

__version__ = "0.1.0"
