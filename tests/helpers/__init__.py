"""Test helper utilities for role checker tests."""

from .fixture_scraper import FixtureScraper, load_fixture_profiles

__all__ = ["FixtureScraper", "load_fixture_profiles"]
