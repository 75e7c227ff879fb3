"""Shared pytest fixtures."""

import pytest

from rolecheck.domain.models import ProfileRecord, RoleEntry
from rolecheck.logging.context import clear_log_context

ENV_VARS = ("LI_EMAIL", "LI_PASSWORD", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove role checker environment variables for the duration of a test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def reset_log_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def make_profile():
    """Build a ProfileRecord from (title, company, end_date) tuples."""

    def _make(*roles, first_name="Jane", last_name="Doe"):
        return ProfileRecord(
            first_name=first_name,
            last_name=last_name,
            experience=[
                RoleEntry(title=title, company=company, start_date="Jan 2020", end_date=end_date)
                for title, company, end_date in roles
            ],
        )

    return _make
