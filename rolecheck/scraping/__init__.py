"""Scrape layer: browser session and profile scrapers.

The comparison core only depends on ProfileScraper.fetch_profile(); every
DOM-specific detail lives in this package.

    from rolecheck.scraping import BrowserSession, LinkedInProfileScraper

    with BrowserSession(config.browser) as session:
        session.authenticate(credentials)
        profile = LinkedInProfileScraper(session).fetch_profile(url)
"""

from .base import ProfileScraper
from .exceptions import LoginError, ScrapeError
from .layouts import ExperienceLayout, classify_experience, education_from_spans, role_from_spans
from .linkedin import LinkedInProfileScraper
from .session import BrowserSession, Credentials

__all__ = [
    # Contract
    "ProfileScraper",
    # Implementations
    "BrowserSession",
    "Credentials",
    "LinkedInProfileScraper",
    # Layouts
    "ExperienceLayout",
    "classify_experience",
    "education_from_spans",
    "role_from_spans",
    # Exceptions
    "LoginError",
    "ScrapeError",
]
