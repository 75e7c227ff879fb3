"""Base scraper contract.

The comparison core depends only on this interface: a URL goes in, a
ProfileRecord comes out, or ScrapeError is raised. How the page is rendered
or how the session authenticated is the implementation's concern.
"""

from abc import ABC, abstractmethod

from rolecheck.domain.models import ProfileRecord


class ProfileScraper(ABC):
    """Base class for profile scrapers."""

    @abstractmethod
    def fetch_profile(self, profile_url: str) -> ProfileRecord:
        """Retrieve and structure a single profile.

        Args:
            profile_url: Absolute profile URL

        Returns:
            ProfileRecord with experience entries in page order

        Raises:
            ScrapeError: If the profile cannot be retrieved or parsed
        """
