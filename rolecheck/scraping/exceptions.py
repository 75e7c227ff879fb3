"""Custom exceptions for the scrape layer."""

from rolecheck.exceptions import RoleCheckError


class ScrapeError(Exception):
    """A single profile could not be retrieved or parsed.

    Recoverable: the pipeline records an ERROR verdict for the row and moves
    on to the next one.
    """

    def __init__(self, message: str, url: str = "") -> None:
        """Initialize scrape error with the offending URL.

        Args:
            message: Human-readable error message
            url: Profile URL that failed
        """
        super().__init__(message)
        self.url = url


class LoginError(RoleCheckError):
    """The browser could not be started or the session could not log in.

    Batch-fatal: without an authenticated session no profile can be checked.
    """
