"""Browser session management.

BrowserSession owns the Playwright driver, one Chromium browser, one context,
and the single page every profile visit goes through. It is created once per
run, passed explicitly to the scraper, and closed on exit.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from rolecheck.config.models import BrowserConfig
from rolecheck.logging import get_logger

from .exceptions import LoginError

logger = get_logger(__name__, component="browser")

USERNAME_SELECTOR = "#username"
PASSWORD_SELECTOR = "#password"
SUBMIT_SELECTOR = 'button[type="submit"]'

TWO_FACTOR_PROMPT = (
    "Please complete the 2FA process in the browser window.\n"
    "Press Enter to continue after completing 2FA."
)


@dataclass(frozen=True)
class Credentials:
    """Login credentials for the networking site."""

    email: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, password='***')"


def stderr_prompt(message: str) -> str:
    """Show a prompt on stderr and wait for a line on stdin."""
    print(message, file=sys.stderr, flush=True)
    return sys.stdin.readline()


class BrowserSession:
    """Authenticated browser session shared by all profile visits.

    Use as a context manager:

        with BrowserSession(config.browser) as session:
            session.authenticate(credentials)
            scraper = LinkedInProfileScraper(session, config.browser)

    Attributes:
        config: Browser settings
        restored_state: True when cookies were loaded from storage_state_path
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        playwright_factory: Callable = sync_playwright,
    ) -> None:
        self.config = config or BrowserConfig()
        self._playwright_factory = playwright_factory
        self._playwright = None
        self._browser = None
        self._context = None
        self._page: Optional[Page] = None
        self.restored_state = False

    @property
    def storage_state_file(self) -> Optional[Path]:
        if not self.config.storage_state_path:
            return None
        return Path(self.config.storage_state_path).expanduser()

    @property
    def page(self) -> Page:
        """The shared page. Raises LoginError if the session was not started."""
        if self._page is None:
            raise LoginError(
                "Browser session is not started",
                suggestions=["Use BrowserSession as a context manager or call start()"],
            )
        return self._page

    def start(self) -> "BrowserSession":
        """Launch Chromium and open the shared page.

        Raises:
            LoginError: If the browser cannot be launched
        """
        state_file = self.storage_state_file
        try:
            self._playwright = self._playwright_factory().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.config.headless,
                slow_mo=self.config.slow_mo_ms or None,
            )
            if state_file is not None and state_file.exists():
                self._context = self._browser.new_context(storage_state=str(state_file))
                self.restored_state = True
            else:
                self._context = self._browser.new_context()
            self._context.set_default_timeout(self.config.selector_timeout_ms)
            self._page = self._context.new_page()
        except PlaywrightError as e:
            self.close()
            raise LoginError(
                f"Failed to launch browser: {e}",
                suggestions=["Run 'playwright install chromium' to install the browser"],
            ) from e

        logger.info(
            "Browser session started",
            extra={
                "event": "browser.session.started",
                "headless": self.config.headless,
                "restored_state": self.restored_state,
            },
        )
        return self

    def close(self) -> None:
        """Close the browser and stop the driver. Safe to call twice."""
        for resource, closer in ((self._browser, "close"), (self._playwright, "stop")):
            if resource is None:
                continue
            try:
                getattr(resource, closer)()
            except PlaywrightError as e:
                logger.warning(
                    f"Error while closing browser session: {e}",
                    extra={"event": "browser.session.close_failed"},
                )
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None

    def __enter__(self) -> "BrowserSession":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def authenticate(
        self,
        credentials: Optional[Credentials],
        prompt: Callable[[str], object] = stderr_prompt,
    ) -> None:
        """Make sure the session is logged in.

        A session restored from saved state skips the login form. Otherwise the
        form is submitted with the credentials, the operator is asked to finish
        2FA when configured, and the resulting cookies are saved.

        Raises:
            LoginError: If no credentials are available or the login fails
        """
        if self.restored_state:
            logger.info(
                "Using saved browser state, skipping login",
                extra={"event": "browser.login.skipped"},
            )
            return

        if credentials is None:
            raise LoginError(
                "No login credentials available",
                suggestions=[
                    "Set LI_EMAIL and LI_PASSWORD in the environment or .env file",
                    "Or point browser.storage_state_path at a saved session",
                ],
            )

        self.login(credentials)

        if self.config.manual_2fa:
            self.wait_for_manual_2fa(prompt)

        self.save_state()

    def login(self, credentials: Credentials) -> None:
        """Fill and submit the login form.

        Raises:
            LoginError: If the form cannot be found or submitted
        """
        page = self.page
        try:
            page.goto(self.config.login_url)
            page.wait_for_selector(USERNAME_SELECTOR)
            page.wait_for_selector(PASSWORD_SELECTOR)
            page.fill(USERNAME_SELECTOR, credentials.email)
            page.fill(PASSWORD_SELECTOR, credentials.password)
            page.click(SUBMIT_SELECTOR)
        except PlaywrightError as e:
            raise LoginError(
                f"Login failed: {e}",
                suggestions=[
                    f"Check that {self.config.login_url} shows the login form",
                    "Increase browser.selector_timeout_ms on slow connections",
                ],
            ) from e

        logger.info("Login form submitted", extra={"event": "browser.login.submitted"})

    def wait_for_manual_2fa(self, prompt: Callable[[str], object] = stderr_prompt) -> None:
        """Block until the operator confirms 2FA is complete."""
        logger.info("Waiting for manual 2FA", extra={"event": "browser.login.awaiting_2fa"})
        prompt(TWO_FACTOR_PROMPT)

    def save_state(self) -> None:
        """Write cookies and local storage to storage_state_path, if configured."""
        state_file = self.storage_state_file
        if state_file is None or self._context is None:
            return
        try:
            state_file.parent.mkdir(parents=True, exist_ok=True)
            self._context.storage_state(path=str(state_file))
        except (PlaywrightError, OSError) as e:
            logger.warning(
                f"Could not save browser state to {state_file}: {e}",
                extra={"event": "browser.state.save_failed"},
            )
            return

        logger.info(
            "Browser state saved",
            extra={"event": "browser.state.saved", "path": str(state_file)},
        )
