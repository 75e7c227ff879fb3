"""LinkedIn profile scraper.

Visits a profile on the shared BrowserSession page and turns the rendered
markup into a ProfileRecord. Selectors are tied to the site's current markup
and are kept as class attributes so they can be updated in one place.
"""

from typing import List, Optional

from playwright.sync_api import ElementHandle
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from pydantic import ValidationError

from rolecheck.config.models import BrowserConfig
from rolecheck.domain.models import ContactInfo, EducationEntry, ProfileRecord, RoleEntry
from rolecheck.logging import get_logger
from rolecheck.normalization.dates import strip_trailing_detail
from rolecheck.normalization.exceptions import ParseError
from rolecheck.normalization.text import normalize_location, normalize_name, parse_contact_links

from .base import ProfileScraper
from .exceptions import ScrapeError
from .layouts import classify_experience, education_from_spans, role_from_spans
from .session import BrowserSession

logger = get_logger(__name__, component="scraper")


class LinkedInProfileScraper(ProfileScraper):
    """Scrapes name, location, contact, experience and education.

    Attributes:
        session: Authenticated BrowserSession
        config: Browser settings (timeouts)
    """

    NAME_SELECTOR = "h1"
    LOCATION_SELECTOR = ".text-body-small.inline.t-black--light.break-words"
    CONTACT_TRIGGER_SELECTOR = "#top-card-text-details-contact-info"
    CONTACT_SECTION_SELECTOR = ".pv-profile-section__section-info.section-info"
    CONTACT_LINK_SELECTOR = ".pv-profile-section__section-info.section-info a"
    CLOSE_OVERLAY_SELECTOR = 'svg use[href="#close-medium"]'
    EXPERIENCE_SECTION_SELECTOR = "section:has(div#experience)"
    EDUCATION_SECTION_SELECTOR = "section:has(div#education)"
    LIST_ITEM_SELECTOR = "li.artdeco-list__item"
    GROUPED_ROLE_SELECTOR = (
        "div.pvs-entity__sub-components li "
        "div.display-flex.flex-column.full-width.align-self-center"
    )
    GROUP_COMPANY_SELECTOR = 'a[data-field="experience_company_logo"] span'
    TEXT_SPAN_SELECTOR = 'span[aria-hidden="true"]'

    def __init__(self, session: BrowserSession, config: Optional[BrowserConfig] = None) -> None:
        self.session = session
        self.config = config or session.config

    def fetch_profile(self, profile_url: str) -> ProfileRecord:
        """Visit a profile and build its ProfileRecord.

        Raises:
            ScrapeError: On navigation/selector failures or unparseable content
        """
        logger.debug(
            f"Fetching profile {profile_url}",
            extra={"event": "scraper.profile.fetching", "profile_url": profile_url},
        )

        try:
            page = self.session.page
            page.goto(profile_url)

            first_name, last_name = normalize_name(self._required_text(self.NAME_SELECTOR))
            location = normalize_location(self._required_text(self.LOCATION_SELECTOR))
            contact = self._extract_contact()
            experience = self._extract_experience()
            education = self._extract_education()

            profile = ProfileRecord(
                first_name=first_name,
                last_name=last_name,
                location=location,
                contact=contact,
                experience=experience,
                education=education,
            )
        except ScrapeError:
            raise
        except PlaywrightTimeoutError as e:
            raise ScrapeError(f"Timed out waiting for page content: {e}", url=profile_url) from e
        except PlaywrightError as e:
            raise ScrapeError(f"Browser error: {e}", url=profile_url) from e
        except (ParseError, ValidationError) as e:
            raise ScrapeError(f"Could not parse profile: {e}", url=profile_url) from e

        logger.info(
            f"Scraped profile for {profile.full_name}",
            extra={
                "event": "scraper.profile.scraped",
                "profile_url": profile_url,
                "experience_count": len(profile.experience),
                "education_count": len(profile.education),
                "current_role_count": len(profile.current_roles()),
            },
        )
        return profile

    def _required_text(self, selector: str) -> str:
        element = self.session.page.wait_for_selector(selector, timeout=self.config.selector_timeout_ms)
        if element is None:
            raise ScrapeError(f"Element not found: {selector}", url=self.session.page.url)
        return (element.text_content() or "").strip()

    @staticmethod
    def _span_texts(element: ElementHandle, selector: str) -> List[str]:
        return [(span.text_content() or "").strip() for span in element.query_selector_all(selector)]

    def _extract_contact(self) -> ContactInfo:
        """Open the contact-info overlay and label its links.

        Contact details are optional; a missing overlay yields empty contact info.
        """
        page = self.session.page
        try:
            page.click(self.CONTACT_TRIGGER_SELECTOR, timeout=self.config.education_timeout_ms)
            page.wait_for_selector(self.CONTACT_SECTION_SELECTOR, timeout=self.config.education_timeout_ms)
        except PlaywrightTimeoutError:
            logger.debug("No contact info overlay", extra={"event": "scraper.contact.missing"})
            return ContactInfo()

        hrefs = [anchor.get_attribute("href") or "" for anchor in page.query_selector_all(self.CONTACT_LINK_SELECTOR)]
        contact = parse_contact_links(hrefs)

        close_button = page.query_selector(self.CLOSE_OVERLAY_SELECTOR)
        if close_button is not None:
            close_button.click()
        else:
            page.keyboard.press("Escape")

        return contact

    def _extract_experience(self) -> List[RoleEntry]:
        section = self.session.page.wait_for_selector(
            self.EXPERIENCE_SECTION_SELECTOR, timeout=self.config.selector_timeout_ms
        )
        if section is None:
            raise ScrapeError("Experience section not found", url=self.session.page.url)

        roles: List[RoleEntry] = []
        for item in section.query_selector_all(self.LIST_ITEM_SELECTOR):
            role_blocks = item.query_selector_all(self.GROUPED_ROLE_SELECTOR)

            if len(role_blocks) > 1:
                company_span = item.query_selector(self.GROUP_COMPANY_SELECTOR)
                company = strip_trailing_detail((company_span.text_content() or "") if company_span else "")
                for block in role_blocks:
                    texts = self._span_texts(block, self.TEXT_SPAN_SELECTOR)
                    layout = classify_experience(grouped=True, span_count=len(texts))
                    roles.append(role_from_spans(layout, texts, company=(company or "").strip()))
            else:
                texts = self._span_texts(item, self.TEXT_SPAN_SELECTOR)
                layout = classify_experience(grouped=False, span_count=len(texts))
                roles.append(role_from_spans(layout, texts))

        return roles

    def _extract_education(self) -> List[EducationEntry]:
        """Education is optional: a missing section yields an empty list and unreadable items are skipped."""
        try:
            section = self.session.page.wait_for_selector(
                self.EDUCATION_SECTION_SELECTOR, timeout=self.config.education_timeout_ms
            )
        except PlaywrightTimeoutError:
            section = None

        if section is None:
            logger.debug("No education section", extra={"event": "scraper.education.missing"})
            return []

        education: List[EducationEntry] = []
        for position, item in enumerate(section.query_selector_all(self.LIST_ITEM_SELECTOR), start=1):
            texts = self._span_texts(item, self.TEXT_SPAN_SELECTOR)
            try:
                education.append(education_from_spans(texts))
            except (ParseError, ValidationError) as e:
                logger.warning(
                    f"Skipping unreadable education item {position}: {e}",
                    extra={"event": "scraper.education.skipped", "item_position": position},
                )
        return education
