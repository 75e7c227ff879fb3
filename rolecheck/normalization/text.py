"""Text normalizers for names, locations, companies, and contact links.

These are pure functions with no I/O. The company normalizer produces the
comparison key used by the matcher; it is never shown to users.
"""

import re
from typing import Iterable, Tuple

from rolecheck.domain.models import ContactInfo, Location

from .exceptions import ParseError

NAME_PREFIXES = ("Dr. ", "Dr ")

NAME_SUFFIXES = (
    " CPA",
    ", CPA",
    ",CPA",
    ", Esq.",
    " Esq.",
    ", MBA",
    " MBA",
    ", M.D.",
    " M.D.",
    " PhD",
    " Ph.D",
    ", PhD",
    ", Ph.D",
    ", CFA",
    " CFA",
    ", ",
    ",",
)

# Longer forms first so ", inc." wins over ", inc"
COMPANY_SUFFIXES = (
    ", inc.",
    ", inc",
    " inc.",
    ", llc",
    ", ltd.",
    ", ltd",
    ", corp.",
    ", corp",
    ".com",
)

PROFILE_OVERLAY_SUFFIX = "overlay/about-this-profile/"

_PARENTHETICAL_RE = re.compile(r"\([^()]*\)")
_WHITESPACE_RE = re.compile(r"\s+")


def _strip_name_affixes(full_name: str) -> str:
    name = full_name.strip()

    for prefix in NAME_PREFIXES:
        if name.startswith(prefix):
            name = name[len(prefix):].strip()
            break

    changed = True
    while changed:
        changed = False
        for suffix in NAME_SUFFIXES:
            if name.endswith(suffix):
                name = name[: -len(suffix)].strip()
                changed = True

    return name


def normalize_name(full_name: str) -> Tuple[str, str]:
    """Split a display name into (first, last).

    Honorific prefixes are removed from the start and credential suffixes
    from the end. Middle names and initials stay with the first name.

    Args:
        full_name: Raw name as displayed on the profile

    Returns:
        (first_name, last_name). A single remaining token is treated as a
        last name with an empty first name.

    Raises:
        ParseError: If nothing remains after stripping

    Example:
        >>> normalize_name("Dr. Jane Doe, CPA")
        ('Jane', 'Doe')
        >>> normalize_name("Mary Jane Watson Parker")
        ('Mary Jane Watson', 'Parker')
    """
    tokens = _strip_name_affixes(full_name or "").split()

    if not tokens:
        raise ParseError(f"Cannot parse name from {full_name!r}", field="name", value=full_name)

    if len(tokens) == 1:
        return "", tokens[0]

    return " ".join(tokens[:-1]), tokens[-1]


def normalize_location(location_text: str) -> Location:
    """Parse a "city, state, country" string into a Location.

    One part is a country unless it contains "Area", in which case it is a
    metro-area city. Two parts are read as (city, country); a two-part
    "state, country" value is indistinguishable and is read the same way.
    """
    text = (location_text or "").strip()
    if not text:
        return Location()

    parts = text.split(", ")

    if len(parts) == 1:
        if "Area" in parts[0]:
            return Location(city=parts[0])
        return Location(country=parts[0])

    if len(parts) == 2:
        return Location(city=parts[0], country=parts[1])

    return Location(city=parts[0], state=parts[1], country=parts[-1])


def _strip_company_once(value: str) -> str:
    value = _PARENTHETICAL_RE.sub(" ", value)
    value = _WHITESPACE_RE.sub(" ", value).strip()

    lowered = value.lower()
    for suffix in COMPANY_SUFFIXES:
        if lowered.endswith(suffix):
            value = value[: -len(suffix)]
            break

    return value.rstrip(" .,")


def normalize_company(company: str) -> str:
    """Build the comparison key for a company name.

    Removes parenthesized text such as ticker symbols, legal and domain
    suffixes (", Inc.", ".com", ", LLC", ...), trailing punctuation, and
    case. Repeats until stable, so applying it twice changes nothing.

    Example:
        >>> normalize_company("Acme Corp., Inc.")
        'acme corp'
        >>> normalize_company("Globex (GBX)")
        'globex'
    """
    value = company or ""
    while True:
        stripped = _strip_company_once(value)
        if stripped == value:
            break
        value = stripped

    return value.lower()


def parse_contact_links(hrefs: Iterable[str]) -> ContactInfo:
    """Label raw contact-overlay hrefs as profile URL or email."""
    email = None
    url = None

    for href in hrefs:
        if not href:
            continue
        if "linkedin" in href:
            url = href
        elif "@" in href:
            email = href.replace("mailto:", "")

    return ContactInfo(email=email, url=url)


def normalize_profile_url(url: str) -> str:
    """Trim a profile URL and drop the about-this-profile overlay segment."""
    value = (url or "").strip()
    if value.endswith(PROFILE_OVERLAY_SUFFIX):
        value = value[: -len(PROFILE_OVERLAY_SUFFIX)]
    return value
