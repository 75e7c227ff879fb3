"""Tenure and date-range normalizers.

Profile pages show date ranges like ``"Jan 2020 - Present · 4 yrs 2 mos"``.
The helpers here reduce those to ``(start, end)`` pairs, with ``None`` as the
end of an ongoing role.
"""

import re
from typing import Optional, Tuple

from .exceptions import ParseError

DETAIL_SEPARATOR = " · "
RANGE_SEPARATOR = " - "
PRESENT = "Present"

_MONTH_YEAR_RE = re.compile(r"^[A-Za-z]{3,}\.?\s+(\d{4})$")


def strip_trailing_detail(text: Optional[str]) -> Optional[str]:
    """Remove a trailing " · ..." segment (durations, employment type).

    Example:
        >>> strip_trailing_detail("Acme · Full-time")
        'Acme'
    """
    if text is None:
        return None
    index = text.find(DETAIL_SEPARATOR)
    if index != -1:
        return text[:index]
    return text


def normalize_tenure(tenure: str) -> Tuple[str, Optional[str]]:
    """Split a tenure string into (start, end).

    "Present" becomes None. A value without a range separator is a single
    point in time and is returned as both start and end.

    Raises:
        ParseError: If the tenure is blank

    Example:
        >>> normalize_tenure("Jan 2020 - Present · Full-time")
        ('Jan 2020', None)
        >>> normalize_tenure("2018 - 2021")
        ('2018', '2021')
    """
    text = (strip_trailing_detail(tenure) or "").strip()
    if not text:
        raise ParseError(f"Cannot parse tenure from {tenure!r}", field="tenure", value=tenure)

    start, separator, end = text.partition(RANGE_SEPARATOR)
    start = start.strip()
    end = end.strip() if separator else start

    if end == PRESENT:
        return start, None

    return start, end


def to_year(date_text: Optional[str]) -> Optional[str]:
    """Reduce "MMM YYYY" to "YYYY"; other values pass through unchanged."""
    if date_text is None:
        return None
    match = _MONTH_YEAR_RE.match(date_text.strip())
    if match:
        return match.group(1)
    return date_text.strip()


def normalize_year_range(tenure: str) -> Tuple[str, Optional[str]]:
    """Like normalize_tenure, but with month tokens dropped from both ends.

    Example:
        >>> normalize_year_range("Sep 2014 - May 2018")
        ('2014', '2018')
    """
    start, end = normalize_tenure(tenure)
    return to_year(start), to_year(end)
