"""Normalization layer for scraped profile text.

This module provides:
- normalize_name: display name to (first, last)
- normalize_location: "city, state, country" to Location
- normalize_company: company comparison key
- normalize_tenure / normalize_year_range: date ranges to (start, end)
- parse_contact_links / normalize_profile_url: contact and URL cleanup
- ParseError: raised on text that cannot be interpreted
"""

from .dates import normalize_tenure, normalize_year_range, strip_trailing_detail, to_year
from .exceptions import ParseError
from .text import (
    normalize_company,
    normalize_location,
    normalize_name,
    normalize_profile_url,
    parse_contact_links,
)

__all__ = [
    "ParseError",
    "normalize_company",
    "normalize_location",
    "normalize_name",
    "normalize_profile_url",
    "normalize_tenure",
    "normalize_year_range",
    "parse_contact_links",
    "strip_trailing_detail",
    "to_year",
]
