"""Experience and education entry layouts.

Profile pages render an experience item in one of four shapes, told apart
only by whether the company groups several roles and by how many visible
text spans the item has. The scraper classifies each item into an
ExperienceLayout and converts its span texts into a RoleEntry here, so no
code outside the scrape layer depends on span counts.

Span orders:
- GROUPED:                     title, tenure, [description]
- GROUPED_WITH_LOCATION:       title, tenure, location, description
- SINGLE:                      title, company, [tenure], [description]
- SINGLE_WITH_LOCATION:        title, company, tenure, location, description
"""

from enum import Enum
from typing import Optional, Sequence

from rolecheck.domain.models import EducationEntry, RoleEntry
from rolecheck.normalization.dates import normalize_tenure, normalize_year_range, strip_trailing_detail
from rolecheck.normalization.exceptions import ParseError


class ExperienceLayout(str, Enum):
    """Shape of a rendered experience item."""

    GROUPED = "grouped"
    GROUPED_WITH_LOCATION = "grouped_with_location"
    SINGLE = "single"
    SINGLE_WITH_LOCATION = "single_with_location"


def classify_experience(grouped: bool, span_count: int) -> ExperienceLayout:
    """Pick the layout for an item from its grouping and span count."""
    if grouped:
        if span_count == 4:
            return ExperienceLayout.GROUPED_WITH_LOCATION
        return ExperienceLayout.GROUPED
    if span_count == 5:
        return ExperienceLayout.SINGLE_WITH_LOCATION
    return ExperienceLayout.SINGLE


def _at(texts: Sequence[str], index: int) -> Optional[str]:
    if index < len(texts):
        value = texts[index].strip()
        return value or None
    return None


def _tenure(text: Optional[str]):
    if text is None:
        return None, None
    return normalize_tenure(text)


def role_from_spans(
    layout: ExperienceLayout,
    texts: Sequence[str],
    company: Optional[str] = None,
) -> RoleEntry:
    """Build a RoleEntry from the span texts of one experience item.

    Args:
        layout: Item layout from classify_experience()
        texts: Visible span texts in page order
        company: Company name for grouped items (taken from the group header)

    Raises:
        ParseError: If the spans do not contain the fields the layout requires
    """
    title = _at(texts, 0)
    if title is None:
        raise ParseError("Experience item has no title", field="experience", value=repr(list(texts)))

    location = None
    if layout in (ExperienceLayout.GROUPED, ExperienceLayout.GROUPED_WITH_LOCATION):
        if not company:
            raise ParseError("Grouped experience item has no company", field="company", value=title)
        tenure_text = _at(texts, 1)
        if layout == ExperienceLayout.GROUPED_WITH_LOCATION:
            location = _at(texts, 2)
            description = _at(texts, 3)
        else:
            description = _at(texts, 2)
    else:
        company = strip_trailing_detail(_at(texts, 1))
        if not company:
            raise ParseError("Experience item has no company", field="company", value=title)
        tenure_text = _at(texts, 2)
        if layout == ExperienceLayout.SINGLE_WITH_LOCATION:
            location = _at(texts, 3)
            description = _at(texts, 4)
        else:
            description = _at(texts, 3)

    start_date, end_date = _tenure(tenure_text)

    return RoleEntry(
        title=title,
        company=company,
        start_date=start_date,
        end_date=end_date,
        description=description,
        location=location,
    )


def education_from_spans(texts: Sequence[str]) -> EducationEntry:
    """Build an EducationEntry from span texts: school, degree, years, description."""
    school_name = _at(texts, 0)
    if school_name is None:
        raise ParseError("Education item has no school name", field="education", value=repr(list(texts)))

    start_year = end_year = None
    years = _at(texts, 2)
    if years is not None:
        start_year, end_year = normalize_year_range(years)

    return EducationEntry(
        school_name=school_name,
        degree=_at(texts, 1),
        start_year=start_year,
        end_year=end_year,
        description=_at(texts, 3),
    )

