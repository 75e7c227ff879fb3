"""Unit tests for the normalization helpers.

Covers:
- Name prefix/suffix stripping and first/last splitting
- Location part assignment
- Company comparison keys (suffixes, parentheticals, idempotence)
- Tenure and year-range parsing
- Contact link labelling and profile URL cleanup
"""

import pytest

from rolecheck.domain.models import ContactInfo, Location
from rolecheck.normalization import (
    ParseError,
    normalize_company,
    normalize_location,
    normalize_name,
    normalize_profile_url,
    normalize_tenure,
    normalize_year_range,
    parse_contact_links,
    strip_trailing_detail,
    to_year,
)


class TestNormalizeName:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Jane Doe", ("Jane", "Doe")),
            ("Dr. Jane Doe", ("Jane", "Doe")),
            ("Dr Jane Doe", ("Jane", "Doe")),
            ("Jane Doe, CPA", ("Jane", "Doe")),
            ("Jane Doe CPA", ("Jane", "Doe")),
            ("John Smith, M.D.", ("John", "Smith")),
            ("John Smith Ph.D", ("John", "Smith")),
            ("John Smith, Esq.", ("John", "Smith")),
            ("Dr. Jane Doe, PhD, MBA", ("Jane", "Doe")),
            ("Mary Jane Watson Parker", ("Mary Jane Watson", "Parker")),
            ("  Jane   Doe  ", ("Jane", "Doe")),
        ],
    )
    def test_strips_affixes_and_splits(self, raw, expected):
        assert normalize_name(raw) == expected

    def test_single_token_is_last_name(self):
        assert normalize_name("Cher") == ("", "Cher")

    def test_trailing_comma_removed(self):
        assert normalize_name("Jane Doe,") == ("Jane", "Doe")

    @pytest.mark.parametrize("raw", ["", "   ", ", CPA"])
    def test_empty_after_stripping_raises(self, raw):
        with pytest.raises(ParseError) as exc_info:
            normalize_name(raw)
        assert exc_info.value.field == "name"


class TestNormalizeLocation:
    def test_three_parts(self):
        assert normalize_location("Austin, Texas, United States") == Location(
            city="Austin", state="Texas", country="United States"
        )

    def test_two_parts_are_city_and_country(self):
        assert normalize_location("London, United Kingdom") == Location(city="London", country="United Kingdom")

    def test_single_part_is_country(self):
        assert normalize_location("Germany") == Location(country="Germany")

    def test_metro_area_is_city(self):
        location = normalize_location("San Francisco Bay Area")
        assert location.city == "San Francisco Bay Area"
        assert location.country is None

    def test_more_than_three_parts_uses_first_second_last(self):
        location = normalize_location("Brooklyn, New York, NY, United States")
        assert location == Location(city="Brooklyn", state="New York", country="United States")

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_gives_all_absent(self, raw):
        assert normalize_location(raw) == Location()


class TestNormalizeCompany:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Acme, Inc.", "acme"),
            ("Acme, Inc", "acme"),
            ("Acme Inc.", "acme"),
            ("ACME, LLC", "acme"),
            ("Acme, Ltd.", "acme"),
            ("Acme, Corp.", "acme"),
            ("Acme.com", "acme"),
            ("Globex (GBX)", "globex"),
            ("Globex (NYSE: GBX), Inc.", "globex"),
            ("Acme Corp., Inc.", "acme corp"),
            ("  Initech  ", "initech"),
        ],
    )
    def test_comparison_key(self, raw, expected):
        assert normalize_company(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["Acme Corp., Inc.", "Hooli.com, Inc.", "Globex (GBX), LLC", "Umbrella Ltd.", "plain"],
    )
    def test_idempotent(self, raw):
        once = normalize_company(raw)
        assert normalize_company(once) == once

    def test_blank(self):
        assert normalize_company("") == ""
        assert normalize_company(None) == ""

    def test_distinct_companies_keep_distinct_keys(self):
        assert normalize_company("Acme, Inc.") == normalize_company("ACME")
        assert normalize_company("Hooli.com") == normalize_company("hooli")
        assert normalize_company("Acme") != normalize_company("Acme Labs")


class TestTenure:
    def test_range_with_present(self):
        assert normalize_tenure("Jan 2020 - Present") == ("Jan 2020", None)

    def test_range_with_detail_suffix(self):
        assert normalize_tenure("Jan 2020 - Present · 4 yrs 2 mos") == ("Jan 2020", None)

    def test_employment_type_suffix(self):
        assert normalize_tenure("Jan 2020 - Present · Full-time") == ("Jan 2020", None)

    def test_year_only_range(self):
        assert normalize_tenure("2018 - 2021") == ("2018", "2021")

    def test_closed_range(self):
        assert normalize_tenure("Mar 2016 - Dec 2020 · 4 yrs 10 mos") == ("Mar 2016", "Dec 2020")

    def test_single_point_in_time(self):
        assert normalize_tenure("2019") == ("2019", "2019")

    @pytest.mark.parametrize("raw", ["", "  ", " · 3 mos"])
    def test_blank_raises(self, raw):
        with pytest.raises(ParseError):
            normalize_tenure(raw)

    def test_strip_trailing_detail(self):
        assert strip_trailing_detail("Acme · Full-time") == "Acme"
        assert strip_trailing_detail("Acme") == "Acme"
        assert strip_trailing_detail(None) is None

    @pytest.mark.parametrize(
        "raw,expected",
        [("Sep 2014", "2014"), ("Sept. 2014", "2014"), ("2014", "2014"), ("Present", "Present"), (None, None)],
    )
    def test_to_year(self, raw, expected):
        assert to_year(raw) == expected

    def test_year_range(self):
        assert normalize_year_range("Sep 2014 - May 2018") == ("2014", "2018")
        assert normalize_year_range("2019 - Present") == ("2019", None)


class TestContactAndUrl:
    def test_labels_links(self):
        contact = parse_contact_links(
            ["https://www.linkedin.com/in/jane-doe", "mailto:jane@example.com", "https://janedoe.dev", ""]
        )
        assert contact == ContactInfo(email="jane@example.com", url="https://www.linkedin.com/in/jane-doe")

    def test_no_links(self):
        assert parse_contact_links([]) == ContactInfo()

    def test_overlay_suffix_removed(self):
        url = "https://www.linkedin.com/in/jane-doe/overlay/about-this-profile/"
        assert normalize_profile_url(url) == "https://www.linkedin.com/in/jane-doe/"

    def test_url_trimmed(self):
        assert normalize_profile_url("  https://www.linkedin.com/in/jane-doe/ ") == "https://www.linkedin.com/in/jane-doe/"
        assert normalize_profile_url("") == ""
