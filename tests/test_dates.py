"""Tests for date helpers and age arithmetic."""

from datetime import date, datetime

import pytest

from genealogy_editor.dates import Period, age_between, compare_dates, format_date, parse_date


class TestAgeBetween:
    """Tests for age_between."""

    def test_day_before_birthday(self):
        """Should not count the current year before the birthday."""
        assert age_between(date(2000, 6, 15), date(2020, 6, 14)) == Period(19)

    def test_on_birthday(self):
        """Should count the year on the birthday itself."""
        assert age_between(date(2000, 6, 15), date(2020, 6, 15)) == Period(20)

    def test_after_birthday(self):
        assert age_between(date(2000, 6, 15), date(2020, 12, 31)) == Period(20)

    def test_earlier_month(self):
        """A reference month before the birth month should subtract one year."""
        assert age_between(date(2000, 6, 15), date(2020, 1, 30)) == Period(19)

    def test_same_day(self):
        assert age_between(date(2000, 6, 15), date(2000, 6, 15)) == Period(0)

    def test_never_negative_in_birth_year(self):
        """A reference date before the birth date in the same year gives zero."""
        assert age_between(date(2024, 6, 15), date(2024, 1, 1)) == Period(0)

    def test_never_negative_before_birth_year(self):
        assert age_between(date(2024, 6, 15), date(2020, 1, 1)) == Period(0)

    def test_leap_day_birthday(self):
        """Someone born on Feb 29 turns a year older on Mar 1 of common years."""
        birth = date(2000, 2, 29)
        assert age_between(birth, date(2001, 2, 28)) == Period(0)
        assert age_between(birth, date(2001, 3, 1)) == Period(1)
        assert age_between(birth, date(2004, 2, 29)) == Period(4)


class TestPeriod:
    """Tests for the Period value type."""

    def test_str_plural(self):
        assert str(Period(20)) == "20 years"

    def test_str_singular(self):
        assert str(Period(1)) == "1 year"

    def test_ordering(self):
        assert Period(3) < Period(4)

    def test_immutable(self):
        with pytest.raises(AttributeError):
            Period(3).years = 4


class TestCompareDates:
    """Tests for compare_dates."""

    def test_before(self):
        assert compare_dates(date(1990, 1, 1), date(1992, 1, 1)) == -1

    def test_after(self):
        assert compare_dates(date(1992, 1, 1), date(1990, 1, 1)) == 1

    def test_equal(self):
        assert compare_dates(date(1990, 1, 1), date(1990, 1, 1)) == 0

    def test_missing_side(self):
        """Should return None when either date is unknown."""
        assert compare_dates(None, date(1990, 1, 1)) is None
        assert compare_dates(date(1990, 1, 1), None) is None
        assert compare_dates(None, None) is None


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_string(self):
        assert parse_date("1984-06-21") == date(1984, 6, 21)

    def test_strips_whitespace(self):
        assert parse_date(" 1984-06-21 ") == date(1984, 6, 21)

    def test_date_passthrough(self):
        value = date(1984, 6, 21)
        assert parse_date(value) is value

    def test_datetime_truncated(self):
        assert parse_date(datetime(1984, 6, 21, 13, 45)) == date(1984, 6, 21)

    def test_none_and_blank(self):
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("   ") is None

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
            parse_date("21 JUN 1984")

    def test_compact_and_week_forms_rejected(self):
        for value in ("19840621", "1984-W25-4"):
            with pytest.raises(ValueError, match="expected YYYY-MM-DD"):
                parse_date(value)

    def test_impossible_date_raises(self):
        with pytest.raises(ValueError):
            parse_date("2021-02-30")

    def test_wrong_type_raises(self):
        with pytest.raises(ValueError, match="Invalid date value"):
            parse_date(1984)


class TestFormatDate:
    def test_formats_iso(self):
        assert format_date(date(1984, 6, 21)) == "1984-06-21"

    def test_none(self):
        assert format_date(None) is None
