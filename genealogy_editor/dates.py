"""Date helpers and the Period value type used for ages."""

import re
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True, order=True)
class Period:
    """A whole number of years elapsed between two dates."""

    years: int

    def __str__(self) -> str:
        unit = "year" if self.years == 1 else "years"
        return f"{self.years} {unit}"


def age_between(birth: date, reference: date) -> Period:
    """Compute the age in years of someone born on `birth` as of `reference`.

    The year difference is reduced by one when the reference month/day falls
    before the birth month/day. The result is never negative, so a clock set
    before a birth date in the same year still yields zero.
    """
    years = reference.year - birth.year
    if (reference.month, reference.day) < (birth.month, birth.day):
        years -= 1
    return Period(max(years, 0))


def compare_dates(a: date | None, b: date | None) -> int | None:
    """Three-way comparison of two optional dates, None if either is missing."""
    if a is None or b is None:
        return None
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


_ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value) -> date | None:
    """Parse an ISO `YYYY-MM-DD` string or date object.

    Returns None for None or blank strings.

    Raises:
        ValueError: If the value is neither a date nor a valid ISO date string.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        message = f"Invalid date '{value}', expected YYYY-MM-DD"
        if not _ISO_DATE_PATTERN.match(stripped):
            raise ValueError(message)
        try:
            return date.fromisoformat(stripped)
        except ValueError:
            raise ValueError(message) from None
    raise ValueError(f"Invalid date value: {value!r}")


def format_date(value: date | None) -> str | None:
    """Format a date as ISO string."""
    return value.isoformat() if value else None
