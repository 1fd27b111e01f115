"""Calendar date value used to key daily notes.

Provides:
    - CalendarDate: immutable Gregorian date with canonical YYYY-MM-DD text
    - today(): the current local date
    - previous_day(): the date immediately before a given date
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass

from daynotes.core.result import ParseError

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


@dataclass(frozen=True, order=True, slots=True)
class CalendarDate:
    """A valid Gregorian calendar date."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not 1 <= self.year <= 9999:
            raise ParseError("Year out of range", context={"year": self.year})
        if not 1 <= self.month <= 12:
            raise ParseError("Month out of range", context={"month": self.month})
        if not 1 <= self.day <= days_in_month(self.year, self.month):
            raise ParseError(
                "Day out of range for month",
                context={"date": f"{self.year:04d}-{self.month:02d}-{self.day:02d}"},
            )

    @classmethod
    def parse(cls, text: str) -> CalendarDate:
        """Parse a strict ``YYYY-MM-DD`` string.

        Raises:
            ParseError: If the text is not a well-formed, valid date.
        """
        match = _DATE_RE.match(text.strip())
        if not match:
            raise ParseError("Expected a date in YYYY-MM-DD form", context={"value": text})
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: dt.date) -> CalendarDate:
        return cls(value.year, value.month, value.day)

    def to_date(self) -> dt.date:
        return dt.date(self.year, self.month, self.day)

    def previous_day(self) -> CalendarDate:
        if self.day > 1:
            return CalendarDate(self.year, self.month, self.day - 1)
        if self.month > 1:
            return CalendarDate(self.year, self.month - 1, days_in_month(self.year, self.month - 1))
        return CalendarDate(self.year - 1, 12, 31)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


def today() -> CalendarDate:
    """Return the current local calendar date."""
    return CalendarDate.from_date(dt.date.today())


def previous_day(value: CalendarDate) -> CalendarDate:
    """Return the date immediately preceding ``value``."""
    return value.previous_day()


def parse_month(text: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` month argument into ``(year, month)``."""
    match = _MONTH_RE.match(text.strip())
    if not match:
        raise ParseError("Expected a month in YYYY-MM form", context={"value": text})
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ParseError("Month out of range", context={"value": text})
    return year, month


__all__ = [
    "CalendarDate",
    "days_in_month",
    "is_leap_year",
    "parse_month",
    "previous_day",
    "today",
]
