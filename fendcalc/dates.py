"""Calendar dates: years, months, days, weekdays and date parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import FendError
from .results import Context

_I32_MAX = 2**31 - 1
_MS_PER_DAY = 86_400_000
_DIGITS = "0123456789"


def _trunc_rem(a: int, b: int) -> int:
    """Remainder with the sign of the dividend, as in truncating division."""
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


@dataclass(frozen=True)
class Year:
    """A calendar year; there is no year 0, and negative years are BC."""

    value: int

    def __post_init__(self) -> None:
        if self.value == 0:
            raise ValueError("year 0 is invalid")

    def next(self) -> Year:
        return Year(1) if self.value == -1 else Year(self.value + 1)

    def prev(self) -> Year:
        return Year(-1) if self.value == 1 else Year(self.value - 1)

    def is_leap_year(self) -> bool:
        if self.value % 400 == 0:
            return True
        if self.value % 100 == 0:
            return False
        return self.value % 4 == 0

    def number_of_days(self) -> int:
        return 366 if self.is_leap_year() else 365

    def __str__(self) -> str:
        if self.value < 0:
            return f"{-self.value} BC"
        return str(self.value)


@dataclass(frozen=True)
class Day:
    """A day of the month, from 1 to 31."""

    value: int

    def __post_init__(self) -> None:
        if not 0 < self.value < 32:
            raise ValueError(f"day value {self.value} is out of range")

    def __str__(self) -> str:
        return str(self.value)


class Month(Enum):
    """A month of the year, numbered from 1."""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def number_of_days(self, year: Year) -> int:
        if self is Month.FEBRUARY:
            return 29 if year.is_leap_year() else 28
        if self in (Month.APRIL, Month.JUNE, Month.SEPTEMBER, Month.NOVEMBER):
            return 30
        return 31

    def next(self) -> Month:
        return Month(self.value % 12 + 1)

    def prev(self) -> Month:
        return Month((self.value - 2) % 12 + 1)

    @classmethod
    def from_number(cls, month: int) -> Month:
        """Return the month with this number, raising ValueError outside 1..12."""
        try:
            return cls(month)
        except ValueError:
            raise ValueError(f"invalid month {month}") from None

    def __str__(self) -> str:
        return self.name.title()


class DayOfWeek(Enum):
    """A day of the week, starting from Sunday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    def __str__(self) -> str:
        return self.name.title()


_MONTH_OFFSETS: dict[Month, tuple[int, int]] = {
    Month.JANUARY: (0, 0),
    Month.FEBRUARY: (3, 3),
    Month.MARCH: (3, 4),
    Month.NOVEMBER: (3, 4),
    Month.APRIL: (6, 0),
    Month.JULY: (6, 0),
    Month.MAY: (1, 2),
    Month.JUNE: (4, 5),
    Month.AUGUST: (2, 3),
    Month.SEPTEMBER: (5, 6),
    Month.DECEMBER: (5, 6),
    Month.OCTOBER: (0, 1),
}


@dataclass(frozen=True)
class Date:
    """A date in the proleptic Gregorian calendar."""

    year: Year
    month: Month
    day: Day

    @classmethod
    def today(cls, context: Context) -> Date:
        """Return the current date from the context's time information."""
        info = context.current_time
        if info is None:
            raise FendError("unable_to_get_current_date")
        ms_since_epoch = info.elapsed_unix_time_ms - info.timezone_offset_secs * 1000
        days = _trunc_div(ms_since_epoch, _MS_PER_DAY)
        year = Year(1970)
        while days >= year.number_of_days():
            year = year.next()
            days -= year.number_of_days()
        month = Month.JANUARY
        while days >= month.number_of_days(year):
            month = month.next()
            days -= month.number_of_days(year)
        return cls(year, month, Day(days))

    def day_of_week(self) -> DayOfWeek:
        y = self.year.value - 1
        d1 = _trunc_rem(
            1 + 5 * _trunc_rem(y, 4) + 4 * _trunc_rem(y, 100) + 6 * _trunc_rem(y, 400),
            7,
        )
        common, leap = _MONTH_OFFSETS[self.month]
        m = leap if self.year.is_leap_year() else common
        return DayOfWeek((d1 + m + self.day.value - 1) % 7)

    def next(self) -> Date:
        if self.day.value < self.month.number_of_days(self.year):
            return Date(self.year, self.month, Day(self.day.value + 1))
        if self.month is Month.DECEMBER:
            return Date(self.year.next(), Month.JANUARY, Day(1))
        return Date(self.year, self.month.next(), Day(1))

    def prev(self) -> Date:
        if self.day.value > 1:
            return Date(self.year, self.month, Day(self.day.value - 1))
        if self.month is Month.JANUARY:
            return Date(self.year.prev(), Month.DECEMBER, Day(31))
        month = self.month.prev()
        return Date(self.year, month, Day(month.number_of_days(self.year)))

    @classmethod
    def parse(cls, text: str) -> Date:
        return parse_date(text)

    def get_object_member(self, key: str) -> Month | DayOfWeek | None:
        """Return the member ``month`` or ``day_of_week``, or None for others."""
        if key == "month":
            return self.month
        if key == "day_of_week":
            return self.day_of_week()
        return None

    def add_days(self, days: int) -> Date:
        """Return the date a whole, non-negative number of days later."""
        if isinstance(days, bool) or not isinstance(days, int):
            raise FendError("expected_a_number")
        if days < 0:
            raise FendError("negative_numbers_not_allowed")
        result = self
        for _ in range(days):
            result = result.next()
        return result

    def __str__(self) -> str:
        return f"{self.day_of_week()}, {self.day} {self.month} {self.year}"


class _NoMatch(Exception):
    pass


def _parse_num(text: str, leading_zeroes: bool) -> tuple[int, str]:
    if not text or text[0] not in _DIGITS:
        raise _NoMatch
    num = int(text[0])
    if not leading_zeroes and num == 0:
        raise _NoMatch
    rest = text[1:]
    while rest and rest[0] in _DIGITS:
        num = num * 10 + int(rest[0])
        if num > _I32_MAX:
            raise _NoMatch
        rest = rest[1:]
    return num, rest


def _expect_char(text: str, ch: str) -> str:
    if not text.startswith(ch):
        raise _NoMatch
    return text[len(ch):]


def _parse_yyyymmdd(text: str) -> tuple[Date, str]:
    year_num, rest = _parse_num(text, False)
    rest = _expect_char(rest, "-")
    if year_num < 1000:
        raise _NoMatch
    year = Year(year_num)
    month_num, rest = _parse_num(rest, True)
    rest = _expect_char(rest, "-")
    try:
        month = Month.from_number(month_num)
    except ValueError:
        raise _NoMatch from None
    day_num, rest = _parse_num(rest, True)
    if day_num < 1 or day_num > month.number_of_days(year):
        raise _NoMatch
    return Date(year, month, Day(day_num)), rest


def parse_date(text: str) -> Date:
    """Parse a date written as ``YYYY-MM-DD``, surrounding whitespace allowed."""
    try:
        date, remaining = _parse_yyyymmdd(text.strip())
    except _NoMatch:
        pass
    else:
        if not remaining:
            return date
    raise FendError("parse_date_error", text)