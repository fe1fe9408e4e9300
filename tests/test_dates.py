import pytest

from fendcalc.dates import Date, Day, DayOfWeek, Month, Year, parse_date
from fendcalc.errors import FendError
from fendcalc.results import Context


def test_day_0():
    with pytest.raises(ValueError):
        Day(0)


def test_day_32():
    with pytest.raises(ValueError):
        Day(32)


def test_day_to_string():
    assert str(Day(1)) == "1"


def test_year_0():
    with pytest.raises(ValueError):
        Year(0)


def test_negative_year_string():
    assert str(Year(-823)) == "823 BC"


def test_positive_year_string():
    assert str(Year(2021)) == "2021"


@pytest.mark.parametrize(
    "text",
    [
        "2021-04-14",
        "2021-4-14",
        "9999-12-31",
        "1000-01-01",
        "1000-1-1",
        "10000-1-1",
        "214748363-1-1",
        "2147483647-1-1",
    ],
)
def test_parse_date_valid(text):
    date = parse_date(text)
    assert date.day.value >= 1
    assert date.year.value >= 1000


@pytest.mark.parametrize(
    "text",
    [
        "999-01-01",
        "2021-02-29",
        "2100-02-29",
        "7453-13-01",
        "2147483648-1-1",
    ],
)
def test_parse_date_invalid(text):
    with pytest.raises(FendError) as info:
        parse_date(text)
    assert info.value.kind == "parse_date_error"
    assert str(info.value) == f"failed to convert '{text}' to a date"


def test_parse_date_fields_and_whitespace():
    date = Date.parse("  2021-4-14 ")
    assert date == Date(Year(2021), Month.APRIL, Day(14))


def test_parse_date_trailing_text_rejected():
    with pytest.raises(FendError):
        parse_date("2021-04-14x")


def test_date_to_string():
    assert str(parse_date("2021-04-14")) == "Wednesday, 14 April 2021"


def test_day_of_week_known_dates():
    assert parse_date("2000-01-01").day_of_week() is DayOfWeek.SATURDAY
    assert parse_date("2024-02-29").day_of_week() is DayOfWeek.THURSDAY


def test_leap_years():
    assert Year(2000).is_leap_year()
    assert not Year(1900).is_leap_year()
    assert Year(2024).is_leap_year()
    assert not Year(2023).is_leap_year()
    assert Year(2024).number_of_days() == 366
    assert Year(2023).number_of_days() == 365


def test_year_next_prev_skip_zero():
    assert Year(-1).next() == Year(1)
    assert Year(1).prev() == Year(-1)
    assert Year(5).next() == Year(6)


def test_month_days_and_cycle():
    assert Month.FEBRUARY.number_of_days(Year(2020)) == 29
    assert Month.FEBRUARY.number_of_days(Year(2021)) == 28
    assert Month.APRIL.number_of_days(Year(2021)) == 30
    assert Month.DECEMBER.next() is Month.JANUARY
    assert Month.JANUARY.prev() is Month.DECEMBER
    assert str(Month.MARCH) == "March"


def test_month_from_number():
    assert Month.from_number(12) is Month.DECEMBER
    with pytest.raises(ValueError):
        Month.from_number(13)


def test_date_next_and_prev():
    assert parse_date("2020-12-31").next() == parse_date("2021-01-01")
    assert parse_date("2021-01-01").prev() == parse_date("2020-12-31")
    assert parse_date("2021-03-01").prev() == parse_date("2021-02-28")
    assert parse_date("2020-03-01").prev() == parse_date("2020-02-29")
    assert parse_date("2021-04-14").next() == parse_date("2021-04-15")


def test_add_days():
    assert parse_date("2021-12-30").add_days(3) == parse_date("2022-01-02")
    assert parse_date("2021-12-30").add_days(0) == parse_date("2021-12-30")


def test_add_negative_days_rejected():
    with pytest.raises(FendError) as info:
        parse_date("2021-12-30").add_days(-1)
    assert info.value.kind == "negative_numbers_not_allowed"


def test_get_object_member():
    date = parse_date("2021-04-14")
    assert date.get_object_member("month") is Month.APRIL
    assert date.get_object_member("day_of_week") is DayOfWeek.WEDNESDAY
    assert date.get_object_member("year") is None


def test_today_without_time_fails():
    with pytest.raises(FendError) as info:
        Date.today(Context())
    assert str(info.value) == "unable to get the current date"


def test_day_of_week_string():
    day_of_week = parse_date("2021-04-11").day_of_week()
    assert str(day_of_week) == "Sunday"