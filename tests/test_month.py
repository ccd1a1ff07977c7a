from datetime import date

import pytest

from isochron import (
    FRIDAY,
    MONDAY,
    SUNDAY,
    Date,
    DateTimeError,
    DayOfWeek,
    Month,
    OutOfRange,
    YearMonth,
)


class TestMonth:

    def test_of(self):
        assert Month.of(1) is Month.JANUARY
        assert Month.of(12) is Month.DECEMBER
        assert [m.value for m in Month] == list(range(1, 13))

    @pytest.mark.parametrize("value", [0, 13, -1])
    def test_of_invalid(self, value):
        with pytest.raises(OutOfRange, match="MonthOfYear"):
            Month.of(value)

    def test_from_temporal(self):
        assert Month.from_temporal(Date(2021, 3, 4)) is Month.MARCH
        assert Month.from_temporal(date(2021, 3, 4)) is Month.MARCH
        assert Month.from_temporal(YearMonth(2021, 7)) is Month.JULY
        assert Month.from_temporal(Month.MAY) is Month.MAY

    def test_from_temporal_invalid(self):
        with pytest.raises(DateTimeError, match="Unable to obtain Month"):
            Month.from_temporal("March")

    @pytest.mark.parametrize(
        "month, short, long",
        [
            (Month.JANUARY, 31, 31),
            (Month.FEBRUARY, 28, 29),
            (Month.APRIL, 30, 30),
            (Month.JULY, 31, 31),
            (Month.NOVEMBER, 30, 30),
        ],
    )
    def test_lengths(self, month, short, long):
        assert month.length(leap_year=False) == short
        assert month.length(leap_year=True) == long
        assert month.min_length() == short
        assert month.max_length() == long

    @pytest.mark.parametrize("month", list(Month))
    @pytest.mark.parametrize("year", [2020, 2021])
    def test_first_day_of_year(self, month, year):
        leap = year == 2020
        assert (
            month.first_day_of_year(leap)
            == Date(year, month.value, 1).day_of_year()
        )

    @pytest.mark.parametrize(
        "month, expected",
        [
            (Month.JANUARY, Month.JANUARY),
            (Month.MARCH, Month.JANUARY),
            (Month.APRIL, Month.APRIL),
            (Month.AUGUST, Month.JULY),
            (Month.DECEMBER, Month.OCTOBER),
        ],
    )
    def test_first_month_of_quarter(self, month, expected):
        assert month.first_month_of_quarter() is expected

    @pytest.mark.parametrize(
        "month, amount, expected",
        [
            (Month.NOVEMBER, 3, Month.FEBRUARY),
            (Month.JANUARY, -1, Month.DECEMBER),
            (Month.MAY, 12, Month.MAY),
            (Month.MAY, -25, Month.APRIL),
            (Month.MAY, 0, Month.MAY),
        ],
    )
    def test_plus(self, month, amount, expected):
        assert month.plus(amount) is expected
        assert expected.minus(amount) is month


class TestDayOfWeek:

    def test_of(self):
        assert DayOfWeek.of(1) is MONDAY
        assert DayOfWeek.of(7) is SUNDAY

    @pytest.mark.parametrize("value", [0, 8])
    def test_of_invalid(self, value):
        with pytest.raises(OutOfRange, match="DayOfWeek"):
            DayOfWeek.of(value)

    @pytest.mark.parametrize(
        "day, amount, expected",
        [
            (MONDAY, -1, SUNDAY),
            (SUNDAY, 1, MONDAY),
            (FRIDAY, 7, FRIDAY),
            (MONDAY, -15, SUNDAY),
            (MONDAY, 4, FRIDAY),
            (FRIDAY, 0, FRIDAY),
        ],
    )
    def test_plus(self, day, amount, expected):
        assert day.plus(amount) is expected
        assert expected.minus(amount) is day

    def test_from_temporal(self):
        assert DayOfWeek.from_temporal(Date(2021, 1, 2)) is DayOfWeek.SATURDAY
        assert DayOfWeek.from_temporal(date(2021, 1, 2)) is DayOfWeek.SATURDAY
        assert DayOfWeek.from_temporal(MONDAY) is MONDAY

    def test_from_temporal_invalid(self):
        with pytest.raises(DateTimeError, match="Unable to obtain DayOfWeek"):
            DayOfWeek.from_temporal(YearMonth(2021, 1))
