from datetime import date

import pytest

from isochron import (
    ArithmeticOverflow,
    CalendarMismatch,
    Date,
    InvalidFormat,
    Period,
    Temporal,
    Unit,
    UnsupportedUnit,
    YearMonth,
)

from .common import AlwaysEqual, NeverEqual

INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)


class RecordingTemporal(Temporal):
    """A temporal that records how it is moved"""

    def __init__(self, calendar="ISO"):
        self.calendar = calendar
        self.calls = []

    def plus(self, amount, unit, /):
        self.calls.append((amount, unit))
        return self


class TestInit:

    def test_all_params(self):
        p = Period(years=1, months=2, weeks=3, days=4)
        assert p.years == 1
        assert p.months == 2
        # weeks are stored as days
        assert p.days == 25
        assert not hasattr(p, "weeks")

    def test_defaults(self):
        p = Period()
        assert p.years == 0
        assert p.months == 0
        assert p.days == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(years=INT32_MAX + 1),
            dict(months=INT32_MIN - 1),
            dict(days=INT32_MAX + 1),
            dict(weeks=INT32_MAX // 7 + 1),
            dict(weeks=1, days=INT32_MAX),
        ],
    )
    def test_overflow(self, kwargs):
        with pytest.raises(ArithmeticOverflow):
            Period(**kwargs)

    def test_limits(self):
        p = Period(years=INT32_MAX, months=INT32_MIN, days=INT32_MAX)
        assert p.as_tuple() == (INT32_MAX, INT32_MIN, INT32_MAX)


class TestFactories:

    def test_of(self):
        assert Period.of(1, -2, 3) == Period(years=1, months=-2, days=3)
        assert Period.of(0, 0, 0) is Period.ZERO
        with pytest.raises(ArithmeticOverflow):
            Period.of(0, 0, INT32_MAX + 1)

    def test_single_field(self):
        assert Period.of_years(2) == Period(years=2)
        assert Period.of_months(-3) == Period(months=-3)
        assert Period.of_weeks(2) == Period(days=14)
        assert Period.of_days(5) == Period(days=5)
        assert Period.of_days(0) is Period.ZERO

    def test_weeks_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            Period.of_weeks(INT32_MAX // 7 + 1)


def test_immutable():
    p = Period(years=1, months=2, weeks=3, days=4)

    with pytest.raises(AttributeError):
        p.years = 2  # type: ignore[misc]


def test_equality():
    p = Period(years=1, months=2, weeks=3, days=4)
    same = Period(years=1, months=2, days=25)
    different = Period(years=1, months=2, days=24)
    # same length, but different fields
    same_length = Period(months=14, days=25)
    assert p == same
    assert not p == different
    assert not p == same_length
    assert not p == NeverEqual()
    assert p == AlwaysEqual()
    assert not p != same
    assert p != different
    assert p != same_length
    assert p != NeverEqual()
    assert not p != AlwaysEqual()

    assert hash(p) == hash(same)
    assert hash(p) != hash(different)


def test_zero():
    assert Period.ZERO == Period()
    assert Period.ZERO.is_zero()
    assert not Period(days=1).is_zero()


def test_bool():
    assert not Period()
    assert Period(years=1)
    assert Period(days=-1)
    assert not Period(months=1, weeks=0, days=0) == Period()


@pytest.mark.parametrize(
    "p, expected",
    [
        (Period(), False),
        (Period(years=1, months=2, days=3), False),
        (Period(years=1, months=-2, days=3), True),
        (Period(days=-1), True),
    ],
)
def test_is_negative(p, expected):
    assert p.is_negative() is expected


@pytest.mark.parametrize(
    "p, expected",
    [
        (Period(), "P0D"),
        (Period(years=1, months=2, weeks=3, days=4), "P1Y2M25D"),
        (Period(months=-3), "P-3M"),
        (Period(years=1, days=-3), "P1Y-3D"),
        (Period(weeks=1), "P7D"),
        (Period(years=-5, months=0, days=0), "P-5Y"),
    ],
)
def test_canonical_format(p, expected):
    assert p.canonical_format() == expected
    assert str(p) == expected


def test_repr():
    assert repr(Period(years=1, days=-3)) == "Period(P1Y-3D)"


class TestFromCanonicalFormat:

    @pytest.mark.parametrize(
        "s, expected",
        [
            ("P0D", Period()),
            ("P1Y", Period(years=1)),
            ("P2M", Period(months=2)),
            ("P1Y2M3D", Period(years=1, months=2, days=3)),
            ("p1y2m3w4d", Period(years=1, months=2, days=25)),
            ("P2W", Period(days=14)),
            ("-P1Y2M", Period(years=-1, months=-2)),
            ("+P1Y", Period(years=1)),
            ("-P-2D", Period(days=2)),
            ("P-1Y+2M", Period(years=-1, months=2)),
            ("-P1W1D", Period(days=-8)),
            ("-p2w-1d", Period(days=-13)),
            ("P2147483647D", Period(days=INT32_MAX)),
            ("P-2147483648Y", Period(years=INT32_MIN)),
        ],
    )
    def test_valid(self, s, expected):
        assert Period.from_canonical_format(s) == expected

    @pytest.mark.parametrize(
        "s",
        [
            "",
            "P",
            "-P",
            "1Y",
            "P1",
            "PT1H",
            "P1D2M",
            "P1.5Y",
            "P 1Y",
            "--P1Y",
            "P1Y ",
            "P١Y",  # non-ASCII digit
        ],
    )
    def test_invalid(self, s):
        with pytest.raises(InvalidFormat):
            Period.from_canonical_format(s)

    @pytest.mark.parametrize(
        "s",
        [
            "P2147483648Y",
            "-P-2147483648D",
            "P306783379W",
            "P1W2147483647D",
            "P99999999999999999999M",
            "P" + "1" * 5_000 + "Y",
        ],
    )
    def test_overflow(self, s):
        with pytest.raises(ArithmeticOverflow):
            Period.from_canonical_format(s)

    @pytest.mark.parametrize(
        "p",
        [
            Period(),
            Period(years=1, months=-2, days=3),
            Period(days=INT32_MIN),
            Period(years=INT32_MAX, months=INT32_MAX, days=INT32_MAX),
        ],
    )
    def test_inverse_of_canonical_format(self, p):
        assert Period.from_canonical_format(p.canonical_format()) == p


class TestNegate:

    def test_fields(self):
        p = Period(years=1, months=-2, days=3)
        assert -p == Period(years=-1, months=2, days=-3)
        assert p.negated() == Period(years=-1, months=2, days=-3)

    def test_zero(self):
        assert Period.ZERO.negated() is Period.ZERO

    def test_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            Period(days=INT32_MIN).negated()


class TestMultiply:

    def test_basics(self):
        p = Period(years=1, months=-2, days=3)
        assert p * 2 == Period(years=2, months=-4, days=6)
        assert 2 * p == Period(years=2, months=-4, days=6)
        assert p.multiplied_by(-3) == Period(years=-3, months=6, days=-9)
        assert p * 0 is Period.ZERO
        assert p * 1 is p

    def test_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            Period(years=2**30) * 2

    def test_invalid(self):
        p = Period(years=1)
        with pytest.raises(TypeError, match="unsupported operand"):
            p * 1.5  # type: ignore[operator]


def test_addition():
    p = Period(years=1, months=6, days=3)
    assert p + Period(years=2, months=2, days=2) == Period(
        years=3, months=8, days=5
    )
    assert p + Period() == p
    assert p + Period(years=-1, months=-6, days=-3) is Period.ZERO

    with pytest.raises(ArithmeticOverflow):
        Period(years=INT32_MAX) + Period(years=1)

    with pytest.raises(TypeError, match="unsupported operand"):
        p + 32  # type: ignore[operator]


def test_subtraction():
    p = Period(years=1, months=6, days=3)
    assert p - Period(years=2, months=2, days=2) == Period(
        years=-1, months=4, days=1
    )
    assert p - Period() == p

    with pytest.raises(ArithmeticOverflow):
        Period(days=INT32_MIN) - Period(days=1)

    with pytest.raises(TypeError, match="unsupported operand"):
        p - 32  # type: ignore[operator]


class TestReplace:

    def test_fields(self):
        p = Period(years=1, months=2, days=3)
        assert p.replace(years=2) == Period(years=2, months=2, days=3)
        assert p.replace(months=0, days=0) == Period(years=1)
        assert p.replace() == p

    def test_unknown_field(self):
        with pytest.raises(TypeError, match="weeks"):
            Period().replace(weeks=1)  # type: ignore[call-arg]

    def test_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            Period().replace(days=INT32_MAX + 1)


def test_to_total_months():
    assert Period(years=1, months=2, days=40).to_total_months() == 14
    assert Period(years=-1, months=2).to_total_months() == -10
    assert (
        Period(years=INT32_MAX, months=INT32_MAX).to_total_months()
        == INT32_MAX * 13
    )


class TestNormalized:

    @pytest.mark.parametrize(
        "p, expected",
        [
            (Period(years=1, months=15, days=40), Period.of(2, 3, 40)),
            (Period(years=1, months=-25), Period.of(-1, -1, 0)),
            (Period(years=-1, months=25), Period.of(1, 1, 0)),
            (Period(years=1, months=-12, days=3), Period.of(0, 0, 3)),
            (Period(months=-11), Period.of(0, -11, 0)),
        ],
    )
    def test_folds_months(self, p, expected):
        assert p.normalized() == expected

    def test_unchanged(self):
        p = Period(years=1, months=11)
        assert p.normalized() is p

    def test_overflow(self):
        with pytest.raises(ArithmeticOverflow):
            Period(years=INT32_MAX, months=12).normalized()


class TestBetween:

    @pytest.mark.parametrize(
        "start, end, expected",
        [
            (Date(2010, 1, 15), Date(2011, 3, 18), Period.of(1, 2, 3)),
            (Date(2011, 3, 18), Date(2010, 1, 15), Period.of(-1, -2, -3)),
            (Date(2021, 1, 31), Date(2021, 3, 1), Period.of(0, 1, 1)),
            (Date(2021, 3, 31), Date(2021, 2, 28), Period.of(0, -1, -3)),
            (Date(2021, 3, 1), Date(2021, 1, 31), Period.of(0, -1, -1)),
            (Date(2020, 2, 29), Date(2021, 2, 28), Period.of(0, 11, 30)),
            (Date(2021, 1, 1), Date(2021, 1, 1), Period.ZERO),
        ],
    )
    def test_examples(self, start, end, expected):
        assert Period.between(start, end) == expected

    @pytest.mark.parametrize(
        "start, end",
        [
            (Date(2000, 1, 31), Date(2003, 7, 4)),
            (Date(2003, 7, 4), Date(2000, 1, 31)),
            (Date(1999, 12, 31), Date(2000, 3, 1)),
            (Date(2000, 3, 1), Date(1999, 12, 31)),
            (Date(-5, 6, 30), Date(12, 2, 29)),
        ],
    )
    def test_fields_have_the_same_sign(self, start, end):
        p = Period.between(start, end)
        assert all(f >= 0 for f in p.as_tuple()) or all(
            f <= 0 for f in p.as_tuple()
        )

    def test_from_other_dates(self):
        assert Period.between(date(2010, 1, 15), date(2011, 3, 18)) == (
            Period.of(1, 2, 3)
        )


class TestAddTo:

    @pytest.mark.parametrize(
        "p, d, expected",
        [
            (Period(months=1, days=31), Date(2021, 1, 31), Date(2021, 3, 31)),
            (Period(years=1), Date(2020, 2, 29), Date(2021, 2, 28)),
            (
                Period(years=1, months=1),
                Date(2020, 1, 31),
                Date(2021, 2, 28),
            ),
            (Period(months=-1), Date(2021, 3, 31), Date(2021, 2, 28)),
            (Period(days=-1), Date(2021, 1, 1), Date(2020, 12, 31)),
            (Period(), Date(2021, 1, 1), Date(2021, 1, 1)),
        ],
    )
    def test_dates(self, p, d, expected):
        assert p.add_to(d) == expected
        assert d + p == expected

    def test_years_only_moves_by_years(self):
        t = RecordingTemporal()
        Period(years=2, days=3).add_to(t)
        assert t.calls == [(2, Unit.YEARS), (3, Unit.DAYS)]

    def test_years_and_months_are_combined(self):
        t = RecordingTemporal()
        Period(years=1, months=2).add_to(t)
        assert t.calls == [(14, Unit.MONTHS)]

    def test_zero_fields_are_skipped(self):
        t = RecordingTemporal()
        Period(years=1, months=-12).add_to(t)
        Period.ZERO.add_to(t)
        assert t.calls == []

    def test_calendar_mismatch(self):
        t = RecordingTemporal(calendar="Hijrah")
        with pytest.raises(CalendarMismatch, match="Hijrah"):
            Period(days=1).add_to(t)
        assert t.calls == []

    def test_year_month(self):
        assert Period(years=1, months=2).add_to(
            YearMonth(2021, 11)
        ) == YearMonth(2023, 1)
        with pytest.raises(UnsupportedUnit):
            Period(days=1).add_to(YearMonth(2021, 11))


class TestSubtractFrom:

    @pytest.mark.parametrize(
        "p, d, expected",
        [
            (Period(months=1, days=1), Date(2021, 3, 31), Date(2021, 2, 27)),
            (Period(years=1), Date(2020, 2, 29), Date(2019, 2, 28)),
            (Period(days=-1), Date(2020, 12, 31), Date(2021, 1, 1)),
        ],
    )
    def test_dates(self, p, d, expected):
        assert p.subtract_from(d) == expected
        assert d - p == expected

    def test_moves_backwards(self):
        t = RecordingTemporal()
        Period(years=1, months=2, days=3).subtract_from(t)
        assert t.calls == [(-14, Unit.MONTHS), (-3, Unit.DAYS)]

    def test_calendar_mismatch(self):
        with pytest.raises(CalendarMismatch):
            Period(days=1).subtract_from(RecordingTemporal("Japanese"))


def test_as_tuple():
    assert Period(years=1, months=2, weeks=1, days=3).as_tuple() == (1, 2, 10)
    assert Period.ZERO.as_tuple() == (0, 0, 0)
