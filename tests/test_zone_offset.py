from datetime import timedelta, timezone

import pytest

from isochron import (
    FixedOffsetRules,
    Instant,
    InvalidFormat,
    OffsetCache,
    OutOfRange,
    ZoneId,
    ZoneOffset,
)

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual


def _valid_components():
    for hrs in range(-18, 19):
        for mins in (0, 15, 30, 59):
            for secs in (0, 1, 45):
                if abs(hrs) == 18 and (mins or secs):
                    continue
                if hrs < 0:
                    yield hrs, -mins, -secs
                else:
                    yield hrs, mins, secs
    yield 0, -30, 0
    yield 0, 0, -1


def test_no_constructor():
    with pytest.raises(TypeError, match="ZoneOffset.of"):
        ZoneOffset()


def test_constants():
    assert ZoneOffset.UTC.total_seconds == 0
    assert ZoneOffset.UTC.id == "Z"
    assert ZoneOffset.MAX.total_seconds == 64_800
    assert ZoneOffset.MAX.id == "+18:00"
    assert ZoneOffset.MIN.total_seconds == -64_800
    assert ZoneOffset.MIN.id == "-18:00"


@pytest.mark.parametrize("hrs, mins, secs", list(_valid_components()))
def test_components_round_trip_through_id(hrs, mins, secs):
    offset = ZoneOffset.of_hours_minutes_seconds(hrs, mins, secs)
    assert offset.total_seconds == hrs * 3_600 + mins * 60 + secs
    assert ZoneOffset.of(offset.id) == offset
    assert ZoneOffset.of_total_seconds(offset.total_seconds) == offset


class TestFactories:

    def test_hours(self):
        assert ZoneOffset.of_hours(1).total_seconds == 3_600
        assert ZoneOffset.of_hours(-5).id == "-05:00"
        assert ZoneOffset.of_hours(0) is ZoneOffset.UTC

    def test_hours_minutes(self):
        assert ZoneOffset.of_hours_minutes(5, 30).id == "+05:30"
        assert ZoneOffset.of_hours_minutes(-1, -30).id == "-01:30"
        assert ZoneOffset.of_hours_minutes(0, -30).id == "-00:30"

    @pytest.mark.parametrize(
        "hrs, mins, secs",
        [
            (19, 0, 0),
            (-19, 0, 0),
            (18, 1, 0),
            (-18, 0, -1),
            (1, -1, 0),
            (-1, 0, 1),
            (0, 1, -1),
            (0, -1, 1),
            (0, 60, 0),
            (0, 0, -60),
        ],
    )
    def test_invalid_components(self, hrs, mins, secs):
        with pytest.raises(OutOfRange):
            ZoneOffset.of_hours_minutes_seconds(hrs, mins, secs)

    @pytest.mark.parametrize("secs", [64_801, -64_801, 100_000])
    def test_total_seconds_out_of_range(self, secs):
        with pytest.raises(OutOfRange, match="-18:00 to \\+18:00"):
            ZoneOffset.of_total_seconds(secs)


@pytest.mark.parametrize(
    "total_seconds, expected",
    [
        (0, "Z"),
        (3_600, "+01:00"),
        (-5_400, "-01:30"),
        (3_661, "+01:01:01"),
        (-1, "-00:00:01"),
        (64_800, "+18:00"),
    ],
)
def test_id(total_seconds, expected):
    offset = ZoneOffset.of_total_seconds(total_seconds)
    assert offset.id == expected
    assert str(offset) == expected
    assert repr(offset) == f"ZoneOffset({expected})"


class TestOf:

    @pytest.mark.parametrize(
        "s, expected",
        [
            ("Z", 0),
            ("+5", 18_000),
            ("-5", -18_000),
            ("+05", 18_000),
            ("-05", -18_000),
            ("+01:30", 5_400),
            ("+0130", 5_400),
            ("-01:30:15", -5_415),
            ("-013015", -5_415),
            ("+00:00", 0),
            ("-00:00:01", -1),
            ("+18:00", 64_800),
        ],
    )
    def test_valid(self, s, expected):
        assert ZoneOffset.of(s).total_seconds == expected

    @pytest.mark.parametrize(
        "s",
        [
            "",
            "A",
            "z",
            "5",
            "05",
            "01:30",
            "+1:30",
            "+01:3",
            "+01-30",
            "+0a",
            "+01:30:",
            "+0130:15",
            "+01:3015",
            "+01:30:15:00",
            "*01:30",
            "+٠١",
        ],
    )
    def test_invalid_format(self, s):
        with pytest.raises(InvalidFormat):
            ZoneOffset.of(s)

    @pytest.mark.parametrize("s", ["+19", "-19:00", "+18:01", "+01:60"])
    def test_out_of_range(self, s):
        with pytest.raises(OutOfRange):
            ZoneOffset.of(s)

    def test_utc_is_independent_of_cache(self):
        assert ZoneOffset.of("Z", cache=OffsetCache()) is ZoneOffset.UTC


def test_rules():
    offset = ZoneOffset.of_hours(2)
    rules = offset.rules()
    assert rules == FixedOffsetRules(offset)
    assert rules.is_fixed_offset()
    assert rules.offset_at(Instant.EPOCH) == offset
    assert rules.offset_at(Instant.MAX) == offset
    assert offset.normalized() is offset


def test_is_a_zone_id():
    offset = ZoneOffset.of_hours(2)
    assert isinstance(offset, ZoneId)
    assert ZoneId.of("+02:00") == offset


def test_py_timezone():
    assert ZoneOffset.of_hours_minutes(-1, -30).py_timezone() == timezone(
        timedelta(hours=-1, minutes=-30)
    )
    assert ZoneOffset.UTC.py_timezone() == timezone.utc


def test_equality():
    offset = ZoneOffset.of_hours(1)
    same = ZoneOffset.of_total_seconds(3_600)
    different = ZoneOffset.of_hours(2)
    assert offset == same
    assert not offset == different
    assert not offset == NeverEqual()
    assert offset == AlwaysEqual()
    assert offset != different
    assert not offset != same
    assert hash(offset) == hash(same)
    # non-cached offsets are equal too
    assert ZoneOffset.of_total_seconds(3_601) == ZoneOffset.of("+01:00:01")


class TestOrdering:

    def test_decreasing_total_seconds(self):
        assert ZoneOffset.of_hours(14) < ZoneOffset.of_hours(-12)
        assert ZoneOffset.of_hours(1) > ZoneOffset.of_hours(2)
        assert ZoneOffset.UTC <= ZoneOffset.UTC
        assert ZoneOffset.UTC >= ZoneOffset.UTC
        assert ZoneOffset.MAX < ZoneOffset.UTC < ZoneOffset.MIN

    def test_sorting(self):
        offsets = [ZoneOffset.of_hours(h) for h in (-3, 5, 0, 12, -11)]
        assert [o.id for o in sorted(offsets)] == [
            "+12:00",
            "+05:00",
            "Z",
            "-03:00",
            "-11:00",
        ]

    def test_other_types(self):
        assert ZoneOffset.UTC < AlwaysLarger()
        assert ZoneOffset.UTC > AlwaysSmaller()
        with pytest.raises(TypeError):
            ZoneOffset.UTC < 0  # type: ignore[operator]


class TestCache:

    def test_default_cache_shares_instances(self):
        assert ZoneOffset.of_hours(1) is ZoneOffset.of_hours(1)
        assert ZoneOffset.of("+01:00") is ZoneOffset.of_hours(1)

    def test_quarter_hours_are_interned(self):
        cache = OffsetCache()
        offset = ZoneOffset.of_total_seconds(3_600, cache=cache)
        assert len(cache) == 1
        assert cache.get_by_seconds(3_600) is offset
        assert cache.get_by_id("+01:00") is offset
        assert ZoneOffset.of("+01:00", cache=cache) is offset
        assert ZoneOffset.of_total_seconds(3_600, cache=cache) is offset
        ZoneOffset.of_total_seconds(-900, cache=cache)
        assert len(cache) == 2

    def test_other_offsets_are_not_interned(self):
        cache = OffsetCache()
        ZoneOffset.of_total_seconds(3_601, cache=cache)
        ZoneOffset.of_total_seconds(60, cache=cache)
        assert len(cache) == 0
        assert cache.get_by_seconds(3_601) is None

    def test_intern_keeps_first(self):
        cache = OffsetCache()
        first = ZoneOffset.of_total_seconds(7_200, cache=OffsetCache())
        second = ZoneOffset.of_total_seconds(7_200, cache=OffsetCache())
        assert first is not second
        assert cache.intern(first) is first
        assert cache.intern(second) is first

    def test_results_do_not_depend_on_cache(self):
        cache = OffsetCache()
        before = ZoneOffset.of("+05:30", cache=cache)
        cache.clear()
        assert len(cache) == 0
        after = ZoneOffset.of("+05:30", cache=cache)
        assert before == after
        assert repr(cache) == "OffsetCache(1 offsets)"
