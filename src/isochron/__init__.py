# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - Why is everything in one file?
#   - Flat is better than nested
#   - It prevents circular imports since the classes 'know' about each other
#   - It's easier to vendor (i.e. copy-paste) this library if needed
# - The calendar arithmetic works on plain ints and mirrors the 32/64-bit
#   limits of the ISO-8601 date/time model. Every combining operation checks
#   these limits explicitly, since Python ints never overflow by themselves.
# - Where integer division must round towards zero (instead of Python's
#   flooring), this is done with _trunc_div/_trunc_divmod.
from __future__ import annotations

__version__ = "0.1.0"

import enum
import logging
import os
import re
import struct
import zoneinfo
from abc import ABC, abstractmethod
from datetime import (
    date as _date,
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
)
from functools import lru_cache
from importlib import resources
from time import localtime, time_ns
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    BinaryIO,
    Callable,
    ClassVar,
    Iterator,
    Mapping,
    Protocol,
    TypeVar,
    no_type_check,
    overload,
)
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

if TYPE_CHECKING:
    from typing import final
else:

    def final(cls):

        def init_subclass_not_allowed(cls, **kwargs):
            raise TypeError("Subclassing not allowed")

        cls.__init_subclass__ = classmethod(init_subclass_not_allowed)
        return cls


__all__ = [
    # errors
    "DateTimeError",
    "OutOfRange",
    "InvalidFormat",
    "UnknownZone",
    "CalendarMismatch",
    "ArithmeticOverflow",
    "UnsupportedUnit",
    # calendar
    "is_leap",
    "Unit",
    "Temporal",
    "Formatter",
    "Month",
    "DayOfWeek",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
    "Date",
    "Year",
    "YearMonth",
    "MonthDay",
    "Period",
    # time-line
    "Duration",
    "Instant",
    "hours",
    "minutes",
    "seconds",
    "Clock",
    "SystemClock",
    "FixedClock",
    "OffsetClock",
    "TickClock",
    # zones
    "ZoneId",
    "ZoneOffset",
    "ZoneRegion",
    "OffsetCache",
    "ZoneRules",
    "FixedOffsetRules",
    "ZoneInfoRules",
    "ZoneRulesProvider",
    "ZoneInfoProvider",
    "get_default_provider",
    "set_default_provider",
]

_log = logging.getLogger("isochron")


class DateTimeError(ValueError):
    """Base class for all errors raised by isochron"""


class OutOfRange(DateTimeError):
    """A value is outside of its valid range"""


class InvalidFormat(DateTimeError):
    """A string has an invalid format

    The offending string is available as :attr:`text`.
    """

    def __init__(self, msg: str = "", text: str | None = None) -> None:
        super().__init__(msg)
        self.text = text

    @staticmethod
    def for_text(kind: str, text: str) -> InvalidFormat:
        return InvalidFormat(
            f"Text cannot be parsed to a {kind}: {text}", text
        )


class UnknownZone(DateTimeError):
    """A time zone ID is valid, but has no known rules

    The ID is available as :attr:`zone_id`.
    """

    def __init__(self, msg: str = "", zone_id: str | None = None) -> None:
        super().__init__(msg)
        self.zone_id = zone_id

    @staticmethod
    def for_id(zone_id: str) -> UnknownZone:
        return UnknownZone(f"Unknown time-zone ID: {zone_id}", zone_id)


class CalendarMismatch(DateTimeError):
    """An ISO amount of time is applied to a non-ISO temporal"""

    @staticmethod
    def for_calendar(calendar: str) -> CalendarMismatch:
        return CalendarMismatch(
            f"Chronology mismatch, expected: ISO, actual: {calendar}"
        )


class ArithmeticOverflow(DateTimeError, OverflowError):
    """A calculation exceeds the range of its result type"""


class UnsupportedUnit(DateTimeError):
    """A temporal doesn't support the given unit"""

    @staticmethod
    def for_unit(unit: Unit, temporal: object) -> UnsupportedUnit:
        return UnsupportedUnit(
            f"Unsupported unit for {type(temporal).__name__}: {unit.name}"
        )


def _unable_to_obtain(kind: str, temporal: object) -> DateTimeError:
    return DateTimeError(
        f"Unable to obtain {kind} from {temporal!r} "
        f"of type {type(temporal).__qualname__}"
    )


def _check_int32(value: int) -> int:
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ArithmeticOverflow(f"integer overflow: {value}")
    return value


def _check_int64(value: int) -> int:
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ArithmeticOverflow(f"long overflow: {value}")
    return value


def _parse_int(digits: str) -> int:
    try:
        return int(digits)
    except ValueError as ex:
        # int() refuses very long digit strings
        raise ArithmeticOverflow(
            f"Number too large: {digits[:20]}... ({len(digits)} digits)"
        ) from ex


def _check_field(name: str, value: int, low: int, high: int) -> int:
    if not low <= value <= high:
        raise OutOfRange(
            f"Invalid value for {name} (valid values {low} - {high}): {value}"
        )
    return value


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    q = _trunc_div(a, b)
    return q, a - q * b


def _format_year(year: int) -> str:
    if abs(year) < 1000:
        return f"-{-year:04}" if year < 0 else f"{year:04}"
    return f"+{year}" if year > 9999 else str(year)


def is_leap(year: int) -> bool:
    """Whether the year is a leap year in the proleptic Gregorian calendar

    Example
    -------

    >>> is_leap(2000), is_leap(1900), is_leap(2024)
    (True, False, True)

    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


class Unit(enum.Enum):
    """The date-based units in which temporals can be moved"""

    DAYS = "Days"
    WEEKS = "Weeks"
    MONTHS = "Months"
    YEARS = "Years"
    DECADES = "Decades"
    CENTURIES = "Centuries"
    MILLENNIA = "Millennia"


_YEARS_PER_UNIT = {
    Unit.YEARS: 1,
    Unit.DECADES: 10,
    Unit.CENTURIES: 100,
    Unit.MILLENNIA: 1_000,
}
_TTemporal = TypeVar("_TTemporal", bound="Temporal")
_T = TypeVar("_T")


class Temporal(ABC):
    """A date-like value that can be moved by an amount of a :class:`Unit`

    :class:`Period` uses only this interface to add itself to a value,
    so any object implementing it (and using the ISO calendar) can be the
    target of period arithmetic.
    """

    __slots__ = ()

    calendar: ClassVar[str] = "ISO"
    """The calendar system the value is expressed in"""

    @abstractmethod
    def plus(self: _TTemporal, amount: int, unit: Unit, /) -> _TTemporal:
        """Move the value forward by the given amount of the unit

        Raises
        ------
        UnsupportedUnit
            If the value can't be moved in this unit
        """

    def minus(self: _TTemporal, amount: int, unit: Unit, /) -> _TTemporal:
        """Move the value backward by the given amount of the unit"""
        return self.plus(-amount, unit)


class Formatter(Protocol):
    """The interface of a (locale-aware) text formatter

    Formatting engines are not part of this library, but any object with
    these two methods can be passed to the ``format()`` and ``parse()``
    methods of the date-like types.
    """

    def format(self, value: object, /) -> str: ...

    def parse(self, text: str, query: Callable[[object], _T], /) -> _T: ...


class Month(enum.Enum):
    """The months of the year; ``.value`` corresponds with ISO numbering."""

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

    @classmethod
    def of(cls, month: int, /) -> Month:
        """Get the month from its number, 1-12

        Raises
        ------
        OutOfRange
            If the number is not in 1-12
        """
        if not 1 <= month <= 12:
            raise OutOfRange(f"Invalid value for MonthOfYear: {month}")
        return _MONTHS[month - 1]

    @classmethod
    def from_temporal(cls, temporal: object, /) -> Month:
        """Get the month of any object with a ``month`` field

        Example
        -------

        >>> Month.from_temporal(Date(2021, 3, 4))
        <Month.MARCH: 3>
        >>> Month.from_temporal(datetime.date(2021, 3, 4))
        <Month.MARCH: 3>

        """
        if isinstance(temporal, Month):
            return temporal
        try:
            return cls.of(temporal.month)  # type: ignore[attr-defined]
        except (AttributeError, TypeError, DateTimeError) as ex:
            raise _unable_to_obtain("Month", temporal) from ex

    def length(self, leap_year: bool) -> int:
        """The number of days in the month

        Example
        -------

        >>> Month.FEBRUARY.length(leap_year=True)
        29

        """
        i = self.value - 1
        return _MONTH_MAX_LENGTH[i] if leap_year else _MONTH_MIN_LENGTH[i]

    def min_length(self) -> int:
        """The minimum number of days in the month (28 for February)"""
        return _MONTH_MIN_LENGTH[self.value - 1]

    def max_length(self) -> int:
        """The maximum number of days in the month (29 for February)"""
        return _MONTH_MAX_LENGTH[self.value - 1]

    def first_day_of_year(self, leap_year: bool) -> int:
        """The day-of-year (1-based) on which the month starts

        Example
        -------

        >>> Month.MARCH.first_day_of_year(leap_year=False)
        60
        >>> Month.MARCH.first_day_of_year(leap_year=True)
        61

        """
        leap_day = 1 if leap_year and self.value > 2 else 0
        return _MONTH_FIRST_DAY[self.value - 1] + leap_day

    def first_month_of_quarter(self) -> Month:
        return _MONTHS[(self.value - 1) // 3 * 3]

    def plus(self, months: int, /) -> Month:
        """The month a number of months later, wrapping around the year

        Example
        -------

        >>> Month.NOVEMBER.plus(3)
        <Month.FEBRUARY: 2>
        >>> Month.JANUARY.plus(-1)
        <Month.DECEMBER: 12>

        """
        return _MONTHS[(self.value - 1 + months) % 12]

    def minus(self, months: int, /) -> Month:
        return self.plus(-months)


_MONTHS = tuple(Month)
# Calendar tables, indexed by month ordinal (January is 0)
_MONTH_MIN_LENGTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_MONTH_MAX_LENGTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
# Day-of-year of the first day of each month, in a non-leap year
_MONTH_FIRST_DAY = (1, 32, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)


class DayOfWeek(enum.Enum):
    """The days of the week; ``.value`` corresponds with ISO numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @classmethod
    def of(cls, day_of_week: int, /) -> DayOfWeek:
        """Get the day from its ISO number, 1 (Monday) - 7 (Sunday)

        Raises
        ------
        OutOfRange
            If the number is not in 1-7
        """
        if not 1 <= day_of_week <= 7:
            raise OutOfRange(f"Invalid value for DayOfWeek: {day_of_week}")
        return _DAYS_OF_WEEK[day_of_week - 1]

    @classmethod
    def from_temporal(cls, temporal: object, /) -> DayOfWeek:
        """Get the day of the week of a date-like object

        Both :class:`Date` and :class:`~datetime.date` are supported.
        """
        if isinstance(temporal, DayOfWeek):
            return temporal
        try:
            if isinstance(temporal, _date):
                return cls.of(temporal.isoweekday())
            value = temporal.day_of_week()  # type: ignore[attr-defined]
            return value if isinstance(value, DayOfWeek) else cls.of(value)
        except (AttributeError, TypeError, DateTimeError) as ex:
            raise _unable_to_obtain("DayOfWeek", temporal) from ex

    def plus(self, days: int, /) -> DayOfWeek:
        """The day a number of days later, wrapping around the week

        Example
        -------

        >>> DayOfWeek.MONDAY.plus(-1)
        <DayOfWeek.SUNDAY: 7>

        """
        return _DAYS_OF_WEEK[(self.value - 1 + days) % 7]

    def minus(self, days: int, /) -> DayOfWeek:
        return self.plus(-days)


_DAYS_OF_WEEK = tuple(DayOfWeek)
MONDAY = DayOfWeek.MONDAY
TUESDAY = DayOfWeek.TUESDAY
WEDNESDAY = DayOfWeek.WEDNESDAY
THURSDAY = DayOfWeek.THURSDAY
FRIDAY = DayOfWeek.FRIDAY
SATURDAY = DayOfWeek.SATURDAY
SUNDAY = DayOfWeek.SUNDAY


class _ImmutableBase:
    __slots__ = ()

    # Immutable classes don't need to be copied
    @no_type_check
    def __copy__(self):
        return self

    @no_type_check
    def __deepcopy__(self, _):
        return self


@final
class Duration(_ImmutableBase):
    """An exact amount of elapsed time, with nanosecond precision

    The inputs are normalized, so 90 minutes becomes 1 hour and 30 minutes,
    for example.

    Examples
    --------

    >>> d = Duration(hours=1, minutes=30)
    Duration(01:30:00)
    >>> d.in_minutes()
    90.0

    """

    __slots__ = ("_total_ns",)

    def __init__(
        self,
        *,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        milliseconds: float = 0,
        microseconds: float = 0,
        nanoseconds: int = 0,
    ) -> None:
        assert type(nanoseconds) is int  # catch this common mistake
        self._total_ns = (
            # Cast individual components to int to avoid floating point errors
            int(hours * 3_600_000_000_000)
            + int(minutes * 60_000_000_000)
            + int(seconds * 1_000_000_000)
            + int(milliseconds * 1_000_000)
            + int(microseconds * 1_000)
            + nanoseconds
        )

    ZERO: ClassVar[Duration]
    """A duration of zero"""

    def in_hours(self) -> float:
        """The total duration in hours

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d.in_hours()
        1.5

        """
        return self._total_ns / 3_600_000_000_000

    def in_minutes(self) -> float:
        """The total duration in minutes

        Example
        -------

        >>> d = Duration(hours=1, minutes=30, seconds=30)
        >>> d.in_minutes()
        90.5

        """
        return self._total_ns / 60_000_000_000

    def in_seconds(self) -> float:
        """The total duration in seconds

        Example
        -------

        >>> d = Duration(minutes=2, seconds=1, milliseconds=500)
        >>> d.in_seconds()
        121.5

        """
        return self._total_ns / 1_000_000_000

    def in_nanoseconds(self) -> int:
        """The total duration in nanoseconds

        >>> d = Duration(seconds=2, nanoseconds=50)
        >>> d.in_nanoseconds()
        2_000_000_050

        """
        return self._total_ns

    def to_millis(self) -> int:
        """The total duration in whole milliseconds, rounded down

        Example
        -------

        >>> Duration(nanoseconds=1_999_999).to_millis()
        1
        >>> Duration(nanoseconds=-1).to_millis()
        -1

        Raises
        ------
        ArithmeticOverflow
            If the result doesn't fit in a 64-bit integer
        """
        return _check_int64(self._total_ns // 1_000_000)

    def is_negative(self) -> bool:
        return self._total_ns < 0

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d == Duration(minutes=90)
        True
        >>> d == Duration(hours=2)
        False

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns == other._total_ns

    def __hash__(self) -> int:
        return hash(self._total_ns)

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns < other._total_ns

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns <= other._total_ns

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns > other._total_ns

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns >= other._total_ns

    def __bool__(self) -> bool:
        """True if the duration is non-zero

        Example
        -------

        >>> bool(Duration())
        False
        >>> bool(Duration(minutes=1))
        True

        """
        return bool(self._total_ns)

    def __add__(self, other: Duration) -> Duration:
        """Add two durations together

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d + Duration(minutes=30)
        Duration(02:00:00)

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(nanoseconds=self._total_ns + other._total_ns)

    def __sub__(self, other: Duration) -> Duration:
        """Subtract two durations

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d - Duration(minutes=30)
        Duration(01:00:00)

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(nanoseconds=self._total_ns - other._total_ns)

    def __mul__(self, other: float) -> Duration:
        """Multiply by a number

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d * 2.5
        Duration(03:45:00)

        """
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Duration(nanoseconds=int(self._total_ns * other))

    def __neg__(self) -> Duration:
        """Negate the duration

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> -d
        Duration(-01:30:00)

        """
        return Duration(nanoseconds=-self._total_ns)

    @overload
    def __truediv__(self, other: float) -> Duration: ...

    @overload
    def __truediv__(self, other: Duration) -> float: ...

    def __truediv__(self, other: float | Duration) -> Duration | float:
        """Divide by a number or another duration

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d / 2
        Duration(00:45:00)
        >>> d / Duration(minutes=30)
        3.0

        """
        if isinstance(other, Duration):
            return self._total_ns / other._total_ns
        elif isinstance(other, (int, float)):
            return Duration(nanoseconds=int(self._total_ns / other))
        return NotImplemented

    def __abs__(self) -> Duration:
        """The absolute value of the duration

        Example
        -------

        >>> d = Duration(hours=-1, minutes=-30)
        >>> abs(d)
        Duration(01:30:00)

        """
        return Duration(nanoseconds=abs(self._total_ns))

    def canonical_format(self) -> str:
        """The duration in canonical format.

        The format is:

        .. code-block:: text

           HH:MM:SS(.fffffffff)

        For example:

        .. code-block:: text

           01:24:45.0089

        """
        hrs, mins, secs, ns = abs(self).as_tuple()
        return f"{'-'*(self._total_ns < 0)}{hrs:02}:{mins:02}:{secs:02}" + (
            f".{ns:09}".rstrip("0") * bool(ns)
        )

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Duration:
        """Create from a canonical string representation.

        Inverse of :meth:`canonical_format`

        Example
        -------

        >>> Duration.from_canonical_format("01:30:00")
        Duration(01:30:00)

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        ArithmeticOverflow
            If the hours have too many digits to be converted

        """
        if not (match := _match_duration(s)):
            raise InvalidFormat.for_text("Duration", s)
        sign, hrs, mins, secs, fraction = match.groups()
        return cls(
            nanoseconds=(-1 if sign == "-" else 1)
            * (
                _parse_int(hrs) * 3_600_000_000_000
                + int(mins) * 60_000_000_000
                + int(secs) * 1_000_000_000
                + int((fraction or "").ljust(9, "0"))
            )
        )

    __str__ = canonical_format

    def py_timedelta(self) -> _timedelta:
        """Convert to a :class:`~datetime.timedelta`

        Inverse of :meth:`from_py_timedelta`.
        Nanoseconds are truncated to microsecond precision.

        Example
        -------

        >>> d = Duration(hours=1, minutes=30)
        >>> d.py_timedelta()
        timedelta(seconds=5400)

        """
        return _timedelta(microseconds=_trunc_div(self._total_ns, 1_000))

    @classmethod
    def from_py_timedelta(cls, td: _timedelta, /) -> Duration:
        """Create from a :class:`~datetime.timedelta`

        Inverse of :meth:`py_timedelta`

        Example
        -------

        >>> Duration.from_py_timedelta(timedelta(seconds=5400))
        Duration(01:30:00)

        """
        return Duration(
            nanoseconds=(
                (td.days * 86_400 + td.seconds) * 1_000_000
                + td.microseconds
            )
            * 1_000
        )

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Convert to a tuple of (hours, minutes, seconds, nanoseconds)

        Example
        -------

        >>> d = Duration(hours=1, minutes=30, nanoseconds=5_000_000_090)
        >>> d.as_tuple()
        (1, 30, 5, 90)

        """
        hrs, rem = divmod(abs(self._total_ns), 3_600_000_000_000)
        mins, rem = divmod(rem, 60_000_000_000)
        secs, ns = divmod(rem, 1_000_000_000)
        return (
            (hrs, mins, secs, ns)
            if self._total_ns >= 0
            else (-hrs, -mins, -secs, -ns)
        )

    def __repr__(self) -> str:
        return f"Duration({self})"


def hours(i: int, /) -> Duration:
    """Create a :class:`~Duration` with the given number of hours.
    ``hours(1) == Duration(hours=1)``
    """
    return Duration(hours=i)


def minutes(i: int, /) -> Duration:
    """Create a :class:`Duration` with the given number of minutes.
    ``minutes(1) == Duration(minutes=1)``
    """
    return Duration(minutes=i)


def seconds(i: int, /) -> Duration:
    """Create a :class:`Duration` with the given number of seconds.
    ``seconds(1) == Duration(seconds=1)``
    """
    return Duration(seconds=i)


@final
class Instant(_ImmutableBase):
    """An exact point on the UTC time-line, with nanosecond precision

    The time-scale ignores leap seconds: every day has exactly 86,400
    seconds. The supported range is from ``-1000000000-01-01T00:00:00Z``
    to ``1000000000-12-31T23:59:59.999999999Z``.

    Example
    -------

    >>> Instant.from_epoch_second(1_000_000_000)
    Instant(2001-09-09T01:46:40Z)

    """

    __slots__ = ("_secs", "_nanos")

    EPOCH: ClassVar[Instant]
    """1970-01-01T00:00:00Z"""
    MIN: ClassVar[Instant]
    """The earliest supported instant"""
    MAX: ClassVar[Instant]
    """The latest supported instant"""

    def __init__(self) -> None:
        raise TypeError(
            "Instant instances cannot be created through the constructor. "
            "Use `Instant.from_epoch_second` or `Instant.now` instead."
        )

    @classmethod
    def _from_parts(cls, secs: int, nanos: int) -> Instant:
        if not _MIN_EPOCH_SECOND <= secs <= _MAX_EPOCH_SECOND:
            raise OutOfRange("Instant exceeds minimum or maximum instant")
        self = _object_new(cls)
        self._secs = secs
        self._nanos = nanos
        return self

    @classmethod
    def from_epoch_second(
        cls, epoch_second: int, /, nano_adjustment: int = 0
    ) -> Instant:
        """Create from seconds since 1970-01-01T00:00:00Z

        The nano adjustment may be negative or exceed one second.

        Example
        -------

        >>> Instant.from_epoch_second(3, nano_adjustment=-1)
        Instant(1970-01-01T00:00:02.999999999Z)

        Raises
        ------
        OutOfRange
            If the result is outside the supported range
        """
        extra_secs, nanos = divmod(nano_adjustment, 1_000_000_000)
        return cls._from_parts(epoch_second + extra_secs, nanos)

    @classmethod
    def from_epoch_milli(cls, epoch_milli: int, /) -> Instant:
        """Create from milliseconds since 1970-01-01T00:00:00Z"""
        secs, millis = divmod(epoch_milli, 1_000)
        return cls._from_parts(secs, millis * 1_000_000)

    @classmethod
    def now(cls, clock: Clock | None = None) -> Instant:
        """The current instant, read from the given clock

        Uses the system UTC clock if no clock is given.
        """
        return (clock or Clock.system_utc()).instant()

    @property
    def epoch_second(self) -> int:
        return self._secs

    @property
    def nano(self) -> int:
        """The nanosecond within the second, always 0-999,999,999"""
        return self._nanos

    def to_epoch_milli(self) -> int:
        """Milliseconds since 1970-01-01T00:00:00Z, rounded down

        Raises
        ------
        ArithmeticOverflow
            If the result doesn't fit in a 64-bit integer
        """
        return _check_int64(self._secs * 1_000 + self._nanos // 1_000_000)

    def _total_ns(self) -> int:
        return self._secs * 1_000_000_000 + self._nanos

    def __add__(self, other: Duration) -> Instant:
        """Move the instant forward by a duration

        Example
        -------

        >>> Instant.EPOCH + Duration(hours=1)
        Instant(1970-01-01T01:00:00Z)

        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Instant._from_parts(
            *divmod(self._total_ns() + other._total_ns, 1_000_000_000)
        )

    @overload
    def __sub__(self, other: Duration) -> Instant: ...

    @overload
    def __sub__(self, other: Instant) -> Duration: ...

    def __sub__(self, other: Duration | Instant) -> Instant | Duration:
        """Move the instant backward by a duration,
        or get the duration between two instants

        Example
        -------

        >>> Instant.from_epoch_second(90) - Instant.EPOCH
        Duration(00:01:30)

        """
        if isinstance(other, Instant):
            return Duration(nanoseconds=self._total_ns() - other._total_ns())
        elif isinstance(other, Duration):
            return self + (-other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._secs == other._secs and self._nanos == other._nanos

    def __hash__(self) -> int:
        return hash((self._secs, self._nanos))

    def __lt__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return (self._secs, self._nanos) < (other._secs, other._nanos)

    def __le__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return (self._secs, self._nanos) <= (other._secs, other._nanos)

    def __gt__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return (self._secs, self._nanos) > (other._secs, other._nanos)

    def __ge__(self, other: Instant) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return (self._secs, self._nanos) >= (other._secs, other._nanos)

    def canonical_format(self) -> str:
        """The instant in ISO 8601 format, in UTC.

        The fraction of the second is written in groups of three digits,
        and omitted if zero.

        Example
        -------

        >>> Instant.from_epoch_milli(1_500).canonical_format()
        '1970-01-01T00:00:01.500Z'

        """
        days, secs_of_day = divmod(self._secs, 86_400)
        year, month, day = _civil_from_epoch_day(days)
        hrs, rem = divmod(secs_of_day, 3_600)
        mins, secs = divmod(rem, 60)
        nanos = self._nanos
        if nanos == 0:
            fraction = ""
        elif nanos % 1_000_000 == 0:
            fraction = f".{nanos // 1_000_000:03}"
        elif nanos % 1_000 == 0:
            fraction = f".{nanos // 1_000:06}"
        else:
            fraction = f".{nanos:09}"
        return (
            f"{_format_year(year)}-{month:02}-{day:02}"
            f"T{hrs:02}:{mins:02}:{secs:02}{fraction}Z"
        )

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Instant:
        """Create from a canonical string representation.

        Inverse of :meth:`canonical_format`

        Example
        -------

        >>> Instant.from_canonical_format("2001-09-09T01:46:40Z")
        Instant(2001-09-09T01:46:40Z)

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        OutOfRange
            If a field is out of range
        """
        if not (match := _match_instant(s)):
            raise InvalidFormat.for_text("Instant", s)
        year, month, day, hrs, mins, secs, fraction = match.groups()
        # the date is validated separately: instants exceed the date range
        _check_field("MonthOfYear", int(month), 1, 12)
        if int(day) > Month.of(int(month)).length(is_leap(int(year))):
            raise OutOfRange(f"Invalid date: {s[:-1]}")
        _check_field("HourOfDay", int(hrs), 0, 23)
        _check_field("MinuteOfHour", int(mins), 0, 59)
        _check_field("SecondOfMinute", int(secs), 0, 59)
        epoch_day = _epoch_day(int(year), int(month), int(day))
        return cls._from_parts(
            epoch_day * 86_400 + int(hrs) * 3_600 + int(mins) * 60 + int(secs),
            int((fraction or "").ljust(9, "0")),
        )

    __str__ = canonical_format

    def __repr__(self) -> str:
        return f"Instant({self})"


def _epoch_day(year: int, month: int, day: int) -> int:
    total = 365 * year
    if year >= 0:
        total += (year + 3) // 4 - (year + 99) // 100 + (year + 399) // 400
    else:
        total -= (-year) // 4 - (-year) // 100 + (-year) // 400
    total += (367 * month - 362) // 12
    total += day - 1
    if month > 2:
        total -= 1 if is_leap(year) else 2
    return total - _DAYS_0000_TO_1970


def _civil_from_epoch_day(epoch_day: int) -> tuple[int, int, int]:
    # Works on a year starting in March, so the leap day is at the end
    zero_day = epoch_day + _DAYS_0000_TO_1970 - 60
    adjust = 0
    if zero_day < 0:
        adjust_cycles = _trunc_div(zero_day + 1, _DAYS_PER_CYCLE) - 1
        adjust = adjust_cycles * 400
        zero_day -= adjust_cycles * _DAYS_PER_CYCLE
    year_est = (400 * zero_day + 591) // _DAYS_PER_CYCLE
    doy_est = zero_day - (
        365 * year_est + year_est // 4 - year_est // 100 + year_est // 400
    )
    if doy_est < 0:
        year_est -= 1
        doy_est = zero_day - (
            365 * year_est + year_est // 4 - year_est // 100 + year_est // 400
        )
    march_month0 = (doy_est * 5 + 2) // 153
    month = (march_month0 + 2) % 12 + 1
    day = doy_est - (march_month0 * 306 + 5) // 10 + 1
    return year_est + adjust + march_month0 // 10, month, day


@final
class Date(_ImmutableBase, Temporal):
    """A date without a time component, in the proleptic Gregorian calendar

    Years from -999,999,999 to 999,999,999 are supported.

    Example
    -------

    >>> d = Date(2021, 1, 2)
    Date(2021-01-02)

    """

    __slots__ = ("_year", "_month", "_day")

    MIN: ClassVar[Date]
    """The earliest supported date, ``-999999999-01-01``"""
    MAX: ClassVar[Date]
    """The latest supported date, ``+999999999-12-31``"""

    def __init__(self, year: int, month: int, day: int) -> None:
        _check_field("Year", year, _MIN_YEAR, _MAX_YEAR)
        _check_field("MonthOfYear", month, 1, 12)
        _check_field("DayOfMonth", day, 1, 31)
        if day > 28 and day > _MONTHS[month - 1].length(is_leap(year)):
            if day == 29:
                raise OutOfRange(
                    f"Invalid date 'February 29' as '{year}' "
                    "is not a leap year"
                )
            raise OutOfRange(
                f"Invalid date '{_MONTHS[month - 1].name} {day}'"
            )
        self._year = year
        self._month = month
        self._day = day

    @classmethod
    def _unchecked(cls, year: int, month: int, day: int) -> Date:
        self = _object_new(cls)
        self._year = year
        self._month = month
        self._day = day
        return self

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @classmethod
    def from_epoch_day(cls, epoch_day: int, /) -> Date:
        """Create from the number of days since 1970-01-01

        Example
        -------

        >>> Date.from_epoch_day(365)
        Date(1971-01-01)

        """
        _check_field("EpochDay", epoch_day, _MIN_EPOCH_DAY, _MAX_EPOCH_DAY)
        return cls._unchecked(*_civil_from_epoch_day(epoch_day))

    def to_epoch_day(self) -> int:
        """The number of days since 1970-01-01

        Example
        -------

        >>> Date(1969, 12, 31).to_epoch_day()
        -1

        """
        return _epoch_day(self._year, self._month, self._day)

    @classmethod
    def from_year_day(cls, year: int, day_of_year: int) -> Date:
        """Create from a year and a day-of-year (1-366)

        Example
        -------

        >>> Date.from_year_day(2020, 60)
        Date(2020-02-29)

        """
        _check_field("Year", year, _MIN_YEAR, _MAX_YEAR)
        _check_field("DayOfYear", day_of_year, 1, 366)
        leap = is_leap(year)
        if day_of_year == 366 and not leap:
            raise OutOfRange(
                f"Invalid date 'DayOfYear 366' as '{year}' is not a leap year"
            )
        month = Month.of((day_of_year - 1) // 31 + 1)
        last_day = month.first_day_of_year(leap) + month.length(leap) - 1
        if day_of_year > last_day:
            month = month.plus(1)
        day = day_of_year - month.first_day_of_year(leap) + 1
        return cls._unchecked(year, month.value, day)

    @classmethod
    def from_instant(cls, instant: Instant, zone: ZoneId) -> Date:
        """The date at the instant, as observed in the zone

        Example
        -------

        >>> i = Instant.from_canonical_format("2021-01-01T23:30:00Z")
        >>> Date.from_instant(i, ZoneOffset.of_hours(1))
        Date(2021-01-02)

        """
        offset = zone.rules().offset_at(instant)
        return cls.from_epoch_day(
            (instant.epoch_second + offset.total_seconds) // 86_400
        )

    @classmethod
    def now(cls, clock: Clock | None = None) -> Date:
        """The current date, according to the clock and its zone

        Uses the system clock in the default zone if no clock is given.
        """
        clock = clock or Clock.system_default_zone()
        return cls.from_instant(clock.instant(), clock.zone)

    @classmethod
    def from_temporal(cls, temporal: object, /) -> Date:
        """Create from any object with ``year``, ``month``, ``day`` fields,
        such as a :class:`~datetime.date`
        """
        if isinstance(temporal, Date):
            return temporal
        try:
            return cls(
                temporal.year,  # type: ignore[attr-defined]
                temporal.month,  # type: ignore[attr-defined]
                temporal.day,  # type: ignore[attr-defined]
            )
        except (AttributeError, TypeError, DateTimeError) as ex:
            raise _unable_to_obtain("Date", temporal) from ex

    def day_of_week(self) -> DayOfWeek:
        """The day of the week

        Example
        -------

        >>> Date(2021, 1, 2).day_of_week()
        <DayOfWeek.SATURDAY: 6>

        """
        return _DAYS_OF_WEEK[(self.to_epoch_day() + 3) % 7]

    def day_of_year(self) -> int:
        return (
            _MONTHS[self._month - 1].first_day_of_year(self.is_leap_year())
            + self._day
            - 1
        )

    def is_leap_year(self) -> bool:
        return is_leap(self._year)

    def length_of_month(self) -> int:
        return _MONTHS[self._month - 1].length(self.is_leap_year())

    def length_of_year(self) -> int:
        return 366 if self.is_leap_year() else 365

    def plus(self, amount: int, unit: Unit, /) -> Date:
        """Move the date forward by an amount of the given unit

        When moving by months or years, the day is clamped to the last
        valid day of the resulting month.

        Example
        -------

        >>> Date(2021, 1, 31).plus(1, Unit.MONTHS)
        Date(2021-02-28)
        >>> Date(2021, 1, 31).plus(-2, Unit.WEEKS)
        Date(2021-01-17)

        Raises
        ------
        OutOfRange
            If the result is outside the supported range
        """
        if unit is Unit.DAYS:
            return self._plus_days(amount)
        elif unit is Unit.WEEKS:
            return self._plus_days(_check_int64(amount * 7))
        elif unit is Unit.MONTHS:
            return self._plus_months(amount)
        elif unit in _YEARS_PER_UNIT:
            return self._plus_years(
                _check_int64(amount * _YEARS_PER_UNIT[unit])
            )
        raise UnsupportedUnit.for_unit(unit, self)

    def _plus_days(self, days: int) -> Date:
        if days == 0:
            return self
        return Date.from_epoch_day(_check_int64(self.to_epoch_day() + days))

    def _plus_months(self, months: int) -> Date:
        if months == 0:
            return self
        year, month0 = divmod(self._year * 12 + self._month - 1 + months, 12)
        return _resolve_previous_valid(
            _check_field("Year", year, _MIN_YEAR, _MAX_YEAR),
            month0 + 1,
            self._day,
        )

    def _plus_years(self, years: int) -> Date:
        if years == 0:
            return self
        return _resolve_previous_valid(
            _check_field("Year", self._year + years, _MIN_YEAR, _MAX_YEAR),
            self._month,
            self._day,
        )

    def add(
        self, years: int = 0, months: int = 0, weeks: int = 0, days: int = 0
    ) -> Date:
        """Add a components to a date.

        Years and months are added together first, then weeks and days.

        Example
        -------

        >>> d = Date(2021, 1, 2)
        >>> d.add(years=1, months=2, days=3)
        Date(2022-03-05)

        >>> Date(2020, 2, 29).add(years=1)
        Date(2021-02-28)

        """
        return self._plus_months(years * 12 + months)._plus_days(
            weeks * 7 + days
        )

    def until(self, end: Date, /) -> Period:
        """The period between this date (inclusive) and the end (exclusive)

        Whole months are counted first, then the remaining days.
        If the end is before this date, all components are negative.

        Example
        -------

        >>> Date(2010, 1, 15).until(Date(2011, 3, 18))
        Period(P1Y2M3D)
        >>> Date(2011, 3, 18).until(Date(2010, 1, 15))
        Period(P-1Y-2M-3D)

        """
        total_months = end._proleptic_month() - self._proleptic_month()
        days = end._day - self._day
        if total_months > 0 and days < 0:
            total_months -= 1
            days = self._plus_months(total_months).days_until(end)
        elif total_months < 0 and days > 0:
            total_months += 1
            days -= end.length_of_month()
        years, months = _trunc_divmod(total_months, 12)
        return Period.of(years, months, days)

    def days_until(self, end: Date, /) -> int:
        """The number of days between this date and the end

        Example
        -------

        >>> Date(2021, 1, 1).days_until(Date(2021, 3, 1))
        59

        """
        return end.to_epoch_day() - self.to_epoch_day()

    def amount_until(self, end: Date, unit: Unit, /) -> int:
        """The number of complete units between this date and the end

        Example
        -------

        >>> Date(2021, 1, 31).amount_until(Date(2021, 2, 28), Unit.MONTHS)
        0

        """
        if unit is Unit.DAYS:
            return self.days_until(end)
        elif unit is Unit.WEEKS:
            return _trunc_div(self.days_until(end), 7)
        months = _trunc_div(
            end._proleptic_month() * 32
            + end._day
            - (self._proleptic_month() * 32 + self._day),
            32,
        )
        if unit is Unit.MONTHS:
            return months
        elif unit in _YEARS_PER_UNIT:
            return _trunc_div(months, 12 * _YEARS_PER_UNIT[unit])
        raise UnsupportedUnit.for_unit(unit, self)

    def _proleptic_month(self) -> int:
        return self._year * 12 + self._month - 1

    def __add__(self, other: Period) -> Date:
        """Add a period to the date

        Example
        -------

        >>> Date(2021, 1, 31) + Period(months=1, days=1)
        Date(2021-03-01)

        """
        if not isinstance(other, Period):
            return NotImplemented
        return other.add_to(self)

    @overload
    def __sub__(self, other: Period) -> Date: ...

    @overload
    def __sub__(self, other: Date) -> Period: ...

    def __sub__(self, other: Period | Date) -> Date | Period:
        """Subtract a period, or get the period between two dates

        Example
        -------

        >>> Date(2021, 3, 1) - Period(months=1)
        Date(2021-02-01)
        >>> Date(2011, 3, 18) - Date(2010, 1, 15)
        Period(P1Y2M3D)

        """
        if isinstance(other, Period):
            return other.subtract_from(self)
        elif isinstance(other, Date):
            return other.until(self)
        return NotImplemented

    def _key(self) -> tuple[int, int, int]:
        return (self._year, self._month, self._day)

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------

        >>> d = Date(2021, 1, 2)
        >>> d == Date(2021, 1, 2)
        True
        >>> d == Date(2021, 1, 3)
        False

        """
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() >= other._key()

    def canonical_format(self) -> str:
        """The date in canonical format.

        Years outside 0000-9999 have an explicit sign.

        Example
        -------

        >>> d = Date(2021, 1, 2)
        >>> d.canonical_format()
        '2021-01-02'
        >>> Date(10_000, 1, 1).canonical_format()
        '+10000-01-01'

        """
        return f"{_format_year(self._year)}-{self._month:02}-{self._day:02}"

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Date:
        """Create from the canonical string representation.

        Inverse of :meth:`canonical_format`

        Example
        -------

        >>> Date.from_canonical_format("2021-01-02")
        Date(2021-01-02)

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        OutOfRange
            If the string matches, but describes an invalid date.
        """
        if not (match := _match_date(s)):
            raise InvalidFormat.for_text("Date", s)
        return cls(*map(int, match.groups()))

    def format(self, formatter: Formatter, /) -> str:
        """Format with a custom formatter object"""
        return formatter.format(self)

    @classmethod
    def parse(cls, text: str, formatter: Formatter, /) -> Date:
        """Parse with a custom formatter object"""
        return formatter.parse(text, cls.from_temporal)

    def py_date(self) -> _date:
        """Convert to a standard library :class:`~datetime.date`

        Raises
        ------
        OutOfRange
            If the year is outside the range supported by :mod:`datetime`
        """
        if not 1 <= self._year <= 9999:
            raise OutOfRange(f"{self} cannot be represented as a Python date")
        return _date(self._year, self._month, self._day)

    @classmethod
    def from_py_date(cls, d: _date, /) -> Date:
        """Create from a :class:`~datetime.date`

        Example
        -------

        >>> Date.from_py_date(date(2021, 1, 2))
        Date(2021-01-02)

        """
        return cls._unchecked(d.year, d.month, d.day)

    def __repr__(self) -> str:
        return f"Date({self})"


def _resolve_previous_valid(year: int, month: int, day: int) -> Date:
    if month == 2:
        day = min(day, 29 if is_leap(year) else 28)
    elif month in (4, 6, 9, 11):
        day = min(day, 30)
    return Date._unchecked(year, month, day)


@final
class Year(_ImmutableBase, Temporal):
    """A year in the proleptic Gregorian calendar

    Example
    -------

    >>> Year(2024).is_leap()
    True

    """

    __slots__ = ("_value",)

    MIN_VALUE: ClassVar[int] = -999_999_999
    MAX_VALUE: ClassVar[int] = 999_999_999

    def __init__(self, value: int) -> None:
        self._value = _check_field("Year", value, _MIN_YEAR, _MAX_YEAR)

    @property
    def value(self) -> int:
        return self._value

    @classmethod
    def from_temporal(cls, temporal: object, /) -> Year:
        if isinstance(temporal, Year):
            return temporal
        try:
            return cls(temporal.year)  # type: ignore[attr-defined]
        except (AttributeError, TypeError, DateTimeError) as ex:
            raise _unable_to_obtain("Year", temporal) from ex

    @classmethod
    def now(cls, clock: Clock | None = None) -> Year:
        return cls(Date.now(clock).year)

    def is_leap(self) -> bool:
        return is_leap(self._value)

    def length(self) -> int:
        return 366 if self.is_leap() else 365

    def is_valid_month_day(self, month_day: MonthDay, /) -> bool:
        return month_day.is_valid_year(self._value)

    def at_day(self, day_of_year: int, /) -> Date:
        return Date.from_year_day(self._value, day_of_year)

    def at_month(self, month: int | Month, /) -> YearMonth:
        return YearMonth(self._value, month)

    def at_month_day(self, month_day: MonthDay, /) -> Date:
        """Combine with a month-day into a date.

        February 29 becomes February 28 in non-leap years.
        """
        return month_day.at_year(self._value)

    def plus(self, amount: int, unit: Unit, /) -> Year:
        """Move the year forward by an amount of years, decades, ...

        Raises
        ------
        UnsupportedUnit
            If the unit is smaller than a year
        """
        if unit not in _YEARS_PER_UNIT:
            raise UnsupportedUnit.for_unit(unit, self)
        years = _check_int64(amount * _YEARS_PER_UNIT[unit])
        if years == 0:
            return self
        return Year(self._value + years)

    def add(self, years: int) -> Year:
        return self.plus(years, Unit.YEARS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Year):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __lt__(self, other: Year) -> bool:
        if not isinstance(other, Year):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: Year) -> bool:
        if not isinstance(other, Year):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: Year) -> bool:
        if not isinstance(other, Year):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: Year) -> bool:
        if not isinstance(other, Year):
            return NotImplemented
        return self._value >= other._value

    def canonical_format(self) -> str:
        """The year with at least four digits, and an explicit sign
        if it is negative or has more than four digits

        Example
        -------

        >>> Year(33).canonical_format()
        '0033'

        """
        return _format_year(self._value)

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Year:
        if not (match := _match_year(s)):
            raise InvalidFormat.for_text("Year", s)
        return cls(int(match.group(1)))

    def format(self, formatter: Formatter, /) -> str:
        return formatter.format(self)

    @classmethod
    def parse(cls, text: str, formatter: Formatter, /) -> Year:
        return formatter.parse(text, cls.from_temporal)

    def __repr__(self) -> str:
        return f"Year({self})"


@final
class YearMonth(_ImmutableBase, Temporal):
    """A month in a specific year, such as ``2021-02``

    Example
    -------

    >>> ym = YearMonth(2024, 2)
    YearMonth(2024-02)
    >>> ym.length_of_month()
    29

    """

    __slots__ = ("_year", "_month")

    def __init__(self, year: int, month: int | Month) -> None:
        self._year = _check_field("Year", year, _MIN_YEAR, _MAX_YEAR)
        self._month = (
            month.value
            if isinstance(month, Month)
            else _check_field("MonthOfYear", month, 1, 12)
        )

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @classmethod
    def from_temporal(cls, temporal: object, /) -> YearMonth:
        if isinstance(temporal, YearMonth):
            return temporal
        try:
            return cls(
                temporal.year,  # type: ignore[attr-defined]
                temporal.month,  # type: ignore[attr-defined]
            )
        except (AttributeError, TypeError, DateTimeError) as ex:
            raise _unable_to_obtain("YearMonth", temporal) from ex

    @classmethod
    def now(cls, clock: Clock | None = None) -> YearMonth:
        return cls.from_temporal(Date.now(clock))

    def is_leap_year(self) -> bool:
        return is_leap(self._year)

    def is_valid_day(self, day: int, /) -> bool:
        return 1 <= day <= self.length_of_month()

    def length_of_month(self) -> int:
        return _MONTHS[self._month - 1].length(self.is_leap_year())

    def length_of_year(self) -> int:
        return 366 if self.is_leap_year() else 365

    def with_year(self, year: int, /) -> YearMonth:
        return YearMonth(year, self._month)

    def with_month(self, month: int | Month, /) -> YearMonth:
        return YearMonth(self._year, month)

    def plus(self, amount: int, unit: Unit, /) -> YearMonth:
        """Move forward by an amount of months or larger units

        Example
        -------

        >>> YearMonth(2021, 11).plus(3, Unit.MONTHS)
        YearMonth(2022-02)

        Raises
        ------
        UnsupportedUnit
            If the unit is smaller than a month
        """
        if unit is Unit.MONTHS:
            months = amount
        elif unit in _YEARS_PER_UNIT:
            months = _check_int64(amount * _YEARS_PER_UNIT[unit] * 12)
        else:
            raise UnsupportedUnit.for_unit(unit, self)
        if months == 0:
            return self
        year, month0 = divmod(self._year * 12 + self._month - 1 + months, 12)
        return YearMonth(year, month0 + 1)

    def add(self, years: int = 0, months: int = 0) -> YearMonth:
        return self.plus(years * 12 + months, Unit.MONTHS)

    def at_day(self, day: int, /) -> Date:
        return Date(self._year, self._month, day)

    def at_end_of_month(self) -> Date:
        return Date._unchecked(self._year, self._month, self.length_of_month())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return (self._year, self._month) == (other._year, other._month)

    def __hash__(self) -> int:
        return hash((self._year, self._month))

    def __lt__(self, other: YearMonth) -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return (self._year, self._month) < (other._year, other._month)

    def __le__(self, other: YearMonth) -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return (self._year, self._month) <= (other._year, other._month)

    def __gt__(self, other: YearMonth) -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return (self._year, self._month) > (other._year, other._month)

    def __ge__(self, other: YearMonth) -> bool:
        if not isinstance(other, YearMonth):
            return NotImplemented
        return (self._year, self._month) >= (other._year, other._month)

    def canonical_format(self) -> str:
        return f"{_format_year(self._year)}-{self._month:02}"

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> YearMonth:
        """Create from the canonical string representation.

        Example
        -------

        >>> YearMonth.from_canonical_format("2021-02")
        YearMonth(2021-02)

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        """
        if not (match := _match_year_month(s)):
            raise InvalidFormat.for_text("YearMonth", s)
        return cls(*map(int, match.groups()))

    def format(self, formatter: Formatter, /) -> str:
        return formatter.format(self)

    @classmethod
    def parse(cls, text: str, formatter: Formatter, /) -> YearMonth:
        return formatter.parse(text, cls.from_temporal)

    def __repr__(self) -> str:
        return f"YearMonth({self})"


@final
class MonthDay(_ImmutableBase):
    """A day in a month, without a year, such as a birthday

    February 29 is always accepted. Whether it exists in a particular
    year is checked with :meth:`is_valid_year`.

    Example
    -------

    >>> md = MonthDay(2, 29)
    MonthDay(--02-29)
    >>> md.is_valid_year(2001)
    False

    """

    __slots__ = ("_month", "_day")

    def __init__(self, month: int | Month, day: int) -> None:
        if not isinstance(month, Month):
            month = Month.of(month)
        _check_field("DayOfMonth", day, 1, 31)
        if day > month.max_length():
            raise OutOfRange(
                f"Illegal value for DayOfMonth field, value {day} "
                f"is not valid for month {month.name}"
            )
        self._month = month.value
        self._day = day

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @classmethod
    def from_temporal(cls, temporal: object, /) -> MonthDay:
        if isinstance(temporal, MonthDay):
            return temporal
        try:
            return cls(
                temporal.month,  # type: ignore[attr-defined]
                temporal.day,  # type: ignore[attr-defined]
            )
        except (AttributeError, TypeError, DateTimeError) as ex:
            raise _unable_to_obtain("MonthDay", temporal) from ex

    @classmethod
    def now(cls, clock: Clock | None = None) -> MonthDay:
        return cls.from_temporal(Date.now(clock))

    def is_valid_year(self, year: int, /) -> bool:
        """Whether the month-day exists in the given year

        Only February 29 in non-leap years is invalid.
        """
        return not (self._day == 29 and self._month == 2 and not is_leap(year))

    def with_month(self, month: int | Month, /) -> MonthDay:
        """Change the month, clamping the day to the month's maximum length

        Example
        -------

        >>> MonthDay(3, 31).with_month(4)
        MonthDay(--04-30)

        """
        if not isinstance(month, Month):
            month = Month.of(month)
        if month.value == self._month:
            return self
        return MonthDay(month, min(self._day, month.max_length()))

    def with_day(self, day: int, /) -> MonthDay:
        if day == self._day:
            return self
        return MonthDay(self._month, day)

    def at_year(self, year: int, /) -> Date:
        """Combine with a year into a date.

        Note
        ----
        February 29 silently becomes February 28 in non-leap years.

        Example
        -------

        >>> MonthDay(2, 29).at_year(2001)
        Date(2001-02-28)

        """
        return Date(
            year, self._month, self._day if self.is_valid_year(year) else 28
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonthDay):
            return NotImplemented
        return (self._month, self._day) == (other._month, other._day)

    def __hash__(self) -> int:
        return (self._month << 6) + self._day

    def __lt__(self, other: MonthDay) -> bool:
        if not isinstance(other, MonthDay):
            return NotImplemented
        return (self._month, self._day) < (other._month, other._day)

    def __le__(self, other: MonthDay) -> bool:
        if not isinstance(other, MonthDay):
            return NotImplemented
        return (self._month, self._day) <= (other._month, other._day)

    def __gt__(self, other: MonthDay) -> bool:
        if not isinstance(other, MonthDay):
            return NotImplemented
        return (self._month, self._day) > (other._month, other._day)

    def __ge__(self, other: MonthDay) -> bool:
        if not isinstance(other, MonthDay):
            return NotImplemented
        return (self._month, self._day) >= (other._month, other._day)

    def canonical_format(self) -> str:
        """The month-day in ISO 8601 format, ``--MM-DD``"""
        return f"--{self._month:02}-{self._day:02}"

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> MonthDay:
        if not (match := _match_month_day(s)):
            raise InvalidFormat.for_text("MonthDay", s)
        return cls(*map(int, match.groups()))

    def format(self, formatter: Formatter, /) -> str:
        return formatter.format(self)

    @classmethod
    def parse(cls, text: str, formatter: Formatter, /) -> MonthDay:
        return formatter.parse(text, cls.from_temporal)

    def __repr__(self) -> str:
        return f"MonthDay({self})"


@final
class Period(_ImmutableBase):
    """A date-based amount of time: years, months and days

    The canonical string format is:

    .. code-block:: text

        PnYnMnD

    For example:

    .. code-block:: text

        P1Y2M3D
        P-2M
        P0D

    Note
    ----
    The fields are not normalized and may have different signs.
    For example, "15 months" is not converted to "1 year and 3 months".
    Each field is a 32-bit signed integer. Operations that would exceed
    this range raise :class:`ArithmeticOverflow`.

    Weeks are accepted as input, but are stored as 7 days each.

    """

    __slots__ = ("_years", "_months", "_days")

    ZERO: ClassVar[Period]
    """A period of zero"""

    def __init__(
        self,
        *,
        years: int = 0,
        months: int = 0,
        weeks: int = 0,
        days: int = 0,
    ) -> None:
        self._years = _check_int32(years)
        self._months = _check_int32(months)
        self._days = _check_int32(
            _check_int32(days) + _check_int32(_check_int32(weeks) * 7)
        )

    @classmethod
    def _create(cls, years: int, months: int, days: int) -> Period:
        if years == months == days == 0:
            return cls.ZERO
        self = _object_new(cls)
        self._years = years
        self._months = months
        self._days = days
        return self

    @classmethod
    def of(cls, years: int, months: int, days: int) -> Period:
        """Create from years, months and days

        Example
        -------

        >>> Period.of(1, 2, 3)
        Period(P1Y2M3D)
        >>> Period.of(0, 0, 0) is Period.ZERO
        True

        """
        return cls._create(
            _check_int32(years), _check_int32(months), _check_int32(days)
        )

    @classmethod
    def of_years(cls, years: int, /) -> Period:
        return cls._create(_check_int32(years), 0, 0)

    @classmethod
    def of_months(cls, months: int, /) -> Period:
        return cls._create(0, _check_int32(months), 0)

    @classmethod
    def of_weeks(cls, weeks: int, /) -> Period:
        """A period of the given number of weeks, stored as days

        Example
        -------

        >>> Period.of_weeks(2)
        Period(P14D)

        """
        return cls._create(0, 0, _check_int32(_check_int32(weeks) * 7))

    @classmethod
    def of_days(cls, days: int, /) -> Period:
        return cls._create(0, 0, _check_int32(days))

    @classmethod
    def between(cls, start: Date, end: Date, /) -> Period:
        """The period between the start date (inclusive)
        and the end date (exclusive)

        See :meth:`Date.until` for the details.

        Example
        -------

        >>> Period.between(Date(2010, 1, 15), Date(2011, 3, 18))
        Period(P1Y2M3D)

        """
        return Date.from_temporal(start).until(Date.from_temporal(end))

    @property
    def years(self) -> int:
        return self._years

    @property
    def months(self) -> int:
        return self._months

    @property
    def days(self) -> int:
        return self._days

    def __eq__(self, other: object) -> bool:
        """Compare for equality of all fields

        Note
        ----
        Periods are equal if they have the same values for all fields.
        No normalization is done, so "15 months" is not equal to
        "1 year and 3 months".

        Example
        -------

        >>> p = Period(years=1, months=3)
        >>> p == Period(years=1, months=3, days=0)
        True
        >>> # same length, but different field values
        >>> p == Period(months=15)
        False
        """
        if not isinstance(other, Period):
            return NotImplemented
        return (
            self._years == other._years
            and self._months == other._months
            and self._days == other._days
        )

    def __hash__(self) -> int:
        return hash((self._years, self._months, self._days))

    def __bool__(self) -> bool:
        """True if any field is non-zero

        Example
        -------

        >>> bool(Period())
        False
        >>> bool(Period(days=-1))
        True

        """
        return bool(self._years or self._months or self._days)

    def is_zero(self) -> bool:
        return not self

    def is_negative(self) -> bool:
        """True if any field is negative"""
        return self._years < 0 or self._months < 0 or self._days < 0

    def canonical_format(self) -> str:
        """The period in canonical format.

        Zero fields are omitted, except for the zero period itself.

        Example
        -------

        >>> Period(years=1, days=-3).canonical_format()
        'P1Y-3D'
        >>> Period.ZERO.canonical_format()
        'P0D'

        """
        return "P" + (
            f"{self._years}Y" * bool(self._years)
            + f"{self._months}M" * bool(self._months)
            + f"{self._days}D" * bool(self._days)
            or "0D"
        )

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Period:
        """Create from a string representation.

        Inverse of :meth:`canonical_format`. More generally, the ISO 8601
        ``PnYnMnWnD`` format is accepted: case-insensitive, with an
        optional sign before the ``P`` and before each number.
        Weeks are converted to days. At least one field must be present.

        Example
        -------

        >>> Period.from_canonical_format("P1Y2M3D")
        Period(P1Y2M3D)
        >>> Period.from_canonical_format("-p2w-1d")
        Period(P-13D)

        Raises
        ------
        InvalidFormat
            If the string does not match the format
        ArithmeticOverflow
            If a field exceeds the 32-bit integer range
        """
        if not (match := _match_period(s)):
            raise InvalidFormat.for_text("Period", s)
        sign, years, months, weeks, days = match.groups()
        if years is None and months is None and weeks is None and days is None:
            raise InvalidFormat.for_text("Period", s)
        negate = -1 if sign == "-" else 1
        return cls.of(
            _parse_number(years, negate),
            _parse_number(months, negate),
            _check_int32(
                _parse_number(days, negate)
                + _check_int32(_parse_number(weeks, negate) * 7)
            ),
        )

    __str__ = canonical_format

    if TYPE_CHECKING:

        def replace(
            self,
            *,
            years: int = ...,
            months: int = ...,
            days: int = ...,
        ) -> Period: ...

    else:

        def replace(self, **kwargs) -> Period:
            """Create a new instance with the given fields replaced.

            Example
            -------

            >>> p = Period(years=1, months=2)
            >>> p.replace(years=2)
            Period(P2Y2M)

            """
            if not _PERIOD_FIELDS.issuperset(kwargs):
                raise TypeError(
                    "Unknown field(s): "
                    + ", ".join(sorted(kwargs.keys() - _PERIOD_FIELDS))
                )
            return Period.of(
                kwargs.get("years", self._years),
                kwargs.get("months", self._months),
                kwargs.get("days", self._days),
            )

    def __repr__(self) -> str:
        return f"Period({self})"

    def negated(self) -> Period:
        """Negate each field of the period

        Example
        -------

        >>> Period(years=2, days=-3).negated()
        Period(P-2Y3D)

        Raises
        ------
        ArithmeticOverflow
            If a field is the minimum 32-bit integer
        """
        return self.multiplied_by(-1)

    __neg__ = negated

    def multiplied_by(self, factor: int, /) -> Period:
        """Multiply each field by a whole number

        Example
        -------

        >>> Period(years=1, months=-2) * 3
        Period(P3Y-6M)

        """
        if self is Period.ZERO or factor == 1:
            return self
        return Period._create(
            _check_int32(self._years * factor),
            _check_int32(self._months * factor),
            _check_int32(self._days * factor),
        )

    def __mul__(self, other: int) -> Period:
        if not isinstance(other, int):
            return NotImplemented
        return self.multiplied_by(other)

    __rmul__ = __mul__

    def __add__(self, other: Period) -> Period:
        """Add the fields of another period to this one

        Example
        -------

        >>> Period.of(1, 6, 3) + Period.of(2, 2, 2)
        Period(P3Y8M5D)

        """
        if not isinstance(other, Period):
            return NotImplemented
        return Period._create(
            _check_int32(self._years + other._years),
            _check_int32(self._months + other._months),
            _check_int32(self._days + other._days),
        )

    def __sub__(self, other: Period) -> Period:
        """Subtract the fields of another period from this one

        Example
        -------

        >>> Period.of(1, 6, 3) - Period.of(2, 2, 2)
        Period(P-1Y4M1D)

        """
        if not isinstance(other, Period):
            return NotImplemented
        return Period._create(
            _check_int32(self._years - other._years),
            _check_int32(self._months - other._months),
            _check_int32(self._days - other._days),
        )

    def to_total_months(self) -> int:
        """The years and months combined, in months. Days are ignored."""
        return self._years * 12 + self._months

    def normalized(self) -> Period:
        """Fold whole years of months into the years.

        The years and months end up with the same sign.
        Days are not affected.

        Example
        -------

        >>> Period(years=1, months=15, days=40).normalized()
        Period(P2Y3M40D)
        >>> Period(years=1, months=-25).normalized()
        Period(P-1Y-1M)

        """
        years, months = _trunc_divmod(self.to_total_months(), 12)
        if years == self._years and months == self._months:
            return self
        return Period._create(_check_int32(years), months, self._days)

    def add_to(self, temporal: _TTemporal, /) -> _TTemporal:
        """Add this period to a date-like value.

        If there are months, the years and months are added together as
        a number of months. Otherwise, the years are added. Finally, the
        days are added. The order matters at the end of months:

        >>> Period(months=1, days=1).add_to(Date(2021, 1, 31))
        Date(2021-03-01)

        Raises
        ------
        CalendarMismatch
            If the value is not in the ISO calendar
        UnsupportedUnit
            If the value can't be moved by a non-zero field
        """
        _check_iso(temporal)
        if self._months == 0:
            if self._years != 0:
                temporal = temporal.plus(self._years, Unit.YEARS)
        else:
            total_months = self.to_total_months()
            if total_months != 0:
                temporal = temporal.plus(total_months, Unit.MONTHS)
        if self._days != 0:
            temporal = temporal.plus(self._days, Unit.DAYS)
        return temporal

    def subtract_from(self, temporal: _TTemporal, /) -> _TTemporal:
        """Subtract this period from a date-like value.

        The mirror image of :meth:`add_to`.

        >>> Period(months=1, days=1).subtract_from(Date(2021, 3, 31))
        Date(2021-02-27)

        """
        _check_iso(temporal)
        if self._months == 0:
            if self._years != 0:
                temporal = temporal.minus(self._years, Unit.YEARS)
        else:
            total_months = self.to_total_months()
            if total_months != 0:
                temporal = temporal.minus(total_months, Unit.MONTHS)
        if self._days != 0:
            temporal = temporal.minus(self._days, Unit.DAYS)
        return temporal

    def as_tuple(self) -> tuple[int, int, int]:
        """Convert to a tuple of (years, months, days)

        Example
        -------

        >>> Period.of(1, 2, 3).as_tuple()
        (1, 2, 3)

        """
        return (self._years, self._months, self._days)


_PERIOD_FIELDS = frozenset(("years", "months", "days"))


def _parse_number(digits: str | None, negate: int) -> int:
    if digits is None:
        return 0
    return _check_int32(_check_int32(_parse_int(digits)) * negate)


def _check_iso(temporal: object) -> None:
    calendar = getattr(temporal, "calendar", None)
    if calendar is not None and calendar != "ISO":
        raise CalendarMismatch.for_calendar(calendar)


class ZoneRules(ABC):
    """The rules that determine the UTC offset of a zone over time"""

    __slots__ = ()

    @abstractmethod
    def offset_at(self, instant: Instant, /) -> ZoneOffset:
        """The offset that applies at the given instant"""

    @abstractmethod
    def is_fixed_offset(self) -> bool:
        """Whether the offset is the same at every instant"""


@final
class FixedOffsetRules(ZoneRules):
    """The rules of a zone that always has the same offset"""

    __slots__ = ("_offset",)

    def __init__(self, offset: ZoneOffset) -> None:
        self._offset = offset

    def offset_at(self, instant: Instant, /) -> ZoneOffset:
        return self._offset

    def is_fixed_offset(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedOffsetRules):
            return NotImplemented
        return self._offset == other._offset

    def __hash__(self) -> int:
        return hash(self._offset)

    def __repr__(self) -> str:
        return f"FixedOffsetRules({self._offset})"


@final
class ZoneInfoRules(ZoneRules):
    """The rules of an IANA time zone, backed by :mod:`zoneinfo`

    Instants outside the range of :mod:`datetime` (years 1-9999)
    can't be looked up.
    """

    __slots__ = ("_zone", "_fixed")

    def __init__(self, zone: ZoneInfo, fixed: bool = False) -> None:
        self._zone = zone
        self._fixed = fixed

    @property
    def key(self) -> str:
        return self._zone.key

    def offset_at(self, instant: Instant, /) -> ZoneOffset:
        try:
            utc = _UNIX_EPOCH + _timedelta(seconds=instant.epoch_second)
            local = utc.astimezone(self._zone)
        except OverflowError as ex:
            raise OutOfRange(
                f"{instant} is outside the range of the rules "
                f"of {self._zone.key}"
            ) from ex
        utcoffset = local.replace(tzinfo=None) - utc.replace(tzinfo=None)
        return ZoneOffset.of_total_seconds(
            utcoffset.days * 86_400 + utcoffset.seconds
        )

    def is_fixed_offset(self) -> bool:
        return self._fixed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZoneInfoRules):
            return NotImplemented
        return self._zone.key == other._zone.key

    def __hash__(self) -> int:
        return hash(self._zone.key)

    def __repr__(self) -> str:
        return f"ZoneInfoRules({self._zone.key})"


class ZoneRulesProvider(ABC):
    """A source of zone rules, keyed by region ID

    Implementations must support concurrent lookups.
    """

    __slots__ = ()

    @abstractmethod
    def resolve(
        self, region_id: str, /, fail_if_unknown: bool = True
    ) -> ZoneRules | None:
        """Look up the rules of a region

        Raises
        ------
        UnknownZone
            If the region is unknown and ``fail_if_unknown`` is set.
            Otherwise, ``None`` is returned.
        """

    @abstractmethod
    def available_ids(self) -> frozenset[str]:
        """The IDs of all regions this provider knows about"""


@final
class ZoneInfoProvider(ZoneRulesProvider):
    """Provides the rules of the IANA time zone database,
    through :mod:`zoneinfo`

    The database of the operating system is used if available,
    otherwise that of the ``tzdata`` package.
    """

    __slots__ = ("_ids",)

    def __init__(self) -> None:
        self._ids: frozenset[str] | None = None

    def resolve(
        self, region_id: str, /, fail_if_unknown: bool = True
    ) -> ZoneRules | None:
        try:
            zone = ZoneInfo(region_id)
        except (ZoneInfoNotFoundError, ValueError, OSError) as ex:
            if fail_if_unknown:
                raise UnknownZone.for_id(region_id) from ex
            return None
        _log.debug("Loaded rules for %s", region_id)
        return ZoneInfoRules(zone, _has_fixed_offset(region_id))

    def available_ids(self) -> frozenset[str]:
        # races only lead to a redundant (but equal) computation
        if self._ids is None:
            self._ids = frozenset(available_timezones())
        return self._ids

    def __repr__(self) -> str:
        return "ZoneInfoProvider()"


@lru_cache(maxsize=None)
def _has_fixed_offset(key: str) -> bool:
    try:
        with _open_tzif(key) as f:
            return _tzif_is_fixed(f)
    except (OSError, ImportError, ValueError, struct.error) as ex:
        _log.debug("Could not inspect the TZif data of %s: %s", key, ex)
        return False


def _open_tzif(key: str) -> BinaryIO:
    # same search order as zoneinfo itself: TZPATH first, then tzdata
    for root in zoneinfo.TZPATH:
        path = os.path.join(root, key)
        if os.path.isfile(path):
            return open(path, "rb")
    package, _, name = key.rpartition("/")
    if package:
        package = "." + package.replace("/", ".")
    tzdata = resources.files(f"tzdata.zoneinfo{package}")
    return tzdata.joinpath(name).open("rb")


def _tzif_is_fixed(f: BinaryIO) -> bool:
    # A zone has a fixed offset if it has no transitions, and its
    # footer (if any) has no daylight saving rule.
    (
        magic,
        version,
        isutcnt,
        isstdcnt,
        leapcnt,
        timecnt,
        typecnt,
        charcnt,
    ) = _TZIF_HEADER.unpack(f.read(_TZIF_HEADER.size))
    if magic != b"TZif":
        raise ValueError("Invalid TZif file: magic not found")
    if version == b"\x00":
        return timecnt == 0 and typecnt == 1
    # skip the version 1 data block, which has 32-bit transition times
    f.seek(
        timecnt * 5
        + typecnt * 6
        + charcnt
        + leapcnt * 8
        + isstdcnt
        + isutcnt,
        os.SEEK_CUR,
    )
    (
        magic,
        version,
        isutcnt,
        isstdcnt,
        leapcnt,
        timecnt,
        typecnt,
        charcnt,
    ) = _TZIF_HEADER.unpack(f.read(_TZIF_HEADER.size))
    if magic != b"TZif":
        raise ValueError("Invalid TZif file: second header not found")
    f.seek(
        timecnt * 9
        + typecnt * 6
        + charcnt
        + leapcnt * 12
        + isstdcnt
        + isutcnt,
        os.SEEK_CUR,
    )
    footer = f.read().strip(b"\n").decode("ascii")
    return timecnt == 0 and (not footer or bool(_match_fixed_tz_rule(footer)))


def get_default_provider() -> ZoneRulesProvider:
    """The provider used when no provider is passed explicitly"""
    return _default_provider


def set_default_provider(provider: ZoneRulesProvider, /) -> None:
    """Replace the provider used when no provider is passed explicitly

    Zones that were already created keep the provider they were created with.
    """
    global _default_provider
    _default_provider = provider


class ZoneId(_ImmutableBase, ABC):
    """A time zone identifier

    A zone ID is either a fixed :class:`ZoneOffset` (e.g. ``+02:00``),
    or a :class:`ZoneRegion` (e.g. ``Europe/Paris``) whose offsets
    are determined by rules from a :class:`ZoneRulesProvider`.
    Zone IDs are equal if their :attr:`id` is equal.

    Example
    -------

    >>> ZoneId.of("Europe/Paris")
    ZoneRegion(Europe/Paris)
    >>> ZoneId.of("+01:00")
    ZoneOffset(+01:00)

    """

    __slots__ = ()

    SHORT_IDS: ClassVar[Mapping[str, str]]
    """Commonly used three-letter aliases, for use with :meth:`of`"""

    def __init_subclass__(cls, **kwargs) -> None:
        # the variants are closed: only offsets and regions
        if cls.__module__ != __name__:
            raise TypeError("Subclassing not allowed")
        super().__init_subclass__(**kwargs)

    @staticmethod
    def of(
        zone_id: str,
        /,
        aliases: Mapping[str, str] | None = None,
        *,
        provider: ZoneRulesProvider | None = None,
        check_available: bool = True,
    ) -> ZoneId:
        """Create a zone ID from a string

        - ``Z`` and IDs starting with ``+`` or ``-`` are offsets
        - IDs starting with ``UTC``, ``GMT`` or ``UT`` are regions with
          a fixed offset, such as ``UTC+01:00``
        - all other IDs are region IDs, looked up with the provider

        An alias map can be given to translate IDs first.

        Example
        -------

        >>> ZoneId.of("EST", ZoneId.SHORT_IDS)
        ZoneOffset(-05:00)
        >>> ZoneId.of("GMT+2")
        ZoneRegion(GMT+02:00)

        Raises
        ------
        InvalidFormat
            If the ID has an invalid format
        UnknownZone
            If the region is unknown (and ``check_available`` is set)
        OutOfRange
            If an offset is out of range
        """
        if aliases is not None:
            zone_id = aliases.get(zone_id, zone_id)
        if len(zone_id) <= 1 or zone_id.startswith(("+", "-")):
            return ZoneOffset.of(zone_id)
        elif zone_id.startswith(("UTC", "GMT")):
            return ZoneId._of_with_prefix(
                zone_id, 3, provider, check_available
            )
        elif zone_id.startswith("UT"):
            return ZoneId._of_with_prefix(
                zone_id, 2, provider, check_available
            )
        return ZoneRegion.of_id(
            zone_id, provider=provider, check_available=check_available
        )

    @staticmethod
    def _of_with_prefix(
        zone_id: str,
        prefix_length: int,
        provider: ZoneRulesProvider | None,
        check_available: bool,
    ) -> ZoneId:
        prefix = zone_id[:prefix_length]
        if len(zone_id) == prefix_length:
            return ZoneId.of_offset(prefix, ZoneOffset.UTC)
        if zone_id[prefix_length] not in "+-":
            return ZoneRegion.of_id(
                zone_id, provider=provider, check_available=check_available
            )
        try:
            offset = ZoneOffset.of(zone_id[prefix_length:])
        except DateTimeError as ex:
            raise InvalidFormat(
                f"Invalid ID for offset-based ZoneId: {zone_id}", zone_id
            ) from ex
        return ZoneId.of_offset(prefix, offset)

    @staticmethod
    def of_offset(prefix: str, offset: ZoneOffset, /) -> ZoneId:
        """Create a zone ID with a fixed offset, and a prefix

        The prefix must be ``UTC``, ``GMT``, ``UT`` or empty.
        A zero offset results in just the prefix.

        Example
        -------

        >>> ZoneId.of_offset("UTC", ZoneOffset.of_hours(2))
        ZoneRegion(UTC+02:00)
        >>> ZoneId.of_offset("GMT", ZoneOffset.UTC)
        ZoneRegion(GMT)
        >>> ZoneId.of_offset("", ZoneOffset.of_hours(2))
        ZoneOffset(+02:00)

        """
        if not prefix:
            return offset
        if prefix not in ("GMT", "UTC", "UT"):
            raise ValueError(f"prefix should be GMT, UTC or UT, is: {prefix}")
        if offset.total_seconds != 0:
            prefix += offset.id
        return ZoneRegion._new(prefix, offset.rules(), None)

    @staticmethod
    def available_ids(
        *, provider: ZoneRulesProvider | None = None
    ) -> frozenset[str]:
        """The region IDs known to the provider"""
        return (provider or _default_provider).available_ids()

    @staticmethod
    def system_default(
        *, provider: ZoneRulesProvider | None = None
    ) -> ZoneId:
        """The zone of the system.

        This is determined from the ``TZ`` environment variable, or the
        ``/etc/localtime`` link. If neither gives a known zone,
        the current local UTC offset is used.
        """
        for key in _system_zone_keys():
            try:
                return ZoneId.of(key, ZoneId.SHORT_IDS, provider=provider)
            except DateTimeError as ex:
                _log.debug("Ignoring system zone %r: %s", key, ex)
        return ZoneOffset.of_total_seconds(localtime().tm_gmtoff)

    @property
    @abstractmethod
    def id(self) -> str:
        """The unique ID of the zone"""

    @abstractmethod
    def rules(self) -> ZoneRules:
        """The rules that determine the offsets of the zone

        Raises
        ------
        UnknownZone
            If the rules of a region can't be found
        """

    def normalized(self) -> ZoneId:
        """The offset of the zone if it never changes, otherwise the zone

        Example
        -------

        >>> ZoneId.of("UTC").normalized()
        ZoneOffset(Z)
        >>> ZoneId.of("Europe/Paris").normalized()
        ZoneRegion(Europe/Paris)

        """
        try:
            rules = self.rules()
        except UnknownZone:
            # unknown rules can't be fixed: the zone stays as it is
            return self
        if rules.is_fixed_offset():
            return rules.offset_at(Instant.EPOCH)
        return self

    def __eq__(self, other: object) -> bool:
        """Zone IDs are equal if their IDs are equal

        Example
        -------

        >>> ZoneId.of("Europe/Paris") == ZoneId.of("Europe/Paris")
        True
        >>> ZoneId.of("UTC") == ZoneOffset.UTC
        False

        """
        if not isinstance(other, ZoneId):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.id


def _system_zone_keys() -> Iterator[str]:
    if tz := os.environ.get("TZ"):
        yield tz[1:] if tz.startswith(":") else tz
    try:
        target = os.readlink("/etc/localtime")
    except (OSError, NotImplementedError):
        return
    _, found, key = target.rpartition("zoneinfo/")
    if found:
        yield key


class OffsetCache:
    """Interns zone offsets, so that equal offsets are shared

    The cache only saves memory; results never depend on its contents.
    Concurrent use is safe: a lost race only results in a discarded
    (but equal) offset.
    """

    __slots__ = ("_by_seconds", "_by_id")

    def __init__(self) -> None:
        self._by_seconds: dict[int, ZoneOffset] = {}
        self._by_id: dict[str, ZoneOffset] = {}

    def get_by_seconds(self, total_seconds: int, /) -> ZoneOffset | None:
        return self._by_seconds.get(total_seconds)

    def get_by_id(self, offset_id: str, /) -> ZoneOffset | None:
        return self._by_id.get(offset_id)

    def intern(self, offset: ZoneOffset, /) -> ZoneOffset:
        """Store the offset, or return the equal offset already stored"""
        offset = self._by_seconds.setdefault(offset.total_seconds, offset)
        self._by_id.setdefault(offset.id, offset)
        return offset

    def clear(self) -> None:
        self._by_seconds.clear()
        self._by_id.clear()

    def __len__(self) -> int:
        return len(self._by_seconds)

    def __repr__(self) -> str:
        return f"OffsetCache({len(self)} offsets)"


@final
class ZoneOffset(ZoneId):
    """A fixed offset from UTC, from -18:00 to +18:00

    Offsets are ordered from the earliest local time of day to the latest,
    i.e. by *decreasing* offset: ``+14:00`` sorts before ``-12:00``.

    Example
    -------

    >>> ZoneOffset.of("+01:30")
    ZoneOffset(+01:30)
    >>> ZoneOffset.of_hours(-5).total_seconds
    -18000

    """

    __slots__ = ("_total_seconds", "_id")

    UTC: ClassVar[ZoneOffset]
    """The offset of UTC itself, with ID ``Z``"""
    MIN: ClassVar[ZoneOffset]
    """The minimum offset, ``-18:00``"""
    MAX: ClassVar[ZoneOffset]
    """The maximum offset, ``+18:00``"""

    def __init__(self) -> None:
        raise TypeError(
            "ZoneOffset instances cannot be created through the constructor. "
            "Use `ZoneOffset.of` or `ZoneOffset.of_total_seconds` instead."
        )

    @classmethod
    def _new(cls, total_seconds: int) -> ZoneOffset:
        self = _object_new(cls)
        self._total_seconds = total_seconds
        self._id = _build_offset_id(total_seconds)
        return self

    @classmethod
    def of_total_seconds(
        cls, total_seconds: int, /, *, cache: OffsetCache | None = None
    ) -> ZoneOffset:
        """Create from the total offset in seconds

        Raises
        ------
        OutOfRange
            If the offset exceeds 18 hours
        """
        if not -_MAX_OFFSET_SECONDS <= total_seconds <= _MAX_OFFSET_SECONDS:
            raise OutOfRange(
                "Zone offset not in valid range: -18:00 to +18:00"
            )
        if total_seconds % 900:
            return cls._new(total_seconds)
        if cache is None:
            cache = _default_offset_cache
        return cache.get_by_seconds(total_seconds) or cache.intern(
            cls._new(total_seconds)
        )

    @classmethod
    def of_hours(cls, hours: int, /) -> ZoneOffset:
        return cls.of_hours_minutes_seconds(hours, 0, 0)

    @classmethod
    def of_hours_minutes(cls, hours: int, minutes: int, /) -> ZoneOffset:
        return cls.of_hours_minutes_seconds(hours, minutes, 0)

    @classmethod
    def of_hours_minutes_seconds(
        cls, hours: int, minutes: int, seconds: int, /
    ) -> ZoneOffset:
        """Create from hours, minutes and seconds

        The components must not have opposite signs.

        Example
        -------

        >>> ZoneOffset.of_hours_minutes_seconds(-1, -30, 0)
        ZoneOffset(-01:30)

        Raises
        ------
        OutOfRange
            If a component is out of range, or the signs are inconsistent
        """
        _validate_offset(hours, minutes, seconds)
        return cls.of_total_seconds(hours * 3_600 + minutes * 60 + seconds)

    @classmethod
    def of(
        cls, offset_id: str, /, *, cache: OffsetCache | None = None
    ) -> ZoneOffset:
        """Create from an offset ID

        Accepted formats are ``Z``, ``±h``, ``±hh``, ``±hh:mm``,
        ``±hhmm``, ``±hh:mm:ss`` and ``±hhmmss``.

        Example
        -------

        >>> ZoneOffset.of("+5")
        ZoneOffset(+05:00)
        >>> ZoneOffset.of("-013045")
        ZoneOffset(-01:30:45)

        Raises
        ------
        InvalidFormat
            If the ID has an invalid format
        OutOfRange
            If the offset is out of range
        """
        if offset_id == "Z":
            return cls.UTC
        if cache is None:
            cache = _default_offset_cache
        if (cached := cache.get_by_id(offset_id)) is not None:
            return cached
        if len(offset_id) == 2:
            offset_id = offset_id[0] + "0" + offset_id[1]
        if (layout := _OFFSET_ID_LAYOUTS.get(len(offset_id))) is None:
            raise InvalidFormat(
                f"Invalid ID for ZoneOffset, invalid format: {offset_id}",
                offset_id,
            )
        parts = [
            _offset_digits(offset_id, pos, colon) for pos, colon in layout
        ]
        hrs, mins, secs = parts + [0] * (3 - len(parts))
        sign = offset_id[0]
        if sign not in "+-":
            raise InvalidFormat(
                "Invalid ID for ZoneOffset, plus/minus not found "
                f"when expected: {offset_id}",
                offset_id,
            )
        if sign == "-":
            hrs, mins, secs = -hrs, -mins, -secs
        _validate_offset(hrs, mins, secs)
        return cls.of_total_seconds(
            hrs * 3_600 + mins * 60 + secs, cache=cache
        )

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def id(self) -> str:
        return self._id

    def rules(self) -> ZoneRules:
        return FixedOffsetRules(self)

    def normalized(self) -> ZoneOffset:
        return self

    def py_timezone(self) -> _timezone:
        """Convert to a standard library :class:`~datetime.timezone`"""
        return _timezone(_timedelta(seconds=self._total_seconds))

    def __lt__(self, other: ZoneOffset) -> bool:
        if not isinstance(other, ZoneOffset):
            return NotImplemented
        return self._total_seconds > other._total_seconds

    def __le__(self, other: ZoneOffset) -> bool:
        if not isinstance(other, ZoneOffset):
            return NotImplemented
        return self._total_seconds >= other._total_seconds

    def __gt__(self, other: ZoneOffset) -> bool:
        if not isinstance(other, ZoneOffset):
            return NotImplemented
        return self._total_seconds < other._total_seconds

    def __ge__(self, other: ZoneOffset) -> bool:
        if not isinstance(other, ZoneOffset):
            return NotImplemented
        return self._total_seconds <= other._total_seconds

    def __repr__(self) -> str:
        return f"ZoneOffset({self._id})"


def _validate_offset(hours: int, minutes: int, seconds: int) -> None:
    if not -18 <= hours <= 18:
        raise OutOfRange(
            f"Zone offset hours not in valid range: value {hours} "
            "is not in the range -18 to 18"
        )
    if hours > 0:
        if minutes < 0 or seconds < 0:
            raise OutOfRange(
                "Zone offset minutes and seconds must be positive "
                "because hours is positive"
            )
    elif hours < 0:
        if minutes > 0 or seconds > 0:
            raise OutOfRange(
                "Zone offset minutes and seconds must be negative "
                "because hours is negative"
            )
    elif (minutes > 0 and seconds < 0) or (minutes < 0 and seconds > 0):
        raise OutOfRange(
            "Zone offset minutes and seconds must have the same sign"
        )
    if not -59 <= minutes <= 59:
        raise OutOfRange(
            f"Zone offset minutes not in valid range: value {minutes} "
            "is not in the range -59 to 59"
        )
    if not -59 <= seconds <= 59:
        raise OutOfRange(
            f"Zone offset seconds not in valid range: value {seconds} "
            "is not in the range -59 to 59"
        )
    if abs(hours) == 18 and (minutes or seconds):
        raise OutOfRange("Zone offset not in valid range: -18:00 to +18:00")


def _offset_digits(offset_id: str, pos: int, preceded_by_colon: bool) -> int:
    if preceded_by_colon and offset_id[pos - 1] != ":":
        raise InvalidFormat(
            "Invalid ID for ZoneOffset, colon not found "
            f"when expected: {offset_id}",
            offset_id,
        )
    digits = offset_id[pos : pos + 2]  # noqa
    if not ("0" <= digits[0] <= "9" and "0" <= digits[1] <= "9"):
        raise InvalidFormat(
            "Invalid ID for ZoneOffset, non numeric characters "
            f"found: {offset_id}",
            offset_id,
        )
    return int(digits)


def _build_offset_id(total_seconds: int) -> str:
    if total_seconds == 0:
        return "Z"
    hrs, rem = divmod(abs(total_seconds), 3_600)
    mins, secs = divmod(rem, 60)
    return f"{'-' if total_seconds < 0 else '+'}{hrs:02}:{mins:02}" + (
        f":{secs:02}" * bool(secs)
    )


@final
class ZoneRegion(ZoneId):
    """A geographical time zone, such as ``Europe/Paris``

    The rules are looked up from a :class:`ZoneRulesProvider`.
    A region created with ``check_available=False`` may have unknown rules:
    it can still be compared and displayed, but :meth:`rules` raises
    :class:`UnknownZone` until the provider knows the region.
    """

    __slots__ = ("_id", "_rules", "_provider")

    def __init__(self) -> None:
        raise TypeError(
            "ZoneRegion instances cannot be created through the constructor. "
            "Use `ZoneId.of` or `ZoneRegion.of_id` instead."
        )

    @classmethod
    def _new(
        cls,
        zone_id: str,
        rules: ZoneRules | None,
        provider: ZoneRulesProvider | None,
    ) -> ZoneRegion:
        self = _object_new(cls)
        self._id = zone_id
        self._rules = rules
        self._provider = provider
        return self

    @classmethod
    def of_id(
        cls,
        zone_id: str,
        /,
        *,
        provider: ZoneRulesProvider | None = None,
        check_available: bool = True,
    ) -> ZoneRegion:
        """Create from a region ID

        Raises
        ------
        InvalidFormat
            If the ID doesn't match ``[A-Za-z][A-Za-z0-9~/._+-]+``
        UnknownZone
            If the region is unknown (and ``check_available`` is set)
        """
        if not _match_region_id(zone_id):
            raise InvalidFormat(
                "Invalid ID for region-based ZoneId, invalid format: "
                f"{zone_id}",
                zone_id,
            )
        provider = provider or _default_provider
        rules = provider.resolve(zone_id, fail_if_unknown=check_available)
        return cls._new(zone_id, rules, provider)

    @property
    def id(self) -> str:
        return self._id

    def rules(self) -> ZoneRules:
        if self._rules is not None:
            return self._rules
        # unresolved rules are looked up again on every call
        rules = (self._provider or _default_provider).resolve(self._id)
        if rules is None:
            raise UnknownZone.for_id(self._id)
        return rules

    def __repr__(self) -> str:
        return f"ZoneRegion({self._id})"


class Clock(_ImmutableBase, ABC):
    """A source of the current instant, in a time zone

    Code that needs the current time should take a clock as a parameter,
    so that tests can pass a :meth:`fixed` clock instead of the
    :meth:`system` clock.

    Example
    -------

    >>> clock = Clock.fixed(Instant.EPOCH, ZoneOffset.UTC)
    >>> Date.now(clock)
    Date(1970-01-01)

    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs) -> None:
        # the variants are closed: system, fixed, offset and tick clocks
        if cls.__module__ != __name__:
            raise TypeError("Subclassing not allowed")
        super().__init_subclass__(**kwargs)

    @property
    @abstractmethod
    def zone(self) -> ZoneId:
        """The zone used to interpret instants as dates"""

    @abstractmethod
    def with_zone(self, zone: ZoneId, /) -> Clock:
        """The same clock in another zone.

        Returns the clock itself if the zone is unchanged.
        """

    @abstractmethod
    def instant(self) -> Instant:
        """The current instant"""

    def millis(self) -> int:
        """The current instant, in milliseconds since 1970-01-01T00:00Z"""
        return self.instant().to_epoch_milli()

    @staticmethod
    def system_utc() -> Clock:
        """The system clock, in UTC"""
        return SystemClock(ZoneOffset.UTC)

    @staticmethod
    def system_default_zone() -> Clock:
        """The system clock, in the system's default zone"""
        return SystemClock(ZoneId.system_default())

    @staticmethod
    def system(zone: ZoneId, /) -> Clock:
        """The system clock, in the given zone"""
        return SystemClock(zone)

    @staticmethod
    def fixed(instant: Instant, zone: ZoneId, /) -> Clock:
        """A clock that is always at the same instant"""
        return FixedClock(instant, zone)

    @staticmethod
    def offset(base: Clock, duration: Duration, /) -> Clock:
        """A clock that is a fixed duration ahead of (or behind) the base

        A zero duration returns the base clock itself.
        """
        if not duration:
            return base
        return OffsetClock(base, duration)

    @staticmethod
    def tick(base: Clock, duration: Duration, /) -> Clock:
        """A clock that rounds the time of the base clock down
        to a multiple of the duration

        The duration must be a whole number of milliseconds, or divide a
        second without remainder. A duration of zero or one nanosecond
        returns the base clock itself.

        Example
        -------

        >>> base = Clock.fixed(
        ...     Instant.from_epoch_second(61, nano_adjustment=5),
        ...     ZoneOffset.UTC,
        ... )
        >>> Clock.tick(base, minutes(1)).instant()
        Instant(1970-01-01T00:01:00Z)

        Raises
        ------
        OutOfRange
            If the duration is negative or doesn't divide a second
        """
        if duration.is_negative():
            raise OutOfRange("Tick duration must not be negative")
        tick_ns = duration.in_nanoseconds()
        if tick_ns <= 1:
            return base
        return TickClock(base, tick_ns)

    @staticmethod
    def tick_seconds(zone: ZoneId, /) -> Clock:
        """The system clock in the zone, rounded down to whole seconds"""
        return TickClock(SystemClock(zone), 1_000_000_000)

    @staticmethod
    def tick_minutes(zone: ZoneId, /) -> Clock:
        """The system clock in the zone, rounded down to whole minutes"""
        return TickClock(SystemClock(zone), 60_000_000_000)


@final
class SystemClock(Clock):
    """The best available system clock, with millisecond precision"""

    __slots__ = ("_zone",)

    def __init__(self, zone: ZoneId) -> None:
        self._zone = zone

    @property
    def zone(self) -> ZoneId:
        return self._zone

    def with_zone(self, zone: ZoneId, /) -> Clock:
        if zone == self._zone:
            return self
        return SystemClock(zone)

    def millis(self) -> int:
        return time_ns() // 1_000_000

    def instant(self) -> Instant:
        return Instant.from_epoch_milli(self.millis())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SystemClock):
            return NotImplemented
        return self._zone == other._zone

    def __hash__(self) -> int:
        return hash(self._zone) + 1

    def __repr__(self) -> str:
        return f"SystemClock({self._zone})"


@final
class FixedClock(Clock):
    """A clock that always returns the same instant"""

    __slots__ = ("_instant", "_zone")

    def __init__(self, instant: Instant, zone: ZoneId) -> None:
        self._instant = instant
        self._zone = zone

    @property
    def zone(self) -> ZoneId:
        return self._zone

    def with_zone(self, zone: ZoneId, /) -> Clock:
        if zone == self._zone:
            return self
        return FixedClock(self._instant, zone)

    def millis(self) -> int:
        return self._instant.to_epoch_milli()

    def instant(self) -> Instant:
        return self._instant

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedClock):
            return NotImplemented
        return self._instant == other._instant and self._zone == other._zone

    def __hash__(self) -> int:
        return hash(self._instant) ^ hash(self._zone)

    def __repr__(self) -> str:
        return f"FixedClock({self._instant}, {self._zone})"


@final
class OffsetClock(Clock):
    """A clock that adds a duration to the time of a base clock"""

    __slots__ = ("_base", "_offset")

    def __init__(self, base: Clock, offset: Duration) -> None:
        self._base = base
        self._offset = offset

    @property
    def base(self) -> Clock:
        return self._base

    @property
    def duration(self) -> Duration:
        return self._offset

    @property
    def zone(self) -> ZoneId:
        return self._base.zone

    def with_zone(self, zone: ZoneId, /) -> Clock:
        if zone == self._base.zone:
            return self
        return OffsetClock(self._base.with_zone(zone), self._offset)

    def millis(self) -> int:
        return _check_int64(self._base.millis() + self._offset.to_millis())

    def instant(self) -> Instant:
        return self._base.instant() + self._offset

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OffsetClock):
            return NotImplemented
        return self._base == other._base and self._offset == other._offset

    def __hash__(self) -> int:
        return hash(self._base) ^ hash(self._offset)

    def __repr__(self) -> str:
        return f"OffsetClock({self._base!r}, {self._offset})"


@final
class TickClock(Clock):
    """A clock that rounds the time of a base clock down to whole ticks

    The tick, in nanoseconds, must be a whole number of milliseconds,
    or divide a second without remainder.
    """

    __slots__ = ("_base", "_tick_ns")

    def __init__(self, base: Clock, tick_ns: int) -> None:
        if tick_ns < 1:
            raise OutOfRange("Tick duration must be positive")
        if tick_ns % 1_000_000 and 1_000_000_000 % tick_ns:
            raise OutOfRange(
                f"Invalid tick duration: {Duration(nanoseconds=tick_ns)}"
            )
        self._base = base
        self._tick_ns = tick_ns

    @property
    def base(self) -> Clock:
        return self._base

    @property
    def tick_duration(self) -> Duration:
        return Duration(nanoseconds=self._tick_ns)

    @property
    def zone(self) -> ZoneId:
        return self._base.zone

    def with_zone(self, zone: ZoneId, /) -> Clock:
        if zone == self._base.zone:
            return self
        return TickClock(self._base.with_zone(zone), self._tick_ns)

    def millis(self) -> int:
        if self._tick_ns % 1_000_000:
            return self.instant().to_epoch_milli()
        millis = self._base.millis()
        return millis - millis % (self._tick_ns // 1_000_000)

    def instant(self) -> Instant:
        if self._tick_ns % 1_000_000 == 0:
            return Instant.from_epoch_milli(self.millis())
        instant = self._base.instant()
        return Instant.from_epoch_second(
            instant.epoch_second, instant.nano - instant.nano % self._tick_ns
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TickClock):
            return NotImplemented
        return self._base == other._base and self._tick_ns == other._tick_ns

    def __hash__(self) -> int:
        return hash(self._base) ^ hash(self._tick_ns)

    def __repr__(self) -> str:
        return f"TickClock({self._base!r}, {self.tick_duration})"


# Helpers that pre-compute/lookup as much as possible
_object_new = object.__new__
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MIN_YEAR = -999_999_999
_MAX_YEAR = 999_999_999
_DAYS_PER_CYCLE = 146_097  # days in a 400 year cycle
_DAYS_0000_TO_1970 = _DAYS_PER_CYCLE * 5 - (30 * 365 + 7)
_MIN_EPOCH_DAY = -365_243_219_162  # -999999999-01-01
_MAX_EPOCH_DAY = 365_241_780_471  # +999999999-12-31
_MIN_EPOCH_SECOND = -31_557_014_167_219_200  # -1000000000-01-01T00:00:00Z
_MAX_EPOCH_SECOND = 31_556_889_864_403_199  # +1000000000-12-31T23:59:59Z
_MAX_OFFSET_SECONDS = 18 * 3_600
_UNIX_EPOCH = _datetime(1970, 1, 1, tzinfo=_timezone.utc)
_TZIF_HEADER = struct.Struct(">4sc15x6l")
# (position, preceded by colon) of each two-digit number, by ID length
_OFFSET_ID_LAYOUTS: dict[int, tuple[tuple[int, bool], ...]] = {
    3: ((1, False),),
    5: ((1, False), (3, False)),
    6: ((1, False), (4, True)),
    7: ((1, False), (3, False), (5, False)),
    9: ((1, False), (4, True), (7, True)),
}
# Note: [0-9] instead of \d, which also matches non-ASCII digits
_YEAR_RE = r"([+-][0-9]{5,9}|-?[0-9]{4})"
_match_date = re.compile(rf"{_YEAR_RE}-([0-9]{{2}})-([0-9]{{2}})").fullmatch
_match_year = re.compile(_YEAR_RE).fullmatch
_match_year_month = re.compile(rf"{_YEAR_RE}-([0-9]{{2}})").fullmatch
_match_month_day = re.compile(r"--([0-9]{2})-([0-9]{2})").fullmatch
_match_instant = re.compile(
    r"([+-][0-9]{5,10}|-?[0-9]{4})-([0-9]{2})-([0-9]{2})"
    r"T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]{1,9}))?Z"
).fullmatch
_match_period = re.compile(
    r"([-+]?)P(?:([-+]?[0-9]+)Y)?(?:([-+]?[0-9]+)M)?"
    r"(?:([-+]?[0-9]+)W)?(?:([-+]?[0-9]+)D)?",
    re.IGNORECASE,
).fullmatch
_match_duration = re.compile(
    r"([-+]?)([0-9]{2,}):([0-5][0-9]):([0-5][0-9])(?:\.([0-9]{1,9}))?"
).fullmatch
_match_region_id = re.compile(r"[A-Za-z][A-Za-z0-9~/._+-]+").fullmatch
# A POSIX TZ rule without daylight saving time, e.g. "UTC0" or "<+05>-5"
_match_fixed_tz_rule = re.compile(
    r"(?:<[A-Za-z0-9+-]+>|[A-Za-z]+)[+-]?[0-9]{1,2}(?::[0-9]{2}){0,2}"
).fullmatch


Duration.ZERO = Duration()
Instant.EPOCH = Instant._from_parts(0, 0)
Instant.MIN = Instant._from_parts(_MIN_EPOCH_SECOND, 0)
Instant.MAX = Instant._from_parts(_MAX_EPOCH_SECOND, 999_999_999)
Date.MIN = Date._unchecked(_MIN_YEAR, 1, 1)
Date.MAX = Date._unchecked(_MAX_YEAR, 12, 31)
Period.ZERO = Period()
_default_offset_cache = OffsetCache()
ZoneOffset.UTC = _default_offset_cache.intern(ZoneOffset._new(0))
ZoneOffset.MIN = _default_offset_cache.intern(
    ZoneOffset._new(-_MAX_OFFSET_SECONDS)
)
ZoneOffset.MAX = _default_offset_cache.intern(
    ZoneOffset._new(_MAX_OFFSET_SECONDS)
)
_default_provider: ZoneRulesProvider = ZoneInfoProvider()
ZoneId.SHORT_IDS = MappingProxyType(
    {
        "ACT": "Australia/Darwin",
        "AET": "Australia/Sydney",
        "AGT": "America/Argentina/Buenos_Aires",
        "ART": "Africa/Cairo",
        "AST": "America/Anchorage",
        "BET": "America/Sao_Paulo",
        "BST": "Asia/Dhaka",
        "CAT": "Africa/Harare",
        "CNT": "America/St_Johns",
        "CST": "America/Chicago",
        "CTT": "Asia/Shanghai",
        "EAT": "Africa/Addis_Ababa",
        "ECT": "Europe/Paris",
        "IET": "America/Indiana/Indianapolis",
        "IST": "Asia/Kolkata",
        "JST": "Asia/Tokyo",
        "MIT": "Pacific/Apia",
        "NET": "Asia/Yerevan",
        "NST": "Pacific/Auckland",
        "PLT": "Asia/Karachi",
        "PNT": "America/Phoenix",
        "PRT": "America/Puerto_Rico",
        "PST": "America/Los_Angeles",
        "SST": "Pacific/Guadalcanal",
        "VST": "Asia/Ho_Chi_Minh",
        "EST": "-05:00",
        "MST": "-07:00",
        "HST": "-10:00",
    }
)
