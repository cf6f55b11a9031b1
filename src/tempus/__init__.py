# The MIT License (MIT)
#
# Copyright (c) The tempus authors
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
# - Everything lives in one module. Value, Diff and Sequence all call
#   into each other, and the unit rules read best side by side.
# - Three kinds of values are supported: date, datetime and
#   PreciseDateTime. Each helper handles them with explicit isinstance
#   checks. Keep the checks for datetime before date: a datetime IS a date.
# - Arithmetic on aware datetimes always goes through UTC, because the
#   standard library ignores offsets when both operands share a tzinfo.
from __future__ import annotations

__version__ = "0.1.0"

import logging
from calendar import monthrange
from datetime import (
    date as _date,
    datetime as _datetime,
    timedelta as _timedelta,
    timezone as _timezone,
)
from enum import Enum
from fractions import Fraction
from operator import attrgetter, methodcaller
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Iterator,
    Literal,
    NamedTuple,
    Protocol,
    Union,
    no_type_check,
    overload,
    runtime_checkable,
)
from zoneinfo import ZoneInfo

__all__ = [
    "Value",
    "Diff",
    "Sequence",
    "Op",
    "OpKind",
    "OpStep",
    "Calc",
    "PreciseDateTime",
    "SupportsPyDatetime",
    "wrap",
    "resolve_unit",
    "multiplier",
    "is_dst",
    "compare_dst",
    "fix_dst",
    "fix_day_diff",
    "UNITS",
    "COMPONENTS",
    "DEFAULTS",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
    "UnsupportedValue",
    "UnsupportedUnit",
    "ConstructionError",
    "UsageError",
    "NoStepDefined",
]

_log = logging.getLogger(__name__)

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(1, 8)

Unit = Literal["year", "month", "week", "day", "hour", "minute", "second"]
Component = Literal[
    "year", "month", "day", "hour", "minute", "second", "subsecond"
]

UNITS: tuple[Unit, ...] = (
    "year",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
)
"""All supported units, largest first"""

COMPONENTS: tuple[Component, ...] = (
    "year",
    "month",
    "day",
    "hour",
    "minute",
    "second",
    "subsecond",
)
"""The components a value is made of, largest first"""

DEFAULTS: dict[str, int] = {
    "month": 1,
    "day": 1,
    "hour": 0,
    "minute": 0,
    "second": 0,
    "subsecond": 0,
}
"""Component values used when truncating"""

_SYNONYMS: dict[str, Unit] = {
    "years": "year",
    "months": "month",
    "weeks": "week",
    "days": "day",
    "hours": "hour",
    "minutes": "minute",
    "min": "minute",
    "mins": "minute",
    "seconds": "second",
    "sec": "second",
    "secs": "second",
}

_MULTIPLIERS: dict[str, int] = {
    "second": 1,
    "minute": 60,
    "hour": 3_600,
    "day": 86_400,
}

_DATE_COMPONENTS: tuple[Component, ...] = ("year", "month", "day")


def resolve_unit(name: str) -> Unit:
    """Resolve a unit name or one of its synonyms to the canonical unit

    Example
    -------

    >>> resolve_unit("hours")
    'hour'
    >>> resolve_unit("sec")
    'second'

    Raises
    ------
    UnsupportedUnit
        If the name isn't a known unit
    """
    unit = _SYNONYMS.get(name, name)
    if unit not in UNITS:
        raise UnsupportedUnit.for_name(name)
    return unit  # type: ignore[return-value]


def multiplier(unit: str) -> int:
    """The fixed length of a unit in seconds.

    Only seconds, minutes, hours and days have a fixed length.
    Weeks, months and years don't, and raise :class:`UnsupportedUnit`.

    >>> multiplier("hours")
    3600
    """
    resolved = resolve_unit(unit)
    try:
        return _MULTIPLIERS[resolved]
    except KeyError:
        raise UnsupportedUnit.not_fixed(unit) from None


class PreciseDateTime:
    """A datetime with an exact second fraction and an exact UTC offset.

    Both the fraction of the second and the offset (in seconds east of UTC)
    are :class:`~fractions.Fraction` instances, so no precision is lost
    when doing arithmetic, however small the fraction.

    Example
    -------

    >>> PreciseDateTime(2019, 6, 28, 14, 28, 48, Fraction(1, 3), offset=10_800)
    PreciseDateTime(2019-06-28T14:28:48(1/3)+03:00)

    Note
    ----
    Equality and ordering compare the moment in time, not the fields.
    Use :meth:`exact_eq` to compare the fields as well.
    """

    __slots__ = ("_date", "_hour", "_minute", "_second", "_fraction", "_offset")

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        fraction: Fraction | int = 0,
        *,
        offset: Fraction | int = 0,
    ) -> None:
        self._date = _date(year, month, day)
        if not 0 <= hour < 24:
            raise ValueError(f"hour must be in 0..23, got {hour}")
        if not 0 <= minute < 60:
            raise ValueError(f"minute must be in 0..59, got {minute}")
        if not 0 <= second < 60:
            raise ValueError(f"second must be in 0..59, got {second}")
        fraction = Fraction(fraction)
        if not 0 <= fraction < 1:
            raise ValueError(f"fraction must be in [0, 1), got {fraction}")
        offset = Fraction(offset)
        if not -86_400 < offset < 86_400:
            raise ValueError(f"offset must be within 24 hours, got {offset}")
        self._hour = hour
        self._minute = minute
        self._second = second
        self._fraction = fraction
        self._offset = offset

    if TYPE_CHECKING:

        @property
        def year(self) -> int: ...

        @property
        def month(self) -> int: ...

        @property
        def day(self) -> int: ...

        @property
        def hour(self) -> int: ...

        @property
        def minute(self) -> int: ...

        @property
        def second(self) -> int: ...

        @property
        def fraction(self) -> Fraction: ...

        @property
        def offset(self) -> Fraction: ...

    else:
        year = property(attrgetter("_date.year"))
        month = property(attrgetter("_date.month"))
        day = property(attrgetter("_date.day"))
        hour = property(attrgetter("_hour"))
        minute = property(attrgetter("_minute"))
        second = property(attrgetter("_second"))
        fraction = property(attrgetter("_fraction"))
        offset = property(attrgetter("_offset"))

    def date(self) -> _date:
        """The date part

        >>> PreciseDateTime(2021, 1, 2, 3, 4, 5).date()
        datetime.date(2021, 1, 2)
        """
        return self._date

    def replace(self, **kwargs: Any) -> PreciseDateTime:
        """Construct a new instance with the given fields replaced.

        Arguments are the same as the constructor. Raises
        ``ValueError`` if the result is invalid.
        """
        fields = {
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self._hour,
            "minute": self._minute,
            "second": self._second,
            "fraction": self._fraction,
            "offset": self._offset,
        }
        fields.update(kwargs)
        return PreciseDateTime(**fields)

    def shift(self, seconds: Fraction | float) -> PreciseDateTime:
        """Move by an exact number of seconds, keeping the offset

        >>> PreciseDateTime(2021, 1, 2, 23, 59).shift(Fraction(121, 2))
        PreciseDateTime(2021-01-03T00:00:00.5+00:00)
        """
        return self._from_exact(self._exact() + Fraction(seconds), self._offset)

    def py_datetime(self) -> _datetime:
        """Convert to a :class:`~datetime.datetime` with a fixed offset.
        The fraction is truncated to microseconds.
        """
        return _datetime(
            self.year,
            self.month,
            self.day,
            self._hour,
            self._minute,
            self._second,
            int(self._fraction * 1_000_000),
            _timezone(_timedelta(microseconds=round(self._offset * 1_000_000))),
        )

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> PreciseDateTime:
        """Create from a :class:`~datetime.datetime`.
        Naive datetimes are taken to be at offset zero.
        """
        offset = d.utcoffset()
        return cls(
            d.year,
            d.month,
            d.day,
            d.hour,
            d.minute,
            d.second,
            Fraction(d.microsecond, 1_000_000),
            offset=0 if offset is None else _td_seconds(offset),
        )

    def canonical_format(self, sep: Literal[" ", "T"] = "T") -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS(.fff)+HH:MM``.

        A fraction that can't be written as a decimal of at most nine
        digits is shown in parentheses, e.g. ``14:28:48(1/3)+03:00``.
        """
        return (
            f"{self._date.isoformat()}{sep}"
            f"{self._hour:02}:{self._minute:02}:{self._second:02}"
            f"{_format_fraction(self._fraction)}"
            f"{_format_offset(self._offset)}"
        )

    def __str__(self) -> str:
        return self.canonical_format(" ")

    def __repr__(self) -> str:
        return f"PreciseDateTime({self.canonical_format()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreciseDateTime):
            return NotImplemented
        return self._exact() == other._exact()

    def __hash__(self) -> int:
        return hash(self._exact())

    def __lt__(self, other: PreciseDateTime) -> bool:
        if not isinstance(other, PreciseDateTime):
            return NotImplemented
        return self._exact() < other._exact()

    def __le__(self, other: PreciseDateTime) -> bool:
        if not isinstance(other, PreciseDateTime):
            return NotImplemented
        return self._exact() <= other._exact()

    def __gt__(self, other: PreciseDateTime) -> bool:
        if not isinstance(other, PreciseDateTime):
            return NotImplemented
        return self._exact() > other._exact()

    def __ge__(self, other: PreciseDateTime) -> bool:
        if not isinstance(other, PreciseDateTime):
            return NotImplemented
        return self._exact() >= other._exact()

    def exact_eq(self, other: PreciseDateTime, /) -> bool:
        """Compare the fields, including the offset.

        >>> a = PreciseDateTime(2020, 8, 15, 12, offset=3600)
        >>> b = PreciseDateTime(2020, 8, 15, 13, offset=7200)
        >>> a == b
        True
        >>> a.exact_eq(b)
        False
        """
        return (
            self._date,
            self._hour,
            self._minute,
            self._second,
            self._fraction,
            self._offset,
        ) == (
            other._date,
            other._hour,
            other._minute,
            other._second,
            other._fraction,
            other._offset,
        )

    def _exact(self) -> Fraction:
        # seconds since midnight UTC, the day before date.fromordinal(1)
        return (
            Fraction(
                self._date.toordinal() * 86_400
                + self._hour * 3_600
                + self._minute * 60
                + self._second
            )
            + self._fraction
            - self._offset
        )

    @classmethod
    def _from_exact(cls, total: Fraction, offset: Fraction) -> PreciseDateTime:
        days, rest = divmod(total + offset, 86_400)
        whole = int(rest)
        hour, whole_minutes = divmod(whole, 3_600)
        minute, second = divmod(whole_minutes, 60)
        self = _object_new(cls)
        self._date = _date.fromordinal(days)
        self._hour = hour
        self._minute = minute
        self._second = second
        self._fraction = rest - whole
        self._offset = offset
        return self

    # It's immutable, so there's nothing to copy
    def __copy__(self) -> PreciseDateTime:
        return self

    def __deepcopy__(self, _: object) -> PreciseDateTime:
        return self

    def __reduce__(self) -> tuple[object, ...]:
        return (
            _unpkl_precise,
            (
                self.year,
                self.month,
                self.day,
                self._hour,
                self._minute,
                self._second,
                self._fraction,
                self._offset,
            ),
        )


# A separate unpickling function allows us to change the
# pickling format later without breaking old pickles
@no_type_check
def _unpkl_precise(*args) -> PreciseDateTime:
    *fields, offset = args
    return PreciseDateTime(*fields, offset=offset)


Native = Union[_date, _datetime, PreciseDateTime]
Variant = type


@runtime_checkable
class SupportsPyDatetime(Protocol):
    """Anything that can give a :class:`~datetime.datetime` on demand,
    such as ``whenever``'s datetime classes or :class:`PreciseDateTime`.
    """

    def py_datetime(self) -> _datetime: ...


class Value:
    """A point in time, which is one of:

    - a :class:`~datetime.date`, without time of day or zone;
    - a :class:`~datetime.datetime`, naive, with a fixed offset,
      or with a real zone like :class:`~zoneinfo.ZoneInfo`;
    - a :class:`PreciseDateTime`, with exact fractions and offset.

    All operations return a new :class:`Value` wrapping the same kind of
    value that was wrapped originally. Use :meth:`unwrap` to get it back.

    Example
    -------

    >>> v = Value(datetime(2019, 6, 14, 13, 40))
    >>> v.add(10, "days").floor("week").unwrap()
    datetime.datetime(2019, 6, 24, 0, 0)

    """

    __slots__ = ("_native",)

    def __init__(self, native: Native) -> None:
        if not isinstance(native, (_date, PreciseDateTime)):
            raise UnsupportedValue.for_value(native)
        self._native = native

    @classmethod
    def wrap(cls, obj: object, /) -> Value:
        """Wrap a date, datetime or :class:`PreciseDateTime`.

        Already wrapped values are returned as is. Other objects are
        accepted if they have a ``py_datetime()`` method returning a
        :class:`~datetime.datetime`.

        Raises
        ------
        UnsupportedValue
            If the object isn't a point in time
        """
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, (_date, PreciseDateTime)):
            return cls._from_native_unchecked(obj)
        if isinstance(obj, SupportsPyDatetime):
            converted = obj.py_datetime()
            if isinstance(converted, _datetime):
                return cls._from_native_unchecked(converted)
        raise UnsupportedValue.for_value(obj)

    @classmethod
    def _from_native_unchecked(cls, native: Native) -> Value:
        self = _object_new(cls)
        self._native = native
        return self

    def unwrap(self) -> Native:
        """The wrapped value"""
        return self._native

    def __repr__(self) -> str:
        return f"Value({self._native})"

    if TYPE_CHECKING:

        @property
        def year(self) -> int: ...

        @property
        def month(self) -> int: ...

        @property
        def day(self) -> int: ...

        @property
        def hour(self) -> int: ...

        @property
        def minute(self) -> int: ...

        @property
        def second(self) -> int: ...

        @property
        def subsecond(self) -> Fraction: ...

    else:
        year = property(attrgetter("_native.year"))
        month = property(attrgetter("_native.month"))
        day = property(attrgetter("_native.day"))
        # dates don't have these, so they go through the component check
        hour = property(methodcaller("component", "hour"))
        minute = property(methodcaller("component", "minute"))
        second = property(methodcaller("component", "second"))
        subsecond = property(methodcaller("component", "subsecond"))

    def component(self, name: str) -> int | Fraction:
        """Read one component of the value.

        Example
        -------

        >>> Value(datetime(2019, 6, 28, 14, 28, 48, 123_000)).component("subsecond")
        Fraction(123, 1000)
        >>> Value(date(2019, 6, 28)).component("hour")
        Traceback (most recent call last):
          ...
        tempus.UnsupportedUnit: date has no hour

        """
        resolved = _SYNONYMS.get(name, name)
        if resolved not in _components_of(self._native):
            raise UnsupportedUnit.for_component(name, self._native)
        return _read(self._native, resolved)

    __getitem__ = component

    def to_dict(self) -> dict[str, int | Fraction]:
        """All components of the value, largest first"""
        return {
            name: _read(self._native, name)
            for name in _components_of(self._native)
        }

    def merge(self, **components: int | Fraction) -> Value:
        """Replace some components, keeping the rest.

        Components the wrapped kind of value doesn't have
        (e.g. ``hour`` for a date) are ignored.

        Example
        -------

        >>> Value(date(2018, 6, 1)).merge(year=1983).unwrap()
        datetime.date(1983, 6, 1)

        Raises
        ------
        ConstructionError
            If the result isn't valid, e.g. February 30th
        UnsupportedUnit
            If a name isn't a component at all
        """
        own = _components_of(self._native)
        fields = self.to_dict()
        for name, amount in components.items():
            resolved = _SYNONYMS.get(name, name)
            if resolved not in COMPONENTS:
                raise UnsupportedUnit.for_name(name)
            if resolved in own:
                fields[resolved] = amount
        return self._from_native_unchecked(_build(self._native, fields))

    def convert(self, target: Variant, like: object = None) -> Value:
        """Convert into another kind of value: ``date``, ``datetime``
        or :class:`PreciseDateTime`.

        A date converted to a kind with time of day becomes midnight,
        in the zone (or offset) of ``like`` if given.
        Converting to a date drops the time of day.

        >>> Value(date(2019, 6, 1)).convert(datetime).unwrap()
        datetime.datetime(2019, 6, 1, 0, 0)
        """
        reference = None if like is None else Value.wrap(like)._native
        return self._from_native_unchecked(
            _convert(self._native, target, reference)
        )

    def dst(self) -> bool | None:
        """Whether daylight saving time is observed, or ``None``
        if the value carries no such information."""
        return is_dst(self._native)

    def compare(self, other: object) -> int | None:
        """Order two values: -1, 0 or 1. Values of different kinds are
        converted first (a date becomes midnight in the other's zone).
        Returns ``None`` for objects that aren't values.
        """
        if not isinstance(other, Value):
            return None
        delta = _seconds_between(self._native, other._native)
        return (delta > 0) - (delta < 0)

    def __eq__(self, other: object) -> bool:
        """Values are equal if they wrap the same kind of value,
        and the wrapped values are equal.

        Note
        ----
        Use :meth:`compare` to check whether values of different kinds
        represent the same moment.
        """
        if not isinstance(other, Value):
            return NotImplemented
        return (
            _variant(self._native) is _variant(other._native)
            and self._native == other._native
        )

    def __hash__(self) -> int:
        return hash(self._native)

    def __lt__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _seconds_between(self._native, other._native) < 0

    def __le__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _seconds_between(self._native, other._native) <= 0

    def __gt__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _seconds_between(self._native, other._native) > 0

    def __ge__(self, other: Value) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return _seconds_between(self._native, other._native) >= 0

    def add(self, span: int | Fraction | float, unit: str) -> Value:
        """Add ``span`` units.

        - Seconds, minutes and hours are exact elapsed time.
        - Days keep the wall clock time, even across a DST transition.
        - Weeks are seven days.
        - Months and years keep the day of the month, limited to the
          length of the target month: January 31st plus one month
          is the last day of February.

        Example
        -------

        >>> Value(date(2019, 1, 31)).add(1, "month").unwrap()
        datetime.date(2019, 2, 28)
        >>> Value(datetime(2019, 7, 3, 23, 28)).add(1, "day").unwrap()
        datetime.datetime(2019, 7, 4, 23, 28)

        """
        unit = resolve_unit(unit)
        if unit in _MULTIPLIERS:
            result = self._from_native_unchecked(
                _shift(self._native, span * _MULTIPLIERS[unit])
            )
            return fix_dst(result, self) if unit == "day" else result
        elif unit == "week":
            return self.add(span * 7, "day")
        elif unit == "month":
            year_overflow, month_new = divmod(
                self.month - 1 + _whole(span, unit), 12
            )
            return self._with_year_month(self.year + year_overflow, month_new + 1)
        else:
            return self._with_year_month(self.year + _whole(span, unit), self.month)

    def subtract(self, span: int | Fraction | float, unit: str) -> Value:
        """Subtract ``span`` units. The same as adding ``-span``."""
        return self.add(-span, unit)

    def truncate(self, unit: str, *, week_start: int = MONDAY) -> Value:
        """Reset all components smaller than ``unit``.

        Truncating to a week goes back to the start of the week,
        which is Monday unless ``week_start`` says otherwise.

        Example
        -------

        >>> Value(datetime(2018, 6, 23, 12, 30)).truncate("month").unwrap()
        datetime.datetime(2018, 6, 1, 0, 0)

        """
        unit = resolve_unit(unit)
        if unit == "week":
            if week_start not in range(MONDAY, SUNDAY + 1):
                raise UsageError(f"week_start must be in 1..7, got {week_start!r}")
            start = self.truncate("day")
            return start.subtract((_weekday(self._native) - week_start) % 7, "day")
        smaller = COMPONENTS[COMPONENTS.index(unit) + 1 :]
        return self.merge(**{name: DEFAULTS[name] for name in smaller})

    floor = truncate

    def ceil(self, unit: str, *, week_start: int = MONDAY) -> Value:
        """The smallest value at a ``unit`` boundary not before this one

        >>> Value(datetime(2018, 6, 23, 12, 30)).ceil("month").unwrap()
        datetime.datetime(2018, 7, 1, 0, 0)
        """
        floor = self.truncate(unit, week_start=week_start)
        return floor if floor == self else floor.add(1, unit)

    def round(self, unit: str, *, week_start: int = MONDAY) -> Value:
        """The nearest ``unit`` boundary. Halfway rounds up."""
        floor = self.truncate(unit, week_start=week_start)
        ceil = self.ceil(unit, week_start=week_start)
        if abs(_seconds_between(self._native, floor._native)) < abs(
            _seconds_between(self._native, ceil._native)
        ):
            return floor
        return ceil

    def iterate(
        self,
        span: int,
        unit: str,
        predicate: Callable[[Any], bool] | None = None,
    ) -> Value:
        """Like :meth:`add`, but only count the steps for which
        ``predicate`` holds. Useful for "business days" and the like.

        A span of zero moves forward until the predicate holds,
        which forces a value into an acceptable range.

        Example
        -------

        >>> # ten working days later
        >>> Value(datetime(2019, 7, 3, 23, 28)).iterate(
        ...     10, "days", lambda d: d.isoweekday() <= 5
        ... ).unwrap()
        datetime.datetime(2019, 7, 17, 23, 28)

        Raises
        ------
        UsageError
            If ``span`` isn't an integer, or there's no predicate
        """
        if not isinstance(span, int) or isinstance(span, bool):
            raise UsageError(f"span must be an integer, got {span!r}")
        if predicate is None:
            raise UsageError("iterate() requires a predicate")
        unit = resolve_unit(unit)
        step = -1 if span < 0 else 1
        current = self
        if span == 0:
            while not predicate(current._native):
                current = current.add(step, unit)
            return current
        counted = 0
        while counted < abs(span):
            current = current.add(step, unit)
            if predicate(current._native):
                counted += 1
        return current

    def __sub__(self, other: object) -> Diff:
        """The :class:`Diff` between this value and another"""
        if not isinstance(other, (Value, _date, PreciseDateTime, SupportsPyDatetime)):
            return NotImplemented
        return Diff(self, other)

    def __rsub__(self, other: object) -> Diff:
        if not isinstance(other, (_date, PreciseDateTime, SupportsPyDatetime)):
            return NotImplemented
        return Diff(other, self)

    def to(self, end: object) -> Sequence:
        """A :class:`Sequence` from this value to ``end``, without a step yet"""
        return Sequence(self, to=end)

    @overload
    def step(self, unit: str, /) -> Sequence: ...

    @overload
    def step(self, span: int | Fraction, unit: str, /) -> Sequence: ...

    def step(self, span: Any, unit: str | None = None, /) -> Sequence:
        """An endless :class:`Sequence` starting here.
        ``step("day")`` is short for ``step(1, "day")``.
        """
        return Sequence(self).step(span, unit)

    def for_(self, span: int | Fraction, unit: str) -> Sequence:
        """A :class:`Sequence` from this value to ``span`` units later"""
        return Sequence(self).for_(span, unit)

    def _with_year_month(self, year: int, month: int) -> Value:
        try:
            last_day = monthrange(year, month)[1]
        except ValueError as e:
            raise ConstructionError.for_fields(
                self._native, {"year": year, "month": month}, e
            ) from e
        return self.merge(year=year, month=month, day=min(self.day, last_day))


def wrap(obj: object, /) -> Value:
    """Shortcut for :meth:`Value.wrap`"""
    return Value.wrap(obj)


def is_dst(native: object) -> bool | None:
    """Whether a value observes daylight saving time.

    Returns ``None`` when this can't be known: for dates, naive
    datetimes, fixed offsets and :class:`PreciseDateTime`.
    """
    if not isinstance(native, _datetime):
        return None
    delta = native.dst()
    return None if delta is None else bool(delta)


def compare_dst(a: object, b: object) -> int | None:
    """1 if only ``a`` is in DST, -1 if only ``b`` is, 0 if both or neither.
    ``None`` if either one is unknown."""
    dst_a, dst_b = is_dst(a), is_dst(b)
    if dst_a is None or dst_b is None:
        return None
    return dst_a - dst_b


def fix_dst(candidate: Value, origin: Value) -> Value:
    """Undo the shift of the wall clock after adding days across
    a DST transition."""
    shift = compare_dst(origin.unwrap(), candidate.unwrap())
    if not shift:
        return candidate
    _log.debug(
        "DST changed between %s and %s, shifting by %+d hour",
        origin.unwrap(),
        candidate.unwrap(),
        shift,
    )
    return candidate.add(shift, "hour")


def fix_day_diff(from_: object, to: object, days: int) -> int:
    """Count the day ending in DST that is an hour short of 24 hours"""
    if compare_dst(from_, to) == 1:
        _log.debug("DST day between %s and %s counted as a whole day", to, from_)
        return days + 1
    return days


class Diff:
    """The difference between two points in time, ``from_ - to``.

    Usually created by subtracting from a :class:`Value`.

    Example
    -------

    >>> d = Value(datetime(2019, 6, 15, 12, 10)) - datetime(2019, 6, 1, 14, 50)
    >>> d.days
    13
    >>> d.div(3, "hours")
    111
    >>> d.factorize(weeks=False, zeroes=False)
    {'day': 13, 'hour': 21, 'minute': 20, 'second': 0}

    Note
    ----
    If one side is a date and the other isn't, the date is taken
    to be midnight in the zone of the other side.
    """

    __slots__ = ("_from", "_to")

    def __init__(self, from_: object, to: object) -> None:
        a, b = _align(Value.wrap(from_).unwrap(), Value.wrap(to).unwrap())
        if _variant(a) is not _variant(b):
            b = _convert(b, _variant(a), a)
        self._from = Value._from_native_unchecked(a)
        self._to = Value._from_native_unchecked(b)

    @property
    def from_(self) -> Value:
        return self._from

    @property
    def to(self) -> Value:
        return self._to

    def __repr__(self) -> str:
        return f"Diff({self._from.unwrap()} - {self._to.unwrap()})"

    def __neg__(self) -> Diff:
        """Swap the operands"""
        return Diff(self._to, self._from)

    @overload
    def div(self, unit: str, /) -> int: ...

    @overload
    def div(self, span: int, unit: str, /) -> int: ...

    def div(self, span: Any, unit: str | None = None, /) -> int:
        """The number of whole ``span`` units between the two points,
        truncated toward zero.

        >>> diff = Value(datetime(2020, 6, 12, 12, 28)) - datetime(2019, 6, 1, 14, 50)
        >>> diff.div("month")
        12
        >>> diff.div(5, "months")
        2
        """
        if unit is None:
            span, unit = 1, span
        if self.is_negative():
            return -(-self).div(span, unit)
        return self._singular_div(resolve_unit(unit)) // span

    @overload
    def divmod(self, unit: str, /) -> tuple[int, Native]: ...

    @overload
    def divmod(self, span: int, unit: str, /) -> tuple[int, Native]: ...

    def divmod(self, span: Any, unit: str | None = None, /) -> tuple[int, Native]:
        """:meth:`div` and :meth:`modulo` at once.

        The remainder is a point in time: ``to`` plus the whole units.
        """
        if unit is None:
            span, unit = 1, span
        quotient = self.div(span, unit)
        return quotient, self._to.add(quotient * span, unit).unwrap()

    @overload
    def modulo(self, unit: str, /) -> Native: ...

    @overload
    def modulo(self, span: int, unit: str, /) -> Native: ...

    def modulo(self, span: Any, unit: str | None = None, /) -> Native:
        """``to`` advanced by the whole units in the difference"""
        return self.divmod(span, unit)[1]

    @property
    def years(self) -> int:
        return self.div("year")

    @property
    def months(self) -> int:
        return self.div("month")

    @property
    def weeks(self) -> int:
        return self.div("week")

    @property
    def days(self) -> int:
        return self.div("day")

    @property
    def hours(self) -> int:
        return self.div("hour")

    @property
    def minutes(self) -> int:
        return self.div("minute")

    @property
    def seconds(self) -> int:
        return self.div("second")

    def factorize(
        self,
        *,
        zeroes: bool = True,
        largest: str = "year",
        smallest: str = "second",
        weeks: bool = True,
    ) -> dict[str, int]:
        """Break the difference down into units, largest first.

        Adding the parts one by one to ``to`` gives ``from_`` back
        (up to the part smaller than ``smallest``).

        Example
        -------

        >>> diff = Value(datetime(2019, 6, 15, 12, 10)) - datetime(2019, 6, 1, 14, 50)
        >>> diff.factorize()
        {'year': 0, 'month': 0, 'week': 1, 'day': 6, 'hour': 21, 'minute': 20, 'second': 0}
        >>> diff.factorize(largest="hour", smallest="minute")
        {'hour': 333, 'minute': 20}

        Parameters
        ----------
        zeroes
            Keep the leading units that are zero
        largest
            The largest unit to use
        smallest
            The smallest unit to use
        weeks
            Whether to use weeks
        """
        units = UNITS[
            UNITS.index(resolve_unit(largest)) : UNITS.index(resolve_unit(smallest))
            + 1
        ]
        result: dict[str, int] = {}
        remainder: Native = self._to.unwrap()
        for unit in units:
            if unit == "week" and not weeks:
                continue
            result[unit], remainder = Diff(self._from, remainder).divmod(unit)
        if not zeroes:
            for unit in list(result):
                if result[unit]:
                    break
                del result[unit]
        return result

    def exact(self) -> Fraction:
        """The exact number of seconds between the two points"""
        return _seconds_between(self._from.unwrap(), self._to.unwrap())

    def is_negative(self) -> bool:
        return self.exact() < 0

    def is_positive(self) -> bool:
        return self.exact() > 0

    def __eq__(self, other: object) -> bool:
        """Differences are equal if they span exactly the same time"""
        if not isinstance(other, Diff):
            return NotImplemented
        return self.exact() == other.exact()

    def __hash__(self) -> int:
        return hash(self.exact())

    def __lt__(self, other: Diff) -> bool:
        if not isinstance(other, Diff):
            return NotImplemented
        return self.exact() < other.exact()

    def __le__(self, other: Diff) -> bool:
        if not isinstance(other, Diff):
            return NotImplemented
        return self.exact() <= other.exact()

    def __gt__(self, other: Diff) -> bool:
        if not isinstance(other, Diff):
            return NotImplemented
        return self.exact() > other.exact()

    def __ge__(self, other: Diff) -> bool:
        if not isinstance(other, Diff):
            return NotImplemented
        return self.exact() >= other.exact()

    def _singular_div(self, unit: Unit) -> int:
        from_, to = self._from, self._to
        if unit in _MULTIPLIERS:
            count = _seconds_between(from_.unwrap(), to.unwrap()) // _MULTIPLIERS[unit]
            if unit == "day":
                return fix_day_diff(from_.unwrap(), to.unwrap(), count)
            return count
        elif unit == "week":
            return self.div(7, "day")
        # estimate on the calendar of from_, in case the zones differ
        local = Value._from_native_unchecked(
            _in_zone_of(to.unwrap(), from_.unwrap())
        )
        if unit == "month":
            count = (from_.year - local.year) * 12 + from_.month - local.month
            # the last day of a month completes it, since adding clamps there
            last_day = monthrange(from_.year, from_.month)[1]
            if from_.day >= local.day or from_.day == last_day:
                return count
            return count - 1
        count = from_.year - local.year
        # the estimate is one too high if the last year isn't complete
        return count if to.add(count, unit) <= from_ else count - 1


Step = tuple[Union[int, Fraction], Unit]


class Sequence:
    """Points in time from a start, moving by a fixed step, up to
    an end (inclusive) or endlessly.

    Example
    -------

    >>> seq = Value(datetime(2019, 6, 1, 14, 50)).step(1, "day").for_(2, "weeks")
    >>> len(list(seq))
    15
    >>> from itertools import islice
    >>> list(islice(Value(date(2019, 6, 1)).step("week"), 2))
    [datetime.date(2019, 6, 1), datetime.date(2019, 6, 8)]

    Iterating without a step raises :class:`NoStepDefined`.
    """

    __slots__ = ("_from", "_to", "_step")

    def __init__(
        self,
        from_: object,
        to: object = None,
        step: tuple[int | Fraction, str] | None = None,
    ) -> None:
        self._from = Value.wrap(from_)
        self._to = None if to is None else Value.wrap(to)
        self._step: Step | None = None
        if step is not None:
            span, unit = step
            if not span:
                raise UsageError("the step of a sequence can't be zero")
            self._step = (span, resolve_unit(unit))

    @property
    def start(self) -> Value:
        return self._from

    @property
    def end(self) -> Value | None:
        return self._to

    @property
    def interval(self) -> Step | None:
        """The step as a ``(span, unit)`` pair, if set"""
        return self._step

    def to(self, end: object) -> Sequence:
        """A copy of this sequence, ending at ``end``"""
        return Sequence(self._from, end, self._step)

    @overload
    def step(self, unit: str, /) -> Sequence: ...

    @overload
    def step(self, span: int | Fraction, unit: str, /) -> Sequence: ...

    def step(self, span: Any, unit: str | None = None, /) -> Sequence:
        """A copy of this sequence with another step"""
        if unit is None:
            span, unit = 1, span
        return Sequence(self._from, self._to, (span, unit))

    def for_(self, span: int | Fraction, unit: str) -> Sequence:
        """A copy of this sequence ending ``span`` units after the start"""
        return self.to(self._from.add(span, unit))

    def __iter__(self) -> Iterator[Native]:
        if self._step is None:
            raise NoStepDefined.for_sequence(self)
        return self._generate(self._step)

    each = __iter__

    def _generate(self, step: Step) -> Iterator[Native]:
        span, unit = step
        direction = 1 if span > 0 else -1
        current = self._from
        while self._to is None or self._to.compare(current) == direction:
            yield current.unwrap()
            current = current.add(span, unit)
        if self._to is not None and self._to.compare(current) == 0:
            yield current.unwrap()

    def __repr__(self) -> str:
        end = "..." if self._to is None else self._to.unwrap()
        step = "None" if self._step is None else "{} {}".format(*self._step)
        return f"Sequence({self._from.unwrap()} - {end}, step={step})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return (self._from, self._to, self._step) == (
            other._from,
            other._to,
            other._step,
        )

    def __hash__(self) -> int:
        return hash((self._from, self._to, self._step))


class OpKind(Enum):
    """The operations an :class:`Op` can record"""

    ADD = "add"
    SUBTRACT = "subtract"
    MERGE = "merge"
    FLOOR = "floor"
    CEIL = "ceil"
    ROUND = "round"
    ITERATE = "iterate"


class OpStep(NamedTuple):
    kind: OpKind
    args: tuple[Any, ...] = ()
    options: tuple[tuple[str, Any], ...] = ()

    def __str__(self) -> str:
        args = [str(a) for a in self.args] + [f"{k}={v}" for k, v in self.options]
        return f"{self.kind.value}({' '.join(args)})"


_OP_METHODS: dict[OpKind, Callable[..., Value]] = {
    OpKind.ADD: Value.add,
    OpKind.SUBTRACT: Value.subtract,
    OpKind.MERGE: Value.merge,
    OpKind.FLOOR: Value.truncate,
    OpKind.CEIL: Value.ceil,
    OpKind.ROUND: Value.round,
    OpKind.ITERATE: Value.iterate,
}


class Op:
    """A chain of operations, recorded now and applied later
    to any number of values.

    Example
    -------

    >>> op = Op().add(1, "day").round("hour")
    >>> op
    Op(add(1 day).round(hour))
    >>> op(datetime(2019, 6, 28, 14, 30))
    datetime.datetime(2019, 6, 29, 15, 0)

    Being a plain callable, it works with ``map()`` and the like.
    """

    __slots__ = ("_chain",)

    def __init__(self, chain: tuple[OpStep, ...] = ()) -> None:
        self._chain = tuple(chain)

    @property
    def chain(self) -> tuple[OpStep, ...]:
        return self._chain

    def _then(self, kind: OpKind, *args: Any, **options: Any) -> Op:
        return Op(self._chain + (OpStep(kind, args, tuple(options.items())),))

    def add(self, span: int | Fraction | float, unit: str) -> Op:
        return self._then(OpKind.ADD, span, resolve_unit(unit))

    def subtract(self, span: int | Fraction | float, unit: str) -> Op:
        return self._then(OpKind.SUBTRACT, span, resolve_unit(unit))

    def merge(self, **components: int | Fraction) -> Op:
        return self._then(OpKind.MERGE, **components)

    def floor(self, unit: str, *, week_start: int = MONDAY) -> Op:
        return self._then(
            OpKind.FLOOR, resolve_unit(unit), **_week_option(week_start)
        )

    truncate = floor

    def ceil(self, unit: str, *, week_start: int = MONDAY) -> Op:
        return self._then(
            OpKind.CEIL, resolve_unit(unit), **_week_option(week_start)
        )

    def round(self, unit: str, *, week_start: int = MONDAY) -> Op:
        return self._then(
            OpKind.ROUND, resolve_unit(unit), **_week_option(week_start)
        )

    def iterate(
        self, span: int, unit: str, predicate: Callable[[Any], bool]
    ) -> Op:
        return self._then(OpKind.ITERATE, span, resolve_unit(unit), predicate)

    def __call__(self, value: object) -> Native:
        """Apply the chain, returning the same kind of value"""
        result = Value.wrap(value)
        for step in self._chain:
            result = _OP_METHODS[step.kind](result, *step.args, **dict(step.options))
        return result.unwrap()

    def __repr__(self) -> str:
        return f"Op({'.'.join(map(str, self._chain))})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Op):
            return NotImplemented
        return self._chain == other._chain

    def __hash__(self) -> int:
        return hash(self._chain)


class Calc:
    """Wraps a value for a single operation, returning a plain
    date or datetime again.

    Example
    -------

    >>> Calc(datetime(2019, 7, 3, 23, 28, 54)).add(1, "day")
    datetime.datetime(2019, 7, 4, 23, 28, 54)
    >>> Calc(date(2019, 7, 3)).ceil("month")
    datetime.date(2019, 8, 1)

    Use :class:`Value` to chain several operations.
    """

    __slots__ = ("_value",)

    def __init__(self, value: object) -> None:
        self._value = Value.wrap(value)

    @classmethod
    def now(cls, tz: str | None = None) -> Calc:
        """The current time, in the given IANA zone or the system zone"""
        return cls(_now(tz))

    @classmethod
    def today(cls) -> Calc:
        return cls(_date.today())

    @staticmethod
    def from_now(tz: str | None = None) -> Value:
        """The current time as a :class:`Value`"""
        return Value(_now(tz))

    @staticmethod
    def from_today() -> Value:
        return Value(_date.today())

    @property
    def value(self) -> Value:
        return self._value

    def __repr__(self) -> str:
        return f"Calc({self._value.unwrap()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calc):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def merge(self, **components: int | Fraction) -> Native:
        return self._value.merge(**components).unwrap()

    def truncate(self, unit: str, *, week_start: int = MONDAY) -> Native:
        return self._value.truncate(unit, week_start=week_start).unwrap()

    floor = truncate

    def ceil(self, unit: str, *, week_start: int = MONDAY) -> Native:
        return self._value.ceil(unit, week_start=week_start).unwrap()

    def round(self, unit: str, *, week_start: int = MONDAY) -> Native:
        return self._value.round(unit, week_start=week_start).unwrap()

    def add(self, span: int | Fraction | float, unit: str) -> Native:
        return self._value.add(span, unit).unwrap()

    def subtract(self, span: int | Fraction | float, unit: str) -> Native:
        return self._value.subtract(span, unit).unwrap()

    def iterate(
        self,
        span: int,
        unit: str,
        predicate: Callable[[Any], bool] | None = None,
    ) -> Native:
        return self._value.iterate(span, unit, predicate).unwrap()

    def __sub__(self, other: object) -> Diff:
        return self._value - other

    def to(self, end: object) -> Sequence:
        return self._value.to(end)

    def step(self, span: Any, unit: str | None = None, /) -> Sequence:
        return self._value.step(span, unit)

    def for_(self, span: int | Fraction, unit: str) -> Sequence:
        return self._value.for_(span, unit)


class UnsupportedValue(TypeError):
    """An object can't be used as a point in time"""

    @staticmethod
    def for_value(obj: object) -> UnsupportedValue:
        return UnsupportedValue(
            f"Unsupported value: {obj!r} ({type(obj).__name__})"
        )


class UnsupportedUnit(ValueError):
    """A unit name isn't known, or doesn't apply"""

    @staticmethod
    def for_name(name: object) -> UnsupportedUnit:
        return UnsupportedUnit(f"Unsupported unit: {name!r}")

    @staticmethod
    def not_fixed(name: str) -> UnsupportedUnit:
        return UnsupportedUnit(f"{name} doesn't have a fixed length in seconds")

    @staticmethod
    def for_component(name: str, native: object) -> UnsupportedUnit:
        return UnsupportedUnit(f"{type(native).__name__} has no {name}")


class ConstructionError(ValueError):
    """Components don't make a valid value, e.g. February 30th"""

    @staticmethod
    def for_fields(
        native: object, fields: dict[str, Any], cause: Exception
    ) -> ConstructionError:
        parts = ", ".join(f"{k}={v}" for k, v in fields.items())
        return ConstructionError(
            f"Can't make a {type(native).__name__} from {parts}: {cause}"
        )


class UsageError(TypeError):
    """An operation was called with arguments it can't work with"""


class NoStepDefined(UsageError):
    """A sequence is iterated before its step is set"""

    @staticmethod
    def for_sequence(seq: Sequence) -> NoStepDefined:
        return NoStepDefined(f"No step defined for {seq!r}")


def _variant(native: object) -> Variant:
    if isinstance(native, PreciseDateTime):
        return PreciseDateTime
    elif isinstance(native, _datetime):
        return _datetime
    return _date


def _is_date(native: object) -> bool:
    return isinstance(native, _date) and not isinstance(native, _datetime)


def _components_of(native: object) -> tuple[Component, ...]:
    return _DATE_COMPONENTS if _is_date(native) else COMPONENTS


def _read(native: Any, name: str) -> int | Fraction:
    if name != "subsecond":
        return getattr(native, name)
    elif isinstance(native, PreciseDateTime):
        return native.fraction
    return Fraction(native.microsecond, 1_000_000)


def _build(native: Native, fields: dict[str, Any]) -> Native:
    try:
        if isinstance(native, PreciseDateTime):
            return native.replace(
                year=fields["year"],
                month=fields["month"],
                day=fields["day"],
                hour=fields["hour"],
                minute=fields["minute"],
                second=fields["second"],
                fraction=fields["subsecond"],
            )
        elif isinstance(native, _datetime):
            return _normalize(
                native.replace(
                    year=fields["year"],
                    month=fields["month"],
                    day=fields["day"],
                    hour=fields["hour"],
                    minute=fields["minute"],
                    second=fields["second"],
                    microsecond=int(Fraction(fields["subsecond"]) * 1_000_000),
                )
            )
        return native.replace(
            year=fields["year"], month=fields["month"], day=fields["day"]
        )
    except ValueError as e:
        raise ConstructionError.for_fields(native, fields, e) from e


def _normalize(d: _datetime) -> _datetime:
    # Wall times in a DST gap don't survive a UTC roundtrip.
    # The roundtrip shifts them forward, past the gap.
    if d.tzinfo is None or isinstance(d.tzinfo, _timezone):
        return d
    return d.astimezone(_UTC).astimezone(d.tzinfo)


def _convert(native: Native, target: Variant, like: Native | None) -> Native:
    if target is _date:
        return native if _is_date(native) else native.date()  # type: ignore[return-value]
    elif target is _datetime:
        if isinstance(native, _datetime):
            return native
        elif isinstance(native, PreciseDateTime):
            return native.py_datetime()
        return _normalize(
            _datetime(native.year, native.month, native.day, tzinfo=_tzinfo_of(like))
        )
    elif target is PreciseDateTime:
        if isinstance(native, PreciseDateTime):
            return native
        elif isinstance(native, _datetime):
            return PreciseDateTime.from_py_datetime(native)
        return PreciseDateTime(
            native.year, native.month, native.day, offset=_offset_of(like)
        )
    raise UnsupportedValue(f"Can't convert to {target!r}")


def _tzinfo_of(like: Native | None) -> Any:
    if isinstance(like, _datetime):
        return like.tzinfo
    elif isinstance(like, PreciseDateTime):
        return _timezone(_timedelta(microseconds=round(like.offset * 1_000_000)))
    return None


def _offset_of(like: Native | None) -> Fraction:
    if isinstance(like, PreciseDateTime):
        return like.offset
    elif isinstance(like, _datetime) and (offset := like.utcoffset()) is not None:
        return _td_seconds(offset)
    return Fraction(0)


def _align(a: Native, b: Native) -> tuple[Native, Native]:
    # A date becomes midnight in the zone of the other side,
    # a naive datetime takes the zone (or offset) of an aware one.
    if _is_date(a) and not _is_date(b):
        a = _convert(a, _variant(b), b)
    elif _is_date(b) and not _is_date(a):
        b = _convert(b, _variant(a), a)
    if _is_naive(a) and not _is_naive(b):
        a = _normalize(a.replace(tzinfo=_tzinfo_of(b)))
    elif _is_naive(b) and not _is_naive(a):
        b = _normalize(b.replace(tzinfo=_tzinfo_of(a)))
    return a, b


def _is_naive(native: object) -> bool:
    return isinstance(native, _datetime) and native.tzinfo is None


def _seconds_between(a: Native, b: Native) -> Fraction:
    a, b = _align(a, b)
    if _is_date(a):
        return Fraction((a - b).days * 86_400)  # type: ignore[operator]
    elif isinstance(a, _datetime) and isinstance(b, _datetime):
        return _td_seconds(_instant(a) - _instant(b))
    return _as_precise(a)._exact() - _as_precise(b)._exact()


def _in_zone_of(native: Native, like: Native) -> Native:
    if isinstance(native, _datetime) and isinstance(like, _datetime):
        if native.tzinfo is None or like.tzinfo is None:
            return native
        return native.astimezone(like.tzinfo)
    elif isinstance(native, PreciseDateTime) and isinstance(
        like, PreciseDateTime
    ):
        return PreciseDateTime._from_exact(native._exact(), like.offset)
    return native


def _instant(d: _datetime) -> _datetime:
    return d if d.tzinfo is None else d.astimezone(_UTC)


def _as_precise(native: Native) -> PreciseDateTime:
    return _convert(native, PreciseDateTime, None)  # type: ignore[return-value]


def _shift(native: Native, seconds: int | Fraction | float) -> Native:
    if isinstance(native, PreciseDateTime):
        return native.shift(seconds)
    elif isinstance(native, _datetime):
        delta = _as_timedelta(seconds)
        if native.tzinfo is None:
            return native + delta
        return (native.astimezone(_UTC) + delta).astimezone(native.tzinfo)
    # dates move by whole days only
    return native + _timedelta(days=int(Fraction(seconds) / 86_400))


def _as_timedelta(seconds: int | Fraction | float) -> _timedelta:
    if isinstance(seconds, int):
        return _timedelta(seconds=seconds)
    return _timedelta(microseconds=round(Fraction(seconds) * 1_000_000))


def _td_seconds(delta: _timedelta) -> Fraction:
    return Fraction(delta.days * 86_400 + delta.seconds) + Fraction(
        delta.microseconds, 1_000_000
    )


def _whole(span: int | Fraction | float, unit: str) -> int:
    if isinstance(span, int):
        return span
    if span != int(span):
        raise UsageError(f"can't add a fraction of a {unit}: {span!r}")
    return int(span)


def _weekday(native: Native) -> int:
    if isinstance(native, PreciseDateTime):
        return native.date().isoweekday()
    return native.isoweekday()


def _week_option(week_start: int) -> dict[str, int]:
    # the default is left out, so chains print as they were written
    return {} if week_start == MONDAY else {"week_start": week_start}


def _now(tz: str | None) -> _datetime:
    if tz is None:
        return _datetime.now().astimezone()
    return _datetime.now(ZoneInfo(tz))


def _format_fraction(fraction: Fraction) -> str:
    if not fraction:
        return ""
    nanos = fraction * 1_000_000_000
    if nanos.denominator == 1:
        return "." + f"{nanos.numerator:09d}".rstrip("0")
    return f"({fraction})"


def _format_offset(offset: Fraction) -> str:
    sign = "-" if offset < 0 else "+"
    total = abs(offset)
    whole = int(total)
    hours, rest = divmod(whole, 3_600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02}:{minutes:02}"
    if seconds or total != whole:
        text += f":{seconds:02}{_format_fraction(total - whole)}"
    return text


_UTC = _timezone.utc
_object_new = object.__new__
