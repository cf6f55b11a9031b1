from datetime import date, datetime, timedelta, timezone
from fractions import Fraction

import pytest

from tempus import Diff, PreciseDateTime, UnsupportedUnit, Value

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual

TZ5 = timezone(timedelta(hours=5))

LATER = datetime(2020, 6, 12, 12, 28)
EARLIER = datetime(2019, 6, 1, 14, 50)


@pytest.fixture
def diff():
    return Diff(LATER, EARLIER)


class TestInit:

    def test_operands(self, diff):
        assert diff.from_ == Value(LATER)
        assert diff.to == Value(EARLIER)

    def test_subtracting_values(self):
        assert Value(LATER) - EARLIER == Diff(LATER, EARLIER)

    def test_date_becomes_midnight_in_zone(self):
        diff = Diff(datetime(2020, 6, 12, 12, 28, tzinfo=TZ5), date(2019, 6, 1))
        assert diff.to.unwrap() == datetime(2019, 6, 1, tzinfo=TZ5)

    def test_naive_takes_zone(self):
        diff = Diff(datetime(2020, 6, 12, 12, 28), datetime(2019, 6, 1, tzinfo=TZ5))
        assert diff.from_.unwrap() == datetime(2020, 6, 12, 12, 28, tzinfo=TZ5)

    def test_to_takes_kind_of_from(self):
        diff = Diff(PreciseDateTime(2020, 6, 12), datetime(2020, 6, 1))
        assert isinstance(diff.to.unwrap(), PreciseDateTime)
        assert diff.days == 11

    def test_naive_takes_offset_of_precise(self):
        precise = PreciseDateTime(2020, 6, 1, 12, offset=10_800)
        naive = datetime(2020, 6, 1, 12)
        assert Diff(precise, naive).exact() == 0
        assert Diff(naive, precise).exact() == 0
        assert Value(precise).compare(Value(naive)) == 0
        assert Value(naive).compare(Value(precise)) == 0

    @pytest.mark.parametrize(
        "a, b",
        [
            (PreciseDateTime(2020, 6, 1, 12, offset=10_800), datetime(2020, 6, 1, 9)),
            (datetime(2020, 6, 3, tzinfo=TZ5), datetime(2020, 6, 1, 12)),
            (date(2020, 6, 3), PreciseDateTime(2020, 6, 1, 12, offset=-3_600)),
        ],
    )
    def test_mirrored(self, a, b):
        diff, mirror = Diff(a, b), Diff(b, a)
        assert diff.exact() == -mirror.exact()
        assert diff.hours == -mirror.hours
        assert (-diff).exact() == mirror.exact()

    def test_unsupported(self):
        with pytest.raises(TypeError):
            Diff(LATER, "2019-06-01")


def test_repr(diff):
    assert repr(diff) == "Diff(2020-06-12 12:28:00 - 2019-06-01 14:50:00)"


class TestDiv:

    @pytest.mark.parametrize(
        "unit, expected",
        [
            ("year", 1),
            ("month", 12),
            ("week", 53),
            ("day", 376),
            ("hour", 9_045),
            ("minute", 542_738),
            ("second", 32_564_280),
        ],
    )
    def test_units(self, diff, unit, expected):
        assert diff.div(unit) == expected
        assert diff.div(1, unit) == expected
        assert (-diff).div(unit) == -expected

    def test_properties(self, diff):
        assert diff.years == 1
        assert diff.months == 12
        assert diff.weeks == 53
        assert diff.days == 376
        assert diff.hours == 9_045
        assert diff.minutes == 542_738
        assert diff.seconds == 32_564_280

    def test_span(self, diff):
        assert diff.div(5, "months") == 2
        assert diff.div(2, "weeks") == 26
        assert (-diff).div(5, "months") == -2

    def test_synonyms(self, diff):
        assert diff.div("hours") == diff.div("hour")

    def test_unsupported_unit(self, diff):
        with pytest.raises(UnsupportedUnit):
            diff.div("fortnight")

    def test_dates(self):
        diff = Diff(date(2020, 6, 12), date(2019, 6, 1))
        assert diff.days == 377
        assert diff.hours == 9_048
        assert diff.months == 12

    @pytest.mark.parametrize(
        "from_, to, expected",
        [
            (date(2019, 2, 28), date(2019, 1, 31), 1),
            (date(2019, 3, 30), date(2019, 1, 31), 1),
            (date(2019, 3, 31), date(2019, 1, 31), 2),
            (date(2019, 2, 27), date(2019, 1, 31), 0),
            (datetime(2020, 6, 1, 12), datetime(2019, 6, 1, 14, 50), 12),
            (datetime(2019, 7, 1, 10), datetime(2019, 6, 1, 14), 1),
            (datetime(2019, 6, 30, 23), datetime(2019, 6, 1), 0),
            (date(2019, 4, 30), date(2019, 3, 31), 1),
            (date(2020, 2, 29), date(2019, 12, 31), 2),
            (datetime(2020, 6, 1, 14, 50), datetime(2019, 6, 1, 14, 50), 12),
        ],
    )
    def test_whole_months(self, from_, to, expected):
        assert Diff(from_, to).months == expected

    def test_leap_year(self):
        assert Diff(date(2021, 2, 28), date(2020, 2, 29)).years == 1
        assert Diff(date(2021, 2, 27), date(2020, 2, 29)).years == 0

    def test_precise(self):
        diff = Diff(
            PreciseDateTime(2020, 1, 1, 0, 0, 1, Fraction(1, 3)),
            PreciseDateTime(2020, 1, 1, 0, 0, 0, Fraction(2, 3)),
        )
        assert diff.seconds == 0
        assert diff.exact() == Fraction(2, 3)


class TestDivmod:

    @pytest.mark.parametrize(
        "args, expected",
        [
            (("hour",), (9_045, datetime(2020, 6, 12, 11, 50))),
            (("week",), (53, datetime(2020, 6, 6, 14, 50))),
            (("day",), (376, datetime(2020, 6, 11, 14, 50))),
            (("month",), (12, datetime(2020, 6, 1, 14, 50))),
            ((5, "months"), (2, datetime(2020, 4, 1, 14, 50))),
        ],
    )
    def test_divmod(self, diff, args, expected):
        assert diff.divmod(*args) == expected
        assert diff.modulo(*args) == expected[1]

    def test_negative(self, diff):
        assert (-diff).divmod("day") == (-376, datetime(2019, 6, 2, 12, 28))

    def test_mixed_kinds(self):
        diff = Diff(datetime(2020, 6, 12, 12, 28, tzinfo=TZ5), date(2019, 6, 1))
        assert diff.divmod("hour") == (
            9_060,
            datetime(2020, 6, 12, 12, tzinfo=TZ5),
        )
        assert diff.divmod("day") == (377, datetime(2020, 6, 12, tzinfo=TZ5))


class TestFactorize:

    def test_default(self, diff):
        assert diff.factorize() == {
            "year": 1,
            "month": 0,
            "week": 1,
            "day": 3,
            "hour": 21,
            "minute": 38,
            "second": 0,
        }

    def test_negative(self, diff):
        assert (-diff).factorize() == {
            "year": -1,
            "month": 0,
            "week": -1,
            "day": -3,
            "hour": -21,
            "minute": -38,
            "second": 0,
        }

    def test_no_weeks(self, diff):
        assert diff.factorize(weeks=False) == {
            "year": 1,
            "month": 0,
            "day": 10,
            "hour": 21,
            "minute": 38,
            "second": 0,
        }

    def test_limits(self, diff):
        assert diff.factorize(largest="days", smallest="hours") == {
            "day": 376,
            "hour": 21,
        }
        assert diff.factorize(largest="month", smallest="month") == {
            "month": 12
        }

    def test_zeroes(self):
        diff = Diff(datetime(2019, 6, 15, 12, 10), datetime(2019, 6, 1, 14, 50))
        assert diff.factorize(zeroes=False) == {
            "week": 1,
            "day": 6,
            "hour": 21,
            "minute": 20,
            "second": 0,
        }

    def test_all_zero(self):
        assert Diff(LATER, LATER).factorize(zeroes=False) == {}

    def test_month_counted_by_day(self):
        # the month is complete on the 1st, whatever the time of day
        diff = Diff(datetime(2020, 6, 1, 12), datetime(2019, 6, 1, 14, 50))
        assert diff.factorize() == {
            "year": 0,
            "month": 12,
            "week": 0,
            "day": 0,
            "hour": -2,
            "minute": -50,
            "second": 0,
        }

    def test_clamped_month(self):
        assert Diff(date(2019, 3, 1), date(2019, 1, 31)).factorize(
            smallest="day"
        ) == {"year": 0, "month": 1, "week": 0, "day": 1}

    @pytest.mark.parametrize(
        "from_, to",
        [
            (LATER, EARLIER),
            (EARLIER, LATER),
            (date(2019, 3, 1), date(2019, 1, 31)),
            (datetime(2024, 2, 29, 23, 59, 59), datetime(2019, 12, 31, 0, 0, 1)),
            (datetime(2020, 6, 1, 12), datetime(2019, 6, 1, 14, 50)),
            (
                PreciseDateTime(2020, 6, 1, 12, offset=10_800),
                datetime(2019, 1, 31, 23, 59, 59),
            ),
            (
                datetime(2020, 1, 1, tzinfo=TZ5),
                datetime(2019, 3, 31, 18, 45, tzinfo=timezone.utc),
            ),
        ],
    )
    def test_reconstructs(self, from_, to):
        parts = Diff(from_, to).factorize()
        result = Value(to)
        for unit, amount in parts.items():
            result = result.add(amount, unit)
        assert result.compare(Value(from_)) == 0


class TestComparison:

    def test_exact(self, diff):
        assert diff.exact() == 32_564_280
        assert (-diff).exact() == -32_564_280
        assert Diff(date(2019, 6, 2), date(2019, 6, 1)).exact() == 86_400

    def test_sign(self, diff):
        assert diff.is_positive()
        assert not diff.is_negative()
        assert (-diff).is_negative()
        assert not Diff(LATER, LATER).is_positive()
        assert not Diff(LATER, LATER).is_negative()

    def test_equality(self, diff):
        same_span = Diff(LATER + timedelta(days=1), EARLIER + timedelta(days=1))
        assert diff == same_span
        assert hash(diff) == hash(same_span)
        assert diff != -diff
        assert not diff == NeverEqual()
        assert diff == AlwaysEqual()

    def test_ordering(self, diff):
        assert -diff < diff
        assert -diff <= diff
        assert diff > Diff(LATER, LATER)
        assert diff >= diff
        assert diff < AlwaysLarger()
        assert diff > AlwaysSmaller()
        with pytest.raises(TypeError):
            diff < 3  # type: ignore[operator]
