from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from tempus import Calc, Diff, Sequence, UsageError, Value


@pytest.fixture
def calc():
    return Calc(datetime(2019, 7, 3, 23, 28, 54))


class TestInit:

    def test_wraps(self, calc):
        assert calc.value == Value(datetime(2019, 7, 3, 23, 28, 54))
        assert repr(calc) == "Calc(2019-07-03 23:28:54)"

    def test_now(self):
        now = Calc.now().value.unwrap()
        assert isinstance(now, datetime)
        assert now.tzinfo is not None
        zoned = Calc.now("Europe/Amsterdam").value.unwrap()
        assert zoned.tzinfo == ZoneInfo("Europe/Amsterdam")

    def test_today(self):
        assert type(Calc.today().value.unwrap()) is date

    def test_from_now(self):
        assert isinstance(Calc.from_now(), Value)
        assert isinstance(Calc.from_now("UTC").unwrap(), datetime)
        assert type(Calc.from_today().unwrap()) is date


class TestOperations:

    def test_returns_natives(self, calc):
        assert calc.add(1, "day") == datetime(2019, 7, 4, 23, 28, 54)
        assert calc.subtract(1, "month") == datetime(2019, 6, 3, 23, 28, 54)
        assert calc.merge(year=2020) == datetime(2020, 7, 3, 23, 28, 54)
        assert calc.truncate("hour") == datetime(2019, 7, 3, 23)
        assert calc.floor("day") == datetime(2019, 7, 3)
        assert calc.ceil("day") == datetime(2019, 7, 4)
        assert calc.round("minute") == datetime(2019, 7, 3, 23, 29)

    def test_keeps_kind(self):
        tz = timezone(timedelta(hours=-4))
        assert Calc(date(2019, 7, 3)).ceil("month") == date(2019, 8, 1)
        result = Calc(datetime(2019, 7, 3, tzinfo=tz)).add(2, "hours")
        assert result.tzinfo is tz

    def test_iterate(self, calc):
        assert calc.iterate(
            10, "days", lambda d: d.isoweekday() <= 5
        ) == datetime(2019, 7, 17, 23, 28, 54)
        with pytest.raises(UsageError):
            calc.iterate(10, "days")

    def test_difference(self, calc):
        diff = calc - datetime(2019, 7, 1)
        assert isinstance(diff, Diff)
        assert diff.days == 2

    def test_sequences(self, calc):
        assert isinstance(calc.to(datetime(2019, 8, 1)), Sequence)
        assert len(list(calc.step("day").for_(1, "week"))) == 8
        assert len(list(calc.for_(1, "week").step(1, "day"))) == 8

    def test_unknown_operation(self, calc):
        with pytest.raises(AttributeError):
            calc.frobnicate(1, "day")  # type: ignore[attr-defined]


def test_equality(calc):
    assert calc == Calc(datetime(2019, 7, 3, 23, 28, 54))
    assert hash(calc) == hash(Calc(datetime(2019, 7, 3, 23, 28, 54)))
    assert calc != Calc(date(2019, 7, 3))
