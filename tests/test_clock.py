from datetime import date, datetime, time

from app.core.clock import CivilMoment, FixedClock, SystemClock


def test_fixed_clock_truncates_to_minute():
    clock = FixedClock(datetime(2025, 5, 30, 10, 0, 45))
    now = clock.now()
    assert now == CivilMoment(date(2025, 5, 30), time(10, 0))
    assert now.as_datetime() == datetime(2025, 5, 30, 10, 0)


def test_system_clock_returns_civil_moment():
    now = SystemClock("America/Bogota").now()
    assert isinstance(now, CivilMoment)
    assert now.time.second == 0 and now.time.microsecond == 0
    assert now.time.tzinfo is None
    assert now.as_datetime().tzinfo is None
