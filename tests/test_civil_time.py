from datetime import date, time

import pytest

from app.core.errors import InvalidDate, InvalidTime
from app.services.civil_time import (
    day_of_week,
    format_civil_time,
    from_minutes,
    is_weekend,
    parse_civil_date,
    parse_civil_time,
    to_minutes,
)


def test_parse_civil_date():
    assert parse_civil_date("2025-05-30") == date(2025, 5, 30)
    assert parse_civil_date(" 2024-02-29 ") == date(2024, 2, 29)


@pytest.mark.parametrize("value", ["2025-02-30", "2025-13-01", "2025-00-10", "2023-02-29", "2025-5-30", "20250530", "30/05/2025", ""])
def test_parse_civil_date_rejects_impossible_or_malformed(value):
    with pytest.raises(InvalidDate):
        parse_civil_date(value)


def test_parse_civil_time_drops_seconds():
    assert parse_civil_time("09:00") == time(9, 0)
    assert parse_civil_time("17:30:00") == time(17, 30)
    assert parse_civil_time("8:15") == time(8, 15)


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "9"])
def test_parse_civil_time_rejects_out_of_range(value):
    with pytest.raises(InvalidTime):
        parse_civil_time(value)


def test_minutes_conversion():
    assert to_minutes(time(9, 30)) == 570
    assert from_minutes(570) == time(9, 30)
    assert format_civil_time(time(7, 5)) == "07:05"
    with pytest.raises(InvalidTime):
        from_minutes(24 * 60)


def test_day_of_week_is_sunday_based():
    assert day_of_week(date(2025, 6, 1)) == 0  # Sunday
    assert day_of_week(date(2025, 5, 30)) == 5  # Friday
    assert day_of_week(date(2025, 5, 31)) == 6  # Saturday
    assert is_weekend(date(2025, 5, 31))
    assert not is_weekend(date(2025, 6, 2))
