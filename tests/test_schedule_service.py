from datetime import date, datetime, time, timedelta, timezone

import pytest

from weeklydraw.services.schedule_service import (
    DrawRule,
    draw_instant_for,
    format_draw_date,
    next_draw_at,
    parse_draw_date,
    sunday_weekday,
)

MSK = timezone(timedelta(hours=3))

# 13.10.2026 is a Tuesday, 17.10.2026 a Saturday.
TUESDAY = date(2026, 10, 13)
SATURDAY = date(2026, 10, 17)


def _msk(day: date, hour: int = 0, minute: int = 0, second: int = 0, micro: int = 0) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, micro, tzinfo=MSK)


def test_sunday_based_weekday():
    assert sunday_weekday(TUESDAY) == 2
    assert sunday_weekday(SATURDAY) == 6
    assert sunday_weekday(date(2026, 10, 18)) == 0


def test_target_day_before_draw_time_is_today():
    assert next_draw_at(_msk(TUESDAY, 0, 0, 59)) == _msk(TUESDAY, 0, 1)


def test_target_day_after_draw_time_rolls_forward():
    assert next_draw_at(_msk(TUESDAY, 0, 1, 1)) == _msk(SATURDAY, 0, 1)


def test_exact_draw_time_no_longer_qualifies():
    assert next_draw_at(_msk(TUESDAY, 0, 1)) == _msk(SATURDAY, 0, 1)


def test_saturday_rolls_to_next_tuesday():
    assert next_draw_at(_msk(SATURDAY, 12)) == _msk(date(2026, 10, 20), 0, 1)


def test_utc_input_is_shifted_into_reference_zone():
    # Monday 21:00:30 UTC is already Tuesday 00:00:30 in the reference zone.
    now = datetime(2026, 10, 12, 21, 0, 30, tzinfo=timezone.utc)
    result = next_draw_at(now)
    assert result == datetime(2026, 10, 12, 21, 1, tzinfo=timezone.utc)
    assert result.utcoffset() == timedelta(hours=3)


@pytest.mark.parametrize("day_offset", [0, 1, 2, 3, 4, 5, 6])
def test_result_is_next_target_slot_within_a_week(day_offset):
    start = _msk(date(2026, 10, 11) + timedelta(days=day_offset))
    for hour in range(0, 24, 3):
        now = start + timedelta(hours=hour, minutes=17)
        result = next_draw_at(now)
        assert now < result <= now + timedelta(days=7)
        assert sunday_weekday(result.date()) in (2, 6)
        assert result.timetz() == time(0, 1, tzinfo=MSK)
        assert result.second == 0 and result.microsecond == 0


def test_non_target_day_lands_on_nearest_target():
    wednesday = date(2026, 10, 14)
    assert next_draw_at(_msk(wednesday, 0, 0, 30)) == _msk(SATURDAY, 0, 1)
    assert next_draw_at(_msk(date(2026, 10, 18), 23, 59)) == _msk(date(2026, 10, 20), 0, 1)


def test_naive_datetime_is_rejected():
    with pytest.raises(ValueError):
        next_draw_at(datetime(2026, 10, 13, 0, 0))


def test_custom_rule():
    rule = DrawRule.from_config("5, 1", "20:30", 0)
    assert rule.weekdays == (1, 5)
    # Friday 16.10.2026 21:00 UTC -> Monday 19.10.2026 20:30 UTC
    now = datetime(2026, 10, 16, 21, 0, tzinfo=timezone.utc)
    assert next_draw_at(now, rule) == datetime(2026, 10, 19, 20, 30, tzinfo=timezone.utc)


def test_invalid_rule():
    with pytest.raises(ValueError):
        DrawRule(weekdays=(7,))
    with pytest.raises(ValueError):
        DrawRule(weekdays=())


def test_format_and_parse_draw_date():
    # 22:30 UTC on the 16th is already the 17th in the reference zone.
    assert format_draw_date(datetime(2026, 10, 16, 22, 30, tzinfo=timezone.utc)) == "17.10.2026"
    assert parse_draw_date("07.03.2026") == date(2026, 3, 7)
    with pytest.raises(ValueError):
        parse_draw_date("2026-03-07")


def test_draw_instant_for():
    assert draw_instant_for(SATURDAY) == _msk(SATURDAY, 0, 1)
