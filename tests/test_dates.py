"""Tests for core/dates.py — day keys and day-of-journey."""

from datetime import datetime, timedelta, timezone

from core.dates import day_of_journey, parse_timestamp, today_key, yesterday_key


START = datetime(2026, 2, 10, 9, 0, 0)


def test_today_key_format():
    assert today_key(datetime(2026, 3, 5, 23, 59)) == "2026-03-05"


def test_today_key_stable_within_day():
    assert today_key(datetime(2026, 3, 5, 0, 0, 1)) == today_key(datetime(2026, 3, 5, 23, 59, 59))


def test_today_key_advances_at_midnight():
    assert today_key(datetime(2026, 3, 6, 0, 0)) == "2026-03-06"


def test_today_key_defaults_to_now():
    assert today_key() == datetime.now().date().isoformat()


def test_yesterday_key_crosses_month():
    assert yesterday_key(datetime(2026, 3, 1, 8, 0)) == "2026-02-28"


def test_day_of_journey_instant_after_start():
    assert day_of_journey(START, START + timedelta(seconds=1)) == 1


def test_day_of_journey_next_day():
    assert day_of_journey(START, START + timedelta(hours=25)) == 2
    assert day_of_journey(START, START + timedelta(hours=47)) == 2


def test_day_of_journey_from_iso_string():
    assert day_of_journey("2026-02-10T09:00:00", START + timedelta(days=6, hours=1)) == 7


def test_day_of_journey_future_start_uses_absolute_difference():
    assert day_of_journey(START + timedelta(days=3, hours=1), START) == 4


def test_day_of_journey_unparseable_start():
    assert day_of_journey("not a date", START) == 1
    assert day_of_journey(None, START) == 1


def test_parse_timestamp_zulu_becomes_naive_local():
    parsed = parse_timestamp("2026-02-10T09:00:00Z")
    expected = datetime(2026, 2, 10, 9, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert parsed == expected
    assert parsed.tzinfo is None
