import calendar
import time

import pytest

from bfscore.timeutil import (
    BrokenTime,
    gmtime,
    localtime,
    mktime,
    parse_timestamp,
    timegm,
)


@pytest.fixture
def utc(monkeypatch):
    monkeypatch.setenv("TZ", "UTC0")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.mark.parametrize("year", range(10, 201, 10))
def test_timegm_matches_mktime_in_utc(utc, year):
    for month in range(-3, 16, 3):
        for day in range(-31, 62, 4):
            for hour in range(-1, 25, 5):
                for minute in range(-1, 61, 31):
                    for second in range(-60, 121, 5):
                        tm = BrokenTime(
                            year=year,
                            month=month,
                            day=day,
                            hour=hour,
                            minute=minute,
                            second=second,
                            isdst=-1,
                        )
                        ta = mktime(tm)
                        tb, normalized = timegm(tm)
                        assert ta == tb, tm
                        assert gmtime(ta) == normalized, tm


def test_timegm_epoch():
    seconds, normalized = timegm(BrokenTime(year=70, month=0, day=1))
    assert seconds == 0
    assert normalized == BrokenTime(70, 0, 1, 0, 0, 0, 4, 0, 0)


def test_timegm_agrees_with_calendar():
    tm = BrokenTime(year=120, month=1, day=29, hour=12, minute=30, second=15)
    seconds, normalized = timegm(tm)
    assert seconds == calendar.timegm((2020, 2, 29, 12, 30, 15))
    assert normalized.yearday == 31 + 28
    assert normalized.isdst == 0


def test_timegm_normalizes_negative_fields():
    seconds, normalized = timegm(BrokenTime(year=70, month=0, day=1, second=-1))
    assert seconds == -1
    assert normalized == gmtime(-1)


def test_timegm_overflow():
    tm = BrokenTime(second=2**31 - 1, minute=2**31 - 1)
    with pytest.raises(OverflowError):
        timegm(tm)


def test_gmtime_roundtrip():
    for ts in (0, 86399, 951782400, -123456789, 4102444800):
        seconds, _ = timegm(gmtime(ts))
        assert seconds == ts


def test_localtime_in_utc(utc):
    assert localtime(0) == BrokenTime(70, 0, 1, 0, 0, 0, 4, 0, 0)


def test_mktime_roundtrip_localtime(utc):
    assert mktime(localtime(1234567890)) == 1234567890


def test_parse_utc_timestamp():
    assert parse_timestamp("1970-01-01T00:00:00Z") == 0
    assert parse_timestamp("2020-01-02T03:04:05Z") == calendar.timegm(
        (2020, 1, 2, 3, 4, 5)
    )


def test_parse_compact_timestamp():
    assert parse_timestamp("20200102T030405Z") == parse_timestamp(
        "2020-01-02T03:04:05Z"
    )


def test_parse_timezone_offsets():
    assert parse_timestamp("1970-01-01T00:00:00+01:30") == 90
    assert parse_timestamp("1970-01-01T00:00:00-01") == -60
    assert parse_timestamp("1970-01-01T00:00:00+0130") == 90


def test_parse_local_timestamps(utc):
    assert parse_timestamp("1970-01-02") == 86400
    assert parse_timestamp("1970-01-01T01") == 3600
    assert parse_timestamp("1970-01-01 01".replace(" ", "T")) == 3600
    assert parse_timestamp("1970-01-01T00:01") == 60
    assert parse_timestamp("1970-01-01T00:00:01") == 1


@pytest.mark.parametrize(
    "text",
    [
        "",
        "197",
        "1970-01",
        "1970-01-01Z",
        "1970-01-01T",
        "1970-01-01T00:00:00X",
        "1970-01-01T00:00:00Zjunk",
        "1970-01-01T00:00:00+1",
        "1970-01-01T00:00:00+01:3",
        "19a0-01-01",
    ],
)
def test_parse_invalid(text):
    with pytest.raises(ValueError):
        parse_timestamp(text)