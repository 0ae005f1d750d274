# tests/test_pricing.py
from datetime import datetime, time
from zoneinfo import ZoneInfo

import pytest

from fare_estimator.pricing import Tariff, night_seconds, ride_fare, segment_fare
from fare_estimator.schemas import Segment

UTC = Tariff(timezone="UTC")

DAY = 0.74
NIGHT = 1.30
IDLE = 11.90


def _ts(*args, tz="UTC"):
    return int(datetime(*args, tzinfo=ZoneInfo(tz)).timestamp())


t1 = _ts(2014, 8, 15, 23, 59, 40)
t2 = _ts(2014, 8, 15, 23, 59, 50)
t6 = _ts(2014, 8, 16, 0, 0, 0)
t3 = _ts(2014, 8, 16, 0, 0, 10)
t4 = _ts(2014, 8, 16, 0, 0, 20)
t5 = _ts(2014, 8, 16, 4, 59, 50)
t7 = _ts(2014, 8, 16, 5, 0, 0)
t8 = _ts(2014, 8, 16, 5, 0, 10)
t9 = _ts(2014, 8, 16, 5, 0, 20)


def _seg(start, end, km, speed=20.0):
    return Segment(distance_km=km, duration_s=end - start, speed_kmh=speed, start_ts=start, end_ts=end)


@pytest.mark.parametrize("seg, want", [
    # idle
    (_seg(t1, t2, 0.0, speed=0.0), IDLE * 10 / 3600),
    # day
    (_seg(t1, t2, 0.056), DAY * 0.056),
    (_seg(t8, t9, 0.056), DAY * 0.056),
    (_seg(t7, t8, 0.056), DAY * 0.056),
    # night
    (_seg(t3, t4, 0.056), NIGHT * 0.056),
    (_seg(t5, t7, 0.056), NIGHT * 0.056),
    (_seg(t6, t3, 0.056), NIGHT * 0.056),
    # 10s either side of midnight
    (_seg(t2, t3, 0.100), DAY * 0.100 * 0.5 + NIGHT * 0.100 * 0.5),
    # 10s either side of five
    (_seg(t5, t8, 0.100), DAY * 0.100 * 0.5 + NIGHT * 0.100 * 0.5),
    # 10s before midnight, 20s after
    (_seg(t2, t4, 0.100), DAY * 0.100 * (1.0 / 3.0) + NIGHT * 0.100 * (2.0 / 3.0)),
])
def test_segment_fare(seg, want):
    assert segment_fare(seg, UTC) == pytest.approx(want, abs=1e-8)


def test_idle_ignores_distance_and_clock():
    night_idle = _seg(t3, t4, 5.0, speed=10.0)
    day_idle = _seg(t8, t9, 0.0, speed=3.0)
    assert segment_fare(night_idle, UTC) == pytest.approx(IDLE * 10 / 3600)
    assert segment_fare(day_idle, UTC) == pytest.approx(IDLE * 10 / 3600)


def test_just_above_idle_speed_is_distance_based():
    seg = _seg(t8, t9, 0.056, speed=10.01)
    assert segment_fare(seg, UTC) == pytest.approx(DAY * 0.056)


def test_night_seconds_around_boundaries():
    assert night_seconds(t1, t2, UTC) == 0
    assert night_seconds(t2, t4, UTC) == 20
    assert night_seconds(t5, t9, UTC) == 10
    # a whole day contains exactly one five-hour night
    assert night_seconds(t7, t7 + 86400, UTC) == 5 * 3600


def test_windows_follow_configured_timezone():
    # 23:00 UTC is 02:00 in Athens during summer time
    start = _ts(2014, 8, 15, 23, 0, 0)
    seg = _seg(start, start + 60, 0.5)
    assert segment_fare(seg, UTC) == pytest.approx(DAY * 0.5)
    assert segment_fare(seg, Tariff(timezone="Europe/Athens")) == pytest.approx(NIGHT * 0.5)


def test_night_window_on_dst_change():
    # Athens skipped 03:00-04:00 on 2014-03-30, so that night lasted four hours
    athens = Tariff(timezone="Europe/Athens")
    start = _ts(2014, 3, 29, 23, 59, 50, tz="Europe/Athens")
    end = _ts(2014, 3, 30, 5, 0, 10, tz="Europe/Athens")
    assert end - start == 4 * 3600 + 20
    seg = _seg(start, end, 100.0, speed=100.0 / ((end - start) / 3600))
    want = DAY * 100.0 * 20 / (end - start) + NIGHT * 100.0 * 14400 / (end - start)
    assert segment_fare(seg, athens) == pytest.approx(want, abs=1e-8)


def test_custom_night_end():
    late = Tariff(timezone="UTC", night_ends_at=time(6, 0))
    seg = _seg(t8, t9, 0.056)
    assert segment_fare(seg, late) == pytest.approx(NIGHT * 0.056)


def test_ride_fare_empty_is_minimum():
    assert ride_fare([], UTC) == 3.47


def test_ride_fare_below_minimum_is_clamped():
    assert ride_fare([_seg(t8, t9, 0.056)], UTC) == 3.47


def test_ride_fare_adds_flag():
    segs = [_seg(t7, t7 + 1800, 10.0), _seg(t7 + 1800, t7 + 3600, 5.0)]
    assert ride_fare(segs, UTC) == pytest.approx(1.30 + DAY * 15.0)


def test_default_tariff_constants():
    t = Tariff(timezone="UTC")
    assert (t.flag, t.minimum_fare, t.idle_rate_per_hour) == (1.30, 3.47, 11.90)
    assert (t.day_rate_per_km, t.night_rate_per_km) == (0.74, 1.30)
    assert t.night_ends_at == time(5, 0)


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValueError):
        Tariff(timezone="Mars/Olympus_Mons")
