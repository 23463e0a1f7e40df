from __future__ import annotations

from datetime import datetime, timezone

from gnss_pvt.utils.gps_time import GpsTime, gps_to_utc_datetime, normalize_gps_time


def test_normalize_carries_weeks() -> None:
    assert normalize_gps_time(GpsTime(wn=100, tow=604_800.5)) == GpsTime(wn=101, tow=0.5)
    assert normalize_gps_time(GpsTime(wn=100, tow=-1.0)) == GpsTime(wn=99, tow=604_799.0)
    assert normalize_gps_time(GpsTime(wn=100, tow=3 * 604_800.0 + 10.0)) == GpsTime(wn=103, tow=10.0)


def test_normalize_keeps_in_range_time() -> None:
    t = GpsTime(wn=2200, tow=12.25)

    assert normalize_gps_time(t) == t


def test_add_seconds_normalizes() -> None:
    t = GpsTime(wn=5, tow=604_799.0).add_seconds(2.0)

    assert t.wn == 6
    assert t.tow == 1.0


def test_gps_to_utc() -> None:
    utc = gps_to_utc_datetime(GpsTime(wn=0, tow=18.0))

    assert utc == datetime(1980, 1, 6, tzinfo=timezone.utc)
