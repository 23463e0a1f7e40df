"""GPS week/time-of-week representation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from gnss_pvt.constants import SECONDS_PER_WEEK

GPS_EPOCH = datetime(1980, 1, 6, tzinfo=timezone.utc)
LEAP_SECONDS = 18


@dataclass(frozen=True)
class GpsTime:
    """GPS time as week number plus seconds of week."""

    wn: int = 0
    tow: float = 0.0

    def add_seconds(self, seconds: float) -> GpsTime:
        return normalize_gps_time(GpsTime(wn=self.wn, tow=self.tow + seconds))


def normalize_gps_time(t: GpsTime) -> GpsTime:
    """Fold time-of-week into [0, 604800), carrying whole weeks into ``wn``."""

    weeks, tow = divmod(float(t.tow), SECONDS_PER_WEEK)
    wn = int(t.wn) + int(weeks)
    # divmod can round a tiny negative tow up to a full week.
    if tow >= SECONDS_PER_WEEK:
        tow -= SECONDS_PER_WEEK
        wn += 1
    return GpsTime(wn=wn, tow=tow)


def gps_to_utc_datetime(t: GpsTime, leap_seconds: int = LEAP_SECONDS) -> datetime:
    """Convert GPS week + seconds-of-week to a timezone-aware UTC datetime.

    GPS time does not include leap seconds, so the fixed offset is subtracted.
    """

    total_seconds = t.wn * SECONDS_PER_WEEK + t.tow
    return GPS_EPOCH + timedelta(seconds=total_seconds - leap_seconds)
