# fare_estimator/pricing.py
from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import FARE_TIMEZONE
from .schemas import Segment


class Tariff(BaseModel):
    """
    Day/night/idle tariff. Night runs from local midnight up to night_ends_at,
    day runs from night_ends_at to the next midnight.
    """
    model_config = ConfigDict(frozen=True)

    flag: float = Field(default=1.30, ge=0.0)
    minimum_fare: float = Field(default=3.47, ge=0.0)
    idle_rate_per_hour: float = Field(default=11.90, ge=0.0)
    day_rate_per_km: float = Field(default=0.74, ge=0.0)
    night_rate_per_km: float = Field(default=1.30, ge=0.0)
    idle_speed_kmh: float = Field(default=10.0, ge=0.0)
    night_ends_at: time = time(5, 0)
    timezone: str = Field(default=FARE_TIMEZONE, validate_default=True)

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown time zone {v!r}") from None
        return v

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


DEFAULT_TARIFF = Tariff()


def night_seconds(start_ts: int, end_ts: int, tariff: Tariff = DEFAULT_TARIFF) -> float:
    """Seconds of [start_ts, end_ts] that fall inside a local night window."""
    tz = tariff.tz
    day = datetime.fromtimestamp(start_ts, tz).date()
    last = datetime.fromtimestamp(end_ts, tz).date()

    total = 0.0
    while day <= last:
        # .timestamp() honours the zone offset of each boundary (DST safe)
        night_start = datetime.combine(day, time(0), tzinfo=tz).timestamp()
        night_end = datetime.combine(day, tariff.night_ends_at, tzinfo=tz).timestamp()
        total += max(0.0, min(end_ts, night_end) - max(start_ts, night_start))
        day += timedelta(days=1)
    return total


def segment_fare(segment: Segment, tariff: Tariff = DEFAULT_TARIFF) -> float:
    if segment.speed_kmh <= tariff.idle_speed_kmh:
        return tariff.idle_rate_per_hour * segment.duration_hours

    # distance charge split by the share of wall-clock time spent in each window
    night_ratio = night_seconds(segment.start_ts, segment.end_ts, tariff) / segment.duration_s
    day_ratio = 1.0 - night_ratio
    return (
        tariff.day_rate_per_km * segment.distance_km * day_ratio
        + tariff.night_rate_per_km * segment.distance_km * night_ratio
    )


def ride_fare(segments: Iterable[Segment], tariff: Tariff = DEFAULT_TARIFF) -> float:
    fare = tariff.flag
    for segment in segments:
        fare += segment_fare(segment, tariff)
    return max(fare, tariff.minimum_fare)
