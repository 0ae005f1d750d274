# fare_estimator/segments.py
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from .geo import haversine
from .schemas import Ping, Segment

logger = logging.getLogger(__name__)

Coord = Tuple[float, float]
DistanceFn = Callable[[Coord, Coord], float]

MAX_SPEED_KMH = 100.0


def build_segment(
    previous: Ping,
    current: Ping,
    distance_fn: DistanceFn = haversine,
    max_speed_kmh: float = MAX_SPEED_KMH,
) -> Optional[Segment]:
    """
    Derive the Segment between two consecutive pings of one ride.

    Returns None when the pair is rejected:
      - the timestamps do not move forward (zero or negative duration),
      - the average speed is at or above max_speed_kmh (GPS noise).

    Input ordering is trusted; pings are never reordered here.
    """
    if previous.ride_id != current.ride_id:
        raise ValueError(
            f"cannot build a segment across rides {previous.ride_id} and {current.ride_id}"
        )

    duration_s = current.ts - previous.ts
    if duration_s <= 0:
        logger.info(
            "Rejected segment of ride %s at ts %s: non-positive duration %ss",
            current.ride_id, current.ts, duration_s,
        )
        return None

    distance_km = distance_fn(previous.coords, current.coords)
    speed_kmh = distance_km / (duration_s / 3600.0)
    if speed_kmh >= max_speed_kmh:
        logger.info(
            "Rejected segment of ride %s at ts %s: speed %.2f km/h",
            current.ride_id, current.ts, speed_kmh,
        )
        return None

    return Segment(
        distance_km=distance_km,
        duration_s=duration_s,
        speed_kmh=speed_kmh,
        start_ts=previous.ts,
        end_ts=current.ts,
    )
