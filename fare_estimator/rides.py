# fare_estimator/rides.py
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from .geo import haversine
from .parsing import parse_ping
from .pricing import DEFAULT_TARIFF, Tariff, ride_fare
from .schemas import FareEstimate, Ping, Segment
from .segments import MAX_SPEED_KMH, DistanceFn, build_segment

logger = logging.getLogger(__name__)


class RideAccumulator:
    """
    Folds an ordered ping stream into one FareEstimate per ride.

    A ride is the maximal run of consecutive pings sharing a ride id. It is
    finalized when a ping with another id arrives, or on finish().
    """

    def __init__(
        self,
        tariff: Tariff = DEFAULT_TARIFF,
        distance_fn: DistanceFn = haversine,
        max_speed_kmh: float = MAX_SPEED_KMH,
    ):
        self.tariff = tariff
        self.distance_fn = distance_fn
        self.max_speed_kmh = max_speed_kmh
        self.ride_id: Optional[int] = None
        self.previous: Optional[Ping] = None
        self.segments: List[Segment] = []
        self.rejected = 0

    @property
    def in_ride(self) -> bool:
        return self.previous is not None

    def add(self, ping: Ping) -> Optional[FareEstimate]:
        """Feed the next ping; returns the estimate of the ride it closed, if any."""
        if self.previous is None:
            self._start(ping)
            return None

        if ping.ride_id != self.ride_id:
            closed = self._close()
            self._start(ping)
            return closed

        segment = build_segment(self.previous, ping, self.distance_fn, self.max_speed_kmh)
        if segment is None:
            self.rejected += 1
        else:
            self.segments.append(segment)
        # previous advances even when the segment was rejected
        self.previous = ping
        return None

    def finish(self) -> Optional[FareEstimate]:
        """Finalize the ride in progress at end of input (None if input was empty)."""
        if self.previous is None:
            return None
        closed = self._close()
        self.ride_id = None
        self.previous = None
        self.segments = []
        self.rejected = 0
        return closed

    def _start(self, ping: Ping) -> None:
        self.ride_id = ping.ride_id
        self.previous = ping
        self.segments = []
        self.rejected = 0

    def _close(self) -> FareEstimate:
        estimate = FareEstimate(ride_id=self.ride_id, fare=ride_fare(self.segments, self.tariff))
        logger.info(
            "Ride with ID: %s Fare: %.4f (%d segments, %d rejected)",
            estimate.ride_id, estimate.fare, len(self.segments), self.rejected,
        )
        return estimate


def estimate_fares(
    pings: Iterable[Ping],
    tariff: Tariff = DEFAULT_TARIFF,
    distance_fn: DistanceFn = haversine,
    max_speed_kmh: float = MAX_SPEED_KMH,
) -> Iterator[FareEstimate]:
    """Yield one FareEstimate per ride, in the order rides first appear."""
    acc = RideAccumulator(tariff, distance_fn, max_speed_kmh)
    for ping in pings:
        estimate = acc.add(ping)
        if estimate is not None:
            yield estimate
    last = acc.finish()
    if last is not None:
        yield last


def parse_records(rows: Iterable[Sequence[str]]) -> Iterator[Ping]:
    """Parse raw rows lazily; the first malformed row raises MalformedRecord."""
    for record_no, row in enumerate(rows, start=1):
        yield parse_ping(row, record_no)


def estimate_fares_from_records(
    rows: Iterable[Sequence[str]],
    tariff: Tariff = DEFAULT_TARIFF,
    distance_fn: DistanceFn = haversine,
    max_speed_kmh: float = MAX_SPEED_KMH,
) -> Iterator[FareEstimate]:
    return estimate_fares(parse_records(rows), tariff, distance_fn, max_speed_kmh)
