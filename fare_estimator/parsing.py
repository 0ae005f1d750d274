# fare_estimator/parsing.py
from __future__ import annotations

import math
import re
from typing import Optional, Sequence

from .schemas import Ping

PING_FIELDS = ("ride_id", "lat", "lng", "ts")

_INT_RE = re.compile(r"[+-]?\d+")


class MalformedRecord(ValueError):
    """A raw row that cannot be turned into a Ping. Fatal to a run."""

    def __init__(self, message: str, record_no: Optional[int] = None):
        self.record_no = record_no
        if record_no is not None:
            message = f"record {record_no}: {message}"
        super().__init__(message)


def _as_int(name: str, token: str) -> int:
    # int() alone would accept "1_000" and surrounding whitespace
    if not _INT_RE.fullmatch(token):
        raise ValueError(f"{name} must be an integer, got {token!r}")
    return int(token)


def _as_float(name: str, token: str) -> float:
    # float() alone would accept "3_7.2" and surrounding whitespace
    if token != token.strip() or "_" in token:
        raise ValueError(f"{name} must be a decimal number, got {token!r}")
    try:
        value = float(token)
    except ValueError:
        raise ValueError(f"{name} must be a decimal number, got {token!r}") from None
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {token!r}")
    return value


def parse_ping(fields: Sequence[str], record_no: Optional[int] = None) -> Ping:
    """
    Convert one raw row (ride id, lat, lng, epoch seconds) into a Ping.

    Raises MalformedRecord if the row does not have exactly four text fields
    or any field fails to parse as its numeric type.
    """
    if len(fields) != len(PING_FIELDS):
        raise MalformedRecord(
            f"expected {len(PING_FIELDS)} fields, got {len(fields)}", record_no
        )
    for name, token in zip(PING_FIELDS, fields):
        if not isinstance(token, str) or token == "":
            raise MalformedRecord(f"missing {name}", record_no)

    try:
        return Ping(
            ride_id=_as_int("ride_id", fields[0]),
            lat=_as_float("lat", fields[1]),
            lng=_as_float("lng", fields[2]),
            ts=_as_int("ts", fields[3]),
        )
    except ValueError as ex:
        raise MalformedRecord(str(ex), record_no) from ex
