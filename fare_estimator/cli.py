# fare_estimator/cli.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from pydantic import ValidationError

from .config import FARE_CHUNK_SIZE, FARE_OUTPUT_PATH, FARE_TIMEZONE, LOG_JSON, LOG_LEVEL
from .logging_setup import setup_logging
from .parsing import MalformedRecord
from .pricing import Tariff
from .records import read_records, write_estimates
from .rides import estimate_fares_from_records

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fare-estimator",
        description="Estimate one fare per ride from a CSV of GPS pings (id, lat, lng, epoch seconds).",
    )
    ap.add_argument("records", help="Path to the ping CSV")
    ap.add_argument("output", nargs="?", default=FARE_OUTPUT_PATH,
                    help=f"Where to write the estimates (default: {FARE_OUTPUT_PATH})")
    ap.add_argument("--timezone", default=FARE_TIMEZONE,
                    help="IANA zone for the day/night tariff windows")
    ap.add_argument("--chunk-size", type=int, default=FARE_CHUNK_SIZE)
    ap.add_argument("--log-level", default=LOG_LEVEL)
    ap.add_argument("--log-json", action="store_true", default=LOG_JSON)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_json)

    try:
        tariff = Tariff(timezone=args.timezone)
    except ValidationError as ex:
        logger.error("Invalid tariff settings: %s", ex)
        return 1

    # collect everything first: a malformed record must not leave a partial output
    try:
        estimates = list(
            estimate_fares_from_records(read_records(args.records, args.chunk_size), tariff)
        )
    except MalformedRecord as ex:
        logger.error("Malformed Record: %s", ex)
        return 1
    except OSError as ex:
        logger.error("Cannot read %s: %s", args.records, ex)
        return 1

    try:
        write_estimates(estimates, args.output)
    except OSError as ex:
        logger.error("Cannot write %s: %s", args.output, ex)
        return 1
    return 0
