# fare_estimator/records.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Union

import pandas as pd

from .config import FARE_CHUNK_SIZE
from .parsing import PING_FIELDS, MalformedRecord
from .schemas import FareEstimate

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

OUTPUT_COLUMNS = ["ride_id", "fare"]


def read_records(path: PathLike, chunk_size: int = FARE_CHUNK_SIZE) -> Iterator[List[str]]:
    """
    Stream rows of raw text tokens from a headerless ping CSV.

    Every cell is kept as text so that typing is decided by parse_ping alone.
    Ragged rows and undecodable bytes surface as MalformedRecord; a missing
    file raises OSError.
    """
    try:
        reader = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            chunksize=chunk_size,
        )
    except pd.errors.EmptyDataError:
        logger.info("No records in %s", path)
        return
    except UnicodeDecodeError as ex:
        raise MalformedRecord(f"not valid UTF-8 text: {ex}") from ex

    record_no = 0
    with reader:
        try:
            for chunk in reader:
                if chunk.shape[1] != len(PING_FIELDS):
                    raise MalformedRecord(
                        f"expected {len(PING_FIELDS)} fields, got {chunk.shape[1]}",
                        record_no + 1,
                    )
                for row in chunk.itertuples(index=False, name=None):
                    record_no += 1
                    yield [cell if isinstance(cell, str) else "" for cell in row]
        except pd.errors.ParserError as ex:
            raise MalformedRecord(str(ex)) from ex
        except UnicodeDecodeError as ex:
            raise MalformedRecord(f"not valid UTF-8 text: {ex}") from ex
    logger.debug("Read %d records from %s", record_no, path)


def estimates_frame(estimates: Iterable[FareEstimate]) -> pd.DataFrame:
    return pd.DataFrame([e.to_row() for e in estimates], columns=OUTPUT_COLUMNS)


def write_estimates(estimates: Iterable[FareEstimate], path: PathLike) -> int:
    """Write (ride id, fare) rows without a header; returns the row count."""
    df = estimates_frame(estimates)
    df.to_csv(path, header=False, index=False)
    logger.info("Wrote %d fare estimates to %s", len(df), path)
    return len(df)
