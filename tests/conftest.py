"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pandas as pd
import pytest
import structlog

# Sentinel codes FARS uses for unknown coordinates
UNKNOWN_LATITUDE = 99.9999
UNKNOWN_LONGITUDE = 999.9999

# Accidents per month in the synthetic files
COUNTS_2014 = {month: month + 10 for month in range(1, 13)}  # 198 rows
COUNTS_2013 = {month: 5 for month in range(1, 12)}  # 55 rows, no December

ACCIDENT_COLUMNS = [
    "STATE",
    "ST_CASE",
    "MONTH",
    "DAY",
    "YEAR",
    "HOUR",
    "LATITUDE",
    "LONGITUD",
    "FATALS",
]


def make_accidents(
    year: int,
    month_counts: dict[int, int],
    states: tuple[int, ...] = (1, 9, 6),
) -> pd.DataFrame:
    """Build a deterministic accident table shaped like a FARS file."""
    rows = []
    i = 0
    for month, count in month_counts.items():
        for _ in range(count):
            state = states[i % len(states)]
            rows.append(
                {
                    "STATE": state,
                    "ST_CASE": state * 10000 + i,
                    "MONTH": month,
                    "DAY": i % 28 + 1,
                    "YEAR": year,
                    "HOUR": i % 24,
                    "LATITUDE": 30.0 + (i % 10) * 0.5,
                    "LONGITUD": -90.0 - (i % 7) * 0.5,
                    "FATALS": 1 + i % 2,
                }
            )
            i += 1
    return pd.DataFrame(rows, columns=ACCIDENT_COLUMNS)


def write_accidents(path: Path, df: pd.DataFrame) -> Path:
    """Write an accident table as bzip2-compressed CSV."""
    df.to_csv(path, index=False)
    return path


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()
    logging.captureWarnings(False)
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)


@pytest.fixture
def accidents_2014() -> pd.DataFrame:
    """2014 accidents in states 1, 9 and 6."""
    return make_accidents(2014, COUNTS_2014)


@pytest.fixture
def accidents_2013() -> pd.DataFrame:
    """2013 accidents; the last two rows are in state 50 with unknown locations."""
    df = make_accidents(2013, COUNTS_2013)
    df.loc[df.index[-2:], "STATE"] = 50
    df.loc[df.index[-2:], "LATITUDE"] = UNKNOWN_LATITUDE
    df.loc[df.index[-2:], "LONGITUD"] = UNKNOWN_LONGITUDE
    return df


@pytest.fixture
def data_root(
    tmp_path: Path, accidents_2014: pd.DataFrame, accidents_2013: pd.DataFrame
) -> Path:
    """Directory with accident_2013.csv.bz2 and accident_2014.csv.bz2."""
    root = tmp_path / "data"
    root.mkdir()
    write_accidents(root / "accident_2014.csv.bz2", accidents_2014)
    write_accidents(root / "accident_2013.csv.bz2", accidents_2013)
    return root
