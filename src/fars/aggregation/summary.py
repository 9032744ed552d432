"""
Monthly accident summaries across years.

Combines the per-year month/year tables, counts accidents per (year, month)
and pivots the counts into one row per month and one column per year.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from fars.aggregation.years import read_years
from fars.config.settings import DEFAULT_FILENAME_TEMPLATE
from fars.exceptions import EmptyInputError
from fars.schemas.summary import MonthlyCountSchema
from fars.utils.logging import get_logger

log = get_logger(__name__)


def count_by_month(tables: Sequence[pd.DataFrame | None]) -> pd.DataFrame:
    """
    Count accidents per year and month.

    Args:
        tables: Month/year tables as returned by read_years; None entries
            (failed years) are skipped.

    Returns:
        Long DataFrame with columns year, month, n, sorted by year then month.

    Raises:
        EmptyInputError: If no rows remain after dropping failed years.
    """
    loaded = [t for t in tables if t is not None]
    if not loaded:
        msg = "No accident data to summarize: no year could be loaded"
        raise EmptyInputError(msg)

    combined = pd.concat(loaded, ignore_index=True)
    if combined.empty:
        msg = "No accident data to summarize: loaded files contain no rows"
        raise EmptyInputError(msg)

    counts = (
        combined.groupby(["year", "month"], sort=True)
        .size()
        .rename("n")
        .reset_index()
    )
    return MonthlyCountSchema.validate(counts)


def pivot_counts(counts: pd.DataFrame) -> pd.DataFrame:
    """
    Reshape long counts into a month x year table.

    Missing (month, year) pairs stay <NA>; they are not zero-filled.
    """
    wide = counts.pivot(index="month", columns="year", values="n")
    wide = wide.sort_index(axis=0).sort_index(axis=1).astype("Int64")
    wide.index.name = "month"
    wide.columns.name = "year"
    return wide


def summarize_years(
    years: Iterable[Any],
    *,
    data_root: Path | str | None = None,
    template: str = DEFAULT_FILENAME_TEMPLATE,
    max_workers: int = 1,
) -> pd.DataFrame:
    """
    Summarize accidents per month for several years.

    Example:
        summary = summarize_years([2013, 2014], data_root="data")
        summary.loc[1, 2014]  # accidents in January 2014

    Args:
        years: Requested years (ints or integer-like strings).
        data_root: Directory holding the accident files.
        template: File name pattern with a {year} placeholder.
        max_workers: Threads to read files with; 1 reads sequentially.

    Returns:
        DataFrame indexed by month (ascending) with one nullable Int64
        column per successfully loaded year (ascending).

    Raises:
        EmptyInputError: If no year could be loaded.
    """
    tables = read_years(
        years, data_root=data_root, template=template, max_workers=max_workers
    )
    counts = count_by_month(tables)
    summary = pivot_counts(counts)

    log.info(
        "Summarized accidents",
        years=[int(y) for y in summary.columns],
        months=len(summary.index),
        total=int(counts["n"].sum()),
    )
    return summary
