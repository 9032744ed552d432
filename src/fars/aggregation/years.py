"""
Multi-year loading with per-year failure isolation.

Each requested year is loaded into a YearLoadResult that records either the
projected table or the error. A bad year never aborts the batch; it turns
into a YearLoadWarning and a None entry.
"""

import warnings
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from fars.config.settings import DEFAULT_FILENAME_TEMPLATE
from fars.exceptions import YearLoadWarning
from fars.ingestion.accidents import read_accidents
from fars.ingestion.filenames import format_filename, to_year, warn_uncoercible_year
from fars.schemas.summary import MonthYearSchema
from fars.utils.logging import get_logger, log_context

log = get_logger(__name__)


@dataclass
class YearLoadResult:
    """
    Outcome of loading one requested year.

    Attributes:
        year: The year exactly as requested.
        filename: Resolved file name (may contain "NA" for invalid years).
        table: Month/year projection, or None if loading failed.
        error: The exception that stopped loading, if any.
    """

    year: Any
    filename: str
    table: pd.DataFrame | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Whether the year loaded successfully."""
        return self.error is None and self.table is not None

    @property
    def n_rows(self) -> int:
        """Number of accidents loaded (0 on failure)."""
        return 0 if self.table is None else len(self.table)


def project_month_year(accidents: pd.DataFrame, year: int) -> pd.DataFrame:
    """
    Reduce an accident table to its month and the requested year.

    Args:
        accidents: Raw accident table with a MONTH column.
        year: Year stamped on every row (not read from the file).

    Returns:
        DataFrame validated against MonthYearSchema, file row order kept.
    """
    projected = pd.DataFrame(
        {
            "month": accidents["MONTH"].to_numpy(),
            "year": year,
        },
        index=pd.RangeIndex(len(accidents)),
    )
    return MonthYearSchema.validate(projected)


def load_year(
    year: Any,
    *,
    data_root: Path | str | None = None,
    template: str = DEFAULT_FILENAME_TEMPLATE,
) -> YearLoadResult:
    """
    Load and project the accident file for one year.

    Any exception is captured in the result rather than raised.
    """
    # Runs on worker threads: no warnings here, read_years reports failures.
    coerced = to_year(year)
    filename = format_filename(coerced, template)

    result = YearLoadResult(year=year, filename=filename)
    with log_context(year=year):
        try:
            if coerced is None:
                msg = f"year is not an integer: {year!r}"
                raise ValueError(msg)
            accidents = read_accidents(filename, data_root=data_root)
            result.table = project_month_year(accidents, coerced)
        except Exception as e:
            result.error = e
    return result


def collect_years(
    years: Iterable[Any],
    *,
    data_root: Path | str | None = None,
    template: str = DEFAULT_FILENAME_TEMPLATE,
    max_workers: int = 1,
) -> list[YearLoadResult]:
    """
    Load every requested year, one result per year in input order.

    Args:
        years: Requested years (ints or integer-like strings).
        data_root: Directory holding the accident files.
        template: File name pattern with a {year} placeholder.
        max_workers: Threads to read files with; 1 reads sequentially.

    Returns:
        List of YearLoadResult aligned with the input.
    """
    years = list(years)

    if max_workers <= 1 or len(years) <= 1:
        return [load_year(y, data_root=data_root, template=template) for y in years]

    results: list[YearLoadResult | None] = [None] * len(years)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(years))) as executor:
        futures = {
            executor.submit(load_year, y, data_root=data_root, template=template): i
            for i, y in enumerate(years)
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    return results  # type: ignore[return-value]


def read_years(
    years: Iterable[Any],
    *,
    data_root: Path | str | None = None,
    template: str = DEFAULT_FILENAME_TEMPLATE,
    max_workers: int = 1,
) -> list[pd.DataFrame | None]:
    """
    Read accident files for several years, reduced to month and year.

    Example:
        tables = read_years([2014, "2015"], data_root="data")

    Years that fail to load produce None and exactly one YearLoadWarning
    ("invalid year: <year>"); the remaining years are still read. A year
    that is not numeric is first reported with a YearCoercionWarning.

    Args:
        years: Requested years (ints or integer-like strings).
        data_root: Directory holding the accident files.
        template: File name pattern with a {year} placeholder.
        max_workers: Threads to read files with; 1 reads sequentially.

    Returns:
        One DataFrame (columns month, year) or None per requested year,
        in input order.
    """
    results = collect_years(
        years, data_root=data_root, template=template, max_workers=max_workers
    )

    for result in results:
        if result.ok:
            log.debug("Loaded year", year=result.year, rows=result.n_rows)
            continue
        log.warning(
            "Failed to load year",
            year=result.year,
            filename=result.filename,
            error=str(result.error),
        )
        if to_year(result.year) is None:
            warn_uncoercible_year(result.year, stacklevel=2)
        warnings.warn(f"invalid year: {result.year}", YearLoadWarning, stacklevel=2)

    return [result.table for result in results]
