"""
FARS file naming.

Yearly accident files follow the pattern accident_<YEAR>.csv.bz2.
"""

import math
import warnings
from typing import Any

from fars.config.settings import DEFAULT_FILENAME_TEMPLATE
from fars.exceptions import YearCoercionWarning

# Placeholder written into the file name when a year cannot be coerced.
MISSING_YEAR = "NA"


def to_year(year: Any) -> int | None:
    """Integer year, or None if the value is not numeric. Never warns."""
    try:
        if isinstance(year, str):
            text = year.strip()
            try:
                return int(text)
            except ValueError:
                value = float(text)
        else:
            value = year
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def warn_uncoercible_year(year: Any, stacklevel: int = 2) -> None:
    """Emit the YearCoercionWarning for a value that is not a year."""
    warnings.warn(
        f"year could not be coerced to an integer: {year!r}",
        YearCoercionWarning,
        stacklevel=stacklevel + 1,
    )


def coerce_year(year: Any) -> int | None:
    """
    Coerce a year value to an integer.

    Integers, integral floats and numeric strings ("2014", " 2014 ",
    "2014.0") are accepted; fractional values are truncated toward zero.

    Args:
        year: Year value as given by the caller.

    Returns:
        The integer year, or None if the value is not numeric. A
        YearCoercionWarning is emitted in that case; this never raises.
    """
    coerced = to_year(year)
    if coerced is None:
        warn_uncoercible_year(year, stacklevel=3)
    return coerced


def format_filename(year: int | None, template: str = DEFAULT_FILENAME_TEMPLATE) -> str:
    """Fill the template with an already coerced year ("NA" for None)."""
    return template.format(year=MISSING_YEAR if year is None else year)


def make_filename(year: Any, template: str = DEFAULT_FILENAME_TEMPLATE) -> str:
    """
    Create the accident file name for a year.

    Example:
        >>> make_filename(2014)
        'accident_2014.csv.bz2'
        >>> make_filename("2014")
        'accident_2014.csv.bz2'

    Args:
        year: Integer or integer-like year. Values that cannot be coerced
            emit a YearCoercionWarning and produce a name containing "NA".
        template: File name pattern with a {year} placeholder.

    Returns:
        The file name (not a path; resolve it against a data root).
    """
    return format_filename(coerce_year(year), template)
