"""
FARS: Fatality Analysis Reporting System accident summaries.

Reads yearly NHTSA accident files (accident_<year>.csv.bz2), counts fatal
accidents per month and year, and maps accident locations for a state.
"""

from importlib.metadata import version

from fars.aggregation import read_years, summarize_years
from fars.exceptions import (
    EmptyInputError,
    InvalidStateError,
    YearCoercionWarning,
    YearLoadWarning,
)
from fars.ingestion import make_filename, read_accidents
from fars.plotting import map_state

__version__ = version("fars")

__all__ = [
    "EmptyInputError",
    "InvalidStateError",
    "YearCoercionWarning",
    "YearLoadWarning",
    "__version__",
    "make_filename",
    "map_state",
    "read_accidents",
    "read_years",
    "summarize_years",
]
