"""
Reading several years of accident data and summarizing them by month.
"""

from fars.aggregation.summary import count_by_month, pivot_counts, summarize_years
from fars.aggregation.years import (
    YearLoadResult,
    collect_years,
    load_year,
    project_month_year,
    read_years,
)

__all__ = [
    "YearLoadResult",
    "collect_years",
    "count_by_month",
    "load_year",
    "pivot_counts",
    "project_month_year",
    "read_years",
    "summarize_years",
]
