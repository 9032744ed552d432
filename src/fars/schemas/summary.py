"""
Pandera schemas for the aggregation stages.

MonthYearSchema is the typed per-year projection; MonthlyCountSchema is the
long-form (year, month, n) table that gets pivoted.
"""

import pandera.pandas as pa
from pandera.typing import Series


class MonthYearSchema(pa.DataFrameModel):
    """One row per accident, reduced to month and requested year."""

    month: Series[int] = pa.Field(ge=1, le=12)
    year: Series[int] = pa.Field(description="Year the file was requested for")

    class Config:
        """Schema configuration."""

        name = "MonthYearSchema"
        strict = True
        ordered = True
        coerce = True


class MonthlyCountSchema(pa.DataFrameModel):
    """Accident counts per (year, month) pair."""

    year: Series[int]
    month: Series[int] = pa.Field(ge=1, le=12)
    n: Series[int] = pa.Field(ge=1, description="Number of accidents")

    class Config:
        """Schema configuration."""

        name = "MonthlyCountSchema"
        strict = True
        unique = ["year", "month"]
        coerce = True
