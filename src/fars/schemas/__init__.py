"""
Schema definitions using Pandera for data validation.

Raw accident files are validated at the read boundary; the per-year
projection and the grouped counts have their own typed schemas.
"""

from fars.schemas.accident import (
    LATITUDE_SENTINEL_THRESHOLD,
    LONGITUDE_SENTINEL_THRESHOLD,
    AccidentLocationSchema,
    AccidentSchema,
)
from fars.schemas.summary import MonthlyCountSchema, MonthYearSchema

__all__ = [
    "LATITUDE_SENTINEL_THRESHOLD",
    "LONGITUDE_SENTINEL_THRESHOLD",
    "AccidentLocationSchema",
    "AccidentSchema",
    "MonthYearSchema",
    "MonthlyCountSchema",
]
