"""
Pandera schemas for FARS accident data.

The raw file schema is non-strict: FARS accident files carry ~50 columns
and only the ones named here are checked.
"""

import pandera.pandas as pa
from pandera.typing import Series

# FARS codes unknown coordinates with out-of-range values
# (LATITUDE 77.7777/88.8888/99.9999, LONGITUD 777.7777/888.8888/999.9999).
LATITUDE_SENTINEL_THRESHOLD = 90.0
LONGITUDE_SENTINEL_THRESHOLD = 900.0


class AccidentSchema(pa.DataFrameModel):
    """
    Schema for a raw yearly accident file.

    One row per fatal crash.
    """

    STATE: Series[int] = pa.Field(
        ge=1,
        le=99,
        description="FARS state code (see fars.states)",
    )
    MONTH: Series[int] = pa.Field(
        ge=1,
        le=12,
        description="Month of the crash",
    )

    class Config:
        """Schema configuration."""

        name = "AccidentSchema"
        strict = False  # Allow the remaining FARS columns
        coerce = True


class AccidentLocationSchema(pa.DataFrameModel):
    """Schema for the coordinate columns used when mapping a state."""

    STATE: Series[int] = pa.Field(ge=1, le=99)
    LATITUDE: Series[float] = pa.Field(
        nullable=True,
        description="Latitude in WGS84, values above 90 are unknown codes",
    )
    LONGITUD: Series[float] = pa.Field(
        nullable=True,
        description="Longitude in WGS84, values above 900 are unknown codes",
    )

    class Config:
        """Schema configuration."""

        name = "AccidentLocationSchema"
        strict = False
        coerce = True
