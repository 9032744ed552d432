"""
Scatter map of fatal accident locations for one state and year.
"""

from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from fars.config.settings import DEFAULT_FILENAME_TEMPLATE
from fars.exceptions import InvalidStateError
from fars.ingestion.accidents import read_accidents
from fars.ingestion.filenames import make_filename
from fars.schemas.accident import (
    LATITUDE_SENTINEL_THRESHOLD,
    LONGITUDE_SENTINEL_THRESHOLD,
    AccidentLocationSchema,
)
from fars.states import state_name
from fars.utils.logging import get_logger

log = get_logger(__name__)


def mask_unknown_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """Replace FARS 'unknown' coordinate codes with NaN."""
    df = df.copy()
    df["LONGITUD"] = df["LONGITUD"].where(
        df["LONGITUD"] <= LONGITUDE_SENTINEL_THRESHOLD, np.nan
    )
    df["LATITUDE"] = df["LATITUDE"].where(
        df["LATITUDE"] <= LATITUDE_SENTINEL_THRESHOLD, np.nan
    )
    return df


def state_locations(accidents: pd.DataFrame, state_num: int) -> pd.DataFrame:
    """
    Known accident coordinates for one state.

    Raises:
        InvalidStateError: If the state does not occur in the data.
    """
    accidents = AccidentLocationSchema.validate(accidents)
    if state_num not in set(accidents["STATE"].unique()):
        msg = f"invalid STATE number: {state_num}"
        raise InvalidStateError(msg)

    subset = accidents.loc[accidents["STATE"] == state_num, ["LONGITUD", "LATITUDE"]]
    return mask_unknown_coordinates(subset).dropna()


def map_state(
    state_num: Any,
    year: Any,
    *,
    data_root: Path | str | None = None,
    template: str = DEFAULT_FILENAME_TEMPLATE,
    ax: Axes | None = None,
    output: Path | str | None = None,
    figsize: tuple[float, float] = (8.0, 6.0),
    marker_size: float = 1.0,
    dpi: int = 150,
) -> Figure | None:
    """
    Draw the accidents of one state and year.

    Example:
        map_state(1, 2014, data_root="data", output="alabama_2014.png")

    Args:
        state_num: FARS state code (see fars.states).
        year: Year of the accident file.
        data_root: Directory holding the accident files.
        template: File name pattern with a {year} placeholder.
        ax: Axes to draw on; a new figure is created if omitted.
        output: Optional image path the figure is saved to.
        figsize: Size of a newly created figure in inches.
        marker_size: Scatter marker size.
        dpi: Resolution for the saved image.

    Returns:
        The figure, or None if the state has no accident with a known
        location (logged as "no accidents to plot").

    Raises:
        FileNotFoundError: If the accident file for the year is missing.
        InvalidStateError: If the state code does not occur in the data.
    """
    accidents = read_accidents(make_filename(year, template), data_root=data_root)
    state_num = int(state_num)

    locations = state_locations(accidents, state_num)
    if locations.empty:
        log.info("no accidents to plot", state=state_num, year=year)
        return None

    if ax is None:
        fig = Figure(figsize=figsize)
        ax = fig.add_subplot()
    else:
        fig = ax.get_figure()

    ax.scatter(
        locations["LONGITUD"],
        locations["LATITUDE"],
        s=marker_size,
        marker=".",
        color="black",
    )
    lon_min, lon_max = locations["LONGITUD"].min(), locations["LONGITUD"].max()
    lat_min, lat_max = locations["LATITUDE"].min(), locations["LATITUDE"].max()
    # A single point would give a zero-width range
    pad_lon = 0.05 * (lon_max - lon_min) or 0.5
    pad_lat = 0.05 * (lat_max - lat_min) or 0.5
    ax.set_xlim(lon_min - pad_lon, lon_max + pad_lon)
    ax.set_ylim(lat_min - pad_lat, lat_max + pad_lat)
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"Fatal accidents, {state_name(state_num)} {year}")

    log.info("Plotted accidents", state=state_num, year=year, points=len(locations))

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output, dpi=dpi, bbox_inches="tight")
        log.info("Saved map", path=str(output))

    return fig
