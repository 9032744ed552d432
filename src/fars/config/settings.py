"""
Typed configuration models using Pydantic.

The data directory is part of the configuration rather than the process
working directory, so every loader resolves files against an explicit root.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FILENAME_TEMPLATE = "accident_{year}.csv.bz2"


class DataConfig(BaseModel):
    """Location and naming of the yearly accident files."""

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("."), description="Directory holding accident_<year> files"
    )
    filename_template: str = Field(
        default=DEFAULT_FILENAME_TEMPLATE,
        description="File name pattern with a {year} placeholder",
    )

    @field_validator("filename_template")
    @classmethod
    def validate_template(cls, v: str) -> str:
        """Ensure the template has a year placeholder."""
        if "{year}" not in v:
            msg = f"filename_template must contain '{{year}}', got: {v!r}"
            raise ValueError(msg)
        return v


class LoadingConfig(BaseModel):
    """Multi-year loading configuration."""

    model_config = ConfigDict(frozen=True)

    max_workers: int = Field(
        default=1, ge=1, le=32, description="Threads used to read years (1 = sequential)"
    )


class PlotConfig(BaseModel):
    """State map rendering configuration."""

    model_config = ConfigDict(frozen=True)

    output_root: Path = Field(
        default=Path("./output"), description="Directory for rendered maps"
    )
    width: float = Field(default=8.0, gt=0, description="Figure width in inches")
    height: float = Field(default=6.0, gt=0, description="Figure height in inches")
    marker_size: float = Field(default=1.0, gt=0)
    dpi: int = Field(default=150, ge=50, le=600)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check the level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class FarsConfig(BaseModel):
    """Complete configuration for reading, summarizing and mapping FARS data."""

    model_config = ConfigDict(frozen=True)

    data: DataConfig = Field(default_factory=DataConfig)
    loading: LoadingConfig = Field(default_factory=LoadingConfig)
    plot: PlotConfig = Field(default_factory=PlotConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def data_root(self) -> Path:
        """Convenience accessor for the data directory."""
        return self.data.data_root

    def map_output_path(self, state: int, year: int) -> Path:
        """Default file for a rendered state map."""
        return self.plot.output_root / f"map_{state}_{year}.png"
