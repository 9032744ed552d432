"""
Base classes and utilities for data ingestion.

Provides common functionality for all data loaders.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa

from fars.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Abstract base class for data loaders.

    Loaders resolve files against an explicit data root instead of the
    process working directory, and validate at the read boundary.
    """

    def __init__(self, data_root: Path | str | None, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            data_root: Directory relative paths are resolved against.
                Defaults to the current directory.
            schema: Pandera schema for validation.
        """
        self.data_root = Path(data_root) if data_root is not None else Path(".")
        self.schema = schema

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            FileNotFoundError: If data file not found.
            pandera.errors.SchemaError: If validation fails.
        """
        df = self._load_raw()
        log.debug(
            "Loaded raw data",
            loader=self.__class__.__name__,
            rows=len(df),
            columns=len(df.columns),
        )

        if validate:
            df = self._validate(df)

        return df

    def _validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Validate DataFrame against schema."""
        return self.schema.validate(df)

    def resolve_path(self, relative_path: Path | str) -> Path:
        """
        Resolve a path against the data root.

        Absolute paths are returned unchanged.
        """
        return self.data_root / relative_path
