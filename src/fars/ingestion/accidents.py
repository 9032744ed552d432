"""
FARS accident file ingestion.

Reads one bzip2-compressed accident CSV into a DataFrame.
"""

from pathlib import Path

import pandas as pd

from fars.ingestion.base import DataLoader
from fars.schemas.accident import AccidentSchema
from fars.utils.logging import get_logger

log = get_logger(__name__)


class AccidentLoader(DataLoader[AccidentSchema]):
    """Loader for a single yearly accident file."""

    def __init__(self, filename: Path | str, data_root: Path | str | None = None) -> None:
        """
        Initialize accident loader.

        Args:
            filename: File name (or path) of the accident file.
            data_root: Directory the file name is resolved against.
        """
        super().__init__(data_root, AccidentSchema)
        self.filename = filename

    def _load_raw(self) -> pd.DataFrame:
        """Load the accident CSV, checking existence before parsing."""
        path = self.resolve_path(self.filename)

        if not path.is_file():
            msg = f"file '{path}' does not exist"
            raise FileNotFoundError(msg)

        log.debug("Reading accidents", path=str(path))

        # Compression is inferred from the suffix; low_memory avoids
        # chunked dtype guessing and its DtypeWarning on mixed columns.
        return pd.read_csv(path, low_memory=False)


def read_accidents(
    filename: Path | str,
    *,
    data_root: Path | str | None = None,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Read a FARS accident file.

    Example:
        df = read_accidents(make_filename(2014), data_root="data")

    Args:
        filename: File name, typically from make_filename().
        data_root: Directory to resolve the file name against. Defaults to
            the current directory.
        validate: Whether to check the AccidentSchema columns.

    Returns:
        DataFrame with every column of the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        pandera.errors.SchemaError: If validation fails.
    """
    loader = AccidentLoader(filename, data_root)
    return loader.load(validate=validate)
