"""
Data ingestion layer for loading raw accident files.

All raw data loading happens through this module to ensure
consistent validation at system boundaries.
"""

from fars.ingestion.accidents import AccidentLoader, read_accidents
from fars.ingestion.filenames import coerce_year, make_filename

__all__ = ["AccidentLoader", "coerce_year", "make_filename", "read_accidents"]
