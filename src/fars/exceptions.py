"""Errors and warnings raised by the FARS pipeline."""


class YearCoercionWarning(UserWarning):
    """A year value could not be converted to an integer."""


class YearLoadWarning(UserWarning):
    """The accident file for a requested year could not be loaded."""


class InvalidStateError(ValueError):
    """The requested state code does not occur in the accident data."""


class EmptyInputError(ValueError):
    """No accident rows were available to summarize."""
