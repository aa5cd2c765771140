"""
Error taxonomy for series algebra and streaming components.

Every error also derives from the closest builtin exception so callers can
catch either the specific class or the builtin (e.g. ``ValueError``).
Missing numeric data (NaN) is never an error.
"""


class TimeSeriesError(Exception):
    """Base class for all engine errors."""
    pass


class EpochNotFound(TimeSeriesError, LookupError):
    """Raised when an epoch is absent from a series index."""

    def __init__(self, epoch: int):
        super().__init__(f"Epoch not in index: {epoch}")
        self.epoch = epoch


class SeriesNotFound(TimeSeriesError, LookupError):
    """Raised when a bundle has no series under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Series not in bundle: {name!r}")
        self.name = name


class IncompatibleSeries(TimeSeriesError, ValueError):
    """Raised when two series do not share the same index."""
    pass


class DivisionByZero(TimeSeriesError, ZeroDivisionError):
    """Raised when dividing by a series holding an exact zero."""
    pass


class InvalidConstruction(TimeSeriesError, ValueError):
    """Raised for ill-formed construction parameters (depths, coefficients, config)."""
    pass
