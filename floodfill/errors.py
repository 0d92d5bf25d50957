"""Exception types raised by the flood fill package."""


class FloodFillError(Exception):
    """Base class for flood fill errors."""


class ConfigurationError(FloodFillError, ValueError):
    """Invalid seeds, shape, region or parameters supplied at construction."""


class UsageError(FloodFillError, RuntimeError):
    """The traversal was queried in a state where the query is invalid."""
