"""
Inclusion predicates for flood fill traversal.

A predicate decides whether a coordinate belongs to the fill. The traversal
engine only evaluates predicates for coordinates inside its region, and
assumes a predicate returns the same answer for the same coordinate during
one pass.

Any object with an ``is_included(coord)`` method is a predicate. Plain
callables taking a coordinate are accepted too and wrapped with
``as_predicate``.
"""

from typing import Any, Callable, Optional, Sequence

import numpy as np

from floodfill.errors import ConfigurationError
from floodfill.grid import ArrayGrid


class FunctionPredicate:
    """Predicate backed by a callable of the coordinate."""

    def __init__(self, fn: Callable[[Sequence[int]], bool]):
        self.fn = fn

    def is_included(self, coord: Sequence[int]) -> bool:
        return bool(self.fn(coord))

    def __call__(self, coord: Sequence[int]) -> bool:
        return self.is_included(coord)


class ValuePredicate:
    """Predicate backed by a callable of the pixel value at the coordinate."""

    def __init__(self, grid: ArrayGrid, fn: Callable[[Any], bool]):
        self.grid = grid
        self.fn = fn

    def is_included(self, coord: Sequence[int]) -> bool:
        return bool(self.fn(self.grid.pixel_at(coord)))

    def __call__(self, coord: Sequence[int]) -> bool:
        return self.is_included(coord)


class ThresholdPredicate:
    """
    Binary threshold on the pixel value.

    A coordinate is included when lower <= value <= upper. Either bound may
    be omitted, but not both.
    """

    def __init__(self, grid: ArrayGrid, lower: Optional[float] = None, upper: Optional[float] = None):
        """
        Initialize the threshold predicate.

        Args:
            grid: Grid providing pixel values
            lower: Inclusive lower bound (None for no lower bound)
            upper: Inclusive upper bound (None for no upper bound)

        Raises:
            ConfigurationError: If both bounds are missing or lower > upper
        """
        if lower is None and upper is None:
            raise ConfigurationError("Threshold predicate needs a lower or an upper bound")
        if lower is not None and upper is not None and lower > upper:
            raise ConfigurationError(f"Lower threshold {lower} exceeds upper threshold {upper}")
        self.grid = grid
        self.lower = lower
        self.upper = upper

    def is_included(self, coord: Sequence[int]) -> bool:
        value = self.grid.pixel_at(coord)
        # NaN fails both comparisons, so masked voxels are never included
        return bool((self.lower is None or self.lower <= value)
                    and (self.upper is None or value <= self.upper))

    def __call__(self, coord: Sequence[int]) -> bool:
        return self.is_included(coord)

    def __repr__(self) -> str:
        return f"ThresholdPredicate(lower={self.lower}, upper={self.upper})"


class SpatialFunctionPredicate:
    """Predicate backed by a callable of the physical position of the coordinate."""

    def __init__(self, grid: ArrayGrid, fn: Callable[[np.ndarray], bool]):
        self.grid = grid
        self.fn = fn

    def is_included(self, coord: Sequence[int]) -> bool:
        return bool(self.fn(self.grid.physical_point(coord)))

    def __call__(self, coord: Sequence[int]) -> bool:
        return self.is_included(coord)


class MaskPredicate:
    """Includes coordinates whose pixel value is nonzero."""

    def __init__(self, grid: ArrayGrid):
        self.grid = grid

    def is_included(self, coord: Sequence[int]) -> bool:
        return bool(self.grid.pixel_at(coord))

    def __call__(self, coord: Sequence[int]) -> bool:
        return self.is_included(coord)


def as_predicate(predicate) -> Any:
    """
    Normalize a predicate argument.

    Args:
        predicate: Object with an ``is_included`` method, or a callable of
            the coordinate

    Returns:
        An object with an ``is_included`` method
    """
    if hasattr(predicate, "is_included"):
        return predicate
    if callable(predicate):
        return FunctionPredicate(predicate)
    raise ConfigurationError(f"Predicate must be callable or define is_included, got {type(predicate)}")
