"""
Lattice regions for flood fill traversal.

A region is an axis-aligned box of integer coordinates described by an index
(the lowest corner) and a size (the number of pixels along each axis).

Coordinate Convention:
- Coordinates are tuples of ints in array axis order, e.g. (z, y, x) for 3D
  volumes and (y, x) for 2D images
- The upper corner is exclusive: index[d] <= coord[d] < index[d] + size[d]
- Iteration follows C order (last axis varies fastest)
"""

import itertools
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from floodfill.errors import ConfigurationError

Index = Tuple[int, ...]


def as_index(coord: Sequence[int]) -> Index:
    """Convert a coordinate-like sequence (list, tuple, numpy array) to a tuple of ints."""
    return tuple(int(c) for c in coord)


class Region:
    """
    An axis-aligned box of lattice coordinates.

    Regions have value semantics: two regions with the same index and size
    compare equal and hash the same.
    """

    __slots__ = ("_index", "_size")

    def __init__(self, index: Sequence[int], size: Sequence[int]):
        """
        Initialize a region.

        Args:
            index: Lowest corner of the region
            size: Extent along each axis, every entry must be positive

        Raises:
            ConfigurationError: If index and size disagree in length, are
                empty, or any extent is zero or negative
        """
        index = as_index(index)
        size = as_index(size)
        if len(index) == 0:
            raise ConfigurationError("Region must have at least one dimension")
        if len(index) != len(size):
            raise ConfigurationError(
                f"Region index {index} and size {size} have different dimensionality")
        if any(s <= 0 for s in size):
            raise ConfigurationError(f"Region size must be positive along every axis, got {size}")
        self._index = index
        self._size = size

    @classmethod
    def from_shape(cls, shape: Sequence[int], index: Optional[Sequence[int]] = None) -> "Region":
        """Region covering an array of the given shape, starting at index (default origin)."""
        if index is None:
            index = (0,) * len(shape)
        return cls(index, shape)

    @property
    def index(self) -> Index:
        return self._index

    @property
    def size(self) -> Index:
        return self._size

    @property
    def ndim(self) -> int:
        return len(self._size)

    @property
    def upper(self) -> Index:
        """Exclusive upper corner of the region."""
        return tuple(i + s for i, s in zip(self._index, self._size))

    @property
    def num_pixels(self) -> int:
        return int(np.prod(self._size, dtype=np.int64))

    def is_inside(self, coord: Sequence[int]) -> bool:
        """
        Check whether a coordinate lies within the region.

        Coordinates of the wrong dimensionality are never inside.
        """
        if len(coord) != len(self._index):
            return False
        for c, lo, s in zip(coord, self._index, self._size):
            if c < lo or c >= lo + s:
                return False
        return True

    def is_inside_region(self, other: "Region") -> bool:
        """Check whether another region is entirely contained in this one."""
        if other.ndim != self.ndim:
            return False
        return all(lo <= olo and olo + osz <= lo + sz
                   for lo, sz, olo, osz in zip(self._index, self._size, other.index, other.size))

    def crop(self, other: "Region") -> Optional["Region"]:
        """
        Intersect this region with another one.

        Returns:
            The overlapping region, or None if the regions do not overlap
        """
        if other.ndim != self.ndim:
            raise ConfigurationError(
                f"Cannot crop a {self.ndim}D region with a {other.ndim}D region")
        lower = [max(a, b) for a, b in zip(self._index, other.index)]
        upper = [min(a, b) for a, b in zip(self.upper, other.upper)]
        if any(hi <= lo for lo, hi in zip(lower, upper)):
            return None
        return Region(lower, [hi - lo for lo, hi in zip(lower, upper)])

    def relative(self, coord: Sequence[int]) -> Index:
        """Position of a coordinate relative to the region index (buffer position)."""
        return tuple(c - lo for c, lo in zip(coord, self._index))

    def __iter__(self) -> Iterator[Index]:
        ranges = [range(lo, lo + s) for lo, s in zip(self._index, self._size)]
        return itertools.product(*ranges)

    def __len__(self) -> int:
        return self.num_pixels

    def __eq__(self, other) -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self._index == other.index and self._size == other.size

    def __hash__(self) -> int:
        return hash((self._index, self._size))

    def __repr__(self) -> str:
        return f"Region(index={self._index}, size={self._size})"
