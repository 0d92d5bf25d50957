"""
Neighbor shapes (connectivity) for flood fill traversal.

A neighbor shape is an ordered list of relative offsets. The traversal visits
the neighbors of every accepted coordinate in exactly this order, so the
order of the offsets determines the emission order of the fill.

Built-in shapes enumerate the neighborhood box in C order (last axis varies
fastest) and skip the centre. In 2D the face shape is therefore
[(-1, 0), (0, -1), (0, 1), (1, 0)].
"""

import itertools
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from floodfill.errors import ConfigurationError

Offset = Tuple[int, ...]


def _box_offsets(ndim: int, radius: int) -> List[Offset]:
    steps = range(-radius, radius + 1)
    return [offset for offset in itertools.product(steps, repeat=ndim) if any(offset)]


class NeighborShape:
    """
    An immutable, ordered set of neighbor offsets.

    Offsets are validated on construction: the shape must be non-empty, every
    offset must have the same dimensionality, the zero offset is not allowed
    and duplicates are rejected.
    """

    __slots__ = ("_offsets",)

    def __init__(self, offsets: Sequence[Sequence[int]]):
        """
        Initialize a shape from explicit offsets.

        Args:
            offsets: Relative offsets in the order they should be explored

        Raises:
            ConfigurationError: If the offsets are empty, of mixed
                dimensionality, contain the zero vector or duplicates
        """
        normalized = []
        for offset in offsets:
            try:
                components = tuple(offset)
                integral = tuple(int(c) for c in components)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Neighbor offset {offset!r} must hold integers") from e
            if any(isinstance(c, (float, np.floating)) and not float(c).is_integer() for c in components):
                raise ConfigurationError(f"Neighbor offset {components} must be integral")
            normalized.append(integral)

        if not normalized:
            raise ConfigurationError("Neighbor shape must contain at least one offset")

        ndim = len(normalized[0])
        if ndim == 0:
            raise ConfigurationError("Neighbor offsets must have at least one dimension")

        seen = set()
        for offset in normalized:
            if len(offset) != ndim:
                raise ConfigurationError(
                    f"Neighbor offset {offset} does not match dimensionality {ndim}")
            if not any(offset):
                raise ConfigurationError("Neighbor shape must not contain the zero offset")
            if offset in seen:
                raise ConfigurationError(f"Duplicate neighbor offset {offset}")
            seen.add(offset)

        self._offsets = tuple(normalized)

    @classmethod
    def full(cls, ndim: int) -> "NeighborShape":
        """Chessboard connectivity: all 3**ndim - 1 neighbors (8 in 2D, 26 in 3D)."""
        return cls.box(ndim, 1)

    @classmethod
    def face(cls, ndim: int) -> "NeighborShape":
        """Face connectivity: the 2*ndim axis-aligned neighbors (4 in 2D, 6 in 3D)."""
        if ndim < 1:
            raise ConfigurationError(f"Dimensionality must be positive, got {ndim}")
        return cls([o for o in _box_offsets(ndim, 1) if sum(c != 0 for c in o) == 1])

    @classmethod
    def box(cls, ndim: int, radius: int) -> "NeighborShape":
        """Every offset with Chebyshev distance at most radius from the centre."""
        if ndim < 1:
            raise ConfigurationError(f"Dimensionality must be positive, got {ndim}")
        if radius < 1:
            raise ConfigurationError(f"Neighborhood radius must be at least 1, got {radius}")
        return cls(_box_offsets(ndim, radius))

    @classmethod
    def from_structure(cls, structure: np.ndarray) -> "NeighborShape":
        """
        Build a shape from a structuring element.

        Args:
            structure: Array with an odd extent along every axis; nonzero
                entries other than the centre become offsets

        Returns:
            Shape whose offsets follow C order over the structuring element
        """
        structure = np.asarray(structure)
        if structure.ndim == 0 or any(s % 2 == 0 for s in structure.shape):
            raise ConfigurationError(
                f"Structuring element must have odd extent along every axis, got shape {structure.shape}")
        centre = np.array(structure.shape) // 2
        offsets = [tuple(int(c) for c in np.array(pos) - centre)
                   for pos in zip(*np.nonzero(structure))]
        return cls([o for o in offsets if any(o)])

    def offsets(self) -> Tuple[Offset, ...]:
        """The offsets, in exploration order."""
        return self._offsets

    @property
    def ndim(self) -> int:
        return len(self._offsets[0])

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[Offset]:
        return iter(self._offsets)

    def __eq__(self, other) -> bool:
        if not isinstance(other, NeighborShape):
            return NotImplemented
        return self._offsets == other._offsets

    def __hash__(self) -> int:
        return hash(self._offsets)

    def __repr__(self) -> str:
        return f"NeighborShape(ndim={self.ndim}, offsets={len(self._offsets)})"
