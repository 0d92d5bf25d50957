"""
Flood fill traversal engine.

This module implements a breadth-first region growing traversal over an
N-dimensional grid. The traversal starts from one or more seed coordinates
and repeatedly visits neighbors, given by a neighbor shape, that lie inside
the traversal region and satisfy an inclusion predicate. Every coordinate is
considered at most once.

The traversal is exposed as a read-only, forward-only cursor:

    it = FloodFillIterator(grid, predicate, seeds=(0, 0))
    it.advance()
    while not it.is_at_end():
        print(it.current(), it.current_pixel_value())
        it.advance()

It also supports the Python iterator protocol, so ``list(it)`` drains the
remaining coordinates.

Coordinate Convention:
- Coordinates are tuples of ints in array axis order, e.g. (z, y, x)
- Automatic seed discovery scans the region in C order (last axis fastest)
"""

import logging
import numbers
import os
from collections import deque
from enum import Enum
from typing import Any, Deque, List, NamedTuple, Optional, Sequence

import numpy as np

from floodfill.errors import ConfigurationError, UsageError
from floodfill.predicates import as_predicate
from floodfill.region import Index, Region, as_index
from floodfill.shapes import NeighborShape
from floodfill.visited import VisitedTracker

# Per-step tracing is very chatty, so it is only emitted when requested
FLOODFILL_DEBUG_ENABLED = os.environ.get('FLOODFILL_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')

logger = logging.getLogger(__name__)


def enable_debug_tracing(enabled: bool = True) -> None:
    """Turn per-step traversal tracing on or off, overriding FLOODFILL_DEBUG."""
    global FLOODFILL_DEBUG_ENABLED
    FLOODFILL_DEBUG_ENABLED = enabled


class TraversalState(Enum):
    """Lifecycle of a traversal."""
    UNSEEDED = "unseeded"
    SEEDED = "seeded"
    ADVANCING = "advancing"
    EXHAUSTED = "exhausted"


class BuildResult(NamedTuple):
    """Outcome of FloodFillIterator.create: an iterator or a configuration error."""
    iterator: Optional["FloodFillIterator"]
    error: Optional[ConfigurationError]

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> "FloodFillIterator":
        """Return the iterator, raising the configuration error if construction failed."""
        if self.error is not None:
            raise self.error
        return self.iterator


def _is_single_coordinate(seeds: Sequence[Any]) -> bool:
    return len(seeds) > 0 and all(isinstance(c, (numbers.Integral, np.integer)) for c in seeds)


def normalize_seeds(seeds: Any, region: Region) -> List[Index]:
    """
    Validate seeds against a region.

    Args:
        seeds: A single coordinate or a sequence of coordinates
        region: Region every seed must lie in

    Returns:
        List of seed coordinates as tuples, in the supplied order

    Raises:
        ConfigurationError: If no seed is given, or a seed has the wrong
            dimensionality or lies outside the region
    """
    if isinstance(seeds, np.ndarray):
        seeds = seeds.tolist()
    try:
        seeds = list(seeds)
    except TypeError as e:
        raise ConfigurationError(f"Seeds must be a coordinate or a sequence of coordinates, got {seeds!r}") from e
    if _is_single_coordinate(seeds):
        seeds = [seeds]
    if not seeds:
        raise ConfigurationError("At least one seed coordinate is required")

    normalized = []
    for seed in seeds:
        try:
            seed = as_index(seed)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid seed coordinate {seed!r}") from e
        if len(seed) != region.ndim:
            raise ConfigurationError(f"Seed {seed} does not match {region.ndim}D region")
        if not region.is_inside(seed):
            raise ConfigurationError(f"Seed {seed} lies outside region {region}")
        normalized.append(seed)
    return normalized


def find_seed(grid, predicate, region: Optional[Region] = None) -> Optional[Index]:
    """
    Find the first coordinate of a region that satisfies a predicate.

    The region is scanned in C order (last axis fastest).

    Args:
        grid: Grid the predicate reads from; supplies the default region
        predicate: Inclusion predicate or callable of the coordinate
        region: Region to scan (default: the grid region)

    Returns:
        The first included coordinate, or None if there is none
    """
    predicate = as_predicate(predicate)
    region = grid.region if region is None else region
    for coord in region:
        if predicate.is_included(coord):
            return coord
    return None


def find_seeds(grid, predicate, region: Optional[Region] = None) -> List[Index]:
    """All coordinates of a region satisfying a predicate, in C scan order."""
    predicate = as_predicate(predicate)
    region = grid.region if region is None else region
    return [coord for coord in region if predicate.is_included(coord)]


class FloodFillIterator:
    """
    Read-only flood fill iterator over a grid.

    The iterator owns its frontier and visited buffer; it must not be
    advanced from more than one thread. The grid is only ever read.

    The neighbor shape and the inclusion predicate are supplied as
    strategies. Without an explicit shape the traversal uses full
    (chessboard) connectivity, or face connectivity when
    ``fully_connected=False``.
    """

    def __init__(
        self,
        grid,
        predicate,
        seeds: Any = None,
        shape: Optional[NeighborShape] = None,
        region: Optional[Region] = None,
        fully_connected: bool = True
    ):
        """
        Initialize and seed the traversal.

        Args:
            grid: Grid collaborator exposing ``region`` and ``pixel_at``
            predicate: Object with ``is_included(coord)`` or a callable of
                the coordinate
            seeds: A seed coordinate, a sequence of seed coordinates, or None
                to discover the first included coordinate of the region
            shape: Neighbor shape; offsets may also be given as a sequence
            region: Sub-region the traversal stays in (default: grid region)
            fully_connected: Connectivity used when no shape is given

        Raises:
            ConfigurationError: If the region is not inside the grid, the
                shape is invalid or does not match the region, or a seed is
                outside the region
        """
        if region is None:
            region = grid.region
        elif not grid.region.is_inside_region(region):
            raise ConfigurationError(f"Traversal region {region} is not inside grid region {grid.region}")

        if shape is None:
            shape = NeighborShape.full(region.ndim) if fully_connected else NeighborShape.face(region.ndim)
        elif not isinstance(shape, NeighborShape):
            shape = NeighborShape(shape)
        if shape.ndim != region.ndim:
            raise ConfigurationError(
                f"Neighbor shape is {shape.ndim}D but the traversal region is {region.ndim}D")

        self._grid = grid
        self._predicate = as_predicate(predicate)
        self._region = region
        self._shape = shape
        self._offsets = shape.offsets()

        # None means seeds are discovered from the predicate on every (re)seed
        self._explicit_seeds = None if seeds is None else normalize_seeds(seeds, region)
        self._active_seeds: List[Index] = []

        self._visited = VisitedTracker(region)
        self._frontier: Deque[Index] = deque()
        self._current: Optional[Index] = None
        self._state = TraversalState.UNSEEDED
        self.emitted_count = 0

        self._seed()

    @classmethod
    def create(cls, grid, predicate, seeds: Any = None, shape: Optional[NeighborShape] = None,
               region: Optional[Region] = None, fully_connected: bool = True) -> BuildResult:
        """
        Build an iterator without raising on configuration errors.

        Returns:
            BuildResult holding either the iterator or the ConfigurationError
        """
        try:
            return BuildResult(cls(grid, predicate, seeds, shape, region, fully_connected), None)
        except ConfigurationError as e:
            logger.debug(f"Flood fill configuration rejected: {e}")
            return BuildResult(None, e)

    def _seed(self):
        if self._explicit_seeds is None:
            seed = find_seed(self._grid, self._predicate, self._region)
            self._active_seeds = [] if seed is None else [seed]
            logger.debug(f"Discovered seed {seed} in {self._region}")
        else:
            self._active_seeds = list(self._explicit_seeds)

        for seed in self._active_seeds:
            if self._visited.is_visited(seed):
                continue
            self._visited.mark_visited(seed, accepted=True)
            self._frontier.append(seed)

        if self._frontier:
            self._state = TraversalState.SEEDED
        else:
            self._state = TraversalState.EXHAUSTED
            logger.debug("No seed found, traversal starts exhausted")

    def advance(self) -> "FloodFillIterator":
        """
        Move to the next accepted coordinate.

        Pops the head of the frontier, makes it the current coordinate and
        enqueues its unvisited in-region neighbors that satisfy the
        predicate. Every examined neighbor is marked visited, whether or not
        it is accepted. Once the frontier is empty the traversal is
        exhausted and further calls do nothing.
        """
        if self._state is TraversalState.EXHAUSTED:
            return self

        if not self._frontier:
            self._state = TraversalState.EXHAUSTED
            self._current = None
            logger.debug(f"Flood fill exhausted after {self.emitted_count} coordinates")
            return self

        current = self._frontier.popleft()
        self._current = current
        self._state = TraversalState.ADVANCING

        region = self._region
        visited = self._visited
        accepted = 0
        for offset in self._offsets:
            candidate = tuple(c + o for c, o in zip(current, offset))
            if not region.is_inside(candidate) or visited.is_visited(candidate):
                continue
            visited.mark_visited(candidate, accepted=False)
            if self._predicate.is_included(candidate):
                visited.mark_visited(candidate, accepted=True)
                self._frontier.append(candidate)
                accepted += 1

        self.emitted_count += 1
        if FLOODFILL_DEBUG_ENABLED:
            logger.debug(f"Step {self.emitted_count}: at {current}, accepted {accepted} neighbors, "
                         f"frontier size {len(self._frontier)}")
        return self

    def is_at_end(self) -> bool:
        return self._state is TraversalState.EXHAUSTED

    def current(self) -> Index:
        """
        The most recently accepted coordinate.

        Raises:
            UsageError: If the traversal is at its end, or advance() has not
                been called since construction or reset
        """
        if self._state is TraversalState.EXHAUSTED:
            raise UsageError("Flood fill iterator is at end, there is no current coordinate")
        if self._current is None:
            raise UsageError("Flood fill iterator has not been advanced yet, call advance() first")
        return self._current

    def current_pixel_value(self):
        """Pixel value at the current coordinate."""
        return self._grid.pixel_at(self.current())

    def reset(self, seeds: Any = None) -> "FloodFillIterator":
        """
        Restart the traversal.

        Clears the visited buffer, the frontier and the current coordinate,
        then seeds again. The first coordinate is available after the next
        advance().

        Args:
            seeds: New seeds, or None to reuse the previous seeds (or rerun
                seed discovery if the iterator was built without seeds)

        Raises:
            ConfigurationError: If the new seeds are invalid; the iterator
                is left untouched in that case
        """
        if seeds is not None:
            self._explicit_seeds = normalize_seeds(seeds, self._region)

        self._frontier.clear()
        self._visited.clear()
        self._current = None
        self.emitted_count = 0
        self._state = TraversalState.UNSEEDED
        self._seed()
        return self

    def included_mask(self) -> np.ndarray:
        """
        Boolean array over the traversal region of coordinates accepted so far.

        This includes coordinates still waiting in the frontier. After the
        traversal is exhausted it is exactly the set of emitted coordinates.
        """
        return self._visited.accepted_mask()

    @property
    def state(self) -> TraversalState:
        return self._state

    @property
    def seeds(self) -> tuple:
        """Seeds used by the current pass."""
        return tuple(self._active_seeds)

    @property
    def shape(self) -> NeighborShape:
        return self._shape

    @property
    def region(self) -> Region:
        return self._region

    @property
    def grid(self):
        return self._grid

    @property
    def predicate(self):
        return self._predicate

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    def __iter__(self) -> "FloodFillIterator":
        return self

    def __next__(self) -> Index:
        self.advance()
        if self.is_at_end():
            raise StopIteration
        return self._current

    def __repr__(self) -> str:
        return (f"FloodFillIterator(region={self._region}, shape={self._shape}, "
                f"state={self._state.value}, emitted={self.emitted_count})")
