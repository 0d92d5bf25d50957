"""
Flood fill region growing over N-dimensional grids.

This package contains a breadth-first flood fill traversal that grows a
region from seed coordinates through neighbors satisfying an inclusion
predicate, together with the grid, neighbor shape and predicate pieces it is
built from, and the segmentation helpers built on top of it.
"""

from .errors import FloodFillError, ConfigurationError, UsageError
from .region import Region
from .grid import ArrayGrid, open_volume
from .shapes import NeighborShape
from .visited import VisitedTracker, STATE_NONE, STATE_REJECTED, STATE_ACCEPTED
from .predicates import FunctionPredicate, ValuePredicate, ThresholdPredicate
from .predicates import SpatialFunctionPredicate, MaskPredicate, as_predicate
from .iterator import FloodFillIterator, TraversalState, BuildResult, find_seed, find_seeds
from .segment import connected_threshold, seeded_region_labels, fill_order
from .config import FloodFillConfig, load_config
