"""
Region growing algorithms built on the flood fill iterator.

Connected threshold segmentation and seeded region labeling both reduce to
a flood fill with a threshold predicate; these helpers run the fill and
return numpy arrays shaped like the input image.
"""

import logging
from typing import Any, Dict, List, Optional

import numpy as np

from floodfill.errors import ConfigurationError
from floodfill.grid import ArrayGrid
from floodfill.iterator import FloodFillIterator
from floodfill.predicates import ThresholdPredicate
from floodfill.region import Index, Region
from floodfill.shapes import NeighborShape

logger = logging.getLogger(__name__)


def fill_order(iterator: FloodFillIterator) -> List[Index]:
    """Drain an iterator and return the coordinates in emission order."""
    return list(iterator)


def _as_grid(image: Any) -> ArrayGrid:
    return image if isinstance(image, ArrayGrid) else ArrayGrid(image)


def _region_slices(grid: ArrayGrid, region: Region):
    return tuple(slice(lo - glo, lo - glo + size)
                 for lo, glo, size in zip(region.index, grid.region.index, region.size))


def connected_threshold(
    image: Any,
    seeds: Any,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    shape: Optional[NeighborShape] = None,
    region: Optional[Region] = None
) -> np.ndarray:
    """
    Segment the pixels connected to the seeds whose value lies within [lower, upper].

    Seeds are always part of the segmentation, whatever their value.

    Args:
        image: numpy array, zarr array or ArrayGrid
        seeds: A seed coordinate or a sequence of seed coordinates
        lower: Inclusive lower threshold
        upper: Inclusive upper threshold
        shape: Neighbor shape (default: full connectivity)
        region: Sub-region to restrict the fill to (default: whole image)

    Returns:
        Boolean mask with the shape of the image
    """
    grid = _as_grid(image)
    predicate = ThresholdPredicate(grid, lower, upper)
    it = FloodFillIterator(grid, predicate, seeds=seeds, shape=shape, region=region)
    for _ in it:
        pass

    mask = np.zeros(grid.region.size, dtype=bool)
    mask[_region_slices(grid, it.region)] = it.included_mask()
    logger.info(f"Connected threshold [{lower}, {upper}] selected {it.emitted_count} pixels")
    return mask


def seeded_region_labels(
    image: Any,
    seed_groups: Dict[int, Any],
    lower: Optional[float] = None,
    upper: Optional[float] = None,
    shape: Optional[NeighborShape] = None,
    background: int = 0
) -> np.ndarray:
    """
    Label the regions grown from groups of seeds.

    Groups are filled in mapping order. A pixel reached by several groups
    keeps the label of the first group that reached it, and later fills do
    not grow through pixels already labeled.

    Args:
        image: numpy array, zarr array or ArrayGrid
        seed_groups: Mapping from label to seeds (one coordinate or a sequence)
        lower: Inclusive lower threshold
        upper: Inclusive upper threshold
        shape: Neighbor shape (default: full connectivity)
        background: Label of pixels that no group reached

    Returns:
        int32 label array with the shape of the image
    """
    grid = _as_grid(image)
    labels = np.full(grid.region.size, background, dtype=np.int32)
    threshold = ThresholdPredicate(grid, lower, upper)

    def unlabeled(coord):
        return labels[grid.region.relative(coord)] == background and threshold.is_included(coord)

    for label, seeds in seed_groups.items():
        if label == background:
            raise ConfigurationError(f"Label {label} collides with the background label")
        it = FloodFillIterator(grid, unlabeled, seeds=seeds, shape=shape)
        # labels is only written after the fill so the predicate stays stable during the pass
        coords = fill_order(it)
        count = 0
        for coord in coords:
            pos = grid.region.relative(coord)
            if labels[pos] == background:
                labels[pos] = label
                count += 1
        logger.info(f"Label {label}: grew {count} pixels from {len(it.seeds)} seeds")
    return labels
