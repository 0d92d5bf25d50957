#!/usr/bin/env python3
"""
Grow a connected threshold region from seed points through a volume.

The volume is a .npy file or a (OME-)zarr array. Thresholds, connectivity and
an optional traversal region are read from a JSON parameter file; seeds come
from the command line or from the "seeds" entry of the parameter file. When
no seed is given the first voxel within the thresholds, in C scan order,
becomes the seed.

The resulting mask is written with numpy.save, next to a <output>.meta.json
file describing the run.

Usage:
    grow_region_from_seed.py <volume> <output.npy> <json-params> [--seed Z Y X ...]
"""

import argparse
import datetime
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from floodfill.config import load_config
from floodfill.errors import ConfigurationError
from floodfill.grid import ArrayGrid, open_volume
from floodfill.iterator import FloodFillIterator, enable_debug_tracing
from floodfill.predicates import ThresholdPredicate

logger = logging.getLogger(__name__)


def time_str() -> str:
    """Timestamp string used to tag outputs."""
    now = datetime.datetime.now()
    return now.strftime("%Y%m%d%H%M%S%f")[:-3]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Grow a thresholded region from seed points')
    parser.add_argument('volume', help='Path to a .npy file or zarr volume')
    parser.add_argument('output', help='Path of the .npy mask to write')
    parser.add_argument('params', help='JSON parameter file')
    parser.add_argument('--seed', nargs='+', type=int, action='append', default=None,
                        help='Seed coordinate in array axis order, may be repeated')
    return parser.parse_args(argv)


def grow(volume, config, seeds=None) -> FloodFillIterator:
    """
    Run a threshold flood fill to exhaustion.

    Args:
        volume: numpy or zarr array
        config: FloodFillConfig with thresholds, connectivity and region
        seeds: Seeds overriding the ones in config (None to use config's)

    Returns:
        The exhausted iterator
    """
    grid = ArrayGrid(volume)
    predicate = ThresholdPredicate(grid, config.lower, config.upper)
    if seeds is None:
        seeds = config.seeds

    it = FloodFillIterator(
        grid,
        predicate,
        seeds=seeds,
        shape=config.build_shape(grid.ndim),
        region=config.build_region(),
    )
    logger.info(f"Growing from seeds {list(it.seeds)} with {len(it.shape)} neighbor offsets in {it.region}")

    for _ in it:
        if it.emitted_count % 100000 == 0:
            logger.info(f"Grew {it.emitted_count} voxels, frontier size {it.frontier_size}")
    return it


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = load_config(args.params)
    except ConfigurationError as e:
        logger.error(f"Invalid parameters: {e}")
        return 1

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        enable_debug_tracing()

    try:
        volume = open_volume(args.volume)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot open volume {args.volume}: {e}")
        return 1

    seeds = [tuple(seed) for seed in args.seed] if args.seed else None

    try:
        it = grow(volume, config, seeds)
    except ConfigurationError as e:
        logger.error(f"Cannot start flood fill: {e}")
        return 1

    mask = np.zeros(volume.shape, dtype=bool)
    slices = tuple(slice(lo, lo + size) for lo, size in zip(it.region.index, it.region.size))
    mask[slices] = it.included_mask()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    np.save(output, mask)

    meta = {
        "volume": str(args.volume),
        "created": time_str(),
        "seeds": [list(seed) for seed in it.seeds],
        "voxel_count": int(it.emitted_count),
        "params": config.to_dict(),
    }
    with open(output.with_suffix(".meta.json"), 'w') as f:
        json.dump(meta, f, indent=2)

    logger.info(f"Wrote mask with {it.emitted_count} voxels to {output}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    sys.exit(main())
