"""
Read-only grid access for flood fill traversal.

This module wraps numpy or zarr arrays so the traversal engine can ask whether
a coordinate is inside the grid and read the pixel stored there. The engine
never writes through this interface.

Coordinate Convention:
- Coordinates follow array axis order, e.g. (z, y, x) for volumes
- The grid index is the lattice coordinate of array[0, ..., 0]
- Physical points are origin + spacing * coord, also in array axis order
"""

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import numpy as np
import zarr

from floodfill.errors import ConfigurationError
from floodfill.region import Region

logger = logging.getLogger(__name__)


class ArrayGrid:
    """
    A read-only N-dimensional grid backed by an array.

    Any object exposing ``shape`` and supporting tuple indexing works as the
    backing array, which covers numpy arrays and zarr arrays. Zarr arrays are
    read lazily, one pixel at a time, so they are never loaded fully into
    memory.
    """

    def __init__(
        self,
        array: Any,
        index: Optional[Sequence[int]] = None,
        spacing: Optional[Sequence[float]] = None,
        origin: Optional[Sequence[float]] = None
    ):
        """
        Initialize the grid.

        Args:
            array: Backing array (numpy, zarr or anything array-like)
            index: Lattice coordinate of the first array element (default: zeros)
            spacing: Physical size of a pixel along each axis (default: ones)
            origin: Physical position of the first array element (default: zeros)
        """
        if not hasattr(array, "shape"):
            array = np.asarray(array)
        self.array = array
        self._region = Region.from_shape(array.shape, index)

        ndim = self._region.ndim
        self.spacing = np.ones(ndim) if spacing is None else np.asarray(spacing, dtype=np.float64)
        self.origin = np.zeros(ndim) if origin is None else np.asarray(origin, dtype=np.float64)
        if self.spacing.shape != (ndim,) or self.origin.shape != (ndim,):
            raise ConfigurationError(
                f"Spacing {tuple(self.spacing)} and origin {tuple(self.origin)} must have {ndim} entries")

    @property
    def region(self) -> Region:
        """Largest possible region of the grid."""
        return self._region

    @property
    def ndim(self) -> int:
        return self._region.ndim

    @property
    def dtype(self):
        return getattr(self.array, "dtype", None)

    def is_inside(self, coord: Sequence[int]) -> bool:
        return self._region.is_inside(coord)

    def pixel_at(self, coord: Sequence[int]):
        """
        Read the pixel at a lattice coordinate.

        The coordinate must be inside the grid region; callers check with
        is_inside first.
        """
        value = self.array[self._region.relative(coord)]
        # zarr returns 0-d arrays for scalar reads
        if isinstance(value, np.ndarray) and value.ndim == 0:
            value = value[()]
        return value

    def physical_point(self, coord: Sequence[int]) -> np.ndarray:
        """Physical position of a lattice coordinate."""
        return self.origin + self.spacing * np.asarray(coord, dtype=np.float64)

    def __repr__(self) -> str:
        return f"ArrayGrid(region={self._region}, dtype={self.dtype})"


def open_volume(path: Union[str, Path]) -> Any:
    """
    Open a volume stored on disk.

    ``.npy`` files are loaded with numpy. Anything else is opened read-only as
    zarr, trying resolution level ``0`` of an OME-zarr first and falling back
    to the root array.

    Args:
        path: Path to the volume

    Returns:
        A numpy array or zarr array
    """
    path = Path(path)
    logger.info(f"Opening volume at {path}")

    if path.suffix == ".npy":
        volume = np.load(path)
        logger.info(f"Loaded numpy array with shape: {volume.shape}")
        return volume

    level_path = path / "0"
    if level_path.exists():
        volume = zarr.open(str(level_path), mode='r')
        logger.info(f"Opened zarr dataset from level 0 with shape: {volume.shape}")
    else:
        volume = zarr.open(str(path), mode='r')
        logger.info(f"Opened zarr dataset from root with shape: {volume.shape}")

    if not hasattr(volume, "shape"):
        raise ConfigurationError(f"No array found in {path}")
    return volume

