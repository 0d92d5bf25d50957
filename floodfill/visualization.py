"""
Visualization utilities for flood fill results.

Only 2D fills can be drawn; coordinates follow (y, x) array order, so the
image is displayed the way matplotlib shows the underlying array.
"""

from typing import Iterable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from floodfill.region import Region


def fill_order_image(coords: Iterable[Sequence[int]], region: Region) -> np.ndarray:
    """
    Rank image of a fill.

    Args:
        coords: Coordinates in emission order (an iterator is drained)
        region: Region the coordinates lie in

    Returns:
        int64 array shaped like the region holding the emission rank of each
        coordinate, -1 where no coordinate was emitted
    """
    order = np.full(region.size, -1, dtype=np.int64)
    for rank, coord in enumerate(coords):
        if not region.is_inside(coord):
            raise ValueError(f"Coordinate {tuple(coord)} lies outside {region}")
        order[region.relative(coord)] = rank
    return order


def visualize_fill_order(order_image: np.ndarray, ax: Optional[plt.Axes] = None,
                         title: Optional[str] = None, cmap: str = 'viridis') -> plt.Axes:
    """
    Show the emission order of a 2D fill.

    Args:
        order_image: Output of fill_order_image
        ax: Optional axes to draw on
        title: Optional title for the plot
        cmap: Colormap for the ranks

    Returns:
        The matplotlib Axes used for plotting
    """
    if order_image.ndim != 2:
        raise ValueError(f"Expected a 2D order image, got shape {order_image.shape}")

    if ax is None:
        fig = plt.figure(figsize=(8, 8))
        ax = fig.add_subplot(111)

    masked = np.ma.masked_less(order_image, 0)
    image = ax.imshow(masked, cmap=cmap, interpolation='nearest')
    ax.figure.colorbar(image, ax=ax, label='emission order')
    ax.set_xlabel('X')
    ax.set_ylabel('Y')

    if title:
        ax.set_title(title)

    return ax
