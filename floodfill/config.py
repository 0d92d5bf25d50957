"""
JSON parameters for flood fill runs.

Parameter files are plain JSON objects. Missing keys fall back to defaults:

    {
        "lower": 100,
        "upper": 255,
        "connectivity": "full",
        "radius": null,
        "seeds": [[10, 20, 30]],
        "region_index": null,
        "region_size": null,
        "debug": false
    }
"""

import json
import numbers
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from floodfill.errors import ConfigurationError
from floodfill.region import Index, Region, as_index
from floodfill.shapes import NeighborShape

CONNECTIVITIES = ("full", "face")


def _index_param(name: str, value: Any) -> Index:
    try:
        return as_index(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Parameter '{name}' must hold integer coordinates, got {value!r}") from e


class FloodFillConfig:
    """Parameters of a threshold flood fill run."""

    def __init__(
        self,
        lower: Optional[float] = None,
        upper: Optional[float] = None,
        connectivity: str = "full",
        radius: Optional[int] = None,
        seeds: Optional[List[Index]] = None,
        region_index: Optional[Index] = None,
        region_size: Optional[Index] = None,
        debug: bool = False
    ):
        if lower is None and upper is None:
            raise ConfigurationError("Parameters must define 'lower' or 'upper'")
        for name, bound in (("lower", lower), ("upper", upper)):
            if bound is not None and (isinstance(bound, bool) or not isinstance(bound, numbers.Real)):
                raise ConfigurationError(f"Parameter '{name}' must be a number, got {bound!r}")
        if connectivity not in CONNECTIVITIES:
            raise ConfigurationError(
                f"Unknown connectivity '{connectivity}', expected one of {CONNECTIVITIES}")
        if radius is not None and (isinstance(radius, bool) or not isinstance(radius, numbers.Integral)):
            raise ConfigurationError(f"Neighborhood radius must be an integer, got {radius!r}")
        if radius is not None and radius < 1:
            raise ConfigurationError(f"Neighborhood radius must be at least 1, got {radius}")
        if (region_index is None) != (region_size is None):
            raise ConfigurationError("'region_index' and 'region_size' must be given together")

        self.lower = lower
        self.upper = upper
        self.connectivity = connectivity
        self.radius = radius
        self.seeds = seeds
        self.region_index = region_index
        self.region_size = region_size
        self.debug = debug

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "FloodFillConfig":
        """Build a configuration from a parameter dictionary, applying defaults."""
        if not isinstance(params, dict):
            raise ConfigurationError(f"Parameters must be a JSON object, got {type(params).__name__}")

        seeds = params.get("seeds")
        if seeds is not None:
            if not isinstance(seeds, (list, tuple)):
                raise ConfigurationError(f"Parameter 'seeds' must be a list of coordinates, got {seeds!r}")
            seeds = [_index_param("seeds", seed) for seed in seeds]
        region_index = params.get("region_index")
        region_size = params.get("region_size")

        return cls(
            lower=params.get("lower"),
            upper=params.get("upper"),
            connectivity=params.get("connectivity", "full"),
            radius=params.get("radius"),
            seeds=seeds,
            region_index=None if region_index is None else _index_param("region_index", region_index),
            region_size=None if region_size is None else _index_param("region_size", region_size),
            debug=bool(params.get("debug", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lower": self.lower,
            "upper": self.upper,
            "connectivity": self.connectivity,
            "radius": self.radius,
            "seeds": None if self.seeds is None else [list(s) for s in self.seeds],
            "region_index": None if self.region_index is None else list(self.region_index),
            "region_size": None if self.region_size is None else list(self.region_size),
            "debug": self.debug,
        }

    def build_shape(self, ndim: int) -> NeighborShape:
        """
        Neighbor shape described by the parameters.

        A radius selects a box neighborhood and overrides the connectivity
        for radii above 1.
        """
        if self.radius is not None and self.radius > 1:
            return NeighborShape.box(ndim, self.radius)
        if self.connectivity == "face":
            return NeighborShape.face(ndim)
        return NeighborShape.full(ndim)

    def build_region(self) -> Optional[Region]:
        """Traversal region described by the parameters, or None for the whole grid."""
        if self.region_index is None:
            return None
        return Region(self.region_index, self.region_size)


def load_config(path: Union[str, Path]) -> FloodFillConfig:
    """Read a JSON parameter file."""
    with open(path, 'r') as f:
        try:
            params = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in parameter file {path}: {e}") from e
    return FloodFillConfig.from_dict(params)
