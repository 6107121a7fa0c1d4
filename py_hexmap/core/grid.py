"""Tile and grid containers."""

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from .errors import GenerationOrderError
from .hex_grid import GridSampler, Position
from .resources import ResourceKind, empty_resources
from .terrain import Color


@dataclass(frozen=True)
class Tile:
    """A single populated hex tile. Immutable; passes replace whole tiles."""

    col: int
    row: int
    position: Position  # y is the shaped height
    terrain_type: int
    color: Color
    surface_height: float  # y plus the mesh top-surface offset
    resources: Mapping[ResourceKind, float] = field(default_factory=empty_resources)

    def __post_init__(self):
        # read-only view over a private copy
        object.__setattr__(self, "resources", MappingProxyType(dict(self.resources)))


class HexGrid:
    """
    ``width`` x ``height`` grid of tiles indexed by (col, row).

    Cells start absent (None) and are filled during population. Once
    frozen, the grid rejects further writes.
    """

    def __init__(self, sampler: GridSampler):
        self.sampler = sampler
        self.width = sampler.width
        self.height = sampler.height
        self._tiles: List[List[Optional[Tile]]] = [
            [None] * self.height for _ in range(self.width)
        ]
        self._filled = 0
        self._frozen = False

    def tile_at(self, col: int, row: int) -> Optional[Tile]:
        if not self.sampler.in_bounds(col, row):
            return None
        return self._tiles[col][row]

    def set_tile(self, tile: Tile) -> None:
        if self._frozen:
            raise GenerationOrderError("Grid is frozen; regenerate to produce a new one")
        if not self.sampler.in_bounds(tile.col, tile.row):
            raise IndexError(f"Tile ({tile.col}, {tile.row}) outside {self.width}x{self.height} grid")
        if self._tiles[tile.col][tile.row] is None:
            self._filled += 1
        self._tiles[tile.col][tile.row] = tile

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_populated(self) -> bool:
        """True once every cell holds a tile."""
        return self._filled == self.width * self.height

    def __len__(self) -> int:
        return self._filled

    def __iter__(self) -> Iterator[Tile]:
        """Populated tiles in column-major order."""
        for column in self._tiles:
            for tile in column:
                if tile is not None:
                    yield tile

    def surface_heights(self) -> np.ndarray:
        """``(width, height)`` array of surface heights (NaN where absent)."""
        heights = np.full((self.width, self.height), np.nan)
        for tile in self:
            heights[tile.col, tile.row] = tile.surface_height
        return heights

    def tiles_in_bounds(
        self, min_xz: Tuple[float, float], max_xz: Tuple[float, float]
    ) -> List[Tile]:
        """Tiles whose XZ position lies inside the axis-aligned box."""
        (min_x, min_z), (max_x, max_z) = min_xz, max_xz
        return [
            tile for tile in self
            if min_x <= tile.position[0] <= max_x and min_z <= tile.position[2] <= max_z
        ]

    def terrain_histogram(self) -> Dict[int, int]:
        return dict(sorted(Counter(tile.terrain_type for tile in self).items()))

    def resource_totals(self) -> Dict[ResourceKind, float]:
        totals = empty_resources()
        for tile in self:
            for kind, amount in tile.resources.items():
                totals[kind] += amount
        return totals
