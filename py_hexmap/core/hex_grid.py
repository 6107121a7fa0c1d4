"""
Hex-grid coordinate math for odd-row offset layouts.

Odd rows are shifted right by half a cell; rows are spaced
``cell_size * HEX_VERTICAL_RATIO`` apart.
"""

import math
from typing import List, Optional, Tuple

HEX_VERTICAL_RATIO = math.sqrt(3) / 2

Cell = Tuple[int, int]
Position = Tuple[float, float, float]


def _is_odd(row: int) -> bool:
    # bitwise test so negative odd rows behave like positive ones
    return (row & 1) == 1


class GridSampler:
    """Converts between (col, row) cells and world-space positions."""

    def __init__(self, width: int, height: int, cell_size: float = 1.0):
        self.width = width
        self.height = height
        self.cell_size = cell_size

    @property
    def row_spacing(self) -> float:
        return self.cell_size * HEX_VERTICAL_RATIO

    @property
    def physical_size(self) -> Tuple[float, float]:
        """World-space extent (x, z) covered by tile centers plus half a cell."""
        odd_shift = self.cell_size * 0.5 if self.height > 1 else 0.0
        return (
            (self.width - 1) * self.cell_size + odd_shift,
            (self.height - 1) * self.row_spacing,
        )

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def cell_position(self, col: int, row: int) -> Position:
        """World position of any cell, including cells outside the map."""
        x = col * self.cell_size + (self.cell_size * 0.5 if _is_odd(row) else 0.0)
        z = row * self.row_spacing
        return (x, 0.0, z)

    def world_position(self, col: int, row: int) -> Optional[Position]:
        """World position of an on-map cell, or None when out of bounds."""
        if not self.in_bounds(col, row):
            return None
        return self.cell_position(col, row)

    def neighbor_offsets(self, row: int) -> List[Cell]:
        """
        Offsets of a cell followed by its six neighbors.

        The center comes first so it wins distance ties.
        """
        diagonal = 1 if _is_odd(row) else -1
        return [
            (0, 0),
            (-1, 0), (1, 0),
            (diagonal, 1), (0, 1),
            (diagonal, -1), (0, -1),
        ]

    def nearest_cell(self, world_x: float, world_z: float) -> Cell:
        """
        Find the cell whose center is closest to a world XZ point.

        Inverts the layout to get an estimate, then checks the estimate and
        its six neighbors. The result is not clamped to the map; callers
        use :meth:`in_bounds` to reject off-map points.
        """
        row = round(world_z / self.row_spacing)
        shift = self.cell_size * 0.5 if _is_odd(row) else 0.0
        col = round((world_x - shift) / self.cell_size)

        best = (col, row)
        best_dist = math.inf
        for dc, dr in self.neighbor_offsets(row):
            candidate = (col + dc, row + dr)
            x, _, z = self.cell_position(*candidate)
            dist = (world_x - x) ** 2 + (world_z - z) ** 2
            if dist < best_dist:
                best_dist = dist
                best = candidate
        return best
