"""
Water plane placement.

One main plane covers each chunk's footprint. Buffer strips run along
each of the four map sides and square patches fill the four corners, so
the water extends past the outermost tiles without seams.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import structlog

from .chunking import Chunk, Chunker
from .hex_grid import HEX_VERTICAL_RATIO

logger = structlog.get_logger()


class WaterPlaneKind(str, Enum):
    MAIN = "main"
    EDGE = "edge"
    CORNER = "corner"


@dataclass(frozen=True)
class WaterPlane:
    """Axis-aligned horizontal water rectangle."""

    center: Tuple[float, float]  # (x, z)
    width: float  # extent along x
    length: float  # extent along z
    y: float
    kind: WaterPlaneKind = WaterPlaneKind.MAIN

    @property
    def min_xz(self) -> Tuple[float, float]:
        return (self.center[0] - self.width / 2, self.center[1] - self.length / 2)

    @property
    def max_xz(self) -> Tuple[float, float]:
        return (self.center[0] + self.width / 2, self.center[1] + self.length / 2)


class WaterPlanner:
    """Computes water planes for a chunked grid."""

    def __init__(self, chunker: Chunker, cell_size: float, water_level: float,
                 water_buffer: float):
        self.chunker = chunker
        self.cell_size = cell_size
        self.water_level = water_level
        self.water_buffer = water_buffer

    @property
    def row_spacing(self) -> float:
        return self.cell_size * HEX_VERTICAL_RATIO

    def _footprint(self, cols: range, rows: range) -> Tuple[float, float, float, float]:
        """(min_x, min_z, max_x, max_z) of a block of cells, half a cell around the centers."""
        min_x = (cols.start - 0.5) * self.cell_size
        min_z = (rows.start - 0.5) * self.row_spacing
        return (
            min_x,
            min_z,
            min_x + len(cols) * self.cell_size,
            min_z + len(rows) * self.row_spacing,
        )

    def main_plane(self, chunk: Chunk) -> WaterPlane:
        min_x, min_z, max_x, max_z = self._footprint(chunk.cols, chunk.rows)
        return WaterPlane(
            center=((min_x + max_x) / 2, (min_z + max_z) / 2),
            width=max_x - min_x,
            length=max_z - min_z,
            y=self.water_level,
            kind=WaterPlaneKind.MAIN,
        )

    def buffer_planes(self) -> List[WaterPlane]:
        """Four edge strips followed by four corner squares."""
        b = self.water_buffer
        if b <= 0:
            return []
        min_x, min_z, max_x, max_z = self._footprint(
            range(self.chunker.width), range(self.chunker.height)
        )
        mid_x, mid_z = (min_x + max_x) / 2, (min_z + max_z) / 2
        span_x, span_z = max_x - min_x, max_z - min_z
        y = self.water_level

        edges = [
            WaterPlane((min_x - b / 2, mid_z), b, span_z, y, WaterPlaneKind.EDGE),  # west
            WaterPlane((max_x + b / 2, mid_z), b, span_z, y, WaterPlaneKind.EDGE),  # east
            WaterPlane((mid_x, min_z - b / 2), span_x, b, y, WaterPlaneKind.EDGE),  # south
            WaterPlane((mid_x, max_z + b / 2), span_x, b, y, WaterPlaneKind.EDGE),  # north
        ]
        corners = [
            WaterPlane((x, z), b, b, y, WaterPlaneKind.CORNER)
            for z in (min_z - b / 2, max_z + b / 2)
            for x in (min_x - b / 2, max_x + b / 2)
        ]
        return edges + corners

    def plan(self) -> List[WaterPlane]:
        """Main planes (one per chunk) followed by the boundary buffers."""
        planes = [self.main_plane(chunk) for chunk in self.chunker.chunks()]
        buffers = self.buffer_planes()
        logger.info(
            "Water planes planned",
            main=len(planes),
            buffers=len(buffers),
            water_level=self.water_level,
        )
        return planes + buffers
