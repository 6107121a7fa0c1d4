"""
Chunk partitioning and per-chunk mesh batching.

The grid is cut into ``chunk_size`` x ``chunk_size`` blocks (the last
column/row of chunks may be smaller). Each chunk merges the template
geometry of all its tiles into a single batch so a renderer issues one
draw call per chunk instead of one per tile.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np
import structlog

from .errors import GenerationOrderError
from .grid import HexGrid
from .mesh import TileMeshTemplate

logger = structlog.get_logger()


@dataclass(frozen=True)
class Chunk:
    """Rectangular block of cells; a view onto the grid."""

    chunk_col: int
    chunk_row: int
    cols: range
    rows: range

    @property
    def tiles_x(self) -> int:
        return len(self.cols)

    @property
    def tiles_z(self) -> int:
        return len(self.rows)

    @property
    def tile_count(self) -> int:
        return self.tiles_x * self.tiles_z

    def cells(self) -> Iterator[Tuple[int, int]]:
        for col in self.cols:
            for row in self.rows:
                yield (col, row)


@dataclass(frozen=True)
class ChunkMesh:
    """Merged geometry for one chunk; all per-vertex arrays are parallel."""

    chunk: Chunk
    vertices: np.ndarray  # (N, 3)
    normals: np.ndarray  # (N, 3)
    uvs: np.ndarray  # (N, 2)
    colors: np.ndarray  # (N, 4)
    triangles: np.ndarray  # (M, 3), indices local to this chunk

    def __post_init__(self):
        for array in (self.vertices, self.normals, self.uvs, self.colors, self.triangles):
            array.flags.writeable = False

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


class Chunker:
    """Splits a ``width`` x ``height`` grid into chunks."""

    def __init__(self, width: int, height: int, chunk_size: int):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        self.width = width
        self.height = height
        self.chunk_size = chunk_size

    @property
    def chunks_x(self) -> int:
        return -(-self.width // self.chunk_size)

    @property
    def chunks_z(self) -> int:
        return -(-self.height // self.chunk_size)

    def chunk(self, chunk_col: int, chunk_row: int) -> Optional[Chunk]:
        if not (0 <= chunk_col < self.chunks_x and 0 <= chunk_row < self.chunks_z):
            return None
        size = self.chunk_size
        return Chunk(
            chunk_col=chunk_col,
            chunk_row=chunk_row,
            cols=range(chunk_col * size, min(self.width, (chunk_col + 1) * size)),
            rows=range(chunk_row * size, min(self.height, (chunk_row + 1) * size)),
        )

    def chunks(self) -> List[Chunk]:
        """All chunks, row of chunks by row of chunks."""
        return [
            self.chunk(cx, cz)
            for cz in range(self.chunks_z)
            for cx in range(self.chunks_x)
        ]

    def build_mesh(self, chunk: Chunk, grid: HexGrid, template: TileMeshTemplate) -> ChunkMesh:
        """
        Merge the template geometry of every tile in ``chunk``.

        Vertices are translated by the tile position, colored with the tile
        color, and triangle indices are offset by the running chunk-local
        vertex count.
        """
        tiles = [grid.tile_at(col, row) for col, row in chunk.cells()]
        if any(tile is None for tile in tiles):
            raise GenerationOrderError(
                f"Chunk ({chunk.chunk_col}, {chunk.chunk_row}) has unpopulated cells"
            )

        n = len(tiles)
        vc = template.vertex_count
        positions = np.array([tile.position for tile in tiles], dtype=np.float32)
        colors = np.array([tile.color for tile in tiles], dtype=np.float32)

        vertices = (template.vertices[np.newaxis, :, :] + positions[:, np.newaxis, :]).reshape(-1, 3)
        normals = np.tile(template.normals, (n, 1))
        uvs = np.tile(template.uvs, (n, 1))
        vertex_colors = np.repeat(colors, vc, axis=0)
        offsets = (np.arange(n, dtype=np.int32) * vc)[:, np.newaxis, np.newaxis]
        triangles = (template.triangles[np.newaxis, :, :] + offsets).reshape(-1, 3)

        return ChunkMesh(
            chunk=chunk,
            vertices=vertices,
            normals=normals,
            uvs=uvs,
            colors=vertex_colors,
            triangles=triangles,
        )

    def build_meshes(self, grid: HexGrid, template: TileMeshTemplate) -> List[ChunkMesh]:
        """Batch every chunk of a fully populated grid."""
        if not grid.is_populated():
            raise GenerationOrderError("Chunk meshes require a fully populated grid")
        meshes = [self.build_mesh(chunk, grid, template) for chunk in self.chunks()]
        logger.info(
            "Chunk meshes built",
            chunks=len(meshes),
            chunks_x=self.chunks_x,
            chunks_z=self.chunks_z,
            vertices=sum(m.vertex_count for m in meshes),
        )
        return meshes
