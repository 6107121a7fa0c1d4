"""
Tile mesh template supplied by the rendering side.

The generator never creates GPU resources; it only copies these arrays
into chunk batches.
"""

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class TileMeshTemplate:
    """
    Geometry of a single tile.

    Attributes:
        vertices: (N, 3) vertex positions relative to the tile origin
        normals: (N, 3) per-vertex normals
        uvs: (N, 2) texture coordinates
        triangles: (M, 3) vertex indices
        top_surface_offset: height of the top face above the tile origin
    """

    vertices: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    triangles: np.ndarray
    top_surface_offset: float = 0.0

    def __post_init__(self):
        vertices = np.asarray(self.vertices, dtype=np.float32).reshape(-1, 3)
        normals = np.asarray(self.normals, dtype=np.float32).reshape(-1, 3)
        uvs = np.asarray(self.uvs, dtype=np.float32).reshape(-1, 2)
        triangles = np.asarray(self.triangles, dtype=np.int32).reshape(-1, 3)

        if not len(vertices) == len(normals) == len(uvs):
            raise ValueError(
                f"Vertex arrays must be parallel: {len(vertices)} vertices, "
                f"{len(normals)} normals, {len(uvs)} uvs"
            )
        if triangles.size and (triangles.min() < 0 or triangles.max() >= len(vertices)):
            raise ValueError("Triangle index out of range")

        # frozen dataclass: write the coerced arrays back
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "normals", normals)
        object.__setattr__(self, "uvs", uvs)
        object.__setattr__(self, "triangles", triangles)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def bounds_size(self) -> np.ndarray:
        """Axis-aligned bounding box size (x, y, z)."""
        if not len(self.vertices):
            return np.zeros(3, dtype=np.float32)
        return self.vertices.max(axis=0) - self.vertices.min(axis=0)

    @classmethod
    def hex_prism(cls, cell_size: float = 1.0, height: float = 1.0,
                  top: float = 0.0) -> "TileMeshTemplate":
        """
        Pointy-top hexagonal prism whose flat-to-flat width is ``cell_size``.

        The top face sits at y=``top`` and the base ``height`` below it. With
        the default ``top=0`` surface heights equal shaped heights, so they
        compare directly with terrain thresholds and the water level.
        """
        bottom = top - height
        radius = cell_size / math.sqrt(3)
        angles = [math.radians(60 * i - 30) for i in range(6)]
        corners = [(radius * math.cos(a), radius * math.sin(a)) for a in angles]

        vertices, normals, uvs, triangles = [], [], [], []

        # top cap: center + 6 corners
        vertices.append((0.0, top, 0.0))
        uvs.append((0.5, 0.5))
        for x, z in corners:
            vertices.append((x, top, z))
            uvs.append((0.5 + x / (2 * radius), 0.5 + z / (2 * radius)))
        normals.extend([(0.0, 1.0, 0.0)] * 7)
        for i in range(6):
            triangles.append((0, 1 + (i + 1) % 6, 1 + i))

        # sides: one quad per edge
        for i in range(6):
            (ax, az), (bx, bz) = corners[i], corners[(i + 1) % 6]
            mid = angles[i] + math.radians(30)
            normal = (math.cos(mid), 0.0, math.sin(mid))
            base = len(vertices)
            vertices.extend([(ax, top, az), (bx, top, bz), (bx, bottom, bz), (ax, bottom, az)])
            normals.extend([normal] * 4)
            uvs.extend([(0.0, 1.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)])
            triangles.append((base, base + 1, base + 2))
            triangles.append((base, base + 2, base + 3))

        return cls(
            vertices=np.array(vertices),
            normals=np.array(normals),
            uvs=np.array(uvs),
            triangles=np.array(triangles),
            top_surface_offset=top,
        )


def cell_size_from_template(template: TileMeshTemplate) -> float:
    """Horizontal cell spacing implied by a template's x extent."""
    return float(template.bounds_size[0])
