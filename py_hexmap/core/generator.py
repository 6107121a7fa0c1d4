"""
Hex map generation pipeline.

Runs population, resource placement, chunk batching and water planning
as one ordered batch and publishes the result as an immutable snapshot.
Collaborators (renderers, input handlers) only ever see complete runs.
"""

import time
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import structlog

from ..utils import random as seeding
from .alea_prng import AleaPRNG
from .chunking import Chunk, Chunker, ChunkMesh
from .errors import EmptyThresholdSetError, InvalidDimensionsError
from .grid import HexGrid, Tile
from .height_shaper import HeightShaper
from .hex_grid import Cell, GridSampler, Position
from .mesh import TileMeshTemplate, cell_size_from_template
from .noise_field import NoiseField, ShapingParams
from .resources import ResourceGenerator, ResourceKind, ResourceOptions, ResourceRule
from .terrain import ColorGradient, TerrainClassifier, TerrainThresholds, normalize_heights
from .water import WaterPlane, WaterPlanner

logger = structlog.get_logger()


def _default_thresholds() -> TerrainThresholds:
    from ..config.terrain_presets import get_preset

    return get_preset("default").thresholds


def _default_gradient() -> ColorGradient:
    from ..config.terrain_presets import get_preset

    return get_preset("default").gradient


@dataclass(frozen=True)
class MapConfig:
    """Inputs of one generation run."""

    width: int = 32
    height: int = 32
    # None derives the cell size from the tile template's x extent
    cell_size: Optional[float] = 1.0
    seed: int = 0
    shaping: ShapingParams = field(default_factory=ShapingParams)
    thresholds: TerrainThresholds = field(default_factory=_default_thresholds)
    gradient: ColorGradient = field(default_factory=_default_gradient)
    resource_rules: Sequence[ResourceRule] = ()
    water_level: float = 0.45
    water_buffer: float = 10.0
    chunk_size: int = 16
    jitter_seed: Optional[Union[int, str]] = None
    noise_seed: int = 0
    max_width: Optional[int] = None
    max_height: Optional[int] = None

    @classmethod
    def from_settings(cls, settings, preset: Optional[str] = None, **overrides) -> "MapConfig":
        """
        Build a config from process settings and a named preset.

        Args:
            settings: ``py_hexmap.config.Settings`` instance
            preset: Preset name, defaults to ``settings.default_preset``
            **overrides: Field values taking precedence over both
        """
        from ..config.terrain_presets import get_preset

        bundle = get_preset(preset or settings.default_preset)
        values = dict(
            width=settings.default_map_width,
            height=settings.default_map_height,
            cell_size=settings.cell_size,
            shaping=bundle.shaping,
            thresholds=bundle.thresholds,
            gradient=bundle.gradient,
            resource_rules=bundle.resource_rules,
            water_level=settings.water_level,
            water_buffer=settings.water_buffer,
            chunk_size=settings.chunk_size,
            max_width=settings.max_map_width,
            max_height=settings.max_map_height,
        )
        values.update(overrides)
        return cls(**values)

    def validate(self) -> None:
        """Raise before any state changes if the config cannot be generated."""
        if not isinstance(self.width, (int, np.integer)) or not isinstance(self.height, (int, np.integer)):
            raise InvalidDimensionsError(self.width, self.height, "dimensions must be integers")
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionsError(self.width, self.height)
        if self.max_width is not None and self.width > self.max_width:
            raise InvalidDimensionsError(
                self.width, self.height, f"width exceeds maximum {self.max_width}"
            )
        if self.max_height is not None and self.height > self.max_height:
            raise InvalidDimensionsError(
                self.width, self.height, f"height exceeds maximum {self.max_height}"
            )
        if self.cell_size is not None and self.cell_size <= 0:
            raise ValueError(f"cell_size must be > 0, got {self.cell_size}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {self.chunk_size}")
        if len(self.thresholds) == 0:
            raise EmptyThresholdSetError()


@dataclass(frozen=True)
class MapSnapshot:
    """Result of one complete generation run."""

    version: int
    config: MapConfig
    grid: HexGrid
    chunks: Tuple[Chunk, ...]
    meshes: Tuple[ChunkMesh, ...]
    water_planes: Tuple[WaterPlane, ...]
    height_range: Tuple[float, float]  # global (min, max) surface height
    resource_totals: Mapping[ResourceKind, float]
    elapsed_seconds: float = 0.0

    def summary(self) -> dict:
        return {
            "version": self.version,
            "seed": self.config.seed,
            "size": (self.grid.width, self.grid.height),
            "tiles": len(self.grid),
            "chunks": len(self.chunks),
            "water_planes": len(self.water_planes),
            "height_range": self.height_range,
            "terrain_types": self.grid.terrain_histogram(),
            "resources": {kind.value: total for kind, total in self.resource_totals.items()},
            "elapsed_seconds": self.elapsed_seconds,
        }


class HexMapGenerator:
    """
    Procedural hex terrain generator.

    ``regenerate()`` rebuilds everything from the current configuration and
    swaps the new snapshot in once it is complete.
    """

    def __init__(
        self,
        config: MapConfig,
        template: Optional[TileMeshTemplate] = None,
        noise: Optional[NoiseField] = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Generation inputs
            template: Tile geometry; a hex prism matching the cell size when omitted
            noise: Noise field; built from ``config.noise_seed`` when omitted
        """
        self.config = config
        self._own_template = template is None
        self.template = template or TileMeshTemplate.hex_prism(config.cell_size or 1.0)
        self.noise = noise or NoiseField(config.noise_seed)
        self._snapshot: Optional[MapSnapshot] = None
        self._version = 0

    # -- configuration -------------------------------------------------

    @property
    def cell_size(self) -> float:
        if self.config.cell_size is None:
            return cell_size_from_template(self.template)
        return self.config.cell_size

    @property
    def sampler(self) -> GridSampler:
        return GridSampler(self.config.width, self.config.height, self.cell_size)

    def configure(self, **changes) -> MapConfig:
        """Replace config fields; takes effect on the next regenerate."""
        config = replace(self.config, **changes)
        config.validate()
        if config.noise_seed != self.config.noise_seed:
            self.noise = NoiseField(config.noise_seed)
        if self._own_template and config.cell_size and config.cell_size != self.config.cell_size:
            self.template = TileMeshTemplate.hex_prism(config.cell_size)
        self.config = config
        return config

    # -- pipeline stages -----------------------------------------------

    def populate(self) -> Tuple[HexGrid, Tuple[float, float]]:
        """
        Build a fresh, fully populated grid.

        First pass: noise, shaping and surface heights for every cell, plus
        the global surface min/max. Second pass: normalized color parameter
        and terrain type per tile.

        Returns:
            (grid, (global_min, global_max))
        """
        config = self.config
        config.validate()
        sampler = self.sampler
        shaper = HeightShaper(config.shaping)
        classifier = TerrainClassifier(config.thresholds)

        logger.info(
            "Populating grid",
            width=config.width,
            height=config.height,
            seed=config.seed,
        )

        raw = self.noise.sample_grid(config.width, config.height, config.shaping, config.seed)
        heights = shaper.shape_grid(raw)
        surface = heights + self.template.top_surface_offset
        global_min, global_max = float(surface.min()), float(surface.max())

        t = normalize_heights(surface, global_min, global_max)
        terrain_types = classifier.classify_array(heights)

        grid = HexGrid(sampler)
        for col in range(config.width):
            for row in range(config.height):
                x, _, z = sampler.cell_position(col, row)
                grid.set_tile(
                    Tile(
                        col=col,
                        row=row,
                        position=(x, float(heights[col, row]), z),
                        terrain_type=int(terrain_types[col, row]),
                        color=config.gradient.evaluate(t[col, row]),
                        surface_height=float(surface[col, row]),
                    )
                )

        logger.info(
            "Grid populated",
            tiles=len(grid),
            min_surface=round(global_min, 4),
            max_surface=round(global_max, 4),
        )
        return grid, (global_min, global_max)

    def generate_resources(self, grid: HexGrid,
                           prng: Optional[AleaPRNG] = None) -> Dict[ResourceKind, float]:
        """Place resources on a populated grid, replacing its tiles."""
        options = ResourceOptions(
            water_level=self.config.water_level,
            rules=self.config.resource_rules,
        )
        prng = prng or seeding.make_prng(self.config.jitter_seed)
        return ResourceGenerator(self.noise, options).generate(grid, prng)

    def chunker(self) -> Chunker:
        return Chunker(self.config.width, self.config.height, self.config.chunk_size)

    def build_chunks(self, grid: HexGrid) -> List[ChunkMesh]:
        return self.chunker().build_meshes(grid, self.template)

    def plan_water(self) -> List[WaterPlane]:
        planner = WaterPlanner(
            self.chunker(), self.cell_size, self.config.water_level, self.config.water_buffer
        )
        return planner.plan()

    def regenerate(self) -> MapSnapshot:
        """
        Run the full pipeline with the current configuration.

        On failure the previous snapshot stays in place.
        """
        started = time.perf_counter()
        grid, height_range = self.populate()
        totals = self.generate_resources(grid)
        grid.freeze()
        meshes = self.build_chunks(grid)
        water = self.plan_water()

        self._version += 1
        snapshot = MapSnapshot(
            version=self._version,
            config=self.config,
            grid=grid,
            chunks=tuple(mesh.chunk for mesh in meshes),
            meshes=tuple(meshes),
            water_planes=tuple(water),
            height_range=height_range,
            resource_totals=MappingProxyType(totals),
            elapsed_seconds=time.perf_counter() - started,
        )
        self._snapshot = snapshot
        logger.info(
            "Map regenerated",
            version=snapshot.version,
            seed=self.config.seed,
            elapsed_seconds=round(snapshot.elapsed_seconds, 4),
        )
        return snapshot

    def reseed(self, seed: Optional[int] = None, prng: Optional[AleaPRNG] = None) -> MapSnapshot:
        """Switch to ``seed`` (or a random one) and regenerate."""
        if seed is None:
            seed = seeding.random_seed(prng)
        self.configure(seed=seed)
        return self.regenerate()

    # -- queries ------------------------------------------------------

    @property
    def snapshot(self) -> Optional[MapSnapshot]:
        return self._snapshot

    @property
    def physical_size(self) -> Tuple[float, float]:
        return self.sampler.physical_size

    def tile_at(self, col: int, row: int) -> Optional[Tile]:
        if self._snapshot is None:
            return None
        return self._snapshot.grid.tile_at(col, row)

    def world_position(self, col: int, row: int, use_tile_height: bool = False,
                       top_surface: bool = False) -> Optional[Position]:
        """
        World position of a cell, or None when out of bounds.

        Args:
            use_tile_height: Use the populated tile height as y
            top_surface: Add the template top-surface offset to y
        """
        position = self.sampler.world_position(col, row)
        if position is None:
            return None
        x, y, z = position
        if use_tile_height:
            tile = self.tile_at(col, row)
            if tile is not None:
                y = tile.position[1]
        if top_surface:
            y += self.template.top_surface_offset
        return (x, y, z)

    def nearest_cell(self, world_x: float, world_z: float) -> Cell:
        return self.sampler.nearest_cell(world_x, world_z)

    def tile_under_point(self, world_x: float, world_z: float) -> Optional[Tile]:
        return self.tile_at(*self.nearest_cell(world_x, world_z))

    @property
    def chunks(self) -> Tuple[Chunk, ...]:
        return self._snapshot.chunks if self._snapshot else ()

    @property
    def meshes(self) -> Tuple[ChunkMesh, ...]:
        return self._snapshot.meshes if self._snapshot else ()

    @property
    def water_planes(self) -> Tuple[WaterPlane, ...]:
        return self._snapshot.water_planes if self._snapshot else ()
