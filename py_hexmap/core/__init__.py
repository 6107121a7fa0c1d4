"""
Core map generation functionality.
"""

from .errors import (
    HexMapError, InvalidDimensionsError, EmptyThresholdSetError,
    InvalidThresholdsError, GenerationOrderError,
)
from .noise_field import NoiseField, ShapingParams
from .height_shaper import HeightShaper
from .hex_grid import GridSampler, HEX_VERTICAL_RATIO
from .terrain import TerrainThresholds, ColorGradient, GradientMode, TerrainClassifier, classify
from .resources import ResourceKind, ResourceRule, ResourceOptions, ResourceGenerator
from .grid import Tile, HexGrid
from .mesh import TileMeshTemplate
from .chunking import Chunk, ChunkMesh, Chunker
from .water import WaterPlane, WaterPlaneKind, WaterPlanner
from .generator import MapConfig, MapSnapshot, HexMapGenerator

__all__ = ['HexMapError', 'InvalidDimensionsError', 'EmptyThresholdSetError',
           'InvalidThresholdsError', 'GenerationOrderError',
           'NoiseField', 'ShapingParams', 'HeightShaper', 'GridSampler', 'HEX_VERTICAL_RATIO',
           'TerrainThresholds', 'ColorGradient', 'GradientMode', 'TerrainClassifier', 'classify',
           'ResourceKind', 'ResourceRule', 'ResourceOptions', 'ResourceGenerator',
           'Tile', 'HexGrid', 'TileMeshTemplate', 'Chunk', 'ChunkMesh', 'Chunker',
           'WaterPlane', 'WaterPlaneKind', 'WaterPlanner',
           'MapConfig', 'MapSnapshot', 'HexMapGenerator']
