"""
Configuration modules for map generation.
"""

from .settings import Settings, get_settings
from .terrain_presets import PRESETS, TERRAIN_NAMES, TerrainPreset, get_preset, list_presets

__all__ = ['Settings', 'get_settings', 'PRESETS', 'TERRAIN_NAMES', 'TerrainPreset',
           'get_preset', 'list_presets']
