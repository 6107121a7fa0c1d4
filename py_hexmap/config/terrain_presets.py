"""
Named terrain presets.

Each preset bundles shaping parameters, terrain thresholds, the height
color gradient and resource rules.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple

from ..core.noise_field import ShapingParams
from ..core.resources import ResourceKind, ResourceRule
from ..core.terrain import ColorGradient, TerrainThresholds


@dataclass(frozen=True)
class TerrainPreset:
    """Bundle of generation inputs that do not depend on map size."""

    name: str
    description: str
    shaping: ShapingParams
    thresholds: TerrainThresholds
    gradient: ColorGradient
    resource_rules: Tuple[ResourceRule, ...] = field(default_factory=tuple)


# Terrain types, indexed by band
TERRAIN_NAMES = ["Deep Water", "Shallows", "Beach", "Grassland", "Forest", "Mountain", "Snow"]

_THRESHOLDS = [
    (0.35, (0.05, 0.15, 0.45)),   # deep water
    (0.45, (0.15, 0.35, 0.70)),   # shallows
    (0.50, (0.85, 0.80, 0.55)),   # beach
    (0.70, (0.35, 0.65, 0.25)),   # grassland
    (0.85, (0.15, 0.45, 0.15)),   # forest
    (1.00, (0.50, 0.48, 0.45)),   # mountain
    (1.20, (0.95, 0.95, 0.97)),   # snow
]

_GRADIENT = [
    (0.00, (0.03, 0.10, 0.35)),
    (0.30, (0.15, 0.35, 0.70)),
    (0.38, (0.85, 0.80, 0.55)),
    (0.45, (0.40, 0.70, 0.28)),
    (0.65, (0.15, 0.45, 0.15)),
    (0.85, (0.50, 0.48, 0.45)),
    (1.00, (0.97, 0.97, 1.00)),
]

_RESOURCES = (
    ResourceRule(
        kind=ResourceKind.OIL,
        noise_scale=80.0,
        max_amount=100.0,
        terrain_types=(2, 4),
        require_above_water=True,
        display_color=(0.1, 0.1, 0.1, 1.0),
    ),
    ResourceRule(
        kind=ResourceKind.METAL,
        noise_scale=120.0,
        max_amount=50.0,
        terrain_types=(4, 6),
        require_above_water=True,
        display_color=(0.7, 0.7, 0.75, 1.0),
    ),
)

_BASE_SHAPING = ShapingParams(
    scale=8.0,
    amplitude=1.4,
    exponent=1.2,
    octave_count=5,
    lacunarity=2.0,
    gain=0.35,
)


def _build_presets() -> Dict[str, TerrainPreset]:
    thresholds = TerrainThresholds(_THRESHOLDS)
    gradient = ColorGradient(_GRADIENT)
    presets = [
        TerrainPreset(
            name="default",
            description="Rolling continents with mountains",
            shaping=_BASE_SHAPING,
            thresholds=thresholds,
            gradient=gradient,
            resource_rules=_RESOURCES,
        ),
        TerrainPreset(
            name="islands",
            description="Single island fading into water at the map edge",
            shaping=replace(
                _BASE_SHAPING,
                use_falloff=True,
                falloff_exponent=2.0,
                falloff_start_distance=0.4,
            ),
            thresholds=thresholds,
            gradient=gradient,
            resource_rules=_RESOURCES,
        ),
        TerrainPreset(
            name="terraced",
            description="Heights snapped to terraces",
            shaping=replace(_BASE_SHAPING, step_height=True, step_resolution=8.0),
            thresholds=thresholds,
            gradient=ColorGradient(_GRADIENT, mode="fixed"),
            resource_rules=_RESOURCES,
        ),
        TerrainPreset(
            name="flat",
            description="Uniform plain, no relief",
            shaping=replace(_BASE_SHAPING, amplitude=0.0, exponent=1.0, y_offset=0.1),
            thresholds=thresholds,
            gradient=gradient,
        ),
    ]
    return {preset.name: preset for preset in presets}


PRESETS = _build_presets()


def get_preset(name: str) -> TerrainPreset:
    """Look up a preset by name."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}; available: {list_presets()}") from None


def list_presets() -> List[str]:
    return sorted(PRESETS)
