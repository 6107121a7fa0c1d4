"""
Per-tile resource placement.

Each ResourceRule samples its own noise pattern; a random jitter offset
per tile and per rule decorrelates neighboring samples. Elevation rules
zero out tiles above or below the water line.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Sequence, Tuple

import structlog

from .alea_prng import AleaPRNG
from .errors import GenerationOrderError
from .noise_field import NoiseField

if TYPE_CHECKING:
    from .grid import HexGrid

logger = structlog.get_logger()

# Jitter offsets are drawn from [-JITTER_RANGE, JITTER_RANGE)
JITTER_RANGE = 10000.0
NOISE_SCALE_FACTOR = 0.001


class ResourceKind(str, Enum):
    """Resource kinds a tile can hold."""

    OIL = "oil"
    METAL = "metal"


def empty_resources() -> Dict[ResourceKind, float]:
    """One zeroed slot per resource kind."""
    return {kind: 0.0 for kind in ResourceKind}


@dataclass(frozen=True)
class ResourceRule:
    """Placement rule for a single resource kind."""

    kind: ResourceKind
    noise_scale: float = 50.0
    max_amount: float = 100.0
    terrain_types: Tuple[int, int] = (0, 255)  # inclusive
    require_above_water: bool = False
    require_below_water: bool = False
    display_color: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)

    def __post_init__(self):
        if self.max_amount < 0:
            raise ValueError(f"max_amount must be >= 0, got {self.max_amount}")
        low, high = self.terrain_types
        if low > high:
            raise ValueError(f"Invalid terrain type range {self.terrain_types}")
        if self.require_above_water and self.require_below_water:
            raise ValueError(
                f"{self.kind.value}: require_above_water and require_below_water are exclusive"
            )


@dataclass
class ResourceOptions:
    """Resource pass options."""

    water_level: float = 0.45
    jitter_range: float = JITTER_RANGE
    rules: Sequence[ResourceRule] = field(default_factory=tuple)


class ResourceGenerator:
    """Assigns resource amounts to every tile of a populated grid."""

    def __init__(self, noise: NoiseField, options: Optional[ResourceOptions] = None):
        self.noise = noise
        self.options = options or ResourceOptions()

    def _jitter(self, prng: AleaPRNG) -> float:
        r = self.options.jitter_range
        return prng.uniform(-r, r)

    def amount(self, rule: ResourceRule, col: int, row: int, surface_height: float,
               terrain_type: int, prng: AleaPRNG) -> float:
        """Amount of ``rule.kind`` for one tile."""
        water_level = self.options.water_level
        if rule.require_above_water and surface_height < water_level:
            return 0.0
        if rule.require_below_water and surface_height >= water_level:
            return 0.0
        low, high = rule.terrain_types
        if not low <= terrain_type <= high:
            return 0.0

        jitter_x = self._jitter(prng)
        jitter_z = self._jitter(prng)
        value = self.noise.noise2d(
            (col + jitter_x) * rule.noise_scale * NOISE_SCALE_FACTOR,
            (row + jitter_z) * rule.noise_scale * NOISE_SCALE_FACTOR,
        )
        value = min(max(value, 0.0), 1.0)
        return value * rule.max_amount

    def generate(self, grid: "HexGrid", prng: AleaPRNG) -> Dict[ResourceKind, float]:
        """
        Replace every tile of ``grid`` with a copy holding its resource amounts.

        Args:
            grid: Fully populated grid
            prng: Source of per-tile jitter

        Returns:
            Total amount placed per resource kind
        """
        if not grid.is_populated():
            raise GenerationOrderError("Resources require a fully populated grid")

        totals = empty_resources()
        rules = list(self.options.rules)
        if not rules:
            logger.info("No resource rules configured")
            return totals

        logger.info("Generating resources", rules=[r.kind.value for r in rules])
        for tile in list(grid):
            amounts = dict(tile.resources)
            for rule in rules:
                value = self.amount(
                    rule, tile.col, tile.row, tile.surface_height, tile.terrain_type, prng
                )
                amounts[rule.kind] = value
                totals[rule.kind] += value
            grid.set_tile(replace(tile, resources=amounts))

        logger.info(
            "Resources generated",
            totals={kind.value: round(total, 3) for kind, total in totals.items()},
        )
        return totals
