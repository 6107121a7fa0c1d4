"""
Terrain classification and height coloring.

This module implements:
- Threshold bands mapping shaped height to a terrain-type index
- A color gradient evaluated on globally normalized surface height
- Normalization of surface heights across the whole grid
"""

from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
import structlog

from .errors import EmptyThresholdSetError, InvalidThresholdsError

logger = structlog.get_logger()

Color = Tuple[float, float, float, float]

# Denominators at or below this are treated as a flat map
HEIGHT_RANGE_EPSILON = 1e-6


def as_color(value: Sequence[float]) -> Color:
    """Coerce an RGB or RGBA sequence to an RGBA tuple."""
    values = tuple(float(c) for c in value)
    if len(values) == 3:
        return values + (1.0,)
    if len(values) != 4:
        raise ValueError(f"Color needs 3 or 4 components, got {len(values)}")
    return values


class TerrainThresholds:
    """Ordered (height threshold, color) pairs defining terrain bands."""

    def __init__(self, pairs: Iterable[Tuple[float, Sequence[float]]]):
        pairs = [(float(h), as_color(c)) for h, c in pairs]
        heights = [h for h, _ in pairs]
        for previous, current in zip(heights, heights[1:]):
            if current <= previous:
                raise InvalidThresholdsError(
                    f"Terrain thresholds must be strictly increasing: {heights}"
                )
        self.heights = np.array(heights, dtype=np.float64)
        self.colors: List[Color] = [c for _, c in pairs]

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self):
        return iter(zip(self.heights.tolist(), self.colors))

    def __repr__(self) -> str:
        return f"TerrainThresholds({list(self)!r})"


class GradientMode(str, Enum):
    """How a gradient fills the space between keys."""

    BLEND = "blend"
    FIXED = "fixed"


class ColorGradient:
    """
    Piecewise color gradient over [0, 1].

    In BLEND mode colors are linearly interpolated between keys; in FIXED
    mode a value takes the color of the first key at or after it.
    """

    def __init__(
        self,
        keys: Iterable[Tuple[float, Sequence[float]]],
        mode: Union[GradientMode, str] = GradientMode.BLEND,
    ):
        keys = sorted(((float(t), as_color(c)) for t, c in keys), key=lambda k: k[0])
        if not keys:
            raise ValueError("ColorGradient needs at least one key")
        self.times = np.array([t for t, _ in keys], dtype=np.float64)
        self.colors = np.array([c for _, c in keys], dtype=np.float64)
        self.mode = GradientMode(mode)

    def evaluate(self, t: float) -> Color:
        """Color at ``t`` (clamped to [0, 1])."""
        t = min(max(float(t), 0.0), 1.0)
        if self.mode is GradientMode.FIXED:
            idx = int(np.searchsorted(self.times, t, side="left"))
            idx = min(idx, len(self.times) - 1)
            return tuple(self.colors[idx].tolist())

        color = [
            float(np.interp(t, self.times, self.colors[:, channel]))
            for channel in range(4)
        ]
        return tuple(color)


class TerrainClassifier:
    """Maps shaped heights to terrain-type indices and band colors."""

    def __init__(self, thresholds: TerrainThresholds):
        self.thresholds = thresholds

    def _check(self) -> None:
        if len(self.thresholds) == 0:
            raise EmptyThresholdSetError()

    def terrain_type(self, shaped_height: float) -> int:
        """
        Band index of a height.

        Below the first threshold is band 0, between threshold[i-1] and
        threshold[i] is band i, and everything past the last threshold
        stays in the last band.
        """
        self._check()
        idx = int(np.searchsorted(self.thresholds.heights, shaped_height, side="right"))
        return min(idx, len(self.thresholds) - 1)

    def classify(self, shaped_height: float) -> Tuple[int, Color]:
        """Return ``(terrain_type, band_color)`` for a height."""
        idx = self.terrain_type(shaped_height)
        return idx, self.thresholds.colors[idx]

    def classify_array(self, shaped_heights: np.ndarray) -> np.ndarray:
        """Vectorized :meth:`terrain_type`."""
        self._check()
        idx = np.searchsorted(self.thresholds.heights, shaped_heights, side="right")
        return np.minimum(idx, len(self.thresholds) - 1).astype(np.int32)


def classify(shaped_height: float, thresholds: TerrainThresholds) -> Tuple[int, Color]:
    """Shortcut for ``TerrainClassifier(thresholds).classify(shaped_height)``."""
    return TerrainClassifier(thresholds).classify(shaped_height)


def normalize_heights(
    surface_heights: np.ndarray, global_min: float, global_max: float
) -> np.ndarray:
    """
    Normalize surface heights into [0, 1] using the grid-wide range.

    A flat map (range within HEIGHT_RANGE_EPSILON) uses a denominator of 1,
    so every tile maps to 0.
    """
    span = global_max - global_min
    if span <= HEIGHT_RANGE_EPSILON:
        logger.info("Flat height range, skipping normalization", span=span)
        span = 1.0
    t = (np.asarray(surface_heights, dtype=np.float64) - global_min) / span
    return np.clip(t, 0.0, 1.0)
