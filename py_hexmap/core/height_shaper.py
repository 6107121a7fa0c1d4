"""
Height shaping: converts raw fractal noise into tile heights.

Order of operations per tile:
1. raw noise is multiplied by the radial falloff factor (if enabled)
2. exponent curve, amplitude around 0.5, vertical offset
3. optional quantization into terraces
"""

from typing import Union

import numpy as np

from .noise_field import ShapingParams

Number = Union[float, np.ndarray]


class HeightShaper:
    """Applies the shaping curve and falloff described by ShapingParams."""

    def __init__(self, params: ShapingParams):
        self.params = params

    def shape(self, raw_height: Number) -> Number:
        """
        Shape a raw (already falloff-scaled) noise value.

        Works on scalars and NumPy arrays alike.
        """
        p = self.params
        v = np.power(raw_height, p.exponent)
        v = (v - 0.5) * p.amplitude + 0.5
        v = v + p.y_offset
        if p.step_height:
            v = self.quantize(v)
        if isinstance(v, np.ndarray):
            return v
        return float(v)

    def quantize(self, height: Number) -> Number:
        """Snap a height onto multiples of ``1 / step_resolution``."""
        resolution = self.params.step_resolution
        return np.round(height * resolution) / resolution

    def falloff_factor(self, x: Number, z: Number, cx: float, cz: float) -> Number:
        """
        Radial falloff multiplier from the normalized Chebyshev distance to
        the grid center ``(cx, cz)``.

        An axis whose center is 0 (a single row or column) contributes no
        distance.
        """
        p = self.params
        dx = np.abs(np.asarray(x, dtype=np.float64) - cx) / cx if cx > 0 else np.zeros_like(x, dtype=np.float64)
        dz = np.abs(np.asarray(z, dtype=np.float64) - cz) / cz if cz > 0 else np.zeros_like(z, dtype=np.float64)
        d = np.maximum(dx, dz)

        remapped = (d - p.falloff_start_distance) / (1.0 - p.falloff_start_distance)
        # clip before pow so distances past the edge do not produce NaN
        base = np.clip(1.0 - remapped, 0.0, None)
        factor = np.clip(np.power(base, p.falloff_exponent), 0.0, 1.0)
        factor = np.where(d < p.falloff_start_distance, 1.0, factor)

        if np.ndim(factor) == 0:
            return float(factor)
        return factor

    def shape_grid(self, raw: np.ndarray) -> np.ndarray:
        """
        Apply falloff and shaping to a ``(width, height)`` noise grid.

        Falloff uses grid coordinates, centered at ``((w-1)/2, (h-1)/2)``.
        """
        raw = np.asarray(raw, dtype=np.float64)
        if self.params.use_falloff:
            width, height = raw.shape
            cols, rows = np.meshgrid(
                np.arange(width, dtype=np.float64),
                np.arange(height, dtype=np.float64),
                indexing="ij",
            )
            raw = raw * self.falloff_factor(cols, rows, (width - 1) / 2, (height - 1) / 2)
        return self.shape(raw)
