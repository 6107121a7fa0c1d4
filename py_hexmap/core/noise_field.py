"""
Fractal noise sampling over integer grid coordinates.

Layers several octaves of OpenSimplex noise. Each octave multiplies the
frequency by ``lacunarity`` and the amplitude by ``gain``; the map seed
shifts the sample coordinates so the same permutation table produces a
different map per seed.
"""

from dataclasses import dataclass

import numpy as np
import structlog
from opensimplex import OpenSimplex

logger = structlog.get_logger()


@dataclass(frozen=True)
class ShapingParams:
    """Parameters controlling noise synthesis and height shaping."""

    scale: float = 8.0
    amplitude: float = 1.0
    exponent: float = 1.0
    y_offset: float = 0.0
    octave_count: int = 5
    lacunarity: float = 2.0
    gain: float = 0.2
    use_falloff: bool = False
    falloff_exponent: float = 2.0
    falloff_start_distance: float = 0.5
    step_height: bool = False
    step_resolution: float = 4.0
    # Divide the octave sum by the accumulated amplitude
    normalize_octaves: bool = False

    def __post_init__(self):
        if self.octave_count < 1:
            raise ValueError(f"octave_count must be >= 1, got {self.octave_count}")
        if not 0.0 <= self.falloff_start_distance < 1.0:
            raise ValueError(
                f"falloff_start_distance must be in [0, 1), got {self.falloff_start_distance}"
            )
        if self.step_height and self.step_resolution <= 0:
            raise ValueError(
                f"step_resolution must be > 0 when step_height is set, got {self.step_resolution}"
            )


class NoiseField:
    """
    Deterministic layered noise sampler.

    Identical ``(x, y, params, seed)`` always produce identical output.
    """

    def __init__(self, noise_seed: int = 0):
        """
        Initialize the noise field.

        Args:
            noise_seed: Seed of the OpenSimplex permutation table. The map
                seed is applied separately as a coordinate shift.
        """
        self.noise_seed = noise_seed
        self._simplex = OpenSimplex(seed=noise_seed)

    def noise2d(self, x: float, y: float) -> float:
        """Coherent 2D noise remapped from [-1, 1] to [0, 1]."""
        return (self._simplex.noise2(x, y) + 1.0) / 2.0

    def noise2d_array(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """
        Evaluate ``noise2d`` on the outer product of ``xs`` and ``ys``.

        Returns:
            Array of shape ``(len(xs), len(ys))`` indexed ``[ix, iy]``
        """
        # opensimplex returns [iy, ix]
        values = self._simplex.noise2array(np.asarray(xs, dtype=np.float64),
                                           np.asarray(ys, dtype=np.float64))
        return (values.T + 1.0) / 2.0

    def sample(self, x: int, y: int, params: ShapingParams, seed: int) -> float:
        """
        Sample fractal noise at a single grid coordinate.

        Args:
            x: Column index
            y: Row index
            params: Shaping parameters (scale, octaves, lacunarity, gain)
            seed: Map seed added to every sample coordinate

        Returns:
            Accumulated noise value before shaping
        """
        h = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        scale = params.scale / 100

        for _ in range(params.octave_count):
            x_coord = (x * scale * frequency) + seed
            y_coord = (y * scale * frequency) + seed
            h += self.noise2d(x_coord, y_coord) * amplitude
            max_value += amplitude
            amplitude *= params.gain
            frequency *= params.lacunarity

        if params.normalize_octaves:
            h /= max_value
        return h

    def sample_grid(
        self, width: int, height: int, params: ShapingParams, seed: int
    ) -> np.ndarray:
        """
        Sample fractal noise for every cell of a ``width`` x ``height`` grid.

        Vectorized equivalent of calling :meth:`sample` per cell.

        Returns:
            Float64 array of shape ``(width, height)`` indexed ``[col, row]``
        """
        cols = np.arange(width, dtype=np.float64)
        rows = np.arange(height, dtype=np.float64)
        heights = np.zeros((width, height), dtype=np.float64)

        amplitude = 1.0
        frequency = 1.0
        max_value = 0.0
        scale = params.scale / 100

        for _ in range(params.octave_count):
            xs = (cols * scale * frequency) + seed
            ys = (rows * scale * frequency) + seed
            heights += self.noise2d_array(xs, ys) * amplitude
            max_value += amplitude
            amplitude *= params.gain
            frequency *= params.lacunarity

        if params.normalize_octaves:
            heights /= max_value

        logger.debug(
            "Noise grid sampled",
            width=width,
            height=height,
            octaves=params.octave_count,
            seed=seed,
        )
        return heights
