"""Tests for height shaping and falloff."""

import pytest
import numpy as np
from py_hexmap.core.height_shaper import HeightShaper
from py_hexmap.core.noise_field import ShapingParams


class TestShape:
    """Test the exponent / amplitude / offset curve."""

    def test_identity_curve(self):
        shaper = HeightShaper(ShapingParams(exponent=1.0, amplitude=1.0, y_offset=0.0))
        assert shaper.shape(0.3) == pytest.approx(0.3)
        assert isinstance(shaper.shape(0.3), float)

    def test_curve_order(self):
        """pow, then amplitude around 0.5, then offset."""
        shaper = HeightShaper(ShapingParams(exponent=2.0, amplitude=2.0, y_offset=0.1))
        # 0.5^2 = 0.25 -> (0.25 - 0.5) * 2 + 0.5 = 0.0 -> + 0.1
        assert shaper.shape(0.5) == pytest.approx(0.1)

    def test_zero_amplitude_is_flat(self):
        shaper = HeightShaper(ShapingParams(amplitude=0.0))
        values = shaper.shape(np.array([0.0, 0.4, 0.9]))
        np.testing.assert_allclose(values, 0.5)

    def test_quantization(self):
        shaper = HeightShaper(ShapingParams(step_height=True, step_resolution=4.0))
        assert shaper.shape(0.3) == pytest.approx(0.25)
        assert shaper.shape(0.4) == pytest.approx(0.5)

        values = shaper.shape(np.linspace(0, 1, 50))
        np.testing.assert_allclose(values * 4, np.round(values * 4))


class TestFalloff:
    """Test the radial falloff factor."""

    @pytest.fixture
    def shaper(self):
        return HeightShaper(ShapingParams(
            use_falloff=True, falloff_exponent=1.0, falloff_start_distance=0.5
        ))

    def test_inside_start_distance(self, shaper):
        assert shaper.falloff_factor(10.0, 10.0, 10.0, 10.0) == 1.0
        assert shaper.falloff_factor(14.0, 6.0, 10.0, 10.0) == 1.0

    def test_remapped_distance(self, shaper):
        # d = 0.75 -> remapped 0.5 -> factor 0.5
        assert shaper.falloff_factor(17.5, 10.0, 10.0, 10.0) == pytest.approx(0.5)

    def test_chebyshev_distance(self, shaper):
        """The larger axis distance decides."""
        assert shaper.falloff_factor(17.5, 12.0, 10.0, 10.0) == pytest.approx(0.5)
        assert shaper.falloff_factor(12.0, 17.5, 10.0, 10.0) == pytest.approx(0.5)

    def test_edge_and_beyond(self, shaper):
        assert shaper.falloff_factor(20.0, 10.0, 10.0, 10.0) == pytest.approx(0.0)
        beyond = shaper.falloff_factor(30.0, 10.0, 10.0, 10.0)
        assert beyond == 0.0
        assert not np.isnan(beyond)

    def test_single_row_axis(self, shaper):
        """A zero center on one axis ignores that axis."""
        assert shaper.falloff_factor(0.0, 17.5, 0.0, 10.0) == pytest.approx(0.5)

    def test_exponent(self):
        shaper = HeightShaper(ShapingParams(
            use_falloff=True, falloff_exponent=2.0, falloff_start_distance=0.5
        ))
        assert shaper.falloff_factor(17.5, 10.0, 10.0, 10.0) == pytest.approx(0.25)

    def test_shape_grid_applies_falloff_to_raw_noise(self):
        shaper = HeightShaper(ShapingParams(
            use_falloff=True, falloff_exponent=1.0, falloff_start_distance=0.0
        ))
        heights = shaper.shape_grid(np.ones((5, 5)))

        assert heights[2, 2] == pytest.approx(1.0)
        assert heights[0, 0] == pytest.approx(0.0)
        assert heights[4, 2] == pytest.approx(0.0)
        assert heights[1, 2] == pytest.approx(0.5)

    def test_shape_grid_without_falloff(self):
        shaper = HeightShaper(ShapingParams())
        raw = np.full((4, 3), 0.7)
        np.testing.assert_allclose(shaper.shape_grid(raw), 0.7)
