"""Tests for terrain classification and coloring."""

import pytest
import numpy as np
from py_hexmap.core.errors import EmptyThresholdSetError, InvalidThresholdsError
from py_hexmap.core.terrain import (
    ColorGradient, TerrainClassifier, TerrainThresholds, as_color, classify, normalize_heights
)

RED = (1.0, 0.0, 0.0, 1.0)
GREEN = (0.0, 1.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)


class TestTerrainThresholds:
    """Test threshold construction."""

    def test_rgb_colors_get_alpha(self):
        thresholds = TerrainThresholds([(0.5, (1, 0, 0))])
        assert thresholds.colors[0] == RED

    def test_must_be_strictly_increasing(self):
        with pytest.raises(InvalidThresholdsError):
            TerrainThresholds([(0.5, RED), (0.5, GREEN)])
        with pytest.raises(ValueError):
            TerrainThresholds([(0.6, RED), (0.2, GREEN)])

    def test_iteration(self):
        thresholds = TerrainThresholds([(0.2, RED), (0.8, BLUE)])
        assert len(thresholds) == 2
        assert list(thresholds) == [(0.2, RED), (0.8, BLUE)]

    def test_bad_color(self):
        with pytest.raises(ValueError):
            as_color((1.0, 0.0))


class TestTerrainClassifier:
    """Test band lookup."""

    @pytest.fixture
    def thresholds(self):
        return TerrainThresholds([(0.2, RED), (0.5, GREEN), (0.8, BLUE)])

    def test_band_indices(self, thresholds):
        classifier = TerrainClassifier(thresholds)
        assert classifier.terrain_type(0.1) == 0
        assert classifier.terrain_type(0.3) == 1
        assert classifier.terrain_type(0.6) == 2
        assert classifier.terrain_type(0.95) == 2
        assert classifier.terrain_type(-5.0) == 0

    def test_threshold_value_starts_next_band(self, thresholds):
        classifier = TerrainClassifier(thresholds)
        assert classifier.terrain_type(0.2) == 1
        assert classifier.terrain_type(0.5) == 2

    def test_classify_returns_band_color(self, thresholds):
        assert classify(0.1, thresholds) == (0, RED)
        assert classify(0.3, thresholds) == (1, GREEN)
        assert classify(10.0, thresholds) == (2, BLUE)

    def test_monotonic(self, thresholds):
        """Terrain type never decreases as height increases."""
        classifier = TerrainClassifier(thresholds)
        heights = np.linspace(-1, 2, 301)
        types = [classifier.terrain_type(h) for h in heights]
        assert all(b >= a for a, b in zip(types, types[1:]))
        np.testing.assert_array_equal(classifier.classify_array(heights), types)

    def test_empty_thresholds(self):
        classifier = TerrainClassifier(TerrainThresholds([]))
        with pytest.raises(EmptyThresholdSetError):
            classifier.classify(0.5)
        with pytest.raises(EmptyThresholdSetError):
            classifier.classify_array(np.zeros(3))

    def test_single_threshold(self):
        classifier = TerrainClassifier(TerrainThresholds([(0.5, RED)]))
        assert classifier.terrain_type(0.1) == 0
        assert classifier.terrain_type(0.9) == 0


class TestColorGradient:
    """Test gradient evaluation."""

    def test_blend(self):
        gradient = ColorGradient([(0.0, (0, 0, 0)), (1.0, (1, 1, 1))])
        assert gradient.evaluate(0.5) == pytest.approx((0.5, 0.5, 0.5, 1.0))
        assert gradient.evaluate(0.0) == pytest.approx((0.0, 0.0, 0.0, 1.0))

    def test_clamped(self):
        gradient = ColorGradient([(0.2, RED), (0.8, BLUE)])
        assert gradient.evaluate(-1.0) == pytest.approx(RED)
        assert gradient.evaluate(0.1) == pytest.approx(RED)
        assert gradient.evaluate(2.0) == pytest.approx(BLUE)

    def test_keys_sorted(self):
        gradient = ColorGradient([(1.0, BLUE), (0.0, RED)])
        assert gradient.evaluate(0.0) == pytest.approx(RED)

    def test_fixed_mode(self):
        gradient = ColorGradient([(0.5, RED), (1.0, BLUE)], mode="fixed")
        assert gradient.evaluate(0.3) == pytest.approx(RED)
        assert gradient.evaluate(0.5) == pytest.approx(RED)
        assert gradient.evaluate(0.6) == pytest.approx(BLUE)

    def test_needs_keys(self):
        with pytest.raises(ValueError):
            ColorGradient([])


class TestNormalization:
    """Test global height normalization."""

    def test_range(self):
        surface = np.array([[1.0, 2.0], [3.0, 5.0]])
        t = normalize_heights(surface, 1.0, 5.0)
        assert t.min() == 0.0
        assert t.max() == 1.0
        assert t[1, 0] == pytest.approx(0.5)

    def test_flat_map(self):
        surface = np.full((3, 3), 0.7)
        t = normalize_heights(surface, 0.7, 0.7)
        np.testing.assert_array_equal(t, np.zeros((3, 3)))

    def test_clamped(self):
        t = normalize_heights(np.array([0.0, 10.0]), 1.0, 5.0)
        np.testing.assert_array_equal(t, [0.0, 1.0])
