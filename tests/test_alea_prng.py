"""Tests for the Alea PRNG and seed helpers."""

import pytest
from py_hexmap.core.alea_prng import AleaPRNG
from py_hexmap.utils.random import SEED_RANGE, make_prng, random_seed


class TestAleaPRNG:
    """Test PRNG determinism and ranges."""

    def test_same_seed_same_sequence(self):
        a, b = AleaPRNG("seed"), AleaPRNG("seed")
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_numeric_and_string_seeds_match(self):
        assert AleaPRNG(42).random() == AleaPRNG("42").random()

    def test_different_seeds(self):
        assert AleaPRNG("a").random() != AleaPRNG("b").random()

    def test_random_range(self):
        prng = AleaPRNG("range")
        values = [prng.random() for _ in range(1000)]
        assert all(0.0 <= v < 1.0 for v in values)
        assert prng.call_count == 1000

    def test_uniform(self):
        prng = AleaPRNG("uniform")
        values = [prng.uniform(-5.0, 5.0) for _ in range(500)]
        assert all(-5.0 <= v < 5.0 for v in values)

    def test_randint(self):
        prng = AleaPRNG("int")
        values = {prng.randint(0, 3) for _ in range(200)}
        assert values == {0, 1, 2}
        with pytest.raises(ValueError):
            prng.randint(3, 3)

    def test_choice(self):
        prng = AleaPRNG("choice")
        assert prng.choice(["only"]) == "only"
        with pytest.raises(IndexError):
            prng.choice([])


class TestSeedHelpers:
    """Test seed helpers."""

    def test_make_prng_seeded(self):
        assert make_prng("x").random() == AleaPRNG("x").random()

    def test_make_prng_unseeded(self):
        assert make_prng().random() != make_prng().random()

    def test_random_seed_range(self):
        prng = AleaPRNG("seeds")
        for _ in range(100):
            seed = random_seed(prng)
            assert isinstance(seed, int)
            assert SEED_RANGE[0] <= seed < SEED_RANGE[1]
