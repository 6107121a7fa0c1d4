"""
Random number generation utilities.

Every consumer receives an explicit AleaPRNG instance; there is no
module-level generator. Python's random and NumPy's random are not used
so that a seed fully determines a run.
"""

import uuid
from typing import Optional, Union

from ..core.alea_prng import AleaPRNG

SEED_RANGE = (-100000, 100000)

Seed = Union[int, str]


def make_prng(seed: Optional[Seed] = None) -> AleaPRNG:
    """
    Create an Alea PRNG.

    Args:
        seed: Seed to use. When None a fresh random seed is drawn, which
            makes the resulting sequence non-reproducible.

    Returns:
        AleaPRNG instance
    """
    if seed is None:
        seed = uuid.uuid4().hex
    return AleaPRNG(seed)


def random_seed(prng: Optional[AleaPRNG] = None) -> int:
    """Draw a map seed in SEED_RANGE from ``prng`` (or an unseeded generator)."""
    prng = prng or make_prng()
    return prng.randint(*SEED_RANGE)
