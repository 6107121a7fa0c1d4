"""
Python implementation of the Alea PRNG.

Based on Johannes Baagøe's Alea algorithm. Instances are cheap and fully
determined by their seed, so every stage that needs randomness receives
its own generator instead of sharing process-wide state.

Alea hashes any seed, string or number, through its Mash function, so a
config can name a resource layout with a plain word (``jitter_seed="v2"``).
The output stream depends only on the algorithm, which keeps a seeded
layout stable across Python releases and platforms.
"""


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Alea PRNG seeded from a string, a number or a sequence of either.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.call_count = 0
        self.seed = seed

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D  # 4022871197

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self):
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform(self, low, high):
        """Return a float in [low, high)."""
        return low + (high - low) * self.random()

    def randint(self, low, high):
        """Return an integer in [low, high) like Unity's Random.Range(int, int)."""
        if high <= low:
            raise ValueError(f"Empty range [{low}, {high})")
        return low + int(self.random() * (high - low))

    def choice(self, seq):
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]
