"""
Deterministic 64-bit linear congruential generator.

Every generator owns its own ``Lcg`` seeded explicitly, so identical seeds
reproduce identical layouts on any platform. Floats are produced in single
precision to match the float32 geometry downstream.
"""

import numpy as np

from neongraph.utils import MASK64


LCG_MULTIPLIER = 6364136223846793005
LCG_INCREMENT = 1442695040888963407

# Salt for the sphere generator's cross-link stream: Lcg(seed ^ SPHERE_EXTRA_SALT).
SPHERE_EXTRA_SALT = 0xBEEF_BABE

_U32_MAX_F32 = np.float32(0xFFFF_FFFF)  # rounds to 2**32 in float32


def derive_seed(seed: int, salt: int) -> int:
    """Seed of a decorrelated sub-stream: ``(seed ^ salt) mod 2**64``."""
    return (int(seed) ^ int(salt)) & MASK64


class Lcg:
    """Numerical Recipes style LCG; the upper 32 bits of the state are the output."""

    def __init__(self, seed: int):
        # Forcing the low bit keeps the state odd.
        self.state = (int(seed) & MASK64) | 1

    def next_u32(self) -> int:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & MASK64
        return self.state >> 32

    def next_f32(self) -> np.float32:
        # Values within 128 of 2**32 round up to exactly 1.0 in float32.
        return np.float32(self.next_u32()) / _U32_MAX_F32

    def range_f32(self, lo, hi) -> np.float32:
        lo = np.float32(lo)
        hi = np.float32(hi)
        return lo + (hi - lo) * self.next_f32()

    def pick_usize(self, n: int) -> int:
        """Uniform-ish index in ``[0, n)``; plain modulo, so slightly biased for large n."""
        return self.next_u32() % max(int(n), 1)
