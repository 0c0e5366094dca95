"""Shared helpers for clamping, counting and safe casting."""

import math

import numpy as np


MASK64 = (1 << 64) - 1
# ratios above this saturate, so n * ratio stays finite and the draw loops bounded
MAX_COUNT_RATIO = 1.0e3


def safe_float(x, default: float = 0.0) -> float:
    """Cast to float, falling back to ``default`` for junk or non-finite input."""
    try:
        val = float(x)
        return val if np.isfinite(val) else default
    except (ValueError, TypeError):
        return default


def clamp(x, lo, hi):
    return max(lo, min(hi, x))


def round_count(x) -> int:
    """
    Round a non-negative count half away from zero.
    Python's round() uses banker's rounding, which would change edge totals.
    """
    x = float(x)
    if not math.isfinite(x) or x <= 0:
        return 0
    return int(math.floor(x + 0.5))


def scaled_count(n: int, ratio) -> int:
    """round(n * ratio) with the product taken in single precision.

    The ratio is clamped to ``[0, MAX_COUNT_RATIO]`` first, so huge or +inf
    ratios saturate instead of overflowing to zero. NaN and junk count as 0.
    """
    try:
        r = float(ratio)
    except (ValueError, TypeError):
        return 0
    if math.isnan(r):
        return 0
    r = clamp(r, 0.0, MAX_COUNT_RATIO)
    return round_count(np.float32(n) * np.float32(r))


def canonical_pair(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)
