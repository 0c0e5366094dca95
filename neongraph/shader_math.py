"""
CPU mirrors of the per-frame shader formulas.

Everything here is pure and total, evaluated in float32, and accepts either
scalars or numpy arrays (positions as ``(..., 3)``).
"""

import numpy as np


_F = np.float32
_ZERO = _F(0.0)
_ONE = _F(1.0)
_EPS = _F(1e-6)

DRIFT_AMPLITUDE = _F(0.03)
DRIFT_RATE = _F(0.3)
DRIFT_K1 = np.array([1.7, 2.3, 1.3], dtype=np.float32)
DRIFT_K2 = np.array([1.2, 2.9, 1.7], dtype=np.float32)
DRIFT_K3 = np.array([1.9, 1.1, 2.6], dtype=np.float32)
DRIFT_DETUNE_Y = _F(1.137)
DRIFT_DETUNE_Z = _F(0.873)


def _f32(x):
    return np.asarray(x, dtype=np.float32)[()]


def smoothstep(edge0, edge1, x):
    t = np.clip((_f32(x) - _f32(edge0)) / (_f32(edge1) - _f32(edge0)), _ZERO, _ONE)
    return t * t * (_F(3.0) - _F(2.0) * t)


def spark(t):
    """Sinusoidal flicker in [0.35, 1.0]."""
    return _F(0.35) + _F(0.65) * (_F(0.5) + _F(0.5) * np.sin(_f32(t)))


def node_intensity(d_norm, t):
    """Brightness of a node sprite at normalized distance ``d_norm`` from its centre."""
    d = np.maximum(_f32(d_norm), _ZERO)
    core = smoothstep(_ONE, _ZERO, d)
    glow = np.exp(_F(-4.0) * d * d)
    return core * _F(1.4) + glow * _F(0.5) * spark(t)


def _dot3(p, k):
    return p[..., 0] * k[0] + p[..., 1] * k[1] + p[..., 2] * k[2]


def drift_position(p, t, speed):
    """
    Small periodic offset for a point, proportional to its distance from the origin.
    Returns the displacement, not the moved point.
    """
    p = np.asarray(p, dtype=np.float32)
    w = _f32(t) * _f32(speed) * DRIFT_RATE
    r = np.sqrt(p[..., 0] * p[..., 0] + p[..., 1] * p[..., 1] + p[..., 2] * p[..., 2])
    amp = DRIFT_AMPLITUDE * r
    return np.stack(
        [
            amp * np.sin(_dot3(p, DRIFT_K1) + w),
            amp * np.sin(_dot3(p, DRIFT_K2) + w * DRIFT_DETUNE_Y),
            amp * np.sin(_dot3(p, DRIFT_K3) + w * DRIFT_DETUNE_Z),
        ],
        axis=-1,
    )


def _ordered_lower_edge(lo, hi):
    # keep lo strictly below hi even where 1e-6 is under one ulp of hi
    lo = np.minimum(_f32(lo), _f32(hi) - _EPS)
    return np.where(lo < _f32(hi), lo, np.nextafter(_f32(hi), _F(-np.inf)))


def link_strength(dist, on, off):
    """1 below ``on``, fading smoothly to 0 at ``off``."""
    off = _f32(off)
    on = _ordered_lower_edge(on, off)
    return _ONE - smoothstep(on, off, dist)


def radial_strength(r, r0, r1, min_strength):
    """Like :func:`link_strength` over radius, but never below ``min_strength``."""
    r1 = _f32(r1)
    r0 = _ordered_lower_edge(r0, r1)
    floor = np.clip(_f32(min_strength), _ZERO, _ONE)
    s = _ONE - smoothstep(r0, r1, r)
    return floor + (_ONE - floor) * s
