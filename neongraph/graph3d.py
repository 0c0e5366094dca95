"""
3D layouts: Fibonacci sphere, solid-ball cloud and concentric shells.

Each generator places nodes first and then synthesizes edges with an
exhaustive k-nearest-neighbour search. Edges are canonicalized to
``(min, max)`` pairs and deduplicated per kind; Mesh and Extra sets are kept
apart, so one pair may show up once in each.
"""

import logging
from typing import Iterable, Sequence

import numpy as np

from neongraph.config import HUB_EXTRA_NEIGHBORS, MAX_CROSS_ADJ, MAX_NEIGHBORS, MIN_NODES
from neongraph.rng import SPHERE_EXTRA_SALT, Lcg, derive_seed
from neongraph.types import Edge3, EdgeKind3, Node3
from neongraph.utils import canonical_pair, clamp, safe_float, scaled_count

logger = logging.getLogger(__name__)

_PI = np.float32(np.pi)
_TWO_PI = np.float32(2.0) * _PI
_GOLDEN = (np.float32(1.0) + np.sqrt(np.float32(5.0))) * np.float32(0.5)
_GOLDEN_ANGLE = _TWO_PI / (_GOLDEN * _GOLDEN)

SHELL_JITTER = np.float32(0.03)
CLOUD_MIN_RADIUS = 0.1

Pair = tuple[int, int]


def fib_sphere_points(n: int) -> np.ndarray:
    """Near-uniform points on the unit sphere (golden-angle spiral), shape ``(max(n, 4), 3)``."""
    n = max(int(n), MIN_NODES)
    i = np.arange(n, dtype=np.float32)
    t = (i + np.float32(0.5)) / np.float32(n)
    y = np.float32(1.0) - np.float32(2.0) * t
    r = np.sqrt(np.maximum(np.float32(1.0) - y * y, np.float32(0.0)))
    phi = _GOLDEN_ANGLE * i
    return np.stack([r * np.cos(phi), y, r * np.sin(phi)], axis=1).astype(np.float32)


def _nearest(pos: np.ndarray, i: int, candidates: np.ndarray, k: int) -> np.ndarray:
    """
    Up to ``k`` candidates closest to node ``i``, nearest first.
    Squared distances are compared in float32; equal distances keep index order.
    """
    cand = candidates[candidates != i]
    if cand.size == 0 or k <= 0:
        return cand[:0]
    diff = pos[i] - pos[cand]
    d2 = diff[:, 0] * diff[:, 0] + diff[:, 1] * diff[:, 1] + diff[:, 2] * diff[:, 2]
    order = np.argsort(d2, kind="stable")
    return cand[order[:k]]


def _link_nearest(pairs: set, pos: np.ndarray, i: int, candidates: np.ndarray, k: int) -> None:
    for j in _nearest(pos, i, candidates, k):
        pairs.add(canonical_pair(i, int(j)))


def _random_pairs(pairs: set, rng: Lcg, n: int, count: int) -> None:
    """Add ``count`` random pairs; a self pair is repaired by bumping the second index."""
    for _ in range(count):
        a = rng.next_u32() % n
        b = rng.next_u32() % n
        if a == b:
            b = (b + 1) % n
        pairs.add(canonical_pair(a, b))


def _as_nodes(pos: np.ndarray) -> tuple[Node3, ...]:
    return tuple(
        Node3(id=i, pos=(float(p[0]), float(p[1]), float(p[2])))
        for i, p in enumerate(pos)
    )


def _as_edges(mesh: Iterable[Pair], extra: Iterable[Pair] = ()) -> tuple[Edge3, ...]:
    out = [Edge3(a=a, b=b, kind=EdgeKind3.MESH) for a, b in sorted(mesh)]
    out.extend(Edge3(a=a, b=b, kind=EdgeKind3.EXTRA) for a, b in sorted(extra))
    return tuple(out)


def _clamp_k(k) -> int:
    return clamp(int(k), 1, MAX_NEIGHBORS)


def generate_sphere(
    seed: int,
    num_nodes: int,
    neighbors: int,
    extra_ratio: float,
) -> tuple[tuple[Node3, ...], tuple[Edge3, ...]]:
    """Unit-sphere graph: Fibonacci nodes, k-NN mesh and random cross links (all Mesh)."""
    pos = fib_sphere_points(num_nodes)
    n = len(pos)
    k = _clamp_k(neighbors)
    everyone = np.arange(n)

    pairs: set = set()
    for i in range(n):
        _link_nearest(pairs, pos, i, everyone, k)

    rng = Lcg(derive_seed(seed, SPHERE_EXTRA_SALT))
    extras = scaled_count(n, extra_ratio)
    _random_pairs(pairs, rng, n, extras)

    logger.debug("generate_sphere: n=%d k=%d extras=%d edges=%d", n, k, extras, len(pairs))
    return _as_nodes(pos), _as_edges(pairs)


def generate_cloud(
    seed: int,
    num_nodes: int,
    radius: float,
    neighbors: int,
    extra_ratio: float,
    hub_ratio: float,
) -> tuple[tuple[Node3, ...], tuple[Edge3, ...]]:
    """Uniform solid-ball cloud with k-NN mesh, hub reinforcement and random Extra links."""
    n = max(int(num_nodes), MIN_NODES)
    r = np.float32(max(safe_float(radius, CLOUD_MIN_RADIUS), CLOUD_MIN_RADIUS))
    rng = Lcg(seed)

    pos = np.zeros((n, 3), dtype=np.float32)
    for i in range(n):
        u1 = rng.next_f32()
        u2 = rng.next_f32()
        u3 = rng.next_f32()
        phi = _TWO_PI * u1
        cos_th = np.float32(2.0) * u2 - np.float32(1.0)
        sin_th = np.sqrt(max(np.float32(1.0) - cos_th * cos_th, np.float32(0.0)))
        # cube root keeps the density uniform per volume, not per radius
        rr = r * np.cbrt(u3)
        pos[i] = (rr * (np.cos(phi) * sin_th), rr * cos_th, rr * (np.sin(phi) * sin_th))

    k = _clamp_k(neighbors)
    everyone = np.arange(n)
    mesh: set = set()
    for i in range(n):
        _link_nearest(mesh, pos, i, everyone, k)

    hubs = max(scaled_count(n, hub_ratio), 1)
    for _ in range(hubs):
        i = rng.next_u32() % n
        _link_nearest(mesh, pos, i, everyone, k + HUB_EXTRA_NEIGHBORS)

    extra: set = set()
    _random_pairs(extra, rng, n, scaled_count(n, extra_ratio))

    logger.debug("generate_cloud: n=%d k=%d hubs=%d mesh=%d extra=%d", n, k, hubs, len(mesh), len(extra))
    return _as_nodes(pos), _as_edges(mesh, extra)


def _shell_weights(probs: Sequence[float]) -> np.ndarray:
    w = np.array([max(safe_float(p), 0.0) for p in probs], dtype=np.float32)
    total = np.float32(0.0)
    for wi in w:
        total += wi
    if not total > 0:
        logger.warning("generate_shells: probabilities sum to %r, using uniform shells", float(total))
        return np.full(len(w), np.float32(1.0) / np.float32(len(w)), dtype=np.float32)
    return w / total


def _assign_shells(rng: Lcg, n: int, weights: np.ndarray) -> np.ndarray:
    """Inverse-CDF sampling: the first shell whose cumulative weight reaches the draw."""
    acc = []
    s = np.float32(0.0)
    for wi in weights:
        s += wi
        acc.append(s)

    layer_of = np.zeros(n, dtype=np.int64)
    for i in range(n):
        u = rng.next_f32()
        li = 0
        while li + 1 < len(acc) and u > acc[li]:
            li += 1
        layer_of[i] = li
    return layer_of


def generate_shells(
    seed: int,
    num_nodes: int,
    radii: Sequence[float],
    probs: Sequence[float],
    k_intra: int,
    cross_adj: int,
    cross_long_ratio: float,
    hub_ratio: float,
) -> tuple[tuple[Node3, ...], tuple[Edge3, ...]]:
    """
    Concentric-shell graph.

    Nodes are distributed over ``radii`` with (normalized) probabilities
    ``probs`` and laid out on a jittered Fibonacci spiral per shell.

    Mesh edges: intra-shell k-NN plus hub reinforcement.
    Extra edges: links to the nearest nodes of adjacent shells plus random
    long-range pairs.

    Raises:
        ValueError: if ``radii`` is empty or ``probs`` differs in length.
    """
    if len(radii) == 0:
        raise ValueError("generate_shells needs at least one shell radius.")
    if len(radii) != len(probs):
        raise ValueError(
            f"radii and probs must have the same length (got {len(radii)} and {len(probs)})."
        )

    n = max(int(num_nodes), MIN_NODES)
    num_shells = len(radii)
    shell_r = np.array([safe_float(r) for r in radii], dtype=np.float32)

    rng = Lcg(seed)
    layer_of = _assign_shells(rng, n, _shell_weights(probs))
    per_layer = np.bincount(layer_of, minlength=num_shells)

    base_points = [fib_sphere_points(max(int(cnt), 1)) * shell_r[li] for li, cnt in enumerate(per_layer)]

    pos = np.zeros((n, 3), dtype=np.float32)
    idx_in_layer = [0] * num_shells
    for i in range(n):
        li = int(layer_of[i])
        pts = base_points[li]
        p = pts[idx_in_layer[li] % len(pts)].copy()
        idx_in_layer[li] += 1
        amp = shell_r[li] * SHELL_JITTER
        for axis in range(3):
            p[axis] += (rng.next_f32() - np.float32(0.5)) * amp
        pos[i] = p

    members = [np.flatnonzero(layer_of == li) for li in range(num_shells)]
    k = _clamp_k(k_intra)

    intra: set = set()
    for idxs in members:
        for i in idxs:
            _link_nearest(intra, pos, int(i), idxs, k)

    cross: set = set()
    ca = min(max(int(cross_adj), 0), MAX_CROSS_ADJ)
    for i in range(n):
        li = int(layer_of[i])
        for lj in (li - 1, li + 1):
            if lj < 0 or lj >= num_shells:
                continue
            _link_nearest(cross, pos, i, members[lj], ca)

    hubs = max(scaled_count(n, hub_ratio), 1)
    for _ in range(hubs):
        i = rng.next_u32() % n
        _link_nearest(intra, pos, i, members[int(layer_of[i])], k + HUB_EXTRA_NEIGHBORS)

    _random_pairs(cross, rng, n, scaled_count(n, cross_long_ratio))

    logger.debug(
        "generate_shells: n=%d per_shell=%s mesh=%d extra=%d",
        n, per_layer.tolist(), len(intra), len(cross),
    )
    return _as_nodes(pos), _as_edges(intra, cross)


def build_all_pairs_edges(nodes: Sequence[Node3]) -> tuple[Edge3, ...]:
    """Complete graph over ``nodes``: every ``(a, b)`` with ``a < b``, tagged Mesh."""
    n = len(nodes)
    return tuple(
        Edge3(a=a, b=b, kind=EdgeKind3.MESH)
        for a in range(n)
        for b in range(a + 1, n)
    )


def build_nucleus_segments(
    nodes: Sequence[Node3],
    center: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> list[tuple[tuple[float, float, float], tuple[float, float, float]]]:
    """Radial spokes ``(center, node.pos)``, one per node, in node order."""
    c = tuple(float(v) for v in center)
    return [(c, node.pos) for node in nodes]
