"""
Spine–satellite layout in normalized device coordinates.

A vertical polyline ("spine") runs through the centre of the frame; the rest
of the nodes are scattered radially around it and hooked to their nearest
spine node, plus a sprinkle of random cross links.
"""

import logging

import numpy as np

from neongraph.config import MIN_NODES
from neongraph.rng import Lcg
from neongraph.types import Edge, EdgeKind, Node
from neongraph.utils import canonical_pair, scaled_count

logger = logging.getLogger(__name__)

SPINE_Y_MIN = np.float32(-0.85)
SPINE_Y_SPAN = np.float32(1.70)
SPINE_JITTER = 0.02
SATELLITE_R_MIN = 0.15
SATELLITE_R_MAX = 0.85
SATELLITE_THETA = 3.14159
SATELLITE_SCALE_X = np.float32(0.8)  # horizontal compression
SATELLITE_SCALE_Y = np.float32(0.9)
CROSS_LINK_RATIO = 0.12


def _nearest_spine(spine_xy: np.ndarray, x: np.float32, y: np.float32) -> int:
    """Index of the closest spine node; the first minimum wins on ties."""
    dx = x - spine_xy[:, 0]
    dy = y - spine_xy[:, 1]
    d2 = dx * dx + dy * dy
    return int(np.argmin(d2))


def generate(seed: int, num_nodes: int, spine_segments: int) -> tuple[tuple[Node, ...], tuple[Edge, ...]]:
    """Build the 2D spine graph. Same arguments always give the same nodes and edges, in order."""
    n = max(int(num_nodes), MIN_NODES)
    spine_n = min(max(int(spine_segments), 2) + 1, n)
    rng = Lcg(seed)

    xy = np.zeros((n, 2), dtype=np.float32)
    nodes: list[Node] = []
    edges: list[Edge] = []
    links: set[tuple[int, int]] = set()

    for i in range(spine_n):
        t = np.float32(i) / np.float32(spine_n - 1) if spine_n > 1 else np.float32(0.0)
        y = SPINE_Y_MIN + SPINE_Y_SPAN * t
        x = rng.range_f32(-SPINE_JITTER, SPINE_JITTER)
        xy[i] = (x, y)
        nodes.append(Node(id=i, pos=(float(x), float(y)), level=0))
        if i > 0:
            edges.append(Edge(a=i - 1, b=i, kind=EdgeKind.SPINE))

    spine_xy = xy[:spine_n]
    for i in range(spine_n, n):
        r = rng.range_f32(SATELLITE_R_MIN, SATELLITE_R_MAX)
        th = rng.range_f32(-SATELLITE_THETA, SATELLITE_THETA)
        x = r * np.cos(th) * SATELLITE_SCALE_X
        y = r * np.sin(th) * SATELLITE_SCALE_Y
        xy[i] = (x, y)
        nodes.append(Node(id=i, pos=(float(x), float(y)), level=1))

        best = _nearest_spine(spine_xy, x, y)
        links.add(canonical_pair(best, i))
        edges.append(Edge(a=best, b=i, kind=EdgeKind.LINK))

    extra_links = scaled_count(n, CROSS_LINK_RATIO)
    cross = 0
    for _ in range(extra_links):
        a = rng.pick_usize(n)
        b = rng.pick_usize(n)
        if a == b:
            b = (b + 1) % n
        # a pair already linked is dropped, not redrawn
        key = canonical_pair(a, b)
        if key in links:
            continue
        links.add(key)
        edges.append(Edge(a=a, b=b, kind=EdgeKind.LINK))
        cross += 1

    logger.debug(
        "generate: n=%d spine=%d edges=%d (cross=%d of %d drawn)", n, spine_n, len(edges), cross, extra_links
    )
    return tuple(nodes), tuple(edges)
