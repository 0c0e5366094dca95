"""
Scene context: turns a generated 3D graph into per-instance draw tables.

``GraphScene`` holds everything a renderer needs between frames (shell
profile, edge mode toggles, clamped parameters). Rebuilding it never mutates
a previous graph; each ``build()`` returns fresh buffers.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from neongraph.config import (
    DEFAULT_CROSS_ADJ,
    DEFAULT_CROSS_LONG_RATIO,
    DEFAULT_HUB_RATIO,
    DEFAULT_K_INTRA,
    DEFAULT_NUM_NODES,
    DEFAULT_SEED,
    LARGE_NODE_SIZE,
    LARGE_NODE_STRIDE,
    NUCLEUS_NODE_SIZE,
    SHELL_PROBS_DEFAULT,
    SHELL_PROBS_INNER,
    SHELL_RADII,
)
from neongraph.graph3d import build_all_pairs_edges, build_nucleus_segments, generate_shells
from neongraph.params import GraphParams, clamp_graph_params
from neongraph.shader_math import drift_position
from neongraph.theme import Palette, palette_color, theme_edge_color, theme_node_color
from neongraph.types import Edge3, EdgeKind3, Node3

logger = logging.getLogger(__name__)

ORIGIN = (0.0, 0.0, 0.0)

EDGE_COLUMNS = [
    "p1x", "p1y", "p1z", "p2x", "p2y", "p2z",
    "r", "g", "b", "a",
    "curve_k", "thickness", "is_nucleus",
]
NODE_COLUMNS = ["cx", "cy", "cz", "size", "r", "g", "b", "a", "phase"]

# (thickness scale, colour scale) per edge kind: same-shell mesh is drawn a bit thinner and dimmer.
EDGE_STYLE = {
    EdgeKind3.MESH: (0.85, 0.85),
    EdgeKind3.EXTRA: (1.00, 1.00),
}
NUCLEUS_THICKNESS = 0.90


class ShellProfile(Enum):
    DEFAULT = 0
    INNER = 1  # inner-heavy


SHELL_PROFILE_PROBS = {
    ShellProfile.DEFAULT: SHELL_PROBS_DEFAULT,
    ShellProfile.INNER: SHELL_PROBS_INNER,
}


def quad_corners() -> tuple[tuple[float, float], ...]:
    """Sprite quad corners in triangle-strip order."""
    return ((-0.5, -0.5), (0.5, -0.5), (-0.5, 0.5), (0.5, 0.5))


def curve_variants_for_radius(r: float) -> list[tuple[float, float]]:
    """
    Extra curved copies ``(curvature, thickness_scale)`` for an edge at mean radius ``r``.
    Edges near the centre get more and stronger curves; the straight edge is not included.
    """
    r = min(max(float(r), 0.1), 5.0)
    if r < 0.8:
        base = 4
    elif r < 1.1:
        base = 2
    elif r < 1.35:
        base = 1
    else:
        return []

    a0 = max(1.4 - r, 0.1) * 0.38
    thin1, thin2 = 0.70, 0.55
    if base == 4:
        return [(a0, thin1), (-a0, thin1), (a0 * 0.6, thin2), (-a0 * 0.6, thin2)]
    if base == 2:
        return [(a0, thin1), (-a0, thin1)]
    return [(a0 * 0.8, thin1)]


def node_phase(i: int) -> float:
    """Per-node flicker phase in ``[0, 2π]`` from an integer hash of the index."""
    m32 = 0xFFFF_FFFF
    x = int(i) & m32
    x ^= x >> 16
    x = (x * 747796405) & m32
    x ^= x >> 16
    x = (x * 2891336453) & m32
    x ^= x >> 16
    return float(np.float32(x) / np.float32(m32) * np.float32(2.0 * np.pi))


def _norm(p) -> float:
    return float(np.sqrt(p[0] * p[0] + p[1] * p[1] + p[2] * p[2]))


def edge_instances(
    nodes: Sequence[Node3],
    edges: Sequence[Edge3],
    nucleus: bool = False,
    center: tuple[float, float, float] = ORIGIN,
    curved: bool = False,
) -> pd.DataFrame:
    """One row per drawn edge segment (straight, optional curve variants, optional nucleus spokes)."""
    rows = []
    kinds = []
    for e in edges:
        a = nodes[e.a].pos
        b = nodes[e.b].pos
        ts_base, col_scale = EDGE_STYLE[e.kind]
        base = theme_edge_color(e.kind)
        col = (base[0] * col_scale, base[1] * col_scale, base[2] * col_scale, base[3])
        rows.append((*a, *b, *col, 0.0, ts_base, 0.0))
        kinds.append(e.kind.value)
        if curved:
            rm = 0.5 * (_norm(a) + _norm(b))
            for k, ts in curve_variants_for_radius(rm):
                rows.append((*a, *b, *col, k, ts * ts_base, 0.0))
                kinds.append(e.kind.value)

    if nucleus:
        col = theme_edge_color(EdgeKind3.EXTRA)
        for c, p in build_nucleus_segments(nodes, center):
            rows.append((*c, *p, *col, 0.0, NUCLEUS_THICKNESS, 1.0))
            kinds.append("nucleus")

    df = pd.DataFrame(rows, columns=EDGE_COLUMNS).astype(np.float32)
    df["kind"] = pd.Series(kinds, dtype="object")
    return df


def node_instances(
    nodes: Sequence[Node3],
    nucleus: bool = False,
    center: tuple[float, float, float] = ORIGIN,
) -> pd.DataFrame:
    """One row per node sprite; a magenta nucleus sprite is appended when ``nucleus`` is set."""
    rows = []
    for i, n in enumerate(nodes):
        size = LARGE_NODE_SIZE if i % LARGE_NODE_STRIDE == 0 else 1.0
        rows.append((*n.pos, size, *theme_node_color(i), node_phase(i)))
    if nucleus:
        rows.append((*center, NUCLEUS_NODE_SIZE, *palette_color(Palette.MAGENTA), 0.0))
    return pd.DataFrame(rows, columns=NODE_COLUMNS).astype(np.float32)


def positions_array(nodes: Sequence[Node3]) -> np.ndarray:
    return np.array([n.pos for n in nodes], dtype=np.float32).reshape(-1, 3)


def animated_positions(nodes: Sequence[Node3], t: float, speed: float) -> np.ndarray:
    """Drifted positions at time ``t``; returns a new array, ``nodes`` stay untouched."""
    pos = positions_array(nodes)
    return pos + drift_position(pos, t, speed)


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_at_rh(eye, target, up) -> np.ndarray:
    eye = np.asarray(eye, dtype=np.float32)
    f = _normalize(np.asarray(target, dtype=np.float32) - eye)
    s = _normalize(np.cross(f, np.asarray(up, dtype=np.float32)))
    u = np.cross(s, f)
    return np.array(
        [
            [s[0], s[1], s[2], -np.dot(s, eye)],
            [u[0], u[1], u[2], -np.dot(u, eye)],
            [-f[0], -f[1], -f[2], np.dot(f, eye)],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float32,
    )


def perspective_rh(fov_y: float, aspect: float, z_near: float, z_far: float) -> np.ndarray:
    """Right-handed perspective with a [0, 1] depth range."""
    h = 1.0 / np.tan(0.5 * fov_y)
    w = h / aspect
    r = z_far / (z_near - z_far)
    return np.array(
        [
            [w, 0.0, 0.0, 0.0],
            [0.0, h, 0.0, 0.0],
            [0.0, 0.0, r, r * z_near],
            [0.0, 0.0, -1.0, 0.0],
        ],
        dtype=np.float32,
    )


def view_projection(angle: float, aspect: float) -> np.ndarray:
    """Camera orbiting the origin at radius 3 and height 0.9; acts on column vectors."""
    radius = 3.0
    eye = (np.cos(angle) * radius, 0.9, np.sin(angle) * radius)
    view = look_at_rh(eye, (0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    proj = perspective_rh(np.radians(45.0), max(float(aspect), 0.1), 0.1, 100.0)
    return proj @ view


def frame_uniforms(params: GraphParams, time_ms: float, width: int, height: int) -> dict:
    """Uniform block for one frame; ``view_proj`` is column-major as the GPU expects."""
    p = clamp_graph_params(params)
    t = float(time_ms) * 0.001
    aspect = max(int(width), 1) / max(int(height), 1)
    vp = view_projection(t * p.rot_speed, aspect)
    return {
        "view_proj": np.ascontiguousarray(vp.T),
        "misc0": np.array([t, p.edge_thickness, p.node_size, p.flow_speed], dtype=np.float32),
        "misc1": np.array([aspect, p.fog_start, p.fog_end, p.fog_strength], dtype=np.float32),
        "misc2": np.array([p.link_on, p.link_off, 0.0, 0.0], dtype=np.float32),
        "misc3": np.array([p.nuc_link_on, p.nuc_link_off, 0.0, 0.0], dtype=np.float32),
    }


@dataclass(frozen=True)
class SceneBuffers:
    nodes: tuple[Node3, ...]
    edges: tuple[Edge3, ...]
    edge_frame: pd.DataFrame
    node_frame: pd.DataFrame
    segments: list = field(default_factory=list)


def package_scene(
    nodes: Sequence[Node3],
    edges: Sequence[Edge3],
    nucleus: bool = False,
    curved: bool = False,
    center: tuple[float, float, float] = ORIGIN,
) -> SceneBuffers:
    """Bundle any 3D graph with its draw tables."""
    return SceneBuffers(
        nodes=tuple(nodes),
        edges=tuple(edges),
        edge_frame=edge_instances(nodes, edges, nucleus=nucleus, center=center, curved=curved),
        node_frame=node_instances(nodes, nucleus=nucleus, center=center),
        segments=build_nucleus_segments(nodes, center) if nucleus else [],
    )


@dataclass
class GraphScene:
    """Explicit renderer state: what to generate and how to draw it."""

    seed: int = DEFAULT_SEED
    num_nodes: int = DEFAULT_NUM_NODES
    profile: ShellProfile = ShellProfile.DEFAULT
    all_pairs: bool = False
    nucleus: bool = False
    curved: bool = False
    params: GraphParams = field(default_factory=GraphParams)
    radii: tuple = SHELL_RADII
    k_intra: int = DEFAULT_K_INTRA
    cross_adj: int = DEFAULT_CROSS_ADJ
    cross_long_ratio: float = DEFAULT_CROSS_LONG_RATIO
    hub_ratio: float = DEFAULT_HUB_RATIO

    def set_params(self, params: GraphParams) -> None:
        self.params = clamp_graph_params(params)

    @property
    def shell_probs(self) -> tuple:
        return SHELL_PROFILE_PROBS[self.profile]

    def generate(self) -> tuple[tuple[Node3, ...], tuple[Edge3, ...]]:
        return generate_shells(
            self.seed, self.num_nodes, self.radii, self.shell_probs,
            self.k_intra, self.cross_adj, self.cross_long_ratio, self.hub_ratio,
        )

    def build(
        self,
        center: Optional[tuple[float, float, float]] = None,
        graph: Optional[tuple[Sequence[Node3], Sequence[Edge3]]] = None,
        all_pairs_edges: Optional[Sequence[Edge3]] = None,
    ) -> SceneBuffers:
        """Pack buffers for this scene.

        ``graph`` is the ``(nodes, edges)`` result of ``generate()`` and
        ``all_pairs_edges`` the complete graph over those nodes; callers that
        cache either pass it in, otherwise it is computed here.
        """
        nodes, base_edges = graph if graph is not None else self.generate()
        if not self.all_pairs:
            edges = base_edges
        elif all_pairs_edges is not None:
            edges = all_pairs_edges
        else:
            edges = build_all_pairs_edges(nodes)
        logger.info(
            "scene: profile=%s all_pairs=%s nucleus=%s nodes=%d edges=%d",
            self.profile.name, self.all_pairs, self.nucleus, len(nodes), len(edges),
        )
        # curves are skipped in all-pairs mode to keep the instance count down
        return package_scene(
            nodes, edges,
            nucleus=self.nucleus,
            curved=self.curved and not self.all_pairs,
            center=center or ORIGIN,
        )
