from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from neongraph.config import LARGE_NODE_SIZE, LARGE_NODE_STRIDE, PLOT_HEIGHT, PLOT_TEMPLATE
from neongraph.graph_build import AnyEdge
from neongraph.theme import (
    Palette,
    graph_clear_alpha,
    graph_clear_color_srgb,
    palette_hex,
    theme_edge_palette,
    theme_node_palette,
)
from neongraph.types import Edge, EdgeKind, EdgeKind3, Node, Node3

# line width / opacity per kind; mesh is drawn thinner and dimmer than extras
EDGE_LINE = {
    EdgeKind3.MESH: (1.5, 0.55),
    EdgeKind3.EXTRA: (2.5, 0.85),
}
EDGE_LINE_2D = {
    EdgeKind.SPINE: (3.0, Palette.MAGENTA),
    EdgeKind.LINK: (1.2, Palette.CYAN),
}
NODE_MARKER_SIZE = 4.0


def _clear_rgba() -> str:
    r, g, b = (int(round(255 * c)) for c in graph_clear_color_srgb())
    return f"rgba({r},{g},{b},{graph_clear_alpha()})"


def _segment_xyz(pos: np.ndarray, pairs) -> tuple[list, list, list]:
    ex, ey, ez = [], [], []
    for a, b in pairs:
        ex.extend([float(pos[a][0]), float(pos[b][0]), None])
        ey.extend([float(pos[a][1]), float(pos[b][1]), None])
        ez.extend([float(pos[a][2]), float(pos[b][2]), None])
    return ex, ey, ez


def make_3d_traces(
    nodes: Sequence[Node3],
    edges: Sequence[AnyEdge],
    positions: Optional[np.ndarray] = None,
    segments: Sequence = (),
):
    """Create Plotly 3D traces for a generated graph.

    Returns:
        (edge_traces, node_trace)
        edge_traces holds one trace per edge kind that has edges, then the nucleus
        spokes if ``segments`` is non-empty. ``node_trace`` is None for an empty graph.
    """
    if not nodes:
        return [], None

    pos = positions if positions is not None else np.array([n.pos for n in nodes], dtype=np.float32)

    edge_traces = []
    for kind in EdgeKind3:
        pairs = [(e.a, e.b) for e in edges if e.kind is kind]
        if not pairs:
            continue
        width, opacity = EDGE_LINE[kind]
        ex, ey, ez = _segment_xyz(pos, pairs)
        edge_traces.append(
            go.Scatter3d(
                x=ex, y=ey, z=ez,
                mode="lines",
                line=dict(width=width, color=palette_hex(theme_edge_palette(kind))),
                opacity=opacity,
                hoverinfo="none",
                name=kind.value,
            )
        )

    if segments:
        sx, sy, sz = [], [], []
        for c, p in segments:
            sx.extend([c[0], p[0], None])
            sy.extend([c[1], p[1], None])
            sz.extend([c[2], p[2], None])
        edge_traces.append(
            go.Scatter3d(
                x=sx, y=sy, z=sz,
                mode="lines",
                line=dict(width=1, color=palette_hex(Palette.PURPLE)),
                opacity=0.35,
                hoverinfo="none",
                name="nucleus",
            )
        )

    n = len(nodes)
    sizes = [NODE_MARKER_SIZE * (LARGE_NODE_SIZE if i % LARGE_NODE_STRIDE == 0 else 1.0) for i in range(n)]
    colors = [palette_hex(theme_node_palette(i)) for i in range(n)]
    radii = np.linalg.norm(np.asarray(pos, dtype=float), axis=1)
    texts = [f"{i} | r={radii[i]:.3f}" for i in range(n)]

    node_trace = go.Scatter3d(
        x=pos[:, 0].tolist(), y=pos[:, 1].tolist(), z=pos[:, 2].tolist(),
        mode="markers",
        marker=dict(size=sizes, color=colors, opacity=0.95),
        text=texts, hoverinfo="text",
        name="nodes",
    )

    return edge_traces, node_trace


def _dark_layout(fig: go.Figure, height: int) -> go.Figure:
    clear = _clear_rgba()
    fig.update_layout(
        template=PLOT_TEMPLATE,
        height=int(height),
        paper_bgcolor=clear,
        plot_bgcolor=clear,
        showlegend=True,
        margin=dict(l=0, r=0, t=30, b=0),
    )
    return fig


def make_graph_figure(
    nodes: Sequence[Node3],
    edges: Sequence[AnyEdge],
    positions: Optional[np.ndarray] = None,
    segments: Sequence = (),
    height: int = PLOT_HEIGHT,
) -> go.Figure:
    """3D figure with hidden axes and a fixed [-1.5, 1.5] cube so drift frames line up."""
    edge_traces, node_trace = make_3d_traces(nodes, edges, positions=positions, segments=segments)
    traces = [*edge_traces, node_trace] if node_trace is not None else edge_traces
    fig = go.Figure(data=traces)
    axis = dict(visible=False, range=[-1.5, 1.5])
    fig.update_layout(scene=dict(xaxis=axis, yaxis=axis, zaxis=axis, aspectmode="cube"))
    return _dark_layout(fig, height)


def make_2d_figure(nodes: Sequence[Node], edges: Sequence[Edge], height: int = PLOT_HEIGHT) -> go.Figure:
    """Spine/satellite layout in NDC; spine drawn magenta, links cyan."""
    fig = go.Figure()
    for kind in EdgeKind:
        ex, ey = [], []
        for e in edges:
            if e.kind is not kind:
                continue
            a, b = nodes[e.a].pos, nodes[e.b].pos
            ex.extend([a[0], b[0], None])
            ey.extend([a[1], b[1], None])
        if not ex:
            continue
        width, pal = EDGE_LINE_2D[kind]
        fig.add_trace(go.Scatter(
            x=ex, y=ey,
            mode="lines",
            line=dict(width=width, color=palette_hex(pal)),
            hoverinfo="none",
            name=kind.value,
        ))

    if nodes:
        fig.add_trace(go.Scatter(
            x=[n.pos[0] for n in nodes],
            y=[n.pos[1] for n in nodes],
            mode="markers",
            marker=dict(
                size=[7 if n.level == 0 else 5 for n in nodes],
                color=[palette_hex(Palette.MAGENTA if n.level == 0 else Palette.SKY) for n in nodes],
            ),
            text=[f"{n.id} | level={n.level}" for n in nodes],
            hoverinfo="text",
            name="nodes",
        ))

    fig.update_xaxes(visible=False, range=[-1.05, 1.05])
    fig.update_yaxes(visible=False, range=[-1.05, 1.05], scaleanchor="x")
    return _dark_layout(fig, height)
