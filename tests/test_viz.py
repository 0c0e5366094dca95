import numpy as np

from neongraph.graph2d import generate
from neongraph.graph3d import build_nucleus_segments
from neongraph.scene import animated_positions
from neongraph.theme import Palette, palette_hex
from neongraph.viz import make_2d_figure, make_3d_traces, make_graph_figure


def test_traces_per_kind(shell_graph):
    nodes, edges = shell_graph
    edge_traces, node_trace = make_3d_traces(nodes, edges)
    assert [t.name for t in edge_traces] == ["mesh", "extra"]
    assert len(node_trace.x) == len(nodes)
    mesh_pts = len(edge_traces[0].x)
    assert mesh_pts == 3 * sum(1 for e in edges if e.kind.value == "mesh")
    colors = list(node_trace.marker.color)
    assert colors[0] == palette_hex(Palette.MAGENTA)
    assert colors[1] == palette_hex(Palette.CYAN)


def test_traces_with_nucleus_and_drift(sphere_graph):
    nodes, edges = sphere_graph
    pos = animated_positions(nodes, 2.0, 1.0)
    edge_traces, node_trace = make_3d_traces(nodes, edges, positions=pos, segments=build_nucleus_segments(nodes))
    assert [t.name for t in edge_traces] == ["mesh", "nucleus"]
    assert np.isclose(node_trace.x[5], pos[5, 0])


def test_empty_graph():
    assert make_3d_traces((), ()) == ([], None)
    fig = make_graph_figure((), ())
    assert len(fig.data) == 0


def test_graph_figure_layout(cloud_graph):
    fig = make_graph_figure(*cloud_graph, height=500)
    assert len(fig.data) == 3
    assert fig.layout.height == 500
    assert fig.layout.scene.xaxis.visible is False
    assert fig.layout.paper_bgcolor == "rgba(0,0,0,0.0)"


def test_2d_figure():
    nodes, edges = generate(99, 80, 10)
    fig = make_2d_figure(nodes, edges)
    assert [t.name for t in fig.data] == ["spine", "link", "nodes"]
    assert len(fig.data[-1].x) == 80
