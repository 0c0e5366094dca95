import networkx as nx

from neongraph.graph2d import generate
from neongraph.graph_build import (
    connected_components_sorted,
    edges_frame,
    lcc_fraction,
    lcc_subgraph,
    nodes_frame,
    to_networkx,
)
from neongraph.types import Edge3, EdgeKind3, Node3


def _nodes(n):
    return tuple(Node3(id=i, pos=(float(i), 0.0, 0.0)) for i in range(n))


def test_frames():
    nodes, edges = generate(1, 30, 4)
    df_n = nodes_frame(nodes)
    assert list(df_n.columns) == ["id", "x", "y", "level"]
    assert len(df_n) == 30

    df_e = edges_frame(edges)
    assert list(df_e.columns) == ["a", "b", "kind"]
    assert set(df_e["kind"]) == {"spine", "link"}

    df3 = nodes_frame(_nodes(3))
    assert list(df3.columns) == ["id", "x", "y", "z"]
    assert list(nodes_frame(()).columns) == ["id", "x", "y"]


def test_to_networkx_mesh_wins():
    edges = (
        Edge3(0, 1, EdgeKind3.MESH),
        Edge3(0, 1, EdgeKind3.EXTRA),
        Edge3(2, 1, EdgeKind3.EXTRA),
    )
    G = to_networkx(_nodes(4), edges)
    assert G.number_of_nodes() == 4
    assert G.number_of_edges() == 2
    assert G.edges[0, 1]["kind"] == "mesh"
    assert G.edges[0, 1]["kinds"] == ["extra", "mesh"]
    assert G.edges[1, 2]["kind"] == "extra"
    assert G.nodes[3]["pos"] == (3.0, 0.0, 0.0)


def test_to_networkx_2d_levels():
    nodes, edges = generate(4, 40, 6)
    G = to_networkx(nodes, edges)
    assert G.nodes[0]["level"] == 0
    assert G.nodes[39]["level"] == 1
    assert nx.number_of_selfloops(G) == 0


def test_to_networkx_empty_edges():
    G = to_networkx(_nodes(5), ())
    assert G.number_of_nodes() == 5
    assert G.number_of_edges() == 0


def test_components_and_lcc():
    edges = (Edge3(0, 1, EdgeKind3.MESH), Edge3(1, 2, EdgeKind3.MESH), Edge3(3, 4, EdgeKind3.EXTRA))
    G = to_networkx(_nodes(6), edges)
    comps = connected_components_sorted(G)
    assert [len(c) for c in comps] == [3, 2, 1]
    H = lcc_subgraph(G)
    assert set(H.nodes()) == {0, 1, 2}
    assert lcc_fraction(G, 6) == 0.5
    assert lcc_fraction(G, 0) == 0.0
    assert lcc_subgraph(nx.Graph()).number_of_nodes() == 0


def test_components_tie_break_and_lcc_attrs():
    edges = (Edge3(4, 5, EdgeKind3.EXTRA), Edge3(0, 1, EdgeKind3.MESH))
    G = to_networkx(_nodes(6), edges)
    comps = connected_components_sorted(G)
    assert comps[:2] == [{0, 1}, {4, 5}]
    H = lcc_subgraph(G)
    assert H.edges[0, 1]["kind"] == "mesh"
    assert H.nodes[1]["pos"] == (1.0, 0.0, 0.0)
