import networkx as nx
import numpy as np
import pytest

from neongraph.config import SHELL_RADII
from neongraph.graph3d import build_all_pairs_edges
from neongraph.graph_build import lcc_subgraph, to_networkx
from neongraph.metrics import degree_entropy, lambda2_on_lcc, shell_counts, summarize_graph
from neongraph.types import Edge3, EdgeKind3, Node3


def _nodes(n):
    return tuple(Node3(id=i, pos=(1.0, 0.0, 0.0)) for i in range(n))


def test_summary_complete_graph():
    nodes = _nodes(6)
    met = summarize_graph(nodes, build_all_pairs_edges(nodes))
    assert met["N"] == 6 and met["E"] == 15 and met["C"] == 1
    assert met["density"] == pytest.approx(1.0)
    assert met["avg_degree"] == pytest.approx(5.0)
    assert met["lcc_frac"] == 1.0
    # normalized Laplacian of K_n: eigenvalues 0 and n/(n-1)
    assert met["l2_lcc"] == pytest.approx(6 / 5, rel=1e-6)
    assert met["H_deg"] == pytest.approx(0.0)
    assert (met["mesh_edges"], met["extra_edges"]) == (15, 0)


def test_summary_disconnected():
    edges = (Edge3(0, 1, EdgeKind3.MESH), Edge3(1, 2, EdgeKind3.MESH), Edge3(3, 4, EdgeKind3.EXTRA))
    met = summarize_graph(_nodes(6), edges)
    assert met["C"] == 3
    assert met["lcc_size"] == 3
    assert met["lcc_frac"] == pytest.approx(0.5)
    # path on 3 nodes: normalized Laplacian spectrum {0, 1, 2}
    assert met["l2_lcc"] == pytest.approx(1.0)
    assert (met["mesh_edges"], met["extra_edges"]) == (2, 1)


def test_summary_counts_duplicate_kinds_once_in_E():
    edges = (Edge3(0, 1, EdgeKind3.MESH), Edge3(0, 1, EdgeKind3.EXTRA))
    met = summarize_graph(_nodes(2), edges)
    assert met["E"] == 1
    assert (met["mesh_edges"], met["extra_edges"]) == (1, 1)


def test_summary_empty():
    met = summarize_graph((), ())
    assert met["N"] == 0 and met["E"] == 0 and met["C"] == 0
    assert met["lcc_frac"] == 0.0 and met["l2_lcc"] == 0.0


def test_summary_generated_graphs(cloud_graph, shell_graph):
    for nodes, edges in (cloud_graph, shell_graph):
        met = summarize_graph(nodes, edges)
        assert met["N"] == len(nodes)
        assert met["lcc_frac"] >= 0.8
        assert met["l2_lcc"] > 0.0
        assert met["H_deg"] > 0.0
        assert met["mesh_edges"] + met["extra_edges"] == len(edges)


def test_lambda2_matches_dense(shell_graph):
    G = to_networkx(*shell_graph)
    L = nx.normalized_laplacian_matrix(lcc_subgraph(G)).toarray()
    dense = np.sort(np.linalg.eigvalsh(L))[1]
    assert lambda2_on_lcc(G) == pytest.approx(dense, rel=1e-4, abs=1e-8)


def test_degree_entropy_two_classes():
    edges = (Edge3(0, 1, EdgeKind3.MESH), Edge3(0, 2, EdgeKind3.MESH), Edge3(0, 3, EdgeKind3.MESH))
    G = to_networkx(_nodes(4), edges)
    # degrees {3, 1, 1, 1}
    p = np.array([0.25, 0.75])
    assert degree_entropy(G) == pytest.approx(float(-(p * np.log(p)).sum()))


def test_shell_counts(inner_shell_graph):
    nodes, _ = inner_shell_graph
    counts = shell_counts(nodes, SHELL_RADII)
    assert len(counts) == len(SHELL_RADII)
    assert sum(counts) == len(nodes)
    assert counts[0] + counts[1] > counts[-1] + counts[-2]
    assert shell_counts(nodes, []) == []
    assert shell_counts((), (1.0, 2.0)) == [0, 0]
