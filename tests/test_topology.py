import pytest

from neongraph.graph3d import build_all_pairs_edges, build_nucleus_segments
from neongraph.types import EdgeKind3


@pytest.mark.parametrize("m", [0, 1, 2, 5, 64])
def test_all_pairs_count(m, sphere_graph):
    nodes = sphere_graph[0][:m]
    edges = build_all_pairs_edges(nodes)
    assert len(edges) == m * (m - 1) // 2
    pairs = {(e.a, e.b) for e in edges}
    assert len(pairs) == len(edges)
    assert all(e.a < e.b for e in edges)
    assert all(e.kind is EdgeKind3.MESH for e in edges)


def test_nucleus_segments(shell_graph):
    nodes = shell_graph[0]
    segs = build_nucleus_segments(nodes)
    assert len(segs) == len(nodes)
    assert all(c == (0.0, 0.0, 0.0) for c, _ in segs)
    assert [p for _, p in segs] == [n.pos for n in nodes]

    segs = build_nucleus_segments(nodes[:3], center=(0.1, -0.2, 0.3))
    assert segs[0][0] == (0.1, -0.2, 0.3)
    assert build_nucleus_segments(()) == []
