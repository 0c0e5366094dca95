from typing import Sequence, Union

import networkx as nx
import numpy as np
import pandas as pd

from neongraph.types import Edge, Edge3, EdgeKind, EdgeKind3, Node, Node3

AnyNode = Union[Node, Node3]
AnyEdge = Union[Edge, Edge3]

# When one pair carries several kinds, the structural one labels the networkx edge.
_KIND_PRIORITY = {
    EdgeKind.SPINE.value: 0,
    EdgeKind3.MESH.value: 0,
    EdgeKind.LINK.value: 1,
    EdgeKind3.EXTRA.value: 1,
}


def nodes_frame(nodes: Sequence[AnyNode]) -> pd.DataFrame:
    """Node table: id, x, y[, z][, level]."""
    rows = []
    for n in nodes:
        row = {"id": n.id, "x": n.pos[0], "y": n.pos[1]}
        if len(n.pos) > 2:
            row["z"] = n.pos[2]
        if hasattr(n, "level"):
            row["level"] = n.level
        rows.append(row)
    return pd.DataFrame(rows, columns=None if rows else ["id", "x", "y"])


def edges_frame(edges: Sequence[AnyEdge]) -> pd.DataFrame:
    """Edge table: a, b, kind (kind as its string value)."""
    return pd.DataFrame(
        [(e.a, e.b, e.kind.value) for e in edges],
        columns=["a", "b", "kind"],
    )


def _collapse_kinds(df_edges: pd.DataFrame) -> pd.DataFrame:
    """One row per unordered pair with the preferred ``kind`` and the list of all ``kinds``."""
    if df_edges.empty:
        return df_edges.assign(kinds=pd.Series(dtype="object"))
    df = df_edges.copy()
    lo = np.minimum(df["a"], df["b"])
    hi = np.maximum(df["a"], df["b"])
    df["a"], df["b"] = lo, hi
    df["_prio"] = df["kind"].map(_KIND_PRIORITY).fillna(2)
    df = df.sort_values(["a", "b", "_prio"], kind="stable")
    grouped = df.groupby(["a", "b"], sort=True)["kind"]
    out = grouped.first().to_frame("kind")
    out["kinds"] = grouped.unique().map(sorted)
    return out.reset_index()


def to_networkx(nodes: Sequence[AnyNode], edges: Sequence[AnyEdge]) -> nx.Graph:
    """Build a simple undirected graph; node attrs ``pos`` (and ``level``), edge attrs ``kind``/``kinds``."""
    G = nx.Graph()
    for n in nodes:
        attrs = {"pos": tuple(n.pos)}
        if hasattr(n, "level"):
            attrs["level"] = n.level
        G.add_node(n.id, **attrs)

    df = _collapse_kinds(edges_frame(edges))
    if not df.empty:
        H = nx.from_pandas_edgelist(df, source="a", target="b", edge_attr=["kind", "kinds"], create_using=nx.Graph())
        G.add_edges_from(H.edges(data=True))
    return G


def connected_components_sorted(G: nx.Graph) -> list[set]:
    """Components largest first; equal sizes keep the order of their smallest node id."""
    comps = [set(c) for c in nx.connected_components(G)]
    comps.sort(key=lambda c: (-len(c), min(c)))
    return comps


def lcc_subgraph(G: nx.Graph) -> nx.Graph:
    """Copy of the largest component, with node and edge attributes (empty graph stays empty)."""
    comps = connected_components_sorted(G)
    return G.subgraph(comps[0]).copy() if comps else G.copy()


def lcc_fraction(G: nx.Graph, num_nodes: int) -> float:
    """Share of the ``num_nodes`` generated nodes that sit in the largest component."""
    num_nodes = int(num_nodes)
    comps = connected_components_sorted(G)
    if num_nodes <= 0 or not comps:
        return 0.0
    return len(comps[0]) / float(num_nodes)
