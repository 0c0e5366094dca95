import streamlit as st

from neongraph.graph2d import generate
from neongraph.graph3d import (
    build_all_pairs_edges,
    generate_cloud,
    generate_shells,
    generate_sphere,
)
from neongraph.metrics import shell_counts, summarize_graph


# Generators are pure functions of their arguments, so every wrapper is keyed on
# plain ints/floats/tuples and Streamlit's default hasher is enough.

@st.cache_data(show_spinner=False)
def cached_spine_graph(seed: int, num_nodes: int, spine_segments: int):
    return generate(int(seed), int(num_nodes), int(spine_segments))


@st.cache_data(show_spinner=False)
def cached_sphere_graph(seed: int, num_nodes: int, neighbors: int, extra_ratio: float):
    return generate_sphere(int(seed), int(num_nodes), int(neighbors), float(extra_ratio))


@st.cache_data(show_spinner=False)
def cached_cloud_graph(
    seed: int,
    num_nodes: int,
    radius: float,
    neighbors: int,
    extra_ratio: float,
    hub_ratio: float,
):
    return generate_cloud(
        int(seed), int(num_nodes), float(radius), int(neighbors), float(extra_ratio), float(hub_ratio)
    )


@st.cache_data(show_spinner=False)
def cached_shell_graph(
    seed: int,
    num_nodes: int,
    radii: tuple,
    probs: tuple,
    k_intra: int,
    cross_adj: int,
    cross_long_ratio: float,
    hub_ratio: float,
):
    return generate_shells(
        int(seed), int(num_nodes), tuple(radii), tuple(probs),
        int(k_intra), int(cross_adj), float(cross_long_ratio), float(hub_ratio),
    )


@st.cache_data(show_spinner=False)
def cached_all_pairs(nodes: tuple):
    """Complete graph over ``nodes``; quadratic, so cached separately from generation."""
    return build_all_pairs_edges(nodes)


@st.cache_data(show_spinner=False)
def cached_summary(nodes: tuple, edges: tuple) -> dict:
    return dict(summarize_graph(nodes, edges))


@st.cache_data(show_spinner=False)
def cached_shell_counts(nodes: tuple, radii: tuple) -> list:
    return shell_counts(nodes, radii)
