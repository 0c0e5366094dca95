# app.py
import numpy as np
import pandas as pd
import streamlit as st

from compute import (
    cached_all_pairs,
    cached_cloud_graph,
    cached_shell_counts,
    cached_shell_graph,
    cached_spine_graph,
    cached_sphere_graph,
    cached_summary,
)
from neongraph.config import (
    DEFAULT_CROSS_ADJ,
    DEFAULT_CROSS_LONG_RATIO,
    DEFAULT_HUB_RATIO,
    DEFAULT_K_INTRA,
    DEFAULT_NUM_NODES,
    DEFAULT_SEED,
    MAX_CROSS_ADJ,
    MAX_NEIGHBORS,
    MIN_NODES,
    PLOT_HEIGHT,
    SHELL_RADII,
)
from neongraph.graph3d import build_nucleus_segments
from neongraph.logging_config import setup_logging
from neongraph.params import GraphParams, clamp_graph_params
from neongraph.scene import GraphScene, ShellProfile, animated_positions, frame_uniforms
from neongraph.ui_blocks import render_shell_profile, render_summary_metrics
from neongraph.viz import make_2d_figure, make_graph_figure

# ==========================================
# 0. CONFIG & STYLES
# ==========================================
st.set_page_config(
    page_title="Neon Graph",
    layout="wide",
    page_icon="🕸️",
    initial_sidebar_state="expanded",
)

st.markdown(
    """
    <style>
    div[data-testid="stMetricValue"] { font-size: 1.4rem !important; }
    </style>
    """,
    unsafe_allow_html=True,
)

logger = setup_logging()

GENERATORS = {
    "Spine 2D": "spine",
    "Fibonacci sphere": "sphere",
    "Solid cloud": "cloud",
    "Multi-shell": "shells",
}
PROFILES = {
    "Default": ShellProfile.DEFAULT,
    "Inner-heavy": ShellProfile.INNER,
}

# ==========================================
# 1. SIDEBAR
# ==========================================
with st.sidebar:
    st.title("🎛️ Neon Graph")

    gen_label = st.selectbox("Генератор", list(GENERATORS.keys()), index=3)
    gen_kind = GENERATORS[gen_label]

    seed = int(st.number_input("Random Seed", value=DEFAULT_SEED, step=1))
    num_nodes = int(st.slider("Узлы", MIN_NODES, 1200, DEFAULT_NUM_NODES, 4))

    st.markdown("---")
    st.markdown("**⚙️ Параметры генератора**")
    spine_segments = 6
    neighbors, extra_ratio = DEFAULT_K_INTRA, 0.1
    radius, hub_ratio = 1.2, DEFAULT_HUB_RATIO
    profile = ShellProfile.DEFAULT
    cross_adj, cross_long = DEFAULT_CROSS_ADJ, DEFAULT_CROSS_LONG_RATIO

    if gen_kind == "spine":
        spine_segments = int(st.slider("Сегменты позвоночника", 1, 64, 6))
    else:
        neighbors = int(st.slider("k соседей", 1, MAX_NEIGHBORS, DEFAULT_K_INTRA))
    if gen_kind in ("sphere", "cloud"):
        extra_ratio = float(st.slider("Доля дальних рёбер", 0.0, 1.0, 0.1, 0.01))
    if gen_kind == "cloud":
        radius = float(st.slider("Радиус облака", 0.1, 2.0, 1.2, 0.05))
    if gen_kind in ("cloud", "shells"):
        hub_ratio = float(st.slider("Доля хабов", 0.0, 0.5, DEFAULT_HUB_RATIO, 0.01))
    if gen_kind == "shells":
        profile = PROFILES[st.radio("Профиль оболочек", list(PROFILES.keys()), horizontal=True)]
        cross_adj = int(st.slider("Связи с соседними оболочками", 0, MAX_CROSS_ADJ, DEFAULT_CROSS_ADJ))
        cross_long = float(st.slider("Доля дальних межоболочечных", 0.0, 1.0, DEFAULT_CROSS_LONG_RATIO, 0.01))

    st.markdown("---")
    st.markdown("**🔍 Режим рёбер**")
    all_pairs = st.toggle("All-pairs (полный граф)", False, disabled=gen_kind == "spine")
    nucleus = st.toggle("Ядро (радиальные спицы)", False, disabled=gen_kind == "spine")
    t_preview = float(st.slider("Время (дрейф), с", 0.0, 60.0, 0.0, 0.5, disabled=gen_kind == "spine"))

    with st.expander("🎨 Параметры рендера", expanded=False):
        params = clamp_graph_params(GraphParams(
            edge_thickness=st.number_input("Edge thickness", value=GraphParams.edge_thickness, format="%.4f"),
            node_size=st.number_input("Node size", value=GraphParams.node_size, format="%.3f"),
            flow_speed=st.number_input("Flow speed", value=GraphParams.flow_speed),
            rot_speed=st.number_input("Rotation speed", value=GraphParams.rot_speed, format="%.3f"),
            fog_start=st.slider("Fog start", 0.0, 1.0, GraphParams.fog_start),
            fog_end=st.slider("Fog end", 0.0, 1.0, GraphParams.fog_end),
            fog_strength=st.slider("Fog strength", 0.0, 1.0, GraphParams.fog_strength),
            link_on=st.slider("Link on", 0.0, 3.0, GraphParams.link_on),
            link_off=st.slider("Link off", 0.0, 3.0, GraphParams.link_off),
        ))

# ==========================================
# 2. BUILD GRAPH
# ==========================================
segments = []
scene = None
if gen_kind == "spine":
    nodes, edges = cached_spine_graph(seed, num_nodes, spine_segments)
elif gen_kind == "sphere":
    nodes, edges = cached_sphere_graph(seed, num_nodes, neighbors, extra_ratio)
elif gen_kind == "cloud":
    nodes, edges = cached_cloud_graph(seed, num_nodes, radius, neighbors, extra_ratio, hub_ratio)
else:
    scene = GraphScene(
        seed=seed,
        num_nodes=num_nodes,
        profile=profile,
        all_pairs=all_pairs,
        nucleus=nucleus,
        k_intra=neighbors,
        cross_adj=cross_adj,
        cross_long_ratio=cross_long,
        hub_ratio=hub_ratio,
    )
    scene.set_params(params)
    graph = cached_shell_graph(
        seed, num_nodes, tuple(scene.radii), tuple(scene.shell_probs),
        neighbors, cross_adj, cross_long, hub_ratio,
    )
    buffers = scene.build(
        graph=graph,
        all_pairs_edges=cached_all_pairs(graph[0]) if all_pairs else None,
    )
    nodes, edges, segments = buffers.nodes, buffers.edges, buffers.segments

if gen_kind in ("sphere", "cloud"):
    if all_pairs:
        edges = cached_all_pairs(nodes)
    if nucleus:
        segments = build_nucleus_segments(nodes)

summary = cached_summary(tuple(nodes), tuple(edges))
logger.info("preview: %s nodes=%d edges=%d", gen_kind, summary["N"], len(edges))

# ==========================================
# 3. MAIN TABS
# ==========================================
tab_view, tab_metrics, tab_frame = st.tabs(["🕸️ Граф", "📊 Метрики", "🧮 Кадр"])

with tab_view:
    if len(edges) > 20000:
        st.warning(f"Много рёбер ({len(edges)}). Рендеринг может тормозить.")
    if gen_kind == "spine":
        fig = make_2d_figure(nodes, edges, height=PLOT_HEIGHT)
    else:
        positions = animated_positions(nodes, t_preview, params.flow_speed) if t_preview > 0 else None
        fig = make_graph_figure(nodes, edges, positions=positions, segments=segments, height=PLOT_HEIGHT)
    st.plotly_chart(fig, use_container_width=True, key="plot_graph")

with tab_metrics:
    render_summary_metrics(summary)
    if gen_kind == "shells":
        render_shell_profile(cached_shell_counts(tuple(nodes), SHELL_RADII), SHELL_RADII)

with tab_frame:
    if scene is None:
        st.info("Буферы экземпляров строятся только для многослойного режима.")
    else:
        st.caption(f"Edge instances: {len(buffers.edge_frame)} | Node instances: {len(buffers.node_frame)}")
        st.dataframe(buffers.edge_frame.head(200), use_container_width=True)
        uni = frame_uniforms(scene.params, t_preview * 1000.0, 1280, 720)
        st.dataframe(
            pd.DataFrame({k: np.ravel(v)[:4] for k, v in uni.items() if k != "view_proj"}),
            use_container_width=True,
        )
