"""Reusable Streamlit UI blocks for the preview page."""

from __future__ import annotations

import plotly.express as px
import streamlit as st

from neongraph.config import PLOT_TEMPLATE


HELP_TEXT = {
    "N": "Количество узлов (Nodes).",
    "E": "Количество уникальных рёбер (пары без повторов).",
    "Density": "Плотность графа.",
    "LCC frac": "Доля узлов в гигантской компоненте.",
    "Lambda2": "Алгебраическая связность (λ₂) нормированного лапласиана на LCC.",
    "H_deg": "Энтропия распределения степеней. Насколько разнообразны «роли» узлов.",
    "mesh": "Структурные рёбра: spine в 2D, mesh в 3D.",
    "extra": "Дополнительные рёбра: link в 2D, extra (хабы, дальние связи) в 3D.",
}


def help_icon(key: str) -> str:
    """Return help text for Streamlit metrics."""
    return HELP_TEXT.get(key, "")


def render_summary_metrics(met: dict) -> None:
    """Render grouped metric cards for a generated graph."""
    with st.container(border=True):
        st.markdown("#### 📐 Основные параметры")
        k1, k2, k3, k4 = st.columns(4)
        k1.metric("N (Nodes)", met.get("N", 0), help=help_icon("N"))
        k2.metric("E (Edges)", met.get("E", 0), help=help_icon("E"))
        k3.metric("Density", f"{float(met.get('density', 0.0)):.6f}", help=help_icon("Density"))
        k4.metric("Avg Degree", f"{float(met.get('avg_degree', 0.0)):.2f}")

    with st.container(border=True):
        st.markdown("#### 🔗 Связность")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Components", met.get("C", "N/A"))
        c2.metric(
            "LCC Size",
            met.get("lcc_size", "N/A"),
            f"{float(met.get('lcc_frac', 0.0)) * 100:.1f}%",
            help=help_icon("LCC frac"),
        )
        c3.metric("Lambda2 (LCC)", f"{float(met.get('l2_lcc', 0.0)):.6f}", help=help_icon("Lambda2"))
        c4.metric("H_deg", f"{float(met.get('H_deg', float('nan'))):.4f}", help=help_icon("H_deg"))

        st.divider()
        e1, e2 = st.columns(2)
        e1.metric("Mesh edges", int(met.get("mesh_edges", 0)), help=help_icon("mesh"))
        e2.metric("Extra edges", int(met.get("extra_edges", 0)), help=help_icon("extra"))


def render_shell_profile(counts: list[int], radii) -> None:
    """Bar chart of node population per shell radius."""
    if not counts:
        st.info("Нет оболочек")
        return
    fig = px.bar(
        x=[f"{float(r):.2f}" for r in radii],
        y=counts,
        title="Shell population",
        labels={"x": "Radius", "y": "Nodes"},
    )
    fig.update_layout(template=PLOT_TEMPLATE, height=320)
    st.plotly_chart(fig, use_container_width=True, key="plot_shell_profile")
