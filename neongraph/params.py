"""Renderer parameters and the clamping applied before they reach a frame."""

from dataclasses import dataclass, replace

from neongraph.config import (
    DEFAULT_GRAPH_EDGE_THICKNESS,
    DEFAULT_GRAPH_FLOW_SPEED,
    DEFAULT_GRAPH_FOG_END,
    DEFAULT_GRAPH_FOG_START,
    DEFAULT_GRAPH_FOG_STRENGTH,
    DEFAULT_GRAPH_NODE_SIZE,
    DEFAULT_GRAPH_ROT_SPEED,
    DEFAULT_LINK_OFF,
    DEFAULT_LINK_ON,
    DEFAULT_NUCLEUS_LINK_OFF,
    DEFAULT_NUCLEUS_LINK_ON,
)
from neongraph.utils import clamp, safe_float


@dataclass(frozen=True)
class GraphParams:
    edge_thickness: float = DEFAULT_GRAPH_EDGE_THICKNESS
    node_size: float = DEFAULT_GRAPH_NODE_SIZE
    flow_speed: float = DEFAULT_GRAPH_FLOW_SPEED
    rot_speed: float = DEFAULT_GRAPH_ROT_SPEED
    fog_start: float = DEFAULT_GRAPH_FOG_START
    fog_end: float = DEFAULT_GRAPH_FOG_END
    fog_strength: float = DEFAULT_GRAPH_FOG_STRENGTH
    link_on: float = DEFAULT_LINK_ON
    link_off: float = DEFAULT_LINK_OFF
    nuc_link_on: float = DEFAULT_NUCLEUS_LINK_ON
    nuc_link_off: float = DEFAULT_NUCLEUS_LINK_OFF


def _ordered(lo: float, hi: float) -> tuple[float, float]:
    return (lo, hi) if lo <= hi else (hi, lo)


def clamp_graph_params(p: GraphParams) -> GraphParams:
    """
    Saturate every field into its valid range.

    Fog and fade windows are swapped when given in reverse, so
    ``start <= end`` and ``on <= off`` always hold afterwards.
    """
    fog_start, fog_end = _ordered(
        clamp(safe_float(p.fog_start), 0.0, 1.0),
        clamp(safe_float(p.fog_end), 0.0, 1.0),
    )
    link_on, link_off = _ordered(
        clamp(safe_float(p.link_on), 0.0, 3.0),
        clamp(safe_float(p.link_off), 0.0, 3.0),
    )
    nuc_on, nuc_off = _ordered(
        max(safe_float(p.nuc_link_on), 0.0),
        max(safe_float(p.nuc_link_off), 0.0),
    )
    return replace(
        p,
        edge_thickness=clamp(safe_float(p.edge_thickness, DEFAULT_GRAPH_EDGE_THICKNESS), 0.0005, 0.05),
        node_size=clamp(safe_float(p.node_size, DEFAULT_GRAPH_NODE_SIZE), 0.01, 0.3),
        flow_speed=clamp(safe_float(p.flow_speed, DEFAULT_GRAPH_FLOW_SPEED), 0.1, 5.0),
        rot_speed=safe_float(p.rot_speed, DEFAULT_GRAPH_ROT_SPEED),
        fog_start=fog_start,
        fog_end=fog_end,
        fog_strength=clamp(safe_float(p.fog_strength), 0.0, 1.0),
        link_on=link_on,
        link_off=link_off,
        nuc_link_on=nuc_on,
        nuc_link_off=nuc_off,
    )
