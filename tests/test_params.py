import math

from neongraph.params import GraphParams, clamp_graph_params


def test_defaults_survive_clamp():
    p = GraphParams()
    assert clamp_graph_params(p) == p


def test_ranges_saturate():
    p = clamp_graph_params(GraphParams(
        edge_thickness=10.0,
        node_size=0.0,
        flow_speed=99.0,
        fog_strength=-2.0,
        link_on=-1.0,
        link_off=7.0,
    ))
    assert p.edge_thickness == 0.05
    assert p.node_size == 0.01
    assert p.flow_speed == 5.0
    assert p.fog_strength == 0.0
    assert (p.link_on, p.link_off) == (0.0, 3.0)


def test_reversed_windows_are_swapped():
    p = clamp_graph_params(GraphParams(
        fog_start=0.9, fog_end=0.2,
        link_on=1.5, link_off=0.5,
        nuc_link_on=3.0, nuc_link_off=-1.0,
    ))
    assert (p.fog_start, p.fog_end) == (0.2, 0.9)
    assert (p.link_on, p.link_off) == (0.5, 1.5)
    assert (p.nuc_link_on, p.nuc_link_off) == (0.0, 3.0)


def test_junk_values_fall_back():
    p = clamp_graph_params(GraphParams(edge_thickness=float("nan"), node_size="big", rot_speed=math.inf))
    assert p.edge_thickness == GraphParams.edge_thickness
    assert p.node_size == GraphParams.node_size
    assert p.rot_speed == GraphParams.rot_speed


def test_clamp_returns_new_object():
    raw = GraphParams(edge_thickness=1.0)
    out = clamp_graph_params(raw)
    assert raw.edge_thickness == 1.0
    assert out is not raw
