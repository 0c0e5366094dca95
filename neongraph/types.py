"""Typed schemas for structured data passed between modules."""

from dataclasses import dataclass
from enum import Enum
from typing import TypedDict


class EdgeKind(Enum):
    """Kinds of 2D edges."""

    SPINE = "spine"
    LINK = "link"


class EdgeKind3(Enum):
    """Kinds of 3D edges: structural mesh vs. long-range/cross-shell extras."""

    MESH = "mesh"
    EXTRA = "extra"


@dataclass(frozen=True)
class Node:
    id: int
    pos: tuple[float, float]  # NDC: [-1,1]x[-1,1]
    level: int  # 0: spine, 1+: satellite tier


@dataclass(frozen=True)
class Edge:
    a: int
    b: int
    kind: EdgeKind


@dataclass(frozen=True)
class Node3:
    id: int
    pos: tuple[float, float, float]


@dataclass(frozen=True)
class Edge3:
    a: int
    b: int
    kind: EdgeKind3


class GraphSummary(TypedDict, total=False):
    """Schema for structural metrics of a generated graph."""

    # Basic
    N: int
    E: int
    density: float
    avg_degree: float

    # Components
    C: int
    lcc_size: int
    lcc_frac: float

    # Spectrum & entropy
    l2_lcc: float
    H_deg: float

    # Edge kinds
    mesh_edges: int
    extra_edges: int
