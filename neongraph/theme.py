"""Neon palette and the colour/thickness decisions keyed on node index and edge kind."""

from enum import Enum

import numpy as np

from neongraph.config import HUB_NODE_STRIDE
from neongraph.types import EdgeKind3


class Palette(Enum):
    MAGENTA = "magenta"
    PURPLE = "purple"
    CYAN = "cyan"
    SKY = "sky"
    GREEN = "green"


# sRGB components in [0, 1].
_PALETTE_SRGB = {
    Palette.MAGENTA: (1.0, 0.0, 1.0),                          # #FF00FF
    Palette.PURPLE: (0.75, 0.0, 1.0),                          # ~#BF00FF
    Palette.CYAN: (123.0 / 255.0, 231.0 / 255.0, 248.0 / 255.0),  # #7BE7F8
    Palette.SKY: (0.0, 191.0 / 255.0, 1.0),                    # #00BFFF
    Palette.GREEN: (np.float32(0.2235) * np.float32(1.75), 1.0, np.float32(0.078) * np.float32(1.6)),  # boosted #39FF14
}


def srgb_to_linear(c):
    """Standard piecewise sRGB transfer function (float32)."""
    c = np.asarray(c, dtype=np.float32)
    lin = np.where(
        c <= np.float32(0.04045),
        c / np.float32(12.92),
        np.power((np.maximum(c, np.float32(0.04045)) + np.float32(0.055)) / np.float32(1.055), np.float32(2.4)),
    )
    return lin.astype(np.float32)[()]


def palette_srgb(p: Palette) -> tuple[float, float, float]:
    r, g, b = (np.float32(v) for v in _PALETTE_SRGB[p])
    return (float(r), float(g), float(b))


def palette_color(p: Palette) -> tuple[float, float, float, float]:
    """Linear-light RGBA; compositing happens in linear space."""
    r, g, b = srgb_to_linear(palette_srgb(p))
    return (float(r), float(g), float(b), 1.0)


def palette_hex(p: Palette) -> str:
    """sRGB hex string for plotting; boosted channels are clipped to 0xFF."""
    r, g, b = (int(round(min(max(v, 0.0), 1.0) * 255)) for v in palette_srgb(p))
    return f"#{r:02X}{g:02X}{b:02X}"


# Edge colour does not depend on kind yet, but every kind must be listed.
_EDGE_PALETTE = {
    EdgeKind3.MESH: Palette.CYAN,
    EdgeKind3.EXTRA: Palette.CYAN,
}


def theme_edge_palette(kind: EdgeKind3) -> Palette:
    return _EDGE_PALETTE[kind]


def theme_edge_color(kind: EdgeKind3) -> tuple[float, float, float, float]:
    return palette_color(theme_edge_palette(kind))


def is_hub_index(index: int) -> bool:
    return index % HUB_NODE_STRIDE == 0


def theme_node_palette(index: int) -> Palette:
    return Palette.MAGENTA if is_hub_index(index) else Palette.CYAN


def theme_node_color(index: int) -> tuple[float, float, float, float]:
    """Hubs (every 23rd index) are magenta, the rest cyan."""
    return palette_color(theme_node_palette(index))


def graph_clear_color_srgb() -> tuple[float, float, float]:
    """Background is transparent black."""
    return (0.0, 0.0, 0.0)


def graph_clear_alpha() -> float:
    return 0.0
