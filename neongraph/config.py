"""Global configuration and constants."""

# Renderer defaults
DEFAULT_GRAPH_EDGE_THICKNESS = 0.006
DEFAULT_GRAPH_NODE_SIZE = 0.08
DEFAULT_GRAPH_FLOW_SPEED = 1.0
DEFAULT_GRAPH_ROT_SPEED = 0.04
DEFAULT_GRAPH_FOG_START = 0.55
DEFAULT_GRAPH_FOG_END = 0.95
DEFAULT_GRAPH_FOG_STRENGTH = 0.8
DEFAULT_LINK_ON = 0.80
DEFAULT_LINK_OFF = 1.40
DEFAULT_NUCLEUS_LINK_ON = 0.30
DEFAULT_NUCLEUS_LINK_OFF = 2.00

# Scene defaults (multi-shell layout)
DEFAULT_SEED = 1337
DEFAULT_NUM_NODES = 240
SHELL_RADII = (0.6, 0.8, 1.0, 1.2, 1.4)
SHELL_PROBS_DEFAULT = (0.15, 0.20, 0.30, 0.20, 0.15)
SHELL_PROBS_INNER = (0.34, 0.26, 0.20, 0.12, 0.08)  # descending: inner-heavy
DEFAULT_K_INTRA = 4
DEFAULT_CROSS_ADJ = 1
DEFAULT_CROSS_LONG_RATIO = 0.15
DEFAULT_HUB_RATIO = 0.05

# Generator limits
MIN_NODES = 4
MAX_NEIGHBORS = 12
MAX_CROSS_ADJ = 3
HUB_EXTRA_NEIGHBORS = 4

# Theming
HUB_NODE_STRIDE = 23
LARGE_NODE_STRIDE = 29
LARGE_NODE_SIZE = 1.6
NUCLEUS_NODE_SIZE = 2.0

# Visualization defaults
PLOT_HEIGHT = 800
PLOT_TEMPLATE = "plotly_dark"
