"""Layout constants used across layout modules.

Centralizes the spacing, shape and routing numbers shared by the
layering, geometry and routing passes.
"""

# ---------------------------------------------------------------------------
# Layer grid
# ---------------------------------------------------------------------------
LAYER_SPACING_X: float = 210.0
"""Horizontal distance between the left edges of adjacent layers."""

NODE_SPACING_Y: float = 90.0
"""Vertical gap between stacked nodes within one layer."""

MARGIN: float = 52.0
"""Padding from the canvas edge to the first layer/node."""

DEFAULT_LAYER: int = 2
"""Layer for kinds missing from the layer table (compute/service)."""

# ---------------------------------------------------------------------------
# Crossing minimization
# ---------------------------------------------------------------------------
ORDERING_ROUNDS: int = 4
"""Forward+backward barycenter sweeps before taking the best ordering."""

UNPLACED_BARYCENTER: float = 999.0
"""Sort key for nodes with no neighbor and no previous index."""

# ---------------------------------------------------------------------------
# Node shapes
# ---------------------------------------------------------------------------
NODE_WIDTH: float = 150.0
"""Default (rectangle) node width."""

NODE_HEIGHT: float = 62.0
"""Default (rectangle) node height."""

NODE_CORNER_RADIUS: float = 8.0
"""Corner radius of rectangle nodes."""

DIAMOND_SIZE: tuple[float, float] = (76.0, 76.0)
CYLINDER_SIZE: tuple[float, float] = (136.0, 68.0)
PERSON_SIZE: tuple[float, float] = (58.0, 76.0)

# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------
PORT_PAD_FRACTION: float = 0.2
"""Ports on a crowded side are spread between this fraction and 1 - it."""

CURVE_FACTOR: float = 0.45
"""Control point reach as a fraction of the horizontal endpoint gap."""

MIN_CURVE_REACH: float = 40.0
"""Minimum control point reach so close nodes still get a visible curve."""
