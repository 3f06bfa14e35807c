"""Render constants used across render modules.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
TITLE_Y: float = 30.0
"""Baseline of the diagram title above the first node row."""

# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------
CYLINDER_CAP_RY: float = 10.0
"""Vertical radius of the cylinder top/bottom ellipses."""

PERSON_HEAD_RATIO: float = 0.22
"""Head radius of the person silhouette as a fraction of node width."""

PERSON_BODY_RATIO: float = 0.3
"""Half-width of the person body as a fraction of node width."""

PERSON_LABEL_GAP: float = 16.0
"""Distance from the bottom of a person silhouette to its label."""

LABEL_OFFSET_WITH_ICON: float = 10.0
"""Label offset below centre when an icon sits above it."""

LABEL_OFFSET_NO_ICON: float = 5.0
"""Label offset below centre without an icon."""

ICON_OFFSET: float = 10.0
"""Icon offset above centre."""

KIND_CAPTION_GAP: float = 14.0
"""Distance from the label baseline to the kind caption."""

KIND_CAPTION_FONT_SIZE: float = 9.0

ICON_VIEWBOX: float = 24.0
"""Icon paths are drawn on a 24x24 grid."""

# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------
EDGE_LABEL_LIFT: float = 8.0
"""Edge labels sit this far above the connector midpoint."""

EDGE_LABEL_FONT_SIZE: float = 9.0
