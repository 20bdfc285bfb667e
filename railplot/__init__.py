"""railplot - Railroad syntax diagrams with a Python DSL.

Example usage:
    from railplot import (
        choice, one_or_more, optional, render_to_svg, sequence, zero_or_more,
    )

    number = sequence(
        optional("-"),
        choice("0", sequence("1-9", zero_or_more("0-9"))),
        optional(sequence(".", one_or_more("0-9"))),
    )
    render_to_svg(number, "number")

Layout alone needs only a measurement function:
    from railplot import layout

    geometry = layout(number, lambda text: (len(text) * 8 + 20, 22))
"""

from .dsl import (
    choice,
    leaf_of,
    one_or_more,
    optional,
    repeat_one_or_more,
    repeat_zero_or_more,
    sequence,
    zero_or_more,
)
from .layout import (
    CORNER_RADIUS,
    GAP,
    JUNCTION,
    LOOPHEIGHT,
    LOOPMARGIN,
    MARGIN,
    ROWGAP,
    LayoutConfig,
    layout,
)
from .models import (
    BYPASS_MARKER,
    BYPASS_MARKER_HEIGHT,
    Arrowhead,
    Choice,
    Curve,
    Direction,
    Geometry,
    InvalidNodeError,
    Leaf,
    Placement,
    Quadrant,
    RailplotError,
    Repeat,
    Sequence,
    Straight,
    UnsupportedNodeError,
)
from .renderer import (
    DEFAULT_THEME,
    DiagramRenderer,
    Theme,
    monospace_measure,
    render_to_svg,
)

__version__ = "0.1.0"

__all__ = [
    # DSL functions
    "sequence",
    "choice",
    "optional",
    "one_or_more",
    "zero_or_more",
    "repeat_one_or_more",
    "repeat_zero_or_more",
    "leaf_of",
    # Nodes
    "Leaf",
    "Sequence",
    "Choice",
    "Repeat",
    "BYPASS_MARKER",
    "BYPASS_MARKER_HEIGHT",
    # Layout
    "layout",
    "LayoutConfig",
    "GAP",
    "MARGIN",
    "ROWGAP",
    "LOOPMARGIN",
    "LOOPHEIGHT",
    "JUNCTION",
    "CORNER_RADIUS",
    # Geometry
    "Geometry",
    "Placement",
    "Straight",
    "Curve",
    "Arrowhead",
    "Quadrant",
    "Direction",
    # Errors
    "RailplotError",
    "InvalidNodeError",
    "UnsupportedNodeError",
    # Rendering
    "render_to_svg",
    "DiagramRenderer",
    "Theme",
    "DEFAULT_THEME",
    "monospace_measure",
    # Version
    "__version__",
]
