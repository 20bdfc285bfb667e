"""Layout algorithms for railplot diagrams.

Layout runs in two passes over an immutable node tree:

1. Measure (bottom-up): leaves are sized by a caller-supplied oracle and
   every composite node is sized from its children.
2. Position (top-down): each composite node places its children inside its
   own frame and emits the connector primitives that join them.

The result is a new ``Geometry`` tree; the node tree is never modified.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .models import (
    Arrowhead,
    Choice,
    Curve,
    Direction,
    Geometry,
    Leaf,
    Placement,
    Quadrant,
    Repeat,
    Sequence,
    Straight,
    UnsupportedNodeError,
)

if TYPE_CHECKING:
    from .models import Connector, Node

logger = logging.getLogger(__name__)

# Returns (width, height) for a piece of leaf text
MeasureFn = Callable[[str], Any]

GAP = 16  # Horizontal run before, between and after sequence items
MARGIN = 32  # Extra choice width for the entry and exit junctions
ROWGAP = 16  # Vertical space between choice options
LOOPMARGIN = 32  # Extra repeat width for the loop-back rails
LOOPHEIGHT = 16  # Extra repeat height for the loop-back path
JUNCTION = 8  # Distance of a choice junction from the choice's edge
CORNER_RADIUS = 6


@dataclass
class LayoutConfig:
    """Configuration for layout calculations."""

    gap: int = GAP
    margin: int = MARGIN
    row_gap: int = ROWGAP
    loop_margin: int = LOOPMARGIN
    loop_height: int = LOOPHEIGHT
    junction: int = JUNCTION
    corner_radius: int = CORNER_RADIUS
    # Distance of the loop-back rails from the repeat's edges
    loop_inset: int = 8

    def __post_init__(self) -> None:
        for name, value in vars(self).items():
            if value < 0:
                raise ValueError(f"LayoutConfig.{name} must not be negative, got {value}")
        # Junctions and loop-back rails must sit inside the side margins
        if self.junction >= self.margin // 2:
            raise ValueError(
                f"junction ({self.junction}) must be less than half of margin ({self.margin})"
            )
        if self.loop_inset >= self.loop_margin // 2:
            raise ValueError(
                f"loop_inset ({self.loop_inset}) must be less than half of "
                f"loop_margin ({self.loop_margin})"
            )


@dataclass(frozen=True)
class _Sized:
    """Pass 1 result: a node with its size and its sized children."""

    node: Node
    width: int
    height: int
    children: tuple[_Sized, ...] = ()


def _to_size(result: Any) -> tuple[int, int]:
    """Normalize an oracle result to non-negative integer (width, height)."""
    if isinstance(result, Mapping):
        width, height = result["width"], result["height"]
    elif hasattr(result, "width") and hasattr(result, "height"):
        width, height = result.width, result.height
    else:
        width, height = result
    return max(0, math.floor(width)), max(0, math.floor(height))


def _unsupported(node: Any) -> UnsupportedNodeError:
    return UnsupportedNodeError(f"Cannot lay out {type(node).__name__}: {node!r}")


# Pass 1: measure


def measure_node(node: Node, measure: MeasureFn, config: LayoutConfig) -> _Sized:
    """Size node and all of its descendants, children first."""
    if isinstance(node, Leaf):
        width, height = _to_size(measure(node.text))
        if node.height_override is not None:
            height = node.height_override
        return _Sized(node, width, height)

    if isinstance(node, Sequence):
        children = tuple(measure_node(c, measure, config) for c in node.children)
        width = sum(c.width for c in children) + config.gap * (len(children) + 1)
        height = max((c.height for c in children), default=0)
        return _Sized(node, width, height, children)

    if isinstance(node, Choice):
        children = tuple(measure_node(c, measure, config) for c in node.options)
        width = max((c.width for c in children), default=0) + config.margin
        height = sum(c.height for c in children)
        height += config.row_gap * max(0, len(children) - 1)
        return _Sized(node, width, height, children)

    if isinstance(node, Repeat):
        body = measure_node(node.body, measure, config)
        return _Sized(
            node,
            body.width + config.loop_margin,
            body.height + config.loop_height,
            (body,),
        )

    raise _unsupported(node)


# Connector helpers


def _straight(x: int, y: int, length: int, horizontal: bool = True) -> list[Connector]:
    if length <= 0:
        return []
    return [Straight(x, y, length, horizontal)]


def _curve(x: int, y: int, radius: int, quadrant: Quadrant) -> list[Connector]:
    if radius <= 0:
        return []
    return [Curve(x, y, radius, quadrant)]


def bend(
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    junction_x: int,
    radius: int = CORNER_RADIUS,
) -> list[Connector]:
    """Connect (x0, y0) to (x1, y1), changing rows at junction_x.

    The path is two spans that meet halfway between the rows: the first
    runs right, turns at the junction and covers the upper (or lower) half
    of the vertical distance; the second covers the rest, turns and runs
    right into (x1, y1). Each corner's radius shrinks to fit its span.
    """
    delta = y1 - y0
    if delta == 0:
        return _straight(x0, y0, x1 - x0)

    first = (abs(delta) + 1) // 2
    second = abs(delta) - first
    r1 = min(radius, first, junction_x - x0)
    r2 = min(radius, second, x1 - junction_x)

    connectors = _straight(x0, y0, junction_x - x0 - r1)
    if delta > 0:
        connectors += _curve(junction_x, y0, r1, Quadrant.TOP_RIGHT)
        connectors += _straight(junction_x, y0 + r1, first - r1, horizontal=False)
        connectors += _straight(junction_x, y0 + first, second - r2, horizontal=False)
        connectors += _curve(junction_x, y1, r2, Quadrant.BOTTOM_LEFT)
    else:
        connectors += _curve(junction_x, y0, r1, Quadrant.BOTTOM_RIGHT)
        connectors += _straight(junction_x, y0 - first, first - r1, horizontal=False)
        connectors += _straight(junction_x, y1 + r2, second - r2, horizontal=False)
        connectors += _curve(junction_x, y1, r2, Quadrant.TOP_LEFT)
    connectors += _straight(junction_x + r2, y1, x1 - junction_x - r2)
    return connectors


# Pass 2: position


def position_node(sized: _Sized, config: LayoutConfig) -> Geometry:
    """Place the children of a sized node and emit its connectors."""
    node = sized.node
    width, height = sized.width, sized.height
    center_y = height // 2
    placements: list[tuple[int, int, _Sized]] = []
    connectors: list[Connector] = []
    markers: list[Arrowhead] = []

    if isinstance(node, Leaf):
        pass

    elif isinstance(node, Sequence):
        x = 0
        connectors += _straight(x, center_y, config.gap)
        x += config.gap
        for child in sized.children:
            placements.append((x, (height - child.height) // 2, child))
            x += child.width
            connectors += _straight(x, center_y, config.gap)
            x += config.gap

    elif isinstance(node, Choice):
        y = 0
        for child in sized.children:
            left_x = (width - child.width) // 2
            right_x = left_x + child.width
            child_center = y + child.height // 2
            placements.append((left_x, y, child))
            connectors += bend(
                0, center_y, left_x, child_center,
                config.junction, config.corner_radius,
            )
            connectors += bend(
                right_x, child_center, width, center_y,
                width - config.junction, config.corner_radius,
            )
            y += child.height + config.row_gap

    elif isinstance(node, Repeat):
        body_x = config.loop_margin // 2
        body_y = config.loop_height // 2
        placements.append((body_x, body_y, sized.children[0]))

        # Forward path
        connectors += _straight(0, center_y, body_x)
        connectors += _straight(width - body_x, center_y, body_x)

        # Loop-back path, above the forward path
        left = config.loop_inset
        right = width - config.loop_inset
        r = min(config.corner_radius, center_y // 2, body_x - left)
        connectors += _curve(left, 0, r, Quadrant.TOP_LEFT)
        connectors += _straight(left + r, 0, right - left - 2 * r)
        connectors += _curve(right, 0, r, Quadrant.TOP_RIGHT)
        connectors += _straight(left, r, center_y - 2 * r, horizontal=False)
        connectors += _straight(right, r, center_y - 2 * r, horizontal=False)
        connectors += _curve(left, center_y, r, Quadrant.BOTTOM_LEFT)
        connectors += _straight(left + r, center_y, body_x - left - r)
        connectors += _curve(right, center_y, r, Quadrant.BOTTOM_RIGHT)
        connectors += _straight(width - body_x, center_y, body_x - left - r)
        markers.append(Arrowhead(width // 2, 0, Direction.LEFT))

    else:
        raise _unsupported(node)

    return Geometry(
        node=node,
        width=width,
        height=height,
        children=tuple(
            Placement(x, y, position_node(child, config))
            for x, y, child in placements
        ),
        connectors=tuple(connectors),
        markers=tuple(markers),
    )


def layout(
    node: Node,
    measure: MeasureFn,
    config: LayoutConfig | None = None,
) -> Geometry:
    """Compute the geometry of a node tree.

    Args:
        node: Root of the tree, as built by the DSL
        measure: Oracle returning (width, height) for a leaf's text; a
            mapping or an object with width/height attributes also works
        config: Spacing constants, ``LayoutConfig()`` by default

    Returns:
        A new Geometry tree parallel to the node tree

    Raises:
        UnsupportedNodeError: If the tree holds anything but the four node
            types. Errors raised by ``measure`` propagate unchanged.
    """
    if config is None:
        config = LayoutConfig()

    sized = measure_node(node, measure, config)
    geometry = position_node(sized, config)

    if logger.isEnabledFor(logging.DEBUG):
        primitives = sum(len(g.connectors) for _, _, g in geometry.walk())
        logger.debug(
            "Laid out %s: %dx%d, %d connectors",
            type(node).__name__, geometry.width, geometry.height, primitives,
        )
    return geometry
