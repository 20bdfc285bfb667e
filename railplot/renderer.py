"""SVG renderer using drawsvg."""

from __future__ import annotations

import logging
import math
from functools import partial
from typing import TYPE_CHECKING

import drawsvg as draw

from .layout import LayoutConfig, layout
from .models import BYPASS_MARKER, Curve, Direction, Leaf, Straight

if TYPE_CHECKING:
    from .layout import MeasureFn
    from .models import Arrowhead, Geometry, Node

logger = logging.getLogger(__name__)


class Theme:
    """Colors and font metrics for diagrams."""

    def __init__(
        self,
        background: str = "#ffffff",
        line_color: str = "#1e293b",
        stroke_width: float = 2,
        leaf_fill: str = "#f8fafc",
        leaf_stroke: str = "#64748b",
        text_color: str = "#1e293b",
        font_family: str = "JetBrains Mono, Consolas, monospace",
        font_size: float = 14,
        char_width: float = 8.5,
        line_height: float = 22,
        text_padding: float = 20,
        corner_radius: float = 4,
        arrowhead_size: float = 8,
        padding: float = 20,
    ):
        self.background = background
        self.line_color = line_color
        self.stroke_width = stroke_width
        self.leaf_fill = leaf_fill
        self.leaf_stroke = leaf_stroke
        self.text_color = text_color
        self.font_family = font_family
        self.font_size = font_size
        self.char_width = char_width
        self.line_height = line_height
        self.text_padding = text_padding
        self.corner_radius = corner_radius
        self.arrowhead_size = arrowhead_size
        self.padding = padding


DEFAULT_THEME = Theme()


def monospace_measure(
    text: str,
    char_width: float = 8.5,
    line_height: float = 22,
    padding: float = 20,
) -> tuple[float, float]:
    """Estimate the rendered size of text in a monospace font.

    Returns:
        (width, height) tuple
    """
    return len(text) * char_width + padding, line_height


def make_monospace_measure(theme: Theme) -> MeasureFn:
    """Bind monospace_measure to a theme's font metrics."""
    return partial(
        monospace_measure,
        char_width=theme.char_width,
        line_height=theme.line_height,
        padding=theme.text_padding,
    )


def arc_sweep(curve: Curve) -> int:
    """SVG sweep flag for drawing curve from its start to its end."""
    cx, cy = curve.center
    sx, sy = curve.start
    ex, ey = curve.end
    cross = (sx - cx) * (ey - cy) - (sy - cy) * (ex - cx)
    return 1 if cross > 0 else 0


class DiagramRenderer:
    """Renders railroad diagrams to SVG."""

    def __init__(
        self,
        theme: Theme | None = None,
        config: LayoutConfig | None = None,
        measure: MeasureFn | None = None,
    ):
        self.theme = theme or DEFAULT_THEME
        self.config = config or LayoutConfig()
        self.measure = measure or make_monospace_measure(self.theme)

    def render(self, node: Node) -> draw.Drawing:
        """Render a node tree to an SVG Drawing object."""
        geometry = layout(node, self.measure, self.config)

        # Short entry and exit runs frame the diagram
        lead = self.config.gap
        origin_x = self.theme.padding + lead
        origin_y = self.theme.padding
        width = geometry.width + 2 * origin_x
        height = geometry.height + 2 * origin_y

        d = draw.Drawing(width, height)
        d.append(
            draw.Rectangle(
                0, 0, width, height,
                fill=self.theme.background,
            )
        )

        line_y = origin_y + geometry.center_y
        self._draw_line(d, self.theme.padding, line_y, origin_x, line_y)
        self._draw_line(
            d, origin_x + geometry.width, line_y, width - self.theme.padding, line_y
        )

        for x, y, g in geometry.walk(origin_x, origin_y):
            for connector in g.connectors:
                self._render_connector(d, x, y, connector)
            for marker in g.markers:
                self._render_marker(d, x, y, marker)
            if isinstance(g.node, Leaf):
                self._render_leaf(d, x, y, g)

        return d

    def _draw_line(self, d: draw.Drawing, x1: float, y1: float, x2: float, y2: float) -> None:
        d.append(
            draw.Line(
                x1, y1, x2, y2,
                stroke=self.theme.line_color,
                stroke_width=self.theme.stroke_width,
            )
        )

    def _render_connector(
        self, d: draw.Drawing, ox: float, oy: float, connector: Straight | Curve
    ) -> None:
        if isinstance(connector, Straight):
            ex, ey = connector.end
            self._draw_line(d, ox + connector.x, oy + connector.y, ox + ex, oy + ey)
            return

        sx, sy = connector.start
        ex, ey = connector.end
        path = draw.Path(
            stroke=self.theme.line_color,
            stroke_width=self.theme.stroke_width,
            fill="none",
        )
        path.M(ox + sx, oy + sy)
        path.A(
            connector.radius, connector.radius, 0, 0, arc_sweep(connector),
            ox + ex, oy + ey,
        )
        d.append(path)

    def _render_marker(self, d: draw.Drawing, ox: float, oy: float, marker: Arrowhead) -> None:
        size = self.theme.arrowhead_size
        angle = math.pi if marker.direction == Direction.LEFT else 0.0
        # Center the triangle on the marker point
        tip_x = ox + marker.x + math.cos(angle) * size / 2
        self._draw_arrowhead(d, tip_x, oy + marker.y, angle, size)

    def _render_leaf(self, d: draw.Drawing, x: float, y: float, g: Geometry) -> None:
        """Render a leaf box with its text, or the skip arrow of an optional."""
        leaf = g.node
        mid_x = x + g.width / 2
        mid_y = y + g.center_y

        if leaf == BYPASS_MARKER:
            self._draw_line(d, x, mid_y, x + g.width, mid_y)
            size = min(self.theme.arrowhead_size, g.width)
            self._draw_arrowhead(d, mid_x + size / 2, mid_y, 0.0, size)
            return

        d.append(
            draw.Rectangle(
                x, y, g.width, g.height,
                rx=self.theme.corner_radius,
                ry=self.theme.corner_radius,
                fill=self.theme.leaf_fill,
                stroke=self.theme.leaf_stroke,
                stroke_width=self.theme.stroke_width,
            )
        )
        d.append(
            draw.Text(
                leaf.text,
                self.theme.font_size,
                mid_x, mid_y,
                fill=self.theme.text_color,
                font_family=self.theme.font_family,
                text_anchor="middle",
                dominant_baseline="middle",
            )
        )

    def _draw_arrowhead(
        self,
        d: draw.Drawing,
        x: float,
        y: float,
        angle: float,
        size: float,
    ) -> None:
        """Draw a filled arrowhead with its tip at (x, y), pointing along angle.

        The base lies ``size * cos(pi / 6)`` behind the tip. Callers that
        want the glyph centred on a layout point, such as the loop-back
        marker or the bypass arrow, shift the tip half a size forward.
        """
        p1_x = x - size * math.cos(angle - math.pi / 6)
        p1_y = y - size * math.sin(angle - math.pi / 6)
        p2_x = x - size * math.cos(angle + math.pi / 6)
        p2_y = y - size * math.sin(angle + math.pi / 6)

        d.append(
            draw.Lines(
                x, y,
                p1_x, p1_y,
                p2_x, p2_y,
                x, y,
                fill=self.theme.line_color,
                stroke="none",
            )
        )


def render_to_svg(
    node: Node,
    filename: str | None = None,
    theme: Theme | None = None,
    config: LayoutConfig | None = None,
    measure: MeasureFn | None = None,
) -> str:
    """Render a node tree to SVG.

    Args:
        node: The diagram to render
        filename: Optional filename to save to (without extension)
        theme: Colors and font metrics
        config: Layout spacing
        measure: Leaf measurement oracle, a monospace estimate by default

    Returns:
        SVG content as string
    """
    renderer = DiagramRenderer(theme=theme, config=config, measure=measure)
    drawing = renderer.render(node)

    if filename:
        drawing.save_svg(f"{filename}.svg")
        logger.info("Saved diagram to %s.svg", filename)

    return drawing.as_svg()
