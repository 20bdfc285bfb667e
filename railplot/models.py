"""Data models for railplot diagrams.

Two parallel immutable trees live here: the node tree a grammar is written
in, and the geometry tree the layout engine derives from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterator


class RailplotError(Exception):
    """Base class for railplot errors."""


class InvalidNodeError(RailplotError, TypeError):
    """A builder argument is neither a node nor text."""


class UnsupportedNodeError(RailplotError, TypeError):
    """The layout engine met an object outside the known node types."""


# Nodes


@dataclass(frozen=True)
class Leaf:
    """Terminal content: a piece of text or a glyph."""

    text: str
    # Replaces the measured height when set (used by the bypass marker)
    height_override: int | None = None


@dataclass(frozen=True)
class Sequence:
    """Traverse every child once, left to right."""

    children: tuple[Node, ...]


@dataclass(frozen=True)
class Choice:
    """Traverse exactly one of the options."""

    options: tuple[Node, ...]


@dataclass(frozen=True)
class Repeat:
    """Traverse the body, then optionally loop back and traverse it again."""

    body: Node


Node = Union[Leaf, Sequence, Choice, Repeat]

NODE_TYPES = (Leaf, Sequence, Choice, Repeat)

# Skip arrow drawn on the empty branch of an optional construct
BYPASS_MARKER_TEXT = "▶"
BYPASS_MARKER_HEIGHT = 8
BYPASS_MARKER = Leaf(BYPASS_MARKER_TEXT, height_override=BYPASS_MARKER_HEIGHT)


# Geometry


class Quadrant(Enum):
    """Which corner of a box a curve rounds off."""

    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


class Direction(Enum):
    """Direction an arrowhead points in."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Straight:
    """A straight connector run.

    (x, y) is the left end of a horizontal run or the top end of a
    vertical one.
    """

    x: int
    y: int
    length: int
    horizontal: bool = True

    @property
    def end(self) -> tuple[int, int]:
        if self.horizontal:
            return self.x + self.length, self.y
        return self.x, self.y + self.length


@dataclass(frozen=True)
class Curve:
    """A quarter circle rounding off the sharp corner at (x, y).

    For ``TOP_RIGHT`` the arc runs from (x - radius, y) to (x, y + radius);
    the other quadrants are mirror images of it.
    """

    x: int
    y: int
    radius: int
    quadrant: Quadrant

    @property
    def _signs(self) -> tuple[int, int]:
        # Unit offsets from the corner towards the arc's center
        sx = 1 if self.quadrant in (Quadrant.TOP_LEFT, Quadrant.BOTTOM_LEFT) else -1
        sy = 1 if self.quadrant in (Quadrant.TOP_LEFT, Quadrant.TOP_RIGHT) else -1
        return sx, sy

    @property
    def center(self) -> tuple[int, int]:
        sx, sy = self._signs
        return self.x + sx * self.radius, self.y + sy * self.radius

    @property
    def start(self) -> tuple[int, int]:
        """Endpoint on the horizontal edge of the corner."""
        sx, _ = self._signs
        return self.x + sx * self.radius, self.y

    @property
    def end(self) -> tuple[int, int]:
        """Endpoint on the vertical edge of the corner."""
        _, sy = self._signs
        return self.x, self.y + sy * self.radius


@dataclass(frozen=True)
class Arrowhead:
    """A direction glyph centered at (x, y)."""

    x: int
    y: int
    direction: Direction = Direction.RIGHT


Connector = Union[Straight, Curve]


@dataclass(frozen=True)
class Placement:
    """A child's offset inside its parent's local frame."""

    x: int
    y: int
    geometry: Geometry


@dataclass(frozen=True)
class Geometry:
    """Computed size and connectors of one node, in its own local frame."""

    node: Node
    width: int
    height: int
    children: tuple[Placement, ...] = field(default=())
    connectors: tuple[Connector, ...] = field(default=())
    markers: tuple[Arrowhead, ...] = field(default=())

    @property
    def center_y(self) -> int:
        """Height of the entry and exit lines."""
        return self.height // 2

    def walk(self, x: int = 0, y: int = 0) -> Iterator[tuple[int, int, Geometry]]:
        """Yield (x, y, geometry) for this node and all descendants, pre-order,
        in absolute coordinates."""
        yield x, y, self
        for placement in self.children:
            yield from placement.geometry.walk(x + placement.x, y + placement.y)
