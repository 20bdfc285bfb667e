"""Python DSL for building railroad diagram nodes.

Every builder normalizes as it goes, so however calls are nested the
result is the same canonical tree:

    sequence(sequence("a", "b"), "c") == sequence("a", "b", "c")
    choice("x", choice("y", "x")) == choice("x", "y")
    choice("x") == Leaf("x")
"""

from __future__ import annotations

from typing import Union

from .models import (
    BYPASS_MARKER,
    NODE_TYPES,
    Choice,
    InvalidNodeError,
    Leaf,
    Node,
    Repeat,
    Sequence,
)

# Anything the builders accept in place of a node
NodeLike = Union[Node, str]


def leaf_of(content: NodeLike) -> Node:
    """Convert builder input to a node.

    Nodes are returned unchanged and text is wrapped in a ``Leaf``.

    Raises:
        InvalidNodeError: If content is neither a node nor a string.
    """
    if isinstance(content, NODE_TYPES):
        return content
    if isinstance(content, str):
        return Leaf(content)
    raise InvalidNodeError(
        f"Expected a node or a string, got {type(content).__name__}: {content!r}"
    )


def choice(*args: NodeLike) -> Node:
    """Create a branch: exactly one of the options is traversed.

    Usage:
        choice("+", "-")
        choice("true", "false", "null")

    Nested choices are spliced into this one, and a leaf whose text is
    already among the options is dropped (the first one wins). A single
    surviving option is returned as is.

    Leaves are compared by text alone, so a plain ``"▶"`` option given
    before an ``optional(...)`` displaces ``BYPASS_MARKER`` and the skip
    branch is then measured at its full height.

    Args:
        *args: Nodes or strings, one per option

    Returns:
        The single option, or a ``Choice`` over all of them
    """
    if not args:
        raise InvalidNodeError("choice() needs at least one option")

    options: list[Node] = []
    seen_texts: set[str] = set()

    def add_option(arg: NodeLike) -> None:
        if isinstance(arg, Choice):
            for option in arg.options:
                add_option(option)
            return
        option = leaf_of(arg)
        if isinstance(option, Leaf):
            if option.text in seen_texts:
                return
            seen_texts.add(option.text)
        options.append(option)

    for arg in args:
        add_option(arg)

    if len(options) == 1:
        return options[0]
    return Choice(tuple(options))


def optional(node: NodeLike) -> Node:
    """Either traverse node or skip it (``?`` in EBNF)."""
    return choice(BYPASS_MARKER, leaf_of(node))


def one_or_more(node: NodeLike) -> Repeat:
    """Traverse node, then repeat it any number of times (``+`` in EBNF)."""
    return Repeat(body=leaf_of(node))


def zero_or_more(node: NodeLike) -> Node:
    """Traverse node any number of times, including none (``*`` in EBNF)."""
    return optional(one_or_more(node))


def sequence(*args: NodeLike) -> Node:
    """Create a run of items traversed once each, in order.

    Nested sequences are spliced into this one and a single item is
    returned as is.
    """
    if not args:
        raise InvalidNodeError("sequence() needs at least one item")

    items: list[Node] = []

    def add_item(arg: NodeLike) -> None:
        if isinstance(arg, Sequence):
            for child in arg.children:
                add_item(child)
        else:
            items.append(leaf_of(arg))

    for arg in args:
        add_item(arg)

    if len(items) == 1:
        return items[0]
    return Sequence(tuple(items))


# Long-form names
repeat_one_or_more = one_or_more
repeat_zero_or_more = zero_or_more
