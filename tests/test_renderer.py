import logging

import drawsvg as draw

from railplot.dsl import choice, one_or_more, optional, sequence
from railplot.layout import layout
from railplot.models import Curve, Quadrant
from railplot.renderer import (
    DiagramRenderer,
    Theme,
    arc_sweep,
    make_monospace_measure,
    monospace_measure,
    render_to_svg,
)


def test_monospace_measure():
    assert monospace_measure("abcd") == (4 * 8.5 + 20, 22)
    assert monospace_measure("ab", char_width=10, line_height=30, padding=0) == (20, 30)


def test_make_monospace_measure_uses_theme_metrics():
    measure = make_monospace_measure(Theme(char_width=5, line_height=12, text_padding=2))

    assert measure("abc") == (17, 12)


def test_arc_sweep_follows_quadrant():
    assert arc_sweep(Curve(10, 10, 6, Quadrant.TOP_LEFT)) == 0
    assert arc_sweep(Curve(10, 10, 6, Quadrant.TOP_RIGHT)) == 1
    assert arc_sweep(Curve(10, 10, 6, Quadrant.BOTTOM_LEFT)) == 1
    assert arc_sweep(Curve(10, 10, 6, Quadrant.BOTTOM_RIGHT)) == 0


def test_render_returns_drawing_sized_to_layout():
    node = sequence("a", "bc")
    theme = Theme(padding=10)
    renderer = DiagramRenderer(theme=theme)

    drawing = renderer.render(node)

    geometry = layout(node, make_monospace_measure(theme))
    assert isinstance(drawing, draw.Drawing)
    assert drawing.width == geometry.width + 2 * (10 + 16)
    assert drawing.height == geometry.height + 2 * 10


def test_svg_has_one_text_per_leaf():
    node = sequence("if", choice("x", "y"), optional("else"))

    svg = render_to_svg(node)

    # The bypass marker is drawn as an arrow, not as text
    assert svg.count("<text") == 4
    for word in ("if", "x", "y", "else"):
        assert f">{word}</text>" in svg


def test_svg_draws_loop_back_arcs():
    svg = render_to_svg(one_or_more("item"), measure=lambda text: (40, 20))

    # Four rounded corners on the loop-back path
    assert svg.count("A6") == 4


def test_render_to_svg_saves_file(tmp_path, caplog):
    target = tmp_path / "number"

    with caplog.at_level(logging.INFO, logger="railplot.renderer"):
        svg = render_to_svg(sequence("0", one_or_more("0-9")), str(target))

    saved = (tmp_path / "number.svg").read_text()
    assert saved.startswith("<?xml") or saved.startswith("<svg")
    assert "<svg" in svg
    assert "number.svg" in caplog.text
