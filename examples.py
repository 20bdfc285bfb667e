"""Showcase examples for railplot README."""

from pathlib import Path

from railplot import (
    choice,
    one_or_more,
    optional,
    render_to_svg,
    sequence,
    zero_or_more,
)


def json_number():
    """JSON number: optional sign, integer part, fraction, exponent."""
    digits = one_or_more("0-9")
    return sequence(
        optional("-"),
        choice("0", sequence("1-9", zero_or_more("0-9"))),
        optional(sequence(".", digits)),
        optional(sequence(choice("e", "E"), optional(choice("+", "-")), digits)),
    )


def css_ident_token():
    """CSS <ident-token>."""
    start = choice("a-z A-Z _ or non-ASCII", "escape")
    return sequence(
        choice(optional("-"), "--"),
        start,
        zero_or_more(choice("a-z A-Z 0-9 _ - or non-ASCII", "escape")),
    )


def comma_list():
    """Comma separated list of values inside brackets."""
    value = choice("string", "number", "object", "array", "true", "false", "null")
    return sequence(
        "[",
        optional(sequence(value, zero_or_more(sequence(",", value)))),
        "]",
    )


def main():
    Path("docs").mkdir(exist_ok=True)
    for name, build in [
        ("json_number", json_number),
        ("css_ident_token", css_ident_token),
        ("comma_list", comma_list),
    ]:
        render_to_svg(build(), f"docs/{name}")
        print(f"{name} diagram saved to docs/{name}.svg")


if __name__ == "__main__":
    main()
