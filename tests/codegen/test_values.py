"""Literal rendering tests."""

from clairvoyant.ast import (
    ArrayLiteral,
    BooleanLiteral,
    NumericLiteral,
    ObjectLiteral,
    Property,
    StringLiteral,
)
from clairvoyant.codegen import format_value, string_literal


def _obj(**values):
    return ObjectLiteral(properties=[Property(name=k, value=v) for k, v in values.items()])


def test_scalars() -> None:
    assert format_value(NumericLiteral(value=0.5, raw="0.50")) == "0.50"
    assert format_value(NumericLiteral(value=1000.0, raw="1e3")) == "1e3"
    assert format_value(BooleanLiteral(value=True)) == "true"
    assert format_value(BooleanLiteral(value=False)) == "false"
    assert format_value(StringLiteral(value="hero")) == "'hero'"


def test_string_escapes() -> None:
    assert string_literal("it's") == "'it\\'s'"
    assert string_literal("a\\b") == "'a\\\\b'"
    assert string_literal("line\nnext\ttab\r") == "'line\\nnext\\ttab\\r'"
    assert string_literal('say "hi"') == "'say \"hi\"'"


def test_empty_containers() -> None:
    assert format_value(ObjectLiteral()) == "{}"
    assert format_value(ArrayLiteral()) == "[]"


def test_nested_layout() -> None:
    value = _obj(
        pos=_obj(x=NumericLiteral(value=1, raw="1")),
        tags=ArrayLiteral(elements=[StringLiteral(value="a")]),
    )
    assert format_value(value, 1) == (
        "{\n"
        "    pos: {\n"
        "        x: 1\n"
        "    },\n"
        "    tags: [\n"
        "        'a'\n"
        "    ]\n"
        "}"
    )


def test_depth_controls_indentation() -> None:
    value = _obj(hp=NumericLiteral(value=10, raw="10"))
    assert format_value(value, 3) == "{\n            hp: 10\n        }"


def test_repeated_keys_are_kept_in_order() -> None:
    value = ObjectLiteral(properties=[
        Property(name="hp", value=NumericLiteral(value=1, raw="1")),
        Property(name="hp", value=NumericLiteral(value=2, raw="2")),
    ])
    assert format_value(value, 1) == "{\n    hp: 1,\n    hp: 2\n}"


def test_line_and_paragraph_separators_are_escaped() -> None:
    value = "a" + chr(0x2028) + "b" + chr(0x2029) + "c"
    assert string_literal(value) == "'a" + "\\" + "u2028b" + "\\" + "u2029c'"
