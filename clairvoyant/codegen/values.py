"""Rendering of literal values as JavaScript source."""

from __future__ import annotations

from clairvoyant.ast import (
    ArrayLiteral,
    BooleanLiteral,
    NumericLiteral,
    ObjectLiteral,
    StringLiteral,
    ValueNode,
)

INDENT = "    "

_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def string_literal(value: str) -> str:
    """Single-quoted JavaScript string."""
    return "'" + "".join(_STRING_ESCAPES.get(char, char) for char in value) + "'"


def format_value(node: ValueNode, depth: int = 0) -> str:
    """
    Render ``node`` as a JavaScript literal.

    Members of a non-empty object or array go on their own lines indented
    ``depth`` levels; the closing bracket sits one level shallower.
    """
    if isinstance(node, NumericLiteral):
        return node.raw
    if isinstance(node, StringLiteral):
        return string_literal(node.value)
    if isinstance(node, BooleanLiteral):
        return "true" if node.value else "false"

    inner = INDENT * depth
    outer = INDENT * max(depth - 1, 0)
    if isinstance(node, ObjectLiteral):
        if not node.properties:
            return "{}"
        members = [
            f"{inner}{prop.name}: {format_value(prop.value, depth + 1)}"
            for prop in node.properties
        ]
        return "{\n" + ",\n".join(members) + "\n" + outer + "}"
    if isinstance(node, ArrayLiteral):
        if not node.elements:
            return "[]"
        members = [f"{inner}{format_value(element, depth + 1)}" for element in node.elements]
        return "[\n" + ",\n".join(members) + "\n" + outer + "]"

    raise TypeError(f"Unknown value type: {type(node).__name__}")


def jsdoc_type(node: ValueNode) -> str:
    if isinstance(node, NumericLiteral):
        return "number"
    if isinstance(node, StringLiteral):
        return "string"
    if isinstance(node, BooleanLiteral):
        return "boolean"
    if isinstance(node, ArrayLiteral):
        return "Array"
    return "Object"


def is_scalar(node: ValueNode) -> bool:
    return isinstance(node, (NumericLiteral, StringLiteral, BooleanLiteral))


__all__ = ["INDENT", "format_value", "is_scalar", "jsdoc_type", "string_literal"]
