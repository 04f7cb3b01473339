"""Literal value nodes shared by component, template and property declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .source_location import SourceLocation


@dataclass
class ValueNode:
    """Base class for all literal values."""

    pass


@dataclass
class NumericLiteral(ValueNode):
    """A number; ``raw`` keeps the literal text exactly as written."""

    value: Union[int, float]
    raw: str


@dataclass
class StringLiteral(ValueNode):
    value: str


@dataclass
class BooleanLiteral(ValueNode):
    value: bool


@dataclass
class Property:
    """A ``name: value`` pair inside a component or object literal."""

    name: str
    value: ValueNode
    location: Optional["SourceLocation"] = None


@dataclass
class ObjectLiteral(ValueNode):
    """Ordered properties; a repeated key shadows the earlier one."""

    properties: List[Property] = field(default_factory=list)


@dataclass
class ArrayLiteral(ValueNode):
    elements: List[ValueNode] = field(default_factory=list)


__all__ = [
    "ValueNode",
    "NumericLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "Property",
    "ObjectLiteral",
    "ArrayLiteral",
]
