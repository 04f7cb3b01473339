"""Dataclasses representing the abstract syntax tree of a Clairvoyant program."""

from .base import (
    ArrayLiteral,
    BooleanLiteral,
    NumericLiteral,
    ObjectLiteral,
    Property,
    StringLiteral,
    ValueNode,
)
from .program import (
    Component,
    ComponentList,
    EntityList,
    Program,
    Requirement,
    System,
    Template,
)
from .source_location import SourceLocation

__all__ = [
    "ArrayLiteral",
    "BooleanLiteral",
    "NumericLiteral",
    "ObjectLiteral",
    "Property",
    "StringLiteral",
    "ValueNode",
    "Component",
    "ComponentList",
    "EntityList",
    "Program",
    "Requirement",
    "System",
    "Template",
    "SourceLocation",
]
