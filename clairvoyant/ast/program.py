"""Program level AST nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .base import Property
from .source_location import SourceLocation


@dataclass
class Component:
    """
    A named bundle of properties.

    Used both for top-level component declarations (where the properties are
    the defaults) and for component instances inside a template (where they
    are the overrides handed to the constructor).
    """

    name: str
    properties: List[Property] = field(default_factory=list)
    location: Optional[SourceLocation] = None


@dataclass
class Template:
    name: str
    parent: Optional[str] = None
    components: List[Component] = field(default_factory=list)
    location: Optional[SourceLocation] = None


@dataclass
class ComponentList:
    """Explicit system requirement."""

    components: List[str] = field(default_factory=list)


@dataclass
class EntityList:
    """Implicit system requirement derived from the named templates."""

    entities: List[str] = field(default_factory=list)


Requirement = Union[ComponentList, EntityList]


@dataclass
class System:
    name: str
    requirement: Requirement
    parent: Optional[str] = None
    location: Optional[SourceLocation] = None


@dataclass
class Program:
    """Root of the AST; one per compilation."""

    name: str
    components: List[Component] = field(default_factory=list)
    templates: List[Template] = field(default_factory=list)
    systems: List[System] = field(default_factory=list)


__all__ = [
    "Component",
    "Template",
    "ComponentList",
    "EntityList",
    "Requirement",
    "System",
    "Program",
]
