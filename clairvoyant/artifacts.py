"""Generated artifacts: pure data handed from the compiler to writer and reporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from clairvoyant.variant import BaseKind

FACTORY_FILENAME = "factory.js"


class ArtifactKind(str, Enum):
    COMPONENT = "component"
    SYSTEM = "system"
    FACTORY = "factory"

    @property
    def folder(self) -> Optional[str]:
        """Output sub-directory, ``None`` for the root."""
        if self is ArtifactKind.COMPONENT:
            return "components"
        if self is ArtifactKind.SYSTEM:
            return "systems"
        return None


@dataclass(frozen=True)
class FactoryFunction:
    """One entity builder inside the factory artifact."""

    entity_type: str
    function_name: str
    code: str


@dataclass(frozen=True)
class Artifact:
    """
    One generated file.

    ``base`` records the library class the generated class derives from
    (``None`` when it stands alone); ``functions`` is only filled for the
    factory.
    """

    kind: ArtifactKind
    name: str
    filename: str
    source: str
    base: Optional[BaseKind] = None
    functions: Tuple[FactoryFunction, ...] = ()

    @property
    def relative_path(self) -> str:
        folder = self.kind.folder
        return f"{folder}/{self.filename}" if folder else self.filename


@dataclass
class CompileResult:
    """Everything a compilation produced, in generation order."""

    components: List[Artifact] = field(default_factory=list)
    factory: Optional[Artifact] = None
    systems: List[Artifact] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)

    @property
    def artifacts(self) -> List[Artifact]:
        ordered = list(self.components)
        if self.factory is not None:
            ordered.append(self.factory)
        ordered.extend(self.systems)
        return ordered

    @property
    def ok(self) -> bool:
        return not self.errors


__all__ = ["Artifact", "ArtifactKind", "CompileResult", "FactoryFunction", "FACTORY_FILENAME"]
