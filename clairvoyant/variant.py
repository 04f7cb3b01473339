"""Target runtime variants and the base kinds generated classes derive from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class TickHook:
    """Per-tick method stubbed onto a system class."""

    name: str
    param: str
    param_type: str
    order: str
    summary: str


DRAW_HOOK = TickHook(
    name="draw",
    param="c",
    param_type="CanvasRenderingContext2D",
    order="drawOrder",
    summary="Draw every entity in draw order",
)

UPDATE_HOOK = TickHook(
    name="update",
    param="delta",
    param_type="number",
    order="actionOrder",
    summary="Update every entity in action order",
)


class BaseKind(str, Enum):
    """Library class a generated class inherits from."""

    COMPONENT = "Component"
    SYSTEM = "System"
    RENDER_SYSTEM = "RenderSystem"
    BEHAVIOR_SYSTEM = "BehaviorSystem"

    @property
    def tick_hook(self) -> Optional[TickHook]:
        if self is BaseKind.RENDER_SYSTEM:
            return DRAW_HOOK
        if self in (BaseKind.BEHAVIOR_SYSTEM, BaseKind.SYSTEM):
            return UPDATE_HOOK
        return None


SYSTEM_PARENTS_2D = (BaseKind.RENDER_SYSTEM, BaseKind.BEHAVIOR_SYSTEM)


class Variant(str, Enum):
    """Runtime integration mode, fixed for one compilation."""

    TWO_D = "2d"
    THREE_D = "3d"

    @property
    def module_name(self) -> str:
        return f"psykick{self.value}"

    @property
    def honours_system_inheritance(self) -> bool:
        return self is Variant.TWO_D

    @classmethod
    def parse(cls, value: "str | Variant") -> "Variant":
        if isinstance(value, Variant):
            return value
        normalized = str(value).strip().lower()
        for variant in cls:
            if variant.value == normalized:
                return variant
        raise ValueError(f"Unknown variant '{value}' (expected '2d' or '3d')")


__all__ = [
    "BaseKind",
    "TickHook",
    "Variant",
    "DRAW_HOOK",
    "UPDATE_HOOK",
    "SYSTEM_PARENTS_2D",
]
