"""Source location information for AST nodes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SourceLocation:
    """
    Represents a location in source code.

    Lines and columns are 1-based and refer to the preprocessed text, so a
    declaration pulled in through ``#include`` reports its position in the
    expanded source.
    """
    file: str
    line: int
    column: int = 0


__all__ = ["SourceLocation"]
