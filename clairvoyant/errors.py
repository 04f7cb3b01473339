"""Unified error model for Clairvoyant."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}"
        if self.path:
            return self.path
        return "unknown location"


class CVError(Exception):
    """Base class for all compiler errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)

    def to_dict(self) -> dict:
        payload = {
            "type": self.__class__.__name__,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }
        if self.path:
            payload["path"] = self.path
        if self.code:
            payload["code"] = self.code
        if self.hint:
            payload["hint"] = self.hint
        return payload


class CVSyntaxError(CVError):
    """Raised when the source text is malformed."""

    code = "SYNTAX_ERROR"


class CVIncludeError(CVSyntaxError):
    """Raised when an include directive cannot be expanded."""

    code = "INCLUDE_ERROR"


class CVResolutionError(CVError):
    """Raised when a template parent or system base cannot be resolved."""

    code = "RESOLUTION_ERROR"


class CVValidationError(CVError):
    """Raised for a declaration that resolves but cannot be generated."""

    code = "VALIDATION_ERROR"


class CVWriteError(CVError):
    """Raised when an artifact cannot be persisted."""

    code = "WRITE_ERROR"


class CVWarningError(CVError):
    """Raised when a warning stops the build."""

    code = "WARNING_ABORT"


__all__ = [
    "CVError",
    "CVSyntaxError",
    "CVIncludeError",
    "CVResolutionError",
    "CVValidationError",
    "CVWriteError",
    "CVWarningError",
    "ErrorLocation",
]
