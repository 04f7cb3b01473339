"""Validation of CLI arguments."""

import os
from pathlib import Path
from typing import Any, Optional

from .errors import CLIFileNotFoundError, CLIValidationError


def validate_path(value: Any, *, allow_none: bool = False, must_exist: bool = False) -> Optional[Path]:
    """
    Validate and convert value to Path.

    Raises:
        CLIValidationError: If value is not path-like
        CLIFileNotFoundError: If ``must_exist`` and the path is missing
    """
    if value is None:
        if allow_none:
            return None
        raise CLIValidationError(
            "Path value cannot be None",
            hint="Provide a valid file or directory path"
        )

    if isinstance(value, (str, os.PathLike)):
        path = Path(value)

        if must_exist and not path.exists():
            raise CLIFileNotFoundError(
                f"Path does not exist: {path}",
                hint="Ensure the file exists before running this command",
                context={"path": str(path)},
            )

        return path

    raise CLIValidationError(
        f"Expected path-like value, got {type(value).__name__}",
        hint="Provide a string or Path object"
    )


def validate_source_file(value: Any) -> Path:
    path = validate_path(value, must_exist=True)
    if path.is_dir():
        raise CLIValidationError(
            f"Source must be a file, got directory: {path}",
            hint="Point --src at a .cvt file",
        )
    return path


def validate_output_dir(value: Any) -> Optional[Path]:
    path = validate_path(value, allow_none=True)
    if path is not None and path.exists() and not path.is_dir():
        raise CLIValidationError(
            f"Output path is not a directory: {path}",
            hint="Choose a new or existing directory for --output",
        )
    return path


__all__ = ["validate_output_dir", "validate_path", "validate_source_file"]
