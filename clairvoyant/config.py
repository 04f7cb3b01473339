"""Workspace configuration support for the Clairvoyant CLI."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from clairvoyant.preprocessor import DEFAULT_MAX_PASSES
from clairvoyant.variant import Variant

CONFIG_FILENAMES = ("clairvoyant.toml", ".clairvoyantrc")


class ConfigError(ValueError):
    """Raised when a workspace configuration file is malformed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


@dataclass
class WorkspaceDefaults:
    """Build settings read from the workspace file; ``None`` means unset."""

    output: Optional[Path] = None
    variant: Optional[Variant] = None
    fail_on_warning: Optional[bool] = None
    overwrite: Optional[bool] = None
    reporter: Optional[str] = None
    pretty: Optional[bool] = None
    max_include_passes: Optional[int] = None
    path: Optional[Path] = None


@dataclass
class BuildConfig:
    """Fully resolved settings of one build."""

    source: Path
    output: Path
    variant: Variant = Variant.TWO_D
    fail_on_warning: bool = False
    overwrite: bool = False
    reporter: str = "default"
    pretty: bool = False
    max_include_passes: int = DEFAULT_MAX_PASSES

    @property
    def source_folder(self) -> Path:
        return self.source.parent

    def with_overrides(self, **overrides: Any) -> "BuildConfig":
        """Copy with every non-``None`` override applied."""
        known = {f.name for f in fields(self)}
        applied = {k: v for k, v in overrides.items() if v is not None and k in known}
        return replace(self, **applied)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _as_bool(section: Dict[str, Any], key: str, path: Path) -> Optional[bool]:
    value = section.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' must be true or false", path)


def _parse_build_section(data: Dict[str, Any], root: Path, path: Path) -> WorkspaceDefaults:
    section = data.get("build") or {}
    if not isinstance(section, dict):
        raise ConfigError("'build' must be a table", path)

    output = section.get("output")
    output_path = None
    if output is not None:
        output_path = Path(str(output))
        if not output_path.is_absolute():
            output_path = (root / output_path).resolve()

    variant = None
    if section.get("variant") is not None:
        try:
            variant = Variant.parse(section["variant"])
        except ValueError as exc:
            raise ConfigError(str(exc), path) from exc

    max_passes = section.get("max_include_passes")
    if max_passes is not None:
        if isinstance(max_passes, bool) or not isinstance(max_passes, int) or max_passes < 1:
            raise ConfigError("'max_include_passes' must be a positive integer", path)

    reporter = section.get("reporter")
    return WorkspaceDefaults(
        output=output_path,
        variant=variant,
        fail_on_warning=_as_bool(section, "fail_on_warning", path),
        overwrite=_as_bool(section, "overwrite", path),
        reporter=str(reporter) if reporter is not None else None,
        pretty=_as_bool(section, "pretty", path),
        max_include_passes=max_passes,
        path=path,
    )


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_FILENAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_workspace_config(root: Path, explicit: Optional[Path] = None) -> WorkspaceDefaults:
    """Read ``clairvoyant.toml`` or ``.clairvoyantrc``; empty defaults when absent."""
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return WorkspaceDefaults()

    try:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid configuration file: {exc}", config_path) from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a table/object", config_path)
    return _parse_build_section(data, config_path.parent.resolve(), config_path)


def resolve_build_config(
    source: Path,
    workspace: WorkspaceDefaults,
    *,
    output: Optional[Path] = None,
    variant: Optional[Variant] = None,
    fail_on_warning: Optional[bool] = None,
    overwrite: Optional[bool] = None,
    reporter: Optional[str] = None,
    pretty: Optional[bool] = None,
) -> BuildConfig:
    """Layer CLI values over workspace values over the defaults."""
    resolved_output = output or workspace.output
    if resolved_output is None:
        raise ConfigError("No output directory given (use --output or [build].output)", workspace.path)

    base = BuildConfig(source=source, output=resolved_output)
    base = base.with_overrides(
        variant=workspace.variant,
        fail_on_warning=workspace.fail_on_warning,
        overwrite=workspace.overwrite,
        reporter=workspace.reporter,
        pretty=workspace.pretty,
        max_include_passes=workspace.max_include_passes,
    )
    return base.with_overrides(
        variant=variant,
        fail_on_warning=fail_on_warning,
        overwrite=overwrite,
        reporter=reporter,
        pretty=pretty,
    )


__all__ = [
    "BuildConfig",
    "CONFIG_FILENAMES",
    "ConfigError",
    "WorkspaceDefaults",
    "load_workspace_config",
    "locate_config_file",
    "resolve_build_config",
]
