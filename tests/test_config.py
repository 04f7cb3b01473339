"""Workspace configuration loading and layering."""

import json
from pathlib import Path

import pytest

from clairvoyant.config import (
    BuildConfig,
    ConfigError,
    WorkspaceDefaults,
    load_workspace_config,
    locate_config_file,
    resolve_build_config,
)
from clairvoyant.preprocessor import DEFAULT_MAX_PASSES
from clairvoyant.variant import Variant


def test_no_config_file(tmp_path) -> None:
    assert load_workspace_config(tmp_path) == WorkspaceDefaults()


def test_toml_build_table(tmp_path) -> None:
    (tmp_path / "clairvoyant.toml").write_text(
        "[build]\n"
        'output = "dist"\n'
        'variant = "3D"\n'
        "fail_on_warning = true\n"
        'reporter = "json"\n'
        "max_include_passes = 8\n",
        encoding="utf-8",
    )

    defaults = load_workspace_config(tmp_path)

    assert defaults.output == (tmp_path / "dist").resolve()
    assert defaults.variant is Variant.THREE_D
    assert defaults.fail_on_warning is True
    assert defaults.overwrite is None
    assert defaults.reporter == "json"
    assert defaults.max_include_passes == 8
    assert defaults.path == (tmp_path / "clairvoyant.toml").resolve()


def test_json_rc_file(tmp_path) -> None:
    (tmp_path / ".clairvoyantrc").write_text(
        json.dumps({"build": {"output": "/abs/out", "overwrite": True}}),
        encoding="utf-8",
    )
    defaults = load_workspace_config(tmp_path)
    assert defaults.output == Path("/abs/out")
    assert defaults.overwrite is True


def test_toml_wins_over_rc(tmp_path) -> None:
    (tmp_path / "clairvoyant.toml").write_text("[build]\npretty = true\n", encoding="utf-8")
    (tmp_path / ".clairvoyantrc").write_text("{}", encoding="utf-8")
    assert locate_config_file(tmp_path).name == "clairvoyant.toml"


def test_explicit_config_path(tmp_path) -> None:
    explicit = tmp_path / "ci.toml"
    explicit.write_text('[build]\nvariant = "2d"\n', encoding="utf-8")
    assert load_workspace_config(tmp_path / "elsewhere", explicit).variant is Variant.TWO_D


@pytest.mark.parametrize("content, message", [
    ('[build]\nvariant = "4d"\n', "Unknown variant '4d'"),
    ("[build]\noverwrite = 1\n", "'overwrite' must be true or false"),
    ("[build]\nmax_include_passes = 0\n", "'max_include_passes' must be a positive integer"),
    ('build = "x"\n', "'build' must be a table"),
    ("[build\n", "Invalid configuration file"),
])
def test_invalid_values(tmp_path, content, message) -> None:
    (tmp_path / "clairvoyant.toml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError) as exc_info:
        load_workspace_config(tmp_path)
    assert message in str(exc_info.value)
    assert exc_info.value.path is not None


def test_command_line_overrides_workspace(tmp_path) -> None:
    workspace = WorkspaceDefaults(
        output=tmp_path / "dist",
        variant=Variant.THREE_D,
        overwrite=True,
        reporter="json",
    )

    config = resolve_build_config(
        tmp_path / "game.cvt",
        workspace,
        output=tmp_path / "cli-out",
        reporter="console",
        fail_on_warning=None,
    )

    assert config == BuildConfig(
        source=tmp_path / "game.cvt",
        output=tmp_path / "cli-out",
        variant=Variant.THREE_D,
        fail_on_warning=False,
        overwrite=True,
        reporter="console",
        pretty=False,
        max_include_passes=DEFAULT_MAX_PASSES,
    )
    assert config.source_folder == tmp_path


def test_output_is_required(tmp_path) -> None:
    with pytest.raises(ConfigError) as exc_info:
        resolve_build_config(tmp_path / "game.cvt", WorkspaceDefaults())
    assert "No output directory given" in str(exc_info.value)
