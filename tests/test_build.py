"""End-to-end builds through :class:`Builder`."""

from clairvoyant.build import Builder, run_build
from clairvoyant.config import BuildConfig
from clairvoyant.errors import CVSyntaxError, CVValidationError, CVWarningError
from clairvoyant.variant import Variant


def _config(source, tmp_path, **kwargs):
    return BuildConfig(source=source, output=tmp_path / "out", **kwargs)


def test_successful_build(project, tmp_path, recorder) -> None:
    build = run_build(_config(project, tmp_path), recorder)

    assert build.exit_code == 0
    assert build.project_name == "Dungeon"
    assert len(build.outcomes) == 6
    assert (tmp_path / "out" / "systems" / "combat.js").is_file()
    assert recorder.kinds == ["component"] * 3 + ["factory"] + ["system"] * 2 + ["complete"]
    assert recorder.events[-1] == ("complete", "Dungeon")


def test_includes_resolve_next_to_source(tmp_path, write_file, recorder) -> None:
    write_file("src/parts/stats.cvt", "component Health { hp: 1 }\n")
    source = write_file(
        "src/game.cvt",
        'game "Included"\n#include "parts/stats.cvt"\nsystem Heal { components: [Health] }\n',
    )

    build = run_build(_config(source, tmp_path), recorder)

    assert build.exit_code == 0
    assert (tmp_path / "out" / "components" / "health.js").is_file()
    assert (tmp_path / "out" / "systems" / "heal.js").is_file()


def test_syntax_error_stops_before_writing(tmp_path, write_file, recorder) -> None:
    source = write_file("game.cvt", "game g\ncomponent A { hp 1 }\n")

    build = run_build(_config(source, tmp_path), recorder)

    assert build.exit_code == 1
    assert build.project_name is None
    assert recorder.kinds == ["syntax_error"]
    error = recorder.events[0][1]
    assert isinstance(error, CVSyntaxError)
    assert (error.line, error.column) == (2, 18)
    assert not (tmp_path / "out").exists()


def test_invalid_system_still_writes_the_rest(tmp_path, write_file, recorder) -> None:
    source = write_file(
        "game.cvt",
        "game g\ncomponent A {}\nsystem Empty { components: [] }\nsystem Busy { components: [A] }\n",
    )

    build = run_build(_config(source, tmp_path), recorder)

    assert build.exit_code == 1
    assert isinstance(build.errors[0], CVValidationError)
    assert (tmp_path / "out" / "systems" / "busy.js").is_file()
    assert not (tmp_path / "out" / "systems" / "empty.js").exists()
    assert recorder.kinds[0] == "error"
    assert recorder.events[0][2] is False
    assert recorder.kinds[-1] == "complete"


def test_warning_abort_is_fatal(project, tmp_path, recorder) -> None:
    build = Builder(_config(project, tmp_path, variant=Variant.THREE_D), recorder).run()

    assert build.exit_code == 1
    assert recorder.kinds == ["warning", "error"]
    assert isinstance(recorder.events[1][1], CVWarningError)
    assert recorder.events[1][2] is True
    assert not (tmp_path / "out").exists()


def test_collected_warnings_do_not_fail_the_build(project, tmp_path, recorder) -> None:
    config = _config(project, tmp_path, variant=Variant.THREE_D, fail_on_warning=True)
    build = run_build(config, recorder)

    assert build.exit_code == 0
    assert recorder.kinds[0] == "warning"
    assert recorder.kinds[-1] == "complete"
    source = (tmp_path / "out" / "factory.js").read_text(encoding="utf-8")
    assert "require('psykick3d').World" in source


def test_unreadable_source(tmp_path, recorder) -> None:
    build = run_build(_config(tmp_path / "missing.cvt", tmp_path), recorder)

    assert build.exit_code == 1
    assert recorder.kinds == ["error"]
    assert recorder.events[0][1].code == "SOURCE_UNREADABLE"
    assert recorder.events[0][2] is True


def test_missing_include_is_reported_as_syntax_error(tmp_path, write_file, recorder) -> None:
    source = write_file("game.cvt", 'game g\n#include "nope.cvt"\n')

    build = run_build(_config(source, tmp_path), recorder)

    assert build.exit_code == 1
    assert recorder.kinds == ["syntax_error"]


def test_system_with_only_unknown_templates_does_not_stop_the_build(tmp_path, write_file, recorder) -> None:
    source = write_file(
        "game.cvt",
        "game g\nsystem Ghostly { entities: [Ghost] }\nsystem Move { components: [P] }\n",
    )

    build = run_build(_config(source, tmp_path), recorder)

    assert build.exit_code == 1
    assert [type(e) for e in build.errors] == [CVValidationError]
    assert (tmp_path / "out" / "systems" / "move.js").is_file()
    assert recorder.kinds[-1] == "complete"
