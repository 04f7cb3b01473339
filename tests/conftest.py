import io
import logging
from pathlib import Path

import pytest

from clairvoyant.parser import parse
from clairvoyant.reporters import Reporter


GAME_SOURCE = """\
game "Dungeon";

// Components
component Health { hp: 10 }
component Position { x: 0, y: 0 }
component Attack { damage: 5, }

/* Templates */
template Goblin {
    Health { hp: 10 }
    Position { x: 0, y: 0 }
}

template Orc extends Goblin {
    Health { hp: 20 },
    Attack { damage: 7 }
}

system MovementSystem { components: [Position] }
system CombatSystem extends BehaviorSystem { entities: [Goblin, Orc] }
"""


class RecordingReporter(Reporter):
    """Reporter that keeps every event for assertions."""

    def __init__(self, stream=None, *, pretty=False):
        super().__init__(stream or io.StringIO(), pretty=pretty)
        self.events = []

    @property
    def kinds(self):
        return [event[0] for event in self.events]

    def warning(self, message):
        self.events.append(("warning", message))

    def error(self, error, *, fatal=False):
        self.events.append(("error", error, fatal))

    def syntax_error(self, error):
        self.events.append(("syntax_error", error))

    def log_component(self, artifact, skipped=False):
        self.events.append(("component", artifact.name, skipped))

    def log_system(self, artifact, skipped=False):
        self.events.append(("system", artifact.name, skipped))

    def log_factory(self, artifact, skipped=False):
        self.events.append(("factory", artifact.name, skipped))

    def complete(self, project_name):
        self.events.append(("complete", project_name))


@pytest.fixture(autouse=True)
def _plain_console(monkeypatch):
    """Keep rich output free of terminal control codes."""
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE", "COLUMNS"):
        monkeypatch.delenv(name, raising=False)
    yield
    package_logger = logging.getLogger("clairvoyant")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def recorder():
    return RecordingReporter()


@pytest.fixture
def game_source():
    return GAME_SOURCE


@pytest.fixture
def game_program():
    return parse(GAME_SOURCE, path="dungeon.cvt")


@pytest.fixture
def project(tmp_path):
    """Writes ``GAME_SOURCE`` to ``tmp_path/src/dungeon.cvt`` and returns its path."""
    source_dir = tmp_path / "src"
    source_dir.mkdir()
    source = source_dir / "dungeon.cvt"
    source.write_text(GAME_SOURCE, encoding="utf-8")
    return source


@pytest.fixture
def write_file(tmp_path):
    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
