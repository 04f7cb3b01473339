"""Reporter registry.

Built-in reporters are ``default``/``console`` and ``json``. Other packages
can contribute reporters through the ``clairvoyant.reporters`` entry-point
group; the entry point must load a :class:`Reporter` subclass.
"""

from __future__ import annotations

import importlib.metadata
import logging
from typing import IO, Dict, List, Optional, Type

from .base import Reporter
from .console import ConsoleReporter
from .json_report import JSONReporter

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "clairvoyant.reporters"

BUILTIN_REPORTERS: Dict[str, Type[Reporter]] = {
    "default": ConsoleReporter,
    "console": ConsoleReporter,
    "json": JSONReporter,
}


class UnknownReporterError(LookupError):
    """Raised when no reporter is registered under a name."""

    def __init__(self, name: str, available: List[str]):
        super().__init__(f"Unknown reporter '{name}'")
        self.name = name
        self.available = available


def _iter_entry_points():
    return importlib.metadata.entry_points(group=ENTRY_POINT_GROUP)


def available_reporters() -> List[str]:
    names = set(BUILTIN_REPORTERS)
    names.update(entry.name for entry in _iter_entry_points())
    return sorted(names)


def load_reporter_class(name: str) -> Type[Reporter]:
    if name in BUILTIN_REPORTERS:
        return BUILTIN_REPORTERS[name]

    for entry in _iter_entry_points():
        if entry.name != name:
            continue
        try:
            reporter_class = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load reporter {entry.name}: {exc}") from exc
        if not (isinstance(reporter_class, type) and issubclass(reporter_class, Reporter)):
            raise RuntimeError(f"Entry point '{entry.name}' does not provide a Reporter subclass")
        logger.debug("Loaded reporter '%s' from %s", name, entry.value)
        return reporter_class

    raise UnknownReporterError(name, available_reporters())


def create_reporter(
    name: str = "default",
    *,
    stream: Optional[IO[str]] = None,
    pretty: bool = False,
) -> Reporter:
    """Instantiate the reporter registered under ``name``."""
    return load_reporter_class(name)(stream, pretty=pretty)


__all__ = [
    "BUILTIN_REPORTERS",
    "ConsoleReporter",
    "ENTRY_POINT_GROUP",
    "JSONReporter",
    "Reporter",
    "UnknownReporterError",
    "available_reporters",
    "create_reporter",
    "load_reporter_class",
]
