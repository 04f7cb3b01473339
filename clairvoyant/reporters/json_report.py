"""Aggregate JSON build report."""

from __future__ import annotations

import json
from typing import IO, Any, Dict, Optional

from clairvoyant.artifacts import Artifact
from clairvoyant.errors import CVError, CVSyntaxError

from .base import Reporter


def error_payload(error: Exception) -> Dict[str, Any]:
    if isinstance(error, CVError):
        return error.to_dict()
    return {"type": error.__class__.__name__, "message": str(error)}


class JSONReporter(Reporter):
    """
    Collects every event and prints a single JSON document.

    The document is printed at ``complete``, or when the build ends early
    on a syntax error or a fatal error.
    """

    def __init__(self, stream: Optional[IO[str]] = None, *, pretty: bool = False):
        super().__init__(stream, pretty=pretty)
        self.document: Dict[str, Any] = {
            "projectName": "",
            "warnings": [],
            "errors": [],
            "components": [],
            "systems": [],
            "factory": None,
        }

    def emit(self) -> None:
        indent = 4 if self.pretty else None
        self.stream.write(json.dumps(self.document, indent=indent) + "\n")
        self.stream.flush()

    @staticmethod
    def _entry(artifact: Artifact, skipped: bool) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"name": artifact.name, "filename": artifact.filename}
        if skipped:
            entry["skipped"] = True
        return entry

    def warning(self, message: str) -> None:
        self.document["warnings"].append(message)

    def error(self, error: Exception, *, fatal: bool = False) -> None:
        self.document["errors"].append(error_payload(error))
        if fatal:
            self.emit()

    def syntax_error(self, error: CVSyntaxError) -> None:
        self.document["errors"].append(error_payload(error))
        self.emit()

    def log_component(self, artifact: Artifact, skipped: bool = False) -> None:
        self.document["components"].append(self._entry(artifact, skipped))

    def log_system(self, artifact: Artifact, skipped: bool = False) -> None:
        self.document["systems"].append(self._entry(artifact, skipped))

    def log_factory(self, artifact: Artifact, skipped: bool = False) -> None:
        factory: Dict[str, Any] = {
            "filename": artifact.filename,
            "functions": [
                {"entityType": f.entity_type, "functionName": f.function_name}
                for f in artifact.functions
            ],
        }
        if skipped:
            factory["skipped"] = True
        self.document["factory"] = factory

    def complete(self, project_name: str) -> None:
        self.document["projectName"] = project_name
        self.emit()


__all__ = ["JSONReporter", "error_payload"]
