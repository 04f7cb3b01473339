"""Reporter interface consumed by the compiler, writer and builder."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import IO, Optional

from clairvoyant.artifacts import Artifact, ArtifactKind
from clairvoyant.errors import CVSyntaxError


class Reporter(ABC):
    """
    Receives the events of one build.

    Order per build: zero or more ``warning``, at most one terminal
    ``syntax_error``, one ``log_*`` call per artifact, then exactly one
    ``complete``. ``error`` may arrive at any point; ``fatal`` errors end
    the build and no ``complete`` follows them.
    """

    def __init__(self, stream: Optional[IO[str]] = None, *, pretty: bool = False):
        self.stream = stream if stream is not None else sys.stdout
        self.pretty = pretty

    @abstractmethod
    def warning(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, error: Exception, *, fatal: bool = False) -> None:
        ...

    @abstractmethod
    def syntax_error(self, error: CVSyntaxError) -> None:
        ...

    @abstractmethod
    def log_component(self, artifact: Artifact, skipped: bool = False) -> None:
        ...

    @abstractmethod
    def log_system(self, artifact: Artifact, skipped: bool = False) -> None:
        ...

    @abstractmethod
    def log_factory(self, artifact: Artifact, skipped: bool = False) -> None:
        ...

    @abstractmethod
    def complete(self, project_name: str) -> None:
        ...

    def log_artifact(self, artifact: Artifact, skipped: bool = False) -> None:
        """Dispatch to the ``log_*`` method matching the artifact kind."""
        if artifact.kind is ArtifactKind.COMPONENT:
            self.log_component(artifact, skipped)
        elif artifact.kind is ArtifactKind.SYSTEM:
            self.log_system(artifact, skipped)
        else:
            self.log_factory(artifact, skipped)


__all__ = ["Reporter"]
