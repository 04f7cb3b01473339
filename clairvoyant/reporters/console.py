"""Human readable build output."""

from __future__ import annotations

from typing import IO, Optional

from rich.console import Console
from rich.text import Text

from clairvoyant.artifacts import Artifact
from clairvoyant.errors import CVError, CVSyntaxError

from .base import Reporter


def _skip_suffix(skipped: bool) -> str:
    return " (skipped)" if skipped else ""


class ConsoleReporter(Reporter):
    """Prints one line per event to a rich console."""

    def __init__(self, stream: Optional[IO[str]] = None, *, pretty: bool = False):
        super().__init__(stream, pretty=pretty)
        self.console = Console(file=self.stream, soft_wrap=True, highlight=False, emoji=False)

    def _print(self, message: str, style: Optional[str] = None) -> None:
        self.console.print(Text(message, style=style or ""))

    def warning(self, message: str) -> None:
        self._print(f"Warning: {message}", "yellow")

    def error(self, error: Exception, *, fatal: bool = False) -> None:
        text = error.format() if isinstance(error, CVError) else str(error)
        self._print(f"Error: {text}", "bold red")

    def syntax_error(self, error: CVSyntaxError) -> None:
        self._print(f"Line {error.line}, Column {error.column}: {error.message}", "bold red")
        if error.hint:
            self._print(f"  Hint: {error.hint}", "dim")

    def log_component(self, artifact: Artifact, skipped: bool = False) -> None:
        self._print(f"Component:{artifact.name}:{artifact.filename}{_skip_suffix(skipped)}")

    def log_system(self, artifact: Artifact, skipped: bool = False) -> None:
        kind = artifact.base.value if artifact.base is not None else "System"
        self._print(f"{kind}:{artifact.name}:{artifact.filename}{_skip_suffix(skipped)}")

    def log_factory(self, artifact: Artifact, skipped: bool = False) -> None:
        self._print(f"Factory:{artifact.filename}{_skip_suffix(skipped)}")
        if skipped:
            return
        for function in artifact.functions:
            self._print(f"  {function.entity_type}:{function.function_name}")

    def complete(self, project_name: str) -> None:
        self._print(f"'{project_name}' build completed", "green")


__all__ = ["ConsoleReporter"]
