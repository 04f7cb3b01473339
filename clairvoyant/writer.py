"""Persists compiled artifacts to the output directory."""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from clairvoyant.artifacts import Artifact
from clairvoyant.errors import CVWriteError

if TYPE_CHECKING:
    from clairvoyant.reporters import Reporter

logger = logging.getLogger(__name__)


def _write_error(path: Path, exc: OSError) -> CVWriteError:
    return CVWriteError(f"Cannot write '{path}': {exc.strerror or exc}", path=str(path))


@dataclass(frozen=True)
class WriteOutcome:
    artifact: Artifact
    path: Path
    skipped: bool = False


class Writer:
    """
    Writes every artifact concurrently, one task per file.

    Layout under ``root``: ``components/<file>``, ``systems/<file>`` and
    ``factory.js``. With ``overwrite`` off an existing file is left alone
    and reported as skipped.
    """

    def __init__(
        self,
        root: Union[str, Path],
        *,
        overwrite: bool = False,
        reporter: Optional["Reporter"] = None,
        project_name: str = "",
    ):
        self.root = Path(root)
        self.overwrite = overwrite
        self.reporter = reporter
        self.project_name = project_name

    def path_for(self, artifact: Artifact) -> Path:
        return self.root / artifact.relative_path

    def write_artifact(self, artifact: Artifact) -> WriteOutcome:
        """Blocking write of a single artifact."""
        path = self.path_for(artifact)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise _write_error(path.parent, exc) from exc

        mode = "w" if self.overwrite else "x"
        try:
            with open(path, mode, encoding="utf-8") as handle:
                handle.write(artifact.source)
        except FileExistsError:
            if path.is_dir():
                raise CVWriteError(f"Cannot write '{path}': is a directory", path=str(path))
            logger.debug("Skipping existing %s", path)
            return WriteOutcome(artifact=artifact, path=path, skipped=True)
        except OSError as exc:
            raise _write_error(path, exc) from exc
        logger.debug("Wrote %s", path)
        return WriteOutcome(artifact=artifact, path=path)

    def _write_unless_stopped(self, artifact: Artifact, stop: threading.Event) -> Optional[WriteOutcome]:
        if stop.is_set():
            logger.debug("Not writing %s after an earlier failure", artifact.relative_path)
            return None
        return self.write_artifact(artifact)

    async def _write(self, artifact: Artifact, stop: threading.Event) -> Optional[WriteOutcome]:
        return await asyncio.to_thread(self._write_unless_stopped, artifact, stop)

    def _report(self, outcomes: Sequence[WriteOutcome]) -> None:
        if self.reporter is None:
            return
        for outcome in outcomes:
            self.reporter.log_artifact(outcome.artifact, outcome.skipped)

    async def save_async(self, artifacts: Sequence[Artifact]) -> List[WriteOutcome]:
        """
        Write ``artifacts`` and report each outcome in artifact order.

        After the first failure no further write starts. Writes already
        running in worker threads are awaited, and every file that reached
        the disk is reported before ``CVWriteError`` is raised. ``complete``
        is only reported when every write succeeded.
        """
        stop = threading.Event()
        tasks = [asyncio.create_task(self._write(artifact, stop)) for artifact in artifacts]
        try:
            outcomes = list(await asyncio.gather(*tasks))
        except Exception as exc:
            stop.set()
            results = await asyncio.gather(*tasks, return_exceptions=True)
            completed = [r for r in results if isinstance(r, WriteOutcome)]
            self._report(completed)
            logger.info("Write failed after %d of %d artifact(s)", len(completed), len(tasks))
            if isinstance(exc, CVWriteError):
                raise
            raise CVWriteError(f"Write failed: {exc}") from exc

        self._report(outcomes)
        if self.reporter is not None:
            self.reporter.complete(self.project_name)
        logger.info(
            "Saved %d artifact(s) to %s (%d skipped)",
            len(outcomes),
            self.root,
            sum(1 for outcome in outcomes if outcome.skipped),
        )
        return outcomes

    def save(self, artifacts: Sequence[Artifact]) -> List[WriteOutcome]:
        return asyncio.run(self.save_async(artifacts))


__all__ = ["WriteOutcome", "Writer"]
