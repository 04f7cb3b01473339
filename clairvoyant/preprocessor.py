"""Textual include expansion run before parsing.

A directive is a line of the form ``#include "path"``. Every pass replaces
each directive with the contents of the file it names; passes repeat until
the text stops changing. Each directive remembers the chain of files that
led to it so that a file including itself (directly or not) is reported
instead of expanding forever.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from clairvoyant.errors import CVIncludeError

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 64

INCLUDE_PATTERN = re.compile(r'^[ \t]*#include[ \t]+"(?P<path>[^"\n]+)"[ \t]*\r?$', re.MULTILINE)

Chain = Tuple[Path, ...]


def _position(text: str, index: int) -> Tuple[int, int]:
    line = text.count("\n", 0, index) + 1
    column = index - (text.rfind("\n", 0, index) + 1) + 1
    return line, column


class Preprocessor:
    """Expands ``#include`` directives to a fixpoint."""

    def __init__(
        self,
        source: str,
        *,
        source_folder: Union[str, Path] = ".",
        source_path: Optional[Union[str, Path]] = None,
        max_passes: int = DEFAULT_MAX_PASSES,
    ) -> None:
        if max_passes < 1:
            raise ValueError("max_passes must be at least 1")
        self.source_folder = Path(source_folder).resolve()
        self.source_path = Path(source_path).resolve() if source_path else None
        self.max_passes = max_passes
        self.text = source
        self.passes = 0
        root: Chain = (self.source_path,) if self.source_path else ()
        # One chain per directive of ``self.text``, in textual order.
        self.chains: List[Chain] = [root] * len(INCLUDE_PATTERN.findall(source))

    def _base_folder(self, chain: Chain) -> Path:
        if chain:
            return chain[-1].parent
        return self.source_folder

    def _read(self, target: Path, chain: Chain, line: int, column: int) -> str:
        try:
            return target.read_text(encoding="utf-8")
        except OSError as exc:
            including = str(chain[-1]) if chain else None
            raise CVIncludeError(
                f"Cannot read include '{target}': {exc.strerror or exc}",
                path=including,
                line=line,
                column=column,
            ) from exc

    def expand_once(self) -> str:
        """Run a single pass; returns the new text."""
        matches = list(INCLUDE_PATTERN.finditer(self.text))
        if not matches:
            return self.text

        pieces: List[str] = []
        chains: List[Chain] = []
        cursor = 0
        for match, chain in zip(matches, self.chains):
            line, column = _position(self.text, match.start() + match.group(0).index("#"))
            target = (self._base_folder(chain) / match.group("path")).resolve()
            if target in chain:
                cycle = " -> ".join(str(p) for p in chain[chain.index(target):] + (target,))
                raise CVIncludeError(
                    f"Include cycle detected: {cycle}",
                    path=str(chain[-1]),
                    line=line,
                    column=column,
                )

            content = self._read(target, chain, line, column)
            if content.endswith("\n"):
                content = content[:-1]
            logger.debug("Including %s (line %d)", target, line)

            pieces.append(self.text[cursor:match.start()])
            pieces.append(content)
            cursor = match.end()
            chains.extend([chain + (target,)] * len(INCLUDE_PATTERN.findall(content)))

        pieces.append(self.text[cursor:])
        self.text = "".join(pieces)
        self.chains = chains
        self.passes += 1
        return self.text

    def run(self) -> str:
        """Expand until a pass leaves the text unchanged."""
        while True:
            before = self.text
            if self.passes >= self.max_passes and INCLUDE_PATTERN.search(before):
                raise CVIncludeError(
                    f"Include expansion did not settle after {self.max_passes} passes",
                    path=str(self.source_path) if self.source_path else None,
                    hint="Raise max_include_passes or flatten the include tree",
                )
            if self.expand_once() == before:
                return self.text


def preprocess(
    source: str,
    *,
    source_folder: Union[str, Path] = ".",
    source_path: Optional[Union[str, Path]] = None,
    max_passes: int = DEFAULT_MAX_PASSES,
) -> str:
    """Expand every include directive of ``source``."""
    return Preprocessor(
        source,
        source_folder=source_folder,
        source_path=source_path,
        max_passes=max_passes,
    ).run()


__all__ = ["Preprocessor", "preprocess", "DEFAULT_MAX_PASSES", "INCLUDE_PATTERN"]
