"""Build orchestration: read, preprocess, parse, compile, write, report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from clairvoyant.artifacts import CompileResult
from clairvoyant.ast import Program
from clairvoyant.compiler import Compiler
from clairvoyant.config import BuildConfig
from clairvoyant.errors import CVError, CVSyntaxError
from clairvoyant.parser import parse
from clairvoyant.preprocessor import preprocess
from clairvoyant.reporters import Reporter
from clairvoyant.writer import WriteOutcome, Writer

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    project_name: Optional[str] = None
    result: Optional[CompileResult] = None
    outcomes: List[WriteOutcome] = field(default_factory=list)
    errors: List[CVError] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0


class Builder:
    """Runs one build described by a :class:`BuildConfig`."""

    def __init__(self, config: BuildConfig, reporter: Reporter):
        self.config = config
        self.reporter = reporter

    def load_program(self) -> Program:
        """Read, preprocess and parse the source file."""
        source_path = self.config.source
        try:
            text = source_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CVError(
                f"Cannot read source file: {exc.strerror or exc}",
                path=str(source_path),
                code="SOURCE_UNREADABLE",
            ) from exc

        expanded = preprocess(
            text,
            source_folder=self.config.source_folder,
            source_path=source_path,
            max_passes=self.config.max_include_passes,
        )
        return parse(expanded, path=str(source_path))

    def run(self) -> BuildResult:
        build = BuildResult()
        try:
            program = self.load_program()
        except CVSyntaxError as exc:
            build.errors.append(exc)
            self.reporter.syntax_error(exc)
            return build
        except CVError as exc:
            build.errors.append(exc)
            self.reporter.error(exc, fatal=True)
            return build

        build.project_name = program.name
        logger.info("Building '%s' (%s) into %s", program.name, self.config.variant.value, self.config.output)

        try:
            build.result = Compiler(
                program,
                variant=self.config.variant,
                reporter=self.reporter,
                fail_on_warning=self.config.fail_on_warning,
            ).compile()
            build.errors.extend(build.result.errors)

            writer = Writer(
                self.config.output,
                overwrite=self.config.overwrite,
                reporter=self.reporter,
                project_name=program.name,
            )
            build.outcomes = writer.save(build.result.artifacts)
        except CVError as exc:
            build.errors.append(exc)
            self.reporter.error(exc, fatal=True)

        return build


def run_build(config: BuildConfig, reporter: Reporter) -> BuildResult:
    return Builder(config, reporter).run()


__all__ = ["BuildResult", "Builder", "run_build"]
