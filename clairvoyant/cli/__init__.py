"""Command-line interface for the Clairvoyant compiler."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.pretty import Pretty

from clairvoyant import __version__
from clairvoyant.build import Builder
from clairvoyant.config import BuildConfig, ConfigError, load_workspace_config, resolve_build_config
from clairvoyant.errors import CVError, CVSyntaxError
from clairvoyant.reporters import UnknownReporterError, create_reporter
from clairvoyant.variant import Variant

from .errors import (
    CLIConfigError,
    CLIError,
    CLIValidationError,
    handle_cli_exception,
)
from .validation import validate_output_dir, validate_path, validate_source_file

LOG_LEVEL_ENV = "CLAIRVOYANT_LOG_LEVEL"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clairvoyant",
        description="Compile a Clairvoyant (.cvt) game description into Psykick modules.",
    )
    parser.add_argument("-s", "--src", required=True, help="Source .cvt file")
    parser.add_argument("-o", "--output", help="Output directory (or [build].output in clairvoyant.toml)")
    parser.add_argument(
        "--3d",
        dest="is_3d",
        action="store_true",
        default=None,
        help="Generate modules for psykick3d instead of psykick2d",
    )
    parser.add_argument(
        "--fail-on-warning",
        action="store_true",
        default=None,
        help="Collect warnings instead of stopping at the first one",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        default=None,
        help="Overwrite files that already exist in the output directory",
    )
    parser.add_argument("--reporter", help="Reporter name: default, console, json or a plugin")
    parser.add_argument("--pretty", action="store_true", default=None, help="Pretty-print JSON reports")
    parser.add_argument("--print-ast", action="store_true", help="Print the parsed program and exit")
    parser.add_argument("--config", help="Path to a clairvoyant.toml or .clairvoyantrc file")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "warning", "error"],
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or warn)",
    )
    parser.add_argument("--verbose", action="store_true", help="Show tracebacks for CLI errors")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(args) -> None:
    """Configure the ``clairvoyant`` logger from --log-level or the environment."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv(LOG_LEVEL_ENV, 'warn')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    numeric_level = level_map.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('clairvoyant')
    package_logger.setLevel(numeric_level)

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        package_logger.propagate = False


def resolve_config(args) -> BuildConfig:
    """Combine CLI arguments with the workspace configuration file."""
    source = validate_source_file(args.src)
    explicit = validate_path(args.config, allow_none=True, must_exist=True)
    try:
        workspace = load_workspace_config(Path.cwd(), explicit)
        config = resolve_build_config(
            source,
            workspace,
            output=validate_output_dir(args.output),
            variant=Variant.THREE_D if args.is_3d else None,
            fail_on_warning=args.fail_on_warning,
            overwrite=args.overwrite,
            reporter=args.reporter,
            pretty=args.pretty,
        )
    except ConfigError as exc:
        raise CLIConfigError(
            str(exc),
            hint="Check the [build] table of your configuration file",
            context={"path": str(exc.path)} if exc.path else None,
        ) from exc
    validate_output_dir(config.output)
    return config


def print_ast(config: BuildConfig, console: Optional[Console] = None) -> int:
    console = console or Console()
    builder = Builder(config, reporter=create_reporter("default"))
    try:
        program = builder.load_program()
    except CVSyntaxError as exc:
        builder.reporter.syntax_error(exc)
        return 1
    except CVError as exc:
        builder.reporter.error(exc, fatal=True)
        return 1
    console.print(Pretty(program))
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv``, run the build and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        config = resolve_config(args)
        if args.print_ast:
            return print_ast(config)
        try:
            reporter = create_reporter(config.reporter, pretty=config.pretty)
        except UnknownReporterError as exc:
            raise CLIValidationError(
                f"Unknown reporter '{exc.name}'",
                hint=f"Use one of: {', '.join(exc.available)}",
            ) from exc
        return Builder(config, reporter).run().exit_code
    except CLIError as exc:
        handle_cli_exception(exc, verbose=args.verbose)
        return 1


def main(argv: Optional[List[str]] = None) -> None:
    """
    Console entry point for ``clairvoyant`` and ``cvt``.

    Examples:
        >>> main(['-s', 'game.cvt', '-o', 'build'])  # doctest: +SKIP
        >>> main(['-s', 'game.cvt', '-o', 'build', '--3d', '--reporter', 'json'])  # doctest: +SKIP
    """
    code = run(argv)
    if code:
        sys.exit(code)


__all__ = ["build_parser", "main", "run"]
