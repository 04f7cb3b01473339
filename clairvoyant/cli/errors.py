"""
Error handling for the Clairvoyant CLI.

CLI-level problems (bad arguments, missing files, broken configuration) are
raised as :class:`CLIError` and rendered by :func:`handle_cli_exception`.
Compiler diagnostics never pass through here; they go to the reporter.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

_CLI_TRACE_LIMIT = 4000

VERBOSE_ENV = "CLAIRVOYANT_VERBOSE"
RERAISE_ENV = "CLAIRVOYANT_RERAISE"
DEBUG_ENV = "CLAIRVOYANT_DEBUG"


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code, defaulting to ``default_code``
        hint: Optional suggestion for resolving the error
        context: Extra details shown with ``--verbose``
    """

    default_code = "CLI_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """clairvoyant.toml / .clairvoyantrc is invalid or incomplete."""

    default_code = "CLI_CONFIG_ERROR"


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    default_code = "CLI_VALIDATION_ERROR"


class CLIFileNotFoundError(CLIError):
    """The .cvt source or a --config file does not exist."""

    default_code = "CLI_FILE_NOT_FOUND"


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format exception for CLI display with context and hints.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Unknown reporter 'xml'", hint="Use one of: json")))
        Error [CLI_VALIDATION_ERROR]: Unknown reporter 'xml'
        Hint: Use one of: json
    """
    if not isinstance(exc, CLIError):
        lines = [f"Error: {exc.__class__.__name__}: {exc}"]
    else:
        lines = [f"Error [{exc.code}]: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """Current exception traceback, truncated to the CLI trace limit."""
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """--verbose, $CLAIRVOYANT_VERBOSE or $CLAIRVOYANT_DEBUG."""
    return verbose_flag or _env_flag(VERBOSE_ENV) or _env_flag(DEBUG_ENV)


def cli_reraise_enabled() -> bool:
    """$CLAIRVOYANT_RERAISE or $CLAIRVOYANT_DEBUG."""
    return _env_flag(RERAISE_ENV) or _env_flag(DEBUG_ENV)


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit with ``exit_code``.

    With $CLAIRVOYANT_RERAISE (or $CLAIRVOYANT_DEBUG) the exception is
    raised again instead, which keeps the traceback for debuggers.
    """
    if cli_reraise_enabled():
        raise exc

    show_details = cli_verbose_enabled(verbose)
    print(format_cli_error(exc, verbose=show_details, include_traceback=show_details), file=sys.stderr)
    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIValidationError",
    "CLIFileNotFoundError",
    "format_cli_error",
    "format_traceback_excerpt",
    "cli_verbose_enabled",
    "cli_reraise_enabled",
    "handle_cli_exception",
]
