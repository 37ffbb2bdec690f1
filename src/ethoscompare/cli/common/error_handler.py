"""
CLI Error Handling Utilities

Consistent error handling for CLI commands: exceptions are mapped to a
``CliError`` carrying the exit code, logged with structured context and
reported on stderr (or as a JSON envelope on stdout with ``--json``).
"""

from __future__ import annotations

import logging
from typing import Any

import typer
from rich.console import Console

from ethoscompare.cli.json_formatter import format_json_output
from ethoscompare.shared.constants import CLIDefaults
from ethoscompare.shared.errors import (
    CliError,
    DomainError,
    ErrorCode,
    EthosCompareError,
    create_cli_error,
)
from ethoscompare.shared.logging import log_operation_error

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    cli_error = _map_error_to_cli_error(error, command)
    _log_error(error, command, cli_error)
    _output_error(cli_error, error, command, json_output=json_output)
    return cli_error.exit_code


def _map_error_to_cli_error(error: Exception, command: str) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        return error

    # Lookup failures are reported as-is
    if isinstance(error, DomainError):
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, EthosCompareError):
        return create_cli_error(
            message=f"{error.code.value}: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, KeyboardInterrupt):
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            original_error=error,
            exit_code=EXIT_INTERRUPTED,
        )

    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error,
        code=ErrorCode.CLI_UNEXPECTED_ERROR,
    )


def _log_error(error: Exception, command: str, cli_error: CliError) -> None:
    """Log the error with structured context."""
    if isinstance(error, (DomainError, KeyboardInterrupt)):
        log_operation_error(
            logger,
            cli_error,
            operation=command,
            additional_context={"error_type": type(error).__name__},
            level=logging.WARNING,
        )
    elif isinstance(error, EthosCompareError):
        log_operation_error(logger, cli_error, operation=command)
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": {"command": command, "error_type": type(error).__name__}},
        )


def _output_error(
    cli_error: CliError,
    error: Exception,
    command: str,
    *,
    json_output: bool,
) -> None:
    """Output error message in appropriate format."""
    if json_output:
        output = format_json_output(
            success=False,
            command=command,
            errors=[cli_error.message],
            data=_error_data(cli_error, error),
        )
        typer.echo(output.decode("utf-8"))
        return

    Console(stderr=True).print(f"[red]Error:[/red] {cli_error.message}", highlight=False)


def _error_data(cli_error: CliError, error: Exception) -> dict[str, Any]:
    return {
        "error_code": cli_error.code.value,
        "error_type": type(error).__name__,
        "exit_code": cli_error.exit_code,
    }


def exit_with(exit_code: int) -> None:
    """Raise typer.Exit for non-success exit codes."""
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)
