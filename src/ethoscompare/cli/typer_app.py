"""
ethoscompare Typer CLI Application

Command line front end over the comparison service: resolve a profile,
run a typeahead search, or compare two profiles side by side.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from ethoscompare.cli.common.context import CliContext, LogLevel, set_cli_context
from ethoscompare.cli.common.options import (
    json_output_option,
    log_level_option,
    page_url_option,
    verbose_option,
    version_option,
)
from ethoscompare.cli.handlers import compare_command, profile_command, search_command
from ethoscompare.config import get_config
from ethoscompare.shared.constants import CLICommands, CLIDefaults, CLIHelp
from ethoscompare.shared.logging import setup_structured_logger

# Version information
__version__ = CLIDefaults.VERSION


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
) -> None:
    """
    Process the common options before any command runs.

    Sets the global CLI context and configures the package logger.
    """
    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
    )
    set_cli_context(context)

    logging_settings = get_config().logging
    setup_structured_logger(
        level=context.get_effective_log_level(),
        log_file=logging_settings.file,
        use_rich_console=logging_settings.rich_console,
    )


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.WARNING,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Compare Ethos reputation profiles side by side."""
    try:
        main_callback(verbose, log_level, json_output)
    except Exception as e:
        from ethoscompare.cli.common.error_handler import handle_cli_error

        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


@app.command(CLICommands.PROFILE)
def profile_command_typer(
    handle: str = typer.Argument(..., help=CLIHelp.PROFILE_HANDLE_HELP),
) -> None:
    """
    Resolve a profile by handle and show its metrics.

    Examples:
        ethoscompare profile vitalik
        ethoscompare --json profile @vitalik
    """
    profile_command(handle)


@app.command(CLICommands.SEARCH)
def search_command_typer(
    query: str = typer.Argument(..., help=CLIHelp.SEARCH_QUERY_HELP),
) -> None:
    """
    Search profiles by handle, display name or bio.

    Queries shorter than three characters return no results.
    """
    search_command(query)


@app.command(CLICommands.COMPARE)
def compare_command_typer(
    left: str = typer.Argument(..., help=CLIHelp.COMPARE_LEFT_HELP),
    right: str = typer.Argument(..., help=CLIHelp.COMPARE_RIGHT_HELP),
    page_url: Annotated[Optional[str], page_url_option] = None,
) -> None:
    """
    Compare two profiles metric by metric.

    Prints the winner of every row, a share link and the export file name.
    Exits with status 1 when either profile cannot be resolved.
    """
    compare_command(left, right, page_url)


if __name__ == "__main__":
    app()
