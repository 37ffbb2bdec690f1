"""Command handlers for the ethoscompare CLI.

Each handler builds the session container, runs the async core call,
and renders the result as a rich table or a JSON envelope.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import typer
from dependency_injector import providers
from rich.console import Console

from ethoscompare.cli.common.context import CliContext, get_cli_context
from ethoscompare.cli.common.error_handler import exit_with, handle_cli_error
from ethoscompare.cli.json_formatter import format_json_output
from ethoscompare.cli.output import (
    print_comparison,
    print_profile,
    print_search_results,
    print_share,
    print_statistics,
)
from ethoscompare.config import Settings, get_config
from ethoscompare.containers import Container
from ethoscompare.core.comparison import ProfileComparison, ProfileComparisonService
from ethoscompare.core.share import (
    comparison_url,
    export_filename,
    share_intent_url,
    share_text,
)
from ethoscompare.shared.constants import CLICommands, CLIDefaults

logger = logging.getLogger(__name__)


def create_container(settings: Settings | None = None) -> Container:
    """Build the session container around the loaded settings."""
    container = Container()
    container.config.override(providers.Object(settings or get_config()))
    return container


def _emit_json(command: str, data: Any, *, success: bool = True, errors: list[str] | None = None) -> None:
    typer.echo(format_json_output(success=success, command=command, data=data, errors=errors).decode("utf-8"))


def _run(container: Container, context: CliContext, command: str, handler: Any, *args: Any) -> int:
    service = container.comparison_service()
    try:
        return handler(service, container, context, *args)
    finally:
        container.ethos_client().close()
        logger.debug("Command '%s' finished", command)


def _profile(service: ProfileComparisonService, container: Container, context: CliContext, handle: str) -> int:
    profile = asyncio.run(service.resolve(handle))
    metrics = service.derive_metrics(profile)

    if context.json_output:
        data: dict[str, Any] = {"profile": profile.to_dict(), "metrics": metrics.to_dict()}
        if context.is_verbose():
            data["statistics"] = service.statistics()
        _emit_json(CLICommands.PROFILE, data)
        return CLIDefaults.EXIT_SUCCESS

    console = Console()
    print_profile(console, profile, metrics)
    if context.is_verbose():
        print_statistics(console, service.statistics())
    return CLIDefaults.EXIT_SUCCESS


def _search(service: ProfileComparisonService, container: Container, context: CliContext, query: str) -> int:
    candidates = asyncio.run(service.search(query))

    if context.json_output:
        data: dict[str, Any] = {
            "query": query,
            "results": [candidate.to_dict() for candidate in candidates],
        }
        if context.is_verbose():
            data["statistics"] = service.statistics()
        _emit_json(CLICommands.SEARCH, data)
        return CLIDefaults.EXIT_SUCCESS

    console = Console()
    print_search_results(console, query, candidates)
    if context.is_verbose():
        print_statistics(console, service.statistics())
    return CLIDefaults.EXIT_SUCCESS


def share_details(comparison: ProfileComparison, page_url: str) -> dict[str, str]:
    """Share text, links and export file name of a fully resolved comparison."""
    left = comparison.left.profile
    right = comparison.right.profile
    if left is None or right is None:
        return {}
    text = share_text(left, right, page_url)
    return {
        "text": text,
        "intent_url": share_intent_url(text),
        "comparison_url": comparison_url(left.handle, right.handle, page_url),
        "export_filename": export_filename(left.handle, right.handle),
    }


def _compare(
    service: ProfileComparisonService,
    container: Container,
    context: CliContext,
    left_handle: str,
    right_handle: str,
    page_url: str | None = None,
) -> int:
    comparison = asyncio.run(service.compare(left_handle, right_handle))
    share = share_details(comparison, page_url or container.config().app.share_page_url)
    errors = [
        slot.error
        for slot in (comparison.left, comparison.right)
        if slot.error is not None
    ]
    exit_code = CLIDefaults.EXIT_SUCCESS if comparison.ready else CLIDefaults.EXIT_ERROR

    if context.json_output:
        data = comparison.to_dict()
        data["share"] = share
        if context.is_verbose():
            data["statistics"] = service.statistics()
        _emit_json(CLICommands.COMPARE, data, success=comparison.ready, errors=errors)
        return exit_code

    console = Console()
    print_comparison(console, comparison)
    if share:
        print_share(console, share)
    if context.is_verbose():
        print_statistics(console, service.statistics())
    return exit_code


def _execute(command: str, handler: Any, *args: Any) -> None:
    context = get_cli_context()
    try:
        exit_code = _run(create_container(), context, command, handler, *args)
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, command, json_output=context.json_output)
    exit_with(exit_code)


def profile_command(handle: str) -> None:
    """Resolve one handle and print its profile metrics."""
    _execute(CLICommands.PROFILE, _profile, handle)


def search_command(query: str) -> None:
    """Run a typeahead search and print the candidates."""
    _execute(CLICommands.SEARCH, _search, query)


def compare_command(left: str, right: str, page_url: str | None = None) -> None:
    """Resolve two handles and print the side-by-side comparison."""
    _execute(CLICommands.COMPARE, _compare, left, right, page_url)
