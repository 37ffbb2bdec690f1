"""Rich console rendering of profiles, search results and comparisons."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ethoscompare.core.comparison import ComparisonSlot, ProfileComparison
from ethoscompare.core.metrics import METRICS, ComparisonOutcome, DisplayMetrics, format_metric
from ethoscompare.core.models import SearchCandidate, UserProfile

SYNTHETIC_NOTICE = "offline placeholder, upstream unreachable"


def _profile_title(profile: UserProfile) -> str:
    title = escape(f"{profile.display_name} (@{profile.handle})")
    if profile.is_synthetic:
        title += " *"
    return title


def print_profile(console: Console, profile: UserProfile, metrics: DisplayMetrics) -> None:
    """Print one profile with every metric row."""
    table = Table(title=_profile_title(profile), title_justify="left")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Level", metrics.level.value)
    for metric in METRICS:
        table.add_row(metric.label, format_metric(metric.key, metric.accessor(metrics)))
    table.add_row("Twitter Followers", str(metrics.twitter_followers))

    console.print(table)
    if profile.bio:
        console.print(profile.bio, markup=False, highlight=False)
    if profile.is_synthetic:
        console.print(f"* {SYNTHETIC_NOTICE}", highlight=False, markup=False)


def print_search_results(
    console: Console,
    query: str,
    candidates: list[SearchCandidate],
) -> None:
    """Print typeahead results as a table."""
    if not candidates:
        console.print(f"No profiles found for '{query}'", markup=False, highlight=False)
        return

    table = Table(title=escape(f"Profiles matching '{query}'"), title_justify="left")
    table.add_column("Handle", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Score", style="yellow", justify="right")
    table.add_column("Profile", style="blue", justify="right")

    for candidate in candidates:
        table.add_row(
            escape(f"@{candidate.handle}"),
            escape(candidate.display_name) or "-",
            str(candidate.score),
            str(candidate.profile_id) if candidate.has_profile_id else "-",
        )
    console.print(table)


def _slot_heading(slot: ComparisonSlot) -> str:
    if slot.profile is None:
        return escape(f"@{slot.handle}")
    suffix = " *" if slot.profile.is_synthetic else ""
    return escape(f"@{slot.profile.handle}") + suffix


_WINNER_MARK = {
    ComparisonOutcome.LEFT: "<",
    ComparisonOutcome.RIGHT: ">",
    ComparisonOutcome.DRAW: "=",
}


def print_comparison(console: Console, comparison: ProfileComparison) -> None:
    """Print the side-by-side metric table, or the slot errors."""
    for slot in (comparison.left, comparison.right):
        if slot.error:
            console.print(
                f"[red]{escape('@' + slot.handle)}:[/red] {escape(slot.error)}",
                highlight=False,
            )
    if not comparison.ready:
        return

    left = _slot_heading(comparison.left)
    right = _slot_heading(comparison.right)
    table = Table(title=f"{left} vs {right}", title_justify="left")
    table.add_column("Metric", style="cyan")
    table.add_column(left, style="green", justify="right", no_wrap=True)
    table.add_column("", justify="center")
    table.add_column(right, style="green", justify="right", no_wrap=True)

    for row in comparison.metrics:
        table.add_row(
            row.label,
            format_metric(row.key, row.left),
            _WINNER_MARK[row.outcome],
            format_metric(row.key, row.right),
        )
    console.print(table)

    tally = comparison.tally()
    console.print(
        f"{left} wins {tally[ComparisonOutcome.LEFT.value]}, "
        f"{right} wins {tally[ComparisonOutcome.RIGHT.value]}, "
        f"draws {tally[ComparisonOutcome.DRAW.value]}",
        highlight=False,
    )
    if any(slot.profile is not None and slot.profile.is_synthetic for slot in (comparison.left, comparison.right)):
        console.print(f"* {SYNTHETIC_NOTICE}", highlight=False, markup=False)


def print_share(console: Console, share: dict[str, str]) -> None:
    """Print share link and export file name without wrapping URLs."""
    console.print(f"Share: {share['intent_url']}", soft_wrap=True, highlight=False, markup=False)
    console.print(f"Link: {share['comparison_url']}", soft_wrap=True, highlight=False, markup=False)
    console.print(f"Export: {share['export_filename']}", soft_wrap=True, highlight=False, markup=False)


def print_statistics(console: Console, summary: dict[str, Any]) -> None:
    """Print session statistics (``--verbose``)."""
    table = Table(title="Session statistics", title_justify="left")
    table.add_column("Group", style="cyan")
    table.add_column("Counter", style="blue")
    table.add_column("Value", style="green", justify="right")
    for group in ("cache", "api", "resolution"):
        for name, value in summary.get(group, {}).items():
            rendered = f"{value:.2f}" if isinstance(value, float) else str(value)
            table.add_row(group, name, rendered)
    console.print(table)
