"""Rich renderers for resolver results."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.table import Table

from bibresolve.core.bibliography import BibliographyIssue
from bibresolve.core.resolution import ResolvedBibliography
from bibresolve.core.styles import StyleArchive

from .state import get_cli_state


def print_resolved_bibliography(resolved: ResolvedBibliography) -> None:
    """Render the ordered bibliography as a table."""
    console = get_cli_state().console
    if not resolved.items:
        console.print("[dim]The bibliography is empty.[/]")
        return

    table = Table(title="Bibliography", box=box.SQUARE, header_style="bold cyan")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Key", style="green", no_wrap=True)
    table.add_column("Entry", overflow="fold")
    for index, item in enumerate(resolved.items, start=1):
        table.add_row(str(index), item.key, item.text)
    console.print(table)

    if resolved.citations:
        console.print("Citations: " + "; ".join(resolved.citations))


def print_issues(issues: Sequence[BibliographyIssue]) -> None:
    """Render merge warnings, if any."""
    if not issues:
        return
    table = Table(title="Warnings", box=box.SQUARE, header_style="bold cyan")
    table.add_column("Key", style="yellow", no_wrap=True)
    table.add_column("Message", style="yellow")
    table.add_column("Source", style="yellow")
    for issue in issues:
        table.add_row(issue.key or "-", issue.message, issue.source or "-")
    get_cli_state().err_console.print(table)


def print_style_list(archive: StyleArchive) -> None:
    """List every style name reachable through the archive."""
    console = get_cli_state().console
    names = archive.names()
    if not names:
        console.print("[dim]No styles found.[/]")
        return
    table = Table(title="Styles", box=box.SQUARE, header_style="bold cyan")
    table.add_column("Name", style="green", no_wrap=True)
    table.add_column("File", overflow="fold")
    for name in names:
        table.add_row(name, str(archive.locate(name)))
    console.print(table)


__all__ = ["print_issues", "print_resolved_bibliography", "print_style_list"]
