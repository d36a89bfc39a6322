"""``mcpkit validate`` — validate every plugin in the build directory.

Prints one line per discovered file, then a summary.  Exits 0 when no
file failed and 1 otherwise, including when there is no build output.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from mcpkit.models.plugins import LoadResult, LoadStatus, PluginKind
from mcpkit.plugins.loader import PluginLoader

console = Console()

_STATUS_MARKUP: dict[LoadStatus, str] = {
    LoadStatus.LOADED: "[green]✓[/green]",
    LoadStatus.SKIPPED: "[yellow]-[/yellow]",
    LoadStatus.FAILED: "[bold red]✗[/bold red]",
}


def format_result(result: LoadResult) -> str:
    """One Rich-markup line describing a file outcome."""
    icon = _STATUS_MARKUP[result.status]
    path = escape(result.file.relative_path)
    if result.status == LoadStatus.LOADED:
        return f"{icon} [bold]{path}[/bold]: Valid ({escape(result.instance.name)})"
    if result.status == LoadStatus.SKIPPED:
        return f"{icon} [bold]{path}[/bold]: Skipped - {escape(result.message)}"
    return f"{icon} [bold]{path}[/bold]: {escape(result.message)}"


def validate_cmd(
    kind: PluginKind = typer.Option(
        PluginKind.TOOL,
        "--kind",
        "-k",
        help="Plugin kind to validate.",
    ),
    base_path: Path = typer.Option(
        None,
        "--base-path",
        "-b",
        help="Base path to use when the working directory has no build output.",
    ),
    self_check: bool = typer.Option(
        True,
        "--self-check/--no-self-check",
        help="Run each plugin's own validate() hook.",
    ),
) -> None:
    """Validate all plugins of one kind.

    Every discovered file is loaded, instantiated and checked against the
    capability contract.  Any failure makes the command exit non-zero.
    """
    loader = PluginLoader(kind, base_path=base_path)
    console.print(f"[bold cyan]Validating {kind.value}s...[/bold cyan]\n")

    report = loader.validate_all(self_check=self_check)

    if report.root_error is not None:
        console.print(f"[bold red]✗ {escape(report.root_error)}[/bold red]")
        console.print("[dim]Build the project first.[/dim]")
        raise typer.Exit(code=1)

    if not report.results:
        console.print(f"[yellow]No {kind.value} files found in {escape(str(report.root))}[/yellow]")

    for result in report.results:
        console.print(format_result(result))

    console.print()
    if report.passed:
        console.print(
            f"[bold green]All {report.loaded_count} {kind.value}s validated "
            f"successfully![/bold green] [dim]({report.skipped_count} skipped)[/dim]"
        )
        return

    console.print(f"[bold red]Validation failed: {report.failure_count} error(s) found[/bold red]")
    raise typer.Exit(code=1)
