"""``mcpkit plugins`` — list the plugins that load from the build directory.

Uses the best-effort loading path: files that fail are only logged.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from mcpkit.models.plugins import PluginKind
from mcpkit.plugins.loader import PluginLoader

console = Console()


def plugins_cmd(
    kind: PluginKind = typer.Option(
        PluginKind.TOOL,
        "--kind",
        "-k",
        help="Plugin kind to list.",
    ),
    base_path: Path = typer.Option(
        None,
        "--base-path",
        "-b",
        help="Base path to use when the working directory has no build output.",
    ),
) -> None:
    """List the plugins of one kind that load successfully."""
    loader = PluginLoader(kind, base_path=base_path)

    if not loader.has_plugins():
        console.print(f"[dim]No {kind.value}s found in {loader.plugin_dir}.[/dim]")
        return

    plugins = loader.load_all()
    if not plugins:
        console.print(f"[yellow]No {kind.value}s could be loaded from {loader.plugin_dir}.[/yellow]")
        return

    table = Table(title=f"Loaded {kind.value}s")
    table.add_column("Name", style="cyan")
    table.add_column("Class", style="green")
    table.add_column("Description")

    for plugin in plugins:
        table.add_row(
            plugin.name,
            type(plugin).__name__,
            str(getattr(plugin, "description", "") or ""),
        )

    console.print(table)
