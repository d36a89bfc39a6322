"""Main Typer application — imports and registers all CLI commands.

Entry point: ``mcpkit`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from mcpkit import __version__
from mcpkit.cli.commands.plugins_cmd import plugins_cmd
from mcpkit.cli.commands.validate import validate_cmd
from mcpkit.config import config
from mcpkit.core.logging_setup import resolve_level, setup_logging

app = typer.Typer(
    name="mcpkit",
    help="mcpkit: discover, load and validate MCP server plugins.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show INFO logs."),
    debug: bool = typer.Option(False, "--debug", help="Show DEBUG logs."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors."),
) -> None:
    """Configure logging before any subcommand runs."""
    setup_logging(
        resolve_level(config.log_level, quiet=quiet, verbose=verbose, debug=debug)
    )


# Register subcommands
app.command(name="validate", help="Validate all plugins in the build directory.")(validate_cmd)
app.command(name="plugins", help="List the plugins that load from the build directory.")(plugins_cmd)


@app.command(name="version", help="Show the mcpkit version.")
def version_cmd() -> None:
    typer.echo(f"mcpkit {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
