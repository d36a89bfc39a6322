"""mcpkit CLI — Typer-based command-line interface.

Provides the ``mcpkit`` command with subcommands for validating the
plugins in a build directory and listing the ones that load.

All output uses Rich for formatted terminal display.
"""
