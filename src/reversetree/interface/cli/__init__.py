"""Command line interface for inspecting reverse tree records."""

from reversetree.interface.cli.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]
