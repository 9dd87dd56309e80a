# src/refrag/cli/__init__.py
"""CLI package for refrag.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the commands layer.
"""

from refrag.cli.app import app, console

__all__ = ["app", "console"]
