"""Command-line interface for icemold.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Cavity-fitted layout of 1-4 stacked characters
- Optional outline fill with fixed or automatic offset
- JSON export of the 2D outlines
- Solid preview summary for the ice, base and stick
"""

from icemold.cli.app import cli, main

__all__ = ["cli", "main"]
