"""Command-line interface for rasterlab.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Styled pixel grid with the clip window highlighted
- Render, fill, transform and projection commands
- Verbose/quiet output modes
- Detailed error reporting
"""

from rasterlab.cli.app import cli, main

__all__ = ["cli", "main"]
