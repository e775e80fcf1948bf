"""Command-line interface for pointedit.

This module provides a developer CLI using Typer with rich output for
inspecting shapes and replaying handle drags outside the host editor.

Key features:
- Handle tables for any supported shape
- Single-drag replay with arc edit mode and 45 degree constraint
- JSON output of the edited shape
"""

from pointedit.cli.app import cli, main

__all__ = ["cli", "main"]
