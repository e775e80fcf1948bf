"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with handle tables and formatted messages.
"""

import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pointedit.domain import PointSet, Shape

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]pointedit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_shape_info(path: str, shape: Shape, handle_count: int) -> None:
    """Print a one-line summary of a loaded shape.

    Args:
        path: File the shape was read from
        shape: Loaded shape
        handle_count: Number of handles, midpoints included
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" ({shape.kind.value})")
    console.print(line)
    locked = f" {SYM_DOT} locked" if shape.locked else ""
    console.print(f"  {handle_count} handles{locked}")


def print_handles(points: PointSet) -> None:
    """Print the handle table of a point set.

    Args:
        points: Handles to list
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Feature")
    table.add_column("Contour", justify="right")
    table.add_column("Index", justify="right")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")

    for i, point in enumerate(points):
        feature = point.feature
        style = "dim" if points.is_midpoint(i) else None
        table.add_row(
            str(i),
            feature.kind.value if feature else "-",
            str(feature.contour) if feature else "-",
            str(feature.index) if feature else "-",
            f"{point.x:,}",
            f"{point.y:,}",
            style=style,
        )

    console.print(table)


def print_shape_json(shape: Shape) -> None:
    """Print a shape's JSON form."""
    console.print_json(json.dumps(shape.to_dict()))


def print_success(message: str, details: str | None = None) -> None:
    """Print success message.

    Args:
        message: Main message
        details: Optional secondary line
    """
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")
    if details:
        console.print(f"  {details}")


def print_warning(message: str) -> None:
    """Print a non-fatal warning."""
    console.print(f"[yellow]{SYM_WARN} {message}[/yellow]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
