"""CLI application entry point for pointedit.

This module provides a developer CLI using Typer. It reads a shape from its
JSON form, lists its handles, and replays single drags through the point
editor.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from pointedit import __version__
from pointedit.cli.output import (
    console,
    print_error,
    print_handles,
    print_header,
    print_shape_info,
    print_shape_json,
    print_step,
    print_success,
    print_warning,
)
from pointedit.config import ArcEditMode, EditorConfig, LoggingConfig, PointEditSettings
from pointedit.core import PointEditor, build_point_set
from pointedit.domain import Shape, shape_from_dict
from pointedit.exceptions import InvalidHandleError, PointEditError
from pointedit.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="pointedit",
    help="Inspect shapes and replay handle drags with the PCB point editor.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]pointedit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Inspect shapes and replay handle drags with the PCB point editor."""


class ConsoleWarnings:
    """Warning sink that collects editor warnings for printing."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


class FixedModifiers:
    """Modifier query answering the same for the whole drag."""

    def __init__(self, snap45: bool) -> None:
        self.snap45 = snap45

    def alt_constraint_requested(self) -> bool:
        return self.snap45


def _load_shape(path: Path) -> Shape:
    """Read a shape from its JSON form.

    Raises:
        typer.Exit: If the file is missing or does not hold a shape
    """
    if not path.is_file():
        print_error(
            f"Input file not found: {path}",
            details=f"The file '{path}' does not exist or is not a file.",
        )
        raise typer.Exit(code=1)

    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
        return shape_from_dict(data)
    except json.JSONDecodeError as e:
        print_error(f"Could not parse {path}", details=str(e))
        raise typer.Exit(code=1)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        print_error(f"Malformed shape in {path}", details=f"{type(e).__name__}: {e}")
        raise typer.Exit(code=1)
    except PointEditError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


def _parse_position(value: str) -> tuple[int, int]:
    """Parse an ``X,Y`` cursor position."""
    parts = value.split(",")
    if len(parts) != 2:
        raise typer.BadParameter("Expected X,Y")
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        raise typer.BadParameter(f"Coordinates must be integers: {value}") from None


@app.command()
def inspect(
    shape_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a shape JSON file",
            show_default=False,
        ),
    ],
) -> None:
    """List the draggable handles of a shape.

    Example:
        pointedit inspect outline.json
    """
    shape = _load_shape(shape_file)

    try:
        points = build_point_set(shape)
    except PointEditError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    print_header(__version__)
    print_shape_info(str(shape_file), shape, len(points))
    print_step("Handles")
    print_handles(points)


@app.command()
def drag(
    shape_file: Annotated[
        Path,
        typer.Argument(
            help="Path to a shape JSON file",
            show_default=False,
        ),
    ],
    handle: Annotated[
        int,
        typer.Option(
            "--handle",
            help="Index of the handle to drag (see 'inspect')",
            min=0,
        ),
    ],
    to: Annotated[
        str,
        typer.Option(
            "--to",
            "-t",
            help="Cursor position at the end of the drag, as X,Y",
        ),
    ],
    mode: Annotated[
        ArcEditMode,
        typer.Option(
            "--mode",
            "-m",
            help="Arc edit mode",
        ),
    ] = ArcEditMode.KEEP_CENTER,
    snap45: Annotated[
        bool,
        typer.Option(
            "--snap45",
            help="Hold the 45 degree constraint during the drag",
        ),
    ] = False,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the edited shape to this file instead of printing it",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
) -> None:
    """Replay one handle drag and print the resulting shape.

    Example:
        pointedit drag arc.json --handle 0 --to 0,-10 --mode keep_center
    """
    cursor = _parse_position(to)
    shape = _load_shape(shape_file)

    settings = PointEditSettings(
        editor=EditorConfig(arc_edit_mode=mode),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=False,
    )

    warnings = ConsoleWarnings()
    editor = PointEditor(
        settings=settings,
        warnings=warnings,
        modifiers=FixedModifiers(snap45),
    )

    try:
        editor.select(shape)
        editor.begin_drag(handle)
        editor.drag(*cursor)
        committed = editor.end_drag()
    except InvalidHandleError as e:
        print_error(str(e), details="Run 'pointedit inspect' to list the handles.")
        raise typer.Exit(code=1)
    except PointEditError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    for message in warnings.messages:
        print_warning(message)

    if output is not None:
        output.write_text(json.dumps(editor.shape.to_dict(), indent=2), encoding="utf-8")
        print_success(
            "Drag applied" if committed else "Shape unchanged",
            details=str(output),
        )
    else:
        print_shape_json(editor.shape)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
