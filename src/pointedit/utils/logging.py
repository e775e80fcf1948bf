"""Logging utilities for pointedit."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog


@dataclass
class EditStats:
    """Statistics of an editing session."""

    drags_started: int = 0
    drags_committed: int = 0
    drags_cancelled: int = 0
    edits_rejected: int = 0
    corners_added: int = 0
    corners_removed: int = 0

    @property
    def drags_finished(self) -> int:
        """Drags that ended, by commit or cancel."""
        return self.drags_committed + self.drags_cancelled


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("pointedit")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


def get_logger() -> structlog.stdlib.BoundLogger:
    """Get the pointedit structlog logger without reconfiguring logging."""
    return structlog.get_logger("pointedit")


class EditLogger:
    """Logger for tracking point editing events and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = EditStats()

    def log_selection(self, shape_kind: str | None, handle_count: int) -> None:
        """Log a selection change."""
        self._logger.debug("Selection changed", shape=shape_kind, handles=handle_count)

    def log_drag_start(self, shape_kind: str, handle: int, x: int, y: int) -> None:
        """Log start of a handle drag."""
        self._logger.debug("Drag started", shape=shape_kind, handle=handle, x=x, y=y)
        self._stats.drags_started += 1

    def log_midpoint_promoted(self, contour: int, vertex: int) -> None:
        """Log a midpoint handle turning into a vertex."""
        self._logger.debug("Midpoint promoted to vertex", contour=contour, vertex=vertex)

    def log_drag_commit(self, shape_kind: str, handle: int) -> None:
        """Log a committed drag."""
        self._logger.info("Drag committed", shape=shape_kind, handle=handle)
        self._stats.drags_committed += 1

    def log_drag_cancel(self, shape_kind: str, handle: int) -> None:
        """Log a cancelled drag."""
        self._logger.info("Drag cancelled", shape=shape_kind, handle=handle)
        self._stats.drags_cancelled += 1

    def log_edit_rejected(self, shape_kind: str, problem: str) -> None:
        """Log an edit rejected by outline validation."""
        self._logger.warning("Edit rejected", shape=shape_kind, problem=problem)
        self._stats.edits_rejected += 1

    def log_corner_added(self, contour: int, vertex: int) -> None:
        """Log a corner insertion."""
        self._logger.info("Corner added", contour=contour, vertex=vertex)
        self._stats.corners_added += 1

    def log_corner_removed(self, contour: int, vertex: int) -> None:
        """Log a corner removal."""
        self._logger.info("Corner removed", contour=contour, vertex=vertex)
        self._stats.corners_removed += 1

    def log_arc_mode(self, mode: str) -> None:
        """Log an arc edit mode change."""
        self._logger.info("Arc edit mode changed", mode=mode)

    @property
    def stats(self) -> EditStats:
        """Get current editing statistics."""
        return self._stats
