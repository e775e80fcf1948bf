"""Interactive point editor.

``PointEditor`` owns the handles of the selected shape and drives one edit
session at a time through three states::

    IDLE --(cursor over handle)--> HOVER --(drag start)--> DRAGGING
    DRAGGING --(drag end)--> IDLE
    DRAGGING --(cancel)--> IDLE, original geometry restored

Everything the editor needs from the host is behind small protocols: the
commit handler (undo transactions), the warning sink (transient popups), the
selection query (lock state) and the modifier query (is the alternate
constraint requested right now).
"""

import copy
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol, runtime_checkable

import structlog

from pointedit.config import ArcEditMode, PointEditSettings, get_default_settings
from pointedit.core.constraint import ConstraintMode, compute_constrainer, constrainer_partner
from pointedit.core.geometry import clamp_point
from pointedit.core.outline import (
    MIN_CONTOUR_VERTICES,
    OutlineValidator,
    insert_vertex,
    nearest_edge,
    remove_vertex,
)
from pointedit.core.points import build_point_set, promote_midpoint
from pointedit.core.reshape import reshape
from pointedit.domain import Arc, FeatureKind, Point, PointSet, PolyOutline, Shape, copy_geometry
from pointedit.exceptions import EditStateError, InvalidHandleError
from pointedit.utils import EditLogger, EditStats, get_logger


@runtime_checkable
class CommitHandler(Protocol):
    """Undo transaction owned by the host document."""

    def modify(self, shape: Shape) -> None:
        """Called once before the first geometry change of an operation."""
        ...

    def push(self, message: str) -> None:
        """Finalize the transaction."""
        ...

    def revert(self) -> None:
        """Drop the transaction; the editor has already restored the geometry."""
        ...


@runtime_checkable
class WarningSink(Protocol):
    """Transient, non-fatal user warnings."""

    def warn(self, message: str) -> None:
        ...


@runtime_checkable
class SelectionQuery(Protocol):
    """Selection-tracking collaborator."""

    def is_locked(self, shape: Shape) -> bool:
        ...


@runtime_checkable
class ModifierQuery(Protocol):
    """Host input state, queried on every drag event."""

    def alt_constraint_requested(self) -> bool:
        ...


class EditState(Enum):
    """State of the edit session."""

    IDLE = "idle"
    HOVER = "hover"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class EditSession:
    """Current edit session.

    Attributes:
        state: Session state
        index: Hovered or dragged handle (None when idle)
        original: Handle position at drag start (dragging only)
    """

    state: EditState = EditState.IDLE
    index: int | None = None
    original: Point | None = None


class PointEditor:
    """Edits the selected shape by dragging its handles.

    Example:
        >>> editor = PointEditor()
        >>> editor.select(Segment(Point(0, 0), Point(100, 0)))
        >>> editor.hover(100, 0)
        1
        >>> editor.begin_drag()
        True
        >>> editor.drag(100, 50)
        True
        >>> editor.end_drag()
        True
    """

    DRAG_MESSAGE = "Drag Corner"
    ADD_CORNER_MESSAGE = "Add Corner"
    REMOVE_CORNER_MESSAGE = "Remove Corner"

    def __init__(
        self,
        settings: PointEditSettings | None = None,
        commit: CommitHandler | None = None,
        warnings: WarningSink | None = None,
        selection: SelectionQuery | None = None,
        modifiers: ModifierQuery | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the editor with its collaborators.

        Args:
            settings: Application settings (defaults if None)
            commit: Undo transaction handler
            warnings: Receiver of validation warnings
            selection: Lock-state query, falls back to the shape's own flag
            modifiers: Modifier-key query for the 45 degree constraint
            logger: Structured logger
        """
        self.settings = settings if settings is not None else get_default_settings()
        self.commit = commit
        self.warnings = warnings
        self.selection = selection
        self.modifiers = modifiers
        self._log = EditLogger(logger if logger is not None else get_logger())
        self._validator = OutlineValidator()

        self._shape: Shape | None = None
        self._points: PointSet | None = None
        self._session = EditSession()
        self._snapshot: Shape | None = None
        self._modified = False
        self._constrainer: Point | None = None

    # --- State ---

    @property
    def shape(self) -> Shape | None:
        return self._shape

    @property
    def points(self) -> PointSet | None:
        return self._points

    @property
    def session(self) -> EditSession:
        return self._session

    @property
    def state(self) -> EditState:
        return self._session.state

    @property
    def edited_index(self) -> int | None:
        return self._session.index

    @property
    def constrainer(self) -> Point | None:
        """Point the current drag is constrained to, while the modifier is held."""
        return self._constrainer

    @property
    def stats(self) -> EditStats:
        return self._log.stats

    @property
    def arc_edit_mode(self) -> ArcEditMode:
        return self.settings.editor.arc_edit_mode

    def has_point(self) -> bool:
        """True if the cursor is over, or dragging, a handle."""
        return self._session.index is not None

    def has_midpoint(self) -> bool:
        return self.has_point() and self._points.is_midpoint(self._session.index)

    def has_corner(self) -> bool:
        return self.has_point() and not self.has_midpoint()

    # --- Selection and hover ---

    def select(self, shape: Shape | None) -> None:
        """Change the edited shape, discarding the previous handles.

        An active drag is cancelled first.

        Args:
            shape: Newly selected shape, None to clear
        """
        if self.state == EditState.DRAGGING:
            self.cancel()

        self._shape = shape
        self._points = build_point_set(shape) if shape is not None else None
        self._session = EditSession()
        self._constrainer = None

        self._log.log_selection(
            shape.kind.value if shape is not None else None,
            len(self._points) if self._points is not None else 0,
        )

    def hover(self, x: int, y: int) -> int | None:
        """Update the hovered handle for a cursor position.

        Args:
            x: Cursor X coordinate
            y: Cursor Y coordinate

        Returns:
            Index of the handle under the cursor, None if there is none. While
            dragging, the dragged handle.
        """
        if self.state == EditState.DRAGGING:
            return self._session.index
        if self._points is None:
            return None

        index = self._points.find_nearest(x, y, self.settings.editor.hover_tolerance)
        if index is None:
            self._session = EditSession()
        else:
            self._session = EditSession(state=EditState.HOVER, index=index)
        return index

    # --- Dragging ---

    def begin_drag(self, index: int | None = None) -> bool:
        """Start dragging a handle.

        Args:
            index: Handle to drag, defaults to the hovered handle

        Returns:
            True if a drag started. A call while already dragging is ignored.

        Raises:
            InvalidHandleError: If ``index`` is out of range
        """
        if self.state == EditState.DRAGGING or self._points is None:
            return False

        if index is None:
            index = self._session.index
        if index is None:
            return False
        if index < 0 or index >= len(self._points):
            raise InvalidHandleError(index, len(self._points))

        original = self._points[index]
        self._snapshot = copy.deepcopy(self._shape)
        self._modified = False
        self._session = EditSession(state=EditState.DRAGGING, index=index, original=original)
        self._log.log_drag_start(self._shape.kind.value, index, original.x, original.y)
        return True

    def drag(self, x: int, y: int) -> bool:
        """Move the dragged handle to a cursor position.

        Args:
            x: Cursor X coordinate
            y: Cursor Y coordinate

        Returns:
            True if the shape geometry changed, False if the edit was rejected

        Raises:
            EditStateError: If no drag is active
        """
        if self.state != EditState.DRAGGING:
            raise EditStateError("drag", self.state.value)

        cursor = clamp_point(Point(x, y), self.settings.geometry.coord_limit)
        index = self._session.index
        shape, points = self._shape, self._points

        # A midpoint becomes a real vertex only once the moved outline is accepted.
        promoted = None
        if points.is_midpoint(index):
            promoted = points[index].feature
            shape, index = promote_midpoint(shape, points, index)
            points = build_point_set(shape)

        target = cursor
        if self.modifiers is not None and self.modifiers.alt_constraint_requested():
            self._constrainer = constrainer_partner(shape, points, index, self._session.original)
            if self._is_radial_drag(shape, points, index):
                target = compute_constrainer(
                    cursor, self._constrainer, ConstraintMode.LINE, reference=self._session.original
                )
            else:
                target = compute_constrainer(cursor, self._constrainer, ConstraintMode.DEG45)
        else:
            self._constrainer = None

        candidate = reshape(shape, points, index, target, self.settings)

        if isinstance(candidate, PolyOutline) and not self._accept_outline(candidate):
            return False

        if promoted is not None:
            self._session = replace(self._session, index=index)
            self._log.log_midpoint_promoted(promoted.contour, promoted.index + 1)
        self._write(candidate)
        return True

    def end_drag(self) -> bool:
        """Finish the drag, committing the edit if anything changed.

        Returns:
            True if an edit was committed
        """
        if self.state != EditState.DRAGGING:
            return False

        committed = self._modified
        if committed:
            if self.commit is not None:
                self.commit.push(self.DRAG_MESSAGE)
            self._log.log_drag_commit(self._shape.kind.value, self._session.index)

        self._finish_session()
        return committed

    def cancel(self) -> bool:
        """Abort the drag and restore the geometry from its start.

        Returns:
            True if a drag was cancelled
        """
        if self.state != EditState.DRAGGING:
            return False

        if self._modified:
            copy_geometry(self._shape, self._snapshot)
            self._points = build_point_set(self._shape)
            if self.commit is not None:
                self.commit.revert()

        self._log.log_drag_cancel(self._shape.kind.value, self._session.index)
        self._finish_session()
        return True

    # --- Corners ---

    def _is_locked(self) -> bool:
        if self.selection is not None:
            return self.selection.is_locked(self._shape)
        return self._shape.locked

    def can_add_corner(self) -> bool:
        """Check whether the selected item accepts new corners."""
        return (
            isinstance(self._shape, PolyOutline)
            and self.state != EditState.DRAGGING
            and not self._is_locked()
        )

    def can_remove_corner(self) -> bool:
        """Check whether the hovered vertex can be removed.

        The outer contour keeps at least 3 vertices; a hole may go down to 2,
        in which case the whole hole is removed.
        """
        if not self.can_add_corner() or not self.has_corner():
            return False

        feature = self._points[self._session.index].feature
        if feature.contour == 0:
            return len(self._shape.outer.points) > MIN_CONTOUR_VERTICES
        return True

    def add_corner(self, x: int, y: int) -> bool:
        """Insert a corner on the outline edge closest to the cursor.

        Args:
            x: Cursor X coordinate
            y: Cursor Y coordinate

        Returns:
            True if a corner was added
        """
        if not self.can_add_corner():
            return False

        cursor = clamp_point(Point(x, y), self.settings.geometry.coord_limit)
        hit = nearest_edge(self._shape, cursor)
        if hit is None:
            return False

        contour = self._shape.contours[hit.contour]
        a = contour.points[hit.index]
        b = contour.points[(hit.index + 1) % len(contour.points)]
        corner = Point.from_float(*hit.nearest)
        if corner.same_position(a) or corner.same_position(b):
            corner = Point.from_float((a.x + b.x) / 2, (a.y + b.y) / 2)

        candidate = insert_vertex(self._shape, hit.contour, hit.index, corner)
        if not self._accept_outline(candidate):
            return False

        self._write(candidate)
        if self.commit is not None:
            self.commit.push(self.ADD_CORNER_MESSAGE)
        self._log.log_corner_added(hit.contour, hit.index + 1)
        self._finish_session()
        return True

    def remove_corner(self) -> bool:
        """Remove the hovered vertex.

        Returns:
            True if a corner was removed
        """
        if not self.can_remove_corner():
            return False

        feature = self._points[self._session.index].feature
        candidate = remove_vertex(self._shape, feature.contour, feature.index)
        if not self._accept_outline(candidate):
            return False

        self._write(candidate)
        if self.commit is not None:
            self.commit.push(self.REMOVE_CORNER_MESSAGE)
        self._log.log_corner_removed(feature.contour, feature.index)
        self._finish_session()
        return True

    # --- Preferences ---

    def change_arc_edit_mode(self) -> ArcEditMode:
        """Switch to the other arc edit mode.

        Returns:
            The new mode
        """
        current = self.settings.editor.arc_edit_mode
        new_mode = (
            ArcEditMode.KEEP_ENDPOINTS
            if current == ArcEditMode.KEEP_CENTER
            else ArcEditMode.KEEP_CENTER
        )
        self.settings.editor.arc_edit_mode = new_mode
        self._log.log_arc_mode(new_mode.value)
        return new_mode

    # --- Internals ---

    def _is_radial_drag(self, shape: Shape, points: PointSet, index: int) -> bool:
        """Arc endpoints in KEEP_ENDPOINTS mode are held on their line through the center."""
        if not isinstance(shape, Arc) or self.arc_edit_mode != ArcEditMode.KEEP_ENDPOINTS:
            return False
        return points[index].feature.kind in (FeatureKind.START, FeatureKind.END)

    def _accept_outline(self, candidate: PolyOutline) -> bool:
        problem = self._validator.find_problem(candidate)
        if problem is None:
            return True

        self._log.log_edit_rejected(candidate.kind.value, problem)
        if self.warnings is not None:
            self.warnings.warn(problem)
        return False

    def _write(self, candidate: Shape) -> None:
        """Write new geometry into the selected shape and rebuild its handles."""
        if not self._modified and self.commit is not None:
            self.commit.modify(self._shape)
        self._modified = True

        copy_geometry(self._shape, candidate)
        self._points = build_point_set(self._shape)

    def _finish_session(self) -> None:
        self._session = EditSession()
        self._snapshot = None
        self._modified = False
        self._constrainer = None
