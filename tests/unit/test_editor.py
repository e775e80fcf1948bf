"""Unit tests for the interactive point editor.

Tests cover:
- Selection and hover tracking
- Drag start, move, end and cancel
- Midpoint promotion on the first move
- Outline validation of drags
- 45 degree constraint while the modifier is held
- Corner add/remove and arc edit mode switching
"""

from unittest.mock import MagicMock

import pytest

from pointedit.config import ArcEditMode, EditorConfig, PointEditSettings
from pointedit.core.editor import (
    CommitHandler,
    EditState,
    ModifierQuery,
    PointEditor,
    SelectionQuery,
    WarningSink,
)
from pointedit.domain import Arc, Contour, Point, PolyOutline, Segment
from pointedit.exceptions import EditStateError, InvalidHandleError


class RecordingCommit:
    """Commit handler recording every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    def modify(self, shape) -> None:
        self.calls.append(("modify", shape))

    def push(self, message: str) -> None:
        self.calls.append(("push", message))

    def revert(self) -> None:
        self.calls.append(("revert", None))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class ListWarnings:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


class LockQuery:
    def __init__(self, locked: bool) -> None:
        self.locked = locked

    def is_locked(self, shape) -> bool:
        return self.locked


class Modifiers:
    def __init__(self, held: bool = False) -> None:
        self.held = held

    def alt_constraint_requested(self) -> bool:
        return self.held


def square(left: int, top: int, size: int) -> Contour:
    return Contour(
        points=[
            Point(left, top),
            Point(left + size, top),
            Point(left + size, top + size),
            Point(left, top + size),
        ]
    )


@pytest.fixture
def commit() -> RecordingCommit:
    return RecordingCommit()


@pytest.fixture
def warnings() -> ListWarnings:
    return ListWarnings()


@pytest.fixture
def modifiers() -> Modifiers:
    return Modifiers()


@pytest.fixture
def editor(commit: RecordingCommit, warnings: ListWarnings, modifiers: Modifiers) -> PointEditor:
    settings = PointEditSettings(editor=EditorConfig(hover_tolerance=5))
    return PointEditor(settings=settings, commit=commit, warnings=warnings, modifiers=modifiers)


@pytest.fixture
def outline() -> PolyOutline:
    return PolyOutline(contours=[square(0, 0, 100)])


class TestCollaboratorProtocols:
    """Tests for the collaborator protocols."""

    def test_fakes_satisfy_protocols(self) -> None:
        assert isinstance(RecordingCommit(), CommitHandler)
        assert isinstance(ListWarnings(), WarningSink)
        assert isinstance(LockQuery(False), SelectionQuery)
        assert isinstance(Modifiers(), ModifierQuery)


class TestSelectionAndHover:
    """Tests for selection changes and hover tracking."""

    def test_initial_state(self, editor: PointEditor) -> None:
        assert editor.state == EditState.IDLE
        assert editor.points is None
        assert not editor.has_point()

    def test_select_builds_points(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        assert len(editor.points) == 2
        assert editor.state == EditState.IDLE

    def test_select_none_clears(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.select(None)
        assert editor.shape is None
        assert editor.points is None
        assert editor.hover(0, 0) is None

    def test_hover_enters_and_leaves(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        assert editor.hover(98, 2) == 1
        assert editor.state == EditState.HOVER
        assert editor.edited_index == 1
        assert editor.has_corner()

        assert editor.hover(50, 0) is None
        assert editor.state == EditState.IDLE
        assert editor.edited_index is None

    def test_hover_midpoint(self, editor: PointEditor, outline: PolyOutline) -> None:
        editor.select(outline)
        index = editor.hover(50, 1)
        assert index == 4
        assert editor.has_midpoint()
        assert not editor.has_corner()


class TestDragging:
    """Tests for the drag life cycle."""

    def test_begin_drag_requires_handle(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        assert not editor.begin_drag()
        assert editor.state == EditState.IDLE

    def test_begin_drag_from_hover(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.hover(100, 0)
        assert editor.begin_drag()
        assert editor.state == EditState.DRAGGING
        assert editor.session.original == editor.points[1]

    def test_nested_begin_drag_is_ignored(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.begin_drag(1)
        assert not editor.begin_drag(0)
        assert editor.edited_index == 1
        assert editor.stats.drags_started == 1

    def test_begin_drag_out_of_range(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        with pytest.raises(InvalidHandleError):
            editor.begin_drag(5)

    def test_drag_without_session(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        with pytest.raises(EditStateError):
            editor.drag(1, 1)

    def test_drag_writes_into_selected_shape(
        self, editor: PointEditor, commit: RecordingCommit
    ) -> None:
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        editor.begin_drag(1)
        assert editor.drag(100, 40)
        assert editor.drag(100, 50)

        assert seg.end == Point(100, 50)
        assert editor.points[1].to_tuple() == (100, 50)
        # Modification is announced once, before the first change
        assert commit.calls == [("modify", seg)]

    def test_hover_during_drag_keeps_handle(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.begin_drag(1)
        assert editor.hover(0, 0) == 1
        assert editor.state == EditState.DRAGGING

    def test_end_drag_commits(self, editor: PointEditor, commit: RecordingCommit) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.begin_drag(1)
        editor.drag(100, 50)
        assert editor.end_drag()

        assert commit.names == ["modify", "push"]
        assert commit.calls[-1] == ("push", "Drag Corner")
        assert editor.state == EditState.IDLE
        assert editor.stats.drags_committed == 1

    def test_end_drag_without_move(self, editor: PointEditor, commit: RecordingCommit) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.begin_drag(1)
        assert not editor.end_drag()
        assert commit.calls == []
        assert editor.state == EditState.IDLE

    def test_end_drag_when_idle(self, editor: PointEditor) -> None:
        assert not editor.end_drag()

    def test_cancel_restores_geometry(self, editor: PointEditor, commit: RecordingCommit) -> None:
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        editor.begin_drag(1)
        editor.drag(30, 70)
        editor.drag(60, 90)
        assert editor.cancel()

        assert seg.end == Point(100, 0)
        assert editor.points[1].to_tuple() == (100, 0)
        assert commit.names == ["modify", "revert"]
        assert editor.state == EditState.IDLE
        assert editor.stats.drags_cancelled == 1

    def test_cancel_without_move(self, editor: PointEditor, commit: RecordingCommit) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        editor.begin_drag(0)
        assert editor.cancel()
        assert commit.calls == []

    def test_cancel_when_idle(self, editor: PointEditor) -> None:
        assert not editor.cancel()

    def test_select_during_drag_cancels(self, editor: PointEditor) -> None:
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        editor.begin_drag(1)
        editor.drag(10, 10)
        editor.select(Segment(Point(5, 5), Point(6, 6)))
        assert seg.end == Point(100, 0)
        assert editor.state == EditState.IDLE

    def test_cursor_clamped(self, editor: PointEditor) -> None:
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        limit = editor.settings.geometry.coord_limit
        editor.begin_drag(1)
        editor.drag(2**40, -(2**40))
        assert seg.end == Point(limit, -limit)

    def test_works_without_collaborators(self) -> None:
        editor = PointEditor()
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        editor.begin_drag(0)
        editor.drag(-10, -10)
        assert editor.end_drag()
        assert seg.start == Point(-10, -10)


class TestMidpointPromotion:
    """Tests for dragging polygon edge midpoints."""

    def test_first_move_inserts_vertex(
        self, editor: PointEditor, outline: PolyOutline, commit: RecordingCommit
    ) -> None:
        editor.select(outline)
        editor.begin_drag(4)
        assert editor.drag(50, -20)

        assert outline.outer.points == [
            Point(0, 0),
            Point(50, -20),
            Point(100, 0),
            Point(100, 100),
            Point(0, 100),
        ]
        assert editor.edited_index == 1
        assert editor.has_corner()
        assert len(editor.points.midpoints) == 5
        assert commit.names == ["modify"]

    def test_following_moves_drag_new_vertex(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        editor.begin_drag(4)
        editor.drag(50, -20)
        editor.drag(40, -30)
        assert len(outline.outer.points) == 5
        assert outline.outer.points[1] == Point(40, -30)

    def test_rejected_first_move_keeps_midpoint(
        self,
        editor: PointEditor,
        outline: PolyOutline,
        commit: RecordingCommit,
        warnings: ListWarnings,
    ) -> None:
        """Test a rejected first move inserts no vertex and announces nothing."""
        editor.select(outline)
        editor.begin_drag(4)
        assert not editor.drag(50, 200)

        assert outline.outer.points == square(0, 0, 100).points
        assert editor.edited_index == 4
        assert editor.has_midpoint()
        assert commit.calls == []
        assert warnings.messages == ["Self-intersecting polygons are not allowed"]

        assert editor.drag(50, -20)
        assert outline.outer.points[1] == Point(50, -20)
        assert editor.edited_index == 1
        assert commit.names == ["modify"]

    def test_cancel_removes_promoted_vertex(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        editor.begin_drag(5)
        editor.drag(130, 50)
        editor.cancel()
        assert outline.outer.points == square(0, 0, 100).points
        assert len(editor.points.points) == 4

    def test_hole_midpoint(self, editor: PointEditor) -> None:
        outline = PolyOutline(contours=[square(0, 0, 100), square(40, 40, 20)])
        editor.select(outline)
        # Outer vertices 0-3, hole vertices 4-7, outer midpoints 8-11, hole 12-15
        editor.begin_drag(12)
        editor.drag(50, 35)
        assert outline.contours[1].points[1] == Point(50, 35)
        assert editor.edited_index == 5
        assert editor.points[5].to_tuple() == (50, 35)


class TestOutlineValidation:
    """Tests for rejecting drags that break the outline."""

    def test_self_intersection_rejected(
        self, editor: PointEditor, outline: PolyOutline, warnings: ListWarnings
    ) -> None:
        editor.select(outline)
        editor.begin_drag(2)
        assert not editor.drag(-50, 50)

        assert outline.outer.points[2] == Point(100, 100)
        assert warnings.messages == ["Self-intersecting polygons are not allowed"]
        assert editor.stats.edits_rejected == 1
        assert editor.state == EditState.DRAGGING

    def test_valid_drag_after_rejection(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        editor.begin_drag(2)
        editor.drag(-50, 50)
        assert editor.drag(120, 120)
        assert outline.outer.points[2] == Point(120, 120)

    def test_rejection_keeps_last_valid_geometry(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        editor.begin_drag(2)
        editor.drag(110, 90)
        editor.drag(-50, 50)
        assert outline.outer.points[2] == Point(110, 90)

    def test_hole_crossing_outer_rejected(self, editor: PointEditor, warnings: ListWarnings) -> None:
        outline = PolyOutline(contours=[square(0, 0, 100), square(40, 40, 20)])
        editor.select(outline)
        editor.begin_drag(6)
        assert not editor.drag(150, 60)
        assert warnings.messages == ["Hole 1 crosses the outer boundary"]
        assert outline.contours[1].points[2] == Point(60, 60)

    def test_rejected_drag_is_not_committed(
        self, editor: PointEditor, outline: PolyOutline, commit: RecordingCommit
    ) -> None:
        editor.select(outline)
        editor.begin_drag(2)
        editor.drag(-50, 50)
        assert not editor.end_drag()
        assert commit.calls == []

    def test_rejection_logged(self, outline: PolyOutline) -> None:
        logger = MagicMock()
        editor = PointEditor(logger=logger)
        editor.select(outline)
        editor.begin_drag(2)
        editor.drag(-50, 50)
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["problem"] == "Self-intersecting polygons are not allowed"


class TestConstraint:
    """Tests for the 45 degree constraint."""

    def test_snap_while_modifier_held(self, editor: PointEditor, modifiers: Modifiers) -> None:
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        modifiers.held = True
        editor.begin_drag(1)
        editor.drag(100, 30)
        assert seg.end == Point(100, 0)
        assert editor.constrainer == Point(0, 0)

        editor.drag(100, 90)
        assert seg.end == Point(95, 95)

    def test_released_modifier_drops_constrainer(
        self, editor: PointEditor, modifiers: Modifiers
    ) -> None:
        seg = Segment(Point(0, 0), Point(100, 0))
        editor.select(seg)
        modifiers.held = True
        editor.begin_drag(1)
        editor.drag(100, 30)
        modifiers.held = False
        editor.drag(100, 30)
        assert seg.end == Point(100, 30)
        assert editor.constrainer is None

    def test_polygon_snaps_to_previous_vertex(
        self, editor: PointEditor, outline: PolyOutline, modifiers: Modifiers
    ) -> None:
        modifiers.held = True
        editor.select(outline)
        editor.begin_drag(2)
        editor.drag(104, 130)
        assert outline.outer.points[2] == Point(100, 130)

    def test_arc_endpoint_held_on_radius(self, editor: PointEditor, modifiers: Modifiers) -> None:
        """Test KEEP_ENDPOINTS endpoint drags slide along the line through the center."""
        arc = Arc(start=Point(10, 0), mid=Point(7, 7), end=Point(0, 10), center=Point(0, 0))
        editor.change_arc_edit_mode()
        editor.select(arc)
        modifiers.held = True
        editor.begin_drag(0)
        assert editor.drag(20, 3)

        assert editor.constrainer == Point(0, 0)
        assert arc.start == Point(20, 0)
        assert arc.end == Point(0, 10)
        assert arc.center == Point(0, -15)

    def test_arc_endpoint_keep_center_uses_45(
        self, editor: PointEditor, modifiers: Modifiers
    ) -> None:
        arc = Arc(start=Point(10, 0), mid=Point(7, 7), end=Point(0, 10), center=Point(0, 0))
        editor.select(arc)
        modifiers.held = True
        editor.begin_drag(0)
        editor.drag(3, -10)
        assert arc.start == Point(0, -10)
        assert arc.center == Point(0, 0)


class TestCorners:
    """Tests for adding and removing polygon corners."""

    def test_add_corner(
        self, editor: PointEditor, outline: PolyOutline, commit: RecordingCommit
    ) -> None:
        editor.select(outline)
        assert editor.can_add_corner()
        assert editor.add_corner(30, 3)

        assert outline.outer.points[1] == Point(30, 0)
        assert len(editor.points.points) == 5
        assert commit.calls[-1] == ("push", "Add Corner")
        assert editor.stats.corners_added == 1

    def test_add_corner_on_vertex_uses_edge_midpoint(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        editor.add_corner(-5, -5)
        assert Point(50, 0) in outline.outer.points
        assert len(outline.outer.points) == 5

    def test_add_corner_not_for_segments(self, editor: PointEditor) -> None:
        editor.select(Segment(Point(0, 0), Point(100, 0)))
        assert not editor.can_add_corner()
        assert not editor.add_corner(50, 0)

    def test_add_corner_not_while_dragging(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        editor.begin_drag(0)
        assert not editor.add_corner(50, 0)

    def test_locked_by_selection(self, outline: PolyOutline) -> None:
        editor = PointEditor(selection=LockQuery(True))
        editor.select(outline)
        assert not editor.can_add_corner()
        assert not editor.add_corner(50, 0)

    def test_locked_flag_without_selection_query(self) -> None:
        editor = PointEditor()
        editor.select(PolyOutline(contours=[square(0, 0, 100)], locked=True))
        assert not editor.can_add_corner()

    def test_remove_corner(
        self, editor: PointEditor, outline: PolyOutline, commit: RecordingCommit
    ) -> None:
        editor.select(outline)
        editor.hover(100, 100)
        assert editor.can_remove_corner()
        assert editor.remove_corner()

        assert outline.outer.points == [Point(0, 0), Point(100, 0), Point(0, 100)]
        assert commit.calls[-1] == ("push", "Remove Corner")
        assert editor.state == EditState.IDLE
        assert editor.stats.corners_removed == 1

    def test_outer_keeps_three_vertices(self, editor: PointEditor) -> None:
        triangle = PolyOutline(contours=[Contour(points=[Point(0, 0), Point(100, 0), Point(0, 100)])])
        editor.select(triangle)
        editor.hover(0, 0)
        assert not editor.can_remove_corner()
        assert not editor.remove_corner()
        assert len(triangle.outer.points) == 3

    def test_hole_below_three_vertices_removed(self, editor: PointEditor) -> None:
        hole = Contour(points=[Point(40, 40), Point(60, 40), Point(50, 60)])
        outline = PolyOutline(contours=[square(0, 0, 100), hole])
        editor.select(outline)
        editor.hover(50, 60)
        assert editor.remove_corner()
        assert len(outline.contours) == 1

    def test_remove_requires_hovered_vertex(
        self, editor: PointEditor, outline: PolyOutline
    ) -> None:
        editor.select(outline)
        assert not editor.remove_corner()
        editor.hover(50, 0)
        assert editor.has_midpoint()
        assert not editor.remove_corner()

    def test_remove_rejected_when_invalid(
        self, editor: PointEditor, warnings: ListWarnings
    ) -> None:
        """Test a removal that would leave a hole outside the outline is refused."""
        outer = Contour(
            points=[Point(0, 0), Point(100, 0), Point(100, 100), Point(50, 200), Point(0, 100)]
        )
        hole = Contour(points=[Point(45, 120), Point(55, 120), Point(50, 140)])
        outline = PolyOutline(contours=[outer, hole])
        editor.select(outline)
        editor.hover(50, 200)
        assert not editor.remove_corner()
        assert len(outline.outer.points) == 5
        assert warnings.messages == ["Hole 1 lies outside the outer boundary"]


class TestArcEditMode:
    """Tests for arc edit mode switching."""

    def test_toggle(self, editor: PointEditor) -> None:
        assert editor.arc_edit_mode == ArcEditMode.KEEP_CENTER
        assert editor.change_arc_edit_mode() == ArcEditMode.KEEP_ENDPOINTS
        assert editor.settings.editor.arc_edit_mode == ArcEditMode.KEEP_ENDPOINTS
        assert editor.change_arc_edit_mode() == ArcEditMode.KEEP_CENTER

    def test_mode_applies_to_next_drag(self, editor: PointEditor) -> None:
        arc = Arc(start=Point(10, 0), mid=Point(7, 7), end=Point(0, 10), center=Point(0, 0))
        editor.select(arc)
        editor.change_arc_edit_mode()
        editor.begin_drag(3)
        editor.drag(-5, -5)
        editor.end_drag()
        assert arc.start == Point(10, 0)
        assert arc.end == Point(0, 10)
        assert arc.center == Point(-5, -5)
