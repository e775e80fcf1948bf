"""End-to-end drag scenarios through the point editor.

Each scenario drives a PointEditor the way the host tool would: select,
hover, press, move, release. Coordinates are in nanometers where the
scenario is about board-scale behavior.
"""

import pytest

from pointedit.config import ArcEditMode, EditorConfig, PinningConfig, PointEditSettings
from pointedit.config.settings import IU_PER_MM
from pointedit.core import EditState, PointEditor, build_point_set, validate_outline
from pointedit.domain import Arc, Circle, Contour, Hole, Point, PolyOutline, RectPad


class Transaction:
    """Commit handler modelling one undo stack entry per drag."""

    def __init__(self) -> None:
        self.open = False
        self.entries: list[str] = []

    def modify(self, shape) -> None:
        assert not self.open
        self.open = True

    def push(self, message: str) -> None:
        assert self.open
        self.entries.append(message)
        self.open = False

    def revert(self) -> None:
        assert self.open
        self.open = False


def _drag(editor: PointEditor, start: tuple[int, int], path: list[tuple[int, int]]) -> bool:
    editor.hover(*start)
    assert editor.begin_drag()
    for x, y in path:
        editor.drag(x, y)
    return editor.end_drag()


class TestArcScenarios:
    """Arc drags in both edit modes."""

    def test_keep_center_start_drag(self) -> None:
        """Start dragged through a quarter turn keeps the exact center."""
        arc = Arc(start=Point(10, 0), mid=Point(7, 7), end=Point(0, 10), center=Point(0, 0))
        editor = PointEditor(settings=PointEditSettings(editor=EditorConfig(hover_tolerance=2)))
        editor.select(arc)

        assert _drag(editor, (10, 0), [(8, -6), (0, -10)])
        assert arc.start == Point(0, -10)
        assert arc.mid == Point(10, 0)
        assert arc.end == Point(0, 10)
        assert arc.center == Point(0, 0)

    def test_keep_endpoints_round_trip(self) -> None:
        """Dragging the mid out and back restores the original arc."""
        r = 10 * IU_PER_MM
        arc = Arc(start=Point(r, 0), mid=Point(7_071_068, 7_071_068), end=Point(0, r), center=Point(0, 0))
        settings = PointEditSettings(editor=EditorConfig(arc_edit_mode=ArcEditMode.KEEP_ENDPOINTS))
        editor = PointEditor(settings=settings)
        editor.select(arc)

        editor.begin_drag(1)
        editor.drag(12 * IU_PER_MM, 12 * IU_PER_MM)
        assert arc.start == Point(r, 0)
        assert arc.end == Point(0, r)
        editor.drag(7_071_068, 7_071_068)
        editor.end_drag()

        assert arc.mid == Point(7_071_068, 7_071_068)
        assert abs(arc.center.x) <= 1
        assert abs(arc.center.y) <= 1

    def test_many_small_moves_keep_arc_consistent(self) -> None:
        """A long drag never produces an arc whose points leave the circle."""
        arc = Arc(
            start=Point(IU_PER_MM, 0), mid=Point(707_107, 707_107), end=Point(0, IU_PER_MM), center=Point(0, 0)
        )
        editor = PointEditor(settings=PointEditSettings(editor=EditorConfig(arc_edit_mode="keep_endpoints")))
        editor.select(arc)
        editor.begin_drag(2)

        for step in range(50):
            editor.drag(-step * 20_000, IU_PER_MM - step * 5_000)
            radius = ((arc.start.x - arc.center.x) ** 2 + (arc.start.y - arc.center.y) ** 2) ** 0.5
            for p in (arc.mid, arc.end):
                dist = ((p.x - arc.center.x) ** 2 + (p.y - arc.center.y) ** 2) ** 0.5
                assert dist == pytest.approx(radius, abs=3.0)
        editor.end_drag()


class TestPadScenarios:
    """Rectangular pad drags."""

    def test_corner_pinned_around_hole(self) -> None:
        pad = RectPad(
            top_left=Point(0, 0), bottom_right=Point(100, 50), hole=Hole.from_bounds(40, 15, 60, 35)
        )
        settings = PointEditSettings(
            pinning=PinningConfig(min_size=1, hole_margin=2),
            editor=EditorConfig(hover_tolerance=3),
        )
        commit = Transaction()
        editor = PointEditor(settings=settings, commit=commit)
        editor.select(pad)

        assert _drag(editor, (100, 50), [(80, 40), (45, 20)])
        assert pad.top_left == Point(0, 0)
        assert pad.bottom_right == Point(62, 37)
        assert commit.entries == ["Drag Corner"]

        hole_left, hole_top, hole_right, hole_bottom = pad.hole.bounds()
        assert pad.top_left.x <= hole_left - 2
        assert pad.bottom_right.y >= hole_bottom + 2


class TestOutlineScenarios:
    """Polygon outline drags and topology edits."""

    @pytest.fixture
    def zone(self) -> PolyOutline:
        return PolyOutline(
            contours=[
                Contour(points=[Point(0, 0), Point(1000, 0), Point(1000, 1000), Point(0, 1000)]),
                Contour(points=[Point(400, 400), Point(600, 400), Point(600, 600), Point(400, 600)]),
            ]
        )

    def test_outline_stays_valid_through_a_drag(self, zone: PolyOutline) -> None:
        """Every intermediate state of a drag is a valid outline."""
        editor = PointEditor(
            settings=PointEditSettings(editor=EditorConfig(hover_tolerance=10)),
            commit=Transaction(),
        )
        editor.select(zone)
        editor.begin_drag(2)
        for x, y in [(900, 900), (500, 500), (300, 700), (-200, 500), (1200, 1200)]:
            editor.drag(x, y)
            assert validate_outline(zone)
        editor.end_drag()
        assert zone.outer.points[2] == Point(1200, 1200)

    def test_edge_midpoint_drag_creates_corner(self, zone: PolyOutline) -> None:
        commit = Transaction()
        editor = PointEditor(
            settings=PointEditSettings(editor=EditorConfig(hover_tolerance=10)), commit=commit
        )
        editor.select(zone)

        assert editor.hover(500, 2) is not None
        assert editor.has_midpoint()
        assert _drag(editor, (500, 2), [(500, -100), (500, -300)])

        assert zone.outer.points[1] == Point(500, -300)
        assert zone.total_vertices() == 9
        assert commit.entries == ["Drag Corner"]
        assert editor.state == EditState.IDLE

    def test_rejected_midpoint_drag_commits_nothing(self, zone: PolyOutline) -> None:
        """A midpoint drag whose only move is rejected leaves the outline as it was."""
        commit = Transaction()
        editor = PointEditor(
            settings=PointEditSettings(editor=EditorConfig(hover_tolerance=10)), commit=commit
        )
        editor.select(zone)
        before = zone.to_dict()

        editor.hover(500, 0)
        assert editor.begin_drag()
        assert not editor.drag(500, 2000)
        assert not editor.end_drag()

        assert zone.to_dict() == before
        assert len(zone.outer.points) == 4
        assert commit.entries == []
        assert not commit.open

    def test_cancelled_midpoint_drag_leaves_no_trace(self, zone: PolyOutline) -> None:
        commit = Transaction()
        editor = PointEditor(commit=commit)
        editor.select(zone)
        before = zone.to_dict()

        editor.begin_drag(len(editor.points.points) + 1)
        editor.drag(1300, 500)
        editor.cancel()

        assert zone.to_dict() == before
        assert commit.entries == []
        assert not commit.open

    def test_add_then_remove_corner(self, zone: PolyOutline) -> None:
        commit = Transaction()
        editor = PointEditor(
            settings=PointEditSettings(editor=EditorConfig(hover_tolerance=10)), commit=commit
        )
        editor.select(zone)

        assert editor.add_corner(1003, 250)
        assert Point(1000, 250) in zone.outer.points
        editor.hover(1000, 250)
        assert editor.remove_corner()

        assert zone.outer.points == [Point(0, 0), Point(1000, 0), Point(1000, 1000), Point(0, 1000)]
        assert commit.entries == ["Add Corner", "Remove Corner"]

    def test_points_rebuilt_after_topology_change(self, zone: PolyOutline) -> None:
        editor = PointEditor()
        editor.select(zone)
        editor.add_corner(500, 395)
        assert editor.points == build_point_set(zone)


class TestCircleScenario:
    def test_circle_center_drag_moves_circle(self) -> None:
        circle = Circle(center=Point(0, 0), radius_point=Point(500, 0))
        editor = PointEditor(settings=PointEditSettings(editor=EditorConfig(hover_tolerance=5)))
        editor.select(circle)
        assert _drag(editor, (0, 0), [(100, 100)])
        assert circle.center == Point(100, 100)
        assert circle.radius == pytest.approx(500.0)
