"""Handle sets for each editable shape kind.

Each shape kind builds its handles in a fixed order:

- segment: start, end
- arc: start, mid, end, center
- circle: center, radius point
- rectangle / pad: top-left, top-right, bottom-right, bottom-left
- polygon outline: outer vertices, hole vertices, then one midpoint per edge

Building is a pure function of the shape's geometry, and writing an unmoved
set back yields the same geometry.
"""

import copy
from collections.abc import Callable

from pointedit.core.outline import build_outline_points, insert_vertex
from pointedit.domain import (
    Arc,
    Circle,
    Feature,
    FeatureKind,
    Point,
    PointSet,
    PolyOutline,
    RectPad,
    Segment,
    Shape,
)
from pointedit.exceptions import InvalidHandleError, UnsupportedShapeError


def _handle(point: Point, kind: FeatureKind, index: int = 0) -> Point:
    return Point(point.x, point.y, Feature(kind, 0, index))


def _segment_points(shape: Segment) -> PointSet:
    return PointSet(points=[
        _handle(shape.start, FeatureKind.START),
        _handle(shape.end, FeatureKind.END),
    ])


def _arc_points(shape: Arc) -> PointSet:
    return PointSet(points=[
        _handle(shape.start, FeatureKind.START),
        _handle(shape.mid, FeatureKind.MID),
        _handle(shape.end, FeatureKind.END),
        _handle(shape.center, FeatureKind.CENTER),
    ])


def _circle_points(shape: Circle) -> PointSet:
    return PointSet(points=[
        _handle(shape.center, FeatureKind.CENTER),
        _handle(shape.radius_point, FeatureKind.RADIUS),
    ])


def _rect_points(shape: RectPad) -> PointSet:
    return PointSet(points=[
        _handle(corner, FeatureKind.CORNER, i) for i, corner in enumerate(shape.corners())
    ])


_BUILDERS: dict[type, Callable[..., PointSet]] = {
    Segment: _segment_points,
    Arc: _arc_points,
    Circle: _circle_points,
    RectPad: _rect_points,
    PolyOutline: build_outline_points,
}


def build_point_set(shape: Shape) -> PointSet:
    """Build the handles of a shape.

    Args:
        shape: Shape to edit

    Returns:
        Ordered point set for the shape

    Raises:
        UnsupportedShapeError: If the shape kind cannot be point-edited
    """
    builder = _BUILDERS.get(type(shape))
    if builder is None:
        raise UnsupportedShapeError(type(shape).__name__)
    return builder(shape)


def _by_feature(points: PointSet, kind: FeatureKind) -> Point:
    for p in points.points:
        if p.feature is not None and p.feature.kind == kind:
            return p.plain()
    raise InvalidHandleError(-1, len(points))


def apply_point_set(shape: Shape, points: PointSet) -> Shape:
    """Write handle positions into a copy of a shape, without constraints.

    Midpoint handles are ignored. Rectangles take their extent from the
    top-left and bottom-right handles.

    Args:
        shape: Shape the handles were built from
        points: Handles, possibly moved

    Returns:
        Updated copy of the shape
    """
    result = copy.deepcopy(shape)

    if isinstance(result, Segment):
        result.start = _by_feature(points, FeatureKind.START)
        result.end = _by_feature(points, FeatureKind.END)
    elif isinstance(result, Arc):
        result.start = _by_feature(points, FeatureKind.START)
        result.mid = _by_feature(points, FeatureKind.MID)
        result.end = _by_feature(points, FeatureKind.END)
        result.center = _by_feature(points, FeatureKind.CENTER)
    elif isinstance(result, Circle):
        result.center = _by_feature(points, FeatureKind.CENTER)
        result.radius_point = _by_feature(points, FeatureKind.RADIUS)
    elif isinstance(result, RectPad):
        result.top_left = points.points[0].plain()
        result.bottom_right = points.points[2].plain()
    elif isinstance(result, PolyOutline):
        for p in points.points:
            feature = p.feature
            result.contours[feature.contour].points[feature.index] = p.plain()
    else:
        raise UnsupportedShapeError(type(shape).__name__)

    return result


def flat_index(points: PointSet, contour: int, vertex: int) -> int:
    """Index of a contour vertex in a flattened point set."""
    first = points.contour_ends[contour - 1] + 1 if contour > 0 else 0
    return first + vertex


def promote_midpoint(shape: Shape, points: PointSet, index: int) -> tuple[PolyOutline, int]:
    """Turn a dragged midpoint handle into a real vertex.

    The new vertex is inserted at the midpoint's position, right after the
    first vertex of its edge. The caller must rebuild the point set from the
    returned outline.

    Args:
        shape: Outline being edited
        points: Its current handles
        index: Index of the midpoint handle

    Returns:
        Tuple of (edited copy of the outline, index of the new vertex in the
        rebuilt point set)

    Raises:
        InvalidHandleError: If the handle is not a midpoint
        UnsupportedShapeError: If the shape has no insertable edges
    """
    if not isinstance(shape, PolyOutline):
        raise UnsupportedShapeError(type(shape).__name__)
    if not points.is_midpoint(index):
        raise InvalidHandleError(index, len(points))

    handle = points[index]
    feature = handle.feature
    outline = insert_vertex(shape, feature.contour, feature.index, handle)

    # Contours before this one keep their sizes, so the flat offset is unchanged.
    return outline, flat_index(points, feature.contour, feature.index + 1)
