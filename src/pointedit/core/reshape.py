"""Recompute a shape from one moved handle.

``reshape`` is the per-kind dispatch between a dragged handle and the shape
geometry it implies: arcs go through the arc reconstructor, rectangles through
corner pinning, circles keep a minimum radius and the rest take the handle
position directly. Polygon results are validated by the caller.
"""

import copy
import logging

from pointedit.config import ArcEditMode, PointEditSettings
from pointedit.core.arc import ArcGeometry, edit_arc
from pointedit.core.geometry import clamp_point, distance
from pointedit.core.pinning import pin_edited_corner
from pointedit.core.points import apply_point_set
from pointedit.domain import Arc, Circle, FeatureKind, Point, PointSet, RectPad, Shape
from pointedit.exceptions import InvalidHandleError

logger = logging.getLogger(__name__)


def reshape(
    shape: Shape,
    points: PointSet,
    index: int,
    target: Point,
    settings: PointEditSettings,
    mode: ArcEditMode | None = None,
) -> Shape:
    """Compute the shape implied by moving one handle.

    Args:
        shape: Current shape (left unchanged)
        points: Handles built from ``shape``
        index: Index of the moved real handle
        target: New handle position
        settings: Geometry, pinning and editor settings
        mode: Arc edit mode, defaults to the editor preference

    Returns:
        New shape geometry

    Raises:
        InvalidHandleError: If ``index`` is out of range or a midpoint
    """
    if index < 0 or index >= len(points.points):
        raise InvalidHandleError(index, len(points))

    geometry = settings.geometry
    limit = geometry.coord_limit
    target = clamp_point(target, limit)
    feature = points[index].feature

    if isinstance(shape, Arc):
        arc_mode = mode if mode is not None else settings.editor.arc_edit_mode
        result = copy.deepcopy(shape)
        edit_arc(ArcGeometry.of(shape), feature.kind, target, arc_mode, geometry).apply_to(result)
        return result

    if isinstance(shape, RectPad):
        corners = list(points.points)
        corners[index] = corners[index].at(target.x, target.y)
        pinned = pin_edited_corner(corners, index, settings.pinning, shape.hole, limit)
        result = copy.deepcopy(shape)
        result.top_left = pinned[0].plain()
        result.bottom_right = pinned[2].plain()
        return result

    if isinstance(shape, Circle):
        result = copy.deepcopy(shape)
        if feature.kind == FeatureKind.CENTER:
            dx = target.x - shape.center.x
            dy = target.y - shape.center.y
            result.center = target.plain()
            result.radius_point = clamp_point(
                Point(shape.radius_point.x + dx, shape.radius_point.y + dy), limit
            )
        elif distance(shape.center, target) >= geometry.min_radius:
            result.radius_point = target.plain()
        else:
            logger.debug("Circle radius below minimum, keeping previous radius")
        return result

    moved = PointSet(
        points=list(points.points),
        midpoints=list(points.midpoints),
        contour_ends=list(points.contour_ends),
    )
    moved.set_position(index, target.x, target.y)
    return apply_point_set(shape, moved)
