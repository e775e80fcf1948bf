"""Auxiliary constraints applied to a dragged handle.

While the host reports the alternate-constraint modifier as held, the dragged
handle is snapped relative to a partner point (the constrainer):
- DEG45: onto the nearest of the 8 horizontal, vertical and diagonal rays
- LINE: onto the line through the partner and a reference point, which
  holds a dragged arc endpoint on its radius

The solver is stateless; whether to apply it is decided per event by the
caller.
"""

import math
from enum import Enum

from pointedit.core.geometry import Vec, distance, project_on_line
from pointedit.domain import Arc, Circle, FeatureKind, Point, PointSet, PolyOutline, Segment, Shape
from pointedit.exceptions import DegenerateGeometryError

_DIAG = math.sqrt(0.5)
_TIE_EPSILON = 1e-9

# Enumeration order doubles as the tie-break: axis-aligned rays win over diagonals.
RAY_DIRECTIONS: tuple[Vec, ...] = (
    (1.0, 0.0),
    (0.0, 1.0),
    (-1.0, 0.0),
    (0.0, -1.0),
    (_DIAG, _DIAG),
    (-_DIAG, _DIAG),
    (-_DIAG, -_DIAG),
    (_DIAG, -_DIAG),
)


class ConstraintMode(Enum):
    """Kind of auxiliary constraint."""

    DEG45 = "45deg"
    LINE = "line"


def snap_to_45(edited: Point, partner: Point) -> Point:
    """Snap a point onto the nearest 45 degree ray from a partner point.

    Every ray's candidate is the orthogonal projection of ``edited`` onto it
    (the partner itself when the projection falls behind the ray origin). The
    candidate closest to ``edited`` wins; on equal distance the earlier ray in
    ``RAY_DIRECTIONS`` wins.

    Args:
        edited: Unconstrained target position
        partner: Origin of the rays

    Returns:
        Snapped position, carrying the edited point's feature
    """
    best: Vec = (float(partner.x), float(partner.y))
    best_dist = distance(edited, best)

    for direction in RAY_DIRECTIONS:
        projection, t = project_on_line(edited, partner, direction)
        if t <= 0:
            continue
        dist = distance(edited, projection)
        if dist < best_dist - _TIE_EPSILON:
            best = projection
            best_dist = dist

    snapped = Point.from_float(best[0], best[1])
    return edited.at(snapped.x, snapped.y)


def snap_to_line(edited: Point, partner: Point, reference: Point) -> Point:
    """Project a point onto the line through ``partner`` and ``reference``.

    Raises:
        DegenerateGeometryError: If partner and reference coincide
    """
    direction = (reference.x - partner.x, reference.y - partner.y)
    projection, _ = project_on_line(edited, partner, direction)
    snapped = Point.from_float(projection[0], projection[1])
    return edited.at(snapped.x, snapped.y)


def compute_constrainer(
    edited: Point,
    partner: Point,
    mode: ConstraintMode,
    reference: Point | None = None,
) -> Point:
    """Constrain an edited point relative to a partner point.

    Args:
        edited: Unconstrained target position of the dragged handle
        partner: Point the constraint is relative to
        mode: Constraint to apply
        reference: Second point of the line for LINE mode

    Returns:
        Constrained position. For LINE mode without a usable reference the
        edited point is returned unchanged.
    """
    if mode == ConstraintMode.DEG45:
        return snap_to_45(edited, partner)

    if reference is None:
        return edited
    try:
        return snap_to_line(edited, partner, reference)
    except DegenerateGeometryError:
        return edited


def constrainer_partner(shape: Shape, points: PointSet, index: int, original: Point) -> Point:
    """Pick the point a dragged handle is snapped relative to.

    Args:
        shape: Shape being edited
        points: Its current handles
        index: Index of the dragged handle
        original: Position of the handle when the drag started

    Returns:
        The other endpoint of a segment, the center of an arc or circle, the
        previous vertex of a polygon contour, and the drag origin otherwise
    """
    handle = points[index]
    feature = handle.feature

    if isinstance(shape, Segment) and feature is not None:
        other = FeatureKind.END if feature.kind == FeatureKind.START else FeatureKind.START
        return next(p for p in points.points if p.feature and p.feature.kind == other).plain()

    if isinstance(shape, (Arc, Circle)) and feature is not None:
        if feature.kind != FeatureKind.CENTER:
            return shape.center

    if isinstance(shape, PolyOutline) and not points.is_midpoint(index):
        return points[points.previous_index(index)].plain()

    return original.plain()
