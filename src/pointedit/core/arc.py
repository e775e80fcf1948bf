"""Arc reconstruction from a single dragged handle.

An arc has four handles: start, mid, end and center. Dragging one of them
recomputes the whole arc; which quantities stay fixed depends on the user's
arc edit mode:

============  ==============================  ===========================
Handle        KEEP_ENDPOINTS                  KEEP_CENTER
============  ==============================  ===========================
start / end   edit_endpoint_keep_tangent      edit_endpoint_keep_center
mid           edit_mid_keep_endpoints         edit_mid_keep_center
center        edit_center_keep_endpoints      move_arc
============  ==============================  ===========================

Every algorithm returns a complete, consistent ``ArcGeometry``. Degenerate
configurations (zero radius, collinear points, zero span, results outside the
coordinate limit) never propagate: the previous geometry is returned instead.
"""

import logging
import math
from dataclasses import dataclass

from pointedit.config import ArcEditMode, GeometryConfig
from pointedit.core.geometry import (
    Vec,
    arc_midpoint,
    arc_sense,
    circumcenter,
    clamp_point,
    distance,
    perpendicular_direction,
    project_on_line,
    to_point,
)
from pointedit.domain import Arc, FeatureKind, Point
from pointedit.exceptions import DegenerateGeometryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArcGeometry:
    """Complete geometry of an arc.

    Attributes:
        center: Circle center
        start: Start point
        mid: On-arc point halfway between start and end
        end: End point
    """

    center: Point
    start: Point
    mid: Point
    end: Point

    @classmethod
    def of(cls, arc: Arc) -> "ArcGeometry":
        """Take the geometry of an arc shape."""
        return cls(center=arc.center, start=arc.start, mid=arc.mid, end=arc.end)

    @property
    def sense(self) -> int:
        """Rotation sense from start through mid to end."""
        return arc_sense(self.start, self.mid, self.end)

    @property
    def radius(self) -> float:
        return distance(self.center, self.start)

    def apply_to(self, arc: Arc) -> None:
        """Write this geometry into an arc shape."""
        arc.center = self.center
        arc.start = self.start
        arc.mid = self.mid
        arc.end = self.end


def _within_limit(config: GeometryConfig, *points: Point) -> bool:
    limit = config.coord_limit
    return all(abs(p.x) <= limit and abs(p.y) <= limit for p in points)


def _build(
    center: Vec,
    start: Point,
    end: Point,
    sense: int,
    config: GeometryConfig,
    exact_center: Point | None = None,
) -> ArcGeometry:
    """Assemble an arc from a float center, checking it is usable.

    Raises:
        DegenerateGeometryError: If the arc is degenerate or out of range
    """
    limit = config.coord_limit
    if abs(center[0]) > limit or abs(center[1]) > limit:
        raise DegenerateGeometryError("Arc center outside coordinate limit")
    if sense == 0:
        raise DegenerateGeometryError("Arc has no rotation sense")
    if start.same_position(end):
        raise DegenerateGeometryError("Arc endpoints coincide")
    if distance(center, start) < config.min_radius:
        raise DegenerateGeometryError("Arc radius below minimum")

    mid = to_point(arc_midpoint(center, start, end, sense), limit)
    result = ArcGeometry(
        center=exact_center if exact_center is not None else to_point(center, limit),
        start=start.plain(),
        mid=mid,
        end=end.plain(),
    )
    if not _within_limit(config, result.start, result.mid, result.end):
        raise DegenerateGeometryError("Arc outside coordinate limit")
    if result.sense == 0:
        raise DegenerateGeometryError("Arc collapsed after rounding")
    return result


def _fallback(previous: ArcGeometry, operation: str, reason: object) -> ArcGeometry:
    logger.debug("Arc edit %s fell back to previous geometry: %s", operation, reason)
    return previous


def arc_from_three_points(start: Point, mid: Point, end: Point, config: GeometryConfig) -> ArcGeometry:
    """Build an arc through three points.

    Args:
        start: Arc start
        mid: Any point on the arc between start and end
        end: Arc end
        config: Geometry limits

    Returns:
        Arc geometry whose mid is recomputed halfway along the arc

    Raises:
        DegenerateGeometryError: If the points are collinear or out of range
    """
    center = circumcenter(start, mid, end, config.epsilon)
    sense = arc_sense(start, mid, end)
    return _build(center, start, end, sense, config)


def edit_endpoint_keep_tangent(
    geometry: ArcGeometry, moving: FeatureKind, cursor: Point, config: GeometryConfig
) -> ArcGeometry:
    """Move one endpoint while keeping the tangent at the other endpoint.

    The unmoved endpoint ``p1`` and the arc's direction there stay fixed, so
    the new center lies on the normal through ``p1``. Being equidistant from
    ``p1`` and the cursor ``p2``, it sits at ``p1 + k * n`` with::

        k = |p2 - p1|^2 / (2 * n . (p2 - p1))

    where ``n`` is the unit normal from ``p1`` towards the old center. A
    negative ``k`` flips the curvature. When the cursor lies (almost) along
    the tangent the radius explodes; the arc would be a straight line and the
    previous geometry is kept.

    Args:
        geometry: Current arc
        moving: FeatureKind.START or FeatureKind.END
        cursor: New position of the moved endpoint
        config: Geometry limits

    Returns:
        New arc geometry
    """
    cursor = clamp_point(cursor, config.coord_limit).plain()
    moving_start = moving == FeatureKind.START
    fixed = geometry.end if moving_start else geometry.start

    radius = distance(geometry.center, fixed)
    dx, dy = cursor.x - fixed.x, cursor.y - fixed.y
    if radius == 0 or (dx == 0 and dy == 0) or geometry.sense == 0:
        return _fallback(geometry, "endpoint_keep_tangent", "zero radius, zero chord or no sense")

    nx = (geometry.center.x - fixed.x) / radius
    ny = (geometry.center.y - fixed.y) / radius
    dot = nx * dx + ny * dy
    side = abs(nx * dy - ny * dx)
    chord = math.hypot(dx, dy)

    if abs(dot) <= config.epsilon * chord or side / abs(dot) > config.arc_center_max_angle:
        return _fallback(geometry, "endpoint_keep_tangent", "cursor along tangent, arc would be straight")

    k = (dx * dx + dy * dy) / (2.0 * dot)
    center = (fixed.x + k * nx, fixed.y + k * ny)

    # Travel sense leaving the fixed endpoint must keep the same tangent.
    travel = geometry.sense if not moving_start else -geometry.sense
    rx, ry = fixed.x - geometry.center.x, fixed.y - geometry.center.y
    tangent = (-ry * travel, rx * travel)
    new_rx, new_ry = fixed.x - center[0], fixed.y - center[1]
    new_travel = 1 if new_rx * tangent[1] - new_ry * tangent[0] > 0 else -1
    sense = -new_travel if moving_start else new_travel

    start, end = (cursor, fixed) if moving_start else (fixed, cursor)
    try:
        return _build(center, start, end, sense, config)
    except DegenerateGeometryError as e:
        return _fallback(geometry, "endpoint_keep_tangent", e)


def edit_endpoint_keep_center(
    geometry: ArcGeometry, moving: FeatureKind, cursor: Point, config: GeometryConfig
) -> ArcGeometry:
    """Move one endpoint around the circle, keeping the center.

    The moved endpoint becomes the point of the circle (radius taken from the
    unmoved endpoint) in the direction of the cursor. The rotation sense is
    unchanged and the mid point is recomputed along it.

    Args:
        geometry: Current arc
        moving: FeatureKind.START or FeatureKind.END
        cursor: Cursor position
        config: Geometry limits

    Returns:
        New arc geometry with the exact same center
    """
    cursor = clamp_point(cursor, config.coord_limit).plain()
    moving_start = moving == FeatureKind.START
    previous = geometry.start if moving_start else geometry.end
    fixed = geometry.end if moving_start else geometry.start
    center = geometry.center

    radius = max(distance(center, fixed), float(config.min_radius))

    dx, dy = cursor.x - center.x, cursor.y - center.y
    if dx == 0 and dy == 0:
        dx, dy = previous.x - center.x, previous.y - center.y
    if dx == 0 and dy == 0:
        return _fallback(geometry, "endpoint_keep_center", "cursor on center")

    angle = math.atan2(dy, dx)
    moved = to_point(
        (center.x + radius * math.cos(angle), center.y + radius * math.sin(angle)),
        config.coord_limit,
    )

    start, end = (moved, fixed) if moving_start else (fixed, moved)
    try:
        return _build((center.x, center.y), start, end, geometry.sense, config, exact_center=center)
    except DegenerateGeometryError as e:
        return _fallback(geometry, "endpoint_keep_center", e)


def edit_center_keep_endpoints(
    geometry: ArcGeometry, cursor: Point, config: GeometryConfig
) -> ArcGeometry:
    """Move the center along the chord's perpendicular bisector.

    The new center is the projection of the cursor onto the bisector of the
    fixed chord. If the bisector crosses the cursor's horizontal or vertical
    line within ``snap_epsilon_sq`` of that projection, the center snaps to
    the crossing.

    Args:
        geometry: Current arc
        cursor: Cursor position
        config: Geometry limits

    Returns:
        New arc geometry with both endpoints unchanged
    """
    cursor = clamp_point(cursor, config.coord_limit).plain()
    start, end = geometry.start, geometry.end

    try:
        direction = perpendicular_direction(start, end)
    except DegenerateGeometryError as e:
        return _fallback(geometry, "center_keep_endpoints", e)

    chord_mid = ((start.x + end.x) / 2, (start.y + end.y) / 2)
    center, _ = project_on_line(cursor, chord_mid, direction)

    best: Vec = center
    best_dist_sq = config.snap_epsilon_sq + 1.0
    if direction[1] != 0:
        t = (cursor.y - chord_mid[1]) / direction[1]
        crossing = (chord_mid[0] + t * direction[0], float(cursor.y))
        dist_sq = distance(crossing, center) ** 2
        if dist_sq <= config.snap_epsilon_sq and dist_sq < best_dist_sq:
            best, best_dist_sq = crossing, dist_sq
    if direction[0] != 0:
        t = (cursor.x - chord_mid[0]) / direction[0]
        crossing = (float(cursor.x), chord_mid[1] + t * direction[1])
        dist_sq = distance(crossing, center) ** 2
        if dist_sq <= config.snap_epsilon_sq and dist_sq < best_dist_sq:
            best = crossing

    try:
        return _build(best, start, end, geometry.sense, config)
    except DegenerateGeometryError as e:
        return _fallback(geometry, "center_keep_endpoints", e)


def edit_mid_keep_endpoints(
    geometry: ArcGeometry, cursor: Point, config: GeometryConfig
) -> ArcGeometry:
    """Move the mid point along the chord's bisector, keeping both endpoints.

    Legal mid points lie on the ray from the chord midpoint towards the old
    mid point, starting 1% of the chord length off the chord. The arc may not
    flip to the other side of its chord while being dragged.

    Args:
        geometry: Current arc
        cursor: Cursor position
        config: Geometry limits

    Returns:
        New arc geometry with both endpoints unchanged
    """
    cursor = clamp_point(cursor, config.coord_limit).plain()
    start, end = geometry.start, geometry.end

    try:
        direction = perpendicular_direction(start, end)
    except DegenerateGeometryError as e:
        return _fallback(geometry, "mid_keep_endpoints", e)

    chord_mid = ((start.x + end.x) / 2, (start.y + end.y) / 2)
    side = (geometry.mid.x - chord_mid[0]) * direction[0] + (geometry.mid.y - chord_mid[1]) * direction[1]
    if side == 0:
        return _fallback(geometry, "mid_keep_endpoints", "mid point on chord")
    if side < 0:
        direction = (-direction[0], -direction[1])

    just_off = max(distance(start, end) / 100.0, 1.0)
    _, t = project_on_line(cursor, chord_mid, direction)
    t = max(t, just_off)

    limit = config.coord_limit
    mid = to_point((chord_mid[0] + t * direction[0], chord_mid[1] + t * direction[1]), limit)

    try:
        center = circumcenter(start, mid, end, config.epsilon)
        if abs(center[0]) > limit or abs(center[1]) > limit:
            raise DegenerateGeometryError("Arc center outside coordinate limit")
        if distance(center, start) < config.min_radius:
            raise DegenerateGeometryError("Arc radius below minimum")
    except DegenerateGeometryError as e:
        return _fallback(geometry, "mid_keep_endpoints", e)

    return ArcGeometry(center=to_point(center, limit), start=start, mid=mid, end=end)


def edit_mid_keep_center(
    geometry: ArcGeometry, cursor: Point, config: GeometryConfig
) -> ArcGeometry:
    """Rotate the whole arc about its center so the mid point tracks the cursor.

    The cursor's projection onto the circle becomes the new mid point; start
    and end rotate by the same angle, so radius and span are preserved.

    Args:
        geometry: Current arc
        cursor: Cursor position
        config: Geometry limits

    Returns:
        New arc geometry with the exact same center
    """
    cursor = clamp_point(cursor, config.coord_limit).plain()
    center = geometry.center

    dx, dy = cursor.x - center.x, cursor.y - center.y
    mx, my = geometry.mid.x - center.x, geometry.mid.y - center.y
    if (dx == 0 and dy == 0) or (mx == 0 and my == 0):
        return _fallback(geometry, "mid_keep_center", "cursor or mid on center")

    delta = math.atan2(dy, dx) - math.atan2(my, mx)
    cos_d, sin_d = math.cos(delta), math.sin(delta)

    def rotate(p: Point) -> Point:
        px, py = p.x - center.x, p.y - center.y
        return to_point(
            (center.x + px * cos_d - py * sin_d, center.y + px * sin_d + py * cos_d),
            config.coord_limit,
        )

    result = ArcGeometry(
        center=center,
        start=rotate(geometry.start),
        mid=rotate(geometry.mid),
        end=rotate(geometry.end),
    )
    if result.sense == 0 or not _within_limit(config, result.start, result.mid, result.end):
        return _fallback(geometry, "mid_keep_center", "rotated arc degenerate")
    return result


def move_arc(geometry: ArcGeometry, new_center: Point, config: GeometryConfig) -> ArcGeometry:
    """Translate the whole arc so its center lands on ``new_center``."""
    new_center = clamp_point(new_center, config.coord_limit).plain()
    dx = new_center.x - geometry.center.x
    dy = new_center.y - geometry.center.y

    result = ArcGeometry(
        center=new_center,
        start=Point(geometry.start.x + dx, geometry.start.y + dy),
        mid=Point(geometry.mid.x + dx, geometry.mid.y + dy),
        end=Point(geometry.end.x + dx, geometry.end.y + dy),
    )
    if not _within_limit(config, result.start, result.mid, result.end):
        return _fallback(geometry, "move_arc", "translated arc outside coordinate limit")
    return result


def edit_arc(
    geometry: ArcGeometry,
    handle: FeatureKind,
    cursor: Point,
    mode: ArcEditMode,
    config: GeometryConfig,
) -> ArcGeometry:
    """Dispatch an arc handle drag to the algorithm for the current mode.

    Args:
        geometry: Current arc
        handle: Feature of the dragged handle (START, MID, END or CENTER)
        cursor: Target position of the handle
        mode: Arc edit mode preference
        config: Geometry limits

    Returns:
        New arc geometry
    """
    keep_endpoints = mode == ArcEditMode.KEEP_ENDPOINTS

    if handle == FeatureKind.CENTER:
        if keep_endpoints:
            return edit_center_keep_endpoints(geometry, cursor, config)
        return move_arc(geometry, cursor, config)

    if handle == FeatureKind.MID:
        if keep_endpoints:
            return edit_mid_keep_endpoints(geometry, cursor, config)
        return edit_mid_keep_center(geometry, cursor, config)

    if keep_endpoints:
        return edit_endpoint_keep_tangent(geometry, handle, cursor, config)
    return edit_endpoint_keep_center(geometry, handle, cursor, config)
