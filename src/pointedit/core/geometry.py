"""Geometric primitives for point editing.

This module provides the small, pure building blocks the editing algorithms
are made of:
- Coordinate clamping to the safe board range
- Exact integer orientation and segment intersection tests
- Projections onto segments and lines
- Circumcenter and arc sense/midpoint computations

Positions are integer ``Point`` values; intermediate results that are not
rounded yet are ``(x, y)`` float tuples.
"""

import math

from pointedit.domain import Point, round_coord
from pointedit.exceptions import DegenerateGeometryError

Vec = tuple[float, float]


def clamp_coord(value: float, limit: int) -> int:
    """Clamp and round one coordinate to ``[-limit, limit]``."""
    if value > limit:
        return limit
    if value < -limit:
        return -limit
    return round_coord(value)


def clamp_point(point: Point, limit: int) -> Point:
    """Clamp a point to the safe coordinate range, keeping its feature.

    Args:
        point: Point to clamp
        limit: Largest allowed coordinate magnitude

    Returns:
        The same point if in range, otherwise a clamped copy
    """
    x = clamp_coord(point.x, limit)
    y = clamp_coord(point.y, limit)
    if x == point.x and y == point.y:
        return point
    return point.at(x, y)


def to_point(vec: Vec, limit: int) -> Point:
    """Round a float position to a clamped integer point."""
    return Point(clamp_coord(vec[0], limit), clamp_coord(vec[1], limit))


def distance(a: Point | Vec, b: Point | Vec) -> float:
    """Euclidean distance between two positions."""
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return math.hypot(ax - bx, ay - by)


def _xy(p: Point | Vec) -> Vec:
    if isinstance(p, Point):
        return (p.x, p.y)
    return p


def cross(o: Point | Vec, a: Point | Vec, b: Point | Vec) -> float:
    """Z component of (a - o) x (b - o).

    Exact when all arguments are integer points.
    """
    ox, oy = _xy(o)
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return (ax - ox) * (by - oy) - (ay - oy) * (bx - ox)


def orientation(o: Point, a: Point, b: Point) -> int:
    """Orientation of the triangle (o, a, b).

    Returns:
        1 for counter-clockwise (y-up frame), -1 for clockwise, 0 if collinear
    """
    value = cross(o, a, b)
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _within_box(p: Point, a: Point, b: Point) -> bool:
    return min(a.x, b.x) <= p.x <= max(a.x, b.x) and min(a.y, b.y) <= p.y <= max(a.y, b.y)


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Check whether two closed segments share at least one point.

    Touching endpoints and collinear overlaps count as intersections.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2

    Returns:
        True if the segments intersect or touch
    """
    d1 = orientation(p3, p4, p1)
    d2 = orientation(p3, p4, p2)
    d3 = orientation(p1, p2, p3)
    d4 = orientation(p1, p2, p4)

    if d1 * d2 < 0 and d3 * d4 < 0:
        return True

    if d1 == 0 and _within_box(p1, p3, p4):
        return True
    if d2 == 0 and _within_box(p2, p3, p4):
        return True
    if d3 == 0 and _within_box(p3, p1, p2):
        return True
    if d4 == 0 and _within_box(p4, p1, p2):
        return True

    return False


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Vec, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance) where nearest_point is an (x, y)
        float tuple on the segment
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq == 0:
        return (float(seg_start.x), float(seg_start.y)), distance(point, seg_start)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = (seg_start.x + t * dx, seg_start.y + t * dy)
    return nearest, distance(point, nearest)


def project_on_line(point: Point | Vec, origin: Point | Vec, direction: Vec) -> tuple[Vec, float]:
    """Project a point onto the infinite line ``origin + t * direction``.

    Args:
        point: The point to project
        origin: A point on the line
        direction: Line direction (need not be normalized)

    Returns:
        Tuple of (projection, t)

    Raises:
        DegenerateGeometryError: If direction is a zero vector
    """
    px, py = _xy(point)
    ox, oy = _xy(origin)
    dx, dy = direction
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        raise DegenerateGeometryError("Cannot project onto a line with zero direction")

    t = ((px - ox) * dx + (py - oy) * dy) / length_sq
    return (ox + t * dx, oy + t * dy), t


def perpendicular_direction(p1: Point | Vec, p2: Point | Vec) -> Vec:
    """Calculate the unit perpendicular vector to a line from p1 to p2.

    The perpendicular is rotated 90 degrees counter-clockwise from the
    direction vector (p2 - p1).

    Raises:
        DegenerateGeometryError: If p1 and p2 are the same point
    """
    x1, y1 = _xy(p1)
    x2, y2 = _xy(p2)
    dx = x2 - x1
    dy = y2 - y1

    length = math.hypot(dx, dy)
    if length == 0:
        raise DegenerateGeometryError("Cannot calculate perpendicular of zero-length line")

    return (-dy / length, dx / length)


def circumcenter(a: Point | Vec, b: Point | Vec, c: Point | Vec, epsilon: float = 1e-9) -> Vec:
    """Center of the circle through three points.

    Args:
        a: First point
        b: Second point
        c: Third point
        epsilon: Relative collinearity tolerance

    Returns:
        Circle center as an (x, y) float tuple

    Raises:
        DegenerateGeometryError: If the points are (nearly) collinear
    """
    ax, ay = _xy(a)
    bx, by = _xy(b)
    cx, cy = _xy(c)

    # Work relative to a to keep the products small
    bx, by = bx - ax, by - ay
    cx, cy = cx - ax, cy - ay

    d = 2.0 * (bx * cy - by * cx)
    scale = max(bx * bx + by * by, cx * cx + cy * cy)
    if scale == 0 or abs(d) <= epsilon * scale:
        raise DegenerateGeometryError("Points are collinear, no circumcircle")

    b_sq = bx * bx + by * by
    c_sq = cx * cx + cy * cy
    ux = (cy * b_sq - by * c_sq) / d
    uy = (bx * c_sq - cx * b_sq) / d
    return (ax + ux, ay + uy)


def arc_sense(start: Point | Vec, mid: Point | Vec, end: Point | Vec) -> int:
    """Rotation sense of an arc running start -> mid -> end.

    Three points visited in counter-clockwise order around a circle form a
    counter-clockwise triangle, so the triangle's orientation is the arc's.

    Returns:
        1 for counter-clockwise (y-up frame), -1 for clockwise, 0 if degenerate
    """
    value = cross(start, mid, end)
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def angle_of(center: Point | Vec, point: Point | Vec) -> float:
    """Polar angle of ``point`` around ``center`` in radians."""
    cx, cy = _xy(center)
    px, py = _xy(point)
    return math.atan2(py - cy, px - cx)


def sweep_angle(center: Point | Vec, start: Point | Vec, end: Point | Vec, sense: int) -> float:
    """Signed angle swept going from start to end around center.

    Args:
        center: Arc center
        start: Arc start
        end: Arc end
        sense: 1 to sweep counter-clockwise, -1 clockwise

    Returns:
        Sweep in radians, in ``[0, 2pi)`` for sense 1 and ``(-2pi, 0]`` for -1
    """
    delta = angle_of(center, end) - angle_of(center, start)
    if sense > 0:
        return delta % math.tau
    return -((-delta) % math.tau)


def point_on_circle(center: Point | Vec, radius: float, angle: float) -> Vec:
    """Point at ``angle`` on the circle of ``radius`` around ``center``."""
    cx, cy = _xy(center)
    return (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def arc_midpoint(center: Point | Vec, start: Point | Vec, end: Point | Vec, sense: int) -> Vec:
    """Point halfway along an arc.

    Args:
        center: Arc center
        start: Arc start, defines the radius
        end: Arc end
        sense: Rotation sense from start to end

    Returns:
        The on-arc point at half the sweep from start
    """
    radius = distance(center, start)
    sweep = sweep_angle(center, start, end, sense)
    if sweep == 0:
        # Start and end coincide: the arc is a full circle
        sweep = math.tau if sense > 0 else -math.tau
    return point_on_circle(center, radius, angle_of(center, start) + sweep / 2)
