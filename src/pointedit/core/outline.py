"""Polygon outline handles and validation.

This module converts a polygon outline (outer contour plus holes) into a flat
point set and checks outlines after edits:
- Every contour has at least 3 vertices
- No contour intersects itself
- No hole touches or crosses the outer boundary or another hole
- Every hole lies inside the outer boundary

It also provides the topology edits used by corner add/remove and by
midpoint promotion.
"""

import logging
from dataclasses import dataclass

from pointedit.core.geometry import Vec, nearest_point_on_segment, orientation, segments_intersect
from pointedit.domain import Contour, Feature, FeatureKind, Point, PointSet, PolyOutline
from pointedit.exceptions import OutlineValidationError

logger = logging.getLogger(__name__)

MIN_CONTOUR_VERTICES = 3


def build_outline_points(outline: PolyOutline) -> PointSet:
    """Flatten an outline into handles.

    Vertices of the outer contour come first, then those of each hole. One
    synthetic midpoint handle per edge follows, in the same contour order.

    Args:
        outline: Outline to build handles for

    Returns:
        Point set with contour boundaries recorded
    """
    points: list[Point] = []
    midpoints: list[Point] = []
    contour_ends: list[int] = []

    for c, contour in enumerate(outline.contours):
        n = len(contour.points)
        for i, p in enumerate(contour.points):
            points.append(Point(p.x, p.y, Feature(FeatureKind.VERTEX, c, i)))
        if n:
            contour_ends.append(len(points) - 1)

        for i in range(n):
            a = contour.points[i]
            b = contour.points[(i + 1) % n]
            mid = Point.from_float((a.x + b.x) / 2, (a.y + b.y) / 2)
            midpoints.append(Point(mid.x, mid.y, Feature(FeatureKind.EDGE_MIDPOINT, c, i)))

    return PointSet(points=points, midpoints=midpoints, contour_ends=contour_ends)


def _edges(contour: Contour) -> list[tuple[Point, Point]]:
    n = len(contour.points)
    return [(contour.points[i], contour.points[(i + 1) % n]) for i in range(n)]


def _folds_back(a: Point, b: Point, c: Point) -> bool:
    """True if consecutive edges a-b and b-c overlap beyond their shared vertex."""
    if a.same_position(b) or b.same_position(c):
        return True
    if orientation(a, b, c) != 0:
        return False
    return (a.x - b.x) * (c.x - b.x) + (a.y - b.y) * (c.y - b.y) > 0


def is_self_intersecting(contour: Contour) -> bool:
    """Check whether a closed contour touches or crosses itself.

    Args:
        contour: Contour to check

    Returns:
        True if any two non-adjacent edges share a point, or two adjacent
        edges overlap
    """
    edges = _edges(contour)
    n = len(edges)

    for i in range(n):
        a, b = edges[i]
        c = edges[(i + 1) % n][1]
        if _folds_back(a, b, c):
            return True

    for i in range(n):
        for j in range(i + 1, n):
            if j == i + 1 or (i == 0 and j == n - 1):
                continue
            if segments_intersect(edges[i][0], edges[i][1], edges[j][0], edges[j][1]):
                return True

    return False


def contours_intersect(first: Contour, second: Contour) -> bool:
    """Check whether the boundaries of two contours touch or cross."""
    min_x1, min_y1, max_x1, max_y1 = first.bounding_box()
    min_x2, min_y2, max_x2, max_y2 = second.bounding_box()
    if max_x1 < min_x2 or max_x2 < min_x1 or max_y1 < min_y2 or max_y2 < min_y1:
        return False

    for a, b in _edges(first):
        for c, d in _edges(second):
            if segments_intersect(a, b, c, d):
                return True
    return False


class OutlineValidator:
    """Validates polygon outlines after an edit.

    The validator is stateless.
    """

    def find_problem(self, outline: PolyOutline) -> str | None:
        """Describe the first problem found in an outline.

        Args:
            outline: Outline to check

        Returns:
            Human readable problem description, None if the outline is valid
        """
        if not outline.contours:
            return "Outline has no contours"

        for idx, contour in enumerate(outline.contours):
            if len(contour.points) < MIN_CONTOUR_VERTICES:
                return f"Contour {idx} has fewer than {MIN_CONTOUR_VERTICES} vertices"

        for idx, contour in enumerate(outline.contours):
            if is_self_intersecting(contour):
                if idx == 0:
                    return "Self-intersecting polygons are not allowed"
                return f"Hole {idx} intersects itself"

        outer = outline.outer
        holes = outline.holes
        for h, hole in enumerate(holes, start=1):
            if contours_intersect(outer, hole):
                return f"Hole {h} crosses the outer boundary"
            first = hole.points[0]
            if not outer.contains_point(first.x, first.y):
                return f"Hole {h} lies outside the outer boundary"

        for i in range(len(holes)):
            for j in range(i + 1, len(holes)):
                a, b = holes[i], holes[j]
                if (
                    contours_intersect(a, b)
                    or a.contains_point(b.points[0].x, b.points[0].y)
                    or b.contains_point(a.points[0].x, a.points[0].y)
                ):
                    return f"Holes {i + 1} and {j + 1} overlap"

        return None

    def validate(self, outline: PolyOutline) -> bool:
        """Check whether an outline is valid."""
        problem = self.find_problem(outline)
        if problem is not None:
            logger.debug("Outline rejected: %s", problem)
            return False
        return True

    def check(self, outline: PolyOutline) -> None:
        """Validate an outline, raising on failure.

        Raises:
            OutlineValidationError: If the outline is invalid
        """
        problem = self.find_problem(outline)
        if problem is not None:
            raise OutlineValidationError(problem)


def validate_outline(outline: PolyOutline) -> bool:
    """Check whether an outline is valid."""
    return OutlineValidator().validate(outline)


def find_outline_problem(outline: PolyOutline) -> str | None:
    """Describe the first problem of an outline, None if it is valid."""
    return OutlineValidator().find_problem(outline)


def _copy(outline: PolyOutline) -> PolyOutline:
    return PolyOutline(
        contours=[Contour(points=list(c.points)) for c in outline.contours],
        locked=outline.locked,
    )


def insert_vertex(outline: PolyOutline, contour: int, after: int, point: Point) -> PolyOutline:
    """Insert a vertex after ``after`` in a contour.

    Args:
        outline: Outline to edit (left unchanged)
        contour: Contour index
        after: Index of the vertex the new one follows
        point: Position of the new vertex

    Returns:
        Edited copy of the outline
    """
    result = _copy(outline)
    result.contours[contour].points.insert(after + 1, point.plain())
    return result


def remove_vertex(outline: PolyOutline, contour: int, index: int) -> PolyOutline:
    """Remove a vertex from a contour.

    A hole left with fewer than 3 vertices is removed entirely.

    Args:
        outline: Outline to edit (left unchanged)
        contour: Contour index
        index: Vertex index within the contour

    Returns:
        Edited copy of the outline
    """
    result = _copy(outline)
    points = result.contours[contour].points
    del points[index]

    if contour > 0 and len(points) < MIN_CONTOUR_VERTICES:
        del result.contours[contour]

    return result


@dataclass
class EdgeHit:
    """Edge of an outline closest to a position.

    Attributes:
        contour: Contour index
        index: Index of the edge's first vertex
        nearest: Closest position on the edge
        distance: Distance from the query position
    """

    contour: int
    index: int
    nearest: Vec
    distance: float


def nearest_edge(outline: PolyOutline, cursor: Point) -> EdgeHit | None:
    """Find the outline edge closest to the cursor.

    Args:
        outline: Outline to search
        cursor: Query position

    Returns:
        Closest edge, None for an outline without edges
    """
    best: EdgeHit | None = None

    for c, contour in enumerate(outline.contours):
        for i, (a, b) in enumerate(_edges(contour)):
            nearest, dist = nearest_point_on_segment(cursor, a, b)
            if best is None or dist < best.distance:
                best = EdgeHit(contour=c, index=i, nearest=nearest, distance=dist)

    return best
