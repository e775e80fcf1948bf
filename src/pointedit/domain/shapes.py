"""Board shapes that can be point-edited.

The set of editable shapes is closed: segments, arcs, circles, rectangular
pads with an optional hole, and polygon outlines with holes. Shapes belong to
the host document; the editor reads them and writes edited geometry back.
"""

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar

from pointedit.domain.point import Point, round_coord
from pointedit.exceptions import UnsupportedShapeError


class ShapeKind(Enum):
    """Kind of editable shape."""

    SEGMENT = "segment"
    ARC = "arc"
    CIRCLE = "circle"
    RECT = "rect"
    POLYGON = "polygon"


@dataclass
class Segment:
    """A straight track or graphic line.

    Attributes:
        start: Start point
        end: End point
        locked: Locked items cannot be vertex-edited
    """

    kind: ClassVar[ShapeKind] = ShapeKind.SEGMENT

    start: Point
    end: Point
    locked: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        return cls(
            start=Point.from_dict(data["start"]),
            end=Point.from_dict(data["end"]),
            locked=data.get("locked", False),
        )


@dataclass
class Arc:
    """A circular arc stored by its three on-curve points and its center.

    The arc runs from ``start`` through ``mid`` to ``end``. The center is
    stored rather than derived so that edits which keep it fixed keep it
    exactly.

    Attributes:
        start: Start point
        mid: A point on the arc between start and end
        end: End point
        center: Circle center
        locked: Locked items cannot be vertex-edited
    """

    kind: ClassVar[ShapeKind] = ShapeKind.ARC

    start: Point
    mid: Point
    end: Point
    center: Point
    locked: bool = False

    @property
    def radius(self) -> float:
        """Distance from center to start."""
        return math.hypot(self.start.x - self.center.x, self.start.y - self.center.y)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "start": self.start.to_dict(),
            "mid": self.mid.to_dict(),
            "end": self.end.to_dict(),
            "center": self.center.to_dict(),
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Arc":
        return cls(
            start=Point.from_dict(data["start"]),
            mid=Point.from_dict(data["mid"]),
            end=Point.from_dict(data["end"]),
            center=Point.from_dict(data["center"]),
            locked=data.get("locked", False),
        )


@dataclass
class Circle:
    """A full circle given by its center and one point on the circumference."""

    kind: ClassVar[ShapeKind] = ShapeKind.CIRCLE

    center: Point
    radius_point: Point
    locked: bool = False

    @property
    def radius(self) -> float:
        return math.hypot(
            self.radius_point.x - self.center.x, self.radius_point.y - self.center.y
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "center": self.center.to_dict(),
            "radius_point": self.radius_point.to_dict(),
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Circle":
        return cls(
            center=Point.from_dict(data["center"]),
            radius_point=Point.from_dict(data["radius_point"]),
            locked=data.get("locked", False),
        )


@dataclass(frozen=True)
class Hole:
    """A drilled hole inside a pad.

    Attributes:
        center: Hole center
        size_x: Hole width
        size_y: Hole height
    """

    center: Point
    size_x: int
    size_y: int

    @classmethod
    def from_bounds(cls, left: int, top: int, right: int, bottom: int) -> "Hole":
        """Build a hole from its bounding box."""
        return cls(
            center=Point.from_float((left + right) / 2, (top + bottom) / 2),
            size_x=right - left,
            size_y=bottom - top,
        )

    def bounds(self) -> tuple[int, int, int, int]:
        """Get the hole's bounding box.

        Returns:
            Tuple of (left, top, right, bottom)
        """
        half_x = round_coord(self.size_x / 2)
        half_y = round_coord(self.size_y / 2)
        return (
            self.center.x - half_x,
            self.center.y - half_y,
            self.center.x + half_x,
            self.center.y + half_y,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "center": self.center.to_dict(),
            "size_x": self.size_x,
            "size_y": self.size_y,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Hole":
        return cls(
            center=Point.from_dict(data["center"]),
            size_x=int(data["size_x"]),
            size_y=int(data["size_y"]),
        )


@dataclass
class RectPad:
    """An axis-aligned rectangle, optionally a pad with a hole.

    Board coordinates grow downward, so ``top_left`` has the smallest x and y.

    Attributes:
        top_left: Top-left corner
        bottom_right: Bottom-right corner
        hole: Optional hole that must stay inside the rectangle
        locked: Locked items cannot be vertex-edited
    """

    kind: ClassVar[ShapeKind] = ShapeKind.RECT

    top_left: Point
    bottom_right: Point
    hole: Hole | None = None
    locked: bool = False

    @property
    def width(self) -> int:
        return self.bottom_right.x - self.top_left.x

    @property
    def height(self) -> int:
        return self.bottom_right.y - self.top_left.y

    def corners(self) -> list[Point]:
        """Get the corners in top-left, top-right, bottom-right, bottom-left order."""
        return [
            Point(self.top_left.x, self.top_left.y),
            Point(self.bottom_right.x, self.top_left.y),
            Point(self.bottom_right.x, self.bottom_right.y),
            Point(self.top_left.x, self.bottom_right.y),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "top_left": self.top_left.to_dict(),
            "bottom_right": self.bottom_right.to_dict(),
            "hole": self.hole.to_dict() if self.hole else None,
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RectPad":
        hole = data.get("hole")
        return cls(
            top_left=Point.from_dict(data["top_left"]),
            bottom_right=Point.from_dict(data["bottom_right"]),
            hole=Hole.from_dict(hole) if hole else None,
            locked=data.get("locked", False),
        )


@dataclass
class Contour:
    """A closed polygon contour.

    Attributes:
        points: Vertices of the contour, the closing edge is implicit
    """

    points: list[Point]

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Calculate bounding box of the contour.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.points:
            return (0, 0, 0, 0)

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains_point(self, x: float, y: float) -> bool:
        """Check if point is inside contour using ray casting algorithm.

        Args:
            x: X coordinate of point to test
            y: Y coordinate of point to test

        Returns:
            True if point is inside contour, False otherwise
        """
        n = len(self.points)
        if n < 3:
            return False

        inside = False
        j = n - 1

        for i in range(n):
            xi, yi = self.points[i].x, self.points[i].y
            xj, yj = self.points[j].x, self.points[j].y

            if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
                inside = not inside

            j = i

        return inside

    def to_dict(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        return cls(points=[Point.from_dict(p) for p in data["points"]])


@dataclass
class PolyOutline:
    """A polygon outline with holes (zone or graphic polygon).

    Attributes:
        contours: Contour 0 is the outer boundary, the rest are holes
        locked: Locked items cannot be vertex-edited
    """

    kind: ClassVar[ShapeKind] = ShapeKind.POLYGON

    contours: list[Contour] = field(default_factory=list)
    locked: bool = False

    @property
    def outer(self) -> Contour:
        return self.contours[0]

    @property
    def holes(self) -> list[Contour]:
        return self.contours[1:]

    def total_vertices(self) -> int:
        return sum(len(c.points) for c in self.contours)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "contours": [c.to_dict() for c in self.contours],
            "locked": self.locked,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolyOutline":
        return cls(
            contours=[Contour.from_dict(c) for c in data["contours"]],
            locked=data.get("locked", False),
        )


Shape = Segment | Arc | Circle | RectPad | PolyOutline

_SHAPE_TYPES: dict[str, type] = {
    ShapeKind.SEGMENT.value: Segment,
    ShapeKind.ARC.value: Arc,
    ShapeKind.CIRCLE.value: Circle,
    ShapeKind.RECT.value: RectPad,
    ShapeKind.POLYGON.value: PolyOutline,
}


def shape_from_dict(data: dict[str, Any]) -> Shape:
    """Deserialize any editable shape from its dictionary form.

    Args:
        data: Dictionary with a ``kind`` field

    Returns:
        Shape instance

    Raises:
        UnsupportedShapeError: If the kind is missing or unknown
    """
    kind = data.get("kind", "")
    shape_type = _SHAPE_TYPES.get(kind)
    if shape_type is None:
        raise UnsupportedShapeError(str(kind))
    return shape_type.from_dict(data)


def copy_geometry(target: Shape, source: Shape) -> None:
    """Write the geometry of ``source`` into ``target`` in place.

    Both shapes must be of the same type. Used to write edits back into the
    document-owned shape object.
    """
    if type(target) is not type(source):
        raise UnsupportedShapeError(f"{type(source).__name__} into {type(target).__name__}")
    for f in fields(target):
        value = getattr(source, f.name)
        if isinstance(source, PolyOutline) and f.name == "contours":
            value = [Contour(points=list(c.points)) for c in value]
        setattr(target, f.name, value)
