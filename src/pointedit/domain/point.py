"""Handle primitives for point editing.

This module defines the types the point editor works with:
- FeatureKind: Which geometric feature of a shape a handle stands for
- Feature: Back-reference from a handle to that feature
- Point: An immutable integer position with an optional feature reference
- PointSet: The ordered handles of one shape, with contour boundaries
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def round_coord(value: float) -> int:
    """Round a coordinate half away from zero.

    Args:
        value: Floating point coordinate

    Returns:
        Nearest integer coordinate

    Examples:
        >>> round_coord(2.5)
        3
        >>> round_coord(-2.5)
        -3
    """
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


class FeatureKind(Enum):
    """Geometric feature a handle represents."""

    START = "start"
    END = "end"
    MID = "mid"
    CENTER = "center"
    RADIUS = "radius"
    CORNER = "corner"
    VERTEX = "vertex"
    EDGE_MIDPOINT = "edge_midpoint"


@dataclass(frozen=True, slots=True)
class Feature:
    """Reference from a handle to the shape feature it edits.

    Attributes:
        kind: Kind of feature
        contour: Contour index (polygon outlines only, 0 is the outer contour)
        index: Vertex, corner or edge index within the contour
    """

    kind: FeatureKind
    contour: int = 0
    index: int = 0


@dataclass(frozen=True, slots=True)
class Point:
    """A point on the board with an optional feature back-reference.

    Immutable and hashable. Coordinates are integer board units.

    Attributes:
        x: X coordinate
        y: Y coordinate (grows downward)
        feature: Shape feature this point edits, None for plain geometry
    """

    x: int
    y: int
    feature: Feature | None = None

    @classmethod
    def from_float(cls, x: float, y: float, feature: Feature | None = None) -> "Point":
        """Build a point from floating point coordinates, rounding half away from zero."""
        return cls(round_coord(x), round_coord(y), feature)

    @property
    def is_midpoint(self) -> bool:
        """True for synthetic edge-midpoint handles."""
        return self.feature is not None and self.feature.kind == FeatureKind.EDGE_MIDPOINT

    def at(self, x: int, y: int) -> "Point":
        """Return a point at a new position carrying the same feature."""
        return Point(x, y, self.feature)

    def plain(self) -> "Point":
        """Return the position without its feature reference."""
        return Point(self.x, self.y)

    def same_position(self, other: "Point") -> bool:
        """Compare positions, ignoring feature references."""
        return self.x == other.x and self.y == other.y

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Feature references are transient and are not serialized.
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=int(data["x"]), y=int(data["y"]))


@dataclass
class PointSet:
    """Ordered handles of one edited shape.

    Real handles come first, in the fixed per-kind order of the shape, followed
    by synthetic midpoint handles. For polygon outlines the real handles are
    the outer contour's vertices followed by each hole's vertices, and
    ``contour_ends`` holds the index of the last handle of each contour.

    Attributes:
        points: Real handles, one per shape feature
        midpoints: Synthetic midpoint handles
        contour_ends: Index of the last real handle of each contour
    """

    points: list[Point]
    midpoints: list[Point] = field(default_factory=list)
    contour_ends: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.contour_ends and self.points:
            self.contour_ends = [len(self.points) - 1]

    def __len__(self) -> int:
        return len(self.points) + len(self.midpoints)

    def __getitem__(self, index: int) -> Point:
        if index < len(self.points):
            return self.points[index]
        return self.midpoints[index - len(self.points)]

    def __iter__(self):
        yield from self.points
        yield from self.midpoints

    def is_midpoint(self, index: int) -> bool:
        """Check whether a handle index refers to a synthetic midpoint."""
        return index >= len(self.points)

    def set_position(self, index: int, x: int, y: int) -> None:
        """Move a handle, keeping its feature reference."""
        if index < len(self.points):
            self.points[index] = self.points[index].at(x, y)
        else:
            offset = index - len(self.points)
            self.midpoints[offset] = self.midpoints[offset].at(x, y)

    def contour_of(self, index: int) -> int:
        """Get the contour a real handle belongs to.

        Args:
            index: Real handle index

        Returns:
            Contour index (0 for single-contour shapes)
        """
        for contour, end in enumerate(self.contour_ends):
            if index <= end:
                return contour
        raise IndexError(f"Handle {index} is not part of any contour")

    def _contour_range(self, index: int) -> tuple[int, int]:
        contour = self.contour_of(index)
        first = self.contour_ends[contour - 1] + 1 if contour > 0 else 0
        return first, self.contour_ends[contour]

    def next_index(self, index: int) -> int:
        """Index of the following handle, wrapping within the contour."""
        first, last = self._contour_range(index)
        return first if index == last else index + 1

    def previous_index(self, index: int) -> int:
        """Index of the preceding handle, wrapping within the contour."""
        first, last = self._contour_range(index)
        return last if index == first else index - 1

    def find_nearest(self, x: int, y: int, tolerance: int) -> int | None:
        """Find the handle under the cursor.

        Real handles take priority over midpoints, so a vertex sitting on top
        of an edge midpoint is still picked.

        Args:
            x: Cursor X coordinate
            y: Cursor Y coordinate
            tolerance: Maximum distance from the cursor

        Returns:
            Handle index, or None if no handle is close enough
        """
        for group_offset, group in ((0, self.points), (len(self.points), self.midpoints)):
            best: int | None = None
            best_dist = float(tolerance)
            for i, point in enumerate(group):
                dist = math.hypot(point.x - x, point.y - y)
                if dist < best_dist or (best is None and dist <= best_dist):
                    best = group_offset + i
                    best_dist = dist
            if best is not None:
                return best

        return None
