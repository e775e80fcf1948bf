"""Domain models for pointedit.

This module contains the handle and shape models the point editor works on.
Handles are immutable points carrying a back-reference to the feature they
edit; shapes are mutable dataclasses owned by the host document.

Key classes:
- Point: An integer board position with an optional feature reference
- Feature / FeatureKind: Which shape feature a handle edits
- PointSet: Ordered handles of one shape
- Segment, Arc, Circle, RectPad, PolyOutline: The editable shape kinds
"""

from pointedit.domain.point import Feature, FeatureKind, Point, PointSet, round_coord
from pointedit.domain.shapes import (
    Arc,
    Circle,
    Contour,
    Hole,
    PolyOutline,
    RectPad,
    Segment,
    Shape,
    ShapeKind,
    copy_geometry,
    shape_from_dict,
)

__all__: list[str] = [
    # Enums
    "FeatureKind",
    "ShapeKind",
    # Handle types
    "Feature",
    "Point",
    "PointSet",
    # Shapes
    "Arc",
    "Circle",
    "Contour",
    "Hole",
    "PolyOutline",
    "RectPad",
    "Segment",
    "Shape",
    # Helpers
    "copy_geometry",
    "round_coord",
    "shape_from_dict",
]
