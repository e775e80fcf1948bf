"""Core editing algorithms for pointedit.

This module contains the algorithms for:

- Geometry primitives (orientation, intersections, projections, circles)
- Handle constraints (45 degree snapping, line projection)
- Arc reconstruction from one moved handle
- Rectangle corner pinning
- Polygon outline handles, validation and corner add/remove
- The interactive edit state machine

Everything except PointEditor is stateless and never mutates its inputs.

Key functions:
- build_point_set: Build the handles of a shape
- reshape: Compute the shape implied by one moved handle
- edit_arc: Reconstruct an arc from one moved handle
- pin_edited_corner: Clamp a dragged rectangle corner
- compute_constrainer: Apply a handle constraint to a cursor position

Key classes:
- PointEditor: Drives hover, drag, cancel and corner edits
- OutlineValidator: Checks polygon outlines after an edit
- ArcGeometry: Immutable view of an arc's four defining points
"""

from pointedit.core.arc import (
    ArcGeometry,
    arc_from_three_points,
    edit_arc,
    edit_center_keep_endpoints,
    edit_endpoint_keep_center,
    edit_endpoint_keep_tangent,
    edit_mid_keep_center,
    edit_mid_keep_endpoints,
    move_arc,
)
from pointedit.core.constraint import (
    ConstraintMode,
    compute_constrainer,
    constrainer_partner,
    snap_to_45,
    snap_to_line,
)
from pointedit.core.editor import (
    CommitHandler,
    EditSession,
    EditState,
    ModifierQuery,
    PointEditor,
    SelectionQuery,
    WarningSink,
)
from pointedit.core.geometry import (
    circumcenter,
    clamp_point,
    nearest_point_on_segment,
    perpendicular_direction,
    segments_intersect,
)
from pointedit.core.outline import (
    EdgeHit,
    OutlineValidator,
    build_outline_points,
    find_outline_problem,
    insert_vertex,
    nearest_edge,
    remove_vertex,
    validate_outline,
)
from pointedit.core.pinning import pin_edited_corner
from pointedit.core.points import apply_point_set, build_point_set, promote_midpoint
from pointedit.core.reshape import reshape

__all__ = [
    # Arc classes and functions
    "ArcGeometry",
    "arc_from_three_points",
    "edit_arc",
    "edit_center_keep_endpoints",
    "edit_endpoint_keep_center",
    "edit_endpoint_keep_tangent",
    "edit_mid_keep_center",
    "edit_mid_keep_endpoints",
    "move_arc",
    # Constraints
    "ConstraintMode",
    "compute_constrainer",
    "constrainer_partner",
    "snap_to_45",
    "snap_to_line",
    # Editor
    "CommitHandler",
    "EditSession",
    "EditState",
    "ModifierQuery",
    "PointEditor",
    "SelectionQuery",
    "WarningSink",
    # Geometry functions
    "circumcenter",
    "clamp_point",
    "nearest_point_on_segment",
    "perpendicular_direction",
    "segments_intersect",
    # Outline
    "EdgeHit",
    "OutlineValidator",
    "build_outline_points",
    "find_outline_problem",
    "insert_vertex",
    "nearest_edge",
    "remove_vertex",
    "validate_outline",
    # Handles and reshaping
    "apply_point_set",
    "build_point_set",
    "pin_edited_corner",
    "promote_midpoint",
    "reshape",
]
