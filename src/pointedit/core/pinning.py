"""Corner pinning for rectangles and pads with holes.

Dragging one corner of a rectangle keeps the opposite corner fixed and
derives the two adjacent corners from the dragged one. The dragged corner is
clamped, never rejected, so that:
- width and height stay at least ``min_size``, even when the cursor crosses
  the opposite corner
- a hole stays inside the rectangle with at least ``hole_margin`` clearance

Corners are indexed top-left, top-right, bottom-right, bottom-left with y
growing downward.
"""

from pointedit.config import PinningConfig
from pointedit.core.geometry import clamp_point
from pointedit.domain import Hole, Point

TOP_LEFT = 0
TOP_RIGHT = 1
BOTTOM_RIGHT = 2
BOTTOM_LEFT = 3


def pin_edited_corner(
    corners: list[Point],
    edited: int,
    config: PinningConfig,
    hole: Hole | None = None,
    limit: int | None = None,
) -> list[Point]:
    """Clamp a dragged rectangle corner and realign its neighbours.

    Args:
        corners: Four corners, the edited one already at the cursor position
        edited: Index of the dragged corner
        config: Minimum size and hole clearance
        hole: Optional hole the rectangle must keep enclosing
        limit: Optional coordinate limit for the dragged corner

    Returns:
        New list of four corners forming a valid rectangle
    """
    tl, tr, br, bl = corners
    corner = corners[edited]
    if limit is not None:
        corner = clamp_point(corner, limit)

    x, y = corner.x, corner.y
    min_size = config.min_size

    if hole is not None:
        hole_left, hole_top, hole_right, hole_bottom = hole.bounds()
        margin = config.hole_margin

    if edited == TOP_LEFT:
        x = min(x, br.x - min_size)
        y = min(y, br.y - min_size)
        if hole is not None:
            x = min(x, hole_left - margin)
            y = min(y, hole_top - margin)
        tl = tl.at(x, y)
        tr = tr.at(br.x, y)
        bl = bl.at(x, br.y)

    elif edited == TOP_RIGHT:
        x = max(x, bl.x + min_size)
        y = min(y, bl.y - min_size)
        if hole is not None:
            x = max(x, hole_right + margin)
            y = min(y, hole_top - margin)
        tr = tr.at(x, y)
        tl = tl.at(bl.x, y)
        br = br.at(x, bl.y)

    elif edited == BOTTOM_RIGHT:
        x = max(x, tl.x + min_size)
        y = max(y, tl.y + min_size)
        if hole is not None:
            x = max(x, hole_right + margin)
            y = max(y, hole_bottom + margin)
        br = br.at(x, y)
        tr = tr.at(x, tl.y)
        bl = bl.at(tl.x, y)

    elif edited == BOTTOM_LEFT:
        x = min(x, tr.x - min_size)
        y = max(y, tr.y + min_size)
        if hole is not None:
            x = min(x, hole_left - margin)
            y = max(y, hole_bottom + margin)
        bl = bl.at(x, y)
        tl = tl.at(x, tr.y)
        br = br.at(tr.x, y)

    else:
        raise IndexError(f"Rectangle has no corner {edited}")

    return [tl, tr, br, bl]
