"""pointedit - Constrained handle editing for PCB shapes.

pointedit is the geometry engine behind an on-canvas "drag the handles" editing
tool. It builds draggable handles for segments, arcs, circles, rectangular pads
with holes and polygon outlines, and recomputes the shape whenever a handle
moves, keeping arcs, rectangles and outlines geometrically consistent.

Example:
    >>> from pointedit.core import PointEditor
    >>> from pointedit.domain import Point, Segment
    >>> editor = PointEditor()
    >>> editor.select(Segment(Point(0, 0), Point(100, 0)))
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
