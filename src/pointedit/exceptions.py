"""Exception hierarchy for pointedit."""


class PointEditError(Exception):
    """Base exception for all pointedit errors."""

    pass


class GeometryError(PointEditError):
    """Errors in geometric calculations."""

    pass


class DegenerateGeometryError(GeometryError):
    """A construction has no well-defined result (zero radius, collinear points)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ShapeError(PointEditError):
    """Errors related to the edited shape."""

    pass


class UnsupportedShapeError(ShapeError):
    """Shape kind has no point editing behavior."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unsupported shape kind '{kind}'")


class InvalidHandleError(ShapeError):
    """Handle index does not exist in the current point set."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Handle {index} out of range (point set has {size} handles)")


class OutlineValidationError(ShapeError):
    """Polygon outline failed validation after an edit."""

    def __init__(self, problem: str) -> None:
        self.problem = problem
        super().__init__(f"Invalid outline: {problem}")


class EditStateError(PointEditError):
    """Operation is not allowed in the current edit state."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while {state}")
