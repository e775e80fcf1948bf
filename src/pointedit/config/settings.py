"""Configuration settings for pointedit."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

# Board units are nanometers.
IU_PER_MM = 1_000_000
IU_PER_MIL = 25_400


class ArcEditMode(str, Enum):
    """Which invariant an arc keeps while one of its handles is dragged."""

    KEEP_CENTER = "keep_center"
    KEEP_ENDPOINTS = "keep_endpoints"


class GeometryConfig(BaseModel):
    """Numeric limits and tolerances for geometric construction.

    All lengths are in board units (nanometers).
    """

    max_coord: int = Field(
        default=2**31 - 1,
        description="Largest representable coordinate magnitude",
    )
    coords_padding: int = Field(
        default=20 * IU_PER_MM,
        ge=0,
        description="Safety padding kept below max_coord for edited geometry",
    )
    min_radius: int = Field(
        default=1,
        ge=1,
        description="Smallest arc or circle radius an edit may produce",
    )
    arc_center_max_angle: float = Field(
        default=50.0,
        gt=0.0,
        description="Largest tangent ratio accepted before an arc is treated as a straight line",
    )
    snap_epsilon_sq: int = Field(
        default=4,
        ge=0,
        description="Squared distance under which an arc center snaps to the cursor's axes",
    )
    epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        description="Tolerance for floating point degeneracy tests",
    )

    @property
    def coord_limit(self) -> int:
        """Largest coordinate magnitude edited geometry may use."""
        return self.max_coord - self.coords_padding


class PinningConfig(BaseModel):
    """Configuration for rectangle corner pinning."""

    min_size: int = Field(
        default=IU_PER_MIL,
        ge=1,
        description="Minimum rectangle width and height",
    )
    hole_margin: int = Field(
        default=IU_PER_MIL,
        ge=0,
        description="Minimum clearance between a pad edge and its hole",
    )


class EditorConfig(BaseModel):
    """Configuration for the interactive point editor."""

    arc_edit_mode: ArcEditMode = Field(
        default=ArcEditMode.KEEP_CENTER,
        description="Arc editing policy (user preference, shared by all arcs)",
    )
    hover_tolerance: int = Field(
        default=250_000,
        ge=0,
        description="Distance within which the cursor is over a handle",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class PointEditSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    pinning: PinningConfig = Field(default_factory=PinningConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PointEditSettings:
    """Get default application settings."""
    return PointEditSettings()
