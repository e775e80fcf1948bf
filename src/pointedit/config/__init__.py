"""Configuration management for pointedit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Coordinate limits and numeric tolerances
- PinningConfig: Rectangle corner pinning limits
- EditorConfig: Interactive editor preferences (arc edit mode, hover tolerance)
- LoggingConfig: Logging settings
- PointEditSettings: Main application settings
"""

from pointedit.config.settings import (
    IU_PER_MIL,
    IU_PER_MM,
    ArcEditMode,
    EditorConfig,
    GeometryConfig,
    LoggingConfig,
    PinningConfig,
    PointEditSettings,
    get_default_settings,
)

__all__ = [
    "IU_PER_MIL",
    "IU_PER_MM",
    "ArcEditMode",
    "EditorConfig",
    "GeometryConfig",
    "LoggingConfig",
    "PinningConfig",
    "PointEditSettings",
    "get_default_settings",
]
