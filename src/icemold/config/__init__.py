"""Configuration management for icemold.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Flattening and clipping resolution
- TextLayoutConfig: Character fitting and stacking
- FillConfig: Outline offset and hole filtering
- AutoGapConfig: Offset derivation from inter-glyph gaps
- ExtrudeConfig, BaseConfig, StickConfig: Preview solids
- LoggingConfig: Logging settings
- IceMoldSettings: Main application settings
"""

from icemold.config.settings import (
    AutoGapConfig,
    BaseConfig,
    ExtrudeConfig,
    FillConfig,
    GeometryConfig,
    IceMoldSettings,
    LoggingConfig,
    StickConfig,
    TextLayoutConfig,
    get_default_settings,
)

__all__ = [
    "AutoGapConfig",
    "BaseConfig",
    "ExtrudeConfig",
    "FillConfig",
    "GeometryConfig",
    "IceMoldSettings",
    "LoggingConfig",
    "StickConfig",
    "TextLayoutConfig",
    "get_default_settings",
]
