"""Centralized environment configuration management for sheet-export.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from sheet_export.config import EnvVar, get_environment
    >>>
    >>> dialect = get_environment(EnvVar.SHEET_EXPORT_REACT_DIALECT)
    >>> width = get_environment(EnvVar.SHEET_EXPORT_SVG_WIDTH)  # Returns int
    >>>
    >>> # Override at runtime
    >>> theme = get_environment(EnvVar.SHEET_EXPORT_FLUTTER_THEME, override="cupertino")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "SHEET_EXPORT_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str or int).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by sheet-export.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Log output configuration
        - react: React backend defaults
        - flutter: Flutter backend defaults
        - svg: SVG backend defaults
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    SHEET_EXPORT_LOG_LEVEL = EnvConfig(
        name="SHEET_EXPORT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level for the CLI (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # React
    # -------------------------------------------------------------------------
    SHEET_EXPORT_REACT_DIALECT = EnvConfig(
        name="SHEET_EXPORT_REACT_DIALECT",
        default="tailwind",
        var_type=str,
        description="Default React styling dialect "
        "(tailwind, styled-components, css-modules)",
        category="react",
    )
    SHEET_EXPORT_REACT_COMPONENT_NAME = EnvConfig(
        name="SHEET_EXPORT_REACT_COMPONENT_NAME",
        default="Component",
        var_type=str,
        description="React component name used when the root has no name",
        category="react",
    )

    # -------------------------------------------------------------------------
    # Flutter
    # -------------------------------------------------------------------------
    SHEET_EXPORT_FLUTTER_THEME = EnvConfig(
        name="SHEET_EXPORT_FLUTTER_THEME",
        default="material",
        var_type=str,
        description="Default Flutter theme (material, cupertino)",
        category="flutter",
    )
    SHEET_EXPORT_FLUTTER_WIDGET_NAME = EnvConfig(
        name="SHEET_EXPORT_FLUTTER_WIDGET_NAME",
        default="CustomWidget",
        var_type=str,
        description="Flutter widget class name used when the root has no name",
        category="flutter",
    )

    # -------------------------------------------------------------------------
    # SVG
    # -------------------------------------------------------------------------
    SHEET_EXPORT_SVG_WIDTH = EnvConfig(
        name="SHEET_EXPORT_SVG_WIDTH",
        default=200,
        var_type=int,
        description="SVG width used when the root has no numeric width",
        category="svg",
    )
    SHEET_EXPORT_SVG_HEIGHT = EnvConfig(
        name="SHEET_EXPORT_SVG_HEIGHT",
        default=100,
        var_type=int,
        description="SVG height used when the root has no numeric height",
        category="svg",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str or int).

    Example:
        >>> get_environment(EnvVar.SHEET_EXPORT_SVG_WIDTH)
        200
        >>> get_environment(EnvVar.SHEET_EXPORT_SVG_WIDTH, override=375)
        375
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_default_dialect(override: str | None = None) -> str:
    """Get the React dialect used when a caller does not pick one."""
    return get_environment(EnvVar.SHEET_EXPORT_REACT_DIALECT, override)


def get_default_theme(override: str | None = None) -> str:
    """Get the Flutter theme used when a caller does not pick one."""
    return get_environment(EnvVar.SHEET_EXPORT_FLUTTER_THEME, override)


def get_svg_fallback_size() -> tuple[int, int]:
    """Get the (width, height) used for roots without numeric dimensions."""
    return (
        get_environment(EnvVar.SHEET_EXPORT_SVG_WIDTH),
        get_environment(EnvVar.SHEET_EXPORT_SVG_HEIGHT),
    )


def get_log_level(override: str | None = None) -> str:
    """Get the configured log level name, upper-cased."""
    return str(get_environment(EnvVar.SHEET_EXPORT_LOG_LEVEL, override)).upper()


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, react, flutter, svg).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_default_dialect",
    "get_default_theme",
    "get_svg_fallback_size",
    "get_log_level",
    # Introspection
    "list_environment_variables",
]
