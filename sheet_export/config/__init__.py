"""Centralized configuration management for sheet-export.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from sheet_export.config import EnvVar, get_environment
    >>>
    >>> dialect = get_environment(EnvVar.SHEET_EXPORT_REACT_DIALECT)  # "tailwind"
    >>> width = get_environment(EnvVar.SHEET_EXPORT_SVG_WIDTH, override=375)
    >>>
    >>> for var in list_environment_variables("react"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    logging: Log output configuration
    react: React dialect and component naming
    flutter: Flutter theme and widget naming
    svg: Fallback canvas size
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_default_dialect,
    get_default_theme,
    get_environment,
    get_environment_info,
    get_log_level,
    get_svg_fallback_size,
    # Introspection
    list_environment_variables,
)

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
