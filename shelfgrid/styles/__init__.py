"""
Styles module for table appearance.

This module provides:
- Validated CSS value constructors (colors, dimensions, keywords)
- The style compiler producing per-instance scoped CSS
"""

from .sanitize import (
    SafeBorderStyle,
    SafeColor,
    SafeDimension,
    SafeWidthUnit,
    sanitize_color,
    sanitize_dimension,
)

from .compiler import compile_style

__all__ = [
    "SafeBorderStyle",
    "SafeColor",
    "SafeDimension",
    "SafeWidthUnit",
    "sanitize_color",
    "sanitize_dimension",
    "compile_style",
]
