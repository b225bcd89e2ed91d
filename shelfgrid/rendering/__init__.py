"""
Rendering module for product tables.

This module provides:
- Cell and purchase-button renderers per column type
- The shared table layout (columns, bulk-select, empty state)
- Pagination links
- Full-page and AJAX renderers
"""

from .buttons import CartBehavior, resolve_button_state, render_button
from .cells import CELL_RENDERERS, RowContext, render_cell
from .layout import TableLayout
from .pagination import render_pagination
from .table import TableRenderer
from .ajax import AjaxResponse, AjaxResponseBuilder

__all__ = [
    "CartBehavior",
    "resolve_button_state",
    "render_button",
    "CELL_RENDERERS",
    "RowContext",
    "render_cell",
    "TableLayout",
    "render_pagination",
    "TableRenderer",
    "AjaxResponse",
    "AjaxResponseBuilder",
]
