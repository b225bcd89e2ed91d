"""Style compiler: table style tokens → scoped CSS.

All rules are emitted under one scope selector (the rendered wrapper's
unique id) so several tables on a page never share or leak styles.
Every token goes through the validators in ``sanitize``; a declaration
whose value is rejected is dropped, and a rule left without
declarations is not emitted at all.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote

from shelfgrid.tables.schemas import BulkSelect, Column, ColumnWidth, TableStyle

from .sanitize import (
    SafeTextTransform,
    cell_padding,
    css_identifier,
    font_weight,
    sanitize_border_style,
    sanitize_color,
    sanitize_dimension,
    sanitize_width_unit,
)

logger = logging.getLogger(__name__)

_SCOPE_PATTERN = re.compile(r"#[A-Za-z][A-Za-z0-9_-]*")

# Breakpoints for responsive column visibility.
MOBILE_MAX = 767
TABLET_MIN = 768
TABLET_MAX = 1023
DESKTOP_MIN = 1024

_HIDE_MEDIA = {
    "mobile": [f"(min-width: {TABLET_MIN}px)"],
    "tablet": [f"(max-width: {MOBILE_MAX}px)", f"(min-width: {DESKTOP_MIN}px)"],
    "desktop": [f"(max-width: {TABLET_MAX}px)"],
    "not-mobile": [f"(max-width: {MOBILE_MAX}px)"],
    "not-tablet": [f"(min-width: {TABLET_MIN}px) and (max-width: {TABLET_MAX}px)"],
    "not-desktop": [f"(min-width: {DESKTOP_MIN}px)"],
    "min-tablet": [f"(max-width: {MOBILE_MAX}px)"],
}

_CHECK_GLYPH = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" '
    'stroke="black" stroke-width="3" stroke-linecap="round" stroke-linejoin="round">'
    '<polyline points="20 6 9 17 4 12"/></svg>'
)
_ARROW_GLYPH = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="none" '
    'stroke="black" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    '<line x1="5" y1="12" x2="19" y2="12"/><polyline points="12 5 19 12 12 19"/></svg>'
)


def column_class(column: Column, index: int) -> str:
    """Per-column class shared by the markup and the width rules."""
    key = css_identifier(column.id) or f"n{index}"
    return f"shelfgrid-col-{key}"


def visibility_class(mode: str) -> str:
    """Class for a responsive visibility mode, or "" when always visible."""
    if mode in _HIDE_MEDIA:
        return f"shelfgrid-visibility-{mode}"
    return ""


def _glyph_url(svg: str) -> str:
    return f'url("data:image/svg+xml,{quote(svg)}")'


def _width(width: ColumnWidth) -> str:
    """CSS width for a column, or "" when it should not be applied."""
    if not width.is_applied:
        return ""
    unit = sanitize_width_unit(width.unit)
    value = sanitize_dimension(f"{width.value:g}")
    if not unit or unit == "auto" or not value:
        return ""
    return f"{value}{unit}"


class CssBuilder:
    """Accumulates scoped rules, skipping empty declarations."""

    def __init__(self, scope: str):
        self.scope = scope
        self._blocks: list[str] = []

    def _selector(self, selectors: list[str]) -> str:
        return ", ".join(f"{self.scope} {s}".rstrip() for s in selectors)

    def _render(self, selectors: list[str], declarations: dict[str, Optional[str]]) -> str:
        body = "; ".join(f"{prop}: {value}" for prop, value in declarations.items() if value)
        if not body:
            return ""
        return f"{self._selector(selectors)} {{ {body}; }}"

    def rule(self, selectors, declarations: dict[str, Optional[str]]) -> None:
        if isinstance(selectors, str):
            selectors = [selectors]
        css = self._render(selectors, declarations)
        if css:
            self._blocks.append(css)

    def media(self, query: str, selectors, declarations: dict[str, Optional[str]]) -> None:
        if isinstance(selectors, str):
            selectors = [selectors]
        css = self._render(selectors, declarations)
        if css:
            self._blocks.append(f"@media {query} {{ {css} }}")

    def css(self) -> str:
        return "\n".join(self._blocks)


def compile_style(
    style: TableStyle,
    columns: list[Column],
    bulk_select: BulkSelect,
    scope: str,
) -> str:
    """Compile a table's style tokens into one scoped CSS string.

    Args:
        style: Raw style tokens from the table configuration.
        columns: The table's columns, in table order (for width and
            visibility rules).
        bulk_select: Merged bulk-select settings.
        scope: Scope selector, ``#<wrapper id>``.

    Returns:
        CSS text; empty when the scope is not a plain id selector.
    """
    if not _SCOPE_PATTERN.fullmatch(scope):
        logger.warning(f"Refusing to compile styles for unsafe scope {scope!r}")
        return ""

    b = CssBuilder(scope)
    table = ".shelfgrid-table"

    # -- Table frame --
    border_style = sanitize_border_style(style.layout.border_style)
    border_color = sanitize_color(style.layout.border_color)
    radius = sanitize_dimension(style.layout.border_radius)
    b.rule(table, {
        "border-style": border_style,
        "border-width": "1px" if border_style and border_style != "none" else "",
        "border-color": border_color,
        "border-radius": radius,
        # Rounded corners need separate borders and clipped cells.
        "border-collapse": "separate" if radius else "",
        "border-spacing": "0" if radius else "",
        "overflow": "hidden" if radius else "",
    })
    row_border = sanitize_color(style.body.border_color)
    b.rule([f"{table} th", f"{table} td"], {
        "padding": cell_padding(style.layout.cell_padding),
        "border-bottom": f"1px solid {row_border}" if row_border else "",
    })

    # -- Header --
    b.rule(f"{table} thead th", {
        "background-color": sanitize_color(style.header.bg_color),
        "color": sanitize_color(style.header.text_color),
        "font-size": sanitize_dimension(style.header.font_size),
        "font-weight": font_weight(style.typography.header_font_weight),
        "text-transform": SafeTextTransform.parse(style.header.text_transform) or "",
    })

    # -- Body --
    b.rule(f"{table} tbody td", {
        "background-color": sanitize_color(style.body.bg_color),
        "color": sanitize_color(style.body.text_color),
        "font-size": sanitize_dimension(style.body.font_size),
    })

    # Zebra rows also recolor nested price/link text, which the theme
    # otherwise styles directly and would win over the cell color.
    if style.body.row_alternate:
        alt_row = f"{table} tbody tr.shelfgrid-row:nth-child(even)"
        alt_text = sanitize_color(style.body.alt_text_color)
        b.rule(f"{alt_row} td", {
            "background-color": sanitize_color(style.body.alt_bg_color),
            "color": alt_text,
        })
        b.rule(
            [
                f"{alt_row} td a:not(.shelfgrid-btn)",
                f"{alt_row} td .price",
                f"{alt_row} td .amount",
                f"{alt_row} td .shelfgrid-stock",
            ],
            {"color": alt_text},
        )

    # -- Row hover --
    if style.hover.row_hover_enabled:
        hover_row = f"{table} tbody tr.shelfgrid-row:hover"
        hover_text = sanitize_color(style.hover.row_hover_text_color)
        b.rule(f"{hover_row} td", {
            "background-color": sanitize_color(style.hover.row_hover_bg_color),
            "color": hover_text,
        })
        b.rule(
            [
                f"{hover_row} td a:not(.shelfgrid-btn)",
                f"{hover_row} td .price",
                f"{hover_row} td .amount",
                f"{hover_row} td .shelfgrid-stock",
            ],
            {"color": hover_text},
        )

    # -- Buttons --
    buttons = [".shelfgrid-btn", ".shelfgrid-btn-bulk"]
    b.rule(buttons, {
        "background-color": sanitize_color(style.button.bg_color),
        "color": sanitize_color(style.button.text_color),
        "border-radius": sanitize_dimension(style.button.border_radius),
    })
    b.rule([f"{s}:hover:not(:disabled)" for s in buttons], {
        "background-color": sanitize_color(style.button.hover_bg_color),
        "color": sanitize_color(style.button.hover_text_color),
    })

    # Glyphs are masks filled with currentColor, so they follow the
    # button's text color in every state.
    b.rule(".shelfgrid-btn.added::after", {
        "content": '""',
        "display": "inline-block",
        "width": "1em",
        "height": "1em",
        "margin-left": "0.4em",
        "vertical-align": "middle",
        "background-color": "currentColor",
        "-webkit-mask": f"{_glyph_url(_CHECK_GLYPH)} no-repeat center / contain",
        "mask": f"{_glyph_url(_CHECK_GLYPH)} no-repeat center / contain",
    })
    b.rule(".shelfgrid-view-cart::after", {
        "content": '""',
        "display": "inline-block",
        "width": "1em",
        "height": "1em",
        "margin-left": "0.3em",
        "vertical-align": "middle",
        "background-color": "currentColor",
        "-webkit-mask": f"{_glyph_url(_ARROW_GLYPH)} no-repeat center / contain",
        "mask": f"{_glyph_url(_ARROW_GLYPH)} no-repeat center / contain",
    })

    # -- Column widths --
    for index, column in enumerate(columns):
        width = _width(column.advanced.width)
        if width:
            b.rule(f"{table} .{column_class(column, index)}", {"width": width})

    if bulk_select.active:
        width = _width(bulk_select.width)
        if width:
            b.rule(f"{table} .shelfgrid-col-select", {"width": width})

    # -- Responsive visibility --
    modes = {c.advanced.visibility for c in columns}
    if bulk_select.active:
        modes.add(bulk_select.visibility)
    for mode in sorted(m for m in modes if m in _HIDE_MEDIA):
        for query in _HIDE_MEDIA[mode]:
            b.media(query, f".{visibility_class(mode)}", {"display": "none"})

    return b.css()
