"""Cell renderers: one column's markup for one product row.

Renderers are registered per column type in CELL_RENDERERS. A column
whose type has no registered renderer renders an empty cell, so tables
saved by newer or older builders keep rendering.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable

from markupsafe import Markup

from shelfgrid.products.schemas import ProductRow, StockStatus
from shelfgrid.tables.schemas import Column

from . import labels
from .buttons import ButtonState, CartBehavior, render_button_state, resolve_button_state
from .urls import safe_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowContext:
    """One product row with its purchase state resolved once."""

    product: ProductRow
    cart: CartBehavior
    button: ButtonState

    @classmethod
    def for_product(cls, product: ProductRow, cart: CartBehavior) -> "RowContext":
        return cls(product=product, cart=cart, button=resolve_button_state(product, cart))


CellRenderer = Callable[[Column, RowContext], Markup]

SUMMARY_WORDS = 10
IMAGE_SIZES = ("thumbnail", "medium", "large", "full")
DEFAULT_DATE_FORMAT = "%Y-%m-%d"

_TAG_PATTERN = re.compile(r"<[^>]*>")


def _render_image(column: Column, row: RowContext) -> Markup:
    product = row.product
    size = column.settings.get("imageSize", "thumbnail")
    if size not in IMAGE_SIZES:
        size = "thumbnail"
    src = safe_url(product.images.get(size) or product.images.get("full", ""))
    if src:
        image = Markup(
            '<img src="{src}" alt="{alt}" class="shelfgrid-image shelfgrid-image-{size}" loading="lazy">'
        ).format(src=src, alt=product.image_alt or product.name, size=size)
    else:
        image = Markup('<span class="shelfgrid-image-placeholder" aria-hidden="true"></span>')

    href = safe_url(product.permalink)
    if column.settings.get("linkTarget", "product") == "product" and href:
        return Markup('<a href="{href}">{image}</a>').format(href=href, image=image)
    return image


def _render_name(column: Column, row: RowContext) -> Markup:
    return Markup('<a href="{href}" class="shelfgrid-name">{name}</a>').format(
        href=safe_url(row.product.permalink, "#"), name=row.product.name
    )


def _render_price(column: Column, row: RowContext) -> Markup:
    # Price markup comes formatted from the store and is trusted as-is.
    return Markup('<span class="price">{0}</span>').format(Markup(row.product.price_html))


def _render_sku(column: Column, row: RowContext) -> Markup:
    return Markup("{0}").format(row.product.sku)


def _render_stock(column: Column, row: RowContext) -> Markup:
    product = row.product
    status = product.stock_status
    if status == StockStatus.OUT_OF_STOCK:
        text = labels.OUT_OF_STOCK
    elif status == StockStatus.ON_BACKORDER:
        text = labels.ON_BACKORDER
    elif product.manage_stock and product.stock_quantity is not None:
        text = labels.IN_STOCK_COUNT.format(count=product.stock_quantity)
    else:
        text = labels.IN_STOCK
    return Markup(
        '<span class="shelfgrid-stock shelfgrid-stock-{status}">{text}</span>'
    ).format(status=status.value, text=text)


def trim_words(text: str, limit: int = SUMMARY_WORDS) -> str:
    """Strip tags and keep the first ``limit`` words, adding an ellipsis when cut."""
    words = _TAG_PATTERN.sub(" ", text).split()
    if len(words) <= limit:
        return " ".join(words)
    return " ".join(words[:limit]) + "…"


def _render_summary(column: Column, row: RowContext) -> Markup:
    return Markup("{0}").format(trim_words(row.product.short_description))


def _render_date(column: Column, row: RowContext) -> Markup:
    product = row.product
    if product.date is None:
        return Markup("")
    fmt = column.settings.get("format") or DEFAULT_DATE_FORMAT
    try:
        text = product.date.strftime(str(fmt))
    except ValueError:
        text = product.date.strftime(DEFAULT_DATE_FORMAT)
    return Markup('<time datetime="{iso}">{text}</time>').format(
        iso=product.date.isoformat(), text=text
    )


def _render_taxonomy(column: Column, row: RowContext) -> Markup:
    product = row.product
    if column.settings.get("taxonomy") == "product_tag":
        terms = product.tags
    else:
        terms = product.categories
    return Markup("{0}").format(", ".join(t.name for t in terms))


def _render_button(column: Column, row: RowContext) -> Markup:
    return render_button_state(row.button)


CELL_RENDERERS: dict[str, CellRenderer] = {
    "image": _render_image,
    "name": _render_name,
    "price": _render_price,
    "sku": _render_sku,
    "stock": _render_stock,
    "summary": _render_summary,
    "date": _render_date,
    "tax": _render_taxonomy,
    "button": _render_button,
}


def render_cell(column: Column, row: RowContext) -> Markup:
    """Render one column for one product; unknown types render empty."""
    renderer = CELL_RENDERERS.get(column.type)
    if renderer is None:
        logger.debug(f"No renderer for column type '{column.type}', rendering empty cell")
        return Markup("")
    return renderer(column, row)
