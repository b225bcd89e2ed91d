"""Cart collaborator and the bulk add-to-cart operation.

Items are processed independently: a failed item is reported and the
batch continues. The response is successful when at least one item was
added; failures on other items are returned as warnings.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from shelfgrid.products.catalog import ProductDataSource
from shelfgrid.products.schemas import ProductKind

from .schemas import BulkAddItem, BulkAddItemResult, BulkAddResponse

logger = logging.getLogger(__name__)


@runtime_checkable
class CartService(Protocol):
    """Protocol for shopping cart backends.

    ``add_to_cart`` returns False when the cart declines the line and may
    raise on backend failure.
    """

    def add_to_cart(
        self,
        product_id: int,
        quantity: int,
        variation_id: int = 0,
        attributes: Optional[dict[str, str]] = None,
    ) -> bool: ...


@dataclass
class CartLine:
    product_id: int
    quantity: int
    variation_id: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


class InMemoryCart:
    """Cart that records lines in memory, merging repeated lines."""

    def __init__(self):
        self.lines: list[CartLine] = []

    def add_to_cart(
        self,
        product_id: int,
        quantity: int,
        variation_id: int = 0,
        attributes: Optional[dict[str, str]] = None,
    ) -> bool:
        if quantity < 1:
            return False
        attributes = dict(attributes or {})
        for line in self.lines:
            if (
                line.product_id == product_id
                and line.variation_id == variation_id
                and line.attributes == attributes
            ):
                line.quantity += quantity
                return True
        self.lines.append(CartLine(product_id, quantity, variation_id, attributes))
        return True

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)


def _capped(quantity: int, manage_stock: bool, backorders: bool, stock: Optional[int]) -> int:
    if manage_stock and not backorders and stock is not None:
        return min(quantity, stock)
    return quantity


def _add_one(item: BulkAddItem, catalog: ProductDataSource, cart: CartService) -> BulkAddItemResult:
    def failed(message: str) -> BulkAddItemResult:
        return BulkAddItemResult(product_id=item.product_id, added=False, message=message)

    product = catalog.get_product(item.product_id)
    if product is None:
        return failed(f"Product #{item.product_id} not found.")

    if product.kind in (ProductKind.EXTERNAL, ProductKind.GROUPED):
        return failed(f'"{product.name}" cannot be added to the cart.')

    if not product.is_in_stock:
        return failed(f'"{product.name}" is out of stock.')

    quantity = _capped(
        item.quantity, product.manage_stock, product.backorders_allowed, product.stock_quantity
    )

    if product.kind == ProductKind.VARIABLE:
        if not item.variation_id:
            return failed(f'Please select options for "{product.name}".')
        variation = product.get_variation(item.variation_id)
        if variation is None or not variation.in_stock:
            return failed(f'Selected variation for "{product.name}" is unavailable.')
        quantity = _capped(
            quantity, variation.manage_stock, variation.backorders_allowed, variation.stock_quantity
        )

    if quantity < 1:
        return failed(f'"{product.name}" is out of stock.')

    try:
        added = cart.add_to_cart(product.id, quantity, item.variation_id, item.attributes)
    except Exception as e:
        logger.error(f"Cart rejected product {product.id}: {e}")
        return failed(f'Could not add "{product.name}" to cart.')

    if not added:
        return failed(f'Could not add "{product.name}" to cart.')
    return BulkAddItemResult(product_id=product.id, added=True, quantity=quantity)


def bulk_add_to_cart(
    items: list[BulkAddItem],
    catalog: ProductDataSource,
    cart: CartService,
) -> BulkAddResponse:
    """Add several selected rows to the cart.

    Args:
        items: Selected rows; items without a product id are skipped.
        catalog: Product lookup for stock and type checks.
        cart: Cart receiving the lines.

    Returns:
        BulkAddResponse with per-item results and failure warnings.
    """
    results = [_add_one(item, catalog, cart) for item in items if item.product_id > 0]
    added_count = sum(1 for r in results if r.added)
    warnings = [r.message for r in results if not r.added and r.message]

    logger.info(f"Bulk add: {added_count} of {len(results)} items added")

    if added_count:
        message = f"{added_count} product(s) added to cart."
    else:
        message = "Failed to add products to cart."
    return BulkAddResponse(
        success=added_count > 0,
        added_count=added_count,
        message=message,
        results=results,
        warnings=warnings,
    )


# Global cart instance
_cart: Optional[CartService] = None


def get_cart() -> CartService:
    """Get the global cart."""
    global _cart
    if _cart is None:
        _cart = InMemoryCart()
    return _cart


def set_cart(cart: Optional[CartService]) -> None:
    """Replace the global cart (``None`` resets to a fresh in-memory cart)."""
    global _cart
    _cart = cart
