"""Cart: bulk add-to-cart for rows picked with the bulk-select column."""

from .schemas import BulkAddItem, BulkAddItemResult, BulkAddRequest, BulkAddResponse
from .service import CartService, InMemoryCart, bulk_add_to_cart, get_cart, set_cart

__all__ = [
    "BulkAddItem",
    "BulkAddItemResult",
    "BulkAddRequest",
    "BulkAddResponse",
    "CartService",
    "InMemoryCart",
    "bulk_add_to_cart",
    "get_cart",
    "set_cart",
]
