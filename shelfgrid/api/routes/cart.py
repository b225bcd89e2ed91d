"""Cart API routes."""

from fastapi import APIRouter, HTTPException

from shelfgrid.cart.schemas import BulkAddRequest, BulkAddResponse
from shelfgrid.cart.service import bulk_add_to_cart, get_cart
from shelfgrid.products.catalog import get_product_catalog

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/bulk-add", response_model=BulkAddResponse, response_model_by_alias=True)
async def bulk_add(request: BulkAddRequest) -> BulkAddResponse:
    """Add the rows picked with the bulk-select checkboxes to the cart."""
    if not request.items:
        raise HTTPException(status_code=400, detail="No products selected")
    return bulk_add_to_cart(request.items, get_product_catalog(), get_cart())
