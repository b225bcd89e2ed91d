"""
Shared pytest fixtures for shelfgrid tests.

Provides a small in-memory catalog covering every product kind and a
factory for table configurations written the way the builder stores them.
"""

from datetime import datetime

import pytest

from shelfgrid.products.catalog import ProductCatalog
from shelfgrid.products.schemas import (
    AttributeOption,
    ProductKind,
    ProductRow,
    ProductTerm,
    StockStatus,
    Variation,
    VariationAttribute,
)
from shelfgrid.tables.schemas import TableConfiguration

BAGS = ProductTerm(id=10, name="Bags", slug="bags")
KITCHEN = ProductTerm(id=11, name="Kitchen", slug="kitchen")


def make_product(product_id: int, **overrides) -> ProductRow:
    """Build an in-stock simple product with sensible defaults."""
    data = {
        "id": product_id,
        "name": f"Product {product_id}",
        "permalink": f"https://shop.test/p/{product_id}/",
        "sku": f"SKU-{product_id}",
        "price": 10.0,
        "price_html": '<span class="amount">$10.00</span>',
        "date": datetime(2025, 1, 1),
    }
    data.update(overrides)
    return ProductRow(**data)


@pytest.fixture
def products() -> list[ProductRow]:
    return [
        make_product(
            101,
            name="Canvas Tote",
            stock_status=StockStatus.OUT_OF_STOCK,
            categories=[BAGS],
            date=datetime(2025, 3, 1),
        ),
        make_product(
            102,
            name="Camp Mug",
            price=12.5,
            on_sale=True,
            manage_stock=True,
            stock_quantity=8,
            categories=[KITCHEN],
            date=datetime(2025, 4, 1),
        ),
        make_product(
            103,
            name="Beanie",
            kind=ProductKind.VARIABLE,
            price=24.0,
            date=datetime(2025, 5, 1),
            attributes=[
                VariationAttribute(
                    name="pa_color",
                    label="Color",
                    is_taxonomy=True,
                    options=[
                        AttributeOption(value="charcoal", term_name="Charcoal"),
                        AttributeOption(value="rust", term_name="Rust"),
                    ],
                )
            ],
            variations=[
                Variation(id=1031, attributes={"pa_color": "charcoal"}, manage_stock=True, stock_quantity=3),
                Variation(id=1032, attributes={"pa_color": "rust"}, in_stock=False),
            ],
        ),
        make_product(
            104,
            name="Picnic Set",
            kind=ProductKind.GROUPED,
            categories=[KITCHEN],
            date=datetime(2025, 6, 1),
        ),
        make_product(
            105,
            name="Field Guide",
            kind=ProductKind.EXTERNAL,
            price=32.0,
            external_url="https://books.test/guide",
            button_text="Buy at the publisher",
            stock_status=StockStatus.OUT_OF_STOCK,
            date=datetime(2025, 7, 1),
        ),
    ]


@pytest.fixture
def catalog(products) -> ProductCatalog:
    return ProductCatalog(products)


@pytest.fixture
def make_table():
    """Factory for TableConfiguration from builder-style camelCase data."""

    def _make(**data) -> TableConfiguration:
        data.setdefault("id", 7)
        return TableConfiguration.model_validate(data)

    return _make


@pytest.fixture
def standard_columns() -> list[dict]:
    return [
        {"id": "col_image", "type": "image", "heading": "Image"},
        {"id": "col_name", "type": "name", "heading": "Product"},
        {"id": "col_price", "type": "price", "heading": "Price"},
        {"id": "col_button", "type": "button", "heading": "Add to Cart"},
    ]
