"""Product data sources.

ProductDataSource is the collaborator that executes a QueryDescriptor.
The rendering engine depends only on the protocol; ProductCatalog is an
in-memory implementation backed by a JSON file, used by the service by
default and by tests.
"""

import json
import logging
import math
import os
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from .schemas import ProductPage, ProductRow, QueryDescriptor

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(
    os.environ.get(
        "SHELFGRID_CATALOG_PATH",
        str(Path(__file__).parent / "definitions" / "catalog.json"),
    )
)


@runtime_checkable
class ProductDataSource(Protocol):
    """Protocol for product query backends.

    ``query`` must not raise when nothing matches; it returns an empty
    page with ``total_pages`` 0. Any other failure propagates to the
    caller, since no partial table can be rendered safely.
    """

    def query(self, descriptor: QueryDescriptor) -> ProductPage: ...

    def on_sale_ids(self) -> list[int]: ...

    def get_product(self, product_id: int) -> Optional[ProductRow]: ...


class ProductCatalog:
    """In-memory product catalog that executes query descriptors."""

    def __init__(self, products: Optional[list[ProductRow]] = None):
        self._products: dict[int, ProductRow] = {}
        # Insertion order stands in for the store's menu order.
        self._positions: dict[int, int] = {}
        for product in products or []:
            self.add(product)

    @classmethod
    def from_file(cls, path: Path) -> "ProductCatalog":
        """Load a catalog from a JSON file holding a list of products.

        Entries that fail validation are logged and skipped.
        """
        catalog = cls()
        if not path.exists():
            logger.warning(f"Catalog file not found: {path}")
            return catalog

        with open(path, "r") as f:
            data = json.load(f)

        entries = data.get("products", []) if isinstance(data, dict) else data
        for entry in entries:
            try:
                catalog.add(ProductRow.model_validate(entry))
            except Exception as e:
                logger.error(f"Failed to load product from {path}: {e}")

        logger.info(f"Loaded {catalog.count()} products from {path}")
        return catalog

    def add(self, product: ProductRow) -> None:
        if product.id not in self._positions:
            self._positions[product.id] = len(self._positions)
        self._products[product.id] = product

    def count(self) -> int:
        return len(self._products)

    def get_product(self, product_id: int) -> Optional[ProductRow]:
        return self._products.get(product_id)

    def on_sale_ids(self) -> list[int]:
        return [p.id for p in self._products.values() if p.on_sale]

    def query(self, descriptor: QueryDescriptor) -> ProductPage:
        """Execute a descriptor: filter, sort, then slice one page.

        The served page is clamped into ``[1, total_pages]``, so callers
        must read ``page`` back rather than assume the request was honored.
        """
        if descriptor.force_empty:
            return ProductPage(rows=[], total=0, total_pages=0, page=1)

        matches = [p for p in self._candidates(descriptor) if self._matches(p, descriptor)]
        matches = self._sort(matches, descriptor)

        per_page = max(descriptor.per_page, 1)
        total = len(matches)
        total_pages = math.ceil(total / per_page)
        page = min(max(descriptor.page, 1), max(total_pages, 1))
        start = (page - 1) * per_page

        return ProductPage(
            rows=matches[start:start + per_page],
            total=total,
            total_pages=total_pages,
            page=page,
        )

    # -- Internals --

    def _candidates(self, descriptor: QueryDescriptor) -> list[ProductRow]:
        if descriptor.include_ids is None:
            return list(self._products.values())
        return [
            self._products[i] for i in descriptor.include_ids if i in self._products
        ]

    @staticmethod
    def _matches(product: ProductRow, descriptor: QueryDescriptor) -> bool:
        if product.id in descriptor.exclude_ids:
            return False
        if descriptor.category_ids is not None:
            product_categories = {c.id for c in product.categories}
            if not product_categories.intersection(descriptor.category_ids):
                return False
        if descriptor.stock_status and product.stock_status.value != descriptor.stock_status:
            return False
        price = product.price if product.price is not None else 0
        if not descriptor.min_price <= price <= descriptor.max_price:
            return False
        if descriptor.search:
            needle = descriptor.search.lower()
            haystack = " ".join(
                [product.name, product.sku, product.short_description]
            ).lower()
            if needle not in haystack:
                return False
        return True

    def _sort(self, products: list[ProductRow], descriptor: QueryDescriptor) -> list[ProductRow]:
        if descriptor.preserve_include_order:
            # Candidates already follow include_ids order.
            return products

        keys = {
            "date": lambda p: (p.date is not None, p.date.timestamp() if p.date else 0),
            "title": lambda p: p.name.lower(),
            "price": lambda p: p.price if p.price is not None else 0,
            "id": lambda p: p.id,
            "sku": lambda p: p.sku.lower(),
            "menu_order": lambda p: self._positions.get(p.id, 0),
        }
        key = keys.get(descriptor.order_by, keys["date"])
        return sorted(products, key=key, reverse=descriptor.order == "DESC")


# Global catalog instance
_catalog: Optional[ProductDataSource] = None


def get_product_catalog() -> ProductDataSource:
    """Get the global product data source."""
    global _catalog
    if _catalog is None:
        _catalog = ProductCatalog.from_file(CATALOG_PATH)
    return _catalog


def set_product_catalog(catalog: Optional[ProductDataSource]) -> None:
    """Replace the global data source (``None`` resets to the file catalog)."""
    global _catalog
    _catalog = catalog
