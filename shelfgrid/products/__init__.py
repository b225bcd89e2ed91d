"""Products: catalog rows, query descriptors and data sources."""

from .schemas import (
    PRICE_RANGE_OPEN_MAX,
    ProductKind,
    ProductPage,
    ProductRow,
    QueryDescriptor,
    StockStatus,
)
from .query import build_query
from .catalog import ProductCatalog, ProductDataSource, get_product_catalog

__all__ = [
    "PRICE_RANGE_OPEN_MAX",
    "ProductKind",
    "ProductPage",
    "ProductRow",
    "QueryDescriptor",
    "StockStatus",
    "build_query",
    "ProductCatalog",
    "ProductDataSource",
    "get_product_catalog",
]
