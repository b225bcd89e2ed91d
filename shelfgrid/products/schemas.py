"""Product schemas: read-only catalog rows and the query descriptor.

ProductRow is a snapshot of one catalog item as the renderer sees it.
QueryDescriptor is the normalized query handed to a ProductDataSource.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProductKind(str, Enum):
    """Product type classification."""
    SIMPLE = "simple"
    VARIABLE = "variable"
    GROUPED = "grouped"
    EXTERNAL = "external"


class StockStatus(str, Enum):
    IN_STOCK = "instock"
    OUT_OF_STOCK = "outofstock"
    ON_BACKORDER = "onbackorder"


class CatalogModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ProductTerm(CatalogModel):
    """A category or tag attached to a product."""
    id: int
    name: str
    slug: str = ""


class AttributeOption(CatalogModel):
    value: str = Field(..., description="Option value as stored on variations (slug or raw text)")
    term_name: Optional[str] = Field(None, description="Term name for taxonomy-backed attributes")


class VariationAttribute(CatalogModel):
    """One attribute a variable product varies by (e.g. size, color)."""
    name: str = Field(..., description="Attribute key, e.g. 'pa_color' or 'Size'")
    label: str = Field("", description="Human-readable attribute label")
    is_taxonomy: bool = Field(False, description="Whether options are taxonomy terms")
    options: list[AttributeOption] = Field(default_factory=list)

    def option_label(self, option: AttributeOption) -> str:
        """Resolve an option label: the term name when taxonomy-backed, else the raw value."""
        if self.is_taxonomy and option.term_name:
            return option.term_name
        return option.value


class Variation(CatalogModel):
    """A purchasable variation of a variable product.

    An empty attribute value means "any value" for that attribute.
    """
    id: int
    attributes: dict[str, str] = Field(default_factory=dict)
    price: Optional[float] = None
    price_html: str = ""
    in_stock: bool = True
    purchasable: bool = True
    manage_stock: bool = False
    stock_quantity: Optional[int] = None
    backorders_allowed: bool = False


class ProductRow(CatalogModel):
    """Read-only snapshot of one catalog item."""

    id: int
    name: str = ""
    permalink: str = ""
    kind: ProductKind = ProductKind.SIMPLE
    sku: str = ""
    price: Optional[float] = None
    price_html: str = ""
    on_sale: bool = False
    stock_status: StockStatus = StockStatus.IN_STOCK
    manage_stock: bool = False
    stock_quantity: Optional[int] = None
    backorders_allowed: bool = False
    purchasable: bool = True
    images: dict[str, str] = Field(
        default_factory=dict,
        description="Image URL keyed by size: 'thumbnail', 'medium', 'large', 'full'",
    )
    image_alt: str = ""
    short_description: str = ""
    external_url: str = ""
    button_text: str = Field("", description="Product's own add-to-cart / external button label")
    date: Optional[datetime] = None
    categories: list[ProductTerm] = Field(default_factory=list)
    tags: list[ProductTerm] = Field(default_factory=list)
    attributes: list[VariationAttribute] = Field(default_factory=list)
    variations: list[Variation] = Field(default_factory=list)

    @property
    def is_in_stock(self) -> bool:
        return self.stock_status != StockStatus.OUT_OF_STOCK

    @property
    def max_purchase_quantity(self) -> Optional[int]:
        """Upper quantity bound, or None when unbounded.

        Bounded only when stock is tracked and backorders are disallowed.
        """
        if self.manage_stock and not self.backorders_allowed and self.stock_quantity is not None:
            return max(self.stock_quantity, 0)
        return None

    def get_variation(self, variation_id: int) -> Optional[Variation]:
        for variation in self.variations:
            if variation.id == variation_id:
                return variation
        return None


# -- Query --

# Upper bound used when a price range has no maximum. Catalog prices are
# compared against it inclusively, so any realistic price is below it.
PRICE_RANGE_OPEN_MAX = 1e12


class QueryDescriptor(CatalogModel):
    """Normalized product query.

    ``include_ids`` of ``None`` means unrestricted. ``force_empty`` is set
    by sources that resolved to an empty selection; a data source must
    return no rows for it.
    """

    post_type: str = "product"
    status: str = "publish"
    per_page: int = 10
    page: int = 1
    order_by: str = "date"
    order: str = "DESC"
    include_ids: Optional[list[int]] = None
    preserve_include_order: bool = False
    category_ids: Optional[list[int]] = None
    exclude_ids: list[int] = Field(default_factory=list)
    stock_status: Optional[str] = None
    min_price: float = 0
    max_price: float = PRICE_RANGE_OPEN_MAX
    search: Optional[str] = None
    force_empty: bool = False


class ProductPage(CatalogModel):
    """Rows served for one query plus the paging facts actually applied."""

    rows: list[ProductRow] = Field(default_factory=list)
    total: int = 0
    total_pages: int = 0
    page: int = 1
