"""Table definition schemas: data models for product table configuration.

A TableConfiguration is produced by the visual table builder and read
fresh on every render. It is treated as best-effort declarative data:
every field has a documented default, and a value that fails validation
falls back to that default instead of rejecting the whole table.

Wire keys are camelCase (``queryArgs``, ``showHeading``); attributes are
snake_case. Both spellings are accepted on input.
"""

import logging
from typing import Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


VisibilityMode = Literal[
    "default",
    "all",
    "none",
    "mobile",
    "tablet",
    "desktop",
    "not-mobile",
    "not-tablet",
    "not-desktop",
    "min-tablet",
]

SourceType = Literal["all", "sale", "category", "specific"]

SortField = Literal["date", "title", "price", "id", "sku", "menu_order"]


class LenientModel(BaseModel):
    """Base for configuration sections that degrade to defaults."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _coerce_section(cls, data: Any) -> Any:
        """A missing or non-object section becomes an all-defaults section."""
        if isinstance(data, (dict, BaseModel)):
            return data
        return {}

    @field_validator("*", mode="wrap")
    @classmethod
    def _fallback_to_default(cls, value: Any, handler, info: ValidationInfo) -> Any:
        try:
            return handler(value)
        except ValidationError:
            logger.debug(
                f"{cls.__name__}.{info.field_name}: invalid value {value!r}, using default"
            )
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )


# -- Source --


class PriceRange(LenientModel):
    """Inclusive price range; ``max=None`` means open-ended."""

    min: float = 0
    max: Optional[float] = None


class QueryArgs(LenientModel):
    """Source filters. Only the fields relevant to the source type apply."""

    post_ids: list[int] = Field(default_factory=list)
    category_ids: list[int] = Field(default_factory=list)
    excludes: list[int] = Field(default_factory=list)
    stock_status: Literal["any", "instock", "outofstock", "onbackorder"] = "any"
    price_range: PriceRange = Field(default_factory=PriceRange)


class SortSpec(LenientModel):
    order_by: SortField = "date"
    order: Literal["ASC", "DESC"] = "DESC"

    @model_validator(mode="before")
    @classmethod
    def _normalize_order(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("order"), str):
            data = {**data, "order": data["order"].upper()}
        return data


class Source(LenientModel):
    """Which catalog items populate the table."""

    type: SourceType = "all"
    query_args: QueryArgs = Field(default_factory=QueryArgs)
    sort: SortSpec = Field(default_factory=SortSpec)


# -- Columns --


class ColumnWidth(LenientModel):
    value: float = 0
    unit: Literal["auto", "px", "%", "em", "rem"] = "auto"

    @property
    def is_applied(self) -> bool:
        """A width is only emitted for a concrete unit and a positive value."""
        return self.unit != "auto" and self.value > 0


class ColumnAdvanced(LenientModel):
    show_heading: bool = True
    width: ColumnWidth = Field(default_factory=ColumnWidth)
    visibility: VisibilityMode = "default"
    # Used by the builder UI for drag ordering; rendering keeps list order.
    order: int = 0


class Column(LenientModel):
    """A single table column.

    ``type`` is deliberately a free string: a type this version does not
    know renders empty cells instead of failing the table.
    """

    id: str = ""
    type: str = ""
    heading: str = ""
    advanced: ColumnAdvanced = Field(default_factory=ColumnAdvanced)
    settings: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_hidden(self) -> bool:
        return self.advanced.visibility == "none"


def default_columns() -> list[Column]:
    """Column set used when a table declares none."""
    return [
        Column(
            id="col_image_default",
            type="image",
            heading="Image",
            advanced=ColumnAdvanced(width=ColumnWidth(value=72, unit="px")),
            settings={"imageSize": "thumbnail", "linkTarget": "product"},
        ),
        Column(id="col_name_default", type="name", heading="Product"),
        Column(id="col_price_default", type="price", heading="Price"),
        Column(id="col_button_default", type="button", heading="Add to Cart"),
    ]


# -- Settings --


class BulkSelect(LenientModel):
    """Bulk-select checkbox column.

    This model is the only place bulk-select defaults live; the header,
    body rows and empty-state colspan all read the same merged object.
    """

    enabled: bool = True
    position: Literal["first", "last"] = "first"
    width: ColumnWidth = Field(
        default_factory=lambda: ColumnWidth(value=64, unit="px")
    )
    visibility: VisibilityMode = "all"

    @property
    def active(self) -> bool:
        """Whether the checkbox column is rendered at all."""
        return self.enabled and self.visibility != "none"


class Features(LenientModel):
    search: bool = True
    pagination: bool = True
    bulk_select: BulkSelect = Field(default_factory=BulkSelect)


class PaginationSettings(LenientModel):
    limit: int = Field(default=10, gt=0)
    position: Literal["top", "bottom", "both"] = "bottom"


class CartSettings(LenientModel):
    enable: bool = True
    show_quantity: bool = True


class TableSettings(LenientModel):
    features: Features = Field(default_factory=Features)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    cart: CartSettings = Field(default_factory=CartSettings)


# -- Style tokens --
# Raw, unsanitized strings. The style compiler validates every token.


class HeaderStyle(LenientModel):
    bg_color: str = "#f0f0f1"
    text_color: str = "#333333"
    font_size: str = "16px"
    text_transform: str = "none"


class BodyStyle(LenientModel):
    bg_color: str = "#ffffff"
    text_color: str = "#444444"
    font_size: str = ""
    row_alternate: bool = False
    alt_bg_color: str = "#f9f9f9"
    alt_text_color: str = "#444444"
    border_color: str = "#e5e5e5"


class ButtonStyle(LenientModel):
    bg_color: str = "#2271b1"
    text_color: str = "#ffffff"
    border_radius: str = "4px"
    hover_bg_color: str = "#135e96"
    hover_text_color: str = "#ffffff"


class LayoutStyle(LenientModel):
    border_style: str = "solid"
    border_color: str = "#e5e5e5"
    border_radius: str = "0px"
    cell_padding: str = "normal"


class TypographyStyle(LenientModel):
    header_font_weight: str = "bold"


class HoverStyle(LenientModel):
    row_hover_enabled: bool = True
    row_hover_bg_color: str = "#f5f5f5"
    row_hover_text_color: str = ""


class TableStyle(LenientModel):
    header: HeaderStyle = Field(default_factory=HeaderStyle)
    body: BodyStyle = Field(default_factory=BodyStyle)
    button: ButtonStyle = Field(default_factory=ButtonStyle)
    layout: LayoutStyle = Field(default_factory=LayoutStyle)
    typography: TypographyStyle = Field(default_factory=TypographyStyle)
    hover: HoverStyle = Field(default_factory=HoverStyle)


# -- Table --


class TableConfiguration(LenientModel):
    """Complete declarative definition of one product table."""

    id: int = 0
    title: str = "Untitled Table"
    status: Literal["publish", "draft", "private"] = "publish"
    source: Source = Field(default_factory=Source)
    columns: list[Column] = Field(default_factory=default_columns)
    settings: TableSettings = Field(default_factory=TableSettings)
    style: TableStyle = Field(default_factory=TableStyle)

    @model_validator(mode="before")
    @classmethod
    def _clean_columns(cls, data: Any) -> Any:
        """Drop malformed column entries; an empty list means default columns."""
        if not isinstance(data, dict) or "columns" not in data:
            return data
        columns = data["columns"]
        kept = (
            [c for c in columns if isinstance(c, (dict, Column))]
            if isinstance(columns, list)
            else []
        )
        data = dict(data)
        if kept:
            data["columns"] = kept
        else:
            del data["columns"]
        return data

    @property
    def is_published(self) -> bool:
        return self.status == "publish"


class TableSummary(BaseModel):
    """Lightweight summary for listing endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    status: str
    source_type: str
    column_count: int


# -- Per-request inputs --


class RuntimeArgs(LenientModel):
    """Transient per-request parameters; never persisted."""

    search_term: str = ""
    page_number: Optional[int] = None
    page_url: str = ""


class PageContext(LenientModel):
    """Ambient navigation facts for a full-page render.

    Supplied by the caller (the page being served) instead of being read
    from global request state.
    """

    url: str = ""
    page: int = 1
