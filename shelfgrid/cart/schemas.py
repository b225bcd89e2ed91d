"""Bulk add-to-cart request and response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CartModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BulkAddItem(CartModel):
    """One selected row from the bulk-select checkboxes."""

    product_id: int = Field(0, description="Product id; items without one are skipped")
    quantity: int = Field(1, description="Requested quantity; values below 1 become 1")
    variation_id: int = Field(0, description="Resolved variation for variable products")
    attributes: dict[str, str] = Field(default_factory=dict)

    @field_validator("quantity", mode="before")
    @classmethod
    def _at_least_one(cls, value):
        try:
            return max(1, int(value))
        except (TypeError, ValueError):
            return 1

    @field_validator("attributes", mode="before")
    @classmethod
    def _string_attributes(cls, value):
        if not isinstance(value, dict):
            return {}
        return {str(k).strip(): str(v).strip() for k, v in value.items()}


class BulkAddRequest(CartModel):
    items: list[BulkAddItem] = Field(default_factory=list)


class BulkAddItemResult(CartModel):
    product_id: int
    added: bool
    quantity: int = 0
    message: Optional[str] = None


class BulkAddResponse(CartModel):
    success: bool
    added_count: int = 0
    message: str
    results: list[BulkAddItemResult] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
