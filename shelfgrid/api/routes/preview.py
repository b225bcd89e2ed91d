"""Preview API route.

Renders an unsaved configuration straight from the builder, so the
author sees the table before it is stored or published.
"""

from typing import Any

from fastapi import APIRouter, Body
from pydantic import BaseModel

from shelfgrid.products.catalog import get_product_catalog
from shelfgrid.rendering.table import TableRenderer
from shelfgrid.tables.schemas import TableConfiguration

router = APIRouter(prefix="/preview", tags=["preview"])


class PreviewResponse(BaseModel):
    html: str


@router.post("", response_model=PreviewResponse)
async def preview_table(payload: Any = Body(...)) -> PreviewResponse:
    """Render a configuration sent as ``{"data": {...}}`` or as a bare object."""
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        payload = payload["data"]
    table = TableConfiguration.model_validate(payload if isinstance(payload, dict) else {})

    renderer = TableRenderer(get_product_catalog())
    return PreviewResponse(html=renderer.render(table, instance_id="preview"))
