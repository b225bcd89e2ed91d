"""Table API routes.

Serves stored table definitions, their rendered HTML, and the AJAX
filter endpoint used for search and pagination refreshes.
"""

from typing import Optional, Union

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shelfgrid.products.catalog import get_product_catalog
from shelfgrid.rendering.ajax import AjaxResponse, AjaxResponseBuilder
from shelfgrid.rendering.table import TableRenderer
from shelfgrid.tables.registry import get_table_registry
from shelfgrid.tables.schemas import (
    PageContext,
    RuntimeArgs,
    TableConfiguration,
    TableSummary,
)

router = APIRouter(prefix="/tables", tags=["tables"])


class FilterRequest(BaseModel):
    """AJAX refresh request sent by a rendered table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    table_id: Union[int, str, None] = Field(None, description="Id of the table to refresh")
    search_term: str = Field("", description="Search box contents")
    page_number: Optional[int] = Field(None, description="Requested page")
    page_url: str = Field("", description="URL of the page hosting the table")

    @field_validator("page_number", mode="before")
    @classmethod
    def _lenient_page(cls, value):
        """A malformed or non-positive page number means the first page."""
        try:
            page = int(value)
        except (TypeError, ValueError):
            return None
        return page if page > 0 else None


# -------------------------------------------------------------------------
# List / Read
# -------------------------------------------------------------------------

@router.get("", response_model=list[TableSummary])
async def list_tables() -> list[TableSummary]:
    """List all table summaries."""
    registry = get_table_registry()
    return registry.list_summaries()


@router.get("/{table_id}", response_model=TableConfiguration)
async def get_table(table_id: int) -> TableConfiguration:
    """Get a full table definition."""
    return _get_or_404(table_id)


# -------------------------------------------------------------------------
# Rendering
# -------------------------------------------------------------------------

@router.get("/{table_id}/render", response_class=HTMLResponse)
async def render_table(
    table_id: int,
    search_term: str = Query("", alias="searchTerm"),
    page_number: Optional[int] = Query(None, alias="pageNumber"),
    page_url: str = Query("", alias="pageUrl"),
    paged: int = Query(1, description="Page of the hosting page's own navigation"),
) -> HTMLResponse:
    """Render a published table as an HTML fragment."""
    table = _get_or_404(table_id)
    if not table.is_published:
        raise HTTPException(
            status_code=404,
            detail=f"Table not published: {table_id}",
        )

    renderer = TableRenderer(get_product_catalog())
    html = renderer.render(
        table,
        RuntimeArgs(search_term=search_term, page_number=page_number),
        PageContext(url=page_url, page=paged),
    )
    return HTMLResponse(content=html)


@router.post("/filter", response_model=AjaxResponse, response_model_by_alias=True)
async def filter_table(request: FilterRequest) -> AjaxResponse:
    """Re-render body rows and pagination after a search or page change."""
    table_id = _parse_table_id(request.table_id)
    table = _get_or_404(table_id)

    builder = AjaxResponseBuilder(get_product_catalog())
    return builder.build(
        table,
        RuntimeArgs(
            search_term=request.search_term,
            page_number=request.page_number,
            page_url=request.page_url,
        ),
    )


@router.post("/reload")
async def reload_tables() -> dict:
    """Force reload all table definitions from disk."""
    registry = get_table_registry()
    registry.reload()
    return {"status": "reloaded", "count": registry.count()}


# -------------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------------

def _parse_table_id(raw: Union[int, str, None]) -> int:
    """Parse a client-supplied table id or raise 400."""
    try:
        table_id = int(raw) if raw is not None else 0
    except ValueError:
        table_id = 0
    if table_id <= 0:
        raise HTTPException(status_code=400, detail="Invalid table ID")
    return table_id


def _get_or_404(table_id: int) -> TableConfiguration:
    """Get table or raise 404."""
    registry = get_table_registry()
    table = registry.get(table_id)
    if table is None:
        raise HTTPException(
            status_code=404,
            detail=f"Table not found: {table_id}",
        )
    return table
