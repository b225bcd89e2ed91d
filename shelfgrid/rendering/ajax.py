"""AJAX refresh responses: body rows and pagination only.

The client replaces the ``<tbody>`` contents and the pagination slots of
an already rendered wrapper with this markup, so both fields are built
by the same helpers as the full render.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shelfgrid.products.catalog import ProductDataSource
from shelfgrid.tables.schemas import RuntimeArgs, TableConfiguration

from .layout import TableLayout
from .table import render_body

logger = logging.getLogger(__name__)


class AjaxResponse(BaseModel):
    """Markup returned to the client after a search or page change."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rows_markup: str = Field(..., description="Replacement <tbody> contents")
    pagination_markup: str = Field("", description="Pagination markup, empty for a single page")
    page: int = Field(1, description="Page actually served")
    total_pages: int = Field(0, description="Total page count for the query")


class AjaxResponseBuilder:
    """Builds AJAX responses against a product data source."""

    def __init__(self, data_source: ProductDataSource):
        self.data_source = data_source

    def build(
        self,
        table: TableConfiguration,
        runtime: Optional[RuntimeArgs] = None,
    ) -> AjaxResponse:
        runtime = runtime or RuntimeArgs()
        body = render_body(
            self.data_source,
            table,
            TableLayout.from_table(table),
            runtime,
        )
        return AjaxResponse(
            rows_markup=str(body.rows),
            pagination_markup=str(body.pagination),
            page=body.page.page,
            total_pages=body.page.total_pages,
        )
