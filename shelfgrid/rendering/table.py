"""Full-page table renderer.

Produces one self-contained HTML fragment per call: a scoped ``<style>``
block followed by the wrapper holding the toolbar, the table and the
pagination slots. Body rows and pagination come from the same helpers
the AJAX path uses, so a refresh swaps in markup of identical shape.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from jinja2 import BaseLoader, Environment
from markupsafe import Markup

from shelfgrid.products.catalog import ProductDataSource
from shelfgrid.products.query import build_query
from shelfgrid.products.schemas import ProductPage
from shelfgrid.styles.compiler import compile_style
from shelfgrid.tables.schemas import PageContext, RuntimeArgs, TableConfiguration

from . import labels
from .buttons import CartBehavior
from .layout import TableLayout
from .pagination import render_pagination, resolve_base_url, resolve_current_page

logger = logging.getLogger(__name__)


TABLE_TEMPLATE = """\
{% if css %}<style>{{ css }}</style>{% endif %}
<div id="{{ wrapper_id }}" class="shelfgrid-wrapper" data-table-id="{{ table_id }}"{% if base_url %} data-page-url="{{ base_url }}"{% endif %}>
{% if search or bulk %}
<div class="shelfgrid-toolbar">
{% if search %}
<div class="shelfgrid-search">
<input type="search" class="shelfgrid-search-input" name="searchTerm" value="{{ search_term }}" placeholder="{{ labels.SEARCH_PLACEHOLDER }}" aria-label="{{ labels.SEARCH_PLACEHOLDER }}">
<button type="button" class="shelfgrid-search-clear" aria-label="{{ labels.CLEAR_SEARCH }}"{% if not search_term %} hidden{% endif %}>&times;</button>
</div>
{% endif %}
{% if bulk %}
<button type="button" class="button shelfgrid-btn-bulk" disabled>{{ labels.BULK_ADD_TO_CART }}</button>
{% endif %}
</div>
{% endif %}
{% if pagination_top %}<div class="shelfgrid-pagination-slot shelfgrid-pagination-top">{{ pagination }}</div>{% endif %}
<table class="shelfgrid-table">
<thead>{{ header }}</thead>
<tbody>{{ rows }}</tbody>
</table>
{% if pagination_bottom %}<div class="shelfgrid-pagination-slot shelfgrid-pagination-bottom">{{ pagination }}</div>{% endif %}
</div>
"""


@dataclass(frozen=True)
class RenderedBody:
    """Rows and pagination for one query, shared by both render paths."""

    page: ProductPage
    rows: Markup
    pagination: Markup


def render_body(
    data_source: ProductDataSource,
    table: TableConfiguration,
    layout: TableLayout,
    runtime: RuntimeArgs,
    ambient_page: Optional[int] = None,
    ambient_url: Optional[str] = None,
) -> RenderedBody:
    """Query the data source and render body rows plus pagination."""
    current = resolve_current_page(runtime.page_number, ambient_page)
    effective = runtime.model_copy(update={"page_number": current})

    sale_ids = data_source.on_sale_ids() if table.source.type == "sale" else None
    descriptor = build_query(table.source, table.settings, effective, sale_ids=sale_ids)
    page = data_source.query(descriptor)

    cart = CartBehavior.from_settings(table.settings.cart)
    rows = layout.body_rows(page.rows, cart)

    pagination = Markup("")
    if table.settings.features.pagination:
        base_url = resolve_base_url(runtime.page_url, ambient_url)
        pagination = render_pagination(page.page, page.total_pages, base_url)

    logger.debug(
        f"Table {table.id}: {len(page.rows)} of {page.total} products, "
        f"page {page.page}/{page.total_pages}"
    )
    return RenderedBody(page=page, rows=rows, pagination=pagination)


class TableRenderer:
    """Renders complete table fragments against a product data source."""

    def __init__(self, data_source: ProductDataSource):
        self.data_source = data_source
        self.env = Environment(
            loader=BaseLoader(),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._template = self.env.from_string(TABLE_TEMPLATE)

    def render(
        self,
        table: TableConfiguration,
        runtime: Optional[RuntimeArgs] = None,
        context: Optional[PageContext] = None,
        instance_id: Optional[str] = None,
    ) -> str:
        """Render one table instance.

        Args:
            table: The table configuration.
            runtime: Search term, page number and page URL for this request.
            context: Ambient URL and page of the page hosting the table.
            instance_id: Suffix for the wrapper id; random when omitted.

        Returns:
            HTML fragment with its scoped style block.
        """
        runtime = runtime or RuntimeArgs()
        context = context or PageContext()
        layout = TableLayout.from_table(table)

        body = render_body(
            self.data_source,
            table,
            layout,
            runtime,
            ambient_page=context.page,
            ambient_url=context.url,
        )

        wrapper_id = f"shelfgrid-table-{table.id}-{instance_id or uuid.uuid4().hex[:8]}"
        css = compile_style(
            table.style,
            table.columns,
            layout.bulk_select,
            f"#{wrapper_id}",
        )
        position = table.settings.pagination.position
        paginate = table.settings.features.pagination

        return self._template.render(
            css=Markup(css),
            wrapper_id=wrapper_id,
            table_id=table.id,
            base_url=resolve_base_url(runtime.page_url, context.url),
            search=table.settings.features.search,
            search_term=runtime.search_term,
            bulk=layout.has_checkbox,
            labels=labels,
            header=layout.header_row(),
            rows=body.rows,
            pagination=body.pagination,
            pagination_top=paginate and position in ("top", "both"),
            pagination_bottom=paginate and position in ("bottom", "both"),
        )
