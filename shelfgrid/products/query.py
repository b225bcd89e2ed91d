"""Query builder: table source + settings + runtime args → QueryDescriptor.

Exactly one source strategy applies per table:

- ``all``: every published product
- ``specific``: the listed ids, in listed order
- ``category``: products in any of the listed categories
- ``sale``: products the data source reports as on sale

The ``specific``, ``category`` and ``sale`` strategies force an empty
result when their id set is empty; they never widen to ``all``.
Exclusions, stock status, price range and search always narrow the
source selection.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from shelfgrid.products.schemas import PRICE_RANGE_OPEN_MAX, QueryDescriptor
from shelfgrid.tables.schemas import RuntimeArgs, Source, TableSettings

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10


def build_query(
    source: Source,
    settings: TableSettings,
    runtime: Optional[RuntimeArgs] = None,
    sale_ids: Optional[Iterable[int]] = None,
) -> QueryDescriptor:
    """Build the product query for one render.

    Args:
        source: The table's product source.
        settings: The table's settings (page size).
        runtime: Per-request search term and page number.
        sale_ids: Ids of products currently on sale; only read for the
            ``sale`` source.

    Returns:
        A QueryDescriptor. Never raises on malformed configuration.
    """
    runtime = runtime or RuntimeArgs()
    args = source.query_args

    per_page = settings.pagination.limit
    if per_page <= 0:
        per_page = DEFAULT_PER_PAGE
    page = runtime.page_number if runtime.page_number and runtime.page_number > 0 else 1

    query: dict = {
        "per_page": per_page,
        "page": page,
        "order_by": source.sort.order_by,
        "order": source.sort.order,
    }

    if source.type == "specific":
        ids = _unique(args.post_ids)
        if ids:
            query["include_ids"] = ids
            query["preserve_include_order"] = True
        else:
            query["force_empty"] = True
    elif source.type == "category":
        category_ids = _unique(args.category_ids)
        if category_ids:
            query["category_ids"] = category_ids
        else:
            query["force_empty"] = True
    elif source.type == "sale":
        ids = _unique(sale_ids or [])
        if ids:
            query["include_ids"] = ids
        else:
            query["force_empty"] = True

    if args.excludes:
        query["exclude_ids"] = _unique(args.excludes)

    if args.stock_status != "any":
        query["stock_status"] = args.stock_status

    price_min = max(args.price_range.min, 0)
    price_max = args.price_range.max
    query["min_price"] = price_min
    query["max_price"] = PRICE_RANGE_OPEN_MAX if price_max is None else price_max

    search = runtime.search_term.strip()
    if search:
        query["search"] = search

    descriptor = QueryDescriptor(**query)
    if descriptor.force_empty:
        logger.debug(f"Source '{source.type}' selected nothing, forcing empty result")
    return descriptor


def _unique(ids: Iterable[int]) -> list[int]:
    """Deduplicate positive ids, keeping first-seen order."""
    seen: set[int] = set()
    result = []
    for i in ids:
        if i > 0 and i not in seen:
            seen.add(i)
            result.append(i)
    return result
