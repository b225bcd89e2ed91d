"""Tests for the product query builder and the in-memory catalog."""

from shelfgrid.products.query import build_query
from shelfgrid.products.schemas import PRICE_RANGE_OPEN_MAX, QueryDescriptor
from shelfgrid.tables.schemas import RuntimeArgs, Source, TableSettings


def _source(**data) -> Source:
    return Source.model_validate(data)


# =============================================================================
# Source strategies
# =============================================================================


class TestSourceStrategies:

    def test_all_source_is_unrestricted(self):
        q = build_query(_source(type="all"), TableSettings())
        assert q.include_ids is None
        assert q.category_ids is None
        assert not q.force_empty

    def test_specific_keeps_listed_order(self):
        q = build_query(
            _source(type="specific", queryArgs={"postIds": [5, 3, 5, 9]}),
            TableSettings(),
        )
        assert q.include_ids == [5, 3, 9]
        assert q.preserve_include_order

    def test_empty_specific_forces_empty_result(self):
        q = build_query(_source(type="specific", queryArgs={"postIds": []}), TableSettings())
        assert q.force_empty
        assert q.include_ids is None

    def test_empty_category_forces_empty_result(self):
        q = build_query(_source(type="category", queryArgs={"categoryIds": []}), TableSettings())
        assert q.force_empty

    def test_category_ignores_post_ids(self):
        q = build_query(
            _source(type="category", queryArgs={"categoryIds": [11], "postIds": [1, 2]}),
            TableSettings(),
        )
        assert q.category_ids == [11]
        assert q.include_ids is None

    def test_sale_uses_supplied_ids(self):
        q = build_query(_source(type="sale"), TableSettings(), sale_ids=[4, 2])
        assert q.include_ids == [4, 2]
        assert not q.preserve_include_order

    def test_sale_without_sale_products_is_empty(self):
        q = build_query(_source(type="sale"), TableSettings(), sale_ids=[])
        assert q.force_empty


# =============================================================================
# Narrowing filters
# =============================================================================


class TestFilters:

    def test_excludes_stock_and_price(self):
        q = build_query(
            _source(queryArgs={
                "excludes": [3, 3, 4],
                "stockStatus": "instock",
                "priceRange": {"min": -5, "max": 50},
            }),
            TableSettings(),
        )
        assert q.exclude_ids == [3, 4]
        assert q.stock_status == "instock"
        assert q.min_price == 0
        assert q.max_price == 50

    def test_any_stock_and_open_price_range(self):
        q = build_query(_source(), TableSettings())
        assert q.stock_status is None
        assert q.max_price == PRICE_RANGE_OPEN_MAX

    def test_search_is_stripped(self):
        q = build_query(_source(), TableSettings(), RuntimeArgs(search_term="  mug "))
        assert q.search == "mug"

    def test_blank_search_is_omitted(self):
        q = build_query(_source(), TableSettings(), RuntimeArgs(search_term="   "))
        assert q.search is None

    def test_page_and_page_size(self):
        settings = TableSettings.model_validate({"pagination": {"limit": 3}})
        q = build_query(_source(), settings, RuntimeArgs(page_number=4))
        assert q.per_page == 3
        assert q.page == 4

    def test_invalid_page_size_falls_back_to_default(self):
        settings = TableSettings.model_validate({"pagination": {"limit": 0}})
        assert build_query(_source(), settings).per_page == 10

    def test_sort_allow_list(self):
        q = build_query(_source(sort={"orderBy": "rand()", "order": "asc"}), TableSettings())
        assert q.order_by == "date"
        assert q.order == "ASC"


# =============================================================================
# Catalog execution
# =============================================================================


class TestCatalogQuery:

    def test_force_empty_returns_no_rows(self, catalog):
        page = catalog.query(QueryDescriptor(force_empty=True))
        assert page.rows == []
        assert page.total_pages == 0

    def test_include_order_preserved(self, catalog):
        page = catalog.query(QueryDescriptor(include_ids=[103, 101], preserve_include_order=True))
        assert [p.id for p in page.rows] == [103, 101]

    def test_default_sort_is_newest_first(self, catalog):
        page = catalog.query(QueryDescriptor())
        assert [p.id for p in page.rows] == [105, 104, 103, 102, 101]

    def test_category_and_search(self, catalog):
        page = catalog.query(QueryDescriptor(category_ids=[11], search="mug"))
        assert [p.id for p in page.rows] == [102]

    def test_page_is_clamped(self, catalog):
        page = catalog.query(QueryDescriptor(per_page=2, page=9))
        assert page.total == 5
        assert page.total_pages == 3
        assert page.page == 3
        assert len(page.rows) == 1

    def test_on_sale_ids(self, catalog):
        assert catalog.on_sale_ids() == [102]
