"""Tests for per-column cell renderers."""

from datetime import datetime

from shelfgrid.products.schemas import StockStatus
from shelfgrid.rendering.buttons import CartBehavior
from shelfgrid.rendering.cells import CELL_RENDERERS, RowContext, render_cell, trim_words
from shelfgrid.tables.schemas import Column
from tests.conftest import BAGS, KITCHEN, make_product

CART = CartBehavior()


def _cell(column_data: dict, **product_data) -> str:
    column = Column.model_validate(column_data)
    row = RowContext.for_product(make_product(1, **product_data), CART)
    return str(render_cell(column, row))


class TestCellDispatch:

    def test_registered_types(self):
        assert set(CELL_RENDERERS) == {
            "image", "name", "price", "sku", "stock", "summary", "date", "tax", "button",
        }

    def test_unknown_type_renders_empty(self):
        assert _cell({"type": "rating"}) == ""

    def test_name_links_to_product(self):
        html = _cell({"type": "name"}, name="Mug & Co")
        assert 'href="https://shop.test/p/1/"' in html
        assert ">Mug &amp; Co</a>" in html

    def test_price_markup_is_kept(self):
        html = _cell({"type": "price"})
        assert html == '<span class="price"><span class="amount">$10.00</span></span>'

    def test_sku_is_escaped(self):
        assert _cell({"type": "sku"}, sku="<x>") == "&lt;x&gt;"


class TestImageCell:

    def test_image_linked_to_product(self):
        html = _cell(
            {"type": "image", "settings": {"imageSize": "medium"}},
            images={"medium": "https://img.test/m.jpg", "full": "https://img.test/f.jpg"},
        )
        assert 'src="https://img.test/m.jpg"' in html
        assert html.startswith('<a href="https://shop.test/p/1/">')

    def test_unknown_size_falls_back_to_thumbnail(self):
        html = _cell(
            {"type": "image", "settings": {"imageSize": "huge", "linkTarget": "none"}},
            images={"thumbnail": "https://img.test/t.jpg"},
        )
        assert 'src="https://img.test/t.jpg"' in html
        assert "<a " not in html

    def test_placeholder_without_image(self):
        assert "shelfgrid-image-placeholder" in _cell({"type": "image"})


class TestStockCell:

    def test_tracked_quantity(self):
        html = _cell({"type": "stock"}, manage_stock=True, stock_quantity=3)
        assert ">3 in stock<" in html

    def test_out_of_stock(self):
        html = _cell({"type": "stock"}, stock_status=StockStatus.OUT_OF_STOCK)
        assert "shelfgrid-stock-outofstock" in html
        assert "Out of stock" in html

    def test_backorder(self):
        assert "Available on backorder" in _cell({"type": "stock"}, stock_status=StockStatus.ON_BACKORDER)


class TestTextCells:

    def test_trim_words(self):
        assert trim_words("<p>one two three</p>", 2) == "one two…"
        assert trim_words("one two", 5) == "one two"

    def test_summary_is_trimmed_and_escaped(self):
        html = _cell({"type": "summary"}, short_description="<b>bold</b> " + "word " * 12)
        assert "<b>" not in html
        assert html.endswith("…")
        assert len(html.rstrip("…").split()) == 10

    def test_date_with_format(self):
        html = _cell({"type": "date", "settings": {"format": "%d/%m/%Y"}}, date=datetime(2025, 2, 3))
        assert html == '<time datetime="2025-02-03T00:00:00">03/02/2025</time>'

    def test_date_missing(self):
        assert _cell({"type": "date"}, date=None) == ""

    def test_categories_and_tags(self):
        assert _cell({"type": "tax"}, categories=[BAGS, KITCHEN]) == "Bags, Kitchen"
        assert _cell({"type": "tax", "settings": {"taxonomy": "product_tag"}}, tags=[BAGS]) == "Bags"

    def test_button_cell_uses_row_state(self):
        html = _cell({"type": "button"}, stock_status=StockStatus.OUT_OF_STOCK)
        assert "Out of stock" in html


class TestUnsafeUrls:

    def test_name_with_script_permalink(self):
        html = _cell({"type": "name"}, permalink="javascript:alert(1)")
        assert 'href="#"' in html
        assert "javascript:" not in html

    def test_image_with_script_urls(self):
        html = _cell(
            {"type": "image"},
            permalink="javascript:alert(1)",
            images={"thumbnail": "javascript:alert(2)"},
        )
        assert "javascript:" not in html
        assert "<a " not in html
        assert "shelfgrid-image-placeholder" in html
