"""Tests for bulk add-to-cart."""

from shelfgrid.cart.schemas import BulkAddItem
from shelfgrid.cart.service import InMemoryCart, bulk_add_to_cart


class ExplodingCart:
    def add_to_cart(self, product_id, quantity, variation_id=0, attributes=None):
        raise RuntimeError("session expired")


def _items(*dicts) -> list[BulkAddItem]:
    return [BulkAddItem.model_validate(d) for d in dicts]


class TestBulkAddItem:

    def test_quantity_floor(self):
        assert BulkAddItem.model_validate({"productId": 1, "quantity": 0}).quantity == 1
        assert BulkAddItem.model_validate({"productId": 1, "quantity": "x"}).quantity == 1

    def test_attributes_are_strings(self):
        item = BulkAddItem.model_validate({"productId": 1, "attributes": {"pa_color": " rust "}})
        assert item.attributes == {"pa_color": "rust"}


class TestBulkAddToCart:

    def test_simple_product_added(self, catalog):
        cart = InMemoryCart()
        response = bulk_add_to_cart(_items({"productId": 102, "quantity": 2}), catalog, cart)
        assert response.success
        assert response.added_count == 1
        assert response.message == "1 product(s) added to cart."
        assert cart.item_count() == 2

    def test_quantity_capped_to_stock(self, catalog):
        cart = InMemoryCart()
        response = bulk_add_to_cart(_items({"productId": 102, "quantity": 50}), catalog, cart)
        assert response.results[0].quantity == 8
        assert cart.item_count() == 8

    def test_items_without_id_are_skipped(self, catalog):
        response = bulk_add_to_cart(_items({"quantity": 1}, {"productId": 102}), catalog, InMemoryCart())
        assert len(response.results) == 1

    def test_failures_become_warnings(self, catalog):
        cart = InMemoryCart()
        response = bulk_add_to_cart(
            _items(
                {"productId": 102},
                {"productId": 101},
                {"productId": 104},
                {"productId": 105},
                {"productId": 999},
            ),
            catalog,
            cart,
        )
        assert response.success
        assert response.added_count == 1
        assert response.warnings == [
            '"Canvas Tote" is out of stock.',
            '"Picnic Set" cannot be added to the cart.',
            '"Field Guide" cannot be added to the cart.',
            "Product #999 not found.",
        ]

    def test_nothing_added(self, catalog):
        response = bulk_add_to_cart(_items({"productId": 101}), catalog, InMemoryCart())
        assert not response.success
        assert response.added_count == 0
        assert response.message == "Failed to add products to cart."

    def test_variable_requires_variation(self, catalog):
        response = bulk_add_to_cart(_items({"productId": 103}), catalog, InMemoryCart())
        assert response.warnings == ['Please select options for "Beanie".']

    def test_variable_with_unavailable_variation(self, catalog):
        response = bulk_add_to_cart(
            _items({"productId": 103, "variationId": 1032}), catalog, InMemoryCart()
        )
        assert response.warnings == ['Selected variation for "Beanie" is unavailable.']

    def test_variable_quantity_capped_to_variation_stock(self, catalog):
        cart = InMemoryCart()
        response = bulk_add_to_cart(
            _items({
                "productId": 103,
                "variationId": 1031,
                "quantity": 10,
                "attributes": {"attribute_pa_color": "charcoal"},
            }),
            catalog,
            cart,
        )
        assert response.success
        assert cart.lines[0].quantity == 3
        assert cart.lines[0].variation_id == 1031

    def test_cart_exceptions_become_failures(self, catalog):
        response = bulk_add_to_cart(_items({"productId": 102}), catalog, ExplodingCart())
        assert not response.success
        assert response.warnings == ['Could not add "Camp Mug" to cart.']

    def test_repeated_lines_merge(self, catalog):
        cart = InMemoryCart()
        bulk_add_to_cart(_items({"productId": 102}, {"productId": 102}), catalog, cart)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2
