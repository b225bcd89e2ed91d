"""User-facing strings used in rendered markup."""

NO_PRODUCTS = "No products found."
OUT_OF_STOCK = "Out of stock"
IN_STOCK = "In stock"
IN_STOCK_COUNT = "{count} in stock"
ON_BACKORDER = "Available on backorder"
VIEW_OPTIONS = "View options"
SELECT_OPTIONS = "Select options"
ADD_TO_CART = "Add to cart"
BUY_PRODUCT = "Buy product"
CHOOSE_OPTION = "Choose an option"
QUANTITY = "Quantity"
SEARCH_PLACEHOLDER = "Search products..."
CLEAR_SEARCH = "Clear search"
SELECT_ALL = "Select all products"
SELECT_PRODUCT = "Select product"
BULK_ADD_TO_CART = "Add to Cart"
PREVIOUS_PAGE = "&laquo; Previous"
NEXT_PAGE = "Next &raquo;"
