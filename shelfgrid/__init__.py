"""shelfgrid - Product Table Rendering Service.

Turns declarative product table definitions into interactive markup:
- Query descriptors built from the table's product source
- Row markup from per-column, per-product-kind cell renderers
- Sanitized CSS scoped to each rendered table instance
"""

__version__ = "0.1.0"
