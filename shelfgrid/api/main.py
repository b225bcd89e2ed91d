"""shelfgrid API - Product Table Rendering Service.

This API renders configurable product tables:
- Stored table definitions (source, columns, settings, style)
- Full HTML fragments with scoped styles
- AJAX refreshes for search and pagination
- Bulk add-to-cart for bulk-selected rows
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shelfgrid import __version__
from shelfgrid.api.routes import cart, preview, tables
from shelfgrid.products.catalog import get_product_catalog
from shelfgrid.tables.registry import get_table_registry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: Pre-load definitions and the catalog
    logger.info("Loading table definitions...")
    table_registry = get_table_registry()
    logger.info(f"Loaded {table_registry.count()} tables")

    logger.info("Loading product catalog...")
    get_product_catalog()

    logger.info("shelfgrid API ready")
    yield
    # Shutdown
    logger.info("Shutting down shelfgrid API")


# Create FastAPI app
app = FastAPI(
    title="shelfgrid API",
    description="""
## Product Table Rendering Service

Renders declaratively configured product tables as HTML fragments.

### Key Endpoints

- `GET /v1/tables` - List all tables
- `GET /v1/tables/{id}` - Get a table definition
- `GET /v1/tables/{id}/render` - Render a published table
- `POST /v1/tables/filter` - Rows and pagination for a search or page change
- `POST /v1/preview` - Render an unsaved configuration
- `POST /v1/cart/bulk-add` - Add several products to the cart
""",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /v1 prefix
app.include_router(tables.router, prefix="/v1")
app.include_router(preview.router, prefix="/v1")
app.include_router(cart.router, prefix="/v1")


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "service": "shelfgrid API",
        "version": __version__,
        "description": "Product table rendering service",
        "docs": "/docs",
        "endpoints": {
            "tables": "/v1/tables",
            "filter": "/v1/tables/filter",
            "preview": "/v1/preview",
            "cart": "/v1/cart/bulk-add",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    table_registry = get_table_registry()
    catalog = get_product_catalog()
    count = getattr(catalog, "count", None)

    return {
        "status": "healthy",
        "tables_loaded": table_registry.count(),
        "products_loaded": count() if callable(count) else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "shelfgrid.api.main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
    )
