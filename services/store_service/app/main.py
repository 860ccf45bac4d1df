"""FastAPI application for the Store Service."""

from fastapi import FastAPI

from libs.common.error_handler import add_exception_handlers
from services.store_service.routers import (
    admin_catalog_router,
    catalog_router,
    orders_router,
)


def create_app() -> FastAPI:
    """Create and configure the Store Service FastAPI app."""
    app = FastAPI(
        title="BundleUp Store Service",
        version="0.1.0",
        description="Egg catalog, role-based pricing and orders for BundleUp.",
    )

    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "store"}

    # Public catalog first so /products/low-inventory wins over /products/{id}
    app.include_router(catalog_router)
    app.include_router(admin_catalog_router)
    app.include_router(orders_router)

    return app


app = create_app()
