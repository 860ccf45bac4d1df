"""FastAPI application entrypoint for the BundleUp API.

The gateway mounts every service router under ``/api`` in one process.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from libs.common.config import get_settings
from libs.common.error_handler import add_exception_handlers
from libs.common.middleware import add_observability_middleware
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.accounts_service.routers import (
    addresses_router,
    auth_router,
    users_router,
)
from services.store_service.routers import (
    admin_catalog_router,
    catalog_router,
    orders_router,
)

API_PREFIX = "/api"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    app = FastAPI(
        title="BundleUp API",
        version="0.1.0",
        description="Role-priced egg ordering for retail and wholesale customers.",
    )

    # Add rate limiter state to app
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability (structured logging + request tracing)
    add_observability_middleware(app)

    # Add global exception handlers for consistent error responses
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple readiness endpoint."""
        return {"status": "ok", "environment": settings.ENVIRONMENT}

    # Accounts
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(addresses_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)

    # Store; the public catalog goes first so /products/low-inventory is not
    # captured by /products/{product_id}
    app.include_router(catalog_router, prefix=API_PREFIX)
    app.include_router(admin_catalog_router, prefix=API_PREFIX)
    app.include_router(orders_router, prefix=API_PREFIX)

    return app


app = create_app()
