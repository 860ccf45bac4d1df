"""FastAPI application for the Accounts Service."""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from libs.common.error_handler import add_exception_handlers
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler
from services.accounts_service.routers import (
    addresses_router,
    auth_router,
    users_router,
)


def create_app() -> FastAPI:
    """Create and configure the Accounts Service FastAPI app."""
    app = FastAPI(
        title="BundleUp Accounts Service",
        version="0.1.0",
        description="Users, addresses and authentication for BundleUp.",
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "accounts"}

    app.include_router(auth_router)
    app.include_router(addresses_router)
    app.include_router(users_router)

    return app


app = create_app()
