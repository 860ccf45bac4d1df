"""Request tracing for the BundleUp API.

Every request gets an ``X-Request-ID`` (propagated from the caller when sent)
that is attached to its log lines and echoed on the response. The completion
line also names the authenticated account and its role.

Usage:
    from libs.common.middleware import add_observability_middleware

    app = FastAPI()
    add_observability_middleware(app)
"""
import time
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health"})


def _caller_fields(request: Request) -> dict[str, Any]:
    """Account id and role set by the auth dependency; empty for anonymous calls."""
    user: Optional[Any] = getattr(request.state, "auth_user", None)
    if user is None:
        return {"user_id": None, "role": None}
    return {"user_id": str(user.user_id), "role": user.role.value}


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind the request id and log one line per finished request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        quiet = request.url.path in QUIET_PATHS
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                "Request failed with unhandled exception",
                extra={
                    "extra_fields": {
                        **_caller_fields(request),
                        "error": str(exc),
                        "duration_ms": _elapsed_ms(start),
                    }
                },
            )
            raise
        else:
            if not quiet:
                log = logger.warning if response.status_code >= 400 else logger.info
                log(
                    "Request completed",
                    extra={
                        "extra_fields": {
                            **_caller_fields(request),
                            "status_code": response.status_code,
                            "duration_ms": _elapsed_ms(start),
                        }
                    },
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()


def add_observability_middleware(app: FastAPI) -> None:
    """Configure logging and install ``RequestContextMiddleware`` on ``app``."""
    configure_logging()
    app.add_middleware(RequestContextMiddleware)
    logger.info("Observability middleware initialized")
