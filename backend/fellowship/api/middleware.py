from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import time
import logging

from ..core.config import settings

logger = logging.getLogger(__name__)

# Uptime checks poll these
QUIET_PATHS = {"/", f"{settings.API_PREFIX}/health"}


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access line per API call: method, path, status, milliseconds, client"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers["X-Process-Time"] = f"{elapsed_ms:.1f}ms"
        if request.url.path not in QUIET_PATHS:
            client = request.client.host if request.client else "-"
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"({elapsed_ms:.1f}ms) client={client}"
            )
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """JSON-only API headers plus the running API version"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Fellowship-Version"] = settings.APP_VERSION
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        # member data is per-user
        if request.url.path.startswith(settings.API_PREFIX):
            response.headers.setdefault("Cache-Control", "no-store")

        return response
