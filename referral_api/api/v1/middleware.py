from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from ...core import BaseError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong!"

SECURITY_HEADERS = {
    "Content-Security-Policy": "frame-ancestors 'self'; object-src 'none'",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware adding the standard hardening headers to every response"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


async def base_error_handler(request: Request, exc: BaseError):
    """Handler for application errors that escaped an endpoint"""
    if exc.status_code >= 500:
        # Internal detail stays in the log
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        message = GENERIC_ERROR
    else:
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors with the same ``{"error": ...}`` shape as the rest of the API"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all: log the traceback, never leak it"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR})
