"""Main application entry point."""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core import BaseError, Settings, get_settings
from .core.config import DEFAULT_RATE_LIMIT
from .core.logging_config import configure_logging
from .infrastructure import build_engine, build_session_factory, Mailer
from .models import Base
from .api.v1.api import api_router
from .api.v1.rate_limit import limiter, configure_rate_limit
from .api.v1.endpoints import health
from .api.v1.middleware import (
    SecurityHeadersMiddleware,
    base_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
)

# Rate limiting
from slowapi.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: settings are resolved here so a misconfigured process fails before serving
    settings: Settings = app.state.settings or get_settings()

    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.mailer = Mailer.from_settings(settings)

    logger.info("Server running on port %s (%s)", settings.PORT, settings.ENVIRONMENT)

    yield

    # Shutdown: uvicorn has drained in-flight requests by now
    logger.info("HTTP server closed, releasing database connections")
    await engine.dispose()


def create_app(settings: Optional[Settings] = None, rate_limit: Optional[str] = None) -> FastAPI:
    """Build the FastAPI application.

    ``settings`` is optional so the module-level app can be imported without
    a configured environment; it is resolved at startup otherwise.
    """
    app = FastAPI(
        title="Referral API",
        description="Course referral submission service",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings

    # Attach rate-limiter
    if rate_limit is None:
        rate_limit = settings.RATE_LIMIT if settings else DEFAULT_RATE_LIMIT
    configure_rate_limit(rate_limit)
    app.state.limiter = limiter

    @app.exception_handler(RateLimitExceeded)
    async def ratelimit_handler(request: Request, exc: RateLimitExceeded):
        return PlainTextResponse("Too many requests", status_code=429)

    # Exception handling
    app.add_exception_handler(BaseError, base_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Middleware, outermost last
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.include_router(api_router, prefix="/api")
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: load .env, configure logging and serve with uvicorn."""
    import uvicorn
    from dotenv import load_dotenv

    load_dotenv()  # allow local development with a .env file
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    # uvicorn stops accepting on SIGTERM/SIGINT, waits for in-flight requests,
    # then runs the lifespan shutdown above
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT, log_config=None, server_header=False)


if __name__ == "__main__":
    run()
