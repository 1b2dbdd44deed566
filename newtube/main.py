"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.gzip import GZipMiddleware

from newtube.api import api_router
from newtube.config import get_settings
from newtube.db import get_db, init_db
from newtube.errors import BadRequest, InternalError, RPCError, UpstreamServiceError
from newtube.utils.cache import cache
from newtube.utils.http_client import close_all_clients
from newtube.utils.logging import get_logger, setup_logging

settings = get_settings()
setup_logging()
logger = get_logger(__name__)

VERSION = "0.1.0"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # JSON only, nothing to load
        response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    await init_db()
    logger.info("Database initialized")

    if await cache.connect():
        logger.info("Redis connected")
    else:
        logger.warning("Redis unavailable - rate limiting and caching disabled")

    yield

    await cache.close()
    logger.info("Redis connection closed")

    await close_all_clients()
    logger.info("HTTP clients closed")

    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=VERSION,
    lifespan=lifespan,
)

# Middleware (order matters - first added = last executed)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)

if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.app_url],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
    )

app.include_router(api_router)


@app.exception_handler(RPCError)
async def rpc_error_handler(request: Request, exc: RPCError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed procedure input as BAD_REQUEST."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    error = BadRequest(details or None)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(UpstreamServiceError)
async def upstream_error_handler(request: Request, exc: UpstreamServiceError) -> JSONResponse:
    logger.error(f"Upstream failure on {request.url.path}: {exc}")
    error = InternalError(f"Upstream service {exc.service} failed")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


_app_start_time = datetime.now(UTC)


@app.get("/health", include_in_schema=True, tags=["monitoring"])
async def health_check(db: Annotated[AsyncSession, Depends(get_db)]) -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Returns:
        JSONResponse with status, uptime, and service health checks.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime_seconds": (datetime.now(UTC) - _app_start_time).total_seconds(),
        "version": VERSION,
        "checks": {},
    }

    try:
        await db.execute(text("SELECT 1"))
        health_status["checks"]["database"] = {"status": "healthy"}
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        await db.rollback()
        health_status["checks"]["database"] = {"status": "unhealthy"}
        health_status["status"] = "degraded"

    try:
        await cache.ping()
        health_status["checks"]["redis"] = {"status": "healthy"}
    except Exception as e:
        logger.warning(f"Redis health check failed: {e}")
        health_status["checks"]["redis"] = {"status": "unhealthy"}
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)
