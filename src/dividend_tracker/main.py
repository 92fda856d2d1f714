"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dividend_tracker.config.settings import get_settings
from dividend_tracker.config.logging_config import setup_logging
from dividend_tracker.repositories.sqlalchemy.database import init_db
from dividend_tracker.api.deps import get_price_resolver, reset_price_resolver
from dividend_tracker.api.routers import (
    auth_router,
    stocks_router,
    dividends_router,
    transactions_router,
)
from dividend_tracker.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    settings = get_settings()
    if settings.price_warmup_enabled and settings.price_warmup_tickers:
        resolver = app.dependency_overrides.get(get_price_resolver, get_price_resolver)()
        resolver.start_warmup(settings.price_warmup_tickers)
        logger.info("Pre-caching prices for %s", ", ".join(settings.price_warmup_tickers))
    yield
    # Shutdown
    reset_price_resolver()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Track stock holdings, dividend income and total return",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(auth_router)
app.include_router(stocks_router)
app.include_router(dividends_router)
app.include_router(transactions_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies like any other validation failure."""
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": f"{field}: {message}" if field else message,
        },
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
