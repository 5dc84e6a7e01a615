"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from finance_tracker import __version__
from finance_tracker.config.settings import get_settings
from finance_tracker.config.logging_config import setup_logging
from finance_tracker.repositories.sqlalchemy.database import init_db
from finance_tracker.api.routers import (
    users_router,
    accounts_router,
    transactions_router,
    transfers_router,
    categories_router,
    exchange_rates_router,
    reports_router,
    budgets_router,
    goals_router,
    recurring_router,
)
from finance_tracker.core.exceptions import AppError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal finance tracking with multi-currency accounts and transfers",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(users_router)
app.include_router(accounts_router)
app.include_router(transactions_router)
app.include_router(transfers_router)
app.include_router(categories_router)
app.include_router(exchange_rates_router)
app.include_router(reports_router)
app.include_router(budgets_router)
app.include_router(goals_router)
app.include_router(recurring_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
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
        "version": __version__,
        "docs": "/docs",
    }
