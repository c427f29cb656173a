"""
FastAPI application initialization
"""

from fastapi import FastAPI
from api.routes import health, items, stats
from api.dependencies import get_poller
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.logging import setup_logging
import logging

setup_logging()

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Sales Feed Watcher API",
    description="Read-only view of the polled, filtered and enriched sales feed",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(items.router)
app.include_router(stats.router)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting Sales Feed Watcher API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Start polling
    get_poller().start()


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down Sales Feed Watcher API")
    await get_poller().aclose()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Sales Feed Watcher API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "items": "/items",
            "stats": "/stats"
        }
    }
