"""
Lunchly - FastAPI Application
Customer and reservation data access for the restaurant.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import uvicorn
import logging

from lunchly.config import settings
from lunchly.db.connection import connect_database, disconnect_database, db_manager
from lunchly.api import customers_router, register_exception_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Lunchly...")
    await connect_database()
    logger.info("Database connected successfully")

    yield

    logger.info("Shutting down Lunchly...")
    try:
        await disconnect_database()
        logger.info("Database disconnected successfully")
    except Exception as e:
        logger.error(f"Database disconnection error: {e}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Customer and reservation data access for the restaurant",
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(customers_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    db_healthy = await db_manager.health_check() if db_manager.is_connected else False
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "database": db_healthy,
    }


def run_server():
    """Run the FastAPI server with uvicorn."""
    uvicorn.run(
        "lunchly.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    run_server()
