"""
FastAPI Main Application
Admin dashboard summary service
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from app.config import settings
from app.core.logging import setup_logging
from app.infrastructure.db.database import init_db, close_db

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of the database
    """
    # ===================
    # STARTUP
    # ===================
    logger.info("=" * 60)
    logger.info("🚀 Starting Admin Dashboard service")
    logger.info("=" * 60)

    await init_db()
    logger.info("✅ Database initialized")
    logger.info(f"   📅 Calendar timezone: {settings.TIMEZONE}")
    logger.info(f"   📈 Default range: {settings.DEFAULT_RANGE}")
    logger.info(f"   ✅ API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")

    yield

    # ===================
    # SHUTDOWN
    # ===================
    logger.info("📊 Closing database connections...")
    await close_db()
    logger.info("👋 Admin Dashboard shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Admin Dashboard",
    description="Daily sales, new customer and product summaries",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Admin Dashboard",
        "version": "1.0.0",
        "docs": "/docs"
    }


# Import and include routers
from app.api.routes import dashboard, health  # noqa: E402

app.include_router(health.router, tags=["Health"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
