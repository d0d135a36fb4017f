"""
ServiceHub API - Main Application Entry Point
Service marketplace for provider profiles and offerings
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, APIRouter, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import logging
import os
import time

from app.config import get_settings
from app.database import Database
from app.routers import cache, providers, services
from app.utils.exceptions import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management - startup and shutdown"""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    # Validate production settings
    errors = settings.validate_production_settings()
    if errors:
        for error in errors:
            logger.warning(f"Configuration warning: {error}")

    # Connect to database
    await Database.connect()

    yield

    # Shutdown
    logger.info("Shutting down application")
    await Database.disconnect()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Service marketplace API",
    version=settings.APP_VERSION,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(round(process_time * 1000, 2))
    return response


# Versioned API router
api_v1 = APIRouter(prefix=settings.API_V1_PREFIX)
api_v1.include_router(providers.router, prefix="/providers", tags=["Providers"])
api_v1.include_router(services.router, prefix="/services", tags=["Services"])
api_v1.include_router(cache.router, prefix="/cache", tags=["Cache"])
app.include_router(api_v1)

# Locally stored media
os.makedirs(settings.MEDIA_UPLOAD_DIR, exist_ok=True)
app.mount("/media", StaticFiles(directory=settings.MEDIA_UPLOAD_DIR), name="media")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/api/docs" if settings.DEBUG else "Disabled in production",
        "api_prefix": settings.API_V1_PREFIX
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
