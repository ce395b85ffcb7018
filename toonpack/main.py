"""
Toonpack API

FastAPI application for the Toonpack sticker generator.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from toonpack import __version__
from toonpack.config import get_settings
from toonpack.database import Database
from toonpack.pipeline import PostProcessConfig, StickerGenerator, StickerPostProcessor
from toonpack.routes import health_router, packs_router, references_router, stickers_router
from toonpack.services import ImageGenerationClient, StorageService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Toonpack API...")
    database = Database(settings.database_url, echo=settings.debug)
    await database.init()
    app.state.db = database
    logger.info("Database initialized")

    http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    app.state.http_client = http_client
    app.state.storage = StorageService(settings)
    app.state.sticker_generator = StickerGenerator(
        image_client=ImageGenerationClient(
            api_url=settings.image_api_url,
            api_key=settings.image_api_key,
            http_client=http_client,
        ),
        http_client=http_client,
        postprocessor=StickerPostProcessor(PostProcessConfig(size=settings.sticker_size)),
    )

    yield

    # Shutdown
    logger.info("Shutting down Toonpack API...")
    await http_client.aclose()
    await database.close()
    logger.info("Database connections closed")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Cartoon sticker packs from a selfie",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(references_router, prefix=settings.api_prefix)
app.include_router(packs_router, prefix=settings.api_prefix)
app.include_router(stickers_router, prefix=settings.api_prefix)

# Prometheus metrics endpoint
Instrumentator().instrument(app).expose(app, endpoint="/metrics")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "toonpack.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
