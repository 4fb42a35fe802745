"""
FastAPI server for X-Reels

Serves the script drafting and reel production API, the reel gallery and
the produced videos.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from core.config import get_settings
from core.library import ReelLibrary
from core.producer import ReelProductionError
from core.providers.base import ProviderError
from server.errors import handle_production_error, handle_provider_error
from server.routes import reels, scripts

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown logic"""
    ReelLibrary(settings).initialize()
    logger.info(f"Output dir: {settings.output_path}")
    logger.info(f"Credits image: {'on' if settings.show_credits_image else 'off'}")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; script and image generation will fail")

    yield

    logger.info("Shutting down X-Reels server")


app = FastAPI(
    title="X-Reels",
    description="Turns narrative text into short vertical videos",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ProviderError, handle_provider_error)
app.add_exception_handler(ReelProductionError, handle_production_error)

app.include_router(reels.router, tags=["Reels"])
app.include_router(scripts.router, tags=["Scripts"])

# check_dir=False: the directory is created by the lifespan hook
app.mount(
    "/outputs",
    StaticFiles(directory=str(settings.output_path), check_dir=False),
    name="outputs",
)


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "x-reels",
        "version": "0.1.0",
        "credits": settings.show_credits_image,
    }
