"""FastAPI application for the sprite asset server."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spritekit import __version__
from spritekit.api.routers import assets_router
from spritekit.config import get_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    config = get_config()
    for error in config.validate():
        logger.warning("Config: %s", error)
    logger.info("Asset server starting, assets directory: %s", config.assets_dir.resolve())
    yield
    logger.info("Asset server shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="SpriteKit API",
        description="Sprite post-processing and asset storage",
        version=__version__,
        lifespan=lifespan,
    )

    # Configure CORS for the browser front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(assets_router, prefix="/api")

    return app


# Create app instance
app = create_app()


@app.get("/")
async def root() -> dict:
    """Root endpoint - API info."""
    return {
        "name": "SpriteKit API",
        "version": __version__,
        "docs": "/docs",
    }


def run_api(host: str = "127.0.0.1", port: int = 3002, reload: bool = False) -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "spritekit.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    run_api(reload=True)
