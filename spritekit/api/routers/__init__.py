"""API routers."""

from spritekit.api.routers.assets import router as assets_router

__all__ = ["assets_router"]
