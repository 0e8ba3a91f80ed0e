"""SpriteKit API package - FastAPI asset server."""

from spritekit.api.main import app, create_app

__all__ = ["app", "create_app"]
