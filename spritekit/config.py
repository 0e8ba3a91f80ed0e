"""
Pipeline configuration.

Defaults match the asset generation prompts (pure #FF00FF backgrounds).
All settings can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from spritekit.core.chroma import (
    DEFAULT_PASSES,
    DEFAULT_TOLERANCE,
    MAX_PASSES,
    KeyColorConfig,
    parse_hex_color,
)

DEFAULT_KEY_COLOR_HEX = "#FF00FF"
DEFAULT_ASSETS_DIR = "assets/images"
DEFAULT_PORT = 3002

# Supported input formats
SUPPORTED_INPUT_FORMATS = [".png", ".jpg", ".jpeg", ".webp"]


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


@dataclass
class PipelineConfig:
    """Runtime settings for the sprite pipeline and asset server."""

    # Chroma key settings
    key_color: str = field(default_factory=lambda: os.getenv("SPRITEKIT_KEY_COLOR", DEFAULT_KEY_COLOR_HEX))
    tolerance: int = field(default_factory=lambda: _env_int("SPRITEKIT_TOLERANCE", DEFAULT_TOLERANCE))
    passes: int = field(default_factory=lambda: _env_int("SPRITEKIT_PASSES", DEFAULT_PASSES))

    # Storage
    assets_dir: Path = field(
        default_factory=lambda: Path(os.getenv("SPRITEKIT_ASSETS_DIR", DEFAULT_ASSETS_DIR))
    )

    # Batch processing
    max_workers: int = field(default_factory=lambda: _env_int("SPRITEKIT_MAX_WORKERS", 4))

    # Server
    host: str = field(default_factory=lambda: os.getenv("SPRITEKIT_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: _env_int("SPRITEKIT_PORT", DEFAULT_PORT))

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []
        try:
            parse_hex_color(self.key_color)
        except ValueError as e:
            errors.append(f"SPRITEKIT_KEY_COLOR: {e}")
        if not 0 <= self.tolerance <= 255:
            errors.append("SPRITEKIT_TOLERANCE must be between 0 and 255")
        if not 1 <= self.passes <= MAX_PASSES:
            errors.append(f"SPRITEKIT_PASSES must be between 1 and {MAX_PASSES}")
        if self.max_workers < 1:
            errors.append("SPRITEKIT_MAX_WORKERS must be at least 1")
        return errors

    def key_config(self) -> KeyColorConfig:
        return KeyColorConfig.from_hex(self.key_color, tolerance=self.tolerance)


# Singleton config instance
_config: Optional[PipelineConfig] = None


def get_config() -> PipelineConfig:
    """Get the global pipeline configuration."""
    global _config
    if _config is None:
        _config = PipelineConfig.from_env()
    return _config


def set_config(config: Optional[PipelineConfig]) -> None:
    """
    Replace the global configuration.

    Passing None makes the next get_config() re-read the environment.
    Useful for testing.
    """
    global _config
    _config = config
