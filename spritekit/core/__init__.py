"""Pixel-level sprite processing: chroma key removal, resizing, recoloring."""

from spritekit.core.buffer import PixelBuffer, decode, encode
from spritekit.core.chroma import (
    CHROMA_RULES,
    DEFAULT_KEY,
    DEFAULT_PASSES,
    MAX_PASSES,
    KeyColorConfig,
    classify,
    classify_array,
)
from spritekit.core.errors import DecodeError, DimensionError, EncodeError, SpriteKitError
from spritekit.core.recolor import RecolorRegion, recolor
from spritekit.core.removal import RemovalStats, remove_background
from spritekit.core.resize import FitMode, resize
from spritekit.core.themes import extract_theme, theme_color, theme_description

__all__ = [
    "PixelBuffer",
    "decode",
    "encode",
    "CHROMA_RULES",
    "DEFAULT_KEY",
    "DEFAULT_PASSES",
    "MAX_PASSES",
    "KeyColorConfig",
    "classify",
    "classify_array",
    "DecodeError",
    "DimensionError",
    "EncodeError",
    "SpriteKitError",
    "RecolorRegion",
    "recolor",
    "RemovalStats",
    "remove_background",
    "FitMode",
    "resize",
    "extract_theme",
    "theme_color",
    "theme_description",
]
