"""Shared pytest fixtures for SpriteKit tests."""

import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image

from spritekit.config import PipelineConfig, set_config
from spritekit.core.buffer import PixelBuffer

MAGENTA = (255, 0, 255, 255)
GRASS = (40, 160, 40, 255)
BLACK = (0, 0, 0, 255)


def make_png(width: int, height: int, color=MAGENTA, mode: str = "RGBA") -> bytes:
    """Encode a solid-color image as PNG bytes."""
    fill = color[:3] if mode == "RGB" else color
    img = Image.new(mode, (width, height), fill)
    out = io.BytesIO()
    img.save(out, "PNG")
    return out.getvalue()


def oversized_png(width: int = 20000, height: int = 20000) -> bytes:
    """A tiny PNG whose IHDR claims width x height pixels."""
    data = bytearray(make_png(1, 1))
    # IHDR data sits at bytes 16..29, its CRC at 29..33
    data[16:24] = struct.pack(">II", width, height)
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(data[12:29])))
    return bytes(data)


def png_from_buffer(buffer: PixelBuffer) -> bytes:
    out = io.BytesIO()
    buffer.to_image().save(out, "PNG")
    return out.getvalue()


def open_png(data: bytes) -> np.ndarray:
    with Image.open(io.BytesIO(data)) as img:
        return np.array(img.convert("RGBA"))


# =============================================================================
# Buffer Fixtures
# =============================================================================


@pytest.fixture
def mixed_buffer() -> PixelBuffer:
    """2x2 buffer: key, green, key, black."""
    return PixelBuffer.from_raw(
        2,
        2,
        bytes([255, 0, 255, 255, 10, 200, 10, 255, 255, 0, 255, 255, 0, 0, 0, 255]),
    )


@pytest.fixture
def sprite_buffer() -> PixelBuffer:
    """16x16 magenta background with a dark 8x8 sprite in the middle."""
    buffer = PixelBuffer.new(16, 16, MAGENTA)
    buffer.pixels[4:12, 4:12] = (60, 40, 20, 255)
    buffer.pixels[6:10, 6:10] = GRASS
    return buffer


@pytest.fixture
def tiles_png() -> bytes:
    """128x240 tileset: magenta background, grass in row 9 columns 1-3."""
    buffer = PixelBuffer.new(128, 240, MAGENTA)
    buffer.pixels[128:144, 0:48] = GRASS
    # Darker grass blades to check shading survives
    buffer.pixels[130:132, 2:30] = (20, 90, 20, 255)
    return png_from_buffer(buffer)


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def pipeline_config(tmp_path):
    """Install a config that writes assets to a temp directory."""
    config = PipelineConfig(
        key_color="#FF00FF",
        tolerance=30,
        passes=4,
        assets_dir=tmp_path / "assets",
        max_workers=2,
    )
    set_config(config)
    yield config
    set_config(None)
