"""
PixelBuffer - in-memory RGBA raster.

A buffer wraps a (height, width, 4) uint8 numpy array. Pipeline stages
mutate the array in place; `data` gives the row-major RGBA bytes.
"""

import io
import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from spritekit.core.errors import DecodeError, DimensionError, EncodeError

logger = logging.getLogger(__name__)

CHANNELS = 4
OUTPUT_FORMAT = "PNG"


@dataclass
class PixelBuffer:
    """Decoded RGBA raster, row-major, 8 bits per channel."""

    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != CHANNELS:
            raise ValueError(f"Pixel array must have shape (height, width, {CHANNELS}), got {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            self.pixels = self.pixels.astype(np.uint8)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return CHANNELS

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def data(self) -> bytes:
        """Row-major RGBA bytes (length width*height*4)."""
        return self.pixels.tobytes()

    @property
    def alpha(self) -> np.ndarray:
        """Writable view of the alpha channel."""
        return self.pixels[:, :, 3]

    @classmethod
    def new(cls, width: int, height: int, color: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> "PixelBuffer":
        """Create a buffer filled with a single RGBA color."""
        pixels = np.empty((height, width, CHANNELS), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)

    @classmethod
    def from_raw(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        """Wrap raw row-major RGBA bytes."""
        expected = width * height * CHANNELS
        if len(data) != expected:
            raise DimensionError(
                f"Raw data is {len(data)} bytes, expected {expected} for {width}x{height} RGBA",
                expected=(width, height),
                actual=(width, len(data) // max(width * CHANNELS, 1)),
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape((height, width, CHANNELS)).copy()
        return cls(pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def set_pixel(self, x: int, y: int, color: Tuple[int, int, int, int]) -> None:
        self.pixels[y, x] = color

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.pixels.copy())


def decode(source: bytes) -> PixelBuffer:
    """
    Decode encoded image bytes (PNG, JPEG, WebP...) into an RGBA buffer.

    Raises:
        DecodeError: if the bytes are empty, not a readable image, or claim
            more pixels than Pillow's decompression bomb limit.
    """
    if not source:
        raise DecodeError("No image data provided")

    try:
        with Image.open(io.BytesIO(source)) as image:
            image.load()
            buffer = PixelBuffer.from_image(image)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    logger.debug("Decoded %dx%d image (%d bytes)", buffer.width, buffer.height, len(source))
    return buffer


def encode(buffer: PixelBuffer, image_format: str = OUTPUT_FORMAT) -> bytes:
    """
    Encode a buffer to image bytes (PNG by default).

    Raises:
        EncodeError: if the image cannot be serialized.
    """
    out = io.BytesIO()
    try:
        buffer.to_image().save(out, image_format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {buffer.width}x{buffer.height} image as {image_format}: {e}") from e
    return out.getvalue()
