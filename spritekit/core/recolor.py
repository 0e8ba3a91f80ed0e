"""
Theme recoloring for texture regions.

Green pixels inside a region take the theme's hue while keeping their own
saturation and lightness, so shading and highlights survive the swap.

Recoloring is not idempotent: a second theme shifts from the current hue.
Always recolor from an unprocessed copy of the source.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from spritekit.core.buffer import PixelBuffer
from spritekit.core.color import hsl_to_rgb, rgb_to_hsl
from spritekit.core.themes import theme_color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecolorRegion:
    """Half-open pixel rectangle [x0, x1) x [y0, y1)."""

    x0: int
    y0: int
    x1: int
    y1: int

    def clip(self, width: int, height: int) -> "RecolorRegion":
        x0 = min(max(self.x0, 0), width)
        y0 = min(max(self.y0, 0), height)
        return RecolorRegion(x0, y0, max(x0, min(self.x1, width)), max(y0, min(self.y1, height)))

    @property
    def is_empty(self) -> bool:
        return self.x1 <= self.x0 or self.y1 <= self.y0

    @property
    def slices(self) -> Tuple[slice, slice]:
        """(rows, cols) slices for indexing a (H, W, C) array."""
        return (slice(self.y0, self.y1), slice(self.x0, self.x1))


def is_recolor_target(r: int, g: int, b: int) -> bool:
    """True for strict green or green-dominant pixels."""
    strict = g > r and g > b and g > 50
    greenness = g / (r + g + b + 1)
    soft = greenness > 0.35 and g > 25 and (g > r + 10 or g > b + 10)
    return strict or soft


def recolor_mask(pixels: np.ndarray) -> np.ndarray:
    """Vectorised `is_recolor_target` for visible pixels of an (H, W, 4) array."""
    channels = pixels[..., :3].astype(np.int32)
    r, g, b = channels[..., 0], channels[..., 1], channels[..., 2]

    strict = (g > r) & (g > b) & (g > 50)
    greenness = g / (r + g + b + 1)
    soft = (greenness > 0.35) & (g > 25) & ((g > r + 10) | (g > b + 10))
    return (strict | soft) & (pixels[..., 3] > 0)


def shift_hue(pixel: Tuple[int, int, int], hue: float) -> Tuple[int, int, int]:
    """Replace a pixel's hue, keeping its saturation and lightness."""
    _, saturation, lightness = rgb_to_hsl(*pixel)
    return hsl_to_rgb(hue, saturation, lightness)


def recolor(buffer: PixelBuffer, region: RecolorRegion, theme: Optional[str]) -> int:
    """
    Recolor green pixels inside `region` to the theme's hue, in place.

    Pixels outside the region and transparent pixels are untouched; alpha
    is never changed.

    Returns:
        Number of pixels recolored.
    """
    region = region.clip(buffer.width, buffer.height)
    if region.is_empty:
        return 0

    target_hue = rgb_to_hsl(*theme_color(theme))[0]
    area = buffer.pixels[region.slices]

    count = 0
    for y, x in np.argwhere(recolor_mask(area)):
        r, g, b = (int(c) for c in area[y, x, :3])
        area[y, x, :3] = shift_hue((r, g, b), target_hue)
        count += 1

    logger.debug("Recolored %d pixels in %s for theme %r (hue %.1f)", count, region, theme, target_hue)
    return count
