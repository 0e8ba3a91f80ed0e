"""
Nearest-neighbor resizing to canonical sprite dimensions.

No interpolation: every output pixel is a copy of exactly one source pixel,
so single-pixel edges in pixel art survive scaling.
"""

from enum import Enum
from typing import Tuple

import numpy as np

from spritekit.core.buffer import PixelBuffer
from spritekit.core.chroma import DEFAULT_KEY


class FitMode(Enum):
    """How the source is fitted into the target box."""

    CONTAIN = "contain"  # Preserve aspect ratio, pad the remainder
    STRETCH = "stretch"  # Fill the target exactly, ignoring aspect ratio


def contain_box(
    source_w: int, source_h: int, target_w: int, target_h: int
) -> Tuple[int, int, int, int]:
    """
    Placement of a contain-fitted image inside the target.

    Scaled sizes are floored (never below 1 pixel). The leftover space is
    split evenly; an odd pixel goes to the right/bottom.

    Returns:
        (offset_x, offset_y, width, height)
    """
    # Integer comparison of target_w/source_w against target_h/source_h
    if target_w * source_h <= target_h * source_w:
        width = target_w
        height = max(1, min(target_h, source_h * target_w // source_w))
    else:
        height = target_h
        width = max(1, min(target_w, source_w * target_h // source_h))

    return ((target_w - width) // 2, (target_h - height) // 2, width, height)


def _sample_indices(source_len: int, target_len: int) -> np.ndarray:
    """Source index for each target index, sampling at pixel centers."""
    return ((2 * np.arange(target_len) + 1) * source_len) // (2 * target_len)


def scale_nearest(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Scale an (H, W, C) array to (height, width, C) by nearest neighbor."""
    ys = _sample_indices(pixels.shape[0], height)
    xs = _sample_indices(pixels.shape[1], width)
    return pixels[ys[:, None], xs[None, :]]


def resize(
    buffer: PixelBuffer,
    target_w: int,
    target_h: int,
    fit_mode: FitMode = FitMode.CONTAIN,
    pad_color: Tuple[int, int, int, int] = DEFAULT_KEY.pad_color,
) -> PixelBuffer:
    """
    Resize a buffer to exactly target_w x target_h.

    Args:
        buffer: Source buffer (not modified)
        target_w: Output width in pixels
        target_h: Output height in pixels
        fit_mode: CONTAIN pads with pad_color, STRETCH fills the target
        pad_color: RGBA fill for the border left by CONTAIN

    Returns:
        A new PixelBuffer of the target size.
    """
    if target_w < 1 or target_h < 1:
        raise ValueError(f"Target size must be at least 1x1, got {target_w}x{target_h}")
    fit_mode = FitMode(fit_mode)

    if fit_mode == FitMode.STRETCH:
        return PixelBuffer(scale_nearest(buffer.pixels, target_w, target_h))

    offset_x, offset_y, width, height = contain_box(buffer.width, buffer.height, target_w, target_h)
    canvas = PixelBuffer.new(target_w, target_h, pad_color)
    canvas.pixels[offset_y:offset_y + height, offset_x:offset_x + width] = scale_nearest(
        buffer.pixels, width, height
    )
    return canvas
