"""
Background removal - replace chroma key pixels with transparency.

Runs the chroma classifier over a buffer in successive passes. Each pass
only looks at pixels that are still visible, and each pass is wider than
the one before. Alpha only ever goes from visible to 0.
"""

import logging
from dataclasses import dataclass

import numpy as np

from spritekit.core.buffer import PixelBuffer
from spritekit.core.chroma import (
    DEFAULT_KEY,
    DEFAULT_PASSES,
    KeyColorConfig,
    clamp_passes,
    classify_array,
)

logger = logging.getLogger(__name__)


@dataclass
class RemovalStats:
    """Result of a background removal run."""

    changed: int
    total: int
    passes: int

    @property
    def ratio(self) -> float:
        """Fraction of pixels made transparent by this run."""
        return self.changed / self.total if self.total else 0.0


def remove_background(
    buffer: PixelBuffer,
    config: KeyColorConfig = DEFAULT_KEY,
    passes: int = DEFAULT_PASSES,
) -> RemovalStats:
    """
    Make background pixels transparent, in place.

    Args:
        buffer: Buffer to modify (alpha channel only)
        config: Key color configuration
        passes: Number of widening passes (clamped to 1..MAX_PASSES)

    Returns:
        RemovalStats; calling again on the same buffer reports changed == 0.
    """
    passes = clamp_passes(passes)
    alpha = buffer.alpha
    changed = 0

    for depth in range(1, passes + 1):
        visible = alpha > 0
        if not visible.any():
            break

        hits = visible & classify_array(buffer.pixels, config, depth)
        count = int(np.count_nonzero(hits))
        if count:
            alpha[hits] = 0
            changed += count
        logger.debug("Removal pass %d: %d pixels cleared", depth, count)

    total = buffer.width * buffer.height
    logger.debug("Removed %d/%d background pixels in %d passes", changed, total, passes)
    return RemovalStats(changed=changed, total=total, passes=passes)
