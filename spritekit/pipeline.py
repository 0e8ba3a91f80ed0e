"""
Sprite pipeline - sequences decoding, resizing, background removal and
theme recoloring for single assets and batches.

Full processing:
1. Decode source bytes
2. Resize to canonical size (contain, padded with the key color)
3. Remove the key color background
4. Recolor the theme region from a pristine copy and merge it back
5. Encode as PNG

Cleanup only runs steps 1, 3 and 5 on an already-processed asset.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from spritekit.catalog import get_asset_spec
from spritekit.core.buffer import PixelBuffer, decode, encode
from spritekit.core.chroma import DEFAULT_KEY, DEFAULT_PASSES, KeyColorConfig
from spritekit.core.errors import DimensionError, SpriteKitError
from spritekit.core.recolor import RecolorRegion, recolor
from spritekit.core.removal import RemovalStats, remove_background
from spritekit.core.resize import FitMode, resize

logger = logging.getLogger(__name__)


@dataclass
class ProcessResult:
    """Encoded output of a pipeline run."""

    data: bytes
    width: int
    height: int
    removal: Optional[RemovalStats] = None
    recolored: int = 0


def merge_region(target: PixelBuffer, source: PixelBuffer, region: RecolorRegion) -> None:
    """Copy the RGB channels of `region` from source into target, keeping target alpha."""
    region = region.clip(target.width, target.height)
    if region.is_empty:
        return
    rows, cols = region.slices
    target.pixels[rows, cols, :3] = source.pixels[rows, cols, :3]


def process_buffer(
    buffer: PixelBuffer,
    width: int,
    height: int,
    key: KeyColorConfig = DEFAULT_KEY,
    passes: int = DEFAULT_PASSES,
    theme: Optional[str] = None,
    region: Optional[RecolorRegion] = None,
    fit_mode: FitMode = FitMode.CONTAIN,
) -> tuple[PixelBuffer, RemovalStats, int]:
    """
    Run resize -> remove -> recolor on a decoded buffer.

    Returns:
        Tuple of (final buffer, removal stats, recolored pixel count)
    """
    resized = resize(buffer, width, height, fit_mode, pad_color=key.pad_color)
    if resized.size != (width, height):
        raise DimensionError(
            f"Resize produced {resized.width}x{resized.height}, expected {width}x{height}",
            expected=(width, height),
            actual=resized.size,
        )

    pristine = resized.copy() if theme and region else None
    stats = remove_background(resized, key, passes)

    recolored = 0
    if pristine is not None:
        recolored = recolor(pristine, region, theme)
        merge_region(resized, pristine, region)

    return resized, stats, recolored


def process_asset(
    source: bytes,
    width: int,
    height: int,
    key: KeyColorConfig = DEFAULT_KEY,
    passes: int = DEFAULT_PASSES,
    theme: Optional[str] = None,
    region: Optional[RecolorRegion] = None,
    fit_mode: FitMode = FitMode.CONTAIN,
) -> ProcessResult:
    """
    Full processing of raw generated bytes into a canonical sprite.

    Args:
        source: Encoded source image
        width: Canonical width
        height: Canonical height
        key: Key color configuration
        passes: Background removal passes
        theme: Optional theme keyword for recoloring
        region: Region to recolor (ignored without a theme)
        fit_mode: How the source is fitted into the canonical size

    Raises:
        DecodeError, DimensionError, EncodeError
    """
    buffer = decode(source)
    final, stats, recolored = process_buffer(
        buffer, width, height, key=key, passes=passes, theme=theme, region=region, fit_mode=fit_mode
    )

    logger.info(
        "Processed %dx%d -> %dx%d: %d background pixels transparent (%.0f%%)%s",
        buffer.width, buffer.height, width, height, stats.changed, stats.ratio * 100,
        f", {recolored} recolored for {theme!r}" if recolored else "",
    )
    return ProcessResult(encode(final), width, height, removal=stats, recolored=recolored)


def process_catalog_asset(
    asset_key: str,
    source: bytes,
    theme: Optional[str] = None,
    key: KeyColorConfig = DEFAULT_KEY,
    passes: int = DEFAULT_PASSES,
    fit_mode: FitMode = FitMode.CONTAIN,
) -> ProcessResult:
    """Process a catalog asset at its canonical size and recolor region."""
    spec = get_asset_spec(asset_key)
    return process_asset(
        source,
        spec.width,
        spec.height,
        key=key,
        passes=passes,
        theme=theme,
        region=spec.recolor_region,
        fit_mode=fit_mode,
    )


def clean_asset(
    source: bytes,
    key: KeyColorConfig = DEFAULT_KEY,
    passes: int = DEFAULT_PASSES,
) -> ProcessResult:
    """Second-pass cleanup of an already-processed asset (no resizing)."""
    buffer = decode(source)
    stats = remove_background(buffer, key, passes)
    if stats.changed:
        logger.info("Cleaned %d key pixels from %dx%d image", stats.changed, buffer.width, buffer.height)
    return ProcessResult(encode(buffer), buffer.width, buffer.height, removal=stats)


def recolor_asset(source: bytes, region: RecolorRegion, theme: Optional[str]) -> ProcessResult:
    """Recolor a region of an existing texture (e.g. shipped tiles) without removal."""
    buffer = decode(source)
    recolored = recolor(buffer, region, theme)
    logger.info("Recolored %d pixels for theme %r", recolored, theme)
    return ProcessResult(encode(buffer), buffer.width, buffer.height, recolored=recolored)


# =============================================================================
# Batch processing
# =============================================================================


@dataclass
class AssetJob:
    """One catalog asset to process in a batch."""

    asset_key: str
    source: bytes
    theme: Optional[str] = None


@dataclass
class BatchReport:
    """Outcome of a batch run; failures do not stop the batch."""

    results: Dict[str, ProcessResult] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.failures)

    @property
    def succeeded(self) -> List[str]:
        return list(self.results.keys())


async def process_batch(
    jobs: List[AssetJob],
    max_workers: int = 4,
    key: KeyColorConfig = DEFAULT_KEY,
    passes: int = DEFAULT_PASSES,
) -> BatchReport:
    """
    Process many catalog assets in parallel worker threads.

    Each job decodes into its own buffer, so nothing is shared between
    workers. A job that fails is recorded in `failures` and the rest of
    the batch continues.
    """
    loop = asyncio.get_running_loop()
    report = BatchReport()

    def run(job: AssetJob) -> ProcessResult:
        return process_catalog_asset(job.asset_key, job.source, theme=job.theme, key=key, passes=passes)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        futures = [loop.run_in_executor(executor, run, job) for job in jobs]
        outcomes = await asyncio.gather(*futures, return_exceptions=True)

    for job, outcome in zip(jobs, outcomes):
        if isinstance(outcome, (SpriteKitError, ValueError)):
            logger.warning("Failed to process %s: %s", job.asset_key, outcome)
            report.failures[job.asset_key] = str(outcome)
        elif isinstance(outcome, Exception):
            logger.error("Unexpected error processing %s", job.asset_key, exc_info=outcome)
            report.failures[job.asset_key] = f"{type(outcome).__name__}: {outcome}"
        elif isinstance(outcome, BaseException):
            # KeyboardInterrupt, CancelledError and friends stop the batch
            raise outcome
        else:
            report.results[job.asset_key] = outcome

    logger.info("Batch complete: %d succeeded, %d failed", len(report.results), len(report.failures))
    return report
