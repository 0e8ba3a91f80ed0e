"""
Chroma key classification.

Every stage that needs background detection goes through the rule table
below. Each rule is a predicate over (r, g, b) plus the pass tier at which
it becomes active: pass 1 uses the tier 1 rules, pass 2 adds tier 2, and so
on, so later passes are strictly wider than earlier ones.

Predicates are written with `&` and comparison operators so the same rule
works on plain ints (single pixel) and on int32 numpy arrays (whole buffer).

The thresholds are a compatibility contract. Do not tune them.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple

import numpy as np

# Chroma key color (background to remove)
DEFAULT_KEY_COLOR = (255, 0, 255)  # Magenta
DEFAULT_TOLERANCE = 30  # Per-channel tolerance for exact key matching

DEFAULT_PASSES = 4
MAX_PASSES = 7


def parse_hex_color(hex_str: str) -> Tuple[int, int, int]:
    """Parse a hex color string (with or without #) into (R, G, B)."""
    hex_str = hex_str.strip().lstrip("#")
    if len(hex_str) != 6:
        raise ValueError(f"Expected 6-character hex color, got '{hex_str}'")
    try:
        return (
            int(hex_str[0:2], 16),
            int(hex_str[2:4], 16),
            int(hex_str[4:6], 16),
        )
    except ValueError:
        raise ValueError(f"Invalid hex color: '{hex_str}'") from None


@dataclass(frozen=True)
class KeyColorConfig:
    """Key color and matching options."""

    color: Tuple[int, int, int] = DEFAULT_KEY_COLOR
    tolerance: int = DEFAULT_TOLERANCE
    # Optional light-background fallback: pixels with mean brightness above
    # this value are also background. Disabled when None.
    brightness_threshold: Optional[int] = None

    @classmethod
    def from_hex(cls, hex_color: str, tolerance: int = DEFAULT_TOLERANCE, **kwargs) -> "KeyColorConfig":
        return cls(color=parse_hex_color(hex_color), tolerance=tolerance, **kwargs)

    @property
    def pad_color(self) -> Tuple[int, int, int, int]:
        """Opaque key color, used to pad resized sprites."""
        r, g, b = self.color
        return (r, g, b, 255)


DEFAULT_KEY = KeyColorConfig()


@dataclass(frozen=True)
class ChromaRule:
    """A named background predicate active from `tier` onward."""

    name: str
    tier: int
    test: Callable[..., object]
    requires_brightness: bool = False


def _exact(r, g, b, key):
    kr, kg, kb = key.color
    tol = key.tolerance
    return (abs(r - kr) <= tol) & (abs(g - kg) <= tol) & (abs(b - kb) <= tol)


def _light(r, g, b, key):
    return (r + g + b) > key.brightness_threshold * 3


CHROMA_RULES: Tuple[ChromaRule, ...] = (
    # Tier 1: primary pass
    ChromaRule("exact_tolerance", 1, _exact),
    ChromaRule("pure_key", 1, lambda r, g, b, k: (r >= 250) & (g <= 5) & (b >= 250)),
    ChromaRule("near_key", 1, lambda r, g, b, k: (r >= 240) & (g <= 20) & (b >= 240)),
    ChromaRule(
        "saturated_pink", 1,
        lambda r, g, b, k: (r >= 240) & (g <= 60) & (b >= 140) & ((r + b) > 380),
    ),
    ChromaRule(
        "dominance", 1,
        lambda r, g, b, k: (r >= 200) & (g <= 80) & (b >= 120) & ((r + b) > 320),
    ),
    ChromaRule(
        "magenta", 1,
        lambda r, g, b, k: ((r + b) > 350) & (g <= 80) & (r >= 180) & (b >= 100),
    ),
    ChromaRule(
        "ratio", 1,
        lambda r, g, b, k: ((r + b) > g * 4) & (r >= 200) & (b >= 120) & (g <= 70),
    ),
    ChromaRule(
        "broad", 1,
        lambda r, g, b, k: (r >= 180) & (b >= 100) & (g <= 90) & ((r + b) > 300) & ((r + b) > g * 3),
    ),
    ChromaRule("light_background", 1, _light, requires_brightness=True),
    # Tier 2: grid lines and scattered key pixels
    ChromaRule(
        "red_blue_heavy", 2,
        lambda r, g, b, k: ((r + b) > 350) & (g <= 80) & (r >= 180),
    ),
    # Tier 3: safety sweep
    ChromaRule(
        "broad_unratioed", 3,
        lambda r, g, b, k: (r >= 180) & (b >= 100) & (g <= 90) & ((r + b) > 300),
    ),
    ChromaRule("red_blue_high", 3, lambda r, g, b, k: (r >= 200) & (b >= 120) & (g <= 80)),
    ChromaRule(
        "red_blue_sum", 3,
        lambda r, g, b, k: ((r + b) > 320) & (g <= 80) & (r >= 150) & (b >= 100),
    ),
    ChromaRule(
        "red_blue_over_green", 3,
        lambda r, g, b, k: (r >= 200) & (b >= 100) & ((r + b) > g * 3.5),
    ),
    # Tier 4: remote pink tones
    ChromaRule(
        "remotely_pink", 4,
        lambda r, g, b, k: (r >= 150) & (b >= 100) & (g <= 100) & ((r + b) > g * 2.5),
    ),
    ChromaRule(
        "pinkish_tone", 4,
        lambda r, g, b, k: ((r + b) > 250) & (g <= 100) & (r >= 120) & (b >= 80),
    ),
    # Tier 5: muted pink
    ChromaRule(
        "very_pinkish", 5,
        lambda r, g, b, k: ((r + b) > 200) & (g <= 120) & ((r + b) > g * 2) & (r >= 100) & (b >= 70),
    ),
    ChromaRule(
        "magenta_like", 5,
        lambda r, g, b, k: (r >= 120) & (b >= 80) & (g <= 110) & ((r + b) > 200) & ((r + b) > g * 1.8),
    ),
    # Tier 6: red+blue dominance over green
    ChromaRule(
        "possibly_pink", 6,
        lambda r, g, b, k: ((r + b) > 180) & (g < (r + b) * 0.6) & (r >= 80) & (b >= 60) & ((r + b) > g * 1.5),
    ),
    ChromaRule(
        "pink_signature", 6,
        lambda r, g, b, k: (r >= 100) & (b >= 70) & (g <= 120) & ((r + b) > g * 1.4) & ((r + b) > 200),
    ),
    # Tier 7: verification sweep
    ChromaRule(
        "could_be_pink", 7,
        lambda r, g, b, k: (r >= 100) & (b >= 70) & (g <= 120) & ((r + b) > g * 1.4),
    ),
    ChromaRule(
        "faint_pink", 7,
        lambda r, g, b, k: ((r + b) > 180) & (g < (r + b) * 0.65) & (r >= 80) & (b >= 60),
    ),
)


def clamp_passes(passes: int) -> int:
    return max(1, min(MAX_PASSES, int(passes)))


def active_rules(config: KeyColorConfig = DEFAULT_KEY, depth: int = 1) -> Iterator[ChromaRule]:
    """Yield the rules active at a given pass depth, in table order."""
    depth = clamp_passes(depth)
    for rule in CHROMA_RULES:
        if rule.tier > depth:
            continue
        if rule.requires_brightness and config.brightness_threshold is None:
            continue
        yield rule


def classify(pixel, config: KeyColorConfig = DEFAULT_KEY, depth: int = 1) -> bool:
    """
    Return True if a pixel is background.

    Args:
        pixel: (r, g, b) or (r, g, b, a); alpha is ignored.
        config: Key color configuration
        depth: Pass depth; 1 evaluates only the primary rules

    Never raises for in-range channel values.
    """
    r, g, b = (int(c) for c in pixel[:3])
    return any(bool(rule.test(r, g, b, config)) for rule in active_rules(config, depth))


def matching_rule(pixel, config: KeyColorConfig = DEFAULT_KEY, depth: int = MAX_PASSES) -> Optional[str]:
    """Name of the first rule that classifies the pixel as background, if any."""
    r, g, b = (int(c) for c in pixel[:3])
    for rule in active_rules(config, depth):
        if rule.test(r, g, b, config):
            return rule.name
    return None


def classify_array(rgb: np.ndarray, config: KeyColorConfig = DEFAULT_KEY, depth: int = 1) -> np.ndarray:
    """
    Vectorised `classify` over an (..., 3+) array.

    Returns a boolean mask with the array's leading shape.
    """
    channels = rgb[..., :3].astype(np.int32)
    r, g, b = channels[..., 0], channels[..., 1], channels[..., 2]

    mask = np.zeros(r.shape, dtype=bool)
    for rule in active_rules(config, depth):
        mask |= rule.test(r, g, b, config)
    return mask
