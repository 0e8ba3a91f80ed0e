"""
RGB <-> HSL conversion.

Domains: r, g, b are ints in [0, 255]; h is degrees in [0, 360); s and l
are in [0, 1]. hsl_to_rgb rounds half up so output is reproducible.
"""

import math
from typing import Tuple


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def rgb_to_hsl(r: int, g: int, b: int) -> Tuple[float, float, float]:
    """Convert 8-bit RGB to (h, s, l) using the standard six-sector hue."""
    rf = r / 255
    gf = g / 255
    bf = b / 255

    high = max(rf, gf, bf)
    low = min(rf, gf, bf)
    lightness = (high + low) / 2

    if high == low:
        return (0.0, 0.0, lightness)  # achromatic

    d = high - low
    saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)

    if high == rf:
        hue = (gf - bf) / d + (6 if gf < bf else 0)
    elif high == gf:
        hue = (bf - rf) / d + 2
    else:
        hue = (rf - gf) / d + 4

    return ((hue * 60) % 360, saturation, lightness)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """Convert (h, s, l) back to 8-bit RGB."""
    if s == 0:
        v = round_half_up(l * 255)
        return (v, v, v)

    h = (h % 360) / 360
    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    return (
        round_half_up(_hue_to_channel(p, q, h + 1 / 3) * 255),
        round_half_up(_hue_to_channel(p, q, h) * 255),
        round_half_up(_hue_to_channel(p, q, h - 1 / 3) * 255),
    )
