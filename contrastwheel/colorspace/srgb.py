"""sRGB, HSL and WCAG contrast math.

Reference: https://www.w3.org/TR/WCAG21/#dfn-relative-luminance

The channel-level functions accept numpy arrays or plain floats, so the field
generator and the scalar helpers share one implementation and always agree
bit for bit.
"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional, Union

import numpy as np

from contrastwheel.errors import InvalidHexColorError

Array = Union[np.ndarray, float]

_HEX_RE = re.compile(r"^#([0-9a-f]{6})$", re.IGNORECASE)

# sRGB inverse transfer function
_LINEAR_THRESHOLD = 0.04045
_LINEAR_SLOPE = 12.92
_GAMMA_OFFSET = 0.055
_GAMMA = 2.4

# Rec. 709 luminance weights
_LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

# Added to both luminances before taking the ratio (ambient flare)
_FLARE = 0.05


class RGB(NamedTuple):
    """8-bit sRGB color."""

    r: int
    g: int
    b: int


# === Hex text ===

def hex_to_rgb(text: str) -> Optional[RGB]:
    """Parse ``#RRGGBB`` (case-insensitive). Returns None for anything else."""
    if not isinstance(text, str):
        return None
    m = _HEX_RE.match(text.strip())
    if m is None:
        return None
    n = int(m.group(1), 16)
    return RGB((n >> 16) & 255, (n >> 8) & 255, n & 255)


def parse_hex_color(text: str) -> RGB:
    """Strict variant of hex_to_rgb() that raises on invalid input."""
    rgb = hex_to_rgb(text)
    if rgb is None:
        raise InvalidHexColorError(f"Expected a #RRGGBB color, got {text!r}")
    return rgb


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    """Format as lowercase ``#rrggbb``."""
    r, g, b = rgb
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


# === Luminance and contrast ===

def srgb_to_linear(c8: Array) -> Array:
    """8-bit sRGB channel value(s) -> linear intensity in [0, 1]."""
    cs = np.asarray(c8, dtype=np.float64) / 255.0
    low = cs / _LINEAR_SLOPE
    high = np.power((cs + _GAMMA_OFFSET) / (1.0 + _GAMMA_OFFSET), _GAMMA)
    return np.where(cs <= _LINEAR_THRESHOLD, low, high)


def luminance_from_channels(r: Array, g: Array, b: Array) -> Array:
    """Relative luminance from 8-bit channel arrays."""
    wr, wg, wb = _LUMA_WEIGHTS
    return wr * srgb_to_linear(r) + wg * srgb_to_linear(g) + wb * srgb_to_linear(b)


def relative_luminance(rgb: tuple[int, int, int]) -> float:
    """Relative luminance of a single color, in [0, 1]."""
    return float(luminance_from_channels(*rgb))


def contrast_ratio_from_luminance(l1: Array, l2: Array) -> Array:
    """WCAG contrast ratio from two luminance values (order-independent)."""
    hi = np.maximum(l1, l2)
    lo = np.minimum(l1, l2)
    return (hi + _FLARE) / (lo + _FLARE)


def contrast_ratio(c1: tuple[int, int, int], c2: tuple[int, int, int]) -> float:
    """WCAG contrast ratio between two colors, in [1, 21]."""
    return float(contrast_ratio_from_luminance(relative_luminance(c1), relative_luminance(c2)))


def passes_thresholds(ratio: float, levels: tuple[float, ...] = (3.0, 4.5, 7.0)) -> dict[float, bool]:
    """Pass/fail for each guideline level."""
    return {level: ratio >= level for level in levels}


# === HSL ===

def _round_half_up(x: np.ndarray) -> np.ndarray:
    return np.floor(x + 0.5)


def hsl_to_rgb_channels(h: Array, s: Array, l: Array) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """HSL -> 8-bit sRGB channels (hue in degrees, s and l in [0, 1]).

    Standard hexagonal chroma model. Hue is wrapped into [0, 360) first.

    Returns:
        (r, g, b) int64 arrays broadcast from the inputs
    """
    h = np.asarray(h, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)
    l = np.asarray(l, dtype=np.float64)

    h = np.mod(np.mod(h, 360.0) + 360.0, 360.0)
    c = (1.0 - np.abs(2.0 * l - 1.0)) * s
    hp = h / 60.0
    x = c * (1.0 - np.abs(np.mod(hp, 2.0) - 1.0))
    zero = np.zeros_like(c * hp)
    c, x = np.broadcast_arrays(c, x)

    sector = np.clip(np.floor(hp), 0, 5).astype(np.int64)
    sector = np.broadcast_to(sector, c.shape)
    r1 = np.choose(sector, [c, x, zero, zero, x, c])
    g1 = np.choose(sector, [x, c, c, x, zero, zero])
    b1 = np.choose(sector, [zero, zero, x, c, c, x])

    m = l - c / 2.0
    channels = [
        np.clip(_round_half_up((v + m) * 255.0), 0, 255).astype(np.int64)
        for v in (r1, g1, b1)
    ]
    return channels[0], channels[1], channels[2]


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """HSL -> RGB for a single color."""
    r, g, b = hsl_to_rgb_channels(h, s, l)
    return RGB(int(r), int(g), int(b))
