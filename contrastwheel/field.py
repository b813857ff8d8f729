"""Contrast wheel field generation.

Polar position encodes the foreground color at a fixed lightness: the angle
from the center is the hue, the distance (as a fraction of the radius) is the
saturation. Every pixel also carries its WCAG contrast ratio against the
background so isolines can be traced from the scalar field.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

import numpy as np

from contrastwheel import defaults
from contrastwheel.colorspace import (
    contrast_ratio_from_luminance,
    hsl_to_rgb_channels,
    luminance_from_channels,
    relative_luminance,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WheelGeometry:
    """Center and radius of the wheel on a canvas."""

    width: int
    height: int
    cx: float
    cy: float
    radius: float

    @classmethod
    def for_canvas(cls, width: int, height: int, inset: float = defaults.WHEEL_INSET) -> "WheelGeometry":
        width = int(width)
        height = int(height)
        radius = min(width, height) / 2 - inset
        if radius <= 0:
            raise ValueError(f"Canvas {width}x{height} is too small for a wheel")
        return cls(width=width, height=height, cx=width / 2, cy=height / 2, radius=radius)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def pixel_distance(self, x: float, y: float) -> float:
        """Distance from the center to the center of pixel (x, y)."""
        return math.hypot(x + 0.5 - self.cx, y + 0.5 - self.cy)

    def distance_grid(self) -> np.ndarray:
        """Pixel-center distances for the whole canvas, shape (h, w)."""
        dx, dy = self.offset_grids()
        return np.hypot(dx, dy)

    def offset_grids(self) -> tuple[np.ndarray, np.ndarray]:
        """Pixel-center offsets (dx, dy) from the center, each shape (h, w)."""
        xs = np.arange(self.width, dtype=np.float64) + 0.5 - self.cx
        ys = np.arange(self.height, dtype=np.float64) + 0.5 - self.cy
        dx, dy = np.meshgrid(xs, ys)
        return dx, dy


@dataclass(frozen=True)
class WheelField:
    """One generated wheel.

    Attributes:
        rgba: Base image (h, w, 4) uint8, read-only. Pixels outside the wheel
            are fully transparent; everything inside is opaque.
        contrast: Contrast ratio per pixel (h, w) float64, NaN outside the wheel
        geometry: Wheel center and radius
        background: Background RGB the field was computed against
        lightness: HSL lightness of every foreground in the field
    """

    rgba: np.ndarray
    contrast: np.ndarray
    geometry: WheelGeometry
    background: tuple[int, int, int]
    lightness: float

    @property
    def inside(self) -> np.ndarray:
        """Boolean mask of pixels inside the wheel."""
        return np.isfinite(self.contrast)


def generate_field(
    background: tuple[int, int, int],
    lightness: float,
    width: int,
    height: int,
    min_ratio: float = defaults.MIN_VISIBLE_RATIO,
) -> WheelField:
    """Compute the wheel image and its contrast field.

    Pixels whose contrast against the background is below ``min_ratio`` fail
    every guideline level and are painted with the background color, so only
    viable foregrounds remain visible.

    Args:
        background: Background RGB (0-255)
        lightness: HSL lightness shared by all foregrounds, in [0, 1]
        width, height: Canvas size in pixels
        min_ratio: Contrast below which a pixel is masked to the background

    Returns:
        WheelField with a fresh read-only base image
    """
    t0 = time.perf_counter()
    geometry = WheelGeometry.for_canvas(width, height)

    dx, dy = geometry.offset_grids()
    dist = np.hypot(dx, dy)
    inside = dist <= geometry.radius

    sat = np.clip(dist / geometry.radius, 0.0, 1.0)
    hue = np.degrees(np.arctan2(dy, dx))
    hue = np.mod(hue + 360.0, 360.0)

    r, g, b = hsl_to_rgb_channels(hue, sat, float(lightness))

    bg_lum = relative_luminance(background)
    fg_lum = luminance_from_channels(r, g, b)
    contrast = contrast_ratio_from_luminance(bg_lum, fg_lum)
    contrast = np.where(inside, contrast, np.nan)

    # NaN compares False, so masked pixels only come from inside the wheel
    hidden = inside & (contrast < min_ratio)
    shown = inside & ~hidden

    rgba = np.zeros((geometry.height, geometry.width, 4), dtype=np.uint8)
    rgba[shown, 0] = r[shown]
    rgba[shown, 1] = g[shown]
    rgba[shown, 2] = b[shown]
    rgba[hidden, :3] = np.asarray(background, dtype=np.uint8)
    rgba[inside, 3] = 255
    rgba.setflags(write=False)

    logger.debug(
        "Generated %dx%d field (bg=%s, L=%.2f) in %.1f ms",
        geometry.width, geometry.height, tuple(background), lightness,
        (time.perf_counter() - t0) * 1000.0,
    )
    return WheelField(
        rgba=rgba,
        contrast=contrast,
        geometry=geometry,
        background=tuple(int(c) for c in background),
        lightness=float(lightness),
    )
