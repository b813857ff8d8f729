"""Isoline extraction on the contrast field.

A pixel lies on the isoline for threshold T when it sits immediately before a
crossing of T, scanning either right or down. Boundary pixels are darkened on
a copy of the base image, and one label anchor per threshold is picked inside
an annulus so labels stay off the rim and off the center.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

import numpy as np

from contrastwheel import defaults
from contrastwheel.errors import InvalidThresholdError
from contrastwheel.field import WheelField, WheelGeometry

logger = logging.getLogger(__name__)


@dataclass
class IsolineOverlay:
    """Darkened copy of a field plus label anchors.

    Attributes:
        rgba: Base image with boundary pixels darkened (h, w, 4) uint8
        levels: Sorted threshold levels that were traced
        anchors: level -> (x, y) label anchor; levels without a qualifying
            boundary pixel have no entry
        masks: level -> boolean boundary mask (h, w)
    """

    rgba: np.ndarray
    levels: tuple[float, ...]
    anchors: dict[float, tuple[int, int]] = field(default_factory=dict)
    masks: dict[float, np.ndarray] = field(default_factory=dict)


def normalize_levels(levels: Iterable[float]) -> tuple[float, ...]:
    """Drop non-finite, duplicate and <= 1 levels, then sort ascending."""
    kept = set()
    for value in levels:
        try:
            level = float(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric isoline level %r", value)
            continue
        if not math.isfinite(level) or level <= 1.0:
            logger.warning("Ignoring isoline level %r (must be finite and > 1)", value)
            continue
        kept.add(level)
    return tuple(sorted(kept))


def parse_levels(text: str) -> tuple[float, ...]:
    """Strictly parse comma-separated levels such as ``"3, 4.5, 7"``.

    Raises:
        InvalidThresholdError: on empty input or any token that is not a
            finite number greater than 1
    """
    tokens = [t.strip() for t in text.split(",") if t.strip()]
    if not tokens:
        raise InvalidThresholdError("No isoline levels given")
    levels = []
    for token in tokens:
        try:
            level = float(token)
        except ValueError:
            raise InvalidThresholdError(f"Isoline level {token!r} is not a number") from None
        if not math.isfinite(level) or level <= 1.0:
            raise InvalidThresholdError(f"Isoline level {token!r} must be finite and greater than 1")
        levels.append(level)
    return normalize_levels(levels)


def isoline_strength(level: float) -> float:
    """Darkening strength for a threshold (1.0 = black).

    Every level is drawn at full strength. Pass graded_isoline_strength() to
    extract_isolines() for level-dependent shading.
    """
    return 1.0


def graded_isoline_strength(level: float) -> float:
    """Strength growing linearly with the level: faint for 2:1, strong for 12:1."""
    lo, hi = defaults.ISOLINE_STRENGTH_MIN_LEVEL, defaults.ISOLINE_STRENGTH_MAX_LEVEL
    s_lo, s_hi = defaults.ISOLINE_GRADED_STRENGTH
    t = min(hi, max(lo, level))
    return s_lo + (t - lo) * (s_hi - s_lo) / (hi - lo)


def boundary_masks(contrast: np.ndarray, levels: Iterable[float]) -> dict[float, np.ndarray]:
    """Find pixels that sit just before a threshold crossing.

    Only interior pixels (1-pixel border excluded) whose own, right and lower
    values are all defined take part.

    Args:
        contrast: Contrast field (h, w) with NaN for undefined pixels
        levels: Thresholds to trace (assumed normalized)

    Returns:
        level -> boolean mask of shape (h, w)
    """
    h, w = contrast.shape
    masks: dict[float, np.ndarray] = {}
    if h < 3 or w < 3:
        for level in levels:
            masks[level] = np.zeros((h, w), dtype=bool)
        return masks

    a = contrast[1:h - 1, 1:w - 1]
    b = contrast[1:h - 1, 2:w]
    c = contrast[2:h, 1:w - 1]
    defined = np.isfinite(a) & np.isfinite(b) & np.isfinite(c)

    for level in levels:
        above_a = a >= level
        crossing = (above_a != (b >= level)) | (above_a != (c >= level))
        mask = np.zeros((h, w), dtype=bool)
        mask[1:h - 1, 1:w - 1] = crossing & defined
        masks[level] = mask
    return masks


def darken(rgba: np.ndarray, mask: np.ndarray, strength: float) -> None:
    """Scale RGB of masked pixels toward black in place. Alpha is untouched."""
    if strength <= 0.0 or not mask.any():
        return
    scaled = rgba[mask, :3].astype(np.float64) * (1.0 - strength)
    rgba[mask, :3] = np.clip(np.floor(scaled + 0.5), 0, 255).astype(np.uint8)


def select_label_anchors(
    masks: dict[float, np.ndarray],
    geometry: WheelGeometry,
    inner: float = defaults.LABEL_INNER_FRACTION,
    outer: float = defaults.LABEL_OUTER_FRACTION,
) -> dict[float, tuple[int, int]]:
    """Pick the first boundary pixel (row-major) per level inside the annulus.

    The annulus is open: distance must be strictly between ``inner * R`` and
    ``outer * R``.
    """
    dist = geometry.distance_grid()
    annulus = (dist > geometry.radius * inner) & (dist < geometry.radius * outer)

    anchors: dict[float, tuple[int, int]] = {}
    for level, mask in masks.items():
        candidates = np.argwhere(mask & annulus)
        if len(candidates) == 0:
            continue
        y, x = candidates[0]
        anchors[level] = (int(x), int(y))
    return anchors


def extract_isolines(
    wheel: WheelField,
    levels: Iterable[float] = defaults.DEFAULT_ISOLINE_LEVELS,
    strength: Optional[Callable[[float], float]] = None,
) -> IsolineOverlay:
    """Trace isolines on a field and darken them on a copy of its base image.

    Args:
        wheel: Generated field (its base image is not modified)
        levels: Thresholds; normalized before use
        strength: level -> darkening strength, defaults to isoline_strength()

    Returns:
        IsolineOverlay with the darkened image and label anchors
    """
    strength = strength or isoline_strength
    sorted_levels = normalize_levels(levels)

    masks = boundary_masks(wheel.contrast, sorted_levels)
    rgba = np.array(wheel.rgba, copy=True)
    for level in sorted_levels:
        darken(rgba, masks[level], strength(level))

    anchors = select_label_anchors(masks, wheel.geometry)
    logger.debug(
        "Isolines %s: %s boundary pixels, anchors %s",
        sorted_levels,
        [int(masks[level].sum()) for level in sorted_levels],
        anchors,
    )
    return IsolineOverlay(rgba=rgba, levels=sorted_levels, anchors=anchors, masks=masks)
