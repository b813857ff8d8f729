"""High-level mutations on AppState reused across UIs."""

from __future__ import annotations

import logging
import math
from typing import Optional, Union

from contrastwheel.app.core import AppState, Readout, build_readout
from contrastwheel.colorspace import RGB, hex_to_rgb
from contrastwheel.field import WheelGeometry
from contrastwheel.sampling import ClampResult, clamp_to_wheel, sample_base_pixel

logger = logging.getLogger(__name__)


def set_pending_background(state: AppState, text: str) -> str:
    """Record the unconfirmed background text. Never triggers recomputation.

    Returns:
        The lowercase echo shown next to the picker
    """
    state.pending_background = str(text).strip().lower()
    return state.pending_background


def apply_background(state: AppState, color: Union[str, tuple[int, int, int]]) -> bool:
    """Make a color the applied background and mark the field dirty.

    Invalid hex text is rejected and the previous applied background stays in
    effect.

    Returns:
        True if the color was applied
    """
    if isinstance(color, str):
        rgb = hex_to_rgb(color)
        if rgb is None:
            logger.warning("Rejected background %r (expected #RRGGBB); keeping %s",
                           color, state.applied_background_hex)
            return False
    else:
        r, g, b = (int(c) for c in color)
        if not all(0 <= c <= 255 for c in (r, g, b)):
            logger.warning("Rejected background %r (channels must be 0-255)", color)
            return False
        rgb = RGB(r, g, b)

    state.applied_background = rgb
    state.field_dirty = True
    logger.info("Applied background %s", state.applied_background_hex)
    return True


def confirm_background(state: AppState) -> bool:
    """Apply the pending background text."""
    return apply_background(state, state.pending_background)


def set_lightness(state: AppState, lightness: float) -> bool:
    """Update lightness (clamped to [0, 1]) and mark the field dirty.

    Returns:
        False for non-numeric or non-finite values, which are ignored
    """
    try:
        lightness = float(lightness)
    except (TypeError, ValueError):
        logger.warning("Ignoring lightness %r", lightness)
        return False
    if not math.isfinite(lightness):
        logger.warning("Ignoring lightness %r", lightness)
        return False
    state.lightness = min(1.0, max(0.0, lightness))
    state.field_dirty = True
    logger.info("Lightness %d%%", state.lightness_percent)
    return True


def set_lightness_percent(state: AppState, percent: float) -> bool:
    """Slider entry point: whole percent -> fraction."""
    try:
        return set_lightness(state, float(percent) / 100.0)
    except (TypeError, ValueError):
        logger.warning("Ignoring lightness percent %r", percent)
        return False


def wheel_geometry(state: AppState) -> WheelGeometry:
    """Geometry of the current render, or of the configured canvas before one exists."""
    if state.render is not None:
        return state.render.geometry
    w, h = state.settings.canvas_size
    return WheelGeometry.for_canvas(w, h)


def set_selection(state: AppState, x: int, y: int) -> ClampResult:
    """Move the selection, clamped onto the wheel."""
    clamped = clamp_to_wheel(x, y, wheel_geometry(state))
    state.selection.x = clamped.x
    state.selection.y = clamped.y
    return clamped


def resolve_selection(state: AppState) -> Optional[Readout]:
    """Re-clamp the selection and re-sample its color from the base image.

    A transparent sample leaves the previous color and readout untouched.

    Returns:
        The new readout, or None if nothing was updated
    """
    sel = state.selection
    set_selection(state, sel.x, sel.y)
    sample = sample_base_pixel(state.base_rgba, sel.x, sel.y)
    if sample.a == 0:
        logger.debug("No color at (%d, %d); keeping previous readout", sel.x, sel.y)
        return None

    sel.rgb = RGB(*sample.rgb)
    state.readout = build_readout(state.applied_background, sel.rgb, state.settings.guideline_levels)
    return state.readout
