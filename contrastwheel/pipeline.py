"""Pure render pipeline orchestration - no UI dependencies.

Buffers, in production order:

    base      field.rgba            wheel only; the sampling ground truth
    overlay   isolines.rgba         base + darkened isolines
    labelled  RenderResult.labelled overlay + threshold labels
    display   compose_display()     labelled + selection marker

Each buffer is derived from the one above it and never written back.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np

from contrastwheel import defaults
from contrastwheel.field import WheelField, WheelGeometry, generate_field
from contrastwheel.isolines import IsolineOverlay, extract_isolines
from contrastwheel.overlay import draw_labels, draw_selection_marker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """One full regeneration of the wheel."""

    field: WheelField
    isolines: IsolineOverlay
    labelled: np.ndarray

    @property
    def base(self) -> np.ndarray:
        return self.field.rgba

    @property
    def geometry(self) -> WheelGeometry:
        return self.field.geometry


def perform_render(
    background: tuple[int, int, int],
    lightness: float,
    size: tuple[int, int] = defaults.DEFAULT_CANVAS_SIZE,
    levels: Iterable[float] = defaults.DEFAULT_ISOLINE_LEVELS,
    min_ratio: float = defaults.MIN_VISIBLE_RATIO,
    strength: Optional[Callable[[float], float]] = None,
) -> RenderResult:
    """Generate the field, trace isolines and draw their labels.

    Args:
        background: Applied background RGB
        lightness: HSL lightness in [0, 1]
        size: (width, height) of the canvas
        levels: Isoline thresholds (normalized inside)
        min_ratio: Contrast below which pixels show the background
        strength: Optional level -> darkening strength hook

    Returns:
        RenderResult holding base, overlay and labelled buffers
    """
    t0 = time.perf_counter()
    width, height = size
    wheel = generate_field(background, lightness, width, height, min_ratio=min_ratio)
    isolines = extract_isolines(wheel, levels, strength=strength)
    labelled = draw_labels(isolines.rgba, isolines.anchors, isolines.levels)
    logger.debug("perform_render %dx%d took %.1f ms", width, height, (time.perf_counter() - t0) * 1000.0)
    return RenderResult(field=wheel, isolines=isolines, labelled=labelled)


def compose_display(result: RenderResult, x: int, y: int) -> np.ndarray:
    """Labelled image with the selection marker drawn last."""
    return draw_selection_marker(result.labelled, x, y)
