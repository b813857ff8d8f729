"""Toolkit-neutral application state and helpers for the contrast wheel."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from contrastwheel import defaults
from contrastwheel.colorspace import RGB, contrast_ratio, parse_hex_color, passes_thresholds, rgb_to_hex
from contrastwheel.isolines import graded_isoline_strength, isoline_strength, normalize_levels
from contrastwheel.pipeline import RenderResult


@dataclass
class WheelSettings:
    """Fixed configuration for one wheel."""

    canvas_size: tuple[int, int] = defaults.DEFAULT_CANVAS_SIZE
    levels: tuple[float, ...] = defaults.DEFAULT_ISOLINE_LEVELS
    guideline_levels: tuple[float, ...] = defaults.GUIDELINE_THRESHOLDS
    min_visible_ratio: float = defaults.MIN_VISIBLE_RATIO
    graded_isolines: bool = defaults.DEFAULT_GRADED_ISOLINES

    def __post_init__(self) -> None:
        self.levels = normalize_levels(self.levels)

    def strength_fn(self):
        """Isoline darkening hook for the configured mode."""
        return graded_isoline_strength if self.graded_isolines else isoline_strength


@dataclass
class Selection:
    """Selected pixel and the color last resolved there."""

    x: int
    y: int
    rgb: RGB = RGB(255, 255, 255)


@dataclass(frozen=True)
class Readout:
    """Values pushed to the display collaborators for the selection."""

    background_hex: str
    foreground_hex: str
    ratio: float
    passes: dict[float, bool]

    @property
    def contrast_text(self) -> str:
        return f"{self.ratio:.2f} : 1"

    @property
    def previews(self) -> tuple[tuple[str, str], tuple[str, str]]:
        """(background, foreground) hex pairs for the sans and serif previews."""
        pair = (self.background_hex, self.foreground_hex)
        return pair, pair


def build_readout(
    background: RGB,
    foreground: RGB,
    levels: tuple[float, ...] = defaults.GUIDELINE_THRESHOLDS,
) -> Readout:
    """Compute the contrast readout for a foreground on the background."""
    ratio = contrast_ratio(background, foreground)
    return Readout(
        background_hex=rgb_to_hex(background),
        foreground_hex=rgb_to_hex(foreground),
        ratio=ratio,
        passes=passes_thresholds(ratio, levels),
    )


@dataclass
class AppState:
    """Central application state shared across UIs.

    Only ``applied_background`` and ``lightness`` feed field generation;
    ``pending_background`` is the unconfirmed text the user is typing.
    """

    settings: WheelSettings = field(default_factory=WheelSettings)
    applied_background: RGB = field(default_factory=lambda: parse_hex_color(defaults.DEFAULT_BACKGROUND_HEX))
    pending_background: str = defaults.DEFAULT_BACKGROUND_HEX
    lightness: float = defaults.DEFAULT_LIGHTNESS
    selection: Optional[Selection] = None  # Wheel center when not given

    # Dirty flag - set by mutators, cleared by the orchestrator after regenerating.
    field_dirty: bool = True

    # Cached outputs
    render: Optional[RenderResult] = None
    display: Optional[np.ndarray] = None
    readout: Optional[Readout] = None

    def __post_init__(self) -> None:
        if self.selection is None:
            w, h = self.settings.canvas_size
            self.selection = Selection(w // 2, h // 2)

    @property
    def applied_background_hex(self) -> str:
        return rgb_to_hex(self.applied_background)

    @property
    def lightness_percent(self) -> int:
        return int(np.floor(self.lightness * 100 + 0.5))

    @property
    def base_rgba(self) -> Optional[np.ndarray]:
        """Base image of the current render, or None before the first one."""
        return self.render.base if self.render is not None else None
