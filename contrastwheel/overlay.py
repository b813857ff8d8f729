"""Label and selection marker rasterization (Pillow).

All functions return new arrays; inputs are never modified.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable, Iterable

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from contrastwheel import defaults


@lru_cache(maxsize=4)
def _label_font(size: int = defaults.LABEL_FONT_SIZE):
    return ImageFont.load_default(size=size)


def format_level(level: float) -> str:
    """Threshold as label text: one decimal, no trailing ``.0`` (4.5 -> "4.5", 7 -> "7")."""
    rounded = math.floor(level * 10 + 0.5) / 10
    if rounded.is_integer():
        return str(int(rounded))
    return str(rounded)


def _composite(img: Image.Image, paint: Callable[[ImageDraw.ImageDraw], None]) -> Image.Image:
    """Paint on a transparent layer and alpha-composite it over img."""
    layer = Image.new("RGBA", img.size, (0, 0, 0, 0))
    paint(ImageDraw.Draw(layer))
    return Image.alpha_composite(img, layer)


def label_box(
    anchor: tuple[int, int],
    text_width: float,
) -> tuple[float, float, float, float]:
    """Label rectangle (left, top, right, bottom) for an anchor and text width.

    The box starts LABEL_OFFSET_X pixels right of the anchor and is
    vertically centered on it.
    """
    x, y = anchor
    box_w = math.ceil(text_width) + 2 * defaults.LABEL_PAD_X
    box_h = defaults.LABEL_BOX_HEIGHT
    left = x + defaults.LABEL_OFFSET_X
    top = y - box_h / 2
    return left, top, left + box_w, top + box_h


def draw_labels(
    rgba: np.ndarray,
    anchors: dict[float, tuple[int, int]],
    levels: Iterable[float],
) -> np.ndarray:
    """Draw one numeric label per anchored level.

    Args:
        rgba: Image (h, w, 4) uint8, typically the isoline overlay
        anchors: level -> (x, y) anchor
        levels: Levels to label, in drawing order

    Returns:
        New (h, w, 4) uint8 array with labels composited
    """
    font = _label_font()
    labels = []
    for level in levels:
        anchor = anchors.get(level)
        if anchor is None:
            continue
        text = format_level(level)
        width = font.getlength(text)
        labels.append((anchor, text, label_box(anchor, width)))

    img = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8))
    if not labels:
        return np.array(img)

    def paint_fill(draw: ImageDraw.ImageDraw) -> None:
        for _anchor, _text, (l, t, r, b) in labels:
            draw.rectangle([l, t, r - 1, b - 1], fill=defaults.LABEL_FILL_RGBA)

    def paint_outline(draw: ImageDraw.ImageDraw) -> None:
        for _anchor, _text, (l, t, r, b) in labels:
            draw.rectangle([l, t, r - 1, b - 1], outline=defaults.LABEL_OUTLINE_RGBA, width=1)

    def paint_text(draw: ImageDraw.ImageDraw) -> None:
        for (_x, y), text, (l, _t, _r, _b) in labels:
            bbox = draw.textbbox((0, 0), text, font=font)
            ty = y - (bbox[3] - bbox[1]) / 2 - bbox[1]
            draw.text((l + defaults.LABEL_PAD_X, ty), text, fill=defaults.LABEL_TEXT_RGBA, font=font)

    for paint in (paint_fill, paint_outline, paint_text):
        img = _composite(img, paint)
    return np.array(img)


def draw_selection_marker(
    rgba: np.ndarray,
    x: int,
    y: int,
    radius: float = defaults.MARKER_RADIUS,
    width: int = defaults.MARKER_LINE_WIDTH,
) -> np.ndarray:
    """Draw the selector ring centered on pixel (x, y).

    The stroke straddles ``radius`` the way a canvas stroke does: it spans
    ``radius - width/2`` to ``radius + width/2``.
    """
    img = Image.fromarray(np.ascontiguousarray(rgba, dtype=np.uint8))
    cx, cy = x + 0.5, y + 0.5
    outer = radius + width / 2
    draw = ImageDraw.Draw(img)
    draw.ellipse(
        [cx - outer, cy - outer, cx + outer, cy + outer],
        outline=defaults.MARKER_RGBA,
        width=width,
    )
    return np.array(img)
