"""Pointer-to-pixel mapping, circular clamping and base-image sampling."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

import numpy as np

from contrastwheel.field import WheelGeometry


@dataclass(frozen=True)
class PointerEvent:
    """Device pointer position.

    Mouse/pen events carry ``client_x``/``client_y``; touch events may only
    carry ``touches``, a sequence of (client_x, client_y) contact points.
    """

    client_x: Optional[float] = None
    client_y: Optional[float] = None
    touches: tuple[tuple[float, float], ...] = field(default_factory=tuple)
    pointer_id: int = 0

    def client_position(self) -> Optional[tuple[float, float]]:
        x, y = self.client_x, self.client_y
        if self.touches:
            tx, ty = self.touches[0]
            x = tx if x is None else x
            y = ty if y is None else y
        if x is None or y is None:
            return None
        return float(x), float(y)


@dataclass(frozen=True)
class CanvasRect:
    """On-screen placement of the canvas, in device coordinates."""

    left: float
    top: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        return (self.left <= x <= self.left + self.width and
                self.top <= y <= self.top + self.height)


class ClampResult(NamedTuple):
    x: int
    y: int
    inside: bool


class PixelSample(NamedTuple):
    r: int
    g: int
    b: int
    a: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b


_EMPTY_SAMPLE = PixelSample(0, 0, 0, 0)


def canvas_point_from_event(
    event: PointerEvent,
    rect: CanvasRect,
    buffer_size: tuple[int, int],
) -> Optional[tuple[int, int]]:
    """Convert a device pointer position to buffer pixel coordinates.

    Scales by buffer size / displayed size, so any display scaling is undone,
    then floors to whole pixels. The result may lie outside the buffer.

    Returns:
        (x, y), or None if the event has no position or the canvas has no area
    """
    pos = event.client_position()
    if pos is None or rect.width <= 0 or rect.height <= 0:
        return None
    buffer_w, buffer_h = buffer_size
    scale_x = buffer_w / rect.width
    scale_y = buffer_h / rect.height
    client_x, client_y = pos
    return (
        math.floor((client_x - rect.left) * scale_x),
        math.floor((client_y - rect.top) * scale_y),
    )


def clamp_to_wheel(x: int, y: int, geometry: WheelGeometry) -> ClampResult:
    """Keep a pixel inside the wheel.

    Points whose pixel center is within the radius are returned unchanged.
    Others are projected radially onto the rim and floored.
    """
    dx = x + 0.5 - geometry.cx
    dy = y + 0.5 - geometry.cy
    dist = math.hypot(dx, dy)
    if dist <= geometry.radius:
        return ClampResult(int(x), int(y), True)

    k = geometry.radius / dist
    return ClampResult(
        math.floor(geometry.cx + dx * k),
        math.floor(geometry.cy + dy * k),
        False,
    )


def sample_base_pixel(rgba: Optional[np.ndarray], x: int, y: int) -> PixelSample:
    """Read one RGBA pixel from the base image.

    Out-of-bounds coordinates (or no image yet) give a transparent sample;
    callers treat alpha 0 as "no color here".
    """
    if rgba is None:
        return _EMPTY_SAMPLE
    h, w = rgba.shape[:2]
    if x < 0 or y < 0 or x >= w or y >= h:
        return _EMPTY_SAMPLE
    r, g, b, a = (int(v) for v in rgba[y, x])
    return PixelSample(r, g, b, a)
