"""Texture management for Dear PyGui rendering."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

try:
    import dearpygui.dearpygui as dpg  # type: ignore
except ImportError:
    dpg = None


def rgba_to_texture_data(rgba: np.ndarray) -> Tuple[int, int, np.ndarray]:
    """Convert RGBA uint8 array to flat float RGBA data.

    Args:
        rgba: RGBA array (H, W, 4) uint8

    Returns:
        (width, height, rgba_flat) where rgba_flat is flattened float32 RGBA in [0, 1]
    """
    height, width = rgba.shape[:2]
    rgba_float = rgba.astype(np.float32) / 255.0
    return width, height, rgba_float.reshape(-1)


class TextureManager:
    """Owns the dynamic texture the wheel is drawn into."""

    def __init__(self, size: Tuple[int, int]):
        self.size = size
        self.texture_registry_id: Optional[int] = None
        self.wheel_texture_id: Optional[int] = None

    def create_registries(self) -> None:
        """Create the texture registry and a blank wheel texture."""
        if dpg is None:
            return
        width, height = self.size
        self.texture_registry_id = dpg.add_texture_registry()
        blank = np.zeros(width * height * 4, dtype=np.float32)
        self.wheel_texture_id = dpg.add_dynamic_texture(
            width, height, blank, parent=self.texture_registry_id
        )

    def upload_wheel(self, rgba: np.ndarray) -> None:
        """Replace the wheel texture contents."""
        if dpg is None or self.wheel_texture_id is None:
            return
        width, height, data = rgba_to_texture_data(rgba)
        if (width, height) != tuple(self.size):
            raise ValueError(f"Wheel image is {width}x{height}, texture is {self.size[0]}x{self.size[1]}")
        dpg.set_value(self.wheel_texture_id, data)
