"""sRGB / HSL color math and WCAG contrast.

This module provides:
- #RRGGBB <-> RGB parsing and formatting
- sRGB -> linear decoding and relative luminance
- WCAG contrast ratio and guideline pass/fail
- HSL -> RGB (scalar and numpy-vectorized)

Example:
    from contrastwheel.colorspace import hex_to_rgb, contrast_ratio

    ratio = contrast_ratio(hex_to_rgb("#fafafa"), hex_to_rgb("#1a1a1a"))
"""

from .srgb import (
    RGB,
    hex_to_rgb,
    parse_hex_color,
    rgb_to_hex,
    srgb_to_linear,
    luminance_from_channels,
    relative_luminance,
    contrast_ratio_from_luminance,
    contrast_ratio,
    passes_thresholds,
    hsl_to_rgb_channels,
    hsl_to_rgb,
)

__all__ = [
    'RGB',
    # Hex text
    'hex_to_rgb',
    'parse_hex_color',
    'rgb_to_hex',
    # Luminance / contrast
    'srgb_to_linear',
    'luminance_from_channels',
    'relative_luminance',
    'contrast_ratio_from_luminance',
    'contrast_ratio',
    'passes_thresholds',
    # HSL
    'hsl_to_rgb_channels',
    'hsl_to_rgb',
]
