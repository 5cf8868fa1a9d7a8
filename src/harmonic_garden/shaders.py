"""
Procedural backdrop generators.

The ambient field is computed for the whole canvas at once with numpy;
mood shaders are evaluated per cell and may override any of the
ambient glyph, foreground, or background.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from harmonic_garden.base import clamp
from harmonic_garden.catalog import ShaderKind, Theme
from harmonic_garden.colorgrade import blend_hex, gradient_rgb, rgb_array_to_hex

# (glyph, foreground, background); ``None`` leaves the ambient value in place.
ShaderResult = Tuple[Optional[str], Optional[str], Optional[str]]
Shader = Callable[[float, float, float, int, int, Theme], ShaderResult]

NO_OVERRIDE: ShaderResult = (None, None, None)


def ambient_intensity(width: int, height: int, time: float) -> np.ndarray:
    """
    Two overlapping sine/cosine waves normalized to [0, 1].

    Returns:
        (height, width) float64 array.
    """
    y, x = np.mgrid[0:height, 0:width].astype(np.float64)
    wav = np.sin(x * 0.11 + time * 0.35) + np.cos(y * 0.09 - time * 0.21 + x * 0.03)
    return (wav + 2.0) / 4.0


def ambient_layer(
    theme: Theme,
    width: int,
    height: int,
    time: float,
) -> Tuple[List[List[str]], List[List[str]]]:
    """
    Glyph and foreground grids for the ambient backdrop.

    Glyphs are bucketed from the theme's wisp set by intensity; colors
    sample the low-to-mid stretch of the palette.
    """
    intensity = ambient_intensity(width, height, time)
    n = len(theme.wisp_glyphs)
    buckets = (intensity * n).astype(np.int64) % n
    glyphs = [[theme.wisp_glyphs[i] for i in row] for row in buckets.tolist()]
    fg = rgb_array_to_hex(gradient_rgb(theme.palette, 0.15 + intensity * 0.35))
    return glyphs, fg


def tie_dye_shader(x: float, y: float, t: float, width: int, height: int, theme: Theme) -> ShaderResult:
    """Radial swirl: polar angle, radius and time folded into hue and background wash."""
    if width == 0 or height == 0:
        return NO_OVERRIDE
    cx = (width - 1) / 2
    cy = (height - 1) / 2
    dx = (x - cx) / width
    dy = (y - cy) / height
    radius = math.sqrt(dx * dx + dy * dy)
    angle = math.atan2(dy, dx)

    swirl = radius * 18 + angle * 6 - t * 1.4
    wave = (math.sin(swirl) + 1) / 2
    petals = math.sin(angle * 8 + t * 0.9)
    mix = (wave * 0.7 + radius * 0.5 + petals * 0.2) % 1.0

    fg = theme.color_at(mix)
    bg = blend_hex(fg, theme.background, 1 - clamp(wave * 0.6 + 0.2, 0, 1))
    n = len(theme.wisp_glyphs)
    glyph = theme.wisp_glyphs[int(math.fmod(abs(petals) * n, n))]
    return glyph, fg, bg


def spore_shader(x: float, y: float, t: float, width: int, height: int, theme: Theme) -> ShaderResult:
    """Glowing spores drifting on a sine lattice; dim cells keep the ambient wisps."""
    spore = abs(math.sin(x * 0.3 + t * 3.0) * math.cos(y * 0.2 + t * 2.5))
    if spore <= 0.4:
        return NO_OVERRIDE
    if spore < 0.6:
        glyph = "."
    elif spore < 0.8:
        glyph = "o"
    else:
        glyph = "O"
    return glyph, theme.color_at(0.45 + spore * 0.5), None


SHADERS: Dict[ShaderKind, Shader] = {
    ShaderKind.TIE_DYE: tie_dye_shader,
    ShaderKind.SPORE: spore_shader,
}


def shade(theme: Theme, x: float, y: float, t: float, width: int, height: int) -> ShaderResult:
    if theme.shader is None:
        return NO_OVERRIDE
    return SHADERS[theme.shader](x, y, t, width, height, theme)
