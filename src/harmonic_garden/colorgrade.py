"""
Color gradients and hex blending.

Maps scalar positions onto ordered hex color stops, both one value at
a time (trails, particles, shaders) and across whole fields at once
(the ambient backdrop).
"""

import math
from typing import List, Sequence, Tuple

import numpy as np

from harmonic_garden.base import CatalogError, clamp

# Upper bound for gradient positions so the last bracket stays in range.
MAX_POSITION = 0.9999


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse ``#RRGGBB`` (case-insensitive) into an RGB triple."""
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02X}{g:02X}{b:02X}"


def _mix(a: int, b: int, t: float) -> int:
    return int(math.floor(a + (b - a) * t + 0.5))


def blend_hex(color_a: str, color_b: str, t: float) -> str:
    """
    Linearly interpolate two hex colors channel by channel.

    Args:
        color_a: Color returned at ``t = 0``.
        color_b: Color returned at ``t = 1``.
        t: Mix factor, clamped to [0, 1].

    Returns:
        ``#RRGGBB`` string with each channel rounded to nearest.
    """
    t = clamp(t, 0.0, 1.0)
    r1, g1, b1 = hex_to_rgb(color_a)
    r2, g2, b2 = hex_to_rgb(color_b)
    return rgb_to_hex(_mix(r1, r2, t), _mix(g1, g2, t), _mix(b1, b2, t))


def color_at(stops: Sequence[str], t: float) -> str:
    """
    Sample an ordered palette at position ``t``.

    ``t`` is clamped to [0, 0.9999] and scaled onto the stop list, so
    ``t = 1`` lands (to within rounding) on the final stop. A single-stop
    palette returns that stop for every ``t``.

    Raises:
        CatalogError: if ``stops`` is empty.
    """
    if not stops:
        raise CatalogError("gradient requires at least one color stop")
    if len(stops) == 1:
        return stops[0]
    scaled = clamp(t, 0.0, MAX_POSITION) * (len(stops) - 1)
    idx = int(scaled)
    return blend_hex(stops[idx], stops[idx + 1], scaled - idx)


def gradient_rgb(stops: Sequence[str], values: np.ndarray) -> np.ndarray:
    """
    Vectorized ``color_at`` over a scalar field.

    Args:
        stops: Ordered hex color stops (at least one).
        values: (H, W) float array of gradient positions.

    Returns:
        (H, W, 3) uint8 RGB array, channel-for-channel identical to
        calling ``color_at`` on each element.
    """
    if not stops:
        raise CatalogError("gradient requires at least one color stop")
    table = np.array([hex_to_rgb(s) for s in stops], dtype=np.float64)
    if len(stops) == 1:
        return np.broadcast_to(table[0], values.shape + (3,)).astype(np.uint8)

    scaled = np.clip(values, 0.0, MAX_POSITION) * (len(stops) - 1)
    idx = scaled.astype(np.int64)
    frac = (scaled - idx)[..., np.newaxis]

    lo = table[idx]
    hi = table[idx + 1]
    rgb = np.floor(lo + (hi - lo) * frac + 0.5)
    return rgb.astype(np.uint8)


def rgb_array_to_hex(rgb: np.ndarray) -> List[List[str]]:
    """Convert an (H, W, 3) uint8 array into rows of ``#RRGGBB`` strings."""
    packed = (
        (rgb[..., 0].astype(np.int64) << 16)
        | (rgb[..., 1].astype(np.int64) << 8)
        | rgb[..., 2].astype(np.int64)
    )
    return [[f"#{int(v):06X}" for v in row] for row in packed]
