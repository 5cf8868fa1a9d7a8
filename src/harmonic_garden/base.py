"""
Shared primitives and configuration for the Harmonic Garden engine.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple


class CatalogError(ValueError):
    """Raised when a static catalog entry is malformed."""


@dataclass(frozen=True)
class Vector:
    """Plain 2D point or velocity in cell units."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def rounded(self) -> Tuple[int, int]:
        """Nearest integer cell coordinate (halves round away from zero)."""
        return round_half_away(self.x), round_half_away(self.y)


def clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if value > high:
        return high
    return value


def round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def clamp_point(point: Vector, width: float, height: float) -> Vector:
    """Clamp a point into ``[0, width-1] x [0, height-1]``; no-op on an empty canvas."""
    if width <= 0 or height <= 0:
        return point
    return Vector(clamp(point.x, 0, width - 1), clamp(point.y, 0, height - 1))


@dataclass
class GardenConfig:
    """Universal configuration for the garden simulation and renderer."""
    fps: int = 60

    # Swarm
    initial_followers: int = 9
    min_followers: int = 3
    max_followers: int = 30
    max_trail: int = 42
    trail_exponent: float = 1.3

    # Spring tuning
    frequency: float = 7.2
    min_frequency: float = 1.0
    max_frequency: float = 14.0
    frequency_step: float = 0.35
    damping: float = 0.22
    min_damping: float = 0.02
    max_damping: float = 3.2
    damping_step: float = 0.05

    # Particles
    particle_margin: float = 2.0
    gravity: float = 18.0

    # Layout
    status_lines: int = 6

    # Randomness
    seed: Optional[int] = None

    @property
    def dt(self) -> float:
        return 1.0 / self.fps

    def canvas_dims(self, width: int, height: int) -> Tuple[int, int]:
        """Usable canvas (width, height) for a display of the given size."""
        canvas_height = height - self.status_lines
        if canvas_height < 10:
            canvas_height = max(height - 2, 3)
        return width, canvas_height
