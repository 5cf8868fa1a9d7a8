"""
Chase-target trajectories.

Every scene is a closed-form parametric curve over elapsed time,
centered on the canvas midpoint with amplitudes scaled to the canvas.
"""

import math
from typing import Callable, Dict

from harmonic_garden.base import Vector, clamp_point
from harmonic_garden.catalog import SceneKind

Trajectory = Callable[[float, float, float], Vector]

_MASK64 = (1 << 64) - 1


def _wrap64(n: int) -> int:
    """Reinterpret an arbitrary int as signed 64-bit two's complement."""
    n &= _MASK64
    return n - (1 << 64) if n >= 1 << 63 else n


def _hash2(x: int, y: int) -> float:
    """Lattice hash mapped into [-1, 1)."""
    n = _wrap64(x * 374761393 + y * 668265263)
    n = _wrap64((n ^ (n >> 13)) * 1274126177)
    # xor with its own arithmetic shift clears the sign bit
    n = n ^ (n >> 16)
    return (n % 1024) / 512 - 1


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def value_noise(x: float, y: float) -> float:
    """
    Smoothed 2D lattice value noise.

    Hashes the four surrounding lattice corners and blends them with a
    quintic fade. Not gradient noise, but smooth enough for organic drift.
    """
    xi = math.floor(x)
    yi = math.floor(y)
    u = _fade(x - xi)
    v = _fade(y - yi)

    top = _lerp(_hash2(xi, yi + 1), _hash2(xi + 1, yi + 1), u)
    bottom = _lerp(_hash2(xi, yi), _hash2(xi + 1, yi), u)
    return _lerp(bottom, top, v)


def orbit(t: float, w: float, h: float) -> Vector:
    cx, cy = w / 2, h / 2
    speed = 0.55
    return Vector(
        cx + math.cos(t * speed) * w * 0.35 + math.cos(t * 0.9) * w * 0.05,
        cy + math.sin(t * speed * 1.2) * h * 0.28 + math.sin(t * 0.77) * h * 0.04,
    )


def rose(t: float, w: float, h: float) -> Vector:
    k = 5.0
    theta = t * 0.8
    r = (0.4 + 0.15 * math.sin(t * 0.6)) * math.sin(k * theta) * w
    return Vector(w / 2 + r * math.cos(theta), h / 2 + r * math.sin(theta))


def cascade(t: float, w: float, h: float) -> Vector:
    slow = math.sin(t * 0.3)
    sway = math.sin(t * 1.8)
    drift = math.sin(t * 0.5 + sway * 0.4)
    return Vector(
        w / 2 + drift * w * 0.25,
        h / 2 + ((1 + slow) / 2) * h * 0.35 + math.sin(t * 1.2) * h * 0.06,
    )


def pulse(t: float, w: float, h: float) -> Vector:
    theta = t * 1.3
    beat = (math.sin(t * 2.4) + 1) / 2
    radius = w * (0.18 + 0.28 * beat)
    return Vector(
        w / 2 + radius * math.cos(theta),
        h / 2 + radius * 0.7 * math.sin(theta * 1.4),
    )


def wander(t: float, w: float, h: float) -> Vector:
    n1 = value_noise(t * 0.15, 0.0)
    n2 = value_noise(0.0, t * 0.12 + 3.7)
    return Vector(w / 2 + n1 * w * 0.4, h / 2 + n2 * h * 0.35)


TRAJECTORIES: Dict[SceneKind, Trajectory] = {
    SceneKind.ORBIT: orbit,
    SceneKind.ROSE: rose,
    SceneKind.CASCADE: cascade,
    SceneKind.PULSE: pulse,
    SceneKind.WANDER: wander,
}


def next_target(scene: SceneKind, elapsed: float, width: int, height: int) -> Vector:
    """Target position for ``scene`` at ``elapsed`` seconds, clamped to the canvas."""
    point = TRAJECTORIES[scene](elapsed, float(width), float(height))
    return clamp_point(point, width, height)
