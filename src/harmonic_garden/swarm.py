"""
Spring-damper follower swarm.

Each follower chases the shared target plus a formation-specific
offset derived from its own phase, order and radius. A pair of
per-axis springs smooths the chase, and a bounded trail records the
most recent positions for the comet-tail render.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List

import numpy as np

from harmonic_garden.base import GardenConfig, Vector, clamp_point
from harmonic_garden.catalog import FormationKind
from harmonic_garden.spring import Spring

logger = logging.getLogger("harmonic_garden.swarm")

TAU = 2 * math.pi


@dataclass
class Follower:
    """One swarm agent. ``order`` is fixed for life and shapes its formation slot."""
    order: int
    radius: float
    speed: float
    phase: float
    palette_seed: float
    offset_seed: float
    spring_x: Spring
    spring_y: Spring
    position: Vector = field(default_factory=Vector)
    velocity: Vector = field(default_factory=Vector)
    trail: Deque[Vector] = field(default_factory=lambda: deque(maxlen=GardenConfig.max_trail))

    def advance_phase(self, dt: float, rate: float = 1.0):
        self.phase = math.fmod(self.phase + self.speed * dt * rate, TAU)

    def retune(self, dt: float, frequency: float, damping: float):
        """Swap spring coefficients in place; motion state is untouched."""
        self.spring_x = Spring.tuned(dt, frequency, damping)
        self.spring_y = Spring.tuned(dt, frequency, damping)


OffsetFn = Callable[[Follower, float, float, float, float, int], Vector]


def halo_offset(f: Follower, t: float, dt: float, width: float, height: float, count: int) -> Vector:
    """Elliptical orbit whose eccentricity breathes with time."""
    f.advance_phase(dt)
    ellipse = 0.55 + 0.25 * math.sin(t * 0.8 + f.order * 0.3)
    return Vector(
        math.cos(f.phase) * f.radius * ellipse,
        math.sin(f.phase) * f.radius * 0.6 * ellipse,
    )


def ribbon_offset(f: Follower, t: float, dt: float, width: float, height: float, count: int) -> Vector:
    """Comet tail receding to the left with a travelling vertical wave."""
    wave = math.sin(t * 1.4 + f.order * 0.7)
    f.advance_phase(dt, 0.6)
    x = -f.order * (1.9 + 0.4 * math.sin(t * 0.6))
    return Vector(x + math.cos(f.phase + wave) * 2.4, wave * height * 0.09)


def bloom_offset(f: Follower, t: float, dt: float, width: float, height: float, count: int) -> Vector:
    """Multi-lobed rotation; lobe count cycles with order."""
    petals = 3 + (f.order % 5)
    breath = (math.sin(t * 0.7 + petals) + 1) / 2
    radius = f.radius * (0.6 + 0.5 * breath)
    f.advance_phase(dt, 1.2)
    return Vector(
        math.cos(f.phase * petals) * radius,
        math.sin(f.phase * petals) * radius * 0.6,
    )


def helix_offset(f: Follower, t: float, dt: float, width: float, height: float, count: int) -> Vector:
    """Twisted lattice: order maps to a depth in [-0.5, 0.5] across the swarm."""
    depth = f.order / max(count - 1, 1) - 0.5
    f.advance_phase(dt)
    x = math.sin(t * 0.9 + depth * TAU) * width * 0.16
    y = depth * height * 0.6 + math.cos(t * 1.6 + depth * 4) * 4
    return Vector(x + math.cos(f.phase + depth * 6) * 3, y)


FORMATION_OFFSETS: Dict[FormationKind, OffsetFn] = {
    FormationKind.HALO: halo_offset,
    FormationKind.RIBBON: ribbon_offset,
    FormationKind.BLOOM: bloom_offset,
    FormationKind.HELIX: helix_offset,
}


def step_follower(
    f: Follower,
    target: Vector,
    formation: FormationKind,
    width: float,
    height: float,
    t: float,
    dt: float,
    count: int,
):
    """
    Advance one follower by one tick.

    The spring chases ``target + offset`` (clamped to the canvas); the
    integrated position is clamped again and appended to the trail.
    """
    count = max(count, 1)
    offset = FORMATION_OFFSETS[formation](f, t, dt, width, height, count)
    goal = clamp_point(target + offset, width, height)

    px, vx = f.spring_x.update(f.position.x, f.velocity.x, goal.x)
    py, vy = f.spring_y.update(f.position.y, f.velocity.y, goal.y)

    f.position = clamp_point(Vector(px, py), width, height)
    f.velocity = Vector(vx, vy)
    f.trail.append(f.position)


class FollowerSwarm:
    """Owns the followers; grows and shrinks at the tail within configured bounds."""

    def __init__(self, config: GardenConfig, rng: np.random.Generator):
        self.cfg = config
        self.rng = rng
        self.followers: List[Follower] = []

    def __len__(self) -> int:
        return len(self.followers)

    def __iter__(self):
        return iter(self.followers)

    def spawn(self, order: int, frequency: float, damping: float) -> Follower:
        """Build a follower with randomized radius, speed, phase, and seeds."""
        base_radius = 5.0 + order * 1.35
        radius = base_radius * (0.7 + self.rng.random() * 0.6)
        speed = 0.3 + self.rng.random() * 0.6 + order * 0.03
        phase = self.rng.random() * TAU
        palette_seed = self.rng.random()
        offset_seed = self.rng.random()
        dt = self.cfg.dt
        return Follower(
            order=order,
            radius=radius,
            speed=speed,
            phase=phase,
            palette_seed=palette_seed,
            offset_seed=offset_seed,
            spring_x=Spring.tuned(dt, frequency, damping),
            spring_y=Spring.tuned(dt, frequency, damping),
            trail=deque(maxlen=self.cfg.max_trail),
        )

    def add(self, at: Vector, frequency: float, damping: float) -> bool:
        """Append a follower seeded at ``at``; False once the swarm is full."""
        if len(self.followers) >= self.cfg.max_followers:
            return False
        follower = self.spawn(len(self.followers), frequency, damping)
        follower.position = at
        follower.trail.append(at)
        self.followers.append(follower)
        logger.debug("follower %d joined at (%.1f, %.1f)", follower.order, at.x, at.y)
        return True

    def remove(self) -> bool:
        """Drop the newest follower; False at the floor."""
        if len(self.followers) <= self.cfg.min_followers:
            return False
        follower = self.followers.pop()
        logger.debug("follower %d left", follower.order)
        return True

    def retune(self, frequency: float, damping: float):
        for f in self.followers:
            f.retune(self.cfg.dt, frequency, damping)

    def step(self, target: Vector, formation: FormationKind, width: float, height: float, t: float):
        count = len(self.followers)
        if count == 0:
            return
        for f in self.followers:
            step_follower(f, target, formation, width, height, t, self.cfg.dt, count)
