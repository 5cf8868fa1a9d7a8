"""
Seed particle emitter.

Seeds are short-lived ballistic sparks launched upward from the chase
target on a mood-defined interval and pulled back down by a constant
gravity. All randomness is drawn at spawn time; afterwards a seed's
path depends only on its own state and the fixed timestep.
"""

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from harmonic_garden.base import GardenConfig, Vector
from harmonic_garden.catalog import Theme
from harmonic_garden.spring import Projectile

logger = logging.getLogger("harmonic_garden.particles")


@dataclass
class Seed:
    """One spark in flight."""
    projectile: Projectile
    position: Vector
    ttl: float
    color: str
    glyph: str
    life: float = 0.0

    @property
    def expired(self) -> bool:
        return self.life >= self.ttl


class ParticleEmitter:
    """Spawns, integrates, and prunes seeds anchored at the chase target."""

    def __init__(self, config: GardenConfig, rng: np.random.Generator):
        self.cfg = config
        self.rng = rng
        self.seeds: List[Seed] = []
        self.timer = 0.0

    def __len__(self) -> int:
        return len(self.seeds)

    def emit(self, theme: Theme, origin: Vector) -> Seed:
        """Launch one seed from ``origin`` with a randomized near-vertical kick."""
        velocity = Vector(
            (self.rng.random() * 2 - 1) * 14,
            -6 - self.rng.random() * 6,
        )
        ttl = 1.4 + self.rng.random() * 0.9
        color = theme.color_at(self.rng.random())
        seed = Seed(
            projectile=Projectile(self.cfg.dt, origin, velocity, Vector(0.0, self.cfg.gravity)),
            position=origin,
            ttl=ttl,
            color=color,
            glyph=theme.seed_glyph,
        )
        self.seeds.append(seed)
        return seed

    def update(self, theme: Theme, origin: Vector, width: int, height: int):
        """
        Advance one fixed step.

        Accumulates time toward the mood's seed interval (carrying the
        remainder so the cadence never drifts), then integrates every seed
        and keeps only those still alive and within the margin.
        """
        if width == 0 or height == 0:
            return

        self.timer += self.cfg.dt
        if self.timer >= theme.seed_interval:
            self.emit(theme, origin)
            self.timer %= theme.seed_interval

        margin = self.cfg.particle_margin
        alive = []
        for seed in self.seeds:
            seed.position = seed.projectile.update()
            seed.life += self.cfg.dt
            if seed.expired:
                continue
            x, y = seed.position.x, seed.position.y
            if x < -margin or y < -margin or x > width + margin or y > height + margin:
                continue
            alive.append(seed)

        dropped = len(self.seeds) - len(alive)
        if dropped:
            logger.debug("pruned %d seeds, %d alive", dropped, len(alive))
        self.seeds = alive
