"""
Simulation aggregate for the Harmonic Garden.

One ``HarmonicGarden`` owns every piece of mutable state: the live
parameters set by the controller, the chase target, the follower swarm
and the seed emitter. The scheduler advances it one fixed tick at a
time and asks it for finished frames.
"""

import logging
from typing import Iterator, Optional

import numpy as np

from harmonic_garden.base import GardenConfig, Vector, clamp_point
from harmonic_garden.canvas import Canvas, compose
from harmonic_garden.catalog import (
    FORMATIONS,
    MOODS,
    SCENES,
    FormationKind,
    FormationMeta,
    SceneMeta,
    Theme,
    formation_index,
)
from harmonic_garden.particles import ParticleEmitter
from harmonic_garden.swarm import FollowerSwarm
from harmonic_garden.trajectory import next_target

logger = logging.getLogger("harmonic_garden.garden")


class HarmonicGarden:
    """
    A swarm of spring followers chasing a moving target.

    Nothing is simulated until the first ``resize`` gives the garden a
    canvas; at that point the target is centered and the initial
    followers are seeded on it.
    """

    def __init__(self, config: Optional[GardenConfig] = None, seed: Optional[int] = None):
        self.cfg = config or GardenConfig()
        self.rng = np.random.default_rng(seed if seed is not None else self.cfg.seed)

        # Display geometry
        self.width = 0
        self.height = 0
        self.canvas_width = 0
        self.canvas_height = 0
        self.ready = False

        # Live parameters (mutated only by the controller)
        self.auto = True
        self.scene_index = 0
        self.formation = FormationKind.HALO
        self.mood_index = 0
        self.frequency = self.cfg.frequency
        self.damping = self.cfg.damping
        self.show_help = False

        # Simulation state
        self.time = 0.0
        self.ticks = 0
        self.target = Vector()
        self.swarm = FollowerSwarm(self.cfg, self.rng)
        self.emitter = ParticleEmitter(self.cfg, self.rng)

    @property
    def mood(self) -> Theme:
        return MOODS[self.mood_index]

    @property
    def scene(self) -> SceneMeta:
        return SCENES[self.scene_index]

    @property
    def formation_meta(self) -> FormationMeta:
        return FORMATIONS[formation_index(self.formation)]

    def resize(self, width: int, height: int):
        """Adopt a new display size, recompute the canvas, and re-clamp the target."""
        if width <= 0 or height <= 0:
            return
        self.width, self.height = width, height
        self.canvas_width, self.canvas_height = self.cfg.canvas_dims(width, height)
        self.clamp_target()
        logger.info(
            "display %dx%d, canvas %dx%d",
            width, height, self.canvas_width, self.canvas_height,
        )

        if not self.ready and self.canvas_width > 0 and self.canvas_height > 0:
            self.target = Vector(self.canvas_width / 2, self.canvas_height / 2)
            while len(self.swarm) < self.cfg.initial_followers:
                if not self.swarm.add(self.target, self.frequency, self.damping):
                    break
            self.ready = True
            logger.info("garden seeded with %d followers", len(self.swarm))

    def clamp_target(self):
        self.target = clamp_point(self.target, self.canvas_width, self.canvas_height)

    def update_target(self):
        if self.canvas_width == 0 or self.canvas_height == 0:
            return
        self.target = next_target(self.scene.id, self.time, self.canvas_width, self.canvas_height)

    def update(self):
        """Advance the whole simulation by one fixed step."""
        if not self.ready:
            return
        self.time += self.cfg.dt
        self.ticks += 1
        if self.auto:
            self.update_target()
        self.swarm.step(
            self.target,
            self.formation,
            float(self.canvas_width),
            float(self.canvas_height),
            self.time,
        )
        self.emitter.update(self.mood, self.target, self.canvas_width, self.canvas_height)

    def render_frame(self) -> Canvas:
        """Compose the current state into a fresh canvas."""
        if not self.ready:
            return Canvas(0, 0)
        return compose(
            self.canvas_width,
            self.canvas_height,
            self.mood,
            self.swarm,
            self.emitter.seeds,
            self.target,
            self.time,
            self.cfg.trail_exponent,
        )

    def render_ticks(self, n_ticks: int, progress_callback=None) -> Iterator[Canvas]:
        """
        Advance ``n_ticks`` steps, yielding a frame after each.

        Args:
            n_ticks: Number of simulation steps.
            progress_callback: Optional callback(current, total).

        Yields:
            Canvas per tick.
        """
        for i in range(n_ticks):
            self.update()
            yield self.render_frame()
            if progress_callback:
                progress_callback(i + 1, n_ticks)

    def mode_label(self) -> str:
        return "auto" if self.auto else "manual"

    def status_line(self) -> str:
        """Plain-text summary of the live parameters."""
        return "  ".join([
            f"scene {self.scene.name}",
            f"formation {self.formation_meta.name}",
            f"mood {self.mood.name}",
            f"mode {self.mode_label()}",
            f"freq {self.frequency:.2f}",
            f"damping {self.damping:.2f}",
            f"muses {len(self.swarm)}",
        ])
