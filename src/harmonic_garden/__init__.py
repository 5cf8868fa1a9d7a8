"""
Harmonic Garden: a spring-damper follower swarm chasing procedural
trajectories, composited onto a layered terminal canvas.
"""

from harmonic_garden.base import CatalogError, GardenConfig, Vector
from harmonic_garden.canvas import Canvas, Cell, compose
from harmonic_garden.controller import Action, dispatch
from harmonic_garden.garden import HarmonicGarden
from harmonic_garden.scheduler import FrameScheduler, KeyAction, Resize, Tick

__version__ = "0.1.0"
__all__ = [
    "Action",
    "Canvas",
    "CatalogError",
    "Cell",
    "FrameScheduler",
    "GardenConfig",
    "HarmonicGarden",
    "KeyAction",
    "Resize",
    "Tick",
    "Vector",
    "compose",
    "dispatch",
]
