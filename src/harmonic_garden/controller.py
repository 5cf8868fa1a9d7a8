"""
Mode and parameter controller.

Discrete named actions mutate the live parameters held on the garden.
Every numeric setter clamps into its documented range; frequency and
damping changes re-tune every follower's springs immediately.
"""

import enum
import logging
from typing import Callable, Dict

from harmonic_garden.base import Vector, clamp
from harmonic_garden.catalog import FORMATIONS, MOODS, SCENES, formation_index
from harmonic_garden.garden import HarmonicGarden

logger = logging.getLogger("harmonic_garden.controller")


class Action(enum.Enum):
    TOGGLE_MODE = "toggle_mode"
    CYCLE_SCENE = "cycle_scene"
    CYCLE_FORMATION = "cycle_formation"
    CYCLE_MOOD = "cycle_mood"
    ADD_FOLLOWER = "add_follower"
    REMOVE_FOLLOWER = "remove_follower"
    FREQUENCY_UP = "frequency_up"
    FREQUENCY_DOWN = "frequency_down"
    DAMPING_UP = "damping_up"
    DAMPING_DOWN = "damping_down"
    NUDGE_NORTH = "nudge_north"
    NUDGE_SOUTH = "nudge_south"
    NUDGE_WEST = "nudge_west"
    NUDGE_EAST = "nudge_east"
    TOGGLE_HELP = "toggle_help"
    QUIT = "quit"


def toggle_mode(garden: HarmonicGarden):
    """Flip auto/manual. Resuming auto picks up from wherever the target now sits."""
    garden.auto = not garden.auto
    logger.debug("mode -> %s", garden.mode_label())


def cycle_scene(garden: HarmonicGarden):
    garden.scene_index = (garden.scene_index + 1) % len(SCENES)
    logger.debug("scene -> %s", garden.scene.name)


def cycle_formation(garden: HarmonicGarden):
    idx = (formation_index(garden.formation) + 1) % len(FORMATIONS)
    garden.formation = FORMATIONS[idx].id
    logger.debug("formation -> %s", garden.formation_meta.name)


def cycle_mood(garden: HarmonicGarden):
    garden.mood_index = (garden.mood_index + 1) % len(MOODS)
    logger.debug("mood -> %s", garden.mood.name)


def set_frequency(garden: HarmonicGarden, value: float):
    cfg = garden.cfg
    garden.frequency = clamp(value, cfg.min_frequency, cfg.max_frequency)
    garden.swarm.retune(garden.frequency, garden.damping)
    logger.debug("frequency -> %.2f", garden.frequency)


def set_damping(garden: HarmonicGarden, value: float):
    cfg = garden.cfg
    garden.damping = clamp(value, cfg.min_damping, cfg.max_damping)
    garden.swarm.retune(garden.frequency, garden.damping)
    logger.debug("damping -> %.2f", garden.damping)


def adjust_frequency(garden: HarmonicGarden, delta: float):
    set_frequency(garden, garden.frequency + delta)


def adjust_damping(garden: HarmonicGarden, delta: float):
    set_damping(garden, garden.damping + delta)


def add_follower(garden: HarmonicGarden) -> bool:
    return garden.swarm.add(garden.target, garden.frequency, garden.damping)


def remove_follower(garden: HarmonicGarden) -> bool:
    return garden.swarm.remove()


def nudge(garden: HarmonicGarden, dx: float, dy: float):
    """Step the target by hand; this also switches the garden to manual mode."""
    garden.auto = False
    garden.target = Vector(garden.target.x + dx, garden.target.y + dy)
    garden.clamp_target()


def toggle_help(garden: HarmonicGarden):
    garden.show_help = not garden.show_help


HANDLERS: Dict[Action, Callable[[HarmonicGarden], object]] = {
    Action.TOGGLE_MODE: toggle_mode,
    Action.CYCLE_SCENE: cycle_scene,
    Action.CYCLE_FORMATION: cycle_formation,
    Action.CYCLE_MOOD: cycle_mood,
    Action.ADD_FOLLOWER: add_follower,
    Action.REMOVE_FOLLOWER: remove_follower,
    Action.FREQUENCY_UP: lambda g: adjust_frequency(g, g.cfg.frequency_step),
    Action.FREQUENCY_DOWN: lambda g: adjust_frequency(g, -g.cfg.frequency_step),
    Action.DAMPING_UP: lambda g: adjust_damping(g, g.cfg.damping_step),
    Action.DAMPING_DOWN: lambda g: adjust_damping(g, -g.cfg.damping_step),
    Action.NUDGE_NORTH: lambda g: nudge(g, 0, -1),
    Action.NUDGE_SOUTH: lambda g: nudge(g, 0, 1),
    Action.NUDGE_WEST: lambda g: nudge(g, -1, 0),
    Action.NUDGE_EAST: lambda g: nudge(g, 1, 0),
    Action.TOGGLE_HELP: toggle_help,
}


def dispatch(garden: HarmonicGarden, action: Action) -> bool:
    """
    Apply one action. Returns False for QUIT (the caller stops), True otherwise.
    """
    if action is Action.QUIT:
        logger.info("quit requested")
        return False
    HANDLERS[action](garden)
    return True
