"""
Fixed-rate frame scheduler.

Ticks, key actions, and resizes arrive on one sequential event stream.
Each event runs to completion before the next is looked at, so a tick's
simulate-then-present cycle never overlaps input handling.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, Optional, Union

from harmonic_garden.controller import Action, dispatch
from harmonic_garden.garden import HarmonicGarden

logger = logging.getLogger("harmonic_garden.scheduler")


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class KeyAction:
    action: Action


Event = Union[Tick, Resize, KeyAction]

# poll(timeout) -> events that arrived while waiting at most ``timeout`` seconds
InputSource = Callable[[float], Iterable[Event]]
FrameSink = Callable[[HarmonicGarden], None]


class FrameScheduler:
    """Drives one simulation step per fixed tick and hands each frame to a sink."""

    def __init__(
        self,
        garden: HarmonicGarden,
        present: Optional[FrameSink] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.garden = garden
        self.present = present
        self.clock = clock
        self.period = garden.cfg.dt
        self.events: Deque[Event] = deque()
        self.running = True

    def post(self, event: Event):
        self.events.append(event)

    def process(self, event: Event) -> bool:
        """Handle one event to completion; False once a quit has been seen."""
        if isinstance(event, Tick):
            self.garden.update()
            if self.present is not None:
                self.present(self.garden)
        elif isinstance(event, Resize):
            self.garden.resize(event.width, event.height)
        elif isinstance(event, KeyAction):
            if not dispatch(self.garden, event.action):
                self.running = False
        return self.running

    def drain(self) -> bool:
        """Process queued events in arrival order, stopping at a quit."""
        while self.events and self.running:
            self.process(self.events.popleft())
        return self.running

    def run(self, poll: InputSource, max_ticks: Optional[int] = None) -> int:
        """
        Run until quit (or ``max_ticks`` ticks).

        Between ticks the scheduler yields to ``poll`` for at most the time
        left until the next deadline. A tick that runs late pushes the
        schedule forward rather than bursting to catch up.

        Returns:
            Number of ticks processed.
        """
        ticks = 0
        deadline = self.clock() + self.period
        logger.info("scheduler running at %d fps", self.garden.cfg.fps)
        while self.running and (max_ticks is None or ticks < max_ticks):
            for event in poll(max(0.0, deadline - self.clock())):
                self.post(event)
            if not self.drain():
                break

            now = self.clock()
            if now < deadline:
                continue
            self.process(Tick())
            ticks += 1
            deadline += self.period
            if deadline < now:
                deadline = now + self.period
        logger.info("scheduler stopped after %d ticks", ticks)
        return ticks
