"""Tests for the fixed-rate frame scheduler."""

import pytest

from harmonic_garden.controller import Action
from harmonic_garden.garden import HarmonicGarden
from harmonic_garden.scheduler import FrameScheduler, KeyAction, Resize, Tick


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class ScriptedInput:
    """Replays one batch of events per poll and advances the clock past the wait."""

    def __init__(self, clock, batches=()):
        self.clock = clock
        self.batches = list(batches)
        self.timeouts = []

    def __call__(self, timeout):
        self.timeouts.append(timeout)
        self.clock.now += timeout + 1e-9
        return self.batches.pop(0) if self.batches else []


class TestProcess:
    def test_resize_before_tick(self, config):
        garden = HarmonicGarden(config)
        sched = FrameScheduler(garden)
        sched.post(Resize(80, 24))
        sched.post(Tick())
        assert sched.drain()
        assert garden.ready
        assert garden.ticks == 1

    def test_tick_presents_after_update(self, garden):
        seen = []
        sched = FrameScheduler(garden, present=lambda g: seen.append(g.ticks))
        sched.process(Tick())
        sched.process(Tick())
        assert seen == [1, 2]

    def test_quit_stops_draining(self, garden):
        sched = FrameScheduler(garden)
        sched.post(KeyAction(Action.CYCLE_MOOD))
        sched.post(KeyAction(Action.QUIT))
        sched.post(KeyAction(Action.CYCLE_MOOD))
        assert sched.drain() is False
        assert garden.mood_index == 1
        assert len(sched.events) == 1

    def test_events_apply_in_order(self, garden):
        sched = FrameScheduler(garden)
        sched.post(KeyAction(Action.NUDGE_EAST))
        sched.post(Tick())
        sched.post(KeyAction(Action.TOGGLE_MODE))
        sched.drain()
        # manual during the tick, so the target did not follow the scene
        assert garden.target.x == 41.0
        assert garden.auto


class TestRun:
    def test_fixed_tick_count(self, garden):
        clock = FakeClock()
        frames = []
        sched = FrameScheduler(garden, present=lambda g: frames.append(g.ticks), clock=clock)
        ticks = sched.run(ScriptedInput(clock), max_ticks=5)
        assert ticks == 5
        assert frames == [1, 2, 3, 4, 5]
        assert clock.now == pytest.approx(5 * sched.period)

    def test_quit_from_input(self, garden):
        clock = FakeClock()
        poll = ScriptedInput(clock, [[], [], [KeyAction(Action.QUIT)]])
        ticks = FrameScheduler(garden, clock=clock).run(poll)
        assert ticks == 2
        assert garden.ticks == 2

    def test_resize_through_input(self, config):
        garden = HarmonicGarden(config)
        clock = FakeClock()
        poll = ScriptedInput(clock, [[Resize(40, 20)]])
        FrameScheduler(garden, clock=clock).run(poll, max_ticks=3)
        assert garden.canvas_width == 40
        assert garden.ticks == 3

    def test_late_tick_resets_deadline(self, garden):
        clock = FakeClock()
        sched = FrameScheduler(garden, clock=clock)

        waits = []

        def slow_poll(timeout):
            waits.append(timeout)
            clock.now += timeout + 1.0
            return []

        sched.run(slow_poll, max_ticks=3)
        assert garden.ticks == 3
        # no catch-up burst: every wait after a late tick is a full period
        assert waits[1:] == [pytest.approx(sched.period)] * 2
