"""Tests for the simulation aggregate."""

import pytest

from harmonic_garden.base import GardenConfig, Vector
from harmonic_garden.catalog import FormationKind, SceneKind
from harmonic_garden.garden import HarmonicGarden
from harmonic_garden.trajectory import next_target


class TestLifecycle:
    def test_idle_before_first_resize(self, config):
        garden = HarmonicGarden(config)
        garden.update()
        assert not garden.ready
        assert garden.time == 0.0
        assert garden.ticks == 0
        assert garden.render_frame().rows == []

    def test_first_resize_seeds_swarm(self, garden):
        assert garden.ready
        assert (garden.canvas_width, garden.canvas_height) == (80, 18)
        assert garden.target == Vector(40.0, 9.0)
        assert len(garden.swarm) == 9
        assert all(f.position == garden.target for f in garden.swarm)

    def test_non_positive_resize_ignored(self, garden):
        garden.resize(0, 30)
        garden.resize(50, -1)
        assert (garden.width, garden.height) == (80, 24)

    def test_second_resize_does_not_reseed(self, garden):
        garden.resize(120, 40)
        assert len(garden.swarm) == 9
        assert (garden.canvas_width, garden.canvas_height) == (120, 34)

    def test_shrink_reclamps_target(self, garden):
        garden.auto = False
        garden.target = Vector(79.0, 17.0)
        garden.resize(30, 20)
        assert garden.target == Vector(29.0, 13.0)

    @pytest.mark.parametrize("height,expected", [(24, 18), (16, 10), (12, 10), (5, 3), (1, 3)])
    def test_canvas_height_reserves_footer(self, height, expected):
        assert GardenConfig().canvas_dims(80, height) == (80, expected)

    def test_seed_argument_overrides_config(self):
        a = HarmonicGarden(GardenConfig(seed=1), seed=2)
        b = HarmonicGarden(GardenConfig(seed=3), seed=2)
        a.resize(80, 24)
        b.resize(80, 24)
        assert [f.radius for f in a.swarm] == [f.radius for f in b.swarm]


class TestUpdate:
    def test_default_scenario(self, garden):
        """Orbit, Halo, Aurora Bloom at 7.2/0.22 for ten seconds."""
        assert garden.scene.id is SceneKind.ORBIT
        assert garden.formation is FormationKind.HALO
        assert garden.mood.name == "Aurora Bloom"
        for _ in range(600):
            garden.update()

        assert garden.ticks == 600
        assert garden.time == pytest.approx(10.0)
        want = next_target(SceneKind.ORBIT, garden.time, 80, 18)
        assert garden.target == want
        assert len(garden.swarm.followers[0].trail) == 42
        for f in garden.swarm:
            assert 0 <= f.position.x <= 79
            assert 0 <= f.position.y <= 17

    def test_seeded_runs_repeat(self, config):
        frames = []
        for _ in range(2):
            g = HarmonicGarden(config)
            g.resize(60, 20)
            for _ in range(90):
                g.update()
            frames.append(g.render_frame().glyphs())
        assert frames[0] == frames[1]

    def test_manual_mode_freezes_target(self, garden):
        garden.auto = False
        before = garden.target
        for _ in range(30):
            garden.update()
        assert garden.target == before

    def test_emitter_follows_target(self, garden):
        for _ in range(20):
            garden.update()
        assert len(garden.emitter) == 1


class TestRender:
    def test_frame_dimensions(self, garden):
        garden.update()
        canvas = garden.render_frame()
        assert (canvas.width, canvas.height) == (80, 18)

    def test_render_ticks(self, garden):
        calls = []
        frames = list(garden.render_ticks(5, lambda cur, total: calls.append((cur, total))))
        assert len(frames) == 5
        assert calls[-1] == (5, 5)
        assert garden.ticks == 5

    def test_status_line(self, garden):
        line = garden.status_line()
        for piece in ("Ellipse Drift", "Halo", "Aurora Bloom", "auto", "freq 7.20", "damping 0.22", "muses 9"):
            assert piece in line
