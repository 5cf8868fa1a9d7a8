"""Tests for the command line interface."""

import pytest

from harmonic_garden.catalog import FormationKind, SceneKind
from harmonic_garden.cli import build_garden, build_parser, main


class TestBuildGarden:
    def test_defaults(self):
        garden = build_garden(build_parser().parse_args([]))
        assert garden.scene.id is SceneKind.ORBIT
        assert garden.formation is FormationKind.HALO
        assert garden.mood_index == 0
        assert garden.auto
        assert (garden.frequency, garden.damping) == (7.2, 0.22)

    def test_selection_flags(self):
        args = build_parser().parse_args(
            ["--scene", "wander", "--formation", "helix", "--mood", "deep-current", "--manual"]
        )
        garden = build_garden(args)
        assert garden.scene.id is SceneKind.WANDER
        assert garden.formation is FormationKind.HELIX
        assert garden.mood.name == "Deep Current"
        assert not garden.auto

    def test_numeric_flags_clamped(self):
        args = build_parser().parse_args(
            ["--frequency", "99", "--damping", "0", "--followers", "100", "--fps", "0"]
        )
        garden = build_garden(args)
        assert garden.frequency == 14.0
        assert garden.damping == 0.02
        assert garden.cfg.initial_followers == 30
        assert garden.cfg.fps == 1

    def test_unknown_scene_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--scene", "spiral"])


class TestMain:
    def test_headless_plain(self, capsys):
        main(["--headless", "--ticks", "30", "--width", "40", "--height", "20",
              "--plain", "--seed", "1", "--log-level", "ERROR"])
        lines = capsys.readouterr().out.rstrip("\n").split("\n")
        assert len(lines) == 15
        assert all(len(row) == 40 for row in lines[:14])
        assert "muses 9" in lines[-1]

    def test_headless_is_reproducible(self, capsys):
        argv = ["--headless", "--ticks", "45", "--plain", "--seed", "7", "--log-level", "ERROR"]
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        assert capsys.readouterr().out == first

    def test_headless_color(self, capsys):
        main(["--headless", "--ticks", "5", "--mood", "cosmic-tie-dye", "--log-level", "ERROR"])
        assert "\x1b[" in capsys.readouterr().out

    def test_interactive_needs_terminal(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--log-level", "ERROR"])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_log_file(self, tmp_path, capsys):
        log = tmp_path / "logs" / "garden.log"
        main(["--headless", "--ticks", "1", "--plain", "--log-file", str(log)])
        assert "headless run finished" in log.read_text()
