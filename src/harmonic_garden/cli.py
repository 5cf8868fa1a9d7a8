"""
CLI entry point for the Harmonic Garden.

Usage:
    harmonic-garden [options]
    python -m harmonic_garden [options]
"""

import argparse
import logging
import sys
from pathlib import Path

from harmonic_garden.base import GardenConfig, clamp
from harmonic_garden.catalog import FORMATIONS, MOODS, SCENES, index_by_slug
from harmonic_garden.controller import set_damping, set_frequency
from harmonic_garden.display import StyleCache, TerminalSession, render_canvas
from harmonic_garden.garden import HarmonicGarden
from harmonic_garden.logger_setup import setup_logging
from harmonic_garden.scheduler import FrameScheduler

logger = logging.getLogger("harmonic_garden.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="harmonic-garden",
        description="Spring-driven follower swarm rendered as a living terminal garden",
    )

    # Choreography
    parser.add_argument(
        "-s", "--scene", type=str, default=SCENES[0].slug,
        choices=[s.slug for s in SCENES],
        help="Target trajectory (default: %(default)s)",
    )
    parser.add_argument(
        "--formation", type=str, default=FORMATIONS[0].slug,
        choices=[f.slug for f in FORMATIONS],
        help="Follower formation (default: %(default)s)",
    )
    parser.add_argument(
        "-m", "--mood", type=str, default=MOODS[0].slug,
        choices=[m.slug for m in MOODS],
        help="Palette and glyph theme (default: %(default)s)",
    )
    parser.add_argument("--manual", action="store_true", help="Start in manual steering mode")

    # Motion
    parser.add_argument(
        "--frequency", type=float, default=None,
        help="Spring angular frequency, clamped to [1, 14] (default: 7.2)",
    )
    parser.add_argument(
        "--damping", type=float, default=None,
        help="Spring damping ratio, clamped to [0.02, 3.2] (default: 0.22)",
    )
    parser.add_argument(
        "-n", "--followers", type=int, default=None,
        help="Initial follower count, clamped to [3, 30] (default: 9)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    parser.add_argument("-f", "--fps", type=int, default=60, help="Simulation rate (default: 60)")

    # Headless
    parser.add_argument(
        "--headless", action="store_true",
        help="Simulate without taking over the terminal and print the final frame",
    )
    parser.add_argument("--ticks", type=int, default=600, help="Ticks to simulate when headless (default: 600)")
    parser.add_argument("--width", type=int, default=80, help="Headless display width (default: 80)")
    parser.add_argument("--height", type=int, default=24, help="Headless display height (default: 24)")
    parser.add_argument("--plain", action="store_true", help="Headless output without color codes")

    # Logging
    parser.add_argument("--log-file", type=Path, default=None, help="Append log records to this file")
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: %(default)s)",
    )
    return parser


def build_garden(args: argparse.Namespace) -> HarmonicGarden:
    """Construct a garden from parsed arguments, clamping every numeric flag."""
    config = GardenConfig(fps=max(1, args.fps), seed=args.seed)
    if args.followers is not None:
        config.initial_followers = int(clamp(args.followers, config.min_followers, config.max_followers))

    garden = HarmonicGarden(config)
    garden.scene_index = index_by_slug(SCENES, args.scene)
    garden.formation = FORMATIONS[index_by_slug(FORMATIONS, args.formation)].id
    garden.mood_index = index_by_slug(MOODS, args.mood)
    garden.auto = not args.manual
    if args.frequency is not None:
        set_frequency(garden, args.frequency)
    if args.damping is not None:
        set_damping(garden, args.damping)
    return garden


def _progress_bar(current: int, total: int, width: int = 35):
    """Print a progress bar to stderr."""
    pct = current / max(total, 1) * 100
    filled = int(width * current / max(total, 1))
    bar = "#" * filled + "-" * (width - filled)
    if sys.stderr.isatty():
        sys.stderr.write(f"\r[{bar}] {pct:5.1f}%  tick {current}/{total}")
        sys.stderr.flush()
        if current >= total:
            sys.stderr.write("\n")


def run_headless(garden: HarmonicGarden, args: argparse.Namespace) -> int:
    garden.resize(args.width, args.height)
    for _ in range(max(0, args.ticks)):
        garden.update()
        _progress_bar(garden.ticks, args.ticks)
    canvas = garden.render_frame()
    if args.plain:
        print("\n".join(canvas.glyphs()))
    else:
        print(render_canvas(canvas, StyleCache()))
    print(garden.status_line())
    logger.info("headless run finished after %d ticks", garden.ticks)
    return 0


def run_interactive(garden: HarmonicGarden) -> int:
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        print("Error: interactive mode needs a terminal (try --headless)", file=sys.stderr)
        return 1

    with TerminalSession() as session:
        scheduler = FrameScheduler(garden, present=session.present)
        try:
            scheduler.run(session.poll)
        except KeyboardInterrupt:
            logger.info("interrupted")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, log_file=args.log_file, console=args.headless)
    garden = build_garden(args)
    logger.info(
        "starting: scene=%s formation=%s mood=%s freq=%.2f damping=%.2f",
        garden.scene.name, garden.formation_meta.name, garden.mood.name,
        garden.frequency, garden.damping,
    )

    if args.headless:
        code = run_headless(garden, args)
    else:
        code = run_interactive(garden)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
