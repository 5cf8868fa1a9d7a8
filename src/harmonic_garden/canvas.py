"""
Layered cell canvas.

A frame is composed in four ordered passes onto a fresh grid of styled
cells. A write lands only when its priority is at least the priority
already in the cell, so equal priorities go to the later painter.
"""

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from harmonic_garden.base import Vector, clamp
from harmonic_garden.catalog import Theme
from harmonic_garden.colorgrade import blend_hex
from harmonic_garden.particles import Seed
from harmonic_garden.shaders import ambient_layer, shade
from harmonic_garden.swarm import Follower

PRIORITY_BACKDROP = 0
PRIORITY_TRAIL = 1
PRIORITY_HEAD = 3
PRIORITY_SEED = 4
PRIORITY_TARGET = 5

HEAD_GLYPH = "@"
TARGET_GLYPH = "#"


@dataclass
class Cell:
    glyph: str = " "
    fg: str = ""
    bg: str = ""
    bold: bool = False
    priority: int = PRIORITY_BACKDROP


class Canvas:
    """Row-major ``height x width`` grid of cells."""

    def __init__(self, width: int, height: int, background: str = ""):
        self.width = max(width, 0)
        self.height = max(height, 0)
        self.rows: List[List[Cell]] = [
            [Cell(bg=background) for _ in range(self.width)] for _ in range(self.height)
        ]

    def __iter__(self) -> Iterator[List[Cell]]:
        return iter(self.rows)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Optional[Cell]:
        if not self.contains(x, y):
            return None
        return self.rows[y][x]

    def paint(self, x: int, y: int, glyph: str, fg: str, bold: bool, priority: int) -> bool:
        """
        Overwrite the cell at (x, y) if ``priority`` is at least its current one.

        The existing background is kept. Out-of-bounds writes are dropped.
        Returns True when the write landed.
        """
        current = self.cell(x, y)
        if current is None or priority < current.priority:
            return False
        self.rows[y][x] = Cell(glyph=glyph, fg=fg, bg=current.bg, bold=bold, priority=priority)
        return True

    def glyphs(self) -> List[str]:
        """Plain text rows, for headless output and tests."""
        return ["".join(c.glyph for c in row) for row in self.rows]


def paint_backdrop(canvas: Canvas, theme: Theme, time: float):
    """Ambient wisp field, overridden per cell by the mood's shader when it has one."""
    if canvas.width == 0 or canvas.height == 0:
        return
    glyphs, fgs = ambient_layer(theme, canvas.width, canvas.height, time)
    for y, row in enumerate(canvas.rows):
        for x in range(canvas.width):
            glyph, fg, bg = glyphs[y][x], fgs[y][x], theme.background
            s_glyph, s_fg, s_bg = shade(theme, float(x), float(y), time, canvas.width, canvas.height)
            row[x] = Cell(
                glyph=s_glyph or glyph,
                fg=s_fg or fg,
                bg=s_bg or bg,
                priority=PRIORITY_BACKDROP,
            )


def paint_trails(canvas: Canvas, theme: Theme, followers: Iterable[Follower], exponent: float = 1.3):
    """Comet tails, oldest point first; the newest point is drawn as the head."""
    glyph_count = len(theme.trail_glyphs)
    for f in followers:
        trail_len = len(f.trail)
        if trail_len == 0:
            continue
        for i, point in enumerate(f.trail):
            x, y = point.rounded()
            if not canvas.contains(x, y):
                continue
            strength = math.pow((i + 1) / trail_len, exponent)
            fg = theme.color_at(clamp(strength * 0.8 + f.palette_seed * 0.3, 0, 1))
            glyph = theme.trail_glyphs[min(int(strength * glyph_count), glyph_count - 1)]
            priority = PRIORITY_TRAIL
            if i == trail_len - 1:
                glyph = HEAD_GLYPH
                priority = PRIORITY_HEAD
            canvas.paint(x, y, glyph, fg, i >= trail_len - 2, priority)


def paint_seeds(canvas: Canvas, theme: Theme, seeds: Iterable[Seed]):
    """Sparks fading toward the palette's brightest tone as they age."""
    for seed in seeds:
        x, y = seed.position.rounded()
        if not canvas.contains(x, y):
            continue
        glow = clamp(1 - seed.life / seed.ttl, 0, 1)
        fg = blend_hex(seed.color, theme.color_at(0.98), 1 - glow * 0.65)
        canvas.paint(x, y, seed.glyph, fg, True, PRIORITY_SEED)


def paint_target(canvas: Canvas, theme: Theme, target: Vector):
    x, y = target.rounded()
    canvas.paint(x, y, TARGET_GLYPH, theme.accent, True, PRIORITY_TARGET)


def compose(
    width: int,
    height: int,
    theme: Theme,
    followers: Iterable[Follower],
    seeds: Iterable[Seed],
    target: Vector,
    time: float,
    trail_exponent: float = 1.3,
) -> Canvas:
    """Build one finished frame: backdrop, trails, seeds, then the target marker."""
    canvas = Canvas(width, height, theme.background)
    paint_backdrop(canvas, theme, time)
    paint_trails(canvas, theme, followers, trail_exponent)
    paint_seeds(canvas, theme, seeds)
    paint_target(canvas, theme, target)
    return canvas
