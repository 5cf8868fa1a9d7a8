"""
Terminal presentation.

Turns finished canvases into ANSI truecolor text, draws the status
footer and help overlay, decodes key presses into controller actions,
and owns the terminal while the garden is running interactively.
"""

import logging
import os
import select
import shutil
import sys
import termios
import tty
from typing import Dict, List, Optional, Tuple

from harmonic_garden.canvas import Canvas
from harmonic_garden.colorgrade import hex_to_rgb
from harmonic_garden.controller import Action
from harmonic_garden.garden import HarmonicGarden
from harmonic_garden.scheduler import Event, KeyAction, Resize

logger = logging.getLogger("harmonic_garden.display")

CSI = "\x1b["
RESET = CSI + "0m"
HOME = CSI + "H"
CLEAR_BELOW = CSI + "J"
ALT_SCREEN_ON = CSI + "?1049h"
ALT_SCREEN_OFF = CSI + "?1049l"
HIDE_CURSOR = CSI + "?25l"
SHOW_CURSOR = CSI + "?25h"

# 256-color chrome for the footer
RULE_SGR = CSI + "38;5;213m"
TITLE_SGR = CSI + "1;38;5;205m"
VALUE_SGR = CSI + "38;5;111m"
STATUS_SGR = CSI + "38;5;230;48;5;57m"
BANNER_SGR = CSI + "1;38;5;213m"
HELP_SGR = CSI + "38;5;230;48;5;54m"
HINT_SGR = CSI + "38;5;244m"

PLACEHOLDER = "the garden is tuning resonances..."

StyleKey = Tuple[str, str, bool]


class StyleCache:
    """Memoized SGR prefixes keyed by (foreground, background, bold)."""

    def __init__(self):
        self._styles: Dict[StyleKey, str] = {}

    def __len__(self) -> int:
        return len(self._styles)

    def sgr(self, fg: str, bg: str, bold: bool) -> str:
        key = (fg, bg, bold)
        style = self._styles.get(key)
        if style is None:
            params = ["0"]
            if bold:
                params.append("1")
            if fg:
                params.append("38;2;%d;%d;%d" % hex_to_rgb(fg))
            if bg:
                params.append("48;2;%d;%d;%d" % hex_to_rgb(bg))
            style = CSI + ";".join(params) + "m"
            self._styles[key] = style
        return style


def render_canvas(canvas: Canvas, cache: StyleCache) -> str:
    """ANSI text for a canvas; style codes are emitted only when they change."""
    lines = []
    for row in canvas:
        parts = []
        current = None
        for cell in row:
            style = cache.sgr(cell.fg, cell.bg, cell.bold)
            if style != current:
                parts.append(style)
                current = style
            parts.append(cell.glyph)
        parts.append(RESET)
        lines.append("".join(parts))
    return "\n".join(lines)


# Key name -> action. Names are what ``decode_keys`` produces.
KEYMAP: Dict[str, Action] = {
    "q": Action.QUIT,
    "ctrl+c": Action.QUIT,
    "space": Action.TOGGLE_MODE,
    "tab": Action.CYCLE_SCENE,
    "f": Action.CYCLE_FORMATION,
    "m": Action.CYCLE_MOOD,
    "+": Action.ADD_FOLLOWER,
    "=": Action.ADD_FOLLOWER,
    "a": Action.ADD_FOLLOWER,
    "-": Action.REMOVE_FOLLOWER,
    "_": Action.REMOVE_FOLLOWER,
    "d": Action.REMOVE_FOLLOWER,
    "'": Action.FREQUENCY_UP,
    "]": Action.FREQUENCY_UP,
    ";": Action.FREQUENCY_DOWN,
    "[": Action.FREQUENCY_DOWN,
    ".": Action.DAMPING_UP,
    ">": Action.DAMPING_UP,
    ",": Action.DAMPING_DOWN,
    "<": Action.DAMPING_DOWN,
    "up": Action.NUDGE_NORTH,
    "k": Action.NUDGE_NORTH,
    "down": Action.NUDGE_SOUTH,
    "j": Action.NUDGE_SOUTH,
    "left": Action.NUDGE_WEST,
    "h": Action.NUDGE_WEST,
    "right": Action.NUDGE_EAST,
    "l": Action.NUDGE_EAST,
    "?": Action.TOGGLE_HELP,
    "/": Action.TOGGLE_HELP,
}

# (keys shown, description) grouped as in the full help view
HELP_GROUPS: List[List[Tuple[str, str]]] = [
    [("space", "auto/manual"), ("tab", "next scene"), ("f", "next formation"), ("m", "next mood")],
    [("'", "freq +"), (";", "freq -"), (".", "damping +"), (",", "damping -")],
    [("↑/k", "drift north"), ("↓/j", "drift south"), ("←/h", "drift west"), ("→/l", "drift east")],
    [("+", "add muse"), ("-", "trim muse"), ("?", "toggle help"), ("q", "quit")],
]

SHORT_HELP: List[Tuple[str, str]] = [
    ("space", "auto/manual"),
    ("tab", "next scene"),
    ("f", "next formation"),
    ("m", "next mood"),
    ("+", "add muse"),
    ("-", "trim muse"),
    ("?", "toggle help"),
]

# Final bytes of unmodified cursor keys, after "ESC [" or "ESC O"
_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}
_SPECIAL = {" ": "space", "\t": "tab", "\x03": "ctrl+c"}


def _is_final_byte(ch: str) -> bool:
    return "\x40" <= ch <= "\x7e"


def decode_keys(data: str) -> List[str]:
    """
    Split raw terminal input into key names.

    ``ESC [`` and ``ESC O`` sequences are consumed whole, through their
    final byte. Plain arrows become ``up``/``down``/``left``/``right``;
    any other sequence (PageUp, Home, modified arrows) yields nothing.
    """
    keys = []
    i = 0
    n = len(data)
    while i < n:
        ch = data[i]
        if ch == "\x1b" and i + 1 < n and data[i + 1] in "[O":
            end = i + 2
            while end < n and not _is_final_byte(data[end]):
                end += 1
            name = _ARROWS.get(data[i + 2:end + 1])
            if name is not None:
                keys.append(name)
            i = end + 1
            continue
        i += 1
        if ch == "\x1b":
            continue
        keys.append(_SPECIAL.get(ch, ch))
    return keys


def render_footer(garden: HarmonicGarden) -> str:
    bits = [
        ("scene", garden.scene.name),
        ("formation", garden.formation_meta.name),
        ("mood", garden.mood.name),
        ("mode", garden.mode_label()),
        ("freq", f"{garden.frequency:.2f}"),
        ("damping", f"{garden.damping:.2f}"),
        ("muses", str(len(garden.swarm))),
    ]
    status = "  ".join(f"{TITLE_SGR}{k}{STATUS_SGR} {VALUE_SGR}{v}{STATUS_SGR}" for k, v in bits)
    short = " • ".join(f"{k} {desc}" for k, desc in SHORT_HELP)
    lines = [
        RULE_SGR + "─" * garden.canvas_width + RESET,
        f"{BANNER_SGR}harmonic garden{RESET}  {garden.scene.description}",
        f"{STATUS_SGR} {status} {RESET}",
        f"{HINT_SGR}{short}{RESET}",
    ]
    return "\n".join(lines)


def render_help() -> str:
    width = max(len(f"{k} {d}") for group in HELP_GROUPS for k, d in group)
    lines = [""]
    for row in range(max(len(g) for g in HELP_GROUPS)):
        cols = []
        for group in HELP_GROUPS:
            if row < len(group):
                keys, desc = group[row]
                cols.append(f"{keys} {desc}".ljust(width))
        lines.append("  " + "    ".join(cols) + "  ")
    lines.append("")
    return "\n".join(f"{HELP_SGR}{line}{RESET}" for line in lines)


def render_view(garden: HarmonicGarden, cache: StyleCache) -> str:
    """The whole screen: canvas, footer, and the help overlay when toggled on."""
    if not garden.ready:
        return PLACEHOLDER
    parts = [render_canvas(garden.render_frame(), cache), render_footer(garden)]
    if garden.show_help:
        parts.append(render_help())
    return "\n".join(parts)


class TerminalSession:
    """
    Owns the terminal for an interactive run.

    Enters the alternate screen in cbreak mode, reports resizes and key
    presses as scheduler events, and always restores the terminal on exit.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.cache = StyleCache()
        self._size: Optional[Tuple[int, int]] = None
        self._saved = None

    def __enter__(self) -> "TerminalSession":
        fd = self.stdin.fileno()
        self._saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        self.stdout.write(ALT_SCREEN_ON + HIDE_CURSOR + HOME + CLEAR_BELOW)
        self.stdout.flush()
        logger.info("terminal session opened")
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stdout.write(RESET + SHOW_CURSOR + ALT_SCREEN_OFF)
        self.stdout.flush()
        if self._saved is not None:
            termios.tcsetattr(self.stdin.fileno(), termios.TCSADRAIN, self._saved)
        logger.info("terminal session restored")
        return False

    def poll(self, timeout: float) -> List[Event]:
        events: List[Event] = []
        size = shutil.get_terminal_size()
        if (size.columns, size.lines) != self._size:
            self._size = (size.columns, size.lines)
            events.append(Resize(size.columns, size.lines))

        ready, _, _ = select.select([self.stdin], [], [], 0 if events else timeout)
        if ready:
            data = os.read(self.stdin.fileno(), 1024).decode(errors="ignore")
            for key in decode_keys(data):
                action = KEYMAP.get(key)
                if action is not None:
                    events.append(KeyAction(action))
        return events

    def present(self, garden: HarmonicGarden):
        self.stdout.write(HOME + render_view(garden, self.cache) + CLEAR_BELOW)
        self.stdout.flush()
