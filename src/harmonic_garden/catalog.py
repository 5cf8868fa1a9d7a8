"""
Static catalogs: moods (themes), scenes, and formations.

Each entry is plain metadata tagged with an enum discriminant. The
behaviour attached to a discriminant (trajectory, formation offset,
backdrop shader) lives in a lookup table in the module that owns it.
"""

import enum
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from harmonic_garden.base import CatalogError
from harmonic_garden.colorgrade import color_at

_HEX = re.compile(r"^#[0-9A-Fa-f]{6}$")


class ShaderKind(enum.Enum):
    TIE_DYE = "tie_dye"
    SPORE = "spore"


class SceneKind(enum.IntEnum):
    ORBIT = 0
    ROSE = 1
    CASCADE = 2
    PULSE = 3
    WANDER = 4


class FormationKind(enum.IntEnum):
    HALO = 0
    RIBBON = 1
    BLOOM = 2
    HELIX = 3


@dataclass(frozen=True)
class Theme:
    """A mood: palette, backdrop colors, and glyph sets."""
    name: str
    description: str
    palette: Tuple[str, ...]
    background: str
    accent: str
    wisp_glyphs: str
    trail_glyphs: str
    seed_glyph: str
    seed_interval: float
    shader: Optional[ShaderKind] = None

    @property
    def slug(self) -> str:
        return _slugify(self.name)

    def color_at(self, t: float) -> str:
        return color_at(self.palette, t)


@dataclass(frozen=True)
class SceneMeta:
    id: SceneKind
    name: str
    description: str

    @property
    def slug(self) -> str:
        return _slugify(self.id.name)


@dataclass(frozen=True)
class FormationMeta:
    id: FormationKind
    name: str
    description: str

    @property
    def slug(self) -> str:
        return _slugify(self.name)


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def validate_moods(moods: Sequence[Theme]) -> Tuple[Theme, ...]:
    """Check every mood is renderable; raise CatalogError on the first defect."""
    if not moods:
        raise CatalogError("mood catalog is empty")
    for mood in moods:
        if not mood.palette:
            raise CatalogError(f"mood {mood.name!r} has no color stops")
        for color in mood.palette + (mood.background, mood.accent):
            if not _HEX.match(color):
                raise CatalogError(f"mood {mood.name!r} has malformed color {color!r}")
        if not mood.wisp_glyphs or not mood.trail_glyphs:
            raise CatalogError(f"mood {mood.name!r} needs backdrop and trail glyphs")
        if len(mood.seed_glyph) != 1:
            raise CatalogError(f"mood {mood.name!r} seed glyph must be one character")
        if mood.seed_interval <= 0:
            raise CatalogError(f"mood {mood.name!r} seed interval must be positive")
    return tuple(moods)


MOODS: Tuple[Theme, ...] = validate_moods([
    Theme(
        name="Aurora Bloom",
        description="Iridescent dusk fields and electric petals",
        palette=("#3E1F65", "#5C3C99", "#8D73FF", "#FF8BD5", "#FFE8A3"),
        background="#0B0618",
        accent="#FFD8FD",
        wisp_glyphs="  .`^",
        trail_glyphs=".*+o",
        seed_glyph="*",
        seed_interval=0.28,
    ),
    Theme(
        name="Cosmic Tie-Dye",
        description="Sunburst ripples and peace-wave whorls",
        palette=("#321040", "#7E1978", "#F54BA1", "#FFB94F", "#FFEFA9"),
        background="#150713",
        accent="#FFEFD2",
        wisp_glyphs="~-.=*",
        trail_glyphs=".*o+",
        seed_glyph="~",
        seed_interval=0.26,
        shader=ShaderKind.TIE_DYE,
    ),
    Theme(
        name="Solar Garden",
        description="Heat shimmer blooms and molten ribbons",
        palette=("#251605", "#813D0B", "#D66B02", "#FFAF45", "#F9F871"),
        background="#120701",
        accent="#FFE9B0",
        wisp_glyphs=" .,`\"",
        trail_glyphs=".+*x",
        seed_glyph="+",
        seed_interval=0.35,
    ),
    Theme(
        name="Deep Current",
        description="Bioluminescent swirls in tidal night",
        palette=("#010D1B", "#014F86", "#0DA5C0", "#7EF2FF", "#F8FFF6"),
        background="#000407",
        accent="#B4F1FF",
        wisp_glyphs=" .`~",
        trail_glyphs=".:*o",
        seed_glyph="*",
        seed_interval=0.24,
        shader=ShaderKind.SPORE,
    ),
])

SCENES: Tuple[SceneMeta, ...] = (
    SceneMeta(SceneKind.ORBIT, "Ellipse Drift", "Nested ellipses breathing in slow counterpoint"),
    SceneMeta(SceneKind.ROSE, "Rose Bloom", "Five-petal harmonics unfurling and collapsing"),
    SceneMeta(SceneKind.CASCADE, "Cascade", "Falling waterfall of envelopes and echoes"),
    SceneMeta(SceneKind.PULSE, "Pulse Spiral", "Heartbeat spiral with luminous bursts"),
    SceneMeta(SceneKind.WANDER, "Wander Field", "Noise-driven drift through latent space"),
)

FORMATIONS: Tuple[FormationMeta, ...] = (
    FormationMeta(FormationKind.HALO, "Halo", "Radial orbits with delicate offsets"),
    FormationMeta(FormationKind.RIBBON, "Ribbon", "Flowing comet tails weaving in stereo"),
    FormationMeta(FormationKind.BLOOM, "Bloom", "Petal clusters breathing with the beat"),
    FormationMeta(FormationKind.HELIX, "Helix", "Twisted lattice rippling through depth"),
)


def formation_index(kind: FormationKind) -> int:
    for i, meta in enumerate(FORMATIONS):
        if meta.id == kind:
            return i
    return 0


def index_by_slug(entries: Sequence, slug: str) -> int:
    """Position of the catalog entry whose slug matches, for CLI lookups."""
    for i, entry in enumerate(entries):
        if entry.slug == slug:
            return i
    raise KeyError(slug)
