"""Tests for the mood, scene, and formation catalogs."""

import dataclasses

import pytest

from harmonic_garden.base import CatalogError
from harmonic_garden.catalog import (
    FORMATIONS,
    MOODS,
    SCENES,
    FormationKind,
    SceneKind,
    ShaderKind,
    formation_index,
    index_by_slug,
    validate_moods,
)


class TestCatalogContents:
    def test_counts(self):
        assert len(MOODS) == 4
        assert len(SCENES) == 5
        assert len(FORMATIONS) == 4

    def test_default_entries(self):
        assert MOODS[0].name == "Aurora Bloom"
        assert SCENES[0].id is SceneKind.ORBIT
        assert FORMATIONS[0].id is FormationKind.HALO

    def test_shaders(self):
        shaders = {m.slug: m.shader for m in MOODS}
        assert shaders == {
            "aurora-bloom": None,
            "cosmic-tie-dye": ShaderKind.TIE_DYE,
            "solar-garden": None,
            "deep-current": ShaderKind.SPORE,
        }

    def test_scene_order_matches_kind(self):
        assert [s.id for s in SCENES] == list(SceneKind)

    def test_slugs_unique(self):
        for entries in (MOODS, SCENES, FORMATIONS):
            slugs = [e.slug for e in entries]
            assert len(set(slugs)) == len(slugs)


class TestLookups:
    def test_index_by_slug(self):
        assert index_by_slug(MOODS, "deep-current") == 3
        assert index_by_slug(SCENES, "wander") == 4
        assert index_by_slug(FORMATIONS, "helix") == 3

    def test_unknown_slug(self):
        with pytest.raises(KeyError):
            index_by_slug(SCENES, "spiral")

    def test_formation_index(self):
        for i, meta in enumerate(FORMATIONS):
            assert formation_index(meta.id) == i


class TestValidateMoods:
    def test_accepts_builtin(self):
        assert validate_moods(MOODS) == MOODS

    def test_rejects_empty_catalog(self):
        with pytest.raises(CatalogError):
            validate_moods([])

    @pytest.mark.parametrize("change", [
        {"palette": ()},
        {"background": "#12345"},
        {"accent": "blue"},
        {"trail_glyphs": ""},
        {"seed_glyph": "**"},
        {"seed_interval": 0.0},
    ])
    def test_rejects_malformed(self, change):
        broken = dataclasses.replace(MOODS[0], **change)
        with pytest.raises(CatalogError):
            validate_moods([broken])
