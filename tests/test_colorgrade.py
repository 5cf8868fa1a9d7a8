"""Tests for hex blending and palette gradients."""

import numpy as np
import pytest

from harmonic_garden.base import CatalogError
from harmonic_garden.catalog import MOODS
from harmonic_garden.colorgrade import (
    blend_hex,
    color_at,
    gradient_rgb,
    hex_to_rgb,
    rgb_array_to_hex,
    rgb_to_hex,
)


class TestHexHelpers:
    def test_parse_is_case_insensitive(self):
        assert hex_to_rgb("#ff8bd5") == (255, 139, 213)
        assert hex_to_rgb("#FF8BD5") == (255, 139, 213)

    def test_format_uppercase(self):
        assert rgb_to_hex(255, 139, 213) == "#FF8BD5"
        assert rgb_to_hex(0, 4, 7) == "#000407"


class TestBlendHex:
    def test_endpoints(self):
        assert blend_hex("#000000", "#FFFFFF", 0.0) == "#000000"
        assert blend_hex("#000000", "#FFFFFF", 1.0) == "#FFFFFF"

    def test_midpoint_rounds_half_up(self):
        # 127.5 per channel rounds to 128
        assert blend_hex("#000000", "#FFFFFF", 0.5) == "#808080"

    def test_factor_is_clamped(self):
        assert blend_hex("#102030", "#405060", -3.0) == "#102030"
        assert blend_hex("#102030", "#405060", 7.5) == "#405060"


class TestColorAt:
    @pytest.mark.parametrize("mood", MOODS, ids=lambda m: m.slug)
    def test_first_stop_at_zero(self, mood):
        assert color_at(mood.palette, 0.0) == mood.palette[0]

    @pytest.mark.parametrize("mood", MOODS, ids=lambda m: m.slug)
    def test_last_stop_at_one(self, mood):
        """t = 1 lands on the final stop to within one unit per channel."""
        got = hex_to_rgb(color_at(mood.palette, 1.0))
        want = hex_to_rgb(mood.palette[-1])
        assert all(abs(a - b) <= 1 for a, b in zip(got, want))

    def test_out_of_range_is_clamped(self):
        stops = MOODS[0].palette
        assert color_at(stops, -5.0) == color_at(stops, 0.0)
        assert color_at(stops, 5.0) == color_at(stops, 1.0)

    def test_single_stop(self):
        for t in (-1.0, 0.0, 0.3, 1.0, 2.0):
            assert color_at(["#123456"], t) == "#123456"

    def test_empty_raises(self):
        with pytest.raises(CatalogError):
            color_at([], 0.5)

    def test_continuous(self):
        """Small steps in t never jump more than a few units per channel."""
        stops = MOODS[1].palette
        prev = hex_to_rgb(color_at(stops, 0.0))
        for t in np.linspace(0.0, 1.0, 1001)[1:]:
            cur = hex_to_rgb(color_at(stops, float(t)))
            assert max(abs(a - b) for a, b in zip(cur, prev)) <= 3
            prev = cur


class TestGradientRgb:
    def test_shape_and_dtype(self):
        vals = np.random.rand(18, 80)
        rgb = gradient_rgb(MOODS[0].palette, vals)
        assert rgb.shape == (18, 80, 3)
        assert rgb.dtype == np.uint8

    def test_matches_scalar(self):
        stops = MOODS[2].palette
        vals = np.random.default_rng(7).uniform(-0.2, 1.2, size=(12, 30))
        hexes = rgb_array_to_hex(gradient_rgb(stops, vals))
        for y in range(vals.shape[0]):
            for x in range(vals.shape[1]):
                assert hexes[y][x] == color_at(stops, float(vals[y, x]))

    def test_single_stop_broadcast(self):
        rgb = gradient_rgb(["#0A0B0C"], np.zeros((3, 4)))
        assert (rgb == np.array([10, 11, 12], dtype=np.uint8)).all()

    def test_empty_raises(self):
        with pytest.raises(CatalogError):
            gradient_rgb([], np.zeros((2, 2)))


def test_rgb_array_to_hex():
    rgb = np.array([[[255, 0, 16], [1, 2, 3]]], dtype=np.uint8)
    assert rgb_array_to_hex(rgb) == [["#FF0010", "#010203"]]
