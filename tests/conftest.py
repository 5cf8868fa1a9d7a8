"""Pytest configuration and shared fixtures."""

import logging

import numpy as np
import pytest

from harmonic_garden.base import GardenConfig
from harmonic_garden.catalog import MOODS, Theme
from harmonic_garden.garden import HarmonicGarden
from harmonic_garden.logger_setup import LOGGER_NAME

TEST_SEED = 42


@pytest.fixture
def config() -> GardenConfig:
    return GardenConfig(seed=TEST_SEED)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(TEST_SEED)


@pytest.fixture
def theme() -> Theme:
    """Aurora Bloom: the default mood, no shader."""
    return MOODS[0]


@pytest.fixture
def garden(config) -> HarmonicGarden:
    """
    A seeded garden on an 80x24 display (80x18 canvas), ready to tick.
    """
    g = HarmonicGarden(config)
    g.resize(80, 24)
    return g


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers main() installs so later tests never write to a closed capture stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
