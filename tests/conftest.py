"""Shared pytest fixtures for the edgelab test suite.

Fixtures:
    rng: A seeded random.Random so tests that inject a stream are stable
    store: PresetStore backed by a throwaway JSON file
    reset_edgelab_logger: Undo handler/level changes made by the CLI
"""

import logging
import random

import pytest

from edgelab.presets import PresetStore


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def store(tmp_path):
    return PresetStore(tmp_path / "presets.json")


@pytest.fixture(autouse=True)
def reset_edgelab_logger():
    yield
    logger = logging.getLogger("edgelab")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
