"""
Pytest configuration and shared fixtures for the sonification tests.
"""
import numpy as np
import pytest

from L5_sonification import LoopedSoundCollection


@pytest.fixture
def empty_grid():
    """64x64 grid with no data."""
    return np.full((64, 64), np.inf)


@pytest.fixture
def square_grid(empty_grid):
    """Single 3x3 square of cells at 0.5 m, centred on the optical axis."""
    empty_grid[31:34, 31:34] = 0.5
    return empty_grid


@pytest.fixture
def pool():
    """Looped sound collection with eight channels."""
    collection = LoopedSoundCollection()
    yield collection
    collection.close()


@pytest.fixture
def single_channel_pool():
    collection = LoopedSoundCollection(sounds=["only_sound"])
    yield collection
    collection.close()
