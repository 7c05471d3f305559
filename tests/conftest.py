"""
Pytest configuration and fixtures for Gray-Scott tests.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from grayscott.config import Config
from grayscott.simulation import Simulation
from grayscott.state import CellState, create_initial_state, create_uniform_state


@pytest.fixture
def default_config() -> Config:
    """Default configuration for tests."""
    return Config(width=32, height=32)


@pytest.fixture
def small_config() -> Config:
    """Small grid for exact arithmetic checks."""
    return Config(width=5, height=5)


@pytest.fixture
def default_state(default_config: Config) -> CellState:
    """Resting state for tests."""
    return create_initial_state(default_config)


@pytest.fixture
def seeded_state(small_config: Config) -> CellState:
    """5x5 grid seeded everywhere with (a=0, b=1)."""
    return create_uniform_state(small_config.width, small_config.height, 0.0, 1.0)


@pytest.fixture
def simulation(default_config: Config) -> Simulation:
    """Simulation seeded with the default centered block."""
    return Simulation(default_config)


@pytest.fixture(autouse=True)
def close_figures():
    """Release matplotlib figures created by a test."""
    yield
    plt.close("all")
