"""
grayscott - Gray-Scott reaction-diffusion on a fixed-border grid.

A double-buffered two-chemical simulator with a throttled rendering driver.
"""

__version__ = "0.1.0"

from .config import Config
from .state import Cell, CellState, SeedRegion, create_initial_state
from .simulation import Simulation
from .orchestrator import Orchestrator

__all__ = [
    "Config",
    "Cell",
    "CellState",
    "SeedRegion",
    "create_initial_state",
    "Simulation",
    "Orchestrator",
    "__version__",
]
