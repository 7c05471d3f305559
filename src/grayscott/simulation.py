"""
Grid simulator for Gray-Scott.

Owns two equally sized buffers. Each step reads the current buffer, writes
the interior of the other one, then swaps their roles.
"""

from typing import Callable, Optional

import mlx.core as mx
from tqdm import tqdm

from .config import Config
from .state import (
    CellState,
    SeedRegion,
    create_initial_state,
    default_seed_region,
    seed_state,
)
from .reactions import compute_interior_update


# Sentinel meaning "seed the canonical centered block"
DEFAULT_SEED = "default"


class Simulation:
    """
    Gray-Scott simulation manager.

    Attributes:
        config: Simulation configuration
        step_count: Number of steps executed since the last configure
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        seed_region=DEFAULT_SEED,
    ):
        """
        Initialize simulation.

        Args:
            config: Simulation configuration (defaults to Config())
            seed_region: SeedRegion to perturb after allocation, DEFAULT_SEED
                for the centered block, or None to leave the field at rest
        """
        self.configure(config if config is not None else Config(), seed_region)

    def configure(self, config: Config, seed_region=DEFAULT_SEED) -> None:
        """
        Allocate fresh buffers for config and reset the frame counter.

        Args:
            config: Validated simulation configuration
            seed_region: See __init__

        Raises:
            ValueError: If the seed region does not fit the grid
        """
        if not isinstance(config, Config):
            raise ValueError(f"config must be a Config, got {type(config).__name__}")

        current = create_initial_state(config)
        if seed_region is not None:
            if seed_region == DEFAULT_SEED:
                seed_region = default_seed_region(config.width, config.height)
            seed_state(current, SeedRegion(*seed_region))

        self.config = config
        self._buffers = [current, current.clone()]
        self._current = 0
        self.step_count = 0
        mx.eval(current.A, current.B)

    @property
    def state(self) -> CellState:
        """The current buffer (not a copy; treat as read-only)."""
        return self._buffers[self._current]

    @property
    def shape(self) -> tuple[int, int]:
        return self.config.shape

    def seed(self, x_min: int, x_max: int, y_min: int, y_max: int) -> None:
        """
        Set every cell with x_min <= x < x_max and y_min <= y < y_max to (0, 1).

        Both buffers are written so that border cells agree across swaps.

        Raises:
            ValueError: If the rectangle is empty or leaves the grid
        """
        region = SeedRegion(x_min, x_max, y_min, y_max)
        for buffer in self._buffers:
            seed_state(buffer, region)
        mx.eval(*(arr for buffer in self._buffers for arr in (buffer.A, buffer.B)))

    def step(self) -> None:
        """
        Advance simulation by one timestep.

        Update order:
            1. Compute Laplacian and reaction terms on the current buffer
            2. Write the clamped interior into the next buffer
            3. Swap buffer roles
            4. Increment the frame counter
        """
        current = self._buffers[self._current]
        target = self._buffers[1 - self._current]

        new_A, new_B = compute_interior_update(current, self.config)
        target.A[1:-1, 1:-1] = new_A
        target.B[1:-1, 1:-1] = new_B
        mx.eval(target.A, target.B)

        self._current = 1 - self._current
        self.step_count += 1

    def snapshot(self) -> CellState:
        """Copy of the current buffer for renderers and analysis."""
        return self.state.clone()

    def run(
        self,
        steps: int,
        callback: Optional[Callable[["Simulation"], None]] = None,
        callback_interval: int = 100,
        show_progress: bool = True,
    ) -> None:
        """
        Run simulation for multiple steps.

        Args:
            steps: Number of steps to run
            callback: Optional function called periodically
            callback_interval: How often to call callback
            show_progress: Whether to show progress bar
        """
        iterator = range(steps)
        if show_progress:
            iterator = tqdm(iterator, desc="Simulating")

        for i in iterator:
            self.step()

            if callback is not None and (i + 1) % callback_interval == 0:
                callback(self)

    def reset(self, seed_region=DEFAULT_SEED) -> None:
        """Rebuild both buffers with the current configuration."""
        self.configure(self.config, seed_region)
