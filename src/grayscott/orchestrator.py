"""
Update orchestrator for Gray-Scott.

Drives a Simulation on behalf of a host that evaluates once per UI cycle or
animation frame. A reset signal rebuilds the grid, a run signal advances it
by one step, and only every Nth orchestrated tick pays for a rendering pass.
"""

from typing import Any, Callable, Optional

from .config import Config
from .simulation import Simulation
from .state import CellState
from .visualization import state_to_grayscale


Renderer = Callable[[CellState], Any]


class Orchestrator:
    """
    Reset/run driver with throttled rendering.

    Attributes:
        config: Configuration used by the last reset
        simulation: Grid simulator being driven
        debug_log: Messages from the most recent tick
        frame: Output of the most recent rendering pass (None until the first)
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        renderer: Renderer = state_to_grayscale,
        simulation: Optional[Simulation] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            config: Configuration for a freshly built simulation
            renderer: Callable turning a snapshot into a frame
            simulation: Already configured (and possibly seeded) simulation
                to drive instead of building one from config
        """
        self.renderer = renderer
        self.debug_log: list[str] = []
        if simulation is not None:
            self._attach(simulation)
        else:
            self._attach(Simulation(config if config is not None else Config()))

    @property
    def frame_count(self) -> int:
        """Steps since the last reset."""
        return self.simulation.step_count

    @property
    def render_counter(self) -> int:
        """Ticks since the last rendering pass."""
        return self._render_counter

    def _attach(self, simulation: Simulation) -> None:
        """Drive simulation from a clean slate."""
        self.simulation = simulation
        self.config = simulation.config
        self.debug_log.clear()
        self._render_counter = 0
        self.frame = None

    def reset(self, config: Optional[Config] = None) -> None:
        """
        Rebuild the simulation and clear per-run bookkeeping.

        Args:
            config: New configuration (keeps the previous one if omitted)

        Raises:
            ValueError: If config is invalid
        """
        self._attach(Simulation(config if config is not None else self.config))

    def update(self) -> bool:
        """
        Advance one step, rendering on every render_interval-th call.

        Returns:
            True if a rendering pass ran on this tick
        """
        self.debug_log.clear()
        self.simulation.step()
        self.debug_log.append(str(self.frame_count))

        self._render_counter += 1
        if self._render_counter < self.config.render_interval:
            return False

        self._render_counter = 0
        self.frame = self.renderer(self.simulation.snapshot())
        return True

    def tick(self, reset: bool = False, run: bool = False, config: Optional[Config] = None):
        """
        One host evaluation: optional reset, then optional step.

        Args:
            reset: Rebuild the grid before anything else
            run: Advance the simulation by one step
            config: Configuration to apply when resetting

        Returns:
            Tuple of (debug_log copy, latest rendered frame)
        """
        if reset:
            self.reset(config)
        if run:
            self.update()
        return list(self.debug_log), self.frame
