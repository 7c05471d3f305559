"""
Gray-Scott reaction-diffusion update.

Reaction system:
  A + 2B → 3B    (autocatalysis, rate a·b²)
  ∅ → A          (feed, rate feed·(1 - a))
  B → ∅          (removal, rate (kill + feed)·b)

Integrated with explicit Euler and a unit time step:
  a' = a + D_A·∇²a - a·b² + feed·(1 - a)
  b' = b + D_B·∇²b + a·b² - (kill + feed)·b

Both results are clamped to [0, 1].
"""

import mlx.core as mx

from .config import Config
from .diffusion import interior_laplacian
from .state import CellState


def compute_reaction_terms(
    a: mx.array,
    b: mx.array,
    feed: float,
    kill: float,
) -> tuple[mx.array, mx.array]:
    """
    Compute the local (non-diffusive) Gray-Scott rates.

    Args:
        a: Concentration of A
        b: Concentration of B
        feed: Feed rate
        kill: Kill rate

    Returns:
        Tuple of (dA, dB) reaction contributions
    """
    abb = a * b * b
    dA = -abb + feed * (1.0 - a)
    dB = abb - (kill + feed) * b
    return dA, dB


def compute_interior_update(state: CellState, config: Config) -> tuple[mx.array, mx.array]:
    """
    Compute next-step concentrations for every interior cell.

    Args:
        state: Buffer holding the state at time t
        config: Simulation configuration

    Returns:
        Tuple of (A, B) arrays [H-2, W-2] for time t+1, clamped to [0, 1]
    """
    a = state.A[1:-1, 1:-1]
    b = state.B[1:-1, 1:-1]

    lap_a = interior_laplacian(state.A)
    lap_b = interior_laplacian(state.B)

    react_a, react_b = compute_reaction_terms(a, b, config.feed, config.kill)

    new_a = a + config.D_A * lap_a + react_a
    new_b = b + config.D_B * lap_b + react_b

    return mx.clip(new_a, 0.0, 1.0), mx.clip(new_b, 0.0, 1.0)
