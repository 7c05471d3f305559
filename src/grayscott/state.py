"""
Grid state representation, initialization and seeding for Gray-Scott.

The state consists of two concentration fields:
- A: the fed chemical, 1 everywhere at rest
- B: the autocatalytic chemical, 0 everywhere at rest

Arrays are indexed [y, x], so a grid of width W and height H has shape [H, W].
"""

from dataclasses import dataclass
from typing import NamedTuple

import mlx.core as mx

from .config import Config


# Resting state: uniform field that never evolves on its own
REST_A = 1.0
REST_B = 0.0

# Perturbed state written by the seeder
SEED_A = 0.0
SEED_B = 1.0


class Cell(NamedTuple):
    """Concentration pair at a single grid position."""

    a: float
    b: float


class SeedRegion(NamedTuple):
    """Half-open rectangle x_min <= x < x_max, y_min <= y < y_max."""

    x_min: int
    x_max: int
    y_min: int
    y_max: int

    def validate(self, width: int, height: int) -> None:
        """Raise ValueError unless the rectangle is non-empty and inside the grid."""
        for name, lo, hi, limit in (
            ("x", self.x_min, self.x_max, width),
            ("y", self.y_min, self.y_max, height),
        ):
            if not 0 <= lo < hi <= limit:
                raise ValueError(
                    f"seed {name} range [{lo}, {hi}) must satisfy "
                    f"0 <= {name}_min < {name}_max <= {limit}"
                )


@dataclass
class CellState:
    """
    One grid buffer of the simulation.

    Attributes:
        A: Concentration of chemical A [H, W]
        B: Concentration of chemical B [H, W]
    """

    A: mx.array
    B: mx.array

    @property
    def shape(self) -> tuple[int, int]:
        """Grid dimensions (H, W)."""
        return tuple(self.A.shape)

    @property
    def width(self) -> int:
        return self.A.shape[1]

    @property
    def height(self) -> int:
        return self.A.shape[0]

    def cell(self, x: int, y: int) -> Cell:
        """Read the concentration pair at column x, row y."""
        return Cell(self.A[y, x].item(), self.B[y, x].item())

    def clone(self) -> "CellState":
        """Create a deep copy of the state."""
        return CellState(A=mx.array(self.A), B=mx.array(self.B))


def create_initial_state(config: Config) -> CellState:
    """
    Create a resting grid (a=1, b=0 in every cell).

    Args:
        config: Simulation configuration

    Returns:
        CellState sized to the configured resolution
    """
    H, W = config.shape
    return create_uniform_state(W, H, REST_A, REST_B)


def create_uniform_state(
    width: int,
    height: int,
    A_val: float = REST_A,
    B_val: float = REST_B,
) -> CellState:
    """
    Create a uniform state (useful for testing).

    Args:
        width: Grid width
        height: Grid height
        A_val: Uniform A concentration
        B_val: Uniform B concentration

    Returns:
        CellState with uniform values
    """
    return CellState(
        A=mx.full((height, width), A_val, dtype=mx.float32),
        B=mx.full((height, width), B_val, dtype=mx.float32),
    )


def default_seed_region(width: int, height: int) -> SeedRegion:
    """
    Centered square block used to kick off pattern formation after a reset.

    The block side is a tenth of the shorter grid dimension (at least one
    cell), which on the default 100x100 grid gives a 10x10 block.
    """
    side = max(1, min(width, height) // 10)
    x_min = (width - side) // 2
    y_min = (height - side) // 2
    return SeedRegion(x_min, x_min + side, y_min, y_min + side)


def seed_state(state: CellState, region: SeedRegion) -> None:
    """
    Overwrite a rectangle of the grid with (a=0, b=1) in place.

    Args:
        state: Buffer to perturb
        region: Rectangle to seed, validated against the buffer size

    Raises:
        ValueError: If the rectangle is empty or leaves the grid
    """
    region.validate(state.width, state.height)
    ys = slice(region.y_min, region.y_max)
    xs = slice(region.x_min, region.x_max)
    state.A[ys, xs] = SEED_A
    state.B[ys, xs] = SEED_B
