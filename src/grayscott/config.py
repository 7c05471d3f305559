"""
Configuration dataclass for Gray-Scott simulation parameters.

One validated record replaces loose per-parameter setters: changing any value
means building a new Config and reconfiguring the simulation.
"""

from dataclasses import dataclass, asdict
from typing import Any
import math
import numbers

import numpy as np


# Smallest grid that still has one interior cell inside the fixed border
MIN_GRID_DIM = 3

# Largest rate representable in the float32 grid arithmetic
FLOAT32_MAX = float(np.finfo(np.float32).max)


@dataclass(frozen=True)
class Config:
    """
    Complete configuration for a Gray-Scott simulation.

    Defaults reproduce the classic "mitosis" parameter set on a 100x100 grid.

    Attributes:
        width: Number of cells along x
        height: Number of cells along y

        # Diffusion parameters
        D_A: Diffusion rate of chemical A
        D_B: Diffusion rate of chemical B

        # Reaction parameters
        feed: Rate at which A is fed into the system
        kill: Rate at which B is removed from the system

        # Presentation cadence
        render_interval: Orchestrated ticks between two rendering passes
    """

    # Grid
    width: int = 100
    height: int = 100

    # Diffusion
    D_A: float = 1.0
    D_B: float = 0.3

    # Reaction
    feed: float = 0.055
    kill: float = 0.062

    # Rendering
    render_interval: int = 6

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        self._validate()

    def _validate(self) -> None:
        """Check that all parameters are in valid ranges."""
        for name in ("width", "height", "render_interval"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            # Plain int so shapes built from it are accepted by mlx
            object.__setattr__(self, name, int(value))

        for name in ("width", "height"):
            value = getattr(self, name)
            if value < MIN_GRID_DIM:
                raise ValueError(f"{name} must be >= {MIN_GRID_DIM}, got {value}")

        if self.render_interval < 1:
            raise ValueError(f"render_interval must be >= 1, got {self.render_interval}")

        for name in ("D_A", "D_B", "feed", "kill"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")
            # The grid is float32; larger rates overflow to inf and inf * 0 is NaN
            if value > FLOAT32_MAX:
                raise ValueError(f"{name} must be <= {FLOAT32_MAX:.6g}, got {value}")
            object.__setattr__(self, name, float(value))

        if self.kill + self.feed > FLOAT32_MAX:
            raise ValueError(
                f"kill + feed must be <= {FLOAT32_MAX:.6g}, got {self.kill + self.feed}"
            )

    @property
    def shape(self) -> tuple[int, int]:
        """Grid array shape (H, W)."""
        return (self.height, self.width)

    def replace(self, **changes: Any) -> "Config":
        """Return a validated copy with some fields changed."""
        return Config(**{**self.to_dict(), **changes})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "Config":
        """Create config from dictionary, ignoring unknown keys."""
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        return cls(**{k: v for k, v in d.items() if k in known_fields})

    @classmethod
    def from_args(cls, args: Any) -> "Config":
        """Create config from argparse namespace."""
        # Extract only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        config_dict = {k: v for k, v in vars(args).items() if k in known_fields and v is not None}
        return cls(**config_dict)

    def __repr__(self) -> str:
        return (
            f"Config(\n"
            f"  grid={self.width}x{self.height},\n"
            f"  D_A={self.D_A}, D_B={self.D_B},\n"
            f"  feed={self.feed}, kill={self.kill},\n"
            f"  render_interval={self.render_interval}\n"
            f")"
        )
