"""
Visualization utilities for Gray-Scott.

Turns grid snapshots into images and provides a live matplotlib display.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .state import CellState

if TYPE_CHECKING:
    from .orchestrator import Orchestrator


def state_to_grayscale(state: CellState) -> np.ndarray:
    """
    Convert state to per-cell gray levels.

    Each cell maps to clamp((a - b) * 255, 0, 255), truncated to an integer,
    so resting cells are white and fully seeded cells are black.

    Args:
        state: Cell state

    Returns:
        Gray image [H, W] as uint8
    """
    A = np.array(state.A, dtype=np.float64)
    B = np.array(state.B, dtype=np.float64)

    balance = np.clip((A - B) * 255.0, 0.0, 255.0)
    return balance.astype(np.uint8)


def state_to_rgb(state: CellState) -> np.ndarray:
    """
    Gray levels replicated into an opaque RGB image.

    Args:
        state: Cell state

    Returns:
        RGB image [H, W, 3] as uint8
    """
    gray = state_to_grayscale(state)
    return np.repeat(gray[:, :, np.newaxis], 3, axis=-1)


def state_to_species_image(state: CellState, normalize: bool = True) -> np.ndarray:
    """
    False-color view of both chemicals.

    Mapping: R = B (autocatalyst), G = 0, B = A (fed chemical)

    Args:
        state: Cell state
        normalize: Whether to scale to uint8 [0, 255]

    Returns:
        RGB image [H, W, 3]
    """
    A = np.array(state.A)
    B = np.array(state.B)

    rgb = np.stack([B, np.zeros_like(A), A], axis=-1)

    if normalize:
        rgb = np.clip(rgb, 0, 1)
        rgb = (rgb * 255).astype(np.uint8)

    return rgb


def create_composite_image(state: CellState) -> np.ndarray:
    """
    Side-by-side gray and species images.

    Returns:
        Composite image [H, 2*W, 3]
    """
    return np.concatenate([state_to_rgb(state), state_to_species_image(state)], axis=1)


class Visualizer:
    """
    Real-time visualization manager.

    Frames advance the orchestrator by one tick; the displayed image only
    changes on ticks where the orchestrator renders.
    """

    def __init__(
        self,
        orchestrator: "Orchestrator",
        mode: str = "gray",
        fps: int = 30,
    ):
        """
        Initialize visualizer.

        Args:
            orchestrator: Orchestrator to drive and display
            mode: Display mode ("gray", "species", "composite")
            fps: Target frames per second
        """
        if mode not in ("gray", "species", "composite"):
            raise ValueError(f"mode must be 'gray', 'species' or 'composite', got {mode!r}")

        self.orchestrator = orchestrator
        self.mode = mode
        self.fps = fps

        self.fig, self.ax = plt.subplots(figsize=(10, 5) if mode == "composite" else (6, 6))
        self.ax.set_axis_off()

        self.current_image = self.render(orchestrator.simulation.snapshot())
        self.im = self.ax.imshow(self.current_image, cmap="gray", vmin=0, vmax=255)

        self.text = self.ax.text(
            0.02, 0.98, f"Step: {orchestrator.frame_count}",
            transform=self.ax.transAxes,
            fontsize=10,
            verticalalignment='top',
            color='white',
            bbox=dict(boxstyle='round', facecolor='black', alpha=0.5)
        )

    def render(self, state: CellState) -> np.ndarray:
        """Image for state in the configured mode."""
        if self.mode == "gray":
            return state_to_grayscale(state)
        if self.mode == "species":
            return state_to_species_image(state)
        return create_composite_image(state)

    def _animation_update(self, frame: int) -> list:
        """Update function for animation."""
        if self.orchestrator.update():
            self.current_image = self.render(self.orchestrator.simulation.snapshot())
            self.im.set_array(self.current_image)
        self.text.set_text(f"Step: {self.orchestrator.frame_count}")

        return [self.im, self.text]

    def show_live(self, steps: Optional[int] = None) -> None:
        """
        Display live animation.

        Args:
            steps: Number of steps to run (None for 10000)
        """
        frames = steps if steps is not None else 10000
        interval = 1000 // self.fps

        self.anim = FuncAnimation(
            self.fig,
            self._animation_update,
            frames=frames,
            interval=interval,
            blit=True,
        )

        plt.show()

    def save_frame(self, path: str) -> None:
        """
        Save the current simulation state as an image.

        Args:
            path: Output file path
        """
        image = self.render(self.orchestrator.simulation.snapshot())
        plt.imsave(path, image, cmap="gray", vmin=0, vmax=255)

    def save_animation(
        self,
        path: str,
        steps: int = 500,
        fps: Optional[int] = None,
    ) -> None:
        """
        Save animation to file.

        Args:
            path: Output file path (mp4, gif, etc.)
            steps: Number of frames
            fps: Frames per second (uses self.fps if not provided)
        """
        if fps is None:
            fps = self.fps

        interval = 1000 // fps

        anim = FuncAnimation(
            self.fig,
            self._animation_update,
            frames=steps,
            interval=interval,
            blit=True,
        )

        # Determine writer from extension
        suffix = Path(path).suffix.lower()
        if suffix == ".gif":
            anim.save(path, writer="pillow", fps=fps)
        else:
            anim.save(path, writer="ffmpeg", fps=fps)

        print(f"Animation saved to {path}")


def save_state_images(
    state: CellState,
    output_dir: str,
    prefix: str = "frame",
    step: int = 0,
) -> list[Path]:
    """
    Save gray and species views as separate images.

    Args:
        state: Cell state
        output_dir: Output directory
        prefix: Filename prefix
        step: Step number for filename

    Returns:
        Paths of the written files
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    gray_path = output_path / f"{prefix}_{step:06d}_gray.png"
    plt.imsave(gray_path, state_to_grayscale(state), cmap="gray", vmin=0, vmax=255)

    species_path = output_path / f"{prefix}_{step:06d}_species.png"
    plt.imsave(species_path, state_to_species_image(state))

    return [gray_path, species_path]
