#!/usr/bin/env python3
"""
Basic Gray-Scott simulation example.

This script demonstrates:
1. Creating an orchestrator with custom parameters
2. Driving it the way a host would (reset, then run ticks)
3. Measuring pattern formation
4. Saving the rendered result
"""

import mlx.core as mx
import matplotlib.pyplot as plt

from grayscott import Config, Orchestrator
from grayscott.metrics import compute_all_metrics, print_metrics_summary, pattern_coverage


def main():
    print("=" * 60)
    print("Gray-Scott Reaction-Diffusion")
    print("Basic Simulation Example")
    print("=" * 60)
    print()

    # Check MLX device
    print(f"MLX device: {mx.default_device()}")
    print()

    # Create configuration
    config = Config(
        width=128,
        height=128,
        D_A=1.0,         # Diffusion of A
        D_B=0.5,         # Diffusion of B
        feed=0.0367,     # "Mitosis"-like regime
        kill=0.0649,
    )
    print(config)
    print()

    orchestrator = Orchestrator(config)
    orchestrator.simulation.seed(30, 40, 80, 90)  # Second seed off-center

    print("Initial state:")
    print(f"  Pattern coverage: {pattern_coverage(orchestrator.simulation.state):.2%}")
    print()

    print("Running 3000 ticks...")
    for _ in range(3000):
        log, frame = orchestrator.tick(run=True)
        if orchestrator.frame_count % 500 == 0:
            coverage = pattern_coverage(orchestrator.simulation.state)
            print(f"  Step {log[0]}: coverage={coverage:.2%}")
    print()

    print("Final state:")
    metrics = compute_all_metrics(orchestrator.simulation.snapshot())
    print_metrics_summary(metrics)

    if frame is not None:
        plt.imsave("gray_scott.png", frame, cmap="gray", vmin=0, vmax=255)
        print("Last rendered frame saved to gray_scott.png")

    print()
    print("To visualize, run:")
    print("  python -m grayscott.main --visualize --steps 5000")
    print()


if __name__ == "__main__":
    main()
