"""
Metrics and analysis utilities for Gray-Scott.

Provides quantitative measures of pattern formation.
"""

import mlx.core as mx

from .state import CellState


def total_mass(state: CellState) -> float:
    """
    Compute total mass (sum of both concentrations).

    Args:
        state: Cell state

    Returns:
        Total mass across grid
    """
    return float(mx.sum(state.A) + mx.sum(state.B))


def mass_by_species(state: CellState) -> dict[str, float]:
    """Mass of each chemical."""
    return {
        "A": float(mx.sum(state.A)),
        "B": float(mx.sum(state.B)),
    }


def mean_concentrations(state: CellState) -> dict[str, float]:
    """Mean concentration of each chemical."""
    return {
        "A": float(mx.mean(state.A)),
        "B": float(mx.mean(state.B)),
    }


def concentration_variance(state: CellState) -> dict[str, float]:
    """
    Compute variance of each chemical's concentration.

    Higher variance indicates spatial structure; a resting field has none.
    """
    return {
        "A": float(mx.var(state.A)),
        "B": float(mx.var(state.B)),
    }


def pattern_coverage(state: CellState, threshold: float = 0.1) -> float:
    """
    Fraction of cells where B exceeds threshold.

    Args:
        state: Cell state
        threshold: Minimum B concentration counted as pattern

    Returns:
        Coverage in [0, 1]
    """
    H, W = state.shape
    return float(mx.sum((state.B > threshold).astype(mx.float32))) / (H * W)


def compute_all_metrics(state: CellState) -> dict:
    """
    Compute all available metrics.

    Args:
        state: Cell state

    Returns:
        Dictionary of all metrics
    """
    return {
        "mass": {
            "total": total_mass(state),
            "by_species": mass_by_species(state),
        },
        "concentrations": {
            "mean": mean_concentrations(state),
            "variance": concentration_variance(state),
        },
        "pattern": {
            "coverage": pattern_coverage(state),
        },
    }


def print_metrics_summary(metrics: dict) -> None:
    """
    Print formatted metrics summary.

    Args:
        metrics: Output from compute_all_metrics
    """
    print("\n=== Gray-Scott Metrics Summary ===\n")

    print("Mass:")
    print(f"  Total: {metrics['mass']['total']:.4f}")
    for species, mass in metrics['mass']['by_species'].items():
        print(f"  {species}: {mass:.4f}")

    print("\nConcentrations:")
    for species, mean in metrics['concentrations']['mean'].items():
        var = metrics['concentrations']['variance'][species]
        print(f"  {species}: mean={mean:.4f}, var={var:.6f}")

    print("\nPattern:")
    print(f"  Coverage (B > 0.1): {metrics['pattern']['coverage']:.2%}")

    print()
