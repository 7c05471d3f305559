"""
Discrete diffusion operator for Gray-Scott.

Diffusion is approximated with a weighted 9-point Laplacian:

    0.05  0.2  0.05
    0.2  -1.0  0.2
    0.05  0.2  0.05

The weights sum to zero, so a spatially uniform field has no diffusion.
Only interior cells are evaluated; the one-cell border is read as neighbors
but never updated.
"""

import mlx.core as mx


CENTER_WEIGHT = -1.0
ORTHOGONAL_WEIGHT = 0.2
DIAGONAL_WEIGHT = 0.05


def laplacian_kernel() -> mx.array:
    """The 3x3 stencil as an array (for inspection and tests)."""
    o, d = ORTHOGONAL_WEIGHT, DIAGONAL_WEIGHT
    return mx.array([
        [d, o, d],
        [o, CENTER_WEIGHT, o],
        [d, o, d],
    ], dtype=mx.float32)


def interior_laplacian(field: mx.array) -> mx.array:
    """
    Compute the 9-point Laplacian at every interior cell.

    Neighbor access uses shifted slices of the full field instead of a
    wrap-around roll, which keeps the border fixed rather than periodic.

    Args:
        field: Concentration array [H, W] with H, W >= 3

    Returns:
        Laplacian values [H-2, W-2] aligned with field[1:-1, 1:-1]
    """
    center = field[1:-1, 1:-1]

    orthogonal = (
        field[:-2, 1:-1]    # North
        + field[2:, 1:-1]   # South
        + field[1:-1, :-2]  # West
        + field[1:-1, 2:]   # East
    )
    diagonal = (
        field[:-2, :-2]
        + field[:-2, 2:]
        + field[2:, :-2]
        + field[2:, 2:]
    )

    return ORTHOGONAL_WEIGHT * orthogonal + DIAGONAL_WEIGHT * diagonal + CENTER_WEIGHT * center
