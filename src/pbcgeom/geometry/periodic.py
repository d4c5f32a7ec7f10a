# src/pbcgeom/geometry/periodic.py

"""Minimum-image handling for orthorhombic periodic boxes.

Boxes are described by their half-lengths along x, y and z. Wrapped
coordinates live in [0, 2 * half). Both operations apply a single
correction of one box length per axis, so they assume inputs never lie
more than one period away from the primary cell.
"""

import numpy as np

from pbcgeom.utils.constants import DIMENSION


def wrap_into_primary_cell(position: np.ndarray, box_half_lengths) -> np.ndarray:
    """Wrap one position into the primary cell, in place.

    Args:
        position: Writable (3,) array, e.g. a row view ``positions[i]``.
        box_half_lengths: (3,) box half-lengths.

    Returns:
        The same array, for convenience.
    """
    for i in range(DIMENSION):
        box_length = 2.0 * box_half_lengths[i]
        if position[i] < 0:
            position[i] += box_length
        elif position[i] >= box_length:
            position[i] -= box_length
    return position


def minimum_image_displacement(
    particle_a: int,
    particle_b: int,
    positions: np.ndarray,
    box_half_lengths,
) -> np.ndarray:
    """Shortest periodic displacement from particle_a to particle_b.

    Args:
        particle_a: Index of the start particle.
        particle_b: Index of the end particle.
        positions: (N, 3) positions.
        box_half_lengths: (3,) box half-lengths.

    Returns:
        (3,) displacement ``positions[b] - positions[a]`` folded into
        [-half, half] on each axis.
    """
    displacement = np.empty(DIMENSION, dtype=np.float64)
    for i in range(DIMENSION):
        d = positions[particle_b][i] - positions[particle_a][i]
        if d > box_half_lengths[i]:
            d -= 2.0 * box_half_lengths[i]
        elif d < -box_half_lengths[i]:
            d += 2.0 * box_half_lengths[i]
        displacement[i] = d
    return displacement
