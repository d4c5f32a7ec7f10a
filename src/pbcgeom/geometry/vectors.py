# src/pbcgeom/geometry/vectors.py

"""Three-dimensional vector primitives."""

import numpy as np


def dot(a, b) -> float:
    """Dot product of two 3-vectors.

    Returned as a numpy scalar so that a zero denominator downstream
    yields inf/nan instead of raising.
    """
    return np.float64(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a, b) -> np.ndarray:
    """Cross product a x b of two 3-vectors."""
    return np.array(
        [
            a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0],
        ],
        dtype=np.float64,
    )
