#!/usr/bin/env python
"""Quickstart example for pbcgeom."""

import numpy as np


def main():
    """Run quickstart example."""
    print("pbcgeom Quickstart")
    print("=" * 50)

    from pbcgeom import (
        angle_and_derivatives,
        calc_distance,
        dihedral_and_derivatives,
        implicit_derivative,
        wrap_into_primary_cell,
    )

    # A cubic box of length 6 has half-lengths of 3
    half = np.array([3.0, 3.0, 3.0])
    positions = np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 0.0, 0.0],
            [1.0, 1.0, 0.0],
            [5.0, 1.0, 0.8],
        ]
    )
    print(f"Box half-lengths: {half}")

    # Minimum image: particle 3 is 1 unit away from particle 0 through the boundary
    print(f"Distance 0-3: {calc_distance((0, 3), positions, half):.4f}")

    # Angle at vertex 1 (vertex is the last id)
    result = angle_and_derivatives((0, 2, 1), positions, half)
    print(f"Angle 0-1-2: {result.value:.4f} deg")
    print(f"  gradient on 0: {result.derivatives[0]}")
    print(f"  gradient on 2: {result.derivatives[1]}")
    print(f"  gradient on 1: {implicit_derivative(result.derivatives)}")

    # Cutoff-gated evaluation
    excluded = angle_and_derivatives((0, 2, 1), positions, half, cutoff2=0.25)
    print(f"With cutoff 0.5: within_cutoff={excluded.within_cutoff}")

    # Dihedral of the chain 1-2-3-0
    result = dihedral_and_derivatives((0, 1, 2, 3), positions, half)
    print(f"Dihedral: {result.value:.4f} deg")

    # Wrap a drifted particle back into the primary cell
    positions[3, 0] += 2.0
    wrap_into_primary_cell(positions[3], half)
    print(f"Wrapped particle 3: {positions[3]}")


if __name__ == "__main__":
    main()
