# src/pbcgeom/geometry/__init__.py

"""Internal coordinates of particles in an orthorhombic periodic box.

Provides, with analytic first derivatives:
- Distances and squared distances
- Bond angles
- Dihedral (torsion) angles
- Minimum-image wrapping and displacements
"""

from pbcgeom.geometry.dihedral import calc_dihedral, dihedral_and_derivatives
from pbcgeom.geometry.internal import (
    AngleIntermediates,
    ParameterResult,
    angle_and_derivatives,
    angle_and_intermediates,
    calc_angle,
    calc_distance,
    calc_squared_distance,
    distance_and_derivatives,
    implicit_derivative,
    squared_distance_and_derivatives,
)
from pbcgeom.geometry.periodic import minimum_image_displacement, wrap_into_primary_cell
from pbcgeom.geometry.vectors import cross, dot

__all__ = [
    "ParameterResult",
    "AngleIntermediates",
    "implicit_derivative",
    "squared_distance_and_derivatives",
    "distance_and_derivatives",
    "calc_squared_distance",
    "calc_distance",
    "angle_and_derivatives",
    "angle_and_intermediates",
    "calc_angle",
    "dihedral_and_derivatives",
    "calc_dihedral",
    "wrap_into_primary_cell",
    "minimum_image_displacement",
    "dot",
    "cross",
]
