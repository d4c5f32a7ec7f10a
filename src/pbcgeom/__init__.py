"""pbcgeom: internal coordinates and their derivatives in periodic boxes.

This package computes distances, bond angles and dihedrals of particles in
an orthorhombic periodic simulation box, together with their analytic
gradients, for force-matching and coarse-graining drivers.
"""

from pbcgeom._version import __version__

# Geometry
from pbcgeom.geometry.batched import all_internal, pair_distances, quad_dihedrals, triple_angles
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

# Numerical safeguards
from pbcgeom.utils.math import clamp_cosine, clamp_sine

__all__ = [
    # Version
    "__version__",
    # Results
    "ParameterResult",
    "AngleIntermediates",
    "implicit_derivative",
    # Distances
    "squared_distance_and_derivatives",
    "distance_and_derivatives",
    "calc_squared_distance",
    "calc_distance",
    # Angles
    "angle_and_derivatives",
    "angle_and_intermediates",
    "calc_angle",
    # Dihedrals
    "dihedral_and_derivatives",
    "calc_dihedral",
    # Periodic box
    "wrap_into_primary_cell",
    "minimum_image_displacement",
    # Batched
    "pair_distances",
    "triple_angles",
    "quad_dihedrals",
    "all_internal",
    # Safeguards
    "clamp_cosine",
    "clamp_sine",
]
