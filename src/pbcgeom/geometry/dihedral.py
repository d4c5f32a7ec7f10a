# src/pbcgeom/geometry/dihedral.py

"""Dihedral (torsion) angles under periodic boundary conditions.

The four ids describe the chain ``ids[1]-ids[2]-ids[3]-ids[0]``: the torsion
is taken about the central bond ``ids[2]-ids[3]``, with ``ids[0]`` bonded to
``ids[3]`` and ``ids[1]`` bonded to ``ids[2]``. Returns dihedrals in degrees,
in (-180, 180].

Gradient rows are returned for ``ids[0]``, ``ids[1]`` and ``ids[2]``; the
gradient of ``ids[3]`` is minus their sum.
"""

import math
from typing import Optional, Sequence

import numpy as np

from pbcgeom.geometry.internal import ParameterResult, _check_ids, _derivative_buffer
from pbcgeom.geometry.periodic import minimum_image_displacement
from pbcgeom.geometry.vectors import cross, dot
from pbcgeom.utils.constants import DEGREES_PER_RADIAN, MAXFLOAT
from pbcgeom.utils.math import clamp_cosine


def _dihedral_vectors(ids: Sequence[int], positions: np.ndarray, box_half_lengths):
    """Displacements and plane normals shared by both dihedral variants."""
    _check_ids(ids, 4)
    disp03 = minimum_image_displacement(ids[3], ids[0], positions, box_half_lengths)
    disp23 = minimum_image_displacement(ids[3], ids[2], positions, box_half_lengths)  # central bond
    disp12 = minimum_image_displacement(ids[2], ids[1], positions, box_half_lengths)

    pb = cross(disp03, disp23)  # normal to the plane (0, 3, 2)
    pc = cross(disp12, disp23)  # normal to the plane (3, 2, 1)
    return disp03, disp23, disp12, pb, pc


def _signed_angle(disp23, disp12, pb, pc):
    """Unsigned angle in radians, its sign, and the reused intermediates."""
    rrbc = 1.0 / np.sqrt(dot(disp23, disp23))
    pb2 = dot(pb, pb)
    pc2 = dot(pc, pc)
    rpb1 = 1.0 / np.sqrt(pb2)
    rpc1 = 1.0 / np.sqrt(pc2)

    cos_theta = clamp_cosine(dot(pb, pc) * rpb1 * rpc1)
    theta = math.acos(cos_theta)

    # Projection of the first normal onto the outer bond on the far side
    s = dot(pb, disp12) * rpb1 * rrbc
    sign = -1.0 if s > 0.0 else 1.0
    return theta, sign, rrbc, pb2, pc2


def dihedral_and_derivatives(
    ids: Sequence[int],
    positions: np.ndarray,
    box_half_lengths,
    cutoff2: float = MAXFLOAT,
    out: Optional[np.ndarray] = None,
) -> ParameterResult:
    """Dihedral angle and gradients for ``ids[0]``, ``ids[1]`` and ``ids[2]``.

    Args:
        ids: Four particle ids.
        positions: (N, 3) positions.
        box_half_lengths: (3,) box half-lengths.
        cutoff2: Accepted for a uniform signature; dihedrals are never excluded.
        out: Optional (3, 3) gradient buffer.

    Returns:
        ParameterResult, always within cutoff, with the dihedral in degrees.
    """
    disp03, disp23, disp12, pb, pc = _dihedral_vectors(ids, positions, box_half_lengths)
    theta, sign, rrbc, pb2, pc2 = _signed_angle(disp23, disp12, pb, pc)

    # Outer particles move along their plane normal, scaled by the
    # central bond length over the squared normal length.
    r23_2 = dot(disp23, disp23)
    fcoef = dot(disp03, disp23) / r23_2
    hcoef = 1.0 + dot(disp12, disp23) / r23_2
    dtf = pb / (rrbc * pb2)
    dth = -pc / (rrbc * pc2)

    # The value is sign * theta; the normal-based gradients above already
    # carry that sign, so only the unit conversion remains.
    derivatives = _derivative_buffer(out, 3)
    derivatives[0, :] = DEGREES_PER_RADIAN * dtf
    derivatives[1, :] = DEGREES_PER_RADIAN * dth
    derivatives[2, :] = DEGREES_PER_RADIAN * (-dtf * fcoef - dth * hcoef)

    return ParameterResult(True, sign * theta * DEGREES_PER_RADIAN, derivatives)


def calc_dihedral(ids: Sequence[int], positions: np.ndarray, box_half_lengths) -> float:
    """Dihedral angle in degrees, without derivatives."""
    _, disp23, disp12, pb, pc = _dihedral_vectors(ids, positions, box_half_lengths)
    theta, sign, _, _, _ = _signed_angle(disp23, disp12, pb, pc)
    return sign * theta * DEGREES_PER_RADIAN
