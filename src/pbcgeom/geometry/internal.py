"""Distances and bond angles under periodic boundary conditions.

Positions are expected as an (N, 3) array indexed by particle id. Every
function works on a single interaction and keeps no state between calls.

Derivative convention: a result for n particles carries n-1 gradient rows,
one per particle in the order of ``ids`` with one particle left out. The
left-out gradient is the negative sum of the returned rows (translation
invariance), see :func:`implicit_derivative`.

- distance: row 0 is for ``ids[1]``; ``ids[0]`` is implicit.
- angle: rows for ``ids[0]`` and ``ids[1]``; the vertex ``ids[2]`` is implicit.

All angles are reported in degrees and their gradients are in degrees per
length unit.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from pbcgeom.geometry.periodic import minimum_image_displacement
from pbcgeom.geometry.vectors import dot
from pbcgeom.utils.constants import DEGREES_PER_RADIAN, DIMENSION, MAXFLOAT
from pbcgeom.utils.math import clamp_cosine, clamp_sine


@dataclass
class ParameterResult:
    """Outcome of a cutoff-gated geometric calculation."""

    within_cutoff: bool
    value: float
    derivatives: Optional[np.ndarray] = None  # (n-1, 3), None when excluded

    def __bool__(self) -> bool:
        return self.within_cutoff


@dataclass
class AngleIntermediates:
    """Angle result plus the sub-pair quantities it was built from.

    ``dist_derivs_20`` and ``dist_derivs_21`` are the squared-distance
    gradients (2 * displacement) from the vertex to ``ids[0]`` and ``ids[1]``.
    """

    result: ParameterResult
    dist_derivs_20: np.ndarray
    dist_derivs_21: np.ndarray
    rr_20: float = math.nan
    rr_21: float = math.nan

    @property
    def within_cutoff(self) -> bool:
        return self.result.within_cutoff

    @property
    def value(self) -> float:
        return self.result.value

    @property
    def derivatives(self) -> Optional[np.ndarray]:
        return self.result.derivatives


def implicit_derivative(derivatives: np.ndarray) -> np.ndarray:
    """Gradient of the particle left out of a derivative set."""
    return -np.sum(derivatives, axis=0)


def _check_ids(ids: Sequence[int], n: int) -> None:
    if len(ids) != n:
        raise ValueError(f"Expected {n} particle ids, got {len(ids)}")


def _derivative_buffer(out: Optional[np.ndarray], n: int) -> np.ndarray:
    if out is None:
        return np.empty((n, DIMENSION), dtype=np.float64)
    if out.shape[0] < n or out.shape[-1] != DIMENSION:
        raise ValueError(f"Derivative buffer must hold ({n}, 3), got {out.shape}")
    return out


# ------------------------------------------------------------
# Distance family
# ------------------------------------------------------------


def squared_distance_and_derivatives(
    ids: Sequence[int],
    positions: np.ndarray,
    box_half_lengths,
    cutoff2: float = MAXFLOAT,
    out: Optional[np.ndarray] = None,
) -> ParameterResult:
    """Squared minimum-image distance and its gradient.

    Args:
        ids: Two particle ids (a, b).
        positions: (N, 3) positions.
        box_half_lengths: (3,) box half-lengths.
        cutoff2: Squared-distance cutoff; pairs strictly beyond it are excluded.
        out: Optional (1, 3) buffer for the gradient. Left untouched when
            the pair is excluded.

    Returns:
        ParameterResult with the squared distance and ``2 * (r_b - r_a)`` as
        the gradient with respect to particle b.
    """
    _check_ids(ids, 2)
    displacement = minimum_image_displacement(ids[0], ids[1], positions, box_half_lengths)
    rr2 = dot(displacement, displacement)

    if rr2 > cutoff2:
        return ParameterResult(False, rr2)

    derivatives = _derivative_buffer(out, 1)
    derivatives[0, :] = 2.0 * displacement
    return ParameterResult(True, rr2, derivatives)


def distance_and_derivatives(
    ids: Sequence[int],
    positions: np.ndarray,
    box_half_lengths,
    cutoff2: float = MAXFLOAT,
    out: Optional[np.ndarray] = None,
) -> ParameterResult:
    """Minimum-image distance and its gradient (unit vector from a to b).

    Arguments as in :func:`squared_distance_and_derivatives`. Coincident
    particles give a zero distance and a division by zero.
    """
    result = squared_distance_and_derivatives(ids, positions, box_half_lengths, cutoff2, out)
    rr = math.sqrt(result.value)
    if not result.within_cutoff:
        return ParameterResult(False, rr)

    # d sqrt(u) = du / (2 sqrt(u))
    result.derivatives[0, :] /= 2.0 * rr
    return ParameterResult(True, rr, result.derivatives)


def calc_squared_distance(ids: Sequence[int], positions: np.ndarray, box_half_lengths) -> float:
    """Squared minimum-image distance between two particles."""
    _check_ids(ids, 2)
    displacement = minimum_image_displacement(ids[0], ids[1], positions, box_half_lengths)
    return dot(displacement, displacement)


def calc_distance(ids: Sequence[int], positions: np.ndarray, box_half_lengths) -> float:
    """Minimum-image distance between two particles."""
    return math.sqrt(calc_squared_distance(ids, positions, box_half_lengths))


# ------------------------------------------------------------
# Angle family
# ------------------------------------------------------------


def _cos_from_distance_derivs(dist_derivs_20, dist_derivs_21, rr_20: float, rr_21: float) -> float:
    # The squared-distance gradients are 2 * displacement, hence the factor 4
    cos_theta = dot(dist_derivs_20, dist_derivs_21) / (4.0 * rr_20 * rr_21)
    return clamp_cosine(cos_theta)


def _angle_derivatives(
    dist_derivs_20: np.ndarray,
    dist_derivs_21: np.ndarray,
    rr_20: float,
    rr_21: float,
    cos_theta: float,
    theta: float,
    derivatives: np.ndarray,
) -> None:
    sin_theta = clamp_sine(math.sin(theta))
    rr_01_1 = 1.0 / (rr_20 * rr_21 * sin_theta)
    rr_00c = cos_theta / (rr_20 * rr_20 * sin_theta)
    rr_11c = cos_theta / (rr_21 * rr_21 * sin_theta)

    # d(theta) = -d(cos theta) / sin(theta), reported in degrees
    scale = 0.5 * DEGREES_PER_RADIAN
    derivatives[0, :] = scale * (rr_00c * dist_derivs_20 - rr_01_1 * dist_derivs_21)
    derivatives[1, :] = scale * (rr_11c * dist_derivs_21 - rr_01_1 * dist_derivs_20)


def angle_and_intermediates(
    ids: Sequence[int],
    positions: np.ndarray,
    box_half_lengths,
    cutoff2: float = MAXFLOAT,
    out: Optional[np.ndarray] = None,
) -> AngleIntermediates:
    """Angle at ``ids[2]`` together with its reusable sub-pair quantities.

    Intended for composite geometry built on top of an angle, where the two
    vertex-to-end gradients and distances would otherwise be recomputed.
    When either sub-pair is beyond the cutoff the angle is not evaluated:
    the result is excluded with a NaN value and NaN distances, and the
    ``dist_derivs`` of an excluded sub-pair stay uninitialised.
    """
    _check_ids(ids, 3)
    dist_derivs_20 = np.empty((1, DIMENSION), dtype=np.float64)
    dist_derivs_21 = np.empty((1, DIMENSION), dtype=np.float64)
    sub_20 = squared_distance_and_derivatives(
        (ids[2], ids[0]), positions, box_half_lengths, cutoff2, dist_derivs_20
    )
    sub_21 = squared_distance_and_derivatives(
        (ids[2], ids[1]), positions, box_half_lengths, cutoff2, dist_derivs_21
    )

    if not sub_20 or not sub_21:
        return AngleIntermediates(
            ParameterResult(False, math.nan), dist_derivs_20[0], dist_derivs_21[0]
        )

    rr_20 = math.sqrt(sub_20.value)
    rr_21 = math.sqrt(sub_21.value)
    cos_theta = _cos_from_distance_derivs(dist_derivs_20[0], dist_derivs_21[0], rr_20, rr_21)
    theta = math.acos(cos_theta)

    derivatives = _derivative_buffer(out, 2)
    _angle_derivatives(
        dist_derivs_20[0], dist_derivs_21[0], rr_20, rr_21, cos_theta, theta, derivatives
    )
    return AngleIntermediates(
        ParameterResult(True, theta * DEGREES_PER_RADIAN, derivatives),
        dist_derivs_20[0],
        dist_derivs_21[0],
        rr_20,
        rr_21,
    )


def angle_and_derivatives(
    ids: Sequence[int],
    positions: np.ndarray,
    box_half_lengths,
    cutoff2: float = MAXFLOAT,
    out: Optional[np.ndarray] = None,
) -> ParameterResult:
    """Bond angle at vertex ``ids[2]`` between ``ids[0]`` and ``ids[1]``.

    Args:
        ids: Three particle ids, vertex last.
        positions: (N, 3) positions.
        box_half_lengths: (3,) box half-lengths.
        cutoff2: Squared-distance cutoff applied to both vertex-end pairs.
        out: Optional (2, 3) gradient buffer, untouched when excluded.

    Returns:
        ParameterResult with the angle in degrees, in [0, 180], and the
        gradients with respect to ``ids[0]`` and ``ids[1]``.
    """
    return angle_and_intermediates(ids, positions, box_half_lengths, cutoff2, out).result


def calc_angle(ids: Sequence[int], positions: np.ndarray, box_half_lengths) -> float:
    """Bond angle in degrees at vertex ``ids[2]``, without derivatives."""
    _check_ids(ids, 3)
    disp_20 = minimum_image_displacement(ids[2], ids[0], positions, box_half_lengths)
    disp_21 = minimum_image_displacement(ids[2], ids[1], positions, box_half_lengths)
    rr_20 = math.sqrt(dot(disp_20, disp_20))
    rr_21 = math.sqrt(dot(disp_21, disp_21))
    cos_theta = clamp_cosine(dot(disp_20, disp_21) / (rr_20 * rr_21))
    return math.acos(cos_theta) * DEGREES_PER_RADIAN
