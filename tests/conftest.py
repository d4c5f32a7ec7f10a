# tests/conftest.py

"""Pytest fixtures for testing."""

import numpy as np
import pytest

from pbcgeom.geometry.periodic import wrap_into_primary_cell


@pytest.fixture
def large_box():
    """Half-lengths of a box much larger than any test molecule."""
    return np.array([50.0, 50.0, 50.0])


@pytest.fixture
def small_box():
    """Half-lengths of a box comparable to the test molecules."""
    return np.array([3.0, 3.5, 4.0])


@pytest.fixture
def molecule():
    """Four non-coplanar particles.

    Particle 3 sits at the origin, particle 2 above it on z, particle 0 is
    bonded to 3 and particle 1 to 2, twisted by roughly 55 degrees.
    """
    a = np.deg2rad(60.0)
    return np.array(
        [
            [1.2, 0.1, -0.3],
            [np.cos(a), np.sin(a), 1.9],
            [0.05, -0.1, 1.5],
            [0.0, 0.0, 0.0],
        ]
    )


@pytest.fixture
def molecule_across_boundary(molecule, small_box):
    """The same molecule centred on a box corner and wrapped into the cell."""
    R = molecule - molecule.mean(axis=0)
    for i in range(R.shape[0]):
        wrap_into_primary_cell(R[i], small_box)
    return R


@pytest.fixture
def numerical_gradient():
    """Central finite-difference gradient of func(positions) w.r.t. one particle."""

    def _gradient(func, positions, particle, h=1e-6):
        grad = np.zeros(3)
        for i in range(3):
            plus = positions.copy()
            minus = positions.copy()
            plus[particle, i] += h
            minus[particle, i] -= h
            grad[i] = (func(plus) - func(minus)) / (2.0 * h)
        return grad

    return _gradient


@pytest.fixture
def rotation():
    """A proper rotation matrix about a tilted axis."""
    axis = np.array([1.0, -2.0, 0.5])
    axis /= np.linalg.norm(axis)
    angle = 0.7
    K = np.array(
        [
            [0.0, -axis[2], axis[1]],
            [axis[2], 0.0, -axis[0]],
            [-axis[1], axis[0], 0.0],
        ]
    )
    return np.eye(3) + np.sin(angle) * K + (1.0 - np.cos(angle)) * K @ K
