"""Vectorised internal coordinates over index arrays, in torch.

Same conventions as the scalar kernels in :mod:`pbcgeom.geometry.internal`
and :mod:`pbcgeom.geometry.dihedral` (id order, single-step minimum image,
cosine clamp, dihedral sign, degrees), evaluated for M interactions at once.
Results are differentiable with torch autograd.

positions is expected to be (N, 3); index arrays are (M, 2), (M, 3) or (M, 4).
"""

from typing import Dict, Optional

import numpy as np
import torch

from pbcgeom.utils.constants import DEGREES_PER_RADIAN, DIMENSION
from pbcgeom.utils.math import clamp_cosine_tensor, safe_norm


def _as_positions(R) -> torch.Tensor:
    """Convert positions to a float64 (N, 3) tensor, keeping autograd history."""
    if isinstance(R, np.ndarray):
        R = torch.from_numpy(R)
    R = torch.as_tensor(R, dtype=torch.float64)
    if R.dim() != 2 or R.shape[-1] != DIMENSION:
        raise ValueError(f"Expected positions of shape (N, 3), got {tuple(R.shape)}")
    return R


def _as_box(box_half_lengths, like: torch.Tensor) -> torch.Tensor:
    half = torch.as_tensor(np.asarray(box_half_lengths, dtype=np.float64), device=like.device)
    if half.shape != (DIMENSION,):
        raise ValueError(f"Expected 3 box half-lengths, got shape {tuple(half.shape)}")
    if torch.any(half <= 0):
        raise ValueError("Box half-lengths must be positive")
    return half


def _as_index(index, width: int, device) -> torch.Tensor:
    index = torch.as_tensor(np.asarray(index), dtype=torch.long, device=device)
    if index.dim() == 1:
        index = index.unsqueeze(0)
    if index.dim() != 2 or index.shape[-1] != width:
        raise ValueError(f"Expected index array of shape (M, {width}), got {tuple(index.shape)}")
    return index


def minimum_image(disp: torch.Tensor, box_half_lengths: torch.Tensor) -> torch.Tensor:
    """Fold displacements (..., 3) into [-half, half] with one correction per axis."""
    box = 2.0 * box_half_lengths
    disp = torch.where(disp > box_half_lengths, disp - box, disp)
    disp = torch.where(disp < -box_half_lengths, disp + box, disp)
    return disp


def _displacements(R, half, start, end) -> torch.Tensor:
    return minimum_image(R[end] - R[start], half)


def pair_distances(positions, pairs, box_half_lengths) -> torch.Tensor:
    """Minimum-image distances ||r_b - r_a|| for each row (a, b).

    Args:
        positions: (N, 3) coordinates (tensor or ndarray).
        pairs: (M, 2) particle ids.
        box_half_lengths: (3,) box half-lengths.

    Returns:
        (M,) distances.
    """
    R = _as_positions(positions)
    half = _as_box(box_half_lengths, R)
    idx = _as_index(pairs, 2, R.device)
    disp = _displacements(R, half, idx[:, 0], idx[:, 1])
    return safe_norm(disp, dim=-1)


def triple_angles(positions, triples, box_half_lengths) -> torch.Tensor:
    """Bond angles in degrees at the vertex (last column) of each triple.

    Args:
        positions: (N, 3) coordinates.
        triples: (M, 3) particle ids, vertex last.
        box_half_lengths: (3,) box half-lengths.

    Returns:
        (M,) angles in [0, 180].
    """
    R = _as_positions(positions)
    half = _as_box(box_half_lengths, R)
    idx = _as_index(triples, 3, R.device)

    u = _displacements(R, half, idx[:, 2], idx[:, 0])
    v = _displacements(R, half, idx[:, 2], idx[:, 1])
    cos_theta = torch.sum(u * v, dim=-1) / (safe_norm(u) * safe_norm(v))
    return torch.acos(clamp_cosine_tensor(cos_theta)) * DEGREES_PER_RADIAN


def quad_dihedrals(positions, quads, box_half_lengths) -> torch.Tensor:
    """Dihedrals in degrees for each row (i, j, k, l), chain j-k-l-i.

    Args:
        positions: (N, 3) coordinates.
        quads: (M, 4) particle ids.
        box_half_lengths: (3,) box half-lengths.

    Returns:
        (M,) dihedrals in (-180, 180].
    """
    R = _as_positions(positions)
    half = _as_box(box_half_lengths, R)
    idx = _as_index(quads, 4, R.device)

    disp03 = _displacements(R, half, idx[:, 3], idx[:, 0])
    disp23 = _displacements(R, half, idx[:, 3], idx[:, 2])
    disp12 = _displacements(R, half, idx[:, 2], idx[:, 1])

    pb = torch.cross(disp03, disp23, dim=-1)
    pc = torch.cross(disp12, disp23, dim=-1)

    cos_theta = torch.sum(pb * pc, dim=-1) / (safe_norm(pb) * safe_norm(pc))
    theta = torch.acos(clamp_cosine_tensor(cos_theta))

    s = torch.sum(pb * disp12, dim=-1)
    sign = torch.where(s > 0.0, -torch.ones_like(theta), torch.ones_like(theta))
    return sign * theta * DEGREES_PER_RADIAN


def all_internal(
    positions,
    box_half_lengths,
    pairs: Optional[np.ndarray] = None,
    triples: Optional[np.ndarray] = None,
    quads: Optional[np.ndarray] = None,
) -> Dict[str, torch.Tensor]:
    """Compute every requested family of internal coordinates at once.

    Returns:
        Dictionary with keys among 'distance', 'angle' and 'dihedral',
        one per index array given.
    """
    R = _as_positions(positions)
    out = {}
    if pairs is not None:
        out["distance"] = pair_distances(R, pairs, box_half_lengths)
    if triples is not None:
        out["angle"] = triple_angles(R, triples, box_half_lengths)
    if quads is not None:
        out["dihedral"] = quad_dihedrals(R, quads, box_half_lengths)
    return out
