"""Load particle positions and box dimensions for the command line."""

from pathlib import Path
from typing import Sequence

import numpy as np
import torch

from pbcgeom.utils.constants import DIMENSION
from pbcgeom.utils.logging import get_logger

logger = get_logger()


def load_positions_from_xyz(path: str) -> np.ndarray:
    """Load positions from an XYZ file.

    Format:
        line1: N (number of particles)
        line2: comment
        next N lines: name x y z

    Returns:
        (N, 3) positions as float64 numpy array.
    """
    with open(path, "r") as f:
        lines = f.read().splitlines()

    if len(lines) < 3:
        raise ValueError(f"File too short: {path}")

    try:
        n = int(lines[0].strip())
    except ValueError as e:
        raise ValueError(f"First line not integer: {lines[0]}") from e

    body = lines[2 : 2 + n]
    if len(body) != n:
        raise ValueError(f"Expected {n} particles, got {len(body)}")

    xyz = []
    for line in body:
        parts = line.split()
        if len(parts) < 4:
            raise ValueError(f"Malformed line: {line}")
        xyz.append([float(parts[1]), float(parts[2]), float(parts[3])])

    return np.asarray(xyz, dtype=np.float64)


def load_positions_from_pt(path: str) -> np.ndarray:
    """Load positions from a PyTorch file holding a tensor or a dict of tensors."""
    d = torch.load(path, map_location="cpu")

    if isinstance(d, torch.Tensor):
        R = d
    elif isinstance(d, dict):
        for k in ("positions", "pos", "R", "coords", "xyz", "X"):
            if k in d:
                R = d[k]
                break
        else:
            raise KeyError(f"No positions key found in {path}")
    else:
        raise TypeError(f"Unexpected type: {type(d)}")

    return R.detach().cpu().numpy().astype(np.float64)


def load_positions(path: str) -> np.ndarray:
    """Load an (N, 3) position array from .npy, .pt, .xyz or plain text.

    Plain text is read with numpy.loadtxt, one particle per row.
    """
    suffix = Path(path).suffix.lower()
    if suffix == ".npy":
        R = np.load(path).astype(np.float64)
    elif suffix == ".pt":
        R = load_positions_from_pt(path)
    elif suffix == ".xyz":
        R = load_positions_from_xyz(path)
    else:
        R = np.loadtxt(path, dtype=np.float64, ndmin=2)

    if R.ndim != 2 or R.shape[-1] != DIMENSION:
        raise ValueError(f"Expected (N, 3) positions, got {R.shape}")

    logger.debug(f"Loaded {R.shape[0]} positions from {path}")
    return R


def parse_box(lengths: Sequence[float]) -> np.ndarray:
    """Turn 1 (cubic) or 3 full box lengths into half-lengths.

    Raises:
        ValueError: On a wrong number of lengths or non-positive lengths.
    """
    lengths = np.asarray(lengths, dtype=np.float64).ravel()
    if lengths.size == 1:
        lengths = np.repeat(lengths, DIMENSION)
    if lengths.size != DIMENSION:
        raise ValueError(f"Box needs 1 or 3 lengths, got {lengths.size}")
    if np.any(lengths <= 0):
        raise ValueError(f"Box lengths must be positive, got {lengths.tolist()}")
    return 0.5 * lengths
