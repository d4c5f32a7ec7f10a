"""Mathematical utilities with safe numerical operations."""

import torch

from pbcgeom.utils.constants import VERYSMALL_F


def clamp_cosine(cos_theta: float, eps: float = VERYSMALL_F) -> float:
    """Keep a cosine strictly inside (-1, 1) before calling arccos.

    Round-off can push the normalised dot product of two vectors slightly
    past +-1, which would make arccos return NaN.

    Args:
        cos_theta: Cosine to clamp.
        eps: Distance kept from the domain boundary.

    Returns:
        Cosine in [-1 + eps, 1 - eps].
    """
    upper = 1.0 - eps
    lower = -1.0 + eps
    if cos_theta > upper:
        return upper
    elif cos_theta < lower:
        return lower
    return cos_theta


def clamp_sine(sin_theta: float, eps: float = VERYSMALL_F) -> float:
    """Push a nonzero sine away from zero so it can be safely divided by.

    Values in (0, eps) become eps, values in (-eps, 0) become -eps.
    An exact zero is returned unchanged.
    """
    if 0.0 < sin_theta < eps:
        return eps
    if -eps < sin_theta < 0.0:
        return -eps
    return sin_theta


def clamp_cosine_tensor(cos_theta: torch.Tensor, eps: float = VERYSMALL_F) -> torch.Tensor:
    """Tensor version of clamp_cosine."""
    return torch.clamp(cos_theta, -1.0 + eps, 1.0 - eps)


def safe_norm(
    x: torch.Tensor,
    dim: int = -1,
    keepdim: bool = False,
    eps: float = 0.0,
) -> torch.Tensor:
    """Compute the Euclidean norm along a dimension.

    Args:
        x: Input tensor.
        dim: Dimension along which to compute norm.
        keepdim: Keep reduced dimension.
        eps: Optional offset under the square root (avoids a zero-gradient sqrt(0)).

    Returns:
        Norm of x along specified dimension.
    """
    return torch.sqrt(torch.sum(x * x, dim=dim, keepdim=keepdim) + eps)
