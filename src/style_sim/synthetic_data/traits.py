"""
Latent trait sampling.

Traits are stored as a (n_dimensions, n) matrix: content traits first,
style traits after them.
"""

import logging
import warnings
from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from style_sim.core.errors import (
    InvalidArgumentError,
    InvalidLengthError,
    SimulationWarning,
)
from style_sim.irt.styles import StyleCoding
from style_sim.synthetic_data.sampling import sample_multivariate_normal

logger = logging.getLogger(__name__)


def trait_names(
    content_dimensions: int, codings: Sequence[StyleCoding]
) -> list[str]:
    return [f"content{d}" for d in range(1, content_dimensions + 1)] + [
        c.name for c in codings
    ]


def check_fixed_theta(
    fixed_theta: Any, n: int, n_dims: int
) -> NDArray[np.float64]:
    """
    Validate user supplied trait values.

    Args:
        fixed_theta: Array of shape (n, k), or a vector of length n (k = 1).
        n: Number of respondents.
        n_dims: Number of traits in the model.

    Returns:
        The values as an (n, k) float array.

    Raises:
        InvalidArgumentError: If k > n_dims.
        InvalidLengthError: If the number of rows is not n.
    """
    values = np.asarray(fixed_theta, dtype=np.float64)
    if values.ndim == 1:
        values = values.reshape(-1, 1)
    if values.ndim != 2:
        raise InvalidLengthError(
            f"fixed_theta must be 1D or 2D, got shape {values.shape}"
        )
    if values.shape[1] > n_dims:
        raise InvalidArgumentError(
            f"fixed_theta has too many columns: {values.shape[1]} for "
            f"{n_dims} dimensions"
        )
    if values.shape[0] != n:
        raise InvalidLengthError(
            f"fixed_theta must have one row per respondent ({n}), "
            f"got {values.shape[0]}"
        )
    return values


def sample_traits(
    n: int,
    means: NDArray[np.float64],
    covariance: NDArray[np.float64],
    rng: Generator,
    empirical: bool = False,
) -> NDArray[np.float64]:
    """
    Draw the trait matrix from a multivariate normal distribution.

    Args:
        n: Number of respondents.
        means: Mean per trait, shape (n_dims,).
        covariance: Trait covariance, shape (n_dims, n_dims).
        rng: Random number generator.
        empirical: Match the sample mean and covariance to the targets.

    Returns:
        Array of shape (n_dims, n).
    """
    draws = sample_multivariate_normal(
        n=n, mean=means, covariance=covariance, rng=rng, empirical=empirical
    )
    return draws.T.copy()


def apply_fixed_theta(
    theta: NDArray[np.float64], fixed_theta: NDArray[np.float64]
) -> NDArray[np.float64]:
    """
    Overwrite the first traits with user supplied values.

    Args:
        theta: Sampled traits, shape (n_dims, n).
        fixed_theta: Validated values, shape (n, k) with k <= n_dims.

    Returns:
        New trait matrix where the first k rows are fixed_theta.T.
    """
    n_dims = theta.shape[0]
    n_fixed = fixed_theta.shape[1]
    if n_fixed > n_dims:
        raise InvalidArgumentError(
            f"fixed_theta has too many columns: {n_fixed} for "
            f"{n_dims} dimensions"
        )
    if n_fixed < n_dims:
        warnings.warn(
            f"fixed_theta covers {n_fixed} of {n_dims} dimensions. The "
            f"remaining dimensions are sampled with the configured means "
            f"and unit (or configured) variance, check that this was "
            f"intended.",
            SimulationWarning,
            stacklevel=2,
        )
    result = theta.copy()
    result[:n_fixed, :] = fixed_theta.T
    logger.debug(f"Replaced {n_fixed} of {n_dims} trait dimensions")
    return result
