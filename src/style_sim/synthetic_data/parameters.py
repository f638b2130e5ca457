"""
Trait covariance construction and configuration loading.

This module provides:
- Alignment of per-style means and variances with the style codings
- Covariance matrix building and validation
- Config loading from YAML files using OmegaConf
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray
from omegaconf import OmegaConf

from style_sim.core.errors import InvalidArgumentError, InvalidLengthError
from style_sim.irt.styles import StyleCoding
from style_sim.synthetic_data.config import SimulationConfig

# =============================================================================
# Per-style values
# =============================================================================


def broadcast_style_values(
    values: Any,
    n_requested: int,
    codings: Sequence[StyleCoding],
    name: str,
) -> list[float]:
    """Align a scalar or per-request setting with the retained codings.

    Args:
        values: Scalar, or one value per requested style.
        n_requested: Number of requested styles, including dropped ones.
        codings: Styles that made it into the weight matrix.
        name: Setting name for error messages.

    Returns:
        One value per coding.

    Raises:
        InvalidLengthError: If a sequence has the wrong length.
    """
    if np.ndim(values) == 0:
        return [float(values)] * len(codings)
    values = [float(v) for v in np.ravel(values)]
    if len(values) == 1:
        return values * len(codings)
    if len(values) != n_requested:
        raise InvalidLengthError(
            f"{name} needs 1 or {n_requested} values (one per style), "
            f"got {len(values)}"
        )
    return [values[c.request_index] for c in codings]


# =============================================================================
# Covariance Matrix Utilities
# =============================================================================


def _validate_psd(matrix: NDArray[np.float64]) -> bool:
    """Check if covariance matrix is positive semi-definite."""
    eigenvalues = np.linalg.eigvalsh(matrix)
    return bool(np.all(eigenvalues >= -1e-10))


def n_content_pairs(content_dimensions: int) -> int:
    return content_dimensions * (content_dimensions - 1) // 2


def build_covariance_matrix(
    content_dimensions: int,
    style_variances: Sequence[float] = (),
    content_correlation: Any = None,
) -> NDArray[np.float64]:
    """Build the trait covariance matrix.

    Content traits have unit variance and the requested correlations. Style
    traits have the given variances and are uncorrelated with everything.

    Order: [content1, ..., contentC, style1, ..., styleS]

    Args:
        content_dimensions: Number of content traits.
        style_variances: One variance per style trait.
        content_correlation: None, a scalar used for every pair of content
            traits, or one value per pair in the order
            (1,2), (1,3), ..., (2,3), ...

    Returns:
        Covariance matrix of shape (C + S, C + S).

    Raises:
        InvalidArgumentError: If the number of correlations is wrong, or the
            result is not positive semi-definite.
    """
    n_dims = content_dimensions + len(style_variances)
    sigma = np.eye(n_dims, dtype=np.float64)
    sigma[content_dimensions:, content_dimensions:] = np.diag(
        np.asarray(style_variances, dtype=np.float64)
    )

    if content_correlation is not None:
        n_pairs = n_content_pairs(content_dimensions)
        correlations = np.ravel(np.asarray(content_correlation, dtype=float))
        if correlations.size == 1:
            correlations = np.repeat(correlations, n_pairs)
        if correlations.size != n_pairs:
            raise InvalidArgumentError(
                f"Incorrect number of content correlations: expected "
                f"{n_pairs} for {content_dimensions} content dimensions, "
                f"got {correlations.size}"
            )
        upper = np.triu_indices(content_dimensions, k=1)
        sigma[upper] = correlations
        sigma[(upper[1], upper[0])] = correlations

    if not _validate_psd(sigma):
        raise InvalidArgumentError(
            f"Specified variances and correlations do not form a valid "
            f"covariance matrix. The matrix must be positive semi-definite. "
            f"Got:\n{sigma}"
        )
    return sigma


def check_covariance_matrix(
    matrix: Any, n_dims: int
) -> NDArray[np.float64]:
    """Validate a user supplied covariance matrix.

    Raises:
        InvalidArgumentError: If the matrix is not n_dims x n_dims, not
            symmetric or not positive semi-definite.
    """
    sigma = np.asarray(matrix, dtype=np.float64)
    if sigma.shape != (n_dims, n_dims):
        raise InvalidArgumentError(
            f"covariance_matrix is of wrong dimension: expected "
            f"{(n_dims, n_dims)}, got {sigma.shape}"
        )
    if not np.allclose(sigma, sigma.T):
        raise InvalidArgumentError("covariance_matrix is not symmetric")
    if not _validate_psd(sigma):
        raise InvalidArgumentError(
            f"covariance_matrix must be positive semi-definite. Got:\n{sigma}"
        )
    return sigma


# =============================================================================
# Config Loading
# =============================================================================


def load_config(yaml_path: Path | None) -> SimulationConfig:
    """Load and validate a simulation configuration from YAML.

    Args:
        yaml_path: Path to YAML config file. None gives the defaults.

    Returns:
        Validated SimulationConfig

    Raises:
        FileNotFoundError: If yaml_path doesn't exist
        SimulationError: If the configuration is invalid
    """
    # Create schema from dataclass
    schema = OmegaConf.structured(SimulationConfig)

    if yaml_path is not None:
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        user_config = OmegaConf.load(yaml_path)
        config = OmegaConf.merge(schema, user_config)
    else:
        config = schema

    # Convert to typed dataclass
    result = OmegaConf.to_object(config)
    assert isinstance(result, SimulationConfig)

    return result
