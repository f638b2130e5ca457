"""
Validation and sanity checks for generated data.

This module checks invariants of the probability tensor and the response
array, and provides statistical validation of generated data.
"""

import numpy as np
from numpy.typing import NDArray

from style_sim.synthetic_data.data_models import SimulatedData


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


def validate_probabilities(
    probabilities: NDArray[np.float64],
    atol: float = 1e-10,
) -> None:
    """
    Check that every (item, respondent) column is a probability vector.

    Args:
        probabilities: Shape (categories, n_items, n_respondents).
        atol: Allowed deviation of the column sums from 1.

    Raises:
        ValidationError: If a probability is negative or a column does not
            sum to 1.
    """
    if probabilities.ndim != 3:
        raise ValidationError(
            f"probabilities must be 3D, got shape {probabilities.shape}"
        )
    if np.any(probabilities < 0):
        raise ValidationError("probabilities must be non-negative")
    sums = probabilities.sum(axis=0)
    worst = float(np.max(np.abs(sums - 1.0)))
    if worst > atol:
        raise ValidationError(
            f"Category probabilities must sum to 1, largest deviation "
            f"{worst:.3e} exceeds tolerance {atol}"
        )


def validate_response_range(data: SimulatedData) -> None:
    """
    Check the shape and the value range of the response array.

    Raises:
        ValidationError: If the shape is not (n, items, content_dimensions)
            or a response lies outside [0, categories - 1].
    """
    expected = (data.n, data.items_per_dimension, data.content_dimensions)
    if data.responses.shape != expected:
        raise ValidationError(
            f"responses must have shape {expected}, "
            f"got {data.responses.shape}"
        )
    if data.responses.size == 0:
        return
    low, high = int(data.responses.min()), int(data.responses.max())
    if low < 0 or high > data.categories - 1:
        raise ValidationError(
            f"responses must lie in [0, {data.categories - 1}], "
            f"got [{low}, {high}]"
        )


def compute_category_frequencies(
    data: SimulatedData,
) -> NDArray[np.float64]:
    """
    Relative frequency of each category, per content dimension.

    Returns:
        Array of shape (categories, content_dimensions); columns sum to 1.
    """
    frequencies = np.zeros(
        (data.categories, data.content_dimensions), dtype=np.float64
    )
    for d in range(data.content_dimensions):
        counts = np.bincount(
            data.responses[:, :, d].ravel().astype(np.int64),
            minlength=data.categories,
        )
        frequencies[:, d] = counts / counts.sum()
    return frequencies


def compute_trait_moments(
    data: SimulatedData,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Sample mean and covariance (n - 1 denominator) of the true traits.

    Returns:
        Tuple of (means, covariance) with shapes (n_dims,) and
        (n_dims, n_dims).
    """
    means = data.theta.mean(axis=0)
    covariance = np.atleast_2d(np.cov(data.theta, rowvar=False, ddof=1))
    return means, covariance


def compute_sum_score_correlations(
    data: SimulatedData,
) -> NDArray[np.float64]:
    """
    Correlation between each dimension's sum score and its content trait.

    Only regular (not reverse-coded) items enter the sum score.

    Returns:
        Array of shape (content_dimensions,).
    """
    n_regular = data.items_per_dimension - data.reverse_coded_items
    correlations = np.empty(data.content_dimensions, dtype=np.float64)
    for d in range(data.content_dimensions):
        scores = data.responses[:, :n_regular, d].sum(axis=1)
        if np.std(scores) == 0:
            correlations[d] = np.nan
            continue
        correlations[d] = np.corrcoef(scores, data.theta[:, d])[0, 1]
    return correlations


def validate_content_signal(
    data: SimulatedData,
    min_correlation: float = 0.3,
) -> None:
    """
    Validate that sum scores increase with the content traits.

    Raises:
        ValidationError: If any correlation is below min_correlation.
    """
    correlations = compute_sum_score_correlations(data)
    for d, r in enumerate(correlations):
        if np.isnan(r) or r < min_correlation:
            raise ValidationError(
                f"Sum score / content{d + 1} correlation {r:.3f} is below "
                f"minimum {min_correlation}. Scores should increase with the "
                f"content trait."
            )


def validate_generated_data(
    data: SimulatedData,
    check_content_signal: bool = True,
    min_content_correlation: float = 0.3,
) -> None:
    """
    Run all validation checks on generated data.

    Args:
        data: Simulated data.
        check_content_signal: Whether to validate sum score correlations.
        min_content_correlation: Minimum correlation for the content check.

    Raises:
        ValidationError: If any validation fails.
    """
    validate_response_range(data)

    # Content signal needs enough data to be stable
    if check_content_signal and data.n >= 100:
        validate_content_signal(data, min_correlation=min_content_correlation)
