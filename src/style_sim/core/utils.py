"""
Core utility functions shared across style_sim modules.

This module provides the random number plumbing used by both the
generative IRT model and the synthetic data orchestration layer.
"""

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray


def get_rng(seed: int | None = None) -> Generator:
    """
    Create a numpy random Generator with optional seed.

    Args:
        seed: Random seed for reproducibility. If None, uses entropy.

    Returns:
        A numpy random Generator instance.
    """
    return np.random.default_rng(seed)


def cell_seed(base_seed: int, item: int, respondent: int) -> int:
    """
    Seed for the random stream of a single (item, respondent) cell.

    Uses the Cantor pairing of the two positions, shifted by the base seed:
        base_seed + (i + j) * (i + j + 1) / 2 + j

    Positions are counted from one, so the first cell of a base seed of 0
    gets seed 4.

    Args:
        base_seed: User supplied base seed (non-negative).
        item: 1-based item position.
        respondent: 1-based respondent position.

    Returns:
        Integer seed, unique per cell for a given base seed.
    """
    if item < 1 or respondent < 1:
        raise ValueError(
            f"Cell positions are 1-based, got item={item}, "
            f"respondent={respondent}"
        )
    s = item + respondent
    return base_seed + s * (s + 1) // 2 + respondent


def softmax(
    logits: NDArray[np.floating], axis: int = -1
) -> NDArray[np.float64]:
    """
    Compute softmax probabilities from logits.

    Numerically stable implementation.

    Args:
        logits: Array of logits.
        axis: Axis along which to compute softmax.

    Returns:
        Array of probabilities that sum to 1 along the specified axis.
    """
    # Subtract max for numerical stability
    shifted = logits - np.max(logits, axis=axis, keepdims=True)
    exp_logits = np.exp(shifted)
    result: NDArray[np.float64] = exp_logits / np.sum(
        exp_logits, axis=axis, keepdims=True
    )
    return result
