"""
Dense matrix constructors for the design matrices of the rating scale model.

All helpers return plain float64 numpy arrays.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import block_diag


def as_column(values: ArrayLike) -> NDArray[np.float64]:
    """Reshape a 1D sequence into an (n, 1) column."""
    return np.asarray(values, dtype=np.float64).reshape(-1, 1)


def block_diagonal(blocks: Sequence[ArrayLike]) -> NDArray[np.float64]:
    """
    Stack matrices along the diagonal, zero elsewhere.

    Args:
        blocks: Matrices (or 1D vectors, treated as columns) to stack.

    Returns:
        Matrix with sum of block rows x sum of block columns.
    """
    if len(blocks) == 0:
        raise ValueError("block_diagonal needs at least one block")
    arrays = [
        np.atleast_2d(np.asarray(b, dtype=np.float64))
        if np.ndim(b) != 1
        else as_column(b)
        for b in blocks
    ]
    result: NDArray[np.float64] = block_diag(*arrays).astype(np.float64)
    return result


def repeat_block_diagonal(block: ArrayLike, times: int) -> NDArray[np.float64]:
    """Place `times` copies of the same block along the diagonal."""
    if times < 1:
        raise ValueError(f"times must be >= 1, got {times}")
    return block_diagonal([block] * times)


def cumulative_steps(n_categories: int) -> NDArray[np.float64]:
    """
    Step indicator block for one item.

    Row k (0-based category) has ones in the first k columns, i.e. category
    k accumulates the first k thresholds. Category 0 is an all-zero row.

    Example for 4 categories:
        [[0, 0, 0],
         [1, 0, 0],
         [1, 1, 0],
         [1, 1, 1]]

    Args:
        n_categories: Number of response categories (>= 2).

    Returns:
        Array of shape (n_categories, n_categories - 1).
    """
    if n_categories < 2:
        raise ValueError(f"n_categories must be >= 2, got {n_categories}")
    n_steps = n_categories - 1
    lower = np.tril(np.ones((n_steps, n_steps), dtype=np.float64))
    return np.vstack([np.zeros((1, n_steps), dtype=np.float64), lower])
