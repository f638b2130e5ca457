"""
Response sampling for the rating scale model.

Responses are drawn by inverse-CDF lookup of one uniform draw per
(item, respondent) cell. The uniforms come either from a single generator
(fast, vectorised) or from one independent generator per cell, seeded from
a base seed and the cell position. The latter reproduces every cell
regardless of the order in which cells are evaluated.
"""

from typing import Any

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from style_sim.core.utils import cell_seed, get_rng

RESPONSE_DTYPES = (np.int8, np.int16, np.int32, np.int64)


def response_dtype(n_categories: int) -> type[np.signedinteger[Any]]:
    """Smallest signed integer type holding categories 0..n_categories-1."""
    for dtype in RESPONSE_DTYPES:
        if n_categories - 1 <= np.iinfo(dtype).max:
            return dtype
    raise ValueError(f"Too many categories: {n_categories}")


def categories_from_uniforms(
    probabilities: NDArray[np.float64],
    uniforms: NDArray[np.float64],
) -> NDArray[np.signedinteger[Any]]:
    """
    Map uniform draws to categories.

    The category is the smallest index whose cumulative probability
    exceeds the draw.

    Args:
        probabilities: Shape (categories, n_items, n_respondents).
        uniforms: Shape (n_items, n_respondents), values in [0, 1).

    Returns:
        Array of shape (n_respondents, n_items) with categories.
    """
    n_categories = probabilities.shape[0]
    if uniforms.shape != probabilities.shape[1:]:
        raise ValueError(
            f"uniforms must have shape {probabilities.shape[1:]}, "
            f"got {uniforms.shape}"
        )
    cumprobs = np.cumsum(probabilities, axis=0)

    # Count cumulative probabilities <= u, guarding against rounding in the
    # last cumulative value
    sampled = np.minimum(
        (cumprobs <= uniforms[np.newaxis, :, :]).sum(axis=0),
        n_categories - 1,
    )
    return sampled.T.astype(response_dtype(n_categories))


def cell_uniform(base_seed: int, item: int, respondent: int) -> float:
    """
    Uniform draw of a single cell from its own generator.

    Args:
        base_seed: Base seed of the simulation.
        item: 1-based item position.
        respondent: 1-based respondent position.

    Returns:
        A value in [0, 1).
    """
    rng = get_rng(cell_seed(base_seed, item, respondent))
    return float(rng.random())


def seeded_uniforms(
    base_seed: int, n_items: int, n_respondents: int
) -> NDArray[np.float64]:
    """
    Uniform draws for all cells, each from its own seeded generator.

    Returns:
        Array of shape (n_items, n_respondents).
    """
    uniforms = np.empty((n_items, n_respondents), dtype=np.float64)
    for i in range(n_items):
        for j in range(n_respondents):
            uniforms[i, j] = cell_uniform(base_seed, i + 1, j + 1)
    return uniforms


def sample_responses(
    probabilities: NDArray[np.float64],
    rng: Generator | None = None,
    seed: int | None = None,
) -> NDArray[np.signedinteger[Any]]:
    """
    Sample one category per item and respondent.

    Args:
        probabilities: Shape (categories, n_items, n_respondents).
        rng: Random number generator, used when `seed` is None.
        seed: Base seed for reproducible per-cell draws.

    Returns:
        Array of shape (n_respondents, n_items) with categories.
    """
    _, n_items, n_respondents = probabilities.shape
    if seed is not None:
        uniforms = seeded_uniforms(seed, n_items, n_respondents)
    else:
        if rng is None:
            rng = get_rng()
        uniforms = rng.random((n_items, n_respondents))
    return categories_from_uniforms(probabilities, uniforms)
