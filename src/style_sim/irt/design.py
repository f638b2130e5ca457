"""
Design matrices of the multidimensional rating scale model.

The linear predictor of category k of item i for a respondent with trait
vector θ is

    η_ik = B[ik, :] @ θ - A[ik, :] @ (β, τ)

B (weight matrix) maps traits to categories: content traits load with the
category index on the items of their own dimension, style traits load with
the style's weight pattern on every item. A (step matrix) maps the item
locations β and the shared thresholds τ to categories.

Rows of both matrices are ordered item by item, with all categories of an
item adjacent. Items are ordered by dimension. Within each dimension the
last `n_reversed` items are reverse-coded.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from style_sim.core.linalg import (
    cumulative_steps,
    repeat_block_diagonal,
)
from style_sim.irt.styles import StyleCoding


@dataclass(frozen=True)
class DesignMatrices:
    """
    Weight and step matrices for one simulation.

    Attributes:
        weights: B, shape (n_items_total * categories, n_content + n_style).
        steps: A, shape (n_items_total * categories,
            n_items_total + categories - 1).
        categories: Number of response categories.
        content_dimensions: Number of content traits (first columns of B).
    """

    weights: NDArray[np.float64]
    steps: NDArray[np.float64]
    categories: int
    content_dimensions: int

    def __post_init__(self) -> None:
        if self.weights.shape[0] != self.steps.shape[0]:
            raise ValueError(
                f"weights and steps must have the same number of rows, got "
                f"{self.weights.shape[0]} and {self.steps.shape[0]}"
            )

    @property
    def n_items_total(self) -> int:
        return self.weights.shape[0] // self.categories

    @property
    def n_dimensions(self) -> int:
        return self.weights.shape[1]

    @property
    def n_style_dimensions(self) -> int:
        return self.n_dimensions - self.content_dimensions

    @property
    def style_coding(self) -> NDArray[np.float64]:
        """Style weights of the first item, shape (categories, n_style)."""
        return self.weights[: self.categories, self.content_dimensions :]


def build_weight_matrix(
    items: int,
    categories: int,
    content_dimensions: int,
    n_reversed: int,
    codings: Sequence[StyleCoding] = (),
) -> NDArray[np.float64]:
    """
    Build the category weight matrix B.

    Args:
        items: Items per content dimension.
        categories: Number of response categories.
        content_dimensions: Number of content traits.
        n_reversed: Reverse-coded items per dimension (the last ones).
        codings: Style codings, one column each.

    Returns:
        Array of shape (items * content_dimensions * categories,
        content_dimensions + len(codings)).
    """
    category_index = np.tile(np.arange(categories, dtype=np.float64), items)
    content = repeat_block_diagonal(
        category_index.reshape(-1, 1), content_dimensions
    )

    n_regular = items - n_reversed
    columns = [content]
    for coding in codings:
        per_dimension = np.concatenate(
            [coding.for_item(reverse_coded=False)] * n_regular
            + [coding.for_item(reverse_coded=True)] * n_reversed
        )
        columns.append(
            np.tile(per_dimension, content_dimensions).reshape(-1, 1)
        )
    return np.hstack(columns)


def build_step_matrix(n_items: int, categories: int) -> NDArray[np.float64]:
    """
    Build the step matrix A.

    The first n_items columns carry the item locations, weighted by the
    category index. The remaining categories - 1 columns carry the shared
    thresholds: category k of every item accumulates thresholds 1..k.

    Args:
        n_items: Total number of items over all dimensions.
        categories: Number of response categories.

    Returns:
        Array of shape (n_items * categories, n_items + categories - 1).
    """
    category_index = np.arange(categories, dtype=np.float64).reshape(-1, 1)
    locations = repeat_block_diagonal(category_index, n_items)
    thresholds = np.tile(cumulative_steps(categories), (n_items, 1))
    return np.hstack([locations, thresholds])


def build_design(
    items: int,
    categories: int,
    content_dimensions: int,
    n_reversed: int,
    codings: Sequence[StyleCoding] = (),
) -> DesignMatrices:
    return DesignMatrices(
        weights=build_weight_matrix(
            items, categories, content_dimensions, n_reversed, codings
        ),
        steps=build_step_matrix(items * content_dimensions, categories),
        categories=categories,
        content_dimensions=content_dimensions,
    )
