"""
Probabilistic response model for rating scale items with response styles.

This module turns person traits and item parameters into category
probabilities through the design matrices of `style_sim.irt.design`.
"""

import numpy as np
from numpy.typing import NDArray

from style_sim.core.utils import softmax
from style_sim.irt.design import DesignMatrices
from style_sim.irt.parameters import RatingScaleParameters


class RatingScaleModel:
    """
    Multidimensional rating scale model (multinomial logit over categories).

    For item i, category k and respondent j:
        P(Y_ij = k) = exp(η_ikj) / Σ_h exp(η_ihj)
        η_ikj = B[ik, :] @ θ_j - A[ik, :] @ (β, τ)

    The normalisation runs over the categories of one item only.
    """

    def __init__(self, design: DesignMatrices) -> None:
        self.design = design

    def _check_inputs(
        self,
        theta: NDArray[np.float64],
        params: RatingScaleParameters,
    ) -> None:
        if theta.ndim != 2:
            raise ValueError(f"theta must be 2D, got shape {theta.shape}")
        if theta.shape[0] != self.design.n_dimensions:
            raise ValueError(
                f"theta must have {self.design.n_dimensions} rows "
                f"(one per trait), got {theta.shape[0]}"
            )
        expected = self.design.steps.shape[1]
        if params.n_items + params.n_categories - 1 != expected:
            raise ValueError(
                f"Expected {expected} item parameters, got "
                f"{params.n_items + params.n_categories - 1}"
            )

    def linear_predictor(
        self,
        theta: NDArray[np.float64],
        params: RatingScaleParameters,
    ) -> NDArray[np.float64]:
        """
        Compute η for all item categories and respondents.

        Args:
            theta: Traits, shape (n_dimensions, n_respondents).
            params: Item locations and thresholds.

        Returns:
            Array of shape (n_items_total * categories, n_respondents).
        """
        self._check_inputs(theta, params)
        offsets = self.design.steps @ params.as_vector()
        result: NDArray[np.float64] = (
            self.design.weights @ theta - offsets[:, np.newaxis]
        )
        return result

    def compute_probabilities(
        self,
        theta: NDArray[np.float64],
        params: RatingScaleParameters,
    ) -> NDArray[np.float64]:
        """
        Compute category probabilities.

        Args:
            theta: Traits, shape (n_dimensions, n_respondents).
            params: Item locations and thresholds.

        Returns:
            Array of shape (categories, n_items_total, n_respondents). Each
            [:, i, j] slice sums to 1.
        """
        eta = self.linear_predictor(theta, params)
        n_respondents = theta.shape[1]
        # rows are item-major, categories adjacent
        eta = eta.reshape(
            self.design.n_items_total, self.design.categories, n_respondents
        ).transpose(1, 0, 2)
        return softmax(eta, axis=0)


def compute_category_probabilities(
    design: DesignMatrices,
    theta: NDArray[np.float64],
    params: RatingScaleParameters,
) -> NDArray[np.float64]:
    return RatingScaleModel(design).compute_probabilities(theta, params)
