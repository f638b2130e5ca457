"""
Data structures for simulated response style data.

This module defines typed data structures for the synthetic data module.
It avoids embedding generation logic - only contracts are defined here.
"""

from typing import Any

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict

from style_sim.synthetic_data.config import SimulationConfig


class ResponseStyleInfo(BaseModel):
    """
    Description of the response styles used in a simulation.

    Attributes:
        styles: Style identifiers, one per style trait.
        coding: Category weights actually used, shape (categories, n_styles).
        style_mean: Mean of each style trait.
        style_variance: Variance of each style trait.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    styles: list[str]
    coding: NDArray[np.float64]
    style_mean: list[float]
    style_variance: list[float]


class SimulatedData(BaseModel):
    """
    Complete output from a response style simulation.

    Contains the responses together with the true parameters that generated
    them.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Primary output, shape (n, items, content_dimensions)
    responses: NDArray[np.signedinteger[Any]]

    # True parameters
    theta: NDArray[np.float64]  # Shape: (n, n_dimensions)
    trait_names: list[str]
    item_parameters: pd.Series

    # Generation metadata
    n: int
    items_per_dimension: int
    reverse_coded_items: int
    categories: int
    irt_model: str
    content_dimensions: int

    # Only with more than one content dimension
    covariance: NDArray[np.float64] | None = None
    # Only when a style was requested
    response_style: ResponseStyleInfo | None = None

    config: SimulationConfig

    @property
    def n_dimensions(self) -> int:
        return self.theta.shape[1]

    @property
    def flat_responses(self) -> NDArray[np.signedinteger[Any]]:
        """Responses as (n, items * content_dimensions), dimension-major."""
        result: NDArray[np.signedinteger[Any]] = self.responses.transpose(
            0, 2, 1
        ).reshape(self.n, -1)
        return result

    def theta_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.theta, columns=self.trait_names)
