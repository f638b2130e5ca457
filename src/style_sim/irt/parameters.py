"""
Rating scale model item parameter representation.

The rating scale model (Andrich, 1978), written with category weights:
    P(Y_i = k | θ) ∝ exp(k * θ - k * β_i - Σ_{h<=k} τ_h)

Each item has its own location β_i. The C-1 thresholds τ are shared by all
items. No identification constraint is imposed on the thresholds: all of
them are drawn from the same distribution.
"""

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, model_validator


class RatingScaleParameters(BaseModel):
    """
    Item locations and shared thresholds of a rating scale model.

    Attributes:
        locations: One location per item, items of all content dimensions
            concatenated (dimension 1 first).
        thresholds: Shared category thresholds, length categories - 1.
    """

    model_config = ConfigDict(frozen=True)

    locations: tuple[float, ...]
    thresholds: tuple[float, ...]

    @model_validator(mode="after")
    def _validate_not_empty(self) -> "RatingScaleParameters":
        if len(self.locations) == 0:
            raise ValueError("Must have at least 1 item location")
        if len(self.thresholds) == 0:
            raise ValueError("Must have at least 1 threshold (2 categories)")
        return self

    @property
    def n_items(self) -> int:
        return len(self.locations)

    @property
    def n_categories(self) -> int:
        return len(self.thresholds) + 1

    def as_vector(self) -> NDArray[np.float64]:
        """Locations followed by thresholds, the column order of A."""
        return np.array(self.locations + self.thresholds, dtype=np.float64)

    def names(self) -> list[str]:
        return [f"item{i}" for i in range(1, self.n_items + 1)] + [
            f"categ{k}" for k in range(1, self.n_categories)
        ]
