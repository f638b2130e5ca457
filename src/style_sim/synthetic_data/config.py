import math
from dataclasses import dataclass
from typing import Any

from style_sim.core.errors import InvalidArgumentError, UnsupportedModelError
from style_sim.irt.styles import count_style_requests

SUPPORTED_IRT_MODELS = ("RSM",)


@dataclass
class SimulationConfig:
    """Complete configuration for simulating response style data.

    Attributes:
        n: Number of respondents.
        items: Items per content dimension.
        categories: Response categories per item.
        content_dimensions: Number of content traits.
        style: None, a style name ("ERS1", "ERS2", "ARS", "ADRS", "MRS"),
            a numeric weight vector of length `categories`, or a list of
            names and weight vectors.
        irt_model: Item response model, only "RSM" is supported.
        reversed: Reverse-coded items per dimension, either a ratio in
            [0, 1) or a count >= 1.
        style_variance: Variance of the style traits, scalar or one per
            requested style. Defaults to 1.
        style_mean: Mean of the style traits, scalar or one per requested
            style.
        content_correlation: Correlation between content traits, scalar or
            one per pair of content traits.
        seed: Base seed. Makes trait, item parameter and response draws
            reproducible; responses use one stream per cell.
        population_thresholds: Use evenly spaced thresholds instead of
            random ones.
        fixed_theta: Trait values, shape (n, k) with k <= number of traits.
        fixed_thresholds: Item locations followed by the shared thresholds.
        match_empirical_moments: Force the sampled traits to match the
            target mean and covariance exactly.
        covariance_matrix: Full trait covariance matrix, overrides
            `style_variance` and `content_correlation`.
    """

    n: int = 200
    items: int = 10
    categories: int = 5
    content_dimensions: int = 1

    # Any: names, weight vectors or a mix
    style: Any = None
    irt_model: str = "RSM"
    reversed: float = 1 / 3

    style_variance: Any = None
    style_mean: Any = 0.0
    content_correlation: Any = None

    # Reproducibility
    seed: int | None = None

    population_thresholds: bool = False
    fixed_theta: Any = None
    fixed_thresholds: Any = None
    match_empirical_moments: bool = False
    covariance_matrix: Any = None

    def __post_init__(self) -> None:
        if self.n < 1:
            raise InvalidArgumentError("Must have at least 1 respondent")
        if self.items < 1:
            raise InvalidArgumentError("Must have at least 1 item")
        if self.categories < 2:
            raise InvalidArgumentError("Must have at least 2 categories")
        if self.content_dimensions < 1:
            raise InvalidArgumentError("Must have at least 1 content trait")
        if self.seed is not None and self.seed < 0:
            raise InvalidArgumentError(f"seed must be >= 0, got {self.seed}")
        if self.irt_model not in SUPPORTED_IRT_MODELS:
            raise UnsupportedModelError(self.irt_model)
        if self.reversed < 0:
            raise InvalidArgumentError(
                f"reversed must be >= 0, got {self.reversed}"
            )
        if self.reversed >= 1 and not float(self.reversed).is_integer():
            raise InvalidArgumentError(
                f"reversed must be a ratio in [0, 1) or a whole count, "
                f"got {self.reversed}"
            )
        if self.n_reversed >= self.items:
            raise InvalidArgumentError(
                "Item count too small: at least one regular item is needed, "
                f"got {self.items} items with {self.n_reversed} reverse-coded"
            )
        if self.style_variance is not None and not self.has_style:
            raise InvalidArgumentError(
                "style_variance cannot be specified without a style"
            )

    @property
    def has_style(self) -> bool:
        return self.n_style_requests > 0

    @property
    def n_style_requests(self) -> int:
        return count_style_requests(self.style)

    @property
    def n_reversed(self) -> int:
        """Reverse-coded items per dimension."""
        if self.reversed >= 1:
            return int(self.reversed)
        return math.trunc(self.items * self.reversed)

    @property
    def n_regular(self) -> int:
        return self.items - self.n_reversed

    @property
    def n_items_total(self) -> int:
        return self.items * self.content_dimensions
