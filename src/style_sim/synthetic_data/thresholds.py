"""
Item parameter generation for the rating scale model.

Item locations are drawn from a truncated normal distribution, the shared
thresholds are either evenly spaced ("population" thresholds) or drawn from
a uniform distribution and centred. Both can be replaced by user supplied
values.
"""

import logging
import warnings
from typing import Any

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from style_sim.core.errors import (
    IdentifiabilityError,
    InvalidLengthError,
    SimulationWarning,
    UnsupportedModelError,
)
from style_sim.core.utils import get_rng
from style_sim.irt.parameters import RatingScaleParameters
from style_sim.synthetic_data.config import (
    SUPPORTED_IRT_MODELS,
    SimulationConfig,
)
from style_sim.synthetic_data.sampling import draw_sample

logger = logging.getLogger(__name__)

THRESHOLD_MIN = -2.5
THRESHOLD_MAX = 2.5

LOCATION_DISTRIBUTION = "truncated_normal"
LOCATION_PARAMS: dict[str, float | None] = {
    "mean": 0.0,
    "std": 1.0,
    "lower": -1.5,
    "upper": 1.5,
}


def population_thresholds(categories: int) -> NDArray[np.float64]:
    """Evenly spaced thresholds strictly inside the threshold range."""
    points = np.linspace(THRESHOLD_MIN, THRESHOLD_MAX, categories + 1)
    return points[1:-1]


def sample_thresholds(
    categories: int, rng: Generator | None = None
) -> NDArray[np.float64]:
    """
    Draw sorted, mean-centred thresholds.

    Uniform draws on [THRESHOLD_MIN, THRESHOLD_MAX] are sorted and centred,
    and redrawn until the centred values stay within the bounds.

    Args:
        categories: Number of response categories.
        rng: Random number generator.

    Returns:
        Array of shape (categories - 1,), ascending, mean zero.
    """
    if rng is None:
        rng = get_rng()

    bound = max(abs(THRESHOLD_MIN), abs(THRESHOLD_MAX))
    n_draws = 0
    while True:
        n_draws += 1
        draws = np.sort(
            draw_sample(
                categories - 1,
                "uniform",
                {"low": THRESHOLD_MIN, "high": THRESHOLD_MAX},
                rng,
            )
        )
        thresholds = draws - draws.mean()
        if np.max(np.abs(thresholds)) <= bound:
            break
    logger.debug(f"Accepted thresholds after {n_draws} draw(s)")
    return thresholds


def sample_item_locations(
    n_items: int, rng: Generator | None = None
) -> NDArray[np.float64]:
    return draw_sample(n_items, LOCATION_DISTRIBUTION, LOCATION_PARAMS, rng)


def split_fixed_thresholds(
    values: Any,
    n_items: int,
    categories: int,
    n_reversed: int,
) -> RatingScaleParameters:
    """
    Split user supplied item parameters into locations and thresholds.

    Args:
        values: n_items locations followed by categories - 1 thresholds.
        n_items: Total number of items over all dimensions.
        categories: Number of response categories.
        n_reversed: Reverse-coded items per dimension.

    Returns:
        RatingScaleParameters with the supplied values.

    Raises:
        InvalidLengthError: If the number of values is wrong.
        IdentifiabilityError: If items are reverse-coded and the locations
            are strictly increasing.
    """
    vector = np.ravel(np.asarray(values, dtype=np.float64))
    expected = n_items + categories - 1
    if vector.size != expected:
        raise InvalidLengthError(
            f"fixed_thresholds has wrong length: expected {expected} "
            f"({n_items} locations + {categories - 1} thresholds), "
            f"got {vector.size}"
        )
    locations = vector[:n_items]
    thresholds = vector[n_items:]

    if n_reversed > 0:
        warnings.warn(
            f"The last {n_reversed} item(s) of each dimension are "
            f"reverse-coded, check that this is intended and possibly "
            f"alter the order of fixed_thresholds.",
            SimulationWarning,
            stacklevel=2,
        )
        if np.all(np.diff(locations) > 0):
            raise IdentifiabilityError(
                "Items cannot be reverse-coded if the item locations are "
                "sorted. Please shuffle the order of the item locations."
            )

    return RatingScaleParameters(
        locations=tuple(locations.tolist()),
        thresholds=tuple(thresholds.tolist()),
    )


def generate_item_parameters(
    config: SimulationConfig, rng: Generator | None = None
) -> RatingScaleParameters:
    """
    Produce item locations and shared thresholds for a simulation.

    Args:
        config: Simulation configuration.
        rng: Random number generator for the random paths.

    Returns:
        RatingScaleParameters for all items of all dimensions.

    Raises:
        UnsupportedModelError: If the model is not the rating scale model.
    """
    if config.fixed_thresholds is not None:
        return split_fixed_thresholds(
            config.fixed_thresholds,
            n_items=config.n_items_total,
            categories=config.categories,
            n_reversed=config.n_reversed,
        )

    if config.irt_model not in SUPPORTED_IRT_MODELS:
        raise UnsupportedModelError(config.irt_model)

    if rng is None:
        rng = get_rng(config.seed)

    if config.population_thresholds:
        thresholds = population_thresholds(config.categories)
    else:
        thresholds = sample_thresholds(config.categories, rng)
    locations = sample_item_locations(config.n_items_total, rng)

    return RatingScaleParameters(
        locations=tuple(locations.tolist()),
        thresholds=tuple(thresholds.tolist()),
    )
