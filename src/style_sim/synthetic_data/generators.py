"""
Orchestration layer for response style data generation.

This module ties together styles, traits, item parameters, the rating scale
model and response sampling to generate complete data sets.
"""

import logging
import warnings

import numpy as np
import pandas as pd
from numpy.random import Generator

from style_sim.core.errors import InvalidArgumentError, SimulationWarning
from style_sim.core.utils import get_rng
from style_sim.irt.design import build_design
from style_sim.irt.response_models import compute_category_probabilities
from style_sim.irt.sampling import sample_responses
from style_sim.irt.styles import encode_styles
from style_sim.synthetic_data.config import SimulationConfig
from style_sim.synthetic_data.data_models import (
    ResponseStyleInfo,
    SimulatedData,
)
from style_sim.synthetic_data.parameters import (
    broadcast_style_values,
    build_covariance_matrix,
    check_covariance_matrix,
)
from style_sim.synthetic_data.thresholds import generate_item_parameters
from style_sim.synthetic_data.traits import (
    apply_fixed_theta,
    check_fixed_theta,
    sample_traits,
    trait_names,
)

logger = logging.getLogger(__name__)


def simulate_style_data(
    config: SimulationConfig,
    rng: Generator | None = None,
) -> SimulatedData:
    """
    Simulate rating scale data driven by content and response style traits.

    This is the main entry point for the generation pipeline:
        1. Encode the requested response styles
        2. Build (or check) the trait covariance matrix
        3. Validate fixed traits, generate item parameters
        4. Sample traits
        5. Build the design matrices and category probabilities
        6. Sample responses

    All input errors are raised before the first random draw.

    Args:
        config: Simulation configuration.
        rng: Random number generator for traits and item parameters.
            Defaults to a generator seeded with `config.seed`.

    Returns:
        SimulatedData with the responses and the true parameters.
    """
    if rng is None:
        rng = get_rng(config.seed)

    n_content = config.content_dimensions

    # Step 1: Style codings
    codings = encode_styles(config.style, config.categories)
    n_dims = n_content + len(codings)
    style_mean = broadcast_style_values(
        config.style_mean, config.n_style_requests, codings, "style_mean"
    )

    # Step 2: Covariance matrix
    if config.covariance_matrix is not None:
        covariance = check_covariance_matrix(config.covariance_matrix, n_dims)
        style_variance = np.diag(covariance)[n_content:].tolist()
    else:
        if (
            config.has_style
            and config.style_variance is None
            and config.fixed_theta is None
        ):
            warnings.warn(
                "Variance of the response style dimension(s) is set to 1, "
                "check that this is intended and possibly specify "
                "style_variance.",
                SimulationWarning,
                stacklevel=2,
            )
        style_variance = broadcast_style_values(
            1.0 if config.style_variance is None else config.style_variance,
            config.n_style_requests,
            codings,
            "style_variance",
        )
        covariance = build_covariance_matrix(
            n_content, style_variance, config.content_correlation
        )

    if config.match_empirical_moments and config.n <= n_dims:
        raise InvalidArgumentError(
            f"match_empirical_moments needs more respondents than trait "
            f"dimensions, got n={config.n} for {n_dims} dimensions"
        )

    # Step 3: Fixed inputs and item parameters
    fixed_theta = None
    if config.fixed_theta is not None:
        fixed_theta = check_fixed_theta(config.fixed_theta, config.n, n_dims)
    item_params = generate_item_parameters(config, rng)

    # Step 4: Traits
    means = np.array([0.0] * n_content + style_mean, dtype=np.float64)
    theta = sample_traits(
        n=config.n,
        means=means,
        covariance=covariance,
        rng=rng,
        empirical=config.match_empirical_moments,
    )
    if fixed_theta is not None:
        theta = apply_fixed_theta(theta, fixed_theta)
    logger.debug(f"Sampled {n_dims} trait dimension(s) for {config.n} people")

    # Step 5: Design matrices and probabilities
    design = build_design(
        items=config.items,
        categories=config.categories,
        content_dimensions=n_content,
        n_reversed=config.n_reversed,
        codings=codings,
    )
    probabilities = compute_category_probabilities(design, theta, item_params)

    # Step 6: Responses
    raw_responses = sample_responses(probabilities, rng=rng, seed=config.seed)
    responses = raw_responses.reshape(
        config.n, n_content, config.items
    ).transpose(0, 2, 1)
    logger.debug(
        f"Sampled responses of shape {responses.shape}, "
        f"seeded per cell: {config.seed is not None}"
    )

    response_style = None
    if config.has_style:
        response_style = ResponseStyleInfo(
            styles=[c.name for c in codings],
            coding=design.style_coding.copy(),
            style_mean=style_mean,
            style_variance=style_variance,
        )

    return SimulatedData(
        responses=np.ascontiguousarray(responses),
        theta=theta.T.copy(),
        trait_names=trait_names(n_content, codings),
        item_parameters=pd.Series(
            item_params.as_vector(), index=item_params.names()
        ),
        n=config.n,
        items_per_dimension=config.items,
        reverse_coded_items=config.n_reversed,
        categories=config.categories,
        irt_model=config.irt_model,
        content_dimensions=n_content,
        covariance=covariance if n_content > 1 else None,
        response_style=response_style,
        config=config,
    )


def to_dataframe(data: SimulatedData) -> pd.DataFrame:
    """
    Convert SimulatedData to a wide pandas DataFrame.

    Args:
        data: Simulated data.

    Returns:
        DataFrame with a respondent_id column and one column per item, named
        content{d}_item{k}.
    """
    columns = {"respondent_id": np.arange(1, data.n + 1, dtype=np.int64)}
    for d in range(data.content_dimensions):
        for k in range(data.items_per_dimension):
            columns[f"content{d + 1}_item{k + 1}"] = data.responses[:, k, d]
    return pd.DataFrame(columns)


def to_csv(data: SimulatedData, path: str) -> None:
    """
    Write SimulatedData responses to a CSV file.

    Args:
        data: Simulated data.
        path: Output file path.
    """
    df = to_dataframe(data)
    df.to_csv(path, index=False)
