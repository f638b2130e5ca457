"""
Sampling from statistical distributions

This module contains the samplers used by the generator: univariate
scipy.stats distributions behind a small registry, and a multivariate
normal sampler for correlated traits.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray
from scipy import stats

from style_sim.core.utils import get_rng


class FrozenRV(Protocol):
    def rvs(
        self, size: Any, random_state: Any
    ) -> NDArray[np.floating[Any]]: ...


class Distribution(ABC):
    """Abstract base class for a statistical distributions."""

    @abstractmethod
    def sample(self, n: int, rng: Generator) -> NDArray[np.float64]:
        """
        Sample n values.

        Args:
            n: Number of samples.
            rng: Random number generator.

        Returns:
            Array of shape (n,) with sampled values.
        """
        ...


@dataclass
class ScipyDistribution(Distribution):
    """
    Wrapper for any scipy.stats distribution.

    Examples:
        >>> dist = ScipyDistribution(stats.uniform(loc=-2.5, scale=5))
        >>> dist = ScipyDistribution(stats.truncnorm(-1.5, 1.5))
    """

    dist: FrozenRV

    def sample(self, n: int, rng: Generator) -> NDArray[np.float64]:
        samples: NDArray[np.float64] = np.atleast_1d(
            self.dist.rvs(size=n, random_state=rng)
        ).astype(np.float64)
        return samples


####################################################################
# Registry
####################################################################


DistributionGenerator = Callable[..., Distribution]


class SamplerRegistry:
    def __init__(self) -> None:
        self._samplers: dict[str, DistributionGenerator] = {}

    def register(
        self, name: str
    ) -> Callable[[DistributionGenerator], DistributionGenerator]:
        def decorator(
            func: DistributionGenerator,
        ) -> DistributionGenerator:
            self._samplers[name] = func
            return func

        return decorator

    def get_sampler(
        self, name: str, params: dict[str, float | None]
    ) -> Distribution:
        if name not in self._samplers:
            raise ValueError(f"Sampler {name} not registered")
        return self._samplers[name](**params)


registry = SamplerRegistry()


@registry.register("uniform")
def uniform(*, low: float = -1.0, high: float = 1.0) -> ScipyDistribution:
    """Uniform distribution."""
    return ScipyDistribution(stats.uniform(loc=low, scale=high - low))


@registry.register("truncated_normal")
def truncated_normal(
    *,
    mean: float = 0.0,
    std: float = 1.0,
    lower: float | None = None,
    upper: float | None = None,
) -> ScipyDistribution:
    """
    Truncated normal distribution.

    Args:
        mean: Mean of the underlying normal distribution.
        std: Standard deviation of the underlying normal distribution.
        lower: Lower bound (None = unbounded).
        upper: Upper bound (None = unbounded).
    """
    # Convert bounds to standardized form for scipy.stats.truncnorm
    a_std = (lower - mean) / std if lower is not None else -np.inf
    b_std = (upper - mean) / std if upper is not None else np.inf
    return ScipyDistribution(
        stats.truncnorm(a_std, b_std, loc=mean, scale=std)
    )


def draw_sample(
    n: int,
    distribution_name: str,
    distribution_params: dict[str, float | None] | None = None,
    rng: Generator | None = None,
) -> NDArray[np.float64]:
    """
    Sample values from a distribution.

    Args:
        n: Number of values.
        distribution_name: Name of the distribution to sample from.
        distribution_params: Parameters passed to the distribution sampler.
        rng: Random number generator.

    Returns:
        Array of shape (n,) with sampled values.
    """
    if rng is None:
        rng = get_rng()

    if distribution_params is None:
        distribution_params = {}

    distribution = registry.get_sampler(distribution_name, distribution_params)

    return distribution.sample(n, rng)


####################################################################
# Multivariate normal
####################################################################


def _covariance_root(covariance: NDArray[np.float64]) -> NDArray[np.float64]:
    """Symmetric square root factor L with L @ L.T == covariance."""
    eigenvalues, eigenvectors = np.linalg.eigh(covariance)
    if np.any(eigenvalues < -1e-10 * max(1.0, abs(eigenvalues).max())):
        raise ValueError("covariance matrix is not positive semi-definite")
    root: NDArray[np.float64] = eigenvectors * np.sqrt(
        np.clip(eigenvalues, 0.0, None)
    )
    return root


def sample_multivariate_normal(
    n: int,
    mean: NDArray[np.float64],
    covariance: NDArray[np.float64],
    rng: Generator,
    empirical: bool = False,
) -> NDArray[np.float64]:
    """
    Draw correlated normal vectors.

    With `empirical=True` the draws are centred and whitened before the
    covariance is applied, so the sample mean equals `mean` and the sample
    covariance (n - 1 denominator) equals `covariance` exactly.

    Args:
        n: Number of draws.
        mean: Mean vector, shape (p,).
        covariance: Covariance matrix, shape (p, p).
        rng: Random number generator.
        empirical: Match the sample moments to the targets.

    Returns:
        Array of shape (n, p).
    """
    mean = np.asarray(mean, dtype=np.float64)
    covariance = np.asarray(covariance, dtype=np.float64)
    p = mean.shape[0]
    if covariance.shape != (p, p):
        raise ValueError(
            f"covariance must have shape {(p, p)}, got {covariance.shape}"
        )

    z = rng.standard_normal((n, p))
    if empirical:
        if n <= p:
            raise ValueError(
                f"Empirical moments need more draws than dimensions, "
                f"got n={n} and p={p}"
            )
        z = z - z.mean(axis=0)
        # rotate onto the principal axes, then give each axis unit variance
        _, _, vt = np.linalg.svd(z, full_matrices=False)
        z = z @ vt.T
        z = z / z.std(axis=0, ddof=1)

    draws: NDArray[np.float64] = z @ _covariance_root(covariance).T + mean
    return draws
