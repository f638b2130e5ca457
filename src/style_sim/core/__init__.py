"""
Core shared types and utilities for style_sim.

This module provides foundational components used across multiple submodules,
enabling clean decoupling between the IRT model and the synthetic data
orchestration layer.
"""

from style_sim.core.errors import (
    IdentifiabilityError,
    InvalidArgumentError,
    InvalidLengthError,
    SimulationError,
    SimulationWarning,
    UnsupportedModelError,
)
from style_sim.core.utils import cell_seed, get_rng, softmax

__all__ = [
    "IdentifiabilityError",
    "InvalidArgumentError",
    "InvalidLengthError",
    "SimulationError",
    "SimulationWarning",
    "UnsupportedModelError",
    "cell_seed",
    "get_rng",
    "softmax",
]
