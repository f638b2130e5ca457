"""
Synthetic data generation module for rating scale responses.

This module produces questionnaire response data in which answers depend on
one or more content traits and on response style traits (extreme,
acquiescent, midpoint responding, ...), using a multidimensional rating
scale model.

It is intended for simulation studies, not for fitting models to data.
"""

from style_sim.synthetic_data.config import SimulationConfig
from style_sim.synthetic_data.data_models import (
    ResponseStyleInfo,
    SimulatedData,
)
from style_sim.synthetic_data.generators import (
    simulate_style_data,
    to_csv,
    to_dataframe,
)

__all__ = [
    "ResponseStyleInfo",
    "SimulatedData",
    "SimulationConfig",
    "simulate_style_data",
    "to_csv",
    "to_dataframe",
]
