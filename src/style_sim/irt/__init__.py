"""
IRT (Item Response Theory) module.

This module provides:
- Response style codings (ERS, ARS, ADRS, MRS, custom weights)
- Design matrices of the multidimensional rating scale model
- Category probabilities
- Sampling functions for generating responses
"""

from style_sim.irt.design import DesignMatrices, build_design
from style_sim.irt.parameters import RatingScaleParameters
from style_sim.irt.response_models import (
    RatingScaleModel,
    compute_category_probabilities,
)
from style_sim.irt.sampling import sample_responses
from style_sim.irt.styles import ResponseStyle, StyleCoding, encode_styles

__all__ = [
    "DesignMatrices",
    "RatingScaleModel",
    "RatingScaleParameters",
    "ResponseStyle",
    "StyleCoding",
    "build_design",
    "compute_category_probabilities",
    "encode_styles",
    "sample_responses",
]
