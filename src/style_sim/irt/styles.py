"""
Response style codings.

A response style is a latent tendency to prefer some categories regardless
of item content. Each style is represented by a fixed weight per category,
which becomes one column of the weight matrix B.

Named styles (for 5 categories):
    ERS1  1  0  0  0  1   extreme responding
    ERS2  1  0  0  0  1   graded extreme responding (2 1 0 0 1 2 for 6)
    ARS   0  0  0  1  1   acquiescence
    ADRS -1 -1  0  1  1   acquiescence / disacquiescence
    MRS   0  0  1  0  0   midpoint responding (odd categories only)

A custom numeric weight vector can be used instead of a named style.
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray

from style_sim.core.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class ResponseStyle(str, Enum):
    ERS1 = "ERS1"
    ERS2 = "ERS2"
    ARS = "ARS"
    ADRS = "ADRS"
    MRS = "MRS"


# Returns None when the style is undefined for the number of categories.
StylePattern = Callable[[int], NDArray[np.float64] | None]


@dataclass(frozen=True)
class _StyleEntry:
    pattern: StylePattern
    reverses: bool


class StyleRegistry:
    def __init__(self) -> None:
        self._styles: dict[ResponseStyle, _StyleEntry] = {}

    def register(
        self, style: ResponseStyle, *, reverses: bool = False
    ) -> Callable[[StylePattern], StylePattern]:
        def decorator(func: StylePattern) -> StylePattern:
            self._styles[style] = _StyleEntry(pattern=func, reverses=reverses)
            return func

        return decorator

    def get(self, style: ResponseStyle) -> _StyleEntry:
        if style not in self._styles:
            raise ValueError(f"Style {style.value} not registered")
        return self._styles[style]


registry = StyleRegistry()


@registry.register(ResponseStyle.ERS1)
def ers1(categories: int) -> NDArray[np.float64]:
    weights = np.zeros(categories, dtype=np.float64)
    if categories > 2:
        weights[0] = weights[-1] = 1.0
    return weights


@registry.register(ResponseStyle.ERS2)
def ers2(categories: int) -> NDArray[np.float64]:
    """
    Symmetric ramp with a flat zero centre.

    The centre holds three zeros for odd and two zeros for even numbers of
    categories, the sides rise by one per category towards the extremes.
    This is the middle part of a ramp over 3 * categories points, e.g.
    4 -> 1 0 0 1, 6 -> 2 1 0 0 1 2, 7 -> 2 1 0 0 0 1 2.
    Three categories would give all zeros and use 1 0 1 instead.
    """
    if categories == 3:
        return np.array([1.0, 0.0, 1.0])
    n_zeros = 3 if categories % 2 == 1 else 2
    depth = max((categories - n_zeros) // 2, 0)
    side = np.arange(1, depth + 1, dtype=np.float64)
    return np.concatenate([side[::-1], np.zeros(n_zeros), side])


@registry.register(ResponseStyle.ARS, reverses=True)
def ars(categories: int) -> NDArray[np.float64]:
    weights = np.ones(categories, dtype=np.float64)
    weights[: math.ceil(categories / 2)] = 0.0
    return weights


@registry.register(ResponseStyle.ADRS)
def adrs(categories: int) -> NDArray[np.float64]:
    weights = np.zeros(categories, dtype=np.float64)
    weights[: categories // 2] = -1.0
    weights[math.ceil(categories / 2) :] = 1.0
    return weights


@registry.register(ResponseStyle.MRS)
def mrs(categories: int) -> NDArray[np.float64] | None:
    if categories % 2 == 0:
        return None
    weights = np.zeros(categories, dtype=np.float64)
    weights[categories // 2] = 1.0
    return weights


@dataclass(frozen=True)
class StyleCoding:
    """
    One style column of the weight matrix, for a single item.

    Attributes:
        name: Style identifier ("ARS", ...) or "style{k}" for custom weights.
        weights: Weight per category, shape (categories,).
        reverses: Whether reverse-coded items use the reversed weights.
        request_index: Position of the style in the request. Styles
            that do not apply to the number of categories are dropped, so
            this maps codings back to per-style means and variances.
    """

    name: str
    weights: NDArray[np.float64]
    reverses: bool
    request_index: int

    def for_item(self, reverse_coded: bool) -> NDArray[np.float64]:
        if reverse_coded and self.reverses:
            return self.weights[::-1]
        return self.weights


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int | float | np.integer | np.floating)


def normalize_style_request(style: Any) -> list[str | list[float]]:
    """
    Turn any accepted `style` value into a list of requests.

    Accepted forms: None, a style name, a numeric weight vector, or a
    sequence mixing style names and numeric weight vectors.
    """
    if style is None:
        return []
    if isinstance(style, str):
        return [style]
    if isinstance(style, np.ndarray):
        style = style.tolist()
    if not isinstance(style, Sequence):
        raise InvalidArgumentError(
            f"style must be a name, a weight vector or a list, got {style!r}"
        )
    if len(style) > 0 and all(_is_number(s) for s in style):
        return [[float(s) for s in style]]

    requests: list[str | list[float]] = []
    for s in style:
        if isinstance(s, str):
            requests.append(s)
        elif isinstance(s, Sequence | np.ndarray) and all(
            _is_number(w) for w in s
        ):
            requests.append([float(w) for w in s])
        else:
            raise InvalidArgumentError(f"Invalid style specification {s!r}")
    return requests


def encode_styles(style: Any, categories: int) -> list[StyleCoding]:
    """
    Translate a style request into one coding per style dimension.

    Args:
        style: None, a style name, a numeric weight vector, or a list of
            names and weight vectors.
        categories: Number of response categories.

    Returns:
        Codings in request order. MRS is left out for an even number of
        categories.

    Raises:
        InvalidArgumentError: For unknown names or weight vectors whose
            length differs from `categories`.
    """
    codings: list[StyleCoding] = []
    n_custom = 0
    for index, request in enumerate(normalize_style_request(style)):
        if isinstance(request, str):
            try:
                named = ResponseStyle(request)
            except ValueError:
                raise InvalidArgumentError(
                    f"Unknown response style '{request}'. Choose from "
                    f"{[s.value for s in ResponseStyle]}"
                ) from None
            entry = registry.get(named)
            weights = entry.pattern(categories)
            if weights is None:
                logger.debug(
                    f"{named.value} is undefined for {categories} "
                    f"categories, skipping"
                )
                continue
            codings.append(
                StyleCoding(
                    name=named.value,
                    weights=weights,
                    reverses=entry.reverses,
                    request_index=index,
                )
            )
        else:
            if len(request) != categories:
                raise InvalidArgumentError(
                    f"Incorrect number of weights specified: expected "
                    f"{categories}, got {len(request)}"
                )
            n_custom += 1
            codings.append(
                StyleCoding(
                    name=f"style{n_custom}",
                    weights=np.asarray(request, dtype=np.float64),
                    reverses=True,
                    request_index=index,
                )
            )
    return codings


def count_style_requests(style: Any) -> int:
    return len(normalize_style_request(style))
