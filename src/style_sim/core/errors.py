"""
Exceptions and warnings raised by the simulation engine.

Every error is raised while checking the inputs, before any random draw.
"""


class SimulationError(Exception):
    """Base class for all simulation input errors."""

    pass


class InvalidArgumentError(SimulationError, ValueError):
    """An argument has an invalid value or an inconsistent combination."""

    pass


class InvalidLengthError(SimulationError, ValueError):
    """A user supplied vector or matrix has the wrong size."""

    pass


class IdentifiabilityError(SimulationError):
    """Reverse-coded items combined with sorted item locations."""

    pass


class UnsupportedModelError(SimulationError, ValueError):
    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(
            f"Item parameters are only defined for the rating scale model "
            f"('RSM'), got '{model}'"
        )


class SimulationWarning(UserWarning):
    """A default was assumed for something the caller did not specify."""

    pass
