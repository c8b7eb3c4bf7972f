"""Errors raised while building or validating the environment substrate.

Construction errors subclass ``ValueError`` so callers that only care about
"bad input" can catch the built-in type.  ``BrokenAdjacencyError`` is an
invariant violation rather than a runtime condition and is expected to
surface in tests only.
"""

from __future__ import annotations


class AntEnvError(Exception):
    """Base class for all antenv errors."""


class InvalidDimensionError(AntEnvError, ValueError):
    """Grid width or height is not a positive integer."""


class DegenerateGridError(InvalidDimensionError):
    """A grid with zero cells was asked to share out a quantity."""


class InvalidFoodTotalError(AntEnvError, ValueError):
    """Total food for a food source is negative or not finite."""


class InvalidStimulusError(AntEnvError, ValueError):
    """A stimulus type was defined with out-of-range parameters."""


class DuplicateStimulusError(AntEnvError, ValueError):
    """A different stimulus type is already registered under this name."""


class BrokenAdjacencyError(AntEnvError, AssertionError):
    """Neighbour links in a lattice are not symmetric or not geometric."""


class ConfigError(AntEnvError, ValueError):
    """A configuration document has the wrong shape."""


class InvalidAmountError(AntEnvError, ValueError):
    """A deposit or take amount is negative or not finite."""


class ProtectedStimulusError(AntEnvError, ValueError):
    """A predefined stimulus type cannot be removed from the registry."""
