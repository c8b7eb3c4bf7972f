"""StimulusType — immutable descriptors for chemical signals.

A stimulus type names a pheromone kind and fixes how fast it fades
(``decay_factor``) and how far it is meant to spread (``radius``).
Instances are frozen and shared by reference across all cells; the
process-wide registry maps names to the single definition in use.

New kinds can be defined at runtime (see ``antenv.simulation.config``)
without touching this module.  ``FORAGE`` is predefined.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from antenv.errors import (
    DuplicateStimulusError,
    InvalidStimulusError,
    ProtectedStimulusError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StimulusType:
    """A named chemical signal.

    Attributes:
        name: Globally unique identifier, e.g. ``"ant:env:stimulus:forage"``.
        decay_factor: Fraction of concentration lost per tick, in ``[0, 1)``.
            ``0`` never decays.
        radius: Intended diffusion extent in cells.  ``0`` keeps the
            signal on the cell it was deposited on.  Diffusion itself is
            done by an external step; only the parameter lives here.
    """

    name: str
    decay_factor: float
    radius: int = 0

    def __post_init__(self) -> None:
        """Reject out-of-range parameters."""
        if not isinstance(self.name, str) or not self.name:
            msg = f"stimulus name must be a non-empty string, got {self.name!r}"
            raise InvalidStimulusError(msg)
        if isinstance(self.decay_factor, bool) or not isinstance(
            self.decay_factor,
            (int, float),
        ):
            msg = f"{self.name}: decay_factor must be a number"
            raise InvalidStimulusError(msg)
        if not (math.isfinite(self.decay_factor) and 0.0 <= self.decay_factor < 1.0):
            msg = f"{self.name}: decay_factor {self.decay_factor} not in [0, 1)"
            raise InvalidStimulusError(msg)
        if isinstance(self.radius, bool) or not isinstance(self.radius, int):
            msg = f"{self.name}: radius must be an int, got {self.radius!r}"
            raise InvalidStimulusError(msg)
        if self.radius < 0:
            msg = f"{self.name}: radius {self.radius} is negative"
            raise InvalidStimulusError(msg)

    @property
    def diffuses(self) -> bool:
        """Return True if the signal is meant to reach neighbouring cells."""
        return self.radius > 0

    def decay(self, concentration: float) -> float:
        """Apply one tick of decay: ``concentration * (1 - decay_factor)``."""
        return concentration * (1.0 - self.decay_factor)


FORAGE = StimulusType(name="ant:env:stimulus:forage", decay_factor=0.1, radius=0)

PREDEFINED = frozenset({FORAGE.name})

_registry: dict[str, StimulusType] = {}
_registry_view: Mapping[str, StimulusType] = MappingProxyType(_registry)
_registry_lock = threading.Lock()


def register_stimulus(stimulus: StimulusType) -> StimulusType:
    """Add a stimulus type to the process-wide registry.

    Registering an equal definition again is a no-op.

    Args:
        stimulus: The definition to register.

    Returns:
        The registered instance (the existing one if already present).

    Raises:
        DuplicateStimulusError: If a different definition already uses
            the same name.
    """
    with _registry_lock:
        existing = _registry.get(stimulus.name)
        if existing is not None:
            if existing != stimulus:
                msg = (
                    f"stimulus {stimulus.name!r} already registered as "
                    f"{existing!r}"
                )
                raise DuplicateStimulusError(msg)
            return existing
        _registry[stimulus.name] = stimulus
    logger.info(
        "Registered stimulus %s (decay_factor=%s, radius=%d)",
        stimulus.name,
        stimulus.decay_factor,
        stimulus.radius,
    )
    return stimulus


def unregister_stimulus(name: str) -> None:
    """Drop ``name`` from the registry.  Unknown names are ignored.

    Cells keep whatever concentration they hold under that name; they
    are only no longer swept by ``decay_all`` without explicit stimuli.

    Raises:
        ProtectedStimulusError: If ``name`` is one of the predefined
            types, such as ``FORAGE``.
    """
    if name in PREDEFINED:
        msg = f"stimulus {name!r} is predefined and cannot be unregistered"
        raise ProtectedStimulusError(msg)
    with _registry_lock:
        removed = _registry.pop(name, None)
    if removed is not None:
        logger.info("Unregistered stimulus %s", name)


def get_stimulus(name: str) -> StimulusType:
    """Return the registered stimulus type called ``name``.

    Raises:
        KeyError: If nothing is registered under that name.
    """
    try:
        return _registry_view[name]
    except KeyError:
        msg = f"unknown stimulus type {name!r}"
        raise KeyError(msg) from None


def registered_stimuli() -> Mapping[str, StimulusType]:
    """Return a read-only, live view of the registry."""
    return _registry_view


register_stimulus(FORAGE)
