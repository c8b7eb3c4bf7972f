"""Cell — a single addressable location in a lattice.

A cell carries an identifier and non-owning links to its neighbours.
The ``Lattice`` that built the cells is their sole owner; a cell only
keeps ``weakref`` handles so the adjacency graph never forms reference
cycles.

Variants add payload on top of identity and adjacency:

- ``NestCell``: structural space inside the nest, no extra state.
- ``PheromoneCell``: concentration per stimulus type, with decay.
- ``FoodSourceCell``: remaining food that foragers can take.
"""

from __future__ import annotations

import math
import weakref
from collections.abc import Iterable
from dataclasses import dataclass, field

from antenv.errors import InvalidAmountError
from antenv.pheromones.stimulus import StimulusType, registered_stimuli
from antenv.world.direction import Direction


def _check_amount(amount: float, what: str) -> None:
    if not (math.isfinite(amount) and amount >= 0):
        msg = f"{what} must be finite and >= 0, got {amount}"
        raise InvalidAmountError(msg)


@dataclass(eq=False)
class Cell:
    """Identity plus symmetric adjacency.

    Cells compare and hash by identity.

    Attributes:
        cell_id: Identifier, ``"<prefix>-<row>,<col>"`` for factory-built cells.
    """

    cell_id: str
    _neighbors: dict[Direction, weakref.ref[Cell]] = field(
        init=False,
        default_factory=dict,
        repr=False,
    )

    def get_neighbor(self, direction: Direction) -> Cell | None:
        """Return the neighbour in ``direction``, or None at the world edge."""
        ref = self._neighbors.get(direction)
        return ref() if ref is not None else None

    def has_neighbor(self, direction: Direction) -> bool:
        """Return True if a live neighbour exists in ``direction``."""
        return self.get_neighbor(direction) is not None

    def neighbors(self) -> dict[Direction, Cell]:
        """Return all live neighbours keyed by direction."""
        result: dict[Direction, Cell] = {}
        for direction, ref in self._neighbors.items():
            cell = ref()
            if cell is not None:
                result[direction] = cell
        return result

    def set_neighbor(self, direction: Direction, other: Cell) -> None:
        """Link ``other`` in ``direction`` and ``self`` back in the opposite.

        Both sides are written in one call.  Whatever either cell was
        previously linked to in those slots is detached on both ends, so
        the symmetry invariant holds after every call.

        Args:
            direction: Where ``other`` lies as seen from ``self``.
            other: The neighbouring cell.

        Raises:
            ValueError: If ``other`` is ``self``.
        """
        if other is self:
            msg = f"cannot link {self.cell_id} to itself"
            raise ValueError(msg)
        back = direction.opposite
        if self.get_neighbor(direction) is other and other.get_neighbor(back) is self:
            return
        self.unlink(direction)
        other.unlink(back)
        self._neighbors[direction] = weakref.ref(other)
        other._neighbors[back] = weakref.ref(self)

    def unlink(self, direction: Direction) -> None:
        """Remove the link in ``direction`` on both sides, if there is one."""
        ref = self._neighbors.pop(direction, None)
        if ref is None:
            return
        other = ref()
        if other is None:
            return
        back = direction.opposite
        # Only drop the back-link if it still points here.
        if other.get_neighbor(back) is self:
            del other._neighbors[back]


@dataclass(eq=False)
class NestCell(Cell):
    """Structural space inside a nest."""


@dataclass(eq=False)
class PheromoneCell(Cell):
    """A cell that stores pheromone concentrations.

    Attributes:
        concentrations: Stimulus name -> concentration (always >= 0).
    """

    concentrations: dict[str, float] = field(default_factory=dict)

    def concentration(self, stimulus: StimulusType) -> float:
        """Return the stored concentration for ``stimulus`` (0.0 if none)."""
        return self.concentrations.get(stimulus.name, 0.0)

    def deposit(self, stimulus: StimulusType, amount: float) -> None:
        """Add ``amount`` of ``stimulus`` to this cell.

        Raises:
            InvalidAmountError: If ``amount`` is negative or not finite.
        """
        _check_amount(amount, "deposit amount")
        self.concentrations[stimulus.name] = self.concentration(stimulus) + amount

    def decay(self, stimulus: StimulusType) -> None:
        """Apply one tick of decay for ``stimulus``.

        Uses ``c * (1 - decay_factor)``; with ``decay_factor`` in
        ``[0, 1)`` the result is never negative.
        """
        current = self.concentrations.get(stimulus.name)
        if current is None:
            return
        self.concentrations[stimulus.name] = stimulus.decay(current)

    def decay_all(self, stimuli: Iterable[StimulusType] | None = None) -> None:
        """Decay every given stimulus, or every registered one if omitted."""
        if stimuli is None:
            stimuli = list(registered_stimuli().values())
        for stimulus in stimuli:
            self.decay(stimulus)

    def clear(self, stimulus: StimulusType | None = None) -> None:
        """Remove one stimulus, or all of them when ``stimulus`` is None."""
        if stimulus is None:
            self.concentrations.clear()
        else:
            self.concentrations.pop(stimulus.name, None)


@dataclass(eq=False)
class FoodSourceCell(Cell):
    """A cell holding harvestable food.

    Attributes:
        remaining_food: Food left at this cell (>= 0).
    """

    remaining_food: float = 0.0

    def __post_init__(self) -> None:
        """Validate the initial food amount."""
        _check_amount(self.remaining_food, "remaining_food")

    @property
    def is_depleted(self) -> bool:
        """Return True once all food has been taken."""
        return self.remaining_food <= 0.0

    def take(self, amount: float) -> float:
        """Remove up to ``amount`` food and return what was actually taken.

        Raises:
            InvalidAmountError: If ``amount`` is negative or not finite.
        """
        _check_amount(amount, "take amount")
        taken = min(amount, self.remaining_food)
        self.remaining_food -= taken
        return taken
