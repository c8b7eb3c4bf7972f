"""Shared fixtures for the antenv test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from antenv.pheromones.stimulus import (
    StimulusType,
    registered_stimuli,
    unregister_stimulus,
)
from antenv.world.factory import (
    create_food_source_grid,
    create_nest_grid,
    create_pheromone_grid,
)
from antenv.world.lattice import Lattice


@pytest.fixture
def pheromone_grid() -> Lattice:
    """The 3x2 pheromone lattice (3 columns, 2 rows)."""
    return create_pheromone_grid(width=3, height=2)


@pytest.fixture
def nest_grid() -> Lattice:
    """A 5x4 nest lattice."""
    return create_nest_grid("nest", width=5, height=4)


@pytest.fixture
def food_grid() -> Lattice:
    """A 4x3 food source holding 120 units in total."""
    return create_food_source_grid("food", width=4, height=3, total_food=120.0)


@pytest.fixture
def alarm() -> StimulusType:
    """A fast-decaying, diffusing test signal (not registered)."""
    return StimulusType(name="test:alarm", decay_factor=0.5, radius=2)


@pytest.fixture
def clean_registry() -> Iterator[None]:
    """Remove any stimulus types a test registers."""
    before = set(registered_stimuli())
    yield
    for name in set(registered_stimuli()) - before:
        unregister_stimulus(name)
