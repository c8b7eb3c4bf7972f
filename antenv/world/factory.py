"""Environment factory — builds linked lattices of each cell variant.

All three public builders share one algorithm.  Rows are filled top to
bottom and columns left to right; each new cell is linked to the
already-built cells to its west, north, north-west and north-east.
``Cell.set_neighbor`` writes both ends of a link, so after one pass every
interior cell has all 8 neighbours and border cells simply lack the
directions that would fall off the grid.

Inputs are validated before any cell is allocated, so a caller either
gets a complete lattice or an exception.
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Callable
from typing import TypeVar

from antenv.errors import (
    DegenerateGridError,
    InvalidDimensionError,
    InvalidFoodTotalError,
)
from antenv.world.cell import Cell, FoodSourceCell, NestCell, PheromoneCell
from antenv.world.direction import Direction
from antenv.world.lattice import Lattice

logger = logging.getLogger(__name__)

PHEROMONE_PREFIX = "n"

C = TypeVar("C", bound=Cell)


def create_nest_grid(nest_name: str, width: int, height: int) -> Lattice:
    """Build a lattice of ``NestCell`` objects.

    Args:
        nest_name: Nest identifier, used as the cell-id prefix.
        width: Number of columns (> 0).
        height: Number of rows (> 0).

    Raises:
        InvalidDimensionError: If either dimension is not a positive int.
    """
    width, height = _check_dimensions(width, height)
    return _build(nest_name, width, height, NestCell)


def create_pheromone_grid(width: int, height: int) -> Lattice:
    """Build a lattice of empty ``PheromoneCell`` objects.

    Cell ids use the fixed prefix ``"n"``.

    Raises:
        InvalidDimensionError: If either dimension is not a positive int.
    """
    width, height = _check_dimensions(width, height)
    return _build(PHEROMONE_PREFIX, width, height, PheromoneCell)


def create_food_source_grid(
    name: str,
    width: int,
    height: int,
    total_food: float,
) -> Lattice:
    """Build a lattice of ``FoodSourceCell`` objects sharing ``total_food``.

    Every cell starts with ``total_food / (width * height)``.

    Args:
        name: Food source identifier, used as the cell-id prefix.
        width: Number of columns (> 0).
        height: Number of rows (> 0).
        total_food: Food to spread evenly over the source (finite, >= 0).

    Raises:
        InvalidDimensionError: If either dimension is not a positive int.
        InvalidFoodTotalError: If ``total_food`` is negative or not finite.
    """
    width, height = _check_dimensions(width, height)
    if isinstance(total_food, bool) or not isinstance(total_food, numbers.Real):
        msg = f"total_food must be a number, got {total_food!r}"
        raise InvalidFoodTotalError(msg)
    total_food = float(total_food)
    if not (math.isfinite(total_food) and total_food >= 0):
        msg = f"total_food must be finite and >= 0, got {total_food}"
        raise InvalidFoodTotalError(msg)

    share = food_share(total_food, width * height)
    return _build(
        name,
        width,
        height,
        lambda cell_id: FoodSourceCell(cell_id, remaining_food=share),
    )


def food_share(total_food: float, cell_count: int) -> float:
    """Return the per-cell food amount for an even split.

    Raises:
        DegenerateGridError: If ``cell_count`` is not positive.
    """
    if cell_count <= 0:
        msg = f"cannot share food over {cell_count} cells"
        raise DegenerateGridError(msg)
    return total_food / cell_count


def _check_dimensions(width: int, height: int) -> tuple[int, int]:
    """Validate both dimensions and return them as plain ints."""
    checked = []
    for label, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            msg = f"{label} must be an int, got {value!r}"
            raise InvalidDimensionError(msg)
        if value <= 0:
            msg = f"{label} must be > 0, got {value}"
            raise InvalidDimensionError(msg)
        checked.append(int(value))
    return checked[0], checked[1]


def _build(
    prefix: str,
    width: int,
    height: int,
    make_cell: Callable[[str], C],
) -> Lattice:
    rows: list[list[Cell]] = []
    for r in range(height):
        row: list[Cell] = []
        for c in range(width):
            cell = make_cell(f"{prefix}-{r},{c}")
            if c > 0:
                cell.set_neighbor(Direction.WEST, row[c - 1])
            if r > 0:
                above = rows[r - 1]
                cell.set_neighbor(Direction.NORTH, above[c])
                if c > 0:
                    cell.set_neighbor(Direction.NORTH_WEST, above[c - 1])
                if c < width - 1:
                    cell.set_neighbor(Direction.NORTH_EAST, above[c + 1])
            row.append(cell)
        rows.append(row)

    logger.debug("Built %dx%d lattice %r", height, width, prefix)
    return Lattice(width=width, height=height, rows=rows)
