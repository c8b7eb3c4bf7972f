"""Lattice — the rectangular container that owns a grid of cells.

Cells only hold weak links to each other, so the lattice is what keeps
them alive.  It provides (row, col) addressing, row-major iteration,
an adjacency self-check, and NumPy snapshots of per-cell state for
collaborators that analyse or draw the grid.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from antenv.errors import BrokenAdjacencyError
from antenv.pheromones.stimulus import StimulusType
from antenv.world.cell import Cell, FoodSourceCell, PheromoneCell
from antenv.world.direction import Direction


@dataclass(eq=False)
class Lattice:
    """A ``height`` x ``width`` grid of cells indexed as ``rows[row][col]``.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        rows: The cells, one list per row, top to bottom.
    """

    width: int
    height: int
    rows: list[list[Cell]] = field(repr=False)

    def cell_at(self, row: int, col: int) -> Cell:
        """Return the cell at ``(row, col)``.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            msg = f"({row}, {col}) out of bounds for {self.height}x{self.width}"
            raise IndexError(msg)
        return self.rows[row][col]

    def __getitem__(self, key: tuple[int, int]) -> Cell:
        row, col = key
        return self.cell_at(row, col)

    def __len__(self) -> int:
        return self.width * self.height

    def __iter__(self) -> Iterator[Cell]:
        for row in self.rows:
            yield from row

    def positions(self) -> Iterator[tuple[int, int, Cell]]:
        """Yield ``(row, col, cell)`` in row-major order."""
        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                yield r, c, cell

    def check_adjacency(self) -> None:
        """Verify that every link is symmetric and geometrically correct.

        A link in direction ``D`` from ``(r, c)`` must point at the cell at
        ``(r, c) + D.offset`` and that cell must link back in
        ``D.opposite``.  Positions on the grid with an in-bounds neighbour
        must have the link; out-of-bounds ones must not.

        Raises:
            BrokenAdjacencyError: On the first violation found.
        """
        for r, c, cell in self.positions():
            for direction in Direction:
                d_row, d_col = direction.offset
                nr, nc = r + d_row, c + d_col
                linked = cell.get_neighbor(direction)
                in_bounds = 0 <= nr < self.height and 0 <= nc < self.width
                expected = self.rows[nr][nc] if in_bounds else None
                if linked is not expected:
                    msg = (
                        f"{cell.cell_id}: {direction.name} links to "
                        f"{_describe(linked)}, expected {_describe(expected)}"
                    )
                    raise BrokenAdjacencyError(msg)
                if linked is None:
                    continue
                if linked.get_neighbor(direction.opposite) is not cell:
                    msg = (
                        f"{linked.cell_id}: missing {direction.opposite.name} "
                        f"back-link to {cell.cell_id}"
                    )
                    raise BrokenAdjacencyError(msg)

    def total_food(self) -> float:
        """Return the summed ``remaining_food`` of all food-source cells."""
        return sum(
            cell.remaining_food for cell in self if isinstance(cell, FoodSourceCell)
        )

    def food_array(self) -> NDArray[np.float64]:
        """Return remaining food as a ``(height, width)`` array copy.

        Cells that are not food sources read as 0.0.
        """
        grid = np.zeros((self.height, self.width), dtype=np.float64)
        for r, c, cell in self.positions():
            if isinstance(cell, FoodSourceCell):
                grid[r, c] = cell.remaining_food
        return grid

    def concentration_array(self, stimulus: StimulusType) -> NDArray[np.float64]:
        """Return ``stimulus`` concentration as a ``(height, width)`` array copy.

        Cells that are not pheromone cells read as 0.0.
        """
        grid = np.zeros((self.height, self.width), dtype=np.float64)
        for r, c, cell in self.positions():
            if isinstance(cell, PheromoneCell):
                grid[r, c] = cell.concentration(stimulus)
        return grid


def _describe(cell: Cell | None) -> str:
    return cell.cell_id if cell is not None else "nothing"
