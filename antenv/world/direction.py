"""Direction — compass keys for cell adjacency.

Rows grow downward (south) and columns grow rightward (east), matching
the ``rows[row][col]`` indexing used by ``Lattice``.
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """The 8-neighbourhood as ``(d_row, d_col)`` unit offsets."""

    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)
    NORTH_EAST = (-1, 1)
    NORTH_WEST = (-1, -1)
    SOUTH_EAST = (1, 1)
    SOUTH_WEST = (1, -1)

    @property
    def offset(self) -> tuple[int, int]:
        """Return the ``(d_row, d_col)`` step for this direction."""
        return self.value

    @property
    def opposite(self) -> Direction:
        """Return the direction pointing the other way (N↔S, NE↔SW, ...)."""
        d_row, d_col = self.value
        return Direction((-d_row, -d_col))

    @classmethod
    def from_offset(cls, d_row: int, d_col: int) -> Direction:
        """Return the direction for a unit offset.

        Raises:
            ValueError: If the offset is not one of the 8 neighbour steps.
        """
        try:
            return cls((d_row, d_col))
        except ValueError:
            msg = f"({d_row}, {d_col}) is not a neighbour offset"
            raise ValueError(msg) from None
