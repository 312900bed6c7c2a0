"""Grid — the spatial container for the farm.

The Grid owns a square matrix of cells and an index of every water
coordinate.  Planting rules only ever ask one spatial question, "how far
is the nearest water?", so the index is kept in sync on every terrain
change instead of being rebuilt by scanning the board.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.random import Generator

from gridfarm.world.cell import Cell, Terrain

logger = logging.getLogger(__name__)

DEFAULT_WATER_PROBABILITY = 0.15


@dataclass
class Grid:
    """A square grid of land and water cells.

    Attributes:
        size: Number of rows and columns.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
    """

    size: int
    cells: list[list[Cell]] = field(init=False, repr=False)
    _water: set[tuple[int, int]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialise the grid with all-land cells."""
        if self.size <= 0:
            msg = f"grid size must be positive, got {self.size}"
            raise ValueError(msg)
        self.cells = [
            [Cell(x=x, y=y) for x in range(self.size)] for y in range(self.size)
        ]
        self._water = set()

    @property
    def water_cells(self) -> frozenset[tuple[int, int]]:
        """Coordinates of every water cell."""
        return frozenset(self._water)

    @property
    def has_water(self) -> bool:
        """Return True if at least one cell is water."""
        return bool(self._water)

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies on the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.size}x{self.size}"
            raise IndexError(msg)
        return self.cells[y][x]

    def iter_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for row in self.cells:
            yield from row

    def initialize(
        self,
        rng: Generator,
        water_probability: float = DEFAULT_WATER_PROBABILITY,
    ) -> None:
        """Randomly assign terrain to every cell and clear all plants.

        Each cell independently becomes water with probability
        ``water_probability``.

        Args:
            rng: Seeded random generator.
            water_probability: Chance for any single cell to be water.

        Raises:
            ValueError: If the probability is outside ``[0, 1]``.
        """
        if not 0.0 <= water_probability <= 1.0:
            msg = f"water_probability must be in [0, 1], got {water_probability}"
            raise ValueError(msg)

        rolls = rng.random((self.size, self.size))
        self._water = set()
        for cell in self.iter_cells():
            cell.plant = None
            if rolls[cell.y, cell.x] < water_probability:
                cell.terrain = Terrain.WATER
                self._water.add((cell.x, cell.y))
            else:
                cell.terrain = Terrain.LAND
        logger.debug(
            "Initialised %dx%d grid with %d water cells",
            self.size,
            self.size,
            len(self._water),
        )

    def set_terrain(self, cell: Cell, terrain: Terrain) -> bool:
        """Convert a cell to ``terrain`` and keep the water index in sync.

        Turning land into water destroys any plant on it.  Setting the
        terrain a cell already has does nothing.

        Callers should re-evaluate plants afterwards, since the distance
        to water may have changed anywhere on the grid.

        Args:
            cell: The cell to convert (must belong to this grid).
            terrain: The new terrain.

        Returns:
            True if the terrain actually changed.
        """
        if cell.terrain is terrain:
            return False

        cell.terrain = terrain
        if terrain is Terrain.WATER:
            self._water.add((cell.x, cell.y))
            if cell.plant is not None:
                logger.debug(
                    "Flooded %s at (%d, %d)",
                    cell.plant.species.name,
                    cell.x,
                    cell.y,
                )
                cell.plant = None
        else:
            self._water.discard((cell.x, cell.y))
        logger.debug("Cell (%d, %d) is now %s", cell.x, cell.y, terrain.value)
        return True

    def toggle_terrain(self, cell: Cell) -> Terrain:
        """Flip a cell between land and water, returning the new terrain."""
        new = Terrain.LAND if cell.is_water else Terrain.WATER
        self.set_terrain(cell, new)
        return new

    def distance_to_nearest_water(self, x: int, y: int) -> float:
        """Manhattan distance from ``(x, y)`` to the closest water cell.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            The distance as a float, or ``math.inf`` if there is no water.
        """
        if not self._water:
            return math.inf
        coords = np.fromiter(
            (v for xy in self._water for v in xy),
            dtype=np.int64,
            count=2 * len(self._water),
        ).reshape(-1, 2)
        return float(np.abs(coords - (x, y)).sum(axis=1).min())
