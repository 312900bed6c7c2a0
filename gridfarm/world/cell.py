"""Cell — a single tile in the farm grid.

A cell is either land or water.  Land cells may carry one plant; water
cells never do.  The grid keeps its own index of water coordinates, so
terrain changes must go through ``Grid.set_terrain`` rather than
assigning ``cell.terrain`` directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridfarm.plants.plant import Plant


class Terrain(Enum):
    """Ground type of a cell."""

    LAND = "land"
    WATER = "water"

    @property
    def label(self) -> str:
        """Human-readable name shown in the cell info panel."""
        return "Land" if self is Terrain.LAND else "Water"


@dataclass
class Cell:
    """A single tile in the grid.

    Attributes:
        x: Column position.
        y: Row position.
        terrain: Land or water.
        plant: The plant growing here, if any.
    """

    x: int
    y: int
    terrain: Terrain = Terrain.LAND
    plant: Plant | None = None

    @property
    def is_water(self) -> bool:
        """Return True if this cell is water."""
        return self.terrain is Terrain.WATER
