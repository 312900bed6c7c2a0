"""PlantSimulation — placement rules and the plant lifecycle.

Each tick every plant on the grid re-checks its watering condition
against the current water layout:

1. Dead plants past the grace delay are removed from their cell.
2. Live plants whose condition holds grow by ``growth_rate``.
3. Live plants whose condition fails die on the spot.

Death is permanent.  Removal of dead plants is lazy: a plant records the
time it died and is swept on a later tick, so a plant that the player
already dug up or flooded simply is not there to be swept.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from gridfarm.plants.plant import Plant
from gridfarm.plants.species import PlantSpecies
from gridfarm.world.cell import Cell
from gridfarm.world.grid import Grid

logger = logging.getLogger(__name__)

DEFAULT_GROWTH_RATE = 0.05
DEFAULT_GRACE_DELAY = 3


class RejectionReason(Enum):
    """Why a planting attempt was refused."""

    WRONG_TERRAIN = "wrong terrain"
    OCCUPIED = "cell occupied"
    DISTANCE_RULE = "distance rule unmet"


@dataclass(frozen=True)
class Rejection:
    """A refused planting attempt.  The grid is left unchanged.

    Attributes:
        reason: Which check failed.
        species: The species the player tried to plant.
        x: Column of the target cell.
        y: Row of the target cell.
    """

    reason: RejectionReason
    species: PlantSpecies
    x: int
    y: int

    @property
    def message(self) -> str:
        """Notice shown to the player."""
        if self.reason is RejectionReason.DISTANCE_RULE:
            return (
                f"Cannot plant {self.species.name} here! Needs water at a "
                f"distance of {self.species.rule.label} cells."
            )
        if self.reason is RejectionReason.OCCUPIED:
            return f"Cannot plant {self.species.name} here! The cell is occupied."
        return f"Cannot plant {self.species.name} on water."


@dataclass
class TickReport:
    """Cells touched by one tick, as ``(x, y)`` coordinates."""

    grown: list[tuple[int, int]] = field(default_factory=list)
    died: list[tuple[int, int]] = field(default_factory=list)
    removed: list[tuple[int, int]] = field(default_factory=list)


@dataclass
class PlantSimulation:
    """Enforces placement legality and advances plant lifecycles.

    Attributes:
        grid: The grid plants live on.
        growth_rate: Growth stage gained per favourable tick.
        grace_delay: Ticks a dead plant stays visible before removal.
        time: Ticks elapsed since the simulation was created.
    """

    grid: Grid
    growth_rate: float = DEFAULT_GROWTH_RATE
    grace_delay: int = DEFAULT_GRACE_DELAY
    time: int = 0

    def can_plant(self, cell: Cell, species: PlantSpecies) -> bool:
        """Return True if ``species`` may grow at ``cell``'s position.

        On a grid without any water only species flagged
        ``thrives_without_water`` qualify, whatever their distance rule.
        """
        if not self.grid.has_water:
            return species.thrives_without_water
        distance = self.grid.distance_to_nearest_water(cell.x, cell.y)
        return species.rule.allows(distance)

    def plant(self, cell: Cell, species: PlantSpecies) -> Plant | Rejection:
        """Sow ``species`` on ``cell``.

        Args:
            cell: Target cell.
            species: What to plant.

        Returns:
            The new Plant on success, otherwise a Rejection naming the
            first failed check (terrain, occupancy, distance).
        """
        if cell.is_water:
            reason = RejectionReason.WRONG_TERRAIN
        elif cell.plant is not None:
            reason = RejectionReason.OCCUPIED
        elif not self.can_plant(cell, species):
            reason = RejectionReason.DISTANCE_RULE
        else:
            plant = Plant(species=species)
            cell.plant = plant
            logger.debug("Planted %s at (%d, %d)", species.name, cell.x, cell.y)
            return plant

        logger.debug(
            "Rejected %s at (%d, %d): %s",
            species.name,
            cell.x,
            cell.y,
            reason.value,
        )
        return Rejection(reason=reason, species=species, x=cell.x, y=cell.y)

    def remove_plant(self, cell: Cell) -> Plant | None:
        """Detach the plant on ``cell``.

        Returns:
            The removed plant, or None if the cell is water or empty.
        """
        if cell.is_water or cell.plant is None:
            return None
        plant = cell.plant
        cell.plant = None
        logger.debug("Removed %s at (%d, %d)", plant.species.name, cell.x, cell.y)
        return plant

    def plants(self) -> Iterator[tuple[Cell, Plant]]:
        """Yield every planted cell with its plant."""
        for cell in self.grid.iter_cells():
            if cell.plant is not None:
                yield cell, cell.plant

    def tick(self) -> TickReport:
        """Advance every plant by one time unit.

        Returns:
            Which cells grew, died, or had a dead plant swept away.
        """
        self.time += 1
        report = TickReport()

        for cell, plant in list(self.plants()):
            if not plant.alive:
                if self._expired(plant):
                    cell.plant = None
                    report.removed.append((cell.x, cell.y))
                continue

            if self.can_plant(cell, plant.species):
                if plant.growth_stage < 1.0:
                    plant.grow(self.growth_rate)
                    report.grown.append((cell.x, cell.y))
            else:
                plant.kill(self.time)
                report.died.append((cell.x, cell.y))

        if report.died or report.removed:
            logger.info(
                "Tick %d: %d died, %d removed",
                self.time,
                len(report.died),
                len(report.removed),
            )
        return report

    def reevaluate(self) -> list[tuple[int, int]]:
        """Kill live plants whose watering condition no longer holds.

        Used straight after the water layout changes.  Does not grow
        plants or advance time.  The kill happens between ticks, so it is
        stamped with the upcoming tick and the grace delay runs in full.

        Returns:
            Coordinates of plants that died.
        """
        died: list[tuple[int, int]] = []
        for cell, plant in self.plants():
            if plant.alive and not self.can_plant(cell, plant.species):
                plant.kill(self.time + 1)
                died.append((cell.x, cell.y))
        return died

    def _expired(self, plant: Plant) -> bool:
        return plant.died_at is not None and self.time - plant.died_at >= self.grace_delay
