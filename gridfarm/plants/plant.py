"""Plant — a single sown instance of a species."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gridfarm.plants.species import PlantSpecies

_SMALL_BELOW = 0.33
_MEDIUM_BELOW = 0.66


class SizeClass(Enum):
    """Visual size bucket derived from growth stage."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


def size_class(growth_stage: float) -> SizeClass:
    """Map a growth stage in ``[0, 1]`` to its size bucket."""
    if growth_stage < _SMALL_BELOW:
        return SizeClass.SMALL
    if growth_stage < _MEDIUM_BELOW:
        return SizeClass.MEDIUM
    return SizeClass.LARGE


@dataclass(eq=False)
class Plant:
    """A plant growing on one land cell.

    Instances compare by identity: two plants of the same species at the
    same stage are still different plants.

    Attributes:
        species: What kind of plant this is.
        growth_stage: Progress toward full size (0.0-1.0).
        alive: False once the watering condition has failed.  Death is
            permanent.
        died_at: Simulation time of the tick that killed the plant.
    """

    species: PlantSpecies
    growth_stage: float = 0.0
    alive: bool = True
    died_at: int | None = None

    @property
    def size(self) -> SizeClass:
        return size_class(self.growth_stage)

    @property
    def growth_percent(self) -> int:
        """Growth stage as a rounded percentage."""
        return round(self.growth_stage * 100)

    def grow(self, amount: float) -> None:
        """Advance growth by ``amount``, capped at 1.0.

        Dead plants and non-positive amounts leave the stage unchanged.
        """
        if not self.alive or amount <= 0:
            return
        self.growth_stage = min(1.0, self.growth_stage + amount)

    def kill(self, now: int) -> None:
        """Mark the plant dead at time ``now``.  Already-dead plants keep their time."""
        if not self.alive:
            return
        self.alive = False
        self.died_at = now
