"""Tools the player can hold while clicking on the grid."""

from __future__ import annotations

from enum import Enum


class Tool(Enum):
    """Closed set of player tools, keyed by their UI identifier."""

    CURSOR = "cursor"
    SHOVEL = "shovel"
    MARSH_SEEDS = "marsh-seeds"
    POTATO_SEEDS = "potato-seeds"
    CACTUS_SEEDS = "cactus-seeds"
    BUCKET = "bucket"

    @classmethod
    def parse(cls, tool_id: str) -> Tool | None:
        """Return the tool for ``tool_id``, or None if it is unknown."""
        try:
            return cls(tool_id)
        except ValueError:
            return None

    @property
    def species_key(self) -> str | None:
        """Catalogue key of the species a seed tool sows."""
        return _SEED_SPECIES.get(self)

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").capitalize()


_SEED_SPECIES: dict[Tool, str] = {
    Tool.MARSH_SEEDS: "marsh",
    Tool.POTATO_SEEDS: "potato",
    Tool.CACTUS_SEEDS: "cactus",
}
