"""Species — immutable plant definitions and their watering rules.

Every species states how far from water it must be planted.  The rule is
either an exact distance or an inclusive range; both variants answer the
same question through ``allows``, so callers never inspect which kind of
rule they hold.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

Colour = tuple[int, int, int]


@dataclass(frozen=True)
class Exact:
    """Water must be exactly ``distance`` cells away."""

    distance: int

    def allows(self, distance: float) -> bool:
        """Return True if ``distance`` satisfies this rule."""
        return distance == self.distance

    @property
    def label(self) -> str:
        return str(self.distance)


@dataclass(frozen=True)
class Range:
    """Water must be between ``low`` and ``high`` cells away, inclusive."""

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low > self.high:
            msg = f"empty distance range [{self.low}, {self.high}]"
            raise ValueError(msg)

    def allows(self, distance: float) -> bool:
        """Return True if ``distance`` satisfies this rule."""
        return self.low <= distance <= self.high

    @property
    def label(self) -> str:
        return f"{self.low}-{self.high}"


DistanceRule = Union[Exact, Range]


def parse_rule(value: int | list[int] | tuple[int, int]) -> DistanceRule:
    """Build a rule from its YAML form: an int or a ``[low, high]`` pair.

    Raises:
        ValueError: If the value is neither form.
    """
    if isinstance(value, bool):
        msg = f"invalid distance rule: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        return Exact(value)
    if (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        low, high = value
        return Range(low, high)
    msg = f"invalid distance rule: {value!r}"
    raise ValueError(msg)


@dataclass(frozen=True)
class PlantSpecies:
    """A kind of plant the player can sow.

    Attributes:
        name: Display name.
        rule: Required distance to the nearest water cell.
        emoji: Glyph used by text front-ends.
        colour: RGB used by the Pygame renderer.
        thrives_without_water: If True, this species may be planted
            anywhere while the grid holds no water at all.  Every other
            species is unplantable on a dry grid whatever its rule says.
    """

    name: str
    rule: DistanceRule
    emoji: str = "🌱"
    colour: Colour = (120, 200, 90)
    thrives_without_water: bool = False

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> PlantSpecies:
        """Create a species from a config mapping.

        Expects ``name`` and ``distance`` keys; ``emoji``, ``colour`` and
        ``thrives_without_water`` are optional.

        Args:
            key: Catalogue key, used in error messages.
            data: The species' config entry.

        Raises:
            ValueError: If a required key is missing or a value is malformed.
        """
        if not isinstance(data, Mapping):
            msg = f"species {key!r} must be a mapping, got {data!r}"
            raise ValueError(msg)
        missing = [k for k in ("name", "distance") if k not in data]
        if missing:
            msg = f"species {key!r} is missing {', '.join(missing)}"
            raise ValueError(msg)
        try:
            rule = parse_rule(data["distance"])
        except ValueError as exc:
            msg = f"species {key!r}: {exc}"
            raise ValueError(msg) from exc

        colour = data.get("colour", cls.colour)
        if not (
            isinstance(colour, (list, tuple))
            and len(colour) == 3
            and all(isinstance(c, int) and 0 <= c <= 255 for c in colour)
        ):
            msg = f"species {key!r}: colour must be three ints in 0-255, got {colour!r}"
            raise ValueError(msg)

        return cls(
            name=str(data["name"]),
            rule=rule,
            emoji=str(data.get("emoji", cls.emoji)),
            colour=tuple(colour),
            thrives_without_water=bool(
                data.get("thrives_without_water", cls.thrives_without_water),
            ),
        )


MARSH = PlantSpecies(
    name="Marsh",
    rule=Exact(1),
    emoji="🌿",
    colour=(60, 170, 80),
)
POTATO = PlantSpecies(
    name="Potato",
    rule=Range(2, 3),
    emoji="🥔",
    colour=(190, 150, 90),
)
CACTUS = PlantSpecies(
    name="Cactus",
    rule=Range(4, 100),
    emoji="🌵",
    colour=(110, 160, 60),
    thrives_without_water=True,
)

DEFAULT_SPECIES: dict[str, PlantSpecies] = {
    "marsh": MARSH,
    "potato": POTATO,
    "cactus": CACTUS,
}


def build_catalogue(
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, PlantSpecies]:
    """Return the built-in species, with config entries merged on top.

    Args:
        overrides: Species key to config mapping.  Keys matching a
            built-in species replace it; new keys are added.
    """
    catalogue = dict(DEFAULT_SPECIES)
    for key, data in (overrides or {}).items():
        catalogue[key] = PlantSpecies.from_dict(key, data)
    return catalogue
