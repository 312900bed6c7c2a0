"""Config — load farm parameters from YAML files.

Grid size, water density, growth pace and the species catalogue live in
YAML and are parsed into a typed dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class FarmConfig:
    """Top-level farm configuration.

    Attributes:
        seed: RNG seed for the initial terrain.  None picks a fresh one.
        grid_size: Number of rows and columns.
        water_probability: Chance for each cell to start as water.
        growth_rate: Growth stage gained per favourable tick.
        grace_delay: Ticks a dead plant stays on its cell.
        tick_interval: Real-time seconds per simulation tick.
        species: Per-species overrides and additions, keyed by species
            key (``marsh``, ``potato``, ``cactus``, ...).
    """

    seed: int | None = None
    grid_size: int = 8
    water_probability: float = 0.15

    # Plant lifecycle
    growth_rate: float = 0.05
    grace_delay: int = 3
    tick_interval: float = 1.0

    species: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            msg = f"grid_size must be positive, got {self.grid_size}"
            raise ValueError(msg)
        if not 0.0 <= self.water_probability <= 1.0:
            msg = f"water_probability must be in [0, 1], got {self.water_probability}"
            raise ValueError(msg)
        if self.growth_rate <= 0:
            msg = f"growth_rate must be positive, got {self.growth_rate}"
            raise ValueError(msg)
        if self.grace_delay < 0:
            msg = f"grace_delay must be non-negative, got {self.grace_delay}"
            raise ValueError(msg)
        if self.tick_interval <= 0:
            msg = f"tick_interval must be positive, got {self.tick_interval}"
            raise ValueError(msg)

    @classmethod
    def from_yaml(cls, path: str | Path) -> FarmConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated FarmConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a value is out of range.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_size=data.get("grid_size", cls.grid_size),
            water_probability=data.get("water_probability", cls.water_probability),
            growth_rate=data.get("growth_rate", cls.growth_rate),
            grace_delay=data.get("grace_delay", cls.grace_delay),
            tick_interval=data.get("tick_interval", cls.tick_interval),
            species=data.get("species") or {},
        )
