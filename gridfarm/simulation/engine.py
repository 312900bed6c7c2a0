"""FarmEngine — the simulation context owned by the front-end.

Owns the grid, the plant simulation, the species catalogue and the
currently selected tool.  Player intents (``select_tool``,
``cell_clicked``) run synchronously between ticks.  Ticks only happen
while the engine is started: the front-end feeds elapsed wall time to
``advance`` and the engine runs one ``step`` per ``tick_interval``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from gridfarm.plants.plant import Plant
from gridfarm.plants.simulation import PlantSimulation, Rejection, TickReport
from gridfarm.plants.species import PlantSpecies, build_catalogue
from gridfarm.simulation.config import FarmConfig
from gridfarm.simulation.tools import Tool
from gridfarm.world.cell import Cell
from gridfarm.world.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellInfo:
    """Read-only snapshot of one cell for the info panel.

    Attributes:
        x: Column index.
        y: Row index.
        terrain: Terrain label ("Land" or "Water").
        plant_name: Species name, or None for an empty cell.
        growth_percent: Rounded growth percentage, if planted.
        alive: Whether the plant is alive, if planted.
    """

    x: int
    y: int
    terrain: str
    plant_name: str | None = None
    growth_percent: int | None = None
    alive: bool | None = None

    @classmethod
    def of(cls, cell: Cell) -> CellInfo:
        plant = cell.plant
        if plant is None:
            return cls(x=cell.x, y=cell.y, terrain=cell.terrain.label)
        return cls(
            x=cell.x,
            y=cell.y,
            terrain=cell.terrain.label,
            plant_name=plant.species.name,
            growth_percent=plant.growth_percent,
            alive=plant.alive,
        )

    def lines(self) -> list[str]:
        """Render as info-panel text lines."""
        lines = [f"Terrain: {self.terrain}", f"Position: ({self.x}, {self.y})"]
        if self.plant_name is None:
            lines.append("Plant: none")
            return lines
        lines += [
            f"Plant: {self.plant_name}",
            f"Growth: {self.growth_percent}%",
            f"State: {'alive' if self.alive else 'dead'}",
        ]
        return lines


@dataclass(frozen=True)
class ClickOutcome:
    """Result of applying the selected tool to a position.

    Attributes:
        tool: The tool that was applied.
        info: State of the clicked cell after the action, or None if the
            click fell outside the grid.
        changed: True if the grid state changed.
        rejection: Set when a planting attempt was refused.
    """

    tool: Tool
    info: CellInfo | None
    changed: bool = False
    rejection: Rejection | None = None


@dataclass
class FarmEngine:
    """Drives the farm forward and applies player actions.

    Attributes:
        config: Loaded farm configuration.
        grid: The spatial grid.
        plants: Placement rules and plant lifecycle.
        species: Species catalogue keyed by species key.
        rng: Seeded random generator used for the initial terrain.
        tool: Currently selected tool.
        running: True between ``start()`` and ``stop()``.
    """

    config: FarmConfig
    grid: Grid = field(init=False)
    plants: PlantSimulation = field(init=False)
    species: dict[str, PlantSpecies] = field(init=False)
    rng: Generator = field(init=False)
    tool: Tool = Tool.CURSOR
    running: bool = False
    _elapsed: float = field(init=False, default=0.0, repr=False)

    def __post_init__(self) -> None:
        """Build grid, catalogue, and RNG from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.grid = Grid(size=self.config.grid_size)
        self.grid.initialize(self.rng, self.config.water_probability)
        self.species = build_catalogue(self.config.species)
        self.plants = PlantSimulation(
            grid=self.grid,
            growth_rate=self.config.growth_rate,
            grace_delay=self.config.grace_delay,
        )

    @property
    def tick(self) -> int:
        """Ticks elapsed so far."""
        return self.plants.time

    # -- Lifecycle -----------------------------------------------------------

    def start(self) -> None:
        """Begin ticking on subsequent ``advance`` calls."""
        if not self.running:
            self.running = True
            logger.info("Farm started at tick %d", self.tick)

    def stop(self) -> None:
        """Stop ticking.  Pending partial-tick time is discarded."""
        if self.running:
            self.running = False
            self._elapsed = 0.0
            logger.info("Farm stopped at tick %d", self.tick)

    def advance(self, seconds: float) -> int:
        """Feed elapsed wall time and run any ticks that are now due.

        Args:
            seconds: Real time since the previous call.

        Returns:
            Number of ticks run.
        """
        if not self.running:
            return 0
        self._elapsed += seconds
        steps = int(self._elapsed // self.config.tick_interval)
        self._elapsed -= steps * self.config.tick_interval
        for _ in range(steps):
            self.step()
        return steps

    def step(self) -> TickReport:
        """Advance the simulation by exactly one tick."""
        return self.plants.tick()

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks."""
        for _ in range(ticks):
            self.step()

    # -- Player intents ------------------------------------------------------

    def select_tool(self, tool: Tool | str) -> bool:
        """Switch the active tool.

        Args:
            tool: A Tool or its UI identifier.

        Returns:
            False if the identifier is unknown (selection unchanged).
        """
        if not isinstance(tool, Tool):
            parsed = Tool.parse(tool)
            if parsed is None:
                logger.debug("Ignoring unknown tool %r", tool)
                return False
            tool = parsed
        self.tool = tool
        return True

    def cell_clicked(self, x: int, y: int) -> ClickOutcome:
        """Apply the selected tool at ``(x, y)``.

        Clicks outside the grid are ignored.
        """
        if not self.grid.in_bounds(x, y):
            return ClickOutcome(tool=self.tool, info=None)

        cell = self.grid.cell_at(x, y)
        if self.tool is Tool.CURSOR:
            return ClickOutcome(tool=self.tool, info=CellInfo.of(cell))
        if self.tool is Tool.SHOVEL:
            return self._use_shovel(cell)
        if self.tool is Tool.BUCKET:
            return self._use_bucket(cell)
        species = self.seed_species(self.tool)
        if species is None:
            return ClickOutcome(tool=self.tool, info=CellInfo.of(cell))
        return self._sow(cell, species)

    def describe_cell(self, x: int, y: int) -> CellInfo | None:
        """Return the info-panel snapshot for ``(x, y)``, or None off-grid."""
        if not self.grid.in_bounds(x, y):
            return None
        return CellInfo.of(self.grid.cell_at(x, y))

    def seed_species(self, tool: Tool) -> PlantSpecies | None:
        """Species sown by a seed tool, or None for non-seed tools."""
        key = tool.species_key
        return None if key is None else self.species[key]

    def _use_shovel(self, cell: Cell) -> ClickOutcome:
        removed = self.plants.remove_plant(cell)
        return ClickOutcome(
            tool=Tool.SHOVEL,
            info=CellInfo.of(cell),
            changed=removed is not None,
        )

    def _use_bucket(self, cell: Cell) -> ClickOutcome:
        self.grid.toggle_terrain(cell)
        self.plants.reevaluate()
        return ClickOutcome(tool=Tool.BUCKET, info=CellInfo.of(cell), changed=True)

    def _sow(self, cell: Cell, species: PlantSpecies) -> ClickOutcome:
        result = self.plants.plant(cell, species)
        if isinstance(result, Plant):
            return ClickOutcome(tool=self.tool, info=CellInfo.of(cell), changed=True)
        return ClickOutcome(tool=self.tool, info=CellInfo.of(cell), rejection=result)
