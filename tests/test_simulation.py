"""Tests for gridfarm.simulation — config loading, tools, and the engine."""

from pathlib import Path

import pytest

from gridfarm.__main__ import _DEFAULT_CONFIG
from gridfarm.plants.simulation import RejectionReason
from gridfarm.plants.species import Exact
from gridfarm.simulation.config import FarmConfig
from gridfarm.simulation.engine import CellInfo, FarmEngine
from gridfarm.simulation.tools import Tool
from gridfarm.world.cell import Terrain



def _pond_engine() -> FarmEngine:
    """An 8x8 engine with exactly one water cell at (3, 3)."""
    engine = FarmEngine(config=FarmConfig(seed=1, water_probability=0.0))
    engine.grid.set_terrain(engine.grid.cell_at(3, 3), Terrain.WATER)
    return engine


class TestFarmConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = FarmConfig()
        assert cfg.seed is None
        assert cfg.grid_size == 8
        assert cfg.water_probability == 0.15
        assert cfg.growth_rate == 0.05
        assert cfg.grace_delay == 3
        assert cfg.tick_interval == 1.0

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("seed: 99\ngrid_size: 5\ngrace_delay: 2\n")
        cfg = FarmConfig.from_yaml(yaml_file)
        assert cfg.seed == 99
        assert cfg.grid_size == 5
        assert cfg.grace_delay == 2
        assert cfg.water_probability == 0.15

    def test_empty_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert FarmConfig.from_yaml(yaml_file) == FarmConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FarmConfig.from_yaml(tmp_path / "nope.yaml")

    def test_invalid_probability(self) -> None:
        with pytest.raises(ValueError):
            FarmConfig(water_probability=2.0)

    @pytest.mark.parametrize("rate", [0.0, -0.1])
    def test_invalid_growth_rate(self, rate: float) -> None:
        with pytest.raises(ValueError):
            FarmConfig(seed=1, water_probability=0.0, growth_rate=rate)

    def test_invalid_grace_delay(self) -> None:
        with pytest.raises(ValueError):
            FarmConfig(grace_delay=-1)

    def test_zero_grace_delay_allowed(self) -> None:
        assert FarmConfig(grace_delay=0).grace_delay == 0

    def test_invalid_growth_rate_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("growth_rate: -0.1\n")
        with pytest.raises(ValueError):
            FarmConfig.from_yaml(yaml_file)

    def test_bad_species_entry_fails_engine_build(self) -> None:
        cfg = FarmConfig(seed=1, species={"reed": {"name": "Reed"}})
        with pytest.raises(ValueError, match="reed"):
            FarmEngine(config=cfg)

    def test_bundled_default_is_inside_package(self) -> None:
        assert _DEFAULT_CONFIG.is_file()
        assert _DEFAULT_CONFIG.parent.name == "gridfarm"

    def test_shipped_default_loads(self) -> None:
        cfg = FarmConfig.from_yaml(_DEFAULT_CONFIG)
        assert cfg.grid_size == 8
        assert set(cfg.species) == {"marsh", "potato", "cactus"}


class TestTool:
    """Tests for tool identifiers."""

    def test_parse(self) -> None:
        assert Tool.parse("bucket") is Tool.BUCKET
        assert Tool.parse("marsh-seeds") is Tool.MARSH_SEEDS
        assert Tool.parse("hoe") is None

    def test_species_keys(self) -> None:
        assert Tool.MARSH_SEEDS.species_key == "marsh"
        assert Tool.POTATO_SEEDS.species_key == "potato"
        assert Tool.CACTUS_SEEDS.species_key == "cactus"
        assert Tool.SHOVEL.species_key is None

    def test_seed_species(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        assert engine.seed_species(Tool.POTATO_SEEDS).name == "Potato"
        assert engine.seed_species(Tool.BUCKET) is None
        assert engine.seed_species(Tool.CURSOR) is None


class TestCellInfo:
    """Tests for the info-panel snapshot."""

    def test_empty_cell_lines(self) -> None:
        info = CellInfo(x=1, y=2, terrain="Land")
        assert info.lines() == ["Terrain: Land", "Position: (1, 2)", "Plant: none"]

    def test_planted_cell_lines(self) -> None:
        info = CellInfo(
            x=3,
            y=4,
            terrain="Land",
            plant_name="Marsh",
            growth_percent=25,
            alive=False,
        )
        assert info.lines()[2:] == ["Plant: Marsh", "Growth: 25%", "State: dead"]


class TestFarmEngine:
    """Tests for the engine's lifecycle and player intents."""

    def test_engine_initialises(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        assert engine.tick == 0
        assert engine.grid.size == default_config.grid_size
        assert engine.tool is Tool.CURSOR
        assert not engine.running

    def test_determinism(self) -> None:
        a = FarmEngine(config=FarmConfig(seed=777))
        b = FarmEngine(config=FarmConfig(seed=777))
        assert a.grid.water_cells == b.grid.water_cells

    def test_step_advances_tick(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        engine.step()
        engine.run(ticks=4)
        assert engine.tick == 5

    def test_advance_only_while_running(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        assert engine.advance(5.0) == 0
        assert engine.tick == 0

        engine.start()
        assert engine.advance(0.6) == 0
        assert engine.advance(0.6) == 1
        assert engine.advance(2.0) == 2
        assert engine.tick == 3

        engine.stop()
        assert engine.advance(10.0) == 0
        assert engine.tick == 3

    def test_select_tool(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        assert engine.select_tool("shovel")
        assert engine.tool is Tool.SHOVEL
        assert engine.select_tool(Tool.BUCKET)
        assert engine.tool is Tool.BUCKET

    def test_unknown_tool_keeps_selection(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        engine.select_tool("bucket")
        assert not engine.select_tool("laser")
        assert engine.tool is Tool.BUCKET

    def test_click_out_of_bounds(self, default_config: FarmConfig) -> None:
        engine = FarmEngine(config=default_config)
        outcome = engine.cell_clicked(20, -1)
        assert outcome.info is None
        assert not outcome.changed
        assert engine.describe_cell(8, 0) is None

    def test_cursor_inspects(self) -> None:
        engine = _pond_engine()
        outcome = engine.cell_clicked(3, 3)
        assert outcome.info == CellInfo(x=3, y=3, terrain="Water")
        assert not outcome.changed

    def test_seed_tool_plants(self) -> None:
        engine = _pond_engine()
        engine.select_tool("marsh-seeds")
        outcome = engine.cell_clicked(3, 4)
        assert outcome.changed
        assert outcome.rejection is None
        assert outcome.info is not None
        assert outcome.info.plant_name == "Marsh"
        assert outcome.info.growth_percent == 0
        assert outcome.info.alive

    def test_seed_tool_rejection(self) -> None:
        engine = _pond_engine()
        engine.select_tool("marsh-seeds")
        outcome = engine.cell_clicked(5, 5)
        assert not outcome.changed
        assert outcome.rejection is not None
        assert outcome.rejection.reason is RejectionReason.DISTANCE_RULE
        assert "Marsh" in outcome.rejection.message
        assert engine.grid.cell_at(5, 5).plant is None

    def test_shovel(self) -> None:
        engine = _pond_engine()
        engine.select_tool("potato-seeds")
        engine.cell_clicked(4, 4)
        engine.select_tool("shovel")
        assert engine.cell_clicked(4, 4).changed
        assert not engine.cell_clicked(4, 4).changed
        assert not engine.cell_clicked(3, 3).changed
        assert engine.grid.cell_at(4, 4).plant is None

    def test_bucket_toggles_and_kills(self) -> None:
        engine = _pond_engine()
        engine.select_tool("marsh-seeds")
        engine.cell_clicked(3, 4)
        plant = engine.grid.cell_at(3, 4).plant
        assert plant is not None

        engine.select_tool("bucket")
        outcome = engine.cell_clicked(3, 3)
        assert outcome.info is not None
        assert outcome.info.terrain == "Land"
        assert not plant.alive
        assert engine.grid.water_cells == frozenset()

        assert plant.died_at == 1

        engine.run(ticks=3)
        assert engine.grid.cell_at(3, 4).plant is plant
        engine.step()
        assert engine.grid.cell_at(3, 4).plant is None

    def test_bucket_floods_plant(self) -> None:
        engine = _pond_engine()
        engine.select_tool("cactus-seeds")
        engine.cell_clicked(6, 6)
        engine.select_tool("bucket")
        engine.cell_clicked(6, 6)
        cell = engine.grid.cell_at(6, 6)
        assert cell.is_water
        assert cell.plant is None

    def test_marsh_grows_to_full_size(self) -> None:
        engine = _pond_engine()
        engine.select_tool("marsh-seeds")
        engine.cell_clicked(3, 4)
        engine.run(ticks=20)
        info = engine.describe_cell(3, 4)
        assert info is not None
        assert info.growth_percent == 100
        assert info.alive

    def test_dry_farm_only_takes_cactus(self) -> None:
        engine = FarmEngine(config=FarmConfig(seed=3, water_probability=0.0))
        engine.select_tool("potato-seeds")
        assert engine.cell_clicked(0, 0).rejection is not None
        engine.select_tool("marsh-seeds")
        assert engine.cell_clicked(0, 0).rejection is not None
        engine.select_tool("cactus-seeds")
        assert engine.cell_clicked(0, 0).changed

    def test_config_species_override(self) -> None:
        cfg = FarmConfig(
            seed=1,
            water_probability=0.0,
            species={"marsh": {"name": "Bog", "distance": 2}},
        )
        engine = FarmEngine(config=cfg)
        engine.grid.set_terrain(engine.grid.cell_at(3, 3), Terrain.WATER)
        assert engine.seed_species(Tool.MARSH_SEEDS).rule == Exact(2)
        engine.select_tool("marsh-seeds")
        assert engine.cell_clicked(3, 4).rejection is not None
        assert engine.cell_clicked(3, 5).changed
