"""Shared fixtures for the Grid Farm test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from gridfarm.plants.simulation import PlantSimulation
from gridfarm.simulation.config import FarmConfig
from gridfarm.world.cell import Terrain
from gridfarm.world.grid import Grid


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_grid() -> Grid:
    """An all-land 8x8 grid."""
    return Grid(size=8)


@pytest.fixture
def pond_grid(small_grid: Grid) -> Grid:
    """An 8x8 grid with a single water cell at (3, 3)."""
    small_grid.set_terrain(small_grid.cell_at(3, 3), Terrain.WATER)
    return small_grid


@pytest.fixture
def pond_sim(pond_grid: Grid) -> PlantSimulation:
    """A plant simulation on the single-pond grid."""
    return PlantSimulation(grid=pond_grid)


@pytest.fixture
def default_config() -> FarmConfig:
    """Default config with a fixed seed (no YAML file needed)."""
    return FarmConfig(seed=42)
