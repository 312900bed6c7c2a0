"""Entry point for ``python -m gridfarm``.

Loads the default YAML config, builds a farm engine, and opens a Pygame
window to plant and water the grid.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from gridfarm.simulation.config import FarmConfig
from gridfarm.simulation.engine import FarmEngine
from gridfarm.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = pathlib.Path(__file__).resolve().parent / "default.yaml"


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="gridfarm",
        description="Grid Farm - plant by the water and watch it grow",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: the bundled default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=64,
        help="Pixel size per grid cell (default: 64)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the terrain seed from the config file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = FarmConfig.from_yaml(args.config)
    if args.seed is not None:
        config.seed = args.seed
    engine = FarmEngine(config=config)

    renderer = PygameRenderer(engine=engine, cell_size=args.cell_size)
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
