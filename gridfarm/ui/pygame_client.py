"""Pygame 2D front-end for the farm.

Renders terrain and plants, forwards mouse clicks and tool hotkeys to the
engine, and shows the selected cell's details in a side panel.  A refused
planting opens a notice that blocks further clicks until dismissed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

if TYPE_CHECKING:
    from gridfarm.simulation.engine import CellInfo, FarmEngine

from gridfarm.plants.plant import SizeClass
from gridfarm.simulation.tools import Tool

# Colour palette
_BG = (30, 24, 18)
_LAND = (161, 136, 127)
_WATER = (79, 195, 247)
_GRID_LINE = (60, 48, 40)
_DEAD = (90, 80, 70)
_TEXT = (220, 220, 220)
_NOTICE_BG = (60, 20, 20)
_NOTICE_BORDER = (220, 90, 90)

# Plant radius as a fraction of cell size
_PLANT_SCALE: dict[SizeClass, float] = {
    SizeClass.SMALL: 0.18,
    SizeClass.MEDIUM: 0.28,
    SizeClass.LARGE: 0.40,
}

_TOOL_KEYS: dict[int, Tool] = {
    pygame.K_1: Tool.CURSOR,
    pygame.K_2: Tool.SHOVEL,
    pygame.K_3: Tool.MARSH_SEEDS,
    pygame.K_4: Tool.POTATO_SEEDS,
    pygame.K_5: Tool.CACTUS_SEEDS,
    pygame.K_6: Tool.BUCKET,
}


class PygameRenderer:
    """Renders a FarmEngine into a Pygame window.

    Attributes:
        engine: The farm engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Time multipliers applied to the engine clock
    _SPEED_STEPS: ClassVar[list[float]] = [0.25, 0.5, 1.0, 2.0, 4.0, 8.0]

    def __init__(self, engine: FarmEngine, cell_size: int = 64) -> None:
        """Initialise the renderer.

        Args:
            engine: The farm engine to render.
            cell_size: Pixel width/height per grid cell.
        """
        self.engine = engine
        self.cell_size = cell_size
        self._speed_index = self._SPEED_STEPS.index(1.0)
        self._selected: tuple[int, int] | None = None
        self._notice: str | None = None

        side = engine.grid.size * cell_size
        self._panel_width = 260
        self._win_w = side + self._panel_width
        self._win_h = max(side, 420)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Grid Farm")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True

    @property
    def speed(self) -> float:
        return self._SPEED_STEPS[self._speed_index]

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, advance the engine, render.

        Args:
            fps: Target frames per second.
        """
        self.engine.start()
        while self.running:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            self.engine.advance(dt * self.speed)
            self._draw()

        self.engine.stop()
        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif self._notice is not None:
                # Any click or key dismisses the blocking notice
                if event.type in (pygame.KEYDOWN, pygame.MOUSEBUTTONDOWN):
                    self._notice = None
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(*event.pos)

    def _handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            if self.engine.running:
                self.engine.stop()
            else:
                self.engine.start()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._speed_index = min(len(self._SPEED_STEPS) - 1, self._speed_index + 1)
        elif key == pygame.K_MINUS:
            self._speed_index = max(0, self._speed_index - 1)
        elif key in _TOOL_KEYS:
            self.engine.select_tool(_TOOL_KEYS[key])

    def _handle_click(self, px: int, py: int) -> None:
        x, y = px // self.cell_size, py // self.cell_size
        outcome = self.engine.cell_clicked(x, y)
        if outcome.info is None:
            return
        self._selected = (x, y)
        if outcome.rejection is not None:
            self._notice = outcome.rejection.message

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_terrain()
        self._draw_plants()
        self._draw_info_panel()
        if self._notice is not None:
            self._draw_notice(self._notice)
        pygame.display.flip()

    def _draw_terrain(self) -> None:
        """Draw land and water tiles with grid lines."""
        cs = self.cell_size
        for cell in self.engine.grid.iter_cells():
            rect = (cell.x * cs, cell.y * cs, cs, cs)
            pygame.draw.rect(self.screen, _WATER if cell.is_water else _LAND, rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)

    def _draw_plants(self) -> None:
        """Draw each plant as a disc sized by growth; dead plants are grey."""
        cs = self.cell_size
        for cell, plant in self.engine.plants.plants():
            colour = plant.species.colour if plant.alive else _DEAD
            radius = max(2, int(cs * _PLANT_SCALE[plant.size]))
            centre = (cell.x * cs + cs // 2, cell.y * cs + cs // 2)
            pygame.draw.circle(self.screen, colour, centre, radius)

    def _draw_info_panel(self) -> None:
        """Draw tool list, clock, and selected cell details."""
        panel_x = self.engine.grid.size * self.cell_size + 10
        y = 10

        lines = [
            f"Tick: {self.engine.tick}",
            f"Speed: x{self.speed:g}",
            f"{'RUNNING' if self.engine.running else 'PAUSED'}",
            "",
            "--- Tools ---",
        ]
        for key_name, tool in zip("123456", _TOOL_KEYS.values()):
            marker = ">" if tool is self.engine.tool else " "
            lines.append(f"{marker}{key_name}: {tool.label}")

        seed = self.engine.seed_species(self.engine.tool)
        if seed is not None:
            lines.append(f"  {seed.name} needs water at {seed.rule.label}")

        lines += ["", "--- Cell ---"]
        info: CellInfo | None = None
        if self._selected is not None:
            info = self.engine.describe_cell(*self._selected)
        lines += info.lines() if info is not None else ["(click a cell)"]

        lines += [
            "",
            "--- Controls ---",
            "SPACE: pause",
            "+/-: speed",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18

    def _draw_notice(self, text: str) -> None:
        """Draw a centred modal box with ``text`` word-wrapped."""
        width = self._win_w - 80
        words = text.split()
        rows: list[str] = []
        current = ""
        for word in words:
            candidate = f"{current} {word}".strip()
            if self.font.size(candidate)[0] > width - 20 and current:
                rows.append(current)
                current = word
            else:
                current = candidate
        rows.append(current)
        rows += ["", "(click or press a key)"]

        height = 20 + 18 * len(rows)
        box = pygame.Rect(40, (self._win_h - height) // 2, width, height)
        pygame.draw.rect(self.screen, _NOTICE_BG, box)
        pygame.draw.rect(self.screen, _NOTICE_BORDER, box, 2)
        y = box.y + 10
        for row in rows:
            surf = self.font.render(row, True, _TEXT)
            self.screen.blit(surf, (box.x + 10, y))
            y += 18
