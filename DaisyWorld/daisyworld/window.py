"""Desktop window for Daisyworld (pygame): the grid beside a panel of counters."""

from __future__ import annotations

from typing import List, Optional

from . import config
from .config import SimulationConfig
from .engine import SimulationEngine, StepStats
from .renderer import BACKGROUND_COLOR, kind_rgb_array

PANEL_WIDTH = 220
PANEL_COLOR = (192, 192, 192)
TEXT_COLOR = (0, 0, 0)
FONT_SIZE = 18


def panel_lines(stats: StepStats) -> List[str]:
    return [
        f"Tick: {stats.tick}",
        f"Global Temp: {stats.temperature:.2f} C",
        f"Luminosity: {stats.luminosity:.2f}",
        f"Black Daisies: {stats.black}",
        f"White Daisies: {stats.white}",
    ]


class DaisyworldWindow:
    metadata = {"window_title": "Daisyworld - The Pollen Effect"}

    def __init__(
        self,
        engine: SimulationEngine,
        cell_size: int = config.CELL_SIZE,
        sim_speed_ms: int = config.SIM_SPEED_MS,
    ) -> None:
        self.engine = engine
        self.cell_size = max(1, int(cell_size))
        self.sim_speed_ms = max(0, int(sim_speed_ms))
        self.grid_px = (engine.width * self.cell_size, engine.height * self.cell_size)

        self._pygame = None
        self._screen = None
        self._clock = None
        self._font = None

    def _open(self) -> None:
        import pygame

        self._pygame = pygame
        pygame.init()
        self._screen = pygame.display.set_mode((self.grid_px[0] + PANEL_WIDTH, self.grid_px[1]))
        pygame.display.set_caption(self.metadata["window_title"])
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("Arial", FONT_SIZE, bold=True)

    def render(self, stats: StepStats) -> None:
        pygame = self._pygame
        self._screen.fill(BACKGROUND_COLOR)

        # surfarray is indexed [x, y], the grid image is [y, x]
        image = kind_rgb_array(self.engine.grid).swapaxes(0, 1)
        surface = pygame.surfarray.make_surface(image)
        if self.cell_size > 1:
            surface = pygame.transform.scale(surface, self.grid_px)
        self._screen.blit(surface, (0, 0))

        panel = pygame.Rect(self.grid_px[0], 0, PANEL_WIDTH, self.grid_px[1])
        pygame.draw.rect(self._screen, PANEL_COLOR, panel)
        for i, line in enumerate(panel_lines(stats)):
            text = self._font.render(line, True, TEXT_COLOR)
            self._screen.blit(text, (panel.x + 8, 10 + i * (FONT_SIZE + 10)))

        pygame.display.flip()

    def run(self, max_steps: Optional[int] = None) -> List[StepStats]:
        """Step and redraw until the window is closed or max_steps ticks have run.

        Returns the history, starting with the tick-0 state.
        """
        if self._screen is None:
            self._open()
        pygame = self._pygame
        history = [self.engine.stats()]
        self.render(history[-1])
        try:
            while max_steps is None or history[-1].tick < max_steps:
                # Handle window events (prevents "not responding")
                if any(event.type == pygame.QUIT for event in pygame.event.get()):
                    break
                history.append(self.engine.step())
                self.render(history[-1])
                if self.sim_speed_ms:
                    self._clock.tick(1000 / self.sim_speed_ms)
        finally:
            self.close()
        return history

    def close(self) -> None:
        if self._screen is not None:
            self._pygame.quit()
            self._screen = None
            self._clock = None
            self._font = None


def run_window(
    seed: Optional[int] = None,
    sim_config: Optional[SimulationConfig] = None,
    max_steps: Optional[int] = None,
    cell_size: int = config.CELL_SIZE,
    sim_speed_ms: int = config.SIM_SPEED_MS,
) -> List[StepStats]:
    engine = SimulationEngine(sim_config, seed=seed)
    return DaisyworldWindow(engine, cell_size=cell_size, sim_speed_ms=sim_speed_ms).run(max_steps)
