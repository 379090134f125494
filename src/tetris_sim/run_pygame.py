"""Simple pygame front-end for the simulation.

A graphical alternative to the curses driver.  Gravity runs on pygame's own
clock and keyboard input is read from the pygame event queue, so everything
happens on one thread.
"""

from __future__ import annotations

import asyncio
import logging

import pygame

from .board import HEIGHT, WIDTH, Grid
from .config import TICK_MS
from .game_state import Intent, Tetris

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

FILLED_COLOR = (255, 255, 255)
EMPTY_COLOR = (0, 0, 0)
GRID_LINE_COLOR = (50, 50, 50)

KEY_INTENTS = {
    pygame.K_LEFT: Intent.LEFT,
    pygame.K_a: Intent.LEFT,
    pygame.K_RIGHT: Intent.RIGHT,
    pygame.K_d: Intent.RIGHT,
    pygame.K_UP: Intent.CLOCK,
    pygame.K_e: Intent.CLOCK,
    pygame.K_q: Intent.COUNTER_CLOCK,
}


def draw_grid(screen: pygame.Surface, grid: Grid) -> None:
    """Render every grid cell, filled or empty."""

    for r in range(HEIGHT):
        for c in range(WIDTH):
            color = FILLED_COLOR if grid[r][c] else EMPTY_COLOR
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE_COLOR, rect, 1)


def handle_key(event: pygame.event.Event, tetris: Tetris) -> bool:
    """Forward a key press to the simulation; return whether it was bound."""

    intent = KEY_INTENTS.get(event.key)
    if intent is None:
        return False
    tetris.event(intent)
    return True


class GameRunner:
    """Own the window and run the gravity loop until game over or close."""

    def __init__(self, tick_ms: int = TICK_MS) -> None:
        self.tick_ms = tick_ms
        self.ticks = 0
        self._running = False
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._drop_timer = 0
        self.tetris: Tetris | None = None

    @property
    def running(self) -> bool:
        return self._running

    def step(self, dt: int) -> bool:
        """Advance gravity by ``dt`` milliseconds; return ``False`` on game over."""

        if self.tetris is None:
            return False
        self._drop_timer += dt
        while self._drop_timer >= self.tick_ms:
            self._drop_timer -= self.tick_ms
            self.ticks += 1
            if not self.tetris.tick():
                return False
        return True

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode((WIDTH * CELL_SIZE, HEIGHT * CELL_SIZE))
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()

        self.tetris = Tetris()
        self._drop_timer = 0
        self._running = True
        LOGGER.info("Game started")
        while self._running:
            dt = self._clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        self._running = False
                    else:
                        handle_key(event, self.tetris)

            if self._running and not self.step(dt):
                LOGGER.info("Game over after %d ticks", self.ticks)
                self._running = False

            self._screen.fill(EMPTY_COLOR)
            draw_grid(self._screen, self.tetris.grid)
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def run(self) -> int:
        """Play one game in a window and return the number of ticks."""

        asyncio.run(self._run_loop())
        return self.ticks


def main(tick_ms: int = TICK_MS) -> int:
    return GameRunner(tick_ms).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
