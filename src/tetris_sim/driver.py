"""Timer and keyboard threads feeding a single control loop.

Two daemon threads produce messages onto one :class:`queue.Queue`: a timer
posting :data:`TICK` at a fixed interval and an input reader translating keys
into :class:`Event` messages.  Only the consumer in :func:`run` touches the
simulation, so the state itself needs no locking.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import queue
import threading
from typing import Callable, Optional, Union

from .board import Grid
from .config import DriverConfig
from .game_state import Intent, Tetris


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tick:
    """A clock tick."""


@dataclass(frozen=True)
class Event:
    """A key press to be handled."""

    intent: Intent


@dataclass(frozen=True)
class Quit:
    """The user asked to leave."""


Iteration = Union[Tick, Event, Quit]

TICK = Tick()
QUIT = Quit()

# Returns the next key as a one character string, ``""`` when no key is
# available yet and ``None`` once input is exhausted.
KeyReader = Callable[[], Optional[str]]

# Seconds to wait for each producer thread on stop. Key readers must return
# within this bound.
JOIN_TIMEOUT = 1.0


class Driver:
    """Owns the producer threads and the message queue."""

    def __init__(self, read_key: KeyReader, config: Optional[DriverConfig] = None) -> None:
        self.config = config or DriverConfig()
        self._bindings = self.config.bindings()
        self._read_key = read_key
        self._queue: "queue.Queue[Iteration]" = queue.Queue()
        self._stop = threading.Event()
        self._threads = [
            threading.Thread(target=self._input_loop, name="tetris-input", daemon=True),
            threading.Thread(target=self._tick_loop, name="tetris-tick", daemon=True),
        ]

    def __enter__(self) -> "Driver":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        for thread in self._threads:
            thread.start()
        LOGGER.info("Driver started with %d ms ticks", self.config.tick_ms)

    def stop(self) -> None:
        """Ask both producer threads to finish and wait for them."""

        self._stop.set()
        for thread in self._threads:
            if thread.is_alive():
                thread.join(JOIN_TIMEOUT)
        alive = [thread.name for thread in self._threads if thread.is_alive()]
        if alive:
            LOGGER.warning("Threads still running after stop: %s", ", ".join(alive))
        LOGGER.info("Driver stopped")

    def translate(self, key: str) -> Optional[Iteration]:
        """Map a key to a message, or ``None`` for unbound keys."""

        if key in self.config.quit_keys:
            return QUIT
        intent = self._bindings.get(key)
        if intent is None:
            return None
        return Event(intent)

    def _input_loop(self) -> None:
        while not self._stop.is_set():
            key = self._read_key()
            if key is None:
                break
            if not key:
                continue
            message = self.translate(key)
            if message is None:
                continue
            self.post(message)
            if message is QUIT:
                break

    def _tick_loop(self) -> None:
        interval = self.config.tick_ms / 1000.0
        while not self._stop.is_set():
            self.post(TICK)
            if self._stop.wait(interval):
                break

    def post(self, message: Iteration) -> None:
        """Enqueue ``message`` behind anything already pending."""

        self._queue.put(message)

    def next(self, timeout: Optional[float] = None) -> Iteration:
        """Block until the next message arrives.

        Raises:
            queue.Empty: If ``timeout`` elapses first.
        """

        return self._queue.get(timeout=timeout)


def run(tetris: Tetris, driver: Driver, render: Callable[[Grid], None]) -> int:
    """Consume driver messages until game over or quit.

    ``render`` receives the read-only grid after every handled message.
    Returns the number of ticks processed.
    """

    ticks = 0
    render(tetris.grid)
    while True:
        message = driver.next()
        if isinstance(message, Quit):
            LOGGER.info("Quit requested after %d ticks", ticks)
            break
        if isinstance(message, Tick):
            ticks += 1
            if not tetris.tick():
                LOGGER.info("Game over after %d ticks", ticks)
                break
        else:
            tetris.event(message.intent)
        render(tetris.grid)
    return ticks
