"""Tunable settings shared by the front-ends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from .game_state import Intent


# Milliseconds between gravity ticks (six ticks per second).
TICK_MS = 1000 // 6

ESC = "\x1b"

KEY_BINDINGS: Dict[str, Intent] = {
    "a": Intent.LEFT,
    "d": Intent.RIGHT,
    "q": Intent.COUNTER_CLOCK,
    "e": Intent.CLOCK,
}

QUIT_KEYS = frozenset({ESC})


@dataclass(frozen=True)
class DriverConfig:
    """Timing and key bindings used by :class:`tetris_sim.driver.Driver`.

    Bindings are stored as ``(key, intent)`` pairs so instances stay hashable.
    """

    tick_ms: int = TICK_MS
    key_bindings: Tuple[Tuple[str, Intent], ...] = tuple(KEY_BINDINGS.items())
    quit_keys: FrozenSet[str] = QUIT_KEYS

    def __post_init__(self) -> None:
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")

    def bindings(self) -> Dict[str, Intent]:
        """Return the key bindings as a fresh lookup table."""

        return dict(self.key_bindings)
