import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from examples.headless_run import play
from tetris_sim.tetromino import Piece


def test_play_without_moves_ends_with_game_over(caplog):
    with caplog.at_level(logging.INFO, logger="examples.headless_run"):
        tetris = play("", max_ticks=1000)

    assert tetris.game_over
    assert tetris.piece is Piece.O
    assert any(message.startswith("Game over after") for message in caplog.messages)


def test_play_stops_at_tick_limit(caplog):
    with caplog.at_level(logging.INFO, logger="examples.headless_run"):
        tetris = play("a.", max_ticks=3)

    assert not tetris.game_over
    assert (tetris.anchor_row, tetris.anchor_col) == (3, 2)
    assert "Stopped after 3 ticks" in caplog.messages
