"""Terminal 2048: board rules, tile spawning, turn handling and a text front end."""

from tile2048.board_rules import (
    Board,
    BoardStatus,
    Direction,
    apply_move,
    best_score,
    board_status,
    is_movable,
    valid_moves,
)
from tile2048.tiles import RandomSource, spawn_tile
from tile2048.turn import GameSession, SessionState, TurnOutcome, process_input

__version__ = "0.1.0"
