"""Turn controller: maps a keystroke to a move and advances the game."""

import enum
import logging
from typing import Dict, Optional, Union

from tile2048.board_rules import Board, BoardStatus, Direction, apply_move, board_status, is_movable
from tile2048.tiles import RandomSource, new_board, spawn_tile

logger = logging.getLogger(__name__)


class TurnOutcome(enum.Enum):
    NO_CHANGE = "NO_CHANGE"
    NORMAL = "NORMAL"
    GAME_OVER = "GAME_OVER"
    INVALID = "INVALID"
    QUIT = "QUIT"


class SessionState(enum.Enum):
    PLAYING = "PLAYING"
    OVER = "OVER"
    QUIT = "QUIT"


KEY_BINDINGS: Dict[str, Direction] = {
    "w": Direction.UP,
    "a": Direction.LEFT,
    "s": Direction.DOWN,
    "d": Direction.RIGHT,
}
QUIT_KEY = "q"


def read_command(key: Optional[str]) -> Union[Direction, TurnOutcome]:
    """Return the direction bound to ``key``, or QUIT / INVALID."""
    if not isinstance(key, str) or len(key) != 1:
        return TurnOutcome.INVALID
    key = key.lower()
    if key == QUIT_KEY:
        return TurnOutcome.QUIT
    return KEY_BINDINGS.get(key, TurnOutcome.INVALID)


def process_input(board: Board, key: Optional[str], rng) -> TurnOutcome:
    command = read_command(key)
    if isinstance(command, TurnOutcome):
        return command

    if not is_movable(board, command):
        return TurnOutcome.NO_CHANGE

    apply_move(board, command)
    spawn_tile(board, rng)
    if board_status(board) is BoardStatus.GAME_OVER:
        return TurnOutcome.GAME_OVER
    return TurnOutcome.NORMAL


_NEXT_STATE = {
    TurnOutcome.NO_CHANGE: SessionState.PLAYING,
    TurnOutcome.NORMAL: SessionState.PLAYING,
    TurnOutcome.INVALID: SessionState.PLAYING,
    TurnOutcome.GAME_OVER: SessionState.OVER,
    TurnOutcome.QUIT: SessionState.QUIT,
}


class GameSession:
    """One game: a board, the random source feeding it, and where play stands."""

    def __init__(self, board: Board, rng):
        self.board = board
        self.rng = rng
        self.state = SessionState.PLAYING
        self.turns = 0

    @classmethod
    def start(cls, rng=None) -> "GameSession":
        if rng is None:
            rng = RandomSource()
        session = cls(new_board(rng), rng)
        logger.info(
            "session started with %d tiles on the board",
            len(session.board) - len(session.board.empty_indices()),
        )
        return session

    @property
    def finished(self) -> bool:
        return self.state is not SessionState.PLAYING

    def play(self, key: Optional[str]) -> TurnOutcome:
        if self.finished:
            raise RuntimeError(f"Session has ended ({self.state.value.lower()})")

        outcome = process_input(self.board, key, self.rng)
        if outcome in (TurnOutcome.NORMAL, TurnOutcome.GAME_OVER):
            self.turns += 1
        self.state = _NEXT_STATE[outcome]
        logger.debug("key %r -> %s (turn %d)", key, outcome.value, self.turns)
        if self.finished:
            logger.info("session %s after %d turns", self.state.value.lower(), self.turns)
        return outcome


__all__ = [
    "GameSession",
    "KEY_BINDINGS",
    "QUIT_KEY",
    "SessionState",
    "TurnOutcome",
    "process_input",
    "read_command",
]
