"""Random tile placement."""

import logging
from typing import Optional

import numpy as np

from tile2048.board_rules import BOARD_HEIGHT, BOARD_WIDTH, Board

logger = logging.getLogger(__name__)

SPAWN_FOUR_PROBABILITY = 0.1


class RandomSource:
    """Uniform floats in [0, 1) backed by a numpy Generator."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._generator.random())


def spawn_tile(board: Board, rng) -> bool:
    """Place a 2 (or, one time in ten, a 4) on a random empty cell.

    Returns False without touching the board when no cell is empty.
    """
    empty = board.empty_indices()
    if not empty:
        return False

    pick = min(int(rng.random() * len(empty)), len(empty) - 1)
    index = empty[pick]
    value = 4 if rng.random() < SPAWN_FOUR_PROBABILITY else 2
    board.cells[index] = value
    logger.debug("spawned %d at row %d col %d", value, index // board.width, index % board.width)
    return True


def new_board(rng, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> Board:
    board = Board.empty(width, height)
    spawn_tile(board, rng)
    spawn_tile(board, rng)
    return board


__all__ = ["RandomSource", "SPAWN_FOUR_PROBABILITY", "new_board", "spawn_tile"]
