"""Core 2048 board mechanics shared by the turn controller, renderer and tests."""

import enum
import logging
from typing import Callable, Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

BOARD_WIDTH = 4
BOARD_HEIGHT = 4


class Direction(enum.Enum):
    UP = "UP"
    RIGHT = "RIGHT"
    DOWN = "DOWN"
    LEFT = "LEFT"

    @classmethod
    def parse(cls, name: Union[str, "Direction"]) -> "Direction":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).upper())
        except ValueError:
            raise ValueError(f"Unknown direction: {name}") from None


class BoardStatus(enum.Enum):
    NORMAL = "NORMAL"
    GAME_OVER = "GAME_OVER"


DIRECTION_NAMES: Sequence[str] = tuple(d.value for d in Direction)


def _is_tile_value(value: int) -> bool:
    return value == 0 or (value > 0 and value & (value - 1) == 0)


def _checked_tile(value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Cells must be 0 or a power of two, received {value!r}") from None
    # int() truncates floats such as 2.7, so compare against the original too
    if number != value or not _is_tile_value(number):
        raise ValueError(f"Cells must be 0 or a power of two, received {value!r}")
    return number


class Board:
    """Fixed-size grid of tiles stored as a flat array, addressed by ``row * width + col``.

    ``grid`` is a (height, width) view onto the same storage, so writes through
    either one are visible in both.
    """

    def __init__(self, cells: Iterable[int], width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        if width < 2 or height < 2:
            raise ValueError(f"Board must be at least 2x2, received {width}x{height}")
        values = list(cells)
        if len(values) != width * height:
            raise ValueError(
                f"Expected {width * height} cells for a {width}x{height} board, received {len(values)}"
            )
        flat = np.array([_checked_tile(v) for v in values], dtype=np.int64)
        self.width = width
        self.height = height
        self.cells = flat
        self.grid = self.cells.reshape(height, width)

    @classmethod
    def empty(cls, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> "Board":
        return cls([0] * (width * height), width, height)

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[int]]) -> "Board":
        rows = [list(row) for row in grid]
        if not rows:
            raise ValueError("Grid must have at least one row")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid rows must all have the same length")
        return cls([v for row in rows for v in row], width, len(rows))

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone.width = self.width
        clone.height = self.height
        clone.cells = self.cells.copy()
        clone.grid = clone.cells.reshape(self.height, self.width)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and bool(np.array_equal(self.cells, other.cells))
        )

    __hash__ = None  # mutable

    def __getitem__(self, pos: Tuple[int, int]) -> int:
        row, col = pos
        return int(self.grid[row, col])

    def __setitem__(self, pos: Tuple[int, int], value: int) -> None:
        row, col = pos
        self.grid[row, col] = _checked_tile(value)

    def __len__(self) -> int:
        return self.cells.size

    def __repr__(self) -> str:
        return f"Board({self.to_rows()!r})"

    def empty_indices(self) -> List[int]:
        return [int(i) for i in np.flatnonzero(self.cells == 0)]

    def is_full(self) -> bool:
        return not bool(np.any(self.cells == 0))

    def to_rows(self) -> List[List[int]]:
        return self.grid.tolist()

    def lines(self, direction: Union[str, Direction]) -> List[np.ndarray]:
        """Writable views of every line, each ordered from the leading edge of ``direction``."""
        return _LINE_VIEWS[Direction.parse(direction)](self.grid)


# One extractor per direction: index 0 of every view is the edge tiles slide towards.
def _left_lines(grid: np.ndarray) -> List[np.ndarray]:
    return [grid[r, :] for r in range(grid.shape[0])]


def _right_lines(grid: np.ndarray) -> List[np.ndarray]:
    return [grid[r, ::-1] for r in range(grid.shape[0])]


def _up_lines(grid: np.ndarray) -> List[np.ndarray]:
    return [grid[:, c] for c in range(grid.shape[1])]


def _down_lines(grid: np.ndarray) -> List[np.ndarray]:
    return [grid[::-1, c] for c in range(grid.shape[1])]


_LINE_VIEWS: Dict[Direction, Callable[[np.ndarray], List[np.ndarray]]] = {
    Direction.LEFT: _left_lines,
    Direction.RIGHT: _right_lines,
    Direction.UP: _up_lines,
    Direction.DOWN: _down_lines,
}


def compress(line: Iterable[int]) -> List[int]:
    values = list(line)
    filtered = [v for v in values if v != 0]
    return filtered + [0] * (len(values) - len(filtered))


def merge(line: Iterable[int]) -> List[int]:
    """Merge equal neighbours in one sweep from the leading edge.

    The trailing cell of a merged pair becomes 0, so the doubled value can
    never pair with anything later in the same sweep.
    """
    merged = list(line)
    for idx in range(len(merged) - 1):
        if merged[idx] != 0 and merged[idx] == merged[idx + 1]:
            merged[idx] *= 2
            merged[idx + 1] = 0
    return merged


def slide_line(line: Iterable[int]) -> List[int]:
    return compress(merge(compress(line)))


def apply_move(board: Board, direction: Union[str, Direction]) -> Board:
    """Slide and merge every line of ``board`` in place and return it."""
    for view in board.lines(direction):
        if not view.any():
            continue
        view[:] = slide_line(view.tolist())
    return board


def _as_board(board: Union[Board, Sequence[Sequence[int]]]) -> Board:
    if isinstance(board, Board):
        return board
    return Board.from_grid(board)


def simulate_move(
    board: Union[Board, Sequence[Sequence[int]]], direction: Union[str, Direction]
) -> Tuple[Board, bool]:
    original = _as_board(board)
    next_board = apply_move(original.copy(), direction)
    return next_board, next_board != original


def is_movable(board: Union[Board, Sequence[Sequence[int]]], direction: Union[str, Direction]) -> bool:
    _, changed = simulate_move(board, direction)
    return changed


def valid_moves(board: Union[Board, Sequence[Sequence[int]]]) -> List[Direction]:
    board = _as_board(board)
    return [direction for direction in Direction if is_movable(board, direction)]


def board_status(board: Union[Board, Sequence[Sequence[int]]]) -> BoardStatus:
    board = _as_board(board)
    if any(is_movable(board, direction) for direction in Direction):
        return BoardStatus.NORMAL
    logger.debug("no movable direction left on %r", board)
    return BoardStatus.GAME_OVER


def best_score(board: Union[Board, Sequence[Sequence[int]]]) -> int:
    return int(_as_board(board).cells.max())


__all__ = [
    "BOARD_HEIGHT",
    "BOARD_WIDTH",
    "Board",
    "BoardStatus",
    "DIRECTION_NAMES",
    "Direction",
    "apply_move",
    "best_score",
    "board_status",
    "compress",
    "is_movable",
    "merge",
    "simulate_move",
    "slide_line",
    "valid_moves",
]
