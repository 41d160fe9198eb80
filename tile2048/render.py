"""Text and JSON-ready views of a board."""

from typing import Dict, List, Optional

from tile2048.board_rules import Board, best_score

CELL_WIDTH = 10
TILE_MODULUS = 1000000
MARGIN = "    "


def _format_tile(value: int) -> str:
    if value <= 0:
        return " " * 6
    return f"{value % TILE_MODULUS:>6}"


def render_text(board: Board, title: str = "Terminal 2048") -> str:
    inner = (CELL_WIDTH + 1) * board.width - 1
    spacer = MARGIN + "|" + "|".join([" " * CELL_WIDTH] * board.width) + "|"

    lines: List[str] = [
        "",
        MARGIN + title,
        "",
        f"{MARGIN}Best Score: {best_score(board)}",
        MARGIN + "_" * (inner + 2),
    ]
    for row in range(board.height):
        tiles = "|".join(f"  {_format_tile(board[row, col])}  " for col in range(board.width))
        lines.append(spacer)
        lines.append(f"{MARGIN}|{tiles}|")
        lines.append(spacer)
        if row == board.height - 1:
            lines.append(MARGIN + "|" + "_" * inner + "|")
        else:
            lines.append(MARGIN + "|" + "-" * inner + "|")
    lines.append("")
    return "\n".join(lines)


def board_payload(board: Board, outcome: Optional[str] = None) -> Dict:
    payload = {
        "grid": board.to_rows(),
        "width": board.width,
        "height": board.height,
        "best_score": best_score(board),
    }
    if outcome is not None:
        payload["outcome"] = outcome
    return payload


__all__ = ["board_payload", "render_text"]
