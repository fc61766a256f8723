"""
Board Decoder

Rebuilds the display grid from the engine's encoded board: one digit per
move ('1'..'7'), in play order. Even indices are Player 1, odd indices are
Player 2. The grid is rebuilt from scratch on every call.

Grid uses (row, col) indexing, row 0 is the TOP, row HEIGHT - 1 the BOTTOM.
"""

from typing import List, Optional, Sequence

from engine.core.constants import WIDTH, HEIGHT
from client.app.models.enums import Cell

Grid = List[List[Cell]]


class EncodedBoardError(ValueError):
    """
    The engine sent a board the client cannot lay out.
    'grid' holds every piece placed before the offending move at 'index'.
    """

    def __init__(self, encoded: str, index: int, reason: str, grid: Grid):
        self.encoded = encoded
        self.index = index
        self.grid = grid
        super().__init__(f"Bad encoded board {encoded!r} at index {index}: {reason}")


def empty_grid() -> Grid:
    return [[Cell.EMPTY for _ in range(WIDTH)] for _ in range(HEIGHT)]


def piece_for_index(index: int) -> Cell:
    """Turn parity: Player 1 plays the even moves, Player 2 the odd ones."""
    return Cell.PLAYER_ONE if index % 2 == 0 else Cell.PLAYER_TWO


def decode(encoded: str) -> Grid:
    grid = empty_grid()

    for i, ch in enumerate(encoded):
        if ch not in "0123456789" or not 1 <= int(ch) <= WIDTH:
            raise EncodedBoardError(encoded, i, f"column {ch!r} out of range", grid)
        col = int(ch) - 1

        # Gravity: scan from the bottom row up for the first empty cell
        for r in range(HEIGHT - 1, -1, -1):
            if grid[r][col] == Cell.EMPTY:
                grid[r][col] = piece_for_index(i)
                break
        else:
            raise EncodedBoardError(encoded, i, f"column {col + 1} is full", grid)

    return grid


# --- Text rendering ---

def render_board(grid: Grid) -> str:
    """ASCII grid with 1-based column numbers on top."""
    symbols = {Cell.EMPTY: ".", Cell.PLAYER_ONE: "X", Cell.PLAYER_TWO: "O"}
    header = " " + " ".join(str(c + 1) for c in range(WIDTH))
    rows_str = ["|" + "|".join(symbols[cell] for cell in row) + "|" for row in grid]
    return header + "\n" + "\n".join(rows_str)


def render_scores(scores: Sequence[Optional[int]]) -> str:
    return " " + " ".join("-" if s is None else str(s) for s in scores)
