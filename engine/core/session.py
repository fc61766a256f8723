"""
Game Session - In-process engine behind the client command protocol

Holds the single authoritative board (as its encoded move string) and the
opening book. Every command takes the session lock, so calls coming from
worker threads are serialized.
"""

import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from .bitboard import Bitboard
from .constants import WIDTH, MAX_MOVES
from .opening_book import OpeningBook

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(self, book: Optional[OpeningBook] = None):
        self.book = book if book is not None else OpeningBook()
        self.encoded_board = ""
        self._lock = threading.Lock()

    # --- Commands ---

    def open_book(self, book_path: Union[str, Path]) -> None:
        book = OpeningBook.open(book_path)
        with self._lock:
            self.book = book

    def get_encoded_board(self) -> str:
        with self._lock:
            return self.encoded_board

    def play_colm(self, colm: int) -> None:
        """Appends a move; the board is left untouched if the move is illegal."""
        if not isinstance(colm, int) or isinstance(colm, bool) or not 1 <= colm <= WIDTH:
            raise ValueError(f"Invalid column: {colm}")
        with self._lock:
            candidate = self.encoded_board + str(colm)
            # Raises InvalidBoardError for full columns and decided games
            Bitboard.from_encoded(candidate)
            self.encoded_board = candidate
        logger.debug("Played column %d -> %s", colm, candidate)

    def back_move(self) -> None:
        """Retracts the last move. No-op on an empty board."""
        with self._lock:
            if not self.encoded_board:
                logger.debug("back_move on empty board ignored")
                return
            self.encoded_board = self.encoded_board[:-1]

    def reset_game(self) -> None:
        with self._lock:
            self.encoded_board = ""

    def columns_score(self) -> List[Optional[int]]:
        """
        Score of each column for the player to move.
        None: column full, game decided, or position missing from the book.
        """
        with self._lock:
            board = Bitboard.from_encoded(self.encoded_board)
            book = self.book

        scores: List[Optional[int]] = [None] * WIDTH
        if board.has_winner():
            return scores

        for col in range(WIDTH):
            if not board.can_play(col):
                continue
            if board.is_winning_move(col):
                scores[col] = (MAX_MOVES - board.moves_count + 1) // 2
                continue
            book_score = book.score(board.play(col))
            if book_score is not None:
                # Book scores are from the opponent's point of view after the move
                scores[col] = -book_score
        return scores
