# engine/core/opening_book.py
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .bitboard import Bitboard
from .constants import BOOK_KEY_SIZE, BOOK_RECORD_SIZE, SCORE_SHIFT

logger = logging.getLogger(__name__)


class OpeningBook:
    """
    Precomputed position scores, keyed by Bitboard.key().
    Scores are from the point of view of the player to move.
    """

    def __init__(self, table: Optional[Dict[int, int]] = None):
        self.table: Dict[int, int] = table if table is not None else {}

    @classmethod
    def open(cls, book_path: Union[str, Path]) -> 'OpeningBook':
        """
        Reads a book file made of 8-byte records:
        7 little-endian key bytes, then 1 byte holding (score + SCORE_SHIFT).
        A trailing partial record is ignored.
        """
        data = Path(book_path).read_bytes()
        table = {}
        usable = len(data) - len(data) % BOOK_RECORD_SIZE
        for offset in range(0, usable, BOOK_RECORD_SIZE):
            key = int.from_bytes(data[offset:offset + BOOK_KEY_SIZE], "little")
            table[key] = data[offset + BOOK_KEY_SIZE] - SCORE_SHIFT

        if usable != len(data):
            logger.warning("Book %s has %d trailing bytes", book_path, len(data) - usable)
        logger.info("Loaded opening book %s (%d positions)", book_path, len(table))
        return cls(table)

    def save(self, book_path: Union[str, Path]) -> None:
        """Writes the book in the same record format read by open()."""
        with open(book_path, "wb") as f:
            for key, score in self.table.items():
                f.write(key.to_bytes(8, "little")[:BOOK_KEY_SIZE])
                f.write(bytes([score + SCORE_SHIFT]))

    def put(self, board: Bitboard, score: int):
        if not 0 <= score + SCORE_SHIFT <= 255:
            raise ValueError(f"Score {score} does not fit in a book record")
        self.table[board.key()] = score

    def score(self, board: Bitboard) -> Optional[int]:
        return self.table.get(board.key())

    def __len__(self) -> int:
        return len(self.table)
