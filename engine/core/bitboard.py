# engine/core/bitboard.py
from .constants import WIDTH, HEIGHT, COLUMN_BITS


class InvalidBoardError(ValueError):
    """Raised when an encoded board cannot be replayed as a legal game."""

    def __init__(self, encoded: str, reason: str):
        self.encoded = encoded
        self.reason = reason
        super().__init__(f"Invalid board {encoded!r}: {reason}")


def bottom_mask(col: int) -> int:
    return 1 << (col * COLUMN_BITS)


def top_mask(col: int) -> int:
    return 1 << (col * COLUMN_BITS + (HEIGHT - 1))


def column_mask(col: int) -> int:
    return ((1 << HEIGHT) - 1) << (col * COLUMN_BITS)


def has_alignment(p: int) -> bool:
    """Checks if the bitboard 'p' holds 4 connected pieces."""
    # Horizontal (Shift 7)
    m = p & (p >> COLUMN_BITS)
    if m & (m >> (2 * COLUMN_BITS)): return True
    # Diagonal \ (Shift 6)
    m = p & (p >> (COLUMN_BITS - 1))
    if m & (m >> (2 * (COLUMN_BITS - 1))): return True
    # Diagonal / (Shift 8)
    m = p & (p >> (COLUMN_BITS + 1))
    if m & (m >> (2 * (COLUMN_BITS + 1))): return True
    # Vertical (Shift 1)
    m = p & (p >> 1)
    if m & (m >> 2): return True
    return False


class Bitboard:
    """
    Column-major bitboard, 7 bits per column (6 rows + sentinel).
    Bit 0 of each column is the BOTTOM cell.

    'mask' marks every occupied cell.
    'position' marks the cells of the player whose turn it is.
    """

    def __init__(self, position: int = 0, mask: int = 0, moves_count: int = 0):
        self.position = position
        self.mask = mask
        self.moves_count = moves_count

    @classmethod
    def from_encoded(cls, encoded: str) -> 'Bitboard':
        """
        Replays a move string ('1'..'7', one digit per move).
        Rejects out-of-range digits, moves into full columns and
        any move played after the game was already won.
        """
        board = cls()
        for ch in encoded:
            if not ch.isdigit() or not 1 <= int(ch) <= WIDTH:
                raise InvalidBoardError(encoded, f"column {ch!r} out of range")
            col = int(ch) - 1
            if board.has_winner():
                raise InvalidBoardError(encoded, "game already decided")
            if not board.can_play(col):
                raise InvalidBoardError(encoded, f"column {col + 1} is full")
            board = board.play(col)
        return board

    def can_play(self, col: int) -> bool:
        """Checks if the top cell of the column is empty."""
        return (self.mask & top_mask(col)) == 0

    def play(self, col: int) -> 'Bitboard':
        """
        Returns a NEW Bitboard with the move applied and turn swapped.
        """
        # XOR swap: the opponent's pieces become the 'current' ones
        new_position = self.position ^ self.mask
        new_mask = self.mask | (self.mask + bottom_mask(col))
        return Bitboard(new_position, new_mask, self.moves_count + 1)

    def is_winning_move(self, col: int) -> bool:
        """True if the player to move connects four by playing 'col'."""
        # Fill the first empty cell of the column for the current player
        p = self.position | ((self.mask + bottom_mask(col)) & column_mask(col))
        return has_alignment(p)

    def has_winner(self) -> bool:
        """True if the player who moved last has connected four."""
        return has_alignment(self.position ^ self.mask)

    def key(self) -> int:
        """Unique ID for book lookups: Position + Mask"""
        return self.position + self.mask
