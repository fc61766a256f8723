import unittest
from engine.core.bitboard import Bitboard, InvalidBoardError
from engine.core.constants import HEIGHT, WIDTH


class TestBitboard(unittest.TestCase):
    def test_empty_encoding(self):
        board = Bitboard.from_encoded("")
        self.assertEqual(board.moves_count, 0)
        self.assertEqual(board.key(), 0)
        self.assertFalse(board.has_winner())

    def test_out_of_range_columns_rejected(self):
        for encoded in ["0", "8", "4a", "1 2"]:
            with self.subTest(encoded=encoded):
                with self.assertRaises(InvalidBoardError):
                    Bitboard.from_encoded(encoded)

    def test_full_column_rejected(self):
        # Alternate players so the column never holds 4 of a kind
        Bitboard.from_encoded("1" * HEIGHT)
        with self.assertRaises(InvalidBoardError) as ctx:
            Bitboard.from_encoded("1" * (HEIGHT + 1))
        self.assertIn("full", ctx.exception.reason)

    def test_can_play_tracks_column_height(self):
        board = Bitboard.from_encoded("1" * HEIGHT)
        self.assertFalse(board.can_play(0))
        for col in range(1, WIDTH):
            self.assertTrue(board.can_play(col))

    def test_vertical_winning_move(self):
        """P1 has 3 stacked in column 1, P2 has 3 in column 2."""
        board = Bitboard.from_encoded("121212")
        self.assertTrue(board.is_winning_move(0))
        self.assertFalse(board.is_winning_move(2))
        # Column 2 belongs to P2, not to the player to move
        self.assertFalse(board.is_winning_move(1))

    def test_horizontal_winning_move(self):
        board = Bitboard.from_encoded("112233")
        self.assertTrue(board.is_winning_move(3))

    def test_moves_after_win_rejected(self):
        board = Bitboard.from_encoded("1212121")
        self.assertTrue(board.has_winner())
        with self.assertRaises(InvalidBoardError) as ctx:
            Bitboard.from_encoded("12121212")
        self.assertIn("decided", ctx.exception.reason)

    def test_play_returns_new_board(self):
        board = Bitboard.from_encoded("4")
        child = board.play(3)
        self.assertEqual(board.moves_count, 1)
        self.assertEqual(child.moves_count, 2)
        self.assertNotEqual(board.key(), child.key())

    def test_same_position_same_key(self):
        # Transposed move orders reach the same position
        self.assertEqual(Bitboard.from_encoded("1234").key(), Bitboard.from_encoded("3214").key())
        self.assertNotEqual(Bitboard.from_encoded("12").key(), Bitboard.from_encoded("21").key())


if __name__ == '__main__':
    unittest.main()
