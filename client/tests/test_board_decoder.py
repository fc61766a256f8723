import unittest
from engine.core.constants import HEIGHT, WIDTH
from client.app.models.enums import Cell
from client.app.services.board_decoder import (
    EncodedBoardError,
    decode,
    render_board,
    render_scores,
)


def column_bottom_up(grid, col):
    return [grid[r][col] for r in range(HEIGHT - 1, -1, -1)]


class TestBoardDecoder(unittest.TestCase):
    def test_empty_board(self):
        grid = decode("")
        self.assertEqual(len(grid), HEIGHT)
        for row in grid:
            self.assertEqual(row, [Cell.EMPTY] * WIDTH)

    def test_gravity_stacks_pieces(self):
        grid = decode("11")
        self.assertEqual(
            column_bottom_up(grid, 0),
            [Cell.PLAYER_ONE, Cell.PLAYER_TWO, Cell.EMPTY, Cell.EMPTY, Cell.EMPTY, Cell.EMPTY],
        )
        for col in range(1, WIDTH):
            self.assertEqual(column_bottom_up(grid, col), [Cell.EMPTY] * HEIGHT)

    def test_turn_parity_by_index(self):
        grid = decode("1234567")
        bottom = grid[HEIGHT - 1]
        for col in (0, 2, 4, 6):
            self.assertEqual(bottom[col], Cell.PLAYER_ONE)
        for col in (1, 3, 5):
            self.assertEqual(bottom[col], Cell.PLAYER_TWO)
        # Nothing above the bottom row
        for row in grid[:HEIGHT - 1]:
            self.assertEqual(row, [Cell.EMPTY] * WIDTH)

    def test_decoding_is_deterministic(self):
        first = decode("4453")
        second = decode("4453")
        self.assertEqual(first, second)
        self.assertIsNot(first, second)
        # Mutating one result does not leak into the next decode
        first[HEIGHT - 1][3] = Cell.EMPTY
        self.assertEqual(decode("4453"), second)

    def test_full_board(self):
        # Column-by-column fill, each column alternates players
        encoded = "".join(str(c) * HEIGHT for c in range(1, WIDTH + 1))
        grid = decode(encoded)
        self.assertTrue(all(cell != Cell.EMPTY for row in grid for cell in row))

    def test_out_of_range_digit_raises(self):
        for encoded in ["0", "8", "129"]:
            with self.subTest(encoded=encoded):
                with self.assertRaises(EncodedBoardError):
                    decode(encoded)

    def test_non_digit_raises(self):
        with self.assertRaises(EncodedBoardError) as ctx:
            decode("12x")
        self.assertEqual(ctx.exception.index, 2)

    def test_column_overflow_raises_with_partial_grid(self):
        encoded = "3" * (HEIGHT + 1)
        with self.assertRaises(EncodedBoardError) as ctx:
            decode(encoded)

        err = ctx.exception
        self.assertEqual(err.index, HEIGHT)
        # Every piece placed before the overflow is kept
        self.assertEqual(
            column_bottom_up(err.grid, 2),
            [Cell.PLAYER_ONE, Cell.PLAYER_TWO] * (HEIGHT // 2),
        )

    def test_over_capacity_string_raises(self):
        encoded = "".join(str(c) * HEIGHT for c in range(1, WIDTH + 1)) + "1"
        with self.assertRaises(EncodedBoardError) as ctx:
            decode(encoded)
        self.assertEqual(ctx.exception.index, WIDTH * HEIGHT)

    def test_render_board(self):
        text = render_board(decode("12"))
        lines = text.split("\n")
        self.assertEqual(lines[0], " 1 2 3 4 5 6 7")
        self.assertEqual(lines[-1], "|X|O|.|.|.|.|.|")
        self.assertEqual(len(lines), HEIGHT + 1)

    def test_render_scores(self):
        self.assertEqual(render_scores([1, None, -3, 0, None, None, 2]), " 1 - -3 0 - - 2")


if __name__ == '__main__':
    unittest.main()
