"""Tests for the Board container."""

from pathlib import Path
import sys
import unittest

import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nplacement.board import Board, create_board, make_empty_matrix
from nplacement.errors import InvalidDimension


class BoardConstructionTests(unittest.TestCase):
    def test_empty_board_from_size(self):
        board = create_board(3)
        self.assertEqual(board.n, 3)
        self.assertEqual(board.snapshot(), [[0, 0, 0], [0, 0, 0], [0, 0, 0]])
        self.assertEqual(board.piece_count(), 0)

    def test_zero_board(self):
        board = create_board(0)
        self.assertEqual(board.n, 0)
        self.assertEqual(board.snapshot(), [])

    def test_board_from_matrix_infers_dimension(self):
        board = create_board([[1, 0], [0, 1]])
        self.assertEqual(board.n, 2)
        self.assertEqual(board.snapshot(), [[1, 0], [0, 1]])
        self.assertEqual(board.piece_count(), 2)

    def test_matrix_is_copied(self):
        matrix = [[0, 1], [1, 0]]
        board = Board.from_matrix(matrix)
        matrix[0][0] = 1
        self.assertEqual(board.get(0, 0), 0)

    def test_invalid_sizes_are_rejected(self):
        for bad in (-1, 2.5, "3", True, None):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidDimension):
                    create_board(bad)

    def test_non_square_matrix_is_rejected(self):
        with self.assertRaises(InvalidDimension):
            create_board([[0, 1], [0]])
        with self.assertRaises(InvalidDimension):
            create_board([[0, 1, 0], [0, 0, 0]])

    def test_non_binary_matrix_is_rejected(self):
        with self.assertRaises(InvalidDimension):
            create_board([[0, 2], [0, 0]])

    def test_rows_must_be_sequences(self):
        for bad in ([0, 1], [[0, 1], 5], [[0, 1], "01"], ["0", "1"]):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidDimension):
                    create_board(bad)

    def test_bool_and_float_cells_are_rejected(self):
        for bad in ([[True, 0], [0, 0]], [[0, 0], [0, 0.0]], [[1.0]]):
            with self.subTest(bad=bad):
                with self.assertRaises(InvalidDimension):
                    create_board(bad)

    def test_numpy_sizes_and_arrays(self):
        board = create_board(np.int64(3))
        self.assertEqual(board.n, 3)
        self.assertIs(type(board.n), int)

        board = create_board(np.array([[0, 1], [1, 0]]))
        self.assertEqual(board.snapshot(), [[0, 1], [1, 0]])
        self.assertIs(type(board.get(0, 1)), int)

        with self.assertRaises(InvalidDimension):
            create_board(np.array([0, 1]))
        with self.assertRaises(InvalidDimension):
            create_board(np.array([[0, 2], [0, 0]]))

    def test_invalid_dimension_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Board(-3)


class BoardMutationTests(unittest.TestCase):
    def test_toggle_flips_a_single_cell(self):
        board = Board(3)
        board.toggle(1, 2)
        self.assertEqual(board.get(1, 2), 1)
        self.assertEqual(board.piece_count(), 1)
        board.toggle(1, 2)
        self.assertEqual(board.get(1, 2), 0)
        self.assertEqual(board, Board(3))

    def test_toggle_out_of_bounds(self):
        board = Board(2)
        with self.assertRaises(IndexError):
            board.toggle(2, 0)
        with self.assertRaises(IndexError):
            board.toggle(0, -1)

    def test_snapshot_is_detached(self):
        board = Board(2)
        snap = board.snapshot()
        snap[0][0] = 1
        self.assertEqual(board.get(0, 0), 0)

    def test_rows_and_columns(self):
        board = create_board([[1, 0, 0], [0, 0, 1], [0, 1, 0]])
        self.assertEqual(board.row(1), [0, 0, 1])
        self.assertEqual(board.column(1), [0, 0, 1])
        self.assertEqual(board.rows(), board.snapshot())
        self.assertTrue(board.in_bounds(2, 2))
        self.assertFalse(board.in_bounds(3, 0))

    def test_make_empty_matrix_rows_are_independent(self):
        matrix = make_empty_matrix(2)
        matrix[0][0] = 1
        self.assertEqual(matrix[1][0], 0)


if __name__ == "__main__":
    unittest.main()
