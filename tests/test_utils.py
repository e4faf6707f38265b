"""Tests for placement helpers."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nplacement.board import Board, create_board
from nplacement.utils import (
    attacking_pairs,
    board_to_placement,
    conflicts_on2,
    count_conflicts,
    is_valid_placement,
    occupied_cells,
    placement_to_board,
)


class ConflictCountTests(unittest.TestCase):
    def test_counts_agree_on_random_placements(self):
        rng = random.Random(42)
        for _ in range(300):
            n = rng.randint(0, 9)
            placement = [rng.randrange(n) for _ in range(n)] if n else []
            for piece in ("rooks", "queens"):
                with self.subTest(placement=placement, piece=piece):
                    self.assertEqual(count_conflicts(placement, piece), conflicts_on2(placement, piece))

    def test_known_values(self):
        # all on one column: 3 pairs share it
        self.assertEqual(count_conflicts([0, 0, 0], "rooks"), 3)
        # main diagonal: no rook clash, 3 queen pairs on the same major diagonal
        self.assertEqual(count_conflicts([0, 1, 2], "rooks"), 0)
        self.assertEqual(count_conflicts([0, 1, 2], "queens"), 3)

    def test_pairwise_count_matches_board_scan(self):
        placement = [0, 2, 1, 3]
        board = placement_to_board(placement)
        self.assertEqual(len(attacking_pairs(board, "queens")), count_conflicts(placement, "queens"))


class ValidityTests(unittest.TestCase):
    def test_valid_and_invalid(self):
        self.assertTrue(is_valid_placement([1, 3, 0, 2], "queens"))
        self.assertFalse(is_valid_placement([0, 1, 2, 3], "queens"))
        self.assertTrue(is_valid_placement([0, 1, 2, 3], "rooks"))
        self.assertFalse(is_valid_placement([0, 0], "rooks"))

    def test_range_and_type_checks(self):
        self.assertFalse(is_valid_placement([0, 4, 1, 3], "rooks"))
        self.assertFalse(is_valid_placement([-1, 0], "rooks"))
        self.assertFalse(is_valid_placement([0.0, 1], "rooks"))

    def test_empty_placement_is_valid(self):
        self.assertTrue(is_valid_placement([], "queens"))


class ConversionTests(unittest.TestCase):
    def test_placement_round_trip(self):
        board = placement_to_board([2, 0, 3, 1])
        self.assertEqual(board.snapshot(), [[0, 0, 1, 0], [1, 0, 0, 0], [0, 0, 0, 1], [0, 1, 0, 0]])
        self.assertEqual(board_to_placement(board), [2, 0, 3, 1])

    def test_board_without_one_piece_per_row(self):
        self.assertIsNone(board_to_placement(create_board([[1, 1], [0, 0]])))
        self.assertIsNone(board_to_placement(Board(2)))
        self.assertEqual(board_to_placement(Board(0)), [])

    def test_occupied_cells_row_major(self):
        board = create_board([[0, 1], [1, 1]])
        self.assertEqual(occupied_cells(board), [(0, 1), (1, 0), (1, 1)])

    def test_attacking_pairs_by_piece(self):
        board = create_board([[1, 0], [0, 1]])
        self.assertEqual(attacking_pairs(board, "rooks"), [])
        self.assertEqual(attacking_pairs(board, "queens"), [((0, 0), (1, 1))])


if __name__ == "__main__":
    unittest.main()
