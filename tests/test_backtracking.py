"""Tests for the iterative backtracking engine."""

from math import factorial
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nplacement.backtracking import (
    CHECKERS,
    SearchStats,
    bt_queens_count,
    bt_queens_first,
    bt_rooks_count,
    bt_rooks_first,
    iter_placements,
)
from nplacement.utils import is_valid_placement

QUEENS_COUNTS = {0: 1, 1: 1, 2: 0, 3: 0, 4: 2, 5: 10, 6: 4, 7: 40, 8: 92}


class RookSearchTests(unittest.TestCase):
    def test_count_matches_factorial(self):
        for n in range(0, 7):
            with self.subTest(n=n):
                count, nodes, elapsed, timeout = bt_rooks_count(n)
                self.assertEqual(count, factorial(n))
                self.assertFalse(timeout)
                self.assertGreaterEqual(elapsed, 0.0)

    def test_first_is_main_diagonal(self):
        placement, nodes, _, timeout = bt_rooks_first(5)
        self.assertEqual(placement, [0, 1, 2, 3, 4])
        self.assertEqual(nodes, 5)
        self.assertFalse(timeout)

    def test_count_visits_every_tree_node(self):
        # 3 + 3*2 + 3*2*1 nodes below the root
        _, nodes, _, _ = bt_rooks_count(3)
        self.assertEqual(nodes, 15)


class QueenSearchTests(unittest.TestCase):
    def test_known_counts(self):
        for n, expected in QUEENS_COUNTS.items():
            with self.subTest(n=n):
                count, _, _, timeout = bt_queens_count(n)
                self.assertEqual(count, expected)
                self.assertFalse(timeout)

    def test_first_placements_are_lexicographic(self):
        self.assertEqual(bt_queens_first(4)[0], [1, 3, 0, 2])
        self.assertEqual(bt_queens_first(5)[0], [0, 2, 4, 1, 3])
        self.assertEqual(bt_queens_first(8)[0], [0, 4, 7, 5, 2, 6, 1, 3])

    def test_no_solution_sizes(self):
        for n in (2, 3):
            with self.subTest(n=n):
                placement, nodes, _, timeout = bt_queens_first(n)
                self.assertIsNone(placement)
                self.assertFalse(timeout)
                self.assertGreater(nodes, 0)

    def test_trivial_sizes(self):
        self.assertEqual(bt_queens_first(0)[0], [])
        self.assertEqual(bt_queens_first(1)[0], [0])

    def test_first_placements_are_valid(self):
        for n in (1, 4, 5, 6, 7, 8, 10):
            with self.subTest(n=n):
                placement = bt_queens_first(n)[0]
                self.assertTrue(is_valid_placement(placement, "queens"))

    def test_pruning_shrinks_the_tree(self):
        _, rook_nodes, _, _ = bt_rooks_count(6)
        _, queen_nodes, _, _ = bt_queens_count(6)
        self.assertLess(queen_nodes, rook_nodes)


class CheckerEquivalenceTests(unittest.TestCase):
    """Board scans and incremental masks must drive an identical search."""

    def test_same_results_and_nodes(self):
        for n in range(0, 7):
            for solver in (bt_rooks_first, bt_rooks_count, bt_queens_first, bt_queens_count):
                with self.subTest(n=n, solver=solver.__name__):
                    masks = solver(n, checker="masks")
                    board = solver(n, checker="board")
                    self.assertEqual(masks[0], board[0])
                    self.assertEqual(masks[1], board[1])

    def test_same_enumeration_order(self):
        self.assertEqual(
            list(iter_placements(6, "queens", checker="masks")),
            list(iter_placements(6, "queens", checker="board")),
        )

    def test_unknown_labels(self):
        with self.assertRaises(ValueError):
            bt_queens_first(4, checker="bitboard")
        with self.assertRaises(ValueError):
            list(iter_placements(4, "bishops"))
        self.assertEqual(CHECKERS, ("masks", "board"))


class EnumerationTests(unittest.TestCase):
    def test_all_four_queens_solutions(self):
        self.assertEqual(list(iter_placements(4, "queens")), [[1, 3, 0, 2], [2, 0, 3, 1]])

    def test_rook_placements_are_permutations_in_order(self):
        placements = list(iter_placements(3, "rooks"))
        self.assertEqual(
            placements,
            [[0, 1, 2], [0, 2, 1], [1, 0, 2], [1, 2, 0], [2, 0, 1], [2, 1, 0]],
        )

    def test_zero_board_has_one_empty_placement(self):
        stats = SearchStats()
        self.assertEqual(list(iter_placements(0, "queens", stats=stats)), [[]])
        self.assertEqual(stats.nodes, 0)
        self.assertFalse(stats.timed_out)

    def test_yielded_lists_are_independent(self):
        placements = list(iter_placements(5, "queens"))
        self.assertEqual(len(placements), 10)
        self.assertEqual(len({tuple(p) for p in placements}), 10)

    def test_stats_are_filled(self):
        stats = SearchStats()
        list(iter_placements(5, "queens", stats=stats))
        self.assertEqual(stats.nodes, bt_queens_count(5)[1])
        self.assertGreaterEqual(stats.elapsed, 0.0)


class AbortTests(unittest.TestCase):
    def test_should_stop_aborts_count(self):
        count, nodes, _, timeout = bt_queens_count(10, should_stop=lambda: True)
        self.assertTrue(timeout)
        self.assertEqual(count, 0)
        self.assertEqual(nodes, 0)

    def test_should_stop_aborts_first(self):
        placement, _, _, timeout = bt_rooks_first(6, should_stop=lambda: True)
        self.assertIsNone(placement)
        self.assertTrue(timeout)

    def test_partial_count_on_abort(self):
        calls = {"n": 0}

        def stop_after_many_steps():
            calls["n"] += 1
            return calls["n"] > 200

        count, nodes, _, timeout = bt_rooks_count(6, should_stop=stop_after_many_steps)
        self.assertTrue(timeout)
        self.assertGreater(count, 0)
        self.assertLess(count, factorial(6))
        self.assertLessEqual(nodes, 200)

    def test_expired_time_limit(self):
        count, _, _, timeout = bt_queens_count(12, time_limit=0.0)
        self.assertTrue(timeout)
        self.assertLess(count, 14200)

    def test_generous_time_limit(self):
        count, _, _, timeout = bt_queens_count(6, time_limit=60.0)
        self.assertEqual(count, 4)
        self.assertFalse(timeout)


if __name__ == "__main__":
    unittest.main()
