"""Utility helpers shared by the solvers, the analysis code and the tests.

Two encodings are in play:

- a *placement* is a 1D list where ``placement[row] = col``;
- a *board* is a :class:`~nplacement.board.Board` of 0/1 cells.

This module converts between them and provides two independent ways of
counting attacking pairs, so that solver output can be validated without
going through the code that produced it.
"""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from .board import Board

Cell = Tuple[int, int]


def _pairs(counter: Counter) -> int:
    total = 0
    for count in counter.values():
        if count > 1:
            total += count * (count - 1) // 2
    return total


def count_conflicts(placement: Sequence[int], piece: str = "queens") -> int:
    """Compute the number of attacking pairs in O(N).

    Counts pieces per column (and, for queens, per diagonal id) with
    ``Counter`` and sums ``k*(k-1)/2`` over every crowded line. Rows never
    clash because the encoding holds one piece per row.
    """
    col_count: Counter = Counter(placement)
    total = _pairs(col_count)
    if piece == "queens":
        major: Counter = Counter(col - row for row, col in enumerate(placement))
        minor: Counter = Counter(col + row for row, col in enumerate(placement))
        total += _pairs(major) + _pairs(minor)
    return total


def conflicts_on2(placement: Sequence[int], piece: str = "queens") -> int:
    """Compute the number of attacking pairs in O(N^2).

    Reference implementation for validation. Prefer ``count_conflicts`` elsewhere.
    """
    n = len(placement)
    conflicts_count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if placement[i] == placement[j]:
                conflicts_count += 1
            elif piece == "queens" and abs(placement[i] - placement[j]) == abs(i - j):
                conflicts_count += 1
    return conflicts_count


def is_valid_placement(placement: Sequence[int], piece: str = "queens") -> bool:
    """Return True if ``placement`` is a complete non-attacking solution.

    Contract
    - Input: sequence of length N where placement[row] = col (0-based indices)
    - Valid if: every column is an int in [0, N) and no pair attacks
    - The empty placement is the (only) solution for N = 0
    """
    n = len(placement)
    for col in placement:
        if isinstance(col, bool) or not isinstance(col, int):
            return False
        if col < 0 or col >= n:
            return False
    return count_conflicts(placement, piece) == 0


def placement_to_board(placement: Sequence[int]) -> Board:
    """Materialize a complete placement on a fresh board."""
    board = Board(len(placement))
    for row, col in enumerate(placement):
        board.toggle(row, col)
    return board


def board_to_placement(board: Board) -> Optional[List[int]]:
    """Return ``placement`` when every row holds exactly one piece, else None."""
    placement: List[int] = []
    for row in range(board.n):
        cells = board.row(row)
        if sum(cells) != 1:
            return None
        placement.append(cells.index(1))
    return placement


def occupied_cells(board: Board) -> List[Cell]:
    return [(row, col) for row in range(board.n) for col in range(board.n) if board.get(row, col)]


def attacking_pairs(board: Board, piece: str = "queens") -> List[Tuple[Cell, Cell]]:
    """List every pair of occupied cells that attack each other.

    Brute-force pairwise scan, independent of the line-based conflict model.
    """
    pairs = []
    for (r1, c1), (r2, c2) in combinations(occupied_cells(board), 2):
        attack = r1 == r2 or c1 == c2
        if piece == "queens" and abs(r1 - r2) == abs(c1 - c2):
            attack = True
        if attack:
            pairs.append(((r1, c1), (r2, c2)))
    return pairs
