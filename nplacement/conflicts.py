"""Conflict detection on a board snapshot.

Every check reduces to the same question: does a one-dimensional line of
cells (a row, a column, or a diagonal) hold more than one piece? Rooks attack
along rows and columns; queens add the two diagonal families.

Diagonal indexing
-----------------
- Major diagonals run top-left to bottom-right and are identified by
  ``col - row``, ranging over ``-(n-1) .. n-1``.
- Minor diagonals run top-right to bottom-left and are identified by
  ``col + row``, ranging over ``0 .. 2n-2``.

All functions are pure reads of the board's current cells.
"""

from __future__ import annotations

from .board import Board


def major_diagonal_index(row: int, col: int) -> int:
    return col - row


def minor_diagonal_index(row: int, col: int) -> int:
    return col + row


# Rows -----------------------------------------------------------------------

def has_row_conflict_at(board: Board, row: int) -> bool:
    """Return True when ``row`` holds more than one piece. O(n)."""
    return sum(board.row(row)) > 1


def has_any_row_conflicts(board: Board) -> bool:
    """O(n^2)."""
    return any(has_row_conflict_at(board, row) for row in range(board.n))


# Columns --------------------------------------------------------------------

def has_col_conflict_at(board: Board, col: int) -> bool:
    """Return True when ``col`` holds more than one piece. O(n)."""
    return sum(board.column(col)) > 1


def has_any_col_conflicts(board: Board) -> bool:
    return any(has_col_conflict_at(board, col) for col in range(board.n))


# Major diagonals ------------------------------------------------------------

def has_major_diagonal_conflict_at(board: Board, diag_id: int) -> bool:
    """Return True when the major diagonal ``col - row == diag_id`` holds more than one piece.

    Walks rows top to bottom at ``col = diag_id + row`` and skips cells that
    fall off the board, so ids outside the valid range see no cells at all.
    """
    n = board.n
    total = 0
    for row in range(n):
        col = diag_id + row
        if 0 <= col < n:
            total += board.get(row, col)
    return total > 1


def has_any_major_diagonal_conflicts(board: Board) -> bool:
    n = board.n
    return any(has_major_diagonal_conflict_at(board, diag_id) for diag_id in range(-(n - 1), n))


# Minor diagonals ------------------------------------------------------------

def has_minor_diagonal_conflict_at(board: Board, diag_id: int) -> bool:
    """Return True when the minor diagonal ``col + row == diag_id`` holds more than one piece."""
    n = board.n
    total = 0
    for row in range(n):
        col = diag_id - row
        if 0 <= col < n:
            total += board.get(row, col)
    return total > 1


def has_any_minor_diagonal_conflicts(board: Board) -> bool:
    return any(has_minor_diagonal_conflict_at(board, diag_id) for diag_id in range(2 * board.n - 1))


# Piece rules ----------------------------------------------------------------

def has_any_rooks_conflicts(board: Board) -> bool:
    return has_any_row_conflicts(board) or has_any_col_conflicts(board)


def has_rook_conflicts_on(board: Board, row: int, col: int) -> bool:
    """Return True when the row or column through ``(row, col)`` is contested."""
    return has_row_conflict_at(board, row) or has_col_conflict_at(board, col)


def has_queen_conflicts_on(board: Board, row: int, col: int) -> bool:
    """Return True when any of the four lines through ``(row, col)`` is contested.

    Used for incremental pruning: the caller places a queen on the cell and
    asks whether it now shares a row, column or diagonal with another piece.
    """
    return (
        has_rook_conflicts_on(board, row, col)
        or has_major_diagonal_conflict_at(board, major_diagonal_index(row, col))
        or has_minor_diagonal_conflict_at(board, minor_diagonal_index(row, col))
    )


def has_any_queens_conflicts(board: Board) -> bool:
    return (
        has_any_rooks_conflicts(board)
        or has_any_major_diagonal_conflicts(board)
        or has_any_minor_diagonal_conflicts(board)
    )
