"""Square occupancy grid used by the conflict model and for solution output.

A board is an ``n x n`` matrix of 0/1 values (1 = a piece sits on the cell).
It is created either empty from a size or from a pre-populated matrix, and
the only mutation is toggling a single cell. The grid is never resized.
"""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC
import numbers
from typing import List, Sequence, Union

from .errors import InvalidDimension

Matrix = List[List[int]]


def validate_dimension(n: object) -> int:
    """Return ``n`` if it is a valid board size, raise ``InvalidDimension`` otherwise."""
    # bool is an int subclass but never a meaningful size
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidDimension(f"Board size must be a non-negative integer, got {n!r}")
    if n < 0:
        raise InvalidDimension(f"Board size must be non-negative, got {n}")
    return int(n)


def make_empty_matrix(n: int) -> Matrix:
    """Return an ``n x n`` matrix of zeros."""
    return [[0] * n for _ in range(n)]


def _is_row_sequence(value: object) -> bool:
    return isinstance(value, SequenceABC) and not isinstance(value, (str, bytes))


def _is_cell_value(value: object) -> bool:
    # 0/1 only; True and 0.0 compare equal but are not cells
    return not isinstance(value, bool) and isinstance(value, numbers.Integral) and value in (0, 1)


class Board:
    """Mutable N x N grid of binary cells.

    Parameters
    ----------
    n : int
        Board dimension (``n >= 0``).

    Notes
    -----
    Use :meth:`from_matrix` (or :func:`create_board`) to build a board from
    existing contents; the matrix is copied and validated.
    """

    __slots__ = ("n", "_cells")

    def __init__(self, n: int):
        self.n = validate_dimension(n)
        self._cells = make_empty_matrix(self.n)

    @classmethod
    def empty(cls, n: int) -> "Board":
        return cls(n)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> "Board":
        """Build a board from a square 0/1 matrix.

        Raises
        ------
        InvalidDimension
            If the matrix is not a sequence of rows, is not square, or holds
            values other than the integers 0 and 1.
        """
        if hasattr(matrix, "tolist"):
            matrix = matrix.tolist()
        if not _is_row_sequence(matrix):
            raise InvalidDimension(f"Board matrix must be a sequence of rows, got {matrix!r}")
        n = len(matrix)
        board = cls(n)
        for row_index, row in enumerate(matrix):
            if not _is_row_sequence(row):
                raise InvalidDimension(f"Board matrix row {row_index} is not a sequence: {row!r}")
            if len(row) != n:
                raise InvalidDimension(
                    f"Board matrix must be square: row {row_index} has {len(row)} cells, expected {n}"
                )
            for col_index, value in enumerate(row):
                if not _is_cell_value(value):
                    raise InvalidDimension(
                        f"Board cells must be 0 or 1, got {value!r} at ({row_index}, {col_index})"
                    )
                board._cells[row_index][col_index] = int(value)
        return board

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.n and 0 <= col < self.n

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.n}x{self.n} board")

    def get(self, row: int, col: int) -> int:
        self._check_bounds(row, col)
        return self._cells[row][col]

    def toggle(self, row: int, col: int) -> None:
        """Flip the cell at ``(row, col)`` between 0 and 1."""
        self._check_bounds(row, col)
        self._cells[row][col] = 1 - self._cells[row][col]

    def row(self, row: int) -> List[int]:
        """Return a copy of one row (left to right)."""
        if not 0 <= row < self.n:
            raise IndexError(f"Row {row} is outside a {self.n}x{self.n} board")
        return list(self._cells[row])

    def column(self, col: int) -> List[int]:
        """Return a copy of one column (top to bottom)."""
        if not 0 <= col < self.n:
            raise IndexError(f"Column {col} is outside a {self.n}x{self.n} board")
        return [cells[col] for cells in self._cells]

    def rows(self) -> Matrix:
        return self.snapshot()

    def snapshot(self) -> Matrix:
        """Return the grid as a fresh row-major list of lists."""
        return [list(cells) for cells in self._cells]

    def piece_count(self) -> int:
        return sum(sum(cells) for cells in self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.n == other.n and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Board(n={self.n}, cells={self._cells!r})"


def create_board(source: Union[int, Sequence[Sequence[int]]]) -> Board:
    """Create an empty board from a size, or a populated board from a matrix."""
    if isinstance(source, numbers.Integral) and not isinstance(source, bool):
        return Board.empty(source)
    if _is_row_sequence(source) or hasattr(source, "tolist"):
        return Board.from_matrix(source)
    raise InvalidDimension(f"Expected a board size or a square matrix, got {source!r}")
