"""N-Rooks and N-Queens placement solvers."""

from .backtracking import (
    bt_queens_count,
    bt_queens_first,
    bt_rooks_count,
    bt_rooks_first,
    iter_placements,
)
from .board import Board, create_board
from .errors import InvalidDimension, SearchTimeout
from .solvers import (
    count_n_queens_solutions,
    count_n_rooks_solutions,
    count_solutions,
    find_n_queens_solution,
    find_n_rooks_solution,
    find_solution,
    iter_solution_boards,
)
from .utils import conflicts_on2, count_conflicts, is_valid_placement

__all__ = [
    "Board",
    "create_board",
    "InvalidDimension",
    "SearchTimeout",
    "bt_rooks_first",
    "bt_rooks_count",
    "bt_queens_first",
    "bt_queens_count",
    "iter_placements",
    "find_solution",
    "count_solutions",
    "iter_solution_boards",
    "find_n_rooks_solution",
    "count_n_rooks_solutions",
    "find_n_queens_solution",
    "count_n_queens_solutions",
    "count_conflicts",
    "conflicts_on2",
    "is_valid_placement",
]
