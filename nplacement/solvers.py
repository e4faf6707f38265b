"""Library-level entry points returning boards and counts.

These wrap the ``bt_*`` backtracking solvers with input validation and turn
their tuple results into plain values:

- find functions return the solution as a board snapshot (list of 0/1 rows),
  or ``None`` when the size admits no placement. ``n = 0`` returns ``[]``,
  the empty board, which is a solution and therefore not ``None``.
- count functions return an ``int``.

A search that hits ``time_limit`` or ``should_stop`` raises
:class:`~nplacement.errors.SearchTimeout` rather than returning a partial
answer.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional

from .backtracking import (
    CHECKERS,
    PIECES,
    SearchStats,
    bt_queens_count,
    bt_queens_first,
    bt_rooks_count,
    bt_rooks_first,
    iter_placements,
)
from .board import Matrix, validate_dimension
from .errors import SearchTimeout
from .utils import placement_to_board

_FIRST = {"rooks": bt_rooks_first, "queens": bt_queens_first}
_COUNT = {"rooks": bt_rooks_count, "queens": bt_queens_count}


def _validate(piece: str, n: object, checker: str) -> int:
    if piece not in PIECES:
        raise ValueError(f"Unknown piece: {piece!r}. Allowed: {', '.join(PIECES)}")
    if checker not in CHECKERS:
        raise ValueError(f"Unknown checker: {checker!r}. Allowed: {', '.join(CHECKERS)}")
    return validate_dimension(n)


def find_solution(
    piece: str,
    n: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
    should_stop: Optional[Callable[[], bool]] = None,
) -> Optional[Matrix]:
    """Return the first non-attacking placement of ``n`` pieces as a board snapshot.

    Raises
    ------
    InvalidDimension
        If ``n`` is not a non-negative integer.
    SearchTimeout
        If the search was aborted before finding a placement or proving
        there is none.
    """
    size = _validate(piece, n, checker)
    placement, nodes, elapsed, timeout = _FIRST[piece](
        size, time_limit=time_limit, checker=checker, should_stop=should_stop
    )
    if timeout:
        raise SearchTimeout(f"Search for one {size}-{piece} placement aborted after {elapsed:.3f}s", nodes, elapsed)
    if placement is None:
        return None
    return placement_to_board(placement).snapshot()


def count_solutions(
    piece: str,
    n: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
    should_stop: Optional[Callable[[], bool]] = None,
) -> int:
    """Return the number of non-attacking placements of ``n`` pieces."""
    size = _validate(piece, n, checker)
    count, nodes, elapsed, timeout = _COUNT[piece](
        size, time_limit=time_limit, checker=checker, should_stop=should_stop
    )
    if timeout:
        raise SearchTimeout(
            f"Counting {size}-{piece} placements aborted after {elapsed:.3f}s ({count} found so far)",
            nodes,
            elapsed,
        )
    return count


def iter_solution_boards(
    piece: str,
    n: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
) -> Iterator[Matrix]:
    """Lazily yield every solution as a board snapshot, in lexicographic order."""
    size = _validate(piece, n, checker)
    stats = SearchStats()
    for placement in iter_placements(size, piece, checker=checker, time_limit=time_limit, stats=stats):
        yield placement_to_board(placement).snapshot()
    if stats.timed_out:
        raise SearchTimeout(
            f"Enumeration of {size}-{piece} placements aborted after {stats.elapsed:.3f}s",
            stats.nodes,
            stats.elapsed,
        )


def find_n_rooks_solution(n: int, time_limit: Optional[float] = None) -> Optional[Matrix]:
    """Return an n x n board with n rooks, none attacking another."""
    return find_solution("rooks", n, time_limit=time_limit)


def count_n_rooks_solutions(n: int, time_limit: Optional[float] = None) -> int:
    return count_solutions("rooks", n, time_limit=time_limit)


def find_n_queens_solution(n: int, time_limit: Optional[float] = None) -> Optional[Matrix]:
    """Return an n x n board with n non-attacking queens, or None for n in {2, 3}."""
    return find_solution("queens", n, time_limit=time_limit)


def count_n_queens_solutions(n: int, time_limit: Optional[float] = None) -> int:
    return count_solutions("queens", n, time_limit=time_limit)
