"""Backtracking solvers for the N-Rooks and N-Queens problems.

This module implements iterative (non-recursive) depth-first backtracking and
exposes four entry points plus a lazy enumerator:

- bt_rooks_first(size, time_limit=None, checker="masks"): first placement of
    ``size`` non-attacking rooks.
- bt_rooks_count(size, time_limit=None, checker="masks"): number of such
    placements, counted by exhaustive search.
- bt_queens_first(size, ...) / bt_queens_count(size, ...): the same for queens.
- iter_placements(size, piece, ...): generator over every complete placement
    in lexicographic order.

The ``bt_*_first`` functions return a tuple
        (placement: Optional[List[int]], nodes_explored: int, elapsed_seconds: float, timeout: bool)
and the ``bt_*_count`` functions return
        (count: int, nodes_explored: int, elapsed_seconds: float, timeout: bool)

Implementation overview
-----------------------
- State representation: a placement is a list where ``placement[row] = col``
    puts a piece on (row, col). Pieces are placed one row at a time, so row
    uniqueness holds by construction.
- Search strategy: depth-first search driven by an explicit stack of decision
    frames, avoiding Python recursion limits for large boards.
- Constraint checking is injected through a checker object:
    - ``masks``: boolean arrays ``col_used[c]``, ``major_used[c-r+offset]`` and
      ``minor_used[r+c]`` give O(1) checks.
    - ``board``: the partial placement lives on a :class:`Board` and each
      candidate is tested by toggling it on and querying the conflict model,
      scanning whole rows, columns and diagonals.
    Both checkers accept exactly the same candidates, so the results, the
    enumeration order and the node counts are identical.

Contract (public API)
---------------------
- Input: ``size >= 0``; optional ``time_limit`` in seconds and ``should_stop``
    callable polled once per search step.
- ``size == 0`` has exactly one (empty) placement.
- Determinism: candidate columns are tried in ascending order at every row,
    so the first placement is the lexicographically smallest one.
- Timeouts: when the limit is exceeded the search stops immediately and the
    ``timeout`` flag is set; find-first returns ``None`` and counts report the
    leaves seen so far.
- Nodes explored semantics: incremented each time a legal candidate is placed
    on the board, i.e. once per search-tree node below the root.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Iterator, List, Optional, Tuple

from .board import Board
from .conflicts import has_queen_conflicts_on, has_rook_conflicts_on

PIECES = ("rooks", "queens")
CHECKERS = ("masks", "board")

FirstResult = Tuple[Optional[List[int]], int, float, bool]
CountResult = Tuple[int, int, float, bool]


@dataclass
class _Frame:
    """Mutable stack frame capturing the state at a decision level."""

    row: int
    candidates: List[int]
    next_index: int = 0


@dataclass
class SearchStats:
    """Counters filled in by :func:`iter_placements` as the search advances."""

    nodes: int = 0
    elapsed: float = 0.0
    timed_out: bool = False


class _MaskChecker:
    """Incremental column/diagonal occupancy masks."""

    def __init__(self, size: int, diagonals: bool):
        self.size = size
        self.diagonals = diagonals
        # Shift index so the range [-size+1, size-1] maps to [0, 2*size-2].
        self.offset = size - 1
        self.col_used = [False] * size
        self.major_used = [False] * max(0, 2 * size - 1)
        self.minor_used = [False] * max(0, 2 * size - 1)

    def is_free(self, row: int, col: int) -> bool:
        if self.col_used[col]:
            return False
        if not self.diagonals:
            return True
        return not self.major_used[col - row + self.offset] and not self.minor_used[row + col]

    def place(self, row: int, col: int) -> None:
        self._mark(row, col, True)

    def remove(self, row: int, col: int) -> None:
        self._mark(row, col, False)

    def _mark(self, row: int, col: int, value: bool) -> None:
        self.col_used[col] = value
        if self.diagonals:
            self.major_used[col - row + self.offset] = value
            self.minor_used[row + col] = value


class _BoardChecker:
    """Pruning by full-line scans of a board that mirrors the partial placement."""

    def __init__(self, size: int, diagonals: bool):
        self.board = Board(size)
        self._conflicts_on = has_queen_conflicts_on if diagonals else has_rook_conflicts_on

    def is_free(self, row: int, col: int) -> bool:
        # Tentatively drop the piece on the board and ask whether any line through it is contested.
        self.board.toggle(row, col)
        clash = self._conflicts_on(self.board, row, col)
        self.board.toggle(row, col)
        return not clash

    def place(self, row: int, col: int) -> None:
        self.board.toggle(row, col)

    def remove(self, row: int, col: int) -> None:
        self.board.toggle(row, col)


def _make_checker(size: int, piece: str, checker: str):
    """Return a fresh constraint checker for ``piece`` using strategy ``checker``."""
    if piece not in PIECES:
        raise ValueError(f"Unknown piece: {piece!r}. Allowed: {', '.join(PIECES)}")
    mapping = {
        "masks": _MaskChecker,
        "board": _BoardChecker,
    }
    try:
        factory = mapping[checker]
    except KeyError as exc:
        raise ValueError(f"Unknown checker: {checker!r}. Allowed: {', '.join(CHECKERS)}") from exc
    return factory(size, diagonals=(piece == "queens"))


def _available_columns(size: int, row: int, checker) -> List[int]:
    """Compute all columns that are currently safe for ``row``, in ascending order."""
    return [col for col in range(size) if checker.is_free(row, col)]


def iter_placements(
    size: int,
    piece: str,
    checker: str = "masks",
    time_limit: Optional[float] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    stats: Optional[SearchStats] = None,
) -> Iterator[List[int]]:
    """Yield every complete non-attacking placement in lexicographic order.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 0).
    piece : str
        ``"rooks"`` or ``"queens"``.
    checker : str
        Constraint strategy, ``"masks"`` (default) or ``"board"``.
    time_limit : float | None
        Optional wall-clock limit in seconds measured from the first step.
    should_stop : callable | None
        Optional abort signal polled once per step; returning True ends the
        enumeration.
    stats : SearchStats | None
        Receives node count, elapsed time and the timeout flag. Values are
        final once the generator is exhausted.

    Yields
    ------
    list[int]
        A fresh list ``placement`` with ``placement[row] = col``.

    Notes
    -----
    - Each frame stores the row, its legal columns (computed once when the
      frame is pushed, since shallower rows cannot change while it is alive)
      and the next candidate index. The frame stack is the path from the root
      of the search tree to the current node; the tree itself is never built.
    - Placing a piece on the last row yields a leaf; the next iteration
      removes it and moves on to the following candidate.
    """
    checker_state = _make_checker(size, piece, checker)
    if stats is None:
        stats = SearchStats()

    start = perf_counter()
    if size == 0:
        stats.elapsed = perf_counter() - start
        yield []
        return

    positions: List[int] = []
    stack: List[_Frame] = [_Frame(0, _available_columns(size, 0, checker_state))]

    while stack:
        if (time_limit is not None and (perf_counter() - start) > time_limit) or (
            should_stop is not None and should_stop()
        ):
            stats.timed_out = True
            break

        frame = stack[-1]
        row = frame.row

        if len(positions) > row:
            # Remove the previous choice for this row before trying the next column.
            checker_state.remove(row, positions.pop())

        if frame.next_index >= len(frame.candidates):
            # All candidate columns tried; backtrack to the previous row.
            stack.pop()
            continue

        col = frame.candidates[frame.next_index]
        frame.next_index += 1
        stats.nodes += 1

        checker_state.place(row, col)
        positions.append(col)

        if row == size - 1:
            stats.elapsed = perf_counter() - start
            yield positions.copy()
            continue

        # Descend one level deeper; an empty candidate list backtracks on the next step.
        stack.append(_Frame(row + 1, _available_columns(size, row + 1, checker_state)))

    stats.elapsed = perf_counter() - start


def _first(
    size: int,
    piece: str,
    time_limit: Optional[float],
    checker: str,
    should_stop: Optional[Callable[[], bool]],
) -> FirstResult:
    stats = SearchStats()
    placements = iter_placements(size, piece, checker, time_limit, should_stop, stats)
    placement = next(placements, None)
    placements.close()
    if placement is not None:
        return placement, stats.nodes, stats.elapsed, False
    return None, stats.nodes, stats.elapsed, stats.timed_out


def _count(
    size: int,
    piece: str,
    time_limit: Optional[float],
    checker: str,
    should_stop: Optional[Callable[[], bool]],
) -> CountResult:
    stats = SearchStats()
    count = 0
    for _ in iter_placements(size, piece, checker, time_limit, should_stop, stats):
        count += 1
    return count, stats.nodes, stats.elapsed, stats.timed_out


def bt_rooks_first(
    size: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
    should_stop: Optional[Callable[[], bool]] = None,
) -> FirstResult:
    """Find the first placement of ``size`` non-attacking rooks.

    Columns are tried in ascending order on every row, so for ``size > 0``
    the answer is always the main diagonal ``[0, 1, ..., size-1]``.

    Returns
    -------
    (placement, nodes_explored, elapsed_seconds, timeout)
    """
    return _first(size, "rooks", time_limit, checker, should_stop)


def bt_rooks_count(
    size: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
    should_stop: Optional[Callable[[], bool]] = None,
) -> CountResult:
    """Count rook placements by visiting every leaf of the search tree.

    The result equals ``size!``; it is computed by enumeration, which makes
    this a convenient baseline for the cost of a full traversal.
    """
    return _count(size, "rooks", time_limit, checker, should_stop)


def bt_queens_first(
    size: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
    should_stop: Optional[Callable[[], bool]] = None,
) -> FirstResult:
    """Find the lexicographically first N-Queens placement.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 0).
    time_limit : float | None
        Optional wall-clock time limit in seconds.
    checker : str
        ``"masks"`` or ``"board"``.
    should_stop : callable | None
        Optional abort signal.

    Returns
    -------
    (placement, nodes_explored, elapsed_seconds, timeout)
        ``placement`` is None for sizes 2 and 3, which admit no solution, and
        on timeout (``timeout`` tells the two apart).
    """
    return _first(size, "queens", time_limit, checker, should_stop)


def bt_queens_count(
    size: int,
    time_limit: Optional[float] = None,
    checker: str = "masks",
    should_stop: Optional[Callable[[], bool]] = None,
) -> CountResult:
    """Count all N-Queens placements with diagonal pruning.

    Complexity
    ----------
    Exponential; the diagonal masks cut the tree far below the ``size!``
    leaves of the rook search (92 leaves at N=8 versus 40320).
    """
    return _count(size, "queens", time_limit, checker, should_stop)
