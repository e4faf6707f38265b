"""Experiment runner for the backtracking solvers.

For every board size N, piece (rooks/queens) and pruning checker
(masks/board) the runner performs a find-first search and an exhaustive
count, repeated ``runs`` times to smooth wall-clock timings. Outputs are
structured dictionaries suitable for CSV export and plotting.
Validation hooks optionally check placement correctness against the conflict
model and the known solution counts.
"""
from __future__ import annotations

import math
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

from .stats import (
    BTRecord,
    ExperimentResults,
    ProgressPrinter,
    summarize_bt_runs,
)
from nplacement.backtracking import (
    CHECKERS,
    PIECES,
    bt_queens_count,
    bt_queens_first,
    bt_rooks_count,
    bt_rooks_first,
)
from nplacement.conflicts import has_any_queens_conflicts, has_any_rooks_conflicts
from nplacement.utils import is_valid_placement, placement_to_board

# Known N-Queens totals used by the validation hook
QUEENS_COUNTS = {0: 1, 1: 1, 2: 0, 3: 0, 4: 2, 5: 10, 6: 4, 7: 40, 8: 92, 9: 352, 10: 724}

_SOLVERS = {
    "rooks": (bt_rooks_first, bt_rooks_count),
    "queens": (bt_queens_first, bt_queens_count),
}


# Reusable workers -----------------------------------------------------------

def run_single_bt_experiment(
    params: Tuple[int, str, str, Optional[float]],
) -> Tuple[BTRecord, Optional[List[int]]]:
    """Run find-first and count-all once for a single (N, piece, checker) cell."""
    N, piece, checker, time_limit = params
    first_fn, count_fn = _SOLVERS[piece]
    placement, first_nodes, first_time, first_timeout = first_fn(N, time_limit=time_limit, checker=checker)
    solutions, count_nodes, count_time, count_timeout = count_fn(N, time_limit=time_limit, checker=checker)
    record: BTRecord = {
        "solution_found": placement is not None,
        "first_nodes": first_nodes,
        "first_time": first_time,
        "solutions": solutions,
        "count_nodes": count_nodes,
        "count_time": count_time,
        "timeout": first_timeout or count_timeout,
    }
    return record, placement


def _check_selection(pieces: List[str], checkers: List[str]) -> None:
    unknown = set(pieces).difference(PIECES)
    if unknown:
        raise ValueError("Unknown piece(s): " + ", ".join(sorted(unknown)) + ". Available: " + ", ".join(PIECES))
    unknown = set(checkers).difference(CHECKERS)
    if unknown:
        raise ValueError("Unknown checker(s): " + ", ".join(sorted(unknown)) + ". Available: " + ", ".join(CHECKERS))


def validate_bt_entry(N: int, piece: str, checker: str, record: BTRecord, placement: Optional[List[int]]) -> None:
    """Raise ``AssertionError`` when a run disagrees with the conflict model or known counts."""
    if record["timeout"]:
        return
    if placement is not None:
        if not is_valid_placement(placement, piece):
            raise AssertionError(f"Invalid {piece} placement for N={N} ({checker}): {placement}")
        board = placement_to_board(placement)
        clash = has_any_queens_conflicts(board) if piece == "queens" else has_any_rooks_conflicts(board)
        if clash or board.piece_count() != N:
            raise AssertionError(f"Conflict model rejects {piece} placement for N={N} ({checker}): {placement}")
    if piece == "rooks":
        expected: Optional[int] = math.factorial(N)
    else:
        expected = QUEENS_COUNTS.get(N)
    if expected is not None and record["solutions"] != expected:
        raise AssertionError(
            f"Unexpected {piece} count for N={N} ({checker}): {record['solutions']} (expected {expected})"
        )
    if record["solution_found"] != (record["solutions"] > 0):
        raise AssertionError(f"find-first and count disagree for {piece} N={N} ({checker})")


def _experiment_budget_exhausted(start: float, experiment_timeout: Optional[float]) -> bool:
    return experiment_timeout is not None and (perf_counter() - start) > experiment_timeout


# Sequential runner ----------------------------------------------------------

def run_experiments(
    N_values: List[int],
    runs_bt: int = 1,
    bt_time_limit: Optional[float] = None,
    pieces: Optional[List[str]] = None,
    checkers: Optional[List[str]] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    experiment_timeout: Optional[float] = None,
) -> ExperimentResults:
    """Run the find/count experiment grid sequentially.

    Returns a mapping ``results[piece][N][checker] -> BTEntry``. When
    ``experiment_timeout`` elapses, remaining sizes are skipped and the
    partial results are returned.
    """
    pieces = list(pieces or PIECES)
    checkers = list(checkers or CHECKERS)
    _check_selection(pieces, checkers)

    results: Any = {piece: {} for piece in pieces}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None
    start = perf_counter()

    for index, N in enumerate(N_values, start=1):
        try:
            if _experiment_budget_exhausted(start, experiment_timeout):
                print(f"Experiment timeout reached; skipping N >= {N}.")
                break
            if progress:
                progress.update(index, f"N={N}")
            print(f"=== N = {N}, pieces {'+'.join(pieces)} ===")

            for piece in pieces:
                per_checker: Dict[str, Any] = {}
                for checker in checkers:
                    runs: List[BTRecord] = []
                    placement: Optional[List[int]] = None
                    for _ in range(max(1, runs_bt)):
                        record, placement = run_single_bt_experiment((N, piece, checker, bt_time_limit))
                        if validate:
                            validate_bt_entry(N, piece, checker, record, placement)
                        runs.append(record)
                    per_checker[checker] = summarize_bt_runs(runs, placement)
                    entry = per_checker[checker]
                    print(
                        f"  {piece}/{checker}: solutions={entry['solutions']}, "
                        f"nodes={entry['count_nodes']}, time={entry['count_time']['mean']:.4f}s"
                        + (" (timeout)" if entry["timeout"] else "")
                    )
                results[piece][N] = per_checker
        except KeyboardInterrupt:
            print("\nInterrupted by user (sequential). Returning partial results...")
            break

    return results

