"""Command-line interface and high-level pipelines for placement experiments.

This module wires together configuration loading, one-off find/count queries
and execution of the experiment suite. It isolates
I/O, argument parsing, and progress reporting from the core algorithmic
modules so that the rest of the codebase remains easy to test
programmatically.
"""
from __future__ import annotations

import argparse
import json
import tempfile
from pathlib import Path
from time import perf_counter
from typing import List, Optional, Tuple

from . import settings
from .experiments import run_experiments
from .plots import plot_and_save
from .reporting import (
    save_pruning_summary,
    save_raw_data_to_csv,
    save_results_to_csv,
)
from config_manager import ConfigManager
from nplacement.backtracking import CHECKERS, PIECES
from nplacement.errors import InvalidDimension, SearchTimeout
from nplacement.solvers import count_solutions, find_solution


# ------------- Utils --------------------------------------------------------

def parse_list_filters(values: Optional[List[str]], allowed: Tuple[str, ...], label: str) -> Optional[List[str]]:
    """Normalize repeated / comma-separated CLI filters into a list of labels.

    Accepts ``-p rooks -p queens`` as well as ``-p rooks,queens``. Returns
    None when no filter is provided so that callers fall back to the
    configured default set.
    """
    if not values:
        return None
    selected: List[str] = []
    for entry in values:
        for token in entry.split(","):
            token = token.strip().lower()
            if token:
                if token not in allowed:
                    raise ValueError(f"Unknown {label} '{token}'. Allowed: {', '.join(allowed)}")
                selected.append(token)
    unique = list(dict.fromkeys(selected))  # preserve order, remove dups
    return unique or None


def apply_configuration(
    config_path: str,
    piece_filter: Optional[List[str]] = None,
    checker_filter: Optional[List[str]] = None,
) -> Tuple[ConfigManager, List[str], List[str]]:
    """Load configuration and apply optional piece/checker filtering.

    Updates the global ``settings`` module in-place with values from
    ``config.json`` (or a user-specified path) and returns the
    ``ConfigManager`` used together with the selected pieces and checkers.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.RUNS_BT_FINAL = int(experiment_settings.get("runs_bt_final", settings.RUNS_BT_FINAL))
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)

    timeout_settings = config_mgr.get_timeout_settings()
    if timeout_settings:
        settings.set_timeouts(
            bt_timeout=timeout_settings.get("bt_time_limit", settings.BT_TIME_LIMIT),
            experiment_timeout=timeout_settings.get("experiment_timeout", settings.EXPERIMENT_TIMEOUT),
        )

    if any(n < 0 for n in settings.N_VALUES):
        raise ValueError(f"N values must be non-negative: {settings.N_VALUES}")

    def _select(configured: List[str], requested: Optional[List[str]], allowed: Tuple[str, ...], label: str) -> List[str]:
        configured = [value.lower() for value in configured]
        unknown = set(configured).difference(allowed)
        if unknown:
            raise ValueError(f"Unknown {label}(s) in configuration: " + ", ".join(sorted(unknown)))
        if requested:
            selected = [value for value in configured if value in requested]
        else:
            selected = configured
        if not selected:
            raise ValueError(f"No {label}s selected after applying filters.")
        return selected

    pieces = _select(config_mgr.get_pieces(), piece_filter, PIECES, "piece")
    checkers = _select(config_mgr.get_checkers(), checker_filter, CHECKERS, "checker")
    settings.PIECES = pieces
    settings.CHECKERS = checkers
    return config_mgr, pieces, checkers


# ------------- One-off queries ---------------------------------------------

def run_find(piece: str, n: int, time_limit: Optional[float] = None, checker: str = "masks"):
    """Print and return the first solution for ``n`` pieces (None if there is none)."""
    solution = find_solution(piece, n, time_limit=time_limit, checker=checker)
    if solution is None:
        print(f"No solution for {n} {piece}")
    else:
        print(f"Single solution for {n} {piece}: {json.dumps(solution)}")
    return solution


def run_count(piece: str, n: int, time_limit: Optional[float] = None, checker: str = "masks") -> int:
    """Print and return the number of solutions for ``n`` pieces."""
    count = count_solutions(piece, n, time_limit=time_limit, checker=checker)
    print(f"Number of solutions for {n} {piece}: {count}")
    return count


# ------------- Pipeline ----------------------------------------------------

def run_pipeline(
    pieces: List[str],
    checkers: List[str],
    validate: bool = False,
    make_plots: bool = True,
) -> None:
    """Run the experiment grid, export CSV files and draw charts."""
    N_values = list(settings.N_VALUES)
    out_dir = settings.OUT_DIR

    print(f"Running experiments for N = {N_values}")
    print(f"Pieces: {pieces} | Checkers: {checkers} | Runs per search: {settings.RUNS_BT_FINAL}")
    start = perf_counter()
    results = run_experiments(
        N_values,
        runs_bt=settings.RUNS_BT_FINAL,
        bt_time_limit=settings.BT_TIME_LIMIT,
        pieces=pieces,
        checkers=checkers,
        progress_label="Experiments",
        validate=validate,
        experiment_timeout=settings.EXPERIMENT_TIMEOUT,
    )

    save_results_to_csv(results, N_values, out_dir)
    save_raw_data_to_csv(results, N_values, out_dir)
    if "rooks" in pieces and "queens" in pieces:
        save_pruning_summary(results, N_values, out_dir, checker=checkers[0])
    if make_plots:
        plot_and_save(results, N_values, out_dir)

    total_time = perf_counter() - start
    print(f"Total time: {total_time:.1f}s ({total_time/60:.1f} minutes)")
    print(f"Outputs written to: {out_dir}")


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test at N=8.

    Verifies that:
    - Every ``bt_*`` solver returns a valid placement or the known count,
      with a positive node count, for both checkers.
    - The experiment pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=8) across all solvers...")

    import inspect

    import nplacement.backtracking as bt_mod
    from nplacement.utils import is_valid_placement

    bt_solvers = [(name, fn) for name, fn in inspect.getmembers(bt_mod, inspect.isfunction) if name.startswith("bt_")]
    if not bt_solvers:
        raise AssertionError("No backtracking solvers discovered (expected functions named 'bt_*').")

    bt_solvers.sort(key=lambda x: x[0])
    expected_counts = {"rooks": 40320, "queens": 92}

    for name, solver in bt_solvers:
        piece = "queens" if "queens" in name else "rooks"
        for checker in CHECKERS:
            result, nodes, elapsed, timeout = solver(8, time_limit=30.0, checker=checker)
            if timeout:
                raise AssertionError(f"{name} ({checker}) timed out for N=8.")
            if not isinstance(nodes, int) or nodes <= 0:
                raise AssertionError(f"{name} ({checker}) returned invalid nodes count: {nodes}.")
            if name.endswith("_count"):
                if result != expected_counts[piece]:
                    raise AssertionError(f"{name} ({checker}) counted {result} solutions, expected {expected_counts[piece]}.")
            elif result is None or not is_valid_placement(result, piece):
                raise AssertionError(f"{name} ({checker}) returned an invalid placement for N=8: {result}.")
            print(f"  [BT] {name} ({checker}): nodes={nodes}, time={elapsed:.4f}s")

    results = run_experiments(
        [4, 5],
        runs_bt=2,
        bt_time_limit=5.0,
        progress_label="Quick regression experiments",
        validate=True,
    )

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, [4, 5], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser():
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Solve N-Rooks / N-Queens and run placement experiments.")
    query_group = parser.add_mutually_exclusive_group()
    query_group.add_argument("--find", type=int, metavar="N", help="Print the first solution for N pieces and exit.")
    query_group.add_argument("--count", type=int, metavar="N", help="Print the number of solutions for N pieces and exit.")
    query_group.add_argument("--quick-test", action="store_true", help="Run quick regression tests (N=8) and exit.")
    parser.add_argument(
        "--piece",
        "-p",
        action="append",
        help="Pieces to use: rooks, queens (comma-separated or multiple flags). Queries use the first one; default queens.",
    )
    parser.add_argument(
        "--checker",
        "-c",
        action="append",
        help="Pruning checkers: masks, board (comma-separated or multiple flags). Default: from config.",
    )
    parser.add_argument("--time-limit", type=float, default=None, help="Time limit in seconds for --find/--count.")
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument("--no-plots", action="store_true", help="Skip chart generation.")
    parser.add_argument("--validate", action="store_true", help="Check placements and counts against the conflict model and known totals.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        piece_filter = parse_list_filters(args.piece, PIECES, "piece")
        checker_filter = parse_list_filters(args.checker, CHECKERS, "checker")
    except ValueError as exc:
        print(f"Argument error: {exc}")
        raise SystemExit(2) from exc

    if args.quick_test:
        run_quick_regression_tests()
        return

    if args.find is not None or args.count is not None:
        piece = piece_filter[0] if piece_filter else "queens"
        checker = checker_filter[0] if checker_filter else "masks"
        try:
            if args.find is not None:
                run_find(piece, args.find, time_limit=args.time_limit, checker=checker)
            else:
                run_count(piece, args.count, time_limit=args.time_limit, checker=checker)
        except InvalidDimension as exc:
            print(f"Invalid board size: {exc}")
            raise SystemExit(1) from exc
        except SearchTimeout as exc:
            print(f"Search timed out: {exc} (nodes={exc.nodes})")
            raise SystemExit(1) from exc
        return

    try:
        _, pieces, checkers = apply_configuration(args.config, piece_filter, checker_filter)
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    try:
        run_pipeline(pieces, checkers, validate=args.validate, make_plots=not args.no_plots)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
