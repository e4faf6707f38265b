"""CSV export utilities for experiment outputs (aggregates and raw runs).

These helpers materialize concise CSV summaries as well as full per-run raw
data for downstream analysis or spreadsheet inspection. Filenames carry the
optional run tag and datestamp configured in ``settings``.
"""
from __future__ import annotations

import csv
import os
from typing import List

from . import settings
from .stats import ExperimentResults


def _format_placement(placement) -> str:
    if placement is None:
        return ""
    return " ".join(str(col) for col in placement)


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write one aggregate row per (N, piece, checker) and return the file path.

    Column names follow lowercase snake_case; timings are means over the
    repeated runs.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_BT{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "piece",
            "checker",
            "solution_found",
            "first_placement",
            "first_nodes_explored",
            "first_time_seconds",
            "solutions",
            "count_nodes_explored",
            "count_time_seconds",
            "count_time_std",
            "timeout",
            "total_runs",
        ])
        for N in N_values:
            for piece, per_n in results.items():
                for checker, entry in per_n.get(N, {}).items():
                    if not entry.get("total_runs"):
                        continue
                    writer.writerow([
                        N,
                        piece,
                        checker,
                        entry["solution_found"],
                        _format_placement(entry.get("first_placement")),
                        entry["first_nodes"],
                        entry["first_time"]["mean"],
                        entry["solutions"],
                        entry["count_nodes"],
                        entry["count_time"]["mean"],
                        entry["count_time"]["std"],
                        entry["timeout"],
                        entry["total_runs"],
                    ])

    print(f"Results CSV saved: {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write every individual run (one row per repetition) and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_data_BT{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "n",
            "piece",
            "checker",
            "run_id",
            "solution_found",
            "first_nodes_explored",
            "first_time_seconds",
            "solutions",
            "count_nodes_explored",
            "count_time_seconds",
            "timeout",
        ])
        for N in N_values:
            for piece, per_n in results.items():
                for checker, entry in per_n.get(N, {}).items():
                    for run_id, run in enumerate(entry.get("raw_runs", [])):
                        writer.writerow([
                            N,
                            piece,
                            checker,
                            run_id,
                            run["solution_found"],
                            run["first_nodes"],
                            run["first_time"],
                            run["solutions"],
                            run["count_nodes"],
                            run["count_time"],
                            run["timeout"],
                        ])

    print(f"Raw data CSV saved: {filename}")
    return filename


def save_pruning_summary(results: ExperimentResults, N_values: List[int], out_dir: str, checker: str = "masks") -> str:
    """Compare the full rook traversal with the diagonal-pruned queen traversal.

    For each N where both pieces ran with ``checker``, writes the node counts
    of the exhaustive searches and the fraction of the rook tree the queen
    search actually visits.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"pruning_summary_BT{settings.filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["n", "rooks_count_nodes", "queens_count_nodes", "queens_over_rooks"])
        for N in N_values:
            rooks = results.get("rooks", {}).get(N, {}).get(checker)
            queens = results.get("queens", {}).get(N, {}).get(checker)
            if not rooks or not queens:
                continue
            rook_nodes = rooks["count_nodes"]
            queen_nodes = queens["count_nodes"]
            ratio = queen_nodes / rook_nodes if rook_nodes else 0.0
            writer.writerow([N, rook_nodes, queen_nodes, f"{ratio:.6f}"])

    print(f"Pruning summary CSV saved: {filename}")
    return filename
