"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to summarize repeated timing measurements.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class BTRecord(TypedDict):
    """One find-first plus count-all run for a given (N, piece, checker)."""

    solution_found: bool
    first_nodes: int
    first_time: float
    solutions: int
    count_nodes: int
    count_time: float
    timeout: bool


class BTEntry(TypedDict, total=False):
    solution_found: bool
    first_placement: Optional[List[int]]
    first_nodes: int
    solutions: int
    count_nodes: int
    timeout: bool
    total_runs: int
    first_time: StatsSummary
    count_time: StatsSummary
    raw_runs: List[BTRecord]


# piece -> N -> checker -> entry
ExperimentResults = Dict[str, Dict[int, Dict[str, BTEntry]]]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float], label: str = "") -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Parameters
    ----------
    values : List[float]
        A list of numeric values to summarize.
    label : str, optional
        Carried for debugging contexts; not used in calculations.

    Returns
    -------
    StatsSummary
        count, mean, median, std, min, max, 25th and 75th percentiles and
        range. When ``values`` is empty, all numeric fields are ``None`` and
        ``count`` is 0 to keep CSV/plot generation consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    mean_val = statistics.mean(values)
    median_val = statistics.median(values)
    min_val = min(values)
    max_val = max(values)
    range_val = max_val - min_val
    std_val = statistics.pstdev(values) if n > 1 else 0

    q25 = sorted_vals[n // 4] if n >= 4 else min_val
    q75 = sorted_vals[3 * n // 4] if n >= 4 else max_val

    return {
        "count": n,
        "mean": mean_val,
        "median": median_val,
        "std": std_val,
        "min": min_val,
        "max": max_val,
        "q25": q25,
        "q75": q75,
        "range": range_val,
    }


def summarize_bt_runs(runs: List[BTRecord], first_placement: Optional[List[int]] = None) -> BTEntry:
    """Collapse repeated runs of one deterministic search into a single entry.

    Logical results (placement found, solution count, node counts) are taken
    from the first run; timings are summarized across all runs. The entry is
    flagged as timed out when any run hit the limit.
    """
    if not runs:
        return {"total_runs": 0, "raw_runs": []}
    head = runs[0]
    return {
        "solution_found": head["solution_found"],
        "first_placement": first_placement,
        "first_nodes": head["first_nodes"],
        "solutions": head["solutions"],
        "count_nodes": head["count_nodes"],
        "timeout": any(run["timeout"] for run in runs),
        "total_runs": len(runs),
        "first_time": compute_detailed_statistics([run["first_time"] for run in runs], "first_time"),
        "count_time": compute_detailed_statistics([run["count_time"] for run in runs], "count_time"),
        "raw_runs": list(runs),
    }
