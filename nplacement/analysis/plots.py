"""Visualization utilities for experiment results.

Overview
--------
Charts are generated from the ``ExperimentResults`` mapping produced by
``nplacement.analysis.experiments`` (``results[piece][N][checker]``) and
written as PNG files into ``out_dir``. Filenames are prefixed by a two-digit
index for stable ordering and carry the suffix configured in
``nplacement.analysis.settings``.

Chart map
---------
- 01_nodes_vs_N.png: Explored nodes (log scale) vs N
    - Full traversal (count) solid, first-placement search dashed, one line per piece.
- 02_time_vs_N.png: Mean count time (log scale) vs N, one line per piece/checker
    - Shows the constant-factor gap between O(1) masks and full-line board scans.
- 03_solutions_vs_N.png: Number of solutions (log scale) vs N per piece
    - Sizes with zero solutions (queens at N=2,3) are marked on the x-axis.
- 04_growth_fit.png: log-linear fit of explored nodes
    - The slope of ``log(nodes)`` against N gives an effective per-row
      branching factor, annotated in the legend.
"""
from __future__ import annotations

import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np

from . import settings
from .stats import ExperimentResults

_MARKERS = {"rooks": "s", "queens": "o"}


def _series(results: ExperimentResults, piece: str, checker: str, N_values: List[int], key: str) -> List[Optional[float]]:
    values: List[Optional[float]] = []
    for N in N_values:
        entry = results.get(piece, {}).get(N, {}).get(checker)
        if not entry or not entry.get("total_runs"):
            values.append(None)
            continue
        value = entry[key]
        if isinstance(value, dict):
            value = value.get("mean")
        values.append(value)
    return values


def _checkers_present(results: ExperimentResults) -> List[str]:
    seen: List[str] = []
    for per_n in results.values():
        for per_checker in per_n.values():
            for checker in per_checker:
                if checker not in seen:
                    seen.append(checker)
    return seen


def estimate_growth_factor(N_values: List[int], nodes: List[Optional[float]], min_n: int = 2) -> Optional[float]:
    """Estimate the effective branching factor from explored-node counts.

    Fits ``log(nodes) = a*N + b`` by least squares over sizes ``N >= min_n``
    with a positive node count and returns ``exp(a)``. Needs at least two
    usable points; returns None otherwise.
    """
    xs = [N for N, value in zip(N_values, nodes) if N >= min_n and value]
    ys = [value for N, value in zip(N_values, nodes) if N >= min_n and value]
    if len(xs) < 2:
        return None
    slope, _ = np.polyfit(np.array(xs, dtype=float), np.log(np.array(ys, dtype=float)), 1)
    return float(np.exp(slope))


def _positive(N_values: List[int], values: List[Optional[float]]):
    """Keep points that can be drawn on a log axis."""
    pairs = [(N, v) for N, v in zip(N_values, values) if v is not None and v > 0]
    return [p[0] for p in pairs], [p[1] for p in pairs]


def plot_nodes_vs_N(results: ExperimentResults, N_values: List[int], out_dir: str, checker: str = "masks") -> str:
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    for piece in results:
        xs, ys = _positive(N_values, _series(results, piece, checker, N_values, "count_nodes"))
        if xs:
            plt.semilogy(xs, ys, marker=_MARKERS.get(piece, "^"), linewidth=2, markersize=8, label=f"{piece}: count all")
        xs, ys = _positive(N_values, _series(results, piece, checker, N_values, "first_nodes"))
        if xs:
            plt.semilogy(xs, ys, marker=_MARKERS.get(piece, "^"), linestyle="--", linewidth=1.5, label=f"{piece}: first placement")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Explored nodes (log scale)", fontsize=12)
    plt.title("Search Tree Size vs Problem Size\n(Diagonal pruning separates queens from rooks)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)

    fname = os.path.join(out_dir, f"01_nodes_vs_N{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved explored-nodes chart: {fname}")
    return fname


def plot_time_vs_N(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    for piece in results:
        for checker in _checkers_present(results):
            xs, ys = _positive(N_values, _series(results, piece, checker, N_values, "count_time"))
            if xs:
                plt.semilogy(
                    xs,
                    ys,
                    marker=_MARKERS.get(piece, "^"),
                    linestyle="-" if checker == "masks" else ":",
                    linewidth=2,
                    label=f"{piece} ({checker})",
                )
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Mean count time [s] (log scale)", fontsize=12)
    plt.title("Exhaustive Count Time vs Problem Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)

    fname = os.path.join(out_dir, f"02_time_vs_N{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved execution-time chart (log scale): {fname}")
    return fname


def plot_solutions_vs_N(results: ExperimentResults, N_values: List[int], out_dir: str, checker: str = "masks") -> str:
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    for piece in results:
        counts = _series(results, piece, checker, N_values, "solutions")
        xs, ys = _positive(N_values, counts)
        if xs:
            plt.semilogy(xs, ys, marker=_MARKERS.get(piece, "^"), linewidth=2, markersize=8, label=piece)
        zeros = [N for N, value in zip(N_values, counts) if value == 0]
        if zeros:
            plt.scatter(zeros, [1] * len(zeros), marker="x", s=80, color="red", label=f"{piece}: no solution")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Number of solutions (log scale)", fontsize=12)
    plt.title("Solution Count vs Problem Size", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(N_values)

    fname = os.path.join(out_dir, f"03_solutions_vs_N{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved solution-count chart: {fname}")
    return fname


def plot_growth_fit(
    results: ExperimentResults, N_values: List[int], out_dir: str, checker: str = "masks"
) -> Dict[str, Optional[float]]:
    """Plot explored nodes with their log-linear fit; return the growth factor per piece."""
    os.makedirs(out_dir, exist_ok=True)
    factors: Dict[str, Optional[float]] = {}
    plt.figure(figsize=(12, 8))
    for piece in results:
        nodes = _series(results, piece, checker, N_values, "count_nodes")
        xs, ys = _positive(N_values, nodes)
        if not xs:
            factors[piece] = None
            continue
        plt.semilogy(xs, ys, marker=_MARKERS.get(piece, "^"), linestyle="none", markersize=8, label=f"{piece} (measured)")
        factor = estimate_growth_factor(N_values, nodes)
        factors[piece] = factor
        if factor is not None:
            fit_x = [N for N in xs if N >= 2]
            z = np.polyfit(fit_x, np.log([v for N, v in zip(xs, ys) if N >= 2]), 1)
            x_trend = np.linspace(min(fit_x), max(fit_x), 100)
            plt.semilogy(x_trend, np.exp(np.poly1d(z)(x_trend)), "--", alpha=0.8, label=f"{piece} fit: x{factor:.2f} per row")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Explored nodes (log scale)", fontsize=12)
    plt.title("Effective Branching Factor\n(log-linear fit of full-traversal node counts)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)

    fname = os.path.join(out_dir, f"04_growth_fit{settings.filename_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved growth-fit chart: {fname}")
    return factors


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Generate every chart; return the written filenames."""
    present = _checkers_present(results)
    checker = "masks" if not present or "masks" in present else present[0]
    files = [
        plot_nodes_vs_N(results, N_values, out_dir, checker),
        plot_time_vs_N(results, N_values, out_dir),
        plot_solutions_vs_N(results, N_values, out_dir, checker),
    ]
    factors = plot_growth_fit(results, N_values, out_dir, checker)
    files.append(os.path.join(out_dir, f"04_growth_fit{settings.filename_suffix()}.png"))
    for piece, factor in factors.items():
        if factor is not None:
            print(f"  {piece}: effective branching factor ~{factor:.2f}")
    return files
