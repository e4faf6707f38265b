"""
Analysis and orchestration package for placement experiments.

This package contains:
- settings: global knobs and timeouts
- stats: typed summaries and aggregation helpers
- experiments: find/count runner over N, piece and checker
- reporting: CSV exports and raw-data writers
- plots: chart utilities
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    BTRecord,
    BTEntry,
    ExperimentResults,
    compute_detailed_statistics,
    summarize_bt_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "BTRecord",
    "BTEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "summarize_bt_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
