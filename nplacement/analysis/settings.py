"""Global settings and timeouts for the placement analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`nplacement.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

# Board sizes to evaluate (in ascending order); counting is exhaustive, keep them small
N_VALUES: List[int] = [0, 1, 2, 3, 4, 5, 6, 7, 8]

# Pieces and pruning strategies to benchmark
PIECES: List[str] = ["rooks", "queens"]
CHECKERS: List[str] = ["masks", "board"]

# Backtracking is deterministic; extra runs only smooth the wall-clock timings
RUNS_BT_FINAL: int = 1

# Backtracking time limit in seconds per search (None = no limit)
BT_TIME_LIMIT: Optional[float] = 60.0

# Global timeout per experiment bundle (None = no limit)
EXPERIMENT_TIMEOUT: Optional[float] = 600.0

# Output directory for CSV and charts
OUT_DIR: str = "results_nplacement"

# Output naming policy --------------------------------------------------------

# When True, results and plots will include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_timeouts(
        bt_timeout: Optional[float] = 60.0,
        experiment_timeout: Optional[float] = 600.0,
) -> None:
        """Configure timeouts for the backtracking searches and the experiment wrapper.

        Parameters
        - bt_timeout: limit in seconds for a single find/count search (None
            disables the limit).
        - experiment_timeout: hard cap for a whole experiment bundle in seconds
            (None disables). When reached, outer loops stop scheduling new N.

        Side effects
        - Updates module-level globals and prints a concise summary to stdout to
            make the active limits explicit at run start.
        """
        global BT_TIME_LIMIT, EXPERIMENT_TIMEOUT
        BT_TIME_LIMIT = bt_timeout
        EXPERIMENT_TIMEOUT = experiment_timeout

        print("Timeout settings configured:")
        print(f"   - BT: {BT_TIME_LIMIT}s" if BT_TIME_LIMIT else "   - BT: unlimited")
        print(
                f"   - Experiment: {EXPERIMENT_TIMEOUT}s"
                if EXPERIMENT_TIMEOUT
                else "   - Experiment: unlimited"
        )


def filename_suffix() -> str:
        """Build the optional ``_<RUN_TAG>_<RUN_ID>`` suffix shared by CSV and chart files.

        Returns an empty string if no suffixing is configured.
        """
        parts: List[str] = []
        if RUN_TAG:
                parts.append(str(RUN_TAG))
        if DATE_IN_FILENAMES and RUN_ID:
                parts.append(str(RUN_ID))
        return ("_" + "_".join(parts)) if parts else ""
