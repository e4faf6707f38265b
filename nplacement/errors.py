"""Exceptions raised by the placement solvers.

"No solution" is not an error: find-first queries return ``None`` for boards
that admit no placement. Exceptions are reserved for malformed input and for
searches that were cut short.
"""

from __future__ import annotations


class InvalidDimension(ValueError):
    """Raised for a negative/non-integer size or a malformed board matrix."""


class SearchTimeout(RuntimeError):
    """Raised when a search is aborted before it could produce an answer.

    Parameters
    ----------
    message : str
        Human readable description.
    nodes : int
        Candidate placements explored before the abort.
    elapsed : float
        Wall-clock seconds spent before the abort.
    """

    def __init__(self, message: str, nodes: int = 0, elapsed: float = 0.0):
        super().__init__(message)
        self.nodes = nodes
        self.elapsed = elapsed
