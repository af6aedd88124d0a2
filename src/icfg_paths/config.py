"""Search configuration for path enumeration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    """Optional bounds and execution settings for a PathEnumerator run.

    The defaults give a plain exhaustive search: no caps, no
    cancellation, one pair at a time.

    Attributes:
        max_depth: Maximum number of nodes in a recorded path.  Branches
            that would grow past it are pruned.  None means unbounded.
        max_paths: Maximum number of paths a run may record.  Finding one
            more raises SearchLimitExceededError.  None means unbounded.
        cancel_check: Polled once per search step; returning True aborts
            the run with SearchCancelledError.
        workers: Number of source/sink pairs searched concurrently.
    """

    max_depth: int | None = None
    max_paths: int | None = None
    cancel_check: Callable[[], bool] | None = None
    workers: int = 1

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_paths is not None and self.max_paths < 0:
            raise ValueError("max_paths cannot be negative")
        if self.workers < 1:
            raise ValueError("workers must be positive")
