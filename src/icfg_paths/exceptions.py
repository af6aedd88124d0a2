"""Custom exceptions for icfg-paths."""


class PathAnalysisError(Exception):
    """Base exception for path enumeration."""


class GraphPreconditionError(PathAnalysisError):
    """Raised when the graph does not contain a node the search needs."""


class SearchLimitExceededError(PathAnalysisError):
    """Raised when a run records more paths than the configured cap."""

    def __init__(self, limit: int):
        super().__init__(f"Path limit exceeded: more than {limit} paths")
        self.limit = limit


class SearchCancelledError(PathAnalysisError):
    """Raised when the cancellation check asks the search to stop."""
