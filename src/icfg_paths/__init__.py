"""icfg-paths: simple-path enumeration between sources and sinks of an ICFG."""

__version__ = "0.1.0"

from .config import SearchConfig
from .enumerator import PairResult, PathEnumerator
from .exceptions import (
    GraphPreconditionError,
    PathAnalysisError,
    SearchCancelledError,
    SearchLimitExceededError,
)
from .graph import (
    ControlFlowGraph,
    ICFGEdge,
    ICFGNode,
    InMemoryICFG,
    KuzuICFG,
)
from .report import dump_paths, format_paths, paths_to_dict

__all__ = [
    # Enumeration
    "PathEnumerator",
    "PairResult",
    "SearchConfig",
    # Graphs
    "ControlFlowGraph",
    "ICFGNode",
    "ICFGEdge",
    "InMemoryICFG",
    "KuzuICFG",
    # Reporting
    "format_paths",
    "dump_paths",
    "paths_to_dict",
    # Exceptions
    "PathAnalysisError",
    "GraphPreconditionError",
    "SearchLimitExceededError",
    "SearchCancelledError",
]
