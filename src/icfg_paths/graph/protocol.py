"""ControlFlowGraph protocol -- the read-only contract the search consumes.

Public API:
    ControlFlowGraph: Runtime-checkable protocol for traversable graphs.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from .types import ICFGEdge, NodeId


@runtime_checkable
class ControlFlowGraph(Protocol):
    """Minimal interface a graph must offer to be searched.

    Path enumeration only needs node membership and the outgoing edges
    of a node.  Concrete graphs (in-memory, Kuzu, or a wrapper around
    another analysis front-end) satisfy this protocol so the enumerator
    never depends on how the graph was built.
    """

    def has_node(self, node_id: NodeId) -> bool:
        """Return True if *node_id* is a node of this graph."""
        ...

    def out_edges(self, node_id: NodeId) -> Iterable[ICFGEdge]:
        """Return the outgoing edges of *node_id*.

        The order must be stable for a given graph snapshot; it decides
        the relative order of sibling paths in the results.
        """
        ...


__all__ = ["ControlFlowGraph"]
