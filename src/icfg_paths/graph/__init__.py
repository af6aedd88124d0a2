"""Graph layer consumed by path enumeration.

Public API:
    NodeId: Node identity type alias.
    Path: Recorded path type alias.
    ICFGNode: Immutable graph node.
    ICFGEdge: Immutable directed graph edge.
    ControlFlowGraph: Protocol every searchable graph implements.
    InMemoryICFG: Dict-based graph with JSON export/import.
    KuzuICFG: Kuzu-backed persistent graph.
"""

from __future__ import annotations

from .kuzu_graph import KuzuICFG
from .memory_graph import InMemoryICFG
from .protocol import ControlFlowGraph
from .types import ICFGEdge, ICFGNode, NodeId, Path

__all__ = [
    "NodeId",
    "Path",
    "ICFGNode",
    "ICFGEdge",
    "ControlFlowGraph",
    "InMemoryICFG",
    "KuzuICFG",
]
