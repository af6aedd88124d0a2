"""Graph data structures for interprocedural control-flow graphs.

Public API:
    NodeId: Type alias for node identities.
    Path: Type alias for a recorded path (tuple of node IDs).
    ICFGNode: Immutable ICFG node.
    ICFGEdge: Immutable directed ICFG edge.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass

NodeId = Hashable
Path = tuple[NodeId, ...]


@dataclass(frozen=True)
class ICFGNode:
    """An immutable node in the control-flow graph.

    Attributes:
        node_id: Unique identifier for the node.
        kind: Node flavour reported by the front-end (e.g. "FunEntry", "Call").
        function: Name of the enclosing function, if known.
    """

    node_id: NodeId
    kind: str = ""
    function: str = ""


@dataclass(frozen=True)
class ICFGEdge:
    """An immutable directed edge in the control-flow graph.

    Attributes:
        src: Node ID of the source (tail) node.
        dst: Node ID of the destination (head) node.
        kind: Edge flavour ("intra", "call", "ret"); not used by the search.
    """

    src: NodeId
    dst: NodeId
    kind: str = ""


__all__ = ["NodeId", "Path", "ICFGNode", "ICFGEdge"]
