"""InMemoryICFG -- dict-based implementation of the ControlFlowGraph protocol.

Public API:
    InMemoryICFG: Control-flow graph held in plain dicts, with JSON export/import.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import Any

from .types import ICFGEdge, ICFGNode, NodeId

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


class InMemoryICFG:
    """Dict-based control-flow graph.

    Nodes keep their insertion order and each node keeps its outgoing
    edges in the order they were added, which makes path enumeration
    over this graph fully deterministic.  Thread-safe via a reentrant
    lock.

    Args:
        graph_id: Human-readable identifier for this graph instance.
    """

    def __init__(self, graph_id: str = "in_memory") -> None:
        self._graph_id = graph_id
        self._nodes: dict[NodeId, ICFGNode] = {}
        self._out: dict[NodeId, list[ICFGEdge]] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[NodeId, NodeId]],
        nodes: Iterable[NodeId] = (),
        graph_id: str = "in_memory",
    ) -> InMemoryICFG:
        """Build a graph from ``(src, dst)`` pairs.

        Endpoints are added as nodes on first sight.  *nodes* may list
        extra (possibly isolated) nodes to add first.
        """
        graph = cls(graph_id=graph_id)
        for node_id in nodes:
            if not graph.has_node(node_id):
                graph.add_node(node_id)
        for src, dst in edges:
            for node_id in (src, dst):
                if not graph.has_node(node_id):
                    graph.add_node(node_id)
            graph.add_edge(src, dst)
        return graph

    @property
    def graph_id(self) -> str:
        return self._graph_id

    def close(self) -> None:
        """Nothing to release; present for parity with database graphs."""

    # ── node operations ──────────────────────────────────────

    def add_node(self, node_id: NodeId, kind: str = "", function: str = "") -> ICFGNode:
        node = ICFGNode(node_id=node_id, kind=kind, function=function)
        with self._lock:
            if node_id not in self._nodes:
                self._out[node_id] = []
            self._nodes[node_id] = node
        return node

    def get_node(self, node_id: NodeId) -> ICFGNode | None:
        with self._lock:
            return self._nodes.get(node_id)

    def has_node(self, node_id: NodeId) -> bool:
        with self._lock:
            return node_id in self._nodes

    def node_ids(self) -> list[NodeId]:
        """Return all node IDs in insertion order."""
        with self._lock:
            return list(self._nodes)

    def node_count(self) -> int:
        with self._lock:
            return len(self._nodes)

    # ── edge operations ──────────────────────────────────────

    def add_edge(self, src: NodeId, dst: NodeId, kind: str = "") -> ICFGEdge:
        """Append a directed edge from *src* to *dst*.

        Raises:
            KeyError: If either endpoint does not exist.
        """
        with self._lock:
            if src not in self._nodes:
                raise KeyError(f"Source node not found: {src}")
            if dst not in self._nodes:
                raise KeyError(f"Target node not found: {dst}")
            edge = ICFGEdge(src=src, dst=dst, kind=kind)
            self._out[src].append(edge)
        return edge

    def out_edges(self, node_id: NodeId) -> list[ICFGEdge]:
        with self._lock:
            return list(self._out.get(node_id, ()))

    def edges(self) -> Iterator[ICFGEdge]:
        """Yield every edge, grouped by source node in insertion order."""
        with self._lock:
            snapshot = [list(out) for out in self._out.values()]
        for out in snapshot:
            yield from out

    def edge_count(self) -> int:
        with self._lock:
            return sum(len(out) for out in self._out.values())

    # ── export / import ──────────────────────────────────────

    def export_to_json(self) -> dict[str, Any]:
        """Export all nodes and edges to a JSON-serializable dict.

        Returns:
            Dict with graph_id, format_version, nodes and edges.
        """
        with self._lock:
            nodes = [
                {"node_id": n.node_id, "kind": n.kind, "function": n.function}
                for n in self._nodes.values()
            ]
            edges = [
                {"src": e.src, "dst": e.dst, "kind": e.kind}
                for out in self._out.values()
                for e in out
            ]
        return {
            "graph_id": self._graph_id,
            "exported_at": datetime.now(timezone.utc).isoformat(),
            "format_version": FORMAT_VERSION,
            "nodes": nodes,
            "edges": edges,
        }

    def import_from_json(self, data: dict[str, Any], merge: bool = False) -> dict[str, int]:
        """Import nodes and edges from a dict produced by export_to_json().

        Args:
            data: Exported graph dict.
            merge: If True, adds to the existing graph.
                   If False, clears the graph first.

        When merging, nodes and edges already in the graph are skipped,
        so merging a graph's own export leaves it unchanged.

        Returns:
            Dict with import statistics.

        Raises:
            KeyError: If an edge references a node that is neither imported
                nor (when merging) already present.  The graph is left
                untouched in that case.
        """
        stats = {"nodes_imported": 0, "edges_imported": 0, "skipped": 0}

        fmt_version = data.get("format_version", "")
        if fmt_version and fmt_version != FORMAT_VERSION:
            logger.warning("Unknown format version %s, attempting import anyway", fmt_version)

        node_entries = data.get("nodes", [])
        edge_entries = data.get("edges", [])

        with self._lock:
            known = {entry["node_id"] for entry in node_entries}
            if merge:
                known.update(self._nodes)
            for entry in edge_entries:
                for endpoint in (entry["src"], entry["dst"]):
                    if endpoint not in known:
                        raise KeyError(f"Edge endpoint not found: {endpoint}")

            existing_edges: set[ICFGEdge] = set()
            if merge:
                existing_edges = {e for out in self._out.values() for e in out}
            else:
                self._nodes.clear()
                self._out.clear()

            for entry in node_entries:
                node_id = entry["node_id"]
                if merge and node_id in self._nodes:
                    stats["skipped"] += 1
                    continue
                self.add_node(node_id, entry.get("kind", ""), entry.get("function", ""))
                stats["nodes_imported"] += 1

            for entry in edge_entries:
                edge = ICFGEdge(src=entry["src"], dst=entry["dst"], kind=entry.get("kind", ""))
                if edge in existing_edges:
                    stats["skipped"] += 1
                    continue
                self.add_edge(edge.src, edge.dst, edge.kind)
                stats["edges_imported"] += 1

        logger.debug(
            "Imported %d nodes and %d edges into %s",
            stats["nodes_imported"], stats["edges_imported"], self._graph_id,
        )
        return stats


__all__ = ["InMemoryICFG"]
