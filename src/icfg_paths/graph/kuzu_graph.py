"""KuzuICFG -- Kuzu-backed implementation of the ControlFlowGraph protocol.

Stores an ICFG exported by an analysis front-end in a Kuzu database so
large graphs can be persisted once and searched many times.

Public API:
    KuzuICFG: Concrete ControlFlowGraph implementation backed by Kuzu.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any

import kuzu

from .types import ICFGEdge, ICFGNode, NodeId

logger = logging.getLogger(__name__)

NODE_TABLE = "ICFGNode"
EDGE_TABLE = "ICFG_EDGE"


class KuzuICFG:
    """Kuzu graph database implementation of the ControlFlowGraph protocol.

    Node IDs are stored as STRING primary keys, so searches over this
    graph must use string source and sink IDs.  Every node and edge
    carries a ``seq`` column recording insertion order; ``node_ids`` and
    ``out_edges`` return rows ordered by it so enumeration stays
    deterministic across sessions.

    Args:
        db_path: Filesystem path for the Kuzu database directory.
        graph_id: Optional human-readable identifier; auto-generated if None.
    """

    # ── construction / lifecycle ──────────────────────────────

    def __init__(self, db_path: Path | str, graph_id: str | None = None) -> None:
        self._db_path = Path(db_path)
        self._graph_id = graph_id or f"kuzu-{uuid.uuid4().hex[:8]}"
        self._db = kuzu.Database(str(self._db_path))
        self._conn = kuzu.Connection(self._db)
        self._ensure_schema()

        # Continue sequence numbers when reopening an existing database.
        self._next_node_seq = self._max_seq(f"MATCH (n:{NODE_TABLE}) RETURN max(n.seq)") + 1
        self._next_edge_seq = (
            self._max_seq(f"MATCH ()-[r:{EDGE_TABLE}]->() RETURN max(r.seq)") + 1
        )

    @property
    def graph_id(self) -> str:
        return self._graph_id

    def close(self) -> None:
        """Release Kuzu resources and the database file lock.  Idempotent."""
        if self._conn is not None:
            self._conn.close()
        if self._db is not None:
            self._db.close()
        self._conn = None  # type: ignore[assignment]
        self._db = None  # type: ignore[assignment]

    # ── schema management ─────────────────────────────────────

    def _ensure_schema(self) -> None:
        """Create the node and rel tables if they do not exist yet."""
        self._conn.execute(
            f"CREATE NODE TABLE IF NOT EXISTS {NODE_TABLE}"
            f"(node_id STRING, kind STRING, func STRING, seq INT64, PRIMARY KEY(node_id))"
        )
        self._conn.execute(
            f"CREATE REL TABLE IF NOT EXISTS {EDGE_TABLE}"
            f"(FROM {NODE_TABLE} TO {NODE_TABLE}, kind STRING, seq INT64)"
        )

    def _max_seq(self, cypher: str) -> int:
        result = self._conn.execute(cypher)
        if not result.has_next():
            return -1
        value = result.get_next()[0]
        return -1 if value is None else int(value)

    # ── node operations ───────────────────────────────────────

    def add_node(self, node_id: NodeId, kind: str = "", function: str = "") -> ICFGNode:
        """Create a node, or update kind/function if it already exists.

        The node ID is converted to its string form.
        """
        nid = str(node_id)
        params: dict[str, Any] = {"nid": nid, "kind": kind, "func": function}

        if self.has_node(nid):
            self._conn.execute(
                f"MATCH (n:{NODE_TABLE}) WHERE n.node_id = $nid "
                f"SET n.kind = $kind, n.func = $func",
                params,
            )
        else:
            params["seq"] = self._next_node_seq
            self._conn.execute(
                f"CREATE (:{NODE_TABLE} {{node_id: $nid, kind: $kind, func: $func, seq: $seq}})",
                params,
            )
            self._next_node_seq += 1

        return ICFGNode(node_id=nid, kind=kind, function=function)

    def get_node(self, node_id: NodeId) -> ICFGNode | None:
        if not isinstance(node_id, str):
            return None
        result = self._conn.execute(
            f"MATCH (n:{NODE_TABLE}) WHERE n.node_id = $nid RETURN n.kind, n.func",
            {"nid": node_id},
        )
        if not result.has_next():
            return None
        row = result.get_next()
        return ICFGNode(node_id=node_id, kind=row[0] or "", function=row[1] or "")

    def has_node(self, node_id: NodeId) -> bool:
        return self.get_node(node_id) is not None

    def node_ids(self) -> list[str]:
        """Return all node IDs in insertion order."""
        result = self._conn.execute(
            f"MATCH (n:{NODE_TABLE}) RETURN n.node_id ORDER BY n.seq"
        )
        ids: list[str] = []
        while result.has_next():
            ids.append(result.get_next()[0])
        return ids

    def node_count(self) -> int:
        result = self._conn.execute(f"MATCH (n:{NODE_TABLE}) RETURN count(n)")
        return int(result.get_next()[0])

    # ── edge operations ───────────────────────────────────────

    def add_edge(self, src: NodeId, dst: NodeId, kind: str = "") -> ICFGEdge:
        """Create a directed edge between two existing nodes.

        Raises:
            KeyError: If source or target node does not exist.
        """
        sid, tid = str(src), str(dst)
        if not self.has_node(sid):
            raise KeyError(f"Source node not found: {src}")
        if not self.has_node(tid):
            raise KeyError(f"Target node not found: {dst}")

        self._conn.execute(
            f"MATCH (a:{NODE_TABLE}), (b:{NODE_TABLE}) "
            f"WHERE a.node_id = $sid AND b.node_id = $tid "
            f"CREATE (a)-[:{EDGE_TABLE} {{kind: $kind, seq: $seq}}]->(b)",
            {"sid": sid, "tid": tid, "kind": kind, "seq": self._next_edge_seq},
        )
        self._next_edge_seq += 1
        return ICFGEdge(src=sid, dst=tid, kind=kind)

    def out_edges(self, node_id: NodeId) -> list[ICFGEdge]:
        if not isinstance(node_id, str):
            return []
        result = self._conn.execute(
            f"MATCH (a:{NODE_TABLE})-[r:{EDGE_TABLE}]->(b:{NODE_TABLE}) "
            f"WHERE a.node_id = $nid RETURN b.node_id, r.kind ORDER BY r.seq",
            {"nid": node_id},
        )
        edges: list[ICFGEdge] = []
        while result.has_next():
            row = result.get_next()
            edges.append(ICFGEdge(src=node_id, dst=row[0], kind=row[1] or ""))
        return edges

    def edge_count(self) -> int:
        result = self._conn.execute(f"MATCH ()-[r:{EDGE_TABLE}]->() RETURN count(r)")
        return int(result.get_next()[0])

    # ── bulk loading ──────────────────────────────────────────

    def load_from(self, graph: Any) -> dict[str, int]:
        """Copy every node and edge of *graph* into this database.

        *graph* must offer ``node_ids()``, ``get_node()`` and
        ``out_edges()`` (e.g. an InMemoryICFG).  Edges are copied in the
        source graph's order so sibling order is preserved.

        Returns:
            Dict with the number of nodes and edges loaded.
        """
        stats = {"nodes_loaded": 0, "edges_loaded": 0}
        node_ids = list(graph.node_ids())

        for node_id in node_ids:
            node = graph.get_node(node_id)
            self.add_node(node_id, node.kind, node.function)
            stats["nodes_loaded"] += 1

        for node_id in node_ids:
            for edge in graph.out_edges(node_id):
                self.add_edge(edge.src, edge.dst, edge.kind)
                stats["edges_loaded"] += 1

        logger.debug(
            "Loaded %d nodes and %d edges into %s",
            stats["nodes_loaded"], stats["edges_loaded"], self._graph_id,
        )
        return stats


__all__ = ["KuzuICFG"]
