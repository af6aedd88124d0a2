"""Source-to-sink simple path enumeration over a control-flow graph.

Public API:
    PairResult: Paths found for one (source, sink) pair.
    PathEnumerator: Exhaustive simple-path search between node sets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TextIO

from .config import SearchConfig
from .exceptions import (
    GraphPreconditionError,
    SearchCancelledError,
    SearchLimitExceededError,
)
from .graph.protocol import ControlFlowGraph
from .graph.types import ICFGEdge, NodeId, Path
from .report import dump_paths

logger = logging.getLogger(__name__)


@dataclass
class PairResult:
    """Paths discovered for a single (source, sink) pair.

    Attributes:
        source: Source node ID the search started from.
        sink: Sink node ID the search was looking for.
        paths: Recorded paths in discovery order.
    """

    source: NodeId
    sink: NodeId
    paths: list[Path] = field(default_factory=list)


class PathEnumerator:
    """Find every simple path from any source node to any sink node.

    For each pair in ``sources x sinks`` (sources outer, sinks inner,
    both in the order given) a depth-first search with backtracking
    records every path that reaches the sink without repeating a node.
    A sink ends the path it completes: the search never continues past
    the node it is looking for.

    Results accumulate in pair order and, within a pair, in the graph's
    edge order.  The result set is cleared at the start of every
    ``enumerate`` call, so repeated runs over the same graph produce the
    same results.

    The search runs on an explicit stack rather than Python recursion,
    so deep graphs cannot hit the interpreter's recursion limit.

    Args:
        sources: Ordered source node IDs.
        sinks: Ordered sink node IDs.
        config: Optional bounds, cancellation and parallelism settings.

    Example:
        >>> from icfg_paths.graph import InMemoryICFG
        >>> graph = InMemoryICFG.from_edges([("A", "B"), ("B", "C")])
        >>> PathEnumerator(sources=["A"], sinks=["C"]).enumerate(graph)
        [('A', 'B', 'C')]
    """

    def __init__(
        self,
        sources: Iterable[NodeId] = (),
        sinks: Iterable[NodeId] = (),
        config: SearchConfig | None = None,
    ):
        self.sources: list[NodeId] = list(sources)
        self.sinks: list[NodeId] = list(sinks)
        self.config = config or SearchConfig()

        self._paths: list[Path] = []
        self._pair_results: list[PairResult] = []

    # ── results ───────────────────────────────────────────────

    @property
    def paths(self) -> tuple[Path, ...]:
        """All recorded paths, in discovery order."""
        return tuple(self._paths)

    @property
    def pair_results(self) -> list[PairResult]:
        """Per-pair results of the last run, in pair order."""
        return list(self._pair_results)

    def __len__(self) -> int:
        return len(self._paths)

    def reset(self) -> None:
        """Discard all recorded paths."""
        self._paths.clear()
        self._pair_results.clear()

    def dump(self, stream: TextIO | None = None) -> None:
        """Write the path count and every path to *stream* (stderr by default)."""
        dump_paths(self._paths, stream)

    # ── enumeration ───────────────────────────────────────────

    def enumerate(self, graph: ControlFlowGraph) -> list[Path]:
        """Search every (source, sink) pair and record the paths found.

        Args:
            graph: Read-only graph to search.

        Returns:
            The recorded paths, in pair order then edge order.

        Raises:
            GraphPreconditionError: If a source or sink is not in the graph,
                or an edge leads to a node outside it.
            SearchLimitExceededError: If more than ``config.max_paths``
                paths are found.
            SearchCancelledError: If ``config.cancel_check`` fires.

        On error the result set holds the pairs that completed before
        the failing one.
        """
        self.reset()
        sources = list(self.sources)
        sinks = list(self.sinks)
        pairs = [(s, t) for s in sources for t in sinks]
        if not pairs:
            logger.debug("No source/sink pairs to search")
            return []

        for node_id in (*sources, *sinks):
            if not graph.has_node(node_id):
                raise GraphPreconditionError(f"Node not in graph: {node_id!r}")

        logger.debug(
            "Enumerating paths for %d pairs (%d sources, %d sinks)",
            len(pairs), len(sources), len(sinks),
        )

        if self.config.workers > 1 and len(pairs) > 1:
            self._enumerate_parallel(graph, pairs)
        else:
            for source, sink in pairs:
                self._merge(self._search_pair(graph, source, sink, self._remaining_budget()))

        logger.info("Path enumeration found %d paths over %d pairs", len(self._paths), len(pairs))
        return list(self._paths)

    def _enumerate_parallel(
        self,
        graph: ControlFlowGraph,
        pairs: list[tuple[NodeId, NodeId]],
    ) -> None:
        """Search pairs on a thread pool, merging results in pair order.

        Each pair is capped at ``max_paths`` on its own; the run-wide cap
        is applied during the ordered merge, so a limit trips at the same
        pair as in a serial run.
        """
        limit = self.config.max_paths
        pool = ThreadPoolExecutor(max_workers=self.config.workers)
        try:
            futures = [pool.submit(self._search_pair, graph, s, t, limit) for s, t in pairs]
            for future in futures:
                self._merge(future.result())
        except BaseException:
            pool.shutdown(wait=True, cancel_futures=True)
            raise
        pool.shutdown(wait=True)

    def _search_pair(
        self,
        graph: ControlFlowGraph,
        source: NodeId,
        sink: NodeId,
        limit: int | None,
    ) -> PairResult:
        path: list[NodeId] = []
        visited: set[NodeId] = set()
        found = self._search(graph, source, sink, path, visited, limit)
        logger.debug("Pair %r -> %r: %d paths", source, sink, len(found))
        return PairResult(source=source, sink=sink, paths=found)

    def _remaining_budget(self) -> int | None:
        limit = self.config.max_paths
        if limit is None:
            return None
        return limit - len(self._paths)

    def _merge(self, result: PairResult) -> None:
        limit = self.config.max_paths
        if limit is not None and len(self._paths) + len(result.paths) > limit:
            raise SearchLimitExceededError(limit)
        self._pair_results.append(result)
        self._paths.extend(result.paths)

    # ── search step ───────────────────────────────────────────

    def search(
        self,
        graph: ControlFlowGraph,
        current: NodeId,
        target: NodeId,
        path: list[NodeId],
        visited: set[NodeId],
    ) -> list[Path]:
        """Find every simple path from *current* to *target*.

        *path* and *visited* hold the route taken so far; the paths
        returned are that route extended to *target*.  Both are restored
        to their entry state before returning, including when an error
        is raised.  Nodes already in *visited* are never entered, and
        *current* itself must not be in *visited* yet.

        Raises SearchLimitExceededError if this call alone finds more than
        ``config.max_paths`` paths.

        Returns:
            Completed paths (copies) found below this call, in edge order.
            The enumerator's result set is not modified.
        """
        return self._search(graph, current, target, path, visited, self.config.max_paths)

    def _search(
        self,
        graph: ControlFlowGraph,
        current: NodeId,
        target: NodeId,
        path: list[NodeId],
        visited: set[NodeId],
        limit: int | None,
    ) -> list[Path]:
        if not graph.has_node(current):
            raise GraphPreconditionError(f"Node not in graph: {current!r}")

        found: list[Path] = []
        entry_depth = len(path)
        try:
            self._visit(current, path, visited)
            if current == target:
                self._record(path, found, limit)
                return found

            stack: list[tuple[NodeId, Iterator[ICFGEdge]]] = [
                (current, self._expand(graph, current, path))
            ]
            while stack:
                self._check_cancelled()
                _, edges = stack[-1]
                for edge in edges:
                    succ = edge.dst
                    if succ in visited:
                        continue
                    if not graph.has_node(succ):
                        raise GraphPreconditionError(
                            f"Edge {edge.src!r} -> {succ!r} leads outside the graph"
                        )
                    self._visit(succ, path, visited)
                    if succ == target:
                        self._record(path, found, limit)
                        self._leave(path, visited)
                        continue
                    stack.append((succ, self._expand(graph, succ, path)))
                    break
                else:
                    stack.pop()
                    self._leave(path, visited)
            return found
        finally:
            while len(path) > entry_depth:
                visited.discard(path.pop())

    def _expand(self, graph: ControlFlowGraph, node_id: NodeId, path: list[NodeId]) -> Iterator[ICFGEdge]:
        max_depth = self.config.max_depth
        if max_depth is not None and len(path) >= max_depth:
            return iter(())
        return iter(graph.out_edges(node_id))

    @staticmethod
    def _visit(node_id: NodeId, path: list[NodeId], visited: set[NodeId]) -> None:
        visited.add(node_id)
        path.append(node_id)

    @staticmethod
    def _leave(path: list[NodeId], visited: set[NodeId]) -> None:
        visited.discard(path.pop())

    def _record(self, path: list[NodeId], found: list[Path], limit: int | None) -> None:
        if limit is not None and len(found) >= limit:
            raise SearchLimitExceededError(self.config.max_paths)
        found.append(tuple(path))

    def _check_cancelled(self) -> None:
        check = self.config.cancel_check
        if check is not None and check():
            raise SearchCancelledError("Path enumeration cancelled")


__all__ = ["PairResult", "PathEnumerator"]
