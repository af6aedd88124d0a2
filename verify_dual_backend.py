#!/usr/bin/env python3
"""Verification script for dual-backend graphs.

Demonstrates that in-memory and Kuzu graphs give identical enumeration results.
"""

import shutil
import tempfile
from pathlib import Path

from icfg_paths import InMemoryICFG, KuzuICFG, PathEnumerator


EDGES = [
    ("0", "1"), ("0", "2"), ("1", "2"), ("2", "1"),
    ("1", "3"), ("2", "4"), ("3", "4"), ("4", "3"),
    ("3", "5"), ("4", "5"), ("5", "0"),
]


def enumerate_all(graph, nodes):
    enumerator = PathEnumerator(sources=nodes, sinks=nodes)
    return enumerator.enumerate(graph)


def main():
    """Main verification runner."""
    print("\n" + "=" * 60)
    print("Dual-Backend Graph Verification")
    print("=" * 60)

    work_dir = Path(tempfile.mkdtemp(prefix="icfg-verify-"))
    kuzu_graph = None
    try:
        memory_graph = InMemoryICFG.from_edges(EDGES)
        nodes = memory_graph.node_ids()
        expected = enumerate_all(memory_graph, nodes)
        print(f"✓ In-memory graph: {len(expected)} paths")

        kuzu_graph = KuzuICFG(db_path=work_dir / "icfg_db", graph_id="verify")
        stats = kuzu_graph.load_from(memory_graph)
        print(f"✓ Loaded Kuzu graph: {stats['nodes_loaded']} nodes, {stats['edges_loaded']} edges")

        actual = enumerate_all(kuzu_graph, nodes)
        print(f"✓ Kuzu graph: {len(actual)} paths")

        assert actual == expected, "Backends disagree"
        print("\n" + "=" * 60)
        print("SUCCESS: Both backends produce identical paths in identical order")
        print("=" * 60)

    except Exception as e:
        print(f"\n❌ ERROR: {e}")
        import traceback

        traceback.print_exc()
        return 1

    finally:
        if kuzu_graph is not None:
            kuzu_graph.close()
        shutil.rmtree(work_dir, ignore_errors=True)

    return 0


if __name__ == "__main__":
    exit(main())
