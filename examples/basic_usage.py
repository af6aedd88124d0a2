"""Basic usage example for icfg-paths."""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


from icfg_paths import (
    InMemoryICFG,
    PathEnumerator,
    SearchConfig,
    paths_to_dict,
)


def main():
    print("=" * 60)
    print("icfg-paths - Basic Usage Example")
    print("=" * 60)

    # 1. Build a small ICFG: main calls check() and may reach abort()
    print("\n1. Building graph...")
    graph = InMemoryICFG(graph_id="demo")
    graph.add_node(0, kind="FunEntry", function="main")
    graph.add_node(1, kind="Call", function="main")
    graph.add_node(2, kind="FunEntry", function="check")
    graph.add_node(3, kind="FunExit", function="check")
    graph.add_node(4, kind="Ret", function="main")
    graph.add_node(5, kind="Call", function="abort")
    graph.add_node(6, kind="FunExit", function="main")

    graph.add_edge(0, 1, kind="intra")
    graph.add_edge(1, 2, kind="call")
    graph.add_edge(2, 3, kind="intra")
    graph.add_edge(2, 5, kind="intra")
    graph.add_edge(3, 4, kind="ret")
    graph.add_edge(4, 5, kind="intra")
    graph.add_edge(4, 6, kind="intra")
    graph.add_edge(6, 0, kind="intra")
    print(f"   Nodes: {graph.node_count()}, edges: {graph.edge_count()}")

    # 2. Enumerate every simple path from the entry to abort() and the exit
    print("\n2. Enumerating paths...")
    enumerator = PathEnumerator(sources=[0], sinks=[5, 6])
    enumerator.enumerate(graph)
    enumerator.dump(sys.stdout)

    # 3. Bound the search
    print("\n3. Enumerating with max_depth=4...")
    bounded = PathEnumerator(sources=[0], sinks=[5, 6], config=SearchConfig(max_depth=4))
    bounded.enumerate(graph)
    bounded.dump(sys.stdout)

    # 4. Export results
    print("\n4. Exporting results...")
    print(json.dumps(paths_to_dict(enumerator.pair_results), indent=2))

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
