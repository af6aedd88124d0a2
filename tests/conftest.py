"""Pytest configuration and fixtures for icfg-paths tests."""

import pytest

from icfg_paths.graph import InMemoryICFG, KuzuICFG


@pytest.fixture
def chain():
    """A -> B -> C"""
    return InMemoryICFG.from_edges([("A", "B"), ("B", "C")])


@pytest.fixture
def diamond():
    """A -> B -> D and A -> C -> D, with A's edges added B first."""
    return InMemoryICFG.from_edges([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])


@pytest.fixture
def kuzu_graph(tmp_path):
    """Fresh KuzuICFG in an isolated temporary database."""
    db_path = tmp_path / "icfg_db"
    graph = KuzuICFG(db_path=db_path, graph_id="test-icfg")
    yield graph
    graph.close()
