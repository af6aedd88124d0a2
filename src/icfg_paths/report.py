"""Rendering of enumerated paths for diagnostics and export."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import Any, TextIO

from .graph.types import Path

FORMAT_VERSION = "1.0"
END_MARKER = "END"


def format_paths(paths: Sequence[Path]) -> str:
    """Render paths as text: the total first, then one arrow-joined line per path.

    Example:
        >>> print(format_paths([("A", "B")]), end="")
        <BLANKLINE>
        Total paths found: 1
        Path 1: A -> B -> END
    """
    lines = ["", f"Total paths found: {len(paths)}"]
    for i, path in enumerate(paths, start=1):
        hops = " -> ".join(str(node_id) for node_id in path)
        lines.append(f"Path {i}: {hops} -> {END_MARKER}")
    return "\n".join(lines) + "\n"


def dump_paths(paths: Sequence[Path], stream: TextIO | None = None) -> None:
    """Write format_paths() output to *stream* (stderr by default)."""
    out = stream if stream is not None else sys.stderr
    out.write(format_paths(paths))
    out.flush()


def paths_to_dict(pair_results: Iterable[Any]) -> dict[str, Any]:
    """Export per-pair results to a JSON-serializable dict.

    Args:
        pair_results: PairResult objects in pair order.

    Returns:
        Dict with format_version, total_paths and one entry per pair.
    """
    pairs = [
        {
            "source": result.source,
            "sink": result.sink,
            "paths": [list(path) for path in result.paths],
        }
        for result in pair_results
    ]
    return {
        "format_version": FORMAT_VERSION,
        "total_paths": sum(len(p["paths"]) for p in pairs),
        "pairs": pairs,
    }


__all__ = ["format_paths", "dump_paths", "paths_to_dict"]
