"""Text emitters for the user graph edge lists and the statistics report."""

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from user_graph.analytics.types import GraphStats
from user_graph.errors import IoError
from user_graph.graph.types import UserGraph

EDGE_LIST_HEADER = "from to weight"

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024


def format_value(value: float) -> str:
    """Six significant digits, trailing zeros stripped: 0.5, 2, 1.2e+06."""
    return f"{value:g}"


def _write_edges(handle: TextIO, edges: Iterable[tuple[int, int, float]]) -> int:
    handle.write(EDGE_LIST_HEADER + "\n")
    written = 0
    for source, target, weight in edges:
        handle.write(f"{source} {target} {format_value(weight)}\n")
        written += 1
    return written


def format_stats(stats: GraphStats) -> str:
    lines = [
        f"Number of transactions: {stats.num_transactions}",
        f"Number of unique addresses: {stats.num_addresses}",
        f"Number of clusters: {stats.num_clusters}",
        "Largest clusters and number of addresses:",
    ]
    lines.extend(f"  {cluster_id}:{size}" for cluster_id, size in stats.largest_clusters)
    lines.append(f"Number of User Graph edges: {stats.num_edges}")
    lines.append("Richest clusters and input-output total:")
    lines.extend(
        f"  {rich.cluster_id} {format_value(rich.inflow)} {format_value(rich.outflow)}"
        for rich in stats.richest_clusters
    )
    return "\n".join(lines) + "\n"


def write_edge_list(path: str | Path, user_graph: UserGraph) -> int:
    """Write the aggregated edge list. Returns the number of edges written."""
    try:
        with open(path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as handle:
            return _write_edges(handle, user_graph.iter_edges())
    except OSError as exc:
        raise IoError(f"cannot write edge list to {path}: {exc}") from exc


def write_multigraph_edge_list(path: str | Path, user_graph: UserGraph) -> int:
    """Write one line per multigraph entry, self-loops and duplicates included."""
    try:
        with open(path, "w", encoding="utf-8", buffering=BUFFER_SIZE) as handle:
            return _write_edges(handle, user_graph.iter_multigraph_edges())
    except OSError as exc:
        raise IoError(f"cannot write multigraph edge list to {path}: {exc}") from exc


def write_stats(path: str | Path, stats: GraphStats) -> None:
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(format_stats(stats))
    except OSError as exc:
        raise IoError(f"cannot write stats to {path}: {exc}") from exc
