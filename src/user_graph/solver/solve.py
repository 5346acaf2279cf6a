import logging
import time
from dataclasses import dataclass

from user_graph.analytics.ranking import compute_stats
from user_graph.analytics.types import DEFAULT_TOP_K, GraphStats
from user_graph.config import RunConfig
from user_graph.errors import IoError
from user_graph.graph.build import build_user_graph
from user_graph.graph.cospend import build_cospend_graph
from user_graph.graph.types import Clustering, UserGraph
from user_graph.ingest.parse import load_transactions
from user_graph.ingest.types import LoadedTransactions
from user_graph.report.emit import write_edge_list, write_multigraph_edge_list, write_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Everything the core computes for one transaction set."""

    loaded: LoadedTransactions
    clustering: Clustering
    user_graph: UserGraph
    stats: GraphStats


def analyze(
    loaded: LoadedTransactions,
    top_k: int = DEFAULT_TOP_K,
    multigraph: bool = False,
) -> RunResult:
    """
    Run the core over an already materialized transaction list.

    1. Find clusters as connected components of the co-spend graph
    2. Route output values between clusters and rank the results
    """
    t1_start = time.perf_counter()
    cospend = build_cospend_graph(len(loaded.addresses), loaded.transactions)
    clustering = cospend.connected_components()
    # The co-spend adjacency is the largest structure held; drop it early.
    del cospend
    t1 = time.perf_counter() - t1_start
    logger.info("Clustering done: %d clusters in %.2fs", len(clustering), t1)

    t2_start = time.perf_counter()
    user_graph = build_user_graph(clustering, loaded.transactions, multigraph=multigraph)
    stats = compute_stats(len(loaded.transactions), len(loaded.addresses), user_graph, top_k)
    t2 = time.perf_counter() - t2_start
    logger.info("User graph done: %d edges in %.2fs", stats.num_edges, t2)

    total_passes = t1 + t2
    if total_passes > 0:
        logger.debug(
            "Timing breakdown: Cluster=%.2fs (%.0f%%), UserGraph=%.2fs (%.0f%%)",
            t1,
            100 * t1 / total_passes,
            t2,
            100 * t2 / total_passes,
        )

    return RunResult(loaded, clustering, user_graph, stats)


def solve(
    input_path: str,
    top_k: int = DEFAULT_TOP_K,
    multigraph: bool = False,
) -> RunResult:
    """Load one transaction file, cluster its addresses and build the user graph."""
    total_start = time.perf_counter()
    logger.info("Starting: file=%s, top_k=%d, multigraph=%s", input_path, top_k, multigraph)

    t_start = time.perf_counter()
    loaded = load_transactions(input_path)
    logger.info(
        "Load done: %d transactions, %d unique addresses in %.2fs",
        len(loaded.transactions),
        len(loaded.addresses),
        time.perf_counter() - t_start,
    )

    result = analyze(loaded, top_k=top_k, multigraph=multigraph)

    total_time = time.perf_counter() - total_start
    logger.info(
        "Result: %d clusters, %d edges (total %.2fs)",
        result.stats.num_clusters,
        result.stats.num_edges,
        total_time,
    )
    return result


def main_solve(config: RunConfig) -> RunResult:
    """Main entry point that writes the edge list(s) and stats report."""
    result = solve(
        str(config.transactions_path),
        top_k=config.top_k,
        multigraph=config.multigraph,
    )

    t_start = time.perf_counter()
    try:
        config.user_graph_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IoError(f"cannot create output directory {config.user_graph_path.parent}: {exc}") from exc

    write_stats(config.stats_path, result.stats)
    written = write_edge_list(config.user_graph_path, result.user_graph)
    logger.info("Wrote %d edges to %s", written, config.user_graph_path)

    if config.multigraph:
        written = write_multigraph_edge_list(config.multigraph_path, result.user_graph)
        logger.info("Wrote %d multigraph edges to %s", written, config.multigraph_path)

    logger.debug("Write done in %.2fs", time.perf_counter() - t_start)
    return result
