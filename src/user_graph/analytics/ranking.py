"""Top-K rankings: largest clusters by size, richest clusters by net inflow."""

from collections.abc import Callable, Sequence

from user_graph.analytics.types import DEFAULT_TOP_K, ClusterFlow, GraphStats, RichCluster
from user_graph.graph.types import Cluster, UserGraph, WeightedAdjacency


def _top_k(num_items: int, key: Callable[[int], float], k: int) -> list[int]:
    """
    Return the ids in ``range(num_items)`` with the k highest keys, descending.

    Candidates arrive in id order and only displace the current minimum when
    strictly greater, so ties keep the earliest id. The list is kept sorted by
    bubbling each newcomer up from the tail, O(k) per insert.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")

    top: list[int] = []
    for item in range(num_items):
        if len(top) < k:
            top.append(item)
        elif key(item) > key(top[-1]):
            top[-1] = item
        else:
            continue

        # Everything above the tail is already sorted.
        i = len(top) - 1
        while i > 0 and key(top[i]) > key(top[i - 1]):
            top[i], top[i - 1] = top[i - 1], top[i]
            i -= 1

    return top


def largest_clusters(clusters: Sequence[Cluster], k: int = DEFAULT_TOP_K) -> list[int]:
    """Ids of the k clusters with the most addresses."""
    return _top_k(len(clusters), lambda cluster_id: len(clusters[cluster_id]), k)


def cluster_flows(edges: WeightedAdjacency, num_clusters: int | None = None) -> list[ClusterFlow]:
    """Inflow and outflow per cluster, indexed by cluster id."""
    if num_clusters is None:
        num_clusters = len(edges)

    flows = [ClusterFlow() for _ in range(num_clusters)]
    for source, targets in enumerate(edges):
        for target, weight in targets.items():
            flows[source].outflow += weight
            flows[target].inflow += weight
    return flows


def richest_clusters(
    edges: WeightedAdjacency,
    k: int = DEFAULT_TOP_K,
    num_clusters: int | None = None,
) -> list[RichCluster]:
    """The k clusters with the highest inflow minus outflow."""
    flows = cluster_flows(edges, num_clusters)
    top = _top_k(len(flows), lambda cluster_id: flows[cluster_id].richness, k)
    return [RichCluster(cluster_id, flows[cluster_id].inflow, flows[cluster_id].outflow) for cluster_id in top]


def count_edges(edges: WeightedAdjacency) -> int:
    return sum(len(targets) for targets in edges)


def compute_stats(
    num_transactions: int,
    num_addresses: int,
    user_graph: UserGraph,
    k: int = DEFAULT_TOP_K,
) -> GraphStats:
    clusters = user_graph.clusters
    largest = largest_clusters(clusters, k)
    return GraphStats(
        num_transactions=num_transactions,
        num_addresses=num_addresses,
        num_clusters=len(clusters),
        largest_clusters=[(cluster_id, len(clusters[cluster_id])) for cluster_id in largest],
        num_edges=count_edges(user_graph.edges),
        richest_clusters=richest_clusters(user_graph.edges, k, len(clusters)),
    )
