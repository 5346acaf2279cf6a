"""User graph construction from clusters and transactions."""

from collections.abc import Iterable

from user_graph.errors import InternalInvariantError
from user_graph.graph.types import Clustering, MultiAdjacency, UserGraph, WeightedAdjacency
from user_graph.ingest.types import LightTransaction


def build_user_graph(
    clustering: Clustering,
    transactions: Iterable[LightTransaction],
    *,
    aggregated: bool = True,
    multigraph: bool = True,
) -> UserGraph:
    """
    Route every output's value from its transaction's cluster to its own.

    The owning cluster of a transaction is the cluster of its first input;
    after clustering every input maps to the same one. Transactions without
    inputs carry no attributable flow and are skipped.

    In aggregated mode values are summed per ordered cluster pair and
    intra-cluster transfers are dropped. In multigraph mode every output is
    appended as its own (target, value) entry, self-loops included.
    """
    if not aggregated and not multigraph:
        raise ValueError("at least one of aggregated or multigraph must be requested")

    cluster_map = clustering.cluster_map
    num_clusters = len(clustering.clusters)
    num_addresses = len(cluster_map)

    edges: WeightedAdjacency = [{} for _ in range(num_clusters)] if aggregated else []
    multi_edges: MultiAdjacency = [[] for _ in range(num_clusters)] if multigraph else []

    for tx in transactions:
        if not tx.inputs:
            continue

        owner_address = tx.inputs[0].address
        if not 0 <= owner_address < num_addresses:
            raise InternalInvariantError(
                f"address id {owner_address} outside [0, {num_addresses})"
            )
        owner = cluster_map[owner_address]

        for address, value in tx.outputs:
            if not 0 <= address < num_addresses:
                raise InternalInvariantError(
                    f"address id {address} outside [0, {num_addresses})"
                )
            target = cluster_map[address]

            if aggregated and owner != target:
                adj = edges[owner]
                adj[target] = adj.get(target, 0.0) + value
            if multigraph:
                multi_edges[owner].append((target, value))

    return UserGraph(clustering.clusters, cluster_map, edges, multi_edges)
