"""Result types for cluster analytics."""

from dataclasses import dataclass

# Number of clusters listed in each ranking.
DEFAULT_TOP_K = 10


@dataclass(slots=True)
class ClusterFlow:
    """Total value entering and leaving a cluster in the aggregated graph."""

    inflow: float = 0.0
    outflow: float = 0.0

    @property
    def richness(self) -> float:
        return self.inflow - self.outflow


@dataclass(frozen=True, slots=True)
class RichCluster:
    cluster_id: int
    inflow: float
    outflow: float

    @property
    def richness(self) -> float:
        return self.inflow - self.outflow


@dataclass(frozen=True, slots=True)
class GraphStats:
    """Everything the statistics report prints."""

    num_transactions: int
    num_addresses: int
    num_clusters: int
    largest_clusters: list[tuple[int, int]]
    num_edges: int
    richest_clusters: list[RichCluster]
