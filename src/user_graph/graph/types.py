"""Shared type definitions for graph processing."""

from collections.abc import Iterator
from dataclasses import dataclass

type Cluster = list[int]
type ClusterMap = list[int]
type WeightedAdjacency = list[dict[int, float]]
type MultiAdjacency = list[list[tuple[int, float]]]


@dataclass(frozen=True, slots=True)
class Clustering:
    """Connected components of the co-spend graph."""

    clusters: list[Cluster]
    cluster_map: ClusterMap

    def __len__(self) -> int:
        return len(self.clusters)


@dataclass(frozen=True, slots=True)
class UserGraph:
    """
    Cluster-to-cluster value flow.

    ``edges`` holds one summed weight per ordered pair of distinct clusters.
    ``multigraph_edges`` keeps one entry per output, self-loops included.
    Either may be empty when its mode was not requested.
    """

    clusters: list[Cluster]
    cluster_map: ClusterMap
    edges: WeightedAdjacency
    multigraph_edges: MultiAdjacency

    def iter_edges(self) -> Iterator[tuple[int, int, float]]:
        """Yield aggregated (source, target, weight) in cluster-id order."""
        for source, targets in enumerate(self.edges):
            for target, weight in targets.items():
                yield source, target, weight

    def iter_multigraph_edges(self) -> Iterator[tuple[int, int, float]]:
        for source, targets in enumerate(self.multigraph_edges):
            for target, value in targets:
                yield source, target, value
