"""Tests for cluster rankings."""

import random

import pytest

from user_graph.analytics.ranking import (
    cluster_flows,
    compute_stats,
    count_edges,
    largest_clusters,
    richest_clusters,
)
from user_graph.graph.types import UserGraph

# Aggregated edges of the four-cluster reference scenario.
SCENARIO_EDGES = [{1: 0.5, 2: 0.5}, {3: 2.0}, {1: 0.3}, {}]


class TestLargestClusters:
    """Test cases for largest_clusters function."""

    def test_descending_by_size(self) -> None:
        clusters = [[0], [1, 2, 3], [4, 5], [6, 7, 8, 9]]
        assert largest_clusters(clusters) == [3, 1, 2, 0]

    def test_ties_keep_earliest_cluster_id(self) -> None:
        clusters = [[0], [1, 2], [3], [4, 5], [6]]
        assert largest_clusters(clusters, k=3) == [1, 3, 0]

    def test_fewer_clusters_than_k(self) -> None:
        assert largest_clusters([[0], [1]]) == [0, 1]
        assert largest_clusters([]) == []

    def test_matches_full_sort(self) -> None:
        rng = random.Random(7)
        clusters = [list(range(rng.randint(1, 20))) for _ in range(500)]
        expected = sorted(range(len(clusters)), key=lambda i: (-len(clusters[i]), i))[:10]
        assert largest_clusters(clusters) == expected

    def test_invalid_k(self) -> None:
        with pytest.raises(ValueError):
            largest_clusters([[0]], k=0)


class TestRichestClusters:
    """Test cases for richness and richest_clusters."""

    def test_scenario_flows(self) -> None:
        flows = cluster_flows(SCENARIO_EDGES)
        assert [f.richness for f in flows] == pytest.approx([-1.0, -1.2, 0.2, 2.0])
        assert flows[1].inflow == pytest.approx(0.8)
        assert flows[1].outflow == pytest.approx(2.0)

    def test_scenario_order(self) -> None:
        richest = richest_clusters(SCENARIO_EDGES)
        assert [r.cluster_id for r in richest] == [3, 2, 0, 1]
        assert richest[0].inflow == 2.0
        assert richest[0].outflow == 0.0

    def test_clusters_without_edges_have_zero_richness(self) -> None:
        flows = cluster_flows([{}, {}], num_clusters=2)
        assert all(f.richness == 0.0 for f in flows)

    def test_ties_keep_earliest_cluster_id(self) -> None:
        # 1 and 2 both receive 1.0 from 0; 3 is untouched.
        edges = [{1: 1.0, 2: 1.0}, {}, {}, {}]
        assert [r.cluster_id for r in richest_clusters(edges)] == [1, 2, 3, 0]

    def test_matches_full_sort(self) -> None:
        rng = random.Random(11)
        n = 300
        edges = [
            {t: float(rng.randint(1, 100)) for t in rng.sample(range(n), 3) if t != s}
            for s in range(n)
        ]
        flows = cluster_flows(edges)
        expected = sorted(range(n), key=lambda i: (-flows[i].richness, i))[:10]
        assert [r.cluster_id for r in richest_clusters(edges)] == expected


def test_count_edges() -> None:
    assert count_edges(SCENARIO_EDGES) == 4
    assert count_edges([]) == 0


def test_compute_stats() -> None:
    user_graph = UserGraph(
        clusters=[[0], [1, 3], [2], [4]],
        cluster_map=[0, 1, 2, 1, 3],
        edges=SCENARIO_EDGES,
        multigraph_edges=[],
    )
    stats = compute_stats(3, 5, user_graph)

    assert stats.num_transactions == 3
    assert stats.num_addresses == 5
    assert stats.num_clusters == 4
    assert stats.largest_clusters == [(1, 2), (0, 1), (2, 1), (3, 1)]
    assert stats.num_edges == 4
    assert [r.cluster_id for r in stats.richest_clusters] == [3, 2, 0, 1]
