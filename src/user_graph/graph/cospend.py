"""Co-spend graph over address ids and its connected components."""

from collections.abc import Iterable

from user_graph.errors import InternalInvariantError
from user_graph.graph.types import Cluster, Clustering
from user_graph.ingest.types import LightTransaction


class CospendGraph:
    """
    Undirected graph over address ids ``[0, num_vertices)``.

    Vertices are fixed at construction. Neighbours are kept in
    insertion-ordered dicts so traversal order, and with it the member order
    of every cluster, is reproducible across runs.
    """

    def __init__(self, num_vertices: int):
        self._num_vertices = num_vertices
        self._adj: list[dict[int, None]] = [{} for _ in range(num_vertices)]

    @property
    def num_vertices(self) -> int:
        return self._num_vertices

    def _check(self, vertex: int) -> None:
        if not 0 <= vertex < self._num_vertices:
            raise InternalInvariantError(
                f"address id {vertex} outside [0, {self._num_vertices})"
            )

    def add_undirected_edge(self, u: int, v: int) -> None:
        """Link u and v. Self-edges are implicit and never stored."""
        self._check(u)
        self._check(v)
        if u == v:
            return
        self._adj[u][v] = None
        self._adj[v][u] = None

    def neighbors(self, vertex: int) -> list[int]:
        self._check(vertex)
        return list(self._adj[vertex])

    def _component(self, start: int, visited: bytearray) -> Cluster:
        # Explicit stack: components can span millions of addresses.
        component: Cluster = []
        stack = [start]
        visited[start] = 1

        while stack:
            current = stack.pop()
            component.append(current)
            for neighbor in self._adj[current]:
                if not visited[neighbor]:
                    visited[neighbor] = 1
                    stack.append(neighbor)

        return component

    def connected_components(self) -> Clustering:
        """
        Compute clusters and the total address -> cluster map.

        Traversals start from the lowest unvisited id, so cluster ids follow
        the lowest member id of each cluster.
        """
        clusters: list[Cluster] = []
        # -1 marks unassigned; none may survive the pass.
        cluster_map = [-1] * self._num_vertices
        visited = bytearray(self._num_vertices)

        for vertex in range(self._num_vertices):
            if visited[vertex]:
                continue

            cluster_id = len(clusters)
            component = self._component(vertex, visited)
            for member in component:
                cluster_map[member] = cluster_id
            clusters.append(component)

        return Clustering(clusters, cluster_map)


def build_cospend_graph(
    num_addresses: int,
    transactions: Iterable[LightTransaction],
) -> CospendGraph:
    """Link consecutive inputs of every transaction (multi-input heuristic)."""
    graph = CospendGraph(num_addresses)

    for tx in transactions:
        inputs = tx.inputs
        # Zero or one inputs: nothing to link.
        for j in range(len(inputs) - 1):
            graph.add_undirected_edge(inputs[j].address, inputs[j + 1].address)

    return graph


def find_clusters(
    num_addresses: int,
    transactions: Iterable[LightTransaction],
) -> Clustering:
    """Cluster addresses that were ever spent together."""
    return build_cospend_graph(num_addresses, transactions).connected_components()
