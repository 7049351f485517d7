"""
Shortest path algorithms: Dijkstra and Bellman-Ford.

Dijkstra's algorithm for non-negative edge weights.
Bellman-Ford algorithm for graphs with negative weights (detects negative cycles).

Both work on DirectedGraph and UndirectedGraph, following each variant's
walking rules. NaN-weighted edges never relax, and +inf-weighted edges never
produce a finite distance.

References:
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapters 24.3 (Dijkstra) and 24.1 (Bellman-Ford).
"""

import heapq
from typing import Any, Dict, List, Optional, Tuple

from ..config import SHORTEST_PATH_METHODS
from ..errors import ConfigError, NegativeCycleError, NegativeWeightError
from ..logging import get_logger
from .core import Graph
from .utils import reconstruct_path, relaxation_edges
from .values import NodeValue

logger = get_logger(__name__)

INF = float("inf")


def _check_non_negative(graph: Graph) -> None:
    for edge in graph.edge_records():
        if edge.weight < 0:
            raise NegativeWeightError(
                f"Dijkstra requires non-negative weights. Found negative weight "
                f"{edge.weight} on edge ({graph.value_of(edge.source)!r}, "
                f"{graph.value_of(edge.target)!r})",
                context={"edge": edge.index, "weight": edge.weight},
            )


def _dijkstra_indices(
    graph: Graph, source: int, target: Optional[int] = None
) -> Tuple[List[float], Dict[int, Optional[int]]]:
    dist = [INF] * graph.node_count()
    parent: Dict[int, Optional[int]] = {source: None}
    dist[source] = 0.0

    # (distance, node index) so ties break on arena order
    pq: List[Tuple[float, int]] = [(0.0, source)]
    visited = set()

    while pq:
        d, u = heapq.heappop(pq)
        if u in visited:
            continue
        visited.add(u)
        if u == target:
            break

        for v, edge in graph.successors_at(u):
            if v in visited:
                continue
            new_dist = d + edge.weight
            if new_dist < dist[v]:
                dist[v] = new_dist
                parent[v] = u
                heapq.heappush(pq, (new_dist, v))

    return dist, parent


def _bellman_ford_indices(graph: Graph, source: int) -> Tuple[List[float], Dict[int, Optional[int]]]:
    n = graph.node_count()
    dist = [INF] * n
    parent: Dict[int, Optional[int]] = {source: None}
    dist[source] = 0.0
    edges = list(relaxation_edges(graph))

    # Relax edges n-1 times, stopping early once nothing changes
    for _ in range(n - 1):
        changed = False
        for u, v, weight in edges:
            if dist[u] != INF and dist[u] + weight < dist[v]:
                dist[v] = dist[u] + weight
                parent[v] = u
                changed = True
        if not changed:
            break

    for u, v, weight in edges:
        if dist[u] != INF and dist[u] + weight < dist[v]:
            raise NegativeCycleError(
                f"Negative cycle reachable from {graph.value_of(source)!r} "
                f"through edge ({graph.value_of(u)!r}, {graph.value_of(v)!r})",
                context={"source": graph.value_of(source)},
            )

    return dist, parent


def _as_values(
    graph: Graph, dist: List[float], parent: Dict[int, Optional[int]]
) -> Tuple[Dict[NodeValue, float], Dict[NodeValue, Optional[NodeValue]]]:
    values = graph.nodes()
    dist_map = {values[i]: d for i, d in enumerate(dist)}
    parent_map = {
        values[i]: (values[p] if p is not None else None) for i, p in parent.items() if dist[i] != INF
    }
    return dist_map, parent_map


def dijkstra(
    graph: Graph, source: Any
) -> Tuple[Dict[NodeValue, float], Dict[NodeValue, Optional[NodeValue]]]:
    """
    Dijkstra's algorithm for single-source shortest paths.

    Args:
        graph: Graph with non-negative edge weights.
        source: Source node value.

    Returns:
        Tuple of:
        - dist: node -> shortest distance from source (inf if unreachable)
        - parent: reached node -> previous node on its shortest path (None
          for the source). Unreachable nodes are absent.

    Raises:
        NodeNotFoundError: If source is not in graph.
        NegativeWeightError: If graph contains a negative edge weight.

    Complexity: O((V + E) log V) using binary heap priority queue.

    Example:
        >>> G = build_graph(["A", "B"], ["B", "C"], [1.0, 2.0])
        >>> dist, parent = dijkstra(G, "A")
        >>> dist[NodeValue.text("C")]
        3.0
    """
    s = graph.index_of(source)
    _check_non_negative(graph)
    dist, parent = _dijkstra_indices(graph, s)
    return _as_values(graph, dist, parent)


def bellman_ford(
    graph: Graph, source: Any
) -> Tuple[Dict[NodeValue, float], Dict[NodeValue, Optional[NodeValue]]]:
    """
    Bellman-Ford algorithm for single-source shortest paths.

    Allows negative edge weights. On an UndirectedGraph a reachable negative
    edge is itself a negative cycle, since it can be walked back and forth.

    Args:
        graph: Graph (may have negative weights).
        source: Source node value.

    Returns:
        Same (dist, parent) pair as :func:`dijkstra`.

    Raises:
        NodeNotFoundError: If source is not in graph.
        NegativeCycleError: If a negative cycle is reachable from source.

    Complexity: O(VE).
    """
    s = graph.index_of(source)
    dist, parent = _bellman_ford_indices(graph, s)
    return _as_values(graph, dist, parent)


def shortest_path(
    graph: Graph, source: Any, target: Any, *, method: Optional[str] = None
) -> Optional[Tuple[List[NodeValue], float]]:
    """
    Find a minimum-weight path between two nodes.

    Args:
        graph: Graph to search.
        source: Start node value (NodeValue or int/float/str scalar).
        target: End node value.
        method: "dijkstra" or "bellman-ford". Defaults to
            ``graph.config.shortest_path_method``.

    Returns:
        (path, total_weight) with both endpoints included in path, or None if
        either endpoint is not in the graph or target is unreachable.

    Raises:
        ConfigError: If method is unknown.
        NegativeWeightError: With Dijkstra, if any edge weight is negative.
        NegativeCycleError: With Bellman-Ford, if a negative cycle is
            reachable from source.

    Example:
        >>> G = build_graph([1, 2, 1], [2, 3, 3], [1.0, 1.0, 5.0], directed=False)
        >>> path, cost = shortest_path(G, 1, 3)
        >>> [v.value for v in path], cost
        ([1, 2, 3], 2.0)
    """
    if method is None:
        method = graph.config.shortest_path_method
    if method not in SHORTEST_PATH_METHODS:
        raise ConfigError(
            f"Unknown shortest path method '{method}'. "
            f"Supported: {', '.join(SHORTEST_PATH_METHODS)}",
            context={"method": method},
        )

    if source not in graph or target not in graph:
        logger.debug("Shortest path endpoint missing: %r -> %r", source, target)
        return None

    s = graph.index_of(source)
    t = graph.index_of(target)
    if method == "dijkstra":
        _check_non_negative(graph)
        dist, parent = _dijkstra_indices(graph, s, t)
    else:
        dist, parent = _bellman_ford_indices(graph, s)

    if dist[t] == INF:
        return None

    path = reconstruct_path(parent, t)
    if path is None:
        return None
    return [graph.value_of(i) for i in path], dist[t]
