"""
Utility functions for graph algorithms.

Provides path reconstruction from parent maps and weighted edge iteration
that respects each graph variant's walking rules.
"""

from typing import Dict, Hashable, Iterator, List, Optional, Tuple

from .core import Graph


def reconstruct_path(
    parent: Dict[Hashable, Optional[Hashable]], target: Hashable
) -> Optional[List[Hashable]]:
    """
    Reconstruct path from source to target using parent map.

    The parent map should come from a shortest-path algorithm where
    parent[node] is the previous node on the shortest path and the source maps
    to None. Nodes never reached are absent from the map.

    Args:
        parent: Dictionary mapping node -> parent node (or None for the source).
        target: Target node to reconstruct path to.

    Returns:
        List of nodes from source to target (inclusive), or None if target
        is unreachable or the parent map loops.

    Example:
        >>> parent = {'A': None, 'B': 'A', 'C': 'B'}
        >>> reconstruct_path(parent, 'C')
        ['A', 'B', 'C']
        >>> reconstruct_path(parent, 'D') is None
        True
    """
    if target not in parent:
        return None

    path = []
    current: Optional[Hashable] = target
    visited = set()
    while current is not None:
        if current in visited:
            return None
        visited.add(current)
        path.append(current)
        current = parent.get(current)

    path.reverse()
    return path


def relaxation_edges(graph: Graph) -> Iterator[Tuple[int, int, float]]:
    """
    Yield (u, v, weight) index triples for every walkable edge orientation.

    Directed edges yield once. Undirected edges yield both ways, except
    self-loops which yield once.
    """
    for edge in graph.edge_records():
        yield edge.source, edge.target, edge.weight
        if not graph.directed and edge.source != edge.target:
            yield edge.target, edge.source, edge.weight
