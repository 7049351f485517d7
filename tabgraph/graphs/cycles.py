"""
Strongly connected components and cycle discovery.

Tarjan's algorithm, run iteratively so deep graphs never hit the interpreter
recursion limit. Roots are tried in node-arena order and each node's outgoing
edges in edge-arena order, which makes the component order reproducible.

References:
    - Tarjan, R. "Depth-first search and linear graph algorithms".
      SIAM Journal on Computing 1(2), 1972.
    - Cormen, Leiserson, Rivest, Stein. "Introduction to Algorithms", 3rd ed.
      Chapter 22.5 (Strongly connected components).
"""

from typing import Iterator, List, Optional, Tuple

from ..logging import get_logger
from .core import Edge, Graph
from .values import NodeValue

logger = get_logger(__name__)


def require_directed(graph: Graph, operation: str) -> None:
    if not graph.directed:
        raise TypeError(f"{operation} requires a DirectedGraph, got {type(graph).__name__}")


def scc_indices(graph: Graph) -> List[List[int]]:
    """
    Tarjan's SCC algorithm over node indices.

    Components are returned in completion order, which is a reverse
    topological order of the condensation.

    Complexity: O(V + E).
    """
    n = graph.node_count()
    discovery = [-1] * n
    low = [0] * n
    on_stack = [False] * n
    stack: List[int] = []
    components: List[List[int]] = []
    counter = 0

    for root in range(n):
        if discovery[root] != -1:
            continue

        discovery[root] = low[root] = counter
        counter += 1
        stack.append(root)
        on_stack[root] = True
        work: List[Tuple[int, Iterator[Tuple[int, Edge]]]] = [(root, graph.successors_at(root))]

        while work:
            v, successors = work[-1]
            descended = False
            for w, _ in successors:
                if discovery[w] == -1:
                    discovery[w] = low[w] = counter
                    counter += 1
                    stack.append(w)
                    on_stack[w] = True
                    work.append((w, graph.successors_at(w)))
                    descended = True
                    break
                if on_stack[w]:
                    low[v] = min(low[v], discovery[w])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                low[parent] = min(low[parent], low[v])

            if low[v] == discovery[v]:
                component: List[int] = []
                while True:
                    w = stack.pop()
                    on_stack[w] = False
                    component.append(w)
                    if w == v:
                        break
                components.append(component)

    return components


def strongly_connected_components(graph: Graph) -> List[List[NodeValue]]:
    """
    Return every strongly connected component, singletons included.

    Args:
        graph: DirectedGraph to analyse.

    Returns:
        List of components, each a list of node values. Order within a
        component is not meaningful.

    Raises:
        TypeError: If graph is undirected.

    Example:
        >>> G = build_graph([1, 2, 3], [2, 1, 3])
        >>> sorted(len(c) for c in strongly_connected_components(G))
        [1, 2]
    """
    require_directed(graph, "strongly_connected_components")
    return [[graph.value_of(i) for i in component] for component in scc_indices(graph)]


def find_cycles(graph: Graph, min_size: Optional[int] = None) -> List[List[NodeValue]]:
    """
    Return the strongly connected components that count as cycles.

    A component is a cycle when it has at least ``min_size`` nodes. With the
    default ``min_size`` of 2 a node whose only cycle is a self-loop is not
    reported. With ``min_size=1`` self-looped singletons are reported too;
    singletons without a self-loop never are.

    Args:
        graph: DirectedGraph to analyse.
        min_size: Smallest reported component. Defaults to
            ``graph.config.min_cycle_size``.

    Returns:
        Cycles in discovery order, each a list of node values.

    Raises:
        TypeError: If graph is undirected.

    Example:
        >>> G = build_graph([1, 2, 3, 4], [2, 1, 4, 3])
        >>> [sorted(v.value for v in c) for c in find_cycles(G)]
        [[1, 2], [3, 4]]
    """
    require_directed(graph, "find_cycles")
    if min_size is None:
        min_size = graph.config.min_cycle_size

    cycles: List[List[NodeValue]] = []
    for component in scc_indices(graph):
        if len(component) < min_size:
            continue
        if len(component) == 1 and not graph.has_self_loop_at(component[0]):
            continue
        cycles.append([graph.value_of(i) for i in component])

    logger.debug("Found %d cycles in %r (min_size=%d)", len(cycles), graph, min_size)
    return cycles


def is_acyclic(graph: Graph) -> bool:
    """
    Return True if the directed graph has no cycle at all, self-loops included.

    Raises:
        TypeError: If graph is undirected.
    """
    require_directed(graph, "is_acyclic")
    if graph.self_loop_indices():
        return False
    return all(len(component) == 1 for component in scc_indices(graph))
