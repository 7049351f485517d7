"""
Core graph data structures.

Nodes and edges live in append-only arenas addressed by integer indices. A
dedup table maps every NodeValue to its node index, and per-node lists of edge
indices give adjacency. DirectedGraph and UndirectedGraph share storage and
differ only in which way an edge can be walked.

Iteration follows arena insertion order everywhere, so every algorithm built
on top is deterministic for a given edge list.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..config import DEFAULT_CONFIG, GraphConfig
from ..errors import NodeNotFoundError, UnsupportedValueTypeError
from .values import NodeValue


@dataclass(frozen=True)
class Node:
    """A node arena slot: its index and the value it was built from."""

    index: int
    value: NodeValue


@dataclass(frozen=True)
class Edge:
    """An edge arena slot. ``source`` and ``target`` are node indices."""

    index: int
    source: int
    target: int
    weight: float


def as_weight(weight: Any) -> float:
    """
    Convert an edge weight to float.

    Any real number is accepted, including negative, zero, infinite and NaN
    values. Bools and non-numbers are rejected.

    Raises:
        UnsupportedValueTypeError: If weight is not a real number.
    """
    if isinstance(weight, (bool, np.bool_)) or not isinstance(
        weight, (int, float, np.integer, np.floating)
    ):
        raise UnsupportedValueTypeError(
            f"Edge weight must be a real number, got {type(weight).__name__}",
            context={"type": type(weight).__name__},
        )
    return float(weight)


class Graph:
    """
    Arena-backed multigraph base class.

    Use DirectedGraph or UndirectedGraph; this class holds the shared storage
    and lookups.

    Attributes:
        directed: True for DirectedGraph, False for UndirectedGraph.
        config: Settings the graph was built with.

    Complexity:
        - add_node: O(1) amortized
        - add_edge: O(1) amortized
        - has_edge: O(1)
        - neighbors: O(deg(v))
        - nodes / edges: O(V) / O(E)
    """

    directed: bool = True

    def __init__(self, config: Optional[GraphConfig] = None):
        """
        Initialize an empty graph.

        Args:
            config: Settings consulted by query functions. Defaults to
                DEFAULT_CONFIG.
        """
        self.config = config if config is not None else DEFAULT_CONFIG
        self._values: List[NodeValue] = []
        self._index: Dict[NodeValue, int] = {}
        self._edges: List[Edge] = []
        self._out: List[List[int]] = []
        self._in: List[List[int]] = []
        self._pairs: Dict[Tuple[int, int], int] = {}

    # Construction -----------------------------------------------------

    def add_node(self, value: Any) -> Node:
        """
        Add a node, or return the existing one with an equal value.

        Args:
            value: NodeValue or int/float/str scalar.

        Returns:
            The Node for that value.
        """
        value = NodeValue.coerce(value)
        index = self._index.get(value)
        if index is None:
            index = len(self._values)
            self._values.append(value)
            self._index[value] = index
            self._out.append([])
            self._in.append([])
        return Node(index, self._values[index])

    def add_edge(self, u: Any, v: Any, weight: Any = 1.0) -> Edge:
        """
        Append an edge from u to v. Missing endpoints are added first.

        Parallel edges and self-loops are kept as separate records.

        Args:
            u: Source node value.
            v: Target node value.
            weight: Edge weight (default 1.0).

        Returns:
            The new Edge.
        """
        weight = as_weight(weight)
        source = self.add_node(u).index
        target = self.add_node(v).index
        edge = Edge(len(self._edges), source, target, weight)
        self._edges.append(edge)
        self._link(edge)
        key = self._pair_key(source, target)
        self._pairs[key] = self._pairs.get(key, 0) + 1
        return edge

    def _link(self, edge: Edge) -> None:
        raise NotImplementedError

    def _pair_key(self, source: int, target: int) -> Tuple[int, int]:
        raise NotImplementedError

    # Index-level access -----------------------------------------------

    def successors_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        """Yield (neighbor index, edge) pairs reachable in one step."""
        raise NotImplementedError

    def adjacent_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        """Yield (neighbor index, edge) pairs ignoring edge direction."""
        raise NotImplementedError

    def in_degree_at(self, index: int) -> int:
        """Number of edge records that can be walked into a node index."""
        raise NotImplementedError

    def has_self_loop_at(self, index: int) -> bool:
        return (index, index) in self._pairs

    def self_loop_indices(self) -> List[int]:
        """Return the node indices carrying at least one self-loop, ascending."""
        return sorted(source for source, target in self._pairs if source == target)

    # Queries ----------------------------------------------------------

    def node_count(self) -> int:
        return len(self._values)

    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: Any) -> bool:
        if not isinstance(value, NodeValue):
            try:
                value = NodeValue.coerce(value)
            except UnsupportedValueTypeError:
                return False
        return value in self._index

    def nodes(self) -> List[NodeValue]:
        """Return all node values in insertion order."""
        return list(self._values)

    def edges(self) -> List[Tuple[NodeValue, NodeValue, float]]:
        """
        Return all edges as (source, target, weight) in insertion order.

        Undirected edges appear once, in the orientation they were added.
        """
        return [(self._values[e.source], self._values[e.target], e.weight) for e in self._edges]

    def edge_records(self) -> List[Edge]:
        """Return the raw edge arena."""
        return list(self._edges)

    def index_of(self, value: Any) -> int:
        """
        Return the arena index of a node value.

        Raises:
            NodeNotFoundError: If the value is not in the graph.
        """
        key = value if isinstance(value, NodeValue) else NodeValue.coerce(value)
        try:
            return self._index[key]
        except KeyError:
            raise NodeNotFoundError(f"Node {key!r} not in graph", context={"node": key}) from None

    def node(self, value: Any) -> Node:
        """Return the Node for a value, raising NodeNotFoundError if absent."""
        index = self.index_of(value)
        return Node(index, self._values[index])

    def value_of(self, index: int) -> NodeValue:
        """Return the NodeValue stored at a node index."""
        return self._values[index]

    def has_edge(self, u: Any, v: Any) -> bool:
        """
        Return True if at least one edge can be walked from u to v.

        Unknown node values simply give False.
        """
        if u not in self or v not in self:
            return False
        key = self._pair_key(self.index_of(u), self.index_of(v))
        return key in self._pairs

    def neighbors(self, value: Any) -> List[Tuple[NodeValue, float]]:
        """
        Return (neighbor, weight) pairs reachable from a node in one step.

        One entry per edge, in insertion order, so parallel edges repeat the
        neighbor.

        Raises:
            NodeNotFoundError: If the node is not in graph.
        """
        index = self.index_of(value)
        return [(self._values[j], edge.weight) for j, edge in self.successors_at(index)]

    def has_self_loop(self, value: Any) -> bool:
        return self.has_self_loop_at(self.index_of(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={self.node_count()}, edges={self.edge_count()})"


class DirectedGraph(Graph):
    """
    Graph whose edge (u, v) can only be walked from u to v.

    Example:
        >>> G = DirectedGraph()
        >>> _ = G.add_edge(1, 2)
        >>> G.has_edge(1, 2), G.has_edge(2, 1)
        (True, False)
    """

    directed = True

    def _link(self, edge: Edge) -> None:
        self._out[edge.source].append(edge.index)
        self._in[edge.target].append(edge.index)

    def _pair_key(self, source: int, target: int) -> Tuple[int, int]:
        return (source, target)

    def successors_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        for e in self._out[index]:
            edge = self._edges[e]
            yield edge.target, edge

    def predecessors_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        for e in self._in[index]:
            edge = self._edges[e]
            yield edge.source, edge

    def adjacent_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        yield from self.successors_at(index)
        yield from self.predecessors_at(index)

    def in_degree_at(self, index: int) -> int:
        return len(self._in[index])

    def in_degree(self, value: Any) -> int:
        return self.in_degree_at(self.index_of(value))

    def out_degree(self, value: Any) -> int:
        return len(self._out[self.index_of(value)])

    def predecessors(self, value: Any) -> List[Tuple[NodeValue, float]]:
        """Return (predecessor, weight) pairs, one per incoming edge."""
        index = self.index_of(value)
        return [(self._values[j], edge.weight) for j, edge in self.predecessors_at(index)]


class UndirectedGraph(Graph):
    """
    Graph whose edges can be walked both ways.

    Each edge is stored once and indexed under both endpoints; a self-loop is
    indexed once under its node.

    Example:
        >>> G = UndirectedGraph()
        >>> _ = G.add_edge(1, 2)
        >>> G.has_edge(1, 2), G.has_edge(2, 1)
        (True, True)
    """

    directed = False

    def _link(self, edge: Edge) -> None:
        self._out[edge.source].append(edge.index)
        if edge.target != edge.source:
            self._out[edge.target].append(edge.index)

    def _pair_key(self, source: int, target: int) -> Tuple[int, int]:
        return (source, target) if source <= target else (target, source)

    def successors_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        for e in self._out[index]:
            edge = self._edges[e]
            yield (edge.target if edge.source == index else edge.source), edge

    def adjacent_at(self, index: int) -> Iterator[Tuple[int, Edge]]:
        return self.successors_at(index)

    def in_degree_at(self, index: int) -> int:
        return len(self._out[index])

    def degree(self, value: Any) -> int:
        """Number of incident edge records (a self-loop counts once)."""
        return len(self._out[self.index_of(value)])
