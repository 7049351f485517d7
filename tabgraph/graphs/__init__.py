"""
Graph engine for tabgraph.

This package provides:
- Node identity values (NodeValue: Int, Float, Text)
- Arena-backed graphs (DirectedGraph, UndirectedGraph)
- Bulk construction from parallel columns (GraphBuilder, build_graph)
- Strongly connected components and cycle discovery (Tarjan)
- Topological sort (Kahn) and connected components
- Shortest paths (Dijkstra, Bellman-Ford)

All algorithms are deterministic and follow node and edge insertion order.
"""

from .builder import GraphBuilder, build_graph
from .core import DirectedGraph, Edge, Graph, Node, UndirectedGraph
from .cycles import find_cycles, is_acyclic, strongly_connected_components
from .shortest import bellman_ford, dijkstra, shortest_path
from .traversal import connected_components, topological_sort
from .utils import reconstruct_path
from .values import NodeKind, NodeValue

__all__ = [
    "NodeKind",
    "NodeValue",
    "Node",
    "Edge",
    "Graph",
    "DirectedGraph",
    "UndirectedGraph",
    "GraphBuilder",
    "build_graph",
    "strongly_connected_components",
    "find_cycles",
    "is_acyclic",
    "topological_sort",
    "connected_components",
    "dijkstra",
    "bellman_ford",
    "shortest_path",
    "reconstruct_path",
]

# Example usage:
# from tabgraph.graphs import build_graph, find_cycles, shortest_path
#
# G = build_graph([1, 2, 3], [2, 3, 1])
# find_cycles(G)                       # [[Int(3), Int(2), Int(1)]]
# H = build_graph(["A", "B"], ["B", "C"], [1.0, 2.0], directed=False)
# shortest_path(H, "A", "C")           # ([Text('A'), Text('B'), Text('C')], 3.0)
