"""tabgraph - graph queries over tabular edge lists."""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, GraphConfig
from .errors import (
    ColumnNotFoundError,
    ConfigError,
    CycleDetectedError,
    GraphError,
    LengthMismatchError,
    NegativeCycleError,
    NegativeWeightError,
    NodeNotFoundError,
    UnsupportedValueTypeError,
)
from .frames import cycles_column, graph_from_frame
from .graphs import (
    DirectedGraph,
    Edge,
    Graph,
    GraphBuilder,
    Node,
    NodeKind,
    NodeValue,
    UndirectedGraph,
    bellman_ford,
    build_graph,
    connected_components,
    dijkstra,
    find_cycles,
    is_acyclic,
    reconstruct_path,
    shortest_path,
    strongly_connected_components,
    topological_sort,
)
from .logging import configure_logging, get_logger, set_log_level

__all__ = [
    "__version__",
    # Configuration
    "GraphConfig",
    "DEFAULT_CONFIG",
    # Errors
    "GraphError",
    "LengthMismatchError",
    "UnsupportedValueTypeError",
    "CycleDetectedError",
    "NodeNotFoundError",
    "NegativeWeightError",
    "NegativeCycleError",
    "ColumnNotFoundError",
    "ConfigError",
    # Graph engine
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
    # Column adapter
    "graph_from_frame",
    "cycles_column",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
