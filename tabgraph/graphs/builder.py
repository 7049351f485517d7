"""
Bulk graph construction from parallel columns.

The builder takes aligned source, destination and optional weight sequences,
drops every row holding a null in any of them, validates the rest, and only
then creates the graph. A failed build never hands back a partial graph.
"""

from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from ..config import DEFAULT_CONFIG, GraphConfig
from ..errors import LengthMismatchError, UnsupportedValueTypeError
from ..logging import get_logger
from .core import DirectedGraph, Graph, UndirectedGraph, as_weight
from .values import NodeValue

logger = get_logger(__name__)

Row = Tuple[NodeValue, NodeValue, float]


def _as_list(values: Sequence[Any], name: str) -> List[Any]:
    """Materialise a column as Python objects; masked entries become None."""
    if isinstance(values, np.ndarray):
        if values.dtype.kind == "b":
            raise UnsupportedValueTypeError(
                f"Column '{name}' has unsupported dtype {values.dtype}",
                context={"column": name, "dtype": str(values.dtype)},
            )
        # MaskedArray.tolist() maps masked entries to None
        return values.tolist()
    return list(values)


def _node(value: Any, name: str, position: int) -> NodeValue:
    try:
        return NodeValue.coerce(value)
    except UnsupportedValueTypeError as exc:
        raise UnsupportedValueTypeError(
            f"{exc} in column '{name}' at row {position}",
            context={"column": name, "row": position, "type": type(value).__name__},
        ) from exc


def _weight(value: Any, position: int) -> float:
    try:
        return as_weight(value)
    except UnsupportedValueTypeError as exc:
        raise UnsupportedValueTypeError(
            f"{exc} in column 'weights' at row {position}",
            context={"column": "weights", "row": position, "type": type(value).__name__},
        ) from exc


class GraphBuilder:
    """
    Builds DirectedGraph or UndirectedGraph instances from edge columns.

    Nodes are numbered in order of first appearance, scanning every kept
    source before any destination. Edges keep input order, duplicates and
    self-loops included.

    Args:
        config: Build settings (graph variant, default weight). Defaults to
            DEFAULT_CONFIG.

    Example:
        >>> G = GraphBuilder().build([1, 2, 3], [2, 3, 1])
        >>> G.node_count(), G.edge_count()
        (3, 3)
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

    def build(
        self,
        sources: Sequence[Any],
        destinations: Sequence[Any],
        weights: Optional[Sequence[Any]] = None,
        *,
        directed: Optional[bool] = None,
    ) -> Graph:
        """
        Build a graph from parallel columns.

        Args:
            sources: Source node values (int, float or str; None is null).
            destinations: Destination node values, same length as sources.
            weights: Optional edge weights, same length as sources. When
                omitted every edge gets ``config.default_weight``.
            directed: Overrides ``config.directed`` when given.

        Returns:
            The built graph; its config records the variant actually built.

        Raises:
            LengthMismatchError: If column lengths differ.
            UnsupportedValueTypeError: If a node value or weight is outside the
                supported domains.
        """
        config = self.config
        if directed is not None and directed != config.directed:
            config = config.replace(directed=directed)

        rows, dropped = self._rows(sources, destinations, weights, config.default_weight)

        graph: Graph = DirectedGraph(config) if config.directed else UndirectedGraph(config)
        for source, _, _ in rows:
            graph.add_node(source)
        for _, target, _ in rows:
            graph.add_node(target)
        for source, target, weight in rows:
            graph.add_edge(source, target, weight)

        logger.debug(
            "Built %s with %d nodes and %d edges (%d null rows dropped)",
            type(graph).__name__,
            graph.node_count(),
            graph.edge_count(),
            dropped,
        )
        return graph

    @staticmethod
    def _rows(
        sources: Sequence[Any],
        destinations: Sequence[Any],
        weights: Optional[Sequence[Any]],
        default_weight: float,
    ) -> Tuple[List[Row], int]:
        src = _as_list(sources, "sources")
        dst = _as_list(destinations, "destinations")
        if len(src) != len(dst):
            raise LengthMismatchError(
                f"sources has {len(src)} entries but destinations has {len(dst)}",
                context={"sources": len(src), "destinations": len(dst)},
            )
        if weights is None:
            wgt: List[Any] = [default_weight] * len(src)
        else:
            wgt = _as_list(weights, "weights")
            if len(wgt) != len(src):
                raise LengthMismatchError(
                    f"weights has {len(wgt)} entries but sources has {len(src)}",
                    context={"sources": len(src), "weights": len(wgt)},
                )

        rows: List[Row] = []
        dropped = 0
        for position, (s, d, w) in enumerate(zip(src, dst, wgt)):
            if s is None or d is None or w is None:
                dropped += 1
                continue
            rows.append(
                (
                    _node(s, "sources", position),
                    _node(d, "destinations", position),
                    _weight(w, position),
                )
            )
        return rows, dropped


def build_graph(
    sources: Sequence[Any],
    destinations: Sequence[Any],
    weights: Optional[Sequence[Any]] = None,
    *,
    directed: Optional[bool] = None,
    config: Optional[GraphConfig] = None,
) -> Graph:
    """
    Build a graph from parallel source/destination/weight columns.

    Shorthand for ``GraphBuilder(config).build(...)``.

    Example:
        >>> G = build_graph(["a", "b"], ["b", "c"], [0.5, 2.0], directed=False)
        >>> G.has_edge("b", "a")
        True
    """
    return GraphBuilder(config).build(sources, destinations, weights, directed=directed)
