"""Tests for bulk graph construction."""

import logging
from io import StringIO

import numpy as np
import pytest

from tabgraph.config import GraphConfig
from tabgraph.errors import LengthMismatchError, UnsupportedValueTypeError
from tabgraph.graphs import DirectedGraph, GraphBuilder, NodeValue, UndirectedGraph, build_graph
from tabgraph.logging import configure_logging


class TestBuildGraph:
    """Tests for build_graph and GraphBuilder."""

    def test_build_counts(self):
        """Test node and edge counts on a 3-cycle."""
        G = build_graph([1, 2, 3], [2, 3, 1])
        assert isinstance(G, DirectedGraph)
        assert G.node_count() == 3
        assert G.edge_count() == 3

    def test_undirected_variant(self):
        """Test that directed=False builds an UndirectedGraph."""
        G = build_graph(["a"], ["b"], directed=False)
        assert isinstance(G, UndirectedGraph)
        assert G.config.directed is False
        assert G.has_edge("b", "a")

    def test_config_variant(self):
        """Test that the config picks the variant when directed is omitted."""
        G = GraphBuilder(GraphConfig(directed=False)).build([1], [2])
        assert isinstance(G, UndirectedGraph)

    def test_default_weight(self):
        """Test that missing weights default to 1.0, or to the configured value."""
        G = build_graph([1, 2], [2, 3])
        assert [w for _, _, w in G.edges()] == [1.0, 1.0]
        H = build_graph([1], [2], config=GraphConfig(default_weight=2.5))
        assert H.edges()[0][2] == 2.5

    def test_weights_kept(self):
        """Test that explicit weights, including odd values, are kept."""
        weights = [-1.0, 0.0, float("inf")]
        G = build_graph([1, 2, 3], [2, 3, 4], weights)
        assert [w for _, _, w in G.edges()] == weights

    def test_node_order_sources_first(self):
        """Test that sources are numbered before destinations."""
        G = build_graph(["x", "y"], ["z", "x"])
        assert G.nodes() == [NodeValue.text("x"), NodeValue.text("y"), NodeValue.text("z")]

    def test_duplicates_and_self_loops_preserved(self):
        """Test edge fidelity with duplicates and self-loops."""
        G = build_graph([1, 1, 2, 2], [2, 2, 2, 1])
        assert G.node_count() == 2
        assert G.edge_count() == 4

    def test_empty_input(self):
        """Test that empty columns give an empty graph."""
        G = build_graph([], [])
        assert G.node_count() == 0
        assert G.edge_count() == 0

    def test_numpy_columns(self):
        """Test numpy array input of each identity dtype."""
        G = build_graph(np.array([1, 2], dtype=np.int32), np.array([2, 3], dtype=np.int32))
        assert G.nodes() == [NodeValue.int_(1), NodeValue.int_(2), NodeValue.int_(3)]
        H = build_graph(np.array(["a", "b"]), np.array(["b", "c"]))
        assert NodeValue.text("c") in H.nodes()
        F = build_graph(np.array([0.5, np.nan]), np.array([np.nan, 0.5]))
        assert F.node_count() == 2
        assert F.edge_count() == 2

    def test_nan_nodes_collapse(self):
        """Test that repeated NaN identities are one node."""
        G = build_graph([float("nan"), 1.0], [2.0, float("nan")])
        assert G.node_count() == 3
        assert G.has_edge(float("nan"), 2.0)
        assert G.has_edge(1.0, float("nan"))

    def test_int_and_float_distinct(self):
        """Test that 1 and 1.0 are different nodes."""
        G = build_graph([1], [1.0])
        assert G.node_count() == 2
        assert not G.has_self_loop(1)


class TestNullHandling:
    """Tests for row-wise null dropping."""

    def test_null_in_any_column_drops_row(self):
        """Test that a null in source, destination or weight drops that edge."""
        G = build_graph([1, None, 3, 4], [2, 3, None, 5], [1.0, 1.0, 1.0, None])
        assert G.edge_count() == 1
        assert G.edges() == [(NodeValue.int_(1), NodeValue.int_(2), 1.0)]
        # Values only seen on dropped rows do not become nodes
        assert G.node_count() == 2

    def test_all_null(self):
        """Test that all-null columns give an empty graph."""
        G = build_graph([None, None], [None, None])
        assert G.node_count() == 0
        assert G.edge_count() == 0

    def test_masked_arrays(self):
        """Test that masked entries count as nulls."""
        sources = np.ma.array([1, 2, 3], mask=[False, True, False])
        destinations = np.ma.array([2, 3, 1], mask=[False, False, False])
        G = build_graph(sources, destinations)
        assert G.edge_count() == 2
        assert not G.has_edge(2, 3)

    def test_nan_weight_is_not_null(self):
        """Test that a NaN weight keeps its edge."""
        G = build_graph([1], [2], [float("nan")])
        assert G.edge_count() == 1


class TestBuildErrors:
    """Tests for construction-time errors."""

    def test_length_mismatch(self):
        """Test sources/destinations length mismatch."""
        with pytest.raises(LengthMismatchError) as excinfo:
            build_graph([1, 2, 3], [1, 2])
        assert excinfo.value.context == {"sources": 3, "destinations": 2}

    def test_weight_length_mismatch(self):
        """Test weights length mismatch."""
        with pytest.raises(LengthMismatchError):
            build_graph([1, 2], [2, 3], [1.0])

    def test_length_checked_before_nulls(self):
        """Test that nulls do not hide a length mismatch."""
        with pytest.raises(LengthMismatchError):
            build_graph([1, None], [2])

    def test_boolean_column_rejected(self):
        """Test that boolean node columns are rejected."""
        with pytest.raises(UnsupportedValueTypeError):
            build_graph([True, False, True], [False, True, True])
        with pytest.raises(UnsupportedValueTypeError):
            build_graph(np.array([True, False]), np.array([False, True]))

    def test_unsupported_value_reports_position(self):
        """Test that errors name the column and row."""
        with pytest.raises(UnsupportedValueTypeError) as excinfo:
            build_graph([1, 2, 3], [2, (3,), 1])
        assert excinfo.value.context["column"] == "destinations"
        assert excinfo.value.context["row"] == 1
        assert "destinations" in excinfo.value.log_message()

    def test_bad_weight(self):
        """Test that non-numeric weights are rejected."""
        with pytest.raises(UnsupportedValueTypeError) as excinfo:
            build_graph([1, 2], [2, 3], [1.0, "x"])
        assert excinfo.value.context["column"] == "weights"


class TestBuilderProperties:
    """Dedup and fidelity invariants on random edge lists."""

    @pytest.mark.parametrize("n_nodes,n_edges", [(1, 5), (5, 20), (50, 200)])
    def test_dedup_and_fidelity(self, random_edges, n_nodes, n_edges):
        """Test node_count == unique values and edge_count == rows."""
        sources, destinations = random_edges(n_nodes, n_edges)
        for directed in (True, False):
            G = build_graph(sources, destinations, directed=directed)
            unique = set(sources.tolist()) | set(destinations.tolist())
            assert G.node_count() == len(unique)
            assert G.edge_count() == n_edges
            for u, v in zip(sources.tolist(), destinations.tolist()):
                assert G.has_edge(u, v)
                if not directed:
                    assert G.has_edge(v, u)


def test_build_logs_summary():
    """Test that a build emits a DEBUG summary."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    try:
        build_graph([1, None], [2, 3])
        output = stream.getvalue()
        assert "Built DirectedGraph with 2 nodes and 1 edges (1 null rows dropped)" in output
    finally:
        configure_logging(level=logging.WARNING)
