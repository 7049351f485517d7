"""Tests for strongly connected components and cycle discovery."""

import pytest

from tabgraph.config import GraphConfig
from tabgraph.graphs import (
    DirectedGraph,
    build_graph,
    find_cycles,
    is_acyclic,
    strongly_connected_components,
)


def as_sets(groups):
    return [{v.value for v in group} for group in groups]


class TestFindCycles:
    """Tests for find_cycles."""

    def test_single_cycle(self, triangle):
        """Test that a 3-cycle is one group of three."""
        cycles = find_cycles(triangle)
        assert as_sets(cycles) == [{1, 2, 3}]
        assert len(cycles[0]) == 3

    def test_cycle_with_tail(self):
        """Test that nodes hanging off a cycle are excluded."""
        G = build_graph([1, 2, 3, 4], [2, 3, 1, 5])
        assert as_sets(find_cycles(G)) == [{1, 2, 3}]

    def test_string_cycle(self):
        """Test cycles over text identities."""
        G = build_graph(["A", "B", "C", "D"], ["B", "C", "A", "E"])
        assert as_sets(find_cycles(G)) == [{"A", "B", "C"}]

    def test_no_cycle(self, dag):
        """Test that a DAG has no cycles."""
        assert find_cycles(dag) == []
        chain = build_graph([1, 2, 3, 4], [2, 3, 4, 5])
        assert find_cycles(chain) == []

    def test_disjoint_cycles(self):
        """Test two separate 2-cycles in discovery order."""
        G = build_graph([1, 2, 3, 4], [2, 1, 4, 3])
        assert as_sets(find_cycles(G)) == [{1, 2}, {3, 4}]

    def test_self_loop_not_a_cycle_by_default(self):
        """Test that a lone self-loop is not reported with the default policy."""
        G = build_graph([1, 2], [1, 3])
        assert find_cycles(G) == []

    def test_self_loop_policy_switch(self):
        """Test min_size=1 reports self-looped singletons only."""
        G = build_graph([1, 2], [1, 3])
        assert as_sets(find_cycles(G, min_size=1)) == [{1}]
        H = build_graph([1, 2], [1, 3], config=GraphConfig(min_cycle_size=1))
        assert as_sets(find_cycles(H)) == [{1}]

    def test_min_size_filters_small_components(self):
        """Test that larger min_size drops small cycles."""
        G = build_graph([1, 2, 3, 4, 5], [2, 1, 4, 5, 3])
        assert as_sets(find_cycles(G, min_size=3)) == [{3, 4, 5}]

    def test_parallel_edges_and_weights_ignored(self):
        """Test that parallel edges and odd weights do not affect cycles."""
        G = build_graph([1, 1, 2], [2, 2, 1], [float("nan"), -5.0, float("inf")])
        assert as_sets(find_cycles(G)) == [{1, 2}]

    def test_nested_cycles_merge(self):
        """Test that overlapping cycles form one component."""
        G = build_graph([1, 2, 3, 2, 4], [2, 3, 1, 4, 2])
        assert as_sets(find_cycles(G)) == [{1, 2, 3, 4}]

    def test_deterministic(self):
        """Test that repeated runs give identical output."""
        sources = [5, 1, 2, 3, 6, 7]
        destinations = [1, 2, 3, 1, 7, 6]
        first = find_cycles(build_graph(sources, destinations))
        second = find_cycles(build_graph(sources, destinations))
        assert first == second

    def test_deep_cycle_no_recursion_limit(self):
        """Test that a long cycle is handled iteratively."""
        n = 20000
        sources = list(range(n))
        destinations = list(range(1, n)) + [0]
        cycles = find_cycles(build_graph(sources, destinations))
        assert len(cycles) == 1
        assert len(cycles[0]) == n

    def test_undirected_rejected(self):
        """Test that cycle queries require a directed graph."""
        G = build_graph([1, 2], [2, 1], directed=False)
        with pytest.raises(TypeError):
            find_cycles(G)


class TestStronglyConnectedComponents:
    """Tests for strongly_connected_components."""

    def test_partition(self, random_edges):
        """Test that SCCs partition the node set."""
        sources, destinations = random_edges(30, 60)
        G = build_graph(sources, destinations)
        components = strongly_connected_components(G)
        seen = [v for component in components for v in component]
        assert len(seen) == len(set(seen)) == G.node_count()

    def test_includes_singletons(self):
        """Test that singletons are listed."""
        G = build_graph([1, 2, 3], [2, 1, 4])
        assert sorted(len(c) for c in strongly_connected_components(G)) == [1, 1, 2]

    def test_mutual_reachability(self, random_edges):
        """Test that members of a cycle reach each other."""
        sources, destinations = random_edges(12, 30)
        G = build_graph(sources, destinations)

        def reachable(start):
            seen, stack = {start}, [start]
            while stack:
                u = stack.pop()
                for v, _ in G.neighbors(u):
                    if v not in seen:
                        seen.add(v)
                        stack.append(v)
            return seen

        for component in find_cycles(G):
            for node in component:
                assert set(component) <= reachable(node)


class TestIsAcyclic:
    """Tests for is_acyclic."""

    def test_dag(self, dag):
        assert is_acyclic(dag)

    def test_cycle(self, triangle):
        assert not is_acyclic(triangle)

    def test_self_loop(self):
        """Test that a self-loop makes the graph cyclic."""
        G = build_graph([1, 2], [2, 2])
        assert not is_acyclic(G)
        assert find_cycles(G) == []

    def test_empty(self):
        assert is_acyclic(DirectedGraph())
