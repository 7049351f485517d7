"""Pytest configuration and shared fixtures for tabgraph tests.

This module provides:
- A deterministic numpy RNG fixture for randomised edge lists
- Small reference graphs reused across test modules
"""

import os

import numpy as np
import pytest

from tabgraph.graphs import build_graph


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This keeps tests reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def triangle():
    """Directed 3-cycle 1 -> 2 -> 3 -> 1."""
    return build_graph([1, 2, 3], [2, 3, 1])


@pytest.fixture
def dag():
    """Directed acyclic graph 1 -> 2 -> 3 with shortcut 1 -> 3."""
    return build_graph([1, 2, 1], [2, 3, 3])


@pytest.fixture
def weighted_undirected():
    """Undirected path 1 - 2 - 3 (weights 1) with a direct 1 - 3 edge of weight 5."""
    return build_graph([1, 2, 1], [2, 3, 3], [1.0, 1.0, 5.0], directed=False)


@pytest.fixture
def random_edges(rng: np.random.Generator):
    """Factory for random int64 edge lists; self-loops and parallel edges allowed."""

    def make(n_nodes: int, n_edges: int):
        sources = rng.integers(0, n_nodes, size=n_edges)
        destinations = rng.integers(0, n_nodes, size=n_edges)
        return sources, destinations

    return make
