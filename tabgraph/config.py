"""Configuration for graph construction and queries."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from .errors import ConfigError

SHORTEST_PATH_METHODS = ("dijkstra", "bellman-ford")


@dataclass(frozen=True)
class GraphConfig:
    """
    Settings shared by the builder and the query algorithms.

    A graph keeps the config it was built with, so query functions can fall
    back to it when a per-call override is not given.

    Args:
        directed: Build a DirectedGraph when True, an UndirectedGraph otherwise.
        default_weight: Weight assigned to every edge when no weight column is
            supplied. Must be finite. Defaults to 1.0.
        min_cycle_size: Smallest strongly connected component reported by
            ``find_cycles``. The default of 2 leaves lone self-loops out; set it
            to 1 to report them.
        shortest_path_method: "dijkstra" (non-negative weights only) or
            "bellman-ford" (negative weights allowed).

    Raises:
        ConfigError: If any field is out of range.
    """

    directed: bool = True
    default_weight: float = 1.0
    min_cycle_size: int = 2
    shortest_path_method: str = "dijkstra"

    def __post_init__(self) -> None:
        if not math.isfinite(self.default_weight):
            raise ConfigError(
                f"default_weight must be finite, got {self.default_weight}",
                context={"field": "default_weight"},
            )
        if self.min_cycle_size < 1:
            raise ConfigError(
                f"min_cycle_size must be at least 1, got {self.min_cycle_size}",
                context={"field": "min_cycle_size"},
            )
        if self.shortest_path_method not in SHORTEST_PATH_METHODS:
            raise ConfigError(
                f"Unknown shortest_path_method '{self.shortest_path_method}'. "
                f"Supported: {', '.join(SHORTEST_PATH_METHODS)}",
                context={"field": "shortest_path_method"},
            )

    def replace(self, **changes) -> "GraphConfig":
        """Return a copy with the given fields changed (validated again)."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = GraphConfig()
