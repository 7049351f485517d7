"""Error hierarchy for tabgraph.

Every failure raised by the package derives from :class:`GraphError`, which is
itself a ``ValueError`` so callers that only know about builtin exceptions keep
working. Some errors additionally derive from ``TypeError`` or ``KeyError``
where that is the natural builtin for the failure.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional


class GraphError(ValueError):
    """Base exception for tabgraph failures."""

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context) if context else {}

    def __str__(self) -> str:
        return self.message

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class LengthMismatchError(GraphError):
    """Parallel input columns have different lengths."""


class UnsupportedValueTypeError(GraphError, TypeError):
    """A node identity or weight lies outside the supported domains."""


class CycleDetectedError(GraphError):
    """An operation that needs an acyclic graph was given a cyclic one.

    Attributes:
        cycle: Node values of one offending cycle.
    """

    def __init__(
        self,
        message: str,
        cycle: Optional[List[Any]] = None,
        *,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.cycle = list(cycle) if cycle else []


class NodeNotFoundError(GraphError, KeyError):
    """A node value is not present in the graph."""


class NegativeWeightError(GraphError):
    """Dijkstra was asked to run over a negative edge weight."""


class NegativeCycleError(GraphError):
    """A negative-weight cycle is reachable from the shortest-path source."""


class ColumnNotFoundError(GraphError, KeyError):
    """A named column is missing from the input frame."""


class ConfigError(GraphError):
    """Invalid configuration value."""


__all__ = [
    "GraphError",
    "LengthMismatchError",
    "UnsupportedValueTypeError",
    "CycleDetectedError",
    "NodeNotFoundError",
    "NegativeWeightError",
    "NegativeCycleError",
    "ColumnNotFoundError",
    "ConfigError",
]
