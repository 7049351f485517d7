"""
Node identity values.

A NodeValue is a closed tagged union over the three identity domains a graph
accepts: 64-bit signed integers, 64-bit floats and text. Values of different
domains are never equal, so the integer 1, the float 1.0 and the text "1" are
three different graph nodes.

Floats compare with IEEE equality except for NaN: every NaN equals every other
NaN and they all hash alike, so a column of NaNs collapses into a single node.
"""

from __future__ import annotations

import enum
import functools
import math
from dataclasses import dataclass
from typing import Any, Tuple, Union

import numpy as np

from ..errors import UnsupportedValueTypeError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Scalar = Union[int, float, str]


class NodeKind(enum.IntEnum):
    """Identity domain of a NodeValue. The integer value fixes sort order."""

    INT = 0
    FLOAT = 1
    TEXT = 2


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class NodeValue:
    """
    Immutable, hashable, totally ordered node identity.

    Ordering puts every Int before every Float before every Text. Within
    Float, NaN sorts after +inf.

    Attributes:
        kind: Identity domain.
        value: Underlying Python builtin (int, float or str).

    Example:
        >>> NodeValue.int_(1) == NodeValue.float_(1.0)
        False
        >>> NodeValue.float_(float("nan")) == NodeValue.float_(float("nan"))
        True
        >>> NodeValue.coerce("a")
        Text('a')
    """

    kind: NodeKind
    value: Scalar

    def __post_init__(self) -> None:
        expected = {NodeKind.INT: int, NodeKind.FLOAT: float, NodeKind.TEXT: str}[self.kind]
        if type(self.value) is not expected:
            raise UnsupportedValueTypeError(
                f"{self.kind.name} node value must be {expected.__name__}, "
                f"got {type(self.value).__name__}",
                context={"kind": self.kind.name, "type": type(self.value).__name__},
            )
        if self.kind is NodeKind.INT and not INT64_MIN <= self.value <= INT64_MAX:
            raise UnsupportedValueTypeError(
                f"Integer node value {self.value} does not fit in 64 bits",
                context={"value": self.value},
            )

    # Constructors -----------------------------------------------------

    @classmethod
    def int_(cls, value: Any) -> "NodeValue":
        """Build an Int node value, rejecting bools and out-of-range integers."""
        if _is_bool(value) or not isinstance(value, (int, np.integer)):
            raise UnsupportedValueTypeError(
                f"Expected an integer node value, got {type(value).__name__}",
                context={"type": type(value).__name__},
            )
        return cls(NodeKind.INT, int(value))

    @classmethod
    def float_(cls, value: Any) -> "NodeValue":
        """Build a Float node value from any real, non-bool number."""
        if _is_bool(value) or not isinstance(value, (int, float, np.integer, np.floating)):
            raise UnsupportedValueTypeError(
                f"Expected a float node value, got {type(value).__name__}",
                context={"type": type(value).__name__},
            )
        return cls(NodeKind.FLOAT, float(value))

    @classmethod
    def text(cls, value: Any) -> "NodeValue":
        """Build a Text node value."""
        if not isinstance(value, str):
            raise UnsupportedValueTypeError(
                f"Expected a text node value, got {type(value).__name__}",
                context={"type": type(value).__name__},
            )
        return cls(NodeKind.TEXT, str(value))

    @classmethod
    def coerce(cls, value: Any) -> "NodeValue":
        """
        Convert a Python or numpy scalar into a NodeValue.

        NodeValues pass through unchanged. The domain is picked from the
        scalar's type, never from its content, so "1" stays text.

        Raises:
            UnsupportedValueTypeError: For bools and any type outside
                int, float and str.
        """
        if isinstance(value, NodeValue):
            return value
        if _is_bool(value):
            raise UnsupportedValueTypeError(
                "Boolean node values are not supported",
                context={"type": type(value).__name__},
            )
        if isinstance(value, (int, np.integer)):
            return cls.int_(value)
        if isinstance(value, (float, np.floating)):
            return cls.float_(value)
        if isinstance(value, str):
            return cls.text(value)
        raise UnsupportedValueTypeError(
            f"Unsupported node value type: {type(value).__name__}",
            context={"type": type(value).__name__},
        )

    # Equality, hashing and ordering ---------------------------------------

    def _key(self) -> Tuple[int, int, Scalar]:
        if self.kind is NodeKind.FLOAT and math.isnan(self.value):
            return (self.kind, 1, 0.0)
        return (self.kind, 0, self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeValue):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "NodeValue") -> bool:
        if not isinstance(other, NodeValue):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"{self.kind.name.capitalize()}({self.value!r})"

    @property
    def is_nan(self) -> bool:
        return self.kind is NodeKind.FLOAT and math.isnan(self.value)
