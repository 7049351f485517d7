"""Column adapter: build graphs from named columns of a tabular container.

``frame`` can be anything indexable by column name that supports ``in`` for
column membership: a ``dict`` of arrays, a pandas or polars DataFrame, or a
numpy structured array. Columns are converted to numpy arrays and their dtypes
are checked before any graph is built:

- source and destination must share one identity dtype family: int32, int64,
  float64 or text (numpy unicode, or object arrays holding str);
- the weight column must be float64 (object arrays of numbers are accepted).

Missing entries become masked entries, so the builder drops their rows.
pandas nullable columns (``Int64``, ``Float64``, ``string``) and polars
columns keep their logical dtype, with ``pd.NA`` or polars ``null`` masked.
In object columns ``None`` and float NaN are missing markers. In float64
columns NaN stays an ordinary value.
"""

from __future__ import annotations

from typing import Any, List, Optional

import numpy as np

from .config import GraphConfig
from .errors import ColumnNotFoundError, UnsupportedValueTypeError
from .graphs.builder import build_graph
from .graphs.core import Graph
from .graphs.cycles import find_cycles
from .logging import get_logger

logger = get_logger(__name__)

IDENTITY_FAMILIES = ("int32", "int64", "float64", "text")

_OBJECT_FAMILIES = {int: "int64", float: "float64", str: "text"}

# Placeholder written under masked entries, by numpy dtype kind
_FILL = {"i": 0, "u": 0, "f": np.nan, "b": False}

_POLARS_DTYPES = {
    "Int8": np.int8,
    "Int16": np.int16,
    "Int32": np.int32,
    "Int64": np.int64,
    "UInt8": np.uint8,
    "UInt16": np.uint16,
    "UInt32": np.uint32,
    "UInt64": np.uint64,
    "Float32": np.float32,
    "Float64": np.float64,
}


def _is_missing(item: Any) -> bool:
    return item is None or (isinstance(item, float) and item != item)


def _masked(data: np.ndarray, mask: np.ndarray) -> np.ndarray:
    if not mask.any():
        return data
    return np.ma.MaskedArray(data, mask=mask)


def _from_polars(column: Any) -> np.ndarray:
    mask = np.asarray(column.is_null().to_numpy(), dtype=bool)
    if not mask.any():
        return np.asarray(column.to_numpy())
    dtype = np.dtype(_POLARS_DTYPES.get(str(column.dtype), object))
    fill = _FILL.get(dtype.kind)
    data = [fill if missing else item for item, missing in zip(column.to_list(), mask)]
    return np.ma.MaskedArray(np.array(data, dtype=dtype), mask=mask)


def _from_pandas(column: Any) -> np.ndarray:
    if isinstance(column.dtype, np.dtype) and column.dtype.kind != "O":
        return np.asarray(column)
    # nullable numeric extension dtypes expose their storage dtype as numpy_dtype
    dtype = np.dtype(getattr(column.dtype, "numpy_dtype", object))
    if dtype.kind not in _FILL:
        dtype = np.dtype(object)
    mask = np.asarray(column.isna(), dtype=bool)
    data = column.to_numpy(dtype=dtype, na_value=_FILL.get(dtype.kind))
    return _masked(data, mask)


def _from_object(column: np.ndarray) -> np.ndarray:
    mask = np.array([_is_missing(item) for item in column.tolist()], dtype=bool)
    if mask.any():
        data = column.copy()
        data[mask] = None
        return np.ma.MaskedArray(data, mask=mask)
    return column


def _column(frame: Any, name: str) -> np.ndarray:
    names = (frame.dtype.names or ()) if isinstance(frame, np.ndarray) else frame
    if name not in names:
        raise ColumnNotFoundError(f"Column '{name}' not found", context={"column": name})
    column = frame[name]
    if isinstance(column, np.ma.MaskedArray):
        return column
    if hasattr(column, "is_null"):
        return _from_polars(column)
    if hasattr(column, "isna"):
        column = _from_pandas(column)
        if isinstance(column, np.ma.MaskedArray):
            return column
    column = np.asarray(column)
    if column.dtype.kind == "O":
        return _from_object(column)
    return column


def _object_family(column: np.ndarray, name: str) -> Optional[str]:
    families = set()
    for item in column.tolist():
        if item is None:
            continue
        family = _OBJECT_FAMILIES.get(type(item))
        if family is None:
            raise UnsupportedValueTypeError(
                f"Column '{name}' holds unsupported value type {type(item).__name__}",
                context={"column": name, "type": type(item).__name__},
            )
        families.add(family)
    if len(families) > 1:
        raise UnsupportedValueTypeError(
            f"Column '{name}' mixes value types: {', '.join(sorted(families))}",
            context={"column": name, "families": sorted(families)},
        )
    return families.pop() if families else None


def dtype_family(column: np.ndarray, name: str) -> Optional[str]:
    """
    Classify an identity column.

    Returns:
        One of IDENTITY_FAMILIES, or None for an object column holding only
        nulls (compatible with any family).

    Raises:
        UnsupportedValueTypeError: For any other dtype.
    """
    kind, size = column.dtype.kind, column.dtype.itemsize
    if kind == "U":
        return "text"
    if kind == "O":
        return _object_family(column, name)
    if kind == "i" and size in (4, 8):
        return f"int{size * 8}"
    if kind == "f" and size == 8:
        return "float64"
    raise UnsupportedValueTypeError(
        f"Column '{name}' has unsupported dtype {column.dtype}; "
        f"expected one of {', '.join(IDENTITY_FAMILIES)}",
        context={"column": name, "dtype": str(column.dtype)},
    )


def _check_weight_column(column: np.ndarray, name: str) -> None:
    if column.dtype.kind == "f" and column.dtype.itemsize == 8:
        return
    if column.dtype.kind == "O":
        return
    raise UnsupportedValueTypeError(
        f"Weight column '{name}' must be float64, got {column.dtype}",
        context={"column": name, "dtype": str(column.dtype)},
    )


def graph_from_frame(
    frame: Any,
    source: str,
    destination: str,
    weight: Optional[str] = None,
    *,
    directed: Optional[bool] = None,
    config: Optional[GraphConfig] = None,
) -> Graph:
    """
    Build a graph from named columns.

    Args:
        frame: Column container indexable by name.
        source: Name of the source identity column.
        destination: Name of the destination identity column.
        weight: Optional name of the float64 weight column.
        directed: Overrides ``config.directed`` when given.
        config: Build settings.

    Returns:
        DirectedGraph or UndirectedGraph.

    Raises:
        ColumnNotFoundError: If a named column is missing.
        UnsupportedValueTypeError: If the identity columns do not share a
            supported dtype, or the weight column is not float64.
        LengthMismatchError: If the columns have different lengths.

    Example:
        >>> G = graph_from_frame({"a": np.array([1, 2]), "b": np.array([2, 1])}, "a", "b")
        >>> G.edge_count()
        2
    """
    sources = _column(frame, source)
    destinations = _column(frame, destination)

    source_family = dtype_family(sources, source)
    destination_family = dtype_family(destinations, destination)
    if None not in (source_family, destination_family) and source_family != destination_family:
        raise UnsupportedValueTypeError(
            f"Columns '{source}' ({source_family}) and '{destination}' "
            f"({destination_family}) must share one dtype",
            context={source: source_family, destination: destination_family},
        )

    weights = None
    if weight is not None:
        weights = _column(frame, weight)
        _check_weight_column(weights, weight)

    logger.debug(
        "Building graph from columns %r -> %r (weights=%r, family=%s)",
        source,
        destination,
        weight,
        source_family or destination_family,
    )
    return build_graph(sources, destinations, weights, directed=directed, config=config)


def cycles_column(
    frame: Any,
    source: str,
    destination: str,
    *,
    min_size: Optional[int] = None,
    config: Optional[GraphConfig] = None,
) -> List[List[Any]]:
    """
    Find cycles in a directed edge list and return them as a list column.

    Each cycle is a list of plain Python scalars (``int``, ``float`` or
    ``str``) matching the identity column's family, ready to be stored as a
    list column of the frame.

    Args:
        frame: Column container indexable by name.
        source: Name of the source identity column.
        destination: Name of the destination identity column.
        min_size: Smallest reported component, see ``find_cycles``.
        config: Build settings; the graph is always built directed.

    Returns:
        One list per cycle, in discovery order.

    Example:
        >>> [sorted(c) for c in cycles_column({"s": np.array([1, 2]), "d": np.array([2, 1])}, "s", "d")]
        [[1, 2]]
    """
    graph = graph_from_frame(frame, source, destination, directed=True, config=config)
    return [[v.value for v in cycle] for cycle in find_cycles(graph, min_size)]
