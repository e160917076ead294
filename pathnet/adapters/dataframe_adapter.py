from __future__ import annotations

import warnings
from typing import Iterable, Optional

import polars as pl

from ..core.graph import Graph


def edges_to_dataframe(graph: "Graph") -> pl.DataFrame:
    """
    Export recorded edges to a Polars DataFrame.

    Args:
        graph: Graph instance to export

    Returns:
        DataFrame with columns ``source``, ``target``, ``directed``; one row per
        recorded edge (undirected edges once, in first-insert orientation).
    """
    edges = graph.edges()
    kinds = sorted({type(v).__name__ for e in edges for v in e})
    if len(kinds) > 1:
        warnings.warn(
            f"edges_to_dataframe: mixed vertex types {kinds}; polars casts each column "
            "to a single dtype (usually String), so these vertices will not read back unchanged.",
            category=UserWarning,
            stacklevel=2,
        )
    return pl.DataFrame(
        {
            "source": [a for a, _ in edges],
            "target": [b for _, b in edges],
            "directed": [graph.directed] * len(edges),
        },
        strict=False,
    )


def paths_to_dataframe(paths: Iterable[list]) -> pl.DataFrame:
    """
    Tabulate path results.

    Args:
        paths: Output of ``find_all_paths`` (or any iterable of paths)

    Returns:
        DataFrame with ``path_id`` (0-based, in result order), ``length``
        (number of edges) and ``vertices`` (list column)
    """
    paths = [list(p) for p in paths]
    return pl.DataFrame(
        {
            "path_id": list(range(len(paths))),
            "length": [len(p) - 1 for p in paths],
            "vertices": paths,
        },
        schema_overrides={"path_id": pl.Int64, "length": pl.Int64},
        strict=False,
    )


def from_edge_dataframe(
    df: pl.DataFrame,
    *,
    directed: bool = False,
    source: str = "source",
    target: str = "target",
    history: Optional[bool] = True,
) -> "Graph":
    """
    Build a Graph from an in-memory edge table.

    Args:
        df: Polars DataFrame with one row per edge
        directed: Directedness of the new graph
        source: Name of the source column
        target: Name of the target column
        history: Passed to the new Graph

    Returns:
        Graph with every row inserted in row order

    Notes:
        List cells (how polars stores tuple vertices) are turned back into tuples.

    Raises:
        KeyError: If a named column is missing
    """
    missing = [c for c in (source, target) if c not in df.columns]
    if missing:
        raise KeyError(f"Edge table is missing column(s): {missing}; have {df.columns}")
    G = Graph(directed=directed, history=history)
    rows = df.select([source, target]).iter_rows()
    G.add_edges([(_as_vertex(a), _as_vertex(b)) for a, b in rows])
    return G


def _as_vertex(x):
    if isinstance(x, list):
        return tuple(_as_vertex(v) for v in x)
    return x
