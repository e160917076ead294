"""Exhaustive simple-path enumeration.

The search is a depth-first backtracking walk over a graph's adjacency
relation. It keeps one working path plus the set of vertices on it; a
neighbor already on the path is skipped, which bounds the depth by the number
of distinct vertices and makes the walk terminate on cyclic graphs. A path
stops the moment it reaches ``end``.

Frames are kept on an explicit stack of ``(neighbor iterator)`` entries, one
per vertex of the working path, so deep graphs never hit Python's recursion
limit. Neighbors are visited in insertion order, which makes the output order
reproducible.
"""
from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import TYPE_CHECKING

from ..utils.validation import check_max_steps, check_vertex

if TYPE_CHECKING:
    from ..core.graph import Graph

_EXHAUSTED = object()


def _adjacency(graph) -> dict:
    adj = getattr(graph, "_adj", None)
    if adj is None:
        raise TypeError(f"Expected a pathnet Graph, got {type(graph).__name__}")
    return adj


def _walk(graph: Graph, adj: dict, start, end, max_steps: int | None) -> Iterator[list]:
    if start == end:
        yield [start]
        return
    if start not in adj:
        return

    def frame(v, depth):
        if max_steps is not None and depth >= max_steps:
            return iter(())
        return iter(adj.get(v, ()))

    with graph.reading():
        path = [start]
        visited = {start}
        stack = [frame(start, 1)]
        while stack:
            n = next(stack[-1], _EXHAUSTED)
            if n is _EXHAUSTED:
                stack.pop()
                visited.discard(path.pop())
                continue
            if n in visited:
                continue
            if n == end:
                yield path + [n]
                continue
            path.append(n)
            visited.add(n)
            stack.append(frame(n, len(path)))


def iter_all_paths(
    graph: Graph, start: Hashable, end: Hashable, max_steps: int | None = None
) -> Iterator[list]:
    """
    Lazily yield every simple path from ``start`` to ``end``.

    Parameters
    ----------
    graph : Graph
        Graph to search. It is read, never modified.
    start, end : Hashable
        Endpoint identifiers.
    max_steps : int, optional
        If given, only paths with at most this many vertices are produced.

    Yields
    ------
    list
        A fresh list per path; never aliased to the working buffer.

    Raises
    ------
    ValueError, TypeError
        On invalid identifiers or ``max_steps``, raised at call time rather
        than on first iteration.

    Notes
    -----
    The graph's read guard is held until the generator is exhausted or
    closed; ``add_edge`` raises ``RuntimeError`` meanwhile.
    """
    adj = _adjacency(graph)
    check_vertex(start, "start")
    check_vertex(end, "end")
    if max_steps is not None:
        max_steps = check_max_steps(max_steps)
    return _walk(graph, adj, start, end, max_steps)


def find_all_paths(graph: Graph, start: Hashable, end: Hashable) -> list[list]:
    """
    Every simple path from ``start`` to ``end``.

    Parameters
    ----------
    graph : Graph
    start, end : Hashable

    Returns
    -------
    list[list]
        Paths in depth-first order, neighbors in insertion order.
        ``[[start]]`` when ``start == end`` (the zero-edge path); ``[]`` when
        ``start`` has no edges or ``end`` is unreachable.

    Examples
    --------
    >>> from pathnet import Graph
    >>> G = Graph()
    >>> G.add_edges([(1, 2), (2, 3), (1, 3)])
    3
    >>> find_all_paths(G, 1, 3)
    [[1, 2, 3], [1, 3]]
    """
    return list(iter_all_paths(graph, start, end))


def find_paths_with_max_steps(
    graph: Graph, start: Hashable, end: Hashable, max_steps: int
) -> list[list]:
    """
    Simple paths from ``start`` to ``end`` with at most ``max_steps`` vertices.

    A chain ``1-2-3-4`` has no path from 1 to 4 within 3 steps and exactly one
    within 4. ``max_steps`` must be a positive int.
    """
    if max_steps is None:
        raise ValueError("max_steps is required; use find_all_paths for an unbounded search")
    return list(iter_all_paths(graph, start, end, max_steps=max_steps))


def count_paths(
    graph: Graph, start: Hashable, end: Hashable, max_steps: int | None = None
) -> int:
    """Number of simple paths from ``start`` to ``end``, without materializing them."""
    return sum(1 for _ in iter_all_paths(graph, start, end, max_steps=max_steps))
