import inspect
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import wraps
from types import MappingProxyType

import numpy as np
import polars as pl
import scipy.sparse as sp

from ..algorithms import paths as _paths
from ..utils.validation import check_edge_pair, check_vertex, jsonify
from .structure import DEFAULT_DIRECTED, EdgeType


class Graph:
    """
    In-memory adjacency-list graph with exhaustive simple-path enumeration.

    Vertices are plain hashable identifiers (ints, strings, tuples...); the
    identifier is the vertex. A vertex exists only once it has appeared as an
    edge endpoint. Neighbor sets are insertion-ordered, which fixes the order
    in which paths are produced.

    Parameters
    ----------
    directed : bool, optional
        Whether edges are directed. Defaults to ``DEFAULT_DIRECTED`` (False).
    history : bool, optional
        Record mutating calls in the in-memory history log.

    Notes
    -----
    - Undirected edges are stored in both directions: after ``add_edge(a, b)``
      ``b`` is a neighbor of ``a`` and ``a`` a neighbor of ``b``.
    - For directed graphs only the source gets an adjacency entry; a target
      with no outgoing edges is not a vertex of :meth:`vertices`.
    - Mutation is refused while a traversal holds the read guard, or after
      :meth:`freeze`.

    See Also
    --------
    add_edge, neighbors, find_all_paths, iter_all_paths
    """

    # Construction

    def __init__(self, directed=DEFAULT_DIRECTED, *, history=True):
        self.directed = bool(directed)

        # vertex -> {neighbor: None}; dicts double as insertion-ordered sets
        self._adj = {}
        # recorded edges in first-insert orientation (one entry per undirected edge)
        self._edge_list = {}

        # Read guard
        self._readers = 0
        self._frozen = False

        # History and Timeline
        self._history_enabled = bool(history)
        self._history = []
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()

    @property
    def edge_type(self) -> EdgeType:
        return EdgeType.from_directed(self.directed)

    # Mutation

    def add_edge(self, a, b):
        """
        Record an edge between two vertices.

        Parameters
        ----------
        a, b : Hashable
            Endpoint identifiers. They may be equal (self-loop) and need not
            exist beforehand.

        Returns
        -------
        tuple
            The ``(a, b)`` pair.

        Raises
        ------
        ValueError
            If an endpoint is None.
        TypeError
            If an endpoint is not hashable.
        RuntimeError
            If the graph is frozen or being traversed.

        Notes
        -----
        Idempotent: inserting an existing edge leaves adjacency unchanged.
        """
        a = check_vertex(a, "source")
        b = check_vertex(b, "target")
        self._check_writable()
        self._insert(a, b)
        return (a, b)

    def add_edges(self, pairs):
        """
        Bulk-add edges from an iterable of ``(a, b)`` pairs.

        All pairs are validated before anything is inserted, so a bad pair
        leaves the graph untouched.

        Parameters
        ----------
        pairs : Iterable[tuple]

        Returns
        -------
        int
            Number of pairs processed (duplicates included).
        """
        checked = [check_edge_pair(p) for p in pairs]
        self._check_writable()
        for a, b in checked:
            self._insert(a, b)
        self._log_event("add_edges", pairs=checked, result=len(checked))
        return len(checked)

    def _insert(self, a, b):
        if not self.has_edge(a, b):
            self._edge_list[(a, b)] = None
        self._adj.setdefault(a, {})[b] = None
        if not self.directed:
            self._adj.setdefault(b, {})[a] = None

    def freeze(self):
        """
        Make the graph permanently read-only.

        Returns
        -------
        Graph
            ``self``, so ``G = Graph().freeze()`` style chaining works.
        """
        self._frozen = True
        return self

    # Read guard

    @property
    def is_frozen(self) -> bool:
        """True if frozen or if at least one traversal is in flight."""
        return self._frozen or self._readers > 0

    @contextmanager
    def reading(self):
        """
        Hold the read guard for the duration of the ``with`` block.

        Any number of readers may hold it at once; mutators raise
        ``RuntimeError`` until every reader has released it.
        """
        self._readers += 1
        try:
            yield self
        finally:
            self._readers -= 1

    def _check_writable(self):
        if self._frozen:
            raise RuntimeError("Graph is frozen; mutation is not allowed")
        if self._readers > 0:
            raise RuntimeError(
                f"Graph is being traversed by {self._readers} reader(s); "
                "finish or close the traversal before adding edges"
            )

    # Queries

    def neighbors(self, v):
        """
        Outgoing neighbors of a vertex.

        Parameters
        ----------
        v : Hashable

        Returns
        -------
        list
            Neighbors in insertion order; empty if ``v`` is unknown.
        """
        check_vertex(v)
        return list(self._adj.get(v, ()))

    def has_vertex(self, v) -> bool:
        check_vertex(v)
        return v in self._adj

    def has_edge(self, a, b) -> bool:
        check_vertex(a, "source")
        check_vertex(b, "target")
        return b in self._adj.get(a, ())

    def vertices(self):
        """
        Vertices with an adjacency entry, in insertion order.

        Returns
        -------
        list
        """
        return list(self._adj)

    def edges(self):
        """
        Recorded edges.

        Returns
        -------
        list[tuple]
            ``(source, target)`` pairs in insertion order. An undirected edge
            appears once, oriented as it was first inserted.
        """
        return list(self._edge_list)

    def number_of_vertices(self):
        return len(self._adj)

    def number_of_edges(self):
        return len(self._edge_list)

    def degree(self, v):
        """Out-degree of ``v`` (0 if unknown). Undirected self-loops count once."""
        check_vertex(v)
        return len(self._adj.get(v, ()))

    @property
    def num_vertices(self):
        return self.number_of_vertices()

    @property
    def num_edges(self):
        return self.number_of_edges()

    def nv(self):
        return self.number_of_vertices()

    def ne(self):
        return self.number_of_edges()

    @property
    def adjacency(self):
        """Read-only ``{vertex: (neighbor, ...)}`` view, neighbors in insertion order."""
        return MappingProxyType({v: tuple(nbrs) for v, nbrs in self._adj.items()})

    def __contains__(self, v):
        try:
            return v in self._adj
        except TypeError:
            return False

    def __len__(self):
        return len(self._adj)

    def __iter__(self):
        return iter(list(self._adj))

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        if self.directed != other.directed or self._adj.keys() != other._adj.keys():
            return False
        return all(self._adj[v].keys() == other._adj[v].keys() for v in self._adj)

    __hash__ = None

    def __repr__(self):
        return (
            f"Graph(directed={self.directed}, vertices={self.number_of_vertices()}, "
            f"edges={self.number_of_edges()})"
        )

    def copy(self, *, history=None):
        """
        Deep copy of the structure.

        Parameters
        ----------
        history : bool, optional
            Whether the copy records history. Defaults to the source setting.
            The source's log itself is never copied.

        Returns
        -------
        Graph
        """
        if history is None:
            history = self._history_enabled
        G = Graph(directed=self.directed, history=history)
        G._adj = {v: dict(nbrs) for v, nbrs in self._adj.items()}
        G._edge_list = dict(self._edge_list)
        return G

    # Matrix and tabular views

    def _matrix_order(self):
        order = dict.fromkeys(self._adj)
        for nbrs in self._adj.values():
            for n in nbrs:
                order.setdefault(n, None)
        return list(order)

    def adjacency_matrix(self, sparse: bool = False, dtype=np.int8):
        """
        Adjacency matrix over every edge endpoint.

        Parameters
        ----------
        sparse : bool, optional
            If True return ``scipy.sparse.csr_matrix``; else a dense ``ndarray``.
        dtype : numpy dtype, optional

        Returns
        -------
        tuple[matrix, list]
            ``(M, order)`` with ``M[i, j] == 1`` iff ``order[j]`` is a neighbor of
            ``order[i]``. Directed targets without outgoing edges get an
            all-zero row.
        """
        order = self._matrix_order()
        index = {v: i for i, v in enumerate(order)}
        rows, cols = [], []
        for v, nbrs in self._adj.items():
            for n in nbrs:
                rows.append(index[v])
                cols.append(index[n])
        n = len(order)
        data = np.ones(len(rows), dtype=dtype)
        M = sp.coo_matrix((data, (rows, cols)), shape=(n, n), dtype=dtype).tocsr()
        if sparse:
            return M, order
        return M.toarray(), order

    def edges_view(self) -> pl.DataFrame:
        """
        Edges as a Polars DF [DataFrame].

        Returns
        -------
        polars.DataFrame
            Columns ``source``, ``target``, ``directed``.
        """
        from ..adapters.dataframe_adapter import edges_to_dataframe

        return edges_to_dataframe(self)

    # Path enumeration

    def find_all_paths(self, start, end):
        """
        Every simple path from ``start`` to ``end``.

        See :func:`pathnet.algorithms.paths.find_all_paths`.
        """
        return _paths.find_all_paths(self, start, end)

    def iter_all_paths(self, start, end, max_steps=None):
        return _paths.iter_all_paths(self, start, end, max_steps=max_steps)

    def find_paths_with_max_steps(self, start, end, max_steps):
        """
        Simple paths from ``start`` to ``end`` with at most ``max_steps`` vertices.

        See :func:`pathnet.algorithms.paths.find_paths_with_max_steps`.
        """
        return _paths.find_paths_with_max_steps(self, start, end, max_steps)

    def count_paths(self, start, end, max_steps=None):
        return _paths.count_paths(self, start, end, max_steps=max_steps)

    # History and Timeline

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._version += 1
        ts = datetime.now(timezone.utc).isoformat(timespec="microseconds")
        evt = {
            "version": self._version,
            "ts_utc": ts.replace("+00:00", "Z"),
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        evt.update((k, jsonify(v)) for k, v in fields.items())
        self._history.append(evt)

    def _logged(self, fn):
        # fn is already bound, so its signature has no 'self'
        sig = inspect.signature(fn)

        @wraps(fn)
        def wrapper(*args, **kwargs):
            call = sig.bind(*args, **kwargs).arguments
            result = fn(*args, **kwargs)
            # freeze() returns the graph itself; keep the log compact
            self._log_event(fn.__name__, **call, result=None if result is self else result)
            return result

        return wrapper

    def _install_history_hooks(self):
        # add_edges logs its own validated batch, since `pairs` may be a one-shot iterator
        for name in ("add_edge", "freeze"):
            fn = getattr(self, name)
            if getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._logged(fn))

    def history(self, as_df: bool = False):
        """
        Return the append-only mutation history.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Each event includes 'version', 'ts_utc' (UTC ISO-8601), 'mono_ns'
            (monotonic nanoseconds since the graph was created), 'op', the call
            arguments and 'result'.
        """
        if as_df:
            # events of different ops carry different keys
            return pl.DataFrame(self._history, infer_schema_length=None)
        return list(self._history)

    def enable_history(self, flag: bool = True):
        """Start (True) or pause (False) in-memory mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        self._history.clear()

    def mark(self, label: str):
        """
        Insert a manual marker (``op='mark'``) into the mutation history.

        Logging must be enabled for the marker to be recorded.
        """
        self._log_event("mark", label=label)
