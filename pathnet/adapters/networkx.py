try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install pathnet[networkx]"
    ) from e

import warnings

from ..core.graph import Graph


def to_nx(graph: "Graph"):
    """
    Export a Graph to NetworkX.

    Parameters
    ----------
    graph : Graph
        Source graph instance.

    Returns
    -------
    networkx.Graph | networkx.DiGraph
        ``DiGraph`` for directed graphs, ``Graph`` otherwise. Nodes and edges
        are added in insertion order, so NetworkX adjacency iterates the same
        way as the source.

    Notes
    -----
    Directed targets without outgoing edges become plain NetworkX nodes.
    """
    G = nx.DiGraph() if graph.directed else nx.Graph()
    # adjacency order first, then sinks, matching Graph.adjacency_matrix
    G.add_nodes_from(graph._matrix_order())
    for v, nbrs in graph._adj.items():
        for n in nbrs:
            G.add_edge(v, n)
    return G


def from_nx(nxG, *, history: bool = True) -> "Graph":
    """
    Import a NetworkX graph.

    Parameters
    ----------
    nxG : networkx.Graph | networkx.DiGraph | networkx.MultiGraph | networkx.MultiDiGraph
    history : bool, optional
        Passed to the new Graph.

    Returns
    -------
    Graph
        ``directed`` follows ``nxG.is_directed()``.

    Notes
    -----
    - Isolated nodes are dropped (a vertex exists only as an edge endpoint);
      a ``UserWarning`` reports how many.
    - Parallel edges of multigraphs collapse into one edge.
    """
    G = Graph(directed=nxG.is_directed(), history=history)
    G.add_edges((u, v) for u, v in nxG.edges())

    dropped = [n for n in nxG.nodes if nxG.degree(n) == 0]
    if dropped:
        warnings.warn(
            f"from_nx: dropped {len(dropped)} isolated node(s) with no edges "
            f"(e.g. {dropped[:5]!r}); vertices exist only as edge endpoints.",
            category=UserWarning,
            stacklevel=2,
        )
    if nxG.is_multigraph() and nxG.number_of_edges() != G.number_of_edges():
        warnings.warn(
            f"from_nx: collapsed {nxG.number_of_edges() - G.number_of_edges()} "
            "parallel edge(s); Graph keeps one edge per vertex pair.",
            category=UserWarning,
            stacklevel=2,
        )
    return G
