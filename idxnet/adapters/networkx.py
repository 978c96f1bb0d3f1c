try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install networkx"
    ) from e

from ..core.graph import Graph
from ..core.structure import MappedGraph
from ..core.tagged import TaggedGraph


def to_nx(graph, weight=None, weight_attr: str = "weight"):
    """Export any graph-like reader to NetworkX.

    Parameters
    ----------
    graph : GraphReader
        Graph, tagged graph or view. Only visible entities are exported.
    weight : callable, optional
        ``edge index -> number``; stored on every edge under ``weight_attr``.
    weight_attr : str, default "weight"

    Returns
    -------
    networkx.MultiDiGraph | networkx.MultiGraph
        Node = vertex index, edge key = edge index. Tagged graphs also carry
        ``tag`` and their attribute payloads on nodes and edges.

    """
    G = nx.MultiDiGraph() if graph.is_directed() else nx.MultiGraph()
    tagged = graph if isinstance(graph, TaggedGraph) else None

    for v in graph.vertices():
        attrs = {}
        if tagged is not None:
            attrs = tagged._vertex_attrs.get(v, {}).copy()
            attrs["tag"] = tagged.tag_of(v)
        G.add_node(v, **attrs)

    for e in graph.edges():
        attrs = {}
        if tagged is not None:
            attrs = tagged._edge_attrs.get(e.index, {}).copy()
            attrs["tag"] = tagged.tag_of(e.index, "edge")
        if weight is not None:
            attrs[weight_attr] = weight(e.index)
        G.add_edge(e.source, e.target, key=e.index, **attrs)
    return G


def from_nx(nxG, **overrides) -> MappedGraph:
    """Import a NetworkX graph into a fresh :class:`~idxnet.core.graph.Graph`.

    Directedness follows ``nxG.is_directed()``; keyword ``overrides`` go to the
    graph's options.

    Returns
    -------
    MappedGraph
        ``vertex_map[v] -> node`` and ``edge_map[e] -> (u, v, key)`` for
        multigraphs or ``(u, v)`` otherwise.

    """
    g = Graph(nxG.is_directed(), **overrides)
    vmap, emap, back = {}, {}, {}
    for node in nxG.nodes():
        v = g.add_vertex()
        vmap[v] = node
        back[node] = v

    if nxG.is_multigraph():
        for u, w, key in nxG.edges(keys=True):
            emap[g.add_edge(back[u], back[w])] = (u, w, key)
    else:
        for u, w in nxG.edges():
            emap[g.add_edge(back[u], back[w])] = (u, w)
    return MappedGraph(g, vmap, emap)


def to_backend(graph, **kwargs):
    """
    Export Graph to NetworkX for the lazy ``G.nx`` proxy.

    Parameters
    ----------
    graph : Graph
        Source Graph instance to export.
    **kwargs
        Forwarded to to_nx() (``weight``, ``weight_attr``).

    Returns
    -------
    networkx.MultiGraph | networkx.MultiDiGraph

    Notes
    -----
    Node ids are vertex indices, so results of NetworkX algorithms can be fed
    straight back into the graph.
    """
    return to_nx(graph, **kwargs)
