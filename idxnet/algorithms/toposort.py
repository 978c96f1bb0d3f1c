from __future__ import annotations

from ..core.views import ShadowedSubgraph
from ._heap import KeyedPriorityQueue


def toposort(graph):
    """Vertices of a directed graph in topological order.

    Repeatedly emits a vertex with no remaining in-edges and hides it in a
    shadowed view over ``graph``; in-degrees live in a keyed heap.

    Parameters
    ----------
    graph : GraphReader
        Directed graph, tagged graph or view. Not modified.

    Returns
    -------
    Iterator[int]
        Lazy. When the remaining vertices all sit on or behind a cycle, iteration
        stops early, so a DAG is exactly the case where every vertex is yielded.

    Raises
    ------
    TypeError
        If ``graph`` is undirected.

    """
    if not graph.is_directed():
        raise TypeError("toposort() needs a directed graph")
    return _toposort(graph)


def _toposort(graph):
    view = ShadowedSubgraph(graph)
    in_degree = KeyedPriorityQueue((v, sum(1 for _ in graph.in_edges(v))) for v in graph.vertices())
    while in_degree:
        v, remaining = in_degree.pop()
        if remaining > 0:
            return
        for e in view.hide_vertex(v):
            in_degree.decrease(e.target, in_degree.priority(e.target) - 1)
        yield v


def is_dag(graph) -> bool:
    """True if the directed ``graph`` has no cycle (self-loops included)."""
    return sum(1 for _ in toposort(graph)) == graph.vertex_count()
