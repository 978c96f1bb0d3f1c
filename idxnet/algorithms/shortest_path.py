"""Single-source shortest paths over any :class:`~idxnet.core.GraphReader`.

Label-setting (Dijkstra) traversal with a keyed heap: a vertex already on the
frontier has its key lowered in place rather than being pushed again, so the
frontier never holds stale duplicates.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum

import polars as pl

from ..core.errors import NegativeWeight, UnknownVertex
from ._heap import KeyedPriorityQueue

logger = logging.getLogger(__name__)


class VertexState(str, Enum):
    """Per-vertex traversal state. Unvisited vertices are simply not tracked."""

    UNVISITED = "unvisited"
    FRONTIER = "frontier"
    SETTLED = "settled"


class TraversalResult(Mapping):
    """Read-only mapping ``vertex -> (distance, predecessor edge or None)``.

    Only reached vertices are keys; the source maps to ``(0, None)``.

    Parameters
    ----------
    source : int
    entries : dict
        ``vertex -> (distance, edge, parent vertex)``, in settling order.

    """

    def __init__(self, source, entries):
        self.source = source
        self._entries = entries

    def __getitem__(self, v):
        dist, edge, _ = self._entries[v]
        return dist, edge

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"TraversalResult(source={self.source}, reached={len(self._entries)})"

    def distance(self, v):
        """Shortest distance from the source; ``KeyError`` if ``v`` was not reached."""
        return self._entries[v][0]

    def predecessor(self, v):
        """Edge through which ``v`` was reached (None for the source)."""
        return self._entries[v][1]

    def parent(self, v):
        """Vertex ``v`` was reached from (None for the source)."""
        return self._entries[v][2]

    def edge_path(self, v) -> list:
        """Edges of a shortest path from the source to ``v``, in travel order."""
        path = []
        _, edge, parent = self._entries[v]
        while edge is not None:
            path.append(edge)
            _, edge, parent = self._entries[parent]
        path.reverse()
        return path

    def vertex_path(self, v) -> list:
        """Vertices of a shortest path from the source to ``v``, both included."""
        path = [v]
        parent = self._entries[v][2]
        while parent is not None:
            path.append(parent)
            parent = self._entries[parent][2]
        path.reverse()
        return path

    def to_frame(self) -> pl.DataFrame:
        """Polars DF with columns ``vertex``, ``distance``, ``edge``, ``parent``.

        ``edge`` and ``parent`` are null for the source.
        """
        rows = [(v, float(d), e, p) for v, (d, e, p) in self._entries.items()]
        return pl.DataFrame(
            rows,
            schema={
                "vertex": pl.Int64,
                "distance": pl.Float64,
                "edge": pl.Int64,
                "parent": pl.Int64,
            },
            orient="row",
        )


def _unit_weight(_edge):
    return 1


def _settle(graph, source, weight):
    frontier = KeyedPriorityQueue()
    frontier.push(source, 0)
    state = {source: VertexState.FRONTIER}
    via = {source: (None, None)}  # vertex -> (edge, parent) of the best known path

    while frontier:
        v, dist = frontier.pop()
        state[v] = VertexState.SETTLED
        edge, parent = via.pop(v)
        yield v, dist, edge, parent

        for e in graph.out_edges(v):
            u = e.target
            seen = state.get(u, VertexState.UNVISITED)
            if seen is VertexState.SETTLED:
                continue
            w = weight(e.index)
            if not w >= 0:
                raise NegativeWeight(e.index, w)
            cand = dist + w
            if seen is VertexState.UNVISITED:
                frontier.push(u, cand)
                state[u] = VertexState.FRONTIER
                via[u] = (e.index, v)
            elif cand < frontier.priority(u):
                frontier.decrease(u, cand)
                via[u] = (e.index, v)


def iter_dijkstra(graph, source, weight=None):
    """Lazily settle vertices in non-decreasing distance order.

    Parameters
    ----------
    graph : GraphReader
        Graph, tagged graph or view. Directed graphs follow out-edges.
    source : int
    weight : callable, optional
        ``edge index -> number``; must be non-negative. Every edge weighs 1 if None.

    Returns
    -------
    Iterator[tuple[int, number, int | None]]
        ``(vertex, distance, predecessor edge)`` per settled vertex. Stop consuming
        to end the traversal early.

    Raises
    ------
    UnknownVertex
        Immediately, if ``source`` is not visible in ``graph``.
    NegativeWeight
        While iterating, when an edge touched by the traversal weighs < 0.

    """
    if not graph.has_vertex(source):
        raise UnknownVertex(source)
    return ((v, d, e) for v, d, e, _ in _settle(graph, source, weight or _unit_weight))


def dijkstra(graph, source, weight=None) -> TraversalResult:
    """Shortest distances from ``source`` to every reachable vertex.

    See :func:`iter_dijkstra` for the parameters.

    Returns
    -------
    TraversalResult
        Unreached vertices are absent.

    Examples
    --------
    >>> from idxnet import DiGraph
    >>> g = DiGraph()
    >>> a, b = g.add_vertices(2)
    >>> e = g.add_edge(a, b)
    >>> dict(dijkstra(g, a))
    {0: (0, None), 1: (1, 0)}

    """
    if not graph.has_vertex(source):
        raise UnknownVertex(source)
    logger.debug("dijkstra from %s", source)
    entries = {v: (d, e, p) for v, d, e, p in _settle(graph, source, weight or _unit_weight)}
    logger.debug("dijkstra from %s settled %d vertices", source, len(entries))
    return TraversalResult(source, entries)


def shortest_path(graph, source, target, weight=None):
    """Shortest path from ``source`` to ``target``.

    The traversal stops as soon as ``target`` is settled.

    Returns
    -------
    tuple[number, list[int]] or None
        ``(distance, edge indices in travel order)``, or None when ``target`` is
        unreachable.

    Raises
    ------
    UnknownVertex
        If ``source`` or ``target`` is not visible in ``graph``.

    """
    if not graph.has_vertex(source):
        raise UnknownVertex(source)
    if not graph.has_vertex(target):
        raise UnknownVertex(target)

    reached = {}
    for v, dist, edge, parent in _settle(graph, source, weight or _unit_weight):
        reached[v] = (dist, edge, parent)
        if v == target:
            return dist, TraversalResult(source, reached).edge_path(target)
    return None
