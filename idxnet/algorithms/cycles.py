"""Simple cycle enumeration by depth-first search with edge hiding.

Every edge is explored at most once: popping an edge off the DFS stack hides it
in a shadowed view. An explored edge whose target is on the current DFS path
(seen but not exhausted) closes a cycle, which is rebuilt from the tree edges.
This finds a set of cycles that covers every cyclic edge structure, not every
simple cycle of the graph.
"""

from __future__ import annotations

from ..core.errors import UnknownVertex
from ..core.views import ShadowedSubgraph

_EXHAUSTED = object()


def simple_cycles(graph):
    """Cycles found by DFS from every vertex.

    Parameters
    ----------
    graph : GraphReader
        Directed or undirected; not modified.

    Returns
    -------
    Iterator[list[Edge]]
        Each cycle is a list of Edge records oriented along the cycle, so
        ``cycle[i].target == cycle[i + 1].source`` and the last edge returns to
        the first edge's source. A self-loop yields a one-edge cycle.

    """
    return _CycleSearch(graph, reversed(list(graph.vertices())))


def simple_cycles_from(graph, vertex):
    """Cycles found by a DFS restricted to what is reachable from ``vertex``.

    Raises
    ------
    UnknownVertex
        If ``vertex`` is not visible in ``graph``.

    """
    if not graph.has_vertex(vertex):
        raise UnknownVertex(vertex)
    return _CycleSearch(graph, [vertex])


class _CycleSearch:
    def __init__(self, graph, roots):
        self._view = ShadowedSubgraph(graph)
        self._roots = list(roots)  # popped from the end
        self._come_from = {}  # vertex -> tree edge it was reached by (None for roots)
        self._exhausted = set()
        self._stack = []  # Edge records, or (_EXHAUSTED, vertex) markers

    def __iter__(self):
        return self

    def __next__(self):
        view = self._view
        while True:
            if self._stack:
                item = self._stack.pop()
                if item[0] is _EXHAUSTED:
                    self._exhausted.add(item[1])
                    continue
                edge = item
                if not view.has_edge(edge.index):
                    continue
                view.hide_edge(edge.index)
                if edge.target in self._exhausted:
                    continue
                if edge.target in self._come_from:
                    return self._close(edge)
                self._come_from[edge.target] = edge
                self._descend(edge.target)
            elif self._roots:
                v = self._roots.pop()
                if v not in self._come_from:
                    self._come_from[v] = None
                    self._descend(v)
            else:
                raise StopIteration

    def _descend(self, v):
        self._stack.append((_EXHAUSTED, v))
        self._stack.extend(self._view.out_edges(v))

    def _close(self, edge):
        terminal = edge.target
        cycle = [edge]
        while edge.source != terminal:
            edge = self._come_from[edge.source]
            cycle.append(edge)
        cycle.reverse()
        return cycle
