"""Shrinkable, non-owning subgraph views.

A view holds a reference to whatever it wraps (a graph, a tagged graph or
another view) and recomputes visibility on every query. Nothing is copied, so a
view sees later additions to the base; it never mutates the base.

An edge is visible iff the view's filter admits it and both endpoints are
visible. Since the wrapped reader already applies its own filter, each layer only
checks its own sets on top of it.

Hide-sets and keep-sets remember the generation of each index they hold. Once
the base releases and reuses that index, the entry no longer matches and the new
entity is treated as never hidden (shadowed) or never kept (selected).
"""

from __future__ import annotations

import logging

from ._base import GraphReader
from .errors import NotSelected, UnknownEdge, UnknownVertex
from .graph import Graph
from .structure import MappedGraph

logger = logging.getLogger(__name__)


class _View(GraphReader):
    def __init__(self, inner: GraphReader):
        if not isinstance(inner, GraphReader):
            raise TypeError(f"Cannot build a view over {type(inner).__name__}")
        self._inner = inner

    @property
    def inner(self) -> GraphReader:
        return self._inner

    def is_directed(self) -> bool:
        return self._inner.is_directed()

    def vertex_bound(self) -> int:
        return self._inner.vertex_bound()

    def vertex_generation(self, v) -> int:
        return self._inner.vertex_generation(v)

    def edge_generation(self, e) -> int:
        return self._inner.edge_generation(e)

    def _matches(self, stamps, idx, generation) -> bool:
        gen = stamps.get(idx)
        return gen is not None and gen == generation(idx)

    def _incident(self, v):
        # visible edges touching v, each once
        seen = set()
        out = []
        for e in self._iter_out(v):
            if e.index not in seen:
                seen.add(e.index)
                out.append(e)
        if self.is_directed():
            for e in self._iter_in(v):
                if e.index not in seen:
                    seen.add(e.index)
                    out.append(e)
        return out

    def materialize(self) -> MappedGraph:
        """Copy the visible part into a fresh :class:`~idxnet.core.graph.Graph`.

        Returns
        -------
        MappedGraph
            ``vertex_map``/``edge_map`` send new indices to this view's indices.

        """
        g = Graph(self.is_directed())
        vmap, emap, back = {}, {}, {}
        for v in self.vertices():
            nv = g.add_vertex()
            vmap[nv] = v
            back[v] = nv
        for e in self.edges():
            ne = g.add_edge(back[e.source], back[e.target])
            emap[ne] = e.index
        return MappedGraph(g, vmap, emap)


class ShadowedSubgraph(_View):
    """Exclusion-based view: the wrapped reader minus a hide-set.

    Starts identical to its base. :meth:`hide_vertex` and :meth:`hide_edge` only
    ever grow the hide-set, so the visible part shrinks monotonically (apart from
    entities added to the base later, which are visible unless hidden, even when
    they reuse the index of a hidden entity).
    """

    def __init__(self, inner: GraphReader):
        super().__init__(inner)
        self._hidden_vertices = {}  # vertex -> generation when hidden
        self._hidden_edges = {}  # edge -> generation when hidden

    # Shrinking

    def hide_vertex(self, v) -> list:
        """Hide ``v`` and, implicitly, every edge incident to it.

        Hiding an already hidden vertex is a no-op, also after the base dropped it.

        Returns
        -------
        list[Edge]
            Edges that were visible before the call and are not anymore.

        Raises
        ------
        UnknownVertex
            If ``v`` was never hidden here and is not visible in the wrapped reader.

        """
        if self.is_hidden(v):
            return []
        if not self._inner.has_vertex(v):
            if v in self._hidden_vertices:
                return []
            raise UnknownVertex(v)
        gone = self._incident(v)
        self._hidden_vertices[v] = self._inner.vertex_generation(v)
        return gone

    def hide_edge(self, e):
        """Hide ``e``; idempotent.

        Returns
        -------
        Edge or None
            The edge record if it was visible before the call.

        """
        if self.is_edge_hidden(e):
            return None
        rec = self._inner.find_edge(e)
        if rec is None:
            if e in self._hidden_edges:
                return None
            raise UnknownEdge(e)
        was_visible = self._sees(rec)
        self._hidden_edges[e] = self._inner.edge_generation(e)
        return rec if was_visible else None

    def hide_vertices(self, vertices) -> list:
        gone = []
        for v in vertices:
            gone.extend(self.hide_vertex(v))
        return gone

    def is_hidden(self, v) -> bool:
        return self._matches(self._hidden_vertices, v, self._inner.vertex_generation)

    def is_edge_hidden(self, e) -> bool:
        return self._matches(self._hidden_edges, e, self._inner.edge_generation)

    def _sees(self, rec) -> bool:
        return not (
            self.is_edge_hidden(rec.index)
            or self.is_hidden(rec.source)
            or self.is_hidden(rec.target)
        )

    # Read contract

    def has_vertex(self, v) -> bool:
        return self._inner.has_vertex(v) and not self.is_hidden(v)

    def has_edge(self, e) -> bool:
        return self.find_edge(e) is not None

    def find_edge(self, e):
        rec = self._inner.find_edge(e)
        if rec is None or not self._sees(rec):
            return None
        return rec

    def vertices(self):
        return (v for v in self._inner.vertices() if not self.is_hidden(v))

    def edges(self):
        return (e for e in self._inner.edges() if self._sees(e))

    def _iter_out(self, v):
        return (
            e for e in self._inner._iter_out(v)
            if not (self.is_edge_hidden(e.index) or self.is_hidden(e.target))
        )

    def _iter_in(self, v):
        return (
            e for e in self._inner._iter_in(v)
            if not (self.is_edge_hidden(e.index) or self.is_hidden(e.source))
        )


class SelectedSubgraph(_View):
    """Inclusion-based view: an explicit keep-set intersected with the wrapped reader.

    Parameters
    ----------
    inner : GraphReader
    vertices, edges : iterable of int
        Initial keep-sets. Every entry must be visible in ``inner``.

    Raises
    ------
    UnknownVertex, UnknownEdge
        If an initial entry is not visible in ``inner``.

    Notes
    -----
    Kept edges with an endpoint outside the vertex keep-set stay invisible.
    :meth:`drop_vertex`/:meth:`drop_edge` only remove entries; nothing is ever
    added back. An entity that reuses the index of a kept one is not kept.

    """

    def __init__(self, inner: GraphReader, vertices=(), edges=()):
        super().__init__(inner)
        keep_v = set(vertices)
        keep_e = set(edges)
        for v in keep_v:
            if not inner.has_vertex(v):
                raise UnknownVertex(v)
        for e in keep_e:
            if not inner.has_edge(e):
                raise UnknownEdge(e)
        # index -> generation when selected
        self._keep_vertices = {v: inner.vertex_generation(v) for v in keep_v}
        self._keep_edges = {e: inner.edge_generation(e) for e in keep_e}

    @classmethod
    def induced(cls, inner: GraphReader, vertices):
        """Keep ``vertices`` and every edge of ``inner`` between them."""
        keep = set(vertices)
        for v in keep:
            if not inner.has_vertex(v):
                raise UnknownVertex(v)
        edges = {e.index for v in keep for e in inner._iter_out(v) if e.target in keep}
        return cls(inner, keep, edges)

    @classmethod
    def from_edges(cls, inner: GraphReader, edges):
        """Keep ``edges`` and their endpoints."""
        keep_e = set(edges)
        keep_v = set()
        for e in keep_e:
            keep_v.update(inner.endpoints(e))
        return cls(inner, keep_v, keep_e)

    # Shrinking

    def drop_vertex(self, v) -> list:
        """Remove ``v`` from the keep-set, together with its incident edges.

        Returns
        -------
        list[Edge]
            Edges that were visible before the call and are not anymore.

        Raises
        ------
        NotSelected
            If ``v`` is not in the keep-set.

        """
        if not self.is_selected(v):
            raise NotSelected(v, "vertex")
        gone = self._incident(v) if self._inner.has_vertex(v) else []
        del self._keep_vertices[v]
        for e in gone:
            self._keep_edges.pop(e.index, None)
        return gone

    def drop_edge(self, e):
        """Remove ``e`` from the keep-set.

        Returns
        -------
        Edge or None
            The edge record if it was visible before the call.

        Raises
        ------
        NotSelected
            If ``e`` is not in the keep-set.

        """
        if not self.is_edge_selected(e):
            raise NotSelected(e, "edge")
        rec = self.find_edge(e)
        del self._keep_edges[e]
        return rec

    def is_selected(self, v) -> bool:
        return self._matches(self._keep_vertices, v, self._inner.vertex_generation)

    def is_edge_selected(self, e) -> bool:
        return self._matches(self._keep_edges, e, self._inner.edge_generation)

    def _sees(self, rec) -> bool:
        return (
            self.is_edge_selected(rec.index)
            and self.is_selected(rec.source)
            and self.is_selected(rec.target)
        )

    # Read contract

    def has_vertex(self, v) -> bool:
        return self.is_selected(v) and self._inner.has_vertex(v)

    def has_edge(self, e) -> bool:
        return self.find_edge(e) is not None

    def find_edge(self, e):
        if not self.is_edge_selected(e):
            return None
        rec = self._inner.find_edge(e)
        if rec is None or not self._sees(rec):
            return None
        return rec

    def vertices(self):
        return (v for v in sorted(self._keep_vertices) if self.has_vertex(v))

    def edges(self):
        found = (self.find_edge(e) for e in sorted(self._keep_edges))
        return (rec for rec in found if rec is not None)

    def vertex_count(self) -> int:
        return sum(1 for v in self._keep_vertices if self.has_vertex(v))

    def _iter_out(self, v):
        return (
            e for e in self._inner._iter_out(v)
            if self.is_edge_selected(e.index) and self.is_selected(e.target)
        )

    def _iter_in(self, v):
        return (
            e for e in self._inner._iter_in(v)
            if self.is_edge_selected(e.index) and self.is_selected(e.source)
        )


def shadow(base: GraphReader) -> ShadowedSubgraph:
    """Shadowed view over ``base`` with an empty hide-set."""
    return ShadowedSubgraph(base)


def select(base: GraphReader, vertices=(), edges=()) -> SelectedSubgraph:
    """Selected view over ``base`` keeping exactly ``vertices`` and ``edges``."""
    view = SelectedSubgraph(base, vertices, edges)
    logger.debug(
        "Selected %d vertices, %d edges", len(view._keep_vertices), len(view._keep_edges)
    )
    return view
