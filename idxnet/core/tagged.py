from __future__ import annotations

import logging

import polars as pl

from ._base import GraphReader
from .errors import DuplicateTag, UnknownTag
from .graph import Graph

logger = logging.getLogger(__name__)

_KINDS = ("vertex", "edge")


class TaggedGraph(GraphReader):
    """Graph whose vertices and edges carry caller-chosen tags.

    Owns a low-level :class:`~idxnet.core.graph.Graph` plus two independent
    bijections: vertex tag <-> vertex index and edge tag <-> edge index. Tags
    may be any hashable value with stable equality for the lifetime of the graph.

    The read contract is delegated to the owned graph, so a tagged graph can be
    wrapped in views or handed to any algorithm unchanged.

    Parameters
    ----------
    directed : bool, default True
    options : GraphOptions, optional
        Forwarded to the owned graph, together with keyword ``overrides``.

    Notes
    -----
    - Inserting an existing tag raises ``DuplicateTag``; removing or resolving an
      unmapped tag raises ``UnknownTag``.
    - Removal is atomic: mappings and graph entities go together, and the
      cascade of incident edges removes their edge tags as well.
    - Optional attribute payloads (``**attrs``) are kept per entity; they are not
      part of the identity.

    """

    def __init__(self, directed=True, options=None, **overrides):
        self._graph = Graph(directed, options, **overrides)
        self._vertex_by_tag = {}  # tag -> vertex index
        self._tag_by_vertex = {}  # vertex index -> tag
        self._edge_by_tag = {}  # tag -> edge index
        self._tag_by_edge = {}  # edge index -> tag
        self._vertex_attrs = {}  # vertex index -> dict
        self._edge_attrs = {}  # edge index -> dict

    @property
    def lower_graph(self) -> Graph:
        """The owned low-level graph. Treat as read-only; mutate through tags."""
        return self._graph

    # ==================== Mutation ====================

    def insert_vertex(self, tag, **attrs) -> int:
        """Add a vertex identified by ``tag``.

        Returns
        -------
        int
            The vertex index now mapped to ``tag``.

        Raises
        ------
        DuplicateTag
            If ``tag`` already names a vertex. The graph is unchanged.

        """
        if tag in self._vertex_by_tag:
            raise DuplicateTag(tag, "vertex")
        v = self._graph.add_vertex()
        self._vertex_by_tag[tag] = v
        self._tag_by_vertex[v] = tag
        if attrs:
            self._vertex_attrs[v] = dict(attrs)
        return v

    def insert_edge(self, tag, source_tag, target_tag, **attrs) -> int:
        """Add an edge identified by ``tag`` between two tagged vertices.

        Raises
        ------
        DuplicateTag
            If ``tag`` already names an edge.
        UnknownTag
            If either endpoint tag is unmapped. No edge index is allocated.

        """
        if tag in self._edge_by_tag:
            raise DuplicateTag(tag, "edge")
        source = self._require_tag(source_tag, "vertex")
        target = self._require_tag(target_tag, "vertex")
        e = self._graph.add_edge(source, target)
        self._edge_by_tag[tag] = e
        self._tag_by_edge[e] = tag
        if attrs:
            self._edge_attrs[e] = dict(attrs)
        return e

    def remove_vertex(self, tag) -> list:
        """Remove the vertex tagged ``tag`` and every incident edge.

        Returns
        -------
        list
            Tags of the removed incident edges.

        Raises
        ------
        UnknownTag
            If ``tag`` is unmapped.

        """
        v = self._require_tag(tag, "vertex")
        removed = self._graph.remove_vertex(v)
        edge_tags = [self._forget_edge(e.index) for e in removed]
        del self._vertex_by_tag[tag]
        del self._tag_by_vertex[v]
        self._vertex_attrs.pop(v, None)
        logger.debug("Removed vertex %r (%d incident edges)", tag, len(edge_tags))
        return edge_tags

    def remove_edge(self, tag) -> tuple:
        """Remove the edge tagged ``tag``.

        Returns
        -------
        tuple
            ``(source_tag, target_tag)`` of the removed edge.

        Raises
        ------
        UnknownTag
            If ``tag`` is unmapped.

        """
        e = self._require_tag(tag, "edge")
        removed = self._graph.remove_edge(e)
        self._forget_edge(e)
        return self._tag_by_vertex[removed.source], self._tag_by_vertex[removed.target]

    def _forget_edge(self, e):
        tag = self._tag_by_edge.pop(e)
        del self._edge_by_tag[tag]
        self._edge_attrs.pop(e, None)
        return tag

    # ==================== Tag <-> index ====================

    def _maps(self, kind):
        if kind == "vertex":
            return self._vertex_by_tag, self._tag_by_vertex
        if kind == "edge":
            return self._edge_by_tag, self._tag_by_edge
        raise ValueError(f"kind must be one of {_KINDS}, got {kind!r}")

    def _require_tag(self, tag, kind):
        by_tag, _ = self._maps(kind)
        try:
            return by_tag[tag]
        except KeyError:
            raise UnknownTag(tag, kind) from None

    def index_of(self, tag, kind="vertex"):
        """Index mapped to ``tag``, or None."""
        return self._maps(kind)[0].get(tag)

    def tag_of(self, index, kind="vertex", default=None):
        """Tag mapped to ``index``, or ``default``."""
        return self._maps(kind)[1].get(index, default)

    def contains_tag(self, tag, kind="vertex") -> bool:
        return tag in self._maps(kind)[0]

    def vertex_tags(self):
        return iter(self._vertex_by_tag)

    def edge_tags(self):
        return iter(self._edge_by_tag)

    def endpoint_tags(self, tag) -> tuple:
        """``(source_tag, target_tag)`` of the edge tagged ``tag``."""
        source, target = self._graph.endpoints(self._require_tag(tag, "edge"))
        return self._tag_by_vertex[source], self._tag_by_vertex[target]

    def adjacent_tags(self, tag) -> list[tuple]:
        """``(edge_tag, vertex_tag)`` pairs reachable in one step from ``tag``."""
        v = self._require_tag(tag, "vertex")
        return [(self._tag_by_edge[e], self._tag_by_vertex[u]) for e, u in self._graph.forward(v)]

    # ==================== Attributes ====================

    def set_vertex_attrs(self, tag, **attrs):
        v = self._require_tag(tag, "vertex")
        self._vertex_attrs.setdefault(v, {}).update(attrs)

    def set_edge_attrs(self, tag, **attrs):
        e = self._require_tag(tag, "edge")
        self._edge_attrs.setdefault(e, {}).update(attrs)

    def get_vertex_attrs(self, tag) -> dict:
        return dict(self._vertex_attrs.get(self._require_tag(tag, "vertex"), {}))

    def get_edge_attrs(self, tag) -> dict:
        return dict(self._edge_attrs.get(self._require_tag(tag, "edge"), {}))

    def weight_by(self, key, default=1.0):
        """Weight function ``edge index -> number`` reading edge attribute ``key``."""
        attrs = self._edge_attrs

        def weight(e):
            return attrs.get(e, {}).get(key, default)

        return weight

    def vertices_view(self) -> pl.DataFrame:
        """Polars DF with columns ``vertex``, ``tag`` and one column per attribute.

        An attribute named like a fixed column is renamed ``attr_<name>``.
        """
        return self._frame("vertex", self._tag_by_vertex, self._vertex_attrs)

    def edges_view(self, weight=None) -> pl.DataFrame:
        """Polars DF with columns ``edge``, ``source``, ``target``, ``tag``,
        ``source_tag``, ``target_tag`` and one column per edge attribute.

        ``weight`` adds a ``weight`` column as in :meth:`GraphReader.edges_view`.
        An attribute named like a fixed column is renamed ``attr_<name>``.
        """
        base = super().edges_view(weight)
        edges = base["edge"].to_list()
        vtag = self._tag_by_vertex
        taken = set(base.columns) | {"source_tag", "target_tag"}
        extra = self._frame("edge", self._tag_by_edge, self._edge_attrs, edges, taken)
        return pl.concat(
            [
                base,
                pl.DataFrame(
                    [
                        _tag_series("source_tag", [vtag[v] for v in base["source"]]),
                        _tag_series("target_tag", [vtag[v] for v in base["target"]]),
                    ]
                ),
                extra.drop("edge"),
            ],
            how="horizontal",
        )

    def _frame(self, key, tag_by_index, attrs_by_index, indices=None, reserved=()):
        if indices is None:
            indices = list(tag_by_index)
        data = {key: pl.Series(key, indices, dtype=pl.Int64)}
        data["tag"] = _tag_series("tag", [tag_by_index[i] for i in indices])
        taken = set(reserved) | set(data)
        names = {}  # attribute -> column
        for i in indices:
            for k in attrs_by_index.get(i, {}):
                if k in names:
                    continue
                col = str(k)
                while col in taken:
                    col = f"attr_{col}"
                taken.add(col)
                names[k] = col
        for k, col in names.items():
            data[col] = [attrs_by_index.get(i, {}).get(k) for i in indices]
        return pl.DataFrame(data)

    def resolve(self, result) -> dict:
        """Translate a traversal result to tags.

        Returns
        -------
        dict
            ``{vertex_tag: (distance, predecessor_edge_tag or None)}``

        """
        out = {}
        for v, (dist, edge) in result.items():
            out[self._tag_by_vertex[v]] = (dist, None if edge is None else self._tag_by_edge[edge])
        return out

    # ==================== Read contract (delegated) ====================

    def is_directed(self) -> bool:
        return self._graph.is_directed()

    def has_vertex(self, v) -> bool:
        return self._graph.has_vertex(v)

    def has_edge(self, e) -> bool:
        return self._graph.has_edge(e)

    def find_edge(self, e):
        return self._graph.find_edge(e)

    def vertices(self):
        return self._graph.vertices()

    def edges(self):
        return self._graph.edges()

    def vertex_count(self) -> int:
        return self._graph.vertex_count()

    def edge_count(self) -> int:
        return self._graph.edge_count()

    def vertex_bound(self) -> int:
        return self._graph.vertex_bound()

    def vertex_generation(self, v) -> int:
        return self._graph.vertex_generation(v)

    def edge_generation(self, e) -> int:
        return self._graph.edge_generation(e)

    def _iter_out(self, v):
        return self._graph._iter_out(v)

    def _iter_in(self, v):
        return self._graph._iter_in(v)

    def __repr__(self):
        return (
            f"TaggedGraph({self.edge_type.value}, "
            f"vertices={self.vertex_count()}, edges={self.edge_count()})"
        )


def _tag_series(name, tags):
    # str/int tags keep a native dtype; anything else is stored as Python objects
    if all(isinstance(t, str) for t in tags):
        return pl.Series(name, tags, dtype=pl.Utf8)
    if all(isinstance(t, int) and not isinstance(t, bool) for t in tags):
        return pl.Series(name, tags, dtype=pl.Int64)
    return pl.Series(name, tags, dtype=pl.Object)
