from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

import numpy as np
import polars as pl
import scipy.sparse as sp

from .errors import UnknownEdge, UnknownVertex
from .structure import Edge, EdgeType


class GraphReader(ABC):
    """Read capability set shared by graphs, tagged graphs and views.

    Subclasses provide the primitives (membership, edge lookup and oriented
    incidence); everything else, including neighbor enumeration, is derived here
    so that an algorithm written against this class never needs to know whether
    it reads a graph, a tagged wrapper or a view.

    Notes
    -----
    - Neighbor queries produce lazy ``(edge, vertex)`` pairs, one read pass per call.
    - Directed graphs answer ``out_neighbors``/``in_neighbors``; undirected graphs
      answer ``neighbors``. Calling the other family raises ``TypeError``.
      ``forward`` works on both.

    """

    # ==================== Primitives ====================

    @abstractmethod
    def is_directed(self) -> bool:
        pass

    @abstractmethod
    def has_vertex(self, v) -> bool:
        pass

    @abstractmethod
    def has_edge(self, e) -> bool:
        pass

    @abstractmethod
    def find_edge(self, e) -> Edge | None:
        """Edge record in storage orientation, or None if not visible."""

    @abstractmethod
    def vertices(self) -> Iterator[int]:
        pass

    @abstractmethod
    def edges(self) -> Iterator[Edge]:
        pass

    @abstractmethod
    def vertex_bound(self) -> int:
        """One past the largest vertex index the underlying storage ever used."""

    @abstractmethod
    def vertex_generation(self, v) -> int:
        """Release count of vertex index ``v`` in the underlying storage."""

    @abstractmethod
    def edge_generation(self, e) -> int:
        """Release count of edge index ``e`` in the underlying storage."""

    @abstractmethod
    def _iter_out(self, v) -> Iterator[Edge]:
        # precondition: has_vertex(v); records oriented with source == v
        pass

    @abstractmethod
    def _iter_in(self, v) -> Iterator[Edge]:
        # precondition: has_vertex(v); records oriented with target == v
        pass

    # ==================== Counts ====================

    def vertex_count(self) -> int:
        return sum(1 for _ in self.vertices())

    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())

    @property
    def edge_type(self) -> EdgeType:
        return EdgeType.of(self.is_directed())

    # ==================== Incidence ====================

    def endpoints(self, e) -> tuple[int, int]:
        """(source, target) of ``e``.

        Raises
        ------
        UnknownEdge
            If ``e`` is not visible.

        """
        edge = self.find_edge(e)
        if edge is None:
            raise UnknownEdge(e)
        return edge.source, edge.target

    def _require_vertex(self, v):
        if not self.has_vertex(v):
            raise UnknownVertex(v)

    def out_edges(self, v) -> Iterator[Edge]:
        """Edges leaving ``v`` (all incident edges for undirected graphs)."""
        self._require_vertex(v)
        return self._iter_out(v)

    def in_edges(self, v) -> Iterator[Edge]:
        """Edges entering ``v`` (all incident edges for undirected graphs)."""
        self._require_vertex(v)
        return self._iter_in(v)

    def edges_connecting(self, source, target) -> Iterator[Edge]:
        """Edges from ``source`` to ``target`` (between them if undirected)."""
        self._require_vertex(source)
        self._require_vertex(target)
        return (e for e in self._iter_out(source) if e.target == target)

    # ==================== Neighbors ====================

    def out_neighbors(self, v) -> Iterator[tuple[int, int]]:
        """Lazy ``(edge, successor)`` pairs. Directed graphs only."""
        if not self.is_directed():
            raise TypeError("out_neighbors() needs a directed graph; use neighbors()")
        return ((e.index, e.target) for e in self.out_edges(v))

    def in_neighbors(self, v) -> Iterator[tuple[int, int]]:
        """Lazy ``(edge, predecessor)`` pairs. Directed graphs only."""
        if not self.is_directed():
            raise TypeError("in_neighbors() needs a directed graph; use neighbors()")
        return ((e.index, e.source) for e in self.in_edges(v))

    def neighbors(self, v) -> Iterator[tuple[int, int]]:
        """Lazy ``(edge, neighbor)`` pairs. Undirected graphs only."""
        if self.is_directed():
            raise TypeError(
                "neighbors() needs an undirected graph; use out_neighbors()/in_neighbors()"
            )
        return ((e.index, e.target) for e in self.out_edges(v))

    def forward(self, v) -> Iterator[tuple[int, int]]:
        """``out_neighbors`` on directed graphs, ``neighbors`` on undirected ones."""
        return ((e.index, e.target) for e in self.out_edges(v))

    def out_degree(self, v) -> int:
        return sum(1 for _ in self.out_edges(v))

    def in_degree(self, v) -> int:
        return sum(1 for _ in self.in_edges(v))

    def degree(self, v) -> int:
        """Incident edge count; self-loops count twice."""
        if self.is_directed():
            return self.out_degree(v) + self.in_degree(v)
        return sum(2 if e.target == v else 1 for e in self.out_edges(v))

    # ==================== Matrix / DataFrame views ====================

    def adjacency_matrix(self, weight=None) -> sp.csr_array:
        """Sparse adjacency over the index range ``[0, vertex_bound())``.

        Parameters
        ----------
        weight : callable, optional
            ``edge -> number``. Defaults to 1 per edge. Parallel edges are summed.

        Returns
        -------
        scipy.sparse.csr_array
            Square matrix; symmetric for undirected graphs. Rows of free or hidden
            indices are empty.

        """
        n = self.vertex_bound()
        rows, cols, vals = [], [], []
        directed = self.is_directed()
        for e in self.edges():
            w = 1.0 if weight is None else float(weight(e.index))
            rows.append(e.source)
            cols.append(e.target)
            vals.append(w)
            if not directed and e.source != e.target:
                rows.append(e.target)
                cols.append(e.source)
                vals.append(w)
        coo = sp.coo_array(
            (
                np.asarray(vals, dtype=np.float64),
                (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)),
            ),
            shape=(n, n),
        )
        return coo.tocsr()

    def edges_view(self, weight=None) -> pl.DataFrame:
        """Polars DF (DataFrame) with one row per visible edge.

        Columns: ``edge``, ``source``, ``target`` and, when ``weight`` is given,
        ``weight``.
        """
        recs = list(self.edges())
        data = {
            "edge": [e.index for e in recs],
            "source": [e.source for e in recs],
            "target": [e.target for e in recs],
        }
        schema = {"edge": pl.Int64, "source": pl.Int64, "target": pl.Int64}
        if weight is not None:
            data["weight"] = [float(weight(e.index)) for e in recs]
            schema["weight"] = pl.Float64
        return pl.DataFrame(data, schema=schema)

    # ==================== Convenience ====================

    def summary(self):
        """Human-readable summary: one line per vertex, one indented line per out-edge."""
        arrow = "->" if self.is_directed() else "--"
        lines = [
            f"{type(self).__name__} ({self.edge_type.value})",
            "─" * 30,
            f"Vertices: {self.vertex_count()}",
            f"Edges: {self.edge_count()}",
        ]
        for v in self.vertices():
            lines.append(f"{v}")
            for e in self._iter_out(v):
                lines.append(f"  --{e.index}{arrow} {e.target}")
        return "\n".join(lines)

    def __contains__(self, v) -> bool:
        return self.has_vertex(v)

    def __iter__(self):
        return self.vertices()

    def __len__(self):
        return self.vertex_count()

    def __repr__(self):
        return (
            f"{type(self).__name__}({self.edge_type.value}, "
            f"vertices={self.vertex_count()}, edges={self.edge_count()})"
        )
