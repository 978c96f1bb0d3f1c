import inspect
import json
import logging
import time
from datetime import UTC, datetime
from functools import wraps

import numpy as np
import polars as pl

from ..config.models import GraphOptions
from ._base import GraphReader
from ._state import _State
from .cache import CacheManager
from .errors import UnknownEdge, UnknownVertex
from .index import IndexSpace
from .structure import Edge

logger = logging.getLogger(__name__)


class Graph(GraphReader):
    """Index-based directed or undirected multigraph.

    Vertices and edges are dense non-negative ints handed out by two
    :class:`~idxnet.core.index.IndexSpace` instances. Adjacency is stored in
    arrays indexed by vertex, so neighbor enumeration costs O(degree).

    Parameters
    ----------
    directed : bool, default True
        Fixed at construction. Directed graphs answer ``out_neighbors`` and
        ``in_neighbors``; undirected graphs answer ``neighbors``.
    options : GraphOptions, optional
        Construction options; keyword ``overrides`` are merged over it
        (``recycle_indices``, ``history``, ``vertex_capacity``, ``edge_capacity``).

    Notes
    -----
    - Self-loops and parallel edges are allowed.
    - Every mutation bumps the structural version used by :attr:`cache` and the
      NetworkX proxy; see :meth:`history` for the mutation log.

    See Also
    --------
    add_vertex, add_edge, remove_vertex, remove_edge, DiGraph, UnGraph

    """

    _HISTORY_FIELDS = {"version", "ts_utc", "mono_ns", "op"}

    def __init__(self, directed=True, options=None, **overrides):
        self.options = GraphOptions.resolve(options, **overrides)
        self.directed = bool(directed)

        opts = self.options
        self._vertex_ids = IndexSpace(opts.recycle_indices, opts.vertex_capacity)
        self._edge_ids = IndexSpace(opts.recycle_indices, opts.edge_capacity)

        # Adjacency; slot v is None when v is free
        self._out = [None] * opts.vertex_capacity  # v -> {edge: target}  (neighbor if undirected)
        self._in = [None] * opts.vertex_capacity if self.directed else None  # v -> {edge: source}
        self._ends = [None] * opts.edge_capacity  # edge -> (source, target)

        self._state = _State()
        self._cache = None

        # History and Timeline
        self._history_enabled = opts.history
        self._history = []  # list[dict]
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()  # wrap mutating methods

        logger.debug(
            "Created %s graph (recycle_indices=%s)",
            self.edge_type.value,
            opts.recycle_indices,
        )

    # Construction

    def add_vertex(self) -> int:
        """Add a vertex.

        Returns
        -------
        int
            The new vertex index (possibly a recycled one).

        """
        v = self._vertex_ids.allocate()
        self._ensure_slot(self._out, v)
        self._out[v] = {}
        if self.directed:
            self._ensure_slot(self._in, v)
            self._in[v] = {}
        self._state.bump()
        return v

    def add_vertices(self, count: int) -> list[int]:
        """Add ``count`` vertices and return their indices in allocation order."""
        return [self.add_vertex() for _ in range(int(count))]

    def add_edge(self, source, target) -> int:
        """Add an edge from ``source`` to ``target`` (between them if undirected).

        Parameters
        ----------
        source, target : int
            Live vertex indices. ``source == target`` adds a self-loop.

        Returns
        -------
        int
            The new edge index.

        Raises
        ------
        UnknownVertex
            If either endpoint is not live. No edge index is allocated.

        """
        if not self._vertex_ids.is_live(source):
            raise UnknownVertex(source)
        if not self._vertex_ids.is_live(target):
            raise UnknownVertex(target)

        e = self._edge_ids.allocate()
        self._ensure_slot(self._ends, e)
        self._ends[e] = (source, target)
        self._out[source][e] = target
        if self.directed:
            self._in[target][e] = source
        elif source != target:
            self._out[target][e] = source
        self._state.bump()
        return e

    # Removal

    def remove_edge(self, edge) -> Edge:
        """Remove an edge.

        Returns
        -------
        Edge
            The removed edge in storage orientation.

        Raises
        ------
        UnknownEdge
            If ``edge`` is not live.

        """
        if not self._edge_ids.is_live(edge):
            raise UnknownEdge(edge)
        removed = self._drop_edge(edge)
        self._state.bump()
        return removed

    def remove_vertex(self, vertex) -> list[Edge]:
        """Remove a vertex and every edge incident to it.

        Returns
        -------
        list[Edge]
            The removed incident edges, each exactly once (self-loops included).

        Raises
        ------
        UnknownVertex
            If ``vertex`` is not live.

        Notes
        -----
        Edge indices of the removed incident edges are released as well.

        """
        if not self._vertex_ids.is_live(vertex):
            raise UnknownVertex(vertex)

        incident = list(self._out[vertex])
        if self.directed:
            # self-loops sit in both maps
            incident.extend(e for e in self._in[vertex] if e not in self._out[vertex])
        removed = [self._drop_edge(e) for e in incident]

        self._out[vertex] = None
        if self.directed:
            self._in[vertex] = None
        self._vertex_ids.release(vertex)
        self._state.bump()
        logger.debug("Removed vertex %s with %d incident edges", vertex, len(removed))
        return removed

    def remove_vertices(self, vertices) -> list[Edge]:
        removed = []
        for v in list(vertices):
            removed.extend(self.remove_vertex(v))
        return removed

    def _drop_edge(self, e) -> Edge:
        source, target = self._ends[e]
        del self._out[source][e]
        if self.directed:
            del self._in[target][e]
        elif source != target:
            del self._out[target][e]
        self._ends[e] = None
        self._edge_ids.release(e)
        return Edge(e, source, target)

    @staticmethod
    def _ensure_slot(arr, idx):
        if idx >= len(arr):
            arr.extend([None] * (idx + 1 - len(arr) + max(8, len(arr) >> 1)))

    # Read contract

    def is_directed(self) -> bool:
        return self.directed

    def has_vertex(self, v) -> bool:
        return self._vertex_ids.is_live(v)

    def has_edge(self, e) -> bool:
        return self._edge_ids.is_live(e)

    def find_edge(self, e):
        if not self._edge_ids.is_live(e):
            return None
        source, target = self._ends[e]
        return Edge(e, source, target)

    def vertices(self):
        return iter(self._vertex_ids)

    def edges(self):
        ends = self._ends
        return (Edge(e, *ends[e]) for e in self._edge_ids)

    def vertex_count(self) -> int:
        return len(self._vertex_ids)

    def edge_count(self) -> int:
        return len(self._edge_ids)

    def vertex_bound(self) -> int:
        return self._vertex_ids.high_water

    def edge_bound(self) -> int:
        """One past the largest edge index ever handed out."""
        return self._edge_ids.high_water

    def vertex_generation(self, v) -> int:
        return self._vertex_ids.generation(v)

    def edge_generation(self, e) -> int:
        return self._edge_ids.generation(e)

    def _iter_out(self, v):
        return (Edge(e, v, u) for e, u in self._out[v].items())

    def _iter_in(self, v):
        if self.directed:
            return (Edge(e, u, v) for e, u in self._in[v].items())
        return (Edge(e, u, v) for e, u in self._out[v].items())

    def out_degree(self, v) -> int:
        self._require_vertex(v)
        return len(self._out[v])

    def in_degree(self, v) -> int:
        self._require_vertex(v)
        return len(self._in[v]) if self.directed else len(self._out[v])

    def vertex_mask(self) -> np.ndarray:
        """Boolean numpy mask over ``[0, vertex_bound())``; True for live vertices."""
        return self._vertex_ids.live_mask()

    def edge_mask(self) -> np.ndarray:
        """Boolean numpy mask over ``[0, edge_bound())``; True for live edges."""
        return self._edge_ids.live_mask()

    # Slicing / copying / accounting

    def copy(self):
        """Independent copy with identical vertex and edge indices.

        History is not copied. The copy has the same class as ``self``.
        """
        # subclasses fix ``directed`` in their own __init__
        other = type(self).__new__(type(self))
        Graph.__init__(other, self.directed, self.options)
        other._vertex_ids = self._vertex_ids.copy()
        other._edge_ids = self._edge_ids.copy()
        other._out = [None if d is None else dict(d) for d in self._out]
        if self.directed:
            other._in = [None if d is None else dict(d) for d in self._in]
        other._ends = list(self._ends)
        return other

    @property
    def cache(self):
        """Access the cache manager (CSR/CSC adjacency, degree vectors)."""
        if self._cache is None:
            self._cache = CacheManager(self)
        return self._cache

    @property
    def version(self) -> int:
        """Structural version; increases on every successful mutation."""
        return self._state.version

    # History and Timeline

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, Edge):
            return {"index": x.index, "source": x.source, "target": x.target}
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # NumPy scalars
        if isinstance(x, (np.generic,)):
            return x.item()
        t = type(x).__name__
        return f"<<{t}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        evt = {
            "version": self._state.version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        # sanitize
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                result = fn(*args, **kwargs)
                payload = {}
                # record all call args except 'self'
                for k, v in bound.arguments.items():
                    if k != "self":
                        payload[k] = v
                payload["result"] = result
                self._log_event(op, **payload)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        # Mutating methods to wrap. Add here if you add new mutators.
        to_wrap = [
            "add_vertex",
            "add_edge",
            "remove_edge",
            "remove_vertex",
        ]
        for name in to_wrap:
            fn = getattr(self, name)
            # Avoid double-wrapping
            if getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._log_mutation(name)(fn))

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Each event includes: 'version' (structural version after the call),
            'ts_utc' (UTC ISO-8601), 'mono_ns' (monotonic nanoseconds since the
            graph was created), 'op', the call arguments, and 'result'.

        Notes
        -----
        Calls that raise are not recorded. In DataFrame form, call arguments and
        results are JSON-encoded strings since their types vary per op.

        """
        if as_df:
            rows = [
                {k: (v if k in self._HISTORY_FIELDS else json.dumps(v)) for k, v in evt.items()}
                for evt in self._history
            ]
            return pl.DataFrame(rows, infer_schema_length=None)
        return list(self._history)

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log."""
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker into the mutation history.

        Notes
        -----
        The event is recorded with 'op'='mark'. Logging must be enabled for the
        marker to be recorded.

        """
        self._log_event("mark", label=label)

    # Lazy proxies

    @property
    def nx(self):
        """Accessor for the lazy NX proxy.
        Usage: G.nx.<algorithm>(...); e.g. G.nx.is_directed_acyclic_graph()
        """
        from ..adapters.manager import get_proxy

        return get_proxy("networkx", self)


class DiGraph(Graph):
    """Directed :class:`Graph`."""

    def __init__(self, options=None, **overrides):
        super().__init__(True, options, **overrides)


class UnGraph(Graph):
    """Undirected :class:`Graph`."""

    def __init__(self, options=None, **overrides):
        super().__init__(False, options, **overrides)
