from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

from ._proxy import BackendProxy
from .networkx import to_backend as nx_to_backend

if TYPE_CHECKING:
    from ..core.graph import Graph

__all__ = [
    "ensure_materialized",
    "get_proxy",
]

# ---------------------------------------------------------------------------
# 1. Central registry --------------------------------------------------------
# ---------------------------------------------------------------------------
# Map backend name -> callable that converts idxnet.Graph -> backend graph
_REGISTRY = {
    "networkx": nx_to_backend,
}


# ---------------------------------------------------------------------------
# 2. Public helpers ----------------------------------------------------------
# ---------------------------------------------------------------------------
def get_proxy(backend_name: str, graph: "Graph") -> BackendProxy:
    """Return a lazy proxy so users can write `G.nx.<algo>()`."""
    if backend_name not in _REGISTRY:
        raise ValueError(f"No backend '{backend_name}' registered")
    return BackendProxy(graph, backend_name)


def ensure_materialized(backend_name: str, graph: "Graph") -> dict:
    """
    Convert (or re-convert) *graph* into the requested backend object and
    cache the result on the graph's private state object. Returns the cache
    entry: {"module": nx, "graph": nx.MultiDiGraph, "version": int}
    """
    cache = graph._state._backend_cache
    entry = cache.get(backend_name)

    if entry is None or graph._state.dirty_since(entry["version"]):
        backend_module = importlib.import_module(backend_name)
        converted = _REGISTRY[backend_name](graph)
        entry = cache[backend_name] = {
            "module": backend_module,
            "graph": converted,
            "version": graph._state.version,
        }

    return entry
