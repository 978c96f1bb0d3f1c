# idxnet/__init__.py
"""idxnet: single import, full API."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    # namespaces
    "adapters": "idxnet.adapters",
    "algorithms": "idxnet.algorithms",
    "config": "idxnet.config",
    "core": "idxnet.core",
    "errors": "idxnet.core.errors",
    # adapter modules (direct convenience)
    "networkx": "idxnet.adapters.networkx",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Graph": ("idxnet.core.graph", "Graph"),
    "DiGraph": ("idxnet.core.graph", "DiGraph"),
    "UnGraph": ("idxnet.core.graph", "UnGraph"),
    "TaggedGraph": ("idxnet.core.tagged", "TaggedGraph"),
    "GraphReader": ("idxnet.core._base", "GraphReader"),
    "IndexSpace": ("idxnet.core.index", "IndexSpace"),
    "Edge": ("idxnet.core.structure", "Edge"),
    "EdgeType": ("idxnet.core.structure", "EdgeType"),
    "MappedGraph": ("idxnet.core.structure", "MappedGraph"),
    # Views
    "ShadowedSubgraph": ("idxnet.core.views", "ShadowedSubgraph"),
    "SelectedSubgraph": ("idxnet.core.views", "SelectedSubgraph"),
    "shadow": ("idxnet.core.views", "shadow"),
    "select": ("idxnet.core.views", "select"),
    # Errors
    "GraphError": ("idxnet.core.errors", "GraphError"),
    "UnknownVertex": ("idxnet.core.errors", "UnknownVertex"),
    "UnknownEdge": ("idxnet.core.errors", "UnknownEdge"),
    "UnknownTag": ("idxnet.core.errors", "UnknownTag"),
    "NotSelected": ("idxnet.core.errors", "NotSelected"),
    "DuplicateTag": ("idxnet.core.errors", "DuplicateTag"),
    "NegativeWeight": ("idxnet.core.errors", "NegativeWeight"),
    # Algorithms
    "KeyedPriorityQueue": ("idxnet.algorithms._heap", "KeyedPriorityQueue"),
    "TraversalResult": ("idxnet.algorithms.shortest_path", "TraversalResult"),
    "dijkstra": ("idxnet.algorithms.shortest_path", "dijkstra"),
    "iter_dijkstra": ("idxnet.algorithms.shortest_path", "iter_dijkstra"),
    "shortest_path": ("idxnet.algorithms.shortest_path", "shortest_path"),
    "toposort": ("idxnet.algorithms.toposort", "toposort"),
    "simple_cycles": ("idxnet.algorithms.cycles", "simple_cycles"),
    # Config
    "GraphOptions": ("idxnet.config.models", "GraphOptions"),
    "configure_logging": ("idxnet.config.logging", "configure_logging"),
    # NetworkX adapter
    "to_nx": ("idxnet.adapters.networkx", "to_nx"),
    "from_nx": ("idxnet.adapters.networkx", "from_nx"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("idxnet")
except PackageNotFoundError:
    __version__ = "0.0.0"
