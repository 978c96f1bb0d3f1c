from ._heap import KeyedPriorityQueue
from .cycles import simple_cycles, simple_cycles_from
from .shortest_path import (
    TraversalResult,
    VertexState,
    dijkstra,
    iter_dijkstra,
    shortest_path,
)
from .toposort import is_dag, toposort

__all__ = [
    "KeyedPriorityQueue",
    "TraversalResult",
    "VertexState",
    "dijkstra",
    "iter_dijkstra",
    "shortest_path",
    "toposort",
    "is_dag",
    "simple_cycles",
    "simple_cycles_from",
]
