from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple


class EdgeType(str, Enum):
    """Edge type (DIRECTED, UNDIRECTED).

    Attributes:
        DIRECTED: edge (u, v) is only traversed from u to v
        UNDIRECTED: edge (u, v) is traversed from either endpoint
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    @classmethod
    def of(cls, directed: bool) -> "EdgeType":
        return cls.DIRECTED if directed else cls.UNDIRECTED


class Edge(NamedTuple):
    """Low-level edge record.

    For undirected graphs, ``source`` and ``target`` are oriented by the query
    that produced the record: ``out_edges(v)`` always reports ``source == v``.
    """

    index: int
    source: int
    target: int

    def other(self, vertex: int) -> int:
        """Endpoint opposite to ``vertex`` (``vertex`` itself for a self-loop)."""
        return self.target if vertex == self.source else self.source

    def reversed(self) -> "Edge":
        return Edge(self.index, self.target, self.source)


@dataclass
class MappedGraph:
    """A freshly built graph plus the index translation back to its origin.

    ``vertex_map[new] == old`` and ``edge_map[new] == old``, where ``old`` is the
    index (or NetworkX node / edge key) the entity had where it was copied from.
    """

    graph: Any
    vertex_map: dict = field(default_factory=dict)
    edge_map: dict = field(default_factory=dict)

    def inverse(self) -> tuple[dict, dict]:
        """(old -> new vertex map, old -> new edge map)."""
        return (
            {old: new for new, old in self.vertex_map.items()},
            {old: new for new, old in self.edge_map.items()},
        )


"""
Vertices and edges are plain non-negative ints scoped to one graph instance.
Algorithms copy and store them freely; tags live one layer up (see tagged.py).
"""
