"""Error taxonomy shared by graphs, tagged graphs, views and algorithms.

All errors are local and recoverable: an operation that raises one of these
leaves its structure exactly as it was before the call.
"""

from __future__ import annotations


class GraphError(Exception):
    """Base class for every error raised by idxnet."""


class _LookupGraphError(GraphError, KeyError):
    # KeyError.__str__ would repr() the message
    __str__ = Exception.__str__


class UnknownVertex(_LookupGraphError):
    """A vertex index that is not live (or not visible in a view)."""

    def __init__(self, vertex):
        self.vertex = vertex
        super().__init__(f"Vertex {vertex} not found")


class UnknownEdge(_LookupGraphError):
    """An edge index that is not live (or not visible in a view)."""

    def __init__(self, edge):
        self.edge = edge
        super().__init__(f"Edge {edge} not found")


class UnknownTag(_LookupGraphError):
    """A tag with no mapping in a tagged graph."""

    def __init__(self, tag, kind="vertex"):
        self.tag = tag
        self.kind = kind
        super().__init__(f"No {kind} tagged {tag!r}")


class NotSelected(_LookupGraphError):
    """Drop requested on an element absent from a selected view's keep-set."""

    def __init__(self, index, kind="vertex"):
        self.index = index
        self.kind = kind
        super().__init__(f"{kind.capitalize()} {index} is not selected")


class DuplicateTag(GraphError, ValueError):
    """Insertion collided with a tag that is already mapped."""

    def __init__(self, tag, kind="vertex"):
        self.tag = tag
        self.kind = kind
        super().__init__(f"{kind.capitalize()} tag {tag!r} already exists")


class NegativeWeight(GraphError, ValueError):
    """The weight function returned a negative (or NaN) value during a traversal."""

    def __init__(self, edge, weight):
        self.edge = edge
        self.weight = weight
        super().__init__(f"Edge {edge} has negative weight {weight}")


__all__ = [
    "GraphError",
    "UnknownVertex",
    "UnknownEdge",
    "UnknownTag",
    "NotSelected",
    "DuplicateTag",
    "NegativeWeight",
]
