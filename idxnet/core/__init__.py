from ._base import GraphReader
from .errors import (
    DuplicateTag,
    GraphError,
    NegativeWeight,
    NotSelected,
    UnknownEdge,
    UnknownTag,
    UnknownVertex,
)
from .graph import DiGraph, Graph, UnGraph
from .index import IndexSpace
from .structure import Edge, EdgeType, MappedGraph
from .tagged import TaggedGraph
from .views import SelectedSubgraph, ShadowedSubgraph, select, shadow

__all__ = [
    "GraphReader",
    "Graph",
    "DiGraph",
    "UnGraph",
    "TaggedGraph",
    "ShadowedSubgraph",
    "SelectedSubgraph",
    "shadow",
    "select",
    "IndexSpace",
    "Edge",
    "EdgeType",
    "MappedGraph",
    "GraphError",
    "UnknownVertex",
    "UnknownEdge",
    "UnknownTag",
    "NotSelected",
    "DuplicateTag",
    "NegativeWeight",
]
