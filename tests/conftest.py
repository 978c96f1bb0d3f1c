import pytest

from idxnet.core.graph import DiGraph, UnGraph
from idxnet.core.tagged import TaggedGraph


@pytest.fixture
def diamond():
    """Directed A->B (1), B->C (2), A->C (5), C->D (1).

    Returns (graph, vertices by name, edges by name, weight function).
    """
    G = DiGraph()
    V = dict(zip("ABCD", G.add_vertices(4)))
    E = {
        "AB": G.add_edge(V["A"], V["B"]),
        "BC": G.add_edge(V["B"], V["C"]),
        "AC": G.add_edge(V["A"], V["C"]),
        "CD": G.add_edge(V["C"], V["D"]),
    }
    weights = {E["AB"]: 1, E["BC"]: 2, E["AC"]: 5, E["CD"]: 1}
    return G, V, E, weights.__getitem__


@pytest.fixture
def tagged_diamond():
    T = TaggedGraph(directed=True)
    for tag in "ABCD":
        T.insert_vertex(tag)
    T.insert_edge("AB", "A", "B", w=1)
    T.insert_edge("BC", "B", "C", w=2)
    T.insert_edge("AC", "A", "C", w=5)
    T.insert_edge("CD", "C", "D", w=1)
    return T


@pytest.fixture
def triangle():
    """Undirected triangle 0-1-2 plus a self-loop on 2."""
    G = UnGraph()
    a, b, c = G.add_vertices(3)
    G.add_edge(a, b)
    G.add_edge(b, c)
    G.add_edge(c, a)
    G.add_edge(c, c)
    return G
