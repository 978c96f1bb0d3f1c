# Run: python -m unittest tests/test_lazy_proxies.py -v

import unittest

from idxnet.adapters.manager import ensure_materialized, get_proxy
from idxnet.core.graph import DiGraph, Graph, UnGraph


def build_chain() -> Graph:
    r"""Directed chain a->b->c->d->e with a chord a->c."""
    G = DiGraph()
    G.add_vertices(5)
    for u in range(4):
        G.add_edge(u, u + 1)
    G.add_edge(0, 2)
    return G


class TestLazyNXProxy(unittest.TestCase):

    def test_algorithm_call(self):
        G = build_chain()
        self.assertEqual(G.nx.shortest_path_length(0, 4), 3)
        self.assertTrue(G.nx.is_directed_acyclic_graph())
        self.assertEqual(list(G.nx.topological_sort()), [0, 1, 2, 3, 4])

    def test_attribute_forwarding(self):
        G = build_chain()
        self.assertEqual(G.nx.number_of_edges(), 5)

    def test_cache_reused_until_mutation(self):
        G = build_chain()
        H1 = ensure_materialized("networkx", G)["graph"]
        H2 = ensure_materialized("networkx", G)["graph"]
        self.assertIs(H1, H2)
        G.add_edge(4, 0)  # mutate
        H3 = ensure_materialized("networkx", G)["graph"]
        self.assertIsNot(H1, H3)
        self.assertFalse(G.nx.is_directed_acyclic_graph())

    def test_undirected_components(self):
        G = UnGraph()
        G.add_vertices(4)
        G.add_edge(0, 1)
        G.add_edge(2, 3)
        comps = sorted(sorted(c) for c in G.nx.connected_components())
        self.assertEqual(comps, [[0, 1], [2, 3]])

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            get_proxy("igraph", build_chain())


if __name__ == "__main__":
    unittest.main()
