import networkx as nx
import pytest

from idxnet.adapters.networkx import to_nx
from idxnet.algorithms.cycles import simple_cycles, simple_cycles_from
from idxnet.algorithms.toposort import is_dag, toposort
from idxnet.core.errors import UnknownVertex
from idxnet.core.graph import DiGraph, UnGraph
from idxnet.core.views import shadow


def is_cyclic(cycle):
    return all(a.target == b.source for a, b in zip(cycle, cycle[1:] + cycle[:1]))


def is_simple(cycle):
    targets = [e.target for e in cycle]
    return len(targets) == len(set(targets))


class TestToposort:
    def test_diamond_order(self, diamond):
        G, V, *_ = diamond
        order = list(toposort(G))
        assert order == [V["A"], V["B"], V["C"], V["D"]]
        assert is_dag(G)

    def test_order_respects_every_edge(self):
        rand = nx.gnr_graph(40, 0.3, seed=5)  # growing network: a DAG
        G = DiGraph()
        G.add_vertices(40)
        for u, v in rand.edges():
            G.add_edge(u, v)
        order = list(toposort(G))
        pos = {v: i for i, v in enumerate(order)}
        assert len(order) == 40
        for e in G.edges():
            assert pos[e.source] < pos[e.target]

    def test_stops_at_cycle(self):
        G = DiGraph()
        a, b, c, d = G.add_vertices(4)
        G.add_edge(a, b)
        G.add_edge(b, c)
        G.add_edge(c, b)
        G.add_edge(d, d)
        order = list(toposort(G))
        assert order == [a]
        assert not is_dag(G)

    def test_graph_not_modified(self, diamond):
        G, *_ = diamond
        version = G.version
        list(toposort(G))
        assert G.version == version
        assert G.edge_count() == 4

    def test_over_view(self, diamond):
        G, V, *_ = diamond
        S = shadow(G)
        S.hide_vertex(V["A"])
        assert list(toposort(S)) == [V["B"], V["C"], V["D"]]

    def test_undirected_rejected(self, triangle):
        with pytest.raises(TypeError):
            toposort(triangle)


class TestSimpleCycles:
    def test_directed_self_loop(self):
        G = DiGraph()
        v = G.add_vertex()
        e = G.add_edge(v, v)
        assert [[c.index for c in cyc] for cyc in simple_cycles(G)] == [[e]]

    def test_back_and_forth(self):
        G = DiGraph()
        v0, v1 = G.add_vertices(2)
        G.add_edge(v0, v1)
        G.add_edge(v1, v0)
        cycles = list(simple_cycles_from(G, v0))
        assert len(cycles) == 1
        assert [(e.source, e.target) for e in cycles[0]] == [(v0, v1), (v1, v0)]

    def test_dag_has_no_cycles(self, diamond):
        G, *_ = diamond
        assert list(simple_cycles(G)) == []

    def test_undirected_no_cycle_on_single_edge(self):
        G = UnGraph()
        v0, v1 = G.add_vertices(2)
        G.add_edge(v0, v1)
        assert list(simple_cycles_from(G, v0)) == []

    def test_undirected_parallel_edges_form_cycle(self):
        G = UnGraph()
        v0, v1 = G.add_vertices(2)
        G.add_edge(v0, v1)
        G.add_edge(v0, v1)
        cycles = list(simple_cycles_from(G, v0))
        assert len(cycles) == 1
        assert sorted(e.source for e in cycles[0]) == [v0, v1]

    def test_undirected_self_loop(self):
        G = UnGraph()
        v = G.add_vertex()
        G.add_edge(v, v)
        cycles = list(simple_cycles(G))
        assert len(cycles) == 1 and cycles[0][0].source == v == cycles[0][0].target

    def test_unknown_start(self, diamond):
        G, *_ = diamond
        with pytest.raises(UnknownVertex):
            simple_cycles_from(G, 42)

    @pytest.mark.parametrize("seed", range(5))
    def test_cycles_are_cyclic_and_simple(self, seed):
        rand = nx.gnm_random_graph(15, 35, seed=seed, directed=True)
        G = DiGraph()
        G.add_vertices(15)
        for u, v in rand.edges():
            G.add_edge(u, v)
        cycles = list(simple_cycles(G))
        seen = set()
        for cyc in cycles:
            assert is_cyclic(cyc)
            assert is_simple(cyc)
            for e in cyc:
                assert G.endpoints(e.index) == (e.source, e.target)
            # the closing edge of each cycle is explored once
            assert cyc[-1].index not in seen
            seen.add(cyc[-1].index)
        # breaking every reported cycle until none remain leaves a DAG
        H = G.copy()
        while True:
            found = [cyc[0].index for cyc in simple_cycles(H)]
            if not found:
                break
            for e in found:
                if H.has_edge(e):
                    H.remove_edge(e)
        assert nx.is_directed_acyclic_graph(to_nx(H))
        assert is_dag(H)
