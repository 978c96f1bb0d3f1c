import polars as pl
import pytest

from idxnet.algorithms.shortest_path import dijkstra
from idxnet.core.errors import DuplicateTag, UnknownTag
from idxnet.core.tagged import TaggedGraph


class TestTaggedGraph:
    def test_duplicate_vertex_tag_rejected(self):
        T = TaggedGraph()
        T.insert_vertex("x")
        T.insert_vertex("y")
        with pytest.raises(DuplicateTag) as exc:
            T.insert_vertex("x")
        assert exc.value.tag == "x"
        assert T.vertex_count() == 2
        assert T.lower_graph.vertex_bound() == 2

    def test_duplicate_edge_tag_rejected(self, tagged_diamond):
        T = tagged_diamond
        with pytest.raises(DuplicateTag):
            T.insert_edge("AB", "B", "A")
        assert T.edge_count() == 4

    def test_unknown_endpoint_tag_allocates_nothing(self, tagged_diamond):
        T = tagged_diamond
        bound = T.lower_graph.edge_bound()
        with pytest.raises(UnknownTag) as exc:
            T.insert_edge("AZ", "A", "Z")
        assert exc.value.tag == "Z" and exc.value.kind == "vertex"
        assert T.lower_graph.edge_bound() == bound
        assert not T.contains_tag("AZ", "edge")

    def test_bijection_round_trip(self, tagged_diamond):
        T = tagged_diamond
        for tag in T.vertex_tags():
            assert T.tag_of(T.index_of(tag)) == tag
        for v in T.vertices():
            assert T.index_of(T.tag_of(v)) == v
        for tag in T.edge_tags():
            assert T.tag_of(T.index_of(tag, "edge"), "edge") == tag

    def test_lookup_misses(self, tagged_diamond):
        T = tagged_diamond
        assert T.index_of("nope") is None
        assert T.tag_of(1000) is None
        with pytest.raises(ValueError):
            T.index_of("A", kind="hyperedge")

    def test_remove_vertex_cascades_edge_tags(self, tagged_diamond):
        T = tagged_diamond
        removed = T.remove_vertex("C")
        assert sorted(removed) == ["AC", "BC", "CD"]
        assert sorted(T.edge_tags()) == ["AB"]
        assert not T.contains_tag("C")
        assert T.edge_count() == 1
        with pytest.raises(UnknownTag):
            T.remove_vertex("C")

    def test_remove_edge(self, tagged_diamond):
        T = tagged_diamond
        assert T.remove_edge("AC") == ("A", "C")
        assert T.index_of("AC", "edge") is None
        with pytest.raises(UnknownTag) as exc:
            T.remove_edge("AC")
        assert exc.value.kind == "edge"

    def test_recycled_index_gets_new_tag(self):
        T = TaggedGraph()
        v = T.insert_vertex("old")
        T.remove_vertex("old")
        assert T.insert_vertex("new") == v
        assert T.tag_of(v) == "new"
        assert T.index_of("old") is None

    def test_adjacent_tags(self, tagged_diamond):
        T = tagged_diamond
        assert sorted(T.adjacent_tags("A")) == [("AB", "B"), ("AC", "C")]
        assert T.endpoint_tags("CD") == ("C", "D")

    def test_attributes(self, tagged_diamond):
        T = tagged_diamond
        T.set_vertex_attrs("A", color="red")
        assert T.get_vertex_attrs("A") == {"color": "red"}
        assert T.get_edge_attrs("BC") == {"w": 2}
        T.set_edge_attrs("BC", w=7)
        assert T.weight_by("w")(T.index_of("BC", "edge")) == 7
        with pytest.raises(UnknownTag):
            T.set_vertex_attrs("Z", color="blue")

    def test_frames(self, tagged_diamond):
        T = tagged_diamond
        T.set_vertex_attrs("B", rank=2)
        vdf = T.vertices_view()
        assert vdf.columns == ["vertex", "tag", "rank"]
        assert vdf.filter(pl.col("tag") == "B")["rank"].item() == 2
        edf = T.edges_view()
        assert {"edge", "source", "target", "source_tag", "target_tag", "tag", "w"} <= set(edf.columns)
        row = edf.filter(pl.col("tag") == "AC")
        assert row["source_tag"].item() == "A"
        assert row["w"].item() == 5

    def test_attribute_names_clashing_with_columns(self):
        T = TaggedGraph()
        T.insert_vertex("a", tag="label", vertex=3)
        T.insert_vertex("b")
        T.insert_edge("ab", "a", "b", source="survey", target_tag="t", weight=2.5)
        vdf = T.vertices_view()
        assert vdf.columns == ["vertex", "tag", "attr_tag", "attr_vertex"]
        assert vdf.filter(pl.col("tag") == "a")["attr_tag"].item() == "label"

        edf = T.edges_view()
        assert edf["source"].item() == T.index_of("a")
        assert edf["attr_source"].item() == "survey"
        assert edf["target_tag"].item() == "b"
        assert edf["attr_target_tag"].item() == "t"
        assert edf["weight"].item() == 2.5

        weighted = T.edges_view(weight=T.weight_by("weight"))
        assert weighted["weight"].item() == 2.5
        assert weighted["attr_weight"].item() == 2.5

    def test_prefixed_attribute_name_stays_unique(self):
        T = TaggedGraph()
        T.insert_vertex("a", tag=1, attr_tag=2)
        vdf = T.vertices_view()
        assert vdf.columns == ["vertex", "tag", "attr_tag", "attr_attr_tag"]
        assert vdf["attr_tag"].item() == 1
        assert vdf["attr_attr_tag"].item() == 2

    def test_non_string_tags(self):
        T = TaggedGraph(directed=False)
        T.insert_vertex((0, 0))
        T.insert_vertex((0, 1))
        T.insert_edge(frozenset({"a"}), (0, 0), (0, 1))
        assert T.contains_tag((0, 1))
        assert T.vertices_view().height == 2

    def test_resolve_traversal_result(self, tagged_diamond):
        T = tagged_diamond
        result = dijkstra(T, T.index_of("A"), weight=T.weight_by("w"))
        assert T.resolve(result) == {
            "A": (0, None),
            "B": (1, "AB"),
            "C": (3, "BC"),
            "D": (4, "CD"),
        }
