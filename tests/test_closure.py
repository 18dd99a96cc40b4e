"""Tests for transitive closure and reduction."""

import pytest

from dagindex import GraphView, build_graph, transitive_closure, transitive_reduction


@pytest.fixture
def graph() -> GraphView[str]:
    """The canonical example graph, ordered a, x, b, d, e."""
    return build_graph(
        {
            "a": {"b", "x", "d", "e"},
            "b": {"d"},
            "x": {"d", "e"},
            "d": {"e"},
            "e": set(),
        },
    )


class TestTransitiveClosure:
    def test_canonical(self, graph: GraphView[str]) -> None:
        assert transitive_closure(graph).adjacency_map() == {
            "a": frozenset({"x", "b", "d", "e"}),
            "x": frozenset({"d", "e"}),
            "b": frozenset({"d", "e"}),
            "d": frozenset({"e"}),
            "e": frozenset(),
        }

    def test_chain(self) -> None:
        graph = build_graph({"a": {"b"}, "b": {"c"}, "c": {"d"}, "d": set()})
        assert transitive_closure(graph).edge_pairs() == {
            ("a", "b"),
            ("a", "c"),
            ("a", "d"),
            ("b", "c"),
            ("b", "d"),
            ("c", "d"),
        }

    def test_keeps_numbering(self, graph: GraphView[str]) -> None:
        closure = transitive_closure(graph)
        assert closure.epoch == graph.epoch
        assert closure.vertices() == graph.vertices()
        a = graph.index("a")
        assert a is not None
        assert closure.vertex(a) == "a"

    def test_does_not_change_source(self, graph: GraphView[str]) -> None:
        before = graph.adjacency_map()
        transitive_closure(graph)
        assert graph.adjacency_map() == before

    def test_empty_graph(self) -> None:
        assert transitive_closure(build_graph({})).adjacency_map() == {}


class TestTransitiveReduction:
    def test_canonical(self, graph: GraphView[str]) -> None:
        assert transitive_reduction(graph).adjacency_map() == {
            "a": frozenset({"x", "b"}),
            "x": frozenset({"d"}),
            "b": frozenset({"d"}),
            "d": frozenset({"e"}),
            "e": frozenset(),
        }

    def test_already_reduced_graph_is_unchanged(self) -> None:
        graph = build_graph({"a": {"b", "c"}, "b": {"d"}, "c": {"d"}, "d": set()})
        assert transitive_reduction(graph).adjacency_map() == graph.adjacency_map()

    def test_complete_dag_reduces_to_chain(self) -> None:
        graph = build_graph({"a": {"b", "c", "d"}, "b": {"c", "d"}, "c": {"d"}, "d": set()})
        assert transitive_reduction(graph).edge_pairs() == {("a", "b"), ("b", "c"), ("c", "d")}

    def test_keeps_numbering(self, graph: GraphView[str]) -> None:
        reduction = transitive_reduction(graph)
        assert reduction.epoch == graph.epoch
        assert reduction.vertices() == graph.vertices()
