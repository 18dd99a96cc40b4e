"""Tests for building graph views from adjacency maps."""

from itertools import pairwise

import pytest

from dagindex import (
    CycleDetectedError,
    GraphScopeError,
    build_graph,
    find_cycle,
    graph_scope,
    topological_sort,
    transitive_closure,
    transpose,
)

CANONICAL = {
    "a": {"b", "x", "d", "e"},
    "b": {"d"},
    "x": {"d", "e"},
    "d": {"e"},
    "e": set(),
}

CYCLIC = {
    "a": {"b", "x"},
    "b": {"c", "x"},
    "c": {"a", "x"},
    "x": set(),
}


class TestBuildGraph:
    """Tests for successful construction."""

    def test_empty_graph(self) -> None:
        graph = build_graph({})
        assert len(graph) == 0
        assert graph.vertices() == []
        assert graph.indices == ()

    def test_canonical_order(self) -> None:
        graph = build_graph(CANONICAL)
        assert graph.vertices() == ["a", "x", "b", "d", "e"]

    def test_round_trips_adjacency_map(self) -> None:
        graph = build_graph(CANONICAL)
        assert graph.adjacency_map() == {k: frozenset(v) for k, v in CANONICAL.items()}

    def test_every_edge_points_forward(self) -> None:
        graph = build_graph(CANONICAL)
        for i, j in graph.edges():
            assert i < j

    def test_order_is_independent_of_insertion_order(self) -> None:
        backward = dict(reversed(list(CANONICAL.items())))
        assert build_graph(backward).vertices() == build_graph(CANONICAL).vertices()

    def test_successors_outside_key_set_are_dropped(self) -> None:
        graph = build_graph({"a": {"b", "zzz"}, "b": set()})
        assert len(graph) == 2
        assert "zzz" not in graph
        assert graph.index("zzz") is None
        assert graph.adjacency_map() == {"a": frozenset({"b"}), "b": frozenset()}

    def test_does_not_mutate_input(self) -> None:
        adjacency = {"a": {"b", "zzz"}, "b": set()}
        build_graph(adjacency)
        assert adjacency == {"a": {"b", "zzz"}, "b": set()}

    def test_sort_key_for_mixed_types(self) -> None:
        graph = build_graph({1: {"a"}, "a": set()}, key=str)
        assert graph.vertices() == [1, "a"]

    def test_unscoped_view_stays_open(self) -> None:
        graph = build_graph(CANONICAL)
        assert graph.is_open


class TestCycleDetection:
    """Tests for cycle witnesses."""

    def test_three_cycle_witness(self) -> None:
        with pytest.raises(CycleDetectedError) as excinfo:
            build_graph(CYCLIC)
        assert excinfo.value.cycle == ("c", "a", "b", "c")

    def test_witness_is_a_closed_walk(self) -> None:
        with pytest.raises(CycleDetectedError) as excinfo:
            build_graph(CYCLIC)
        cycle = excinfo.value.cycle
        assert cycle[0] == cycle[-1]
        assert {"a", "b", "c"} <= set(cycle)
        for u, v in pairwise(cycle):
            assert v in CYCLIC[u]

    def test_self_loop(self) -> None:
        with pytest.raises(CycleDetectedError) as excinfo:
            build_graph({"a": {"a"}})
        assert excinfo.value.cycle == ("a", "a")

    def test_message_renders_cycle(self) -> None:
        with pytest.raises(CycleDetectedError, match="a -> a"):
            build_graph({"a": {"a"}})

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Cycle"):
            build_graph({"a": {"b"}, "b": {"a"}})

    def test_cycle_behind_acyclic_prefix(self) -> None:
        with pytest.raises(CycleDetectedError) as excinfo:
            build_graph({"r": {"p"}, "p": {"q"}, "q": {"p"}})
        assert set(excinfo.value.cycle) == {"p", "q"}

    def test_find_cycle_two_cycle(self) -> None:
        assert find_cycle({"a": {"b"}, "b": {"a"}}) == ["b", "a", "b"]

    def test_find_cycle_acyclic(self) -> None:
        assert find_cycle(CANONICAL) is None

    def test_find_cycle_ignores_edges_to_unknown_vertices(self) -> None:
        assert find_cycle({"a": {"b"}}) is None


class TestGraphScope:
    """Tests for scoped graph views."""

    def test_usable_inside_scope(self) -> None:
        with graph_scope(CANONICAL) as graph:
            assert graph.is_open
            assert graph.vertices() == ["a", "x", "b", "d", "e"]

    def test_closed_after_scope(self) -> None:
        with graph_scope(CANONICAL) as graph:
            pass
        assert not graph.is_open
        with pytest.raises(GraphScopeError):
            graph.vertices()
        with pytest.raises(GraphScopeError):
            graph.index("a")

    def test_derived_views_close_with_scope(self) -> None:
        with graph_scope(CANONICAL) as graph:
            closure = transitive_closure(graph)
            transposed = transpose(graph)
        with pytest.raises(GraphScopeError):
            closure.adjacency_map()
        with pytest.raises(GraphScopeError):
            transposed.successors(0)

    def test_closed_when_block_raises(self) -> None:
        with pytest.raises(KeyError), graph_scope(CANONICAL) as graph:
            raise KeyError
        assert not graph.is_open

    def test_cycle_prevents_entering_scope(self) -> None:
        entered = False
        with pytest.raises(CycleDetectedError), graph_scope(CYCLIC):
            entered = True
        assert not entered


class TestTopologicalSort:
    """Tests for the vertex-level topological sort."""

    def test_linear_chain(self) -> None:
        assert topological_sort({"a": ["b"], "b": ["c"], "c": []}) == ["a", "b", "c"]

    def test_multiple_roots(self) -> None:
        result = topological_sort({"a": ["c"], "b": ["c"], "c": []})
        assert result[-1] == "c"
        assert set(result[:2]) == {"a", "b"}

    def test_cycle_detection(self) -> None:
        with pytest.raises(CycleDetectedError):
            topological_sort({"a": ["b"], "b": ["c"], "c": ["a"]})
