"""Transitive closure and transitive reduction."""

import logging
from collections.abc import Callable, Hashable

from ._graph import GraphView
from ._lengths import longest_path_lengths

logger = logging.getLogger(__name__)


def _transitive_with[V: Hashable](keep: Callable[[int], bool], graph: GraphView[V]) -> GraphView[V]:
    """Rebuild the edge table keeping (x, y) iff ``keep`` accepts the longest x->y path length."""
    n = graph.vertex_count
    rows: list[list[int]] = []
    for x in graph.indices:
        lengths = longest_path_lengths(graph, x)
        rows.append([y for y in range(x + 1, n) if keep(lengths[y])])
    return graph.with_successors(rows)


def transitive_closure[V: Hashable](graph: GraphView[V]) -> GraphView[V]:
    """Return a graph with an edge for every pair connected by some path.

    The result keeps the vertex numbering of ``graph``.

    Example:
        >>> g = build_graph({"a": {"b"}, "b": {"c"}, "c": set()})
        >>> sorted(transitive_closure(g).edge_pairs())
        [('a', 'b'), ('a', 'c'), ('b', 'c')]

    """
    closure = _transitive_with(lambda length: length != 0, graph)
    logger.debug("Transitive closure of epoch %d has %d edges", graph.epoch, closure.edge_count())
    return closure


def transitive_reduction[V: Hashable](graph: GraphView[V]) -> GraphView[V]:
    """Return the smallest graph with the same reachability as ``graph``.

    An edge (x, y) survives iff the longest path from x to y has exactly one
    hop, i.e. there is no detour through another vertex.

    Example:
        >>> g = build_graph({"a": {"b", "c"}, "b": {"c"}, "c": set()})
        >>> sorted(transitive_reduction(g).edge_pairs())
        [('a', 'b'), ('b', 'c')]

    """
    reduction = _transitive_with(lambda length: length == 1, graph)
    logger.debug("Transitive reduction of epoch %d has %d edges", graph.epoch, reduction.edge_count())
    return reduction
