"""Turn an adjacency map into a topologically indexed graph view."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from dagindex._errors import CycleDetectedError

from ._algorithms import SortKey, candidate_order, find_path
from ._index import GraphScope
from ._view import GraphView

if TYPE_CHECKING:
    from collections.abc import Collection, Hashable, Iterator, Mapping

logger = logging.getLogger(__name__)


def _index_tables[V: Hashable](
    adjacency: Mapping[V, Collection[V]],
    key: SortKey[V],
) -> tuple[list[V], dict[V, int], list[list[int]]]:
    order = candidate_order(adjacency, key=key)
    index_of = {v: i for i, v in enumerate(order)}
    rows = [sorted({index_of[s] for s in adjacency[v] if s in index_of}) for v in order]
    return order, index_of, rows


def _witness[V](order: list[V], rows: list[list[int]]) -> list[V] | None:
    """Scan every edge and explain the first one that does not point forward.

    Returns:
        A closed walk of vertices starting and ending at the source of the
        offending edge, or None if every edge points forward.

    """
    table = dict(enumerate(rows))
    for source, row in enumerate(rows):
        for target in row:
            if source < target:
                continue
            back = find_path(table, target, source)
            if back is not None:
                return [order[source], *(order[i] for i in back)]
    return None


def find_cycle[V: Hashable](
    adjacency: Mapping[V, Collection[V]],
    *,
    key: SortKey[V] = None,
) -> list[V] | None:
    """Return a witness cycle of ``adjacency``, or None if it is acyclic.

    Example:
        >>> find_cycle({"a": {"a"}})
        ['a', 'a']

    """
    order, _, rows = _index_tables(adjacency, key)
    return _witness(order, rows)


def build_graph[V: Hashable](
    adjacency: Mapping[V, Collection[V]],
    *,
    key: SortKey[V] = None,
    scope: GraphScope | None = None,
) -> GraphView[V]:
    """Build a topologically indexed view of ``adjacency``.

    Only the keys of ``adjacency`` become vertices. Successors that are not
    keys are ignored. Ties between vertices with no ordering constraint are
    broken by comparing the vertices (or their ``key``), so the numbering is
    reproducible regardless of mapping iteration order.

    Args:
        adjacency: Mapping from vertex to its direct successors. Not mutated.
        key: Optional sort key for tie-breaking, for vertices that are not
            directly comparable.
        scope: Lifetime flag for the view. The view never expires when omitted.

    Returns:
        A GraphView where every edge points from a lower to a higher index.

    Raises:
        CycleDetectedError: If the graph has a cycle. The exception carries a
            witness closed walk in ``cycle``.

    Example:
        >>> g = build_graph({"a": {"b"}, "b": set()})
        >>> g.vertices()
        ['a', 'b']

    """
    order, index_of, rows = _index_tables(adjacency, key)
    cycle = _witness(order, rows)
    if cycle is not None:
        logger.debug("Cycle detected among %d vertices: %s", len(order), cycle)
        raise CycleDetectedError(cycle)

    view = GraphView.from_tables(order, rows, index_of=index_of, scope=scope)
    logger.debug("Indexed %d vertices and %d edges (epoch %d)", len(order), view.edge_count(), view.epoch)
    return view


@contextmanager
def graph_scope[V: Hashable](
    adjacency: Mapping[V, Collection[V]],
    *,
    key: SortKey[V] = None,
) -> Iterator[GraphView[V]]:
    """Build a graph view that is only usable inside a ``with`` block.

    When the block exits, the view and every view derived from it (closure,
    reduction, transpose) are closed, and using them raises `GraphScopeError`.

    Example:
        with graph_scope({"a": {"b"}, "b": set()}) as g:
            order = g.vertices()

    Raises:
        CycleDetectedError: If the graph has a cycle. The block is not entered.

    """
    scope = GraphScope()
    view = build_graph(adjacency, key=key, scope=scope)
    try:
        yield view
    finally:
        scope.close()
        logger.debug("Closed graph scope for epoch %d", view.epoch)


def topological_sort[V: Hashable](
    adjacency: Mapping[V, Collection[V]],
    *,
    key: SortKey[V] = None,
) -> list[V]:
    """Sort the keys of ``adjacency`` so that every edge points forward.

    Raises:
        CycleDetectedError: If the graph contains a cycle.

    Example:
        >>> topological_sort({"a": ["b"], "b": ["c"], "c": []})
        ['a', 'b', 'c']

    """
    return build_graph(adjacency, key=key).vertices()
