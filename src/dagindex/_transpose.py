"""Edge reversal for topologically indexed graphs."""

import logging
from collections.abc import Hashable

from ._graph import GraphView

logger = logging.getLogger(__name__)


def transpose[V: Hashable](graph: GraphView[V]) -> GraphView[V]:
    """Return the graph with every edge reversed.

    Reversing all edges reverses the topological order, so the vertex at
    index ``i`` moves to index ``n - 1 - i``. The result has its own index
    numbering; indices of ``graph`` are not valid for it.

    Example:
        >>> g = build_graph({"a": {"b"}, "b": set()})
        >>> transpose(g).adjacency_list()
        [('b', ['a']), ('a', [])]

    """
    n = graph.vertex_count
    incoming: list[list[int]] = [[] for _ in range(n)]
    for i, j in graph.edges():
        incoming[j].append(n - 1 - i)

    vertices = [graph.vertex(n - 1 - k) for k in range(n)]
    rows = [incoming[n - 1 - k] for k in range(n)]
    transposed = GraphView.from_tables(vertices, rows, scope=graph.scope)
    logger.debug("Transposed epoch %d into epoch %d", graph.epoch, transposed.epoch)
    return transposed
