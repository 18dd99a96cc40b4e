"""Shortest and longest path lengths over a topologically indexed graph."""

import heapq
from collections.abc import Callable, Hashable

from ._graph import GraphView


def _min_nonzero(current: int, candidate: int) -> int:
    # 0 means no path has been found yet.
    if current == 0:
        return candidate
    return min(current, candidate)


def path_lengths[V: Hashable](
    graph: GraphView[V],
    merge: Callable[[int, int], int],
    source: int,
) -> list[int]:
    """Compute best path lengths (in edges) from ``source`` to every vertex.

    Vertices are processed in increasing index order. Since every edge points
    to a higher index, a vertex's length is final by the time it is taken from
    the frontier, so each vertex and edge is visited once.

    Args:
        graph: The graph to search.
        merge: Combines the current length of a vertex with a new candidate
            length. The initial length of every vertex is 0.
        source: Index to measure from.

    Returns:
        A list with one entry per index. The entry is 0 both for ``source``
        itself and for vertices not reachable from it.

    """
    table = graph.successor_table()
    start = graph.lookup_index(source)
    distance = [0] * len(table)

    frontier = [start]
    queued = {start}
    while frontier:
        x = heapq.heappop(frontier)
        step = distance[x] + 1
        for y in table[x]:
            distance[y] = merge(distance[y], step)
            if y not in queued:
                queued.add(y)
                heapq.heappush(frontier, y)

    return distance


def shortest_path_lengths[V: Hashable](graph: GraphView[V], source: int) -> list[int]:
    """Shortest path length from ``source`` to each index (0 if unreachable or the source).

    Example:
        >>> g = build_graph({"a": {"b", "c"}, "b": {"c"}, "c": set()})
        >>> shortest_path_lengths(g, g.index("a"))
        [0, 1, 1]

    """
    return path_lengths(graph, _min_nonzero, source)


def longest_path_lengths[V: Hashable](graph: GraphView[V], source: int) -> list[int]:
    """Longest path length from ``source`` to each index (0 if unreachable or the source).

    Example:
        >>> g = build_graph({"a": {"b", "c"}, "b": {"c"}, "c": set()})
        >>> longest_path_lengths(g, g.index("a"))
        [0, 1, 2]

    """
    return path_lengths(graph, max, source)


def reachable[V: Hashable](graph: GraphView[V], source: int, target: int) -> bool:
    """Check whether ``target`` can be reached from ``source``.

    Every vertex reaches itself. Vertices with an index above ``target``
    are never expanded.
    """
    table = graph.successor_table()
    start = graph.lookup_index(source)
    goal = graph.lookup_index(target)
    if start == goal:
        return True
    if start > goal:
        return False

    frontier = [start]
    queued = {start}
    while frontier:
        x = heapq.heappop(frontier)
        for y in table[x]:
            if y == goal:
                return True
            if y < goal and y not in queued:
                queued.add(y)
                heapq.heappush(frontier, y)
    return False
