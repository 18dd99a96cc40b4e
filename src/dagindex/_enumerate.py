"""Path enumeration: maximal paths, paths between two vertices, and path trees.

All functions work on indices of the given view. Use `PathTree.map` or
`GraphView.vertex` to turn results back into vertices.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator, Sequence
from dataclasses import dataclass

from ._graph import GraphView, Index


@dataclass(frozen=True, slots=True)
class PathTree[T]:
    """A tree of paths sharing common prefixes.

    Each root-to-leaf walk is one path. Subtrees may be shared between
    several parents.

    Attributes:
        label: The vertex (or index) at this node.
        children: Continuations of the path through this node.

    """

    label: T
    children: tuple[PathTree[T], ...] = ()

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def iter_paths(self) -> Iterator[list[T]]:
        """Yield every root-to-leaf path, children in order."""
        stack: list[tuple[PathTree[T], list[T]]] = [(self, [])]
        while stack:
            node, prefix = stack.pop()
            path = [*prefix, node.label]
            if node.is_leaf:
                yield path
                continue
            stack.extend((child, path) for child in reversed(node.children))

    def map[U](self, fn: Callable[[T], U]) -> PathTree[U]:
        """Relabel every node, e.g. ``tree.map(graph.vertex)``.

        Shared subtrees stay shared, and ``fn`` is called once per distinct node.
        """
        mapped: dict[int, PathTree[U]] = {}
        stack: list[tuple[PathTree[T], bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            if id(node) in mapped:
                continue
            if expanded:
                children = tuple(mapped[id(child)] for child in node.children)
                mapped[id(node)] = PathTree(fn(node.label), children)
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in node.children if id(child) not in mapped)
        return mapped[id(self)]


def tree_pairs[T](tree: PathTree[T]) -> list[tuple[T, T]]:
    """Flatten a tree into its (parent, child) label pairs.

    The direct children of the root come first, followed by the pairs of
    each child subtree in turn.
    """
    pairs: list[tuple[T, T]] = []
    stack = [tree]
    while stack:
        node = stack.pop()
        pairs.extend((node.label, child.label) for child in node.children)
        stack.extend(reversed(node.children))
    return pairs


def dfs[V: Hashable](graph: GraphView[V], start: int) -> list[list[Index]]:
    """List every maximal path from ``start``.

    A path is maximal when it ends at a vertex without successors. Paths are
    returned in lexicographic index order. The count can grow exponentially
    with the size of the graph.
    """
    table = graph.successor_table()
    root = graph.lookup_index(start)

    paths: list[list[Index]] = []
    stack = [[root]]
    while stack:
        path = stack.pop()
        row = table[path[-1]]
        if not row:
            paths.append(path)
            continue
        stack.extend([*path, j] for j in reversed(row))
    return paths


def dfs_tree[V: Hashable](graph: GraphView[V], start: int) -> PathTree[Index]:
    """Return the maximal paths from ``start`` as a tree sharing common prefixes."""
    table = graph.successor_table()
    root = graph.lookup_index(start)

    subtrees: dict[int, PathTree[Index]] = {}
    for i in range(len(table) - 1, root - 1, -1):
        subtrees[i] = PathTree(graph.indices[i], tuple(subtrees[j] for j in table[i]))
    return subtrees[root]


def all_path_tails[V: Hashable, T](
    graph: GraphView[V],
    start: int,
    end: int,
    tail: Sequence[T],
) -> list[list[Index | T]]:
    """List the paths from ``start`` to ``end`` without ``start``, ending in ``tail``.

    Each result holds the vertices after ``start`` up to but excluding
    ``end``, followed by the elements of ``tail``. With ``tail=[end]`` every
    result is a full path minus its first vertex.

    Only vertices with an index no greater than ``end`` are expanded, since
    no path through a higher index can come back down to ``end``.
    """
    table = graph.successor_table()
    a = graph.lookup_index(start)
    b = graph.lookup_index(end)

    indices = graph.indices

    seen = {a}
    for i in range(a, b):
        if i in seen:
            seen.update(j for j in table[i] if j <= b)

    tails: dict[int, list[list[Index | T]]] = {b: [list(tail)]}
    for i in range(b - 1, a, -1):
        if i in seen:
            tails[i] = [[indices[i], *rest] for j in table[i] if j <= b for rest in tails[j]]

    return [path for j in table[a] if j <= b for path in tails[j]]


def all_paths[V: Hashable](graph: GraphView[V], start: int, end: int) -> list[list[Index]]:
    """List every path from ``start`` to ``end``, including both endpoints.

    A vertex has no path to itself: ``all_paths(g, a, a)`` is empty.
    """
    a = graph.lookup_index(start)
    b = graph.lookup_index(end)
    return [[a, *rest] for rest in all_path_tails(graph, a, b, [b])]


def all_paths_tree[V: Hashable](graph: GraphView[V], start: int, end: int) -> PathTree[Index] | None:
    """Return every path from ``start`` to ``end`` as one tree rooted at ``start``.

    Unlike `all_paths`, the tree for ``start == end`` is a single leaf.

    Returns:
        The tree, or None if ``end`` cannot be reached from ``start``.

    """
    table = graph.successor_table()
    a = graph.lookup_index(start)
    b = graph.lookup_index(end)
    if a == b:
        return PathTree(a)
    if a > b:
        return None

    subtrees: dict[int, PathTree[Index] | None] = {b: PathTree(b)}
    for i in range(b - 1, a - 1, -1):
        children = tuple(t for j in table[i] if j <= b and (t := subtrees[j]) is not None)
        subtrees[i] = PathTree(graph.indices[i], children) if children else None
    return subtrees[a]
