"""Graph search primitives used to index an adjacency map."""

from collections import deque
from collections.abc import Callable, Collection, Hashable, Mapping, Sequence
from typing import Any

type SortKey[T] = Callable[[T], Any] | None


def _known_successors[T: Hashable](
    successors: Mapping[T, Collection[T]],
    node: T,
    key: SortKey[T],
) -> list[T]:
    # Successors that are not themselves keys are outside the vertex set.
    return sorted((s for s in successors[node] if s in successors), key=key)


def candidate_order[T: Hashable](
    successors: Mapping[T, Collection[T]],
    *,
    key: SortKey[T] = None,
) -> list[T]:
    """Order the keys of a graph so that, if it is acyclic, every edge points forward.

    This is a depth-first reverse postorder. Roots and successors are visited
    in sorted order (by ``key`` when given), so the result depends only on the
    vertices themselves and never on mapping iteration order.

    The ordering is produced even when the graph has cycles; callers must
    check edge direction themselves to detect them.

    Args:
        successors: Mapping from node to the nodes it points to.
        key: Optional sort key used to break ties between unconstrained nodes.

    Returns:
        Every key of ``successors`` exactly once.

    Example:
        >>> candidate_order({"a": ["b", "c"], "b": ["c"], "c": []})
        ['a', 'b', 'c']

    """
    visited: set[T] = set()
    postorder: list[T] = []

    for root in sorted(successors, key=key):
        if root in visited:
            continue
        visited.add(root)
        stack = [(root, iter(_known_successors(successors, root, key)))]
        while stack:
            node, children = stack[-1]
            for child in children:
                if child not in visited:
                    visited.add(child)
                    stack.append((child, iter(_known_successors(successors, child, key))))
                    break
            else:
                stack.pop()
                postorder.append(node)

    postorder.reverse()
    return postorder


def find_path[T: Hashable](
    successors: Mapping[T, Sequence[T]],
    start: T,
    goal: T,
) -> list[T] | None:
    """Find a shortest path from ``start`` to ``goal`` by breadth-first search.

    Successors are explored in the order given, so the result is deterministic
    for a deterministic input.

    Returns:
        The path including both endpoints (``[start]`` when they coincide),
        or None if ``goal`` is unreachable.

    """
    if start == goal:
        return [start]

    parent: dict[T, T] = {}
    queue = deque([start])
    seen = {start}
    while queue:
        node = queue.popleft()
        for succ in successors.get(node, ()):
            if succ in seen:
                continue
            seen.add(succ)
            parent[succ] = node
            if succ == goal:
                path = [goal]
                while path[-1] != start:
                    path.append(parent[path[-1]])
                path.reverse()
                return path
            queue.append(succ)
    return None
