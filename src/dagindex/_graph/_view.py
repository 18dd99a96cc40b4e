"""Immutable, topologically indexed view of an acyclic graph."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from dagindex._errors import ForeignIndexError

from ._index import GraphScope, Index, next_epoch


@dataclass(frozen=True, slots=True, eq=False)
class GraphView[V: Hashable]:
    """A directed acyclic graph whose vertices are numbered in topological order.

    Every vertex has a dense index in ``[0, n)`` and every edge points from a
    lower index to a higher one. The view is immutable; transformations such
    as transpose or closure return a new view.

    Indices are only meaningful for the view that issued them (and for views
    derived from it that keep the same numbering). Passing an `Index` from an
    unrelated view raises `ForeignIndexError`. Plain ``int`` positions are
    accepted as long as they are in range.

    Once the scope that created the view is closed, every accessor raises
    `GraphScopeError`.

    Attributes:
        epoch: Identifies the index numbering of this view.

    """

    _vertices: tuple[V, ...]
    _index_of: Mapping[V, int]
    _successors: tuple[tuple[Index, ...], ...]
    _indices: tuple[Index, ...]
    epoch: int
    _scope: GraphScope = field(default_factory=GraphScope)

    @classmethod
    def from_tables(
        cls,
        vertices: Sequence[V],
        successors: Sequence[Iterable[int]],
        *,
        index_of: Mapping[V, int] | None = None,
        epoch: int | None = None,
        scope: GraphScope | None = None,
    ) -> GraphView[V]:
        """Assemble a view from a vertex table and a successor table.

        Args:
            vertices: Vertex at each index, in topological order.
            successors: For each index, the indices it points to. Every
                entry must be greater than its source; duplicates are dropped.
            index_of: Reverse lookup table to share with another view.
                Built from ``vertices`` when omitted.
            epoch: Index numbering to share with another view. A fresh epoch
                is allocated when omitted.
            scope: Lifetime flag to share with another view.

        Returns:
            A new GraphView.

        """
        if epoch is None:
            epoch = next_epoch()
        if index_of is None:
            index_of = {v: i for i, v in enumerate(vertices)}
        indices = tuple(Index(i, epoch) for i in range(len(vertices)))
        table = tuple(tuple(indices[j] for j in sorted(set(row))) for row in successors)
        return cls(
            _vertices=tuple(vertices),
            _index_of=index_of,
            _successors=table,
            _indices=indices,
            epoch=epoch,
            _scope=scope if scope is not None else GraphScope(),
        )

    def with_successors(self, successors: Sequence[Iterable[int]]) -> GraphView[V]:
        """Return a view over the same vertices and numbering with a new edge table."""
        self._scope.ensure_open()
        return GraphView.from_tables(
            self._vertices,
            successors,
            index_of=self._index_of,
            epoch=self.epoch,
            scope=self._scope,
        )

    @property
    def is_open(self) -> bool:
        """Whether the scope that created this view is still open."""
        return self._scope.is_open

    @property
    def scope(self) -> GraphScope:
        return self._scope

    # -- index space ----------------------------------------------------------

    def _check(self, i: int) -> int:
        self._scope.ensure_open()
        if not isinstance(i, int):
            msg = f"Expected an index of this graph, got {i!r}"
            raise ForeignIndexError(msg)
        if isinstance(i, Index) and i.epoch != self.epoch:
            msg = f"Index {int(i)} belongs to graph epoch {i.epoch}, not {self.epoch}"
            raise ForeignIndexError(msg)
        if not 0 <= i < len(self._vertices):
            msg = f"Index {int(i)} is out of range for a graph of {len(self._vertices)} vertices"
            raise ForeignIndexError(msg)
        return int(i)

    @property
    def indices(self) -> tuple[Index, ...]:
        """All indices in ascending (topological) order."""
        self._scope.ensure_open()
        return self._indices

    @property
    def vertex_count(self) -> int:
        self._scope.ensure_open()
        return len(self._vertices)

    def lookup_index(self, i: int) -> Index:
        """Identity lookup: validate ``i`` and return it as an Index of this view."""
        return self._indices[self._check(i)]

    def vertex(self, i: int) -> V:
        """Return the vertex at index ``i``."""
        return self._vertices[self._check(i)]

    def vertices(self) -> list[V]:
        """Return all vertices in topological order."""
        self._scope.ensure_open()
        return list(self._vertices)

    def index(self, vertex: V) -> Index | None:
        """Return the index of ``vertex``, or None if it is not in the graph."""
        self._scope.ensure_open()
        i = self._index_of.get(vertex)
        if i is None:
            return None
        return self._indices[i]

    def successors(self, i: int) -> tuple[Index, ...]:
        """Return the direct successors of ``i`` in ascending order.

        Every successor is strictly greater than ``i``.
        """
        return self._successors[self._check(i)]

    def successor_table(self) -> tuple[tuple[Index, ...], ...]:
        """Return the successor rows for all indices at once."""
        self._scope.ensure_open()
        return self._successors

    def has_edge(self, i: int, j: int) -> bool:
        """Check whether there is a direct edge from ``i`` to ``j``."""
        row = self._successors[self._check(i)]
        j = self._check(j)
        pos = bisect_left(row, j)
        return pos < len(row) and row[pos] == j

    def index_difference(self, i: int, j: int) -> int:
        """Return ``j - i``, the number of topological positions from ``i`` to ``j``."""
        return self._check(j) - self._check(i)

    # -- recovering plain representations -------------------------------------

    def edges(self) -> Iterator[tuple[Index, Index]]:
        """Iterate over all edges as index pairs, in index order."""
        self._scope.ensure_open()
        for i, row in zip(self._indices, self._successors, strict=True):
            for j in row:
                yield (i, j)

    def edge_count(self) -> int:
        self._scope.ensure_open()
        return sum(len(row) for row in self._successors)

    def edge_pairs(self) -> set[tuple[V, V]]:
        """Return the edge set as vertex pairs."""
        return {(self._vertices[i], self._vertices[j]) for i, j in self.edges()}

    def adjacency_map(self) -> dict[V, frozenset[V]]:
        """Recover the graph as a mapping from vertex to its successor vertices.

        Every vertex appears as a key, including those without successors.
        """
        self._scope.ensure_open()
        return {
            v: frozenset(self._vertices[j] for j in row)
            for v, row in zip(self._vertices, self._successors, strict=True)
        }

    def adjacency_list(self) -> list[tuple[V, list[V]]]:
        """Recover the graph as ``(vertex, successors)`` pairs in topological order."""
        self._scope.ensure_open()
        return [
            (v, [self._vertices[j] for j in row])
            for v, row in zip(self._vertices, self._successors, strict=True)
        ]

    def __len__(self) -> int:
        return self.vertex_count

    def __contains__(self, vertex: object) -> bool:
        self._scope.ensure_open()
        return vertex in self._index_of
