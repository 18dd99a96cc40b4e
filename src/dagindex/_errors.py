"""Exception hierarchy for dagindex."""

from collections.abc import Sequence


class DagIndexError(Exception):
    """Base class for all dagindex errors."""


class CycleDetectedError(DagIndexError, ValueError):
    """Raised when an adjacency map contains a cycle.

    Attributes:
        cycle: Closed walk of vertices proving the graph is not acyclic.
            The first and last vertices are identical.

    """

    def __init__(self, cycle: Sequence[object]) -> None:
        self.cycle = tuple(cycle)
        rendered = " -> ".join(str(v) for v in self.cycle)
        super().__init__(f"Cycle detected in graph: {rendered}")


class GraphScopeError(DagIndexError, RuntimeError):
    """Raised when a graph view is used after its scope has closed."""


class ForeignIndexError(DagIndexError, ValueError):
    """Raised when an index does not belong to the graph view it is used with."""


class AdjacencyFormatError(DagIndexError, ValueError):
    """Raised when an adjacency file cannot be read or validated."""


class ConfigError(DagIndexError):
    """Error in dagindex configuration."""
