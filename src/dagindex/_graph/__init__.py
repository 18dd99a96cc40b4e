"""Graph module providing the topologically indexed graph view.

This module contains:
- GraphView[V]: An immutable DAG with vertices numbered in topological order
- build_graph / graph_scope: Construction from an adjacency map, with cycle detection
- candidate_order / find_path: The search primitives construction relies on
"""

from ._algorithms import candidate_order, find_path
from ._index import GraphScope, Index
from ._indexer import build_graph, find_cycle, graph_scope, topological_sort
from ._view import GraphView

__all__ = [
    "GraphScope",
    "GraphView",
    "Index",
    "build_graph",
    "candidate_order",
    "find_cycle",
    "find_path",
    "graph_scope",
    "topological_sort",
]
