"""Topologically indexed directed acyclic graphs."""

__all__ = [
    "AdjacencyDocument",
    "AdjacencyFormatError",
    "ConfigError",
    "CycleDetectedError",
    "DagIndexError",
    "ForeignIndexError",
    "GraphFormat",
    "GraphScope",
    "GraphScopeError",
    "GraphView",
    "Index",
    "PathTree",
    "all_path_tails",
    "all_paths",
    "all_paths_tree",
    "build_graph",
    "dfs",
    "dfs_tree",
    "dump_adjacency",
    "find_cycle",
    "graph_scope",
    "load_adjacency",
    "longest_path_lengths",
    "path_lengths",
    "reachable",
    "shortest_path_lengths",
    "topological_sort",
    "transitive_closure",
    "transitive_reduction",
    "transpose",
    "tree_pairs",
]

from ._closure import transitive_closure, transitive_reduction
from ._enumerate import PathTree, all_path_tails, all_paths, all_paths_tree, dfs, dfs_tree, tree_pairs
from ._errors import (
    AdjacencyFormatError,
    ConfigError,
    CycleDetectedError,
    DagIndexError,
    ForeignIndexError,
    GraphScopeError,
)
from ._graph import GraphScope, GraphView, Index, build_graph, find_cycle, graph_scope, topological_sort
from ._io import AdjacencyDocument, GraphFormat, dump_adjacency, load_adjacency
from ._lengths import longest_path_lengths, path_lengths, reachable, shortest_path_lengths
from ._transpose import transpose
