"""Rich rendering utilities for graph commands."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from rich.console import Console

    from dagindex import GraphView, PathTree


def render_summary(graph: GraphView[str], console: Console) -> None:
    """Render vertex and edge counts of a graph.

    Args:
        graph: Graph to summarize.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Vertices", justify="right")
    table.add_column("Edges", justify="right")
    table.add_column("Roots", justify="right")
    table.add_column("Sinks", justify="right")

    has_incoming = {j for _, j in graph.edges()}
    roots = sum(1 for i in graph.indices if i not in has_incoming)
    sinks = sum(1 for i in graph.indices if not graph.successors(i))
    table.add_row(str(graph.vertex_count), str(graph.edge_count()), str(roots), str(sinks))

    console.print(table)


def render_order_table(graph: GraphView[str], console: Console) -> None:
    """Render the topological numbering of a graph.

    Args:
        graph: Graph whose order to render.
        console: Rich Console to output to.

    """
    if graph.vertex_count == 0:
        console.print("[dim]The graph is empty[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Index", justify="right")
    table.add_column("Vertex", style="bold")
    table.add_column("Successors", style="dim")

    for i in graph.indices:
        successors = ", ".join(escape(graph.vertex(j)) for j in graph.successors(i))
        table.add_row(str(i), escape(graph.vertex(i)), successors)

    console.print(table)


def render_lengths_table(
    graph: GraphView[str],
    source: int,
    shortest: Sequence[int],
    longest: Sequence[int],
    console: Console,
) -> None:
    """Render shortest and longest path lengths from a source vertex.

    Unreachable vertices are left out.

    Args:
        graph: Graph the lengths were computed on.
        source: Index the lengths were measured from.
        shortest: Shortest path length per index.
        longest: Longest path length per index.
        console: Rich Console to output to.

    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Vertex", style="bold")
    table.add_column("Shortest", justify="right")
    table.add_column("Longest", justify="right")

    for i in graph.indices:
        if i != source and longest[i] == 0:
            continue
        table.add_row(escape(graph.vertex(i)), str(shortest[i]), str(longest[i]))

    console.print(table)


def render_paths(paths: Sequence[Sequence[str]], console: Console) -> None:
    """Render a list of paths, one per line."""
    if not paths:
        console.print("[dim]No paths found[/dim]")
        return

    for path in paths:
        console.print(" [dim]->[/dim] ".join(escape(v) for v in path))
    console.print(f"\n[dim]Total: {len(paths)} paths[/dim]")


def render_tree[T: Hashable](tree: PathTree[T], console: Console) -> None:
    """Render a path tree using Rich Tree.

    Args:
        tree: PathTree root to render, labelled with vertices.
        console: Rich Console to output to.

    """
    rich_tree = Tree(f"[bold]{escape(str(tree.label))}[/bold]")
    _add_tree_children(rich_tree, tree.children)
    console.print(rich_tree)


def _add_tree_children[T: Hashable](parent: Tree, children: Sequence[PathTree[T]]) -> None:
    stack = [(parent, child) for child in reversed(children)]
    while stack:
        branch, child = stack.pop()
        child_tree = branch.add(escape(str(child.label)))
        stack.extend((child_tree, grandchild) for grandchild in reversed(child.children))


def render_cycle(cycle: Sequence[object], console: Console) -> None:
    """Render a witness cycle."""
    console.print("[red]✗ The graph contains a cycle:[/red]")
    console.print("  " + " [dim]->[/dim] ".join(escape(str(v)) for v in cycle))
