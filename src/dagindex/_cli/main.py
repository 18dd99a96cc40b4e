import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from dagindex import (
    AdjacencyFormatError,
    ConfigError,
    CycleDetectedError,
    GraphFormat,
    GraphView,
    Index,
    all_paths,
    all_paths_tree,
    build_graph,
    dfs_tree,
    dump_adjacency,
    load_adjacency,
    longest_path_lengths,
    shortest_path_lengths,
    transitive_closure,
    transitive_reduction,
    transpose,
)
from dagindex._io import format_adjacency

from .config import DagIndexConfig, get_config
from .graph_render import (
    render_cycle,
    render_lengths_table,
    render_order_table,
    render_paths,
    render_summary,
    render_tree,
)

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

InputOption = Annotated[
    Path | None,
    typer.Option("-i", "--input", help="Adjacency file (.toml or .json). Defaults to [tool.dagindex].input"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("-o", "--output", help="Write the graph to this file (format from suffix) instead of stdout"),
]
FormatOption = Annotated[
    GraphFormat | None,
    typer.Option("--format", help="Output format for stdout. Defaults to [tool.dagindex].format"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Topological indexing and analysis of directed acyclic graphs."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    return typer.Exit(code=1)


def _config() -> DagIndexConfig:
    try:
        return get_config()
    except ConfigError as e:
        raise _fail(str(e)) from e


def _load_graph(input_path: Path | None) -> GraphView[str]:
    """Load and index the adjacency file, exiting with status 1 on any problem."""
    if input_path is None:
        input_path = _config().input
    if input_path is None:
        msg = "No input file given and no [tool.dagindex].input configured"
        raise _fail(msg)

    err_console.print(f"[cyan]Loading graph from:[/cyan] {input_path}")
    try:
        adjacency = load_adjacency(input_path)
    except AdjacencyFormatError as e:
        raise _fail(str(e)) from e

    try:
        graph = build_graph(adjacency)
    except CycleDetectedError as e:
        render_cycle(e.cycle, err_console)
        raise typer.Exit(code=1) from e

    logger.debug("Indexed %d vertices", graph.vertex_count)
    return graph


def _require_vertex(graph: GraphView[str], name: str) -> Index:
    index = graph.index(name)
    if index is None:
        msg = f"Vertex not found: {name}"
        raise _fail(msg)
    return index


def _emit(graph: GraphView[str], output: Path | None, fmt: GraphFormat | None) -> None:
    adjacency = graph.adjacency_map()
    if output is not None:
        try:
            dump_adjacency(adjacency, output)
        except AdjacencyFormatError as e:
            raise _fail(str(e)) from e
        err_console.print(f"[green]✓ Wrote {len(adjacency)} vertices to {output}[/green]")
        return
    if fmt is None:
        fmt = _config().format
    typer.echo(format_adjacency(adjacency, fmt), nl=False)


@app.command()
def check(input: InputOption = None) -> None:  # noqa: A002
    """Check that the graph is acyclic and summarize it."""
    graph = _load_graph(input)
    render_summary(graph, out_console)
    err_console.print("[green]✓ The graph is acyclic[/green]")


@app.command()
def order(input: InputOption = None) -> None:  # noqa: A002
    """Show the topological numbering of the vertices."""
    graph = _load_graph(input)
    render_order_table(graph, out_console)


@app.command()
def closure(
    input: InputOption = None,  # noqa: A002
    output: OutputOption = None,
    fmt: FormatOption = None,
) -> None:
    """Write the transitive closure of the graph."""
    _emit(transitive_closure(_load_graph(input)), output, fmt)


@app.command()
def reduction(
    input: InputOption = None,  # noqa: A002
    output: OutputOption = None,
    fmt: FormatOption = None,
) -> None:
    """Write the transitive reduction of the graph."""
    _emit(transitive_reduction(_load_graph(input)), output, fmt)


@app.command(name="transpose")
def transpose_command(
    input: InputOption = None,  # noqa: A002
    output: OutputOption = None,
    fmt: FormatOption = None,
) -> None:
    """Write the graph with every edge reversed."""
    _emit(transpose(_load_graph(input)), output, fmt)


@app.command()
def lengths(
    source: Annotated[str, typer.Argument(help="Vertex to measure path lengths from")],
    input: InputOption = None,  # noqa: A002
) -> None:
    """Show shortest and longest path lengths from a vertex."""
    graph = _load_graph(input)
    start = _require_vertex(graph, source)
    render_lengths_table(
        graph,
        start,
        shortest_path_lengths(graph, start),
        longest_path_lengths(graph, start),
        out_console,
    )


@app.command()
def paths(
    start: Annotated[str, typer.Argument(help="First vertex of every path")],
    end: Annotated[str, typer.Argument(help="Last vertex of every path")],
    input: InputOption = None,  # noqa: A002
    *,
    tree: Annotated[bool, typer.Option("--tree", help="Render the paths as a tree")] = False,
) -> None:
    """List every path between two vertices."""
    graph = _load_graph(input)
    a = _require_vertex(graph, start)
    b = _require_vertex(graph, end)

    if tree:
        path_tree = all_paths_tree(graph, a, b)
        if path_tree is None:
            out_console.print("[dim]No paths found[/dim]")
            return
        render_tree(path_tree.map(graph.vertex), out_console)
        return

    found = [[graph.vertex(i) for i in path] for path in all_paths(graph, a, b)]
    render_paths(found, out_console)


@app.command(name="tree")
def tree_command(
    start: Annotated[str, typer.Argument(help="Vertex to start from")],
    input: InputOption = None,  # noqa: A002
) -> None:
    """Render every maximal path from a vertex as a tree."""
    graph = _load_graph(input)
    root = _require_vertex(graph, start)
    render_tree(dfs_tree(graph, root).map(graph.vertex), out_console)


def main() -> None:
    app()
