"""Reading and writing adjacency maps as TOML or JSON documents.

Both formats hold a single ``graph`` table mapping each vertex name to the
list of its successors::

    [graph]
    a = ["b", "x"]
    b = []
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Collection, Mapping
from enum import StrEnum
from pathlib import Path

import tomli_w
from pydantic import BaseModel, Field, ValidationError

from ._errors import AdjacencyFormatError

logger = logging.getLogger(__name__)


class GraphFormat(StrEnum):
    TOML = "toml"
    JSON = "json"

    @classmethod
    def from_path(cls, path: Path) -> GraphFormat:
        """Infer the format from a file suffix."""
        suffix = path.suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            msg = f"Unsupported adjacency file type '{path.suffix}' (expected .toml or .json)"
            raise AdjacencyFormatError(msg) from None


class AdjacencyDocument(BaseModel):
    """On-disk form of an adjacency map."""

    graph: dict[str, list[str]] = Field(default_factory=dict)

    def to_adjacency(self) -> dict[str, frozenset[str]]:
        return {vertex: frozenset(successors) for vertex, successors in self.graph.items()}

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[str, Collection[str]]) -> AdjacencyDocument:
        return cls(graph={vertex: sorted(adjacency[vertex]) for vertex in sorted(adjacency)})


def parse_adjacency(text: str, fmt: GraphFormat) -> dict[str, frozenset[str]]:
    """Parse an adjacency document from a string.

    Raises:
        AdjacencyFormatError: If the text is not valid for ``fmt`` or does
            not have the expected shape.

    """
    try:
        match fmt:
            case GraphFormat.TOML:
                data = tomllib.loads(text)
            case GraphFormat.JSON:
                data = json.loads(text)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        msg = f"Invalid {fmt.upper()} adjacency document: {e}"
        raise AdjacencyFormatError(msg) from e

    try:
        document = AdjacencyDocument.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid adjacency document: {e}"
        raise AdjacencyFormatError(msg) from e
    return document.to_adjacency()


def load_adjacency(path: Path) -> dict[str, frozenset[str]]:
    """Load an adjacency map from a ``.toml`` or ``.json`` file."""
    fmt = GraphFormat.from_path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Could not read adjacency file {path}: {e}"
        raise AdjacencyFormatError(msg) from e

    adjacency = parse_adjacency(text, fmt)
    logger.debug("Loaded %d vertices from %s", len(adjacency), path)
    return adjacency


def format_adjacency(adjacency: Mapping[str, Collection[str]], fmt: GraphFormat) -> str:
    """Render an adjacency map as a document, vertices and successors sorted."""
    data = AdjacencyDocument.from_adjacency(adjacency).model_dump()
    match fmt:
        case GraphFormat.TOML:
            return tomli_w.dumps(data)
        case GraphFormat.JSON:
            return json.dumps(data, indent=2) + "\n"


def dump_adjacency(adjacency: Mapping[str, Collection[str]], path: Path) -> None:
    """Write an adjacency map to a file, choosing the format from its suffix."""
    text = format_adjacency(adjacency, GraphFormat.from_path(path))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        msg = f"Could not write adjacency file {path}: {e}"
        raise AdjacencyFormatError(msg) from e
    logger.debug("Exported %d vertices to %s", len(adjacency), path)
