"""Scene parser: resource table, node tree and canonical node paths.

A single top-to-bottom pass over the scene text collects node declarations
with their scripts and properties. Paths are resolved afterwards from the
name -> parent reference map, so nodes may reference parents declared later.
Malformed content never raises; unrecognized lines are skipped.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .config import RESOURCE_SCAN_PREFIX, cfg
from .exceptions import SceneNotFoundError
from .grammar import (
    ROOT_PARENT,
    NodeDeclaration,
    PropertyAssignment,
    ResourceDeclaration,
    is_section_header,
    parse_line,
    split_tag,
)
from .models import NodeRecord, ParsedScene

logger = logging.getLogger(__name__)

SCRIPT_PROPERTY = "script"
EXT_RESOURCE_CALL = "ExtResource("
SCRIPT_URI_PREFIXES = ("res://", "user://")
UNRESOLVED_RESOURCE = "ExtResourceReference"

# Used when a blob has no node declarations but still names a type.
FALLBACK_NODE_NAME = "Root"
_FALLBACK_IGNORED_TAGS = frozenset({"gd_scene", "gd_resource", "ext_resource", "sub_resource"})
_TYPE_TOKEN = 'type="'


# ---------------------------------------------------------------------------
# Resource table
# ---------------------------------------------------------------------------


def build_resource_table(lines: Iterable[str], mode: str | None = None) -> dict[str, str]:
    """Map ext_resource ids to their paths; a later duplicate id wins.

    mode "full" reads every line so resources declared after the first node
    still resolve. mode "prefix" stops at the first node declaration.
    """
    mode = mode or cfg.resource_scan
    table: dict[str, str] = {}
    for line in lines:
        record = parse_line(line)
        if isinstance(record, NodeDeclaration) and mode == RESOURCE_SCAN_PREFIX:
            break
        if isinstance(record, ResourceDeclaration):
            table[record.id] = record.path
    return table


def _quoted_literals(text: str) -> list[str]:
    literals = []
    start = text.find('"')
    while start >= 0:
        end = text.find('"', start + 1)
        if end < 0:
            break
        literals.append(text[start + 1:end])
        start = text.find('"', end + 1)
    return literals


def resolve_script_reference(value: str, resources: Mapping[str, str]) -> str | None:
    """Turn the right-hand side of a ``script = ...`` line into a script path.

    Returns None when the value is not a script reference at all. An
    ExtResource id missing from the table yields UNRESOLVED_RESOURCE.
    """
    for literal in _quoted_literals(value):
        if literal.startswith(SCRIPT_URI_PREFIXES):
            return literal

    call = value.find(EXT_RESOURCE_CALL)
    if call < 0:
        return None
    arg_start = call + len(EXT_RESOURCE_CALL)
    arg_end = value.find(")", arg_start)
    raw_id = value[arg_start:] if arg_end < 0 else value[arg_start:arg_end]
    res_id = raw_id.strip().strip('"').strip()
    path = resources.get(res_id)
    if path is None:
        logger.debug("Unresolved ExtResource id %r", res_id)
        return UNRESOLVED_RESOURCE
    return path


# ---------------------------------------------------------------------------
# Node collection
# ---------------------------------------------------------------------------


@dataclass
class _NodeBlock:
    declaration: NodeDeclaration
    script: str | None = None
    properties: dict[str, str] = field(default_factory=dict)


def collect_nodes(lines: Iterable[str], resources: Mapping[str, str]) -> dict[str, _NodeBlock]:
    """Fold the line stream into name -> block, in first-declaration order.

    The only state carried between lines is the name of the block currently
    open. Any other section header closes it.
    """
    blocks: dict[str, _NodeBlock] = {}
    current: str | None = None

    for line in lines:
        record = parse_line(line)

        if isinstance(record, NodeDeclaration):
            if record.name in blocks:
                logger.debug("Node %r declared again; last declaration wins", record.name)
            blocks[record.name] = _NodeBlock(declaration=record)
            current = record.name
            continue

        if is_section_header(line.strip()):
            current = None
            continue

        if not isinstance(record, PropertyAssignment) or current is None:
            continue

        block = blocks[current]
        if record.key == SCRIPT_PROPERTY:
            script = resolve_script_reference(record.value, resources)
            if script:
                block.script = script
        elif record.key not in block.properties:
            block.properties[record.key] = record.value

    return blocks


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def _normalize_segments(path: str) -> str:
    """Collapse '.' and '..' segments; segments above the root are dropped."""
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts:
                parts.pop()
            continue
        parts.append(segment)
    return "/".join(parts)


class PathResolver:
    """Computes canonical slash-delimited paths from a name -> parent map.

    The parent chain is walked iteratively and results are cached on the way
    back down, so chain depth is bounded only by memory. A node reached again
    while its own path is still being computed contributes just its name, so
    self-parenting and cycles terminate. Parents that are not declared nodes
    are used literally.
    """

    def __init__(self, parents: Mapping[str, str]):
        self._parents = parents
        self._cache: dict[str, str] = {}
        self._visiting: set[str] = set()

    def resolve(self, name: str) -> str:
        pending: list[str] = []
        current = name
        try:
            while True:
                cached = self._cache.get(current)
                if cached is not None:
                    path = cached
                    break

                parent = self._parents.get(current)
                if parent is None or current in self._visiting:
                    path = current
                    break

                self._visiting.add(current)
                terminal, parent_name = self._step(current, parent)
                if terminal is not None:
                    path = terminal
                    self._cache[current] = path
                    break
                pending.append(current)
                current = parent_name

            while pending:
                child = pending.pop()
                path = f"{path}/{child}"
                self._cache[child] = path
            return path
        finally:
            self._visiting.clear()

    def _step(self, name: str, parent: str) -> tuple[str | None, str | None]:
        """Either the node's final path, or the parent to resolve first."""
        if parent.startswith("../"):
            logger.debug("Relative parent %r of node %r is not supported", parent, name)
            return name, None

        if not parent or parent == ROOT_PARENT or parent.startswith("."):
            return name, None

        if parent.startswith("/"):
            prefix = _normalize_segments(parent)
            return (f"{prefix}/{name}" if prefix else name), None

        parent = _normalize_segments(parent)
        if not parent or parent == name:
            return name, None
        return None, parent


# ---------------------------------------------------------------------------
# Fallback
# ---------------------------------------------------------------------------


def _find_bare_type(lines: Iterable[str]) -> str | None:
    """First type="X" token outside resource and file headers."""
    for line in lines:
        line = line.strip()
        if is_section_header(line) and split_tag(line)[0] in _FALLBACK_IGNORED_TAGS:
            continue
        start = line.find(_TYPE_TOKEN)
        if start < 0:
            continue
        start += len(_TYPE_TOKEN)
        end = line.find('"', start)
        if end > start:
            return line[start:end]
    return None


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def parse_scene(content: str, *, resource_scan: str | None = None) -> ParsedScene:
    """Parse a scene blob into nodes with canonical paths.

    Parameters
    ----------
    content : str
        Full scene text.
    resource_scan : str, optional
        "full" or "prefix"; defaults to ``cfg.resource_scan``.

    Returns
    -------
    ParsedScene
        Nodes in declaration order. Empty when nothing recognizable was found.
    """
    lines = content.splitlines()
    resources = build_resource_table(lines, resource_scan)
    blocks = collect_nodes(lines, resources)

    if not blocks:
        fallback_type = _find_bare_type(lines)
        if fallback_type is None:
            logger.debug("No node declarations found in scene content")
            return ParsedScene(resources=resources)
        logger.debug("No node declarations; synthesizing %r of type %r", FALLBACK_NODE_NAME, fallback_type)
        node = NodeRecord(name=FALLBACK_NODE_NAME, type=fallback_type, path=FALLBACK_NODE_NAME)
        return ParsedScene(nodes=[node], resources=resources, synthesized=True)

    resolver = PathResolver({name: block.declaration.parent for name, block in blocks.items()})
    nodes = [
        NodeRecord(
            name=name,
            type=block.declaration.type,
            path=resolver.resolve(name),
            script=block.script,
            properties=dict(block.properties),
        )
        for name, block in blocks.items()
    ]
    return ParsedScene(nodes=nodes, resources=resources)


def load_scene_file(path: str | Path, *, resource_scan: str | None = None) -> ParsedScene:
    """Read and parse a scene file from disk.

    Raises
    ------
    SceneNotFoundError
        If the file doesn't exist or can't be read.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SceneNotFoundError(str(path), f"Could not read scene file {path}: {e}") from e
    return parse_scene(content, resource_scan=resource_scan)
