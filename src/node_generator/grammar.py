"""Line grammar for the text scene format.

Every trimmed line is classified as exactly one of:

    [node name="Player" type="CharacterBody2D" parent="."]   -> NodeDeclaration
    [ext_resource type="Script" path="res://p.cs" id="1_a"]  -> ResourceDeclaration
    speed = 300.0                                              -> PropertyAssignment

Anything else is unrecognized and yields None. Classification never raises.
"""
from __future__ import annotations

from dataclasses import dataclass

NODE_TAG = "node"
EXT_RESOURCE_TAG = "ext_resource"
ROOT_PARENT = "."
ASSIGNMENT_TOKEN = " = "

_OPENERS = "([{"
_CLOSERS = ")]}"


@dataclass(frozen=True)
class NodeDeclaration:
    name: str
    type: str
    parent: str = ROOT_PARENT


@dataclass(frozen=True)
class ResourceDeclaration:
    id: str
    path: str
    type: str = ""


@dataclass(frozen=True)
class PropertyAssignment:
    key: str
    value: str


LineRecord = NodeDeclaration | ResourceDeclaration | PropertyAssignment


def is_section_header(line: str) -> bool:
    """True for any bracketed tag line such as [gd_scene ...] or [connection ...]."""
    return len(line) > 1 and line[0] == "[" and (line[1].isalpha() or line[1] == "_")


def split_tag(line: str) -> tuple[str, str]:
    """Split a bracketed header into (tag, attribute text)."""
    inner = line.strip()
    if inner.startswith("["):
        inner = inner[1:]
    if inner.endswith("]"):
        inner = inner[:-1]
    parts = inner.split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


def scan_attributes(text: str) -> dict[str, str]:
    """Extract name=value pairs from a header's attribute text.

    A linear scan that finds each name by the next '=' and each value by its
    surrounding double quotes. Unquoted values (load_steps=4,
    instance=ExtResource("2")) run to the next whitespace outside brackets.
    Attribute order and spacing do not matter; a later duplicate wins.
    """
    attrs: dict[str, str] = {}
    pos = 0
    length = len(text)
    while pos < length:
        while pos < length and text[pos].isspace():
            pos += 1
        if pos >= length:
            break

        eq = text.find("=", pos)
        if eq < 0:
            break
        raw_name = text[pos:eq].split()
        pos = eq + 1
        while pos < length and text[pos] in " \t":
            pos += 1

        if pos < length and text[pos] == '"':
            close = text.find('"', pos + 1)
            if close < 0:
                break
            value = text[pos + 1:close]
            pos = close + 1
        else:
            start = pos
            depth = 0
            in_quote = False
            while pos < length:
                ch = text[pos]
                if ch == '"':
                    in_quote = not in_quote
                elif not in_quote:
                    if ch in _OPENERS:
                        depth += 1
                    elif ch in _CLOSERS:
                        depth = max(depth - 1, 0)
                    elif ch.isspace() and depth == 0:
                        break
                pos += 1
            value = text[start:pos]

        if raw_name:
            attrs[raw_name[-1]] = value
    return attrs


def parse_node_declaration(line: str) -> NodeDeclaration | None:
    tag, rest = split_tag(line)
    if tag != NODE_TAG:
        return None
    attrs = scan_attributes(rest)
    name = attrs.get("name", "")
    node_type = attrs.get("type", "")
    if not name or not node_type:
        return None
    return NodeDeclaration(name=name, type=node_type, parent=attrs.get("parent", ROOT_PARENT))


def parse_resource_declaration(line: str) -> ResourceDeclaration | None:
    tag, rest = split_tag(line)
    if tag != EXT_RESOURCE_TAG:
        return None
    attrs = scan_attributes(rest)
    res_id = attrs.get("id", "")
    path = attrs.get("path", "")
    if not res_id or not path:
        return None
    return ResourceDeclaration(id=res_id, path=path, type=attrs.get("type", ""))


def parse_property(line: str) -> PropertyAssignment | None:
    if ASSIGNMENT_TOKEN not in line or is_section_header(line):
        return None
    key, _, value = line.partition(ASSIGNMENT_TOKEN)
    key = key.strip()
    if not key:
        return None
    return PropertyAssignment(key=key, value=value.strip())


def parse_line(line: str) -> LineRecord | None:
    """Classify one line; returns None for blank or unrecognized lines."""
    line = line.strip()
    if not line:
        return None
    if is_section_header(line):
        tag, _ = split_tag(line)
        if tag == NODE_TAG:
            return parse_node_declaration(line)
        if tag == EXT_RESOURCE_TAG:
            return parse_resource_declaration(line)
        return None
    return parse_property(line)
