"""Identifier sanitizing and collision-free member naming for generated C#.

Node names become member identifiers; their lookup paths never change.
"""
from __future__ import annotations

import re

from .config import cfg

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")

CSHARP_KEYWORDS = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params", "private",
    "protected", "public", "readonly", "ref", "return", "sbyte", "sealed",
    "short", "sizeof", "stackalloc", "static", "string", "struct", "switch",
    "this", "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
    "unsafe", "ushort", "using", "virtual", "void", "volatile", "while",
})


def make_safe_identifier(name: str) -> str:
    """Replace characters outside [A-Za-z0-9_] with '_' and guard a leading digit.

    Idempotent: an already-safe identifier comes back unchanged.
    """
    safe = _UNSAFE_CHARS.sub("_", name)
    if not safe:
        return "_"
    if safe[0].isdigit():
        safe = f"_{safe}"
    return safe


def conflicts_with_class(identifier: str, class_name: str) -> bool:
    return identifier.lower() == class_name.lower()


def resolve_identifier(name: str, class_name: str, suffix: str | None = None) -> str:
    """Safe identifier for a node, suffixed when it clashes with the class or a keyword."""
    suffix = suffix or cfg.conflict_suffix
    identifier = make_safe_identifier(name)
    if conflicts_with_class(identifier, class_name) or identifier in CSHARP_KEYWORDS:
        identifier = f"{identifier}{suffix}"
    return identifier


class NameScope:
    """Tracks member names already declared in one generated type.

    claim() reserves a group of related names derived from one stem
    (e.g. ``Foo``, ``_Foo``, ``TryGetFoo``). When any of them is taken the
    stem gets ``_2``, ``_3``, ... until the whole group fits.
    """

    def __init__(self, reserved=()):
        self._used: set[str] = set(reserved)

    def __contains__(self, name: str) -> bool:
        return name in self._used

    def is_free(self, *names: str) -> bool:
        return not any(n in self._used for n in names)

    def claim(self, stem: str, *templates: str) -> str:
        templates = templates or ("{}",)
        candidate = stem
        counter = 2
        while not self.is_free(*(t.format(candidate) for t in templates)):
            candidate = f"{stem}_{counter}"
            counter += 1
        self._used.update(t.format(candidate) for t in templates)
        return candidate
