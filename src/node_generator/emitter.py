"""C# accessor emitter.

Turns a resolved node list into one partial class containing:

* a cached strict accessor and a TryGet accessor for every node, and
* a "Node Tree Accessors" region with one nested wrapper class per node that
  has children, so callers can write ``MainPanelTree.Form.SubmitButton``.

Wrappers only delegate to the flat accessors, which stay the single cache.
Members come out in node discovery order; identical input gives identical text.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from .config import cfg
from .models import NodeRecord
from .naming import NameScope, resolve_identifier
from .node_types import known_node_types, resolve_node_type

logger = logging.getLogger(__name__)

INDENT = "    "
HEADER_COMMENT = "// <auto-generated/>"
USINGS = ("Godot", "System", "System.Diagnostics.CodeAnalysis")
REGION_NAME = "Node Tree Accessors"
WRAPPER_SUFFIX = "Wrapper"
TREE_SUFFIX = "Tree"
WRAPPER_SELF_MEMBER = "Node"
WRAPPER_OWNER_FIELD = "_owner"


# ---------------------------------------------------------------------------
# Accessor plan
# ---------------------------------------------------------------------------


@dataclass
class LeafAccessor:
    """A node that only needs its flat accessor."""
    node: NodeRecord
    identifier: str
    type_name: str

    @property
    def is_branch(self) -> bool:
        return False


@dataclass
class BranchAccessor(LeafAccessor):
    """A node with children: flat accessor plus a wrapper class."""
    wrapper_name: str = ""
    children: list[LeafAccessor] = field(default_factory=list)
    member_names: dict[str, str] = field(default_factory=dict)  # child identifier -> wrapper member
    tree_member: str | None = None  # set for top-level branches only

    @property
    def is_branch(self) -> bool:
        return True


@dataclass
class AccessorPlan:
    class_name: str
    accessors: list[LeafAccessor]
    top_level: list[LeafAccessor]

    @property
    def branches(self) -> list[BranchAccessor]:
        return [a for a in self.accessors if isinstance(a, BranchAccessor)]


def _child_map(nodes: Sequence[NodeRecord]) -> tuple[dict[int, list[int]], list[int]]:
    """Index children by parent position using computed paths."""
    by_path: dict[str, int] = {}
    for index, node in enumerate(nodes):
        by_path.setdefault(node.path, index)

    children: dict[int, list[int]] = {}
    top_level: list[int] = []
    for index, node in enumerate(nodes):
        parent = by_path.get(node.parent_path) if node.parent_path else None
        if parent is None or parent == index:
            top_level.append(index)
        else:
            children.setdefault(parent, []).append(index)
    return children, top_level


def plan_accessors(
    nodes: Sequence[NodeRecord],
    class_name: str,
    *,
    conflict_suffix: str | None = None,
    default_type: str | None = None,
    extra_types: Sequence[str] | None = None,
) -> AccessorPlan:
    """Name every member and build the leaf/branch tree bottom-up."""
    suffix = conflict_suffix or cfg.conflict_suffix
    default_type = default_type or cfg.default_node_type
    known = known_node_types(extra_types)

    scope = NameScope(reserved={class_name})
    identifiers = [
        scope.claim(resolve_identifier(node.name, class_name, suffix), "{}", "_{}", "TryGet{}")
        for node in nodes
    ]
    types = [resolve_node_type(node.type, known=known, default=default_type) for node in nodes]
    children, top_level = _child_map(nodes)

    # A child's path extends its parent's, so deepest-first order guarantees
    # every branch finds its children already built.
    built: dict[int, LeafAccessor] = {}
    for index in sorted(range(len(nodes)), key=lambda i: nodes[i].depth, reverse=True):
        node = nodes[index]
        if index not in children:
            built[index] = LeafAccessor(node, identifiers[index], types[index])
        else:
            built[index] = BranchAccessor(
                node,
                identifiers[index],
                types[index],
                children=[built[child] for child in children[index]],
            )

    accessors = [built[index] for index in range(len(nodes))]

    for accessor in accessors:
        if isinstance(accessor, BranchAccessor):
            accessor.wrapper_name = scope.claim(f"{accessor.identifier}{WRAPPER_SUFFIX}")
    for index in top_level:
        accessor = accessors[index]
        if isinstance(accessor, BranchAccessor):
            accessor.tree_member = scope.claim(f"{accessor.identifier}{TREE_SUFFIX}", "{}", "_{}")

    for branch in (a for a in accessors if isinstance(a, BranchAccessor)):
        _name_wrapper_members(branch, suffix)

    return AccessorPlan(
        class_name=class_name,
        accessors=accessors,
        top_level=[accessors[i] for i in top_level],
    )


def _name_wrapper_members(branch: BranchAccessor, suffix: str) -> None:
    reserved = {branch.wrapper_name, WRAPPER_SELF_MEMBER, WRAPPER_OWNER_FIELD}
    scope = NameScope(reserved=reserved)
    for child in branch.children:
        stem = child.identifier
        if stem in reserved or f"_{stem}" in reserved:
            stem = f"{stem}{suffix}"
        templates = ("{}", "_{}") if child.is_branch else ("{}",)
        branch.member_names[child.identifier] = scope.claim(stem, *templates)


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


def csharp_string(value: str) -> str:
    """Quote a value as a C# regular string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    return f'"{escaped}"'


def xml_text(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def describe_node(node: NodeRecord) -> str:
    text = f'the {xml_text(node.name)} node (path: "{xml_text(node.path)}")'
    if node.script:
        text += f' (script: "{xml_text(node.script)}")'
    return text


class _SourceWriter:
    def __init__(self):
        self._lines: list[str] = []
        self._depth = 0

    def line(self, text: str = "") -> None:
        self._lines.append(f"{INDENT * self._depth}{text}" if text else "")

    def gap(self) -> None:
        """Blank line between members, never directly after an opening brace."""
        if self._lines and self._lines[-1].strip() not in ("", "{"):
            self._lines.append("")

    def lines(self, *texts: str) -> None:
        for text in texts:
            self.line(text)

    @contextmanager
    def block(self, opener: str | None = None) -> Iterator[None]:
        if opener:
            self.line(opener)
        self.line("{")
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            self.line("}")

    def render(self) -> str:
        return "\n".join(self._lines) + "\n"


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------


def _emit_flat_accessor(w: _SourceWriter, accessor: LeafAccessor) -> None:
    ident = accessor.identifier
    type_name = accessor.type_name
    field_name = f"_{ident}"
    path = csharp_string(accessor.node.path)
    not_found = csharp_string(f"Node not found: {accessor.node.path}")

    w.gap()
    w.line(f"private {type_name}? {field_name};")
    w.line()
    w.lines(
        "/// <summary>",
        f"/// Gets {describe_node(accessor.node)}",
        "/// </summary>",
        f'/// <exception cref="InvalidCastException">Thrown when the node at the specified path is not of type {type_name}.</exception>',
        '/// <exception cref="NullReferenceException">Thrown when the node is not found in the scene tree.</exception>',
    )
    with w.block(f"public {type_name} {ident}"):
        with w.block("get"):
            with w.block(f"if ({field_name} == null)"):
                w.line(f"var node = GetNodeOrNull({path});")
                with w.block("if (node == null)"):
                    w.line(f"throw new NullReferenceException({not_found});")
                w.line()
                w.line(f"{field_name} = node as {type_name};")
                with w.block(f"if ({field_name} == null)"):
                    w.line(
                        f'throw new InvalidCastException($"Node at path {{node.GetPath()}} '
                        f'is of type {{node.GetType()}}, not {type_name}");'
                    )
            w.line()
            w.line(f"return {field_name};")

    w.line()
    w.lines(
        "/// <summary>",
        f"/// Tries to get {describe_node(accessor.node)}",
        "/// without throwing exceptions if the node doesn't exist or is of wrong type.",
        "/// </summary>",
        "/// <returns>True if the node was found and is of the correct type, otherwise false.</returns>",
    )
    with w.block(f"public bool TryGet{ident}([NotNullWhen(true)] out {type_name}? node)"):
        w.line("node = null;")
        with w.block(f"if ({field_name} != null)"):
            w.line(f"node = {field_name};")
            w.line("return true;")
        w.line()
        w.line(f"var tempNode = GetNodeOrNull({path});")
        with w.block(f"if (tempNode is {type_name} typedNode)"):
            w.line(f"{field_name} = typedNode;")
            w.line("node = typedNode;")
            w.line("return true;")
        w.line()
        w.line("return false;")


def _emit_tree_member(w: _SourceWriter, branch: BranchAccessor) -> None:
    member = branch.tree_member
    w.gap()
    w.line(f"private {branch.wrapper_name}? _{member};")
    w.line()
    w.lines(
        "/// <summary>",
        f"/// Navigates {describe_node(branch.node)} and its children.",
        "/// </summary>",
    )
    w.line(f"public {branch.wrapper_name} {member} => _{member} ??= new {branch.wrapper_name}(this);")


def _emit_wrapper(w: _SourceWriter, branch: BranchAccessor, class_name: str) -> None:
    w.gap()
    w.lines(
        "/// <summary>",
        f"/// Wrapper exposing the direct children of {describe_node(branch.node)}.",
        "/// </summary>",
    )
    with w.block(f"public class {branch.wrapper_name}"):
        w.line(f"private readonly {class_name} {WRAPPER_OWNER_FIELD};")
        w.line()
        with w.block(f"public {branch.wrapper_name}({class_name} owner)"):
            w.line(f"{WRAPPER_OWNER_FIELD} = owner;")
        w.line()
        w.lines(
            "/// <summary>",
            f"/// The {xml_text(branch.node.name)} node itself.",
            "/// </summary>",
        )
        w.line(f"public {branch.type_name} {WRAPPER_SELF_MEMBER} => {WRAPPER_OWNER_FIELD}.{branch.identifier};")

        for child in branch.children:
            member = branch.member_names[child.identifier]
            w.gap()
            if isinstance(child, BranchAccessor):
                w.line(f"private {child.wrapper_name}? _{member};")
                w.line(
                    f"public {child.wrapper_name} {member} => "
                    f"_{member} ??= new {child.wrapper_name}({WRAPPER_OWNER_FIELD});"
                )
            else:
                w.line(f"public {child.type_name} {member} => {WRAPPER_OWNER_FIELD}.{child.identifier};")


def _emit_class_body(w: _SourceWriter, plan: AccessorPlan) -> None:
    w.line(f"// Generated node accessors for {plan.class_name}")
    with w.block(f"public partial class {plan.class_name}"):
        for accessor in plan.accessors:
            _emit_flat_accessor(w, accessor)

        w.gap()
        w.line(f"#region {REGION_NAME}")
        for accessor in plan.top_level:
            if isinstance(accessor, BranchAccessor):
                _emit_tree_member(w, accessor)
        for branch in plan.branches:
            _emit_wrapper(w, branch, plan.class_name)
        w.gap()
        w.line("#endregion")


def render_plan(plan: AccessorPlan, namespace: str = "") -> str:
    w = _SourceWriter()
    w.line(HEADER_COMMENT)
    w.line("#nullable enable")
    for using in USINGS:
        w.line(f"using {using};")
    w.line()
    if namespace:
        with w.block(f"namespace {namespace}"):
            _emit_class_body(w, plan)
    else:
        _emit_class_body(w, plan)
    return w.render()


def generate_node_accessors(
    namespace: str,
    class_name: str,
    nodes: Sequence[NodeRecord],
    *,
    conflict_suffix: str | None = None,
    default_type: str | None = None,
    extra_types: Sequence[str] | None = None,
) -> str:
    """Render the accessor source for ``class_name`` from resolved nodes."""
    plan = plan_accessors(
        nodes,
        class_name,
        conflict_suffix=conflict_suffix,
        default_type=default_type,
        extra_types=extra_types,
    )
    logger.debug(
        "Emitting %d accessors (%d wrappers) for %s",
        len(plan.accessors), len(plan.branches), class_name,
    )
    return render_plan(plan, namespace)
