"""MCP tools exposing accessor generation and scene inspection."""
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

from fastmcp import Context
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from models import MCPResponse
from node_generator import (
    GenerationRequest,
    SceneSource,
    generate_accessors,
    load_scene_sources,
    locate_scene,
    parse_scene,
)
from node_generator.config import cfg
from services.registry import node_generator_tool


def _collect_sources(scene_root: str | None, scene_files: dict[str, str] | None) -> list[SceneSource]:
    """Inline scene blobs first, then scenes found under ``scene_root``."""
    sources = [SceneSource(origin=origin, content=content) for origin, content in (scene_files or {}).items()]
    if scene_root is not None or not sources:
        root = Path(scene_root or ".")
        if root.exists():
            sources.extend(load_scene_sources(root))
    return sources


def _handle_generate(
    class_name: str,
    scene_path: str | None = None,
    namespace: str | None = None,
    scene_root: str | None = None,
    scene_files: dict[str, str] | None = None,
) -> dict[str, Any]:
    try:
        request = GenerationRequest(
            class_name=class_name,
            namespace=namespace or "",
            scene_path=scene_path,
        )
    except ValidationError as e:
        return MCPResponse(success=False, message="Invalid generation request.", error=str(e)).model_dump()

    result = generate_accessors(request, _collect_sources(scene_root, scene_files))
    diagnostics = [d.model_dump(mode="json") for d in result.diagnostics]
    if not result.success:
        message = result.diagnostics[0].message if result.diagnostics else "No accessors generated."
        return MCPResponse(
            success=False,
            message=message,
            data={"hint_name": result.hint_name, "diagnostics": diagnostics},
        ).model_dump()

    return MCPResponse(
        success=True,
        message=f"Generated {result.hint_name} with {len(result.nodes)} node accessors.",
        data={
            "hint_name": result.hint_name,
            "scene_path": result.scene_path,
            "root_type": result.root_type,
            "source": result.source,
            "diagnostics": diagnostics,
        },
    ).model_dump()


def _handle_inspect(
    scene_path: str,
    scene_root: str | None = None,
    scene_files: dict[str, str] | None = None,
) -> dict[str, Any]:
    if not scene_path or not scene_path.strip():
        return MCPResponse(success=False, message="'scene_path' parameter required.").model_dump()

    source = locate_scene(scene_path, _collect_sources(scene_root, scene_files))
    if source is None:
        return MCPResponse(
            success=False,
            message=f"Could not find scene file: {scene_path}",
        ).model_dump()

    scene = parse_scene(source.content)
    return MCPResponse(
        success=True,
        message=f"Found {len(scene.nodes)} nodes in {source.origin}.",
        data={
            "origin": source.origin,
            "root_type": scene.root_type,
            "synthesized": scene.synthesized,
            "nodes": [n.model_dump(mode="json") for n in scene.nodes],
            "resources": scene.resources,
        },
    ).model_dump()


@node_generator_tool(
    description="Generates a C# partial class with typed, cached accessors for every node "
    "of a Godot scene (.tscn). Provide the class name and optionally the scene path "
    "(defaults to <class_name>.tscn), a namespace, a directory to search, or inline "
    "scene contents keyed by file path.",
    annotations=ToolAnnotations(
        title="Generate Node Accessors",
        readOnlyHint=True,
    ),
)
async def generate_node_accessors(
    ctx: Context,
    class_name: Annotated[str, "C# class the accessors are generated for (e.g. 'Player')."],
    scene_path: Annotated[
        str,
        f"Scene to read (path or file name). Defaults to <class_name>{cfg.scene_extension}."
    ] | None = None,
    namespace: Annotated[str, "Namespace of the partial class; empty for global."] | None = None,
    scene_root: Annotated[str, "Directory searched recursively for scene files."] | None = None,
    scene_files: Annotated[
        dict[str, str],
        "Inline scene contents keyed by their file path."
    ] | None = None,
) -> dict[str, Any]:
    try:
        return _handle_generate(class_name, scene_path, namespace, scene_root, scene_files)
    except Exception as e:
        return {"success": False, "message": f"Python error generating node accessors: {str(e)}"}


@node_generator_tool(
    description="Parses a Godot scene (.tscn) and returns every node with its type, "
    "canonical path, script and properties, plus the external resource table.",
    annotations=ToolAnnotations(
        title="Inspect Scene",
        readOnlyHint=True,
    ),
)
async def inspect_scene(
    ctx: Context,
    scene_path: Annotated[str, "Scene to inspect (path or file name)."],
    scene_root: Annotated[str, "Directory searched recursively for scene files."] | None = None,
    scene_files: Annotated[
        dict[str, str],
        "Inline scene contents keyed by their file path."
    ] | None = None,
) -> dict[str, Any]:
    try:
        return _handle_inspect(scene_path, scene_root, scene_files)
    except Exception as e:
        return {"success": False, "message": f"Python error inspecting scene: {str(e)}"}
