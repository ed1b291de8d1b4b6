"""Generation orchestrator.

Wires a request through locate -> parse -> emit and turns every failure on
the way into a Diagnostic. Nothing raised below this module escapes a
request; a batch always yields one result per request.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .config import cfg
from .emitter import generate_node_accessors
from .locator import locate_scene
from .models import (
    Diagnostic,
    DiagnosticSeverity,
    GenerationRequest,
    GenerationResult,
    SceneSource,
)
from .parser import parse_scene

logger = logging.getLogger(__name__)

SCENE_NOT_FOUND_ID = "GNGEN001"
SCENE_NOT_FOUND_TITLE = "Scene file not found"
PARSE_ERROR_ID = "GNGEN002"
PARSE_ERROR_TITLE = "Error parsing scene file"


def scene_not_found(request: GenerationRequest, scene_path: str) -> Diagnostic:
    return Diagnostic(
        id=SCENE_NOT_FOUND_ID,
        title=SCENE_NOT_FOUND_TITLE,
        severity=DiagnosticSeverity.WARNING,
        message=f"Could not find scene file: {scene_path}",
        class_name=request.class_name,
        scene_path=scene_path,
    )


def parse_error(request: GenerationRequest, scene_path: str, error: BaseException) -> Diagnostic:
    return Diagnostic(
        id=PARSE_ERROR_ID,
        title=PARSE_ERROR_TITLE,
        severity=DiagnosticSeverity.WARNING,
        message=f"Error parsing scene file {scene_path}: {error}",
        class_name=request.class_name,
        scene_path=scene_path,
    )


def generate_accessors(
    request: GenerationRequest,
    sources: Sequence[SceneSource],
    *,
    extension: str | None = None,
    fuzzy: bool | None = None,
    resource_scan: str | None = None,
    default_type: str | None = None,
    conflict_suffix: str | None = None,
    extra_types: Sequence[str] | None = None,
) -> GenerationResult:
    """Generate accessor source for one class.

    A locator miss or a scene with no nodes yields a GNGEN001 diagnostic and
    no source. Any exception while parsing or emitting yields GNGEN002.
    """
    extension = extension or cfg.scene_extension
    scene_path = request.resolved_scene_path(extension)
    result = GenerationResult(
        class_name=request.class_name,
        scene_path=scene_path,
        hint_name=request.hint_name,
    )

    source = locate_scene(scene_path, sources, extension=extension, fuzzy=fuzzy)
    if source is None:
        logger.warning("No scene matched %r for class %s", scene_path, request.class_name)
        result.diagnostics.append(scene_not_found(request, scene_path))
        return result

    try:
        scene = parse_scene(source.content, resource_scan=resource_scan)
        if not scene.nodes:
            logger.warning("Scene %s for class %s has no nodes", source.origin, request.class_name)
            result.diagnostics.append(scene_not_found(request, scene_path))
            return result

        generated = generate_node_accessors(
            request.namespace,
            request.class_name,
            scene.nodes,
            conflict_suffix=conflict_suffix,
            default_type=default_type,
            extra_types=extra_types,
        )
    except Exception as e:
        logger.exception("Failed to generate accessors for %s from %s", request.class_name, source.origin)
        result.diagnostics.append(parse_error(request, scene_path, e))
        return result

    result.source = generated
    result.nodes = list(scene.nodes)
    result.root_type = scene.root_type

    logger.info(
        "Generated %s with %d node accessors from %s",
        result.hint_name, len(result.nodes), source.origin,
    )
    return result


def generate_batch(
    requests: Iterable[GenerationRequest],
    sources: Sequence[SceneSource],
    **overrides,
) -> list[GenerationResult]:
    """Run every request independently against the same read-only sources."""
    sources = tuple(sources)
    return [generate_accessors(request, sources, **overrides) for request in requests]
