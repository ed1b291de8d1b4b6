"""Typed Godot node accessors generated from .tscn scene files."""
from .emitter import generate_node_accessors
from .exceptions import NodeGeneratorError, SceneNotFoundError
from .generator import generate_accessors, generate_batch
from .locator import load_scene_sources, locate_scene
from .models import (
    Diagnostic,
    DiagnosticSeverity,
    GenerationRequest,
    GenerationResult,
    NodeRecord,
    ParsedScene,
    SceneSource,
)
from .naming import make_safe_identifier
from .parser import load_scene_file, parse_scene

__all__ = [
    "Diagnostic",
    "DiagnosticSeverity",
    "GenerationRequest",
    "GenerationResult",
    "NodeGeneratorError",
    "NodeRecord",
    "ParsedScene",
    "SceneNotFoundError",
    "SceneSource",
    "generate_accessors",
    "generate_batch",
    "generate_node_accessors",
    "load_scene_file",
    "load_scene_sources",
    "locate_scene",
    "make_safe_identifier",
    "parse_scene",
]
