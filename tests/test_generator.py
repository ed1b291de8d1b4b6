"""Tests for the generation orchestrator and its diagnostics."""
import pytest

from node_generator import (
    DiagnosticSeverity,
    GenerationRequest,
    SceneSource,
    generate_accessors,
    generate_batch,
    load_scene_sources,
)
from node_generator.generator import PARSE_ERROR_ID, SCENE_NOT_FOUND_ID


@pytest.fixture
def sources(fixtures_dir):
    return load_scene_sources(fixtures_dir)


def test_generates_from_inferred_scene_path(sources):
    result = generate_accessors(GenerationRequest(class_name="Player", namespace="Game"), sources)
    assert result.success
    assert result.scene_path == "Player.tscn"
    assert result.hint_name == "Player.g.cs"
    assert result.root_type == "CharacterBody2D"
    assert [n.name for n in result.nodes] == ["Player", "Sprite", "CollisionShape", "Camera"]
    assert result.diagnostics == []
    assert "namespace Game" in result.source


def test_explicit_scene_path(sources):
    request = GenerationRequest(class_name="MainMenu", scene_path="res://ui/MainMenu.tscn")
    result = generate_accessors(request, sources)
    assert result.success
    assert "public partial class MainMenu" in result.source


def test_missing_scene_reports_not_found(sources):
    result = generate_accessors(GenerationRequest(class_name="Nowhere"), sources)
    assert not result.success
    assert result.source is None
    [diagnostic] = result.diagnostics
    assert diagnostic.id == SCENE_NOT_FOUND_ID
    assert diagnostic.severity == DiagnosticSeverity.WARNING
    assert "Nowhere.tscn" in diagnostic.message
    assert diagnostic.class_name == "Nowhere"


def test_scene_without_nodes_reports_not_found(sources):
    result = generate_accessors(GenerationRequest(class_name="Broken"), sources)
    assert result.source is None
    assert [d.id for d in result.diagnostics] == [SCENE_NOT_FOUND_ID]


def test_internal_error_reports_parse_error(monkeypatch, sources):
    def explode(*args, **kwargs):
        raise RuntimeError("invariant violated")

    monkeypatch.setattr("node_generator.generator.parse_scene", explode)
    result = generate_accessors(GenerationRequest(class_name="Player"), sources)
    assert result.source is None
    [diagnostic] = result.diagnostics
    assert diagnostic.id == PARSE_ERROR_ID
    assert "invariant violated" in diagnostic.message
    assert "Player.tscn" in diagnostic.message


def test_batch_isolates_failures(monkeypatch, sources):
    from node_generator import generator

    real_emit = generator.generate_node_accessors

    def flaky_emit(namespace, class_name, nodes, **kwargs):
        if class_name == "ComplexScene":
            raise ValueError("emitter failure")
        return real_emit(namespace, class_name, nodes, **kwargs)

    monkeypatch.setattr(generator, "generate_node_accessors", flaky_emit)
    requests = [
        GenerationRequest(class_name="Player"),
        GenerationRequest(class_name="ComplexScene"),
        GenerationRequest(class_name="Missing"),
        GenerationRequest(class_name="MainMenu", scene_path="ui/MainMenu.tscn"),
    ]
    results = generate_batch(requests, sources)
    assert [r.success for r in results] == [True, False, False, True]
    assert results[1].diagnostics[0].id == PARSE_ERROR_ID
    assert results[2].diagnostics[0].id == SCENE_NOT_FOUND_ID


def test_fallback_root_node_generates():
    sources = [SceneSource(origin="Bare.tscn", content='[resource type="Node3D"]')]
    result = generate_accessors(GenerationRequest(class_name="Bare"), sources)
    assert result.success
    assert 'GetNodeOrNull("Root")' in result.source


def test_overrides_are_forwarded(sources):
    result = generate_accessors(
        GenerationRequest(class_name="Player"),
        sources,
        conflict_suffix="Ref",
    )
    assert "public CharacterBody2D PlayerRef" in result.source


def test_scene_extension_from_environment(monkeypatch):
    monkeypatch.setenv("NODEGEN_SCENE_EXTENSION", "scn")
    sources = [SceneSource(origin="Level.scn", content='[node name="Level" type="Node3D"]')]
    result = generate_accessors(GenerationRequest(class_name="Level"), sources)
    assert result.scene_path == "Level.scn"
    assert result.success


@pytest.mark.parametrize("reverse", [False, True], ids=["declared-top-down", "declared-bottom-up"])
def test_deep_scene_generates_without_diagnostics(reverse):
    lines = ['[node name="N0" type="Node"]']
    lines += [f'[node name="N{i}" type="Node" parent="N{i - 1}"]' for i in range(1, 1500)]
    if reverse:
        lines.reverse()
    sources = [SceneSource(origin="Deep.tscn", content="\n".join(lines))]

    result = generate_accessors(GenerationRequest(class_name="Deep"), sources)

    assert result.diagnostics == []
    assert result.success
    assert len(result.nodes) == 1500
    assert "public class N1498Wrapper" in result.source


def test_emit_failure_leaves_no_nodes(monkeypatch, sources):
    def explode(*args, **kwargs):
        raise RuntimeError("emit failed")

    monkeypatch.setattr("node_generator.generator.generate_node_accessors", explode)
    result = generate_accessors(GenerationRequest(class_name="Player"), sources)

    assert not result.success
    assert result.nodes == []
    assert result.root_type == "Node"
    assert [d.id for d in result.diagnostics] == [PARSE_ERROR_ID]
