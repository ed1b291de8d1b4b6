"""Tests for request/result models and configuration."""
import os

import pytest
from pydantic import ValidationError

from node_generator.config import _load_dotenv, cfg
from node_generator.models import Diagnostic, GenerationRequest, NodeRecord


class TestGenerationRequest:

    def test_defaults(self):
        request = GenerationRequest(class_name="Player")
        assert request.namespace == ""
        assert request.scene_path is None
        assert request.resolved_scene_path() == "Player.tscn"
        assert request.hint_name == "Player.g.cs"

    def test_blank_scene_path_is_inferred(self):
        request = GenerationRequest(class_name="Player", scene_path="  ")
        assert request.resolved_scene_path(".scn") == "Player.scn"

    def test_rejects_invalid_class_name(self):
        with pytest.raises(ValidationError):
            GenerationRequest(class_name="not a class")

    def test_strips_namespace(self):
        assert GenerationRequest(class_name="A", namespace=" Game.UI ").namespace == "Game.UI"


class TestNodeRecord:

    def test_parent_path_and_depth(self):
        node = NodeRecord(name="Sprite", type="Sprite2D", path="Root/Player/Sprite")
        assert node.parent_path == "Root/Player"
        assert node.depth == 2

    def test_top_level(self):
        node = NodeRecord(name="Root", path="Root")
        assert node.parent_path == ""
        assert node.type == "Node"

    def test_frozen(self):
        node = NodeRecord(name="Root", path="Root")
        with pytest.raises(ValidationError):
            node.name = "Other"


def test_diagnostic_str():
    diagnostic = Diagnostic(id="GNGEN001", title="Scene file not found", message="Could not find scene file: A.tscn")
    assert str(diagnostic) == "GNGEN001 [warning] Could not find scene file: A.tscn"


class TestConfig:

    def test_defaults(self):
        assert cfg.scene_extension == ".tscn"
        assert cfg.fuzzy_lookup is False
        assert cfg.resource_scan == "full"
        assert cfg.default_node_type == "Node"
        assert cfg.conflict_suffix == "Node"
        assert cfg.extra_node_types == frozenset()
        assert cfg.log_level == "WARNING"

    def test_extension_gets_dot(self, monkeypatch):
        monkeypatch.setenv("NODEGEN_SCENE_EXTENSION", "scn")
        assert cfg.scene_extension == ".scn"

    @pytest.mark.parametrize("raw,expected", [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("", False)])
    def test_fuzzy_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("NODEGEN_FUZZY_LOOKUP", raw)
        assert cfg.fuzzy_lookup is expected

    def test_invalid_resource_scan_falls_back_to_full(self, monkeypatch):
        monkeypatch.setenv("NODEGEN_RESOURCE_SCAN", "sideways")
        assert cfg.resource_scan == "full"


class TestDotenv:

    @pytest.fixture(autouse=True)
    def isolated_environ(self, monkeypatch):
        monkeypatch.setattr(os, "environ", os.environ.copy())

    def test_loads_nodegen_keys_only(self, tmp_path):
        (tmp_path / ".env").write_text(
            "# local overrides\n"
            "NODEGEN_CONFLICT_SUFFIX='Ref'\n"
            "export NODEGEN_FUZZY_LOOKUP=yes\n"
            "OTHER_SETTING=1\n"
            "not an assignment\n",
            encoding="utf-8",
        )
        _load_dotenv(tmp_path)

        assert cfg.conflict_suffix == "Ref"
        assert cfg.fuzzy_lookup is True
        assert "OTHER_SETTING" not in os.environ

    def test_real_environment_wins(self, tmp_path):
        os.environ["NODEGEN_CONFLICT_SUFFIX"] = "Env"
        (tmp_path / ".env").write_text("NODEGEN_CONFLICT_SUFFIX=File\n", encoding="utf-8")
        _load_dotenv(tmp_path)

        assert cfg.conflict_suffix == "Env"

    def test_missing_file_is_ignored(self, tmp_path):
        _load_dotenv(tmp_path)
        assert cfg.conflict_suffix == "Node"
