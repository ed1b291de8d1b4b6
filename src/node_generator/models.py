"""Pydantic data models for scene parsing and accessor generation."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_NODE_TYPE = "Node"
GENERATED_FILE_SUFFIX = ".g.cs"


class DiagnosticSeverity(str, Enum):
    """How loudly a diagnostic should be surfaced to the host."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NodeRecord(BaseModel):
    """One declared node with its canonical path and script/property data."""
    model_config = ConfigDict(frozen=True)

    name: str
    type: str = DEFAULT_NODE_TYPE
    path: str
    script: str | None = None
    properties: dict[str, str] = Field(default_factory=dict)

    @property
    def parent_path(self) -> str:
        """Path of the enclosing node, or "" for top-level nodes."""
        head, sep, _ = self.path.rpartition("/")
        return head if sep else ""

    @property
    def depth(self) -> int:
        return self.path.count("/")


class ParsedScene(BaseModel):
    """Result of one parse pass over a scene blob."""
    nodes: list[NodeRecord] = Field(default_factory=list)
    resources: dict[str, str] = Field(default_factory=dict)
    synthesized: bool = False  # True when the fallback single node was created

    @property
    def root_type(self) -> str:
        """Type of the first top-level node; used as the scene's base type."""
        for node in self.nodes:
            if "/" not in node.path:
                return node.type or DEFAULT_NODE_TYPE
        return DEFAULT_NODE_TYPE

    def find(self, name: str) -> NodeRecord | None:
        for node in self.nodes:
            if node.name == name:
                return node
        return None


class SceneSource(BaseModel):
    """A candidate scene blob and the identifier it came from."""
    model_config = ConfigDict(frozen=True)

    origin: str
    content: str

    @property
    def file_name(self) -> str:
        """Last path component, tolerant of both / and \\ separators."""
        return self.origin.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


class GenerationRequest(BaseModel):
    """One class asking for accessors generated from a scene."""
    class_name: str
    namespace: str = ""
    scene_path: str | None = None

    @field_validator("class_name")
    @classmethod
    def _class_name_is_identifier(cls, value: str) -> str:
        value = value.strip()
        if not value.isidentifier():
            raise ValueError(f"class_name must be a valid identifier, got {value!r}")
        return value

    @field_validator("namespace")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        return value.strip()

    @field_validator("scene_path")
    @classmethod
    def _blank_scene_path_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    def resolved_scene_path(self, extension: str = ".tscn") -> str:
        """Scene identifier to look up, inferred from the class name when absent."""
        return self.scene_path or f"{self.class_name}{extension}"

    @property
    def hint_name(self) -> str:
        return f"{self.class_name}{GENERATED_FILE_SUFFIX}"


class Diagnostic(BaseModel):
    """A non-fatal problem reported while serving a generation request."""
    id: str
    title: str
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    message: str
    class_name: str | None = None
    scene_path: str | None = None

    def __str__(self) -> str:
        return f"{self.id} [{self.severity.value}] {self.message}"


class GenerationResult(BaseModel):
    """Generated source (if any) plus everything reported along the way."""
    class_name: str
    scene_path: str
    hint_name: str
    source: str | None = None
    nodes: list[NodeRecord] = Field(default_factory=list)
    root_type: str = DEFAULT_NODE_TYPE
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.source is not None
