"""Project-specific exception types."""


class NodeGeneratorError(Exception):
    """Base class for errors raised by the node accessor generator."""


class SceneNotFoundError(NodeGeneratorError, FileNotFoundError):
    """Raised when a requested scene file cannot be located or read."""

    def __init__(self, scene_path: str, message: str | None = None):
        self.scene_path = scene_path
        super().__init__(message or f"Could not find scene file: {scene_path}")
