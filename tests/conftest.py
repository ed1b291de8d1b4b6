"""Pytest configuration for node generator tests."""
import sys
from pathlib import Path

import pytest

# Add src directory to Python path so tests can import node_generator, cli, etc.
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

FIXTURES_DIR = Path(__file__).parent / "fixtures"

_NODEGEN_ENV = (
    "NODEGEN_SCENE_EXTENSION",
    "NODEGEN_FUZZY_LOOKUP",
    "NODEGEN_RESOURCE_SCAN",
    "NODEGEN_DEFAULT_NODE_TYPE",
    "NODEGEN_CONFLICT_SUFFIX",
    "NODEGEN_EXTRA_NODE_TYPES",
    "NODEGEN_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_nodegen_env(monkeypatch):
    """Run every test against default configuration."""
    for key in _NODEGEN_ENV:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def scene_text():
    def _read(name: str) -> str:
        return (FIXTURES_DIR / name).read_text(encoding="utf-8")
    return _read
