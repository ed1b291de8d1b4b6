"""Centralized configuration for the node accessor generator.

Loads settings from a .env file (if present) next to this module, then
falls back to environment variables, then to hardcoded defaults.

Usage in other modules:
    from node_generator.config import cfg

    extension = cfg.scene_extension
    suffix    = cfg.conflict_suffix
"""
from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# NODEGEN_* overrides from a local .env file
# ---------------------------------------------------------------------------

_ENV_DIR = Path(__file__).resolve().parent
_ENV_PREFIX = "NODEGEN_"


def _load_dotenv(directory: Path = _ENV_DIR) -> None:
    """Copy NODEGEN_* assignments from ``directory/.env`` into os.environ.

    Recognizes the keys read by ``_Config`` below (NODEGEN_SCENE_EXTENSION,
    NODEGEN_FUZZY_LOOKUP, NODEGEN_RESOURCE_SCAN, NODEGEN_DEFAULT_NODE_TYPE,
    NODEGEN_CONFLICT_SUFFIX, NODEGEN_EXTRA_NODE_TYPES, NODEGEN_LOG_LEVEL).
    Lines may carry a leading ``export``. Other keys are ignored, and a
    variable already set in the real environment is never overwritten.
    """
    env_file = directory / ".env"
    if not env_file.is_file():
        return
    for raw in env_file.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        if not key.startswith(_ENV_PREFIX) or key in os.environ:
            continue
        os.environ[key] = value.strip().strip("'\"")


_load_dotenv()


# ---------------------------------------------------------------------------
# Config class
# ---------------------------------------------------------------------------

RESOURCE_SCAN_FULL = "full"
RESOURCE_SCAN_PREFIX = "prefix"
_RESOURCE_SCAN_MODES = (RESOURCE_SCAN_FULL, RESOURCE_SCAN_PREFIX)

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class _Config:
    """Read-only configuration object. All values resolve at access time so
    they pick up any later changes to os.environ."""

    # ── Scene lookup ─────────────────────────────────────────────────

    @property
    def scene_extension(self) -> str:
        """Extension appended when a requested scene has none."""
        ext = os.environ.get("NODEGEN_SCENE_EXTENSION", ".tscn").strip() or ".tscn"
        return ext if ext.startswith(".") else f".{ext}"

    @property
    def fuzzy_lookup(self) -> bool:
        """Enable best-effort locator heuristics (prefix / sole-candidate)."""
        return os.environ.get("NODEGEN_FUZZY_LOOKUP", "").strip().lower() in _TRUTHY

    # ── Parsing ──────────────────────────────────────────────────────

    @property
    def resource_scan(self) -> str:
        """How far ext_resource declarations are collected: whole file or prefix."""
        mode = os.environ.get("NODEGEN_RESOURCE_SCAN", RESOURCE_SCAN_FULL).strip().lower()
        if mode not in _RESOURCE_SCAN_MODES:
            return RESOURCE_SCAN_FULL
        return mode

    # ── Emission ─────────────────────────────────────────────────────

    @property
    def default_node_type(self) -> str:
        return os.environ.get("NODEGEN_DEFAULT_NODE_TYPE", "Node").strip() or "Node"

    @property
    def conflict_suffix(self) -> str:
        return os.environ.get("NODEGEN_CONFLICT_SUFFIX", "Node").strip() or "Node"

    @property
    def extra_node_types(self) -> frozenset[str]:
        """Custom node classes accepted in addition to the built-in catalog."""
        raw = os.environ.get("NODEGEN_EXTRA_NODE_TYPES", "")
        return frozenset(t.strip() for t in raw.split(",") if t.strip())

    # ── Logging ──────────────────────────────────────────────────────

    @property
    def log_level(self) -> str:
        return os.environ.get("NODEGEN_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"


cfg = _Config()
