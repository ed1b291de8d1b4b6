"""Scene source lookup across a set of candidate blobs.

Tiers, first hit wins:
    1. full origin identifier, case-insensitive
    2. file name component, case-insensitive
    3. file name with the scene extension appended (when the request lacks it)
    4. optional heuristics (unique basename prefix, sole candidate with the
       scene extension), only when fuzzy lookup is enabled
A miss returns None; lookup never raises.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from .config import cfg
from .models import SceneSource

logger = logging.getLogger(__name__)


def _file_name(identifier: str) -> str:
    return identifier.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def _stem(file_name: str) -> str:
    stem, dot, _ = file_name.rpartition(".")
    return stem if dot and stem else file_name


def _first(candidates: Iterable[SceneSource], predicate) -> SceneSource | None:
    return next((c for c in candidates if predicate(c)), None)


def locate_scene(
    requested: str,
    sources: Sequence[SceneSource],
    *,
    extension: str | None = None,
    fuzzy: bool | None = None,
) -> SceneSource | None:
    """Find the candidate blob best matching a requested scene identifier."""
    extension = (extension or cfg.scene_extension).lower()
    fuzzy = cfg.fuzzy_lookup if fuzzy is None else fuzzy
    if not requested or not sources:
        return None

    wanted = requested.strip().lower()
    match = _first(sources, lambda c: c.origin.lower() == wanted)
    if match is not None:
        return match

    wanted_name = _file_name(wanted)
    match = _first(sources, lambda c: c.file_name.lower() == wanted_name)
    if match is not None:
        return match

    if not wanted_name.endswith(extension):
        with_ext = f"{_stem(wanted_name)}{extension}"
        match = _first(sources, lambda c: c.file_name.lower() == with_ext)
        if match is not None:
            return match

    if fuzzy:
        match = _fuzzy_match(wanted_name, sources, extension)
        if match is not None:
            logger.info("Scene %r matched heuristically to %s", requested, match.origin)
        return match

    return None


def _fuzzy_match(wanted_name: str, sources: Sequence[SceneSource], extension: str) -> SceneSource | None:
    scenes = [c for c in sources if c.file_name.lower().endswith(extension)]
    wanted_stem = _stem(wanted_name)
    if wanted_stem:
        prefixed = [
            c for c in scenes
            if _stem(c.file_name.lower()).startswith(wanted_stem)
            or wanted_stem.startswith(_stem(c.file_name.lower()))
        ]
        if len(prefixed) == 1:
            return prefixed[0]
    if len(scenes) == 1:
        return scenes[0]
    return None


def load_scene_sources(root: str | Path, extension: str | None = None) -> list[SceneSource]:
    """Read every scene file under ``root`` (recursively) as a candidate blob.

    Files are returned in sorted path order so lookups are reproducible.
    Unreadable files are skipped with a warning.
    """
    extension = extension or cfg.scene_extension
    root = Path(root)
    if root.is_file():
        paths = [root]
    else:
        paths = sorted(p for p in root.rglob(f"*{extension}") if p.is_file())

    sources: list[SceneSource] = []
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Skipping unreadable scene file %s", path, exc_info=True)
            continue
        sources.append(SceneSource(origin=path.as_posix(), content=content))
    return sources
