"""Persisted expansion set and last selection.

Stored as JSON in the platform cache directory. A missing, empty or malformed
file loads as the default (empty) cache; loading creates the file if absent.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_cache_dir

from .config import APP_NAME

logger = logging.getLogger(__name__)

CACHE_FILENAME = "sidetreecache.json"
CACHE_PATH = Path(user_cache_dir(APP_NAME, appauthor=False)) / CACHE_FILENAME


@dataclass
class Cache:
    selected_path: Path | None = None
    expanded_paths: set[Path] = field(default_factory=set)

    def to_json(self) -> dict[str, object]:
        return {
            "selected_path": str(self.selected_path) if self.selected_path is not None else "",
            "expanded_paths": sorted(str(path) for path in self.expanded_paths),
        }

    @classmethod
    def from_json(cls, data: object) -> Cache:
        """Build a cache from decoded JSON, dropping malformed fields."""
        if not isinstance(data, dict):
            return cls()
        raw_selected = data.get("selected_path")
        selected = Path(raw_selected) if isinstance(raw_selected, str) and raw_selected else None
        raw_expanded = data.get("expanded_paths")
        expanded: set[Path] = set()
        if isinstance(raw_expanded, list):
            expanded = {Path(item) for item in raw_expanded if isinstance(item, str) and item}
        return cls(selected_path=selected, expanded_paths=expanded)


def load_cache(path: Path | None = None) -> Cache:
    cache_path = path if path is not None else CACHE_PATH
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        if not cache_path.exists():
            cache_path.touch()
        text = cache_path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot read cache %s: %s", cache_path, exc)
        return Cache()
    if not text.strip():
        return Cache()
    try:
        data = json.loads(text)
    except ValueError as exc:
        logger.warning("ignoring malformed cache %s: %s", cache_path, exc)
        return Cache()
    return Cache.from_json(data)


def save_cache(cache: Cache, path: Path | None = None) -> None:
    """Write ``cache`` as pretty-printed JSON; write failures are logged."""
    cache_path = path if path is not None else CACHE_PATH
    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(json.dumps(cache.to_json(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("cannot write cache %s: %s", cache_path, exc)


__all__ = ["CACHE_PATH", "Cache", "load_cache", "save_cache"]
