"""Utility helpers for managing local file storage under a trusted root."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from ..errors import PathEscapeError

logger = logging.getLogger(__name__)


def is_path_safe(base_dir: Path, candidate: Path | str) -> bool:
    """Return True when ``candidate`` resolves inside ``base_dir``.

    Both paths are resolved (symlinks included) and compared on path-segment
    boundaries, so a sibling such as ``locales-evil`` is not considered to be
    inside ``locales``. A relative candidate is taken relative to ``base_dir``.
    """
    base = Path(base_dir).resolve()
    resolved = (base / candidate).resolve()
    return resolved.is_relative_to(base)


class FileStorage:
    """Read and write files while refusing paths that escape ``base_dir``."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir

    def resolve_path(self, relative_path: Path | str) -> Path:
        """Resolve a path under the storage root or raise ``PathEscapeError``."""
        if not is_path_safe(self.base_dir, relative_path):
            logger.warning("Rejected path outside %s: %s", self.base_dir, relative_path)
            raise PathEscapeError("Invalid path")
        return (self.base_dir.resolve() / relative_path).resolve()

    def read_text(self, relative_path: Path | str) -> str:
        target = self.resolve_path(relative_path)
        return target.read_text(encoding="utf-8")

    def write_text(self, relative_path: Path | str, content: str) -> Path:
        target = self.resolve_path(relative_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target

    def read_json(self, relative_path: Path | str) -> Any:
        return json.loads(self.read_text(relative_path))

    def write_json(self, relative_path: Path | str, document: Any) -> Path:
        # Two-space indent, literal unicode, no trailing newline.
        return self.write_text(relative_path, json.dumps(document, indent=2, ensure_ascii=False))

    def copy_file(self, source: Path | str, target: Path | str) -> Path:
        source_path = self.resolve_path(source)
        target_path = self.resolve_path(target)
        shutil.copyfile(source_path, target_path)
        return target_path
