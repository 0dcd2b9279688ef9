"""Locale file store backed by a ``<base>/<folder>/<lang>/<file>.json`` tree."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..errors import LanguageExistsError, LocaleNotFoundError, LocaleParseError, StorageError
from .files import FileStorage
from .sanitize import require_filename, sanitize_folder, sanitize_language_code

logger = logging.getLogger(__name__)

LOCALE_SUFFIX = ".json"


class LocaleStore:
    """Sanitized, path-guarded operations over the locales directory.

    Every operation validates its identifiers first and guards the resulting
    path second; nothing touches the filesystem until both have passed.
    There is no locking: concurrent writers race and the last one wins.
    """

    def __init__(self, base_dir: Path, folders: Iterable[str], template_language: str = "en") -> None:
        self.base_dir = base_dir
        self.folders = tuple(folders)
        self.template_language = template_language
        self._files = FileStorage(base_dir)

    # ------------------------------------------------------------------ utils
    def _locale_relpath(self, folder: str, lang: str, filename: str) -> Path:
        folder = sanitize_folder(folder, self.folders)
        lang = sanitize_language_code(lang)
        filename = require_filename(filename)
        return Path(folder) / lang / f"{filename}{LOCALE_SUFFIX}"

    def _list_dir(self, path: Path) -> list[Path]:
        try:
            return sorted(path.iterdir())
        except OSError as exc:
            raise StorageError(f"Failed to list {path.relative_to(self.base_dir.resolve())}") from exc

    # ------------------------------------------------------------------- API
    def read_structure(self) -> dict[str, list[str]]:
        """Map each folder to the base names of its template language files."""
        structure: dict[str, list[str]] = {}
        for folder in self.folders:
            template_dir = self._files.resolve_path(Path(folder) / self.template_language)
            structure[folder] = [
                entry.name.removesuffix(LOCALE_SUFFIX) for entry in self._list_dir(template_dir)
            ]
        return structure

    def list_languages(self, folder: str) -> list[str]:
        folder = sanitize_folder(folder, self.folders)
        folder_path = self._files.resolve_path(folder)
        return [entry.name for entry in self._list_dir(folder_path) if entry.is_dir()]

    def read_locale_file(self, folder: str, lang: str, filename: str) -> Any:
        path = self._files.resolve_path(self._locale_relpath(folder, lang, filename))
        if not path.is_file():
            raise LocaleNotFoundError("File not found")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise StorageError("Failed to read file") from exc
        try:
            return json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise LocaleParseError(f"Invalid JSON in locale file: {exc}") from exc

    def write_locale_file(self, folder: str, lang: str, filename: str, document: Any) -> Path:
        """Replace the locale file with ``document``, creating directories as needed."""
        relative = self._locale_relpath(folder, lang, filename)
        try:
            written = self._files.write_json(relative, document)
        except OSError as exc:
            raise StorageError(f"Failed to save file: {exc}") from exc
        logger.info("Saved locale file %s", written)
        return written

    def create_language(self, lang_code: str) -> str:
        """Bootstrap ``lang_code`` in every folder from the template language.

        Folders are processed in configured order and the operation is not
        atomic: if a later folder already has the language, the folders copied
        before it are left in place.
        """
        code = sanitize_language_code(lang_code)
        for folder in self.folders:
            source_rel = Path(folder) / self.template_language
            target_rel = Path(folder) / code
            target_dir = self._files.resolve_path(target_rel)
            if target_dir.exists():
                raise LanguageExistsError(f"Language '{code}' already exists")

            source_dir = self._files.resolve_path(source_rel)
            entries = self._list_dir(source_dir)
            try:
                target_dir.mkdir(parents=True)
                for entry in entries:
                    if entry.name.endswith(LOCALE_SUFFIX):
                        self._files.copy_file(source_rel / entry.name, target_rel / entry.name)
            except OSError as exc:
                raise StorageError(f"Failed to add language: {exc}") from exc
            logger.info("Created language %s in %s", code, folder)
        return code
