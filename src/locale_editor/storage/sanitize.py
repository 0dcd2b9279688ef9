"""Sanitizers for the untrusted identifiers used to build locale paths.

Folder names and language codes are validated by rejection. Filenames have no
fixed universe, so disallowed characters are stripped instead.
"""

from __future__ import annotations

import re
from typing import Iterable

from ..errors import InvalidFilenameError, InvalidFolderError, InvalidLanguageCodeError

_LANGUAGE_CODE_RE = re.compile(r"[a-z]{2}")
_FILENAME_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_folder(value: str, allowed: Iterable[str]) -> str:
    """Return ``value`` if it is exactly one of ``allowed`` (case-sensitive)."""
    if value not in tuple(allowed):
        raise InvalidFolderError("Invalid folder name")
    return value


def sanitize_language_code(value: str) -> str:
    """Normalise an ISO 639-1 shaped code: two latin letters, lowercased."""
    candidate = value.lower().strip()
    if not _LANGUAGE_CODE_RE.fullmatch(candidate):
        raise InvalidLanguageCodeError(
            "Invalid language code. Must be 2 lowercase letters (ISO 639-1)"
        )
    return candidate


def sanitize_filename(value: str) -> str:
    return _FILENAME_UNSAFE_RE.sub("", value)


def require_filename(value: str) -> str:
    """Sanitize ``value`` and reject it when nothing usable remains."""
    sanitized = sanitize_filename(value)
    if not sanitized:
        raise InvalidFilenameError("Invalid file name")
    return sanitized
