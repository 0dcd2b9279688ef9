"""Error taxonomy shared by the locale store and the HTTP layer."""

from __future__ import annotations


class LocaleError(Exception):
    """Base class for all locale store failures."""

    kind: str = "error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class LocaleValidationError(LocaleError):
    """Malformed folder, language code or filename. Raised before any I/O."""

    kind = "validation"


class InvalidFolderError(LocaleValidationError):
    pass


class InvalidLanguageCodeError(LocaleValidationError):
    pass


class InvalidFilenameError(LocaleValidationError):
    pass


class PathEscapeError(LocaleError):
    """Resolved path lies outside the trusted base directory."""

    kind = "authorization"


class LocaleNotFoundError(LocaleError):
    kind = "not_found"


class LocaleParseError(LocaleError):
    """Stored content is not valid JSON."""

    kind = "parse"


class LanguageExistsError(LocaleError):
    kind = "conflict"


class StorageError(LocaleError):
    """Underlying read, write, list or copy failure."""

    kind = "storage"
