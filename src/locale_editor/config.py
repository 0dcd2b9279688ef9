"""Configuration management for the locale editor service."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralised runtime configuration for the service."""

    model_config = SettingsConfigDict(
        env_prefix="LOCALE_EDITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
    )

    # General
    project_root: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parents[2],
        description="Root directory of the project repository.",
    )

    # Storage (relative to project_root unless absolute)
    locales_dir: Path = Field(default=Path("locales"), description="Trusted base directory for locale files.")
    folders: tuple[str, ...] = Field(
        default=("pecan", "admin", "web"),
        description="Allow-listed project folders, in the order they are processed.",
    )
    template_language: str = Field(default="en", description="Language copied when bootstrapping a new one.")
    index_html: Path = Field(default=Path("index.html"), description="Editor page served at '/'.")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="info")

    @field_validator("folders")
    @classmethod
    def _require_folders(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("at least one folder must be configured")
        return value

    def _under_root(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.project_root / path

    @property
    def locales_path(self) -> Path:
        return self._under_root(self.locales_dir)

    @property
    def index_html_path(self) -> Path:
        return self._under_root(self.index_html)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance and ensure the locales directory exists."""
    settings = Settings()
    settings.locales_path.mkdir(parents=True, exist_ok=True)
    return settings
