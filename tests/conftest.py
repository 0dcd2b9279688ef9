from __future__ import annotations

import json
from pathlib import Path

import pytest

from locale_editor.storage.locales import LocaleStore

FOLDERS = ("pecan", "admin", "web")


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    """A locales tree with an ``en`` template in every folder."""
    base = tmp_path / "locales"
    for folder in FOLDERS:
        en_dir = base / folder / "en"
        en_dir.mkdir(parents=True)
        (en_dir / "common.json").write_text(
            json.dumps({"hello": f"Hello from {folder}"}, indent=2), encoding="utf-8"
        )
        (en_dir / "errors.json").write_text('{\n  "oops": "Something went wrong"\n}', encoding="utf-8")
    (base / "pecan" / "en" / "README.txt").write_text("not a locale", encoding="utf-8")
    return base


@pytest.fixture
def store(locales_dir: Path) -> LocaleStore:
    return LocaleStore(locales_dir, FOLDERS)
