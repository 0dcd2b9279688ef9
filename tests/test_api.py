from __future__ import annotations

import inspect
import json
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from locale_editor import api
from locale_editor.api import app
from locale_editor.config import Settings, get_settings


@pytest.fixture
def client(locales_dir: Path, tmp_path: Path) -> Iterator[TestClient]:
    settings = Settings(locales_dir=locales_dir, index_html=tmp_path / "index.html")
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_healthcheck(client: TestClient) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}


def test_index_page(client: TestClient, tmp_path: Path) -> None:
    response = client.get("/")
    assert response.status_code == 404
    assert response.text == "HTML file not found"

    (tmp_path / "index.html").write_text("<html>editor</html>", encoding="utf-8")
    response = client.get("/index.html")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "editor" in response.text


def test_structure(client: TestClient) -> None:
    response = client.get("/api/structure")
    assert response.status_code == 200
    assert response.json()["web"] == ["common", "errors"]


def test_languages_defaults_to_first_folder(client: TestClient, locales_dir: Path) -> None:
    (locales_dir / "pecan" / "de").mkdir()
    (locales_dir / "pecan" / "notes.txt").write_text("x", encoding="utf-8")
    assert client.get("/api/languages").json() == {"languages": ["de", "en"]}
    assert client.get("/api/languages", params={"folder": "web"}).json() == {"languages": ["en"]}


def test_languages_invalid_folder(client: TestClient) -> None:
    response = client.get("/api/languages", params={"folder": "../etc"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid folder name", "kind": "validation"}


def test_read_locale(client: TestClient) -> None:
    params = {"folder": "admin", "lang": "en", "file": "common"}
    response = client.get("/api/locale", params=params)
    assert response.status_code == 200
    assert response.json() == {"hello": "Hello from admin"}

    response = client.get("/api/locale/common", params=params)
    assert response.json() == {"hello": "Hello from admin"}


def test_read_locale_errors(client: TestClient, locales_dir: Path) -> None:
    assert client.get("/api/locale", params={"folder": "pecan"}).status_code == 400

    response = client.get("/api/locale", params={"folder": "pecan", "lang": "en", "file": "missing"})
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"

    response = client.get("/api/locale", params={"folder": "pecan", "lang": "english", "file": "common"})
    assert response.status_code == 400

    (locales_dir / "pecan" / "en" / "broken.json").write_text("{", encoding="utf-8")
    response = client.get("/api/locale", params={"folder": "pecan", "lang": "en", "file": "broken"})
    assert response.status_code == 500
    assert response.json()["kind"] == "parse"


def test_read_locale_outside_base_is_forbidden(client: TestClient, locales_dir: Path, tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "common.json").write_text('{"leak": true}', encoding="utf-8")
    (locales_dir / "web" / "zz").symlink_to(outside, target_is_directory=True)

    response = client.get("/api/locale", params={"folder": "web", "lang": "zz", "file": "common"})
    assert response.status_code == 403
    assert response.json() == {"error": "Invalid path", "kind": "authorization"}


def test_save_locale(client: TestClient, locales_dir: Path) -> None:
    payload = {"folder": "web", "lang": "en", "file": "common", "data": {"hello": "Hi", "empty": {}}}
    response = client.post("/api/locale", json=payload)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    saved = (locales_dir / "web" / "en" / "common.json").read_text(encoding="utf-8")
    assert json.loads(saved) == payload["data"]


def test_save_locale_missing_fields(client: TestClient) -> None:
    response = client.post("/api/locale", json={"folder": "web", "lang": "en", "file": "common"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_add_language(client: TestClient, locales_dir: Path) -> None:
    response = client.post("/api/language", json={"langCode": "PT", "langName": "Português"})
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "langCode": "pt",
        "message": "Language 'pt' created successfully",
    }
    assert (locales_dir / "admin" / "pt" / "errors.json").exists()

    response = client.post("/api/language", json={"langCode": "pt", "langName": "Português"})
    assert response.status_code == 409
    assert response.json() == {"error": "Language 'pt' already exists", "kind": "conflict"}


def test_add_language_validation(client: TestClient) -> None:
    assert client.post("/api/language", json={"langCode": "pt"}).status_code == 400
    response = client.post("/api/language", json={"langCode": "por", "langName": "Portuguese"})
    assert response.status_code == 400
    assert response.json()["kind"] == "validation"


def test_cors_preflight(client: TestClient) -> None:
    response = client.options(
        "/api/locale",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize(
    "endpoint",
    [
        api.read_structure,
        api.list_languages,
        api.read_locale,
        api.read_locale_with_suffix,
        api.save_locale,
        api.add_language,
    ],
)
def test_storage_endpoints_run_in_threadpool(endpoint) -> None:
    assert not inspect.iscoroutinefunction(endpoint)
