"""FastAPI application exposing the locale editor endpoints."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field

from .config import Settings, get_settings
from .errors import LocaleError
from .storage.locales import LocaleStore

logger = logging.getLogger(__name__)

app = FastAPI(title="Locale Editor", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

ERROR_STATUS = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "authorization": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "parse": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "conflict": status.HTTP_409_CONFLICT,
    "storage": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class SaveLocaleRequest(BaseModel):
    folder: Optional[str] = None
    lang: Optional[str] = None
    file: Optional[str] = None
    data: Any = None


class AddLanguageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lang_code: Optional[str] = Field(default=None, alias="langCode")
    lang_name: Optional[str] = Field(default=None, alias="langName")


class AddLanguageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    lang_code: str = Field(alias="langCode")
    message: str


class LanguagesResponse(BaseModel):
    languages: list[str]


async def get_locale_store(settings: Settings = Depends(get_settings)) -> LocaleStore:
    # Built per request; nothing is cached between calls.
    return LocaleStore(settings.locales_path, settings.folders, settings.template_language)


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(LocaleError)
async def locale_error_handler(request: Request, exc: LocaleError) -> JSONResponse:
    status_code = ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail, exc_info=exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.kind, exc.detail)
    return JSONResponse({"error": exc.detail, "kind": exc.kind}, status_code=status_code)


@app.get("/healthz")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
@app.get("/index.html", include_in_schema=False)
async def index(settings: Settings = Depends(get_settings)):
    html_path = settings.index_html_path
    if not html_path.is_file():
        return PlainTextResponse("HTML file not found", status_code=status.HTTP_404_NOT_FOUND)
    return FileResponse(html_path, media_type="text/html")


@app.get("/api/structure", response_model=dict[str, list[str]])
def read_structure(store: LocaleStore = Depends(get_locale_store)):
    return store.read_structure()


@app.get("/api/languages", response_model=LanguagesResponse)
def list_languages(
    folder: Optional[str] = None,
    store: LocaleStore = Depends(get_locale_store),
):
    languages = store.list_languages(folder or store.folders[0])
    return LanguagesResponse(languages=languages)


@app.get("/api/locale")
def read_locale(
    folder: Optional[str] = None,
    lang: Optional[str] = None,
    file: Optional[str] = None,
    store: LocaleStore = Depends(get_locale_store),
):
    if not folder or not lang or not file:
        return _bad_request("Missing required parameters")
    document = store.read_locale_file(folder, lang, file)
    return JSONResponse(content=document)


@app.get("/api/locale/{suffix:path}", include_in_schema=False)
def read_locale_with_suffix(
    suffix: str,
    folder: Optional[str] = None,
    lang: Optional[str] = None,
    file: Optional[str] = None,
    store: LocaleStore = Depends(get_locale_store),
):
    # Older editor builds request /api/locale/<anything>?folder=...; the suffix is ignored.
    return read_locale(folder=folder, lang=lang, file=file, store=store)


@app.post("/api/locale")
def save_locale(
    payload: SaveLocaleRequest,
    store: LocaleStore = Depends(get_locale_store),
):
    if not payload.folder or not payload.lang or not payload.file or payload.data is None:
        return _bad_request("Missing required fields")
    store.write_locale_file(payload.folder, payload.lang, payload.file, payload.data)
    return {"success": True}


@app.post("/api/language", response_model=AddLanguageResponse)
def add_language(
    payload: AddLanguageRequest,
    store: LocaleStore = Depends(get_locale_store),
):
    if not payload.lang_code or not payload.lang_name:
        return _bad_request("Missing required fields")
    code = store.create_language(payload.lang_code)
    logger.info("Added language %s (%s)", code, payload.lang_name)
    return AddLanguageResponse(lang_code=code, message=f"Language '{code}' created successfully")
