import csv
import json
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ilrbrowse.core.errors import LoadError, ManifestLoadError, NotFoundError
from ilrbrowse.core.loader import DatasetLoader, parse_articles
from ilrbrowse.utils.http import resolve_location
from tests.helpers import write_csv


def test_parse_articles_normalizes_rows() -> None:
    text = "title,summary,translated\nHola,Texto,Text\n"
    articles = parse_articles(text, source="inline")

    assert len(articles) == 1
    assert articles[0].title == "Hola"
    assert articles[0].translated_summary == "Text"
    assert articles[0].ilr_level == ""


def test_resolve_location() -> None:
    assert resolve_location("data/a.csv", "/srv/site/available_files.json") == "/srv/site/data/a.csv"
    assert resolve_location("/abs/a.csv", "/srv/site/available_files.json") == "/abs/a.csv"
    assert resolve_location("data/a.csv", "http://host/app/available_files.json") == "http://host/app/data/a.csv"
    assert resolve_location("https://cdn/a.csv", "/srv/available_files.json") == "https://cdn/a.csv"


@pytest.mark.asyncio
async def test_load_concatenates_files_in_manifest_order(manifest_path: str) -> None:
    async with DatasetLoader(manifest_path) as loader:
        articles = await loader.load("arabic")

    assert [a.id for a in articles] == ["ar-1", "ar-2", "ar-3"]
    assert articles[1].link == ""


@pytest.mark.asyncio
async def test_load_uses_translated_fallback_and_generates_ids(manifest_path: str) -> None:
    async with DatasetLoader(manifest_path) as loader:
        [article] = await loader.load("spanish")

    assert article.translated_summary == "It is sunny"
    assert article.ilr_level == ""
    assert article.id
    assert article.extra == {"source": "elpais"}


@pytest.mark.asyncio
@pytest.mark.parametrize("language", ["klingon", "french"])
async def test_load_unknown_or_empty_language_raises_not_found(manifest_path: str, language: str) -> None:
    async with DatasetLoader(manifest_path) as loader:
        with pytest.raises(NotFoundError):
            await loader.load(language)


@pytest.mark.asyncio
async def test_load_missing_file_is_all_or_nothing(dataset_dir: Path) -> None:
    manifest = dataset_dir / "available_files.json"
    data = json.loads(manifest.read_text(encoding="utf-8"))
    data["arabic"].append("data/missing.csv")
    manifest.write_text(json.dumps(data), encoding="utf-8")

    async with DatasetLoader(str(manifest)) as loader:
        with pytest.raises(LoadError) as excinfo:
            await loader.load("arabic")

    assert not isinstance(excinfo.value, NotFoundError)
    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.asyncio
async def test_available_languages_in_manifest_order(manifest_path: str) -> None:
    async with DatasetLoader(manifest_path) as loader:
        assert await loader.available_languages() == ["arabic", "spanish", "french", "russian"]


@pytest.mark.asyncio
async def test_missing_manifest_raises_manifest_load_error(tmp_path: Path) -> None:
    async with DatasetLoader(str(tmp_path / "nope.json")) as loader:
        with pytest.raises(ManifestLoadError):
            await loader.load_manifest()
        with pytest.raises(LoadError):
            await loader.load("arabic")


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
async def test_malformed_manifest_raises_manifest_load_error(tmp_path: Path, content: str) -> None:
    manifest = tmp_path / "available_files.json"
    manifest.write_text(content, encoding="utf-8")

    async with DatasetLoader(str(manifest)) as loader:
        with pytest.raises(ManifestLoadError):
            await loader.available_languages()


@pytest.mark.asyncio
async def test_progress_called_once_per_file(manifest_path: str) -> None:
    seen = []
    async with DatasetLoader(manifest_path, progress=seen.append) as loader:
        await loader.load("arabic")

    assert sorted(Path(location).name for location in seen) == ["arabic_1.csv", "arabic_2.csv"]


@pytest.mark.asyncio
async def test_load_over_http() -> None:
    async def manifest(request: web.Request) -> web.Response:
        return web.json_response({"german": ["data/de.csv", "data/broken.csv"], "dutch": ["data/nl.csv"]})

    async def german(request: web.Request) -> web.Response:
        return web.Response(text="\ufefftitle,ilr_quantized\nWetterbericht,2\n", content_type="text/csv")

    async def broken(request: web.Request) -> web.Response:
        return web.Response(status=500)

    app = web.Application()
    app.router.add_get("/available_files.json", manifest)
    app.router.add_get("/data/de.csv", german)
    app.router.add_get("/data/nl.csv", german)
    app.router.add_get("/data/broken.csv", broken)

    server = TestServer(app)
    await server.start_server()
    try:
        async with DatasetLoader(str(server.make_url("/available_files.json"))) as loader:
            [article] = await loader.load("dutch")
            assert article.title == "Wetterbericht"
            assert article.ilr_level == "2"

            with pytest.raises(LoadError):
                await loader.load("german")
    finally:
        await server.close()


def _single_file_manifest(tmp_path: Path, filename: str = "en.csv") -> str:
    manifest = tmp_path / "available_files.json"
    manifest.write_text(json.dumps({"en": [filename]}), encoding="utf-8")
    return str(manifest)


@pytest.mark.asyncio
async def test_load_accepts_very_long_cells(tmp_path: Path) -> None:
    summary = "x" * 200_000
    write_csv(tmp_path / "en.csv", [{"title": "Long read", "summary": summary}], fieldnames=["title", "summary"])

    async with DatasetLoader(_single_file_manifest(tmp_path)) as loader:
        [article] = await loader.load("en")

    assert article.summary == summary


@pytest.mark.asyncio
async def test_invalid_utf8_is_load_error(tmp_path: Path) -> None:
    (tmp_path / "en.csv").write_bytes(b"title,summary\n\xff\xfe\xfa broken,text\n")

    async with DatasetLoader(_single_file_manifest(tmp_path)) as loader:
        with pytest.raises(LoadError) as excinfo:
            await loader.load("en")

    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


@pytest.mark.asyncio
async def test_csv_parse_error_is_load_error(tmp_path: Path) -> None:
    write_csv(tmp_path / "en.csv", [{"title": "t", "summary": "y" * 64}], fieldnames=["title", "summary"])

    previous = csv.field_size_limit(16)
    try:
        async with DatasetLoader(_single_file_manifest(tmp_path)) as loader:
            with pytest.raises(LoadError) as excinfo:
                await loader.load("en")
    finally:
        csv.field_size_limit(previous)

    assert isinstance(excinfo.value.__cause__, csv.Error)


@pytest.mark.asyncio
async def test_local_datasets_do_not_open_http_session(manifest_path: str) -> None:
    loader = DatasetLoader(manifest_path)
    try:
        await loader.load("arabic")
        assert loader._session is None
    finally:
        await loader.close()
