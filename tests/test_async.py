# Copyright 2024 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
import asyncio
import contextlib
import io

import pytest

aiohttp = pytest.importorskip("aiohttp")

from aiohttp import web  # noqa: E402
from aiohttp.test_utils import TestServer  # noqa: E402
import crowdin  # noqa: E402

pytest_plugins = ("pytest_asyncio",)

translations = {
    "de": b"PK\x03\x04 de " * 20000,
    "fr": b"PK\x03\x04 fr " * 30000,
    "ja": b"PK\x03\x04 ja " * 10000,
}

not_found = {
    "success": False,
    "error": {"code": "404", "message": "Not Found"},
}


def _make_app(received):
    """Returns an application answering like the Crowdin API, appending
    (method, path, query, form) of every request to received."""

    async def record(request):
        form = await request.post()
        received.append(
            (request.method, request.path, dict(request.query), form)
        )
        return form

    async def info(request):
        await record(request)
        return web.json_response(
            {"details": {"name": "Example"}, "languages": [], "files": []}
        )

    async def status(request):
        await record(request)
        return web.Response(status=500, text="Internal Server Error")

    async def delete_project(request):
        await record(request)
        return web.json_response(
            {
                "success": False,
                "error": {"code": 3, "message": "API key is not valid"},
            },
            status=401,
        )

    async def add_file(request):
        form = await record(request)
        return web.json_response(
            {
                "success": True,
                "fields": sorted(form),
                "content": form["files[a/b.txt]"].file.read().decode(),
                "type": form.get("type"),
            }
        )

    async def download(request):
        await record(request)
        language = request.match_info["language"]
        if language == "missing":
            return web.json_response(not_found, status=404)
        if language == "broken":
            return web.Response(status=404, text="<html>Not Found</html>")
        await asyncio.sleep(0.01)
        return web.Response(
            body=translations[language], content_type="application/zip"
        )

    async def language_status(request):
        await record(request)
        return web.Response(
            status=502,
            body=b"<html>\xe9chec de la passerelle</html>",
            content_type="text/html",
            charset="latin-1",
        )

    async def supported_languages(request):
        await record(request)
        return web.json_response([{"name": "German", "crowdin_code": "de"}])

    app = web.Application()
    app.router.add_post("/api/project/{project}/info", info)
    app.router.add_post("/api/project/{project}/status", status)
    app.router.add_post(
        "/api/project/{project}/delete-project", delete_project
    )
    app.router.add_post("/api/project/{project}/add-file", add_file)
    app.router.add_post(
        "/api/project/{project}/language-status", language_status
    )
    app.router.add_get(
        "/api/project/{project}/download/{language}.zip", download
    )
    app.router.add_get("/api/supported-languages", supported_languages)
    return app


@contextlib.asynccontextmanager
async def async_client(config, received, **kwargs):
    """Yields a crowdin.AsyncClient connected to a local test server."""
    async with TestServer(_make_app(received)) as server:
        async with crowdin.AsyncClient(
            config.project_identifier,
            server_url=str(server.make_url("/")),
            **kwargs,
        ) as client:
            yield client


@pytest.mark.asyncio
async def test_project_info(config):
    received = []
    async with async_client(config, received, api_key=config.api_key) as c:
        result = await c.project_info()

    assert result == {
        "details": {"name": "Example"},
        "languages": [],
        "files": [],
    }
    method, path, query, _ = received[0]
    assert method == "POST"
    assert path == f"/api/project/{config.project_identifier}/info"
    assert query == {"json": "true", "key": config.api_key}


@pytest.mark.asyncio
async def test_account_credentials(config):
    received = []
    async with async_client(
        config, received, login=config.login, account_key=config.account_key
    ) as c:
        assert await c.supported_languages() == [
            {"name": "German", "crowdin_code": "de"}
        ]

    _, path, query, _ = received[0]
    assert path == "/api/supported-languages"
    assert query == {
        "json": "true",
        "login": config.login,
        "account-key": config.account_key,
    }


@pytest.mark.asyncio
async def test_service_error(config):
    async with async_client(config, [], api_key=config.api_key) as c:
        with pytest.raises(crowdin.ServiceException) as exc_info:
            await c.delete_project()

    assert str(exc_info.value) == "Error code 3: API key is not valid"
    assert exc_info.value.http_status_code == 401


@pytest.mark.asyncio
async def test_http_error_is_not_masked(config):
    async with async_client(config, [], api_key=config.api_key) as c:
        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await c.translation_status()

    assert exc_info.value.status == 500


@pytest.mark.asyncio
async def test_http_error_with_undecodable_body(config):
    async with async_client(config, [], api_key=config.api_key) as c:
        with pytest.raises(aiohttp.ClientResponseError) as exc_info:
            await c.language_status("de")

    assert exc_info.value.status == 502


@pytest.mark.asyncio
async def test_connection_error_is_not_masked(config):
    async with crowdin.AsyncClient(
        config.project_identifier,
        api_key=config.api_key,
        server_url="http://127.0.0.1:1",
    ) as c:
        with pytest.raises(aiohttp.ClientConnectionError):
            await c.project_info()


@pytest.mark.asyncio
async def test_add_file(config, tmp_path):
    path = tmp_path / "b.txt"
    path.write_bytes(b"uploaded content")
    stream = io.BytesIO(b"stream content")

    async with async_client(config, [], api_key=config.api_key) as c:
        result = await c.add_file(
            {"a/b.txt": path, "c.txt": stream}, type="txt", branch=None
        )

    assert result["success"] is True
    assert result["fields"] == ["files[a/b.txt]", "files[c.txt]", "type"]
    assert result["content"] == "uploaded content"
    assert result["type"] == "txt"
    assert not stream.closed


@pytest.mark.asyncio
async def test_download(config, download_dir):
    async with async_client(config, [], api_key=config.api_key) as c:
        path = await c.download_translations("de")

    assert path.endswith(".zip")
    assert path.startswith(str(download_dir))
    with open(path, "rb") as f:
        assert f.read() == translations["de"]


@pytest.mark.asyncio
async def test_download_service_error(config):
    async with async_client(config, [], api_key=config.api_key) as c:
        with pytest.raises(crowdin.ServiceException) as exc_info:
            await c.download_translations("missing")

    assert "404" in str(exc_info.value)
    assert "Not Found" in str(exc_info.value)


@pytest.mark.asyncio
async def test_download_streaming_error(config):
    async with async_client(config, [], api_key=config.api_key) as c:
        with pytest.raises(crowdin.StreamingException, match="404"):
            await c.download_translations("broken")


@pytest.mark.asyncio
async def test_concurrent_downloads(config):
    languages = list(translations)
    async with async_client(config, [], api_key=config.api_key) as c:
        paths = await asyncio.gather(
            *(c.download_translations(language) for language in languages)
        )

    assert len(set(paths)) == len(languages)
    for language, path in zip(languages, paths):
        with open(path, "rb") as f:
            assert f.read() == translations[language]
