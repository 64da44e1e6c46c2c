"""Tests for the single-page application fallback."""

import json
import logging
from unittest.mock import patch

import pytest

from conftest import INDEX_HTML, NOT_FOUND_HTML
from wren.app import App
from wren.config import AppConfig
from wren.middleware.spa import DEFAULT_INDEX_SOURCE, SPAFallback, is_virtual_route
from wren.testing import TestClient


class TestIsVirtualRoute:
    @pytest.mark.parametrize(
        "path",
        ["/", "/task", "/task/42", "/task/", "/v1.2/task", "/.well-known/thing"],
    )
    def test_virtual(self, path: str) -> None:
        assert is_virtual_route(path)

    @pytest.mark.parametrize("path", ["/app.js", "/assets/logo.png", "/.env", "/task/42.json"])
    def test_file(self, path: str) -> None:
        assert not is_virtual_route(path)


class TestSPAFallback:
    async def test_client_route_gets_shell(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/task/42?tab=notes")
            assert response.status == 200
            assert response.text == INDEX_HTML
            assert response.header("Cache-Control") == "no-cache"

    async def test_root_gets_shell(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == INDEX_HTML

    async def test_missing_asset_gets_404_page(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/missing.css")
            assert response.status == 404
            assert response.text == NOT_FOUND_HTML

    async def test_builtin_404_page(self, public_dir) -> None:
        (public_dir / "404.html").unlink()
        app = App(AppConfig(public_dir=public_dir, log_file=None))
        async with TestClient(app) as client:
            response = await client.get("/missing.css")
            assert response.status == 404
            assert "GET /missing.css Not Found" in response.text

    async def test_builtin_404_template_compiled_once(self, public_dir) -> None:
        (public_dir / "404.html").unlink()
        app = App(AppConfig(public_dir=public_dir, log_file=None))
        async with TestClient(app) as client:
            with patch("wren.middleware.spa.Environment") as environment:
                first = await client.get("/a.css")
                second = await client.get("/b.css")
            environment.assert_not_called()
            assert "GET /a.css Not Found" in first.text
            assert "GET /b.css Not Found" in second.text

    async def test_builtin_shell(self, public_dir, caplog) -> None:
        (public_dir / "index.html").unlink()
        app = App(AppConfig(public_dir=public_dir, log_file=None))
        with caplog.at_level(logging.WARNING, logger="wren.server"):
            async with TestClient(app) as client:
                response = await client.get("/task")
        assert response.status == 200
        assert response.text == DEFAULT_INDEX_SOURCE
        assert any("index.html" in r.getMessage() for r in caplog.records)

    async def test_head_gets_shell_headers(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.head("/task")
            assert response.status == 200
            assert response.body == b""
            assert response.header("content-length") == str(len(INDEX_HTML.encode()))

    async def test_unsafe_method_is_405(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.post("/task", json={"title": "x"})
            assert response.status == 405
            assert response.content_type == "application/json"
            assert json.loads(response.text)["status"] == 405
            assert response.header("Allow") == "GET, HEAD"

    async def test_pages_read_once(self, public_dir, app) -> None:
        async with TestClient(app) as client:
            (public_dir / "index.html").write_text("changed")
            response = await client.get("/task")
            assert response.text == INDEX_HTML

    def test_from_directory(self, public_dir) -> None:
        fallback = SPAFallback.from_directory(public_dir)
        assert fallback.index_html == INDEX_HTML
        assert fallback.not_found_html == NOT_FOUND_HTML

    def test_from_directory_custom_names(self, public_dir) -> None:
        (public_dir / "shell.html").write_text("<div id='root'></div>")
        fallback = SPAFallback.from_directory(
            public_dir, index_page="shell.html", not_found_page="nope.html"
        )
        assert fallback.index_html == "<div id='root'></div>"
        assert fallback.not_found_html is None

    def test_page_outside_directory_ignored(self, public_dir) -> None:
        fallback = SPAFallback.from_directory(public_dir, index_page="../secret.txt")
        assert fallback.index_html is None
