from __future__ import annotations

import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from jinja2 import TemplateError

from swagger_docs import templating
from swagger_docs.assets import BUNDLED_ASSETS_DIR
from swagger_docs.config import (
    with_asset_dir,
    with_doc_dir,
    with_dom_id,
    with_index_template,
    with_path_prefix,
    with_title,
)
from swagger_docs.handler import handler, relative_path


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "petstore.yaml").write_bytes(b"openapi: 3.0.0\ninfo:\n  title: Petstore\n")
    (docs / "users.json").write_text('{"openapi": "3.1.0"}', encoding="utf-8")
    return docs


@pytest.fixture()
def assets_dir(tmp_path: Path) -> Path:
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "swagger-ui-bundle.js").write_text("/* bundle */", encoding="utf-8")
    return assets


def test_relative_path_strips_normalized_prefix() -> None:
    assert relative_path("/docs", "/docs") == ""
    assert relative_path("/docs/", "docs") == ""
    assert relative_path("/docs/index.html", "/docs/") == "index.html"
    assert relative_path("/docs/swagger-initializer.js", "docs") == "swagger-initializer.js"
    assert relative_path("/index.css", "") == "index.css"
    assert relative_path("/other/a.json", "/docs") == "other/a.json"


@pytest.mark.parametrize("path", ["/docs/", "/docs/petstore.yaml", "/docs/anything.js"])
@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
def test_non_get_methods_are_rejected(docs_dir: Path, path: str, method: str) -> None:
    client = TestClient(handler(with_doc_dir(docs_dir), with_path_prefix("/docs")))

    r = client.request(method, path)

    assert r.status_code == 405
    assert r.headers["allow"] == "GET"


@pytest.mark.parametrize("path", ["/docs", "/docs/", "/docs/index", "/docs/index.html"])
def test_templated_index_contains_title_and_dom_id(docs_dir: Path, path: str) -> None:
    client = TestClient(
        handler(
            with_doc_dir(docs_dir),
            with_path_prefix("/docs"),
            with_title("Petstore Docs"),
            with_dom_id("api-root"),
        )
    )

    r = client.get(path)

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert "<title>Petstore Docs</title>" in r.text
    assert 'id="api-root"' in r.text
    assert '<base href="/docs/">' in r.text


def test_raw_index_serves_doc_dir_index_file(docs_dir: Path) -> None:
    (docs_dir / "index.html").write_text("<h1>Hand written</h1>", encoding="utf-8")
    client = TestClient(
        handler(with_doc_dir(docs_dir), with_index_template(False), with_title("Ignored"))
    )

    r = client.get("/")

    assert r.status_code == 200
    assert r.text == "<h1>Hand written</h1>"


def test_raw_index_lists_servable_definition_files(docs_dir: Path) -> None:
    (docs_dir / "v2").mkdir()
    (docs_dir / "notes.txt").write_text("notes", encoding="utf-8")
    client = TestClient(
        handler(with_doc_dir(docs_dir), with_path_prefix("/docs"), with_index_template(False))
    )

    r = client.get("/docs/")

    assert r.status_code == 200
    assert '<a href="/docs/petstore.yaml">petstore.yaml</a>' in r.text
    assert '<a href="/docs/users.json">users.json</a>' in r.text
    assert "v2/" not in r.text
    assert "notes.txt" not in r.text
    assert "swagger-ui" not in r.text

    for href in ("/docs/petstore.yaml", "/docs/users.json"):
        assert client.get(href).status_code == 200


def test_raw_index_missing_doc_dir_is_not_found(tmp_path: Path) -> None:
    client = TestClient(handler(with_doc_dir(tmp_path / "missing"), with_index_template(False)))

    assert client.get("/").status_code == 404


def test_initializer_script_renders_config(docs_dir: Path) -> None:
    client = TestClient(handler(with_doc_dir(docs_dir), with_path_prefix("docs")))

    r = client.get("/docs/swagger-initializer.js")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/javascript")
    assert 'url: "petstore.yaml"' in r.text
    assert 'name: "users.json"' in r.text
    assert 'dom_id: "#swagger-ui"' in r.text
    assert "initOAuth" not in r.text


def test_stylesheet_renders_dom_id(docs_dir: Path) -> None:
    client = TestClient(handler(with_doc_dir(docs_dir), with_dom_id("my-docs")))

    r = client.get("/index.css")

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/css")
    assert "#my-docs .topbar" in r.text


def test_definition_file_is_served_verbatim(docs_dir: Path) -> None:
    client = TestClient(handler(with_doc_dir(docs_dir), with_path_prefix("/docs")))

    r = client.get("/docs/petstore.yaml")

    assert r.status_code == 200
    assert r.content == (docs_dir / "petstore.yaml").read_bytes()


def test_missing_definition_file_is_not_found(docs_dir: Path) -> None:
    client = TestClient(handler(with_doc_dir(docs_dir), with_path_prefix("/docs")))

    assert client.get("/docs/nope.json").status_code == 404


def test_definition_path_cannot_escape_doc_dir(docs_dir: Path) -> None:
    (docs_dir.parent / "secret.json").write_text('{"secret": true}', encoding="utf-8")
    client = TestClient(handler(with_doc_dir(docs_dir)))

    r = client.get("/%2E%2E/secret.json")

    assert r.status_code == 404


def test_unknown_path_served_from_asset_dir(docs_dir: Path, assets_dir: Path) -> None:
    client = TestClient(
        handler(with_doc_dir(docs_dir), with_path_prefix("/docs"), with_asset_dir(assets_dir))
    )

    found = client.get("/docs/swagger-ui-bundle.js")
    missing = client.get("/docs/favicon-32x32.png")

    assert found.status_code == 200
    assert found.text == "/* bundle */"
    assert missing.status_code == 404


def test_bundled_swagger_ui_assets_are_served(docs_dir: Path) -> None:
    assert BUNDLED_ASSETS_DIR.is_dir()
    client = TestClient(handler(with_doc_dir(docs_dir)))

    r = client.get("/swagger-ui-bundle.js")

    assert r.status_code == 200
    assert r.content == (BUNDLED_ASSETS_DIR / "swagger-ui-bundle.js").read_bytes()


def test_template_failure_is_logged_and_best_effort(
    docs_dir: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def _broken(name: str):
        raise TemplateError(f"cannot load {name}")

    monkeypatch.setattr(templating.templates, "get_template", _broken)
    client = TestClient(handler(with_doc_dir(docs_dir)))

    with caplog.at_level(logging.ERROR, logger="swagger_docs.templating"):
        r = client.get("/")

    assert r.status_code == 200
    assert r.text == ""
    assert "Failed to render template index.html" in caplog.text


def test_handler_supports_lifespan_when_mounted_directly(docs_dir: Path) -> None:
    with TestClient(handler(with_doc_dir(docs_dir), with_title("Standalone"))) as client:
        r = client.get("/")

        assert r.status_code == 200
        assert "<title>Standalone</title>" in r.text
