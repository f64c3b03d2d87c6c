from __future__ import annotations

import logging
from typing import Final

from starlette.requests import Request
from starlette.responses import FileResponse, HTMLResponse, PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from swagger_docs.assets import bundled_source, doc_source
from swagger_docs.config import ConfigOption, SwaggerUIConfig, new_config
from swagger_docs.discovery import is_definition_path
from swagger_docs.templating import (
    INDEX_TEMPLATE,
    INITIALIZER_TEMPLATE,
    LISTING_TEMPLATE,
    STYLESHEET_TEMPLATE,
    render,
)

logger = logging.getLogger(__name__)

INDEX_PATHS: Final[frozenset[str]] = frozenset({"", "index", "index.html"})
INITIALIZER_PATH: Final[str] = "swagger-initializer.js"
STYLESHEET_PATH: Final[str] = "index.css"


def relative_path(path: str, path_prefix: str) -> str:
    """Strip the mount prefix (normalized to a single leading slash) from a request path.

    Leading slashes left over are dropped, so "/docs" and "/docs/" prefixes dispatch
    the same way.
    """

    prefix = "/" + path_prefix.lstrip("/")
    if path.startswith(prefix):
        path = path[len(prefix) :]
    return path.lstrip("/")


class SwaggerUIHandler:
    """ASGI app serving Swagger UI for a fixed, immutable configuration.

    Only GET is accepted. Requests are dispatched on the path relative to the prefix:
    - index page, initializer script and stylesheet are rendered from templates
    - definition files (.json, .yaml, .yml) come from the documentation directory
    - everything else comes from the bundled Swagger UI assets
    """

    def __init__(self, config: SwaggerUIConfig) -> None:
        self.config = config
        self._docs = doc_source(config.doc_dir)
        self._assets = bundled_source(config.asset_dir)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            logger.debug("Ignoring unsupported ASGI scope type %s", scope["type"])
            return

        request = Request(scope, receive)
        response = await self.dispatch(request)
        await response(scope, receive, send)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        # Nothing to set up: the configuration is built before the handler exists.
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def dispatch(self, request: Request) -> Response:
        if request.method != "GET":
            logger.debug("Rejecting %s %s", request.method, request.scope["path"])
            return PlainTextResponse(
                "Method not allowed", status_code=405, headers={"Allow": "GET"}
            )

        rel = relative_path(request.scope["path"], self.config.path_prefix)

        if rel in INDEX_PATHS:
            if self.config.index_template:
                return self._render(INDEX_TEMPLATE, "text/html")
            return self._raw_index()
        if rel == INITIALIZER_PATH:
            return self._render(INITIALIZER_TEMPLATE, "application/javascript")
        if rel == STYLESHEET_PATH:
            return self._render(STYLESHEET_TEMPLATE, "text/css")
        if is_definition_path(rel):
            return await self._docs.get_response(rel, request.scope)
        return await self._assets.get_response(rel, request.scope)

    def _render(self, name: str, media_type: str) -> Response:
        content = render(name, self.config)
        # A failed render still answers 200 with an empty body.
        return Response(content or "", media_type=media_type)

    def _raw_index(self) -> Response:
        doc_dir = self.config.doc_dir
        index_file = doc_dir / "index.html"
        if index_file.is_file():
            return FileResponse(index_file)
        if not doc_dir.is_dir():
            return PlainTextResponse("Not Found", status_code=404)

        try:
            # Only definition files: other paths are routed to the bundled assets.
            entries = sorted(
                p.name for p in doc_dir.iterdir() if p.is_file() and is_definition_path(p.name)
            )
        except OSError as exc:
            logger.warning("Failed to list documentation directory %s: %s", doc_dir, exc)
            entries = []
        content = render(LISTING_TEMPLATE, self.config, entries=entries)
        return HTMLResponse(content or "")


def handler(*options: ConfigOption) -> SwaggerUIHandler:
    """Build the configuration from options and return the ASGI handler for it."""

    config = new_config(*options)
    logger.info(
        "Serving Swagger UI at %s (%d definition(s), docs from %s)",
        config.base_url,
        len(config.urls),
        config.doc_dir,
    )
    return SwaggerUIHandler(config)
