from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.routing import Route

from swagger_docs import __version__
from swagger_docs.config import SwaggerUIConfig
from swagger_docs.handler import SwaggerUIHandler

logger = logging.getLogger(__name__)


def _route_pattern(base_url: str) -> str:
    if base_url == "/":
        return "/{path:path}"
    return base_url + "{path:path}"


def create_app(config: SwaggerUIConfig) -> FastAPI:
    """Host the Swagger UI handler under config.base_url.

    Every method is forwarded to the handler so it can answer 405 itself.
    """

    app = FastAPI(
        title="Swagger Docs",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    if config.base_url != "/":

        @app.get("/")
        async def root() -> RedirectResponse:
            return RedirectResponse(url=config.base_url + "/", status_code=302)

    app.router.routes.append(
        Route(
            _route_pattern(config.base_url),
            endpoint=SwaggerUIHandler(config),
            name="swagger-ui",
            include_in_schema=False,
        )
    )

    return app
