from __future__ import annotations

import logging
import os
from pathlib import Path

from starlette.exceptions import HTTPException
from starlette.responses import PlainTextResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope
from swagger_ui_bundle import swagger_ui_path

logger = logging.getLogger(__name__)

BUNDLED_ASSETS_DIR = Path(swagger_ui_path)


class StaticSource:
    """Serve files below a directory for paths relative to that directory.

    Wraps Starlette's StaticFiles so the dispatcher can hand it an already-stripped
    relative path instead of relying on the mount's scope rewriting.
    """

    def __init__(self, directory: Path, *, follow_symlink: bool = False) -> None:
        self.directory = directory
        self._files = StaticFiles(
            directory=str(directory), check_dir=False, follow_symlink=follow_symlink
        )

    async def get_response(self, rel_path: str, scope: Scope) -> Response:
        path = os.path.normpath(os.path.join(*("/" + rel_path).split("/")))
        try:
            return await self._files.get_response(path, scope)
        except HTTPException as exc:
            return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


def doc_source(doc_dir: Path) -> StaticSource:
    """User-supplied documentation files. Symlinks are followed, matching discovery."""

    return StaticSource(doc_dir, follow_symlink=True)


def bundled_source(asset_dir: Path | None = None) -> StaticSource:
    """The Swagger UI distribution shipped with swagger-ui-bundle, or an override."""

    directory = asset_dir if asset_dir is not None else BUNDLED_ASSETS_DIR
    if not directory.is_dir():
        logger.warning("Swagger UI asset directory is missing (%s); assets will 404", directory)
    return StaticSource(directory)
