from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from swagger_docs.config import SwaggerUIConfig

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

INDEX_TEMPLATE: Final[str] = "index.html"
INITIALIZER_TEMPLATE: Final[str] = "swagger-initializer.js"
STYLESHEET_TEMPLATE: Final[str] = "index.css"
LISTING_TEMPLATE: Final[str] = "listing.html"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(name: str, config: SwaggerUIConfig, **extra: Any) -> str | None:
    """Render a template with the configuration as context.

    Rendering is best-effort: failures are logged and reported as None.
    """

    try:
        return templates.get_template(name).render(config=config, **extra)
    except TemplateError:
        logger.exception("Failed to render template %s", name)
        return None
