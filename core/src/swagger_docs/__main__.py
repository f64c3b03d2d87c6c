from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import uvicorn

from swagger_docs.app import create_app
from swagger_docs.config import (
    ConfigOption,
    new_config,
    with_config_file,
    with_doc_dir,
    with_path_prefix,
    with_title,
)


def options_from_env(environ: dict[str, str] | None = None) -> list[ConfigOption]:
    """Translate SWAGGER_DOCS_* variables into config options.

    The config file is applied first so that individual variables override it.
    """

    env = os.environ if environ is None else environ

    options: list[ConfigOption] = []
    config_file = (env.get("SWAGGER_DOCS_CONFIG") or "").strip()
    if config_file:
        options.append(with_config_file(Path(config_file).expanduser()))
    if env.get("SWAGGER_DOCS_DIR"):
        options.append(with_doc_dir(Path(env["SWAGGER_DOCS_DIR"]).expanduser()))
    if env.get("SWAGGER_DOCS_TITLE"):
        options.append(with_title(env["SWAGGER_DOCS_TITLE"]))
    if env.get("SWAGGER_DOCS_PREFIX"):
        options.append(with_path_prefix(env["SWAGGER_DOCS_PREFIX"]))
    return options


def main() -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = os.environ.get("SWAGGER_DOCS_LOG_FILE")
    if log_file:
        handlers.append(RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    config = new_config(*options_from_env())

    host = os.environ.get("SWAGGER_DOCS_BIND") or "127.0.0.1"
    port = int(os.environ.get("SWAGGER_DOCS_PORT") or 8080)

    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    main()
