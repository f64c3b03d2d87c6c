from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from swagger_docs.discovery import discover_definition_urls
from swagger_docs.models import DefinitionURL, OAuthConfig


class SwaggerUIConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(default="")
    doc_dir: Path = Field(default=Path("docs"))
    path_prefix: str = Field(default="")
    index_template: bool = Field(
        default=True,
        description="Render the index page from the template instead of serving doc_dir's index.",
    )
    urls: tuple[DefinitionURL, ...] = Field(default=())
    doc_expansion: Literal["list", "full", "none"] = Field(default="list")
    show_extensions: bool = Field(default=True)
    dom_id: str = Field(default="swagger-ui", min_length=1)
    deep_linking: bool = Field(default=True)
    persist_authorization: bool = Field(default=False)
    syntax_highlight: bool = Field(default=True)
    oauth: OAuthConfig | None = Field(default=None)
    asset_dir: Path | None = Field(
        default=None,
        description="Override for the bundled Swagger UI distribution directory.",
    )

    @property
    def base_url(self) -> str:
        stripped = self.path_prefix.strip("/")
        return f"/{stripped}" if stripped else "/"


ConfigOption = Callable[[SwaggerUIConfig], SwaggerUIConfig]


def _update(config: SwaggerUIConfig, **changes: Any) -> SwaggerUIConfig:
    # model_copy(update=...) does not validate.
    return SwaggerUIConfig.model_validate({**config.model_dump(), **changes})


def with_title(title: str) -> ConfigOption:
    """Page title displayed by the browser."""

    return lambda c: _update(c, title=title)


def with_doc_dir(doc_dir: str | Path) -> ConfigOption:
    return lambda c: _update(c, doc_dir=Path(doc_dir))


def with_path_prefix(prefix: str) -> ConfigOption:
    return lambda c: _update(c, path_prefix=prefix)


def with_index_template(use: bool) -> ConfigOption:
    return lambda c: _update(c, index_template=use)


def with_disable_index_template(disable: bool) -> ConfigOption:
    return lambda c: _update(c, index_template=not disable)


def with_url(url: str) -> ConfigOption:
    """Add an API definition URL (normally swagger.json or swagger.yaml) named after itself."""

    return lambda c: _update(c, urls=(*c.urls, DefinitionURL(name=url, url=url)))


def with_definition_url(definition: DefinitionURL | str, url: str | None = None) -> ConfigOption:
    """Add a named API definition URL.

    Accepts either a DefinitionURL or a ``(name, url)`` pair.
    """

    if isinstance(definition, DefinitionURL):
        entry = definition
    else:
        if url is None:
            raise TypeError("with_definition_url(name, url) requires a url")
        entry = DefinitionURL(name=definition, url=url)
    return lambda c: _update(c, urls=(*c.urls, entry))


def with_doc_expansion(doc_expansion: str) -> ConfigOption:
    """One of list, full, none."""

    return lambda c: _update(c, doc_expansion=doc_expansion)


def with_show_extensions(show: bool) -> ConfigOption:
    return lambda c: _update(c, show_extensions=show)


def with_dom_id(dom_id: str) -> ConfigOption:
    return lambda c: _update(c, dom_id=dom_id)


def with_deep_linking(deep_linking: bool) -> ConfigOption:
    return lambda c: _update(c, deep_linking=deep_linking)


def with_persist_authorization(enable: bool) -> ConfigOption:
    """Persist authorization information over browser close/refresh."""

    return lambda c: _update(c, persist_authorization=enable)


def with_syntax_highlight(syntax_highlight: bool) -> ConfigOption:
    return lambda c: _update(c, syntax_highlight=syntax_highlight)


def with_oauth(oauth: OAuthConfig | None) -> ConfigOption:
    return lambda c: _update(c, oauth=oauth)


def with_asset_dir(asset_dir: str | Path | None) -> ConfigOption:
    return lambda c: _update(c, asset_dir=Path(asset_dir) if asset_dir is not None else None)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file format at {path}: expected a JSON object")
    return data


def with_config_file(path: str | Path) -> ConfigOption:
    """Merge settings from a JSON file over the current configuration.

    Keys are SwaggerUIConfig field names; validation is performed by Pydantic.
    The file is read when the option is applied.
    """

    def _apply(c: SwaggerUIConfig) -> SwaggerUIConfig:
        raw = _read_json(Path(path))
        if "urls" in raw:
            raw["urls"] = (*c.urls, *raw["urls"])
        return _update(c, **raw)

    return _apply


def _fill_definition_names(config: SwaggerUIConfig) -> SwaggerUIConfig:
    if all(u.name for u in config.urls):
        return config
    urls = tuple(u if u.name else DefinitionURL(name=u.url, url=u.url) for u in config.urls)
    return _update(config, urls=urls)


def new_config(*options: ConfigOption) -> SwaggerUIConfig:
    """Build the immutable handler configuration.

    - Options are applied in order over the defaults.
    - Definition URLs without a name are named after their URL.
    - If no definition URL was given, doc_dir is scanned for definition files.
    """

    config = SwaggerUIConfig()
    for option in (*options, _fill_definition_names):
        config = option(config)

    if not config.urls:
        config = _update(config, urls=tuple(discover_definition_urls(config.doc_dir)))

    return config
