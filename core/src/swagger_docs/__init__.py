__version__ = "0.1.0"

from swagger_docs.config import (  # noqa: E402
    ConfigOption,
    SwaggerUIConfig,
    new_config,
    with_asset_dir,
    with_config_file,
    with_deep_linking,
    with_definition_url,
    with_disable_index_template,
    with_doc_dir,
    with_doc_expansion,
    with_dom_id,
    with_index_template,
    with_oauth,
    with_path_prefix,
    with_persist_authorization,
    with_show_extensions,
    with_syntax_highlight,
    with_title,
    with_url,
)
from swagger_docs.discovery import DEFINITION_EXTENSIONS, discover_definition_urls  # noqa: E402
from swagger_docs.handler import SwaggerUIHandler, handler  # noqa: E402
from swagger_docs.models import DefinitionURL, OAuthConfig  # noqa: E402

__all__ = [
    "DEFINITION_EXTENSIONS",
    "ConfigOption",
    "DefinitionURL",
    "OAuthConfig",
    "SwaggerUIConfig",
    "SwaggerUIHandler",
    "__version__",
    "discover_definition_urls",
    "handler",
    "new_config",
    "with_asset_dir",
    "with_config_file",
    "with_deep_linking",
    "with_definition_url",
    "with_disable_index_template",
    "with_doc_dir",
    "with_doc_expansion",
    "with_dom_id",
    "with_index_template",
    "with_oauth",
    "with_path_prefix",
    "with_persist_authorization",
    "with_show_extensions",
    "with_syntax_highlight",
    "with_title",
    "with_url",
]
