from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DefinitionURL(BaseModel):
    """A named pointer to an API definition document (OpenAPI JSON/YAML)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="", description="Display name; defaults to the URL when empty.")
    url: str = Field(min_length=1)


class OAuthConfig(BaseModel):
    """Swagger UI OAuth2 integration.

    See https://swagger.io/docs/open-source-tools/swagger-ui/usage/oauth2/
    """

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(description="The ID of the client sent to the OAuth2 IAM provider.")
    realm: str = Field(default="", description="OAuth2 realm; empty when not applicable.")
    app_name: str = Field(
        default="", description="Application name displayed in the authentication popup."
    )
