"""
Configuration for the remote service connection.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments
2. Environment variables (TRELLO_*)
3. .env file
4. Default values

Example:
    from trello_resources.config import get_config

    config = get_config()
    print(config.base_url)  # From TRELLO_BASE_URL or default
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrelloConfig(BaseSettings):
    """
    Connection settings for the Trello REST API.

    Example:
        export TRELLO_API_KEY=0123456789abcdef
        export TRELLO_MEMBER_TOKEN=...
    """

    model_config = SettingsConfigDict(
        env_prefix="TRELLO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: Optional[str] = Field(
        default=None,
        description="Developer API key, sent as the 'key' query parameter",
    )
    member_token: Optional[str] = Field(
        default=None,
        description="Member token, sent as the 'token' query parameter",
    )
    base_url: str = Field(
        default="https://api.trello.com/1",
        description="Root URL of the versioned API",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="HTTP request timeout",
    )
    user_agent: str = Field(
        default="trello-resources",
        description="User-Agent header sent with every request",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def auth_params(self) -> dict[str, str]:
        """Query parameters that authenticate a request."""
        params = {}
        if self.api_key:
            params["key"] = self.api_key
        if self.member_token:
            params["token"] = self.member_token
        return params


# Global singleton
_config: Optional[TrelloConfig] = None


def get_config(**overrides) -> TrelloConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.
    """
    global _config

    if overrides or _config is None:
        _config = TrelloConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
