# Twitch client configuration — validated credentials, endpoints and scopes.
# Created: 2026-10-17
#
# ClientConfig is the immutable snapshot a TwitchClient is built from.
# Settings loads the same values from TWITCH_* environment variables / .env.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from twitchauth.errors import ConfigurationError

# Twitch API endpoints
AUTH_URL = "https://id.twitch.tv/oauth2/authorize"
TOKEN_URL = "https://id.twitch.tv/oauth2/token"
USERS_URL = "https://api.twitch.tv/helix/users"

DEFAULT_SCOPES: Mapping[str, bool] = MappingProxyType({"user:read:email": True})


@dataclass(frozen=True)
class ClientConfig:
    """Credentials, redirect URI, scopes and endpoints for one Twitch app."""

    client_id: str
    client_secret: str = field(repr=False)
    redirect_uri: str = ""
    scopes: Mapping[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_SCOPES), hash=False
    )
    auth_url: str = AUTH_URL
    token_url: str = TOKEN_URL
    users_url: str = USERS_URL

    def __post_init__(self) -> None:
        if not self.client_id:
            raise ConfigurationError("You must provide a client id.")
        if not self.client_secret:
            raise ConfigurationError("You must provide a client secret.")
        # Scope map is read-only after construction
        object.__setattr__(self, "scopes", MappingProxyType(dict(self.scopes)))

    @property
    def enabled_scopes(self) -> list[str]:
        return [name for name, enabled in self.scopes.items() if enabled]

    @classmethod
    def from_mapping(cls, credentials: Mapping[str, Any]) -> ClientConfig:
        """Build a config from the CLIENT_ID / CLIENT_SECRET / ... style mapping.

        Recognised keys: CLIENT_ID, CLIENT_SECRET (required), REDIRECT_URI,
        AUTH_URL, TOKEN_URL, USERS_URL and SCOPES (scope name -> enabled).
        """
        if not credentials.get("CLIENT_ID"):
            raise ConfigurationError("You must provide a client id.")
        if not credentials.get("CLIENT_SECRET"):
            raise ConfigurationError("You must provide a client secret.")

        overrides: dict[str, Any] = {}
        for key, attr in (
            ("AUTH_URL", "auth_url"),
            ("TOKEN_URL", "token_url"),
            ("USERS_URL", "users_url"),
            ("SCOPES", "scopes"),
        ):
            if credentials.get(key) is not None:
                overrides[attr] = credentials[key]

        return cls(
            client_id=credentials["CLIENT_ID"],
            client_secret=credentials["CLIENT_SECRET"],
            redirect_uri=credentials.get("REDIRECT_URI") or "",
            **overrides,
        )


class Settings(BaseSettings):
    """Twitch app settings loaded from TWITCH_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="TWITCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id: str = Field(default="", description="Twitch application client ID")
    client_secret: str = Field(default="", description="Twitch application client secret")
    redirect_uri: str = Field(default="", description="OAuth callback URL registered with Twitch")
    auth_url: str = Field(default=AUTH_URL)
    token_url: str = Field(default=TOKEN_URL)
    users_url: str = Field(default=USERS_URL)
    scopes: str = Field(
        default="user:read:email",
        description="Comma-separated list of scopes to request",
    )

    @property
    def scope_map(self) -> dict[str, bool]:
        return {s.strip(): True for s in self.scopes.split(",") if s.strip()}

    def to_client_config(self) -> ClientConfig:
        """Build a ClientConfig. Raises ConfigurationError on missing credentials."""
        return ClientConfig(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            scopes=self.scope_map,
            auth_url=self.auth_url,
            token_url=self.token_url,
            users_url=self.users_url,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
