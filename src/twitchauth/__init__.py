"""Minimal Twitch OAuth 2.0 authorization code client."""

from twitchauth.client import TwitchClient
from twitchauth.config import ClientConfig, Settings, get_settings
from twitchauth.errors import (
    ConfigurationError,
    MissingAuthorizationCode,
    TokenExchangeFailure,
    TransportOrDecodeFailure,
    TwitchAuthError,
)
from twitchauth.models import SessionState, TokenState

__all__ = [
    "ClientConfig",
    "ConfigurationError",
    "MissingAuthorizationCode",
    "SessionState",
    "Settings",
    "TokenExchangeFailure",
    "TokenState",
    "TransportOrDecodeFailure",
    "TwitchAuthError",
    "TwitchClient",
    "get_settings",
]
