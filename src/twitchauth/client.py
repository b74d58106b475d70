# Twitch Client — OAuth 2.0 authorization code flow + authenticated user lookup.
# Created: 2026-10-17
#
# Flow: auth_url() -> (provider redirects back with ?code=...) ->
# set_authorization_code() -> fetch_user(), which trades the code for an
# access token on first use and reuses it for the life of the instance.

from __future__ import annotations

import asyncio
import logging
import urllib.parse
from collections.abc import Mapping
from typing import Any

import httpx

from twitchauth.config import ClientConfig
from twitchauth.errors import (
    MissingAuthorizationCode,
    TokenExchangeFailure,
    TransportOrDecodeFailure,
    TwitchAuthError,
)
from twitchauth.models import SessionState, TokenState

logger = logging.getLogger(__name__)

# Versioned JSON media type Twitch expects on authenticated calls
_API_ACCEPT = "application/vnd.twitchtv.v3+json"
_TOKEN_ACCEPT = "x-www-form-urlencoded"
_SCOPE_SEPARATOR = "+"
_TIMEOUT = 15


class TwitchClient:
    """Twitch OAuth 2.0 authorization code client.

    Supports:
    - Authorization URL generation
    - One-time code exchange for an access token (cached in memory)
    - Authenticated user lookup

    There is no refresh and no persistence: a token lives exactly as long
    as the client instance that obtained it.
    """

    def __init__(self, config: ClientConfig, *, logger: logging.Logger = logger):
        self.config = config
        self.session = SessionState()
        self._log = logger
        self._token_lock = asyncio.Lock()

    @classmethod
    def from_mapping(
        cls, credentials: Mapping[str, Any], *, logger: logging.Logger = logger
    ) -> TwitchClient:
        """Build a client from a CLIENT_ID / CLIENT_SECRET / ... mapping."""
        return cls(ClientConfig.from_mapping(credentials), logger=logger)

    @property
    def access_token(self) -> str | None:
        return self.session.access_token

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    def auth_url(self) -> str:
        """Build the URL to send the user to for consent.

        Scope names are joined with a literal '+', which the provider reads
        as a space. Calling this twice on the same config returns the same
        string.
        """
        query = urllib.parse.urlencode(
            {
                "response_type": "code",
                "client_id": self.config.client_id,
                "redirect_uri": self.config.redirect_uri,
            }
        )
        # Unencoded "+" so the provider reads space-separated scopes
        scope = _SCOPE_SEPARATOR.join(
            urllib.parse.quote(name, safe="") for name in self.config.enabled_scopes
        )
        return f"{self.config.auth_url}?{query}&scope={scope}"

    def set_authorization_code(self, code: str) -> None:
        """Store the code the provider delivered to the redirect URI."""
        self.session.authorization_code = code

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------

    async def fetch_user(self, login: str) -> tuple[dict | None, TwitchAuthError | None]:
        """Fetch a user's profile by login name.

        Returns (profile, error). If error is not None, profile is None.
        """
        try:
            await self._ensure_token()
        except TwitchAuthError as e:
            self._log.warning("Cannot look up %s: %s", login, e)
            return None, e

        try:
            profile = await self._authorized_request(self.config.users_url, {"login": login})
        except TransportOrDecodeFailure as e:
            self._log.warning("User lookup for %s failed: %s", login, e)
            return None, e

        return profile, None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _ensure_token(self) -> str:
        """Return the access token, exchanging the code for one if needed."""
        async with self._token_lock:
            state = self.session.state
            if state is TokenState.HAVE_TOKEN:
                return self.session.access_token
            if state is TokenState.NO_CODE:
                raise MissingAuthorizationCode("No authorization code has been set")

            self._log.info("No access token yet, requesting one")
            return await self._exchange_token()

    async def _exchange_token(self) -> str:
        """Trade the stored authorization code for an access token."""
        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT) as client:
                resp = await client.post(
                    self.config.token_url,
                    data={
                        "client_id": self.config.client_id,
                        "client_secret": self.config.client_secret,
                        "code": self.session.authorization_code,
                        "grant_type": "authorization_code",
                        "redirect_uri": self.config.redirect_uri,
                    },
                    headers={"Accept": _TOKEN_ACCEPT},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise TokenExchangeFailure(f"Token request failed: {e}") from e
        except ValueError as e:
            raise TokenExchangeFailure("Token response was not valid JSON") from e

        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            raise TokenExchangeFailure("Token response did not include an access_token")

        self.session.access_token = access_token
        self._log.info("Obtained Twitch access token for client %s", self.config.client_id)
        return access_token

    async def _authorized_request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        method: str = "GET",
    ) -> Any:
        """Call a Twitch API endpoint with the client and bearer headers.

        GET sends params in the query string; POST and PUT send them as a
        form body. Returns the decoded JSON body.
        """
        method = method.upper()
        if method not in ("GET", "POST", "PUT"):
            raise ValueError(f"Unsupported method: {method}")

        params = dict(params or {})
        headers = {
            "Accept": _API_ACCEPT,
            "Client-ID": self.config.client_id,
            "Authorization": f"Bearer {self.session.access_token}",
        }

        self._log.debug("%s %s", method, endpoint)
        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT) as client:
                if method == "GET":
                    resp = await client.get(endpoint, params=params or None, headers=headers)
                elif method == "POST":
                    resp = await client.post(endpoint, data=params, headers=headers)
                else:
                    resp = await client.put(endpoint, data=params, headers=headers)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPError as e:
            raise TransportOrDecodeFailure(f"{method} {endpoint} failed: {e}") from e
        except ValueError as e:
            raise TransportOrDecodeFailure(f"{method} {endpoint} returned invalid JSON") from e
