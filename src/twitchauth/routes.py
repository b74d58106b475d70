# Twitch OAuth router — authorize redirect, callback, user lookup.
# Created: 2026-10-17

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import RedirectResponse

from twitchauth.client import TwitchClient
from twitchauth.config import get_settings
from twitchauth.errors import MissingAuthorizationCode, TwitchAuthError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/twitch", tags=["Twitch"])


def _status_for(error: TwitchAuthError) -> int:
    if isinstance(error, MissingAuthorizationCode):
        return 401
    return 502


@router.get("/authorize")
async def authorize():
    """Send the browser to Twitch's consent screen."""
    return RedirectResponse(get_twitch_client().auth_url(), status_code=302)


@router.get("/callback")
async def callback(
    code: str = Query(""),
    error: str = Query(""),
    error_description: str = Query(""),
):
    """Receive the authorization code Twitch redirects back with."""
    if error:
        logger.warning("Twitch authorization denied: %s", error)
        raise HTTPException(status_code=400, detail=error_description or error)
    if not code:
        raise HTTPException(status_code=400, detail="Missing authorization code")

    get_twitch_client().set_authorization_code(code)
    return {"status": "authorized"}


@router.get("/users/{login}")
async def get_user(login: str):
    """Look up a Twitch user, exchanging the stored code for a token if needed."""
    profile, error = await get_twitch_client().fetch_user(login)
    if error is not None:
        raise HTTPException(status_code=_status_for(error), detail=str(error))
    return profile


# Singleton
_client: TwitchClient | None = None


def get_twitch_client() -> TwitchClient:
    """Get the shared client, building it from settings on first use."""
    global _client
    if _client is None:
        _client = TwitchClient(get_settings().to_client_config())
    return _client


def reset_twitch_client() -> None:
    """Drop the shared client (and its token). Mainly for tests."""
    global _client
    _client = None
