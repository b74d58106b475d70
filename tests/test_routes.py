# Tests for the Twitch OAuth router.
# Created: 2026-10-17

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import twitchauth.routes as routes
from twitchauth.client import TwitchClient
from twitchauth.config import ClientConfig
from twitchauth.errors import (
    MissingAuthorizationCode,
    TokenExchangeFailure,
    TransportOrDecodeFailure,
)


@pytest.fixture
def twitch(monkeypatch):
    twitch = TwitchClient(
        ClientConfig(client_id="abc", client_secret="xyz", redirect_uri="http://testserver/cb")
    )
    monkeypatch.setattr(routes, "_client", twitch)
    yield twitch
    routes.reset_twitch_client()


@pytest.fixture
def client(twitch):
    app = FastAPI()
    app.include_router(routes.router)
    return TestClient(app)


def test_authorize_redirects(client, twitch):
    resp = client.get("/twitch/authorize", follow_redirects=False)
    assert resp.status_code == 302
    assert resp.headers["location"] == twitch.auth_url()


def test_callback_stores_code(client, twitch):
    resp = client.get("/twitch/callback", params={"code": "validcode"})
    assert resp.status_code == 200
    assert resp.json() == {"status": "authorized"}
    assert twitch.session.authorization_code == "validcode"


def test_callback_missing_code(client, twitch):
    resp = client.get("/twitch/callback")
    assert resp.status_code == 400
    assert twitch.session.authorization_code is None


def test_callback_access_denied(client):
    resp = client.get(
        "/twitch/callback",
        params={"error": "access_denied", "error_description": "The user denied you access"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "The user denied you access"


@pytest.mark.parametrize(
    "error, status",
    [
        (MissingAuthorizationCode("no code"), 401),
        (TokenExchangeFailure("no token"), 502),
        (TransportOrDecodeFailure("bad json"), 502),
    ],
)
def test_user_errors(client, twitch, monkeypatch, error, status):
    monkeypatch.setattr(twitch, "fetch_user", AsyncMock(return_value=(None, error)))
    resp = client.get("/twitch/users/alice")
    assert resp.status_code == status


def test_full_flow(client, twitch):
    body = {"data": [{"login": "alice", "id": "42"}]}
    client.get("/twitch/callback", params={"code": "validcode"})

    with patch("httpx.AsyncClient") as mock_client_cls:
        mock_client = AsyncMock()
        token_resp = MagicMock()
        token_resp.json.return_value = {"access_token": "tok123"}
        token_resp.raise_for_status = MagicMock()
        user_resp = MagicMock()
        user_resp.json.return_value = body
        user_resp.raise_for_status = MagicMock()
        mock_client.post = AsyncMock(return_value=token_resp)
        mock_client.get = AsyncMock(return_value=user_resp)
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)
        mock_client_cls.return_value = mock_client

        resp = client.get("/twitch/users/alice")

    assert resp.status_code == 200
    assert resp.json() == body
    assert twitch.access_token == "tok123"


def test_singleton_built_from_settings(monkeypatch):
    routes.reset_twitch_client()
    settings = MagicMock()
    settings.to_client_config.return_value = ClientConfig(client_id="abc", client_secret="xyz")
    monkeypatch.setattr(routes, "get_settings", lambda: settings)
    try:
        assert routes.get_twitch_client() is routes.get_twitch_client()
        settings.to_client_config.assert_called_once()
    finally:
        routes.reset_twitch_client()
