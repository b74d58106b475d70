# Session models for the Twitch auth code flow.
# Created: 2026-10-17

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenState(str, Enum):
    NO_CODE = "no_code"
    HAVE_CODE = "have_code"
    HAVE_TOKEN = "have_token"


@dataclass
class SessionState:
    """Per-client session: the callback code and the token it was traded for.

    The access token is only ever set by a successful exchange and is never
    cleared afterwards.
    """

    authorization_code: str | None = None
    access_token: str | None = None

    @property
    def state(self) -> TokenState:
        if self.access_token:
            return TokenState.HAVE_TOKEN
        if self.authorization_code:
            return TokenState.HAVE_CODE
        return TokenState.NO_CODE
