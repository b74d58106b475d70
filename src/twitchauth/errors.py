# Twitch auth errors.
# Created: 2026-10-17


class TwitchAuthError(Exception):
    """Base class for everything the Twitch client can fail with."""


class ConfigurationError(TwitchAuthError, ValueError):
    """A required credential is missing."""


class MissingAuthorizationCode(TwitchAuthError):
    """A token was needed but no authorization code has been set."""


class TokenExchangeFailure(TwitchAuthError):
    """The token endpoint did not hand back an access token."""


class TransportOrDecodeFailure(TwitchAuthError):
    """An authenticated call failed on the wire or returned a non-JSON body."""
