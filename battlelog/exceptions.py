"""
Battlelog exceptions.

Raised at the boundary layers (configuration, Clash Royale API). The
analytics package never raises for bad data; it skips what it cannot use.
The CLI catches BattlelogError and turns it into an exit status.
"""

from typing import Optional


class BattlelogError(Exception):
    """Base class for every error surfaced to the command line."""


class ConfigurationError(BattlelogError):
    """Required configuration (API key, player tag) is missing or invalid."""


class RoyaleAPIError(BattlelogError):
    """The Clash Royale API could not be reached or returned an error."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class InvalidAPIKeyError(RoyaleAPIError):
    """403 from the API: key invalid, expired, or not whitelisted for this IP."""


class PlayerNotFoundError(RoyaleAPIError):
    """404 from the API: the player tag does not exist."""
